"""Discord gateway integration: bot, cogs, views and rendering."""
