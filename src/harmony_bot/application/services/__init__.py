"""Application services: normalization, dispatch, and response shaping."""
