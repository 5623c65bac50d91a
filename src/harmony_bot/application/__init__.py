"""Application layer: input normalization, dispatch, and response shaping."""
