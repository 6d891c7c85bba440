"""HTTP layer for the Daily Dashboard."""
