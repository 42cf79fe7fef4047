"""HTTP layer for ContentBase."""
