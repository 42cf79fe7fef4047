"""Infrastructure layer for ContentBase."""
