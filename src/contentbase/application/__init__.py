"""Application layer: orchestration of the collection engine."""
