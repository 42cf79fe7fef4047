"""Persistence layer: database management, statement building and execution."""
