"""API routes for ContentBase."""

from contentbase.infrastructure.api.routes.collection_router import router as collection_router

__all__ = ["collection_router"]
