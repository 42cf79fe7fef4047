"""FastAPI dependencies for the collection engine."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncEngine

from contentbase.application.services import CollectionEngine
from contentbase.core.config import get_settings
from contentbase.infrastructure.persistence.database import get_engine
from contentbase.infrastructure.persistence.execution_gateway import ExecutionGateway


def get_collection_engine(
    engine: Annotated[AsyncEngine, Depends(get_engine)],
) -> CollectionEngine:
    """Build a collection engine over the shared async engine.

    Built per request; the engine holds no state between calls.
    """
    settings = get_settings()
    return CollectionEngine(
        ExecutionGateway(engine),
        max_identifier_length=settings.max_identifier_length,
    )


CollectionEngineDep = Annotated[CollectionEngine, Depends(get_collection_engine)]
