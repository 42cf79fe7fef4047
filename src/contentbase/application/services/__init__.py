"""Application services for ContentBase."""

from contentbase.application.services.collection_engine import CollectionEngine
from contentbase.application.services.outcome_normalizer import OutcomeNormalizer

__all__ = ["CollectionEngine", "OutcomeNormalizer"]
