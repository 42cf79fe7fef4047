"""Domain entities for the collection engine."""

from contentbase.domain.entities.collection import (
    CollectionDescriptor,
    ColumnSpec,
    ConstraintSet,
    SchemaDefinition,
)
from contentbase.domain.entities.operation_result import Operation, OperationResult

__all__ = [
    "CollectionDescriptor",
    "ColumnSpec",
    "ConstraintSet",
    "Operation",
    "OperationResult",
    "SchemaDefinition",
]
