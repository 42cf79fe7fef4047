"""Collection entities for dynamically defined tables.

A collection is a table whose columns are chosen by the caller at runtime.
These types hold already-validated parts: identifiers are sanitized, types
come from the allow-list and constraint defaults are encoded literals.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from contentbase.domain.services.identifier import Identifier
    from contentbase.domain.services.literal_encoder import SqlLiteral
    from contentbase.domain.services.type_allowlist import TypeTag


@dataclass(frozen=True)
class ConstraintSet:
    """Parsed column constraints.

    Attributes:
        nullable: ``False`` for NOT NULL, ``True`` for an explicit NULL,
            ``None`` when unspecified.
        unique: Whether the column carries a UNIQUE constraint.
        default: Encoded default value, if any.
    """

    nullable: bool | None = None
    unique: bool = False
    default: "SqlLiteral | None" = None

    def render(self) -> str:
        """Render the constraints as DDL text (empty when there are none)."""
        parts = []
        if self.nullable is False:
            parts.append("NOT NULL")
        elif self.nullable is True:
            parts.append("NULL")
        if self.unique:
            parts.append("UNIQUE")
        if self.default is not None:
            parts.append(f"DEFAULT {self.default.text}")
        return " ".join(parts)

    @property
    def is_empty(self) -> bool:
        return self.nullable is None and not self.unique and self.default is None


@dataclass(frozen=True)
class ColumnSpec:
    """Type and constraints of a single column."""

    type: "TypeTag"
    constraints: ConstraintSet = field(default_factory=ConstraintSet)


class SchemaDefinition(Mapping["Identifier", ColumnSpec]):
    """Ordered, read-only mapping of column identifier to column spec.

    Built by ``validate_schema``; iteration follows the caller's order.
    """

    def __init__(self, columns: list[tuple["Identifier", ColumnSpec]]) -> None:
        self._columns = dict(columns)

    def __getitem__(self, key: "Identifier") -> ColumnSpec:
        return self._columns[key]

    def __iter__(self) -> Iterator["Identifier"]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __repr__(self) -> str:
        columns = ", ".join(f"{ident.name}: {spec.type.value}" for ident, spec in self._columns.items())
        return f"<SchemaDefinition({columns})>"


@dataclass(frozen=True)
class CollectionDescriptor:
    """A collection name paired with its validated schema.

    Immutable once the table exists: creating it again is a no-op.
    """

    name: "Identifier"
    schema: SchemaDefinition
