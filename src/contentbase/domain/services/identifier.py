"""Identifier sanitization for table and column names.

Names are never interpolated as caller text. ``sanitize`` turns a raw name
into an ``Identifier`` whose ``quoted`` form wraps it in double quotes and
doubles any embedded double quote, so the store always reads exactly one
name token whatever the name contains (quotes, ``;``, whitespace, keywords).
"""

from dataclasses import dataclass, field

from contentbase.domain.exceptions import InvalidIdentifier

# PostgreSQL truncates identifiers past 63 bytes; apply the same ceiling everywhere
MAX_IDENTIFIER_LENGTH = 63

# Column every collection table carries, assigned by the store
PRIMARY_KEY_COLUMN = "id"

# Tables owned by the authentication/authorization collaborator
SYSTEM_TABLES = frozenset({
    "users",
    "roles",
    "permissions",
    "users_roles",
    "roles_permissions",
})

_SANITIZER_TOKEN = object()


@dataclass(frozen=True)
class Identifier:
    """A validated table or column name.

    Only ``sanitize`` can build one; constructing it directly raises
    ``TypeError``.
    """

    name: str
    _token: object = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self._token is not _SANITIZER_TOKEN:
            raise TypeError("Identifier instances must be created with sanitize()")

    @property
    def quoted(self) -> str:
        """The name as a double-quoted identifier token."""
        return '"' + self.name.replace('"', '""') + '"'

    def __str__(self) -> str:
        return self.quoted


def sanitize(name: object, max_length: int = MAX_IDENTIFIER_LENGTH) -> Identifier:
    """Validate a raw name and wrap it as an ``Identifier``.

    Args:
        name: The raw table or column name.
        max_length: Longest accepted name, in characters.

    Returns:
        The sanitized identifier.

    Raises:
        InvalidIdentifier: If the name is not a non-empty single-token string.
    """
    if not isinstance(name, str):
        raise InvalidIdentifier(
            f"Identifier must be a string, got {type(name).__name__}", name=name
        )

    if not name or not name.strip():
        raise InvalidIdentifier("Identifier must not be empty", name=name)

    if len(name) > max_length:
        raise InvalidIdentifier(
            f"Identifier must be at most {max_length} characters", name=name
        )

    if any(ord(char) < 32 or ord(char) == 127 for char in name):
        raise InvalidIdentifier("Identifier must not contain control characters", name=name)

    # Lone surrogates cannot reach the driver
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidIdentifier("Identifier must be valid Unicode text", name=name) from e

    return Identifier(name, _SANITIZER_TOKEN)


def sanitize_table_name(name: object, max_length: int = MAX_IDENTIFIER_LENGTH) -> Identifier:
    """Sanitize a collection table name.

    System tables belong to the auth collaborator and can never be targeted.
    """
    identifier = sanitize(name, max_length)
    if identifier.name.lower() in SYSTEM_TABLES:
        raise InvalidIdentifier(
            f"Table name {identifier.name!r} is reserved for system use", name=name
        )
    return identifier


def sanitize_column_name(name: object, max_length: int = MAX_IDENTIFIER_LENGTH) -> Identifier:
    """Sanitize a caller-defined column name.

    The primary key column is managed by the store and cannot be defined,
    written or updated by callers.
    """
    identifier = sanitize(name, max_length)
    if identifier.name.lower() == PRIMARY_KEY_COLUMN:
        raise InvalidIdentifier(
            f"Column name {identifier.name!r} is reserved for the primary key", name=name
        )
    return identifier


def primary_key_identifier() -> Identifier:
    """The identifier of the store-assigned primary key column."""
    return Identifier(PRIMARY_KEY_COLUMN, _SANITIZER_TOKEN)
