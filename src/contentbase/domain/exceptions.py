"""Exceptions raised by the dynamic collection engine.

Every failure the engine can produce is a ``CollectionEngineError`` with a
stable ``code``. The public API collapses all of them to ``success: false``;
the code is what shows up in logs and tests.
"""


class CollectionEngineError(Exception):
    """Base class for all collection engine errors."""

    code = "engine_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidIdentifier(CollectionEngineError):
    """Raised when a table or column name cannot be used as an identifier."""

    code = "invalid_identifier"

    def __init__(self, message: str, name: object = None) -> None:
        self.name = name
        super().__init__(message)


class UnsupportedType(CollectionEngineError):
    """Raised when a column type is outside the allow-list."""

    code = "unsupported_type"

    def __init__(self, type_tag: object, column: str | None = None) -> None:
        self.type_tag = type_tag
        self.column = column
        if column is not None:
            message = f"Unsupported type {type_tag!r} for column {column!r}"
        else:
            message = f"Unsupported type {type_tag!r}"
        super().__init__(message)


class InvalidConstraint(CollectionEngineError):
    """Raised when constraint text falls outside the accepted grammar."""

    code = "invalid_constraint"

    def __init__(self, message: str, column: str | None = None) -> None:
        self.column = column
        super().__init__(f"{message} (column {column!r})" if column is not None else message)


class EmptySchema(CollectionEngineError):
    """Raised when a collection schema defines no columns."""

    code = "empty_schema"

    def __init__(self) -> None:
        super().__init__("Schema must define at least one column")


class EmptyRecord(CollectionEngineError):
    """Raised when an insert carries no column values."""

    code = "empty_record"

    def __init__(self) -> None:
        super().__init__("Record must contain at least one column value")


class NoOpUpdate(CollectionEngineError):
    """Signals an update with nothing to set.

    Not a failure of the store: the engine short-circuits without issuing
    a statement, and the operation still reports ``success: false``.
    """

    code = "noop_update"

    def __init__(self) -> None:
        super().__init__("Update mapping is empty; nothing to do")


class InvalidRecordId(CollectionEngineError):
    """Raised when a record identifier is not a positive integer."""

    code = "invalid_record_id"

    def __init__(self, record_id: object) -> None:
        self.record_id = record_id
        super().__init__(f"Record id must be a positive integer, got {record_id!r}")


class UnrepresentableValue(CollectionEngineError):
    """Raised when a value has no safe literal form."""

    code = "unrepresentable_value"

    def __init__(self, message: str, column: str | None = None) -> None:
        self.column = column
        super().__init__(f"{message} (column {column!r})" if column is not None else message)


class StoreError(CollectionEngineError):
    """Raised when the relational store rejects or fails a statement.

    ``diagnostic`` carries the driver's message for logging only.
    """

    code = "store_error"

    def __init__(self, message: str, diagnostic: str | None = None) -> None:
        self.diagnostic = diagnostic
        super().__init__(message)


VALIDATION_ERRORS = (
    InvalidIdentifier,
    UnsupportedType,
    InvalidConstraint,
    EmptySchema,
    EmptyRecord,
    InvalidRecordId,
    UnrepresentableValue,
)
