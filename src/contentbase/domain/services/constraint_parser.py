"""Parser for column constraint text.

Caller constraint text is never copied into DDL. It is parsed against a
small grammar and re-rendered from the parsed ``ConstraintSet``:

    constraints := clause*
    clause      := NOT NULL | NULL | UNIQUE | DEFAULT literal
    literal     := number | 'string' | TRUE | FALSE | NULL
                 | CURRENT_TIMESTAMP | CURRENT_DATE

Keywords are case-insensitive and each clause may appear at most once.
Anything else (CHECK, REFERENCES, expressions, stray punctuation) is
rejected with ``InvalidConstraint``.
"""

import re
from decimal import Decimal

from contentbase.domain.entities.collection import ConstraintSet
from contentbase.domain.exceptions import InvalidConstraint
from contentbase.domain.services import literal_encoder
from contentbase.domain.services.literal_encoder import SqlLiteral

_TOKEN_PATTERN = re.compile(
    r"""
    \s*(?:
        (?P<string>'(?:[^']|'')*')
      | (?P<number>[+-]?(?:\d+\.\d*|\.\d+|\d+))
      | (?P<word>[A-Za-z_]+)
    )
    """,
    re.VERBOSE,
)

_KEYWORD_LITERALS = {
    "TRUE": literal_encoder.TRUE,
    "FALSE": literal_encoder.FALSE,
    "NULL": literal_encoder.NULL,
    "CURRENT_TIMESTAMP": literal_encoder.CURRENT_TIMESTAMP,
    "CURRENT_DATE": literal_encoder.CURRENT_DATE,
}


def _tokenize(text: str, column: str | None) -> list[tuple[str, str]]:
    tokens = []
    position = 0
    stripped_end = len(text.rstrip())
    while position < stripped_end:
        match = _TOKEN_PATTERN.match(text, position)
        if match is None or match.end() == position:
            raise InvalidConstraint(
                f"Unexpected constraint text at position {position}: {text[position:]!r}",
                column,
            )
        kind = match.lastgroup
        tokens.append((kind, match.group(kind)))
        position = match.end()
    return tokens


def _parse_default(token: tuple[str, str] | None, column: str | None) -> SqlLiteral:
    if token is None:
        raise InvalidConstraint("DEFAULT requires a value", column)

    kind, value = token
    if kind == "string":
        return literal_encoder.quote_text(value[1:-1].replace("''", "'"), column)
    if kind == "number":
        if re.fullmatch(r"[+-]?\d+", value):
            return literal_encoder.encode(int(value), column)
        return literal_encoder.encode(Decimal(value), column)

    keyword = value.upper()
    if keyword in _KEYWORD_LITERALS:
        return _KEYWORD_LITERALS[keyword]
    raise InvalidConstraint(f"Unsupported DEFAULT value {value!r}", column)


def parse_constraints(text: object, column: str | None = None) -> ConstraintSet:
    """Parse constraint text into a ``ConstraintSet``.

    Args:
        text: Raw constraint text; ``None`` or empty means no constraints.
        column: Column name, included in errors for diagnostics.

    Returns:
        The parsed constraints.

    Raises:
        InvalidConstraint: If the text falls outside the grammar.
    """
    if text is None:
        return ConstraintSet()
    if not isinstance(text, str):
        raise InvalidConstraint("Constraints must be a string", column)

    tokens = _tokenize(text, column)
    nullable: bool | None = None
    unique = False
    default: SqlLiteral | None = None
    seen: set[str] = set()

    index = 0
    while index < len(tokens):
        kind, value = tokens[index]
        keyword = value.upper() if kind == "word" else None

        if keyword == "NOT":
            following = tokens[index + 1] if index + 1 < len(tokens) else None
            if following is None or following[1].upper() != "NULL":
                raise InvalidConstraint("NOT must be followed by NULL", column)
            clause = "NULLABILITY"
            nullable = False
            index += 2
        elif keyword == "NULL":
            clause = "NULLABILITY"
            nullable = True
            index += 1
        elif keyword == "UNIQUE":
            clause = "UNIQUE"
            unique = True
            index += 1
        elif keyword == "DEFAULT":
            clause = "DEFAULT"
            following = tokens[index + 1] if index + 1 < len(tokens) else None
            default = _parse_default(following, column)
            index += 2
        else:
            raise InvalidConstraint(f"Unsupported constraint {value!r}", column)

        if clause in seen:
            raise InvalidConstraint(f"Constraint {clause} given more than once", column)
        seen.add(clause)

    return ConstraintSet(nullable=nullable, unique=unique, default=default)
