"""Default-value interpretation shared by every exporter.

A field's default is an opaque string. It is classified once into a
DefaultKind; each dialect then decides how to spell that kind.
"""

from enum import Enum
from typing import Dict, Optional
from schemaviz.ir.schema import TableField
from schemaviz.ir.types import TypeFamily, is_numeric, type_family

CURRENT_TIMESTAMP_KEYWORDS = frozenset({"now()", "current_timestamp"})
UUID_GENERATOR_KEYWORDS = frozenset({"uuid_generate_v4()", "gen_random_uuid()", "uuid()"})


class DefaultKind(str, Enum):
    CURRENT_TIMESTAMP = "current_timestamp"
    UUID = "uuid"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"


def classify_default(field: TableField) -> Optional[DefaultKind]:
    """
    Decide how a field's default value should be rendered.

    Returns:
        DefaultKind, or None if the field has no default
    """
    if not field.default_value:
        return None
    lowered = field.default_value.strip().lower()
    if lowered in CURRENT_TIMESTAMP_KEYWORDS:
        return DefaultKind.CURRENT_TIMESTAMP
    if lowered in UUID_GENERATOR_KEYWORDS:
        return DefaultKind.UUID
    if type_family(field.type) is TypeFamily.BOOLEAN:
        return DefaultKind.BOOLEAN
    if is_numeric(field.type):
        return DefaultKind.NUMBER
    return DefaultKind.STRING


def quote_sql(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def quote_prisma(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


POSTGRES_UUID_FUNCTIONS = frozenset({"uuid_generate_v4()", "gen_random_uuid()"})

_POSTGRES_KEYWORDS: Dict[DefaultKind, str] = {
    DefaultKind.CURRENT_TIMESTAMP: "CURRENT_TIMESTAMP",
    DefaultKind.UUID: "uuid_generate_v4()",
}

_MYSQL_KEYWORDS: Dict[DefaultKind, str] = {
    DefaultKind.CURRENT_TIMESTAMP: "CURRENT_TIMESTAMP",
    DefaultKind.UUID: "(UUID())",
}

_PRISMA_KEYWORDS: Dict[DefaultKind, str] = {
    DefaultKind.CURRENT_TIMESTAMP: "now()",
    DefaultKind.UUID: "uuid()",
}


def _render(field: TableField, keywords: Dict[DefaultKind, str], quote) -> Optional[str]:
    kind = classify_default(field)
    if kind is None:
        return None
    if kind in keywords:
        return keywords[kind]
    value = field.default_value.strip()
    if kind is DefaultKind.BOOLEAN:
        return value.lower()
    if kind is DefaultKind.NUMBER:
        return value
    return quote(field.default_value)


def render_postgres_default(field: TableField) -> Optional[str]:
    """
    Default expression for a PostgreSQL column, or None.

    Native generator calls such as ``gen_random_uuid()`` are kept as written;
    other UUID generators become ``uuid_generate_v4()``.
    """
    if classify_default(field) is DefaultKind.UUID:
        value = field.default_value.strip()
        if value.lower() in POSTGRES_UUID_FUNCTIONS:
            return value
    return _render(field, _POSTGRES_KEYWORDS, quote_sql)


def render_mysql_default(field: TableField) -> Optional[str]:
    """Default expression for a MySQL column, or None."""
    return _render(field, _MYSQL_KEYWORDS, quote_sql)


def render_prisma_default(field: TableField) -> Optional[str]:
    """
    Argument of a Prisma ``@default(...)`` attribute, or None.

    Numeric defaults render bare, e.g. ``@default(0)``, which Prisma accepts
    for Int, Float and Decimal fields. Booleans render as ``true``/``false``.
    """
    return _render(field, _PRISMA_KEYWORDS, quote_prisma)
