"""Mapping of canonical column types onto each export target.

Every function here is total: a type a target has no native spelling for
falls back to that target's generic string type instead of failing.
"""

from typing import Callable, Dict
from schemaviz.formats import ExportFormat
from schemaviz.ir.schema import TableField
from schemaviz.ir.types import ColumnType, PRECISION_TYPES, SIZED_TYPES

MYSQL_FALLBACK = "VARCHAR(255)"
PRISMA_FALLBACK = "String"

_MYSQL_TYPES: Dict[ColumnType, str] = {
    ColumnType.TEXT: "TEXT",
    ColumnType.INT: "INT",
    ColumnType.INTEGER: "INT",
    ColumnType.SERIAL: "INT",
    ColumnType.SMALLSERIAL: "SMALLINT",
    ColumnType.BIGSERIAL: "BIGINT",
    ColumnType.BIGINT: "BIGINT",
    ColumnType.SMALLINT: "SMALLINT",
    ColumnType.REAL: "FLOAT",
    ColumnType.FLOAT: "FLOAT",
    ColumnType.DOUBLE_PRECISION: "DOUBLE",
    ColumnType.BOOLEAN: "BOOLEAN",
    ColumnType.DATE: "DATE",
    ColumnType.TIMESTAMP: "TIMESTAMP",
    ColumnType.TIMESTAMPTZ: "TIMESTAMP",
    ColumnType.TIME: "TIME",
    ColumnType.TIMETZ: "TIME",
    ColumnType.UUID: "CHAR(36)",
    ColumnType.JSON: "JSON",
    ColumnType.JSONB: "JSON",
    ColumnType.BYTEA: "BLOB",
    ColumnType.XML: "TEXT",
}

_PRISMA_TYPES: Dict[ColumnType, str] = {
    ColumnType.VARCHAR: "String",
    ColumnType.CHARACTER_VARYING: "String",
    ColumnType.CHARACTER: "String",
    ColumnType.TEXT: "String",
    ColumnType.UUID: "String",
    ColumnType.INT: "Int",
    ColumnType.INTEGER: "Int",
    ColumnType.SMALLINT: "Int",
    ColumnType.SERIAL: "Int",
    ColumnType.SMALLSERIAL: "Int",
    ColumnType.BIGINT: "BigInt",
    ColumnType.BIGSERIAL: "BigInt",
    ColumnType.DECIMAL: "Decimal",
    ColumnType.NUMERIC: "Decimal",
    ColumnType.MONEY: "Decimal",
    ColumnType.REAL: "Float",
    ColumnType.DOUBLE_PRECISION: "Float",
    ColumnType.FLOAT: "Float",
    ColumnType.BOOLEAN: "Boolean",
    ColumnType.DATE: "DateTime",
    ColumnType.TIMESTAMP: "DateTime",
    ColumnType.TIMESTAMPTZ: "DateTime",
    ColumnType.JSON: "Json",
    ColumnType.JSONB: "Json",
}


def _precision_suffix(field: TableField) -> str:
    if not field.precision:
        return ""
    if field.scale is not None:
        return f"({field.precision},{field.scale})"
    return f"({field.precision})"


def postgres_type(field: TableField) -> str:
    """
    Render a field's type for PostgreSQL.

    PostgreSQL supports the whole canonical set, so the type name is kept
    and only the size suffix is added.
    """
    name = field.type.value.upper()
    if field.type in SIZED_TYPES and field.length:
        return f"{name}({field.length})"
    if field.type in PRECISION_TYPES:
        return name + _precision_suffix(field)
    return name


def mysql_type(field: TableField) -> str:
    """Render a field's type for MySQL, collapsing onto MySQL's smaller type set."""
    if field.type in (ColumnType.VARCHAR, ColumnType.CHARACTER_VARYING):
        return f"VARCHAR({field.length or 255})"
    if field.type is ColumnType.CHARACTER:
        return f"CHAR({field.length or 1})"
    if field.type in PRECISION_TYPES or field.type is ColumnType.MONEY:
        return "DECIMAL" + (_precision_suffix(field) or "(10,2)")
    return _MYSQL_TYPES.get(field.type, MYSQL_FALLBACK)


def prisma_type(field: TableField) -> str:
    """Render a field's type as a Prisma scalar."""
    return _PRISMA_TYPES.get(field.type, PRISMA_FALLBACK)


def json_type(field: TableField) -> str:
    """The JSON format stores the canonical name itself."""
    return field.type.value


_MAPPERS: Dict[ExportFormat, Callable[[TableField], str]] = {
    ExportFormat.POSTGRESQL: postgres_type,
    ExportFormat.MYSQL: mysql_type,
    ExportFormat.PRISMA: prisma_type,
    ExportFormat.JSON: json_type,
}


def map_type(field: TableField, target: ExportFormat) -> str:
    """
    Render a field's type for an export target.

    Args:
        field: Field whose type (and length/precision/scale) to render
        target: Export format

    Returns:
        Non-empty type expression
    """
    return _MAPPERS[ExportFormat(target)](field)
