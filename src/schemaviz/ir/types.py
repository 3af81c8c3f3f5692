"""Canonical column types and their classification."""

import re
from enum import Enum
from typing import Dict, Optional


class ColumnType(str, Enum):
    """Closed set of column types the schema model supports natively."""

    BIGINT = "bigint"
    BIGSERIAL = "bigserial"
    BIT = "bit"
    BIT_VARYING = "bit varying"
    BOOLEAN = "boolean"
    BOX = "box"
    BYTEA = "bytea"
    CHARACTER = "character"
    CHARACTER_VARYING = "character varying"
    CIDR = "cidr"
    CIRCLE = "circle"
    DATE = "date"
    DOUBLE_PRECISION = "double precision"
    INET = "inet"
    INTEGER = "integer"
    INTERVAL = "interval"
    JSON = "json"
    JSONB = "jsonb"
    LINE = "line"
    LSEG = "lseg"
    MACADDR = "macaddr"
    MACADDR8 = "macaddr8"
    MONEY = "money"
    NUMERIC = "numeric"
    PATH = "path"
    PG_LSN = "pg_lsn"
    PG_SNAPSHOT = "pg_snapshot"
    POINT = "point"
    POLYGON = "polygon"
    REAL = "real"
    SMALLINT = "smallint"
    SMALLSERIAL = "smallserial"
    SERIAL = "serial"
    TEXT = "text"
    TIME = "time"
    TIMESTAMP = "timestamp"
    TIMESTAMPTZ = "timestamptz"
    TIMETZ = "timetz"
    TSQUERY = "tsquery"
    TSVECTOR = "tsvector"
    TXID_SNAPSHOT = "txid_snapshot"
    UUID = "uuid"
    XML = "xml"
    DECIMAL = "decimal"
    VARCHAR = "varchar"
    INT = "int"
    FLOAT = "float"

    @classmethod
    def parse(cls, text: str) -> Optional["ColumnType"]:
        """Return the canonical member for ``text``, or None if unknown.

        Matching ignores case and collapses runs of whitespace, so
        ``"Double  Precision"`` resolves to ``DOUBLE_PRECISION``.
        """
        if not text:
            return None
        key = re.sub(r"\s+", " ", text.strip().lower())
        try:
            return cls(key)
        except ValueError:
            return None


class TypeFamily(str, Enum):
    """Coarse grouping of column types that drives rendering decisions."""

    STRING = "string"
    INTEGER = "integer"
    SERIAL = "serial"
    DECIMAL = "decimal"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TEMPORAL = "temporal"
    UUID = "uuid"
    JSON = "json"
    BINARY = "binary"
    NETWORK = "network"
    GEOMETRIC = "geometric"
    OTHER = "other"


_FAMILIES: Dict[ColumnType, TypeFamily] = {
    ColumnType.VARCHAR: TypeFamily.STRING,
    ColumnType.CHARACTER_VARYING: TypeFamily.STRING,
    ColumnType.CHARACTER: TypeFamily.STRING,
    ColumnType.TEXT: TypeFamily.STRING,
    ColumnType.XML: TypeFamily.STRING,
    ColumnType.INT: TypeFamily.INTEGER,
    ColumnType.INTEGER: TypeFamily.INTEGER,
    ColumnType.SMALLINT: TypeFamily.INTEGER,
    ColumnType.BIGINT: TypeFamily.INTEGER,
    ColumnType.SERIAL: TypeFamily.SERIAL,
    ColumnType.SMALLSERIAL: TypeFamily.SERIAL,
    ColumnType.BIGSERIAL: TypeFamily.SERIAL,
    ColumnType.DECIMAL: TypeFamily.DECIMAL,
    ColumnType.NUMERIC: TypeFamily.DECIMAL,
    ColumnType.MONEY: TypeFamily.DECIMAL,
    ColumnType.REAL: TypeFamily.FLOAT,
    ColumnType.DOUBLE_PRECISION: TypeFamily.FLOAT,
    ColumnType.FLOAT: TypeFamily.FLOAT,
    ColumnType.BOOLEAN: TypeFamily.BOOLEAN,
    ColumnType.DATE: TypeFamily.TEMPORAL,
    ColumnType.TIME: TypeFamily.TEMPORAL,
    ColumnType.TIMETZ: TypeFamily.TEMPORAL,
    ColumnType.TIMESTAMP: TypeFamily.TEMPORAL,
    ColumnType.TIMESTAMPTZ: TypeFamily.TEMPORAL,
    ColumnType.INTERVAL: TypeFamily.TEMPORAL,
    ColumnType.UUID: TypeFamily.UUID,
    ColumnType.JSON: TypeFamily.JSON,
    ColumnType.JSONB: TypeFamily.JSON,
    ColumnType.BYTEA: TypeFamily.BINARY,
    ColumnType.BIT: TypeFamily.BINARY,
    ColumnType.BIT_VARYING: TypeFamily.BINARY,
    ColumnType.INET: TypeFamily.NETWORK,
    ColumnType.CIDR: TypeFamily.NETWORK,
    ColumnType.MACADDR: TypeFamily.NETWORK,
    ColumnType.MACADDR8: TypeFamily.NETWORK,
    ColumnType.POINT: TypeFamily.GEOMETRIC,
    ColumnType.LINE: TypeFamily.GEOMETRIC,
    ColumnType.LSEG: TypeFamily.GEOMETRIC,
    ColumnType.BOX: TypeFamily.GEOMETRIC,
    ColumnType.PATH: TypeFamily.GEOMETRIC,
    ColumnType.POLYGON: TypeFamily.GEOMETRIC,
    ColumnType.CIRCLE: TypeFamily.GEOMETRIC,
    ColumnType.PG_LSN: TypeFamily.OTHER,
    ColumnType.PG_SNAPSHOT: TypeFamily.OTHER,
    ColumnType.TXID_SNAPSHOT: TypeFamily.OTHER,
    ColumnType.TSQUERY: TypeFamily.OTHER,
    ColumnType.TSVECTOR: TypeFamily.OTHER,
}

NUMERIC_FAMILIES = frozenset(
    {TypeFamily.INTEGER, TypeFamily.SERIAL, TypeFamily.DECIMAL, TypeFamily.FLOAT}
)

# Types that take a (length) suffix
SIZED_TYPES = frozenset(
    {
        ColumnType.VARCHAR,
        ColumnType.CHARACTER_VARYING,
        ColumnType.CHARACTER,
        ColumnType.BIT,
        ColumnType.BIT_VARYING,
    }
)

# Types that take a (precision[, scale]) suffix
PRECISION_TYPES = frozenset({ColumnType.DECIMAL, ColumnType.NUMERIC})


def type_family(column_type: ColumnType) -> TypeFamily:
    """Classify a canonical column type."""
    return _FAMILIES[column_type]


def is_numeric(column_type: ColumnType) -> bool:
    """True for integer, serial, decimal and floating point types."""
    return type_family(column_type) in NUMERIC_FAMILIES
