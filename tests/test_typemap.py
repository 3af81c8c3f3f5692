"""Tests for type mapping onto export targets."""

from schemaviz.formats import ExportFormat
from schemaviz.ir.schema import TableField
from schemaviz.ir.types import ColumnType
from schemaviz.typemap import json_type, map_type, mysql_type, postgres_type, prisma_type


def _field(column_type, **kwargs):
    return TableField(name="c", type=column_type, **kwargs)


def test_mapping_is_total():
    """Test that every type maps to a non-empty name in every format."""
    for column_type in ColumnType:
        for target in ExportFormat:
            assert map_type(_field(column_type), target)


def test_postgres_types():
    """Test PostgreSQL type rendering."""
    assert postgres_type(_field(ColumnType.VARCHAR, length=255)) == "VARCHAR(255)"
    assert postgres_type(_field(ColumnType.VARCHAR)) == "VARCHAR"
    assert postgres_type(_field(ColumnType.DECIMAL, precision=10, scale=2)) == "DECIMAL(10,2)"
    assert postgres_type(_field(ColumnType.NUMERIC, precision=8)) == "NUMERIC(8)"
    assert postgres_type(_field(ColumnType.DOUBLE_PRECISION)) == "DOUBLE PRECISION"
    assert postgres_type(_field(ColumnType.UUID)) == "UUID"


def test_mysql_types():
    """Test MySQL type rendering and fallbacks."""
    assert mysql_type(_field(ColumnType.VARCHAR)) == "VARCHAR(255)"
    assert mysql_type(_field(ColumnType.VARCHAR, length=40)) == "VARCHAR(40)"
    assert mysql_type(_field(ColumnType.DECIMAL)) == "DECIMAL(10,2)"
    assert mysql_type(_field(ColumnType.NUMERIC, precision=12, scale=4)) == "DECIMAL(12,4)"
    assert mysql_type(_field(ColumnType.MONEY)) == "DECIMAL(10,2)"
    assert mysql_type(_field(ColumnType.UUID)) == "CHAR(36)"
    assert mysql_type(_field(ColumnType.CHARACTER)) == "CHAR(1)"
    assert mysql_type(_field(ColumnType.DOUBLE_PRECISION)) == "DOUBLE"
    assert mysql_type(_field(ColumnType.POINT)) == "VARCHAR(255)"


def test_prisma_types():
    """Test Prisma scalar mapping and fallback."""
    assert prisma_type(_field(ColumnType.UUID)) == "String"
    assert prisma_type(_field(ColumnType.BIGSERIAL)) == "BigInt"
    assert prisma_type(_field(ColumnType.TIMESTAMP)) == "DateTime"
    assert prisma_type(_field(ColumnType.JSONB)) == "Json"
    assert prisma_type(_field(ColumnType.INET)) == "String"


def test_json_type_is_canonical_name():
    """Test that the JSON format keeps the canonical name."""
    assert json_type(_field(ColumnType.DOUBLE_PRECISION)) == "double precision"
    assert map_type(_field(ColumnType.INT), "json") == "int"
