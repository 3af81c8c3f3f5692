"""Tests for the JSON importer."""

import json

import pytest

from schemaviz.importers import FormatError, import_json
from schemaviz.importers.layout import TableLayout
from schemaviz.ir.types import ColumnType


def test_minimal_document():
    """Test importing a schema with no tables."""
    schema = import_json('{"name":"X","tables":[]}')
    assert schema.name == "X"
    assert schema.tables == []
    assert schema.relationships == []
    assert schema.id


def test_missing_name():
    """Test that a document without a name is rejected."""
    with pytest.raises(FormatError):
        import_json('{"tables":[]}')


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[]",
        '{"name": "", "tables": []}',
        '{"name": 3, "tables": []}',
        '{"name": "X"}',
        '{"name": "X", "tables": {}}',
        '{"name": "X", "tables": [5]}',
        '{"name": "X", "tables": [{"fields": []}]}',
        '{"name": "X", "tables": [], "relationships": [{"type": "weird"}]}',
        '{"name": "X", "tables": [{"name": "t", "fields": 5}]}',
        '{"name": "X", "tables": [], "relationships": 5}',
        '{"name": "X", "tables": [], "relationships": true}',
    ],
)
def test_malformed_documents(text):
    """Test that structural problems raise FormatError."""
    with pytest.raises(FormatError) as exc_info:
        import_json(text)
    assert str(exc_info.value).startswith("Failed to parse JSON schema:")


def test_format_error_is_value_error():
    """Test the error hierarchy."""
    assert issubclass(FormatError, ValueError)


def test_field_defaults():
    """Test that missing field attributes get their defaults."""
    schema = import_json(json.dumps({"name": "X", "tables": [{"name": "t", "fields": [{"name": "c"}]}]}))
    field = schema.tables[0].fields[0]
    assert field.id
    assert field.type is ColumnType.VARCHAR
    assert field.nullable is True
    assert field.primary_key is False
    assert field.foreign_key is False
    assert field.unique is False
    assert field.auto_increment is False
    assert field.default_value is None


def test_explicit_values_are_kept():
    """Test that supplied ids, flags and timestamps survive."""
    doc = {
        "id": "schema-1",
        "name": "X",
        "createdAt": "2024-01-02T03:04:05Z",
        "tables": [
            {
                "id": "t1",
                "name": "t",
                "color": "#fff",
                "position": {"x": 5, "y": 6},
                "fields": [
                    {
                        "id": "f1",
                        "name": "amount",
                        "type": "Double Precision",
                        "nullable": False,
                        "defaultValue": 0,
                        "checkConstraint": "amount > 0",
                    }
                ],
            }
        ],
    }
    schema = import_json(json.dumps(doc))
    assert schema.id == "schema-1"
    assert schema.created_at.year == 2024
    table = schema.tables[0]
    assert (table.id, table.color, table.position.x, table.position.y) == ("t1", "#fff", 5, 6)
    field = table.fields[0]
    assert field.type is ColumnType.DOUBLE_PRECISION
    assert field.nullable is False
    assert field.default_value == "0"
    assert field.check_constraint == "amount > 0"


def test_unknown_type_falls_back_to_varchar():
    """Test that an unknown column type is imported as varchar."""
    doc = {"name": "X", "tables": [{"name": "t", "fields": [{"name": "g", "type": "geography"}]}]}
    assert import_json(json.dumps(doc)).tables[0].fields[0].type is ColumnType.VARCHAR


def test_positions_from_layout():
    """Test that tables without a position are placed by the layout."""
    doc = {"name": "X", "tables": [{"name": "a"}, {"name": "b"}, {"name": "c", "position": {"x": 1, "y": 2}}]}
    layout = TableLayout(strategy="grid", columns=4, spacing_x=300, spacing_y=200)
    tables = import_json(json.dumps(doc), layout=layout).tables
    assert (tables[0].position.x, tables[0].position.y) == (100, 100)
    assert (tables[1].position.x, tables[1].position.y) == (400, 100)
    assert (tables[2].position.x, tables[2].position.y) == (1, 2)


def test_relationship_defaults():
    """Test relationship kind and referential action defaults."""
    doc = {
        "name": "X",
        "tables": [],
        "relationships": [
            {"sourceTableId": "a", "sourceFieldId": "b", "targetTableId": "c", "targetFieldId": "d"},
            {"sourceTableId": "a", "onDelete": "set null", "onUpdate": "restrict", "type": "one-to-one"},
        ],
    }
    first, second = import_json(json.dumps(doc)).relationships
    assert first.type == "one-to-many"
    assert (first.on_delete, first.on_update) == ("CASCADE", "CASCADE")
    assert first.id
    assert (second.on_delete, second.on_update) == ("SET NULL", "RESTRICT")
    assert second.type == "one-to-one"
    assert second.target_table_id == ""
