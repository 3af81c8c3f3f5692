"""Tests for schema validation."""

from schemaviz.ir.schema import Relationship, Schema, Table, TableField
from schemaviz.ir.validators import validate_schema


def _codes(schema):
    return sorted(issue.code for issue in validate_schema(schema))


def test_samples_are_clean(ecommerce_schema, blog_schema):
    """Test that the bundled samples have no issues."""
    assert validate_schema(ecommerce_schema) == []
    assert validate_schema(blog_schema) == []


def test_dangling_relationship(blog_users_schema):
    """Test that an unresolvable relationship is reported."""
    schema = blog_users_schema.model_copy(
        update={
            "relationships": [
                Relationship(
                    source_table_id="x", source_field_id="y", target_table_id="z", target_field_id="w"
                )
            ]
        }
    )
    issues = validate_schema(schema)
    assert [i.code for i in issues] == ["DANGLING_RELATIONSHIP"]
    assert issues[0].severity == "warning"
    assert issues[0].details["source_table_id"] == "x"


def test_duplicates():
    """Test duplicate table names and duplicate field names/ids."""
    field = TableField(id="f", name="a")
    schema = Schema(
        name="Dup",
        tables=[
            Table(name="t", fields=[field, TableField(id="f", name="a")]),
            Table(name="t", fields=[TableField(name="b")]),
        ],
    )
    assert _codes(schema) == ["DUPLICATE_FIELD_ID", "DUPLICATE_FIELD_NAME", "DUPLICATE_TABLE_NAME"]


def test_primary_key_flags():
    """Test that a loosely flagged single-column key is reported."""
    schema = Schema(
        name="Loose",
        tables=[Table(name="t", fields=[TableField(name="id", primary_key=True, nullable=True)])],
    )
    assert _codes(schema) == ["PK_NOT_UNIQUE", "PK_NULLABLE"]


def test_composite_key_members_need_not_be_unique():
    """Test that composite key members are not flagged as non-unique."""
    schema = Schema(
        name="Link",
        tables=[
            Table(
                name="link",
                fields=[
                    TableField(name="a_id", primary_key=True, nullable=False),
                    TableField(name="b_id", primary_key=True, nullable=False),
                ],
            )
        ],
    )
    assert validate_schema(schema) == []


def test_identifiers_and_empty_tables():
    """Test non-bare identifiers and tables without fields."""
    schema = Schema(
        name="Odd",
        tables=[
            Table(name="order items", fields=[TableField(name="unit price")]),
            Table(name="empty"),
        ],
    )
    assert _codes(schema) == ["EMPTY_TABLE", "INVALID_IDENTIFIER", "INVALID_IDENTIFIER"]
