"""Constructors for new schema entities with the editor's defaults."""

from typing import Optional
from schemaviz.ir.schema import (
    Position,
    Relationship,
    RelationshipType,
    Schema,
    Table,
    TableField,
    utcnow,
)
from schemaviz.ir.types import ColumnType
from schemaviz.config.settings import get_settings


def create_new_schema(name: str, description: Optional[str] = None) -> Schema:
    """Create an empty schema."""
    return Schema(name=name, description=description)


def create_new_table(name: str, position: Optional[Position] = None) -> Table:
    """
    Create a table seeded with a uuid primary key named ``id``.

    A table should never be left without fields, so one is always present.
    """
    return Table(
        name=name,
        fields=[
            TableField(
                name="id",
                type=ColumnType.UUID,
                nullable=False,
                primary_key=True,
                unique=True,
            )
        ],
        position=position or Position(),
        color=get_settings().default_table_color,
    )


def create_new_field(name: str = "", type: ColumnType | str = ColumnType.VARCHAR) -> TableField:
    """Create a nullable, non-key field."""
    return TableField(name=name, type=type)


def create_new_relationship(
    source_table_id: str,
    source_field_id: str,
    target_table_id: str,
    target_field_id: str,
    rel_type: RelationshipType = "one-to-many",
) -> Relationship:
    return Relationship(
        source_table_id=source_table_id,
        source_field_id=source_field_id,
        target_table_id=target_table_id,
        target_field_id=target_field_id,
        type=rel_type,
    )


def touch(schema: Schema) -> Schema:
    """Return a copy of ``schema`` with ``updated_at`` set to now."""
    return schema.model_copy(update={"updated_at": utcnow()})
