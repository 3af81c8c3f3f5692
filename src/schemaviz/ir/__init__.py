"""Schema model."""

from .types import ColumnType, TypeFamily, type_family, is_numeric
from .schema import (
    Position,
    TableField,
    Table,
    Relationship,
    RelationshipType,
    ReferentialAction,
    ResolvedRelationship,
    Schema,
    new_id,
    utcnow,
)

__all__ = [
    "ColumnType",
    "TypeFamily",
    "type_family",
    "is_numeric",
    "Position",
    "TableField",
    "Table",
    "Relationship",
    "RelationshipType",
    "ReferentialAction",
    "ResolvedRelationship",
    "Schema",
    "new_id",
    "utcnow",
]
