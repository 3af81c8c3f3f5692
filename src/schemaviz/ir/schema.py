"""Schema model: the canonical representation every format converts to/from."""

import uuid
from datetime import datetime, timezone
from typing import Iterator, List, Literal, NamedTuple, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from .types import ColumnType

RelationshipType = Literal["one-to-one", "one-to-many", "many-to-one", "many-to-many"]
ReferentialAction = Literal["CASCADE", "RESTRICT", "SET NULL", "NO ACTION"]


def new_id() -> str:
    """Generate a fresh opaque identifier."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _Model(BaseModel):
    # Attributes are snake_case in Python and camelCase on the wire
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Position(_Model):
    """Canvas position of a table (presentation only)."""

    x: float = 0.0
    y: float = 0.0


class TableField(_Model):
    """A column of a table."""

    id: str = Field(default_factory=new_id)
    name: str
    type: ColumnType = ColumnType.VARCHAR
    nullable: bool = True
    primary_key: bool = False
    foreign_key: bool = False  # descriptive marker; relationships are separate
    unique: bool = False
    auto_increment: bool = False
    default_value: Optional[str] = None
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    comment: Optional[str] = None
    check_constraint: Optional[str] = None

    @property
    def is_effectively_not_null(self) -> bool:
        """Primary keys are never nullable, whatever the stored flag says."""
        return self.primary_key or not self.nullable

    @property
    def is_effectively_unique(self) -> bool:
        """Primary keys are always unique, whatever the stored flag says."""
        return self.primary_key or self.unique


class Table(_Model):
    """A table owning an ordered list of fields."""

    id: str = Field(default_factory=new_id)
    name: str
    fields: List[TableField] = Field(default_factory=list)
    position: Position = Field(default_factory=Position)
    color: Optional[str] = None

    def find_field(self, field_id: str) -> Optional[TableField]:
        for field in self.fields:
            if field.id == field_id:
                return field
        return None

    def find_field_by_name(self, name: str) -> Optional[TableField]:
        for field in self.fields:
            if field.name == name:
                return field
        return None

    @property
    def primary_key_fields(self) -> List[TableField]:
        return [f for f in self.fields if f.primary_key]


class Relationship(_Model):
    """Weak reference between a source field and a target field."""

    id: str = Field(default_factory=new_id)
    source_table_id: str
    source_field_id: str
    target_table_id: str
    target_field_id: str
    type: RelationshipType = "one-to-many"
    name: Optional[str] = None
    on_delete: ReferentialAction = "CASCADE"
    on_update: ReferentialAction = "CASCADE"


class ResolvedRelationship(NamedTuple):
    """A relationship whose four references all exist in the schema."""

    relationship: Relationship
    source_table: Table
    source_field: TableField
    target_table: Table
    target_field: TableField


class Schema(_Model):
    """Root aggregate of tables and relationships."""

    id: str = Field(default_factory=new_id)
    name: str
    description: Optional[str] = None
    tables: List[Table] = Field(default_factory=list)
    relationships: List[Relationship] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def find_table(self, table_id: str) -> Optional[Table]:
        for table in self.tables:
            if table.id == table_id:
                return table
        return None

    def find_table_by_name(self, name: str) -> Optional[Table]:
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def resolve(self, relationship: Relationship) -> Optional[ResolvedRelationship]:
        """
        Look up the tables and fields a relationship points at.

        Args:
            relationship: Relationship to resolve (need not belong to this schema)

        Returns:
            ResolvedRelationship, or None if any of the four ids is dangling
        """
        source_table = self.find_table(relationship.source_table_id)
        target_table = self.find_table(relationship.target_table_id)
        if source_table is None or target_table is None:
            return None
        source_field = source_table.find_field(relationship.source_field_id)
        target_field = target_table.find_field(relationship.target_field_id)
        if source_field is None or target_field is None:
            return None
        return ResolvedRelationship(
            relationship, source_table, source_field, target_table, target_field
        )

    def resolved_relationships(self) -> Iterator[ResolvedRelationship]:
        """Yield every resolvable relationship in schema order, skipping dangling ones."""
        for relationship in self.relationships:
            resolved = self.resolve(relationship)
            if resolved is not None:
                yield resolved
