"""PostgreSQL DDL exporter (the primary SQL dialect)."""

from datetime import datetime
from typing import Dict, List, Optional
from schemaviz.exporters.common import RULE, resolvable_relationships, sql_banner, timestamp
from schemaviz.exporters.defaults import render_postgres_default
from schemaviz.ir.schema import Schema, Table, TableField
from schemaviz.ir.types import TypeFamily, type_family
from schemaviz.typemap import postgres_type
from schemaviz.config.logging import get_logger

logger = get_logger(__name__)

INDEXED_NAME_HINTS = ("created_at", "updated_at", "date")


def _column_definition(field: TableField) -> str:
    parts = [field.name, postgres_type(field)]
    if field.is_effectively_not_null:
        parts.append("NOT NULL")
    if field.unique and not field.primary_key:
        parts.append("UNIQUE")
    if field.auto_increment and type_family(field.type) is TypeFamily.INTEGER:
        # serial types already carry their own sequence
        parts.append("GENERATED BY DEFAULT AS IDENTITY")
    default = render_postgres_default(field)
    if default is not None:
        parts.append(f"DEFAULT {default}")
    if field.check_constraint:
        parts.append(f"CHECK ({field.check_constraint})")
    return "  " + " ".join(parts)


def _create_table(table: Table, index: int) -> List[str]:
    lines = sql_banner(f"Table {index}: {table.name}")
    lines.append(f"CREATE TABLE {table.name} (")
    definitions = [_column_definition(f) for f in table.fields]
    pk_fields = table.primary_key_fields
    if pk_fields:
        columns = ", ".join(f.name for f in pk_fields)
        definitions.append(f"  CONSTRAINT pk_{table.name} PRIMARY KEY ({columns})")
    lines.append(",\n".join(definitions))
    lines.append(");")
    lines.append("")
    return lines


def _escape_comment(text: str) -> str:
    return text.replace("'", "''")


def _comments(table: Table) -> List[str]:
    lines = [
        "-- Add table comment",
        f"COMMENT ON TABLE {table.name} IS 'Table for managing {_escape_comment(table.name)} data';",
        "",
    ]
    for field in table.fields:
        if field.comment:
            text = field.comment
        elif field.primary_key:
            text = f"Primary key for {table.name}"
        elif field.foreign_key:
            text = "Foreign key reference"
        else:
            continue
        lines.append(
            f"COMMENT ON COLUMN {table.name}.{field.name} IS '{_escape_comment(text)}';"
        )
    lines.append("")
    return lines


def _indexes(schema: Schema, resolved) -> Dict[str, str]:
    """Index name -> statement, de-duplicated, in first-seen order."""
    indexes: Dict[str, str] = {}

    def add(table: Table, field: TableField) -> None:
        name = f"idx_{table.name}_{field.name}"
        if name not in indexes:
            indexes[name] = f"CREATE INDEX IF NOT EXISTS {name} ON {table.name}({field.name});"

    for r in resolved:
        add(r.source_table, r.source_field)
    for table in schema.tables:
        for field in table.fields:
            if any(hint in field.name for hint in INDEXED_NAME_HINTS):
                add(table, field)
    return indexes


def _templates(schema: Schema, resolved) -> List[str]:
    lines = sql_banner("Sample Data Templates (Uncomment to use)")
    lines.append("")
    for table in schema.tables:
        non_primary = [f.name for f in table.fields if not f.primary_key]
        if non_primary:
            lines.append(f"-- INSERT INTO {table.name} ({', '.join(non_primary)}) VALUES")
            lines.append("--   ('sample_value_1', 'sample_value_2'),")
            lines.append("--   ('sample_value_3', 'sample_value_4');")
            lines.append("")

    lines.extend(sql_banner("Useful Query Templates"))
    lines.append("")
    for table in schema.tables:
        lines.append(f"-- Select all from {table.name}")
        lines.append(f"-- SELECT * FROM {table.name} ORDER BY created_at DESC LIMIT 10;")
        lines.append("")
    for r in resolved:
        lines.append(f"-- Join {r.source_table.name} with {r.target_table.name}")
        lines.append(f"-- SELECT s.*, t.* FROM {r.source_table.name} s")
        lines.append(
            f"--   JOIN {r.target_table.name} t ON s.{r.source_field.name} = t.{r.target_field.name};"
        )
        lines.append("")
    return lines


def export_postgresql(
    schema: Schema,
    generated_at: Optional[datetime] = None,
    include_comments: bool = True,
    include_templates: bool = True,
) -> str:
    """
    Render a schema as PostgreSQL DDL.

    Args:
        schema: Schema to render
        generated_at: Timestamp written to the header (defaults to now)
        include_comments: Emit COMMENT ON statements after each table
        include_templates: Emit the commented-out INSERT/SELECT templates

    Returns:
        DDL script text
    """
    resolved = resolvable_relationships(schema, "postgresql")

    lines = [RULE, f"-- Database Schema: {schema.name}"]
    if schema.description:
        lines.append(f"-- Description: {schema.description}")
    lines.extend(
        [
            f"-- Generated on: {timestamp(generated_at)}",
            f"-- Total Tables: {len(schema.tables)}",
            f"-- Total Relationships: {len(schema.relationships)}",
            RULE,
            "",
            "-- Enable UUID extension for PostgreSQL",
            'CREATE EXTENSION IF NOT EXISTS "uuid-ossp";',
            "",
        ]
    )

    for index, table in enumerate(schema.tables, start=1):
        lines.extend(_create_table(table, index))
        if include_comments:
            lines.extend(_comments(table))

    if resolved:
        lines.extend(sql_banner("Foreign Key Constraints"))
        lines.append("")
        for number, r in enumerate(resolved, start=1):
            rel = r.relationship
            lines.append(
                f"-- Relationship {number}: {r.source_table.name}.{r.source_field.name} -> "
                f"{r.target_table.name}.{r.target_field.name} ({rel.type})"
            )
            lines.append(
                f"ALTER TABLE {r.source_table.name} "
                f"ADD CONSTRAINT fk_{r.source_table.name}_{r.source_field.name} "
                f"FOREIGN KEY ({r.source_field.name}) "
                f"REFERENCES {r.target_table.name}({r.target_field.name}) "
                f"ON DELETE {rel.on_delete} ON UPDATE {rel.on_update};"
            )
            lines.append("")

    indexes = _indexes(schema, resolved)
    if indexes:
        lines.extend(sql_banner("Indexes for Performance"))
        lines.append("")
        lines.extend(f"{statement}\n" for statement in indexes.values())

    if include_templates:
        lines.extend(_templates(schema, resolved))

    lines.extend(sql_banner("End of Schema"))
    logger.info(
        f"Exported '{schema.name}' to PostgreSQL: {len(schema.tables)} table(s), "
        f"{len(resolved)} foreign key(s), {len(indexes)} index(es)"
    )
    return "\n".join(lines) + "\n"
