"""MySQL DDL exporter (the secondary SQL dialect)."""

from datetime import datetime
from typing import List, Optional
from schemaviz.exporters.common import RULE, resolvable_relationships, timestamp
from schemaviz.exporters.defaults import quote_sql, render_mysql_default
from schemaviz.ir.schema import Schema, Table, TableField
from schemaviz.ir.types import TypeFamily, type_family
from schemaviz.typemap import mysql_type
from schemaviz.utils.naming import slugify_identifier
from schemaviz.config.logging import get_logger

logger = get_logger(__name__)

TABLE_OPTIONS = "ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci"


def _q(name: str) -> str:
    return f"`{name}`"


def _column_definition(field: TableField) -> str:
    parts = [_q(field.name), mysql_type(field)]
    if field.is_effectively_not_null:
        parts.append("NOT NULL")
    if field.auto_increment or type_family(field.type) is TypeFamily.SERIAL:
        parts.append("AUTO_INCREMENT")
    default = render_mysql_default(field)
    if default is not None:
        parts.append(f"DEFAULT {default}")
    if field.check_constraint:
        parts.append(f"CHECK ({field.check_constraint})")
    if field.comment:
        parts.append(f"COMMENT {quote_sql(field.comment)}")
    return "  " + " ".join(parts)


def _create_table(table: Table, index: int) -> List[str]:
    definitions = [_column_definition(f) for f in table.fields]
    pk_fields = table.primary_key_fields
    if pk_fields:
        definitions.append(f"  PRIMARY KEY ({', '.join(_q(f.name) for f in pk_fields)})")
    for field in table.fields:
        if field.unique and not field.primary_key:
            definitions.append(
                f"  UNIQUE KEY {_q(f'uk_{table.name}_{field.name}')} ({_q(field.name)})"
            )
    return [
        f"-- Table {index}: {table.name}",
        f"CREATE TABLE {_q(table.name)} (",
        ",\n".join(definitions),
        f") {TABLE_OPTIONS};",
        "",
    ]


def export_mysql(schema: Schema, generated_at: Optional[datetime] = None) -> str:
    """
    Render a schema as MySQL DDL.

    Args:
        schema: Schema to render
        generated_at: Timestamp written to the header (defaults to now)

    Returns:
        DDL script text
    """
    resolved = resolvable_relationships(schema, "mysql")
    database = slugify_identifier(schema.name)

    lines = [RULE, f"-- MySQL Schema: {schema.name}"]
    if schema.description:
        lines.append(f"-- Description: {schema.description}")
    lines.extend(
        [
            f"-- Generated on: {timestamp(generated_at)}",
            RULE,
            "",
            "-- Create database",
            f"CREATE DATABASE IF NOT EXISTS {_q(database)};",
            f"USE {_q(database)};",
            "",
        ]
    )

    for index, table in enumerate(schema.tables, start=1):
        lines.extend(_create_table(table, index))

    if resolved:
        lines.append("-- Foreign Key Constraints")
        for r in resolved:
            rel = r.relationship
            lines.append(
                f"ALTER TABLE {_q(r.source_table.name)} "
                f"ADD CONSTRAINT {_q(f'fk_{r.source_table.name}_{r.source_field.name}')} "
                f"FOREIGN KEY ({_q(r.source_field.name)}) "
                f"REFERENCES {_q(r.target_table.name)}({_q(r.target_field.name)}) "
                f"ON DELETE {rel.on_delete} ON UPDATE {rel.on_update};"
            )

    logger.info(
        f"Exported '{schema.name}' to MySQL: {len(schema.tables)} table(s), "
        f"{len(resolved)} foreign key(s)"
    )
    return "\n".join(lines) + "\n"
