"""Prisma schema exporter."""

from datetime import datetime
from typing import List, Optional
from schemaviz.exporters.common import resolvable_relationships, timestamp
from schemaviz.exporters.defaults import render_prisma_default
from schemaviz.ir.schema import Schema, TableField
from schemaviz.ir.types import ColumnType, TypeFamily, type_family
from schemaviz.typemap import prisma_type
from schemaviz.utils.naming import to_pascal_case
from schemaviz.config.logging import get_logger

logger = get_logger(__name__)


def _id_default(field: TableField) -> Optional[str]:
    """Id-generation default for a primary key, keyed off its type."""
    if field.type is ColumnType.UUID:
        return "uuid()"
    family = type_family(field.type)
    if family is TypeFamily.SERIAL:
        return "autoincrement()"
    if field.auto_increment and family is TypeFamily.INTEGER:
        return "autoincrement()"
    return None


def _attributes(field: TableField) -> str:
    attributes: List[str] = []
    if field.primary_key:
        attributes.append("@id")
        id_default = _id_default(field)
        if id_default:
            attributes.append(f"@default({id_default})")
    else:
        if field.unique:
            attributes.append("@unique")
        default = render_prisma_default(field)
        if default is not None:
            attributes.append(f"@default({default})")
    return "".join(f" {a}" for a in attributes)


def export_prisma(schema: Schema, generated_at: Optional[datetime] = None) -> str:
    """
    Render a schema as a Prisma schema file.

    Each table becomes a model; each resolvable relationship adds one
    optional relation field on its source model.

    Args:
        schema: Schema to render
        generated_at: Timestamp written to the header (defaults to now)

    Returns:
        Prisma schema text
    """
    resolved = resolvable_relationships(schema, "prisma")

    lines = [f"// Schema: {schema.name}"]
    if schema.description:
        lines.append(f"// {schema.description}")
    lines.extend(
        [
            f"// Generated on: {timestamp(generated_at)}",
            "",
            "generator client {",
            '  provider = "prisma-client-js"',
            "}",
            "",
            "datasource db {",
            '  provider = "postgresql"',
            '  url      = env("DATABASE_URL")',
            "}",
            "",
        ]
    )

    for table in schema.tables:
        lines.append(f"model {to_pascal_case(table.name)} {{")
        for field in table.fields:
            optional = "?" if field.nullable and not field.primary_key else ""
            lines.append(f"  {field.name} {prisma_type(field)}{optional}{_attributes(field)}")
        seen = set()
        for r in resolved:
            if r.source_table.id == table.id and r.target_table.id not in seen:
                seen.add(r.target_table.id)
                target = r.target_table.name
                lines.append(f"  {target.lower()} {to_pascal_case(target)}?")
        lines.append("}")
        lines.append("")

    logger.info(f"Exported '{schema.name}' to Prisma: {len(schema.tables)} model(s)")
    return "\n".join(lines)
