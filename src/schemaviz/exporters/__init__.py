"""Exporters: Schema -> text."""

from typing import Callable, Dict
from schemaviz.formats import ExportFormat
from schemaviz.ir.schema import Schema
from .postgres import export_postgresql
from .mysql import export_mysql
from .prisma import export_prisma
from .json_export import export_json

# Registry of exporters by format
EXPORTERS: Dict[ExportFormat, Callable[[Schema], str]] = {
    ExportFormat.POSTGRESQL: export_postgresql,
    ExportFormat.MYSQL: export_mysql,
    ExportFormat.PRISMA: export_prisma,
    ExportFormat.JSON: export_json,
}


def export_schema(schema: Schema, fmt: ExportFormat | str) -> str:
    """
    Export a schema in the given format.

    Raises:
        ValueError: If the format name is unknown
    """
    return EXPORTERS[ExportFormat(fmt)](schema)


__all__ = [
    "EXPORTERS",
    "export_schema",
    "export_postgresql",
    "export_mysql",
    "export_prisma",
    "export_json",
]
