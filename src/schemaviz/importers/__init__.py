"""Importers: text -> Schema."""

from typing import Callable, Dict
from schemaviz.formats import ImportFormat
from schemaviz.ir.schema import Schema
from .json_import import FormatError, import_json
from .sql import import_sql
from .prisma import import_prisma
from .layout import TableLayout

# Registry of importers by format
IMPORTERS: Dict[ImportFormat, Callable[[str], Schema]] = {
    ImportFormat.JSON: import_json,
    ImportFormat.SQL: import_sql,
    ImportFormat.PRISMA: import_prisma,
}


def import_schema(text: str, fmt: ImportFormat | str) -> Schema:
    """
    Import a schema from text in the given format.

    Raises:
        FormatError: If a JSON document is not a valid schema
        ValueError: If the format name is unknown
    """
    return IMPORTERS[ImportFormat(fmt)](text)


__all__ = [
    "IMPORTERS",
    "import_schema",
    "import_json",
    "import_sql",
    "import_prisma",
    "FormatError",
    "TableLayout",
]
