"""Names of the supported export and import formats."""

from enum import Enum


class ExportFormat(str, Enum):
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    PRISMA = "prisma"
    JSON = "json"


class ImportFormat(str, Enum):
    JSON = "json"
    SQL = "sql"
    PRISMA = "prisma"
