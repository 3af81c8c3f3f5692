"""Validators for the schema model."""

from dataclasses import dataclass, field
from typing import List, Literal
from .schema import Schema
from schemaviz.utils.naming import is_bare_identifier
from schemaviz.config.logging import get_logger

logger = get_logger(__name__)


@dataclass
class QaIssue:
    """Issue found while checking a schema."""

    severity: Literal["error", "warning"]
    code: str  # e.g., "DANGLING_RELATIONSHIP", "PK_NULLABLE"
    location: str  # e.g., "table_name" or "table_name.field_name"
    message: str
    details: dict = field(default_factory=dict)


def _check_tables(schema: Schema) -> List[QaIssue]:
    issues: List[QaIssue] = []
    seen_ids = set()
    seen_names = set()

    for table in schema.tables:
        if table.id in seen_ids:
            issues.append(
                QaIssue(
                    severity="error",
                    code="DUPLICATE_TABLE_ID",
                    location=table.name,
                    message=f"{table.name}: table id '{table.id}' is used more than once",
                    details={"table_id": table.id},
                )
            )
        seen_ids.add(table.id)

        if table.name in seen_names:
            issues.append(
                QaIssue(
                    severity="error",
                    code="DUPLICATE_TABLE_NAME",
                    location=table.name,
                    message=f"{table.name}: more than one table has this name",
                )
            )
        seen_names.add(table.name)

        if not is_bare_identifier(table.name):
            issues.append(
                QaIssue(
                    severity="warning",
                    code="INVALID_IDENTIFIER",
                    location=table.name,
                    message=f"{table.name!r} is not a bare identifier; exported DDL may not parse",
                )
            )

        if not table.fields:
            issues.append(
                QaIssue(
                    severity="warning",
                    code="EMPTY_TABLE",
                    location=table.name,
                    message=f"{table.name}: table has no fields",
                )
            )

        issues.extend(_check_fields(table))

    return issues


def _check_fields(table) -> List[QaIssue]:
    issues: List[QaIssue] = []
    field_ids = set()
    field_names = set()
    composite_key = len(table.primary_key_fields) > 1

    for f in table.fields:
        location = f"{table.name}.{f.name}"
        if f.id in field_ids:
            issues.append(
                QaIssue(
                    severity="error",
                    code="DUPLICATE_FIELD_ID",
                    location=location,
                    message=f"{location}: field id '{f.id}' is used more than once in the table",
                    details={"field_id": f.id},
                )
            )
        field_ids.add(f.id)

        if f.name in field_names:
            issues.append(
                QaIssue(
                    severity="error",
                    code="DUPLICATE_FIELD_NAME",
                    location=location,
                    message=f"{location}: more than one field has this name",
                )
            )
        field_names.add(f.name)

        if not is_bare_identifier(f.name):
            issues.append(
                QaIssue(
                    severity="warning",
                    code="INVALID_IDENTIFIER",
                    location=location,
                    message=f"{f.name!r} is not a bare identifier; exported DDL may not parse",
                )
            )

        if f.primary_key and f.nullable:
            issues.append(
                QaIssue(
                    severity="warning",
                    code="PK_NULLABLE",
                    location=location,
                    message=f"{location}: primary key is stored as nullable (exported as NOT NULL)",
                )
            )
        # Members of a composite key are not unique on their own
        if f.primary_key and not f.unique and not composite_key:
            issues.append(
                QaIssue(
                    severity="warning",
                    code="PK_NOT_UNIQUE",
                    location=location,
                    message=f"{location}: primary key is stored as non-unique (treated as unique)",
                )
            )

    return issues


def _check_relationships(schema: Schema) -> List[QaIssue]:
    issues: List[QaIssue] = []
    for rel in schema.relationships:
        if schema.resolve(rel) is None:
            issues.append(
                QaIssue(
                    severity="warning",
                    code="DANGLING_RELATIONSHIP",
                    location=rel.name or rel.id,
                    message=(
                        f"relationship {rel.id}: source or target does not resolve; "
                        f"it will be skipped on export"
                    ),
                    details={
                        "source_table_id": rel.source_table_id,
                        "source_field_id": rel.source_field_id,
                        "target_table_id": rel.target_table_id,
                        "target_field_id": rel.target_field_id,
                    },
                )
            )
    return issues


def validate_schema(schema: Schema) -> List[QaIssue]:
    """
    Check a schema for invariant violations.

    Nothing here raises: exporters tolerate every issue reported, so the
    result is advisory.

    Args:
        schema: Schema to check

    Returns:
        List of QaIssue objects (empty if the schema is clean)
    """
    issues = _check_tables(schema) + _check_relationships(schema)
    if issues:
        logger.debug(f"Schema '{schema.name}': {len(issues)} issue(s) found")
    return issues
