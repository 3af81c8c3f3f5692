"""JSON importer: validates and defaults the JSON schema format."""

import json
from typing import Any, Dict, Optional
from pydantic import ValidationError
from schemaviz.importers.layout import TableLayout
from schemaviz.ir.schema import Position, Relationship, Schema, Table, TableField, new_id, utcnow
from schemaviz.ir.types import ColumnType
from schemaviz.config.logging import get_logger

logger = get_logger(__name__)


class FormatError(ValueError):
    """Raised when imported text is structurally not a schema."""

    pass


def _fail(reason: str) -> FormatError:
    return FormatError(f"Failed to parse JSON schema: {reason}")


def _require_object(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise _fail(f"each {what} must be an object, got {type(value).__name__}")
    return value


def _optional_list(value: Any, what: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise _fail(f"'{what}' must be an array")
    return value


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _column_type(raw: Any, location: str) -> ColumnType:
    if raw is None or raw == "":
        return ColumnType.VARCHAR
    parsed = ColumnType.parse(str(raw))
    if parsed is None:
        logger.warning(f"{location}: unknown column type {raw!r}, using varchar")
        return ColumnType.VARCHAR
    return parsed


def _action(raw: Any) -> str:
    return str(raw).upper() if raw else "CASCADE"


def _field(raw: Any, table_name: str) -> TableField:
    raw = _require_object(raw, "field")
    return TableField(
        id=raw.get("id") or new_id(),
        name=raw.get("name"),
        type=_column_type(raw.get("type"), f"{table_name}.{raw.get('name')}"),
        nullable=raw.get("nullable") is not False,
        primary_key=bool(raw.get("primaryKey", False)),
        foreign_key=bool(raw.get("foreignKey", False)),
        unique=bool(raw.get("unique", False)),
        auto_increment=bool(raw.get("autoIncrement", False)),
        default_value=_optional_str(raw.get("defaultValue")),
        length=raw.get("length"),
        precision=raw.get("precision"),
        scale=raw.get("scale"),
        comment=raw.get("comment"),
        check_constraint=raw.get("checkConstraint"),
    )


def _table(raw: Any, index: int, layout: TableLayout) -> Table:
    raw = _require_object(raw, "table")
    name = raw.get("name")
    position = raw.get("position")
    return Table(
        id=raw.get("id") or new_id(),
        name=name,
        fields=[_field(f, str(name)) for f in _optional_list(raw.get("fields"), "fields")],
        position=Position.model_validate(position) if position else layout.position_for(index),
        color=raw.get("color"),
    )


def _relationship(raw: Any) -> Relationship:
    raw = _require_object(raw, "relationship")
    return Relationship(
        id=raw.get("id") or new_id(),
        # missing references become dangling ids, which exporters skip
        source_table_id=raw.get("sourceTableId") or "",
        source_field_id=raw.get("sourceFieldId") or "",
        target_table_id=raw.get("targetTableId") or "",
        target_field_id=raw.get("targetFieldId") or "",
        type=raw.get("type") or "one-to-many",
        name=raw.get("name"),
        on_delete=_action(raw.get("onDelete")),
        on_update=_action(raw.get("onUpdate")),
    )


def import_json(text: str, layout: Optional[TableLayout] = None) -> Schema:
    """
    Build a schema from the JSON schema format.

    Missing ids are generated, missing flags defaulted (``nullable`` to true,
    everything else to false), missing table positions placed by ``layout``.
    Supplied ``id`` and ``createdAt`` are kept; ``updatedAt`` is always now.

    Args:
        text: JSON document
        layout: Placement for tables without a position (defaults to settings)

    Returns:
        New Schema instance

    Raises:
        FormatError: If the text is not JSON, lacks a string ``name`` or an
            array ``tables``, or contains values of the wrong shape
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise _fail(str(e)) from e

    if not isinstance(data, dict):
        raise _fail("top-level value must be an object")
    if not isinstance(data.get("name"), str) or not data["name"]:
        raise _fail("missing string 'name'")
    if not isinstance(data.get("tables"), list):
        raise _fail("missing array 'tables'")

    layout = layout or TableLayout.from_settings()
    try:
        schema = Schema(
            id=data.get("id") or new_id(),
            name=data["name"],
            description=data.get("description"),
            tables=[_table(t, i, layout) for i, t in enumerate(data["tables"])],
            relationships=[_relationship(r) for r in _optional_list(data.get("relationships"), "relationships")],
            created_at=data.get("createdAt") or utcnow(),
            updated_at=utcnow(),
        )
    except ValidationError as e:
        raise _fail(str(e)) from e

    logger.info(
        f"Imported '{schema.name}' from JSON: {len(schema.tables)} table(s), "
        f"{len(schema.relationships)} relationship(s)"
    )
    return schema
