"""Utilities for loading and saving a schema from/to JSON files."""

from pathlib import Path
from schemaviz.ir.schema import Schema


def load_schema_from_json(schema_path: Path) -> Schema:
    """
    Load a Schema from a JSON file, exactly as stored.

    Unlike the JSON importer this keeps ``updatedAt`` and applies no
    defaults beyond the model's own.

    Args:
        schema_path: Path to the JSON file

    Returns:
        Loaded Schema instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or not a valid schema
    """
    schema_path = Path(schema_path)
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")

    file_content = schema_path.read_text(encoding="utf-8").strip()
    if not file_content:
        raise ValueError(f"Schema file is empty: {schema_path}")

    try:
        return Schema.model_validate_json(file_content)
    except Exception as e:
        raise ValueError(f"Failed to load schema from {schema_path}: {e}") from e


def save_schema_to_json(schema: Schema, schema_path: Path) -> None:
    """
    Save a Schema to a JSON file.

    Note:
        Creates parent directories if they don't exist.
    """
    schema_path = Path(schema_path)
    schema_path.parent.mkdir(parents=True, exist_ok=True)
    schema_path.write_text(
        schema.model_dump_json(by_alias=True, exclude_none=True, indent=2),
        encoding="utf-8",
    )
