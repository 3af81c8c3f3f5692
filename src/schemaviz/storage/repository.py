"""Keyed schema stores (list / get / save / delete)."""

from pathlib import Path
from typing import Dict, List, Optional, Protocol
from schemaviz.ir.schema import Schema, utcnow
from schemaviz.utils.schema_io import load_schema_from_json, save_schema_to_json
from schemaviz.config.logging import get_logger

logger = get_logger(__name__)


class SchemaRepository(Protocol):
    """Collection of schemas keyed by schema id."""

    def list(self) -> List[Schema]: ...

    def get(self, schema_id: str) -> Optional[Schema]: ...

    def save(self, schema: Schema) -> Schema: ...

    def delete(self, schema_id: str) -> bool: ...


def _stamped(schema: Schema, existing: bool) -> Schema:
    # Re-saving a known id counts as an edit
    if existing:
        return schema.model_copy(update={"updated_at": utcnow()})
    return schema


class InMemorySchemaRepository:
    """Process-local repository, mostly for tests and embedding."""

    def __init__(self):
        self._schemas: Dict[str, Schema] = {}

    def list(self) -> List[Schema]:
        return list(self._schemas.values())

    def get(self, schema_id: str) -> Optional[Schema]:
        return self._schemas.get(schema_id)

    def save(self, schema: Schema) -> Schema:
        stored = _stamped(schema, schema.id in self._schemas)
        self._schemas[stored.id] = stored
        return stored

    def delete(self, schema_id: str) -> bool:
        return self._schemas.pop(schema_id, None) is not None


class JsonFileSchemaRepository:
    """
    One ``<id>.json`` file per schema inside a directory.

    Files that cannot be read are logged and left out of ``list()`` so one
    corrupt entry does not hide the rest.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, schema_id: str) -> Path:
        if not schema_id or "/" in schema_id or "\\" in schema_id or schema_id.startswith("."):
            raise ValueError(f"Invalid schema id: {schema_id!r}")
        return self.directory / f"{schema_id}.json"

    def list(self) -> List[Schema]:
        if not self.directory.exists():
            return []
        schemas = []
        for path in sorted(self.directory.glob("*.json")):
            try:
                schemas.append(load_schema_from_json(path))
            except ValueError as e:
                logger.warning(f"Skipping unreadable schema file: {e}")
        return schemas

    def get(self, schema_id: str) -> Optional[Schema]:
        path = self._path(schema_id)
        if not path.exists():
            return None
        return load_schema_from_json(path)

    def save(self, schema: Schema) -> Schema:
        path = self._path(schema.id)
        stored = _stamped(schema, path.exists())
        save_schema_to_json(stored, path)
        logger.info(f"Saved schema '{stored.name}' to {path}")
        return stored

    def delete(self, schema_id: str) -> bool:
        path = self._path(schema_id)
        if not path.exists():
            return False
        path.unlink()
        logger.info(f"Deleted schema {schema_id}")
        return True
