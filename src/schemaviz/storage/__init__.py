"""Schema persistence."""

from .repository import InMemorySchemaRepository, JsonFileSchemaRepository, SchemaRepository

__all__ = ["SchemaRepository", "InMemorySchemaRepository", "JsonFileSchemaRepository"]
