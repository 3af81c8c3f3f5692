"""JSON exporter: the inverse of the JSON importer."""

from schemaviz.ir.schema import Schema


def export_json(schema: Schema, indent: int = 2) -> str:
    """
    Serialize a schema to the JSON schema format.

    Keys use the camelCase wire names; optional attributes that are unset
    are omitted rather than written as null.
    """
    return schema.model_dump_json(by_alias=True, exclude_none=True, indent=indent)
