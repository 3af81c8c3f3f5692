"""Typer CLI application."""

from pathlib import Path
from typing import Optional

import typer

from schemaviz.config.settings import get_settings
from schemaviz.config.logging import setup_logging
from schemaviz.exporters import export_schema
from schemaviz.formats import ExportFormat, ImportFormat
from schemaviz.importers import FormatError, import_json, import_schema
from schemaviz.ir.schema import Schema
from schemaviz.ir.validators import validate_schema
from schemaviz.samples import SAMPLES
from schemaviz.storage import JsonFileSchemaRepository

app = typer.Typer(help="schemaviz: design database schemas and convert them between formats")


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def _read_schema(path: Path) -> Schema:
    """Read a schema document through the JSON importer."""
    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")
    return import_json(path.read_text(encoding="utf-8"))


def _emit(text: str, out: Optional[Path]) -> None:
    if out is None:
        typer.echo(text)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    typer.echo(f"✓ Written to {out}", err=True)


def _repository() -> JsonFileSchemaRepository:
    return JsonFileSchemaRepository(get_settings().storage_dir)


@app.command()
def export(
    fmt: ExportFormat,
    schema_json: Path,
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Output file (default: stdout)"),
):
    """
    Export a schema JSON document as PostgreSQL, MySQL, Prisma or JSON.

    Args:
        fmt: Target format
        schema_json: Path to the schema JSON document
        out: Optional output path
    """
    setup_logging()
    try:
        schema = _read_schema(schema_json)
    except (FormatError, FileNotFoundError, ValueError) as e:
        _fail(str(e))
    _emit(export_schema(schema, fmt), out)


@app.command("import")
def import_(
    fmt: ImportFormat,
    source: Path,
    name: Optional[str] = typer.Option(None, "--name", help="Override the schema name"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Output file (default: stdout)"),
):
    """
    Import SQL DDL, a Prisma schema or schema JSON and write schema JSON.

    Args:
        fmt: Source format
        source: Path to the source file
        name: Optional schema name
        out: Optional output path
    """
    setup_logging()
    try:
        text = source.read_text(encoding="utf-8")
        schema = import_schema(text, fmt)
    except FileNotFoundError:
        _fail(f"Source file not found: {source}")
    except (FormatError, ValueError) as e:
        _fail(str(e))

    if name:
        schema = schema.model_copy(update={"name": name})
    typer.echo(f"Imported {len(schema.tables)} table(s), {len(schema.relationships)} relationship(s)", err=True)
    _emit(export_schema(schema, ExportFormat.JSON), out)


@app.command()
def sample(
    name: str,
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Output file (default: stdout)"),
):
    """Write one of the bundled sample schemas as JSON (ecommerce, blog)."""
    setup_logging()
    factory = SAMPLES.get(name)
    if factory is None:
        _fail(f"Unknown sample '{name}'. Available: {', '.join(SAMPLES)}")
    _emit(export_schema(factory(), ExportFormat.JSON), out)


@app.command()
def validate(schema_json: Path):
    """
    Report invariant violations in a schema document.

    Exits with 1 if any error-level issue is found.
    """
    setup_logging()
    try:
        schema = _read_schema(schema_json)
    except (FormatError, FileNotFoundError, ValueError) as e:
        _fail(str(e))

    issues = validate_schema(schema)
    if not issues:
        typer.echo(f"✓ {schema.name}: no issues found")
        return

    for issue in issues:
        typer.echo(f"  [{issue.severity.upper()}] {issue.code}: {issue.message}")
    errors = [i for i in issues if i.severity == "error"]
    typer.echo(f"{len(issues)} issue(s), {len(errors)} error(s)")
    if errors:
        raise typer.Exit(1)


@app.command("list")
def list_():
    """List the schemas in the storage directory."""
    setup_logging()
    schemas = _repository().list()
    if not schemas:
        typer.echo("No saved schemas")
        return
    for schema in schemas:
        typer.echo(
            f"{schema.id}\t{schema.name}\t{len(schema.tables)} table(s)\t"
            f"updated {schema.updated_at.isoformat()}"
        )


@app.command()
def save(schema_json: Path):
    """Store a schema document in the storage directory."""
    setup_logging()
    try:
        schema = _read_schema(schema_json)
    except (FormatError, FileNotFoundError, ValueError) as e:
        _fail(str(e))
    stored = _repository().save(schema)
    typer.echo(f"✓ Saved {stored.name} ({stored.id})")


@app.command()
def delete(schema_id: str):
    """Remove a schema from the storage directory."""
    setup_logging()
    try:
        removed = _repository().delete(schema_id)
    except ValueError as e:
        _fail(str(e))
    if not removed:
        _fail(f"No saved schema with id {schema_id}")
    typer.echo(f"✓ Deleted {schema_id}")


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
