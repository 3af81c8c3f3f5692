"""Helpers shared by the text exporters."""

from datetime import datetime
from typing import List, Optional
from schemaviz.ir.schema import ResolvedRelationship, Schema, utcnow
from schemaviz.config.logging import get_logger

logger = get_logger(__name__)

RULE = "-- " + "=" * 42


def timestamp(generated_at: Optional[datetime]) -> str:
    return (generated_at or utcnow()).isoformat()


def resolvable_relationships(schema: Schema, exporter: str) -> List[ResolvedRelationship]:
    """
    Collect the relationships an exporter can render.

    Dangling relationships are skipped, never raised.
    """
    resolved = list(schema.resolved_relationships())
    skipped = len(schema.relationships) - len(resolved)
    if skipped:
        logger.debug(f"{exporter}: skipped {skipped} dangling relationship(s) in '{schema.name}'")
    return resolved


def sql_banner(title: str) -> List[str]:
    """Three-line boxed comment used to separate DDL sections."""
    return [RULE, f"-- {title}", RULE]
