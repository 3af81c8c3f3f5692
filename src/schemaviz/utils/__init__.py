"""Utility functions for common operations."""

from .naming import (
    capitalize_first,
    to_snake_case,
    to_camel_case,
    to_pascal_case,
    slugify_identifier,
    is_bare_identifier,
)

__all__ = [
    "capitalize_first",
    "to_snake_case",
    "to_camel_case",
    "to_pascal_case",
    "slugify_identifier",
    "is_bare_identifier",
]
