"""Identifier case conversion shared by exporters and importers."""

import re

_BARE_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def capitalize_first(name: str) -> str:
    """Upper-case the first character only: ``order_items`` -> ``Order_items``."""
    return name[:1].upper() + name[1:]


def to_snake_case(name: str) -> str:
    """
    Convert a PascalCase or camelCase name to snake_case.

    Examples:
        >>> to_snake_case("OrderItem")
        'order_item'
        >>> to_snake_case("userId")
        'user_id'
        >>> to_snake_case("already_snake")
        'already_snake'
    """
    text = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    text = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", text)
    text = re.sub(r"[^A-Za-z0-9]+", "_", text)
    return re.sub(r"_+", "_", text).strip("_").lower()


def to_camel_case(name: str) -> str:
    """
    Convert a snake_case name to camelCase.

    Examples:
        >>> to_camel_case("created_at")
        'createdAt'
    """
    parts = [p for p in re.split(r"[^A-Za-z0-9]+", name) if p]
    if not parts:
        return ""
    head, *rest = parts
    return head.lower() + "".join(p[:1].upper() + p[1:].lower() for p in rest)


def to_pascal_case(name: str) -> str:
    """
    Convert a snake_case (or spaced) name to PascalCase.

    Examples:
        >>> to_pascal_case("order_items")
        'OrderItems'
        >>> to_pascal_case("users")
        'Users'
    """
    parts = [p for p in re.split(r"[^A-Za-z0-9]+", name) if p]
    return "".join(p[:1].upper() + p[1:] for p in parts)


def slugify_identifier(name: str) -> str:
    """Lower-case and underscore a display name: ``"My Blog"`` -> ``my_blog``."""
    return re.sub(r"\s+", "_", name.strip().lower())


def is_bare_identifier(name: str) -> bool:
    """True if ``name`` can be rendered unquoted in every export format."""
    return bool(_BARE_IDENTIFIER.match(name))
