"""Tests for identifier case conversion."""

from schemaviz.utils.naming import (
    capitalize_first,
    is_bare_identifier,
    slugify_identifier,
    to_camel_case,
    to_pascal_case,
    to_snake_case,
)


def test_to_snake_case():
    """Test PascalCase and camelCase to snake_case."""
    assert to_snake_case("OrderItem") == "order_item"
    assert to_snake_case("userId") == "user_id"
    assert to_snake_case("HTTPRequest") == "http_request"
    assert to_snake_case("already_snake") == "already_snake"


def test_to_pascal_case():
    """Test snake_case to PascalCase."""
    assert to_pascal_case("order_items") == "OrderItems"
    assert to_pascal_case("users") == "Users"
    assert to_pascal_case("order items") == "OrderItems"


def test_to_camel_case():
    """Test snake_case to camelCase."""
    assert to_camel_case("created_at") == "createdAt"
    assert to_camel_case("id") == "id"
    assert to_camel_case("") == ""


def test_capitalize_first():
    """Test first-letter capitalization."""
    assert capitalize_first("order_items") == "Order_items"
    assert capitalize_first("") == ""


def test_slugify_identifier():
    """Test display name to database name."""
    assert slugify_identifier("My Blog") == "my_blog"
    assert slugify_identifier("  E-Commerce   Platform ") == "e-commerce_platform"


def test_is_bare_identifier():
    """Test bare identifier detection."""
    assert is_bare_identifier("order_items")
    assert is_bare_identifier("_tmp1")
    assert not is_bare_identifier("order items")
    assert not is_bare_identifier("1st")
    assert not is_bare_identifier("")
