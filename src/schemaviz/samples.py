"""Bundled sample schemas with fixed ids (saving one twice overwrites it)."""

from typing import Callable, Dict, List
from schemaviz.ir.schema import Position, Relationship, Schema, Table, TableField
from schemaviz.ir.types import ColumnType

SAMPLE_ECOMMERCE_ID = "sample-ecommerce-schema"
SAMPLE_BLOG_ID = "sample-blog-schema"


def _pk(field_id: str, name: str, type: ColumnType, **kwargs) -> TableField:
    return TableField(
        id=field_id, name=name, type=type, nullable=False, primary_key=True, unique=True, **kwargs
    )


def _col(field_id: str, name: str, type: ColumnType, nullable: bool = False, **kwargs) -> TableField:
    return TableField(id=field_id, name=name, type=type, nullable=nullable, **kwargs)


def _table(table_id: str, name: str, x: float, y: float, fields: List[TableField]) -> Table:
    return Table(id=table_id, name=name, position=Position(x=x, y=y), fields=fields)


def _many_to_one(rel_id: str, source: Table, source_field: str, target: Table, target_field: str) -> Relationship:
    return Relationship(
        id=rel_id,
        source_table_id=source.id,
        source_field_id=source.find_field_by_name(source_field).id,
        target_table_id=target.id,
        target_field_id=target.find_field_by_name(target_field).id,
        type="many-to-one",
    )


def create_sample_ecommerce_schema() -> Schema:
    """Users, countries, orders, order items, products and merchants."""
    V, T = ColumnType.VARCHAR, ColumnType.TIMESTAMP
    users = _table("users-table-id", "users", -210, 435, [
        _pk("users-id-field", "id", ColumnType.UUID),
        _col("users-name-field", "full_name", V, length=255),
        _col("users-email-field", "email", V, unique=True, length=255),
        _col("users-gender-field", "gender", V, nullable=True, length=10),
        _col("users-dob-field", "date_of_birth", ColumnType.DATE, nullable=True),
        _col("users-country-field", "country_code", V, nullable=True, length=2),
        _col("users-created-field", "created_at", T),
    ])
    countries = _table("countries-table-id", "countries", -30, 1170, [
        _pk("countries-code-field", "code", V, length=2),
        _col("countries-name-field", "name", V, length=100),
        _col("countries-continent-field", "continent_name", V, length=50),
        _col("countries-currency-field", "currency", V, nullable=True, length=10),
    ])
    orders = _table("orders-table-id", "orders", 375, 105, [
        _pk("orders-id-field", "id", ColumnType.INT),
        _col("orders-user-field", "user_id", ColumnType.UUID, foreign_key=True),
        _col("orders-status-field", "status", V, length=20),
        _col("orders-amount-field", "total_amount", ColumnType.DECIMAL, precision=10, scale=2),
        _col("orders-created-field", "created_at", T),
    ])
    order_items = _table("order-items-table-id", "order_items", 1230, 300, [
        _pk("order-items-id-field", "id", ColumnType.INT),
        _col("order-items-order-field", "order_id", ColumnType.INT, foreign_key=True),
        _col("order-items-product-field", "product_id", ColumnType.INT, foreign_key=True),
        _col("order-items-quantity-field", "quantity", ColumnType.INT),
        _col("order-items-price-field", "unit_price", ColumnType.DECIMAL, precision=8, scale=2),
    ])
    products = _table("products-table-id", "products", 525, 795, [
        _pk("products-id-field", "id", ColumnType.INT),
        _col("products-merchant-field", "merchant_id", ColumnType.INT, foreign_key=True),
        _col("products-name-field", "name", V, length=255),
        _col("products-desc-field", "description", ColumnType.TEXT, nullable=True),
        _col("products-price-field", "price", ColumnType.DECIMAL, precision=8, scale=2),
        _col("products-status-field", "status", V, length=20),
        _col("products-created-field", "created_at", T),
    ])
    merchants = _table("merchants-table-id", "merchants", 1350, 870, [
        _pk("merchants-id-field", "id", ColumnType.INT),
        _col("merchants-name-field", "name", V, length=255),
        _col("merchants-email-field", "email", V, unique=True, length=255),
        _col("merchants-country-field", "country_code", V, foreign_key=True, length=2),
        _col("merchants-created-field", "created_at", T),
    ])

    return Schema(
        id=SAMPLE_ECOMMERCE_ID,
        name="E-Commerce Platform",
        description=(
            "A comprehensive e-commerce database schema with users, products, "
            "orders, and merchant management"
        ),
        tables=[users, countries, orders, order_items, products, merchants],
        relationships=[
            _many_to_one("rel-orders-users", orders, "user_id", users, "id"),
            _many_to_one("rel-users-countries", users, "country_code", countries, "code"),
            _many_to_one("rel-order-items-orders", order_items, "order_id", orders, "id"),
            _many_to_one("rel-order-items-products", order_items, "product_id", products, "id"),
            _many_to_one("rel-products-merchants", products, "merchant_id", merchants, "id"),
            _many_to_one("rel-merchants-countries", merchants, "country_code", countries, "code"),
        ],
    )


def create_sample_blog_schema() -> Schema:
    """Users, posts, threaded comments and categories."""
    U, V, X, T = ColumnType.UUID, ColumnType.VARCHAR, ColumnType.TEXT, ColumnType.TIMESTAMP
    users = _table("blog-users-table-id", "users", -390, 360, [
        _pk("blog-users-id-field", "id", U),
        _col("blog-users-username-field", "username", V, unique=True, length=50),
        _col("blog-users-email-field", "email", V, unique=True, length=255),
        _col("blog-users-password-field", "password_hash", V, length=255),
        _col("blog-users-name-field", "full_name", V, nullable=True, length=255),
        _col("blog-users-bio-field", "bio", X, nullable=True),
        _col("blog-users-avatar-field", "avatar_url", V, nullable=True, length=255),
        _col("blog-users-created-field", "created_at", T),
    ])
    posts = _table("blog-posts-table-id", "posts", 585, -210, [
        _pk("blog-posts-id-field", "id", U),
        _col("blog-posts-author-field", "author_id", U, foreign_key=True),
        _col("blog-posts-title-field", "title", V, length=255),
        _col("blog-posts-slug-field", "slug", V, unique=True, length=255),
        _col("blog-posts-content-field", "content", X),
        _col("blog-posts-excerpt-field", "excerpt", X, nullable=True),
        _col("blog-posts-status-field", "status", V, length=20, default_value="draft"),
        _col("blog-posts-published-field", "published_at", T, nullable=True),
        _col("blog-posts-created-field", "created_at", T, default_value="CURRENT_TIMESTAMP"),
        _col("blog-posts-updated-field", "updated_at", T, default_value="CURRENT_TIMESTAMP"),
    ])
    comments = _table("blog-comments-table-id", "comments", -735, -810, [
        _pk("blog-comments-id-field", "id", U),
        _col("blog-comments-post-field", "post_id", U, foreign_key=True),
        _col("blog-comments-author-field", "author_id", U, foreign_key=True),
        _col("blog-comments-parent-field", "parent_id", U, nullable=True, foreign_key=True),
        _col("blog-comments-content-field", "content", X),
        _col("blog-comments-status-field", "status", V, length=20),
        _col("blog-comments-created-field", "created_at", T),
    ])
    categories = _table("blog-categories-table-id", "categories", 150, 750, [
        _pk("blog-categories-id-field", "id", U),
        _col("blog-categories-name-field", "name", V, unique=True, length=100),
        _col("blog-categories-slug-field", "slug", V, unique=True, length=100),
        _col("blog-categories-desc-field", "description", X, nullable=True),
        _col("blog-categories-created-field", "created_at", T),
    ])
    # Composite primary key: both columns are keys, neither is unique alone
    post_categories = _table("blog-post-categories-table-id", "post_categories", 705, 855, [
        _col("blog-pc-post-field", "post_id", U, primary_key=True, foreign_key=True),
        _col("blog-pc-category-field", "category_id", U, primary_key=True, foreign_key=True),
        _col("blog-pc-created-field", "created_at", T),
    ])

    return Schema(
        id=SAMPLE_BLOG_ID,
        name="Blog Platform",
        description="A complete blog platform schema with users, posts, comments, and categorization",
        tables=[users, posts, comments, categories, post_categories],
        relationships=[
            _many_to_one("rel-posts-users", posts, "author_id", users, "id"),
            _many_to_one("rel-comments-posts", comments, "post_id", posts, "id"),
            _many_to_one("rel-comments-users", comments, "author_id", users, "id"),
            _many_to_one("rel-comments-parent", comments, "parent_id", comments, "id"),
            _many_to_one("rel-post-categories-posts", post_categories, "post_id", posts, "id"),
            _many_to_one("rel-post-categories-categories", post_categories, "category_id", categories, "id"),
        ],
    )


SAMPLES: Dict[str, Callable[[], Schema]] = {
    "ecommerce": create_sample_ecommerce_schema,
    "blog": create_sample_blog_schema,
}
