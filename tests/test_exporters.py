"""Tests for the PostgreSQL, MySQL, Prisma and JSON exporters."""

import json

import pytest

from schemaviz.exporters import (
    EXPORTERS,
    export_json,
    export_mysql,
    export_postgresql,
    export_prisma,
    export_schema,
)
from schemaviz.formats import ExportFormat
from schemaviz.importers import import_json
from schemaviz.ir.schema import Relationship, Schema, Table, TableField
from schemaviz.ir.types import ColumnType


def _line(text, prefix):
    return next(line for line in text.splitlines() if line.strip().startswith(prefix))


@pytest.fixture
def loose_pk_schema():
    """A primary key stored as nullable and non-unique."""
    return Schema(
        name="Loose",
        tables=[
            Table(
                name="things",
                fields=[
                    TableField(name="id", type=ColumnType.INTEGER, primary_key=True, nullable=True),
                    TableField(name="label", type=ColumnType.TEXT),
                ],
            )
        ],
    )


@pytest.fixture
def dangling_schema(blog_users_schema):
    return blog_users_schema.model_copy(
        update={
            "relationships": [
                Relationship(
                    source_table_id="missing",
                    source_field_id="missing",
                    target_table_id=blog_users_schema.tables[0].id,
                    target_field_id=blog_users_schema.tables[0].fields[0].id,
                )
            ]
        }
    )


def test_postgres_blog_users(blog_users_schema):
    """Test the minimal Blog schema in PostgreSQL."""
    ddl = export_postgresql(blog_users_schema)
    assert "CREATE TABLE users (" in ddl
    email = _line(ddl, "email ")
    assert "VARCHAR(255)" in email
    assert "NOT NULL" in email
    assert "UNIQUE" in email
    assert "CONSTRAINT pk_users PRIMARY KEY (id)" in ddl
    assert 'CREATE EXTENSION IF NOT EXISTS "uuid-ossp";' in ddl


def test_postgres_primary_key_is_not_null(loose_pk_schema):
    """Test that a nullable primary key is still emitted NOT NULL."""
    ddl = export_postgresql(loose_pk_schema)
    id_line = _line(ddl, "id ")
    assert "NOT NULL" in id_line
    assert "UNIQUE" not in id_line
    assert "NOT NULL" not in _line(ddl, "label ")


def test_mysql_primary_key_is_not_null(loose_pk_schema):
    """Test the same defensive rule in MySQL."""
    ddl = export_mysql(loose_pk_schema)
    assert "  `id` INT NOT NULL" in ddl
    assert "  PRIMARY KEY (`id`)" in ddl
    assert "uk_things_id" not in ddl


def test_postgres_relationships_and_indexes(ecommerce_schema):
    """Test foreign keys and de-duplicated indexes."""
    ddl = export_postgresql(ecommerce_schema)
    assert (
        "ALTER TABLE orders ADD CONSTRAINT fk_orders_user_id FOREIGN KEY (user_id) "
        "REFERENCES users(id) ON DELETE CASCADE ON UPDATE CASCADE;"
    ) in ddl
    assert "CREATE INDEX IF NOT EXISTS idx_orders_user_id ON orders(user_id);" in ddl
    assert ddl.count("idx_orders_created_at ON") == 1
    assert "  total_amount DECIMAL(10,2) NOT NULL" in ddl
    assert "COMMENT ON COLUMN orders.user_id IS 'Foreign key reference';" in ddl


def test_postgres_options(ecommerce_schema, generated_at):
    """Test the generation timestamp and optional sections."""
    first = export_postgresql(ecommerce_schema, generated_at=generated_at)
    second = export_postgresql(ecommerce_schema, generated_at=generated_at)
    assert first == second
    assert "-- Generated on: 2024-01-01T00:00:00+00:00" in first
    assert "-- INSERT INTO" in first

    bare = export_postgresql(ecommerce_schema, include_comments=False, include_templates=False)
    assert "COMMENT ON" not in bare
    assert "INSERT INTO" not in bare


def test_postgres_defaults_and_checks():
    """Test DEFAULT, CHECK and identity rendering."""
    schema = Schema(
        name="Shop",
        tables=[
            Table(
                name="products",
                fields=[
                    TableField(
                        name="id",
                        type=ColumnType.INTEGER,
                        primary_key=True,
                        auto_increment=True,
                    ),
                    TableField(name="price", type=ColumnType.NUMERIC, default_value="0", check_constraint="price >= 0"),
                    TableField(name="status", type=ColumnType.VARCHAR, length=20, default_value="draft"),
                    TableField(name="live", type=ColumnType.BOOLEAN, default_value="False"),
                    TableField(name="added", type=ColumnType.TIMESTAMP, default_value="now()"),
                ],
            )
        ],
    )
    ddl = export_postgresql(schema)
    assert "  id INTEGER NOT NULL GENERATED BY DEFAULT AS IDENTITY" in ddl
    assert "  price NUMERIC DEFAULT 0 CHECK (price >= 0)" in ddl
    assert "  status VARCHAR(20) DEFAULT 'draft'" in ddl
    assert "  live BOOLEAN DEFAULT false" in ddl
    assert "  added TIMESTAMP DEFAULT CURRENT_TIMESTAMP" in ddl


def test_mysql_layout(ecommerce_schema):
    """Test database creation, keys, options and foreign keys in MySQL."""
    ddl = export_mysql(ecommerce_schema)
    assert "CREATE DATABASE IF NOT EXISTS `e-commerce_platform`;" in ddl
    assert "USE `e-commerce_platform`;" in ddl
    assert "CREATE TABLE `users` (" in ddl
    assert "  UNIQUE KEY `uk_users_email` (`email`)" in ddl
    assert ") ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci;" in ddl
    assert "  `id` CHAR(36) NOT NULL" in ddl
    assert (
        "ALTER TABLE `orders` ADD CONSTRAINT `fk_orders_user_id` FOREIGN KEY (`user_id`) "
        "REFERENCES `users`(`id`) ON DELETE CASCADE ON UPDATE CASCADE;"
    ) in ddl


def test_mysql_auto_increment_and_comment():
    """Test AUTO_INCREMENT for serial types and inline comments."""
    schema = Schema(
        name="Log",
        tables=[
            Table(
                name="events",
                fields=[
                    TableField(name="id", type=ColumnType.BIGSERIAL, primary_key=True),
                    TableField(name="note", type=ColumnType.TEXT, comment="free 'text'"),
                ],
            )
        ],
    )
    ddl = export_mysql(schema)
    assert "  `id` BIGINT NOT NULL AUTO_INCREMENT" in ddl
    assert "  `note` TEXT COMMENT 'free ''text'''" in ddl


def test_prisma_blog_users(blog_users_schema):
    """Test Prisma model output."""
    text = export_prisma(blog_users_schema)
    assert "generator client {" in text
    assert "datasource db {" in text
    assert "model Users {" in text
    assert "  id String @id @default(uuid())" in text
    assert "  email String @unique" in text


def test_prisma_relations_and_optionals(ecommerce_schema):
    """Test nullable suffixes, model names and relation lines."""
    text = export_prisma(ecommerce_schema)
    assert "model OrderItems {" in text
    assert "  gender String?" in text
    assert "  id Int @id" in text
    assert "  users Users?" in text
    assert "  orders Orders?" in text


def test_prisma_defaults():
    """Test @default rendering for each default kind."""
    schema = Schema(
        name="Defaults",
        tables=[
            Table(
                name="posts",
                fields=[
                    TableField(name="id", type=ColumnType.SERIAL, primary_key=True),
                    TableField(name="status", type=ColumnType.VARCHAR, nullable=False, default_value="draft"),
                    TableField(name="pinned", type=ColumnType.BOOLEAN, nullable=False, default_value="TRUE"),
                    TableField(name="views", type=ColumnType.INT, nullable=False, default_value="0"),
                    TableField(name="created_at", type=ColumnType.TIMESTAMP, nullable=False, default_value="now()"),
                ],
            )
        ],
    )
    text = export_prisma(schema)
    assert "  id Int @id @default(autoincrement())" in text
    assert '  status String @default("draft")' in text
    assert "  pinned Boolean @default(true)" in text
    assert "  views Int @default(0)" in text
    assert "  created_at DateTime @default(now())" in text


def test_prisma_relation_lines_once_per_target():
    """Test that two relationships to the same model emit one relation line."""
    users = Table(name="users", fields=[TableField(name="id", type=ColumnType.INT, primary_key=True)])
    posts = Table(
        name="posts",
        fields=[
            TableField(name="id", type=ColumnType.INT, primary_key=True),
            TableField(name="author_id", type=ColumnType.INT),
            TableField(name="editor_id", type=ColumnType.INT),
        ],
    )
    relationships = [
        Relationship(
            source_table_id=posts.id,
            source_field_id=posts.fields[i].id,
            target_table_id=users.id,
            target_field_id=users.fields[0].id,
        )
        for i in (1, 2)
    ]
    schema = Schema(name="Blog", tables=[users, posts], relationships=relationships)
    text = export_prisma(schema)
    assert text.count("  users Users?") == 1


def test_dangling_relationships_are_skipped(dangling_schema):
    """Test that every exporter tolerates a relationship that does not resolve."""
    assert "FOREIGN KEY" not in export_postgresql(dangling_schema)
    assert "FOREIGN KEY" not in export_mysql(dangling_schema)
    assert "Users?" not in export_prisma(dangling_schema)
    data = json.loads(export_json(dangling_schema))
    assert len(data["relationships"]) == 1


def test_json_wire_names(blog_users_schema):
    """Test camelCase keys and omitted optionals."""
    text = export_json(blog_users_schema)
    data = json.loads(text)
    assert data["name"] == "Blog"
    field = data["tables"][0]["fields"][0]
    assert field["primaryKey"] is True
    assert "autoIncrement" in field
    assert "description" not in data
    assert "defaultValue" not in field
    assert "createdAt" in data and "updatedAt" in data


def test_json_round_trip(ecommerce_schema, blog_schema):
    """Test that JSON export then import preserves everything but updatedAt."""
    for schema in (ecommerce_schema, blog_schema):
        restored = import_json(export_json(schema))
        assert restored.model_dump(exclude={"updated_at"}) == schema.model_dump(exclude={"updated_at"})


def test_registry(blog_users_schema):
    """Test the exporter registry and dispatch by name."""
    assert set(EXPORTERS) == set(ExportFormat)
    assert "CREATE TABLE `users`" in export_schema(blog_users_schema, "mysql")
    assert export_schema(blog_users_schema, ExportFormat.JSON) == export_json(blog_users_schema)
    with pytest.raises(ValueError):
        export_schema(blog_users_schema, "oracle")
