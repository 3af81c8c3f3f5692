"""Shared fixtures."""

import logging
from datetime import datetime, timezone

import pytest

from schemaviz.config.settings import reset_settings
from schemaviz.importers.layout import TableLayout
from schemaviz.ir.schema import Schema, Table, TableField
from schemaviz.ir.types import ColumnType
from schemaviz.samples import create_sample_blog_schema, create_sample_ecommerce_schema

GENERATED_AT = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Deterministic layout and a throwaway storage directory for every test."""
    monkeypatch.setenv("SCHEMAVIZ_IMPORT_LAYOUT", "grid")
    monkeypatch.setenv("SCHEMAVIZ_STORAGE_DIR", str(tmp_path / "store"))
    monkeypatch.setenv("SCHEMAVIZ_LOG_LEVEL", "WARNING")
    reset_settings()
    yield
    reset_settings()
    # CLI runs attach handlers to streams that are closed afterwards
    logging.getLogger("schemaviz").handlers.clear()


@pytest.fixture
def grid_layout():
    return TableLayout(strategy="grid")


@pytest.fixture
def generated_at():
    return GENERATED_AT


@pytest.fixture
def blog_users_schema():
    """The minimal Blog schema: one users table with a uuid key and an email."""
    return Schema(
        name="Blog",
        tables=[
            Table(
                name="users",
                fields=[
                    TableField(
                        name="id",
                        type=ColumnType.UUID,
                        primary_key=True,
                        nullable=False,
                        unique=True,
                    ),
                    TableField(
                        name="email",
                        type=ColumnType.VARCHAR,
                        length=255,
                        unique=True,
                        nullable=False,
                    ),
                ],
            )
        ],
    )


@pytest.fixture
def ecommerce_schema():
    return create_sample_ecommerce_schema()


@pytest.fixture
def blog_schema():
    return create_sample_blog_schema()
