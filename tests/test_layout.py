"""Tests for imported-table placement."""

import pytest

from schemaviz.config.settings import reset_settings
from schemaviz.importers.layout import TableLayout


def test_grid_positions():
    """Test row-major grid placement."""
    layout = TableLayout(strategy="grid", columns=2, spacing_x=300, spacing_y=250)
    positions = [layout.position_for(i) for i in range(3)]
    assert [(p.x, p.y) for p in positions] == [(100, 100), (400, 100), (100, 350)]


def test_random_positions_stay_on_canvas():
    """Test the random placement region."""
    layout = TableLayout(strategy="random")
    for i in range(200):
        position = layout.position_for(i)
        assert 100 <= position.x < 500
        assert 100 <= position.y < 400


def test_seeded_random_is_reproducible():
    """Test that a seed makes random placement repeatable."""
    first = TableLayout(strategy="random", seed=7)
    second = TableLayout(strategy="random", seed=7)
    assert [first.position_for(i) for i in range(5)] == [second.position_for(i) for i in range(5)]


def test_unknown_strategy():
    """Test that an unknown strategy is rejected."""
    with pytest.raises(ValueError):
        TableLayout(strategy="spiral")


def test_from_settings(monkeypatch):
    """Test layout configuration from the environment."""
    monkeypatch.setenv("SCHEMAVIZ_GRID_COLUMNS", "2")
    monkeypatch.setenv("SCHEMAVIZ_GRID_SPACING_Y", "280")
    reset_settings()
    layout = TableLayout.from_settings()
    assert layout.strategy == "grid"
    position = layout.position_for(2)
    assert (position.x, position.y) == (100, 380)
