"""Canvas placement for imported tables that carry no position."""

import random
from typing import Optional
from schemaviz.config.settings import Settings, get_settings
from schemaviz.ir.schema import Position

# Region random placement draws from: x in [100, 500), y in [100, 400)
CANVAS_ORIGIN = (100.0, 100.0)
CANVAS_SPAN = (400.0, 300.0)


class TableLayout:
    """
    Assigns positions to tables by their index in the imported document.

    ``random`` scatters tables over a fixed canvas region; ``grid`` lays them
    out row by row, which makes the result reproducible.
    """

    def __init__(
        self,
        strategy: str = "random",
        seed: Optional[int] = None,
        columns: int = 4,
        spacing_x: float = 320.0,
        spacing_y: float = 280.0,
    ):
        if strategy not in ("random", "grid"):
            raise ValueError(f"Unknown layout strategy: {strategy}")
        self.strategy = strategy
        self.columns = max(1, columns)
        self.spacing_x = spacing_x
        self.spacing_y = spacing_y
        self._rng = random.Random(seed)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "TableLayout":
        settings = settings or get_settings()
        return cls(
            strategy=settings.import_layout,
            seed=settings.layout_seed,
            columns=settings.grid_columns,
            spacing_x=settings.grid_spacing_x,
            spacing_y=settings.grid_spacing_y,
        )

    def position_for(self, index: int) -> Position:
        if self.strategy == "grid":
            row, col = divmod(index, self.columns)
            return Position(
                x=CANVAS_ORIGIN[0] + col * self.spacing_x,
                y=CANVAS_ORIGIN[1] + row * self.spacing_y,
            )
        return Position(
            x=CANVAS_ORIGIN[0] + self._rng.random() * CANVAS_SPAN[0],
            y=CANVAS_ORIGIN[1] + self._rng.random() * CANVAS_SPAN[1],
        )
