"""Fixed character-grid measurer."""

from __future__ import annotations

from pageflow.core.registry import MeasurerRegistry
from pageflow.measure.base import BaseMeasurer


class GridMeasurer(BaseMeasurer):
    """Every character is ``char_width`` em wide.

    Deterministic and font-independent, which makes it the default for
    headless reflow and for tests.
    """

    name = "grid"

    def __init__(self, width: float, char_width: float = 0.5, **kwargs) -> None:
        super().__init__(width, **kwargs)
        self.char_width = char_width

    def text_width(self, text: str, scale: float = 1.0) -> float:
        return len(text) * self.font_size * scale * self.char_width


MeasurerRegistry.register("grid", GridMeasurer)
