"""Font-metric measurer backed by Pillow."""

from __future__ import annotations

from PIL import ImageFont

from pageflow.core.registry import MeasurerRegistry
from pageflow.measure.base import BaseMeasurer


class PillowMeasurer(BaseMeasurer):
    """Measures text advance widths with a real font.

    Uses ``font_path`` (any TrueType/OpenType file) when given, otherwise
    Pillow's bundled default font.
    """

    name = "pillow"

    def __init__(self, width: float, font_path: str | None = None, **kwargs) -> None:
        super().__init__(width, **kwargs)
        self.font_path = font_path
        self._fonts: dict[int, ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}

    def _font(self, scale: float):
        size = max(int(round(self.font_size * scale)), 1)
        if size not in self._fonts:
            if self.font_path:
                self._fonts[size] = ImageFont.truetype(self.font_path, size)
            else:
                self._fonts[size] = ImageFont.load_default(size=size)
        return self._fonts[size]

    def text_width(self, text: str, scale: float = 1.0) -> float:
        if not text:
            return 0.0
        return float(self._font(scale).getlength(text))


MeasurerRegistry.register("pillow", PillowMeasurer)
