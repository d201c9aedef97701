"""Overflow detection."""

from __future__ import annotations

from pageflow.core.nodes import Container
from pageflow.measure.base import BaseMeasurer

DEFAULT_TOLERANCE = 1.0


class OverflowDetector:
    """Compares a surface's measured height with the page capacity."""

    def __init__(self, measurer: BaseMeasurer, tolerance: float = DEFAULT_TOLERANCE) -> None:
        self.measurer = measurer
        self.tolerance = tolerance

    def height(self, root: Container) -> float:
        return self.measurer.content_height(root)

    def is_overflowing(self, root: Container, max_height: float) -> bool:
        # Strictly greater: content that lands exactly on the limit still fits
        return self.height(root) > max_height + self.tolerance
