"""Measurer construction from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pageflow.core.registry import MeasurerRegistry
from pageflow.layout.dimensions import content_width
from pageflow.measure.base import BaseMeasurer
from pageflow.measure.grid import GridMeasurer  # noqa: F401
from pageflow.measure.pillow import PillowMeasurer  # noqa: F401

if TYPE_CHECKING:
    from pageflow.config import PageflowSettings


def measurer_from_settings(settings: PageflowSettings) -> BaseMeasurer:
    """Build the configured measurer for the page content area."""
    kwargs: dict = {
        "width": content_width(settings.page_width_mm, settings.margin_mm, settings.dpi),
        "font_size": settings.font_size,
        "line_height": settings.line_height,
        "image_height": settings.image_height,
    }
    if settings.measurer == "pillow":
        kwargs["font_path"] = settings.font_path
    return MeasurerRegistry.create(settings.measurer, **kwargs)
