"""Physical page size to layout-unit conversion."""

from __future__ import annotations

MM_PER_INCH = 25.4
CSS_DPI = 96.0


def mm_to_px(mm: float, dpi: float = CSS_DPI) -> float:
    """Convert millimetres to pixels at ``dpi``."""
    return mm * (dpi / MM_PER_INCH)


def max_content_height(page_height_mm: float, margin_mm: float, dpi: float = CSS_DPI) -> float:
    """Height left for content once the top and bottom margins are taken."""
    return mm_to_px(max(page_height_mm - 2 * margin_mm, 0.0), dpi)


def content_width(page_width_mm: float, margin_mm: float, dpi: float = CSS_DPI) -> float:
    """Width left for content once the left and right margins are taken."""
    return mm_to_px(max(page_width_mm - 2 * margin_mm, 0.0), dpi)
