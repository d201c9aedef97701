"""
Pageflow configuration.

Every setting can be overridden through a ``PAGEFLOW_`` prefixed environment
variable, e.g. ``PAGEFLOW_PAGE_HEIGHT_MM=279.4`` for US Letter.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pageflow.core.document import PageSize


class PageflowSettings(BaseSettings):
    """Page geometry, reflow limits and measurement options."""

    model_config = SettingsConfigDict(env_prefix="PAGEFLOW_")

    # === Page geometry (A4 by default) ===
    page_width_mm: float = Field(default=210.0, gt=0, description="Outer page width")
    page_height_mm: float = Field(default=297.0, gt=0, description="Outer page height")
    margin_mm: float = Field(default=20.0, ge=0, description="Uniform page margin")
    dpi: float = Field(default=96.0, gt=0, description="Reference resolution for mm -> px")

    # === Reflow ===
    overflow_tolerance: float = Field(
        default=1.0, ge=0, description="Slack in px absorbed before declaring overflow"
    )
    max_cycles: int = Field(
        default=2000, ge=1, description="Hard cap on redistribution cycles per page"
    )
    split_threshold: int = Field(
        default=20, ge=0, description="Text runs longer than this are split instead of moved"
    )
    reflow_delay: float = Field(
        default=0.01, ge=0, description="Seconds to wait after an edit before reflowing"
    )

    # === Measurement ===
    measurer: str = Field(default="grid", description="Registered measurer name")
    font_size: float = Field(default=16.0, gt=0, description="Base font size in px")
    line_height: float = Field(default=1.25, gt=0, description="Line height as a font-size multiple")
    font_path: str | None = Field(default=None, description="TrueType font for the pillow measurer")
    image_height: float = Field(
        default=150.0, gt=0, description="Height used for images without a height attribute"
    )

    log_level: str = Field(default="INFO", description="Logging level for the pageflow logger")

    @property
    def page_size(self) -> PageSize:
        return PageSize(width_mm=self.page_width_mm, height_mm=self.page_height_mm)


@lru_cache
def get_settings() -> PageflowSettings:
    """Return the process-wide settings, read once from the environment."""
    return PageflowSettings()
