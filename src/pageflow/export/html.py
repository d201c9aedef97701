"""Paged HTML export."""

from __future__ import annotations

import html

from pageflow.core.document import Document, Page
from pageflow.core.registry import ExporterRegistry
from pageflow.export.base import BaseExporter


class HtmlExporter(BaseExporter):
    """Wraps each page's markup in a container sized like the physical page."""

    name = "html"

    def __init__(self, page_class: str = "page") -> None:
        self.page_class = page_class

    def export(self, document: Document, **kwargs) -> str:
        return "".join(self._page(page) for page in document.pages)

    def _page(self, page: Page) -> str:
        style = f"width:{page.size.width_mm:g}mm;height:{page.size.height_mm:g}mm"
        return (
            f'<div class="{html.escape(self.page_class)}" data-page="{page.page_number}" '
            f'style="{style}">{page.html}</div>'
        )


ExporterRegistry.register("html", HtmlExporter)
