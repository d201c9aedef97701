"""Plain-text export, one form feed between pages."""

from __future__ import annotations

from pageflow.core.document import Document
from pageflow.core.registry import ExporterRegistry
from pageflow.export.base import BaseExporter


class TextExporter(BaseExporter):
    name = "text"

    def __init__(self, separator: str = "\f") -> None:
        self.separator = separator

    def export(self, document: Document, **kwargs) -> str:
        return self.separator.join(page.text for page in document.pages)


ExporterRegistry.register("text", TextExporter)
