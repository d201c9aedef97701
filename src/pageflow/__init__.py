"""Paginated rich-text reflow with pluggable measurement and export."""

from pageflow.core.document import Document, Page, PageSize
from pageflow.core.registry import ExporterRegistry, MeasurerRegistry
from pageflow.editor.session import Editor, create_document

__all__ = [
    "Document",
    "Page",
    "PageSize",
    "MeasurerRegistry",
    "ExporterRegistry",
    "Editor",
    "create_document",
]
