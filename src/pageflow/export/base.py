"""Base class for document exporters."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pageflow.core.document import Document


class BaseExporter(ABC):
    """Abstract base for exporters.

    Exporters serialize every page of a Document, in sequence order, into a
    single string.
    """

    name: str

    @abstractmethod
    def export(self, document: Document, **kwargs) -> str:
        """Serialize the document."""
        ...
