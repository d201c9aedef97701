"""Page construction."""

from __future__ import annotations

import logging

from pageflow.core.document import Page, PageSize
from pageflow.core.nodes import ContentRoot, make_placeholder

logger = logging.getLogger(__name__)


class PageFactory:
    """Builds empty pages of one fixed size."""

    def __init__(self, size: PageSize | None = None) -> None:
        self.size = size or PageSize()

    def create_page(self, sequence_hint: int, placeholder: bool = False) -> Page:
        """Return a page numbered ``sequence_hint``; the caller inserts it."""
        root = ContentRoot(page_number=sequence_hint)
        if placeholder:
            root.append(make_placeholder())
        logger.debug("Created page %d (%sx%s mm)", sequence_hint, self.size.width_mm, self.size.height_mm)
        return Page(page_number=sequence_hint, size=self.size, content=root)
