"""Page sequence orchestration: the reflow pass."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pageflow.core.document import Document
from pageflow.core.nodes import ContentRoot
from pageflow.layout.factory import PageFactory
from pageflow.layout.overflow import OverflowDetector
from pageflow.layout.redistribute import Redistributor

logger = logging.getLogger(__name__)


@dataclass
class ReflowReport:
    """What a reflow pass changed."""

    pages_added: int = 0
    pages_removed: int = 0
    moved: int = 0
    splits: int = 0
    oversized_pages: list[int] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    pushes: list[tuple[ContentRoot, ContentRoot]] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.pages_added or self.pages_removed or self.moved or self.splits)

    def receiver_of(self, root: ContentRoot) -> ContentRoot | None:
        """The root that received content pushed from ``root``, if any."""
        for source, dest in self.pushes:
            if source is root:
                return dest
        return None


class PageSequence:
    """Runs overflow detection and redistribution across a document."""

    def __init__(
        self,
        factory: PageFactory,
        detector: OverflowDetector,
        redistributor: Redistributor,
        max_height: float,
    ) -> None:
        self.factory = factory
        self.detector = detector
        self.redistributor = redistributor
        self.max_height = max_height

    def reflow(self, document: Document, start_index: int = 0) -> ReflowReport:
        """Bring every page within the content height, front to back.

        Overflow from page ``i`` only ever moves to page ``i + 1``; a
        following page is created when needed. Empty pages other than the
        first are then dropped and all pages renumbered.
        """
        report = ReflowReport()
        idx = max(start_index, 0)
        while idx < len(document.pages):
            source = document.pages[idx].content
            if self.detector.is_overflowing(source, self.max_height):
                self._redistribute(document, idx, report)
            idx += 1

        self.prune(document, report)
        self.renumber(document)
        if report.changed:
            logger.info(
                "Reflow: %d pages (+%d/-%d), %d moved, %d split",
                document.num_pages, report.pages_added, report.pages_removed,
                report.moved, report.splits,
            )
        return report

    def _redistribute(self, document: Document, idx: int, report: ReflowReport) -> None:
        source = document.pages[idx].content
        dest_holder: list[ContentRoot] = []

        def next_root() -> ContentRoot:
            if idx + 1 >= len(document.pages):
                page = self.factory.create_page(idx + 2)
                document.pages.insert(idx + 1, page)
                report.pages_added += 1
            root = document.pages[idx + 1].content
            dest_holder.append(root)
            return root

        result = self.redistributor.redistribute(source, next_root, self.max_height)
        report.moved += result.moved
        report.splits += result.splits
        if result.changed and dest_holder:
            report.pushes.append((source, dest_holder[0]))
        if result.oversized:
            report.oversized_pages.append(idx + 1)
        if result.capped:
            report.warnings.append(
                f"Page {idx + 1} did not converge within {self.redistributor.max_cycles} cycles"
            )

    def prune(self, document: Document, report: ReflowReport | None = None) -> int:
        """Remove empty pages after the first; returns how many went."""
        keep = [document.pages[0]] + [page for page in document.pages[1:] if not page.is_empty]
        removed = len(document.pages) - len(keep)
        if removed:
            document.pages[:] = keep
            logger.debug("Pruned %d empty page(s)", removed)
        if report is not None:
            report.pages_removed += removed
        return removed

    def renumber(self, document: Document) -> None:
        for number, page in enumerate(document.pages, start=1):
            if page.page_number != number or page.content.page_number != number:
                page.renumber(number)
