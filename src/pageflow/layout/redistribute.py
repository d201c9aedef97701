"""Moving overflowing content from one page to the next."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from pageflow.core.nodes import ContentNode, ContentRoot, Element, LineBreak, TextNode, make_placeholder
from pageflow.layout.overflow import OverflowDetector
from pageflow.layout.splitter import TextSplitter

logger = logging.getLogger(__name__)

DEFAULT_MAX_CYCLES = 2000
DEFAULT_SPLIT_THRESHOLD = 20


@dataclass
class RedistributionResult:
    """Outcome of redistributing one overflowing page."""

    moved: int = 0
    splits: int = 0
    capped: bool = False
    oversized: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.moved or self.splits)


class _LazyDest:
    """Resolves the destination root on first use."""

    def __init__(self, factory: Callable[[], ContentRoot]) -> None:
        self._factory = factory
        self._root: ContentRoot | None = None

    def __call__(self) -> ContentRoot:
        if self._root is None:
            self._root = self._factory()
            if self._root.is_blank:
                self._root.clear()
        return self._root


class Redistributor:
    """Pushes the tail of an overflowing root onto the head of the next one."""

    def __init__(
        self,
        detector: OverflowDetector,
        splitter: TextSplitter | None = None,
        max_cycles: int = DEFAULT_MAX_CYCLES,
        split_threshold: int = DEFAULT_SPLIT_THRESHOLD,
    ) -> None:
        self.detector = detector
        self.splitter = splitter or TextSplitter(detector)
        self.max_cycles = max_cycles
        self.split_threshold = split_threshold

    def redistribute(
        self,
        source: ContentRoot,
        dest: ContentRoot | Callable[[], ContentRoot],
        max_height: float,
    ) -> RedistributionResult:
        """Move trailing nodes from ``source`` to ``dest`` until ``source`` fits.

        ``dest`` may be a factory; it is only called once something actually
        has to move, so a page that cannot give anything away never causes a
        new page to be created.
        """
        target = _LazyDest(dest if callable(dest) else (lambda: dest))
        result = RedistributionResult()
        cycles = 0

        while self.detector.is_overflowing(source, max_height) and source.children:
            if cycles >= self.max_cycles:
                result.capped = True
                logger.warning(
                    "Page %d still overflowing after %d cycles; giving up on this pass",
                    source.page_number, cycles,
                )
                break
            cycles += 1

            last = source.last_child
            only = len(source.children) == 1

            if isinstance(last, LineBreak):
                if only:
                    break
                self._move(last, target(), result)
            elif isinstance(last, TextNode):
                if (only or len(last.text) > self.split_threshold) and self._split(
                    last, source, target, max_height, result
                ):
                    continue
                if only:
                    self._oversized(source, last, result)
                    break
                self._move(last, target(), result)
            elif isinstance(last, Element):
                if not only:
                    self._move(last, target(), result)
                    continue
                if not last.is_atomic and self._split(last, source, target, max_height, result):
                    continue
                self._oversized(source, last, result)
                break

        if not source.children:
            source.append(make_placeholder())
        return result

    def _split(
        self,
        node: ContentNode,
        source: ContentRoot,
        target: _LazyDest,
        max_height: float,
        result: RedistributionResult,
    ) -> bool:
        if self.splitter.split(node, source, target, max_height):
            result.splits += 1
            return True
        return False

    def _move(self, node: ContentNode, dest: ContentRoot, result: RedistributionResult) -> None:
        dest.prepend(node)
        result.moved += 1
        logger.debug("Moved %r to page %d", node, dest.page_number)

    def _oversized(self, source: ContentRoot, node: ContentNode, result: RedistributionResult) -> None:
        result.oversized = True
        logger.info(
            "Page %d holds %r which alone exceeds the page height; leaving it in place",
            source.page_number, node,
        )
