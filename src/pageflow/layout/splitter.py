"""Word-boundary text splitting across pages."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from pageflow.core.nodes import (
    Container,
    ContentNode,
    ContentRoot,
    Element,
    TextNode,
    ancestors_until,
    is_block,
)
from pageflow.layout.overflow import OverflowDetector

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"\S+")

DestRoot = ContentRoot | Callable[[], ContentRoot]


@dataclass(frozen=True)
class SplitPoint:
    """Split before character ``offset`` of ``text_node``."""

    text_node: TextNode
    offset: int


@dataclass
class _Applied:
    """Everything needed to undo one applied split."""

    top: ContentNode
    text_node: TextNode
    original_text: str
    moved: list[tuple[ContentNode, Container]] = field(default_factory=list)


def split_points(node: ContentNode) -> list[SplitPoint]:
    """Word-boundary split points inside ``node``, in document order.

    A point never falls inside a word and never leaves ``node`` with an
    empty (or whitespace-only) prefix.
    """
    points: list[SplitPoint] = []
    has_content = False
    prev_char = ""

    def visit(current: ContentNode) -> None:
        nonlocal has_content, prev_char
        if isinstance(current, TextNode):
            text = current.text
            if not text:
                return
            if has_content and (prev_char.isspace() or text[0].isspace()):
                points.append(SplitPoint(current, 0))
            for match in _WORD_RE.finditer(text):
                start = match.start()
                if start == 0:
                    continue
                if has_content or text[:start].strip():
                    points.append(SplitPoint(current, start))
            has_content = has_content or bool(text.strip())
            prev_char = text[-1]
        elif isinstance(current, Element) and not current.is_atomic:
            # Block edges separate words like whitespace does
            block = is_block(current) and current is not node
            if block:
                prev_char = "\n"
            for child in current.children:
                visit(child)
            if block:
                prev_char = "\n"
        else:
            has_content = True
            prev_char = "\n"

    visit(node)
    return points


class TextSplitter:
    """Moves the minimal trailing portion of a node's text to the next page.

    Binary search over word-boundary split points finds the longest prefix
    that keeps the source within its height. Each probe is applied, measured
    and rolled back; only the winning point is applied for good.
    """

    def __init__(self, detector: OverflowDetector) -> None:
        self.detector = detector

    def split(
        self,
        node: ContentNode,
        source: ContentRoot,
        dest: DestRoot,
        max_height: float,
    ) -> bool:
        """Split ``node`` (the last child of ``source``) into ``dest``.

        ``dest`` may be a callable; it is only invoked once a split point
        has been chosen, so a failed split never creates a page.
        """
        points = split_points(node)
        if not points:
            logger.debug("No word boundary inside %r", node)
            return False

        # Probes land in a detached scratch root
        scratch = ContentRoot()
        lo, hi = 0, len(points) - 1
        best: int | None = None
        while lo <= hi:
            mid = (lo + hi) // 2
            applied = self._apply(node, points[mid], scratch)
            fits = not self.detector.is_overflowing(source, max_height)
            self._rollback(applied)
            if fits:
                best = mid
                lo = mid + 1
            else:
                hi = mid - 1

        if best is None:
            logger.debug("No split point of %r fits in %.1fpx", node, max_height)
            return False

        target = dest() if callable(dest) else dest
        applied = self._apply(node, points[best], target)
        if self.detector.is_overflowing(source, max_height):
            # Height did not shrink monotonically with the text
            self._rollback(applied)
            logger.warning("Split of %r did not verify after search; leaving it whole", node)
            return False
        logger.debug(
            "Split %r at offset %d (%d/%d points)",
            points[best].text_node, points[best].offset, best + 1, len(points),
        )
        return True

    def _apply(self, node: ContentNode, point: SplitPoint, dest: ContentRoot) -> _Applied:
        text_node, offset = point.text_node, point.offset

        if text_node is node:
            suffix = TextNode(text_node.text[offset:])
            dest.prepend(suffix)
            applied = _Applied(top=suffix, text_node=text_node, original_text=text_node.text)
            text_node.text = text_node.text[:offset]
            return applied

        # At offset 0 the whole text node moves; climb while it opens its parent
        unit: ContentNode = text_node
        if offset == 0:
            while unit.parent is not node and unit.parent.first_child is unit:  # type: ignore[union-attr]
                unit = unit.parent  # type: ignore[assignment]

        path = ancestors_until(unit, node)
        top = node.clone_shallow()  # type: ignore[attr-defined]
        dest.prepend(top)
        applied = _Applied(top=top, text_node=text_node, original_text=text_node.text)

        carrier: Element = top
        for depth in range(len(path) - 1):
            parent = path[depth]
            child = path[depth + 1]
            following = parent.children[parent.index(child) + 1 :]  # type: ignore[attr-defined]
            if child is unit:
                if offset > 0:
                    carrier.append(TextNode(text_node.text[offset:]))
                    text_node.text = text_node.text[:offset]
                else:
                    applied.moved.append((child, parent))  # type: ignore[arg-type]
                    carrier.append(child)
                next_carrier = carrier
            else:
                next_carrier = child.clone_shallow()  # type: ignore[attr-defined]
                carrier.append(next_carrier)
            for sibling in following:
                applied.moved.append((sibling, parent))  # type: ignore[arg-type]
                carrier.append(sibling)
            carrier = next_carrier
        return applied

    def _rollback(self, applied: _Applied) -> None:
        for moved, original_parent in applied.moved:
            original_parent.append(moved)
        applied.text_node.text = applied.original_text
        applied.top.detach()
