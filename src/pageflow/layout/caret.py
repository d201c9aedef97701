"""Caret placement across page surfaces."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pageflow.core.nodes import Container, ContentNode, ContentRoot, TextNode, deepest_last_text, find_content_root

if TYPE_CHECKING:
    from pageflow.core.document import Document
    from pageflow.layout.reflow import ReflowReport

logger = logging.getLogger(__name__)


@dataclass
class Selection:
    """A collapsed selection: ``offset`` is a character offset inside a
    text node, or a child index inside a container."""

    node: ContentNode | Container
    offset: int = 0

    @property
    def root(self) -> ContentRoot | None:
        return find_content_root(self.node)


class CaretTracker:
    """Owns focus and the collapsed selection."""

    def __init__(self) -> None:
        self.selection: Selection | None = None
        self.focused: ContentRoot | None = None

    def focus(self, root: ContentRoot) -> None:
        """Give ``root`` input focus, opening a selection at its start if none exists."""
        self.focused = root
        if self.selection is None or self.selection.root is not root:
            self.selection = Selection(root, 0)

    def place_caret_at_start(self, root: ContentRoot) -> None:
        if self.selection is None:
            return
        self.selection = Selection(root, 0)
        self.focused = root

    def place_caret_at_end(self, root: ContentRoot) -> None:
        if self.selection is None:
            return
        last = deepest_last_text(root)
        if last is not None:
            self.selection = Selection(last, len(last.text))
        else:
            self.selection = Selection(root, len(root.children))

    def set_caret(self, node: ContentNode | Container, offset: int = 0) -> None:
        """Collapse the selection at ``node``/``offset`` and focus its root."""
        root = find_content_root(node)
        if root is None:
            logger.warning("Caret target %r is not inside a page; ignoring", node)
            return
        self.selection = Selection(node, offset)
        self.focused = root

    def restore(self, document: Document, report: ReflowReport) -> None:
        """Put the caret somewhere usable after a reflow pass."""
        if self.selection is None:
            return
        selection = self.selection
        root = selection.root

        if root is None or document.index_of(root) is None:
            # Caret page was removed, or its node left the document
            last = document.pages[-1].content
            self.focused = last
            self.place_caret_at_end(last)
            return

        pushed_to = report.receiver_of(self.focused) if self.focused is not None else None
        if root is not self.focused:
            # Caret node itself travelled to another page
            self.focused = root
        elif pushed_to is not None and _past_end(selection):
            self.place_caret_at_start(pushed_to)

    def clamp(self) -> None:
        if self.selection is not None and _past_end(self.selection):
            node = self.selection.node
            self.selection.offset = len(node.text) if isinstance(node, TextNode) else len(node.children)  # type: ignore[union-attr]


def _past_end(selection: Selection) -> bool:
    node = selection.node
    if isinstance(node, TextNode):
        return selection.offset > len(node.text)
    if isinstance(node, Container):
        return selection.offset > len(node.children)
    return False
