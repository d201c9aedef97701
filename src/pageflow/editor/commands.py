"""Command execution against the focused page surface."""

from __future__ import annotations

import logging
from typing import Protocol

from pageflow.core.markup import parse_fragment
from pageflow.core.nodes import (
    Container,
    ContentNode,
    ContentRoot,
    Element,
    TextNode,
    find_content_root,
    is_block,
    is_placeholder,
)
from pageflow.layout.caret import CaretTracker, Selection

logger = logging.getLogger(__name__)

# Pure formatting commands; their semantics belong to the host editing engine
FORMAT_COMMANDS = {
    "bold", "italic", "underline", "strikeThrough", "superscript", "subscript",
    "justifyLeft", "justifyCenter", "justifyRight", "justifyFull",
    "insertOrderedList", "insertUnorderedList", "indent", "outdent",
    "undo", "redo", "fontName", "fontSize", "foreColor", "backColor",
    "hiliteColor", "removeFormat", "formatBlock", "unlink",
}


class CommandHost(Protocol):
    """Anything that can run a named editing command on a content root."""

    def execute(self, root: ContentRoot, caret: CaretTracker, name: str, value: str | None = None) -> None: ...


class DocumentCommandHost:
    """Implements the commands that change what is on the page.

    Formatting-only commands are accepted and left to the host engine; an
    unknown command name raises ``ValueError``.
    """

    def __init__(self, image_height: float | None = None) -> None:
        self.image_height = image_height

    def execute(self, root: ContentRoot, caret: CaretTracker, name: str, value: str | None = None) -> None:
        handler = getattr(self, f"_cmd_{name}", None)
        if handler is not None:
            handler(root, caret, value)
            return
        if name in FORMAT_COMMANDS:
            logger.debug("Formatting command %s(%r) delegated to host engine", name, value)
            return
        raise ValueError(f"Unsupported command '{name}'")

    # ── Commands ────────────────────────────────────────────────────────

    def _cmd_insertText(self, root: ContentRoot, caret: CaretTracker, value: str | None) -> None:
        if not value:
            return
        node, offset = _caret_position(root, caret)
        if isinstance(node, TextNode):
            node.text = node.text[:offset] + value + node.text[offset:]
            caret.set_caret(node, offset + len(value))
            return
        self._insert_nodes(node, offset, [TextNode(value)], caret)

    def _cmd_insertHTML(self, root: ContentRoot, caret: CaretTracker, value: str | None) -> None:
        nodes = parse_fragment(value or "")
        if not nodes:
            return
        node, offset = _caret_position(root, caret)
        if any(is_block(new) for new in nodes):
            # Block content lands between top-level blocks, replacing a blank placeholder
            top = _top_level(node, root)
            if top is None:
                index = len(root.children)
            elif is_placeholder(top):
                index = root.index(top)
                root.remove(top)
            else:
                index = root.index(top) + 1
            self._insert_nodes(root, index, nodes, caret)
            return
        if isinstance(node, TextNode):
            node, offset = _split_text(node, offset)
        self._insert_nodes(node, offset, nodes, caret)

    def _cmd_insertParagraph(self, root: ContentRoot, caret: CaretTracker, value: str | None) -> None:
        node, _ = _caret_position(root, caret)
        block = _top_level(node, root)
        paragraph = Element("p")
        index = root.index(block) + 1 if block is not None else len(root.children)
        root.insert(index, paragraph)
        caret.set_caret(paragraph, 0)

    def _cmd_insertImage(self, root: ContentRoot, caret: CaretTracker, value: str | None) -> None:
        if not value:
            raise ValueError("insertImage needs an image URL")
        attrs = {"src": value}
        if self.image_height is not None:
            attrs["height"] = f"{self.image_height:g}"
        self._insert_block(root, caret, Element("img", attrs))

    def _cmd_createLink(self, root: ContentRoot, caret: CaretTracker, value: str | None) -> None:
        if not value:
            raise ValueError("createLink needs a URL")
        node, offset = _caret_position(root, caret)
        if isinstance(node, TextNode):
            node, offset = _split_text(node, offset)
        self._insert_nodes(node, offset, [Element("a", {"href": value}, [TextNode(value)])], caret)

    def _cmd_delete(self, root: ContentRoot, caret: CaretTracker, value: str | None) -> None:
        """Backspace: remove the character or node before the caret."""
        node, offset = _caret_position(root, caret)
        if isinstance(node, TextNode):
            if offset > 0:
                node.text = node.text[: offset - 1] + node.text[offset:]
                caret.set_caret(node, offset - 1)
            return
        if isinstance(node, Container) and 0 < offset <= len(node.children):
            node.remove(node.children[offset - 1])
            caret.set_caret(node, offset - 1)

    # ── Helpers ─────────────────────────────────────────────────────────

    def _insert_nodes(
        self, container: ContentNode | Container, offset: int, nodes: list[ContentNode], caret: CaretTracker
    ) -> None:
        if not isinstance(container, Container):
            parent = container.parent
            offset = parent.index(container) + 1  # type: ignore[union-attr]
            container = parent  # type: ignore[assignment]
        offset = min(max(offset, 0), len(container.children))
        for node in nodes:
            container.insert(offset, node)
            offset += 1
        last = nodes[-1]
        if isinstance(last, TextNode):
            caret.set_caret(last, len(last.text))
        else:
            caret.set_caret(container, offset)

    def _insert_block(self, root: ContentRoot, caret: CaretTracker, block: ContentNode) -> None:
        node, _ = _caret_position(root, caret)
        top = _top_level(node, root)
        index = root.index(top) + 1 if top is not None else len(root.children)
        root.insert(index, block)
        caret.set_caret(root, index + 1)


def _caret_position(root: ContentRoot, caret: CaretTracker) -> tuple[ContentNode | Container, int]:
    """Resolve the caret to the deepest editable position inside ``root``."""
    caret.clamp()
    selection = caret.selection
    if selection is None or selection.root is not root:
        selection = Selection(root, len(root.children))
    node, offset = selection.node, selection.offset
    while isinstance(node, Container) and node.children:
        at_end = offset >= len(node.children)
        child = node.children[-1] if at_end else node.children[offset]
        if isinstance(child, TextNode):
            return child, len(child.text) if at_end else 0
        if isinstance(child, Element) and not child.is_atomic:
            node, offset = child, len(child.children) if at_end else 0
            continue
        break
    return node, offset


def _split_text(node: TextNode, offset: int) -> tuple[Container, int]:
    """Split ``node`` at ``offset``; returns the insertion point between halves."""
    parent = node.parent
    index = parent.index(node)  # type: ignore[union-attr]
    if offset <= 0:
        return parent, index  # type: ignore[return-value]
    if offset >= len(node.text):
        return parent, index + 1  # type: ignore[return-value]
    tail = TextNode(node.text[offset:])
    node.text = node.text[:offset]
    parent.insert(index + 1, tail)  # type: ignore[union-attr]
    return parent, index + 1  # type: ignore[return-value]


def _top_level(node: ContentNode | Container, root: ContentRoot) -> ContentNode | None:
    """The child of ``root`` that contains ``node``."""
    if node is root or find_content_root(node) is not root:
        return None
    current = node
    while current.parent is not root:  # type: ignore[union-attr]
        current = current.parent  # type: ignore[union-attr,assignment]
    return current  # type: ignore[return-value]
