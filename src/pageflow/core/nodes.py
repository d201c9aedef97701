"""Content tree for editable page surfaces.

Three node variants live under a ``ContentRoot``: ``TextNode``, ``LineBreak``
and ``Element``. Every node knows its parent, so a node can be walked up to the
content root that owns it. Mutations notify the owning root's observers, which
is how edits (and reflow's own moves) are reported to the layout trigger.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

# Elements that are laid out and moved as one unit, never split
ATOMIC_TAGS = {"img", "hr", "video", "iframe", "svg", "canvas"}

BLOCK_TAGS = {
    "p", "div", "h1", "h2", "h3", "h4", "h5", "h6", "ul", "ol", "li", "dl", "dt", "dd",
    "blockquote", "pre", "table", "thead", "tbody", "tfoot", "tr", "td", "th", "caption",
    "section", "article", "header", "footer", "aside", "nav", "main", "figure",
    "figcaption", "address", *ATOMIC_TAGS,
}

MutationObserver = Callable[["ContentRoot", str], None]


class ContentNode:
    """Base for every node that can sit inside a content root."""

    def __init__(self) -> None:
        self.parent: Container | None = None

    @property
    def root(self) -> ContentRoot | None:
        """The content root that currently owns this node, if any."""
        return find_content_root(self)

    @property
    def text_content(self) -> str:
        return ""

    def detach(self) -> None:
        if self.parent is not None:
            self.parent.remove(self)

    def _notify(self, kind: str) -> None:
        root = self.root
        if root is not None:
            root.notify(kind)


class TextNode(ContentNode):
    """A run of text."""

    def __init__(self, text: str = "") -> None:
        super().__init__()
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        if value != self._text:
            self._text = value
            self._notify("characterData")

    @property
    def text_content(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def __repr__(self) -> str:
        preview = self._text if len(self._text) <= 30 else self._text[:27] + "..."
        return f"TextNode({preview!r})"


class LineBreak(ContentNode):
    """A forced line break (``<br>``)."""

    def __repr__(self) -> str:
        return "LineBreak()"


class Container:
    """Ordered child list shared by elements and content roots."""

    def __init__(self, children: list[ContentNode] | None = None) -> None:
        self.children: list[ContentNode] = []
        for child in children or []:
            self._adopt(child)
            self.children.append(child)

    def _adopt(self, node: ContentNode) -> None:
        # A node belongs to one container at a time: moving it is a transfer
        if node.parent is not None:
            node.parent.remove(node)
        node.parent = self

    def _changed(self, kind: str) -> None:
        raise NotImplementedError

    def insert(self, index: int, node: ContentNode) -> ContentNode:
        self._adopt(node)
        self.children.insert(index, node)
        self._changed("childList")
        return node

    def append(self, node: ContentNode) -> ContentNode:
        self._adopt(node)
        self.children.append(node)
        self._changed("childList")
        return node

    def prepend(self, node: ContentNode) -> ContentNode:
        return self.insert(0, node)

    def remove(self, node: ContentNode) -> ContentNode:
        self.children.remove(node)
        node.parent = None
        self._changed("childList")
        return node

    def clear(self) -> list[ContentNode]:
        removed = list(self.children)
        for node in removed:
            node.parent = None
        self.children.clear()
        if removed:
            self._changed("childList")
        return removed

    def index(self, node: ContentNode) -> int:
        return self.children.index(node)

    @property
    def first_child(self) -> ContentNode | None:
        return self.children[0] if self.children else None

    @property
    def last_child(self) -> ContentNode | None:
        return self.children[-1] if self.children else None

    @property
    def text_content(self) -> str:
        return "".join(child.text_content for child in self.children)

    def __len__(self) -> int:
        return len(self.children)


class Element(Container, ContentNode):
    """A tagged element (paragraph, list, table, image, inline span, ...)."""

    def __init__(
        self,
        tag: str,
        attrs: dict[str, str] | None = None,
        children: list[ContentNode] | None = None,
    ) -> None:
        ContentNode.__init__(self)
        Container.__init__(self, children)
        self.tag = tag.lower()
        self.attrs: dict[str, str] = dict(attrs or {})

    @property
    def is_atomic(self) -> bool:
        return self.tag in ATOMIC_TAGS

    def clone_shallow(self) -> Element:
        """Copy tag and attributes without children."""
        return Element(self.tag, self.attrs)

    def _changed(self, kind: str) -> None:
        self._notify(kind)

    def __repr__(self) -> str:
        return f"Element({self.tag!r}, children={len(self.children)})"


class ContentRoot(Container):
    """The editable surface of a page."""

    def __init__(self, children: list[ContentNode] | None = None, page_number: int = 1) -> None:
        super().__init__(children)
        self.page_number = page_number
        self.editable = True
        self._observers: list[MutationObserver] = []

    def observe(self, callback: MutationObserver) -> None:
        if callback not in self._observers:
            self._observers.append(callback)

    def disconnect(self, callback: MutationObserver) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def notify(self, kind: str) -> None:
        for callback in list(self._observers):
            callback(self, kind)

    def _changed(self, kind: str) -> None:
        self.notify(kind)

    @property
    def is_empty(self) -> bool:
        return not self.children

    @property
    def is_blank(self) -> bool:
        """Holds nothing but the empty placeholder paragraph."""
        return len(self.children) == 1 and is_placeholder(self.children[0])

    def __repr__(self) -> str:
        return f"ContentRoot(page={self.page_number}, children={len(self.children)})"


# ── Tree walks ──────────────────────────────────────────────────────────


def find_content_root(node: ContentNode | Container | None) -> ContentRoot | None:
    """Walk parent links up to the owning content root."""
    while node is not None:
        if isinstance(node, ContentRoot):
            return node
        node = node.parent
    return None


def iter_descendants(node: ContentNode | Container) -> Iterator[ContentNode]:
    """Depth-first, document order, excluding ``node`` itself."""
    for child in getattr(node, "children", ()):
        yield child
        yield from iter_descendants(child)


def iter_text_nodes(node: ContentNode | Container) -> Iterator[TextNode]:
    if isinstance(node, TextNode):
        yield node
        return
    for child in iter_descendants(node):
        if isinstance(child, TextNode):
            yield child


def deepest_last_text(node: ContentNode | Container) -> TextNode | None:
    last = None
    for text_node in iter_text_nodes(node):
        last = text_node
    return last


def ancestors_until(node: ContentNode, stop: ContentNode) -> list[ContentNode]:
    """Path from ``stop`` down to ``node`` inclusive.

    Raises ValueError if ``stop`` is not an ancestor of (or equal to) ``node``.
    """
    path: list[ContentNode] = [node]
    current: ContentNode | Container | None = node
    while current is not stop:
        current = current.parent if current is not None else None
        if current is None or isinstance(current, ContentRoot):
            raise ValueError(f"{stop!r} is not an ancestor of {node!r}")
        path.append(current)  # type: ignore[arg-type]
    path.reverse()
    return path


def is_block(node: ContentNode) -> bool:
    return isinstance(node, Element) and node.tag in BLOCK_TAGS


def make_placeholder() -> Element:
    return Element("p")


def is_placeholder(node: ContentNode) -> bool:
    return isinstance(node, Element) and node.tag == "p" and not node.children
