"""HTML fragment parsing and serialization for content nodes."""

from __future__ import annotations

import html

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from pageflow.core.nodes import Container, ContentNode, Element, LineBreak, TextNode

# Elements serialized without a closing tag
VOID_TAGS = {"br", "hr", "img", "input", "meta", "link", "source", "wbr", "col", "area"}


def parse_fragment(markup: str) -> list[ContentNode]:
    """Parse an HTML fragment into detached content nodes."""
    soup = BeautifulSoup(markup or "", "html.parser")
    return [node for node in (_convert(child) for child in soup.contents) if node is not None]


def _convert(source) -> ContentNode | None:
    if isinstance(source, Comment):
        return None
    if isinstance(source, NavigableString):
        text = str(source)
        return TextNode(text) if text else None
    if not isinstance(source, Tag):
        return None
    if source.name == "br":
        return LineBreak()
    attrs = {
        key: " ".join(value) if isinstance(value, list) else str(value)
        for key, value in source.attrs.items()
    }
    children = [node for node in (_convert(child) for child in source.contents) if node is not None]
    return Element(source.name, attrs, children)


def to_html(node: ContentNode | Container) -> str:
    """Serialize a node (or the children of a container) to HTML."""
    if isinstance(node, TextNode):
        return html.escape(node.text, quote=False)
    if isinstance(node, LineBreak):
        return "<br>"
    if isinstance(node, Element):
        attrs = "".join(
            f' {key}="{html.escape(value, quote=True)}"' for key, value in node.attrs.items()
        )
        if node.tag in VOID_TAGS and not node.children:
            return f"<{node.tag}{attrs}>"
        inner = "".join(to_html(child) for child in node.children)
        return f"<{node.tag}{attrs}>{inner}</{node.tag}>"
    return "".join(to_html(child) for child in node.children)
