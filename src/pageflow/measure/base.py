"""Base class for rendered-height measurement."""

from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod

from pageflow.core.nodes import Container, ContentNode, ContentRoot, Element, LineBreak, TextNode, is_block

HEADING_SCALE = {"h1": 2.0, "h2": 1.5, "h3": 1.17, "h4": 1.0, "h5": 0.83, "h6": 0.67}

# Bottom margin in em of the element's own font size
BLOCK_MARGIN = {
    "p": 1.0, "ul": 1.0, "ol": 1.0, "dl": 1.0, "blockquote": 1.0, "pre": 1.0,
    "table": 1.0, "figure": 1.0,
    "h1": 0.67, "h2": 0.83, "h3": 1.0, "h4": 1.33, "h5": 1.67, "h6": 2.33,
}

INDENT_TAGS = {"ul", "ol", "blockquote", "dd"}
INDENT_PX = 40.0
CELL_PADDING_PX = 2.0

_LENGTH_RE = re.compile(r"^\s*([0-9]*\.?[0-9]+)\s*(px)?\s*$")
_STYLE_HEIGHT_RE = re.compile(r"(?:^|;)\s*height\s*:\s*([0-9]*\.?[0-9]+)px", re.IGNORECASE)
# Whitespace a browser collapses to a single space outside <pre>
_COLLAPSIBLE_RE = re.compile(r"[ \t\n\r\f]+")


def _parse_length(value: str | None) -> float | None:
    if not value:
        return None
    match = _LENGTH_RE.match(value)
    return float(match.group(1)) if match else None


class BaseMeasurer(ABC):
    """Abstract base for content measurers.

    A measurer plays the role of the rendering engine: it lays out a content
    tree at a fixed width and reports its height in CSS pixels. Block
    elements stack vertically; runs of inline content are word-wrapped into
    lines. Subclasses only decide how wide a piece of text is.
    """

    name: str  # unique identifier for this measurer

    def __init__(
        self,
        width: float,
        font_size: float = 16.0,
        line_height: float = 1.25,
        image_height: float = 150.0,
    ) -> None:
        self.width = width
        self.font_size = font_size
        self.line_height = line_height
        self.image_height = image_height

    @abstractmethod
    def text_width(self, text: str, scale: float = 1.0) -> float:
        """Rendered width of ``text`` at ``scale`` times the base font size."""
        ...

    def line_px(self, scale: float = 1.0) -> float:
        return self.font_size * scale * self.line_height

    def content_height(self, root: ContentRoot | Container) -> float:
        """Rendered height of everything inside ``root``."""
        return self._flow_height(root.children, self.width, 1.0)

    # ── Block layout ────────────────────────────────────────────────────

    def _flow_height(self, children: list[ContentNode], width: float, scale: float) -> float:
        total = 0.0
        run: list[ContentNode] = []
        for child in children:
            if is_block(child):
                total += self._inline_height(run, width, scale)
                run = []
                total += self._block_height(child, width, scale)  # type: ignore[arg-type]
            else:
                run.append(child)
        return total + self._inline_height(run, width, scale)

    def _block_height(self, element: Element, width: float, scale: float) -> float:
        tag = element.tag
        if element.is_atomic and tag != "hr":
            return self._image_height(element, width)
        if tag == "hr":
            return 2.0 + self.font_size * scale
        own_scale = HEADING_SCALE.get(tag, scale)
        margin = BLOCK_MARGIN.get(tag, 0.0) * self.font_size * own_scale
        inner_width = width - INDENT_PX if tag in INDENT_TAGS else width
        if tag == "table":
            return self._table_height(element, width, own_scale) + margin
        if tag == "pre":
            lines = element.text_content.rstrip("\n").split("\n")
            return len(lines) * self.line_px(own_scale) + margin
        return self._flow_height(element.children, max(inner_width, 1.0), own_scale) + margin

    def _image_height(self, element: Element, width: float) -> float:
        height = _parse_length(element.attrs.get("height"))
        if height is None:
            match = _STYLE_HEIGHT_RE.search(element.attrs.get("style", ""))
            height = float(match.group(1)) if match else self.image_height
        img_width = _parse_length(element.attrs.get("width"))
        if img_width and img_width > width:
            height *= width / img_width
        return height

    def _table_height(self, table: Element, width: float, scale: float) -> float:
        rows: list[Element] = []
        for child in table.children:
            if not isinstance(child, Element):
                continue
            if child.tag == "tr":
                rows.append(child)
            elif child.tag in ("thead", "tbody", "tfoot"):
                rows.extend(c for c in child.children if isinstance(c, Element) and c.tag == "tr")
        if not rows:
            return self._flow_height(table.children, width, scale)
        total = 0.0
        for row in rows:
            cells = [c for c in row.children if isinstance(c, Element) and c.tag in ("td", "th")]
            cell_width = width / max(len(cells), 1) - 2 * CELL_PADDING_PX
            heights = [
                self._flow_height(cell.children, max(cell_width, 1.0), scale) for cell in cells
            ]
            total += max(heights, default=0.0) + 2 * CELL_PADDING_PX
        return total

    # ── Inline layout ───────────────────────────────────────────────────

    def _inline_height(self, nodes: list[ContentNode], width: float, scale: float) -> float:
        if not nodes:
            return 0.0
        text = "".join(_inline_text(node) for node in nodes)
        segments = text.split("\n")
        has_breaks = len(segments) > 1
        lines = 0
        for idx, segment in enumerate(segments):
            if not segment.strip():
                # A trailing <br> does not open a new line
                if has_breaks and idx < len(segments) - 1:
                    lines += 1
                continue
            lines += self._wrap_count(segment, width, scale)
        return lines * self.line_px(scale)

    def _wrap_count(self, segment: str, width: float, scale: float) -> int:
        """Greedy word wrap; returns the number of lines."""
        space = self.text_width(" ", scale)
        lines = 1
        current = 0.0
        for word in segment.split():
            word_width = self.text_width(word, scale)
            if word_width > width:
                if current > 0:
                    lines += 1
                chunks = math.ceil(word_width / width)
                lines += chunks - 1
                current = word_width - (chunks - 1) * width
            elif current == 0:
                current = word_width
            elif current + space + word_width <= width:
                current += space + word_width
            else:
                lines += 1
                current = word_width
        return lines


def _inline_text(node: ContentNode) -> str:
    if isinstance(node, TextNode):
        return _COLLAPSIBLE_RE.sub(" ", node.text)
    if isinstance(node, LineBreak):
        return "\n"
    if isinstance(node, Element):
        return "".join(_inline_text(child) for child in node.children)
    return ""
