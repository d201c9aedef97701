"""Editing session: construction, edit, command and export surfaces."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from pageflow.config import PageflowSettings, get_settings
from pageflow.core.document import Document, Page
from pageflow.core.markup import parse_fragment
from pageflow.core.nodes import Container, ContentNode, ContentRoot, find_content_root, make_placeholder
from pageflow.core.registry import ExporterRegistry
from pageflow.editor.commands import CommandHost, DocumentCommandHost
from pageflow.editor.trigger import LayoutTrigger
from pageflow.export import html as _html_exporter  # noqa: F401
from pageflow.export import text as _text_exporter  # noqa: F401
from pageflow.layout.caret import CaretTracker
from pageflow.layout.dimensions import max_content_height
from pageflow.layout.factory import PageFactory
from pageflow.layout.overflow import OverflowDetector
from pageflow.layout.redistribute import Redistributor
from pageflow.layout.reflow import PageSequence, ReflowReport
from pageflow.layout.splitter import TextSplitter
from pageflow.measure.base import BaseMeasurer
from pageflow.measure.loader import measurer_from_settings

logger = logging.getLogger(__name__)

EVENT_KINDS = {"input", "keyup", "paste", "mutation", "command"}


def create_document(initial_html: str | None = None, settings: PageflowSettings | None = None) -> Document:
    """One page holding ``initial_html``, or the empty placeholder paragraph."""
    settings = settings or get_settings()
    page = PageFactory(settings.page_size).create_page(1)
    nodes = parse_fragment(initial_html) if initial_html else []
    for node in nodes:
        page.content.append(node)
    if not page.content.children:
        page.content.append(make_placeholder())
    return Document(pages=[page])


class Editor:
    """A paginated editing session over one Document.

    Edits enter through ``handle_event`` (or the ``type_text``/``paste``
    shortcuts) and ``execute_command``; each schedules a reflow through the
    layout trigger. Reflow's own mutations are fed back through the content
    roots' observers and suppressed by the trigger's reentrancy flag.

    Usage:
        editor = Editor(create_document("<p>Hello</p>"))
        editor.type_text(" world")
        html = editor.export_content()
    """

    def __init__(
        self,
        document: Document | None = None,
        settings: PageflowSettings | None = None,
        measurer: BaseMeasurer | None = None,
        command_host: CommandHost | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.measurer = measurer or measurer_from_settings(self.settings)
        self.max_height = max_content_height(
            self.settings.page_height_mm, self.settings.margin_mm, self.settings.dpi
        )
        self.factory = PageFactory(self.settings.page_size)
        self.detector = OverflowDetector(self.measurer, self.settings.overflow_tolerance)
        self.redistributor = Redistributor(
            self.detector,
            TextSplitter(self.detector),
            max_cycles=self.settings.max_cycles,
            split_threshold=self.settings.split_threshold,
        )
        self.sequence = PageSequence(self.factory, self.detector, self.redistributor, self.max_height)
        self.caret = CaretTracker()
        self.commands: CommandHost = command_host or DocumentCommandHost(self.settings.image_height)
        self.trigger = LayoutTrigger(self._reflow_from, delay=self.settings.reflow_delay)
        self.last_report: ReflowReport | None = None
        self._batch_depth = 0
        self._watched: list[ContentRoot] = []

        self.document = document or create_document(settings=self.settings)
        self._watch_pages()
        self.trigger.schedule(0)

    @classmethod
    def from_html(cls, markup: str, settings: PageflowSettings | None = None, **kwargs) -> Editor:
        return cls(create_document(markup, settings), settings=settings, **kwargs)

    @property
    def pages(self) -> list[Page]:
        return self.document.pages

    # ── Reflow ──────────────────────────────────────────────────────────

    def _reflow_from(self, start_index: int) -> ReflowReport:
        report = self.sequence.reflow(self.document, start_index)
        self.caret.restore(self.document, report)
        self._watch_pages()
        for warning in report.warnings:
            logger.warning(warning)
        self.last_report = report
        return report

    def reflow_now(self) -> ReflowReport | None:
        """Run a full pass immediately instead of waiting for the trigger."""
        return self.trigger.run_now(0)

    async def settle(self) -> ReflowReport | None:
        """Wait for any scheduled reflow to complete."""
        await self.trigger.flush()
        return self.last_report

    def _watch_pages(self) -> None:
        """Observe every current page and release pages that left the document."""
        current = self.document.roots
        for root in self._watched:
            if all(root is not other for other in current):
                root.disconnect(self._on_mutation)
        for root in current:
            root.observe(self._on_mutation)
        self._watched = current

    def _on_mutation(self, root: ContentRoot, kind: str) -> None:
        if self._batch_depth:
            return
        self.handle_event("mutation", root)

    @contextmanager
    def _batched(self) -> Iterator[None]:
        """Mute mutation notifications; the caller schedules one reflow after."""
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1

    # ── Edit surface ────────────────────────────────────────────────────

    def handle_event(self, kind: str, target: ContentNode | Container | None) -> None:
        """Map an edit notification to its page and schedule a reflow from there."""
        if kind not in EVENT_KINDS:
            raise ValueError(f"Unknown event kind '{kind}'")
        if self.trigger.reflowing:
            self.trigger.schedule()
            return
        root = find_content_root(target)
        index = self.document.index_of(root) if root is not None else None
        if index is None:
            logger.warning("%s event from %r is not inside any page; ignoring", kind, target)
            return
        self.trigger.schedule(index)

    def focus(self, target: ContentNode | Container) -> ContentRoot | None:
        """Focus the page surface containing ``target`` (a click)."""
        root = find_content_root(target)
        if root is None or self.document.index_of(root) is None:
            logger.warning("Cannot focus %r: not inside any page", target)
            return None
        self.caret.focus(root)
        return root

    def type_text(self, text: str) -> None:
        self.execute_command("insertText", text, event="input")

    def paste(self, markup: str) -> None:
        self.execute_command("insertHTML", markup, event="paste")

    def handle_key(self, key: str) -> None:
        """Key release; Tab inserts two spaces instead of moving focus."""
        if key == "Tab":
            self.execute_command("insertText", "  ", event="keyup")
            return
        root = self.caret.focused
        if root is not None:
            self.handle_event("keyup", root)

    # ── Construction surface ────────────────────────────────────────────

    def add_page(self) -> Page:
        """Append a page holding the placeholder paragraph and focus it."""
        page = self.factory.create_page(self.document.num_pages + 1, placeholder=True)
        self.document.pages.append(page)
        self._watch_pages()
        self.caret.focus(page.content)
        return page

    def load_html(self, markup: str) -> None:
        """Replace the whole document with ``markup`` on a single page."""
        first = self.document.pages[0]
        with self._batched():
            del self.document.pages[1:]
            first.content.clear()
            for node in parse_fragment(markup):
                first.content.append(node)
            if not first.content.children:
                first.content.append(make_placeholder())
        self._watch_pages()
        self.caret.focus(first.content)
        self.trigger.schedule(0)

    # ── Command surface ─────────────────────────────────────────────────

    def execute_command(self, name: str, value: str | None = None, event: str = "command") -> None:
        """Run ``name`` against the focused page, then schedule a reflow there."""
        root = self.caret.focused
        if root is None or self.document.index_of(root) is None:
            root = self.document.pages[-1].content
            self.caret.focus(root)
            self.caret.place_caret_at_end(root)
        try:
            with self._batched():
                self.commands.execute(root, self.caret, name, value)
        finally:
            self.handle_event(event, root)

    # ── Export surface ──────────────────────────────────────────────────

    def export_content(self, fmt: str = "html", **kwargs) -> str:
        exporter = ExporterRegistry.create(fmt, **kwargs)
        return exporter.export(self.document)
