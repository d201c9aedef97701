"""Shared fixtures: a small deterministic page geometry.

The grid measurer below lays text out at 5px per character on an 80px line
(16 characters), 10px per line, and gives every <p> a 10px bottom margin.
Pages hold 100px of content, so five one-line paragraphs fill a page exactly.
"""

import logging

import pytest

from pageflow.core.document import Document
from pageflow.core.nodes import ContentNode, Element, TextNode
from pageflow.layout.factory import PageFactory
from pageflow.layout.overflow import OverflowDetector
from pageflow.layout.redistribute import Redistributor
from pageflow.layout.reflow import PageSequence
from pageflow.layout.splitter import TextSplitter
from pageflow.measure.grid import GridMeasurer

MAX_HEIGHT = 100.0


@pytest.fixture(autouse=True)
def _restore_pageflow_logger():
    logger = logging.getLogger("pageflow")
    level, handlers = logger.level, list(logger.handlers)
    yield
    logger.setLevel(level)
    logger.handlers[:] = handlers


@pytest.fixture
def measurer() -> GridMeasurer:
    return GridMeasurer(width=80, font_size=10, line_height=1.0, image_height=40)


@pytest.fixture
def detector(measurer) -> OverflowDetector:
    return OverflowDetector(measurer, tolerance=1.0)


@pytest.fixture
def splitter(detector) -> TextSplitter:
    return TextSplitter(detector)


@pytest.fixture
def redistributor(detector, splitter) -> Redistributor:
    return Redistributor(detector, splitter, max_cycles=2000, split_threshold=20)


@pytest.fixture
def sequence(detector, redistributor) -> PageSequence:
    return PageSequence(PageFactory(), detector, redistributor, MAX_HEIGHT)


def paragraph(text: str) -> Element:
    return Element("p", children=[TextNode(text)])


def words(count: int, prefix: str = "word") -> str:
    return " ".join(f"{prefix}{i:02d}" for i in range(count))


def make_document(*pages: list[ContentNode]) -> Document:
    factory = PageFactory()
    built = []
    for number, nodes in enumerate(pages, start=1):
        page = factory.create_page(number)
        for node in nodes:
            page.content.append(node)
        built.append(page)
    return Document(pages=built)
