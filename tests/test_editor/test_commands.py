"""Tests for the document command host."""

import pytest

from pageflow.core.markup import to_html
from pageflow.core.nodes import ContentRoot, Element, TextNode, make_placeholder
from pageflow.editor.commands import DocumentCommandHost
from pageflow.layout.caret import CaretTracker


@pytest.fixture
def host() -> DocumentCommandHost:
    return DocumentCommandHost()


def focused(root: ContentRoot) -> CaretTracker:
    caret = CaretTracker()
    caret.focus(root)
    caret.place_caret_at_end(root)
    return caret


def test_insert_text_fills_placeholder(host):
    root = ContentRoot([make_placeholder()])
    caret = focused(root)

    host.execute(root, caret, "insertText", "Hello")
    host.execute(root, caret, "insertText", " world")

    assert to_html(root) == "<p>Hello world</p>"
    assert caret.selection.offset == len("Hello world")


def test_insert_text_at_caret_offset(host):
    text = TextNode("Helo")
    root = ContentRoot([Element("p", children=[text])])
    caret = CaretTracker()
    caret.set_caret(text, 3)

    host.execute(root, caret, "insertText", "l")

    assert text.text == "Hello"
    assert caret.selection.offset == 4


def test_insert_html_blocks_replace_placeholder(host):
    root = ContentRoot([make_placeholder()])
    caret = focused(root)

    host.execute(root, caret, "insertHTML", "<p>one</p><p>two</p>")

    assert to_html(root) == "<p>one</p><p>two</p>"


def test_insert_html_blocks_go_after_current_block(host):
    root = ContentRoot([Element("p", children=[TextNode("first")]), Element("p", children=[TextNode("last")])])
    caret = CaretTracker()
    caret.set_caret(root.first_child.first_child, 2)

    host.execute(root, caret, "insertHTML", "<h2>mid</h2>")

    assert to_html(root) == "<p>first</p><h2>mid</h2><p>last</p>"


def test_insert_inline_html_splits_text(host):
    text = TextNode("abcd")
    root = ContentRoot([Element("p", children=[text])])
    caret = CaretTracker()
    caret.set_caret(text, 2)

    host.execute(root, caret, "insertHTML", "<b>X</b>")

    assert to_html(root) == "<p>ab<b>X</b>cd</p>"


def test_insert_paragraph_and_image(host):
    root = ContentRoot([Element("p", children=[TextNode("text")])])
    caret = focused(root)

    host.execute(root, caret, "insertParagraph")
    host.execute(root, caret, "insertImage", "pic.png")

    assert to_html(root) == '<p>text</p><p></p><img src="pic.png">'


def test_insert_image_with_configured_height():
    host = DocumentCommandHost(image_height=120)
    root = ContentRoot([make_placeholder()])
    host.execute(root, focused(root), "insertImage", "pic.png")
    assert root.last_child.attrs == {"src": "pic.png", "height": "120"}


def test_create_link(host):
    root = ContentRoot([Element("p", children=[TextNode("see ")])])
    host.execute(root, focused(root), "createLink", "https://example.com")
    assert to_html(root) == '<p>see <a href="https://example.com">https://example.com</a></p>'


def test_delete_removes_previous_character(host):
    root = ContentRoot([Element("p", children=[TextNode("abc")])])
    caret = focused(root)
    host.execute(root, caret, "delete")
    assert root.text_content == "ab"


def test_formatting_commands_are_accepted(host):
    root = ContentRoot([Element("p", children=[TextNode("abc")])])
    host.execute(root, focused(root), "bold")
    assert root.text_content == "abc"


def test_missing_values_and_unknown_commands_raise(host):
    root = ContentRoot([make_placeholder()])
    caret = focused(root)
    with pytest.raises(ValueError, match="needs an image URL"):
        host.execute(root, caret, "insertImage")
    with pytest.raises(ValueError, match="Unsupported command 'explode'"):
        host.execute(root, caret, "explode")
