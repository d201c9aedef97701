"""Tests for the content tree."""

import pytest

from pageflow.core.nodes import (
    ContentRoot,
    Element,
    LineBreak,
    TextNode,
    ancestors_until,
    deepest_last_text,
    find_content_root,
    make_placeholder,
)


def test_insert_transfers_ownership():
    first = ContentRoot()
    second = ContentRoot()
    para = Element("p", children=[TextNode("hello")])
    first.append(para)

    second.prepend(para)

    assert para not in first.children
    assert second.children == [para]
    assert para.parent is second
    assert para.root is second


def test_find_content_root_from_nested_text():
    text = TextNode("deep")
    root = ContentRoot([Element("ul", children=[Element("li", children=[text])])])
    assert find_content_root(text) is root
    assert find_content_root(TextNode("loose")) is None


def test_mutations_notify_owning_root():
    events = []
    text = TextNode("a")
    root = ContentRoot([Element("p", children=[text])])
    root.observe(lambda r, kind: events.append((r, kind)))

    text.text = "ab"
    root.children[0].append(LineBreak())
    root.append(Element("p"))

    assert [kind for _, kind in events] == ["characterData", "childList", "childList"]
    assert all(r is root for r, _ in events)


def test_unchanged_text_does_not_notify():
    events = []
    text = TextNode("same")
    root = ContentRoot([text])
    root.observe(lambda r, kind: events.append(kind))
    text.text = "same"
    assert events == []


def test_disconnect_stops_notifications():
    events = []
    root = ContentRoot()
    callback = lambda r, kind: events.append(kind)  # noqa: E731
    root.observe(callback)
    root.disconnect(callback)
    root.append(TextNode("x"))
    assert events == []


def test_text_content_concatenates_in_order():
    root = ContentRoot([
        Element("p", children=[TextNode("one "), Element("b", children=[TextNode("two")])]),
        TextNode(" three"),
    ])
    assert root.text_content == "one two three"


def test_deepest_last_text():
    img = Element("img", {"src": "a.png"})
    last = TextNode("end")
    para = Element("p", children=[TextNode("start"), LineBreak(), img, Element("i", children=[last])])
    assert deepest_last_text(para) is last


def test_ancestors_until_returns_path():
    text = TextNode("x")
    inner = Element("b", children=[text])
    outer = Element("p", children=[inner])
    ContentRoot([outer])
    assert ancestors_until(text, outer) == [outer, inner, text]
    assert ancestors_until(outer, outer) == [outer]


def test_ancestors_until_rejects_unrelated_node():
    text = TextNode("x")
    ContentRoot([Element("p", children=[text])])
    with pytest.raises(ValueError):
        ancestors_until(text, Element("div"))


def test_empty_and_blank_roots():
    assert ContentRoot().is_empty
    blank = ContentRoot([make_placeholder()])
    assert blank.is_blank
    assert not blank.is_empty
    assert not ContentRoot([Element("p", children=[TextNode("x")])]).is_blank


def test_clone_shallow_keeps_attributes_only():
    link = Element("a", {"href": "https://example.com"}, [TextNode("x")])
    clone = link.clone_shallow()
    assert clone.tag == "a"
    assert clone.attrs == {"href": "https://example.com"}
    assert clone.children == []
    clone.attrs["href"] = "changed"
    assert link.attrs["href"] == "https://example.com"
