"""Tests for HTML parsing and serialization."""

from pageflow.core.markup import parse_fragment, to_html
from pageflow.core.nodes import ContentRoot, Element, LineBreak, TextNode


def test_parse_fragment_builds_typed_nodes():
    nodes = parse_fragment('<p class="lead intro">Hello <b>world</b><br>again</p><img src="a.png" height="40">')

    assert len(nodes) == 2
    para, img = nodes
    assert isinstance(para, Element) and para.tag == "p"
    assert para.attrs == {"class": "lead intro"}
    assert isinstance(para.children[0], TextNode)
    assert para.children[1].tag == "b"
    assert isinstance(para.children[2], LineBreak)
    assert img.tag == "img" and img.is_atomic
    assert img.attrs["height"] == "40"


def test_parse_fragment_drops_comments():
    nodes = parse_fragment("<p>a<!-- note -->b</p>")
    assert nodes[0].text_content == "ab"


def test_parse_empty_fragment():
    assert parse_fragment("") == []


def test_to_html_escapes_text_and_attributes():
    para = Element("p", {"title": 'say "hi"'}, [TextNode("a < b & c")])
    assert to_html(para) == '<p title="say &quot;hi&quot;">a &lt; b &amp; c</p>'


def test_to_html_void_elements():
    root = ContentRoot([TextNode("x"), LineBreak(), Element("img", {"src": "a.png"}), Element("p")])
    assert to_html(root) == 'x<br><img src="a.png"><p></p>'


def test_realistic_fragment_round_trip():
    markup = (
        "<h1>Report</h1><p>Intro with <a href=\"https://example.com\">a link</a>.</p>"
        "<ul><li>one</li><li>two</li></ul><table><tr><td>A</td><td>B</td></tr></table>"
    )
    assert to_html(ContentRoot(parse_fragment(markup))) == markup
