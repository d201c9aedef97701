"""Tests for word-boundary splitting."""

from conftest import MAX_HEIGHT, paragraph, words

from pageflow.core.markup import to_html
from pageflow.core.nodes import ContentRoot, Element, TextNode
from pageflow.layout.splitter import split_points


def offsets(points):
    return [(point.text_node.text, point.offset) for point in points]


def test_points_fall_on_word_starts():
    node = TextNode("alpha beta  gamma")
    assert offsets(split_points(node)) == [("alpha beta  gamma", 6), ("alpha beta  gamma", 12)]


def test_no_point_before_the_first_word():
    node = TextNode("   lead")
    assert split_points(node) == []


def test_points_cross_inline_elements_only_at_whitespace():
    joined = Element("p", children=[TextNode("hel"), Element("b", children=[TextNode("lo world")])])
    assert offsets(split_points(joined)) == [("lo world", 3)]

    spaced = Element("p", children=[TextNode("one "), Element("b", children=[TextNode("two three")])])
    assert offsets(split_points(spaced)) == [("two three", 0), ("two three", 4)]


def test_block_edges_are_boundaries():
    node = Element("ul", children=[
        Element("li", children=[TextNode("first")]),
        Element("li", children=[TextNode("second")]),
    ])
    assert offsets(split_points(node)) == [("second", 0)]


def test_single_word_has_no_points():
    assert split_points(paragraph("x" * 200)) == []


def test_split_long_paragraph_keeps_longest_prefix(splitter, detector):
    original = words(30)
    para = paragraph(original)
    source = ContentRoot([para])
    dest = ContentRoot(page_number=2)

    assert splitter.split(para, source, dest, MAX_HEIGHT)

    assert not detector.is_overflowing(source, MAX_HEIGHT)
    # nine lines of two words plus the paragraph margin
    assert source.text_content == words(18) + " "
    assert dest.text_content.startswith("word18 ")
    assert source.text_content + dest.text_content == original
    assert to_html(dest).startswith("<p>word18")


def test_split_root_level_text(splitter):
    text = TextNode(words(30))
    source = ContentRoot([text])
    dest = ContentRoot()

    assert splitter.split(text, source, dest, MAX_HEIGHT)

    # root-level text has no margin: ten lines of two words
    assert text.text == words(20) + " "
    assert isinstance(dest.first_child, TextNode)
    assert dest.first_child.text.startswith("word20")


def test_split_nested_list_clones_ancestors(splitter, detector):
    items = [Element("li", children=[TextNode(words(4, prefix))]) for prefix in ("alfa", "beta", "gama")]
    listing = Element("ul", {"class": "steps"}, items)
    source = ContentRoot([listing])
    dest = ContentRoot()

    assert splitter.split(listing, source, dest, MAX_HEIGHT)

    # one word per indented line; nine lines plus the list margin fit
    assert detector.height(source) == MAX_HEIGHT
    assert [li.text_content for li in listing.children] == [words(4, "alfa"), words(4, "beta"), "gama00 "]
    clone = dest.first_child
    assert clone is not listing
    assert clone.tag == "ul" and clone.attrs == {"class": "steps"}
    assert [li.text_content for li in clone.children] == ["gama01 gama02 gama03"]


def test_split_at_element_boundary_moves_whole_items(splitter):
    first = Element("li", children=[TextNode(words(9, "alfa"))])
    second = Element("li", children=[TextNode(words(2, "beta"))])
    listing = Element("ul", children=[first, second])
    source = ContentRoot([listing])
    dest = ContentRoot()

    assert splitter.split(listing, source, dest, MAX_HEIGHT)

    assert listing.children == [first]
    assert dest.first_child.children == [second]


def test_failed_split_rolls_back_and_never_builds_dest(splitter):
    filler = paragraph(words(15))
    tail = paragraph(words(4))
    source = ContentRoot([filler, tail])
    before = to_html(source)
    calls = []

    def dest():
        calls.append(1)
        return ContentRoot()

    # even one word of the tail pushes the page past its height
    assert not splitter.split(tail, source, dest, MAX_HEIGHT)
    assert to_html(source) == before
    assert calls == []


def test_unsplittable_node_leaves_everything_in_place(splitter):
    para = paragraph("x" * 200)
    source = ContentRoot([para])
    dest = ContentRoot()
    assert not splitter.split(para, source, dest, MAX_HEIGHT)
    assert para.text_content == "x" * 200
    assert dest.children == []
