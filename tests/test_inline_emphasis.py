"""Tests for inline emphasis tokenization."""

from protomd.dsl.inline import parse_inline_emphasis
from protomd.dsl.parser import MarkdownParser


def _dump(nodes):
    return [node.to_dict() for node in nodes]


def test_plain_text():
    """Test that text without markers is one text node."""
    assert _dump(parse_inline_emphasis("Just plain text here")) == [
        {"type": "text", "content": "Just plain text here"},
    ]


def test_empty_text():
    """Test that an empty run yields no nodes."""
    assert parse_inline_emphasis("") == []


def test_italic():
    """Test that underscores mark italic text."""
    assert _dump(parse_inline_emphasis("This is _italic_ text")) == [
        {"type": "text", "content": "This is "},
        {"type": "italic", "content": "italic"},
        {"type": "text", "content": " text"},
    ]


def test_bold():
    """Test that asterisks mark bold text."""
    assert _dump(parse_inline_emphasis("This is *bold* text")) == [
        {"type": "text", "content": "This is "},
        {"type": "bold", "content": "bold"},
        {"type": "text", "content": " text"},
    ]


def test_bold_italic():
    """Test that underscore-asterisk wraps an italic inside bold."""
    assert _dump(parse_inline_emphasis("This is _*bold and italic*_ text")) == [
        {"type": "text", "content": "This is "},
        {"type": "bold", "children": [{"type": "italic", "content": "bold and italic"}]},
        {"type": "text", "content": " text"},
    ]


def test_multiple_emphasis():
    """Test that several emphasis spans alternate with text."""
    nodes = parse_inline_emphasis("Some _italic_ and *bold* text")
    assert [n.type for n in nodes] == ["text", "italic", "text", "bold", "text"]


def test_emphasis_at_edges():
    """Test emphasis at the start and end of the run."""
    nodes = parse_inline_emphasis("_italic_ text *bold*")
    assert [n.type for n in nodes] == ["italic", "text", "bold"]


def test_consecutive_emphasis():
    """Test that adjacent spans are not merged."""
    assert _dump(parse_inline_emphasis("_italic_*bold*")) == [
        {"type": "italic", "content": "italic"},
        {"type": "bold", "content": "bold"},
    ]


def test_lone_underscore():
    """Test that an unmatched underscore becomes a one-character text node."""
    assert _dump(parse_inline_emphasis("This _ is _ not _ emphasis")) == [
        {"type": "text", "content": "This "},
        {"type": "italic", "content": " is "},
        {"type": "text", "content": " not "},
        {"type": "text", "content": "_"},
        {"type": "text", "content": " emphasis"},
    ]


def test_lone_asterisk():
    """Test that an unmatched asterisk becomes a one-character text node."""
    assert _dump(parse_inline_emphasis("This * is * not * emphasis")) == [
        {"type": "text", "content": "This "},
        {"type": "bold", "content": " is "},
        {"type": "text", "content": " not "},
        {"type": "text", "content": "*"},
        {"type": "text", "content": " emphasis"},
    ]


def test_empty_markers_are_text():
    """Test that a marker pair with nothing between does not form emphasis."""
    nodes = parse_inline_emphasis("**")
    assert _dump(nodes) == [
        {"type": "text", "content": "*"},
        {"type": "text", "content": "*"},
    ]


def test_concatenation_reproduces_plain_text():
    """Test that text nodes of an unmarked run concatenate back to the input."""
    text = "a * b _ c"
    nodes = parse_inline_emphasis(text)
    assert "".join(n.content for n in nodes if n.type == "text") == text


def test_emphasis_in_header():
    """Test that header text is tokenized."""
    header = MarkdownParser().parse("# This is a *bold* header with _italic_").nodes[0]
    assert _dump(header.children) == [
        {"type": "text", "content": "This is a "},
        {"type": "bold", "content": "bold"},
        {"type": "text", "content": " header with "},
        {"type": "italic", "content": "italic"},
    ]


def test_card_title_bold_italic():
    """Test that card titles support bold italic."""
    card = MarkdownParser().parse("[-- _*Very Important*_ Form\nEmail ___\n--]").nodes[0]

    assert card.title_children[0].type == "bold"
    assert card.title_children[0].children[0].content == "Very Important"
    assert card.title_children[1].content == " Form"
