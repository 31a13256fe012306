"""Tests for single-line block parsing."""

import pytest
from protomd.core.types import ButtonVariant, InputType, ParserOptions
from protomd.dsl.ast import ButtonNode, HeaderNode, InputNode, TextNode
from protomd.dsl.parser import MarkdownParser


@pytest.fixture
def parser():
    return MarkdownParser()


def test_header(parser):
    """Test that a hash prefix produces a header with inline children."""
    result = parser.parse("# H1 header")

    assert len(result.nodes) == 1
    header = result.nodes[0]
    assert isinstance(header, HeaderNode)
    assert header.level == 1
    assert header.to_dict()["children"] == [{"type": "text", "content": "H1 header"}]


@pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
def test_header_levels(parser, level):
    """Test that header level equals the number of hashes."""
    result = parser.parse("#" * level + " Title")
    assert result.nodes[0].level == level


def test_seven_hashes_is_text(parser):
    """Test that more than six hashes is not a header."""
    result = parser.parse("####### Too deep")
    assert result.nodes[0].type == "text"


def test_hash_without_space_is_text(parser):
    """Test that a header needs whitespace after the hashes."""
    result = parser.parse("#NoSpace")
    assert result.nodes[0].type == "text"


@pytest.mark.parametrize(
    "line, expected",
    [
        ("Email ___", {"type": "input", "label": "Email", "inputType": "text"}),
        ("Password __*", {"type": "input", "label": "Password", "inputType": "password"}),
        ("Description |___|", {"type": "textarea", "label": "Description"}),
        ("Role __>", {"type": "dropdown", "label": "Role"}),
        (
            "Role __> [Admin, User, Guest]",
            {"type": "dropdown", "label": "Role", "options": ["Admin", "User", "Guest"]},
        ),
        (
            "Status __> [ Active , Inactive , Pending ]",
            {"type": "dropdown", "label": "Status", "options": ["Active", "Inactive", "Pending"]},
        ),
        ("Remember me __[]", {"type": "checkbox", "label": "Remember me"}),
        (
            "Account Type __() [Personal, Business, Enterprise]",
            {"type": "radiogroup", "label": "Account Type", "options": ["Personal", "Business", "Enterprise"]},
        ),
    ],
)
def test_single_fields(parser, line, expected):
    """Test that each field marker produces its field node."""
    result = parser.parse(line)

    assert len(result.nodes) == 1
    assert result.nodes[0].to_dict() == expected


def test_field_label_is_trimmed(parser):
    """Test that labels lose the whitespace before the marker."""
    result = parser.parse("Full   name    ___")
    assert result.nodes[0].label == "Full   name"


def test_dropdown_options_without_space_before_bracket(parser):
    """Test that the option list may follow the dropdown marker directly."""
    result = parser.parse("Size __>[S, M, L]")
    assert result.nodes[0].to_dict() == {"type": "dropdown", "label": "Size", "options": ["S", "M", "L"]}


def test_empty_dropdown_options_are_dropped(parser):
    """Test that blank entries in an option list are discarded."""
    result = parser.parse("Size __> [S, , L,]")
    assert result.nodes[0].options == ["S", "L"]


def test_radio_group_with_no_options_is_not_a_radio_group(parser):
    """Test that a radio group with only blank options falls through."""
    result = parser.parse("Pick __() [ , ]")
    assert result.nodes[0].type != "radiogroup"


def test_outline_button(parser):
    """Test that a bracketed label is an outline button."""
    result = parser.parse("[submit]")
    assert result.nodes[0].to_dict() == {"type": "button", "content": "submit", "variant": "outline"}


def test_default_button(parser):
    """Test that a parenthesised label is a default button."""
    result = parser.parse("[(cancel)]")
    assert result.nodes[0].to_dict() == {"type": "button", "content": "cancel", "variant": "default"}


@pytest.mark.parametrize(
    "line, variant, content, class_name",
    [
        ("[Submit | text-lg px-8]", ButtonVariant.OUTLINE, "Submit", "text-lg px-8"),
        ("[(Submit) | bg-green-500 hover:bg-green-600]", ButtonVariant.DEFAULT, "Submit", "bg-green-500 hover:bg-green-600"),
        ("[Save | bg-blue-500 text-white px-6 py-2]", ButtonVariant.OUTLINE, "Save", "bg-blue-500 text-white px-6 py-2"),
    ],
)
def test_button_classes(parser, line, variant, content, class_name):
    """Test that text after a pipe becomes the button class name."""
    button = parser.parse(line).nodes[0]

    assert isinstance(button, ButtonNode)
    assert button.variant == variant
    assert button.content == content
    assert button.class_name == class_name


def test_button_navigation(parser):
    """Test that an arrow sets the navigation target."""
    result = parser.parse("[(Get Started) -> login]")
    assert result.nodes[0].to_dict() == {
        "type": "button",
        "content": "Get Started",
        "variant": "default",
        "navigateTo": "login",
    }


def test_outline_button_navigation(parser):
    """Test that outline buttons can navigate too."""
    result = parser.parse("[Back -> home]")
    assert result.nodes[0].to_dict() == {
        "type": "button",
        "content": "Back",
        "variant": "outline",
        "navigateTo": "home",
    }


def test_button_navigation_and_classes(parser):
    """Test that navigation and classes can be combined."""
    button = parser.parse("[(Next) -> step2 | w-full]").nodes[0]

    assert button.content == "Next"
    assert button.navigate_to == "step2"
    assert button.class_name == "w-full"


@pytest.mark.parametrize("line", ["[login] [cancel]", "[login][cancel]"])
def test_button_row(parser, line):
    """Test that several bracket groups form a container of buttons."""
    result = parser.parse(line)

    container = result.nodes[0]
    assert container.type == "container"
    assert [b.to_dict() for b in container.children] == [
        {"type": "button", "content": "login", "variant": "outline"},
        {"type": "button", "content": "cancel", "variant": "outline"},
    ]


def test_button_row_mixed_variants_and_navigation(parser):
    """Test that each group in a row keeps its own variant and target."""
    container = parser.parse("[(Save) -> success][Cancel][Back -> home]").nodes[0]

    assert [b.variant for b in container.children] == [
        ButtonVariant.DEFAULT,
        ButtonVariant.OUTLINE,
        ButtonVariant.OUTLINE,
    ]
    assert [b.navigate_to for b in container.children] == ["success", None, "home"]


def test_image(parser):
    """Test that image syntax produces an image node."""
    result = parser.parse("![Logo image](https://example.com/logo.png)")
    assert result.nodes[0].to_dict() == {
        "type": "image",
        "alt": "Logo image",
        "src": "https://example.com/logo.png",
    }


def test_image_without_alt(parser):
    """Test that alt text may be empty."""
    result = parser.parse("![](/images/banner.png)")
    assert result.nodes[0].to_dict() == {"type": "image", "alt": "", "src": "/images/banner.png"}


def test_fallback_text(parser):
    """Test that lines matching no rule become text."""
    result = parser.parse("Some random text\n$$$ weird syntax $$$\n~~~ another line ~~~")

    assert [n.type for n in result.nodes] == ["text", "text", "text"]
    assert result.nodes[1].children[0].content == "$$$ weird syntax $$$"
    assert result.errors is None


def test_table(parser):
    """Test that a pipe table produces headers and rows."""
    result = parser.parse("| Name | Age |\n|------|-----|\n| John | 30 |\n| Jane | 25 |")

    table = result.nodes[0]
    assert table.type == "table"
    assert table.headers == ["Name", "Age"]
    assert table.rows == [["John", "30"], ["Jane", "25"]]


def test_table_without_separator(parser):
    """Test that the separator line is optional."""
    table = parser.parse("| Name | Email |\n| John | john@example.com |").nodes[0]

    assert table.headers == ["Name", "Email"]
    assert table.rows == [["John", "john@example.com"]]


def test_table_ends_at_line_without_pipes(parser):
    """Test that a row without a pipe ends the table."""
    result = parser.parse("| A | B |\n|---|---|\n| 1 | 2 |\nEnd of table")

    assert [n.type for n in result.nodes] == ["table", "text"]
    assert result.nodes[0].rows == [["1", "2"]]


def test_table_ends_at_blank_line(parser):
    """Test that a blank line ends the table."""
    result = parser.parse("| A | B |\n|---|---|\n| 1 | 2 |\n\n| 3 | 4 |")

    assert [n.type for n in result.nodes] == ["table", "table"]


def test_table_empty_cells_are_dropped(parser):
    """Test that empty cells are not kept."""
    table = parser.parse("| A | | B |").nodes[0]
    assert table.headers == ["A", "B"]


def test_blank_lines_are_skipped(parser):
    """Test that blank lines produce no nodes."""
    result = parser.parse("# Header\n\nEmail ___\n\n\n   \nPassword __*\n\n")
    assert [n.type for n in result.nodes] == ["header", "input", "input"]


def test_crlf_line_endings(parser):
    """Test that CRLF input parses like LF input."""
    result = parser.parse("# Title\r\nEmail ___\r\n")

    assert [n.type for n in result.nodes] == ["header", "input"]
    assert result.nodes[1].label == "Email"


def test_empty_input(parser):
    """Test that empty input yields no nodes and no errors."""
    result = parser.parse("")

    assert result.nodes == []
    assert result.errors is None
    assert result.to_dict() == {"nodes": []}


def test_lines_are_trimmed_by_default(parser):
    """Test that indentation does not stop classification."""
    result = parser.parse("    # Header\n    Email ___   ")

    assert isinstance(result.nodes[0], HeaderNode)
    assert isinstance(result.nodes[1], InputNode)
    assert result.nodes[1].input_type == InputType.TEXT


def test_preserve_whitespace():
    """Test that untrimmed lines no longer match anchored rules."""
    parser = MarkdownParser(ParserOptions(preserve_whitespace=True))
    result = parser.parse("  # Header with spaces\n  Email ___  ")

    assert len(result.nodes) == 2
    assert all(isinstance(n, TextNode) for n in result.nodes)


def test_parse_file(parser, tmp_path):
    """Test that parse_file reads and parses a document."""
    path = tmp_path / "form.pmd"
    path.write_text("# Sign up\nEmail ___\n", encoding="utf-8")

    result = parser.parse_file(path)
    assert [n.type for n in result.nodes] == ["header", "input"]


def test_parser_is_reusable(parser):
    """Test that one parser instance gives identical results across calls."""
    first = parser.parse("[-- Card\nEmail ___\n--]")
    second = parser.parse("[-- Card\nEmail ___\n--]")
    assert first == second


@pytest.mark.parametrize("separator", ["\x0c", "\x0b", "\x1c", "\x85", "\u2028", "\u2029"])
def test_only_newline_separates_lines(parser, separator):
    """Test that other line-break characters stay inside one text line."""
    result = parser.parse(f"Terms{separator}and conditions")

    assert len(result.nodes) == 1
    assert result.nodes[0].type == "text"
    assert result.nodes[0].children[0].content == f"Terms{separator}and conditions"


def test_crlf_input_with_preserve_whitespace():
    """Test that CRLF line endings still close containers when lines are not trimmed."""
    parser = MarkdownParser(ParserOptions(preserve_whitespace=True))
    result = parser.parse("[-- Card\r\nEmail ___\r\n--]\r\nAfter")

    assert [n.type for n in result.nodes] == ["card", "text"]
    assert [c.type for c in result.nodes[0].children] == ["input"]


def test_line_numbers_ignore_form_feeds():
    """Test that a form feed inside a line does not shift diagnostics."""
    parser = MarkdownParser(ParserOptions(strict=True))
    result = parser.parse("Page one\x0cpage two\n![broken](")

    assert result.errors[0].startswith("Line 2:")
