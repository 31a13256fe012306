"""Line classifier for single non-container, non-table lines."""

import logging
import re
from typing import Callable

from ..core.types import ButtonVariant, InputType
from .ast import (
    BlockNode,
    ButtonNode,
    CheckboxNode,
    ContainerNode,
    DropdownNode,
    HeaderNode,
    ImageNode,
    InputNode,
    LeafNode,
    RadioGroupNode,
    TextareaNode,
    TextNode,
)
from .inline import parse_inline_emphasis


logger = logging.getLogger(__name__)

HEADER = re.compile(r"^(#{1,6})\s+(.+)$")
FIELD_MARKER = re.compile(r"\s+(___|\|___\||__\*|__>(?:\s*\[[^\]]+\])?|__\[\])")
FIELD_OPTIONS = re.compile(r"\[([^\]]+)\]")
PASSWORD = re.compile(r"^(.+?)\s+__\*$")
TEXTAREA = re.compile(r"^(.+?)\s+\|___\|$")
TEXT_INPUT = re.compile(r"^(.+?)\s+___$")
CHECKBOX = re.compile(r"^(.+?)\s+__\[\]$")
RADIO_GROUP = re.compile(r"^(.+?)\s+__\(\)\s*\[(.+?)\]$")
DROPDOWN_OPTIONS = re.compile(r"^(.+?)\s+__>\s*\[(.+?)\]$")
DROPDOWN = re.compile(r"^(.+?)\s+__>$")
IMAGE = re.compile(r"^!\[([^\]]*)\]\(([^)]+)\)$")

BUTTON_ROW = re.compile(r"^(?:\[[^\[\]|]+\]\s*)+$")
BUTTON_GROUP = re.compile(r"\[([^\[\]|]+)\]")
GROUP_DEFAULT = re.compile(r"^\s*\((.+?)\)\s*(?:->\s*([^\s\[\]|]+))?\s*$")
GROUP_OUTLINE = re.compile(r"^\s*(.+?)\s*(?:->\s*([^\s\[\]|]+))?\s*$")
DEFAULT_BUTTON = re.compile(r"^\[\((.+?)\)(?:\s*->\s*([^\s|\]]+))?(?:\s*\|\s*(.+))?\]$")
OUTLINE_BUTTON = re.compile(r"^\[([^|]+?)(?:\s*->\s*([^\s|\]]+))?(?:\s*\|\s*(.+))?\]$")

FALLBACK_RULE = "text"


def split_options(raw: str) -> list[str]:
    """Split a comma-separated option list, dropping empty entries."""
    return [opt.strip() for opt in raw.split(",") if opt.strip()]


def find_fields(line: str) -> list[tuple[str, str]]:
    """
    Find every label + field marker pair on a line, left to right.

    Each label is the text between the previous marker (or the line start)
    and the whitespace before the next marker, and is at least one character
    long. Each search resumes after the last marker, so a long line is
    scanned once.
    """
    fields: list[tuple[str, str]] = []
    start = 0
    while start < len(line):
        match = FIELD_MARKER.search(line, start + 1)
        if not match:
            break
        fields.append((line[start:match.start()], match.group(1)))
        start = match.end()
    return fields


def field_from_marker(label: str, marker: str) -> LeafNode:
    """Build the leaf node for one label + field marker pair."""
    label = label.strip()
    if marker == "__*":
        return InputNode(label=label, input_type=InputType.PASSWORD)
    if marker == "|___|":
        return TextareaNode(label=label)
    if marker == "__[]":
        return CheckboxNode(label=label)
    if marker.startswith("__>"):
        options = FIELD_OPTIONS.search(marker)
        if options:
            return DropdownNode(label=label, options=split_options(options.group(1)))
        return DropdownNode(label=label)
    return InputNode(label=label, input_type=InputType.TEXT)


def button_from_group(inner: str) -> ButtonNode:
    """Build a button from the text between one pair of brackets."""
    match = GROUP_DEFAULT.match(inner)
    if match:
        return ButtonNode(
            content=match.group(1).strip(),
            variant=ButtonVariant.DEFAULT,
            navigate_to=match.group(2),
        )
    match = GROUP_OUTLINE.match(inner)
    return ButtonNode(
        content=match.group(1).strip(),
        variant=ButtonVariant.OUTLINE,
        navigate_to=match.group(2),
    )


def _classes(raw: str | None) -> str | None:
    if raw is None:
        return None
    return raw.strip() or None


class LineClassifier:
    """Classifies one physical line into exactly one AST node.

    Rules are tried in order and the first one that builds a node wins; a
    line no rule accepts becomes plain text. The order is part of the syntax:
    field groups must be seen before single fields, and button rows before
    single buttons.
    """

    def __init__(self):
        self.rules: list[tuple[str, Callable[[str], BlockNode | None]]] = [
            ("header", self._header),
            ("field_group", self._field_group),
            ("password", self._password),
            ("textarea", self._textarea),
            ("text_input", self._text_input),
            ("checkbox", self._checkbox),
            ("radiogroup", self._radio_group),
            ("dropdown_options", self._dropdown_options),
            ("dropdown", self._dropdown),
            ("image", self._image),
            ("button_row", self._button_row),
            ("default_button", self._default_button),
            ("outline_button", self._outline_button),
        ]

    def classify(self, line: str) -> tuple[str, BlockNode]:
        """Return the name of the matching rule and the node it built."""
        for name, rule in self.rules:
            node = rule(line)
            if node is not None:
                logger.debug("Classified %r as %s", line, name)
                return name, node
        logger.debug("No rule matched %r, falling back to text", line)
        return FALLBACK_RULE, self._text(line)

    def _header(self, line: str) -> HeaderNode | None:
        match = HEADER.match(line)
        if match:
            return HeaderNode(
                level=len(match.group(1)),
                children=parse_inline_emphasis(match.group(2)),
            )
        return None

    def _field_group(self, line: str) -> ContainerNode | None:
        fields = find_fields(line)
        if len(fields) < 2:
            return None
        return ContainerNode(
            children=[field_from_marker(label, marker) for label, marker in fields]
        )

    def _password(self, line: str) -> InputNode | None:
        match = PASSWORD.match(line)
        if match:
            return InputNode(label=match.group(1).strip(), input_type=InputType.PASSWORD)
        return None

    def _textarea(self, line: str) -> TextareaNode | None:
        match = TEXTAREA.match(line)
        if match:
            return TextareaNode(label=match.group(1).strip())
        return None

    def _text_input(self, line: str) -> InputNode | None:
        match = TEXT_INPUT.match(line)
        if match:
            return InputNode(label=match.group(1).strip(), input_type=InputType.TEXT)
        return None

    def _checkbox(self, line: str) -> CheckboxNode | None:
        match = CHECKBOX.match(line)
        if match:
            return CheckboxNode(label=match.group(1).strip())
        return None

    def _radio_group(self, line: str) -> RadioGroupNode | None:
        match = RADIO_GROUP.match(line)
        if not match:
            return None
        options = split_options(match.group(2))
        if not options:
            return None
        return RadioGroupNode(label=match.group(1).strip(), options=options)

    def _dropdown_options(self, line: str) -> DropdownNode | None:
        match = DROPDOWN_OPTIONS.match(line)
        if match:
            return DropdownNode(
                label=match.group(1).strip(),
                options=split_options(match.group(2)),
            )
        return None

    def _dropdown(self, line: str) -> DropdownNode | None:
        match = DROPDOWN.match(line)
        if match:
            return DropdownNode(label=match.group(1).strip())
        return None

    def _image(self, line: str) -> ImageNode | None:
        match = IMAGE.match(line)
        if match:
            return ImageNode(alt=match.group(1), src=match.group(2))
        return None

    def _button_row(self, line: str) -> ContainerNode | None:
        if not BUTTON_ROW.match(line):
            return None
        groups = BUTTON_GROUP.findall(line)
        if len(groups) < 2:
            return None
        return ContainerNode(children=[button_from_group(group) for group in groups])

    def _default_button(self, line: str) -> ButtonNode | None:
        match = DEFAULT_BUTTON.match(line)
        if match:
            return ButtonNode(
                content=match.group(1).strip(),
                variant=ButtonVariant.DEFAULT,
                navigate_to=match.group(2),
                class_name=_classes(match.group(3)),
            )
        return None

    def _outline_button(self, line: str) -> ButtonNode | None:
        match = OUTLINE_BUTTON.match(line)
        if match:
            return ButtonNode(
                content=match.group(1).strip(),
                variant=ButtonVariant.OUTLINE,
                navigate_to=match.group(2),
                class_name=_classes(match.group(3)),
            )
        return None

    def _text(self, line: str) -> TextNode:
        return TextNode(children=parse_inline_emphasis(line))
