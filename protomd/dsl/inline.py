"""Inline emphasis tokenizer for headers, card titles and text lines."""

import re
from typing import Callable

from .ast import BoldNode, InlineNode, InlineTextNode, ItalicNode


BOLD_ITALIC = re.compile(r"_\*(.+?)\*_")
BOLD = re.compile(r"\*(.+?)\*")
ITALIC = re.compile(r"_(.+?)_")

MARKERS = ("*", "_")

# Tried in order at every position; bold-italic must precede both of its parts.
EMPHASIS_RULES: list[tuple[re.Pattern, Callable[[str], InlineNode]]] = [
    (BOLD_ITALIC, lambda content: BoldNode(children=[ItalicNode(content=content)])),
    (BOLD, lambda content: BoldNode(content=content)),
    (ITALIC, lambda content: ItalicNode(content=content)),
]


def _next_marker(text: str, start: int) -> int:
    """Index of the nearest emphasis marker at or after start, or len(text)."""
    found = [pos for pos in (text.find(marker, start) for marker in MARKERS) if pos != -1]
    return min(found) if found else len(text)


def _match_emphasis(text: str, position: int) -> tuple[InlineNode, int] | None:
    for pattern, build in EMPHASIS_RULES:
        match = pattern.match(text, position)
        if match:
            return build(match.group(1)), match.end()
    return None


def parse_inline_emphasis(text: str) -> list[InlineNode]:
    """
    Split a text run into plain, bold, italic and bold-italic nodes.

    Adjacent nodes of the same kind are never merged. A marker that opens no
    emphasis becomes its own one-character text node.
    """
    nodes: list[InlineNode] = []
    position = 0

    while position < len(text):
        matched = _match_emphasis(text, position)
        if matched:
            node, position = matched
            nodes.append(node)
            continue

        end = _next_marker(text, position)
        if end == position:
            end = position + 1
        nodes.append(InlineTextNode(content=text[position:end]))
        position = end

    return nodes
