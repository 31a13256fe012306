"""Line-oriented recursive-descent parser for proto markdown."""

import logging
import re
from pathlib import Path
from typing import Callable

from lark.exceptions import LarkError

from ..core.types import ParserOptions
from ..rules.registry import run_checks
from .ast import (
    BlockNode,
    CardNode,
    DivNode,
    GridNode,
    ParseResult,
    ScreenNode,
    TableNode,
    WorkflowNode,
)
from .classifier import FALLBACK_RULE, LineClassifier
from .directives import DirectiveParser, Directives, get_directive_parser
from .inline import parse_inline_emphasis


logger = logging.getLogger(__name__)

TABLE_START = re.compile(r"^\s*\|.*\|")
CARD_OPEN = re.compile(r"^\[--\s*(.*)$")
GRID_OPEN = re.compile(r"^\[grid\s+(.*)$")
WORKFLOW_OPEN = re.compile(r"^\[workflow(?:\s+([^\]]*))?$")
SCREEN_OPEN = re.compile(r"^\[screen\s+([^\s\]]+)\s*$")
# A lone "[" opens a div only when the line has no "]"; otherwise it is a
# button or field line.
DIV_OPEN = re.compile(r"^\[\s*([^\]]*)$")

CARD_CLOSE = "--]"
BLOCK_CLOSE = "]"

DEFAULT_INITIAL_SCREEN = "home"
MAX_NESTING_DEPTH = 64

# Checked in this order, before the line classifier.
OPENERS: list[tuple[str, re.Pattern]] = [
    ("table", TABLE_START),
    ("card", CARD_OPEN),
    ("grid", GRID_OPEN),
    ("workflow", WORKFLOW_OPEN),
    ("div", DIV_OPEN),
]
WORKFLOW_OPENERS: list[tuple[str, re.Pattern]] = [("screen", SCREEN_OPEN)] + OPENERS

Builder = Callable[[list[str], int, re.Match, list[str], int], tuple[BlockNode, int]]


class MarkdownParser:
    """Parser for proto markdown documents.

    Holds only read-only configuration; the line cursor, nesting depth and
    diagnostics are local to each parse call and threaded through the
    recursive helpers, so one instance can be shared between threads.
    """

    def __init__(
        self,
        options: ParserOptions | None = None,
        directive_parser: DirectiveParser | None = None,
    ):
        self.options = options or ParserOptions()
        self.classifier = LineClassifier()
        self.directive_parser = directive_parser or get_directive_parser()
        self.builders: dict[str, Builder] = {
            "table": self._parse_table,
            "card": self._parse_card,
            "grid": self._parse_grid,
            "workflow": self._parse_workflow,
            "screen": self._parse_screen,
            "div": self._parse_div,
        }

    def parse(self, markdown: str) -> ParseResult:
        """Parse markdown content and return the AST."""
        # Only "\n" ends a line; a trailing "\r" from CRLF input is dropped.
        lines = [line.removesuffix("\r") for line in markdown.split("\n")]
        errors: list[str] = []
        nodes, _, _ = self._parse_blocks(lines, 0, errors, depth=0)
        return ParseResult(nodes=nodes, errors=errors or None)

    def parse_file(self, path: Path) -> ParseResult:
        """Parse a markdown file and return the AST."""
        with open(path, encoding="utf-8") as f:
            content = f.read()
        return self.parse(content)

    def _line(self, lines: list[str], index: int) -> str:
        if self.options.preserve_whitespace:
            return lines[index]
        return lines[index].strip()

    def _parse_blocks(
        self,
        lines: list[str],
        index: int,
        errors: list[str],
        depth: int,
        closer: str | None = None,
        in_workflow: bool = False,
    ) -> tuple[list[BlockNode], int, bool]:
        """
        Parse block lines until the closer or end of input.

        Returns the nodes, the index after the closer (or len(lines)), and
        whether the closer was found.
        """
        nodes: list[BlockNode] = []

        while index < len(lines):
            line = self._line(lines, index)
            if closer is not None and line == closer:
                return nodes, index + 1, True
            if not line.strip():
                index += 1
                continue

            start = index
            node, index = self._parse_block(lines, index, errors, depth, in_workflow)
            if node is None:
                continue
            if in_workflow and not isinstance(node, ScreenNode):
                logger.warning("Dropping %s on line %d: workflows only hold screens", node.type, start + 1)
                if self.options.strict:
                    errors.append(f"Line {start + 1}: Expected a screen inside workflow")
                continue
            nodes.append(node)

        return nodes, index, False

    def _parse_block(
        self,
        lines: list[str],
        index: int,
        errors: list[str],
        depth: int,
        in_workflow: bool,
    ) -> tuple[BlockNode | None, int]:
        line = self._line(lines, index)

        for kind, pattern in WORKFLOW_OPENERS if in_workflow else OPENERS:
            match = pattern.match(line)
            if not match:
                continue
            if kind != "table" and depth >= MAX_NESTING_DEPTH:
                logger.warning("Nesting deeper than %d on line %d, reading opener as a line", MAX_NESTING_DEPTH, index + 1)
                if self.options.strict:
                    errors.append(f"Line {index + 1}: Nesting deeper than {MAX_NESTING_DEPTH} levels")
                    return None, index + 1
                break
            return self.builders[kind](lines, index, match, errors, depth)

        rule, node = self.classifier.classify(line)
        if rule == FALLBACK_RULE and self.options.strict:
            failures = run_checks(line, self.options.checks)
            if failures:
                errors.append(f'Line {index + 1}: Unable to parse "{line}" ({"; ".join(failures)})')
                return None, index + 1
        return node, index + 1

    def _parse_body(
        self,
        lines: list[str],
        index: int,
        kind: str,
        errors: list[str],
        depth: int,
        in_workflow: bool = False,
    ) -> tuple[list[BlockNode], int]:
        """Parse the children of the container opened on line index."""
        closer = CARD_CLOSE if kind == "card" else BLOCK_CLOSE
        children, next_index, closed = self._parse_blocks(
            lines, index + 1, errors, depth + 1, closer, in_workflow
        )
        if not closed:
            logger.debug("Unterminated %s from line %d closed at end of input", kind, index + 1)
        return children, next_index

    def _parse_table(self, lines, index, match, errors, depth):
        headers = _split_cells(self._line(lines, index))
        index += 1

        if index < len(lines):
            separator = self._line(lines, index)
            if "-" in separator and "|" in separator:
                index += 1

        rows: list[list[str]] = []
        while index < len(lines):
            row = self._line(lines, index)
            if not row.strip() or "|" not in row:
                break
            rows.append(_split_cells(row))
            index += 1

        return TableNode(headers=headers, rows=rows), index

    def _parse_card(self, lines, index, match, errors, depth):
        title = match.group(1)
        children, next_index = self._parse_body(lines, index, "card", errors, depth)
        node = CardNode(
            title_children=parse_inline_emphasis(title) if title else None,
            children=children,
        )
        return node, next_index

    def _parse_grid(self, lines, index, match, errors, depth):
        children, next_index = self._parse_body(lines, index, "grid", errors, depth)
        return GridNode(grid_config=match.group(1), children=children), next_index

    def _parse_div(self, lines, index, match, errors, depth):
        children, next_index = self._parse_body(lines, index, "div", errors, depth)
        class_name = match.group(1).strip() or None
        return DivNode(class_name=class_name, children=children), next_index

    def _parse_workflow(self, lines, index, match, errors, depth):
        directives = self._read_directives(match.group(1) or "", index, errors)
        screens, next_index = self._parse_body(
            lines, index, "workflow", errors, depth, in_workflow=True
        )
        initial_screen = directives.get("initial")
        if initial_screen is None:
            initial_screen = screens[0].id if screens else DEFAULT_INITIAL_SCREEN
        return WorkflowNode(initial_screen=initial_screen, children=screens), next_index

    def _parse_screen(self, lines, index, match, errors, depth):
        children, next_index = self._parse_body(lines, index, "screen", errors, depth)
        return ScreenNode(id=match.group(1), children=children), next_index

    def _read_directives(self, text: str, index: int, errors: list[str]) -> Directives:
        try:
            return self.directive_parser.parse(text)
        except LarkError as e:
            logger.warning("Ignoring invalid workflow directives on line %d: %s", index + 1, e)
            if self.options.strict:
                errors.append(f'Line {index + 1}: Invalid workflow directives "{text}"')
            return Directives()


def _split_cells(line: str) -> list[str]:
    return [cell.strip() for cell in line.split("|") if cell.strip()]
