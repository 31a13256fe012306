"""Renderer for static HTML preview markup."""

import json
import re
from html import escape

from lark.exceptions import LarkError

from ..core.types import ButtonVariant, InputType
from ..dsl.ast import (
    BoldNode,
    ButtonNode,
    CardNode,
    CheckboxNode,
    ContainerNode,
    DivNode,
    DropdownNode,
    GridNode,
    HeaderNode,
    ImageNode,
    InlineNode,
    InlineTextNode,
    InputNode,
    ItalicNode,
    Node,
    RadioGroupNode,
    ScreenNode,
    TableNode,
    TextareaNode,
    TextNode,
    WorkflowNode,
)
from ..dsl.directives import DirectiveParser, get_directive_parser


COLS = re.compile(r"^cols-(\d+)$")
GAP = re.compile(r"^gap-(\d+)$")
GAP_UNIT_PX = 4


class HtmlRenderer:
    """Renders an AST to HTML with proto-* CSS classes."""

    def __init__(self, directive_parser: DirectiveParser | None = None):
        self.directive_parser = directive_parser or get_directive_parser()
        self.handlers = {
            "header": self._render_header,
            "text": self._render_text,
            "input": self._render_input,
            "textarea": self._render_textarea,
            "checkbox": self._render_checkbox,
            "radiogroup": self._render_radio_group,
            "dropdown": self._render_dropdown,
            "button": self._render_button,
            "image": self._render_image,
            "table": self._render_table,
            "container": self._render_container,
            "card": self._render_card,
            "grid": self._render_grid,
            "div": self._render_div,
            "workflow": self._render_workflow,
            "screen": self._render_screen,
        }

    def render(self, nodes: list[Node]) -> str:
        """Render block nodes to HTML."""
        return "\n".join(self._render_node(node) for node in nodes)

    def _render_node(self, node: Node) -> str:
        handler = self.handlers.get(node.type)
        if handler is None:
            return f'<div class="proto-unknown">{escape(json.dumps(node.to_dict()))}</div>'
        return handler(node)

    def render_inline(self, nodes: list[InlineNode]) -> str:
        """Render inline nodes (text, bold, italic) to HTML."""
        parts = []
        for node in nodes:
            if isinstance(node, BoldNode):
                inner = self.render_inline(node.children) if node.children else escape(node.content or "")
                parts.append(f"<strong>{inner}</strong>")
            elif isinstance(node, ItalicNode):
                parts.append(f"<em>{escape(node.content)}</em>")
            elif isinstance(node, InlineTextNode):
                parts.append(escape(node.content))
        return "".join(parts)

    def _render_header(self, node: HeaderNode) -> str:
        return f'<h{node.level} class="proto-header">{self.render_inline(node.children)}</h{node.level}>'

    def _render_text(self, node: TextNode) -> str:
        return f'<p class="proto-text">{self.render_inline(node.children)}</p>'

    def _render_input(self, node: InputNode) -> str:
        placeholder = "••••••••" if node.input_type == InputType.PASSWORD else ""
        return (
            '<div class="proto-field">'
            f'<label class="proto-label">{escape(node.label)}</label>'
            f'<input type="{node.input_type.value}" class="proto-input" placeholder="{placeholder}" disabled />'
            "</div>"
        )

    def _render_textarea(self, node: TextareaNode) -> str:
        return (
            '<div class="proto-field">'
            f'<label class="proto-label">{escape(node.label)}</label>'
            '<textarea class="proto-textarea" disabled></textarea>'
            "</div>"
        )

    def _render_checkbox(self, node: CheckboxNode) -> str:
        return (
            '<div class="proto-checkbox">'
            '<input type="checkbox" class="proto-checkbox-input" disabled />'
            f'<label class="proto-checkbox-label">{escape(node.label)}</label>'
            "</div>"
        )

    def _render_radio_group(self, node: RadioGroupNode) -> str:
        name = escape(node.label)
        options = "".join(
            '<div class="proto-radio-option">'
            f'<input type="radio" class="proto-radio-input" name="{name}" disabled />'
            f'<label class="proto-radio-label">{escape(opt)}</label>'
            "</div>"
            for opt in node.options
        )
        return (
            '<div class="proto-radiogroup">'
            f'<label class="proto-label">{name}</label>'
            f'<div class="proto-radio-options">{options}</div>'
            "</div>"
        )

    def _render_dropdown(self, node: DropdownNode) -> str:
        options = "".join(
            f"<option>{escape(opt)}</option>" for opt in (node.options or ["Select an option"])
        )
        return (
            '<div class="proto-field">'
            f'<label class="proto-label">{escape(node.label)}</label>'
            f'<select class="proto-select" disabled>{options}</select>'
            "</div>"
        )

    def _render_button(self, node: ButtonNode) -> str:
        variant = "proto-button-default" if node.variant == ButtonVariant.DEFAULT else "proto-button-outline"
        classes = f"proto-button {variant}"
        if node.class_name:
            classes += f" {escape(node.class_name)}"
        indicator = ""
        if node.navigate_to:
            indicator = f' <span class="proto-nav-indicator">→ {escape(node.navigate_to)}</span>'
        return f'<button class="{classes}" disabled>{escape(node.content)}{indicator}</button>'

    def _render_image(self, node: ImageNode) -> str:
        return f'<img class="proto-image" src="{escape(node.src)}" alt="{escape(node.alt)}" />'

    def _render_table(self, node: TableNode) -> str:
        head = "".join(f'<th class="proto-table-th">{escape(h)}</th>' for h in node.headers)
        body = "".join(
            "<tr>" + "".join(f'<td class="proto-table-td">{escape(cell)}</td>' for cell in row) + "</tr>"
            for row in node.rows
        )
        return (
            '<table class="proto-table">'
            f"<thead><tr>{head}</tr></thead>"
            f"<tbody>{body}</tbody>"
            "</table>"
        )

    def _render_container(self, node: ContainerNode) -> str:
        return f'<div class="proto-container">{self.render(node.children)}</div>'

    def _render_card(self, node: CardNode) -> str:
        header = ""
        if node.title_children:
            header = f'<div class="proto-card-header">{self.render_inline(node.title_children)}</div>'
        return (
            '<div class="proto-card">'
            f"{header}"
            f'<div class="proto-card-content">{self.render(node.children)}</div>'
            "</div>"
        )

    def _render_grid(self, node: GridNode) -> str:
        style = self.grid_style(node.grid_config)
        return f'<div class="proto-grid" style="{style}">{self.render(node.children)}</div>'

    def _render_div(self, node: DivNode) -> str:
        classes = "proto-div"
        if node.class_name:
            classes += f" {escape(node.class_name)}"
        return f'<div class="{classes}">{self.render(node.children)}</div>'

    def _render_workflow(self, node: WorkflowNode) -> str:
        screens = "".join(
            self._render_screen(screen, initial=screen.id == node.initial_screen)
            for screen in node.children
        )
        return (
            f'<div class="proto-workflow" data-initial-screen="{escape(node.initial_screen)}">'
            f"{screens}"
            "</div>"
        )

    def _render_screen(self, node: ScreenNode, initial: bool = False) -> str:
        classes = "proto-screen proto-screen-active" if initial else "proto-screen"
        badge = '<span class="proto-screen-initial">Initial</span>' if initial else ""
        return (
            f'<div class="{classes}" data-screen-id="{escape(node.id)}">'
            '<div class="proto-screen-header">'
            f'<span class="proto-screen-badge">{escape(node.id)}</span>{badge}'
            "</div>"
            f'<div class="proto-screen-content">{self.render(node.children)}</div>'
            "</div>"
        )

    def grid_style(self, config: str) -> str:
        """Translate a grid configuration string into inline CSS."""
        try:
            directives = self.directive_parser.parse(config)
        except LarkError:
            return ""

        styles = []
        cols = directives.get("cols")
        gap = directives.get("gap")
        for word in directives.words:
            cols_match = COLS.match(word)
            gap_match = GAP.match(word)
            if cols_match:
                cols = cols_match.group(1)
            elif gap_match:
                gap = gap_match.group(1)

        if cols and cols.isdigit():
            styles.append(f"grid-template-columns: repeat({cols}, 1fr)")
        if gap and gap.isdigit():
            styles.append(f"gap: {int(gap) * GAP_UNIT_PX}px")
        return "; ".join(styles)
