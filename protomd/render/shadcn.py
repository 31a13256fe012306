"""Renderer for React components built on shadcn/ui."""

import re
from typing import Iterator, NamedTuple

from ..core.types import ButtonVariant
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


COMPONENT_IMPORTS: dict[str, str] = {
    "Button": 'import { Button } from "@/components/ui/button";',
    "Input": 'import { Input } from "@/components/ui/input";',
    "Textarea": 'import { Textarea } from "@/components/ui/textarea";',
    "Card": 'import { Card, CardHeader, CardTitle, CardContent } from "@/components/ui/card";',
    "Checkbox": 'import { Checkbox } from "@/components/ui/checkbox";',
    "RadioGroup": 'import { RadioGroup, RadioGroupItem } from "@/components/ui/radio-group";',
    "Select": 'import { Select, SelectContent, SelectItem, SelectTrigger, SelectValue } from "@/components/ui/select";',
    "Table": 'import { Table, TableHeader, TableBody, TableRow, TableHead, TableCell } from "@/components/ui/table";',
    "Label": 'import { Label } from "@/components/ui/label";',
}

NODE_COMPONENTS: dict[str, tuple[str, ...]] = {
    "button": ("Button",),
    "input": ("Input", "Label"),
    "textarea": ("Textarea", "Label"),
    "card": ("Card",),
    "checkbox": ("Checkbox", "Label"),
    "radiogroup": ("RadioGroup", "Label"),
    "dropdown": ("Select", "Label"),
    "table": ("Table",),
}

HEADER_SIZES = {1: "4xl", 2: "3xl", 3: "2xl", 4: "xl", 5: "lg", 6: "base"}
INDENT = "  "
BODY_DEPTH = 3
BLOCK_PARENTS = (ContainerNode, CardNode, GridNode, DivNode, WorkflowNode, ScreenNode)


def escape_jsx(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("{", "&#123;")
        .replace("}", "&#125;")
    )


def js_string(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def slugify(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def walk(nodes: list[Node]) -> Iterator[Node]:
    """Yield every block node depth-first, in document order."""
    for node in nodes:
        yield node
        if isinstance(node, BLOCK_PARENTS):
            yield from walk(node.children)


def state_names(position: int) -> tuple[str, str]:
    suffix = "" if position == 0 else str(position + 1)
    return f"currentScreen{suffix}", f"setCurrentScreen{suffix}"


class Scope(NamedTuple):
    """Per-call rendering position: indentation, active screen setter, workflow state names."""
    depth: int
    setter: str | None
    states: dict[int, tuple[str, str]]

    @property
    def pad(self) -> str:
        return INDENT * self.depth

    def deeper(self, levels: int = 1) -> "Scope":
        return self._replace(depth=self.depth + levels)


class ShadcnRenderer:
    """Renders an AST to a React function component using shadcn/ui.

    Rendering keeps no instance state: imports and workflow state are
    collected from the tree up front and indentation travels in a Scope.
    """

    def render(self, nodes: list[Node]) -> str:
        """Render block nodes to a complete component module."""
        workflows = [node for node in walk(nodes) if isinstance(node, WorkflowNode)]
        states = {id(wf): state_names(i) for i, wf in enumerate(workflows)}
        setter = states[id(workflows[0])][1] if workflows else None
        scope = Scope(depth=BODY_DEPTH, setter=setter, states=states)

        lines = []
        if workflows:
            lines.append("import { useState } from 'react';")
        lines.extend(self.imports_for(nodes))
        lines.append("")
        lines.append("export function GeneratedComponent() {")
        for wf in workflows:
            value, set_value = states[id(wf)]
            lines.append(f"  const [{value}, {set_value}] = useState({js_string(wf.initial_screen)});")
        lines.append("  return (")
        lines.append('    <div className="space-y-2">')
        body = self._render_nodes(nodes, scope)
        if body:
            lines.append(body)
        lines.append("    </div>")
        lines.append("  );")
        lines.append("}")
        return "\n".join(lines) + "\n"

    def imports_for(self, nodes: list[Node]) -> list[str]:
        """Import lines for the shadcn components used anywhere in the tree."""
        used = set()
        for node in walk(nodes):
            used.update(NODE_COMPONENTS.get(node.type, ()))
        return [line for name, line in COMPONENT_IMPORTS.items() if name in used]

    def _render_nodes(self, nodes: list[Node], scope: Scope) -> str:
        return "\n".join(self._render_node(node, i, scope) for i, node in enumerate(nodes))

    def _render_node(self, node: Node, index: int, scope: Scope) -> str:
        if isinstance(node, HeaderNode):
            return self._render_header(node, index, scope)
        if isinstance(node, TextNode):
            return f"{scope.pad}<p key={{{index}}}>{self.render_inline(node.children)}</p>"
        if isinstance(node, InputNode):
            return self._render_input(node, index, scope)
        if isinstance(node, TextareaNode):
            return self._render_textarea(node, index, scope)
        if isinstance(node, DropdownNode):
            return self._render_dropdown(node, index, scope)
        if isinstance(node, CheckboxNode):
            return self._render_checkbox(node, index, scope)
        if isinstance(node, RadioGroupNode):
            return self._render_radio_group(node, index, scope)
        if isinstance(node, ButtonNode):
            return self._render_button(node, index, scope)
        if isinstance(node, ImageNode):
            return (
                f'{scope.pad}<img key={{{index}}} src="{escape_jsx(node.src)}" '
                f'alt="{escape_jsx(node.alt)}" className="max-w-full h-auto" />'
            )
        if isinstance(node, TableNode):
            return self._render_table(node, index, scope)
        if isinstance(node, ContainerNode):
            return self._wrap(f'<div key={{{index}}} className="flex gap-2">', "</div>", node.children, scope)
        if isinstance(node, CardNode):
            return self._render_card(node, index, scope)
        if isinstance(node, GridNode):
            classes = f"grid {node.grid_config}".strip()
            return self._wrap(f'<div key={{{index}}} className="{escape_jsx(classes)}">', "</div>", node.children, scope)
        if isinstance(node, DivNode):
            classes = escape_jsx(node.class_name or "")
            return self._wrap(f'<div key={{{index}}} className="{classes}">', "</div>", node.children, scope)
        if isinstance(node, WorkflowNode):
            return self._render_workflow(node, index, scope)
        if isinstance(node, ScreenNode):
            opening = f'<div key={{{index}}} data-screen-id="{escape_jsx(node.id)}" className="space-y-2">'
            return self._wrap(opening, "</div>", node.children, scope)
        return ""

    def _wrap(self, opening: str, closing: str, children: list[Node], scope: Scope) -> str:
        lines = [f"{scope.pad}{opening}"]
        body = self._render_nodes(children, scope.deeper())
        if body:
            lines.append(body)
        lines.append(f"{scope.pad}{closing}")
        return "\n".join(lines)

    def render_inline(self, nodes: list[InlineNode]) -> str:
        """Render inline nodes (text, bold, italic) to JSX."""
        parts = []
        for i, node in enumerate(nodes):
            if isinstance(node, BoldNode):
                inner = self.render_inline(node.children) if node.children else escape_jsx(node.content or "")
                parts.append(f"<strong key={{{i}}}>{inner}</strong>")
            elif isinstance(node, ItalicNode):
                parts.append(f"<em key={{{i}}}>{escape_jsx(node.content)}</em>")
            elif isinstance(node, InlineTextNode):
                parts.append(escape_jsx(node.content))
        return "".join(parts)

    def _render_header(self, node: HeaderNode, index: int, scope: Scope) -> str:
        tag = f"h{node.level}"
        size = HEADER_SIZES[node.level]
        content = self.render_inline(node.children)
        return f'{scope.pad}<{tag} key={{{index}}} className="text-{size} font-bold">{content}</{tag}>'

    def _render_input(self, node: InputNode, index: int, scope: Scope) -> str:
        field_id = f"input-{slugify(node.label)}-{index}"
        pad = scope.pad
        return "\n".join([
            f'{pad}<div key={{{index}}} className="space-y-2">',
            f'{pad}  <Label htmlFor="{field_id}">{escape_jsx(node.label)}</Label>',
            f'{pad}  <Input id="{field_id}" type="{node.input_type.value}" />',
            f"{pad}</div>",
        ])

    def _render_textarea(self, node: TextareaNode, index: int, scope: Scope) -> str:
        field_id = f"textarea-{slugify(node.label)}-{index}"
        pad = scope.pad
        return "\n".join([
            f'{pad}<div key={{{index}}} className="space-y-2">',
            f'{pad}  <Label htmlFor="{field_id}">{escape_jsx(node.label)}</Label>',
            f'{pad}  <Textarea id="{field_id}" />',
            f"{pad}</div>",
        ])

    def _render_dropdown(self, node: DropdownNode, index: int, scope: Scope) -> str:
        field_id = f"select-{slugify(node.label)}-{index}"
        pad = scope.pad
        lines = [
            f'{pad}<div key={{{index}}} className="space-y-2">',
            f'{pad}  <Label htmlFor="{field_id}">{escape_jsx(node.label)}</Label>',
            f"{pad}  <Select>",
            f'{pad}    <SelectTrigger id="{field_id}">',
            f'{pad}      <SelectValue placeholder="Select an option" />',
            f"{pad}    </SelectTrigger>",
            f"{pad}    <SelectContent>",
        ]
        for i, opt in enumerate(node.options or []):
            lines.append(
                f'{pad}      <SelectItem key={{{i}}} value="{slugify(opt)}">{escape_jsx(opt)}</SelectItem>'
            )
        lines.extend([
            f"{pad}    </SelectContent>",
            f"{pad}  </Select>",
            f"{pad}</div>",
        ])
        return "\n".join(lines)

    def _render_checkbox(self, node: CheckboxNode, index: int, scope: Scope) -> str:
        field_id = f"checkbox-{slugify(node.label)}-{index}"
        pad = scope.pad
        return "\n".join([
            f'{pad}<div key={{{index}}} className="flex items-center space-x-2">',
            f'{pad}  <Checkbox id="{field_id}" />',
            f'{pad}  <Label htmlFor="{field_id}" className="text-sm font-medium leading-none">',
            f"{pad}    {escape_jsx(node.label)}",
            f"{pad}  </Label>",
            f"{pad}</div>",
        ])

    def _render_radio_group(self, node: RadioGroupNode, index: int, scope: Scope) -> str:
        pad = scope.pad
        lines = [
            f'{pad}<div key={{{index}}} className="space-y-2">',
            f"{pad}  <Label>{escape_jsx(node.label)}</Label>",
            f"{pad}  <RadioGroup>",
        ]
        for i, opt in enumerate(node.options):
            option_id = f"radio-{slugify(node.label)}-{index}-{i}"
            lines.extend([
                f'{pad}    <div key={{{i}}} className="flex items-center space-x-2">',
                f'{pad}      <RadioGroupItem id="{option_id}" value="{slugify(opt)}" />',
                f'{pad}      <Label htmlFor="{option_id}">{escape_jsx(opt)}</Label>',
                f"{pad}    </div>",
            ])
        lines.extend([f"{pad}  </RadioGroup>", f"{pad}</div>"])
        return "\n".join(lines)

    def _render_button(self, node: ButtonNode, index: int, scope: Scope) -> str:
        variant = "default" if node.variant == ButtonVariant.DEFAULT else "outline"
        class_name = f' className="{escape_jsx(node.class_name)}"' if node.class_name else ""
        on_click = ""
        if node.navigate_to and scope.setter:
            on_click = f" onClick={{() => {scope.setter}({js_string(node.navigate_to)})}}"
        return (
            f'{scope.pad}<Button key={{{index}}} variant="{variant}"{class_name}{on_click}>'
            f"{escape_jsx(node.content)}</Button>"
        )

    def _render_table(self, node: TableNode, index: int, scope: Scope) -> str:
        pad = scope.pad
        lines = [
            f"{pad}<Table key={{{index}}}>",
            f"{pad}  <TableHeader>",
            f"{pad}    <TableRow>",
        ]
        lines.extend(
            f"{pad}      <TableHead key={{{i}}}>{escape_jsx(header)}</TableHead>"
            for i, header in enumerate(node.headers)
        )
        lines.extend([f"{pad}    </TableRow>", f"{pad}  </TableHeader>", f"{pad}  <TableBody>"])
        for i, row in enumerate(node.rows):
            lines.append(f"{pad}    <TableRow key={{{i}}}>")
            lines.extend(
                f"{pad}      <TableCell key={{{j}}}>{escape_jsx(cell)}</TableCell>"
                for j, cell in enumerate(row)
            )
            lines.append(f"{pad}    </TableRow>")
        lines.extend([f"{pad}  </TableBody>", f"{pad}</Table>"])
        return "\n".join(lines)

    def _render_card(self, node: CardNode, index: int, scope: Scope) -> str:
        pad = scope.pad
        lines = [f"{pad}<Card key={{{index}}}>"]
        if node.title_children:
            lines.extend([
                f"{pad}  <CardHeader>",
                f"{pad}    <CardTitle>{self.render_inline(node.title_children)}</CardTitle>",
                f"{pad}  </CardHeader>",
                f'{pad}  <CardContent className="space-y-2">',
            ])
        else:
            lines.append(f'{pad}  <CardContent className="pt-6 space-y-2">')
        body = self._render_nodes(node.children, scope.deeper(2))
        if body:
            lines.append(body)
        lines.extend([f"{pad}  </CardContent>", f"{pad}</Card>"])
        return "\n".join(lines)

    def _render_workflow(self, node: WorkflowNode, index: int, scope: Scope) -> str:
        value, set_value = scope.states[id(node)]
        inner = scope._replace(setter=set_value)
        pad = scope.pad
        lines = [f"{pad}<div key={{{index}}}>"]
        for screen in node.children:
            lines.append(f"{pad}  {{{value} === {js_string(screen.id)} && (")
            lines.append(f'{pad}    <div data-screen-id="{escape_jsx(screen.id)}" className="space-y-2">')
            body = self._render_nodes(screen.children, inner.deeper(3))
            if body:
                lines.append(body)
            lines.append(f"{pad}    </div>")
            lines.append(f"{pad}  )}}")
        lines.append(f"{pad}</div>")
        return "\n".join(lines)
