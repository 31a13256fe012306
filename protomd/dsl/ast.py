"""AST node definitions for proto markdown parsing."""

from typing import Annotated, Literal, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..core.types import ButtonVariant, InputType


class Node(BaseModel):
    """Base for every AST node."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class InlineTextNode(Node):
    """Plain run of inline text."""
    type: Literal["text"] = "text"
    content: str


class ItalicNode(Node):
    """AST node for _italic_ emphasis."""
    type: Literal["italic"] = "italic"
    content: str


class BoldNode(Node):
    """AST node for *bold* emphasis, or bold wrapping an italic for _*both*_."""
    type: Literal["bold"] = "bold"
    content: str | None = None
    children: list[ItalicNode] | None = None


InlineNode = Annotated[
    Union[InlineTextNode, BoldNode, ItalicNode],
    Field(discriminator="type"),
]


class HeaderNode(Node):
    type: Literal["header"] = "header"
    level: int = Field(ge=1, le=6)
    children: list[InlineNode] = Field(default_factory=list)


class TextNode(Node):
    """Block-level text line made of inline nodes."""
    type: Literal["text"] = "text"
    children: list[InlineNode] = Field(default_factory=list)


class InputNode(Node):
    type: Literal["input"] = "input"
    label: str
    input_type: InputType = InputType.TEXT


class TextareaNode(Node):
    type: Literal["textarea"] = "textarea"
    label: str


class DropdownNode(Node):
    type: Literal["dropdown"] = "dropdown"
    label: str
    options: list[str] | None = None


class CheckboxNode(Node):
    type: Literal["checkbox"] = "checkbox"
    label: str


class RadioGroupNode(Node):
    type: Literal["radiogroup"] = "radiogroup"
    label: str
    options: list[str] = Field(min_length=1)


class ButtonNode(Node):
    """AST node for a button, optionally navigating to a screen."""
    type: Literal["button"] = "button"
    content: str
    variant: ButtonVariant = ButtonVariant.OUTLINE
    class_name: str | None = None
    navigate_to: str | None = None


class ImageNode(Node):
    type: Literal["image"] = "image"
    alt: str = ""
    src: str


class TableNode(Node):
    type: Literal["table"] = "table"
    headers: list[str] = Field(default_factory=list)
    rows: list[list[str]] = Field(default_factory=list)


LeafNode = Annotated[
    Union[InputNode, TextareaNode, DropdownNode, CheckboxNode, ButtonNode],
    Field(discriminator="type"),
]


class ContainerNode(Node):
    """Flat group of fields or buttons found on a single line."""
    type: Literal["container"] = "container"
    children: list[LeafNode] = Field(default_factory=list)


class CardNode(Node):
    type: Literal["card"] = "card"
    title_children: list[InlineNode] | None = None
    children: list["BlockNode"] = Field(default_factory=list)


class GridNode(Node):
    type: Literal["grid"] = "grid"
    grid_config: str = ""
    children: list["BlockNode"] = Field(default_factory=list)


class DivNode(Node):
    type: Literal["div"] = "div"
    class_name: str | None = None
    children: list["BlockNode"] = Field(default_factory=list)


class ScreenNode(Node):
    """A named, navigable state inside a workflow."""
    type: Literal["screen"] = "screen"
    id: str
    children: list["BlockNode"] = Field(default_factory=list)


class WorkflowNode(Node):
    type: Literal["workflow"] = "workflow"
    initial_screen: str
    children: list[ScreenNode] = Field(default_factory=list)


BlockNode = Annotated[
    Union[
        HeaderNode,
        TextNode,
        InputNode,
        TextareaNode,
        DropdownNode,
        CheckboxNode,
        RadioGroupNode,
        ButtonNode,
        ImageNode,
        TableNode,
        ContainerNode,
        CardNode,
        GridNode,
        DivNode,
        ScreenNode,
        WorkflowNode,
    ],
    Field(discriminator="type"),
]

for _model in (CardNode, GridNode, DivNode, ScreenNode, WorkflowNode):
    _model.model_rebuild()


class ParseResult(BaseModel):
    """Complete result of parsing one document."""
    nodes: list[BlockNode] = Field(default_factory=list)
    errors: list[str] | None = None

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
