"""Core type definitions for proto markdown."""

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict


class InputType(str, Enum):
    TEXT = "text"
    PASSWORD = "password"


class ButtonVariant(str, Enum):
    DEFAULT = "default"
    OUTLINE = "outline"


class RenderTarget(str, Enum):
    HTML = "html"
    SHADCN = "shadcn"


class ParserOptions(BaseModel):
    """Read-only parser configuration shared across parse calls."""
    model_config = ConfigDict(frozen=True)

    strict: bool = False
    preserve_whitespace: bool = False
    checks: list[str] | None = None


class CompiledDocument(BaseModel):
    target: RenderTarget
    source: str | None = None
    output: str
    node_count: int
    errors: list[str] = []
    compiled_at: datetime
