"""Compiler that renders parsed proto markdown to a target format."""

from datetime import datetime, timezone
from pathlib import Path

from ..core.types import CompiledDocument, ParserOptions, RenderTarget
from ..render.html import HtmlRenderer
from ..render.shadcn import ShadcnRenderer
from .ast import ParseResult
from .parser import MarkdownParser


class CompileError(Exception):
    """Raised when a strict parse produced diagnostics."""

    def __init__(self, errors: list[str], source: str | None = None):
        self.errors = errors
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"{len(errors)} parse error(s){where}: {errors[0]}")


class ProtoCompiler:
    """Parses proto markdown and renders it to HTML or a shadcn component."""

    def __init__(self, options: ParserOptions | None = None):
        self.options = options or ParserOptions()
        self.parser = MarkdownParser(self.options)
        self.renderers = {
            RenderTarget.HTML: HtmlRenderer(self.parser.directive_parser),
            RenderTarget.SHADCN: ShadcnRenderer(),
        }

    def compile(
        self,
        result: ParseResult,
        target: RenderTarget = RenderTarget.HTML,
        source: str | None = None,
    ) -> CompiledDocument:
        """Render an already parsed document."""
        if result.errors:
            raise CompileError(result.errors, source)

        output = self.renderers[RenderTarget(target)].render(result.nodes)
        return CompiledDocument(
            target=target,
            source=source,
            output=output,
            node_count=len(result.nodes),
            compiled_at=datetime.now(timezone.utc),
        )

    def compile_file(self, path: Path, target: RenderTarget = RenderTarget.HTML) -> CompiledDocument:
        """Parse and compile a proto markdown file."""
        result = self.parser.parse_file(path)
        return self.compile(result, target, source=str(path))

    def compile_string(self, content: str, target: RenderTarget = RenderTarget.HTML) -> CompiledDocument:
        """Parse and compile proto markdown content from a string."""
        result = self.parser.parse(content)
        return self.compile(result, target)
