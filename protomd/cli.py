"""CLI for proto markdown."""

import json
import logging
from pathlib import Path
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.panel import Panel
from rich.syntax import Syntax
from rich.tree import Tree

from .core.types import ParserOptions, RenderTarget
from .dsl.ast import Node
from .dsl.compiler import CompileError, ProtoCompiler
from .dsl.parser import MarkdownParser
from .rules.registry import get_check, list_checks
from .utils.logging import setup_logging

app = typer.Typer(
    name="protomd",
    help="Proto markdown - compile plain-text UI sketches to HTML or React",
)
console = Console()
logger = logging.getLogger(__name__)

SYNTAX_LEXERS = {RenderTarget.HTML: "html", RenderTarget.SHADCN: "tsx"}
TREE_FIELDS = ("level", "label", "input_type", "content", "variant", "navigate_to", "id", "initial_screen")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log parser decisions"),
):
    """Proto markdown command line."""
    setup_logging("DEBUG" if verbose else "WARNING")


def ensure_file(path: Path) -> None:
    """Exit with an error if the input file is missing."""
    if not path.exists():
        console.print(f"[red]Error: File {escape(str(path))} not found.[/red]")
        raise typer.Exit(1)


def write_output(out: Path, text: str) -> None:
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "w", encoding="utf-8") as f:
        f.write(text)
    console.print(f"[green]Wrote {escape(str(out))}[/green]")


@app.command("parse")
def parse_command(
    source: Path = typer.Argument(..., help="Path to proto markdown file"),
    out: Path = typer.Option(None, "--out", "-o", help="Write the AST JSON to this file"),
    strict: bool = typer.Option(False, "--strict", help="Report lines that fail strict checks"),
    preserve_whitespace: bool = typer.Option(
        False, "--preserve-whitespace", help="Do not trim lines before matching"
    ),
):
    """Parse a file and print its AST as JSON."""
    ensure_file(source)

    options = ParserOptions(strict=strict, preserve_whitespace=preserve_whitespace)
    result = MarkdownParser(options).parse_file(source)
    payload = json.dumps(result.to_dict(), indent=2)

    if out:
        write_output(out, payload + "\n")
    else:
        console.print(Syntax(payload, "json"))

    if result.errors:
        for error in result.errors:
            console.print(f"[yellow]{escape(error)}[/yellow]")


@app.command("render")
def render_command(
    source: Path = typer.Argument(..., help="Path to proto markdown file"),
    target: RenderTarget = typer.Option(RenderTarget.HTML, "--target", "-t", help="Output format"),
    out: Path = typer.Option(None, "--out", "-o", help="Write the rendered output to this file"),
    strict: bool = typer.Option(False, "--strict", help="Refuse to render when strict checks fail"),
    preserve_whitespace: bool = typer.Option(
        False, "--preserve-whitespace", help="Do not trim lines before matching"
    ),
):
    """Render a file to HTML or a shadcn/ui React component."""
    ensure_file(source)

    compiler = ProtoCompiler(ParserOptions(strict=strict, preserve_whitespace=preserve_whitespace))
    try:
        document = compiler.compile_file(source, target)
    except CompileError as e:
        console.print(f"[red]Compilation error: {escape(str(e))}[/red]")
        for error in e.errors:
            console.print(f"  - {escape(error)}")
        raise typer.Exit(1)

    if out:
        write_output(out, document.output)
    else:
        console.print(Syntax(document.output, SYNTAX_LEXERS[target]))
    logger.debug("Rendered %d top-level nodes from %s", document.node_count, source)


def _label(node: Node) -> str:
    details = []
    for field in TREE_FIELDS:
        value = getattr(node, field, None)
        if value is None:
            continue
        details.append(f"{field}={getattr(value, 'value', value)!r}")
    if details:
        return f"[bold cyan]{node.type}[/bold cyan] " + escape(" ".join(details))
    return f"[bold cyan]{node.type}[/bold cyan]"


def _add_branch(tree: Tree, node: Node) -> None:
    branch = tree.add(_label(node))
    for child in getattr(node, "children", None) or []:
        _add_branch(branch, child)


@app.command("tree")
def tree_command(
    source: Path = typer.Argument(..., help="Path to proto markdown file"),
):
    """Show the AST of a file as a tree."""
    ensure_file(source)

    result = MarkdownParser().parse_file(source)
    tree = Tree(f"[bold]{escape(source.name)}[/bold]")
    for node in result.nodes:
        _add_branch(tree, node)
    console.print(tree)


@app.command("check")
def check_command(
    source: Path = typer.Argument(..., help="Path to proto markdown file"),
    checks: list[str] = typer.Option(None, "--check", "-c", help="Only run these checks"),
):
    """Parse a file in strict mode and report every diagnostic."""
    ensure_file(source)

    for check_id in checks or []:
        if get_check(check_id) is None:
            console.print(f"[red]Unknown check '{escape(check_id)}'. Run 'protomd list-checks'.[/red]")
            raise typer.Exit(1)

    options = ParserOptions(strict=True, checks=checks or None)
    result = MarkdownParser(options).parse_file(source)

    if not result.errors:
        console.print(Panel("[green]NO ISSUES FOUND[/green]", title=escape(str(source))))
        return

    table = Table(title="Diagnostics")
    table.add_column("#", style="cyan")
    table.add_column("Message", style="yellow")
    for i, error in enumerate(result.errors, 1):
        table.add_row(str(i), escape(error))
    console.print(table)
    console.print(Panel(f"[red]{len(result.errors)} ISSUE(S) FOUND[/red]", title=escape(str(source))))
    raise typer.Exit(1)


@app.command("list-checks")
def list_checks_command():
    """List the strict-mode line checks."""
    table = Table(title="Strict Checks")
    table.add_column("ID", style="cyan")
    table.add_column("Description", style="white")
    for check_id in list_checks():
        check_fn = get_check(check_id)
        doc = (check_fn.__doc__ or "").strip().splitlines()
        table.add_row(check_id, doc[0] if doc else "")
    console.print(table)


if __name__ == "__main__":
    app()
