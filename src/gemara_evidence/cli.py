"""CLI interface for gemara-evidence.

Requires the 'cli' extra: pip install gemara-evidence[cli]
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

try:
    import typer
    from rich.console import Console
    from rich.logging import RichHandler
    from rich.table import Table
    from rich.text import Text
except ImportError:
    print(
        "CLI dependencies not installed. Install with: pip install gemara-evidence[cli]",
        file=sys.stderr,
    )
    sys.exit(1)

from gemara_evidence import __version__
from gemara_evidence.exceptions import EvidenceError
from gemara_evidence.mapping.rules import DEFAULT_RULES
from gemara_evidence.pipeline.defaults import default_pipeline
from gemara_evidence.tool import parse_governance_document

_MAX_FILE_SIZE = 10 * 1024 * 1024
_STDIN = "-"

app = typer.Typer(
    name="gemara-evidence",
    help="Map governance and configuration documents onto compliance schema candidates.",
    add_completion=False,
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(message: str) -> NoReturn:
    console.print(f"Error: {message}", style="red", markup=False, soft_wrap=True)
    raise typer.Exit(code=1)


def _read_content(path: str) -> str:
    if path == _STDIN:
        return sys.stdin.read()

    file_path = Path(path)
    if not file_path.is_file():
        _fail(f"{file_path} does not exist or is not a file")
    if file_path.stat().st_size > _MAX_FILE_SIZE:
        _fail(f"{file_path} is too large (limit {_MAX_FILE_SIZE} bytes)")
    try:
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        _fail(f"{file_path} is not valid UTF-8")
    except OSError as e:
        _fail(f"Error reading {file_path}: {e}")


@app.callback()
def main(
    version: bool = typer.Option(False, "--version", "-v", help="Show version"),
) -> None:
    if version:
        console.print(f"gemara-evidence {__version__}")
        raise typer.Exit()


@app.command()
def info() -> None:
    """Show information about the gemara-evidence installation."""
    pipeline = default_pipeline()
    table = Table(title="gemara-evidence info")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Version", __version__)
    table.add_row("Python", sys.version.split()[0])
    table.add_row("Parsers", ", ".join(pipeline.registered_parsers))
    table.add_row("Mapping rules", str(len(pipeline.mapper.rules)))
    console.print(table)


@app.command()
def rules() -> None:
    """List the keyword-to-field mapping rules in evaluation order."""
    table = Table(title="Schema mapping rules")
    table.add_column("#", justify="right")
    table.add_column("Target field", style="cyan", no_wrap=True)
    table.add_column("Keywords")
    for idx, rule in enumerate(DEFAULT_RULES, start=1):
        table.add_row(str(idx), rule.target_field, Text(", ".join(rule.keywords)))
    console.print(table)


@app.command()
def parse(
    path: str = typer.Argument(..., help="Document to parse, or '-' to read stdin"),
    format_hint: str = typer.Option(
        "", "--format", "-f", help="Format hint: markdown|yaml|json|kubernetes|dockerfile"
    ),
    source_id: str = typer.Option(
        "", "--source-id", "-s", help="Identifier used in source references (defaults to PATH)"
    ),
    min_confidence: float = typer.Option(
        0.0, "--min-confidence", "-m", min=0.0, max=1.0, help="Hide weaker candidates"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the raw response as JSON"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Parse one document and show the proposed schema candidates."""
    _configure_logging(verbose)
    content = _read_content(path)
    if not source_id and path != _STDIN:
        source_id = path

    try:
        output = parse_governance_document(content, format_hint, source_id)
    except EvidenceError as e:
        _fail(str(e))

    candidates = [c for c in output.candidates if c.confidence >= min_confidence]

    if as_json:
        payload = output.model_dump(by_alias=True)
        payload["candidates"] = [c.model_dump(by_alias=True) for c in candidates]
        typer.echo(json.dumps(payload, indent=2))
        return

    console.print(
        f"Parser: {output.parser_used}  Chunks: {output.total_chunks}  "
        f"Candidates: {len(candidates)}",
        markup=False,
    )
    table = Table(title="Schema candidates")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_column("Source", style="dim")
    table.add_column("Confidence", justify="right", style="green")
    for candidate in candidates:
        table.add_row(
            Text(candidate.target_field),
            Text(candidate.value),
            Text(candidate.source_ref),
            f"{candidate.confidence:.3f}",
        )
    console.print(table)


if __name__ == "__main__":
    app()
