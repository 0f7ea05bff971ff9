"""
urlcompare CLI - Command Line Interface

Entry point for parsing a single URL into its components and for comparing
several URLs against the first one.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from urlcompare import __version__
from urlcompare.compare import compare_urls
from urlcompare.core.config import DisplayConfig, load_default_config, load_display_config
from urlcompare.core.exceptions import ConfigError, ExportError
from urlcompare.parser import parse
from urlcompare.reporting.console import (
    build_comparison_table,
    build_component_table,
    build_params_comparison_table,
    build_params_table,
    format_url,
)
from urlcompare.reporting.exporters.json import JSONExporter, comparison_payload, to_json

logger = logging.getLogger(__name__)

# Create CLI app
app = typer.Typer(
    name="urlcompare",
    help="urlcompare - Break URLs into components and compare them",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for output
console = Console()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output",
    ),
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_config(config: Optional[Path]) -> DisplayConfig:
    try:
        if config:
            return load_display_config(config)
        return load_default_config()
    except ConfigError as e:
        console.print(f"[red]Error loading config:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)


def read_url_lines(text: str) -> list[str]:
    """Split multi-line input into URLs, trimming lines and dropping blanks."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def _export(obj, output: Path, quiet: bool = False) -> None:
    """Write JSON to output; the status line is skipped when quiet."""
    try:
        JSONExporter().export(obj, output)
    except ExportError as e:
        console.print(f"[red]Error exporting:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    if not quiet:
        console.print(f"[green]✓[/green] JSON written to: {escape(str(output))}")


# ============================================================================
# Main Commands
# ============================================================================

@app.command("parse")
def parse_command(
    url: str = typer.Argument(..., help="URL to parse"),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Print the raw JSON record instead of tables",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the JSON record to this file",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Display configuration file",
        exists=True,
    ),
) -> None:
    """
    Parse a URL and show its components.
    """
    display = _load_config(config)
    parsed = parse(url)

    if output:
        _export(parsed, output, quiet=json_output)

    if json_output:
        typer.echo(to_json(parsed))
    elif not parsed.is_valid:
        console.print(Panel(Text(parsed.error), title="Invalid URL", border_style="red"))
    else:
        console.print(format_url(parsed, display))
        console.print(build_component_table(parsed, display))
        params_table = build_params_table(parsed, display)
        if params_table is not None:
            console.print(params_table)

    if not parsed.is_valid:
        raise typer.Exit(code=1)


@app.command("compare")
def compare_command(
    urls: Optional[List[str]] = typer.Argument(None, help="URLs to compare; the first is the baseline"),
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Read URLs from a file, one per line ('-' for stdin)",
        allow_dash=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Print the raw JSON entries and diff maps instead of tables",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the JSON comparison to this file",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Display configuration file",
        exists=True,
    ),
) -> None:
    """
    Compare URLs component by component against the first one.
    """
    display = _load_config(config)

    raws = list(urls or [])
    if file is not None:
        try:
            text = sys.stdin.read() if str(file) == "-" else file.read_text(encoding="utf-8")
        except OSError as e:
            console.print(f"[red]Error reading URLs:[/red] {escape(str(e))}")
            raise typer.Exit(code=1)
        raws.extend(read_url_lines(text))

    entries, result = compare_urls(raws)
    logger.debug(f"Parsed {len(entries)} URLs for comparison")

    if output:
        _export(comparison_payload(entries, result), output, quiet=json_output)

    if json_output:
        typer.echo(to_json(comparison_payload(entries, result)))
        return

    valid = sum(1 for entry in entries if entry.is_valid)
    if valid < 2:
        console.print("[yellow]Nothing to compare:[/yellow] enter at least two valid URLs")

    if not entries:
        return

    for index, entry in enumerate(entries):
        console.print(f"[dim]#{index}[/dim] ", format_url(entry, display))

    console.print(build_comparison_table(entries, result, display))
    params_table = build_params_comparison_table(entries, result, display)
    if params_table is not None:
        console.print(params_table)

    if result.has_differences:
        console.print("[dim]Highlighted cells differ from #0 (baseline)[/dim]")
    else:
        console.print("[green]No differences from the baseline[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold cyan]urlcompare[/bold cyan] version [yellow]{__version__}[/yellow]")


# ============================================================================
# Entry Point
# ============================================================================

def main() -> None:
    """Main entry point for CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
