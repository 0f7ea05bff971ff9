"""Rich rendering of parsed URLs and comparison results.

The single-URL view groups components (Base, Authentication, Path, Query,
Fragment) and shows the URL inline with each component coloured. The
comparison view lays out components against entries and highlights every
cell that differs from the baseline.
"""

from typing import Optional, Sequence

from rich.table import Table
from rich.text import Text

from urlcompare.core.config import DisplayConfig
from urlcompare.core.constants import COMPONENT_GROUPS, COMPONENT_LABELS, COMPONENT_ORDER, ComponentKey
from urlcompare.core.models import ComparisonResult, ParsedURL


def display_value(parsed: ParsedURL, name: str, config: DisplayConfig) -> str:
    """Get the display text for one field of a parsed URL.

    Empty and missing values show the placeholder; passwords are masked
    when configured.
    """
    if not parsed.is_valid:
        return config.placeholder

    if name == ComponentKey.AUTH.value:
        if not parsed.auth:
            return config.placeholder
        if parsed.password and config.mask_password:
            return f"{parsed.username}:{config.password_mask}@"
        return parsed.auth

    value = getattr(parsed, name, None)
    if not value:
        return config.placeholder
    if name == "password" and config.mask_password:
        return config.password_mask
    return value


def format_url(parsed: ParsedURL, config: DisplayConfig) -> Text:
    """Render the URL inline with every component in its own style."""
    text = Text()
    if not parsed.is_valid:
        text.append(parsed.error or "Invalid URL", style=config.diff_style)
        return text

    text.append(parsed.protocol, style=config.style_for("protocol"))
    if parsed.href.startswith(f"{parsed.protocol}//"):
        text.append("//", style=config.style_for("protocol"))
    elif parsed.href.startswith(f"{parsed.protocol}/.//"):
        text.append("/.", style=config.style_for("pathname"))
    if parsed.username:
        text.append(parsed.username, style=config.style_for("username"))
    if parsed.password:
        text.append(":")
        text.append(parsed.password, style=config.style_for("password"))
    if parsed.username or parsed.password:
        text.append("@")
    if parsed.hostname:
        text.append(parsed.hostname, style=config.style_for("hostname"))
    if parsed.port:
        text.append(":")
        text.append(parsed.port, style=config.style_for("port"))
    if parsed.pathname:
        text.append(parsed.pathname, style=config.style_for("pathname"))
    if parsed.search:
        text.append(parsed.search, style=config.style_for("search"))
    if parsed.hash:
        text.append(parsed.hash, style=config.style_for("hash"))
    return text


def build_component_table(parsed: ParsedURL, config: DisplayConfig) -> Table:
    """Build the grouped component table for a single URL."""
    table = Table(show_header=True)
    table.add_column("Group", style="dim")
    table.add_column("Component", style="cyan")
    table.add_column("Value")

    for _key, group_label, items in COMPONENT_GROUPS:
        for position, (name, label) in enumerate(items):
            value = display_value(parsed, name, config)
            style = "" if value == config.placeholder else config.style_for(name)
            table.add_row(
                group_label if position == 0 else "",
                label,
                Text(value, style=style),
            )
    return table


def build_params_table(parsed: ParsedURL, config: DisplayConfig) -> Optional[Table]:
    """Build the query parameter table, or None when there are no parameters."""
    if not parsed.is_valid or not parsed.search_params:
        return None

    table = Table(title="Query Parameters", show_header=True)
    table.add_column("Name", style=config.style_for("search"))
    table.add_column("Value")
    for name, value in parsed.search_params.items():
        table.add_row(Text(name), Text(value))
    return table


def _entry_columns(table: Table, entries: Sequence[ParsedURL]) -> None:
    for index, _entry in enumerate(entries):
        header = f"#{index} (baseline)" if index == 0 else f"#{index}"
        table.add_column(header, overflow="fold")


def build_comparison_table(
    entries: Sequence[ParsedURL],
    result: ComparisonResult,
    config: DisplayConfig,
) -> Table:
    """Build the component x entry table with differing cells highlighted."""
    table = Table(title="Components", show_header=True)
    table.add_column("Component", style="cyan")
    _entry_columns(table, entries)

    if any(not entry.is_valid for entry in entries):
        cells = [
            Text(entry.error, style=config.diff_style) if not entry.is_valid else Text("ok", style="green")
            for entry in entries
        ]
        table.add_row("Status", *cells)

    for key in COMPONENT_ORDER:
        diff = result.structural.get(key, {})
        cells = []
        for index, entry in enumerate(entries):
            value = display_value(entry, key.value, config)
            style = config.diff_style if diff.get(index, False) else ""
            cells.append(Text(value, style=style))
        table.add_row(COMPONENT_LABELS[key], *cells)
    return table


def build_params_comparison_table(
    entries: Sequence[ParsedURL],
    result: ComparisonResult,
    config: DisplayConfig,
) -> Optional[Table]:
    """Build the parameter x entry table, or None when no parameters are tracked."""
    if not result.params:
        return None

    table = Table(title="Query Parameters", show_header=True)
    table.add_column("Parameter", style=config.style_for("search"))
    _entry_columns(table, entries)

    for name, diff in result.params.items():
        cells = []
        for index, entry in enumerate(entries):
            params = entry.search_params if entry.is_valid and entry.search_params else {}
            if name in params:
                value = params[name] or '""'
            else:
                value = config.absent_marker
            style = config.diff_style if diff.get(index, False) else ""
            cells.append(Text(value, style=style))
        table.add_row(Text(name), *cells)
    return table
