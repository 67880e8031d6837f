"""
Utility functions for Storyblok Manager.
"""

import csv
import json
import logging
import re
import sys
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import click

from .models import Asset, Component, Story

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


class OutputFormat(str, Enum):
    """Output format options."""
    TABLE = "table"
    JSON = "json"
    CSV = "csv"


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Configure logging based on verbosity.

    Args:
        verbose: Enable debug logging
        quiet: Only show errors
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )
    # urllib3 is very chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.INFO if verbose else logging.WARNING)


def print_success(message: str) -> None:
    click.secho(f"✓ {message}", fg="green")


def print_error(message: str, details: Optional[str] = None) -> None:
    """Print an error, with optional details, to stderr."""
    click.secho(f"✗ Error: {message}", fg="red", err=True)
    if details:
        click.echo(f"  {details}", err=True)


def print_warning(message: str) -> None:
    click.secho(f"⚠ {message}", fg="yellow")


def print_info(message: str) -> None:
    click.secho(f"ℹ {message}", fg="blue")


def _to_jsonable(data: Any) -> Any:
    if is_dataclass(data) and not isinstance(data, type):
        return asdict(data)
    if isinstance(data, (list, tuple)):
        return [_to_jsonable(item) for item in data]
    return data


def print_json(data: Any, indent: int = 2) -> None:
    """Print data (dataclasses included) as formatted JSON."""
    click.echo(json.dumps(_to_jsonable(data), indent=indent, default=str, ensure_ascii=False))


def _visible_len(text: str) -> int:
    return len(ANSI_ESCAPE.sub("", text))


def print_table(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
    """
    Print rows as an aligned text table.

    Cells may contain click styling; widths are computed on visible text.
    """
    str_rows = [["-" if cell is None else str(cell) for cell in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in str_rows:
        for i, cell in enumerate(row):
            if i < len(widths):
                widths[i] = max(widths[i], _visible_len(cell))

    def render(cells: Sequence[str]) -> str:
        parts = []
        for i, cell in enumerate(cells):
            parts.append(cell + " " * (widths[i] - _visible_len(cell)))
        return "  ".join(parts).rstrip()

    click.echo(render([click.style(h, bold=True) for h in headers]))
    click.echo("  ".join("-" * w for w in widths))
    for row in str_rows:
        click.echo(render(row))


def print_csv(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
    """Print rows as CSV to stdout, without ANSI styling."""
    writer = csv.writer(sys.stdout, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow([ANSI_ESCAPE.sub("", "" if cell is None else str(cell)) for cell in row])


def format_file_size(size: Optional[int]) -> str:
    """Format a byte count for display."""
    if size is None:
        return "-"
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024 or unit == "GB":
            return f"{int(value)} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


def truncate_string(text: Optional[str], max_length: int = 50) -> str:
    """Truncate text to max_length, ending with '...' when cut."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."


def load_json_file(path: Path) -> Dict[str, Any]:
    """
    Load a JSON object from a file.

    Raises:
        ValueError: If the file cannot be read or is not a JSON object
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}")
    except OSError as e:
        raise ValueError(f"Cannot read file {path}: {e}")

    if not isinstance(data, dict):
        raise ValueError(f"Invalid JSON in {path}: expected an object")
    return data


def confirm_action(message: str, default: bool = False) -> bool:
    return click.confirm(message, default=default)


def _emit(headers: List[str], rows: List[List[Any]], items: Any, fmt: OutputFormat) -> None:
    if fmt == OutputFormat.JSON:
        print_json(items)
    elif fmt == OutputFormat.CSV:
        print_csv(headers, rows)
    else:
        print_table(headers, rows)


def format_component_list(components: List[Component], fmt: OutputFormat) -> None:
    """Print components in the requested format."""
    headers = ["ID", "Name", "Display Name", "Root", "Fields"]
    rows = [
        [c.id, c.name, c.display_name, "Yes" if c.is_root else "No", len(c.schema)]
        for c in components
    ]
    _emit(headers, rows, components, fmt)


def format_asset_list(assets: List[Asset], fmt: OutputFormat) -> None:
    """Print assets in the requested format."""
    headers = ["ID", "Name", "Folder", "URL"]
    rows = [
        [a.id, truncate_string(a.name, 40), a.folder_id, a.filename]
        for a in assets
    ]
    _emit(headers, rows, assets, fmt)


def format_story_detail(story: Story, fmt: OutputFormat) -> None:
    """Print a single story."""
    if fmt == OutputFormat.JSON:
        print_json(story)
        return
    headers = ["Field", "Value"]
    rows = [
        ["ID", story.id],
        ["Title", story.title],
        ["Slug", story.full_slug or story.slug],
        ["Component", story.component],
        ["Published", "Yes" if story.published or story.publish else "No"],
    ]
    if fmt == OutputFormat.CSV:
        print_csv(headers, rows)
    else:
        for label, value in rows:
            click.echo(f"  {label + ':':<12} {'-' if value is None else value}")
