"""Helpers shared by the CLI commands."""

import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from msgdef_resolver.index import SchemaIndex
from msgdef_resolver.resolver import SchemaResolver

console_err = Console(stderr=True)  # Use stderr for errors and logs
console_out = Console()  # Use stdout for definition output


def setup_logging(verbose: bool) -> None:
    """Route log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console_err,
                rich_tracebacks=True,
                tracebacks_show_locals=verbose,
            )
        ],
        force=True,
    )


def fail(message: str) -> NoReturn:
    console_err.print(f"[red]Error: {escape(message)}[/red]", highlight=False)
    sys.exit(1)


def load_resolver(prefixes: Sequence[Path]) -> SchemaResolver:
    """Build a resolver from explicit prefixes, or from AMENT_PREFIX_PATH if none are given."""
    if prefixes:
        index = SchemaIndex.from_prefixes(prefixes)
        if not index:
            fail(f"No .msg files found under {', '.join(str(p) for p in prefixes)}")
    else:
        index = SchemaIndex.from_env()
    return SchemaResolver(index)


def write_text(text: str) -> None:
    """Print definition text verbatim (no markup, highlighting or wrapping)."""
    console_out.out(text, highlight=False)


def confirm_output_overwrite(output: Path, force: bool) -> None:
    """Confirm overwrite if output exists and force=False.

    Args:
        output: Output file or directory path
        force: If True, skip confirmation

    Raises:
        SystemExit: If user declines to overwrite
    """
    if output.exists() and not force:
        response = input(f"Output '{output}' already exists. Overwrite? [y/N]: ")
        if response.lower() not in ("y", "yes"):
            print("Aborted.")  # noqa: T201
            raise SystemExit(1)
