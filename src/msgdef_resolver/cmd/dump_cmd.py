"""Dump command - write flattened definitions for every indexed type."""

import logging
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from msgdef_resolver.cli_options import (
    OUTPUT_OPTIONS_GROUP,
    ForceOverwriteOption,
    PrefixOption,
    VerboseOption,
)
from msgdef_resolver.exceptions import MsgdefResolverError
from msgdef_resolver.type_reference import split_full_name
from msgdef_resolver.utils import (
    confirm_output_overwrite,
    console_err,
    fail,
    load_resolver,
    setup_logging,
)

logger = logging.getLogger(__name__)


def output_path_for(output_dir: Path, type_name: str) -> Path:
    """Map "package/msg/Type" to OUTPUT_DIR/package/msg/Type.msg."""
    package, msg_name = split_full_name(type_name)
    return output_dir / package / "msg" / f"{msg_name}.msg"


def dump(
    output_dir: Path,
    *,
    prefix: PrefixOption = [],  # noqa: B006
    raw: Annotated[
        bool,
        Parameter(
            name=["--raw"],
            group=OUTPUT_OPTIONS_GROUP,
            help="Write each definition without its dependencies",
        ),
    ] = False,
    force: ForceOverwriteOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Write the definition of every indexed type to OUTPUT_DIR/<package>/msg/<Type>.msg.

    All definitions are resolved before anything is written, so a missing
    dependency aborts the dump without leaving partial output behind.

    Parameters
    ----------
    output_dir
        Directory to write definitions to.
    prefix
        Install prefixes to scan. Can be given multiple times.
    raw
        Write each definition without its dependencies.
    force
        Overwrite an existing output directory without confirmation.
    verbose
        Enable debug logging.
    """
    setup_logging(verbose)
    try:
        resolver = load_resolver(prefix)
        definitions = resolver.resolve_all() if raw else resolver.flatten_all()
    except MsgdefResolverError as e:
        fail(str(e))

    confirm_output_overwrite(output_dir, force)

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console_err,
        transient=True,
    ) as progress:
        task = progress.add_task("[cyan]Writing definitions...", total=len(definitions))
        for type_name, text in definitions.items():
            path = output_path_for(output_dir, type_name)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text + "\n", encoding="utf-8")
            progress.advance(task)

    logger.info(f"Wrote {len(definitions)} definitions to {output_dir}")
    console_err.print(f"[green]✓ Wrote {len(definitions)} definitions to {output_dir}[/green]")
