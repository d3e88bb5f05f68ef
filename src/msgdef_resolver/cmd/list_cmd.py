"""List command - show the message types known to the index."""

from typing import Annotated

from cyclopts import Parameter
from rich.table import Table

from msgdef_resolver.cli_options import INDEX_OPTIONS_GROUP, PrefixOption, VerboseOption
from msgdef_resolver.exceptions import MsgdefResolverError
from msgdef_resolver.type_reference import short_name, split_full_name
from msgdef_resolver.utils import console_out, fail, load_resolver, setup_logging


def list_types(
    *,
    prefix: PrefixOption = [],  # noqa: B006
    package: Annotated[
        list[str],
        Parameter(
            name=["--package"],
            group=INDEX_OPTIONS_GROUP,
            help="Only show types from these packages",
        ),
    ] = [],  # noqa: B006
    verbose: VerboseOption = False,
) -> None:
    """List indexed message types and the files that define them.

    Parameters
    ----------
    prefix
        Install prefixes to scan. Can be given multiple times.
    package
        Only show types from these packages. Can be given multiple times.
    verbose
        Enable debug logging.
    """
    setup_logging(verbose)
    try:
        resolver = load_resolver(prefix)
    except MsgdefResolverError as e:
        fail(str(e))

    index = resolver.index
    selected = [
        type_name
        for type_name in index
        if not package or split_full_name(type_name)[0] in package
    ]

    if not selected:
        console_out.print("[yellow]No message types found[/yellow]")
        return

    table = Table()
    table.add_column("Type", style="bold white")
    table.add_column("Package", style="cyan")
    table.add_column("Path", style="blue")

    for type_name in selected:
        table.add_row(
            short_name(type_name),
            split_full_name(type_name)[0],
            str(index[type_name]),
        )

    console_out.print(table)
    console_out.print(f"[dim]{len(selected)} of {len(index)} types[/dim]")
