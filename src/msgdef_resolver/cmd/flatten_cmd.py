"""Flatten, resolve and deps commands - resolve a single message type."""

import logging
from collections.abc import Sequence
from pathlib import Path

from msgdef_resolver.cli_options import (
    ForceOverwriteOption,
    OutputPathOption,
    PrefixOption,
    VerboseOption,
)
from msgdef_resolver.exceptions import MsgdefResolverError
from msgdef_resolver.resolver import SchemaResolver
from msgdef_resolver.type_reference import normalize_type_name, short_name
from msgdef_resolver.utils import (
    confirm_output_overwrite,
    console_err,
    fail,
    load_resolver,
    setup_logging,
    write_text,
)

logger = logging.getLogger(__name__)


def _prepare(msg_type: str, prefix: Sequence[Path], verbose: bool) -> tuple[SchemaResolver, str]:
    setup_logging(verbose)
    try:
        type_name = normalize_type_name(msg_type)
        resolver = load_resolver(prefix)
    except (MsgdefResolverError, ValueError) as e:
        fail(str(e))
    return resolver, type_name


def flatten(
    msg_type: str,
    *,
    prefix: PrefixOption = [],  # noqa: B006
    output: OutputPathOption = None,
    force: ForceOverwriteOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Print a message definition followed by all of its dependencies.

    The output uses the concatenated format expected by MCAP "ros2msg" schemas:
    the root definition, then for every dependency a line of 80 "=",
    a "MSG: package/Type" line and the dependency's definition.

    Parameters
    ----------
    msg_type
        Message type as "package/msg/Type" or "package/Type".
    prefix
        Install prefixes to scan. Can be given multiple times.
    output
        Write the definition to this file instead of stdout.
    force
        Force overwrite of output file without confirmation.
    verbose
        Enable debug logging.

    Examples
    --------
    ```
    msgdef-resolver flatten tf2_msgs/msg/TFMessage
    msgdef-resolver flatten geometry_msgs/Pose --prefix /opt/ros/jazzy
    msgdef-resolver flatten sensor_msgs/Image -o image.msg
    ```
    """
    resolver, type_name = _prepare(msg_type, prefix, verbose)
    try:
        text = resolver.flatten(type_name)
    except MsgdefResolverError as e:
        fail(str(e))

    if output is None:
        write_text(text)
        return

    confirm_output_overwrite(output, force)
    output.write_text(text + "\n", encoding="utf-8")
    console_err.print(f"[green]✓ Wrote {short_name(type_name)} to {output}[/green]")


def resolve(
    msg_type: str,
    *,
    prefix: PrefixOption = [],  # noqa: B006
    verbose: VerboseOption = False,
) -> None:
    """Print a single message definition without its dependencies.

    Parameters
    ----------
    msg_type
        Message type as "package/msg/Type" or "package/Type".
    prefix
        Install prefixes to scan. Can be given multiple times.
    verbose
        Enable debug logging.
    """
    resolver, type_name = _prepare(msg_type, prefix, verbose)
    try:
        text = resolver.resolve(type_name)
    except MsgdefResolverError as e:
        fail(str(e))
    write_text(text)


def deps(
    msg_type: str,
    *,
    prefix: PrefixOption = [],  # noqa: B006
    verbose: VerboseOption = False,
) -> None:
    """List the types a message depends on, in flatten order.

    Parameters
    ----------
    msg_type
        Message type as "package/msg/Type" or "package/Type".
    prefix
        Install prefixes to scan. Can be given multiple times.
    verbose
        Enable debug logging.
    """
    resolver, type_name = _prepare(msg_type, prefix, verbose)
    try:
        dependencies = resolver.dependencies(type_name)
    except MsgdefResolverError as e:
        fail(str(e))

    logger.debug(f"{type_name} has {len(dependencies)} dependencies")
    for dependency in dependencies:
        write_text(dependency)
