"""Shared CLI parameter definitions."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from cyclopts import Group, Parameter

# Parameter groups
INDEX_OPTIONS_GROUP = Group("Index Options")
OUTPUT_OPTIONS_GROUP = Group("Output Options")

PrefixOption = Annotated[
    list[Path],
    Parameter(
        name=["-p", "--prefix"],
        group=INDEX_OPTIONS_GROUP,
        help="Install prefix to scan for share/<package>/msg/*.msg (defaults to AMENT_PREFIX_PATH)",
    ),
]

VerboseOption = Annotated[
    bool,
    Parameter(
        name=["-v", "--verbose"],
        help="Enable debug logging",
    ),
]

OutputPathOption = Annotated[
    Path | None,
    Parameter(
        name=["-o", "--output"],
        group=OUTPUT_OPTIONS_GROUP,
    ),
]

ForceOverwriteOption = Annotated[
    bool,
    Parameter(
        name=["-f", "--force"],
        group=OUTPUT_OPTIONS_GROUP,
    ),
]
