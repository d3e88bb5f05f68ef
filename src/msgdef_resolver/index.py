"""Index of ROS 2 message definition files found under ament prefixes."""

import logging
import os
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path

from msgdef_resolver.exceptions import ConfigurationError
from msgdef_resolver.type_reference import MSG_SEGMENT

logger = logging.getLogger(__name__)

AMENT_PREFIX_PATH_ENV = "AMENT_PREFIX_PATH"
MSG_SUFFIX = ".msg"


def read_definition(path: Path) -> str:
    """Read the raw text of a definition file."""
    return path.read_text(encoding="utf-8")


class SchemaIndex(Mapping[str, Path]):
    """Immutable mapping of "package/msg/Type" to the `.msg` file defining it.

    Iteration is always in lexicographic key order, independent of the order
    entries were registered in.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, Path] | None = None) -> None:
        items = entries.items() if entries is not None else ()
        self._entries: dict[str, Path] = dict(sorted(items))

    def __getitem__(self, type_name: str) -> Path:
        return self._entries[type_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self._entries)} definitions)"

    def packages(self) -> list[str]:
        """Return the sorted package names that contribute at least one definition."""
        return sorted({name.split("/", 1)[0] for name in self._entries})

    @classmethod
    def from_entries(cls, entries: Mapping[str, str | Path]) -> "SchemaIndex":
        """Wrap an index that was built elsewhere."""
        return cls({name: Path(path) for name, path in entries.items()})

    @classmethod
    def from_prefixes(cls, prefixes: Iterable[str | Path]) -> "SchemaIndex":
        """Build an index by scanning `<prefix>/share/<package>/msg/*.msg`."""
        builder = SchemaIndexBuilder()
        builder.register_prefixes(prefixes)
        return builder.build()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SchemaIndex":
        """Build an index from the prefixes listed in AMENT_PREFIX_PATH."""
        if environ is None:
            environ = os.environ

        ament_prefix = environ.get(AMENT_PREFIX_PATH_ENV, "")
        if not ament_prefix:
            raise ConfigurationError(f"{AMENT_PREFIX_PATH_ENV} is not set")

        prefixes = [Path(p) for p in ament_prefix.split(os.pathsep) if p]
        index = cls.from_prefixes(prefixes)
        if not index:
            raise ConfigurationError(f"No .msg files found under {AMENT_PREFIX_PATH_ENV}.")
        return index


class SchemaIndexBuilder:
    """Collects definition files before freezing them into a SchemaIndex.

    Registering the same type twice keeps the later path. `register_prefixes`
    sorts prefixes and packages first, so the result never depends on the
    directory listing order of the filesystem.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Path] = {}

    def _add(self, type_name: str, path: Path) -> None:
        previous = self._entries.get(type_name)
        if previous is not None and previous != path:
            logger.debug(f"{type_name}: {path} overrides {previous}")
        self._entries[type_name] = path

    def register_msg_dir(self, package: str, msg_dir: str | Path) -> int:
        """Register every `*.msg` file directly inside msg_dir as package/msg/<stem>.

        Returns:
            Number of definitions registered
        """
        msg_dir = Path(msg_dir)
        try:
            paths = sorted(msg_dir.iterdir())
        except OSError as e:
            raise ConfigurationError(f"Failed to list {msg_dir}: {e}") from e

        count = 0
        for path in paths:
            if path.suffix != MSG_SUFFIX or not path.is_file():
                continue
            self._add(f"{package}{MSG_SEGMENT}{path.stem}", path)
            count += 1

        logger.debug(f"Registered {count} definitions for {package} from {msg_dir}")
        return count

    def register_prefix(self, prefix: str | Path) -> int:
        """Register all packages below `<prefix>/share` that have a `msg` directory."""
        share_dir = Path(prefix) / "share"
        if not share_dir.is_dir():
            logger.warning(f"Skipping {prefix}: no share directory")
            return 0

        try:
            package_dirs = sorted(p for p in share_dir.iterdir() if p.is_dir())
        except OSError as e:
            raise ConfigurationError(f"Failed to list {share_dir}: {e}") from e

        count = 0
        for package_dir in package_dirs:
            msg_dir = package_dir / "msg"
            if msg_dir.is_dir():
                count += self.register_msg_dir(package_dir.name, msg_dir)
        return count

    def register_prefixes(self, prefixes: Iterable[str | Path]) -> int:
        """Register several prefixes in lexicographic order (last one wins on conflicts)."""
        count = 0
        for prefix in sorted(Path(p) for p in prefixes):
            count += self.register_prefix(prefix)
        return count

    def build(self) -> SchemaIndex:
        index = SchemaIndex(self._entries)
        logger.info(
            f"Indexed {len(index)} message definitions from {len(index.packages())} packages"
        )
        return index
