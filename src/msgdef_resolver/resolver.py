"""Resolve ROS 2 message definitions and flatten them with all dependencies."""

import logging
from collections.abc import Callable
from pathlib import Path

from msgdef_resolver.exceptions import DefinitionNotFoundError, DefinitionReadError
from msgdef_resolver.index import SchemaIndex, read_definition
from msgdef_resolver.type_reference import ReferenceKind, classify, short_name, split_full_name

logger = logging.getLogger(__name__)

SEPARATOR = "=" * 80
BLOCK_JOINER = "\n\n"
COMMENT_PREFIX = "#"


class SchemaResolver:
    """Resolves message definitions from a prebuilt SchemaIndex.

    The resolver holds no per-call state, so one instance can be shared
    between threads once the index is built.
    """

    def __init__(
        self,
        index: SchemaIndex,
        reader: Callable[[Path], str] = read_definition,
    ) -> None:
        self.index = index
        self._reader = reader

    def resolve(self, type_name: str) -> str:
        """Return the trimmed definition text of a "package/msg/Type" name.

        Raises:
            DefinitionNotFoundError: The type is not in the index
            DefinitionReadError: The definition file could not be read
        """
        path = self.index.get(type_name)
        if path is None:
            raise DefinitionNotFoundError(type_name)

        try:
            text = self._reader(path)
        except (OSError, UnicodeDecodeError) as e:
            raise DefinitionReadError(type_name, path, str(e)) from e

        logger.debug(f"Resolved {type_name} from {path}")
        return text.strip()

    def flatten(self, type_name: str) -> str:
        """Return the definition of type_name followed by all of its dependencies.

        Each dependency appears once, in depth-first order of first reference,
        preceded by a line of 80 "=" and a "MSG: package/Type" header.
        """
        blocks, _ = self._collect(type_name)
        return BLOCK_JOINER.join(blocks)

    def dependencies(self, type_name: str) -> list[str]:
        """Return the fully-qualified names of all types type_name depends on.

        The order matches the order of the blocks produced by `flatten`.
        """
        _, order = self._collect(type_name)
        return order[1:]

    def resolve_all(self) -> dict[str, str]:
        """Resolve every indexed type, in lexicographic order."""
        result = {type_name: self.resolve(type_name) for type_name in self.index}
        logger.info(f"Resolved {len(result)} message definitions")
        return result

    def flatten_all(self) -> dict[str, str]:
        """Flatten every indexed type, in lexicographic order."""
        result = {}
        for type_name in self.index:
            logger.debug(f"Flattening {type_name}")
            result[type_name] = self.flatten(type_name)
        logger.info(f"Flattened {len(result)} message definitions")
        return result

    def _collect(self, root: str) -> tuple[list[str], list[str]]:
        definition = self.resolve(root)
        blocks = [definition]
        order = [root]
        self._visit(root, definition, set(), blocks, order)
        return blocks, order

    def _visit(
        self,
        type_name: str,
        definition: str,
        visited: set[str],
        blocks: list[str],
        order: list[str],
    ) -> None:
        visited.add(type_name)
        current_package, _ = split_full_name(type_name)

        # Only "\n" ends a line; strip() drops a trailing "\r"
        for line in definition.split("\n"):
            line = line.strip()
            if not line or line.startswith(COMMENT_PREFIX):
                continue

            parts = line.split()
            if len(parts) < 2:
                continue

            ref = classify(parts[0], current_package)
            if ref.kind is ReferenceKind.UNRESOLVABLE:
                logger.warning(f"Skipping unresolvable type '{ref.raw}' in {type_name}")
                continue
            nested = ref.full_name
            if nested is None or nested in visited:
                continue

            nested_definition = self.resolve(nested)
            blocks.append(f"{SEPARATOR}\nMSG: {short_name(nested)}\n{nested_definition}")
            order.append(nested)
            self._visit(nested, nested_definition, visited, blocks, order)
