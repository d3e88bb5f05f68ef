"""Resolve ROS 2 message definitions and flatten them with their dependencies.

Build an index once and share it between resolutions:
    from msgdef_resolver import SchemaIndex, SchemaResolver

    resolver = SchemaResolver(SchemaIndex.from_env())
    text = resolver.flatten("tf2_msgs/msg/TFMessage")
"""

from .exceptions import (
    ConfigurationError,
    DefinitionNotFoundError,
    DefinitionReadError,
    MsgdefResolverError,
)
from .index import AMENT_PREFIX_PATH_ENV, SchemaIndex, SchemaIndexBuilder, read_definition
from .resolver import SEPARATOR, SchemaResolver
from .type_reference import (
    PRIMITIVE_TYPE_NAMES,
    PrimitiveType,
    ReferenceKind,
    TypeReference,
    classify,
    is_builtin_type,
    normalize_type_name,
    strip_array_suffix,
)

__all__ = [
    "AMENT_PREFIX_PATH_ENV",
    "PRIMITIVE_TYPE_NAMES",
    "SEPARATOR",
    "ConfigurationError",
    "DefinitionNotFoundError",
    "DefinitionReadError",
    "MsgdefResolverError",
    "PrimitiveType",
    "ReferenceKind",
    "SchemaIndex",
    "SchemaIndexBuilder",
    "SchemaResolver",
    "TypeReference",
    "classify",
    "is_builtin_type",
    "normalize_type_name",
    "read_definition",
    "strip_array_suffix",
]
