"""Classification of the type token of a ROS 2 `.msg` field declaration."""

from dataclasses import dataclass
from enum import Enum

MSG_SEGMENT = "/msg/"


class PrimitiveType(str, Enum):
    """ROS 2 builtin field type names."""

    BOOL = "bool"
    BYTE = "byte"
    CHAR = "char"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    INT8 = "int8"
    UINT8 = "uint8"
    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    INT64 = "int64"
    UINT64 = "uint64"
    STRING = "string"
    WSTRING = "wstring"


PRIMITIVE_TYPE_NAMES = frozenset(member.value for member in PrimitiveType)

_STRING_TYPE_NAMES = (PrimitiveType.STRING.value, PrimitiveType.WSTRING.value)


class ReferenceKind(str, Enum):
    BUILTIN = "builtin"
    CUSTOM = "custom"
    UNRESOLVABLE = "unresolvable"


@dataclass(frozen=True)
class TypeReference:
    """Result of classifying one raw type token."""

    # Token as written in the definition (e.g., "geometry_msgs/Point[<=3]")
    raw: str
    # Token with array suffixes removed (e.g., "geometry_msgs/Point")
    base: str
    kind: ReferenceKind
    # Fully-qualified "package/msg/Type" for custom references only
    full_name: str | None = None

    @property
    def is_builtin(self) -> bool:
        return self.kind is ReferenceKind.BUILTIN

    @property
    def is_custom(self) -> bool:
        return self.kind is ReferenceKind.CUSTOM

    @property
    def package_name(self) -> str | None:
        if self.full_name is None:
            return None
        return split_full_name(self.full_name)[0]

    @property
    def short_name(self) -> str | None:
        """Name as shown in "MSG:" headers (e.g., "std_msgs/Header")."""
        if self.full_name is None:
            return None
        return short_name(self.full_name)


def _is_ascii_digits(text: str) -> bool:
    return text.isascii() and text.isdigit()


def _is_array_bound(inner: str) -> bool:
    """Check the inside of a trailing bracket: "", "N", "<=N" or "<="."""
    if not inner or _is_ascii_digits(inner):
        return True
    if not inner.startswith("<="):
        return False
    bound = inner[2:].strip()
    return not bound or _is_ascii_digits(bound)


def strip_array_suffix(raw: str) -> str:
    """Remove trailing array designators from a type token.

    Strips any number of `[]`, `[N]` and `[<=N]` suffixes from the end,
    e.g. "string<=256[<=8]" -> "string<=256". Stripping stops at the first
    bracket whose contents are not an array bound, and a bracket at position 0
    is never stripped.
    """
    base = raw
    while base.endswith("]"):
        open_idx = base.rfind("[")
        if open_idx <= 0:
            break
        if not _is_array_bound(base[open_idx + 1 : -1].strip()):
            break
        base = base[:open_idx]
    return base


def is_builtin_type(raw: str) -> bool:
    """Check whether a type token is a primitive, bounded string or array of those."""
    base = strip_array_suffix(raw)
    if base in PRIMITIVE_TYPE_NAMES:
        return True

    # Bounded strings: string<=N / wstring<=N
    for name in _STRING_TYPE_NAMES:
        if base.startswith(name):
            rest = base[len(name) :]
            return not rest or (rest.startswith("<=") and _is_ascii_digits(rest[2:]))

    return False


def split_full_name(full_name: str) -> tuple[str, str]:
    """Split "package/msg/Type" into ("package", "Type")."""
    parts = full_name.split("/")
    return parts[0], parts[-1]


def short_name(full_name: str) -> str:
    """Collapse the "/msg/" segment: "std_msgs/msg/Header" -> "std_msgs/Header"."""
    return full_name.replace(MSG_SEGMENT, "/")


def qualify(base: str, current_package: str) -> str | None:
    """Turn an array-free custom type name into "package/msg/Type".

    Returns None for slash-separated names that are neither "pkg/Type" nor
    already contain "/msg/".
    """
    if "/" not in base:
        return f"{current_package}{MSG_SEGMENT}{base}"
    if MSG_SEGMENT in base:
        return base

    segments = base.split("/")
    if len(segments) != 2:
        return None
    return f"{segments[0]}{MSG_SEGMENT}{segments[1]}"


def classify(raw: str, current_package: str) -> TypeReference:
    """Classify a raw field type token.

    Args:
        raw: First token of a field declaration line (e.g., "Transform[]")
        current_package: Package of the message that declares the field, used
            for unqualified references

    Returns:
        A builtin, custom or unresolvable TypeReference. Custom references
        carry the fully-qualified "package/msg/Type" name.
    """
    base = strip_array_suffix(raw)
    if is_builtin_type(raw):
        return TypeReference(raw=raw, base=base, kind=ReferenceKind.BUILTIN)

    full_name = qualify(base, current_package)
    if full_name is None:
        return TypeReference(raw=raw, base=base, kind=ReferenceKind.UNRESOLVABLE)
    return TypeReference(raw=raw, base=base, kind=ReferenceKind.CUSTOM, full_name=full_name)


def normalize_type_name(type_name: str) -> str:
    """Normalize a user supplied message type to "package/msg/Type".

    Accepts both "package/Type" and "package/msg/Type".
    """
    if "/" not in type_name:
        raise ValueError(f"Message type must include a package: {type_name}")

    full_name = qualify(type_name, "")
    if full_name is None:
        raise ValueError(f"Invalid message type format: {type_name}")
    return full_name
