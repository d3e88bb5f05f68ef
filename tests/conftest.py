"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from msgdef_resolver import SchemaIndex, SchemaResolver

TRANSFORM_STAMPED = """\
# This expresses a transform from coordinate frame header.frame_id
# to the coordinate frame child_frame_id at the time of header.stamp

# The frame id in the header is used as the reference frame of this transform.
std_msgs/Header header

# The frame id of the child frame to which this transform points.
string child_frame_id

# Translation and rotation in 3-dimensions of child_frame_id from header.frame_id.
Transform transform
"""

HEADER = """\
# Standard metadata for higher-level stamped data types.

# Two-integer timestamp that is expressed as seconds and nanoseconds.
builtin_interfaces/Time stamp

# Transform frame with which this data is associated.
string frame_id
"""

TIME = """\
# The seconds component, valid over all int32 values.
int32 sec

# The nanoseconds component, valid in the range [0, 1e9).
uint32 nanosec
"""

TRANSFORM = """\
# This represents the transform between two coordinate frames in free space.

Vector3 translation
Quaternion rotation
"""

VECTOR3 = """\
# This represents a vector in free space.

float64 x
float64 y
float64 z
"""

QUATERNION = """\
# This represents an orientation in free space in quaternion form.

float64 x 0
float64 y 0
float64 z 0
float64 w 1
"""

TF_DEFINITIONS = {
    "tf2_msgs/msg/TFMessage": "geometry_msgs/TransformStamped[] transforms\n",
    "geometry_msgs/msg/TransformStamped": TRANSFORM_STAMPED,
    "std_msgs/msg/Header": HEADER,
    "builtin_interfaces/msg/Time": TIME,
    "geometry_msgs/msg/Transform": TRANSFORM,
    "geometry_msgs/msg/Vector3": VECTOR3,
    "geometry_msgs/msg/Quaternion": QUATERNION,
}


def _block(name: str, text: str) -> str:
    return f"{'=' * 80}\nMSG: {name}\n{text.strip()}"


EXPECTED_TF_FLATTENED = "\n\n".join(
    [
        "geometry_msgs/TransformStamped[] transforms",
        _block("geometry_msgs/TransformStamped", TRANSFORM_STAMPED),
        _block("std_msgs/Header", HEADER),
        _block("builtin_interfaces/Time", TIME),
        _block("geometry_msgs/Transform", TRANSFORM),
        _block("geometry_msgs/Vector3", VECTOR3),
        _block("geometry_msgs/Quaternion", QUATERNION),
    ]
)


def write_prefix(prefix: Path, definitions: dict[str, str]) -> Path:
    """Lay out definitions as <prefix>/share/<package>/msg/<Type>.msg."""
    for type_name, text in definitions.items():
        package, _, msg_name = type_name.split("/")
        path = prefix / "share" / package / "msg" / f"{msg_name}.msg"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return prefix


@pytest.fixture
def make_prefix(tmp_path: Path) -> Callable[..., Path]:
    """Factory creating an install prefix below tmp_path."""

    def _make(definitions: dict[str, str], name: str = "install") -> Path:
        return write_prefix(tmp_path / name, definitions)

    return _make


@pytest.fixture
def tf_prefix(make_prefix) -> Path:
    """Install prefix containing tf2_msgs/TFMessage and its dependencies."""
    return make_prefix(TF_DEFINITIONS)


@pytest.fixture
def tf_resolver(tf_prefix) -> SchemaResolver:
    return SchemaResolver(SchemaIndex.from_prefixes([tf_prefix]))


@pytest.fixture
def memory_resolver() -> Callable[[dict[str, str]], SchemaResolver]:
    """Factory for resolvers whose definitions live in memory instead of on disk."""

    def _make(definitions: dict[str, str]) -> SchemaResolver:
        index = SchemaIndex.from_entries({name: f"{name}.msg" for name in definitions})
        sources = {index[name]: text for name, text in definitions.items()}
        return SchemaResolver(index, reader=sources.__getitem__)

    return _make


@pytest.fixture
def expected_tf_flattened() -> str:
    return EXPECTED_TF_FLATTENED
