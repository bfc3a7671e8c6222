"""
Integer grid coordinates with a stable identity hash.

The hash is BLAKE2b with an 8-byte digest and a fixed personalisation
string, so the same (x, y, z) gives the same digest in every process and on
every platform. Bump HASH_VERSION if the combining scheme ever changes.
"""

import hashlib
import math
from dataclasses import dataclass, field
from typing import Dict

import numpy as np

HASH_VERSION = 1
_HASH_PERSON = f"scalespace.c{HASH_VERSION}".encode("ascii")

# Per-axis offsets so permuted triples do not share per-axis digests
AXIS_OFFSETS = (1, 2, 3)

I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1

PRECISIONS = ("single", "double")


def _digest(value: int) -> int:
    """Hash one integer to an unsigned 64-bit digest."""
    # 16 bytes holds any axis + offset and any sum of three u64 digests
    data = value.to_bytes(16, "little", signed=True)
    h = hashlib.blake2b(data, digest_size=8, person=_HASH_PERSON)
    return int.from_bytes(h.digest(), "little")


def generate_hash(x: int, y: int, z: int) -> int:
    """Generate the identity hash for a coordinate triple."""
    total = 0
    for value, offset in zip((x, y, z), AXIS_OFFSETS):
        total += _digest(value + offset)
    return _digest(total)


@dataclass(frozen=True)
class Coordinate:
    """
    A point on the integer grid.

    Equality and Python hashing use (x, y, z) only; ``hash`` is the derived
    64-bit identity digest exposed for inspection.
    """
    x: int
    y: int
    z: int
    hash: int = field(init=False, compare=False)

    def __post_init__(self):
        for axis in ("x", "y", "z"):
            value = getattr(self, axis)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise TypeError(f"Coordinate {axis} must be an integer, got {type(value).__name__}")
            value = int(value)
            if not I64_MIN <= value <= I64_MAX:
                raise ValueError(f"Coordinate {axis}={value} outside signed 64-bit range")
            object.__setattr__(self, axis, value)
        object.__setattr__(self, "hash", generate_hash(self.x, self.y, self.z))

    def distance(self, other: "Coordinate", precision: str = "double") -> float:
        """
        Euclidean distance to another coordinate in grid units.

        Args:
            other: Coordinate to measure to
            precision: "single" evaluates in float32, "double" in float64

        Returns:
            Distance in grid units
        """
        if precision == "single":
            # Squares past float32 range become inf, as IEEE single precision does
            with np.errstate(over="ignore"):
                dx = np.float32(self.x) - np.float32(other.x)
                dy = np.float32(self.y) - np.float32(other.y)
                dz = np.float32(self.z) - np.float32(other.z)
                return float(np.sqrt(dx * dx + dy * dy + dz * dz))
        elif precision == "double":
            return math.sqrt(
                (float(self.x) - float(other.x)) ** 2
                + (float(self.y) - float(other.y)) ** 2
                + (float(self.z) - float(other.z)) ** 2
            )
        else:
            raise ValueError(f"Unknown precision '{precision}'. Must be one of {list(PRECISIONS)}")

    @staticmethod
    def get_distance(alpha: "Coordinate", beta: "Coordinate") -> float:
        """Single-precision distance between two coordinates."""
        return alpha.distance(beta, precision="single")

    def __sub__(self, other: "Coordinate") -> float:
        """Double-precision distance between two coordinates."""
        if not isinstance(other, Coordinate):
            return NotImplemented
        return self.distance(other, precision="double")

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y, "z": self.z, "hash": self.hash}

    def __repr__(self) -> str:
        return f"Coordinate({self.x}, {self.y}, {self.z})"


ORIGIN = Coordinate(0, 0, 0)
