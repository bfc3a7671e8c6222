"""
Shapes and the objects that carry them.

The set of shape variants is closed; today it holds only the sphere.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict

from ..units import Quantity, require_length, LENGTH_UNIT
from .coordinates import Coordinate
from .visual_angle import VisualAngle


class Shape(ABC):
    """Geometry of an object placed in a layout."""

    @abstractmethod
    def get_visual_angle(self, distance: Quantity) -> Quantity:
        """Return the visual angle of the shape seen from ``distance``."""

    @abstractmethod
    def describe(self) -> Dict[str, Any]:
        """Return the variant name and its dimensions in metres."""


@dataclass(frozen=True)
class Sphere(Shape):
    """
    A spherical object. Large gravitationally bound bodies tend to go
    spherical anyway.

    ``radius`` is the extent the sphere presents to the observer and is fed
    to the visual-angle relation as the object size.
    """
    radius: Quantity

    def __post_init__(self):
        require_length(self.radius, "radius")

    def get_visual_angle(self, distance: Quantity) -> Quantity:
        return VisualAngle.angle_from_distance_size(distance, self.radius)

    def describe(self) -> Dict[str, Any]:
        return {"type": "sphere", "radius_m": self.radius.to(LENGTH_UNIT).magnitude}


# Closed set of shape variants; new shapes must be added here
SHAPE_VARIANTS = (Sphere,)


@dataclass(frozen=True)
class Object:
    """An object represented in the cartesian grid."""
    position: Coordinate
    shape: Shape

    def __post_init__(self):
        if not isinstance(self.position, Coordinate):
            raise TypeError(f"position must be a Coordinate, got {type(self.position).__name__}")
        if not isinstance(self.shape, SHAPE_VARIANTS):
            raise TypeError(f"shape must be one of {[s.__name__ for s in SHAPE_VARIANTS]}, "
                            f"got {type(self.shape).__name__}")
