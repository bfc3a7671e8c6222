"""
Layouts: bounded integer grids standing in for real space.

A layout is a three-dimensional cartesian grid encoded to represent a space
of any magnitude. Each object placed on the grid has its visual angle
computed as though it existed at its real position in the encoded space,
which makes it possible to reason about very large static scenes with small
integer coordinates instead of large floating point values.

A layout is initialised with:
- coordinate_bound: number of unit-less steps the grid extends from the
  centre along each axis. Higher values give a finer layout.
- dimension: the real edge length the grid represents, from -bound to
  +bound on one axis.

Layouts are not thread-safe. Callers that share a layout between threads
must serialise ``add_object`` against itself and against
``observe_layout_objects``.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .config import LayoutConfig
from .geometry.coordinates import Coordinate, PRECISIONS
from .geometry.shapes import Object, Shape
from .obs.logging import StructuredLogger, TimedOperation
from .units import Quantity, length, require_length

log = StructuredLogger(__name__)

DEFAULT_COORDINATE_BOUND = 1000
DEFAULT_DIMENSION_UNIT = "light_year"


@dataclass(frozen=True)
class ObservedObject:
    """An object as seen from a position inside a layout."""
    # The shape of the observed object
    shape: Shape
    # Visual angle of the object at its position
    visual_angle: Quantity
    # Real distance between the observer and the object
    distance: Quantity
    # Grid coordinates of the object
    coordinates: Coordinate
    # Position from which the object was observed
    observed_from: Coordinate


class Layout:
    """A bounded grid of objects observed at real-world scale."""

    def __init__(self, coordinate_bound: int = DEFAULT_COORDINATE_BOUND,
                 dimension: Optional[Quantity] = None, precision: str = "single"):
        if isinstance(coordinate_bound, bool) or not isinstance(coordinate_bound, (int, np.integer)):
            raise TypeError(f"Coordinate bound must be an integer, got {type(coordinate_bound).__name__}")
        coordinate_bound = int(coordinate_bound)
        if coordinate_bound < 1:
            raise ValueError(f"Coordinate bound must be positive, got {coordinate_bound}")
        if precision not in PRECISIONS:
            raise ValueError(f"Unknown precision '{precision}'. Must be one of {list(PRECISIONS)}")
        if dimension is None:
            dimension = length(1.0, DEFAULT_DIMENSION_UNIT)

        self._objects: List[Object] = []
        self._coordinate_bound = coordinate_bound
        self._dimension = require_length(dimension, "dimension")
        self._precision = precision

    @classmethod
    def default(cls) -> "Layout":
        """A layout of 1000 steps each way spanning one light-year."""
        return cls()

    @classmethod
    def from_config(cls, config: LayoutConfig) -> "Layout":
        return cls(
            coordinate_bound=config.coordinate_bound,
            dimension=length(config.dimension, config.dimension_unit),
            precision=config.distance_precision,
        )

    @property
    def coordinate_bound(self) -> int:
        return self._coordinate_bound

    @property
    def dimension(self) -> Quantity:
        return self._dimension

    @property
    def precision(self) -> str:
        return self._precision

    @property
    def unit_length(self) -> Quantity:
        """Real length represented by one grid step."""
        return self._dimension / (2 * self._coordinate_bound)

    @property
    def objects(self) -> Tuple[Object, ...]:
        return tuple(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __repr__(self) -> str:
        return (f"Layout(bound={self._coordinate_bound}, dimension={self._dimension:~P}, "
                f"objects={len(self._objects)})")

    def check_bound(self, value: int) -> bool:
        """Checks whether a single axis value lies within the layout (inclusive)."""
        return -self._coordinate_bound <= value <= self._coordinate_bound

    def add_object(self, obj: Object) -> bool:
        """
        Adds an object to the layout.

        Returns:
            True if the object was stored, False if any axis of its position
            falls outside the coordinate bound (nothing is stored then)
        """
        position = obj.position
        failed_axes = [
            axis for axis in ("x", "y", "z")
            if not self.check_bound(getattr(position, axis))
        ]
        if failed_axes:
            log.object_rejected(position.to_dict(), self._coordinate_bound, failed_axes)
            return False

        self._objects.append(obj)
        log.object_added(position.to_dict(), type(obj.shape).__name__, len(self._objects))
        return True

    def get_distance(self, position: Coordinate, comparison: Coordinate) -> Quantity:
        """Gets the real distance between two coordinates in the layout."""
        steps = position.distance(comparison, precision=self._precision)
        # Grid ratio first: steps == bound gives exactly 0.5, so D/2 stays exact
        return self._dimension * (steps / (2 * self._coordinate_bound))

    def observe_layout_objects(self, origin: Coordinate) -> List[ObservedObject]:
        """
        Produce every object in the layout with its visual angle as seen
        from ``origin``, in insertion order.
        """
        with TimedOperation(log, "observe_layout_objects", level=logging.DEBUG,
                            origin=origin.to_dict(), object_count=len(self._objects)):
            observed = []
            for obj in self._objects:
                distance = self.get_distance(origin, obj.position)
                observed.append(ObservedObject(
                    shape=obj.shape,
                    visual_angle=obj.shape.get_visual_angle(distance),
                    distance=distance,
                    coordinates=obj.position,
                    observed_from=origin,
                ))
        return observed
