"""
Relations between visual angle, distance and size of an object.

For an object of size s at distance d subtending an angle θ:

    θ = 2·atan((s/2) / d)
    d = (s/2) / tan(θ/2)
    s = 2·d·tan(θ/2)

Inputs are pint quantities and are converted to metres and radians before
use. Singular inputs are not rejected: a zero distance gives an angle of π
and a zero angle gives an infinite distance.
"""

import math

import numpy as np

from ..obs.logging import StructuredLogger
from ..units import Quantity, to_meters, to_radians, LENGTH_UNIT, ANGLE_UNIT

log = StructuredLogger(__name__)


def _divide(numerator: float, denominator: float) -> float:
    """IEEE division: x/0 is ±inf and 0/0 is nan instead of raising."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(np.float64(numerator), np.float64(denominator)))


class VisualAngle:
    """A collection of conversions between visual angle, distance and size."""

    @staticmethod
    def angle_from_distance_size(distance: Quantity, size: Quantity) -> Quantity:
        """Gets the visual angle of an object from its distance and size."""
        d = to_meters(distance, "distance")
        s = to_meters(size, "size")
        if d == 0:
            log.degenerate_geometry("angle_from_distance_size", distance_m=d, size_m=s)
        angle = 2.0 * math.atan(_divide(s / 2.0, d))
        return Quantity(angle, ANGLE_UNIT)

    @staticmethod
    def distance_from_visual_angle_and_size(visual_angle: Quantity, size: Quantity) -> Quantity:
        """Gets the distance of an object from its visual angle and size."""
        theta = to_radians(visual_angle, "visual_angle")
        s = to_meters(size, "size")
        if theta == 0:
            log.degenerate_geometry("distance_from_visual_angle_and_size", angle_rad=theta, size_m=s)
        return Quantity(_divide(s / 2.0, math.tan(theta / 2.0)), LENGTH_UNIT)

    @staticmethod
    def size_from_visual_angle_and_distance(visual_angle: Quantity, distance: Quantity) -> Quantity:
        """Gets the size of an object from its visual angle and distance."""
        theta = to_radians(visual_angle, "visual_angle")
        d = to_meters(distance, "distance")
        return Quantity(2.0 * d * math.tan(theta / 2.0), LENGTH_UNIT)
