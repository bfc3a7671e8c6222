"""
Geometry primitives: grid coordinates, visual-angle relations and shapes.
"""

from .coordinates import Coordinate, ORIGIN, HASH_VERSION, generate_hash
from .visual_angle import VisualAngle
from .shapes import Shape, Sphere, Object, SHAPE_VARIANTS

__all__ = [
    "Coordinate", "ORIGIN", "HASH_VERSION", "generate_hash",
    "VisualAngle",
    "Shape", "Sphere", "Object", "SHAPE_VARIANTS",
]
