"""
scalespace: real-scale visual angles on a small integer grid.

Place spherical objects on a bounded integer grid that encodes a space of
any size, then compute how large each object appears from any point of the
grid, without large-magnitude floating point arithmetic.
"""

from .errors import ScaleSpaceError, UnitError, ConfigError
from .units import ureg, Quantity, length, angle
from .geometry import Coordinate, ORIGIN, VisualAngle, Shape, Sphere, Object
from .layout import Layout, ObservedObject
from .config import AppConfig, LayoutConfig, LoggingConfig, load_config, configure

__version__ = "0.1.0"

__all__ = [
    "ScaleSpaceError", "UnitError", "ConfigError",
    "ureg", "Quantity", "length", "angle",
    "Coordinate", "ORIGIN", "VisualAngle", "Shape", "Sphere", "Object",
    "Layout", "ObservedObject",
    "AppConfig", "LayoutConfig", "LoggingConfig", "load_config", "configure",
]
