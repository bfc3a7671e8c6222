import logging

import pytest

from scalespace import Coordinate, Layout, Object, Sphere, length


@pytest.fixture
def meter():
    """One metre."""
    return length(1.0, "meter")


@pytest.fixture
def small_layout():
    """Bound of 5 grid steps spanning 1000 km."""
    return Layout(5, length(1000.0, "kilometer"))


@pytest.fixture
def moon_layout():
    """Earth at the origin and the Moon one grid step away along x."""
    layout = Layout(5, length(384400.0 * 10.0, "kilometer"))
    moon = Object(Coordinate(1, 0, 0), Sphere(length(3474.8, "kilometer")))
    assert layout.add_object(moon)
    return layout


@pytest.fixture
def restore_root_logger():
    """Put the root logger back after tests that reconfigure logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
