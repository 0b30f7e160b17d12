"""
Pytest configuration and fixtures for PGA-Kernel tests.
"""

import math

import pytest

from pga_kernel.pga import Dir, Line, Rotor, Translator
from pga_kernel.utils.config import Config, set_config


@pytest.fixture
def atol():
    """Tolerance for multi-step numeric chains (exp/ln, sandwiches)."""
    return 1e-4


@pytest.fixture
def batch_size():
    """Default batch size for tests."""
    return 5


@pytest.fixture
def quarter_turn_z():
    """Rotor turning 90 degrees about +z."""
    return Rotor.from_angle_axis(math.pi / 2, Dir.new(0.0, 0.0, 1.0))


@pytest.fixture
def screw_motor():
    """Translation (1, 2, 3) after a 1 rad rotation about (0.6, 0.8, 0)."""
    rotor = Rotor.from_angle_axis(1.0, Dir.new(0.6, 0.8, 0.0))
    return Translator.new(1.0, 2.0, 3.0) * rotor


@pytest.fixture
def screw_line():
    """Generic line with a non-perpendicular moment."""
    return Line.new(0.3, -0.5, 0.2, 1.0, 0.4, -0.7)


@pytest.fixture
def x_axis():
    """The x axis as a line through the origin."""
    return Line.new(1.0, 0.0, 0.0, 0.0, 0.0, 0.0)


@pytest.fixture(autouse=True)
def default_config():
    """Run every test against the default configuration."""
    previous = set_config(Config())
    yield
    set_config(previous)
