"""
PGA-Kernel: a batched 3D Projective Geometric Algebra kernel

A PyTorch library for points, planes, lines and rigid motions in the
projective geometric algebra G(3,0,1).

Key Features:
- Compact entity types (Point, Plane, Line, Rotor, Translator, Motor, ...)
  each stored as one (..., N) tensor; leading axes are batch axes
- Geometric, outer, regressive and inner products plus contractions,
  with per-pair product tables resolved once and cached
- Exponential / logarithm / real power maps between generators and versors
- Motion derivation: distance, projection, shortest-arc motion, ScLERP

API Design:
- Operators: a * b (geometric), a ^ b (meet), a & b (join), a | b (inner),
  ~a (reversal)
- Numeric defaults (dtype, device, acos clamping, tolerance) come from
  pga_kernel.utils.config

Example:
    >>> import math
    >>> from pga_kernel.pga import Point, Dir, Rotor, Translator, transform
    >>> motor = Translator.new(1.0, 0.0, 0.0) * Rotor.from_angle_axis(math.pi / 2, Dir.new(0.0, 0.0, 1.0))
    >>> moved = transform(Point.at(1.0, 0.0, 0.0), motor)  # Point(x=1, y=1, z=0, w=1)
"""

__version__ = "0.1.0"
__author__ = "PGA-Kernel Contributors"

from . import core
from . import utils
from . import pga

__all__ = [
    "core",
    "utils",
    "pga",
]
