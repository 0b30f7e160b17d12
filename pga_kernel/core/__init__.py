"""
Core module for PGA-Kernel.

Contains:
- Constants: Centralized default values and numeric constants
- Types: Type aliases for common tensor shapes
- Base: Storage base class shared by every entity
- Lanes: Packed float containers the entities are built from
"""

from .constants import (
    # Numeric constants
    DEFAULT_DTYPE,
    DEFAULT_DEVICE,
    DEFAULT_ATOL,
    DEFAULT_CLAMP_DOMAIN,
    # Algebra layout
    NUM_BLADES,
    NUM_GENERATORS,
    LANES_3,
    LANES_4,
    SQRT_EXPONENT,
)

from .types import (
    ScalarLike,
    Exponent,
    Lanes3,
    Lanes4,
    TransformMatrix,
    CartesianTensor,
    Blade,
    BladeEmbedding,
)

from .base import BaseEntity

from .lanes import (
    as_lane,
    stack_lanes,
    splat,
    dot,
)

__all__ = [
    # Constants
    "DEFAULT_DTYPE",
    "DEFAULT_DEVICE",
    "DEFAULT_ATOL",
    "DEFAULT_CLAMP_DOMAIN",
    "NUM_BLADES",
    "NUM_GENERATORS",
    "LANES_3",
    "LANES_4",
    "SQRT_EXPONENT",
    # Types
    "ScalarLike",
    "Exponent",
    "Lanes3",
    "Lanes4",
    "TransformMatrix",
    "CartesianTensor",
    "Blade",
    "BladeEmbedding",
    # Base class
    "BaseEntity",
    # Lanes
    "as_lane",
    "stack_lanes",
    "splat",
    "dot",
]
