"""
Type aliases and shape conventions for PGA-Kernel.

Shape Conventions:
==================

Every entity stores its coefficients in a single tensor whose LAST axis
holds the components and whose leading axes are batch axes:

    Point:   Tensor[..., 4]   # (x, y, z, w)
    Line:    Tensor[..., 6]   # (dx, dy, dz, mx, my, mz)
    Motor:   Tensor[..., 8]   # (scalar, bx, by, bz, pseudoscalar, ix, iy, iz)

Batch axes broadcast in every binary operation, so a single Motor of
shape (8,) can act on a Point batch of shape (N, 4).

Example:
    points = Point.at(torch.rand(100), torch.rand(100), torch.rand(100))
    points.shape   # torch.Size([100])
    points.components.shape   # torch.Size([100, 4])
"""

from typing import Sequence, Tuple, Union
import torch


# =============================================================================
# Basic Type Aliases
# =============================================================================

# Anything a constructor accepts as one coefficient
ScalarLike = Union[float, int, torch.Tensor]

# Exponent for powf / interpolation parameter
Exponent = Union[float, int, torch.Tensor]

# Three-wide packed lanes: (..., 3)
Lanes3 = torch.Tensor

# Four-wide packed lanes: (..., 4)
Lanes4 = torch.Tensor

# Homogeneous 4x4 transform: (..., 4, 4), row i = image of basis point i
TransformMatrix = torch.Tensor

# Cartesian coordinates: (..., 3)
CartesianTensor = torch.Tensor

# One basis blade as a tuple of generator indices, e.g. (0, 3, 1) for e031
Blade = Tuple[int, ...]

# Component embedding: (basis index, sign) per entity component
BladeEmbedding = Sequence[Tuple[int, int]]
