"""
Geometric primitives in Projective Geometric Algebra (PGA).

PGA represents geometric objects as follows:
- Points: Grade-3 trivectors (x*e032 + y*e013 + z*e021 + w*e123)
- Lines: Grade-2 bivectors (Plücker coordinates)
- Planes: Grade-1 vectors (x*e1 + y*e2 + z*e3 + d*e0)

Each primitive only stores the components it can hold; the embedding into
the 16-component basis is declared per class in BLADES. Reduced variants
exist for common special cases:
- Origin: the e123 part of a point alone
- Dir: the ideal (w = 0) part of a point, i.e. a direction
- Flat: a plane through the origin (d = 0)
- Branch: a line through the origin (rotation generator)
- IdealLine: a line at infinity (translation generator)

Key operations (from pga.algebra):
- Join (∨, regressive product): point ∨ point → line, point ∨ line → plane
- Meet (∧, outer product): plane ∧ plane → line, line ∧ plane → point
"""

from __future__ import annotations
import torch

from .algebra import (
    Entity,
    register_entity,
    regressive_product,
    dual,
    magnitude,
    IDX_E0, IDX_E1, IDX_E2, IDX_E3,
    IDX_E01, IDX_E02, IDX_E03, IDX_E12, IDX_E31, IDX_E23,
    IDX_E012, IDX_E031, IDX_E023, IDX_E123,
)
from ..core.constants import LANES_3
from ..core.lanes import stack_lanes
from ..core.types import Lanes3, ScalarLike

# Shared embeddings
# e032 = -e023, e013 = -e031, e021 = -e012
POINT_BLADES = ((IDX_E023, -1), (IDX_E031, -1), (IDX_E012, -1))
# e32 = -e23, e13 = -e31, e21 = -e12
EUCLIDEAN_BIVECTOR_BLADES = ((IDX_E23, -1), (IDX_E31, -1), (IDX_E12, -1))
IDEAL_BIVECTOR_BLADES = ((IDX_E01, 1), (IDX_E02, 1), (IDX_E03, 1))


@register_entity
class Origin(Entity):
    """The origin point, stored as its weight on e123."""

    COMPONENTS = ('w',)
    BLADES = ((IDX_E123, 1),)

    @classmethod
    def new(cls) -> 'Origin':
        """Origin with weight 1."""
        return cls(stack_lanes(1.0))


@register_entity
class Flat(Entity):
    """Plane through the origin: x*e1 + y*e2 + z*e3."""

    COMPONENTS = ('x', 'y', 'z')
    BLADES = ((IDX_E1, 1), (IDX_E2, 1), (IDX_E3, 1))

    @classmethod
    def new(cls, x: ScalarLike, y: ScalarLike, z: ScalarLike) -> 'Flat':
        return cls(stack_lanes(x, y, z))


@register_entity
class Dir(Entity):
    """
    Direction (ideal point): x*e032 + y*e013 + z*e021.

    A point with zero weight; translations leave it unchanged.
    """

    COMPONENTS = ('x', 'y', 'z')
    BLADES = POINT_BLADES

    @classmethod
    def new(cls, x: ScalarLike, y: ScalarLike, z: ScalarLike) -> 'Dir':
        return cls(stack_lanes(x, y, z))

    def point(self) -> 'Point':
        """Finite point at the tip of this direction (w = 1)."""
        ones = torch.ones_like(self.components[..., :1])
        return Point(torch.cat([self.components, ones], dim=-1))

    def length(self):
        """Euclidean length as Scalar (the magnitude of the dual flat)."""
        return magnitude(dual(self))

    def normalize(self) -> 'Dir':
        """Unit-length direction."""
        return self / self.length()


@register_entity
class Branch(Entity):
    """
    Line through the origin: x*e32 + y*e13 + z*e21.

    Rotation generator; exp maps it to a Rotor turning by twice its magnitude.
    """

    COMPONENTS = ('x', 'y', 'z')
    BLADES = EUCLIDEAN_BIVECTOR_BLADES

    @classmethod
    def new(cls, x: ScalarLike, y: ScalarLike, z: ScalarLike) -> 'Branch':
        return cls(stack_lanes(x, y, z))


@register_entity
class IdealLine(Entity):
    """
    Line at infinity: x*e01 + y*e02 + z*e03.

    Translation generator; squares to zero.
    """

    COMPONENTS = ('x', 'y', 'z')
    BLADES = IDEAL_BIVECTOR_BLADES

    @classmethod
    def new(cls, x: ScalarLike, y: ScalarLike, z: ScalarLike) -> 'IdealLine':
        return cls(stack_lanes(x, y, z))


@register_entity
class Plane(Entity):
    """
    Oriented plane: x*e1 + y*e2 + z*e3 + d*e0.

    The plane equation is x*X + y*Y + z*Z + d = 0, so a unit normal (x, y, z)
    puts the plane at signed distance -d from the origin.
    """

    COMPONENTS = ('x', 'y', 'z', 'd')
    BLADES = ((IDX_E1, 1), (IDX_E2, 1), (IDX_E3, 1), (IDX_E0, 1))

    @classmethod
    def new(
        cls,
        x: ScalarLike,
        y: ScalarLike,
        z: ScalarLike,
        distance: ScalarLike
    ) -> 'Plane':
        """
        Create a plane from its normal and signed distance along it.

        Args:
            x, y, z: Normal vector components
            distance: Signed distance from origin (stored as d = -distance)

        Returns:
            Plane
        """
        return cls(stack_lanes(x, y, z, -distance))


@register_entity
class Point(Entity):
    """
    Homogeneous point: x*e032 + y*e013 + z*e021 + w*e123.

    w = 1 for normalized points, w = 0 for points at infinity.
    """

    COMPONENTS = ('x', 'y', 'z', 'w')
    BLADES = POINT_BLADES + ((IDX_E123, 1),)

    @classmethod
    def at(cls, x: ScalarLike, y: ScalarLike, z: ScalarLike) -> 'Point':
        """Normalized point at Cartesian coordinates (x, y, z)."""
        return cls(stack_lanes(x, y, z, 1.0))

    @classmethod
    def new(
        cls,
        x: ScalarLike,
        y: ScalarLike,
        z: ScalarLike,
        w: ScalarLike
    ) -> 'Point':
        return cls(stack_lanes(x, y, z, w))

    @classmethod
    def origin(cls) -> 'Point':
        return cls.at(0.0, 0.0, 0.0)

    def dir(self) -> Dir:
        """Ideal part after dividing by the weight magnitude."""
        p = self / magnitude(self)
        return Dir(p.components[..., :LANES_3])


@register_entity
class Line(Entity):
    """
    Line in Plücker coordinates.

    The first three components are the direction (on e32, e13, e21), the
    last three the moment (on e01, e02, e03). Lines are the screw generators:
    exp maps a Line to a Motor.
    """

    COMPONENTS = ('dx', 'dy', 'dz', 'mx', 'my', 'mz')
    BLADES = EUCLIDEAN_BIVECTOR_BLADES + IDEAL_BIVECTOR_BLADES

    @classmethod
    def new(
        cls,
        dx: ScalarLike,
        dy: ScalarLike,
        dz: ScalarLike,
        mx: ScalarLike,
        my: ScalarLike,
        mz: ScalarLike
    ) -> 'Line':
        return cls(stack_lanes(dx, dy, dz, mx, my, mz))

    @classmethod
    def from_direction_moment(cls, direction: Lanes3, moment: Lanes3) -> 'Line':
        """
        Create a line from direction and moment tensors.

        Args:
            direction: Tensor of shape (..., 3)
            moment: Tensor of shape (..., 3)

        Returns:
            Line
        """
        direction, moment = torch.broadcast_tensors(direction, moment)
        return cls(torch.cat([direction, moment], dim=-1))

    @classmethod
    def from_points(cls, p: Point, q: Point) -> 'Line':
        """Join of two points (regressive product p ∨ q)."""
        return regressive_product(p, q)

    @property
    def direction(self) -> Lanes3:
        """Euclidean part, shape (..., 3)."""
        return self.components[..., :LANES_3]

    @property
    def moment(self) -> Lanes3:
        """Ideal part, shape (..., 3)."""
        return self.components[..., LANES_3:]
