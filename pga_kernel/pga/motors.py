"""
Motor operations for Projective Geometric Algebra (PGA).

A Motor in PGA represents a rigid body motion (rotation + translation).
Motors are elements of the even subalgebra and have the form:

    M = T * R

where R is a rotor (pure rotation) and T is a translator (pure translation).

Storage:
    Rotor:      [scalar, x, y, z]           on 1, e32, e13, e21
    Translator: [scalar, x, y, z]           on 1, e01, e02, e03
    Motor:      [scalar, bx, by, bz,        on 1, e32, e13, e21,
                 pseudoscalar, ix, iy, iz]  on e1230, e01, e02, e03

The fundamental operation is the sandwich product:
    X' = M * X * ~M

This transforms any geometric element X (point, line, plane) while
preserving distances and angles.
"""

from __future__ import annotations
import torch

from .algebra import (
    Entity,
    register_entity,
    transformation,
    IDX_S,
    IDX_E0123,
)
from .primitives import (
    Dir,
    Point,
    EUCLIDEAN_BIVECTOR_BLADES,
    IDEAL_BIVECTOR_BLADES,
)
from ..core.constants import LANES_4
from ..core.lanes import as_lane, stack_lanes
from ..core.types import Lanes4, ScalarLike, TransformMatrix


def _versor_matrix(versor: Entity) -> TransformMatrix:
    """
    Row i of the result is the image of the basis point with component i = 1.

    Args:
        versor: Rotor, Translator or Motor of batch shape (...)

    Returns:
        Tensor of shape (..., 4, 4); row-major, points transform as row vectors
    """
    basis = Point(torch.eye(LANES_4, dtype=versor.dtype, device=versor.device))
    # Broadcast the versor over the 4 basis points
    batched = type(versor)(versor.components.unsqueeze(-2))
    return transformation(batched, basis).components


@register_entity
class Rotor(Entity):
    """
    Rotation about an axis through the origin: s + x*e32 + y*e13 + z*e21.

    Unit rotors double cover SO(3): R and -R rotate identically.
    """

    COMPONENTS = ('scalar', 'x', 'y', 'z')
    BLADES = ((IDX_S, 1),) + EUCLIDEAN_BIVECTOR_BLADES

    @classmethod
    def new(
        cls,
        x: ScalarLike,
        y: ScalarLike,
        z: ScalarLike,
        w: ScalarLike
    ) -> 'Rotor':
        """Quaternion-style constructor; w is the scalar part."""
        return cls(stack_lanes(w, x, y, z))

    @classmethod
    def from_angle_axis(cls, angle: ScalarLike, axis: Dir) -> 'Rotor':
        """
        Create a right-handed rotation.

        R = cos(θ/2) + sin(θ/2) * axis

        Args:
            angle: Rotation angle in radians (number or batch tensor)
            axis: Unit rotation axis

        Returns:
            Rotor
        """
        half = as_lane(angle, dtype=axis.dtype, device=axis.device) * 0.5
        sine = torch.sin(half)
        return cls(stack_lanes(
            torch.cos(half),
            sine * axis.x,
            sine * axis.y,
            sine * axis.z,
        ))

    def matrix(self) -> TransformMatrix:
        """Convert to a (..., 4, 4) row-major transformation matrix."""
        return _versor_matrix(self)


@register_entity
class Translator(Entity):
    """
    Translation: s + x*e01 + y*e02 + z*e03.

    T = 1 - (d/2) * (dx*e01 + dy*e02 + dz*e03) moves points by +d.
    """

    COMPONENTS = ('scalar', 'x', 'y', 'z')
    BLADES = ((IDX_S, 1),) + IDEAL_BIVECTOR_BLADES

    @classmethod
    def new(cls, x: ScalarLike, y: ScalarLike, z: ScalarLike) -> 'Translator':
        """Translator moving points by (x, y, z)."""
        return cls(stack_lanes(1.0, -0.5 * x, -0.5 * y, -0.5 * z))

    def matrix(self) -> TransformMatrix:
        """Convert to a (..., 4, 4) row-major transformation matrix."""
        return _versor_matrix(self)


@register_entity
class Motor(Entity):
    """
    A Motor representing rigid body motion in PGA.

    The first four components form the rotor-like part (scalar and
    Euclidean bivector), the last four the pseudoscalar and the ideal
    bivector. Products of translators and rotors land here.
    """

    COMPONENTS = ('scalar', 'bx', 'by', 'bz', 'pseudoscalar', 'ix', 'iy', 'iz')
    BLADES = (
        ((IDX_S, 1),)
        + EUCLIDEAN_BIVECTOR_BLADES
        + ((IDX_E0123, -1),)
        + IDEAL_BIVECTOR_BLADES
    )

    @classmethod
    def new(
        cls,
        scalar: ScalarLike,
        bx: ScalarLike,
        by: ScalarLike,
        bz: ScalarLike,
        pseudoscalar: ScalarLike,
        ix: ScalarLike,
        iy: ScalarLike,
        iz: ScalarLike
    ) -> 'Motor':
        return cls(stack_lanes(scalar, bx, by, bz, pseudoscalar, ix, iy, iz))

    @property
    def rotor_part(self) -> Lanes4:
        """[scalar, bx, by, bz], shape (..., 4)."""
        return self.components[..., :4]

    @property
    def ideal_part(self) -> Lanes4:
        """[pseudoscalar, ix, iy, iz], shape (..., 4)."""
        return self.components[..., 4:]

    def matrix(self) -> TransformMatrix:
        """Convert to a (..., 4, 4) row-major transformation matrix."""
        return _versor_matrix(self)
