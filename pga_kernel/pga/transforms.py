"""
Motion derivation and geometric transformations using PGA versors.

Measures (distance, ideal magnitude), orthogonal projections, and the
derivation of rigid motions between elements:
- motion(a, b): the shortest-arc versor taking a onto b
- interpolate(a, b, t): screw interpolation (ScLERP) between two versors

Also provides high-level helpers for rotating, translating and transforming
geometric primitives (points, lines, planes) with the sandwich product.
"""

from __future__ import annotations
from typing import Optional

from .algebra import (
    Entity,
    Scalar,
    geometric_product,
    outer_product,
    regressive_product,
    left_contraction,
    right_contraction,
    transformation,
    reversal,
    dual,
    inverse,
    magnitude,
)
from .exp_log import constrain, powf, sqrt
from .motors import Rotor, Translator
from .primitives import Dir, Point
from ..core.types import CartesianTensor, Exponent, ScalarLike


# =============================================================================
# Measures
# =============================================================================

def distance(a: Entity, b: Entity) -> Scalar:
    """
    Euclidean distance between two elements.

    d = |a ∨ b| / (|a| |b|)

    Point-point and point-plane give the usual distance; for two lines the
    result is the distance times the sine of the angle between them.
    """
    return magnitude(regressive_product(a, b)) / (magnitude(a) * magnitude(b))


def ideal_magnitude(x: Entity) -> Scalar:
    """
    Norm of the ideal part: |dual(x)|.

    For a direction this is its Euclidean length; for a point it is the
    weighted distance from the origin.
    """
    return magnitude(dual(x))


# =============================================================================
# Projections
# =============================================================================

def project(a: Entity, b: Entity) -> Entity:
    """
    Orthogonal projection of a onto b: (a ⌊ b⁻¹) ∧ b.

    Example: projecting a point onto a plane gives the foot point.
    """
    return outer_product(right_contraction(a, inverse(b)), b)


def anti_project(a: Entity, b: Entity) -> Entity:
    """
    Move a so that it passes through b: (a ⌋ b⁻¹) ⌋ b.

    Example: anti-projecting a plane onto a point gives the parallel plane
    through that point.
    """
    return left_contraction(left_contraction(a, inverse(b)), b)


# =============================================================================
# Motion derivation
# =============================================================================

def motion(a: Entity, b: Entity) -> Entity:
    """
    Shortest-arc versor taking a onto b.

    M = sqrt(constrain((b / |b|) * (a / |a|)))

    Works for pairs of points (→ Translator), planes and lines (→ Rotor,
    Translator or Motor depending on their configuration).
    """
    product = geometric_product(b / magnitude(b), a / magnitude(a))
    return sqrt(constrain(product))


def interpolate(a: Entity, b: Entity, t: Exponent) -> Entity:
    """
    Screw interpolation between versors a and b.

    I(t) = powf(constrain(b * ~a), t) * a

    I(0) = a and I(1) = b (up to sign); values of t outside [0, 1]
    extrapolate along the same screw.

    Args:
        a: Start versor (Motor, Rotor or Translator)
        b: End versor of the same type
        t: Interpolation parameter (float or batch tensor)

    Returns:
        Interpolated versor
    """
    relative = constrain(geometric_product(b, reversal(a)))
    return geometric_product(powf(relative, t), a)


# =============================================================================
# Transformations
# =============================================================================

def transform(element: Entity, versor: Entity) -> Entity:
    """
    Apply a rotor, translator or motor to any geometric element.

    Args:
        element: Point, Line, Plane, ...
        versor: Transformation to apply

    Returns:
        Transformed element of the same type
    """
    return transformation(versor, element)


def rotate(
    element: Entity,
    angle: ScalarLike,
    axis: Dir,
    center: Optional[Point] = None
) -> Entity:
    """
    Rotate a geometric element around an axis.

    Args:
        element: Element to rotate
        angle: Rotation angle in radians
        axis: Unit rotation axis
        center: Point on the rotation axis (defaults to origin)

    Returns:
        Rotated element
    """
    rotor = Rotor.from_angle_axis(angle, axis)

    if center is None:
        return transformation(rotor, element)

    # Translate to origin, rotate, translate back
    c = point_to_cartesian(center)
    to_origin = Translator.new(-c[..., 0], -c[..., 1], -c[..., 2])
    from_origin = Translator.new(c[..., 0], c[..., 1], c[..., 2])
    versor = from_origin * rotor * to_origin
    return transformation(versor, element)


def translate(
    element: Entity,
    x: ScalarLike,
    y: ScalarLike,
    z: ScalarLike
) -> Entity:
    """
    Translate a geometric element by (x, y, z).
    """
    return transformation(Translator.new(x, y, z), element)


def point_to_cartesian(p: Point) -> CartesianTensor:
    """
    Extract Cartesian coordinates from a PGA point.

    Args:
        p: Point with non-zero weight

    Returns:
        Tensor of shape (..., 3) containing [x/w, y/w, z/w]
    """
    components = p.components
    return components[..., :3] / components[..., 3:]
