"""
Exponential and logarithm maps between PGA generators and versors.

The exponential maps Lie-algebra bivectors to the versors they generate:
- exp(Line) → Motor           (screw motion)
- exp(IdealLine) → Translator (translation)
- exp(Branch) → Rotor         (rotation about the origin)

The logarithm is the inverse map, and powf(x, e) = exp(e * ln(x)) scales
the motion along its screw. powf(x, 0.5) is the square root, the half-way
motion; powf(x, t) for t in [0, 1] traces the screw from identity to x.

All functions work on batches. Degenerate inputs (pure translations, the
identity, zero generators) are handled per element with torch.where and
"safe" stand-in values fed to sqrt and acos, so the branch that is not
selected never produces NaN and gradients stay finite at those inputs.
"""

from __future__ import annotations
from typing import Callable, Dict, Type
import torch

from .algebra import Entity, Scalar
from .primitives import Branch, IdealLine, Line
from .motors import Motor, Rotor, Translator
from ..core.constants import SQRT_EXPONENT
from ..core.lanes import dot, splat
from ..core.types import Exponent
from ..utils.config import get_config


def _acos(x: torch.Tensor) -> torch.Tensor:
    """acos, clamped to its domain unless the active config disables it."""
    if get_config().clamp_domain:
        x = x.clamp(-1.0, 1.0)
    return torch.acos(x)


# =============================================================================
# Screw motions: Line <-> Motor
# =============================================================================

def _exp_line(line: Line) -> Motor:
    """
    Exponential of a line (screw generator).

    For det = |direction|² > 0 with a = √det:
        scalar       = cos a
        bivector     = (sin a / a) * direction
        ideal        = (sin a / a) * moment + t * direction
        pseudoscalar = (sin a / a) * (direction · moment)
    where t = (direction · moment / det) * (cos a - sin a / a).

    For det <= 0 the line is at infinity and the result is a translator
    embedded in a motor: (1, 0, 0, 0, 0, moment).
    """
    direction = line.direction
    moment = line.moment

    det = dot(direction, direction)
    finite = det > 0
    det_safe = torch.where(finite, det, torch.ones_like(det))

    a = torch.sqrt(det_safe)
    c = torch.cos(a)
    s = torch.sin(a) / a
    m = dot(direction, moment)
    t = m / det_safe * (c - s)

    scalar = torch.where(finite, c, torch.ones_like(c))
    bivector = torch.where(
        finite.unsqueeze(-1), s.unsqueeze(-1) * direction, torch.zeros_like(direction)
    )
    ideal = torch.where(
        finite.unsqueeze(-1),
        s.unsqueeze(-1) * moment + t.unsqueeze(-1) * direction,
        moment,
    )
    pseudoscalar = torch.where(finite, s * m, torch.zeros_like(m))

    return Motor(torch.cat([
        scalar.unsqueeze(-1),
        bivector,
        pseudoscalar.unsqueeze(-1),
        ideal,
    ], dim=-1))


def _ln_motor(motor: Motor) -> Line:
    """
    Logarithm of a unit motor.

    For det = 1 - scalar² > 0 with a = 1 / det:
        b         = acos(scalar) * √a
        c         = a * pseudoscalar * (1 - scalar * b)
        direction = b * bivector
        moment    = b * ideal + c * bivector

    For det <= 0 the motor is a pure translation:
        direction = 0, moment = ideal
    """
    rotor_part = motor.rotor_part
    ideal_part = motor.ideal_part
    scalar = rotor_part[..., 0]
    bivector = rotor_part[..., 1:]
    pseudoscalar = ideal_part[..., 0]
    ideal = ideal_part[..., 1:]

    det = 1.0 - scalar * scalar
    rotating = det > 0
    det_safe = torch.where(rotating, det, torch.ones_like(det))

    a = 1.0 / det_safe
    scalar_safe = torch.where(rotating, scalar, torch.zeros_like(scalar))
    b = _acos(scalar_safe) * torch.sqrt(a)
    c = a * pseudoscalar * (1.0 - scalar * b)

    mask = rotating.unsqueeze(-1)
    direction = torch.where(mask, b.unsqueeze(-1) * bivector, torch.zeros_like(bivector))
    moment = torch.where(
        mask,
        b.unsqueeze(-1) * ideal + c.unsqueeze(-1) * bivector,
        ideal,
    )

    return Line(torch.cat([direction, moment], dim=-1))


def _powf_motor(motor: Motor, exponent: Exponent) -> Motor:
    return _exp_line(_ln_motor(motor) * exponent)


# =============================================================================
# Translations: IdealLine <-> Translator
# =============================================================================

def _exp_ideal_line(generator: IdealLine) -> Translator:
    """exp(v) = 1 + v, since ideal bivectors square to zero."""
    ones = torch.ones_like(generator.components[..., :1])
    return Translator(torch.cat([ones, generator.components], dim=-1))


def _ln_translator(translator: Translator) -> IdealLine:
    components = translator.components
    return IdealLine(components[..., 1:] / components[..., :1])


def _powf_translator(translator: Translator, exponent: Exponent) -> Translator:
    return _exp_ideal_line(_ln_translator(translator) * exponent)


# =============================================================================
# Rotations: Branch <-> Rotor
# =============================================================================

def _exp_branch(branch: Branch) -> Rotor:
    """
    exp(b) = cos|b| + (sin|b| / |b|) * b

    The zero branch maps to the identity rotor.
    """
    b = branch.components
    sq = dot(b, b)
    zero = sq == 0
    n = torch.sqrt(torch.where(zero, torch.ones_like(sq), sq))

    scalar = torch.where(zero, torch.ones_like(n), torch.cos(n))
    factor = torch.where(zero, torch.ones_like(n), torch.sin(n) / n)
    bivector = factor.unsqueeze(-1) * b

    return Rotor(torch.cat([scalar.unsqueeze(-1), bivector], dim=-1))


def _ln_rotor(rotor: Rotor) -> Branch:
    """
    Logarithm of a rotor.

    angle  = acos(scalar / |R|)
    branch = (angle / sin(angle) / |R|) * bivector

    A zero rotor, or one without bivector part (identity or bare scalar),
    has the zero branch as logarithm. When sin(angle) is exactly zero the
    factor takes its limit 1 / |R|.
    """
    components = rotor.components
    scalar = components[..., 0]
    bivector = components[..., 1:]

    sq = scalar * scalar + dot(bivector, bivector)
    degenerate = (sq == 0) | (bivector == 0).all(dim=-1)
    n_safe = torch.sqrt(torch.where(degenerate, torch.ones_like(sq), sq))

    ratio = torch.where(degenerate, torch.zeros_like(scalar), scalar / n_safe)
    angle = _acos(ratio)
    sine = torch.sin(angle)
    flat = sine == 0
    sine_safe = torch.where(flat, torch.ones_like(sine), sine)
    real = torch.where(flat, 1.0 / n_safe, angle / sine_safe / n_safe)

    branch = torch.where(
        degenerate.unsqueeze(-1),
        torch.zeros_like(bivector),
        real.unsqueeze(-1) * bivector,
    )
    return Branch(branch)


def _powf_rotor(rotor: Rotor, exponent: Exponent) -> Rotor:
    """
    Rotors without bivector part are raised by real exponentiation of the
    scalar; all others go through exp(exponent * ln(rotor)).
    """
    components = rotor.components
    scalar = components[..., :1]
    bivector = components[..., 1:]
    plain = (bivector == 0).all(dim=-1, keepdim=True)

    real_scalar = scalar ** splat(exponent, scalar)
    real_power = torch.cat([
        real_scalar,
        torch.zeros(
            *real_scalar.shape[:-1], bivector.shape[-1],
            dtype=real_scalar.dtype, device=real_scalar.device,
        ),
    ], dim=-1)
    screw_power = _exp_branch(_ln_rotor(rotor) * exponent).components

    return Rotor(torch.where(plain, real_power, screw_power))


# =============================================================================
# Scalars
# =============================================================================

def _exp_scalar(x: Scalar) -> Scalar:
    return Scalar(torch.exp(x.components))


def _ln_scalar(x: Scalar) -> Scalar:
    return Scalar(torch.log(x.components))


def _powf_scalar(x: Scalar, exponent: Exponent) -> Scalar:
    return Scalar(x.components ** splat(exponent, x.components))


# =============================================================================
# Dispatch
# =============================================================================

EXP_TABLE: Dict[Type[Entity], Callable] = {
    Line: _exp_line,
    IdealLine: _exp_ideal_line,
    Branch: _exp_branch,
    Scalar: _exp_scalar,
}

LN_TABLE: Dict[Type[Entity], Callable] = {
    Motor: _ln_motor,
    Translator: _ln_translator,
    Rotor: _ln_rotor,
    Scalar: _ln_scalar,
}

POWF_TABLE: Dict[Type[Entity], Callable] = {
    Motor: _powf_motor,
    Translator: _powf_translator,
    Rotor: _powf_rotor,
    Scalar: _powf_scalar,
}


def _lookup(table: Dict[Type[Entity], Callable], name: str, x: Entity) -> Callable:
    fn = table.get(type(x))
    if fn is None:
        supported = ", ".join(cls.__name__ for cls in table)
        raise TypeError(
            f"{name} is not defined for {type(x).__name__} (supported: {supported})"
        )
    return fn


def exp(x: Entity) -> Entity:
    """
    Exponential map from generator to versor.

    Args:
        x: Line, IdealLine, Branch or Scalar

    Returns:
        Motor, Translator, Rotor or Scalar respectively
    """
    return _lookup(EXP_TABLE, "exp", x)(x)


def ln(x: Entity) -> Entity:
    """
    Logarithm map from versor to generator.

    Args:
        x: Motor, Translator, Rotor or Scalar

    Returns:
        Line, IdealLine, Branch or Scalar respectively
    """
    return _lookup(LN_TABLE, "ln", x)(x)


def powf(x: Entity, exponent: Exponent) -> Entity:
    """
    Raise a versor to a real power.

    Args:
        x: Motor, Translator, Rotor or Scalar
        exponent: Float, or tensor broadcasting against the batch shape

    Returns:
        Entity of the same type as x
    """
    return _lookup(POWF_TABLE, "powf", x)(x, exponent)


def sqrt(x: Entity) -> Entity:
    """Square root: the half-way motion."""
    return powf(x, SQRT_EXPONENT)


def _scalar_index(x: Entity) -> int:
    if not isinstance(x, Entity):
        raise TypeError(f"Expected a PGA entity, got {type(x).__name__}")
    index = type(x).scalar_index()
    if index is None:
        raise TypeError(f"{type(x).__name__} has no scalar component")
    return index


def scalar_part(x: Entity) -> Scalar:
    """Grade-0 coefficient as Scalar."""
    index = _scalar_index(x)
    return Scalar(x.components[..., index:index + 1])


def constrain(x: Entity) -> Entity:
    """
    Pick the representative with non-negative scalar part.

    Versors double cover their motions (x and -x act identically); the one
    with scalar >= 0 takes the shorter arc under powf and interpolation.
    """
    index = _scalar_index(x)
    components = x.components
    keep = components[..., index:index + 1] >= 0
    return type(x)(torch.where(keep, components, -components))
