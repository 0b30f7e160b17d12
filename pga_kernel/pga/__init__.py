"""
PGA (Projective Geometric Algebra) module.

Implements the algebra of G(3,0,1) over compact entity types (points,
planes, lines, rotors, translators, motors), the exponential / logarithm
maps between generators and versors, and the derivation of rigid motions.
"""

from .algebra import (
    Entity,
    Scalar,
    AntiScalar,
    MultiVector,
    register_entity,
    geometric_product,
    outer_product,
    regressive_product,
    inner_product,
    left_contraction,
    right_contraction,
    scalar_product,
    transformation,
    reversal,
    automorphism,
    conjugation,
    dual,
    cast,
    squared_magnitude,
    magnitude,
    signum,
    inverse,
    powi,
)

from .primitives import (
    Point,
    Origin,
    Dir,
    Plane,
    Flat,
    Branch,
    IdealLine,
    Line,
)

from .motors import (
    Rotor,
    Translator,
    Motor,
)

from .exp_log import (
    exp,
    ln,
    powf,
    sqrt,
    scalar_part,
    constrain,
)

from .transforms import (
    distance,
    ideal_magnitude,
    project,
    anti_project,
    motion,
    interpolate,
    transform,
    rotate,
    translate,
    point_to_cartesian,
)

__all__ = [
    # Algebra
    "Entity",
    "Scalar",
    "AntiScalar",
    "MultiVector",
    "register_entity",
    "geometric_product",
    "outer_product",
    "regressive_product",
    "inner_product",
    "left_contraction",
    "right_contraction",
    "scalar_product",
    "transformation",
    "reversal",
    "automorphism",
    "conjugation",
    "dual",
    "cast",
    "squared_magnitude",
    "magnitude",
    "signum",
    "inverse",
    "powi",
    # Primitives
    "Point",
    "Origin",
    "Dir",
    "Plane",
    "Flat",
    "Branch",
    "IdealLine",
    "Line",
    # Motors
    "Rotor",
    "Translator",
    "Motor",
    # Exp / log
    "exp",
    "ln",
    "powf",
    "sqrt",
    "scalar_part",
    "constrain",
    # Transforms
    "distance",
    "ideal_magnitude",
    "project",
    "anti_project",
    "motion",
    "interpolate",
    "transform",
    "rotate",
    "translate",
    "point_to_cartesian",
]
