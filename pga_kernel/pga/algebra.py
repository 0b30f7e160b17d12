"""
Projective Geometric Algebra (PGA) operators for G(3,0,1).

PGA is an algebra with 16 basis elements organized by grade:
- Grade 0 (scalar): 1
- Grade 1 (vectors/planes): e₀, e₁, e₂, e₃
- Grade 2 (bivectors/lines): e₀₁, e₀₂, e₀₃, e₁₂, e₃₁, e₂₃
- Grade 3 (trivectors/points): e₀₁₂, e₀₃₁, e₀₂₃, e₁₂₃
- Grade 4 (pseudoscalar): e₀₁₂₃

The metric signature is (3,0,1) meaning:
- e₁² = e₂² = e₃² = +1 (Euclidean)
- e₀² = 0 (degenerate/null direction)

Component ordering of the full basis:
[s, e0, e1, e2, e3, e01, e02, e03, e12, e31, e23, e012, e031, e023, e123, e0123]
 0   1   2   3   4   5    6    7    8    9    10   11    12    13    14    15

Entities (points, lines, motors, ...) only store the components they can
hold. Each entity class lists the basis blade (and sign) behind every one of
its components; from that the module derives, once per pair of entity types
and per operation, a reduced product table of shape (N_left, N_right, N_out)
together with the output type. The output type is the smallest registered
entity whose blades cover everything the product can produce, with
MultiVector as the fallback.
"""

from __future__ import annotations
import logging
from functools import lru_cache
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple, Type, Union
import torch

from ..core.base import BaseEntity
from ..core.constants import (
    NUM_BLADES,
    NUM_GENERATORS,
    OP_GEOMETRIC,
    OP_OUTER,
    OP_REGRESSIVE,
    OP_INNER,
    OP_LEFT_CONTRACTION,
    OP_RIGHT_CONTRACTION,
    OP_SCALAR,
)
from ..core.lanes import stack_lanes
from ..core.types import Blade, ScalarLike
from ..utils.config import get_config

logger = logging.getLogger(__name__)


# Component indices for each basis element
IDX_S = 0      # Scalar (grade 0)
IDX_E0 = 1     # e₀
IDX_E1 = 2     # e₁
IDX_E2 = 3     # e₂
IDX_E3 = 4     # e₃
IDX_E01 = 5    # e₀₁
IDX_E02 = 6    # e₀₂
IDX_E03 = 7    # e₀₃
IDX_E12 = 8    # e₁₂
IDX_E31 = 9    # e₃₁
IDX_E23 = 10   # e₂₃
IDX_E012 = 11  # e₀₁₂
IDX_E031 = 12  # e₀₃₁
IDX_E023 = 13  # e₀₂₃
IDX_E123 = 14  # e₁₂₃
IDX_E0123 = 15 # e₀₁₂₃

# Generator indices of each basis blade, in storage orientation
# e31 is stored as (3, 1) and e031 as (0, 3, 1), NOT e13 / e013
BASIS_BLADES: Tuple[Blade, ...] = (
    (),
    (0,), (1,), (2,), (3,),
    (0, 1), (0, 2), (0, 3), (1, 2), (3, 1), (2, 3),
    (0, 1, 2), (0, 3, 1), (0, 2, 3), (1, 2, 3),
    (0, 1, 2, 3),
)

BASIS_NAMES: Tuple[str, ...] = (
    'scalar',
    'e0', 'e1', 'e2', 'e3',
    'e01', 'e02', 'e03', 'e12', 'e31', 'e23',
    'e012', 'e031', 'e023', 'e123',
    'e0123',
)

# Metric: e0^2 = 0, e1^2 = e2^2 = e3^2 = 1
METRIC = (0, 1, 1, 1)

GRADES: Tuple[int, ...] = tuple(len(blade) for blade in BASIS_BLADES)

# Grade masks for extraction
GRADE_0_MASK = [IDX_S]
GRADE_1_MASK = [IDX_E0, IDX_E1, IDX_E2, IDX_E3]
GRADE_2_MASK = [IDX_E01, IDX_E02, IDX_E03, IDX_E12, IDX_E31, IDX_E23]
GRADE_3_MASK = [IDX_E012, IDX_E031, IDX_E023, IDX_E123]
GRADE_4_MASK = [IDX_E0123]
GRADE_MASKS = (GRADE_0_MASK, GRADE_1_MASK, GRADE_2_MASK, GRADE_3_MASK, GRADE_4_MASK)


def _canonical_blade(blade: Sequence[int]) -> Tuple[Blade, int]:
    """Convert blade to canonical form (sorted, with sign)."""
    if len(blade) == 0:
        return (), 1

    # Bubble sort to count swaps
    blade = list(blade)
    sign = 1
    for i in range(len(blade)):
        for j in range(len(blade) - 1 - i):
            if blade[j] > blade[j + 1]:
                blade[j], blade[j + 1] = blade[j + 1], blade[j]
                sign *= -1
    return tuple(blade), sign


def _multiply_blades(a: Blade, b: Blade) -> Tuple[Blade, int]:
    """
    Multiply two blades, returning (canonical result blade, sign).

    Bubble sorts the concatenation into canonical form, contracting pairs of
    equal generators through the metric. A zero sign means the product
    vanishes (it contained e0 twice).
    """
    combined = list(a) + list(b)
    sign = 1

    changed = True
    while changed:
        changed = False
        i = 0
        while i < len(combined) - 1:
            if combined[i] == combined[i + 1]:
                # Adjacent equal elements: contract using metric
                m = METRIC[combined[i]]
                if m == 0:
                    return (), 0
                sign *= m
                combined.pop(i + 1)
                combined.pop(i)
                changed = True
            elif combined[i] > combined[i + 1]:
                # ei*ej = -ej*ei for i != j
                combined[i], combined[i + 1] = combined[i + 1], combined[i]
                sign *= -1
                changed = True
                i += 1
            else:
                i += 1

    return tuple(combined), sign


# Canonical blade -> (basis index, sign of the stored orientation)
_BLADE_INDEX: Dict[Blade, Tuple[int, int]] = {}
for _idx, _blade in enumerate(BASIS_BLADES):
    _canonical, _sign = _canonical_blade(_blade)
    _BLADE_INDEX[_canonical] = (_idx, _sign)


def _build_cayley_table() -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Build the Cayley table for the geometric product in PGA.

    The Cayley table defines: e_i * e_j = sign * e_k

    Returns:
        signs: (16, 16) tensor of signs (+1, -1, or 0)
        indices: (16, 16) tensor of result indices
    """
    signs = [[0] * NUM_BLADES for _ in range(NUM_BLADES)]
    indices = [[0] * NUM_BLADES for _ in range(NUM_BLADES)]

    for i, blade_i in enumerate(BASIS_BLADES):
        for j, blade_j in enumerate(BASIS_BLADES):
            blade, sign = _multiply_blades(blade_i, blade_j)
            if sign == 0:
                continue
            k, k_sign = _BLADE_INDEX[blade]
            signs[i][j] = sign * k_sign
            indices[i][j] = k

    return (
        torch.tensor(signs, dtype=torch.float64),
        torch.tensor(indices, dtype=torch.long),
    )


def _build_dual_table() -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Build the complement map used as the PGA dual.

    Each blade A maps to its complement blade, signed so that
    A ∧ dual(A) = e0123.

    Returns:
        signs: (16,) tensor of signs
        indices: (16,) tensor of complement indices
    """
    full = tuple(range(NUM_GENERATORS))
    signs = [0] * NUM_BLADES
    indices = [0] * NUM_BLADES

    for i, blade in enumerate(BASIS_BLADES):
        canonical, sign = _canonical_blade(blade)
        complement = tuple(g for g in full if g not in canonical)
        _, wedge_sign = _canonical_blade(canonical + complement)
        k, k_sign = _BLADE_INDEX[complement]
        signs[i] = sign * wedge_sign * k_sign
        indices[i] = k

    return (
        torch.tensor(signs, dtype=torch.float64),
        torch.tensor(indices, dtype=torch.long),
    )


# Build tables at module load time
CAYLEY_SIGNS, CAYLEY_INDICES = _build_cayley_table()
DUAL_SIGNS, DUAL_INDICES = _build_dual_table()

# Inverse of the complement map
UNDUAL_INDICES = torch.argsort(DUAL_INDICES)
UNDUAL_SIGNS = DUAL_SIGNS[UNDUAL_INDICES]

# Reversion sign table: grade k has sign (-1)^(k*(k-1)/2)
REVERSION_SIGNS = torch.tensor(
    [(-1) ** (g * (g - 1) // 2) for g in GRADES], dtype=torch.float64
)

# Grade involution sign table: odd grades get negated
INVOLUTION_SIGNS = torch.tensor([(-1) ** g for g in GRADES], dtype=torch.float64)

# Clifford conjugation: reversion + grade involution
CONJUGATION_SIGNS = REVERSION_SIGNS * INVOLUTION_SIGNS


def _keeps_grade(op: str, r: int, s: int, t: int) -> bool:
    """Grade filter of each product for operand grades r, s and result grade t."""
    if op == OP_GEOMETRIC:
        return True
    if op == OP_OUTER:
        return t == r + s
    if op == OP_INNER:
        return t == abs(r - s)
    if op == OP_LEFT_CONTRACTION:
        return t == s - r
    if op == OP_RIGHT_CONTRACTION:
        return t == r - s
    if op == OP_SCALAR:
        return t == 0
    raise ValueError(f"Unknown product: {op}")


@lru_cache(maxsize=None)
def _product_tensor(op: str) -> torch.Tensor:
    """
    Dense (16, 16, 16) table T with (a op b)_k = sum_ij a_i b_j T_ijk.

    The regressive product is assembled as undual(dual(a) ∧ dual(b)).
    """
    table = torch.zeros(NUM_BLADES, NUM_BLADES, NUM_BLADES, dtype=torch.float64)

    for i in range(NUM_BLADES):
        for j in range(NUM_BLADES):
            if op == OP_REGRESSIVE:
                di, dj = DUAL_INDICES[i].item(), DUAL_INDICES[j].item()
                sign = CAYLEY_SIGNS[di, dj].item()
                m = CAYLEY_INDICES[di, dj].item()
                if sign == 0 or GRADES[m] != GRADES[di] + GRADES[dj]:
                    continue
                k = UNDUAL_INDICES[m].item()
                table[i, j, k] = (
                    DUAL_SIGNS[i] * DUAL_SIGNS[j] * sign * UNDUAL_SIGNS[m]
                )
            else:
                sign = CAYLEY_SIGNS[i, j].item()
                k = CAYLEY_INDICES[i, j].item()
                if sign == 0 or not _keeps_grade(op, GRADES[i], GRADES[j], GRADES[k]):
                    continue
                table[i, j, k] = sign

    return table


# =============================================================================
# Entity registry and per-type tables
# =============================================================================

# Candidate result types, in registration order
ENTITY_TYPES: List[Type['Entity']] = []


def register_entity(cls: Type['Entity']) -> Type['Entity']:
    """Class decorator adding an entity type to the result-type candidates."""
    ENTITY_TYPES.append(cls)
    _resolve_cover.cache_clear()
    _pair_table.cache_clear()
    _pair_table_on.cache_clear()
    _linear_table.cache_clear()
    _linear_table_on.cache_clear()
    logger.debug("Registered entity type %s with %d components", cls.__name__, len(cls.COMPONENTS))
    return cls


@lru_cache(maxsize=None)
def _embedding(cls: Type['Entity']) -> torch.Tensor:
    """(N, 16) matrix placing each component of `cls` on its signed basis blade."""
    embedding = torch.zeros(len(cls.COMPONENTS), NUM_BLADES, dtype=torch.float64)
    for n, (idx, sign) in enumerate(cls.BLADES):
        embedding[n, idx] = sign
    return embedding


def _blade_set(cls: Type['Entity']) -> FrozenSet[int]:
    return frozenset(idx for idx, _ in cls.BLADES)


@lru_cache(maxsize=None)
def _resolve_cover(blades: FrozenSet[int]) -> Type['Entity']:
    """Smallest registered entity type holding every blade in `blades`."""
    candidates = [cls for cls in ENTITY_TYPES if blades <= _blade_set(cls)]
    if not candidates:
        return MultiVector
    return min(candidates, key=lambda cls: len(cls.BLADES))


def _produced_blades(table: torch.Tensor) -> FrozenSet[int]:
    """Blades with a structurally nonzero coefficient in a (..., 16) table."""
    reduce_dims = tuple(range(table.dim() - 1))
    return frozenset(torch.nonzero(table.abs().sum(dim=reduce_dims)).flatten().tolist())


@lru_cache(maxsize=None)
def _pair_table(
    op: str,
    left: Type['Entity'],
    right: Type['Entity']
) -> Tuple[Type['Entity'], torch.Tensor]:
    """
    Output type and reduced (N_left, N_right, N_out) table for `left op right`.
    """
    full = torch.einsum(
        'ai,bj,ijk->abk', _embedding(left), _embedding(right), _product_tensor(op)
    )
    out = _resolve_cover(_produced_blades(full))
    table = full @ _embedding(out).T
    logger.debug(
        "Resolved %s product %s x %s -> %s", op, left.__name__, right.__name__, out.__name__
    )
    return out, table


@lru_cache(maxsize=None)
def _pair_table_on(
    op: str,
    left: Type['Entity'],
    right: Type['Entity'],
    dtype: torch.dtype,
    device: torch.device
) -> Tuple[Type['Entity'], torch.Tensor]:
    out, table = _pair_table(op, left, right)
    return out, table.to(dtype=dtype, device=device)


def _dual_matrix() -> torch.Tensor:
    """(16, 16) matrix of the complement map acting on row vectors."""
    matrix = torch.zeros(NUM_BLADES, NUM_BLADES, dtype=torch.float64)
    matrix[torch.arange(NUM_BLADES), DUAL_INDICES] = DUAL_SIGNS
    return matrix


@lru_cache(maxsize=None)
def _linear_table(
    kind: str,
    source: Type['Entity'],
    target: Optional[Type['Entity']] = None
) -> Tuple[Type['Entity'], torch.Tensor]:
    """
    Output type and (N_in, N_out) matrix of a linear unary map.

    kind is one of 'reversal', 'automorphism', 'conjugation', 'dual', 'cast'.
    """
    embedding = _embedding(source)
    if kind == 'reversal':
        full = embedding * REVERSION_SIGNS
    elif kind == 'automorphism':
        full = embedding * INVOLUTION_SIGNS
    elif kind == 'conjugation':
        full = embedding * CONJUGATION_SIGNS
    elif kind == 'dual':
        full = embedding @ _dual_matrix()
    elif kind == 'cast':
        full = embedding
    else:
        raise ValueError(f"Unknown unary map: {kind}")

    if target is None:
        target = source if kind != 'dual' else _resolve_cover(_produced_blades(full))
    return target, full @ _embedding(target).T


@lru_cache(maxsize=None)
def _linear_table_on(
    kind: str,
    source: Type['Entity'],
    target: Optional[Type['Entity']],
    dtype: torch.dtype,
    device: torch.device
) -> Tuple[Type['Entity'], torch.Tensor]:
    out, table = _linear_table(kind, source, target)
    return out, table.to(dtype=dtype, device=device)


def _check_entity(value, name: str = "operand") -> None:
    if not isinstance(value, Entity):
        raise TypeError(f"Expected a PGA entity as {name}, got {type(value).__name__}")


def _apply_linear(kind: str, x: 'Entity', target: Optional[Type['Entity']] = None) -> 'Entity':
    _check_entity(x)
    out, table = _linear_table_on(kind, type(x), target, x.dtype, x.device)
    return out(x.components @ table)


def _product(op: str, a: 'Entity', b: 'Entity') -> 'Entity':
    _check_entity(a, "left operand")
    _check_entity(b, "right operand")
    dtype = torch.promote_types(a.dtype, b.dtype)
    out, table = _pair_table_on(op, type(a), type(b), dtype, a.device)
    pairs = a.components.to(dtype).unsqueeze(-1) * b.components.to(dtype).unsqueeze(-2)
    return out(torch.einsum('...ab,abk->...k', pairs, table))


def _scale(x: 'Entity', factor: Union[ScalarLike, 'Scalar']) -> 'Entity':
    """Multiply every component by a number, a batch tensor or a Scalar."""
    if isinstance(factor, Scalar):
        return type(x)(x.components * factor.components)
    if isinstance(factor, torch.Tensor):
        return type(x)(x.components * factor.unsqueeze(-1))
    return type(x)(x.components * factor)


# =============================================================================
# Binary operators
# =============================================================================

def geometric_product(a: 'Entity', b: 'Entity') -> 'Entity':
    """
    Compute the geometric product a * b (full Clifford product).
    """
    return _product(OP_GEOMETRIC, a, b)


def outer_product(a: 'Entity', b: 'Entity') -> 'Entity':
    """
    Compute the outer (wedge) product a ∧ b.

    For grade-r and grade-s elements the result has grade r + s.
    Also called meet: plane ∧ plane → line, line ∧ plane → point.
    """
    return _product(OP_OUTER, a, b)


def regressive_product(a: 'Entity', b: 'Entity') -> 'Entity':
    """
    Compute the regressive (vee) product a ∨ b.

    Defined as undual(dual(a) ∧ dual(b)). Also called join:
    point ∨ point → line, point ∨ line → plane, point ∨ plane → scalar.
    """
    return _product(OP_REGRESSIVE, a, b)


def inner_product(a: 'Entity', b: 'Entity') -> 'Entity':
    """Geometric product grade filtered by t == |r - s|."""
    return _product(OP_INNER, a, b)


def left_contraction(a: 'Entity', b: 'Entity') -> 'Entity':
    """Geometric product grade filtered by t == s - r."""
    return _product(OP_LEFT_CONTRACTION, a, b)


def right_contraction(a: 'Entity', b: 'Entity') -> 'Entity':
    """Geometric product grade filtered by t == r - s."""
    return _product(OP_RIGHT_CONTRACTION, a, b)


def scalar_product(a: 'Entity', b: 'Entity') -> 'Entity':
    """Geometric product grade filtered by t == 0."""
    return _product(OP_SCALAR, a, b)


def transformation(versor: 'Entity', element: 'Entity') -> 'Entity':
    """
    Sandwich product: versor * element * ~versor.

    This is the fundamental operation for applying motions in GA. The result
    has the type of `element`.
    """
    sandwich = geometric_product(geometric_product(versor, element), reversal(versor))
    return cast(sandwich, type(element))


# =============================================================================
# Unary operators
# =============================================================================

def reversal(x: 'Entity') -> 'Entity':
    """
    Reversion: ~x

    Negates components with grade % 4 >= 2.
    """
    return _apply_linear('reversal', x)


def automorphism(x: 'Entity') -> 'Entity':
    """Main involution: negates odd-grade components."""
    return _apply_linear('automorphism', x)


def conjugation(x: 'Entity') -> 'Entity':
    """Clifford conjugation: negates components with (grade + 3) % 4 < 2."""
    return _apply_linear('conjugation', x)


def dual(x: 'Entity') -> 'Entity':
    """
    Complement dual: every blade maps to its complement blade.

    Points and planes swap, as do the Euclidean and ideal halves of a line.
    """
    return _apply_linear('dual', x)


def cast(x: 'Entity', cls: Type['Entity']) -> 'Entity':
    """
    Re-express `x` as an entity of type `cls`.

    Components `cls` cannot hold are dropped.
    """
    return _apply_linear('cast', x, cls)


def squared_magnitude(x: 'Entity') -> 'Scalar':
    """Square of the Euclidean norm: scalar part of x * ~x."""
    return cast(scalar_product(x, reversal(x)), Scalar)


def magnitude(x: 'Entity') -> 'Scalar':
    """
    Length as scalar (also called amplitude, absolute value or norm).

    Ideal components do not contribute.
    """
    return Scalar(torch.sqrt(squared_magnitude(x).components))


def signum(x: 'Entity') -> 'Entity':
    """Direction without magnitude: x / |x|."""
    return x / magnitude(x)


def inverse(x: 'Entity') -> 'Entity':
    """Raise to the scalar power -1: ~x / |x|²."""
    return reversal(x) / squared_magnitude(x)


def powi(x: 'Entity', exponent: int) -> 'Entity':
    """
    Raise to an integer power by repeated geometric products.

    Only defined for types holding a scalar blade (closed under the product).
    """
    _check_entity(x)
    if exponent < 0:
        return powi(inverse(x), -exponent)
    result = x.one_like()
    for _ in range(exponent):
        result = cast(geometric_product(result, x), type(x))
    return result


# =============================================================================
# Entity base class
# =============================================================================

class Entity(BaseEntity):
    """
    A graded element of G(3,0,1) with the algebra operators attached.

    Operators:
        a * b   geometric product (or scaling by a number / tensor)
        a / b   scaling by 1/b for numbers, tensors and Scalars,
                otherwise a * inverse(b)
        a ^ b   outer product
        a & b   regressive product
        a | b   inner product
        ~a      reversal
        a + b   sum (mixed types add as MultiVector)
    """

    @classmethod
    def from_components(cls, *values: ScalarLike) -> 'Entity':
        """Build from one coefficient per component (numbers or tensors)."""
        if len(values) != len(cls.COMPONENTS):
            raise ValueError(
                f"Expected {len(cls.COMPONENTS)} components for {cls.__name__}, "
                f"got {len(values)}"
            )
        return cls(stack_lanes(*values))

    @classmethod
    def scalar_index(cls) -> Optional[int]:
        """Storage position of the scalar component, if the type has one."""
        for n, (idx, _) in enumerate(cls.BLADES):
            if idx == IDX_S:
                return n
        return None

    @classmethod
    def zero(
        cls,
        batch_shape: Tuple[int, ...] = (),
        dtype: Optional[torch.dtype] = None,
        device: Optional[torch.device] = None
    ) -> 'Entity':
        """All elements set to 0."""
        config = get_config()
        return cls(torch.zeros(
            *batch_shape, len(cls.COMPONENTS),
            dtype=dtype or config.torch_dtype(),
            device=device or config.torch_device(),
        ))

    @classmethod
    def one(
        cls,
        batch_shape: Tuple[int, ...] = (),
        dtype: Optional[torch.dtype] = None,
        device: Optional[torch.device] = None
    ) -> 'Entity':
        """All elements set to 0, except for the scalar, which is set to 1."""
        index = cls.scalar_index()
        if index is None:
            raise TypeError(f"{cls.__name__} has no scalar component")
        result = cls.zero(batch_shape, dtype=dtype, device=device)
        components = result.components.clone()
        components[..., index] = 1.0
        return cls(components)

    def one_like(self) -> 'Entity':
        """Identity element with this entity's batch shape, dtype and device."""
        return type(self).one(tuple(self.shape), dtype=self.dtype, device=self.device)

    def allclose(self, other: 'Entity', atol: Optional[float] = None) -> bool:
        """Componentwise comparison within the configured tolerance."""
        if type(other) is not type(self):
            return False
        if atol is None:
            atol = get_config().atol
        a, b = torch.broadcast_tensors(self.components, other.components.to(self.dtype))
        return torch.allclose(a, b, atol=atol)

    # === Algebra methods ===

    def geometric_product(self, other: 'Entity') -> 'Entity':
        return geometric_product(self, other)

    def outer_product(self, other: 'Entity') -> 'Entity':
        return outer_product(self, other)

    def regressive_product(self, other: 'Entity') -> 'Entity':
        return regressive_product(self, other)

    def inner_product(self, other: 'Entity') -> 'Entity':
        return inner_product(self, other)

    def left_contraction(self, other: 'Entity') -> 'Entity':
        return left_contraction(self, other)

    def right_contraction(self, other: 'Entity') -> 'Entity':
        return right_contraction(self, other)

    def scalar_product(self, other: 'Entity') -> 'Entity':
        return scalar_product(self, other)

    def transformation(self, other: 'Entity') -> 'Entity':
        """Apply this versor to `other` with the sandwich product."""
        return transformation(self, other)

    def reversal(self) -> 'Entity':
        return reversal(self)

    def automorphism(self) -> 'Entity':
        return automorphism(self)

    def conjugation(self) -> 'Entity':
        return conjugation(self)

    def dual(self) -> 'Entity':
        return dual(self)

    def cast(self, cls: Type['Entity']) -> 'Entity':
        return cast(self, cls)

    def squared_magnitude(self) -> 'Scalar':
        return squared_magnitude(self)

    def magnitude(self) -> 'Scalar':
        return magnitude(self)

    def signum(self) -> 'Entity':
        return signum(self)

    def inverse(self) -> 'Entity':
        return inverse(self)

    def powi(self, exponent: int) -> 'Entity':
        return powi(self, exponent)

    # === Operators ===

    def __add__(self, other: 'Entity') -> 'Entity':
        if not isinstance(other, Entity):
            return NotImplemented
        if type(other) is type(self):
            return type(self)(self.components + other.components)
        return MultiVector(cast(self, MultiVector).components + cast(other, MultiVector).components)

    def __sub__(self, other: 'Entity') -> 'Entity':
        if not isinstance(other, Entity):
            return NotImplemented
        return self + (-other)

    def __neg__(self) -> 'Entity':
        return type(self)(-self.components)

    def __mul__(self, other: Union['Entity', ScalarLike]) -> 'Entity':
        if isinstance(other, Entity):
            return geometric_product(self, other)
        if isinstance(other, (int, float, torch.Tensor)):
            return _scale(self, other)
        return NotImplemented

    def __rmul__(self, other: ScalarLike) -> 'Entity':
        if isinstance(other, (int, float, torch.Tensor)):
            return _scale(self, other)
        return NotImplemented

    def __truediv__(self, other: Union['Entity', ScalarLike]) -> 'Entity':
        if isinstance(other, Scalar):
            return type(self)(self.components / other.components)
        if isinstance(other, Entity):
            return geometric_product(self, inverse(other))
        if isinstance(other, torch.Tensor):
            return type(self)(self.components / other.unsqueeze(-1))
        if isinstance(other, (int, float)):
            return type(self)(self.components / other)
        return NotImplemented

    def __xor__(self, other: 'Entity') -> 'Entity':
        """Outer (wedge) product: a ^ b."""
        if not isinstance(other, Entity):
            return NotImplemented
        return outer_product(self, other)

    def __and__(self, other: 'Entity') -> 'Entity':
        """Regressive (vee) product: a & b."""
        if not isinstance(other, Entity):
            return NotImplemented
        return regressive_product(self, other)

    def __or__(self, other: 'Entity') -> 'Entity':
        """Inner (dot) product: a | b."""
        if not isinstance(other, Entity):
            return NotImplemented
        return inner_product(self, other)

    def __invert__(self) -> 'Entity':
        """Operator ~: reversion."""
        return reversal(self)


# =============================================================================
# Algebra-level entity types
# =============================================================================

@register_entity
class Scalar(Entity):
    """Grade-0 element."""

    COMPONENTS = ('scalar',)
    BLADES = ((IDX_S, 1),)

    @classmethod
    def new(cls, x: ScalarLike) -> 'Scalar':
        return cls(stack_lanes(x))

    @property
    def value(self) -> torch.Tensor:
        """The coefficient with the batch shape."""
        return self.components[..., 0]

    def __float__(self) -> float:
        return float(self.value)


@register_entity
class AntiScalar(Entity):
    """Grade-4 element: multiple of the pseudoscalar e0123."""

    COMPONENTS = ('pseudoscalar',)
    BLADES = ((IDX_E0123, 1),)

    @classmethod
    def new(cls, x: ScalarLike) -> 'AntiScalar':
        return cls(stack_lanes(x))


@register_entity
class MultiVector(Entity):
    """General element with all 16 components, in full basis order."""

    COMPONENTS = BASIS_NAMES
    BLADES = tuple((idx, 1) for idx in range(NUM_BLADES))

    def grade(self, k: int) -> 'MultiVector':
        """Extract grade-k part of the multivector."""
        if not 0 <= k < len(GRADE_MASKS):
            raise ValueError(f"Grade must be in 0..4, got {k}")
        mask = GRADE_MASKS[k]
        result = torch.zeros_like(self.components)
        result[..., mask] = self.components[..., mask]
        return MultiVector(result)
