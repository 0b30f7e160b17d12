"""
Centralized constants for PGA-Kernel.

This module defines all default values and numeric constants used throughout
the library. Using these constants ensures consistency and makes it easy to
adjust defaults globally.

Usage:
    from pga_kernel.core.constants import DEFAULT_ATOL, DEFAULT_DTYPE

    def my_check(a, b, atol: float = DEFAULT_ATOL):
        ...
"""

# =============================================================================
# Numeric Constants
# =============================================================================

# Default floating point type for entities built from Python numbers
DEFAULT_DTYPE: str = "float32"

# Default device for entities built from Python numbers
DEFAULT_DEVICE: str = "cpu"

# Absolute tolerance used by Entity.allclose
DEFAULT_ATOL: float = 1e-5

# Clamp acos arguments to [-1, 1] before evaluating the logarithms
DEFAULT_CLAMP_DOMAIN: bool = True


# =============================================================================
# Algebra Layout
# =============================================================================

# Number of basis blades of G(3,0,1)
NUM_BLADES: int = 16

# Dimension of the underlying vector space (e0, e1, e2, e3)
NUM_GENERATORS: int = 4

# Lane widths of the packed float containers
LANES_3: int = 3
LANES_4: int = 4

# Exponent used by sqrt() on group elements
SQRT_EXPONENT: float = 0.5


# =============================================================================
# Operation Names
# =============================================================================

# These keys index the per-pair product tables

OP_GEOMETRIC: str = "geometric"
OP_OUTER: str = "outer"
OP_REGRESSIVE: str = "regressive"
OP_INNER: str = "inner"
OP_LEFT_CONTRACTION: str = "left_contraction"
OP_RIGHT_CONTRACTION: str = "right_contraction"
OP_SCALAR: str = "scalar"
