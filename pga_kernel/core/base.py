"""
Base class for PGA-Kernel entities.

Every geometric value type (points, planes, lines, rotors, motors, ...)
is a thin immutable wrapper around ONE tensor of shape (..., N). The class
attributes describe how those N components sit inside the 16 basis blades
of G(3,0,1); the algebra layer uses that description to build the product
tables, so concrete subclasses only declare data.

Class Hierarchy:
    BaseEntity
    └── Entity (pga.algebra: adds the algebra operators)
        ├── Scalar, AntiScalar, MultiVector
        ├── Point, Origin, Dir, Plane, Flat, Branch, IdealLine, Line
        └── Rotor, Translator, Motor

Subclasses must define:
    - COMPONENTS: component names, in storage order
    - BLADES: (basis index, sign) per component
"""

from typing import Tuple

import torch

from .types import BladeEmbedding


class BaseEntity:
    """
    Immutable storage for a batch of multivector coefficients.

    Components are reachable by name (``point.x``, ``motor.scalar``);
    each lookup returns a tensor with the batch shape.
    """

    COMPONENTS: Tuple[str, ...] = ()
    BLADES: BladeEmbedding = ()

    def __init__(self, components: torch.Tensor):
        """
        Args:
            components: Tensor of shape (..., N) with N == len(COMPONENTS)
        """
        if not isinstance(components, torch.Tensor):
            raise TypeError(
                f"{type(self).__name__} expects a tensor, got {type(components).__name__}"
            )
        if components.dim() == 0 or components.shape[-1] != len(self.COMPONENTS):
            got = components.shape[-1] if components.dim() > 0 else 0
            raise ValueError(
                f"Expected {len(self.COMPONENTS)} components for "
                f"{type(self).__name__}, got {got}"
            )
        self.components = components

    def __getattr__(self, name: str) -> torch.Tensor:
        # Only reached when normal lookup fails
        if name != 'components' and name in type(self).COMPONENTS:
            return self.components[..., type(self).COMPONENTS.index(name)]
        raise AttributeError(f"{type(self).__name__} has no attribute '{name}'")

    @property
    def shape(self) -> torch.Size:
        """Batch shape (excluding the component axis)."""
        return self.components.shape[:-1]

    @property
    def device(self) -> torch.device:
        return self.components.device

    @property
    def dtype(self) -> torch.dtype:
        return self.components.dtype

    def to(self, *args, **kwargs) -> 'BaseEntity':
        """Move / cast like torch.Tensor.to."""
        return type(self)(self.components.to(*args, **kwargs))

    def clone(self) -> 'BaseEntity':
        """Create a copy."""
        return type(self)(self.components.clone())

    def detach(self) -> 'BaseEntity':
        """Detach from computation graph."""
        return type(self)(self.components.detach())

    def __repr__(self) -> str:
        if self.components.dim() == 1:
            values = ", ".join(
                f"{name}={value:.6g}"
                for name, value in zip(self.COMPONENTS, self.components.tolist())
            )
            return f"{type(self).__name__}({values})"
        return f"{type(self).__name__}(shape={tuple(self.shape)}, device={self.device})"
