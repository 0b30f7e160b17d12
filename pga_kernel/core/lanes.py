"""
Packed float lanes backing every PGA entity.

A lane container is a tensor whose last axis holds 3 or 4 coefficients;
the leading axes are batch axes. Elementwise +, -, *, / are the tensor
operators themselves, so this module only covers construction, scalar
broadcast and the lane-wise dot product.
"""

from typing import Optional
import torch

from .types import ScalarLike
from ..utils.config import get_config


def as_lane(
    value: ScalarLike,
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None
) -> torch.Tensor:
    """
    Convert a Python number or tensor into a floating point tensor.

    Python numbers take the active config's dtype and device unless
    overridden. Tensors keep their own dtype and device; integer tensors
    are promoted to the configured float type.

    Args:
        value: Number or tensor
        dtype: Optional dtype override for Python numbers
        device: Optional device override for Python numbers

    Returns:
        Floating point tensor
    """
    if isinstance(value, torch.Tensor):
        if not value.is_floating_point():
            return value.to(dtype or get_config().torch_dtype())
        return value
    config = get_config()
    return torch.tensor(
        float(value),
        dtype=dtype or config.torch_dtype(),
        device=device or config.torch_device(),
    )


def stack_lanes(
    *values: ScalarLike,
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None
) -> torch.Tensor:
    """
    Pack coefficients into one lane tensor of shape (..., len(values)).

    Batch shapes broadcast against each other; Python numbers follow the
    dtype and device of the first tensor argument.

    Args:
        values: Coefficients (numbers or tensors)
        dtype: Optional dtype override
        device: Optional device override

    Returns:
        Tensor of shape (..., len(values))
    """
    if not values:
        raise ValueError("stack_lanes needs at least one value")

    # Numbers follow the first tensor argument
    for v in values:
        if isinstance(v, torch.Tensor) and v.is_floating_point():
            dtype = dtype or v.dtype
            device = device or v.device
            break

    tensors = [as_lane(v, dtype=dtype, device=device) for v in values]
    if dtype is not None:
        tensors = [t.to(dtype) for t in tensors]
    tensors = torch.broadcast_tensors(*tensors)
    return torch.stack(tensors, dim=-1)


def splat(value: ScalarLike, like: torch.Tensor) -> torch.Tensor:
    """
    Broadcast a scalar (or batch of scalars) across the lanes of `like`.

    Args:
        value: Number, or tensor with the batch shape of `like`
        like: Lane tensor of shape (..., N)

    Returns:
        Tensor broadcastable against `like`
    """
    if isinstance(value, torch.Tensor):
        return value.to(like.dtype).unsqueeze(-1)
    return torch.full((1,), float(value), dtype=like.dtype, device=like.device)


def dot(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """Lane-wise dot product over the last axis."""
    return (a * b).sum(dim=-1)
