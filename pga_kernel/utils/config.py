"""
Configuration management for PGA-Kernel.

Provides the configuration class and the process-wide active configuration
consulted by entity constructors, the exponential/logarithm engine and the
tolerance-based comparisons.
"""

import json
import logging
from dataclasses import dataclass, field, asdict
from typing import Dict, Any
from pathlib import Path

import torch

from ..core.constants import (
    DEFAULT_DTYPE,
    DEFAULT_DEVICE,
    DEFAULT_ATOL,
    DEFAULT_CLAMP_DOMAIN,
)

logger = logging.getLogger(__name__)

_SUPPORTED_DTYPES = {
    "float16": torch.float16,
    "bfloat16": torch.bfloat16,
    "float32": torch.float32,
    "float64": torch.float64,
}


@dataclass
class Config:
    """
    Configuration for PGA-Kernel numerics.

    Attributes:
        dtype: Float type for entities built from Python numbers
        device: Device for entities built from Python numbers
        clamp_domain: Clamp acos arguments to [-1, 1] inside the logarithms.
            When False, rounding that pushes a unit scalar part past 1
            propagates as NaN.
        atol: Absolute tolerance used by Entity.allclose
        extra: Unrecognized keys carried through from_dict
    """

    dtype: str = DEFAULT_DTYPE
    device: str = DEFAULT_DEVICE
    clamp_domain: bool = DEFAULT_CLAMP_DOMAIN
    atol: float = DEFAULT_ATOL

    # Additional fields
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.dtype not in _SUPPORTED_DTYPES:
            raise ValueError(
                f"Unknown dtype: {self.dtype}. "
                f"Supported: {', '.join(sorted(_SUPPORTED_DTYPES))}"
            )

    def torch_dtype(self) -> torch.dtype:
        """Resolve the configured dtype name."""
        return _SUPPORTED_DTYPES[self.dtype]

    def torch_device(self) -> torch.device:
        """Resolve the configured device name."""
        return torch.device(self.device)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create config from dictionary."""
        # Extract known fields
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        known_kwargs = {k: v for k, v in config_dict.items() if k in known_fields}
        extra_kwargs = {k: v for k, v in config_dict.items() if k not in known_fields}

        config = cls(**known_kwargs)
        config.extra.update(extra_kwargs)
        return config

    def update(self, **kwargs) -> 'Config':
        """Return a new config with updated values."""
        config_dict = self.to_dict()
        config_dict.update(kwargs)
        return Config.from_dict(config_dict)


_active_config = Config()


def get_config() -> Config:
    """Return the active configuration."""
    return _active_config


def set_config(config: Config) -> Config:
    """
    Replace the active configuration.

    Args:
        config: New configuration

    Returns:
        The previously active configuration, so callers can restore it
    """
    global _active_config
    if not isinstance(config, Config):
        raise TypeError(f"Expected Config, got {type(config).__name__}")
    previous = _active_config
    _active_config = config
    logger.debug("Active config set to %s", config)
    return previous


def load_config(filepath: str) -> Config:
    """
    Load configuration from JSON file.

    Args:
        filepath: Path to JSON config file

    Returns:
        Config object
    """
    filepath = Path(filepath)
    with open(filepath, 'r') as f:
        config_dict = json.load(f)
    logger.info("Loaded config from %s", filepath)
    return Config.from_dict(config_dict)


def save_config(config: Config, filepath: str) -> None:
    """
    Save configuration to JSON file.

    Args:
        config: Config object to save
        filepath: Output file path
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)
    logger.info("Saved config to %s", filepath)
