"""
Utility functions for PGA-Kernel.

Includes configuration management.
"""

from .config import (
    Config,
    load_config,
    save_config,
    get_config,
    set_config,
)

__all__ = [
    # Config
    "Config",
    "load_config",
    "save_config",
    "get_config",
    "set_config",
]
