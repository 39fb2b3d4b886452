"""
Utility helpers for the airline seeder.
"""

from .config import SeedConfig, load_config, apply_overrides

__all__ = [
    "SeedConfig",
    "load_config",
    "apply_overrides",
]
