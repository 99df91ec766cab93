"""Dot agents."""

from .dot import Dot, DotConfig, DotMode

__all__ = [
    "Dot",
    "DotConfig",
    "DotMode",
]
