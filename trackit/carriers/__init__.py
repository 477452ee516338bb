"""Carrier-specific adapters."""

from .a1 import A1Adapter
from .dhl import DhlAdapter
from .lasership import LasershipAdapter
from .prestige import PrestigeAdapter
from .upsmi import UpsMiAdapter

__all__ = [
    "A1Adapter",
    "DhlAdapter",
    "LasershipAdapter",
    "PrestigeAdapter",
    "UpsMiAdapter",
]
