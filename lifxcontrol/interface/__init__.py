"""
High-level interface.

This module contains the objects that belong to the interface layer:
- LifxControl (main client for high-level usage)
- LifxLight (a handle on one bulb)
"""

from .interface import LifxControl, LifxLight

__all__ = [
    "LifxControl",
    "LifxLight",
]
