"""
Finder Module - Black Box Interface

Purpose: Map inventory paths to vSphere managed objects
Interface: Finder.*_or_default(), Finder.set_datacenter()
Hidden: Inventory traversal, glob matching, default selection

DefaultMultipleFoundError is the ambiguity a caller may choose to tolerate.
"""

from .errors import (
    DefaultMultipleFoundError,
    DefaultNotFoundError,
    FinderError,
    MultipleFoundError,
    NotFoundError,
)
from .finder import Finder

__all__ = [
    "Finder",
    "FinderError",
    "NotFoundError",
    "MultipleFoundError",
    "DefaultNotFoundError",
    "DefaultMultipleFoundError",
]
