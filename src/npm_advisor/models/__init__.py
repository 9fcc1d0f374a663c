"""Data models for the dependency version advisor."""

from __future__ import annotations

from .advisory import Advisory
from .dependency import Dependency, Finding

__all__ = [
    "Advisory",
    "Dependency",
    "Finding",
]
