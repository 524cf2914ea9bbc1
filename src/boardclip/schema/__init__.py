"""Typed value models shared across the package."""

from .common import ORIGIN, Path, Point

__all__ = ["ORIGIN", "Path", "Point"]
