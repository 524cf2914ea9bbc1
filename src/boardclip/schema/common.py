"""Geometry value types shared by the live board and snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Point:
    """2D position in board coordinates (mm)."""

    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y}


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class Path:
    """An ordered list of vertices, e.g. a plane outline or polygon path."""

    vertices: tuple[Point, ...] = ()

    def translated(self, offset: Point) -> Path:
        return Path(tuple(v + offset for v in self.vertices))

    @property
    def is_closed(self) -> bool:
        return len(self.vertices) > 2 and self.vertices[0] == self.vertices[-1]

    def to_dict(self) -> dict[str, Any]:
        return {"vertices": [v.to_dict() for v in self.vertices]}
