"""Immutable snapshot (clipboard data) model.

A snapshot owns everything it describes: wire endpoints point at via or
junction identities inside the same :class:`NetSegmentData`, never at live
board objects. Equality is by value so decoded snapshots compare equal to
the originals.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..board.items import AnchorKind, ConnectStyle, ViaShape
from ..schema import ORIGIN, Path, Point


@dataclass(frozen=True)
class AnchorRef:
    """Wire endpoint reference to a via or junction of the same segment."""

    kind: AnchorKind
    uuid: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "uuid": self.uuid}


@dataclass(frozen=True)
class ViaData:
    uuid: str
    position: Point
    shape: ViaShape
    size: float
    drill_diameter: float


@dataclass(frozen=True)
class JunctionData:
    uuid: str
    position: Point


@dataclass(frozen=True)
class WireData:
    uuid: str
    layer: str
    width: float
    start: AnchorRef
    end: AnchorRef


@dataclass(frozen=True)
class NetSegmentData:
    """One connected sub-network, carrying only the name of its net."""

    net_name: str
    vias: tuple[ViaData, ...] = ()
    junctions: tuple[JunctionData, ...] = ()
    wires: tuple[WireData, ...] = ()

    def dangling_references(self) -> list[AnchorRef]:
        """Wire endpoints that name no via or junction of this segment."""
        known = {AnchorRef(AnchorKind.VIA, v.uuid) for v in self.vias}
        known |= {AnchorRef(AnchorKind.JUNCTION, j.uuid) for j in self.junctions}
        return [ref for w in self.wires for ref in (w.start, w.end) if ref not in known]

    def to_dict(self) -> dict[str, Any]:
        return {
            "net": self.net_name,
            "via_count": len(self.vias),
            "junction_count": len(self.junctions),
            "wire_count": len(self.wires),
        }


@dataclass(frozen=True)
class PlaneData:
    uuid: str
    layer: str
    net_name: str
    outline: Path
    min_width: float
    min_clearance: float
    keep_orphans: bool
    priority: int
    connect_style: ConnectStyle


@dataclass(frozen=True)
class PolygonData:
    uuid: str
    layer: str
    line_width: float
    fill: bool
    grab_area: bool
    path: Path


@dataclass(frozen=True)
class StrokeTextData:
    uuid: str
    layer: str
    text: str
    position: Point
    rotation: float
    height: float
    stroke_width: float
    mirror: bool


@dataclass(frozen=True)
class HoleData:
    uuid: str
    position: Point
    diameter: float


@dataclass(frozen=True)
class Snapshot:
    """A self-contained copy of selected board content."""

    board_uuid: str
    cursor_position: Point = ORIGIN
    net_segments: tuple[NetSegmentData, ...] = ()
    planes: tuple[PlaneData, ...] = ()
    polygons: tuple[PolygonData, ...] = ()
    stroke_texts: tuple[StrokeTextData, ...] = ()
    holes: tuple[HoleData, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (
            self.net_segments or self.planes or self.polygons or self.stroke_texts or self.holes
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "board": self.board_uuid,
            "cursor_position": self.cursor_position.to_dict(),
            "net_segments": [s.to_dict() for s in self.net_segments],
            "plane_count": len(self.planes),
            "polygon_count": len(self.polygons),
            "stroke_text_count": len(self.stroke_texts),
            "hole_count": len(self.holes),
        }
