"""Live board items: anchors, wires, and the graph-less copper/graphics items.

Anchors are a closed set of three variants tagged by :class:`AnchorKind`:

- :class:`Via`, plated hole, owned by a network, copper on every layer
- :class:`Junction`, zero-size bend point, owned by a network, single layer
- :class:`Pad`, footprint pad; lives on the board, never owned by a network

Items compare by identity (``eq=False``) so they can be used as set members
and dict keys while their fields change.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Union

from ..exceptions import InvariantViolationError
from ..schema import Path, Point

if TYPE_CHECKING:
    from .circuit import NetSignal
    from .network import Network


def new_uuid() -> str:
    """Generate a fresh element identity."""
    return str(uuid.uuid4())


class AnchorKind(Enum):
    VIA = "via"
    JUNCTION = "junction"
    PAD = "pad"


class ViaShape(Enum):
    ROUND = "round"
    SQUARE = "square"
    OCTAGON = "octagon"


class ConnectStyle(Enum):
    NONE = "none"
    THERMAL = "thermal"
    SOLID = "solid"


@dataclass(eq=False)
class Via:
    """A plated through-hole connecting all copper layers."""

    uuid: str
    position: Point
    shape: ViaShape = ViaShape.ROUND
    size: float = 0.7  # outer diameter, mm
    drill_diameter: float = 0.3  # mm
    selected: bool = False
    network: Network | None = field(default=None, repr=False)
    wires: list[Wire] = field(default_factory=list, repr=False)

    kind: ClassVar[AnchorKind] = AnchorKind.VIA

    def to_dict(self) -> dict[str, Any]:
        return {
            "uuid": self.uuid,
            "position": self.position.to_dict(),
            "shape": self.shape.value,
            "size": self.size,
            "drill": self.drill_diameter,
        }


@dataclass(eq=False)
class Junction:
    """A bend or branch point of traces on a single layer."""

    uuid: str
    position: Point
    selected: bool = False
    network: Network | None = field(default=None, repr=False)
    wires: list[Wire] = field(default_factory=list, repr=False)

    kind: ClassVar[AnchorKind] = AnchorKind.JUNCTION

    def to_dict(self) -> dict[str, Any]:
        return {"uuid": self.uuid, "position": self.position.to_dict()}


@dataclass(eq=False)
class Pad:
    """A footprint pad that traces can end on."""

    uuid: str
    position: Point
    component: str = ""
    net_name: str | None = None
    wires: list[Wire] = field(default_factory=list, repr=False)

    kind: ClassVar[AnchorKind] = AnchorKind.PAD

    def to_dict(self) -> dict[str, Any]:
        return {
            "uuid": self.uuid,
            "position": self.position.to_dict(),
            "component": self.component,
            "net": self.net_name,
        }


Anchor = Union[Via, Junction, Pad]


@dataclass(eq=False)
class Wire:
    """A trace segment on one copper layer between two anchors."""

    uuid: str
    layer: str
    width: float
    start: Anchor
    end: Anchor
    selected: bool = False
    network: Network | None = field(default=None, repr=False)

    @property
    def anchors(self) -> tuple[Anchor, Anchor]:
        return (self.start, self.end)

    def other_anchor(self, anchor: Anchor) -> Anchor:
        """Return the endpoint opposite to ``anchor``."""
        if anchor is self.start:
            return self.end
        if anchor is self.end:
            return self.start
        raise InvariantViolationError(
            f"Anchor {anchor.uuid} is not an endpoint of wire {self.uuid}",
            element=self.uuid,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "uuid": self.uuid,
            "layer": self.layer,
            "width": self.width,
            "from": {"kind": self.start.kind.value, "uuid": self.start.uuid},
            "to": {"kind": self.end.kind.value, "uuid": self.end.uuid},
        }


@dataclass(eq=False)
class Plane:
    """A copper fill area bound to a net signal."""

    uuid: str
    layer: str
    net_signal: NetSignal
    outline: Path
    min_width: float = 0.2
    min_clearance: float = 0.3
    keep_orphans: bool = False
    priority: int = 0
    connect_style: ConnectStyle = ConnectStyle.THERMAL
    selected: bool = False


@dataclass(eq=False)
class Polygon:
    uuid: str
    layer: str
    line_width: float
    fill: bool
    grab_area: bool
    path: Path
    selected: bool = False


@dataclass(eq=False)
class StrokeText:
    uuid: str
    layer: str
    text: str
    position: Point
    rotation: float = 0.0
    height: float = 1.0
    stroke_width: float = 0.2
    mirror: bool = False
    selected: bool = False


@dataclass(eq=False)
class Hole:
    uuid: str
    position: Point
    diameter: float
    selected: bool = False


BoardItem = Union[Plane, Polygon, StrokeText, Hole]
