"""Live board model: anchors, wires, networks, net registry and board items."""

from .board import Board, SelectionQuery
from .circuit import Circuit, NetClass, NetSignal
from .items import (
    Anchor,
    AnchorKind,
    BoardItem,
    ConnectStyle,
    Hole,
    Junction,
    Pad,
    Plane,
    Polygon,
    StrokeText,
    Via,
    ViaShape,
    Wire,
    new_uuid,
)
from .network import Network

__all__ = [
    "Anchor",
    "AnchorKind",
    "Board",
    "BoardItem",
    "Circuit",
    "ConnectStyle",
    "Hole",
    "Junction",
    "NetClass",
    "NetSignal",
    "Network",
    "Pad",
    "Plane",
    "Polygon",
    "SelectionQuery",
    "StrokeText",
    "Via",
    "ViaShape",
    "Wire",
    "new_uuid",
]
