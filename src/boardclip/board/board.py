"""Board container: layer stack, net registry, networks, pads and graphics items."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from ..constants import DEFAULT_COPPER_LAYERS
from ..exceptions import InvariantViolationError
from .circuit import Circuit
from .items import BoardItem, Hole, Pad, Plane, Polygon, StrokeText, Via, Wire, new_uuid
from .network import Network


@dataclass
class SelectionQuery:
    """Currently selected items of a board."""

    vias: list[Via] = field(default_factory=list)
    wires: list[Wire] = field(default_factory=list)
    planes: list[Plane] = field(default_factory=list)
    polygons: list[Polygon] = field(default_factory=list)
    stroke_texts: list[StrokeText] = field(default_factory=list)
    holes: list[Hole] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (
            self.vias
            or self.wires
            or self.planes
            or self.polygons
            or self.stroke_texts
            or self.holes
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "vias": [v.uuid for v in self.vias],
            "wires": [w.uuid for w in self.wires],
            "planes": [p.uuid for p in self.planes],
            "polygons": [p.uuid for p in self.polygons],
            "stroke_texts": [t.uuid for t in self.stroke_texts],
            "holes": [h.uuid for h in self.holes],
        }


class Board:
    """A printed circuit board.

    Usage::

        board = Board(name="demo")
        gnd = board.circuit.get_net_signal_by_name("GND")
        net = Network(gnd)
        board.add_network(net)
        net.add_elements(vias=[via], junctions=[j], wires=[w])
    """

    def __init__(
        self,
        name: str = "",
        uuid: str | None = None,
        layers: Iterable[str] = DEFAULT_COPPER_LAYERS,
        circuit: Circuit | None = None,
    ) -> None:
        self.uuid = uuid or new_uuid()
        self.name = name
        self.layers: tuple[str, ...] = tuple(layers)
        self.circuit = circuit if circuit is not None else Circuit()
        self.networks: list[Network] = []
        self.pads: list[Pad] = []
        self.planes: list[Plane] = []
        self.polygons: list[Polygon] = []
        self.stroke_texts: list[StrokeText] = []
        self.holes: list[Hole] = []

    def get_layer(self, name: str) -> str | None:
        return name if name in self.layers else None

    # Pads

    def add_pad(self, pad: Pad) -> None:
        if any(p.uuid == pad.uuid for p in self.pads):
            raise InvariantViolationError(f"Pad {pad.uuid} is already on the board", element=pad.uuid)
        self.pads.append(pad)

    def contains_pad(self, pad: Pad) -> bool:
        return any(p is pad for p in self.pads)

    def get_pad(self, pad_uuid: str) -> Pad | None:
        return next((p for p in self.pads if p.uuid == pad_uuid), None)

    # Networks

    def add_network(self, network: Network) -> None:
        if any(n is network for n in self.networks):
            raise InvariantViolationError(
                f"Network {network.uuid} is already on the board", element=network.uuid
            )
        if not self.circuit.contains_net_signal(network.net_signal):
            raise InvariantViolationError(
                f"Net signal {network.net_signal.name!r} is not registered", element=network.uuid
            )
        network._attach_to_board(self)
        self.networks.append(network)

    def remove_network(self, network: Network) -> None:
        if not any(n is network for n in self.networks):
            raise InvariantViolationError(
                f"Network {network.uuid} is not on the board", element=network.uuid
            )
        network._detach_from_board()
        self.networks.remove(network)

    def find_via(self, via_uuid: str) -> Via | None:
        for network in self.networks:
            via = network.get_via(via_uuid)
            if via is not None:
                return via
        return None

    def find_wire(self, wire_uuid: str) -> Wire | None:
        for network in self.networks:
            wire = network.get_wire(wire_uuid)
            if wire is not None:
                return wire
        return None

    # Planes, polygons, stroke texts, holes

    def _collection(self, item: BoardItem) -> list[Any]:
        if isinstance(item, Plane):
            return self.planes
        if isinstance(item, Polygon):
            return self.polygons
        if isinstance(item, StrokeText):
            return self.stroke_texts
        if isinstance(item, Hole):
            return self.holes
        raise InvariantViolationError(f"Unsupported board item {item!r}")

    def add_item(self, item: BoardItem) -> None:
        collection = self._collection(item)
        if any(existing is item or existing.uuid == item.uuid for existing in collection):
            raise InvariantViolationError(
                f"{type(item).__name__} {item.uuid} is already on the board", element=item.uuid
            )
        if isinstance(item, Plane) and not self.circuit.contains_net_signal(item.net_signal):
            raise InvariantViolationError(
                f"Net signal {item.net_signal.name!r} is not registered", element=item.uuid
            )
        collection.append(item)

    def remove_item(self, item: BoardItem) -> None:
        collection = self._collection(item)
        if not any(existing is item for existing in collection):
            raise InvariantViolationError(
                f"{type(item).__name__} {item.uuid} is not on the board", element=item.uuid
            )
        collection.remove(item)

    def find_item(self, item_uuid: str) -> BoardItem | None:
        for collection in (self.planes, self.polygons, self.stroke_texts, self.holes):
            for item in collection:
                if item.uuid == item_uuid:
                    return item
        return None

    # Selection

    def selection(self) -> SelectionQuery:
        """Collect the currently selected vias, wires and board items."""
        query = SelectionQuery()
        for network in self.networks:
            query.vias.extend(v for v in network.vias if v.selected)
            query.wires.extend(w for w in network.wires if w.selected)
        query.planes = [p for p in self.planes if p.selected]
        query.polygons = [p for p in self.polygons if p.selected]
        query.stroke_texts = [t for t in self.stroke_texts if t.selected]
        query.holes = [h for h in self.holes if h.selected]
        return query

    def select_by_uuid(self, uuids: Iterable[str]) -> int:
        """Mark the vias, wires and board items with the given identities selected.

        Returns the number of items that were found.
        """
        found = 0
        for item_uuid in uuids:
            item: Any = self.find_via(item_uuid) or self.find_wire(item_uuid)
            if item is None:
                item = self.find_item(item_uuid)
            if item is not None:
                item.selected = True
                found += 1
        return found

    def clear_selection(self) -> list[Any]:
        """Deselect everything. Returns the objects that were selected."""
        elements: list[Any] = []
        for network in self.networks:
            elements.extend((network, *network.vias, *network.junctions, *network.wires))
        for collection in (self.planes, self.polygons, self.stroke_texts, self.holes):
            elements.extend(collection)
        deselected = [e for e in elements if e.selected]
        for element in deselected:
            element.selected = False
        return deselected

    def to_dict(self) -> dict[str, Any]:
        return {
            "uuid": self.uuid,
            "name": self.name,
            "layers": list(self.layers),
            "net_signals": [s.name for s in self.circuit.net_signals],
            "network_count": len(self.networks),
            "networks": [n.to_dict() for n in self.networks],
            "pad_count": len(self.pads),
            "plane_count": len(self.planes),
            "polygon_count": len(self.polygons),
            "stroke_text_count": len(self.stroke_texts),
            "hole_count": len(self.holes),
        }
