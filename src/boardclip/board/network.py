"""Network (net segment): a connected group of vias, junctions and wires.

Element registration is the only way to change a network's graph. Each call
validates the whole batch before touching anything, so a failed call leaves
the network unchanged.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from ..exceptions import InvariantViolationError
from .items import AnchorKind, Junction, Via, Wire, new_uuid

if TYPE_CHECKING:
    from .board import Board
    from .circuit import NetSignal


class Network:
    """Anchors and wires sharing one net signal, connected through wires."""

    def __init__(self, net_signal: NetSignal, uuid: str | None = None) -> None:
        self.uuid = uuid or new_uuid()
        self.net_signal = net_signal
        self.selected = False
        self._board: Board | None = None
        self._vias: dict[str, Via] = {}
        self._junctions: dict[str, Junction] = {}
        self._wires: dict[str, Wire] = {}

    # Getters

    @property
    def board(self) -> Board | None:
        return self._board

    @property
    def is_added_to_board(self) -> bool:
        return self._board is not None

    @property
    def vias(self) -> list[Via]:
        return list(self._vias.values())

    @property
    def junctions(self) -> list[Junction]:
        return list(self._junctions.values())

    @property
    def wires(self) -> list[Wire]:
        return list(self._wires.values())

    @property
    def is_empty(self) -> bool:
        return not (self._vias or self._junctions or self._wires)

    def get_via(self, via_uuid: str) -> Via | None:
        return self._vias.get(via_uuid)

    def get_junction(self, junction_uuid: str) -> Junction | None:
        return self._junctions.get(junction_uuid)

    def get_wire(self, wire_uuid: str) -> Wire | None:
        return self._wires.get(wire_uuid)

    # Board membership, driven by Board.add_network / Board.remove_network

    def _attach_to_board(self, board: Board) -> None:
        if self._board is not None:
            raise InvariantViolationError(
                f"Network {self.uuid} is already on a board", element=self.uuid
            )
        self._board = board
        for wire in self._wires.values():
            for anchor in wire.anchors:
                if anchor.kind is AnchorKind.PAD:
                    anchor.wires.append(wire)

    def _detach_from_board(self) -> None:
        if self._board is None:
            raise InvariantViolationError(f"Network {self.uuid} is not on a board", element=self.uuid)
        for wire in self._wires.values():
            for anchor in wire.anchors:
                if anchor.kind is AnchorKind.PAD:
                    anchor.wires.remove(wire)
        self._board = None

    # Registration

    def add_elements(
        self,
        vias: Iterable[Via] = (),
        junctions: Iterable[Junction] = (),
        wires: Iterable[Wire] = (),
    ) -> None:
        """Register new vias, junctions and wires.

        Raises:
            InvariantViolationError: If the network is not on a board, an
                element already belongs to a network, an identity is taken,
                or a wire ends on an anchor that is neither in this network
                (or this batch) nor a pad of the board.
        """
        vias = list(vias)
        junctions = list(junctions)
        wires = list(wires)
        if self._board is None:
            raise InvariantViolationError(
                f"Cannot add elements: network {self.uuid} is not on a board", element=self.uuid
            )

        batch_anchors: set[Via | Junction] = set()
        anchor_uuids = set(self._vias) | set(self._junctions)
        for anchor in (*vias, *junctions):
            if anchor.network is not None or anchor in batch_anchors:
                raise InvariantViolationError(
                    f"{anchor.kind.value} {anchor.uuid} already belongs to a network",
                    element=anchor.uuid,
                )
            if anchor.uuid in anchor_uuids:
                raise InvariantViolationError(
                    f"Duplicate anchor identity {anchor.uuid}", element=anchor.uuid
                )
            anchor_uuids.add(anchor.uuid)
            batch_anchors.add(anchor)

        wire_uuids = set(self._wires)
        for wire in wires:
            if wire.network is not None:
                raise InvariantViolationError(
                    f"Wire {wire.uuid} already belongs to a network", element=wire.uuid
                )
            if wire.uuid in wire_uuids:
                raise InvariantViolationError(
                    f"Duplicate wire identity {wire.uuid}", element=wire.uuid
                )
            if wire.start is wire.end:
                raise InvariantViolationError(
                    f"Wire {wire.uuid} starts and ends on the same anchor", element=wire.uuid
                )
            for anchor in wire.anchors:
                if anchor.kind is AnchorKind.PAD:
                    if not self._board.contains_pad(anchor):
                        raise InvariantViolationError(
                            f"Wire {wire.uuid} ends on pad {anchor.uuid} which is not on the board",
                            element=wire.uuid,
                        )
                elif anchor.network is not self and anchor not in batch_anchors:
                    raise InvariantViolationError(
                        f"Wire {wire.uuid} ends on {anchor.kind.value} {anchor.uuid}"
                        " outside of the network",
                        element=wire.uuid,
                    )
            wire_uuids.add(wire.uuid)

        for via in vias:
            via.network = self
            self._vias[via.uuid] = via
        for junction in junctions:
            junction.network = self
            self._junctions[junction.uuid] = junction
        for wire in wires:
            wire.network = self
            self._wires[wire.uuid] = wire
            for anchor in wire.anchors:
                anchor.wires.append(wire)

    def remove_elements(
        self,
        vias: Iterable[Via] = (),
        junctions: Iterable[Junction] = (),
        wires: Iterable[Wire] = (),
    ) -> None:
        """Unregister vias, junctions and wires.

        Raises:
            InvariantViolationError: If an element is not registered here, or
                a removed anchor would keep wires that are not removed too.
        """
        vias = list(vias)
        junctions = list(junctions)
        wires = list(wires)

        for wire in wires:
            if self._wires.get(wire.uuid) is not wire:
                raise InvariantViolationError(
                    f"Wire {wire.uuid} is not part of network {self.uuid}", element=wire.uuid
                )
        removed_wires = set(wires)
        for anchor, registry in [(v, self._vias) for v in vias] + [
            (j, self._junctions) for j in junctions
        ]:
            if registry.get(anchor.uuid) is not anchor:
                raise InvariantViolationError(
                    f"{anchor.kind.value} {anchor.uuid} is not part of network {self.uuid}",
                    element=anchor.uuid,
                )
            if any(w not in removed_wires for w in anchor.wires):
                raise InvariantViolationError(
                    f"{anchor.kind.value} {anchor.uuid} still has wires attached",
                    element=anchor.uuid,
                )

        for wire in wires:
            for anchor in wire.anchors:
                # pads of an off-board network are already detached
                if wire in anchor.wires:
                    anchor.wires.remove(wire)
            wire.network = None
            del self._wires[wire.uuid]
        for via in vias:
            via.network = None
            del self._vias[via.uuid]
        for junction in junctions:
            junction.network = None
            del self._junctions[junction.uuid]

    def to_dict(self) -> dict[str, Any]:
        return {
            "uuid": self.uuid,
            "net": self.net_signal.name,
            "via_count": len(self._vias),
            "junction_count": len(self._junctions),
            "wire_count": len(self._wires),
        }

    def __repr__(self) -> str:
        return (
            f"Network({self.net_signal.name!r}, vias={len(self._vias)},"
            f" junctions={len(self._junctions)}, wires={len(self._wires)})"
        )
