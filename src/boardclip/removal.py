"""Partial-removal engine: remove part of a network without breaking the rest.

Removing vias or wires from the middle of a network can leave it in several
disconnected pieces. :func:`plan_removal` runs the splitter over the
surviving elements and describes each piece; :func:`apply_removal_plan`
replaces the original network by one new network per piece.

Surviving vias keep their identity. Junctions and wires are recreated with
fresh identities.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .board import (
    AnchorKind,
    Board,
    BoardItem,
    Hole,
    Junction,
    Network,
    Plane,
    Polygon,
    StrokeText,
    Via,
    Wire,
    new_uuid,
)
from .board.items import Anchor
from .edits import AddNetwork, AddNetworkElements, RemoveBoardItem, RemoveNetwork, Transaction, transaction
from .exceptions import InvariantViolationError
from .logging_config import create_logger, operation_scope
from .splitter import split

logger = create_logger(__name__)


@dataclass
class SubNetwork:
    """Surviving elements of one connected piece of a network."""

    vias: list[Via] = field(default_factory=list)
    junctions: list[Junction] = field(default_factory=list)
    wires: list[Wire] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "vias": [v.uuid for v in self.vias],
            "junctions": [j.uuid for j in self.junctions],
            "wires": [w.uuid for w in self.wires],
        }


@dataclass
class RemovalPlan:
    """Either remove ``network`` whole, or replace it by ``sub_networks``."""

    network: Network
    remove_whole: bool
    sub_networks: list[SubNetwork] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "network": self.network.uuid,
            "net": self.network.net_signal.name,
            "remove_whole": self.remove_whole,
            "sub_networks": [s.to_dict() for s in self.sub_networks],
        }


def plan_removal(
    network: Network,
    removed_vias: Iterable[Via] = (),
    removed_wires: Iterable[Wire] = (),
) -> RemovalPlan:
    """Work out what is left of ``network`` after removing some of its elements.

    Wires attached to a removed via are removed with it.

    Raises:
        InvariantViolationError: If a removed element is not part of ``network``.
    """
    removed_vias = list(dict.fromkeys(removed_vias))
    wire_set: dict[Wire, None] = dict.fromkeys(removed_wires)
    for via in removed_vias:
        if via.network is not network:
            raise InvariantViolationError(
                f"Via {via.uuid} is not part of network {network.uuid}", element=via.uuid
            )
        wire_set.update(dict.fromkeys(via.wires))
    for wire in wire_set:
        if wire.network is not network:
            raise InvariantViolationError(
                f"Wire {wire.uuid} is not part of network {network.uuid}", element=wire.uuid
            )

    via_set = set(removed_vias)
    surviving_vias = [v for v in network.vias if v not in via_set]
    surviving_wires = [w for w in network.wires if w not in wire_set]
    if not surviving_vias and not surviving_wires:
        logger.debug(f"Removal covers all of {network!r}, removing it whole")
        return RemovalPlan(network=network, remove_whole=True)

    sub_networks = []
    for segment in split(surviving_vias, surviving_wires):
        sub = SubNetwork(wires=list(segment.wires))
        for anchor in segment.anchors:
            if anchor.kind is AnchorKind.VIA:
                sub.vias.append(anchor)
            elif anchor.kind is AnchorKind.JUNCTION:
                sub.junctions.append(anchor)
            elif anchor.kind is not AnchorKind.PAD:
                raise InvariantViolationError(
                    f"Unknown anchor kind {anchor.kind!r}", element=anchor.uuid
                )
        sub_networks.append(sub)

    logger.debug(f"Removal splits {network!r} into {len(sub_networks)} sub-networks")
    return RemovalPlan(network=network, remove_whole=False, sub_networks=sub_networks)


def apply_removal_plan(board: Board, plan: RemovalPlan, tx: Transaction) -> list[Network]:
    """Execute ``plan`` through ``tx``. Returns the recreated networks."""
    tx.execute(RemoveNetwork(board, plan.network))
    if plan.remove_whole:
        return []

    created = []
    for sub in plan.sub_networks:
        network = Network(plan.network.net_signal)
        tx.execute(AddNetwork(board, network))

        # old anchor -> replacement; pads stay themselves
        replacements: dict[Anchor, Anchor] = {}
        vias = []
        for old in sub.vias:
            via = Via(
                uuid=old.uuid,
                position=old.position,
                shape=old.shape,
                size=old.size,
                drill_diameter=old.drill_diameter,
                selected=old.selected,
            )
            replacements[old] = via
            vias.append(via)
        junctions = []
        for old in sub.junctions:
            junction = Junction(uuid=new_uuid(), position=old.position, selected=old.selected)
            replacements[old] = junction
            junctions.append(junction)
        wires = [
            Wire(
                uuid=new_uuid(),
                layer=old.layer,
                width=old.width,
                start=replacements.get(old.start, old.start),
                end=replacements.get(old.end, old.end),
                selected=old.selected,
            )
            for old in sub.wires
        ]

        tx.execute(AddNetworkElements(network, vias, junctions, wires))
        created.append(network)
    return created


def remove_items(
    board: Board,
    vias: Iterable[Via] = (),
    wires: Iterable[Wire] = (),
    planes: Iterable[Plane] = (),
    polygons: Iterable[Polygon] = (),
    stroke_texts: Iterable[StrokeText] = (),
    holes: Iterable[Hole] = (),
) -> Transaction:
    """Remove vias, wires and board items in one transaction.

    Every network touched by the removal is either removed whole or
    replaced by its surviving connected pieces.
    """
    with operation_scope("remove"), transaction("Remove Board Items") as tx:
        # network -> (vias, wires) to remove, in board order
        affected: dict[Network, tuple[list[Via], list[Wire]]] = {}
        for via in vias:
            if via.network is None:
                raise InvariantViolationError(
                    f"Via {via.uuid} is not part of a network", element=via.uuid
                )
            affected.setdefault(via.network, ([], []))[0].append(via)
        for wire in wires:
            if wire.network is None:
                raise InvariantViolationError(
                    f"Wire {wire.uuid} is not part of a network", element=wire.uuid
                )
            affected.setdefault(wire.network, ([], []))[1].append(wire)

        recreated = 0
        for network, (net_vias, net_wires) in affected.items():
            plan = plan_removal(network, net_vias, net_wires)
            recreated += len(apply_removal_plan(board, plan, tx))

        items: list[BoardItem] = [*planes, *polygons, *stroke_texts, *holes]
        for item in items:
            tx.execute(RemoveBoardItem(board, item))

    logger.info(
        f"Removed items from {len(affected)} networks ({recreated} recreated)"
        f" and {len(items)} board items"
    )
    return tx


def remove_selected(board: Board) -> Transaction | None:
    """Remove the current selection of ``board``. Returns None if nothing is selected."""
    selection = board.selection()
    if selection.is_empty:
        return None
    return remove_items(
        board,
        vias=selection.vias,
        wires=selection.wires,
        planes=selection.planes,
        polygons=selection.polygons,
        stroke_texts=selection.stroke_texts,
        holes=selection.holes,
    )
