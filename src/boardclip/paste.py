"""Reconstruction (paste) engine: recreate a snapshot inside a board.

Every sub-network of the snapshot becomes a new network on the board, bound
to the net signal of the same name (a new signal under the default net
class when the board has none). Vias and junctions get fresh identities and
are moved by the paste offset; wires are reconnected through a remap table
keyed by snapshot identity.

All mutations go through one :class:`~boardclip.edits.Transaction`. If any
step fails, the edits already applied are reverted and the board is left
exactly as it was. Pasted items come out selected so the caller can drag
them right away.
"""

from __future__ import annotations

from .board import (
    AnchorKind,
    Board,
    Hole,
    Junction,
    NetClass,
    NetSignal,
    Network,
    Plane,
    Polygon,
    StrokeText,
    Via,
    Wire,
    new_uuid,
)
from .board.items import Anchor
from .constants import DEFAULT_NET_CLASS_NAME
from .edits import (
    AddBoardItem,
    AddNetClass,
    AddNetSignal,
    AddNetwork,
    AddNetworkElements,
    Transaction,
    transaction,
)
from .exceptions import DestinationConflictError, InvariantViolationError
from .logging_config import create_logger, operation_scope
from .schema import Point
from .snapshot.data import AnchorRef, NetSegmentData, PlaneData, Snapshot

logger = create_logger(__name__)


def paste(snapshot: Snapshot, offset: Point, board: Board) -> Transaction:
    """Paste ``snapshot`` into ``board``, moved by ``offset``.

    Returns:
        The committed transaction holding every applied structural edit.

    Raises:
        DestinationConflictError: If the board lacks a layer the snapshot
            uses. Nothing is left applied.
        InvariantViolationError: If the snapshot contains a dangling wire
            reference. Nothing is left applied.
    """
    with operation_scope("paste"), transaction("Paste Board Elements") as tx:
        _Paster(board, offset, tx).paste(snapshot)
    logger.info(f"Pasted {len(snapshot.net_segments)} net segments with {len(tx.edits)} edits")
    return tx


class _Paster:
    """State of one paste: target board, offset, and net signals created so far."""

    def __init__(self, board: Board, offset: Point, tx: Transaction) -> None:
        self.board = board
        self.offset = offset
        self.tx = tx
        # nets created by this paste, by snapshot net name
        self._created_signals: dict[str, NetSignal] = {}

    def paste(self, snapshot: Snapshot) -> None:
        for segment in snapshot.net_segments:
            self.paste_net_segment(segment)
        for plane in snapshot.planes:
            self.paste_plane(plane)
        for data in snapshot.polygons:
            polygon = Polygon(
                uuid=new_uuid(),
                layer=data.layer,
                line_width=data.line_width,
                fill=data.fill,
                grab_area=data.grab_area,
                path=data.path.translated(self.offset),
                selected=True,
            )
            self.tx.execute(AddBoardItem(self.board, polygon))
        for data in snapshot.stroke_texts:
            text = StrokeText(
                uuid=new_uuid(),
                layer=data.layer,
                text=data.text,
                position=data.position + self.offset,
                rotation=data.rotation,
                height=data.height,
                stroke_width=data.stroke_width,
                mirror=data.mirror,
                selected=True,
            )
            self.tx.execute(AddBoardItem(self.board, text))
        for data in snapshot.holes:
            hole = Hole(
                uuid=new_uuid(),
                position=data.position + self.offset,
                diameter=data.diameter,
                selected=True,
            )
            self.tx.execute(AddBoardItem(self.board, hole))

    def paste_net_segment(self, segment: NetSegmentData) -> Network:
        network = Network(self.get_or_create_net_signal(segment.net_name))
        network.selected = True
        self.tx.execute(AddNetwork(self.board, network))

        anchors: dict[AnchorRef, Anchor] = {}
        vias: list[Via] = []
        for v in segment.vias:
            via = Via(
                uuid=new_uuid(),
                position=v.position + self.offset,
                shape=v.shape,
                size=v.size,
                drill_diameter=v.drill_diameter,
                selected=True,
            )
            anchors[AnchorRef(AnchorKind.VIA, v.uuid)] = via
            vias.append(via)
        junctions: list[Junction] = []
        for j in segment.junctions:
            junction = Junction(uuid=new_uuid(), position=j.position + self.offset, selected=True)
            anchors[AnchorRef(AnchorKind.JUNCTION, j.uuid)] = junction
            junctions.append(junction)

        wires: list[Wire] = []
        for w in segment.wires:
            layer = self.board.get_layer(w.layer)
            if layer is None:
                raise DestinationConflictError(
                    f"Board has no layer {w.layer!r} for pasted trace", layer=w.layer
                )
            wires.append(
                Wire(
                    uuid=new_uuid(),
                    layer=layer,
                    width=w.width,
                    start=self._resolve(anchors, w.start, w.uuid),
                    end=self._resolve(anchors, w.end, w.uuid),
                    selected=True,
                )
            )

        self.tx.execute(AddNetworkElements(network, vias, junctions, wires))
        logger.debug(
            f"Pasted segment on {network.net_signal.name!r}: {len(vias)} vias,"
            f" {len(junctions)} junctions, {len(wires)} wires"
        )
        return network

    def paste_plane(self, data: PlaneData) -> Plane:
        if self.board.get_layer(data.layer) is None:
            raise DestinationConflictError(
                f"Board has no layer {data.layer!r} for pasted plane", layer=data.layer
            )
        plane = Plane(
            uuid=new_uuid(),
            layer=data.layer,
            net_signal=self.get_or_create_net_signal(data.net_name),
            outline=data.outline.translated(self.offset),
            min_width=data.min_width,
            min_clearance=data.min_clearance,
            keep_orphans=data.keep_orphans,
            priority=data.priority,
            connect_style=data.connect_style,
            selected=True,
        )
        self.tx.execute(AddBoardItem(self.board, plane))
        return plane

    def get_or_create_net_signal(self, name: str) -> NetSignal:
        """Resolve ``name`` on the board, creating a net signal if there is none.

        Signals created by this paste only ever stand for the snapshot name
        they were created for, even when their generated name matches
        another snapshot net.
        """
        if name in self._created_signals:
            return self._created_signals[name]
        signal = self.board.circuit.get_net_signal_by_name(name)
        if signal is not None and signal not in self._created_signals.values():
            return signal

        net_class = self._get_or_create_default_net_class()
        signal = self.tx.execute(AddNetSignal(self.board.circuit, net_class)).net_signal
        self._created_signals[name] = signal
        logger.info(f"Created net signal {signal.name!r} for pasted net {name!r}")
        return signal

    def _get_or_create_default_net_class(self) -> NetClass:
        net_class = self.board.circuit.get_net_class_by_name(DEFAULT_NET_CLASS_NAME)
        if net_class is None:
            net_class = self.tx.execute(
                AddNetClass(self.board.circuit, DEFAULT_NET_CLASS_NAME)
            ).net_class
        return net_class

    @staticmethod
    def _resolve(anchors: dict[AnchorRef, Anchor], ref: AnchorRef, wire_uuid: str) -> Anchor:
        anchor = anchors.get(ref)
        if anchor is None:
            raise InvariantViolationError(
                f"Snapshot trace {wire_uuid} references unknown {ref.kind.value} {ref.uuid}",
                element=wire_uuid,
            )
        return anchor
