"""Snapshot builder: copy the selected part of a board into a Snapshot.

Each network is split by its selected vias and wires. Every resulting
segment becomes one :class:`NetSegmentData`:

- selected vias are copied with their identity
- junctions are copied with their identity
- unselected vias and pads the segment passes through or ends on are
  replaced by fresh junctions at the same position

so no wire in the snapshot points outside of it.
"""

from __future__ import annotations

from ..board import (
    AnchorKind,
    Board,
    Hole,
    Network,
    Plane,
    Polygon,
    SelectionQuery,
    StrokeText,
    Via,
    Wire,
    new_uuid,
)
from ..board.items import Anchor
from ..exceptions import InvariantViolationError
from ..logging_config import create_logger, operation_scope
from ..schema import Point
from ..splitter import Segment, split
from .data import (
    AnchorRef,
    HoleData,
    JunctionData,
    NetSegmentData,
    PlaneData,
    PolygonData,
    Snapshot,
    StrokeTextData,
    ViaData,
    WireData,
)

logger = create_logger(__name__)


def build_snapshot(
    board: Board,
    cursor_position: Point,
    selection: SelectionQuery | None = None,
) -> Snapshot:
    """Copy the selection of ``board`` into a new snapshot.

    Args:
        board: The source board.
        cursor_position: Cursor position at copy time; paste offsets are
            measured from it.
        selection: Items to copy. Defaults to ``board.selection()``.
    """
    if selection is None:
        selection = board.selection()

    with operation_scope("copy"):
        segments: list[NetSegmentData] = []
        for network in board.networks:
            segments.extend(_copy_network(network, selection))

        snapshot = Snapshot(
            board_uuid=board.uuid,
            cursor_position=cursor_position,
            net_segments=tuple(segments),
            planes=tuple(_copy_plane(p) for p in selection.planes),
            polygons=tuple(_copy_polygon(p) for p in selection.polygons),
            stroke_texts=tuple(_copy_stroke_text(t) for t in selection.stroke_texts),
            holes=tuple(_copy_hole(h) for h in selection.holes),
        )
        logger.info(
            f"Copied {len(snapshot.net_segments)} net segments, {len(snapshot.planes)} planes,"
            f" {len(snapshot.polygons)} polygons, {len(snapshot.stroke_texts)} stroke texts,"
            f" {len(snapshot.holes)} holes"
        )
        return snapshot


def _copy_network(network: Network, selection: SelectionQuery) -> list[NetSegmentData]:
    vias = [v for v in selection.vias if v.network is network]
    wires = [w for w in selection.wires if w.network is network]
    if not vias and not wires:
        return []
    selected_vias = set(vias)
    return [
        _copy_segment(network.net_signal.name, segment, selected_vias)
        for segment in split(vias, wires)
    ]


def _copy_segment(net_name: str, segment: Segment, selected_vias: set[Via]) -> NetSegmentData:
    vias: list[ViaData] = []
    junctions: list[JunctionData] = []
    # old anchor uuid -> uuid of the junction standing in for it
    replacements: dict[str, str] = {}

    for anchor in segment.anchors:
        if anchor.kind is AnchorKind.JUNCTION:
            junctions.append(JunctionData(uuid=anchor.uuid, position=anchor.position))
        elif anchor.kind is AnchorKind.VIA and anchor in selected_vias:
            vias.append(
                ViaData(
                    uuid=anchor.uuid,
                    position=anchor.position,
                    shape=anchor.shape,
                    size=anchor.size,
                    drill_diameter=anchor.drill_diameter,
                )
            )
        elif anchor.kind in (AnchorKind.VIA, AnchorKind.PAD):
            stand_in = JunctionData(uuid=new_uuid(), position=anchor.position)
            replacements[anchor.uuid] = stand_in.uuid
            junctions.append(stand_in)
        else:
            raise InvariantViolationError(f"Unknown anchor kind {anchor.kind!r}", element=anchor.uuid)

    wires = tuple(_copy_wire(w, replacements) for w in segment.wires)
    return NetSegmentData(
        net_name=net_name, vias=tuple(vias), junctions=tuple(junctions), wires=wires
    )


def _copy_wire(wire: Wire, replacements: dict[str, str]) -> WireData:
    return WireData(
        uuid=wire.uuid,
        layer=wire.layer,
        width=wire.width,
        start=_anchor_ref(wire.start, replacements),
        end=_anchor_ref(wire.end, replacements),
    )


def _anchor_ref(anchor: Anchor, replacements: dict[str, str]) -> AnchorRef:
    if anchor.kind is AnchorKind.JUNCTION:
        return AnchorRef(AnchorKind.JUNCTION, anchor.uuid)
    if anchor.uuid in replacements:
        return AnchorRef(AnchorKind.JUNCTION, replacements[anchor.uuid])
    if anchor.kind is AnchorKind.VIA:
        return AnchorRef(AnchorKind.VIA, anchor.uuid)
    raise InvariantViolationError(
        f"{anchor.kind.value} {anchor.uuid} has no stand-in junction", element=anchor.uuid
    )


def _copy_plane(plane: Plane) -> PlaneData:
    return PlaneData(
        uuid=plane.uuid,
        layer=plane.layer,
        net_name=plane.net_signal.name,
        outline=plane.outline,
        min_width=plane.min_width,
        min_clearance=plane.min_clearance,
        keep_orphans=plane.keep_orphans,
        priority=plane.priority,
        connect_style=plane.connect_style,
    )


def _copy_polygon(polygon: Polygon) -> PolygonData:
    return PolygonData(
        uuid=polygon.uuid,
        layer=polygon.layer,
        line_width=polygon.line_width,
        fill=polygon.fill,
        grab_area=polygon.grab_area,
        path=polygon.path,
    )


def _copy_stroke_text(text: StrokeText) -> StrokeTextData:
    return StrokeTextData(
        uuid=text.uuid,
        layer=text.layer,
        text=text.text,
        position=text.position,
        rotation=text.rotation,
        height=text.height,
        stroke_width=text.stroke_width,
        mirror=text.mirror,
    )


def _copy_hole(hole: Hole) -> HoleData:
    return HoleData(uuid=hole.uuid, position=hole.position, diameter=hole.diameter)
