"""Snapshot codec: textual tree encoding and clipboard transport.

Encoded form::

    (boardclip_clipboard_board
      (cursor_position 10 5)
      (board 0d3c...)
      (netsegment
        (net GND)
        (via 5a1e... (position 0 0) (size 0.7) (drill 0.3) (shape round))
        (junction 9b7f... (position 10 0))
        (trace 1c44... (layer top) (width 0.2)
          (from (via 5a1e...))
          (to (junction 9b7f...))))
      (plane ...) (polygon ...) (stroke_text ...) (hole ...))

Floats are written in shortest round-trip form so ``decode(encode(s)) == s``.
On the clipboard the text travels under a media type that carries the
producing version; any other version is rejected.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .. import __version__
from ..board.items import AnchorKind, ConnectStyle, ViaShape
from ..constants import CLIPBOARD_ROOT_TAG, MEDIA_TYPE_BASE, MEDIA_TYPE_TEXT
from ..exceptions import SnapshotFormatError, UnsupportedVersionError
from ..logging_config import create_logger
from ..schema import Path, Point
from ..sexp import SExp, node, parse
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


# Value formatting


def format_float(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def parse_bool(text: str | None) -> bool:
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError(f"Invalid boolean {text!r}")


def _value(parent: SExp, key: str) -> str:
    value = parent[key].first_value
    if value is None:
        raise ValueError(f"Missing value for {key!r} in {parent.name!r}")
    return value


def _float(parent: SExp, key: str) -> float:
    return float(_value(parent, key))


def _uuid(item: SExp) -> str:
    value = item.first_value
    if not value:
        raise ValueError(f"Missing identity in {item.name!r}")
    return value


# Node writers. They accept live items and snapshot data alike.


def position_node(name: str, point: Point) -> SExp:
    return node(name, format_float(point.x), format_float(point.y))


def read_point(item: SExp) -> Point:
    values = item.atom_values
    if len(values) != 2:
        raise ValueError(f"Expected x and y in {item.name!r}")
    return Point(float(values[0]), float(values[1]))


def vertex_nodes(path: Path) -> list[SExp]:
    return [node("vertex", position_node("position", v)) for v in path.vertices]


def read_path(parent: SExp) -> Path:
    return Path(tuple(read_point(v["position"]) for v in parent.find_all("vertex")))


def via_node(via: Any) -> SExp:
    return node(
        "via",
        via.uuid,
        position_node("position", via.position),
        node("size", format_float(via.size)),
        node("drill", format_float(via.drill_diameter)),
        node("shape", via.shape.value),
    )


def read_via(item: SExp) -> ViaData:
    return ViaData(
        uuid=_uuid(item),
        position=read_point(item["position"]),
        shape=ViaShape(_value(item, "shape")),
        size=_float(item, "size"),
        drill_diameter=_float(item, "drill"),
    )


def junction_node(junction: Any) -> SExp:
    return node("junction", junction.uuid, position_node("position", junction.position))


def read_junction(item: SExp) -> JunctionData:
    return JunctionData(uuid=_uuid(item), position=read_point(item["position"]))


def trace_node(
    uuid: str, layer: str, width: float, start: AnchorRef, end: AnchorRef
) -> SExp:
    return node(
        "trace",
        uuid,
        node("layer", layer),
        node("width", format_float(width)),
        node("from", node(start.kind.value, start.uuid)),
        node("to", node(end.kind.value, end.uuid)),
    )


def read_anchor_ref(item: SExp, key: str) -> AnchorRef:
    endpoint = item[key]
    refs = [child for child in endpoint.children if child.is_list]
    if len(refs) != 1 or refs[0].name is None:
        raise ValueError(f"Expected exactly one anchor in {key!r}")
    return AnchorRef(kind=AnchorKind(refs[0].name), uuid=_uuid(refs[0]))


def read_wire(item: SExp) -> WireData:
    return WireData(
        uuid=_uuid(item),
        layer=_value(item, "layer"),
        width=_float(item, "width"),
        start=read_anchor_ref(item, "from"),
        end=read_anchor_ref(item, "to"),
    )


def plane_node(plane: Any, net_name: str) -> SExp:
    return node(
        "plane",
        plane.uuid,
        node("layer", plane.layer),
        node("net", net_name),
        node("priority", str(plane.priority)),
        node("min_width", format_float(plane.min_width)),
        node("min_clearance", format_float(plane.min_clearance)),
        node("keep_orphans", format_bool(plane.keep_orphans)),
        node("connect_style", plane.connect_style.value),
        *vertex_nodes(plane.outline),
    )


def read_plane(item: SExp) -> PlaneData:
    return PlaneData(
        uuid=_uuid(item),
        layer=_value(item, "layer"),
        net_name=_value(item, "net"),
        outline=read_path(item),
        min_width=_float(item, "min_width"),
        min_clearance=_float(item, "min_clearance"),
        keep_orphans=parse_bool(_value(item, "keep_orphans")),
        priority=int(_value(item, "priority")),
        connect_style=ConnectStyle(_value(item, "connect_style")),
    )


def polygon_node(polygon: Any) -> SExp:
    return node(
        "polygon",
        polygon.uuid,
        node("layer", polygon.layer),
        node("width", format_float(polygon.line_width)),
        node("fill", format_bool(polygon.fill)),
        node("grab_area", format_bool(polygon.grab_area)),
        *vertex_nodes(polygon.path),
    )


def read_polygon(item: SExp) -> PolygonData:
    return PolygonData(
        uuid=_uuid(item),
        layer=_value(item, "layer"),
        line_width=_float(item, "width"),
        fill=parse_bool(_value(item, "fill")),
        grab_area=parse_bool(_value(item, "grab_area")),
        path=read_path(item),
    )


def stroke_text_node(text: Any) -> SExp:
    return node(
        "stroke_text",
        text.uuid,
        node("layer", text.layer),
        node("height", format_float(text.height)),
        node("stroke_width", format_float(text.stroke_width)),
        position_node("position", text.position),
        node("rotation", format_float(text.rotation)),
        node("mirror", format_bool(text.mirror)),
        node("value", text.text),
    )


def read_stroke_text(item: SExp) -> StrokeTextData:
    value = item["value"].first_value
    return StrokeTextData(
        uuid=_uuid(item),
        layer=_value(item, "layer"),
        text=value if value is not None else "",
        position=read_point(item["position"]),
        rotation=_float(item, "rotation"),
        height=_float(item, "height"),
        stroke_width=_float(item, "stroke_width"),
        mirror=parse_bool(_value(item, "mirror")),
    )


def hole_node(hole: Any) -> SExp:
    return node(
        "hole",
        hole.uuid,
        position_node("position", hole.position),
        node("diameter", format_float(hole.diameter)),
    )


def read_hole(item: SExp) -> HoleData:
    return HoleData(
        uuid=_uuid(item),
        position=read_point(item["position"]),
        diameter=_float(item, "diameter"),
    )


def net_segment_node(segment: NetSegmentData) -> SExp:
    seg = node("netsegment", node("net", segment.net_name))
    for via in segment.vias:
        seg.append(via_node(via))
    for junction in segment.junctions:
        seg.append(junction_node(junction))
    for wire in segment.wires:
        seg.append(trace_node(wire.uuid, wire.layer, wire.width, wire.start, wire.end))
    return seg


def read_net_segment(item: SExp) -> NetSegmentData:
    segment = NetSegmentData(
        net_name=_value(item, "net"),
        vias=tuple(read_via(v) for v in item.find_all("via")),
        junctions=tuple(read_junction(j) for j in item.find_all("junction")),
        wires=tuple(read_wire(w) for w in item.find_all("trace")),
    )
    dangling = segment.dangling_references()
    if dangling:
        ref = dangling[0]
        raise SnapshotFormatError(
            f"Trace references {ref.kind.value} {ref.uuid} which is not in its net segment",
            node="netsegment",
            reference=ref.uuid,
        )
    return segment


# Snapshot encode / decode


def encode(snapshot: Snapshot) -> str:
    """Serialize a snapshot to its textual tree form."""
    root = node(
        CLIPBOARD_ROOT_TAG,
        position_node("cursor_position", snapshot.cursor_position),
        node("board", snapshot.board_uuid),
    )
    for segment in snapshot.net_segments:
        root.append(net_segment_node(segment))
    for plane in snapshot.planes:
        root.append(plane_node(plane, plane.net_name))
    for polygon in snapshot.polygons:
        root.append(polygon_node(polygon))
    for text in snapshot.stroke_texts:
        root.append(stroke_text_node(text))
    for hole in snapshot.holes:
        root.append(hole_node(hole))
    return root.to_string() + "\n"


def decode(text: str) -> Snapshot:
    """Parse a snapshot from its textual tree form.

    Raises:
        SnapshotFormatError: If the text is not a well-formed snapshot or a
            trace references an anchor outside of its net segment.
    """
    try:
        root = parse(text)
        if root.name != CLIPBOARD_ROOT_TAG:
            raise SnapshotFormatError(
                f"Expected root {CLIPBOARD_ROOT_TAG!r}, got {root.name!r}", node=root.name
            )
        return Snapshot(
            board_uuid=_value(root, "board"),
            cursor_position=read_point(root["cursor_position"]),
            net_segments=tuple(read_net_segment(s) for s in root.find_all("netsegment")),
            planes=tuple(read_plane(p) for p in root.find_all("plane")),
            polygons=tuple(read_polygon(p) for p in root.find_all("polygon")),
            stroke_texts=tuple(read_stroke_text(t) for t in root.find_all("stroke_text")),
            holes=tuple(read_hole(h) for h in root.find_all("hole")),
        )
    except (ValueError, KeyError) as e:
        raise SnapshotFormatError(f"Malformed clipboard snapshot: {e}") from e


# Clipboard transport


def media_type(version: str = __version__) -> str:
    """Media type tag of a snapshot produced by ``version``."""
    return f"{MEDIA_TYPE_BASE}; version={version}"


def parse_media_type(value: str) -> tuple[str, str | None]:
    """Split a media type into its base and ``version`` parameter."""
    base, _, params = value.partition(";")
    version = None
    for param in params.split(";"):
        key, _, val = param.strip().partition("=")
        if key == "version":
            version = val.strip()
    return base.strip(), version


def to_mime_data(snapshot: Snapshot) -> dict[str, bytes]:
    """Package a snapshot for the clipboard, keyed by media type."""
    payload = encode(snapshot).encode("utf-8")
    return {media_type(): payload, MEDIA_TYPE_TEXT: payload}


def from_mime_data(mime: Mapping[str, bytes] | None) -> Snapshot | None:
    """Extract a snapshot from clipboard content.

    Returns:
        The snapshot, or None when the clipboard holds no board snapshot.

    Raises:
        UnsupportedVersionError: If the snapshot comes from another version.
        SnapshotFormatError: If the payload is malformed.
    """
    if not mime:
        return None
    payload = None
    rejected: str | None = None
    for key, value in mime.items():
        base, version = parse_media_type(key)
        if base != MEDIA_TYPE_BASE:
            continue
        if version == __version__:
            payload = value
            break
        rejected = key
    if payload is None:
        if rejected is not None:
            version = parse_media_type(rejected)[1]
            logger.warning(f"Rejecting clipboard snapshot of version {version!r}")
            raise UnsupportedVersionError(
                f"Clipboard snapshot version {version!r} is not supported"
                f" (expected {__version__!r})",
                media_type=rejected,
            )
        return None
    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SnapshotFormatError(f"Clipboard snapshot is not UTF-8: {e}") from e
    return decode(text)
