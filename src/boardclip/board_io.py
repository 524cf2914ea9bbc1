"""Board documents: load and save a board in the textual tree dialect.

The board file uses the same node shapes as the clipboard snapshot, plus the
net registry, the layer stack and pads::

    (boardclip_board 0d3c...
      (name demo)
      (layers top bottom)
      (netclass 77aa... (name default))
      (netsignal 41be... (name GND) (netclass 77aa...))
      (pad 9c01... (position 0 0) (component U1) (net GND))
      (netsegment 13f2... (net GND)
        (via ...) (junction ...)
        (trace ... (from (pad 9c01...)) (to (junction ...))))
      (plane ...) (polygon ...) (stroke_text ...) (hole ...))

Selection state is not stored.
"""

from __future__ import annotations

from pathlib import Path

from .board import (
    AnchorKind,
    Board,
    Circuit,
    Hole,
    Junction,
    NetClass,
    NetSignal,
    Network,
    Pad,
    Plane,
    Polygon,
    StrokeText,
    Via,
    Wire,
)
from .board.items import Anchor
from .constants import BOARD_ROOT_TAG
from .exceptions import BoardLoadingError, InvariantViolationError
from .logging_config import create_logger
from .sexp import Document, SExp, node
from .snapshot.codec import (
    hole_node,
    junction_node,
    plane_node,
    polygon_node,
    position_node,
    read_hole,
    read_junction,
    read_plane,
    read_point,
    read_polygon,
    read_stroke_text,
    read_via,
    read_wire,
    stroke_text_node,
    trace_node,
    via_node,
)
from .snapshot.data import AnchorRef

logger = create_logger(__name__)


def load_board(path: str | Path) -> Board:
    """Load a board document.

    Raises:
        BoardLoadingError: If the file cannot be read or does not describe a
            consistent board.
    """
    doc = Document.load(path)
    try:
        board = board_from_sexp(doc.root)
    except (ValueError, KeyError, InvariantViolationError) as e:
        raise BoardLoadingError(f"Invalid board document {path}: {e}", board_path=str(path)) from e
    logger.info(
        f"Loaded board {board.name!r} from {path}: {len(board.networks)} networks,"
        f" {len(board.pads)} pads"
    )
    return board


def save_board(board: Board, path: str | Path) -> Path:
    """Write ``board`` to ``path``. Returns the path written."""
    target = Document(Path(path), board_to_sexp(board)).save()
    logger.info(f"Saved board {board.name!r} to {target}")
    return target


def board_to_sexp(board: Board) -> SExp:
    root = node(
        BOARD_ROOT_TAG,
        board.uuid,
        node("name", board.name),
        node("layers", *board.layers),
    )
    for net_class in board.circuit.net_classes:
        root.append(node("netclass", net_class.uuid, node("name", net_class.name)))
    for signal in board.circuit.net_signals:
        root.append(
            node(
                "netsignal",
                signal.uuid,
                node("name", signal.name),
                node("netclass", signal.net_class.uuid),
            )
        )
    for pad in board.pads:
        pad_node = node(
            "pad", pad.uuid, position_node("position", pad.position), node("component", pad.component)
        )
        if pad.net_name is not None:
            pad_node.append(node("net", pad.net_name))
        root.append(pad_node)
    for network in board.networks:
        root.append(_network_node(network))
    for plane in board.planes:
        root.append(plane_node(plane, plane.net_signal.name))
    for polygon in board.polygons:
        root.append(polygon_node(polygon))
    for text in board.stroke_texts:
        root.append(stroke_text_node(text))
    for hole in board.holes:
        root.append(hole_node(hole))
    return root


def _network_node(network: Network) -> SExp:
    seg = node("netsegment", network.uuid, node("net", network.net_signal.name))
    for via in network.vias:
        seg.append(via_node(via))
    for junction in network.junctions:
        seg.append(junction_node(junction))
    for wire in network.wires:
        seg.append(
            trace_node(
                wire.uuid,
                wire.layer,
                wire.width,
                AnchorRef(wire.start.kind, wire.start.uuid),
                AnchorRef(wire.end.kind, wire.end.uuid),
            )
        )
    return seg


def board_from_sexp(root: SExp) -> Board:
    """Build a live board from its tree form.

    Raises:
        ValueError: If the tree is not a board or references unknown elements.
    """
    if root.name != BOARD_ROOT_TAG:
        raise ValueError(f"Expected root {BOARD_ROOT_TAG!r}, got {root.name!r}")

    circuit = Circuit()
    classes: dict[str, NetClass] = {}
    for item in root.find_all("netclass"):
        net_class = NetClass(name=_required(item["name"].first_value, "netclass name"), uuid=_id(item))
        circuit.add_net_class(net_class)
        classes[net_class.uuid] = net_class
    for item in root.find_all("netsignal"):
        class_uuid = item["netclass"].first_value
        if class_uuid not in classes:
            raise ValueError(f"Net signal {_id(item)} uses unknown net class {class_uuid}")
        circuit.add_net_signal(
            NetSignal(
                name=_required(item["name"].first_value, "netsignal name"),
                net_class=classes[class_uuid],
                uuid=_id(item),
            )
        )

    layers = root.get("layers")
    board = Board(
        name=root["name"].first_value or "",
        uuid=_id(root),
        layers=layers.atom_values if layers is not None else (),
        circuit=circuit,
    )

    for item in root.find_all("pad"):
        net = item.get("net")
        component = item.get("component")
        board.add_pad(
            Pad(
                uuid=_id(item),
                position=read_point(item["position"]),
                component=(component.first_value or "") if component is not None else "",
                net_name=net.first_value if net is not None else None,
            )
        )

    for item in root.find_all("netsegment"):
        _load_network(board, item)

    for item in root.find_all("plane"):
        data = read_plane(item)
        signal = circuit.get_net_signal_by_name(data.net_name)
        if signal is None:
            raise ValueError(f"Plane {data.uuid} uses unknown net {data.net_name!r}")
        board.add_item(
            Plane(
                uuid=data.uuid,
                layer=data.layer,
                net_signal=signal,
                outline=data.outline,
                min_width=data.min_width,
                min_clearance=data.min_clearance,
                keep_orphans=data.keep_orphans,
                priority=data.priority,
                connect_style=data.connect_style,
            )
        )
    for item in root.find_all("polygon"):
        p = read_polygon(item)
        board.add_item(Polygon(p.uuid, p.layer, p.line_width, p.fill, p.grab_area, p.path))
    for item in root.find_all("stroke_text"):
        t = read_stroke_text(item)
        board.add_item(
            StrokeText(
                t.uuid, t.layer, t.text, t.position, t.rotation, t.height, t.stroke_width, t.mirror
            )
        )
    for item in root.find_all("hole"):
        h = read_hole(item)
        board.add_item(Hole(h.uuid, h.position, h.diameter))
    return board


def _load_network(board: Board, item: SExp) -> Network:
    net_name = _required(item["net"].first_value, "netsegment net")
    signal = board.circuit.get_net_signal_by_name(net_name)
    if signal is None:
        raise ValueError(f"Net segment uses unknown net {net_name!r}")

    anchors: dict[tuple[AnchorKind, str], Anchor] = {}
    vias = []
    for v in (read_via(child) for child in item.find_all("via")):
        via = Via(v.uuid, v.position, v.shape, v.size, v.drill_diameter)
        anchors[(AnchorKind.VIA, via.uuid)] = via
        vias.append(via)
    junctions = []
    for j in (read_junction(child) for child in item.find_all("junction")):
        junction = Junction(j.uuid, j.position)
        anchors[(AnchorKind.JUNCTION, junction.uuid)] = junction
        junctions.append(junction)

    def resolve(ref: AnchorRef) -> Anchor:
        if ref.kind is AnchorKind.PAD:
            pad = board.get_pad(ref.uuid)
            if pad is not None:
                return pad
        elif (ref.kind, ref.uuid) in anchors:
            return anchors[(ref.kind, ref.uuid)]
        raise ValueError(f"Trace references unknown {ref.kind.value} {ref.uuid}")

    wires = []
    for w in (read_wire(child) for child in item.find_all("trace")):
        wires.append(Wire(w.uuid, w.layer, w.width, resolve(w.start), resolve(w.end)))

    network = Network(signal, uuid=_id(item))
    board.add_network(network)
    network.add_elements(vias, junctions, wires)
    return network


def _id(item: SExp) -> str:
    return _required(item.first_value, f"{item.name} identity")


def _required(value: str | None, what: str) -> str:
    if not value:
        raise ValueError(f"Missing {what}")
    return value
