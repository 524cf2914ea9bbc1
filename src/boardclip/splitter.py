"""Network splitter: partition vias and wires into connected segments.

Given the vias and wires that should survive (or be copied), :func:`split`
returns the maximal connected components of the graph they induce. Anchors
that are not part of the input are still walked through, with two rules:

- A via that is not in the input (an *excluded* via) only connects wires on
  the layer it was entered on. Its multi-layer copper must not join two
  traces that are otherwise separate.
- A pad ends growth: the wire that reached it is kept, nothing continues
  through it.

Junctions are always walked through. Included vias that no input wire
reaches come back as singleton segments. Excluded vias and pads can show up
in several segments since each segment only borrows them as endpoints.

Usage::

    segments = split(vias=selected_vias, wires=selected_wires)
    for seg in segments:
        seg.anchors  # vias, junctions and pads of one component
        seg.wires
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .board.items import Anchor, AnchorKind, Via, Wire
from .exceptions import InvariantViolationError
from .logging_config import create_logger

logger = create_logger(__name__)


@dataclass
class Segment:
    """Mutually connected anchors and wires found by one traversal."""

    anchors: list[Anchor] = field(default_factory=list)
    wires: list[Wire] = field(default_factory=list)

    @property
    def vias(self) -> list[Via]:
        return [a for a in self.anchors if a.kind is AnchorKind.VIA]

    def to_dict(self) -> dict[str, Any]:
        return {
            "anchors": [{"kind": a.kind.value, "uuid": a.uuid} for a in self.anchors],
            "wires": [w.uuid for w in self.wires],
        }


def split(vias: Iterable[Via], wires: Iterable[Wire]) -> list[Segment]:
    """Partition ``vias`` and ``wires`` into maximal connected segments.

    Segments are returned in discovery order: one per connected group of
    wires (seeded from the first wire not yet assigned), followed by one
    singleton per included via without any input wire.

    Every input wire lands in exactly one segment and every input via in
    exactly one segment.
    """
    included: dict[Via, None] = dict.fromkeys(vias)
    unvisited_vias: dict[Via, None] = dict(included)
    available: dict[Wire, None] = dict.fromkeys(wires)

    segments: list[Segment] = []
    while available:
        seed = next(iter(available))
        segments.append(_grow_segment(seed, included, unvisited_vias, available))

    wire_segments = len(segments)
    for via in unvisited_vias:
        segments.append(Segment(anchors=[via]))

    logger.debug(
        f"Split {len(included)} vias into {len(segments)} segments"
        f" ({wire_segments} with wires, {len(segments) - wire_segments} isolated vias)"
    )
    return segments


def _grow_segment(
    seed: Wire,
    included: dict[Via, None],
    unvisited_vias: dict[Via, None],
    available: dict[Wire, None],
) -> Segment:
    """Collect everything connected to ``seed``, consuming it from ``available``."""
    segment = Segment()
    listed: set[Anchor] = set()
    # Excluded vias are visited once per layer, every other anchor once.
    visited: set[tuple[Anchor, str | None]] = set()

    del available[seed]
    segment.wires.append(seed)
    stack: list[tuple[Anchor, Wire]] = [(seed.end, seed), (seed.start, seed)]

    while stack:
        anchor, entered_by = stack.pop()

        locked_layer: str | None = None
        if anchor.kind is AnchorKind.VIA:
            if anchor in included:
                unvisited_vias.pop(anchor, None)
            else:
                locked_layer = entered_by.layer
        elif anchor.kind is AnchorKind.PAD:
            if anchor not in listed:
                listed.add(anchor)
                segment.anchors.append(anchor)
            continue
        elif anchor.kind is not AnchorKind.JUNCTION:
            raise InvariantViolationError(f"Unknown anchor kind {anchor.kind!r}", element=anchor.uuid)

        key = (anchor, locked_layer)
        if key in visited:
            continue
        visited.add(key)
        if anchor not in listed:
            listed.add(anchor)
            segment.anchors.append(anchor)

        for wire in anchor.wires:
            if wire not in available:
                continue
            if locked_layer is not None and wire.layer != locked_layer:
                continue
            del available[wire]
            segment.wires.append(wire)
            stack.append((wire.other_anchor(anchor), wire))

    return segment
