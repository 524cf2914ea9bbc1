"""Clipboard snapshots: data model, builder and codec."""

from .builder import build_snapshot
from .codec import decode, encode, from_mime_data, media_type, to_mime_data
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

__all__ = [
    "AnchorRef",
    "HoleData",
    "JunctionData",
    "NetSegmentData",
    "PlaneData",
    "PolygonData",
    "Snapshot",
    "StrokeTextData",
    "ViaData",
    "WireData",
    "build_snapshot",
    "decode",
    "encode",
    "from_mime_data",
    "media_type",
    "to_mime_data",
]
