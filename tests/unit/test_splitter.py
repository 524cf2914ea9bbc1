"""Tests for the network splitter."""

from __future__ import annotations

import pytest
from board_builders import BoardBuilder

from boardclip.board import AnchorKind, Junction, Network, Via
from boardclip.splitter import Segment, split


def _uuids(items: object) -> set[str]:
    return {i.uuid for i in items}  # type: ignore[attr-defined]


def _assert_partition(segments: list[Segment], vias: list[Via], wires: list) -> None:
    seg_vias = [v for s in segments for v in s.anchors if v.kind is AnchorKind.VIA and v in vias]
    seg_wires = [w for s in segments for w in s.wires]
    assert sorted(v.uuid for v in seg_vias) == sorted(v.uuid for v in vias)
    assert sorted(w.uuid for w in seg_wires) == sorted(w.uuid for w in wires)


class TestSplitBasics:
    @pytest.fixture()
    def builder(self) -> BoardBuilder:
        return BoardBuilder()

    def test_empty_input(self) -> None:
        assert split([], []) == []

    def test_single_isolated_via(self, builder: BoardBuilder) -> None:
        net = builder.network("GND")
        via = builder.via(net, 0, 0)
        segments = split([via], [])
        assert len(segments) == 1
        assert segments[0].anchors == [via]
        assert segments[0].wires == []

    def test_connected_chain_is_one_segment(self, builder: BoardBuilder) -> None:
        net = builder.network("GND")
        a = builder.via(net, 0, 0)
        j = builder.junction(net, 5, 0)
        b = builder.via(net, 10, 0)
        w1 = builder.wire(net, a, j)
        w2 = builder.wire(net, j, b)
        segments = split([a, b], [w1, w2])
        assert len(segments) == 1
        assert _uuids(segments[0].anchors) == {a.uuid, j.uuid, b.uuid}
        assert _uuids(segments[0].wires) == {w1.uuid, w2.uuid}

    def test_two_disjoint_groups(self, builder: BoardBuilder) -> None:
        net = builder.network("GND")
        a = builder.via(net, 0, 0)
        j1 = builder.junction(net, 5, 0)
        b = builder.via(net, 50, 0)
        j2 = builder.junction(net, 55, 0)
        w1 = builder.wire(net, a, j1)
        w2 = builder.wire(net, b, j2)
        segments = split([a, b], [w1, w2])
        assert len(segments) == 2
        _assert_partition(segments, [a, b], [w1, w2])
        assert not (_uuids(segments[0].anchors) & _uuids(segments[1].anchors))

    def test_unreached_included_vias_become_singletons(self, builder: BoardBuilder) -> None:
        net = builder.network("GND")
        a = builder.via(net, 0, 0)
        j = builder.junction(net, 5, 0)
        lone = builder.via(net, 20, 20)
        w = builder.wire(net, a, j)
        segments = split([a, lone], [w])
        assert len(segments) == 2
        assert segments[1].anchors == [lone]
        assert segments[1].vias == [lone]
        _assert_partition(segments, [a, lone], [w])

    def test_segments_in_discovery_order(self, builder: BoardBuilder) -> None:
        net = builder.network("GND")
        j1 = builder.junction(net, 0, 0)
        j2 = builder.junction(net, 5, 0)
        j3 = builder.junction(net, 50, 0)
        j4 = builder.junction(net, 55, 0)
        w_far = builder.wire(net, j3, j4)
        w_near = builder.wire(net, j1, j2)
        segments = split([], [w_far, w_near])
        assert [s.wires for s in segments] == [[w_far], [w_near]]

    def test_unselected_wire_is_not_followed(self, builder: BoardBuilder) -> None:
        net = builder.network("GND")
        j1 = builder.junction(net, 0, 0)
        j2 = builder.junction(net, 5, 0)
        j3 = builder.junction(net, 10, 0)
        w1 = builder.wire(net, j1, j2)
        builder.wire(net, j2, j3)
        segments = split([], [w1])
        assert len(segments) == 1
        assert _uuids(segments[0].anchors) == {j1.uuid, j2.uuid}


class TestExcludedVias:
    @pytest.fixture()
    def builder(self) -> BoardBuilder:
        return BoardBuilder()

    def test_excluded_via_does_not_join_layers(self, builder: BoardBuilder) -> None:
        net = builder.network("GND")
        v = builder.via(net, 0, 0)
        j1 = builder.junction(net, 10, 0)
        j2 = builder.junction(net, -10, 0)
        w1 = builder.wire(net, v, j1, layer="top")
        w2 = builder.wire(net, v, j2, layer="bottom")

        segments = split([], [w1, w2])

        assert len(segments) == 2
        assert segments[0].wires == [w1]
        assert segments[1].wires == [w2]
        # the excluded via is an endpoint of both segments
        assert v in segments[0].anchors
        assert v in segments[1].anchors
        assert j1 not in segments[1].anchors
        assert j2 not in segments[0].anchors

    def test_excluded_via_joins_wires_on_same_layer(self, builder: BoardBuilder) -> None:
        net = builder.network("GND")
        v = builder.via(net, 0, 0)
        j1 = builder.junction(net, 10, 0)
        j2 = builder.junction(net, -10, 0)
        w1 = builder.wire(net, v, j1, layer="top")
        w2 = builder.wire(net, v, j2, layer="top")
        segments = split([], [w1, w2])
        assert len(segments) == 1
        assert _uuids(segments[0].wires) == {w1.uuid, w2.uuid}

    def test_included_via_joins_layers(self, builder: BoardBuilder) -> None:
        net = builder.network("GND")
        v = builder.via(net, 0, 0)
        j1 = builder.junction(net, 10, 0)
        j2 = builder.junction(net, -10, 0)
        w1 = builder.wire(net, v, j1, layer="top")
        w2 = builder.wire(net, v, j2, layer="bottom")
        segments = split([v], [w1, w2])
        assert len(segments) == 1
        assert _uuids(segments[0].anchors) == {v.uuid, j1.uuid, j2.uuid}

    def test_excluded_via_without_input_wires_is_dropped(self, builder: BoardBuilder) -> None:
        net = builder.network("GND")
        v = builder.via(net, 0, 0)
        j = builder.junction(net, 10, 0)
        builder.wire(net, v, j)
        other = builder.via(net, 30, 0)
        segments = split([other], [])
        assert len(segments) == 1
        assert segments[0].anchors == [other]
        assert all(v not in s.anchors for s in segments)

    def test_excluded_via_listed_once_per_segment(self, builder: BoardBuilder) -> None:
        net = builder.network("GND")
        v = builder.via(net, 0, 0)
        j1 = builder.junction(net, 10, 0)
        j2 = builder.junction(net, 10, 10)
        w1 = builder.wire(net, v, j1, layer="top")
        w2 = builder.wire(net, j1, j2, layer="top")
        w3 = builder.wire(net, j2, v, layer="top")
        segments = split([], [w1, w2, w3])
        assert len(segments) == 1
        assert segments[0].anchors.count(v) == 1
        assert len(segments[0].wires) == 3


class TestPads:
    def test_pad_ends_growth(self) -> None:
        builder = BoardBuilder()
        net = builder.network("GND")
        pad = builder.pad(0, 0)
        j1 = builder.junction(net, 10, 0)
        j2 = builder.junction(net, -10, 0)
        w1 = builder.wire(net, pad, j1)
        w2 = builder.wire(net, pad, j2)

        segments = split([], [w1, w2])

        assert len(segments) == 2
        assert pad in segments[0].anchors
        assert pad in segments[1].anchors
        assert segments[0].anchors.count(pad) == 1


class TestPartitionProperty:
    def test_mixed_network_partitions_input(self) -> None:
        builder = BoardBuilder()
        net = builder.network("GND")
        pad = builder.pad(-5, 0)
        vias = [builder.via(net, x, 0) for x in (0, 10, 20, 30)]
        js = [builder.junction(net, x, 5) for x in (0, 10, 20, 30)]
        wires = [
            builder.wire(net, pad, vias[0]),
            builder.wire(net, vias[0], js[0], layer="bottom"),
            builder.wire(net, js[0], vias[1], layer="bottom"),
            builder.wire(net, vias[1], vias[2], layer="top"),
            builder.wire(net, vias[2], js[2], layer="bottom"),
            builder.wire(net, vias[3], js[3], layer="top"),
        ]
        included_vias = [vias[0], vias[3]]
        included_wires = wires[:2] + wires[3:]

        segments = split(included_vias, included_wires)

        _assert_partition(segments, included_vias, included_wires)
        for i, first in enumerate(segments):
            for second in segments[i + 1 :]:
                assert not (_uuids(first.wires) & _uuids(second.wires))
                shared = [
                    a for a in first.anchors if a in second.anchors and a.kind is not AnchorKind.PAD
                ]
                assert all(a not in included_vias for a in shared)
                assert all(not isinstance(a, Junction) for a in shared)

    def test_split_all_of_network_keeps_components(self) -> None:
        builder = BoardBuilder()
        net: Network = builder.network("GND")
        a = builder.via(net, 0, 0)
        b = builder.via(net, 10, 0)
        w = builder.wire(net, a, b)
        c = builder.via(net, 50, 0)
        segments = split(net.vias, net.wires)
        assert len(segments) == 2
        assert _uuids(segments[0].anchors) == {a.uuid, b.uuid}
        assert segments[0].wires == [w]
        assert segments[1].anchors == [c]
