"""Tests for the board graph model: networks, circuit and selection."""

from __future__ import annotations

import pytest
from board_builders import BoardBuilder

from boardclip.board import Board, Junction, NetClass, NetSignal, Network, Via, Wire, new_uuid
from boardclip.exceptions import InvariantViolationError
from boardclip.schema import Point


class TestNetworkRegistration:
    @pytest.fixture()
    def builder(self) -> BoardBuilder:
        return BoardBuilder()

    def test_add_elements_links_wires_to_anchors(self, builder: BoardBuilder) -> None:
        net = builder.network("GND")
        a = builder.via(net, 0, 0)
        b = builder.via(net, 10, 0)
        w = builder.wire(net, a, b)
        assert a.wires == [w]
        assert b.wires == [w]
        assert w.network is net
        assert net.get_wire(w.uuid) is w

    def test_add_requires_board(self, builder: BoardBuilder) -> None:
        net = Network(builder.signal("GND"))
        with pytest.raises(InvariantViolationError):
            net.add_elements(vias=[Via(new_uuid(), Point(0, 0))])

    def test_add_anchor_twice_fails(self, builder: BoardBuilder) -> None:
        net = builder.network("GND")
        via = builder.via(net, 0, 0)
        with pytest.raises(InvariantViolationError):
            net.add_elements(vias=[via])

    def test_wire_to_foreign_anchor_fails_without_side_effects(
        self, builder: BoardBuilder
    ) -> None:
        gnd = builder.network("GND")
        vcc = builder.network("VCC")
        a = builder.via(gnd, 0, 0)
        b = builder.via(vcc, 10, 0)
        fresh = Junction(new_uuid(), Point(5, 5))
        w = Wire(new_uuid(), "top", 0.2, a, b)
        with pytest.raises(InvariantViolationError):
            gnd.add_elements(junctions=[fresh], wires=[w])
        assert fresh.network is None
        assert gnd.junctions == []
        assert a.wires == []

    def test_wire_to_unknown_pad_fails(self, builder: BoardBuilder) -> None:
        from boardclip.board import Pad

        net = builder.network("GND")
        a = builder.via(net, 0, 0)
        stray = Pad(new_uuid(), Point(5, 0))
        with pytest.raises(InvariantViolationError):
            net.add_elements(wires=[Wire(new_uuid(), "top", 0.2, a, stray)])

    def test_remove_anchor_with_wires_fails(self, builder: BoardBuilder) -> None:
        net = builder.network("GND")
        a = builder.via(net, 0, 0)
        b = builder.via(net, 10, 0)
        builder.wire(net, a, b)
        with pytest.raises(InvariantViolationError):
            net.remove_elements(vias=[a])

    def test_remove_with_wires_detaches(self, builder: BoardBuilder) -> None:
        net = builder.network("GND")
        pad = builder.pad(0, 0)
        a = builder.via(net, 10, 0)
        w = builder.wire(net, pad, a)
        net.remove_elements(vias=[a], wires=[w])
        assert net.is_empty
        assert pad.wires == []
        assert a.network is None

    def test_remove_absent_element_fails(self, builder: BoardBuilder) -> None:
        net = builder.network("GND")
        with pytest.raises(InvariantViolationError):
            net.remove_elements(vias=[Via(new_uuid(), Point(0, 0))])

    def test_board_membership_moves_pad_links(self, builder: BoardBuilder) -> None:
        net = builder.network("GND")
        pad = builder.pad(0, 0)
        a = builder.via(net, 10, 0)
        w = builder.wire(net, pad, a)
        builder.board.remove_network(net)
        assert pad.wires == []
        assert a.wires == [w]
        builder.board.add_network(net)
        assert pad.wires == [w]


class TestCircuit:
    def test_unregistered_signal_is_rejected(self) -> None:
        board = Board()
        signal = NetSignal(name="GND", net_class=NetClass(name="default"))
        with pytest.raises(InvariantViolationError):
            board.add_network(Network(signal))

    def test_next_auto_net_name(self) -> None:
        builder = BoardBuilder()
        assert builder.board.circuit.next_auto_net_name() == "N#1"
        builder.signal("N#1")
        builder.signal("N#3")
        assert builder.board.circuit.next_auto_net_name() == "N#2"

    def test_duplicate_signal_name_rejected(self) -> None:
        builder = BoardBuilder()
        builder.signal("GND")
        with pytest.raises(InvariantViolationError):
            builder.board.circuit.add_net_signal(NetSignal("GND", builder.net_class))

    def test_net_class_in_use_cannot_be_removed(self) -> None:
        builder = BoardBuilder()
        builder.signal("GND")
        with pytest.raises(InvariantViolationError):
            builder.board.circuit.remove_net_class(builder.net_class)


class TestSelection:
    def test_select_and_clear(self) -> None:
        builder = BoardBuilder()
        net = builder.network("GND")
        a = builder.via(net, 0, 0)
        b = builder.via(net, 10, 0)
        w = builder.wire(net, a, b)
        assert builder.board.select_by_uuid([a.uuid, w.uuid, "missing"]) == 2
        selection = builder.board.selection()
        assert selection.vias == [a]
        assert selection.wires == [w]
        deselected = builder.board.clear_selection()
        assert set(deselected) == {a, w}
        assert builder.board.selection().is_empty
