"""Tests for loading and saving board documents."""

from __future__ import annotations

from pathlib import Path

import pytest

from boardclip.board import AnchorKind, ViaShape
from boardclip.board_io import board_from_sexp, board_to_sexp, load_board, save_board
from boardclip.exceptions import BoardLoadingError, InvariantViolationError
from boardclip.schema import Point
from boardclip.sexp import parse

FIXTURE_PATH = Path(__file__).parent.parent / "fixtures" / "demo_board.boardclip"


class TestLoadBoard:
    def test_demo_board(self) -> None:
        board = load_board(FIXTURE_PATH)
        assert board.name == "demo"
        assert board.layers == ("top", "bottom")
        assert [s.name for s in board.circuit.net_signals] == ["GND", "VCC"]
        assert len(board.networks) == 2
        assert len(board.pads) == 1
        assert len(board.planes) == 1
        assert len(board.polygons) == 1
        assert [t.text for t in board.stroke_texts] == ["DEMO board"]
        assert board.holes[0].diameter == 3.2

    def test_wires_are_linked_to_anchors(self) -> None:
        board = load_board(FIXTURE_PATH)
        gnd = board.networks[0]
        pad = board.pads[0]
        assert gnd.net_signal.name == "GND"
        assert len(gnd.wires) == 3
        first = gnd.get_wire("00000000-0000-4000-8000-000000000070")
        assert first.start is pad
        assert first.start.kind is AnchorKind.PAD
        assert pad.wires == [first]
        via = gnd.get_via("00000000-0000-4000-8000-000000000050")
        assert first.end is via
        assert len(via.wires) == 2

    def test_via_attributes(self) -> None:
        board = load_board(FIXTURE_PATH)
        [via] = board.networks[1].vias
        assert via.position == Point(40, 0)
        assert via.shape is ViaShape.SQUARE
        assert via.size == 0.8
        assert via.drill_diameter == 0.4

    def test_nothing_selected_after_load(self) -> None:
        board = load_board(FIXTURE_PATH)
        assert board.selection().is_empty

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(BoardLoadingError):
            load_board(tmp_path / "missing.boardclip")

    def test_wrong_root(self, tmp_path: Path) -> None:
        path = tmp_path / "other.boardclip"
        path.write_text("(kicad_pcb (version 1))", encoding="utf-8")
        with pytest.raises(BoardLoadingError):
            load_board(path)

    def test_unknown_trace_anchor(self, tmp_path: Path) -> None:
        path = tmp_path / "dangling.boardclip"
        path.write_text(
            "(boardclip_board b1 (name x) (layers top)"
            " (netclass c1 (name default))"
            " (netsignal s1 (name GND) (netclass c1))"
            " (netsegment n1 (net GND)"
            " (junction j1 (position 0 0))"
            " (trace t1 (layer top) (width 0.2) (from (junction j1)) (to (pad nowhere)))))",
            encoding="utf-8",
        )
        with pytest.raises(BoardLoadingError, match="nowhere"):
            load_board(path)

    def test_duplicate_net_name(self) -> None:
        root = parse(
            "(boardclip_board b1 (name x) (layers top)"
            " (netclass c1 (name default))"
            " (netsignal s1 (name GND) (netclass c1))"
            " (netsignal s2 (name GND) (netclass c1)))"
        )
        with pytest.raises(InvariantViolationError) as excinfo:
            board_from_sexp(root)
        assert "GND" in str(excinfo.value)


class TestSaveBoard:
    def test_round_trip(self, tmp_path: Path) -> None:
        board = load_board(FIXTURE_PATH)
        target = save_board(board, tmp_path / "saved.boardclip")
        reloaded = load_board(target)
        assert board_to_sexp(reloaded) == board_to_sexp(board)

    def test_saved_text_matches_fixture(self) -> None:
        board = load_board(FIXTURE_PATH)
        expected = FIXTURE_PATH.read_text(encoding="utf-8")
        assert board_to_sexp(board).to_string() + "\n" == expected
