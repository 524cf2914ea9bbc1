"""End-to-end clipboard workflow through the tool handlers."""

from __future__ import annotations

import shutil
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from boardclip import state
from boardclip.board_io import load_board
from boardclip.tools import TOOL_REGISTRY

FIXTURE_PATH = Path(__file__).parent.parent / "fixtures" / "demo_board.boardclip"

VIA_A = "00000000-0000-4000-8000-000000000050"
VIA_B = "00000000-0000-4000-8000-000000000051"
TRACE_AB = "00000000-0000-4000-8000-000000000071"
TRACE_B_JUNCTION = "00000000-0000-4000-8000-000000000072"
HOLE = "00000000-0000-4000-8000-0000000000b0"


def _call(name: str, **kwargs: Any) -> Any:
    return TOOL_REGISTRY[name].handler(**kwargs)


@pytest.fixture()
def board_path(tmp_path: Path) -> Iterator[Path]:
    path = tmp_path / "demo.boardclip"
    shutil.copyfile(FIXTURE_PATH, path)
    state.reset()
    yield path
    state.reset()


class TestClipboardWorkflow:
    def test_copy_paste_remove_undo_save(self, board_path: Path) -> None:
        opened = _call("open_board", board_path=str(board_path))
        assert opened["status"] == "ok"
        assert opened["board"]["network_count"] == 2

        selected = _call("select_items", uuids=[VIA_A, VIA_B, TRACE_AB, HOLE, "unknown"])
        assert selected["selected"] == 4

        copied = _call("copy_selection", x=10, y=0)
        assert copied["status"] == "copied"
        assert copied["snapshot"]["hole_count"] == 1
        [segment] = copied["snapshot"]["net_segments"]
        assert segment == {"net": "GND", "via_count": 2, "junction_count": 0, "wire_count": 1}

        pasted = _call("paste_clipboard", x=10, y=50)
        assert pasted["status"] == "pasted"
        assert len(pasted["selection"]["vias"]) == 2
        assert len(pasted["selection"]["holes"]) == 1
        assert VIA_A not in pasted["selection"]["vias"]

        info = _call("get_board_info")
        assert info["network_count"] == 3
        assert info["hole_count"] == 2

        removed = _call("remove_selection")
        assert removed["status"] == "removed"
        assert _call("get_board_info")["network_count"] == 2

        assert _call("undo")["status"] == "undone"
        assert _call("get_board_info")["network_count"] == 3
        assert _call("redo")["status"] == "redone"

        status = _call("get_session_status")
        assert status["can_undo"] is True
        assert status["undo"] == "Remove Board Items"

        saved = _call("save_board")
        assert saved["status"] == "saved"
        reloaded = load_board(board_path)
        assert len(reloaded.networks) == 2
        assert len(reloaded.holes) == 1

    def test_remove_middle_trace_splits_network(self, board_path: Path) -> None:
        _call("open_board", board_path=str(board_path))
        _call("select_items", uuids=[TRACE_AB])

        removed = _call("remove_selection")

        assert removed["status"] == "removed"
        board = state.get_board()
        gnd = [n for n in board.networks if n.net_signal.name == "GND"]
        assert len(gnd) == 2
        by_via = {n.vias[0].uuid: n for n in gnd}
        assert set(by_via) == {VIA_A, VIA_B}
        assert len(by_via[VIA_A].wires) == 1
        assert by_via[VIA_A].wires[0].start is board.pads[0]
        assert [w.uuid for w in by_via[VIA_B].wires] != [TRACE_B_JUNCTION]
        assert len(by_via[VIA_B].junctions) == 1

    def test_clipboard_round_trip_info(self, board_path: Path) -> None:
        _call("open_board", board_path=str(board_path))
        assert _call("get_clipboard_info")["status"] == "clipboard_empty"
        assert _call("paste_clipboard", x=0, y=0)["status"] == "clipboard_empty"
        assert _call("copy_selection")["status"] == "nothing_selected"

        _call("select_items", uuids=[VIA_B])
        _call("copy_selection")
        info = _call("get_clipboard_info")
        assert info["status"] == "ok"
        assert any(t.startswith("application/x-boardclip-clipboard.board") for t in info["media_types"])

    def test_tools_require_open_board(self) -> None:
        state.reset()
        result = _call("copy_selection")
        assert result["error_code"] == "SESSION_ERROR"
        assert _call("undo")["error_code"] == "SESSION_ERROR"
