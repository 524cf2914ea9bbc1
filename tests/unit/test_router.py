"""Tests for the tool router meta-tools and tool registry."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from pathlib import Path

import pytest

from boardclip import state
from boardclip.tools import TOOL_REGISTRY, get_categories
from boardclip.tools.router import (
    _truncate_response,
    execute_tool,
    get_category_tools,
    list_tool_categories,
    search_tools,
)

FIXTURE_PATH = Path(__file__).parent.parent / "fixtures" / "demo_board.boardclip"
GND_NETWORK = "00000000-0000-4000-8000-000000000040"
MIDDLE_TRACE = "00000000-0000-4000-8000-000000000071"


@pytest.fixture(autouse=True)
def _reset_state() -> Iterator[None]:
    state.reset()
    yield
    state.reset()


class TestToolRegistry:
    def test_tools_registered(self) -> None:
        # Direct tools
        for name in (
            "open_board",
            "get_board_info",
            "select_items",
            "clear_selection",
            "copy_selection",
            "paste_clipboard",
            "remove_selection",
            "undo",
            "redo",
        ):
            assert name in TOOL_REGISTRY
        # Routed tools
        for name in ("save_board", "split_network", "get_clipboard_info", "get_session_status"):
            assert name in TOOL_REGISTRY

    def test_direct_flag(self) -> None:
        assert TOOL_REGISTRY["open_board"].direct is True
        assert TOOL_REGISTRY["split_network"].direct is False

    def test_categories(self) -> None:
        cats = get_categories()
        assert {"board", "clipboard", "analysis", "session"} <= set(cats)
        assert "split_network" in [t.name for t in cats["analysis"]]


class TestMetaTools:
    def test_list_categories_only_routed(self) -> None:
        result = list_tool_categories()["categories"]
        assert "clipboard" not in result
        assert result["analysis"]["tools"] == ["split_network"]
        assert "save_board" in result["board"]["tools"]
        assert "open_board" not in result["board"]["tools"]

    def test_get_category_tools(self) -> None:
        result = get_category_tools("session")
        names = [t["name"] for t in result["tools"]]
        assert names == ["get_clipboard_info", "get_session_status"]

    def test_unknown_category(self) -> None:
        assert "error" in get_category_tools("nope")

    def test_direct_only_category(self) -> None:
        assert "error" in get_category_tools("clipboard")

    def test_search(self) -> None:
        result = search_tools("UNDO")
        names = [t["name"] for t in result["tools"]]
        assert "undo" in names
        assert result["result_count"] == len(names)


class TestExecuteTool:
    def test_unknown_tool(self) -> None:
        result = asyncio.run(execute_tool("nope"))
        assert "Unknown tool" in result["error"]

    def test_bad_arguments(self) -> None:
        result = asyncio.run(execute_tool("split_network", {"bogus": 1}))
        assert "Invalid arguments" in result["error"]

    def test_no_board_loaded(self) -> None:
        result = asyncio.run(execute_tool("get_session_status"))
        assert result["error_code"] == "SESSION_ERROR"

    def test_split_network_preview(self) -> None:
        state.load_board(str(FIXTURE_PATH))
        result = asyncio.run(
            execute_tool(
                "split_network",
                {"network_uuid": GND_NETWORK, "remove_uuids": [MIDDLE_TRACE]},
            )
        )
        assert result["preview"] is True
        assert result["remove_whole"] is False
        assert len(result["sub_networks"]) == 2
        assert all(MIDDLE_TRACE not in s["wires"] for s in result["sub_networks"])
        # preview only
        assert len(state.get_board().networks) == 2

    def test_split_unknown_network(self) -> None:
        state.load_board(str(FIXTURE_PATH))
        result = asyncio.run(execute_tool("split_network", {"network_uuid": "missing"}))
        assert "not found" in result["error"]


class TestTruncate:
    def test_small_response_untouched(self) -> None:
        result = {"items": [1, 2, 3]}
        assert _truncate_response(result) == {"items": [1, 2, 3]}

    def test_large_list_is_trimmed(self) -> None:
        result = _truncate_response({"items": ["x" * 100] * 2000, "count": 2000})
        assert result["_truncated"] is True
        assert 0 < len(result["items"]) < 2000
        assert result["count"] == 2000
