"""Board tools: open, inspect, select and save the loaded board."""

from __future__ import annotations

from typing import Any

from ..exceptions import BoardClipError
from ..removal import plan_removal
from .registry import register_tool


def _open_board_handler(board_path: str) -> dict[str, Any]:
    """Open a board file and start an edit session on it.

    Args:
        board_path: Path to a .boardclip board file.
    """
    from .. import state

    try:
        board = state.load_board(board_path)
    except BoardClipError as e:
        return e.to_dict()
    return {
        "status": "ok",
        "message": f"Loaded board: {board.name or board_path}",
        "session_id": state.get_session().session_id,
        "board": board.to_dict(),
    }


def _get_board_info_handler() -> dict[str, Any]:
    """Get summary information about the currently loaded board."""
    from .. import state

    try:
        board = state.get_board()
    except BoardClipError as e:
        return e.to_dict()
    info = board.to_dict()
    info["selection"] = board.selection().to_dict()
    return info


def _save_board_handler(board_path: str | None = None) -> dict[str, Any]:
    """Write the board to disk.

    Args:
        board_path: Target path. Defaults to the path the board was opened from.
    """
    from .. import state
    from ..board_io import save_board

    try:
        board = state.get_board()
        target = board_path or state.get_board_path()
        if target is None:
            return {"error": "No target path: pass board_path"}
        written = save_board(board, target)
    except BoardClipError as e:
        return e.to_dict()
    return {"status": "saved", "board_path": str(written)}


def _select_items_handler(uuids: list[str], clear: bool = True) -> dict[str, Any]:
    """Select vias, traces, planes, polygons, texts and holes by identity.

    Args:
        uuids: Identities of the items to select.
        clear: Clear the current selection first. Default: True.
    """
    from .. import state

    try:
        board = state.get_board()
    except BoardClipError as e:
        return e.to_dict()
    if clear:
        board.clear_selection()
    found = board.select_by_uuid(uuids)
    return {
        "requested": len(uuids),
        "selected": found,
        "selection": board.selection().to_dict(),
    }


def _clear_selection_handler() -> dict[str, Any]:
    """Deselect everything on the board."""
    from .. import state

    try:
        board = state.get_board()
    except BoardClipError as e:
        return e.to_dict()
    deselected = board.clear_selection()
    return {"status": "cleared", "deselected": len(deselected)}


def _split_network_handler(
    network_uuid: str, remove_uuids: list[str] | None = None
) -> dict[str, Any]:
    """Preview what is left of a network after removing some of its vias and traces.

    Args:
        network_uuid: Identity of the network.
        remove_uuids: Identities of vias and traces to leave out. Default: none.
    """
    from .. import state

    try:
        board = state.get_board()
    except BoardClipError as e:
        return e.to_dict()
    network = next((n for n in board.networks if n.uuid == network_uuid), None)
    if network is None:
        return {"error": f"Network {network_uuid!r} not found"}

    removed = set(remove_uuids or ())
    plan = plan_removal(
        network,
        removed_vias=[v for v in network.vias if v.uuid in removed],
        removed_wires=[w for w in network.wires if w.uuid in removed],
    )
    result = plan.to_dict()
    result["preview"] = True
    return result


# Direct tools (always visible)
register_tool(
    name="open_board",
    description="Open a board file and start an edit session. Required before other tools.",
    parameters={"board_path": {"type": "string", "description": "Path to a .boardclip file."}},
    handler=_open_board_handler,
    category="board",
    direct=True,
)

register_tool(
    name="get_board_info",
    description="Get board summary: layers, nets, networks, item counts and current selection.",
    parameters={},
    handler=_get_board_info_handler,
    category="board",
    direct=True,
)

register_tool(
    name="select_items",
    description="Select board items (vias, traces, planes, polygons, texts, holes) by identity.",
    parameters={
        "uuids": {"type": "array", "items": {"type": "string"}, "description": "Item identities."},
        "clear": {"type": "boolean", "description": "Clear the selection first. Default: true."},
    },
    handler=_select_items_handler,
    category="board",
    direct=True,
)

register_tool(
    name="clear_selection",
    description="Deselect everything on the board.",
    parameters={},
    handler=_clear_selection_handler,
    category="board",
    direct=True,
)

# Routed tools
register_tool(
    name="save_board",
    description="Write the loaded board to disk.",
    parameters={
        "board_path": {
            "type": "string",
            "description": "Target path. Defaults to the path the board was opened from.",
        },
    },
    handler=_save_board_handler,
    category="board",
)

register_tool(
    name="split_network",
    description=(
        "Preview the connected pieces a network falls into when some of its vias"
        " and traces are removed."
    ),
    parameters={
        "network_uuid": {"type": "string", "description": "Network identity."},
        "remove_uuids": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Vias and traces to leave out.",
        },
    },
    handler=_split_network_handler,
    category="analysis",
)
