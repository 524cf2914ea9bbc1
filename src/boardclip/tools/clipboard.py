"""Clipboard tools: copy, paste and remove with undo/redo."""

from __future__ import annotations

from typing import Any

from ..exceptions import BoardClipError
from ..schema import Point
from ..snapshot import from_mime_data, to_mime_data
from .registry import register_tool


def _copy_selection_handler(x: float = 0.0, y: float = 0.0) -> dict[str, Any]:
    """Copy the selected items to the clipboard.

    Args:
        x: Cursor X at copy time (mm). Paste positions are relative to it.
        y: Cursor Y at copy time (mm).
    """
    from .. import state

    try:
        session = state.get_session()
        snapshot = session.copy(Point(x, y))
    except BoardClipError as e:
        return e.to_dict()
    if snapshot.is_empty:
        return {"status": "nothing_selected"}
    state.set_clipboard(to_mime_data(snapshot))
    return {"status": "copied", "snapshot": snapshot.to_dict()}


def _paste_clipboard_handler(x: float, y: float) -> dict[str, Any]:
    """Paste the clipboard so the copy cursor lands on (x, y).

    Pasted items are selected afterwards.

    Args:
        x: Cursor X (mm).
        y: Cursor Y (mm).
    """
    from .. import state

    try:
        session = state.get_session()
        tx = session.paste_mime(state.get_clipboard(), Point(x, y))
    except BoardClipError as e:
        return e.to_dict()
    if tx is None:
        return {"status": "clipboard_empty"}
    return {
        "status": "pasted",
        "transaction": tx.to_dict(),
        "selection": session.board.selection().to_dict(),
    }


def _remove_selection_handler() -> dict[str, Any]:
    """Remove the selected items. Networks cut apart are split into their connected pieces."""
    from .. import state

    try:
        session = state.get_session()
        tx = session.remove_selected()
    except BoardClipError as e:
        return e.to_dict()
    if tx is None:
        return {"status": "nothing_selected"}
    return {"status": "removed", "transaction": tx.to_dict()}


def _undo_handler() -> dict[str, Any]:
    """Undo the last copy-paste or removal."""
    from .. import state

    try:
        tx = state.get_session().undo()
    except BoardClipError as e:
        return e.to_dict()
    if tx is None:
        return {"status": "nothing_to_undo"}
    return {"status": "undone", "transaction": tx.to_dict()}


def _redo_handler() -> dict[str, Any]:
    """Redo the last undone operation."""
    from .. import state

    try:
        tx = state.get_session().redo()
    except BoardClipError as e:
        return e.to_dict()
    if tx is None:
        return {"status": "nothing_to_redo"}
    return {"status": "redone", "transaction": tx.to_dict()}


def _get_clipboard_info_handler() -> dict[str, Any]:
    """Describe what the clipboard currently holds."""
    from .. import state

    mime = state.get_clipboard()
    try:
        snapshot = from_mime_data(mime)
    except BoardClipError as e:
        return e.to_dict()
    if snapshot is None:
        return {"status": "clipboard_empty", "media_types": sorted(mime or {})}
    return {"status": "ok", "media_types": sorted(mime or {}), "snapshot": snapshot.to_dict()}


def _get_session_status_handler() -> dict[str, Any]:
    """Get the undo/redo status of the edit session."""
    from .. import state

    try:
        return state.get_session().to_dict()
    except BoardClipError as e:
        return e.to_dict()


# Direct tools (always visible)
register_tool(
    name="copy_selection",
    description="Copy the selected vias, traces, planes, polygons, texts and holes.",
    parameters={
        "x": {"type": "number", "description": "Cursor X at copy time (mm)."},
        "y": {"type": "number", "description": "Cursor Y at copy time (mm)."},
    },
    handler=_copy_selection_handler,
    category="clipboard",
    direct=True,
)

register_tool(
    name="paste_clipboard",
    description="Paste the clipboard at a cursor position. Pasted items come out selected.",
    parameters={
        "x": {"type": "number", "description": "Cursor X (mm)."},
        "y": {"type": "number", "description": "Cursor Y (mm)."},
    },
    handler=_paste_clipboard_handler,
    category="clipboard",
    direct=True,
)

register_tool(
    name="remove_selection",
    description="Remove the selected items, splitting networks that fall apart.",
    parameters={},
    handler=_remove_selection_handler,
    category="clipboard",
    direct=True,
)

register_tool(
    name="undo",
    description="Undo the last paste or removal.",
    parameters={},
    handler=_undo_handler,
    category="clipboard",
    direct=True,
)

register_tool(
    name="redo",
    description="Redo the last undone paste or removal.",
    parameters={},
    handler=_redo_handler,
    category="clipboard",
    direct=True,
)

# Routed tools
register_tool(
    name="get_clipboard_info",
    description="Describe the clipboard content: media types and snapshot summary.",
    parameters={},
    handler=_get_clipboard_info_handler,
    category="session",
)

register_tool(
    name="get_session_status",
    description="Get the undo/redo status of the edit session.",
    parameters={},
    handler=_get_session_status_handler,
    category="session",
)
