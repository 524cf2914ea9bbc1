"""Global board state for the MCP server.

Holds the currently loaded board, its edit session, and the clipboard.
Thread-safe: all reads and writes go through a module-level lock.
"""

from __future__ import annotations

import threading
from pathlib import Path

from .board import Board
from .board_io import load_board as _read_board
from .exceptions import SessionError
from .session import EditSession

_lock = threading.Lock()
_current_board: Board | None = None
_current_path: Path | None = None
_current_session: EditSession | None = None
# Process-wide clipboard, keyed by media type
_clipboard: dict[str, bytes] | None = None


def load_board(path: str) -> Board:
    """Load a board file and start a fresh edit session on it."""
    global _current_board, _current_path, _current_session
    # Do I/O outside the lock
    board = _read_board(path)
    session = EditSession(board)
    with _lock:
        if _current_session is not None:
            _current_session.close()
        _current_board = board
        _current_path = Path(path)
        _current_session = session
    return board


def get_board() -> Board:
    """Get the currently loaded board, or raise."""
    with _lock:
        if _current_board is None:
            raise SessionError("No board loaded. Use open_board first.")
        return _current_board


def get_session() -> EditSession:
    """Get the edit session of the loaded board, or raise."""
    with _lock:
        if _current_session is None:
            raise SessionError("No board loaded. Use open_board first.")
        return _current_session


def is_loaded() -> bool:
    """Check if a board is currently loaded."""
    with _lock:
        return _current_board is not None


def get_board_path() -> Path | None:
    """Get the path of the currently loaded board."""
    with _lock:
        return _current_path


def set_clipboard(mime: dict[str, bytes]) -> None:
    global _clipboard
    with _lock:
        _clipboard = dict(mime)


def get_clipboard() -> dict[str, bytes] | None:
    with _lock:
        return dict(_clipboard) if _clipboard is not None else None


def reset() -> None:
    """Forget the loaded board and the clipboard."""
    global _current_board, _current_path, _current_session, _clipboard
    with _lock:
        _current_board = None
        _current_path = None
        _current_session = None
        _clipboard = None
