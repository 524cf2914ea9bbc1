"""Editor session over one board.

Ties the engines together the way an editor uses them::

    session = EditSession(board)
    mime = session.copy_to_mime(cursor=Point(10, 5))
    session.paste_mime(mime, cursor=Point(30, 5))  # pasted items are selected
    session.remove_selected()
    session.undo()  # pasted items are back
    session.close()

Every top-level operation that changes the board is one committed
transaction on the undo stack. A failed operation leaves both the board and
the stack untouched.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from enum import Enum
from typing import Any

from ..board import Board
from ..constants import MAX_UNDO_DEPTH
from ..edits import Transaction
from ..exceptions import SessionError
from ..logging_config import create_logger, operation_scope
from ..paste import paste
from ..removal import remove_selected
from ..schema import Point
from ..snapshot import Snapshot, build_snapshot, from_mime_data, to_mime_data
from .history import UndoStack

logger = create_logger(__name__)


class SessionState(Enum):
    ACTIVE = "active"
    CLOSED = "closed"


class EditSession:
    """Copy, paste and removal on ``board`` with undo/redo."""

    def __init__(self, board: Board, max_undo_depth: int = MAX_UNDO_DEPTH) -> None:
        self.session_id = str(uuid.uuid4())[:8]
        self.board = board
        self.state = SessionState.ACTIVE
        self.history = UndoStack(max_undo_depth)

    def _require_active(self) -> None:
        if self.state is not SessionState.ACTIVE:
            raise SessionError(
                f"Session {self.session_id} is {self.state.value}, not active",
                session_id=self.session_id,
            )

    # Clipboard

    def copy(self, cursor: Point) -> Snapshot:
        """Snapshot the current selection."""
        self._require_active()
        return build_snapshot(self.board, cursor)

    def copy_to_mime(self, cursor: Point) -> dict[str, bytes]:
        """Snapshot the current selection and package it for the clipboard."""
        return to_mime_data(self.copy(cursor))

    def paste(self, snapshot: Snapshot, cursor: Point) -> Transaction:
        """Paste ``snapshot`` so its capture cursor lands on ``cursor``.

        The previous selection is cleared; afterwards exactly the pasted
        items are selected.
        """
        self._require_active()
        with operation_scope("paste"):
            offset = cursor - snapshot.cursor_position
            deselected = self.board.clear_selection()
            try:
                tx = paste(snapshot, offset, self.board)
            except Exception:
                for element in deselected:
                    element.selected = True
                raise
            self.history.push(tx)
            return tx

    def paste_mime(self, mime: Mapping[str, bytes] | None, cursor: Point) -> Transaction | None:
        """Paste clipboard content. Returns None if it holds no board snapshot."""
        self._require_active()
        snapshot = from_mime_data(mime)
        if snapshot is None:
            logger.info("Clipboard holds no board snapshot, nothing to paste")
            return None
        return self.paste(snapshot, cursor)

    def remove_selected(self) -> Transaction | None:
        """Remove the selection. Returns None if nothing is selected."""
        self._require_active()
        tx = remove_selected(self.board)
        if tx is not None:
            self.history.push(tx)
        return tx

    # History

    def undo(self) -> Transaction | None:
        self._require_active()
        return self.history.undo()

    def redo(self) -> Transaction | None:
        self._require_active()
        return self.history.redo()

    def close(self) -> None:
        """End the session. The board keeps its current state."""
        self._require_active()
        self.history.clear()
        self.state = SessionState.CLOSED

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "board": self.board.uuid,
            "state": self.state.value,
            "undo_depth": self.history.depth,
            "can_undo": self.history.can_undo(),
            "can_redo": self.history.can_redo(),
            "undo": self.history.undo_description,
            "redo": self.history.redo_description,
        }
