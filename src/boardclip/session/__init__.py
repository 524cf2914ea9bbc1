"""Editor sessions: clipboard operations on one board with undo/redo."""

from .history import UndoStack
from .manager import EditSession, SessionState

__all__ = ["EditSession", "SessionState", "UndoStack"]
