"""Undo/redo history of committed transactions."""

from __future__ import annotations

from ..constants import MAX_UNDO_DEPTH
from ..edits import Transaction
from ..logging_config import create_logger

logger = create_logger(__name__)


class UndoStack:
    """Stack of committed transactions with a bounded depth.

    Transactions arrive already executed; :meth:`push` only records them.
    Undoing reverts the whole transaction, redoing re-executes it.
    """

    def __init__(self, max_depth: int = MAX_UNDO_DEPTH) -> None:
        self._undo_stack: list[Transaction] = []
        self._redo_stack: list[Transaction] = []
        self._max_depth = max_depth

    def push(self, tx: Transaction) -> None:
        self._undo_stack.append(tx)
        self._redo_stack.clear()
        if len(self._undo_stack) > self._max_depth:
            self._undo_stack.pop(0)
        logger.debug(f"Recorded {tx.description!r} (stack depth={len(self._undo_stack)})")

    def undo(self) -> Transaction | None:
        """Revert the last transaction. Returns None if there is nothing to undo."""
        if not self._undo_stack:
            return None
        tx = self._undo_stack.pop()
        tx.revert()
        self._redo_stack.append(tx)
        logger.debug(f"Undo: {tx.description}")
        return tx

    def redo(self) -> Transaction | None:
        """Re-apply the last undone transaction. Returns None if there is nothing to redo."""
        if not self._redo_stack:
            return None
        tx = self._redo_stack.pop()
        tx.reapply()
        self._undo_stack.append(tx)
        logger.debug(f"Redo: {tx.description}")
        return tx

    def can_undo(self) -> bool:
        return len(self._undo_stack) > 0

    def can_redo(self) -> bool:
        return len(self._redo_stack) > 0

    def clear(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()

    @property
    def undo_description(self) -> str | None:
        if self._undo_stack:
            return self._undo_stack[-1].description
        return None

    @property
    def redo_description(self) -> str | None:
        if self._redo_stack:
            return self._redo_stack[-1].description
        return None

    @property
    def depth(self) -> int:
        return len(self._undo_stack)
