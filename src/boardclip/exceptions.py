"""Exception hierarchy for board clipboard operations.

Every error raised by this package derives from :class:`BoardClipError` and
carries an ``error_code`` plus free-form context, so tool handlers can turn
it into a structured response.

Three kinds matter to callers of the core:

- :class:`SnapshotFormatError`: the snapshot payload cannot be trusted.
  Nothing has been applied when it is raised.
- :class:`DestinationConflictError`: the snapshot is fine but the target
  board cannot host it (e.g. a missing copper layer). Raised mid-operation;
  the enclosing transaction rolls back before it propagates.
- :class:`InvariantViolationError`: a caller broke a contract of the graph
  model. It signals a bug and is never handled inside the package.
"""

from __future__ import annotations

from typing import Any


class BoardClipError(Exception):
    """Base exception for all boardclip errors."""

    error_code: str = ""

    def __init__(self, message: str, error_code: str | None = None, **kwargs: Any):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.__dict__.update(kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a serializable dict."""
        result: dict[str, Any] = {
            "error": True,
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
        }
        result.update(
            {k: v for k, v in self.__dict__.items() if k not in ["message", "error_code"]}
        )
        return result


class SnapshotFormatError(BoardClipError):
    """Raised when a snapshot cannot be decoded or references missing anchors."""

    error_code = "SNAPSHOT_FORMAT_ERROR"

    def __init__(self, message: str, node: str | None = None, **kwargs: Any):
        super().__init__(message, "SNAPSHOT_FORMAT_ERROR", node=node, **kwargs)


class UnsupportedVersionError(SnapshotFormatError):
    """Raised when a snapshot was produced by a different application version."""

    error_code = "UNSUPPORTED_VERSION"

    def __init__(self, message: str, media_type: str | None = None, **kwargs: Any):
        super().__init__(message, media_type=media_type, **kwargs)
        self.error_code = "UNSUPPORTED_VERSION"


class DestinationConflictError(BoardClipError):
    """Raised when the destination board cannot host pasted elements."""

    error_code = "DESTINATION_CONFLICT"

    def __init__(self, message: str, layer: str | None = None, **kwargs: Any):
        super().__init__(message, "DESTINATION_CONFLICT", layer=layer, **kwargs)


class InvariantViolationError(BoardClipError):
    """Raised when a graph-model contract is broken (a bug in the caller)."""

    error_code = "INVARIANT_VIOLATION"

    def __init__(self, message: str, element: str | None = None, **kwargs: Any):
        super().__init__(message, "INVARIANT_VIOLATION", element=element, **kwargs)


class SessionError(BoardClipError):
    """Raised when an editor session is used after it was closed."""

    error_code = "SESSION_ERROR"

    def __init__(self, message: str, session_id: str | None = None, **kwargs: Any):
        super().__init__(message, "SESSION_ERROR", session_id=session_id, **kwargs)


class BoardLoadingError(BoardClipError):
    """Raised when a board document cannot be read or written."""

    error_code = "BOARD_LOADING_ERROR"

    def __init__(self, message: str, board_path: str | None = None, **kwargs: Any):
        super().__init__(message, "BOARD_LOADING_ERROR", board_path=board_path, **kwargs)


__all__ = [
    "BoardClipError",
    "SnapshotFormatError",
    "UnsupportedVersionError",
    "DestinationConflictError",
    "InvariantViolationError",
    "SessionError",
    "BoardLoadingError",
]
