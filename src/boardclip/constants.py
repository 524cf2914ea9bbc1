"""Global constants for boardclip."""

# Net registry
DEFAULT_NET_CLASS_NAME = "default"
"""Net class that receives net signals created while pasting."""

AUTO_NET_SIGNAL_PREFIX = "N#"
"""Prefix of auto-generated net signal names (N#1, N#2, ...)."""

# Board layers
DEFAULT_COPPER_LAYERS = ("top", "bottom")
"""Copper layers of a board created without an explicit layer stack."""

# Textual tree format
CLIPBOARD_ROOT_TAG = "boardclip_clipboard_board"
"""Root node name of a serialized clipboard snapshot."""

BOARD_ROOT_TAG = "boardclip_board"
"""Root node name of a board document."""


# Clipboard transport
MEDIA_TYPE_BASE = "application/x-boardclip-clipboard.board"
"""Media type of a board snapshot, without the version parameter."""

MEDIA_TYPE_TEXT = "text/plain"

# Editor session
MAX_UNDO_DEPTH = 200
"""Maximum number of committed operations kept on the undo stack."""

# Response Size Constants
MAX_RESPONSE_CHARS = 50_000
"""Maximum characters in a tool response before truncation (~12k tokens)."""
