"""Document wrapper for S-expression files on disk."""

from __future__ import annotations

from pathlib import Path

from ..exceptions import BoardLoadingError
from .parser import SExp, parse


class Document:
    """A loaded S-expression file.

    Usage::

        doc = Document.load("demo.boardclip")
        doc.root.name  # "boardclip_board"
        doc.save()  # writes back to same path
        doc.save("copy.boardclip")  # writes to new path
    """

    __slots__ = ("path", "root")

    def __init__(self, path: Path, root: SExp) -> None:
        self.path = path
        self.root = root

    @classmethod
    def load(cls, path: str | Path) -> Document:
        """Load and parse an S-expression file.

        Raises:
            BoardLoadingError: If the file is missing, unreadable or malformed.
        """
        path = Path(path)
        if not path.exists():
            raise BoardLoadingError(f"File not found: {path}", board_path=str(path))
        try:
            raw_text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise BoardLoadingError(f"Invalid encoding in {path}: {e}", board_path=str(path)) from e
        except OSError as e:
            raise BoardLoadingError(f"Error reading {path}: {e}", board_path=str(path)) from e

        try:
            root = parse(raw_text)
        except ValueError as e:
            raise BoardLoadingError(f"Failed to parse {path}: {e}", board_path=str(path)) from e

        return cls(path=path, root=root)

    def save(self, path: str | Path | None = None) -> Path:
        """Write the S-expression tree back to a file.

        Returns:
            The path the file was written to.
        """
        target = Path(path) if path is not None else self.path
        try:
            target.write_text(self.root.to_string() + "\n", encoding="utf-8")
        except OSError as e:
            raise BoardLoadingError(f"Error writing to {target}: {e}", board_path=str(target)) from e
        return target

    def __repr__(self) -> str:
        return f"Document({self.path.name!r}, root={self.root.name!r})"
