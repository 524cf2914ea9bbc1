"""S-expression tree format for clipboard snapshots and board documents."""

from .document import Document
from .parser import SExp, atom, node, parse

__all__ = ["Document", "SExp", "atom", "node", "parse"]
