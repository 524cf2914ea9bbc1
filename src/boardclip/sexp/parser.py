"""S-expression tree used as the textual clipboard and board format.

Snapshots and board documents are written as nested, parenthesized lists::

    (netsegment
      (net "GND")
      (via 5f0c... (position 0 0) (size 0.7) (drill 0.3) (shape round)))

This module:
- Tokenizes quoted strings, unquoted atoms, and nested lists
- Serializes trees back to text with stable indentation
- Provides child lookups (``node["layer"]``, ``node.find_all("via")``) for decoders
"""

from __future__ import annotations


class SExp:
    """A node in an S-expression tree.

    An SExp is either:
    - An atom: a leaf node with a string value
    - A list: a node with a name (first child) and child nodes

    Usage::

        tree = parse('(trace 1f2e (layer top) (from (via 9a0b)))')
        tree.name                          # "trace"
        tree.first_value                   # "1f2e"
        tree["layer"].first_value          # "top"
    """

    __slots__ = ("name", "value", "children")

    def __init__(
        self,
        name: str | None = None,
        value: str | None = None,
        children: list[SExp] | None = None,
    ) -> None:
        self.name = name
        self.value = value
        self.children: list[SExp] = children if children is not None else []

    @property
    def is_atom(self) -> bool:
        return self.name is None and self.value is not None

    @property
    def is_list(self) -> bool:
        return self.name is not None

    def __getitem__(self, key: str) -> SExp:
        """Get the first child list with the given name.

        Raises KeyError if not found.
        """
        for child in self.children:
            if child.name == key:
                return child
        raise KeyError(f"No child named {key!r} in {self.name!r}")

    def get(self, key: str, default: SExp | None = None) -> SExp | None:
        """Get the first child list with the given name, or default."""
        for child in self.children:
            if child.name == key:
                return child
        return default

    def find_all(self, name: str) -> list[SExp]:
        """Find all direct children with the given name."""
        return [child for child in self.children if child.name == name]

    @property
    def first_value(self) -> str | None:
        """Get the value of the first atom child, e.g. for (width 0.2) -> '0.2'."""
        for child in self.children:
            if child.is_atom:
                return child.value
        return None

    @property
    def atom_values(self) -> list[str]:
        """Get all atom values among direct children."""
        return [child.value for child in self.children if child.is_atom and child.value is not None]

    def append(self, child: SExp) -> SExp:
        """Append a child and return it, for chained tree building."""
        self.children.append(child)
        return child

    def to_string(self, indent: int = 0) -> str:
        """Serialize back to S-expression text.

        List nodes with only atom children stay on one line.
        List nodes with nested list children use multi-line indented format.
        """
        if self.is_atom:
            return _quote_if_needed(self.value or "")

        head = "(" + (self.name or "")
        inline = [child.to_string() for child in self.children if child.is_atom]
        if inline:
            head += " " + " ".join(inline)
        nested = [child for child in self.children if child.is_list]
        if not nested:
            return head + ")"

        child_prefix = "  " * (indent + 1)
        lines = [head]
        for child in nested:
            lines.append(child_prefix + child.to_string(indent + 1))
        lines[-1] += ")"
        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SExp):
            return NotImplemented
        return (
            self.name == other.name
            and self.value == other.value
            and self.children == other.children
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.is_atom:
            return f"SExp(value={self.value!r})"
        return f"SExp(name={self.name!r}, children={len(self.children)})"


def atom(value: str) -> SExp:
    """Create an atom node."""
    return SExp(value=value)


def node(name: str, *children: SExp | str) -> SExp:
    """Create a list node; plain strings become atoms."""
    return SExp(
        name=name,
        children=[atom(c) if isinstance(c, str) else c for c in children],
    )


def _quote_if_needed(s: str) -> str:
    """Quote a string if it is empty or contains special characters."""
    if not s:
        return '""'
    if not any(ch in ' \t\n\r"()\\' for ch in s):
        return s
    escaped = s.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class _Tokenizer:
    """Low-level tokenizer for S-expression strings."""

    __slots__ = ("_text", "_pos", "_length")

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._length = len(text)

    def _skip_whitespace(self) -> None:
        pos = self._pos
        text = self._text
        length = self._length
        while pos < length and text[pos] in " \t\n\r":
            pos += 1
        self._pos = pos

    def peek(self) -> str | None:
        self._skip_whitespace()
        if self._pos >= self._length:
            return None
        return self._text[self._pos]

    def next_token(self) -> tuple[str, str] | None:
        """Return (token_type, token_value) or None at EOF.

        Token types: 'OPEN', 'CLOSE', 'STRING', 'ATOM'
        """
        self._skip_whitespace()
        if self._pos >= self._length:
            return None

        ch = self._text[self._pos]
        if ch == "(":
            self._pos += 1
            return ("OPEN", "(")
        if ch == ")":
            self._pos += 1
            return ("CLOSE", ")")
        if ch == '"':
            return ("STRING", self._read_quoted_string())
        return ("ATOM", self._read_atom())

    def _read_quoted_string(self) -> str:
        """Read a double-quoted string, handling escape sequences."""
        self._pos += 1  # skip opening quote
        result: list[str] = []
        while self._pos < self._length:
            ch = self._text[self._pos]
            if ch == "\\":
                self._pos += 1
                if self._pos < self._length:
                    result.append(self._text[self._pos])
                    self._pos += 1
                continue
            if ch == '"':
                self._pos += 1
                return "".join(result)
            result.append(ch)
            self._pos += 1
        raise ValueError("Unterminated quoted string")

    def _read_atom(self) -> str:
        """Read an unquoted atom (terminated by whitespace, quote or parens)."""
        start = self._pos
        while self._pos < self._length:
            if self._text[self._pos] in ' \t\n\r()"':
                break
            self._pos += 1
        return self._text[start : self._pos]


def parse(text: str) -> SExp:
    """Parse an S-expression string into an SExp tree.

    Raises:
        ValueError: If the input is malformed or has trailing content.
    """
    tokenizer = _Tokenizer(text)
    result = _parse_expr(tokenizer)
    if tokenizer.peek() is not None:
        raise ValueError("Unexpected content after the root expression")
    return result


def _parse_expr(tokenizer: _Tokenizer) -> SExp:
    """Parse a single S-expression from the tokenizer."""
    token = tokenizer.next_token()
    if token is None:
        raise ValueError("Unexpected end of input")

    token_type, token_value = token

    if token_type in ("ATOM", "STRING"):
        return SExp(value=token_value)

    if token_type == "OPEN":
        name_token = tokenizer.next_token()
        if name_token is None:
            raise ValueError("Unexpected end of input, unclosed '('")
        if name_token[0] != "ATOM":
            raise ValueError(f"Expected a node name, got {name_token[1]!r}")

        children: list[SExp] = []
        while True:
            pk = tokenizer.peek()
            if pk is None:
                raise ValueError("Unexpected end of input, unclosed '('")
            if pk == ")":
                tokenizer.next_token()  # consume ')'
                break
            children.append(_parse_expr(tokenizer))

        return SExp(name=name_token[1], children=children)

    raise ValueError("Unexpected ')'")
