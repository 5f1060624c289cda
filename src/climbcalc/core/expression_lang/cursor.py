"""
Character cursor over a single line of expression text.
"""

from __future__ import annotations


class CharacterCursor:
    """Forward-only cursor with one character of lookahead.

    The position starts one before the first character, so the first
    ``advance()`` lands on index 0. Reading past the end yields ``None``.
    """

    __slots__ = ("source", "position")

    def __init__(self, source: str) -> None:
        self.source = source
        self.position = -1

    @property
    def current(self) -> str | None:
        """The character under the cursor, or None before start / past end."""
        if 0 <= self.position < len(self.source):
            return self.source[self.position]
        return None

    def advance(self) -> str | None:
        self.position += 1
        return self.current

    def peek(self) -> str | None:
        idx = self.position + 1
        if idx < len(self.source):
            return self.source[idx]
        return None

    def at_end(self) -> bool:
        return self.peek() is None

    def __repr__(self) -> str:
        return f"CharacterCursor({self.source!r}, position={self.position})"
