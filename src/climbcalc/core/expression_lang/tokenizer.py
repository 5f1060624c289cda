"""
Tokenizer for climbcalc expressions.

Pulls characters from a CharacterCursor and produces tokens on demand.
Whitespace is skipped; a bad character is reported only when the token
containing it is requested.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import StrEnum, auto

from climbcalc.core.errors import LexError
from climbcalc.core.expression_lang.cursor import CharacterCursor
from climbcalc.core.ir.expressions import Operator

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types for the expression language."""

    NUMBER = auto()
    OPERATOR = auto()


class Token:
    """A single token: a number or an operator symbol."""

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: float | Operator, pos: int) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


_DIGITS = frozenset("0123456789")
_WHITESPACE = frozenset(" \t\n\r")
_OPERATORS: dict[str, Operator] = {op.value: op for op in Operator}


class Lexer:
    """Single-pass token source over a cursor.

    ``next()`` returns the next token or ``None`` once input is exhausted.
    Iterating the lexer yields the same tokens and stops at the end.
    """

    def __init__(self, cursor: CharacterCursor) -> None:
        self.cursor = cursor

    @property
    def source(self) -> str:
        return self.cursor.source

    def next(self) -> Token | None:
        while not self.cursor.at_end():
            ch = self.cursor.advance()
            assert ch is not None
            pos = self.cursor.position

            if ch in _OPERATORS:
                tok = Token(TokenKind.OPERATOR, _OPERATORS[ch], pos)
            elif ch in _DIGITS:
                tok = Token(TokenKind.NUMBER, self._read_number(ch), pos)
            elif ch in _WHITESPACE:
                continue
            else:
                raise LexError(ch, pos, self.source)

            logger.debug("Lexed %r", tok)
            return tok
        return None

    def _read_number(self, first: str) -> float:
        """Read digits and at most one '.' following ``first``.

        A trailing '.' with no digits after it is accepted ("5." is 5.0).
        """
        chars = [first]
        has_dot = False
        while not self.cursor.at_end():
            nxt = self.cursor.peek()
            if nxt in _DIGITS:
                chars.append(nxt)
                self.cursor.advance()
            elif nxt == ".":
                if has_dot:
                    raise LexError(".", self.cursor.position + 1, self.source)
                chars.append(nxt)
                self.cursor.advance()
                has_dot = True
            else:
                break
        return float("".join(chars))

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        tok = self.next()
        if tok is None:
            raise StopIteration
        return tok


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens."""
    return list(Lexer(CharacterCursor(source)))
