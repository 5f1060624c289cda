"""
Incremental tree builder for climbcalc expressions.

This is not a recursive descent or shunting-yard parser. Each token is
spliced into a right-leaning tree as it arrives:

    operator  -> climb under the root when it binds tighter than the root,
                 otherwise enclose the whole tree as the new root
    number    -> fill the root's right slot, or the right slot of the
                 operator that just climbed under the root

Ties enclose, except for right-associative operators (^), which climb.
Climbing only ever goes one level below the root, so longer mixed chains
keep the shape that rule produces, e.g. "2+3*4^5" is 2 + ((3*4)^5).
"""

from __future__ import annotations

import logging

from climbcalc.core.errors import EmptyExpression, MalformedExpression
from climbcalc.core.expression_lang.cursor import CharacterCursor
from climbcalc.core.expression_lang.tokenizer import Lexer, Token, TokenKind
from climbcalc.core.ir.expressions import (
    PRECEDENCE,
    RIGHT_ASSOCIATIVE,
    BinaryOp,
    Leaf,
    Node,
    Operator,
)

logger = logging.getLogger(__name__)


class _Draft:
    """Mutable node used while the tree is under construction."""

    __slots__ = ("symbol", "value", "left", "right")

    def __init__(self, symbol: Operator | None = None, value: float = 0.0) -> None:
        self.symbol = symbol
        self.value = value
        self.left: _Draft | None = None
        self.right: _Draft | None = None

    @classmethod
    def from_token(cls, tok: Token) -> _Draft:
        if tok.kind == TokenKind.OPERATOR:
            assert isinstance(tok.value, Operator)
            return cls(symbol=tok.value)
        assert isinstance(tok.value, float)
        return cls(value=tok.value)

    @property
    def is_operator(self) -> bool:
        return self.symbol is not None

    def seal(self) -> Node:
        """Freeze this draft and its children into IR nodes.

        Walks the drafts in post-order with an explicit stack; long
        chains of operators make the tree as deep as the input is long.
        """
        sealed: dict[int, Node] = {}
        stack: list[tuple[_Draft, bool]] = [(self, False)]
        while stack:
            draft, children_done = stack.pop()
            if draft.symbol is None:
                sealed[id(draft)] = Leaf(value=draft.value)
            elif children_done:
                sealed[id(draft)] = BinaryOp(
                    symbol=draft.symbol,
                    left=sealed.pop(id(draft.left)) if draft.left is not None else None,
                    right=sealed.pop(id(draft.right)) if draft.right is not None else None,
                )
            else:
                stack.append((draft, True))
                for child in (draft.right, draft.left):
                    if child is not None:
                        stack.append((child, False))
        return sealed[id(self)]


def _climbs(new: Operator, current: Operator) -> bool:
    """Whether ``new`` attaches below a root holding ``current``."""
    if PRECEDENCE[new] > PRECEDENCE[current]:
        return True
    return new == current and new in RIGHT_ASSOCIATIVE


class TreeBuilder:
    """Builds one expression tree from a lexer's token sequence."""

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer

    def build(self) -> Node:
        """Consume every token and return the finished tree.

        A leading operator is accepted as a childless root; the evaluator
        rejects the resulting tree. The same holds for a trailing operator.

        Raises:
            LexError: If the lexer hits a bad character.
            EmptyExpression: If there are no tokens at all.
            MalformedExpression: If two operators or two operands meet.
        """
        first = self.lexer.next()
        if first is None:
            raise EmptyExpression()

        root = _Draft.from_token(first)
        while (tok := self.lexer.next()) is not None:
            draft = _Draft.from_token(tok)
            if tok.kind == TokenKind.OPERATOR:
                root = self._insert_operator(root, draft, tok)
            else:
                self._insert_operand(root, draft, tok)

        return root.seal()

    def _insert_operator(self, root: _Draft, draft: _Draft, tok: Token) -> _Draft:
        """Splice an operator into the tree and return the (possibly new) root."""
        assert draft.symbol is not None
        if root.symbol is not None:
            if root.right is None:
                raise MalformedExpression(tok.pos, self.lexer.source)
            if _climbs(draft.symbol, root.symbol):
                logger.debug("Climb: %s under %s at pos %d", draft.symbol, root.symbol, tok.pos)
                draft.left = root.right
                root.right = draft
                return root

        logger.debug("Enclose: %s becomes root at pos %d", draft.symbol, tok.pos)
        draft.left = root
        return draft

    def _insert_operand(self, root: _Draft, draft: _Draft, tok: Token) -> None:
        if root.is_operator:
            if root.right is None:
                root.right = draft
                return
            if root.right.is_operator and root.right.right is None:
                root.right.right = draft
                return
        raise MalformedExpression(tok.pos, self.lexer.source)


def parse_expr(source: str) -> Node:
    """Parse an expression string into a tree.

    Args:
        source: Expression string (e.g., "2 + 3 * 4")

    Returns:
        The root node. It may still hold an operator with a missing operand.

    Raises:
        LexError: If tokenization fails.
        EmptyExpression: If the source has no tokens.
        MalformedExpression: If the token order is invalid.
    """
    return TreeBuilder(Lexer(CharacterCursor(source))).build()
