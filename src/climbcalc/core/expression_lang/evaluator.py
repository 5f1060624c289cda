"""
Expression evaluator for climbcalc.

Walks a finished tree and computes its value. Pure evaluation: the tree is
only read, so evaluating it again gives the same number. Arithmetic follows
IEEE-754 float semantics; division by zero and power overflow yield
infinities or NaN instead of raising.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from climbcalc.core.errors import IncompleteTree, UnknownOperator
from climbcalc.core.expression_lang.tree_builder import parse_expr
from climbcalc.core.ir.expressions import BinaryOp, Leaf, Node, Operator

logger = logging.getLogger(__name__)


def _divide(left: float, right: float) -> float:
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        # Signed zero in the divisor decides the sign of the infinity
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _is_odd_integer(value: float) -> bool:
    return value.is_integer() and value % 2 == 1


def _power(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        # Zero to a negative power is a pole, everything else is a domain error
        if base == 0 and exponent < 0:
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        return math.nan


_OPERATIONS: dict[Operator, Callable[[float, float], float]] = {
    Operator.ADD: lambda a, b: a + b,
    Operator.SUB: lambda a, b: a - b,
    Operator.MUL: lambda a, b: a * b,
    Operator.DIV: _divide,
    Operator.POW: _power,
}


def evaluate(node: Node) -> float:
    """Evaluate an expression tree.

    The tree is walked in post-order with an explicit stack, so chains of
    thousands of operators evaluate without hitting the recursion limit.

    Args:
        node: Root of a tree produced by the tree builder.

    Returns:
        The computed value.

    Raises:
        IncompleteTree: If an operator node is missing an operand.
        UnknownOperator: If an operator node has no matching operation.
    """
    values: list[float] = []
    stack: list[tuple[Node, bool]] = [(node, False)]
    while stack:
        current, operands_ready = stack.pop()
        if isinstance(current, Leaf):
            values.append(current.value)
        elif isinstance(current, BinaryOp):
            if operands_ready:
                right = values.pop()
                left = values.pop()
                result = _OPERATIONS[current.symbol](left, right)
                logger.debug("Evaluated %s %s %s = %s", left, current.symbol, right, result)
                values.append(result)
                continue
            _check_binary(current)
            stack.append((current, True))
            stack.append((current.right, False))
            stack.append((current.left, False))
        else:
            raise UnknownOperator(type(current).__name__)
    return values.pop()


def _check_binary(node: BinaryOp) -> None:
    if not node.is_complete:
        raise IncompleteTree(str(node.symbol), "left" if node.left is None else "right")
    if node.symbol not in _OPERATIONS:
        raise UnknownOperator(str(node.symbol))


def calculate(source: str) -> float:
    """Parse and evaluate an expression string in one step."""
    return evaluate(parse_expr(source))
