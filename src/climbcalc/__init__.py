"""
climbcalc - a single-line arithmetic calculator built on an incremental
precedence-climbing expression tree.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import (
    CalcError,
    EmptyExpression,
    IncompleteTree,
    LexError,
    MalformedExpression,
    UnknownOperator,
)
from .core.expression_lang import calculate, evaluate, parse_expr, tokenize

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "calculate",
    "evaluate",
    "parse_expr",
    "tokenize",
    "CalcError",
    "EmptyExpression",
    "IncompleteTree",
    "LexError",
    "MalformedExpression",
    "UnknownOperator",
]
