"""
climbcalc expression language.

Cursor, tokenizer, incremental tree builder, and evaluator for single-line
arithmetic expressions.

Usage:
    from climbcalc.core.expression_lang import evaluate, parse_expr

    tree = parse_expr("2 + 3 * 4")
    result = evaluate(tree)
    # result == 14.0
"""

from climbcalc.core.expression_lang.evaluator import calculate, evaluate
from climbcalc.core.expression_lang.tokenizer import tokenize
from climbcalc.core.expression_lang.tree_builder import parse_expr

__all__ = ["calculate", "evaluate", "parse_expr", "tokenize"]
