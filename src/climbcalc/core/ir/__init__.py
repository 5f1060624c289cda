"""
Intermediate representation for climbcalc expressions.
"""

from .expressions import (
    PRECEDENCE,
    RIGHT_ASSOCIATIVE,
    BinaryOp,
    Leaf,
    Node,
    Operator,
    dump_tree,
    format_number,
    tree_to_dict,
)

__all__ = [
    "PRECEDENCE",
    "RIGHT_ASSOCIATIVE",
    "BinaryOp",
    "Leaf",
    "Node",
    "Operator",
    "dump_tree",
    "format_number",
    "tree_to_dict",
]
