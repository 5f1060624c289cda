"""
Expression tree types for climbcalc.

The tree is a tagged union of two node kinds:
- Leaf: a number
- BinaryOp: an operator with a left and a right operand

Operands are optional on BinaryOp only so that an unfinished tree (for
example the one built from "2+") can be represented and rejected at
evaluation time. Nodes handed out by the tree builder are frozen.
"""

from __future__ import annotations

import json
import math
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class Operator(StrEnum):
    """Binary operators understood by the calculator."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


PRECEDENCE: MappingProxyType[Operator, int] = MappingProxyType(
    {
        Operator.ADD: 10,
        Operator.SUB: 10,
        Operator.MUL: 20,
        Operator.DIV: 20,
        Operator.POW: 30,
    }
)

# Operators whose ties climb instead of enclose
RIGHT_ASSOCIATIVE: frozenset[Operator] = frozenset({Operator.POW})

# Integral values at or above this magnitude print in exponent form
_EXPONENT_THRESHOLD = 1e21


def format_number(value: float) -> str:
    """Render a number the way the calculator prints results."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    if value.is_integer() and abs(value) < _EXPONENT_THRESHOLD:
        return str(int(value))
    text = repr(value)
    if "e" in text:
        # 1e-07 -> 1e-7
        mantissa, exponent = text.split("e")
        return f"{mantissa}e{exponent[0]}{exponent[1:].lstrip('0')}"
    return text


def _json_number(value: float) -> int | float:
    if math.isfinite(value) and value.is_integer() and abs(value) < _EXPONENT_THRESHOLD:
        return int(value)
    return value


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Leaf(BaseModel):
    """A numeric literal."""

    kind: Literal["number"] = Field(default="number", serialization_alias="type")
    value: float = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return format_number(self.value)

    def to_dict(self) -> dict[str, Any]:
        return tree_to_dict(self)


class BinaryOp(BaseModel):
    """Binary operation: left symbol right."""

    kind: Literal["operator"] = Field(default="operator", serialization_alias="type")
    symbol: Operator = Field(serialization_alias="value")
    left: Node | None = None
    right: Node | None = None

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        parts: list[str] = []
        stack: list[Node | str | None] = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
            elif item is None:
                parts.append("?")
            elif isinstance(item, Leaf):
                parts.append(str(item))
            else:
                parts.append("(")
                stack.extend([")", item.right, f" {item.symbol.value} ", item.left])
        return "".join(parts)

    @property
    def is_complete(self) -> bool:
        """Both operands present (children are not inspected)."""
        return self.left is not None and self.right is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the tree dump shape; absent operands are omitted."""
        return tree_to_dict(self)


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Node = Leaf | BinaryOp

# Rebuild models for recursive forward references
BinaryOp.model_rebuild()


# ---------------------------------------------------------------------------
# Tree dump
# ---------------------------------------------------------------------------
#
# Enclosing operators make trees one level deeper per operator, so these
# walks keep an explicit stack instead of recursing.


def _scalar(node: Node) -> tuple[str, int | float | str]:
    if isinstance(node, Leaf):
        return node.kind, _json_number(node.value)
    return node.kind, node.symbol.value


def tree_to_dict(node: Node) -> dict[str, Any]:
    """Convert a tree to nested dicts with keys type, value, left, right."""
    root: dict[str, Any] = {}
    stack: list[tuple[Node, dict[str, Any]]] = [(node, root)]
    while stack:
        current, target = stack.pop()
        target["type"], target["value"] = _scalar(current)
        if isinstance(current, BinaryOp):
            for name in ("left", "right"):
                child = getattr(current, name)
                if child is not None:
                    target[name] = {}
                    stack.append((child, target[name]))
    return root


def dump_tree(node: Node, indent: int = 4) -> str:
    """Render a tree as indented JSON with keys type, value, left, right.

    The layout matches ``json.dumps(tree_to_dict(node), indent=indent)``;
    absent operands are omitted.
    """
    pad = " " * indent
    parts: list[str] = []
    stack: list[tuple[Node, int] | str] = [(node, 0)]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        current, depth = item
        inner = "\n" + pad * (depth + 1)
        kind, value = _scalar(current)
        parts.append(f'{{{inner}"type": {json.dumps(kind)},{inner}"value": {json.dumps(value)}')

        stack.append("\n" + pad * depth + "}")
        if isinstance(current, BinaryOp):
            # Pushed in reverse so left is written before right
            for name in ("right", "left"):
                child = getattr(current, name)
                if child is not None:
                    stack.append((child, depth + 1))
                    stack.append(f',{inner}"{name}": ')
    return "".join(parts)
