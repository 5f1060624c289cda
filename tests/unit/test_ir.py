"""Tests for the expression tree IR: dump format, precedence table, number formatting."""

from __future__ import annotations

import json
import math

import pytest

from climbcalc.core.expression_lang.tree_builder import parse_expr
from climbcalc.core.ir.expressions import (
    PRECEDENCE,
    BinaryOp,
    Leaf,
    Operator,
    dump_tree,
    format_number,
    tree_to_dict,
)


class TestTreeDump:
    """Tree dump uses type/value/left/right and omits absent children."""

    def test_leaf(self) -> None:
        data = Leaf(value=2.0).to_dict()
        assert data == {"type": "number", "value": 2}
        assert isinstance(data["value"], int)

    def test_integral_values_print_without_fraction(self) -> None:
        text = dump_tree(parse_expr("2*1.5"))
        assert '"value": 2\n' in text
        assert '"value": 1.5' in text
        assert "2.0" not in text

    def test_complete_operator(self) -> None:
        data = json.loads(dump_tree(parse_expr("2+3")))
        assert data == {
            "type": "operator",
            "value": "+",
            "left": {"type": "number", "value": 2.0},
            "right": {"type": "number", "value": 3.0},
        }
        assert list(data) == ["type", "value", "left", "right"]

    def test_missing_right_is_omitted(self) -> None:
        assert parse_expr("2+").to_dict() == {
            "type": "operator",
            "value": "+",
            "left": {"type": "number", "value": 2.0},
        }

    def test_missing_left_is_omitted(self) -> None:
        data = parse_expr("^4").to_dict()
        assert "left" not in data
        assert data["right"] == {"type": "number", "value": 4.0}

    def test_nested(self) -> None:
        data = parse_expr("2+3*4").to_dict()
        assert data["right"]["value"] == "*"
        assert data["right"]["right"]["value"] == 4.0

    def test_indent(self) -> None:
        text = dump_tree(Leaf(value=1.0), indent=2)
        assert text.splitlines()[1].startswith('  "type"')

    @pytest.mark.parametrize("source", ["2+3*4", "2+", "^4", "7", "2^3^2-1"])
    @pytest.mark.parametrize("indent", [0, 2, 4])
    def test_layout_matches_json_module(self, source: str, indent: int) -> None:
        tree = parse_expr(source)
        assert dump_tree(tree, indent) == json.dumps(tree_to_dict(tree), indent=indent)

    def test_long_chain(self) -> None:
        tree = parse_expr("+".join(["1"] * 2000))
        text = dump_tree(tree, indent=0)
        assert text.count('"type": "operator"') == 1999
        assert text.count('"type": "number"') == 2000

        data = tree.to_dict()
        depth = 0
        while "left" in data:
            data = data["left"]
            depth += 1
        assert depth == 1999

    def test_str_of_long_chain(self) -> None:
        text = str(parse_expr("-".join(["1"] * 2000)))
        assert text.startswith("(" * 1999 + "1 - 1)")
        assert text.endswith(" - 1)")


class TestPrecedence:
    """Precedence table is fixed and read-only."""

    def test_ranks(self) -> None:
        assert PRECEDENCE[Operator.ADD] == PRECEDENCE[Operator.SUB] == 10
        assert PRECEDENCE[Operator.MUL] == PRECEDENCE[Operator.DIV] == 20
        assert PRECEDENCE[Operator.POW] == 30

    def test_read_only(self) -> None:
        with pytest.raises(TypeError):
            PRECEDENCE[Operator.ADD] = 99  # type: ignore[index]


class TestFormatNumber:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (14.0, "14"),
            (2.5, "2.5"),
            (-3.0, "-3"),
            (math.inf, "Infinity"),
            (-math.inf, "-Infinity"),
            (math.nan, "NaN"),
            (0.0, "0"),
            (-0.0, "-0"),
            (1e20, "100000000000000000000"),
            (1e21, "1e+21"),
            (1e300, "1e+300"),
            (-2.5e300, "-2.5e+300"),
            (1e-7, "1e-7"),
            (1.5e-10, "1.5e-10"),
            (0.1, "0.1"),
        ],
    )
    def test_format(self, value: float, expected: str) -> None:
        assert format_number(value) == expected

    def test_str_of_tree(self) -> None:
        assert str(BinaryOp(symbol=Operator.SUB, left=Leaf(value=1.5))) == "(1.5 - ?)"
