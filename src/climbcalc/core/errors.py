"""
Error types for climbcalc lexing, tree building, and evaluation.

Every failure is terminal: the first error aborts the whole evaluation.
"""

from dataclasses import dataclass
from typing import Optional


class CalcError(Exception):
    """Base exception for all climbcalc errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message}\n{self.context.format()}"
        return self.message


class LexError(CalcError):
    """
    Raised when an input character cannot start or continue a token.

    Examples:
    - Letters or punctuation: "2 + x"
    - A second decimal point inside one number: "5.2.3"
    - A leading decimal point: ".5"
    """

    def __init__(self, char: str, offset: int, source: str | None = None):
        self.char = char
        self.offset = offset
        context = ErrorContext(source=source, offset=offset) if source is not None else None
        super().__init__(f"Unexpected character {char!r} at position {offset}", context)


class EmptyExpression(CalcError):
    """Raised when the input holds no tokens at all."""

    def __init__(self) -> None:
        super().__init__("Expression is empty")


class MalformedExpression(CalcError):
    """
    Raised when two operators or two operands appear back to back.

    Examples:
    - "2 3"
    - "2 + * 3"
    - "2 + 3 4"
    """

    def __init__(self, offset: int, source: str | None = None):
        self.offset = offset
        context = ErrorContext(source=source, offset=offset) if source is not None else None
        super().__init__(f"Invalid format at position {offset}", context)


class IncompleteTree(CalcError):
    """Raised when evaluation reaches an operator node missing a child."""

    def __init__(self, symbol: str, missing: str):
        self.symbol = symbol
        self.missing = missing
        super().__init__(f"Operator {symbol!r} is missing its {missing} operand")


class UnknownOperator(CalcError):
    """Raised when an operator node carries a symbol with no operation."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Invalid operator: {symbol!r}")


class ConfigError(CalcError):
    """Raised when a climbcalc.toml file cannot be read or is invalid."""

    pass


@dataclass
class ErrorContext:
    """
    Source location for an error inside a single-line expression.

    Attributes:
        source: The full expression text
        offset: Character offset of the error (0-indexed)
    """

    source: str
    offset: int

    def format(self) -> str:
        """
        Format the context as a column marker plus a caret snippet.

        Returns:
            Formatted string like:
                col 4
                   | 5.2.3
                   |    ^
        """
        lines = [f"col {self.offset + 1}", f"   | {self.source}"]
        if 0 <= self.offset <= len(self.source):
            lines.append("   | " + " " * self.offset + "^")
        return "\n".join(lines)
