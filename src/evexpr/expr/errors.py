"""Error record for expression evaluation.

Evaluation never raises.  Instead the caller passes an :class:`EvalError`
in and inspects it afterwards::

    err = EvalError()
    value = evaluate_as_double("1 +", err)
    if err:
        print(err.message, err.begin)
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ErrorKind(str, Enum):
    EMPTY_EXPRESSION = "empty_expression"
    BAD_NUMERICAL_EXPRESSION = "bad_numerical_expression"
    UNKNOWN_FUNCTION = "unknown_function"
    EXPECTED_CHAR = "expected_char"
    FLOAT_OUT_OF_RANGE = "float_out_of_range"
    INT32_OUT_OF_RANGE = "int32_out_of_range"
    UINT32_OUT_OF_RANGE = "uint32_out_of_range"
    TRAILING_GARBAGE = "trailing_garbage"
    NESTING_TOO_DEEP = "nesting_too_deep"


_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.EMPTY_EXPRESSION: "Empty expression",
    ErrorKind.BAD_NUMERICAL_EXPRESSION: "Bad numerical expression",
    ErrorKind.UNKNOWN_FUNCTION: "Unknown function",
    ErrorKind.EXPECTED_CHAR: "Expected '{expected}'",
    ErrorKind.FLOAT_OUT_OF_RANGE: "Float out of range",
    ErrorKind.INT32_OUT_OF_RANGE: "Signed integer out of range",
    ErrorKind.UINT32_OUT_OF_RANGE: "Unsigned integer out of range",
    ErrorKind.TRAILING_GARBAGE: "Garbage at end of expression",
    ErrorKind.NESTING_TOO_DEEP: "Expression nested too deeply",
}


class EvalError(BaseModel):
    """First error recorded while evaluating an expression.

    Attributes:
        kind: What went wrong, or ``None`` if nothing has been recorded.
        expected: The missing character for ``EXPECTED_CHAR`` errors.
        text: The expression the offsets refer to.
        begin: Offset of the start of the error location.
        end: Offset of the end of the error location.  Equal to *begin*
            when the error is a cursor rather than a range.
    """

    kind: ErrorKind | None = None
    expected: str | None = None
    text: str = ""
    begin: int = 0
    end: int = 0

    def __bool__(self) -> bool:
        return self.kind is not None

    @property
    def message(self) -> str | None:
        if self.kind is None:
            return None
        return _MESSAGES[self.kind].format(expected=self.expected)

    @property
    def is_range(self) -> bool:
        return self.end != self.begin

    @property
    def range_text(self) -> str:
        """The slice of *text* between *begin* and *end*."""
        return self.text[self.begin:self.end]

    def record(
        self,
        kind: ErrorKind,
        text: str,
        begin: int,
        end: int,
        *,
        expected: str | None = None,
    ) -> bool:
        """Store an error unless one is already present.

        Returns:
            True if this call stored the error.
        """
        if self.kind is not None:
            return False
        self.kind = kind
        self.expected = expected
        self.text = text
        self.begin = begin
        self.end = end
        return True

    def describe(self) -> str:
        """Render as ``"<message>: <location>"``.

        A range renders the covered text; a point cursor renders the rest
        of the input from the cursor on.
        """
        if self.kind is None:
            return ""
        if self.is_range:
            return f"{self.message}: {self.range_text}"
        return f"{self.message}: {self.text[self.begin:]}"


class ConfigError(Exception):
    """Invalid evexpr configuration."""

    def __init__(self, message: str, key: str | None = None) -> None:
        self.key = key
        full = f"Configuration error: {message}"
        if key is not None:
            full += f" (key {key!r})"
        super().__init__(full)
