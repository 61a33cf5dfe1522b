"""Evaluation context: cursor over the input text and error recording."""

from __future__ import annotations

from evexpr.expr.errors import ErrorKind, EvalError

# C locale isspace()
WHITESPACE = frozenset(" \t\n\v\f\r")
DIGITS = frozenset("0123456789")
LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
IDENTIFIER_CHARS = LETTERS | DIGITS | {"_"}


class EvalContext:
    """State for one top-level evaluation.

    ``pos`` only moves forward, except for the explicit rollback done by the
    Number level when an identifier turns out to be unknown.
    """

    __slots__ = ("text", "pos", "error")

    def __init__(self, text: str, error: EvalError | None = None) -> None:
        self.text = text
        self.pos = 0
        self.error = error

    def peek(self, offset: int = 0) -> str:
        """Return the character at the cursor (plus *offset*), or ``""`` at the end."""
        i = self.pos + offset
        if i < len(self.text):
            return self.text[i]
        return ""

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def remaining(self) -> int:
        return len(self.text) - self.pos

    def fail(self, kind: ErrorKind, length: int = 0, *, expected: str | None = None) -> None:
        """Record an error starting at the cursor.

        Only the first error of an evaluation is kept.
        """
        if self.error is None:
            return
        self.error.record(kind, self.text, self.pos, self.pos + length, expected=expected)


def skip_whitespace(ctx: EvalContext) -> None:
    text = ctx.text
    n = len(text)
    while ctx.pos < n and text[ctx.pos] in WHITESPACE:
        ctx.pos += 1


def expect_char(ctx: EvalContext, c: str) -> None:
    """Consume *c*, or record ``Expected 'c'`` and leave the cursor alone."""
    skip_whitespace(ctx)
    if ctx.peek() != c:
        ctx.fail(ErrorKind.EXPECTED_CHAR, 1, expected=c)
        return
    ctx.pos += 1
