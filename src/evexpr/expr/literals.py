"""Numeric literal and identifier readers.

Literals follow the C library parsers the evaluator has always used:

- ``0x`` (lowercase) prefix: ``strtoul`` integer, kept to 32 bits.
- anything else: ``strtod``, which also accepts ``0X`` hex floats.

Signs are never consumed here; SignedNumber handles them.
"""

from __future__ import annotations

import math
import re

from evexpr.expr.errors import ErrorKind
from evexpr.expr.scanner import IDENTIFIER_CHARS, EvalContext

_DECIMAL_RE = re.compile(r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT_RE = re.compile(
    r"0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?[0-9]+)?"
)
_HEX_INT_RE = re.compile(r"0x([0-9a-fA-F]+)")

_ULONG_MAX = 2**64 - 1
_UINT32_MASK = 0xFFFFFFFF


def read_positive_constant(ctx: EvalContext) -> float:
    """Read an unsigned numeric literal at the cursor and advance past it."""
    text = ctx.text
    if ctx.peek() == "0" and ctx.peek(1) == "x":
        m = _HEX_INT_RE.match(text, ctx.pos)
        if m is None:
            # strtoul stops after the "0" when no hex digit follows
            ctx.pos += 1
            return 0.0
        value = int(m.group(1), 16)
        if value > _ULONG_MAX:
            value = _ULONG_MAX
        ctx.pos = m.end()
        return float(value & _UINT32_MASK)

    if ctx.peek() == "0" and ctx.peek(1) == "X":
        m = _HEX_FLOAT_RE.match(text, ctx.pos)
        if m is not None:
            ctx.pos = m.end()
            try:
                return float.fromhex(m.group(0))
            except OverflowError:
                return math.inf

    m = _DECIMAL_RE.match(text, ctx.pos)
    if m is None:
        ctx.fail(ErrorKind.BAD_NUMERICAL_EXPRESSION)
        return 0.0
    ctx.pos = m.end()
    return float(m.group(0))


def read_identifier(ctx: EvalContext) -> str:
    """Consume the maximal run of identifier characters and return it."""
    start = ctx.pos
    text = ctx.text
    n = len(text)
    while ctx.pos < n and text[ctx.pos] in IDENTIFIER_CHARS:
        ctx.pos += 1
    return text[start:ctx.pos]
