"""Top-level entry points: evaluate a string and coerce the result.

Each accessor always returns a number.  Whether that number means anything
is decided by the :class:`EvalError` passed in, never by the return value.
"""

from __future__ import annotations

import logging
import math
import struct
import sys
from typing import IO

from evexpr.expr.errors import ErrorKind, EvalError
from evexpr.expr.grammar import eval_expression
from evexpr.expr.scanner import EvalContext

logger = logging.getLogger(__name__)

FLT_MAX = 3.4028234663852886e38
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
UINT32_MAX = 2**32 - 1


def _evaluate(expr: str, error: EvalError | None) -> tuple[EvalContext, float]:
    ctx = EvalContext(expr, error)

    if not expr:
        ctx.fail(ErrorKind.EMPTY_EXPRESSION)

    try:
        result = eval_expression(ctx)
    except RecursionError:
        ctx.fail(ErrorKind.NESTING_TOO_DEEP)
        result = 0.0

    logger.debug("evaluated %r -> %r (stopped at %d/%d)", expr, result, ctx.pos, len(expr))
    return ctx, result


def _check_end(ctx: EvalContext) -> None:
    if not ctx.at_end():
        ctx.fail(ErrorKind.TRAILING_GARBAGE, ctx.remaining())


def _saturate(x: float, lo: int, hi: int) -> int:
    """Truncate toward zero and clamp to ``[lo, hi]``; nan becomes 0."""
    if math.isnan(x):
        return 0
    if x <= lo:
        return lo
    if x >= hi:
        return hi
    return int(x)


def _to_single(x: float) -> float:
    """Round to the nearest IEEE single, overflowing to an infinity."""
    if x > FLT_MAX or x < -FLT_MAX:
        return math.copysign(math.inf, x)
    try:
        return struct.unpack("f", struct.pack("f", x))[0]
    except OverflowError:
        return math.copysign(math.inf, x)


def evaluate_as_double(expr: str, error: EvalError | None = None) -> float:
    """Evaluate *expr* as a double.

    Args:
        expr: Expression text, e.g. ``"1 + 2 * 3"``.
        error: Receives the first error found, if any.

    Returns:
        The computed value.  Meaningless if *error* was set.
    """
    ctx, result = _evaluate(expr, error)
    _check_end(ctx)
    return result


def evaluate_as_float(expr: str, error: EvalError | None = None) -> float:
    """Evaluate *expr* and round the result to single precision."""
    ctx, result = _evaluate(expr, error)

    if result < -FLT_MAX or result > FLT_MAX:
        ctx.fail(ErrorKind.FLOAT_OUT_OF_RANGE)

    _check_end(ctx)
    return _to_single(result)


def evaluate_as_int32(expr: str, error: EvalError | None = None) -> int:
    """Evaluate *expr* as a signed 32-bit integer (truncating)."""
    ctx, result = _evaluate(expr, error)

    if result < INT32_MIN or result > INT32_MAX:
        ctx.fail(ErrorKind.INT32_OUT_OF_RANGE)

    _check_end(ctx)
    return _saturate(result, INT32_MIN, INT32_MAX)


def evaluate_as_uint32(expr: str, error: EvalError | None = None) -> int:
    """Evaluate *expr* as an unsigned 32-bit integer (truncating)."""
    ctx, result = _evaluate(expr, error)

    if result < 0 or result > UINT32_MAX:
        ctx.fail(ErrorKind.UINT32_OUT_OF_RANGE)

    _check_end(ctx)
    return _saturate(result, 0, UINT32_MAX)


def report_error(error: EvalError, stream: IO[str] | None = None) -> bool:
    """Print *error* as ``"<message>: <location>"`` if one was recorded.

    Also emits an ``eval_error`` event to the configured event log.

    Returns:
        True if there was an error.
    """
    if not error:
        return False

    from evexpr.logging.events import EventType, emit_warning

    print(error.describe(), file=stream if stream is not None else sys.stderr)
    emit_warning(
        EventType.eval_error,
        error.message or "",
        {
            "expression": error.text,
            "begin": error.begin,
            "end": error.end,
        },
        error_code=error.kind.value if error.kind else None,
    )
    return True
