"""Recursive-descent parser that computes the value while it parses.

Grammar::

    Expression   -> Term [+|- Term]*
    Term         -> Factor [*|/|% Factor]*
    Factor       -> SignedNumber [^ Factor]
    SignedNumber -> + SignedNumber
                  | - SignedNumber
                  | Number
    Number       -> Constant
                  | Function ( Expression )
                  | Function ( Expression , Expression )
                  | ( Expression )
                  | {. | digit} PositiveConstant

``^`` is right-associative.  Unary minus binds tighter than ``^``, so
``-2^2`` is ``(-2)^2 == 4``.

There is no AST; each level returns a float.  Errors are recorded on the
context and parsing carries on with 0.0 in place of the failed operand.
"""

from __future__ import annotations

from evexpr.expr.errors import ErrorKind
from evexpr.expr.functions import (
    floored_mod,
    ieee_div,
    ieee_pow,
    lookup_binary,
    lookup_constant,
    lookup_unary,
)
from evexpr.expr.literals import read_identifier, read_positive_constant
from evexpr.expr.scanner import DIGITS, LETTERS, EvalContext, expect_char, skip_whitespace


def eval_expression(ctx: EvalContext) -> float:
    result = eval_term(ctx)

    while True:
        skip_whitespace(ctx)
        c = ctx.peek()
        if c == "+":
            ctx.pos += 1
            result += eval_term(ctx)
        elif c == "-":
            ctx.pos += 1
            result -= eval_term(ctx)
        else:
            return result


def eval_term(ctx: EvalContext) -> float:
    result = eval_factor(ctx)

    while True:
        skip_whitespace(ctx)
        c = ctx.peek()
        if c == "*":
            ctx.pos += 1
            result *= eval_factor(ctx)
        elif c == "/":
            ctx.pos += 1
            result = ieee_div(result, eval_factor(ctx))
        elif c == "%":
            ctx.pos += 1
            result = floored_mod(result, eval_factor(ctx))
        else:
            return result


def eval_factor(ctx: EvalContext) -> float:
    result = eval_signed_number(ctx)

    skip_whitespace(ctx)
    if ctx.peek() == "^":
        ctx.pos += 1
        return ieee_pow(result, eval_factor(ctx))

    return result


def eval_signed_number(ctx: EvalContext) -> float:
    skip_whitespace(ctx)

    c = ctx.peek()
    if c == "-":
        ctx.pos += 1
        return -eval_signed_number(ctx)
    if c == "+":
        ctx.pos += 1
        return eval_signed_number(ctx)

    return eval_number(ctx)


def eval_number(ctx: EvalContext) -> float:
    skip_whitespace(ctx)

    c = ctx.peek()
    if c in DIGITS or c == ".":
        return read_positive_constant(ctx)

    if c == "(":
        return eval_parens(ctx)

    if c and c in LETTERS:
        start = ctx.pos
        token = read_identifier(ctx)

        value = lookup_constant(token)
        if value is not None:
            return value

        unary = lookup_unary(token)
        if unary is not None:
            return unary(eval_parens(ctx))

        binary = lookup_binary(token)
        if binary is not None:
            x, y = eval_parens2(ctx)
            return binary(x, y)

        # roll back so the token is still unconsumed for the caller
        ctx.pos = start
        ctx.fail(ErrorKind.UNKNOWN_FUNCTION, len(token))
        return 0.0

    ctx.fail(ErrorKind.BAD_NUMERICAL_EXPRESSION)
    return 0.0


def eval_parens(ctx: EvalContext) -> float:
    expect_char(ctx, "(")
    result = eval_expression(ctx)
    expect_char(ctx, ")")
    return result


def eval_parens2(ctx: EvalContext) -> tuple[float, float]:
    expect_char(ctx, "(")
    arg1 = eval_expression(ctx)
    expect_char(ctx, ",")
    arg2 = eval_expression(ctx)
    expect_char(ctx, ")")
    return arg1, arg2
