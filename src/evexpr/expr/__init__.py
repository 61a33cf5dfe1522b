"""Arithmetic expression evaluation with source-positioned errors.

Public API::

    from evexpr.expr import EvalError, evaluate_as_double, report_error
"""

from evexpr.expr.errors import ConfigError, ErrorKind, EvalError
from evexpr.expr.evaluate import (
    evaluate_as_double,
    evaluate_as_float,
    evaluate_as_int32,
    evaluate_as_uint32,
    report_error,
)

__all__ = [
    "ConfigError",
    "ErrorKind",
    "EvalError",
    "evaluate_as_double",
    "evaluate_as_float",
    "evaluate_as_int32",
    "evaluate_as_uint32",
    "report_error",
]
