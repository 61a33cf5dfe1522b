"""evexpr -- lightweight arithmetic expression evaluator."""

__version__ = "1.0.0"

from evexpr.expr import (  # noqa: E402
    ErrorKind,
    EvalError,
    evaluate_as_double,
    evaluate_as_float,
    evaluate_as_int32,
    evaluate_as_uint32,
    report_error,
)

__all__ = [
    "ErrorKind",
    "EvalError",
    "__version__",
    "evaluate_as_double",
    "evaluate_as_float",
    "evaluate_as_int32",
    "evaluate_as_uint32",
    "report_error",
]
