"""Named constants and math functions available to expressions.

Every function returns what the C math library would: domain errors give
nan, poles and overflow give an infinity.  Python's ``math`` module raises
instead, so each entry is wrapped before it is registered.
"""

from __future__ import annotations

import functools
import math
from typing import Callable

# Fixed literal rather than math.pi so results match other builds bit for bit.
PI = 3.14159265358979323846

UnaryFn = Callable[[float], float]
BinaryFn = Callable[[float, float], float]

_CONSTANTS: dict[str, float] = {
    "pi": PI,
    "e": math.exp(1.0),
}
_UNARY_FUNCTIONS: dict[str, UnaryFn] = {}
_BINARY_FUNCTIONS: dict[str, BinaryFn] = {}


def radians_from_degrees(degs: float) -> float:
    return degs * (PI / 180)


def degrees_from_radians(rads: float) -> float:
    return rads * (180 / PI)


# ---------------------------------------------------------------------------
# IEEE-754 arithmetic
# ---------------------------------------------------------------------------


def _is_odd_integer(y: float) -> bool:
    return math.isfinite(y) and y == math.floor(y) and math.fmod(y, 2.0) != 0.0


def ieee_div(a: float, b: float) -> float:
    """``a / b`` with IEEE semantics for a zero divisor."""
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def ieee_floor(x: float) -> float:
    if not math.isfinite(x):
        return x
    return float(math.floor(x))


def ieee_ceil(x: float) -> float:
    if not math.isfinite(x):
        return x
    return float(math.ceil(x))


def ieee_pow(x: float, y: float) -> float:
    """``pow(x, y)`` as C99 defines it, including poles and overflow."""
    try:
        return math.pow(x, y)
    except OverflowError:
        if x < 0 and _is_odd_integer(y):
            return -math.inf
        return math.inf
    except ValueError:
        if x == 0 and y < 0:
            if _is_odd_integer(y):
                return math.copysign(math.inf, x)
            return math.inf
        return math.nan


def floored_mod(x: float, m: float) -> float:
    """``x - floor(x / m) * m``: the result takes the sign of *m*."""
    return x - ieee_floor(ieee_div(x, m)) * m


def _ieee(fn: UnaryFn) -> UnaryFn:
    @functools.wraps(fn)
    def wrapper(x: float) -> float:
        try:
            return fn(x)
        except ValueError:
            return math.nan
        except OverflowError:
            return math.inf

    return wrapper


def _log(x: float) -> float:
    if x == 0:
        return -math.inf
    return math.log(x)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def register_unary(name: str) -> Callable[[UnaryFn], UnaryFn]:
    """Decorator that registers a one-argument function by name."""

    def decorator(fn: UnaryFn) -> UnaryFn:
        _UNARY_FUNCTIONS[name] = _ieee(fn)
        return fn

    return decorator


def register_binary(name: str) -> Callable[[BinaryFn], BinaryFn]:
    """Decorator that registers a two-argument function by name."""

    def decorator(fn: BinaryFn) -> BinaryFn:
        _BINARY_FUNCTIONS[name] = fn
        return fn

    return decorator


for _name, _fn in (
    ("sqrt", math.sqrt),
    ("exp", math.exp),
    ("log", _log),
    ("abs", math.fabs),
    ("sin", math.sin),
    ("cos", math.cos),
    ("tan", math.tan),
    ("asin", math.asin),
    ("acos", math.acos),
    ("atan", math.atan),
    ("floor", ieee_floor),
    ("ceil", ieee_ceil),
):
    register_unary(_name)(_fn)


@register_unary("sqr")
def _sqr(x: float) -> float:
    return x * x


@register_unary("sind")
def _sind(x: float) -> float:
    return math.sin(radians_from_degrees(x))


@register_unary("cosd")
def _cosd(x: float) -> float:
    return math.cos(radians_from_degrees(x))


@register_unary("tand")
def _tand(x: float) -> float:
    return math.tan(radians_from_degrees(x))


@register_unary("dasin")
def _dasin(x: float) -> float:
    return degrees_from_radians(math.asin(x))


@register_unary("dacos")
def _dacos(x: float) -> float:
    return degrees_from_radians(math.acos(x))


@register_unary("datan")
def _datan(x: float) -> float:
    return degrees_from_radians(math.atan(x))


register_binary("pow")(ieee_pow)
register_binary("atan2")(math.atan2)


@register_binary("datan2")
def _datan2(y: float, x: float) -> float:
    return degrees_from_radians(math.atan2(y, x))


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def lookup_constant(name: str) -> float | None:
    return _CONSTANTS.get(name)


def lookup_unary(name: str) -> UnaryFn | None:
    return _UNARY_FUNCTIONS.get(name)


def lookup_binary(name: str) -> BinaryFn | None:
    return _BINARY_FUNCTIONS.get(name)


def list_names() -> dict[str, list[str]]:
    """Return every known identifier grouped by arity."""
    return {
        "constants": sorted(_CONSTANTS),
        "unary": sorted(_UNARY_FUNCTIONS),
        "binary": sorted(_BINARY_FUNCTIONS),
    }
