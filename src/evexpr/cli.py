"""Command-line front end: ``ev [OPTIONS] EXPRESSION``."""

from __future__ import annotations

import logging
import math
from pathlib import Path

import click

from evexpr import __version__
from evexpr.config import load_config
from evexpr.expr import (
    ConfigError,
    EvalError,
    evaluate_as_double,
    evaluate_as_float,
    evaluate_as_int32,
    evaluate_as_uint32,
    report_error,
)
from evexpr.expr.functions import list_names
from evexpr.logging.events import EventType, emit_info, set_log_path

_VALUE_OPTIONS = frozenset({"-p", "--precision", "--config"})


def _split_expression(args: list[str]) -> list[str]:
    """Insert ``--`` before the expression so ``ev -2*pi`` is not read as options.

    An argument is an option only if it starts with ``--`` or with ``-``
    followed by a letter.
    """
    out: list[str] = []
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--":
            return out + args[i:]
        if arg.startswith("--") or (len(arg) > 1 and arg[0] == "-" and arg[1].isalpha()):
            out.append(arg)
            if arg in _VALUE_OPTIONS and i + 1 < len(args):
                out.append(args[i + 1])
                i += 1
            i += 1
            continue
        return out + ["--"] + args[i:]
    return out


class ExpressionCommand(click.Command):
    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        return super().parse_args(ctx, _split_expression(list(args)))


def _format_hex(x: float) -> str:
    value = int(x) & 0xFFFFFFFF if math.isfinite(x) else 0
    return f"0x{value:08X}"


def _print_function_list() -> None:
    names = list_names()
    click.echo(f"constants: {', '.join(names['constants'])}")
    click.echo(f"f(x):      {', '.join(names['unary'])}")
    click.echo(f"f(x, y):   {', '.join(names['binary'])}")


@click.command(cls=ExpressionCommand)
@click.argument("expression", required=False)
@click.option("-x", "--hex", "show_hex", is_flag=True, help="Show result as hex.")
@click.option("-i", "--int", "show_int", is_flag=True, help="Show result as a 32-bit integer.")
@click.option("-u", "--uint", "show_uint", is_flag=True, help="Show result as an unsigned 32-bit integer.")
@click.option("-f", "--float", "show_float", is_flag=True, help="Show result as a 32-bit float.")
@click.option("-p", "--precision", type=click.IntRange(min=0), default=None, help="Set output precision.")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None, help="Configuration file (default: ./evexpr.yaml).")
@click.option("-l", "--list-functions", is_flag=True, help="List known constants and functions.")
@click.version_option(version=__version__, prog_name="ev")
def main(
    expression: str | None,
    show_hex: bool,
    show_int: bool,
    show_uint: bool,
    show_float: bool,
    precision: int | None,
    config_path: str | None,
    list_functions: bool,
) -> None:
    """Evaluate the given expression.

    \b
    Example:
      ev "1 + 2 * 3"
    """
    try:
        cfg = load_config(Path(config_path) if config_path else None)
    except ConfigError as e:
        raise click.ClickException(str(e))

    logging.basicConfig(level=cfg.log_level, format="[evexpr] %(levelname)s %(name)s: %(message)s")
    if cfg.logging_path:
        set_log_path(cfg.logging_path, fsync=cfg.logging_fsync)

    if list_functions:
        _print_function_list()
        return

    if expression is None:
        raise click.UsageError("Missing argument 'EXPRESSION'.")

    if show_hex:
        mode = "hex"
    elif show_int:
        mode = "int"
    elif show_uint:
        mode = "uint"
    elif show_float:
        mode = "float"
    else:
        mode = cfg.output

    if precision is None:
        precision = cfg.precision

    error = EvalError()

    if mode == "hex":
        out = _format_hex(evaluate_as_double(expression, error))
    elif mode == "int":
        out = str(evaluate_as_int32(expression, error))
    elif mode == "uint":
        out = str(evaluate_as_uint32(expression, error))
    elif mode == "float":
        out = "%.9g" % evaluate_as_float(expression, error)
    else:
        out = "%.*g" % (precision, evaluate_as_double(expression, error))

    if report_error(error):
        click.get_current_context().exit(1)

    emit_info(
        EventType.eval_completed,
        "expression evaluated",
        {"expression": expression, "mode": mode, "result": out},
    )
    click.echo(out)


if __name__ == "__main__":
    main()
