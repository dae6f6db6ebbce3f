"""Click command line interface for the logging façade.

Purpose
-------
Give operators a quick way to inspect the installed distribution and to watch
the throttle engine collapse a burst of identical records.

Contents
--------
* :func:`cli` - command group with global ``--traceback`` and ``--use-dotenv`` flags.
* ``info`` / ``logdemo`` subcommands.
* :func:`main` - entry point delegating exit-code handling to ``lib_cli_exit_tools``.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from typing import Any

import click
import lib_cli_exit_tools
from rich.console import Console

from . import __init__conf__
from . import config as log_config
from .adapters import MemoryReporter, RichConsoleReporter
from .domain.throttle import ThrottleDecision
from .runtime import Logger, PauseController
from .runtime._options import DEFAULT_THROTTLE_MIN

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
DEMO_MESSAGE = "burst message"


def summary_info() -> str:
    """Return the metadata banner printed by ``info``."""

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command, message="%(prog)s version %(version)s")
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help=f"Load environment variables from the nearest .env (default from {log_config.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool) -> None:
    """Structured logging façade utilities."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    if log_config.should_use_dotenv(explicit=explicit, env_value=os.getenv(log_config.DOTENV_ENV_VAR)):
        log_config.enable_dotenv()

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def info_command() -> None:
    """Print distribution metadata."""

    click.echo(summary_info(), nl=False)


def _logdemo(*, count: int, throttle_min: int, throttle: float, tag: str, no_color: bool) -> dict[str, Any]:
    """Log ``count`` identical records and report what reached the reporters."""

    memory = MemoryReporter()
    console = RichConsoleReporter(console=Console(no_color=no_color, highlight=False), no_color=no_color)
    logger = Logger(
        reporters=[console, memory],
        level="info",
        defaults={"tag": tag},
        throttle=throttle,
        throttle_min=throttle_min,
        format_options={"date": False, "colors": not no_color},
        pause_controller=PauseController(),
    )
    literal = 0
    for _ in range(count):
        if logger.info(DEMO_MESSAGE).get("decision") == ThrottleDecision.EMITTED.value:
            literal += 1
    logger.flush()

    burst = [record for record in memory.records if record.args and record.args[0] == DEMO_MESSAGE]
    return {"count": count, "emitted": len(burst), "summaries": len(burst) - literal, "records": burst}


@cli.command("logdemo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--count", default=20, show_default=True, type=click.IntRange(min=1), help="Identical records to log.")
@click.option(
    "--throttle-min",
    default=DEFAULT_THROTTLE_MIN,
    show_default=True,
    type=click.IntRange(min=0),
    help="Duplicates emitted literally before suppression.",
)
@click.option(
    "--throttle",
    default=1.0,
    show_default=True,
    type=click.FloatRange(min=0, min_open=True),
    help="Throttle window in seconds.",
)
@click.option("--tag", default="demo", show_default=True, help="Tag attached to the demo records.")
@click.option("--no-color", is_flag=True, default=False, help="Disable colours.")
def logdemo_command(count: int, throttle_min: int, throttle: float, tag: str, no_color: bool) -> None:
    """Log a burst of identical records and show how they collapse."""

    result = _logdemo(count=count, throttle_min=throttle_min, throttle=throttle, tag=tag, no_color=no_color)
    click.echo(f"emitted {result['emitted']} of {result['count']} records ({result['summaries']} repeat summary)")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return its exit code, restoring traceback preferences afterwards."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        lib_cli_exit_tools.config.traceback = previous_traceback
        lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main", "summary_info"]
