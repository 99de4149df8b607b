"""Click command line for inspecting and smoke-testing the Sentry hook.

Purpose
-------
Give operators a quick way to see which levels the environment routes to
Sentry and to push one test record through the real logging path.

Contents
--------
* :func:`cli` - click group with ``info`` and ``send-test`` commands.
* :func:`main` - entry point delegating exit handling to ``lib_cli_exit_tools``.
"""

from __future__ import annotations

import logging
from typing import Sequence

import click
import lib_cli_exit_tools
from rich.console import Console
from rich.table import Table

from . import __init__conf__, runtime
from .domain import LogLevel
from .runtime import HookSettings

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
SEND_TEST_LOGGER = "sentry_send_test"


def summary_info() -> str:
    """Return the metadata banner as a single string ending with a newline."""

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


def mask_dsn(dsn: str | None) -> str:
    """Hide the public key of ``dsn`` so it can be printed.

    Examples
    --------
    >>> mask_dsn("https://abc123@o1.ingest.sentry.io/42")
    'https://***@o1.ingest.sentry.io/42'
    >>> mask_dsn(None)
    '-'
    """
    if not dsn:
        return "-"
    scheme, sep, rest = dsn.partition("://")
    if not sep or "@" not in rest:
        return "***"
    return f"{scheme}://***@{rest.split('@', 1)[1]}"


def _settings_table(settings: HookSettings) -> Table:
    table = Table(title="Resolved Sentry hook settings", show_lines=False)
    table.add_column("setting")
    table.add_column("value")
    table.add_row("dsn", mask_dsn(settings.dsn))
    table.add_row("environment", settings.environment or "-")
    table.add_row("async_levels", ", ".join(level.severity for level in settings.async_levels) or "-")
    table.add_row("sync_levels", ", ".join(level.severity for level in settings.sync_levels) or "-")
    table.add_row("flush_timeout", f"{settings.flush_timeout:g}s")
    table.add_row("queue", f"{settings.queue_enabled} (maxsize={settings.queue_maxsize})")
    return table


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message="%(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python tracebacks on errors.",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Route Python log records to Sentry by severity."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata and the settings resolved from the environment."""

    click.echo(summary_info(), nl=False)
    try:
        settings = runtime.build_hook_settings()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    Console(highlight=False).print(_settings_table(settings))


@cli.command("send-test", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--level", "level_name", default="error", show_default=True, help="Level of the test record.")
@click.option("--message", default="lib_log_sentry test event", show_default=True, help="Message of the test record.")
@click.option("--with-error", is_flag=True, default=False, help="Attach a RuntimeError to the test record.")
def cli_send_test(level_name: str, message: str, with_error: bool) -> None:
    """Log one record through a freshly initialised hook and report its route."""

    try:
        level = LogLevel.from_name(level_name)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--level") from exc

    logger = logging.getLogger(SEND_TEST_LOGGER)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    try:
        hook = runtime.init(logger=logger)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    try:
        extra = {"source": "cli"}
        if with_error:
            try:
                raise RuntimeError(message)
            except RuntimeError:
                logger.log(level.to_python_level(), message, exc_info=True, extra=extra)
        else:
            logger.log(level.to_python_level(), message, extra=extra)
    finally:
        runtime.shutdown()

    if level in hook.async_levels:
        route = "async"
    elif level in hook.sync_levels:
        route = "sync"
    else:
        route = "not routed"
    click.echo(f"{level.severity}: {route}")


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI through ``lib_cli_exit_tools`` and return the exit code.

    Traceback preferences changed by ``--traceback`` are restored afterwards
    unless ``restore_traceback`` is ``False``.
    """

    previous = (lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color = previous


__all__ = ["cli", "main", "mask_dsn", "summary_info"]
