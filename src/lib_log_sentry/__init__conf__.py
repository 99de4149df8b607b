"""Static package metadata surfaced by the CLI banner."""

from __future__ import annotations

from typing import Callable

name = "lib_log_sentry"
title = "Route Python log records to Sentry by severity level"
version = "0.1.0"
shell_command = "lib_log_sentry"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Emit the metadata banner line by line through ``writer`` (default ``print``).

    Examples
    --------
    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0]
    'Info for lib_log_sentry:\\n'
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:\n", "\n"]
    lines.extend(f"    {label.ljust(pad)} = {value}\n" for label, value in fields)
    emit = writer if writer is not None else (lambda text: print(text, end=""))
    for line in lines:
        emit(line)


__all__ = ["name", "print_info", "shell_command", "title", "version"]
