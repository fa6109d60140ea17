# Argvet CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py"""
from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Iterable, NoReturn, TypeVar

import pythonjsonlogger.json
from rich.logging import RichHandler

from argvet.console import console, error_console

if TYPE_CHECKING:
    from argvet.parser.result import (
        ParseResultError,
        ParseResultHelp,
        ParseResultVersion,
    )

T = TypeVar("T")


def get_script_name() -> str:
    """Returns the basename of the running script, used as the default program name."""
    return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "program"


def uniq(items: Iterable[T]) -> list[T]:
    """Return items with duplicates removed, keeping first-seen order."""
    return list(dict.fromkeys(items))


def find_duplicate_values(items: Iterable[T]) -> list[T]:
    """Return every value that appears more than once, in first-repeat order."""
    seen: set[T] = set()
    duplicates: list[T] = []
    for item in items:
        if item in seen and item not in duplicates:
            duplicates.append(item)
        seen.add(item)
    return duplicates


def exit_with_result(
    result: ParseResultError | ParseResultHelp | ParseResultVersion,
    version: str | None = None,
) -> NoReturn:
    """
    Print a terminal parse result and exit the process.

    - help: help text on stdout, exit code 0
    - version: the configured version (or `none`) on stdout, exit code 0
    - error: the error message and the help text on stderr, exit code 1
    """
    if result.type == "help":
        console.print(result.help, markup=False, highlight=False, soft_wrap=True)
    elif result.type == "version":
        console.print(
            version if version is not None else "none",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
    else:
        error_console.print(
            f"{result.error}\n", markup=False, highlight=False, soft_wrap=True
        )
        error_console.print(result.help, markup=False, highlight=False, soft_wrap=True)
    sys.exit(result.exit_code)


def running_in_container() -> bool:
    try:
        with open("/proc/1/cgroup", "r", encoding="UTF-8") as f:
            content = f.read()
            return (
                "docker" in content
                or "kubepods" in content
                or "containerd" in content
                or "podman" in content
            )
    except OSError:
        return False


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
):
    """
    Configure logging for argvet with support for both CLI-friendly and structured
    JSON output.

    Args:
        mode (str | None):
            Logging output mode. Can be:
                - "cli": human-readable Rich console logs (default outside containers)
                - "json": machine-readable JSON logs (default inside containers)
            If not provided, it will use the `ARGVET_LOG_MODE` environment variable
            or fallback based on container detection.
        log_filename (str | None):
            Path to a log file. No file handler is installed when omitted.
        json_log_to_file (bool):
            Whether to format file logs as JSON (structured) instead of plain text.
        file_log_level (int):
            Logging level for file output. Defaults to `logging.DEBUG`.
        console_log_level (int):
            Logging level for console output. Defaults to `logging.WARNING`.

    Raises:
        ValueError: If an invalid logging `mode` is passed.
    """
    if not mode:
        mode = os.getenv("ARGVET_LOG_MODE") or (
            "json" if running_in_container() else "cli"
        )

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    if root.hasHandlers():
        root.handlers.clear()

    if mode == "cli":
        console_handler: RichHandler | logging.StreamHandler = RichHandler(
            console=error_console,
            rich_tracebacks=True,
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    elif mode == "json":
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            pythonjsonlogger.json.JsonFormatter(
                "%(asctime)s %(name)s %(levelname)s %(message)s"
            )
        )
    else:
        raise ValueError(f"Invalid log mode: {mode}")

    console_handler.setLevel(console_log_level)
    root.addHandler(console_handler)

    if log_filename:
        file_handler = logging.FileHandler(log_filename, "a", "UTF-8")
        file_handler.setLevel(file_log_level)
        if json_log_to_file:
            file_handler.setFormatter(
                pythonjsonlogger.json.JsonFormatter(
                    "%(asctime)s %(name)s %(levelname)s %(message)s"
                )
            )
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(name)s] [%(levelname)s] %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
        root.addHandler(file_handler)

    logger = logging.getLogger("argvet")
    logger.propagate = True
    logger.debug("Logging initialized in '%s' mode.", mode)
