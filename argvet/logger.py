# Argvet CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance and trace sinks for argvet."""
import logging
from typing import Any, Callable, Mapping

logger: logging.Logger = logging.getLogger("argvet")

Trace = Callable[[str, Mapping[str, Any]], None]


def noop_trace(event: str, data: Mapping[str, Any]) -> None:
    """Default trace sink. Discards every event."""


def logging_trace(event: str, data: Mapping[str, Any]) -> None:
    """Forward parser trace events to the argvet logger at DEBUG level."""
    logger.debug("[%s] %s", event, dict(data))
