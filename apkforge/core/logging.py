"""
Structured logging configuration for APKForge.

Uses structlog for key-value events rendered through rich on a terminal and as
JSON lines elsewhere. Work on a stored project runs inside ``project_context``
so that every event emitted by the services carries its ``project_id``.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from .config import Config

# HTTP clients pulled in by Prefect log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def _use_json(log_format: str) -> bool:
    if log_format == "auto":
        return not sys.stderr.isatty()
    return log_format == "json"


def _app_name(name: str) -> structlog.types.Processor:
    def add_app(logger: Any, method_name: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
        event_dict.setdefault("app", name)
        return event_dict

    return add_app


def setup_logging(config: Config | None = None) -> None:
    """Configure structured logging for the application.

    Args:
        config: Optional configuration. Level, renderer and the ``app`` field
            are taken from it; without one INFO level and auto format are used.
    """
    log_level = config.log_level if config else "INFO"
    log_format = config.log_format if config else "auto"
    app_name = config.project_name if config else "APKForge"
    level = getattr(logging, log_level, logging.INFO)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        tracebacks_show_locals=log_level == "DEBUG",
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _app_name(app_name),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if _use_json(log_format):
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured bound logger
    """
    return structlog.get_logger(name)


@contextmanager
def project_context(project_id: str, **kwargs: object) -> Iterator[None]:
    """Bind ``project_id`` and any extra keys to log entries inside the block.

    Bindings live in context variables, so worker threads started with
    ``asyncio.to_thread`` inside the block see them too. Keys bound by an
    enclosing block are restored on exit.
    """
    with structlog.contextvars.bound_contextvars(project_id=project_id, **kwargs):
        yield
