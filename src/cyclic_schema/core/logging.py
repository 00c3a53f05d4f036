# src/cyclic_schema/core/logging.py
"""Structured logging for the traversal engine.

Engine modules log through ``get_logger(__name__)``, which binds a
structlog logger to the stdlib logger of the same name. Every event
therefore passes stdlib's level check before anything is written:

- Unconfigured: the ``cyclic_schema`` logger carries a ``NullHandler``
  and the root logger sits at WARNING, so the engine's DEBUG events
  (cycle skips, union commits, transformer cutoffs) produce no output.
- After ``configure_logging()``: structlog and stdlib records share one
  processor chain and one stdout handler, rendered as JSON or console
  text.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter

LIBRARY_LOGGER = "cyclic_schema"

logging.getLogger(LIBRARY_LOGGER).addHandler(logging.NullHandler())


def _shared_processors() -> list[Any]:
    """Processors applied to structlog events and foreign stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
) -> None:
    """Route structlog and stdlib logging to stdout.

    Args:
        json_output: If True, output JSON. If False, human-readable.
        level: Root log level (DEBUG shows the engine's traversal events).
    """
    shared = _shared_processors()
    renderer: Any = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        # Drop disabled levels before any processor runs
        processors=[structlog.stdlib.filter_by_level, *shared, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Caching would pin stale loggers when tests reconfigure logging
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ProcessorFormatter(
            processors=[
                ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                renderer,
            ],
            foreign_pre_chain=shared,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(getattr(logging, level.upper()))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structlog logger backed by the stdlib logger ``name``.

    The processor chain is looked up when the logger is first used, so
    module-level loggers pick up a later ``configure_logging()`` call.
    """
    logger: structlog.stdlib.BoundLogger = structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
    return logger
