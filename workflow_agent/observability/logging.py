"""
Structured Logging Module

JSON logging for tool registration and dispatch. Every line carries the
service name, an ISO timestamp and, while a tool call is being dispatched,
the call's id as correlation_id, so all output of one agent tool call can be
grouped together.

The correlation id lives in structlog's context variables; asyncio tasks
started by dispatch_batch each get their own copy.

Pattern: Structured logging for observability
Pattern: Singleton configuration (configure once at startup)
"""

import logging
import sys
from contextlib import contextmanager
from typing import Generator, Optional, TextIO

import structlog
from structlog._config import BoundLoggerLazyProxy
from structlog.types import BindableLogger, EventDict, Processor, WrappedLogger


_configured: bool = False

_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


# =============================================================================
# Correlation ID
# =============================================================================


def get_correlation_id() -> Optional[str]:
    """Correlation id of the tool call currently being dispatched, if any."""
    return structlog.contextvars.get_contextvars().get("correlation_id")


@contextmanager
def correlation_id_context(correlation_id: Optional[str]) -> Generator[None, None, None]:
    """
    Bind a correlation id for the duration of the block.

    The previous id (or its absence) is restored on exit, so nested
    dispatches do not leak ids into each other.

    Example:
        >>> with correlation_id_context("call_abc123"):
        ...     logger.info("dispatching tool")
    """
    with structlog.contextvars.bound_contextvars(correlation_id=correlation_id):
        yield


# =============================================================================
# Processors
# =============================================================================


def _add_service(service_name: str) -> Processor:
    def add_service(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("service", service_name)
        return event_dict

    return add_service


# =============================================================================
# Singleton Configuration
# =============================================================================


def configure_logging(
    level: str = "INFO",
    service_name: str = "workflow-agent",
    stream: Optional[TextIO] = None,
    force: bool = False,
) -> None:
    """
    Configure structlog for the application.

    Called once at startup with values from Settings; later calls are
    no-ops unless force=True.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to INFO.
        service_name: Value of the "service" key on every line
        stream: Output stream (default: sys.stdout)
        force: Reconfigure even if already configured (tests)
    """
    global _configured

    if _configured and not force:
        return

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service(service_name),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper()) if level.upper() in _LEVELS else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stdout),
        cache_logger_on_first_use=False,
    )

    _configured = True


def reset_logging() -> None:
    """Restore structlog defaults so the next configure_logging() applies. Tests only."""
    global _configured
    structlog.reset_defaults()
    _configured = False


def get_logger(name: str) -> BindableLogger:
    """
    Get a structured logger with the logger name bound.

    The logger is a lazy proxy: module-level loggers pick up whatever
    configure_logging() installs later, at startup.
    """
    return BoundLoggerLazyProxy(None, initial_values={"logger": name})
