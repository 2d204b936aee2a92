"""
Observability Package

Structured JSON logging with correlation IDs for tool dispatch.
"""

from workflow_agent.observability.logging import (
    configure_logging,
    correlation_id_context,
    get_correlation_id,
    get_logger,
    reset_logging,
)

__all__ = [
    "configure_logging",
    "correlation_id_context",
    "get_correlation_id",
    "get_logger",
    "reset_logging",
]
