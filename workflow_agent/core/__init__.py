"""
Core module for the workflow agent tools.

This module contains configuration and exceptions.
"""

from workflow_agent.core.config import Settings, get_settings
from workflow_agent.core.exceptions import (
    ErrorCode,
    ToolCancelledError,
    ToolError,
    ToolNotExecutableError,
    ToolNotFoundError,
    ToolParameterValidationError,
    ToolRegistrationError,
    ToolTimeoutError,
    WorkflowAgentException,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "ErrorCode",
    "WorkflowAgentException",
    "ToolError",
    "ToolCancelledError",
    "ToolNotFoundError",
    "ToolNotExecutableError",
    "ToolParameterValidationError",
    "ToolRegistrationError",
    "ToolTimeoutError",
]
