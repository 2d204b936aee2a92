"""
Custom exceptions for the workflow agent tools.

This module provides the hierarchy of exceptions raised by the tool registry,
the dispatcher and the startup composition. All exceptions inherit from
WorkflowAgentException and carry an error code so that the agent runtime can
tell caller errors (unknown tool, missing handler, bad parameters) apart from
handler failures.

Pattern: Specific exceptions, always captured with 'as e' and chained with 'from'
"""

from enum import Enum
from typing import Any


# =============================================================================
# Error Codes Enum
# =============================================================================


class ErrorCode(str, Enum):
    """
    Error codes for workflow agent exceptions.

    These codes identify error kinds consistently in tool results returned
    to the agent and in logs.
    """

    AGENT_ERROR = "AGENT_ERROR"
    TOOL_NOT_FOUND = "TOOL_NOT_FOUND"
    TOOL_NOT_EXECUTABLE = "TOOL_NOT_EXECUTABLE"
    TOOL_REGISTRATION_ERROR = "TOOL_REGISTRATION_ERROR"
    TOOL_TIMEOUT = "TOOL_TIMEOUT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    TOOL_CANCELLED = "TOOL_CANCELLED"
    HANDLER_FAILURE = "HANDLER_FAILURE"
    WORKFLOW_SERVICE_ERROR = "WORKFLOW_SERVICE_ERROR"


# =============================================================================
# Base Exception
# =============================================================================


class WorkflowAgentException(Exception):
    """
    Base exception for all workflow agent errors.

    Attributes:
        message: Human-readable error message.
        error_code: Machine-readable error code from ErrorCode enum.
    """

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.AGENT_ERROR,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            **kwargs: Additional attributes to set on the exception.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code

        for key, value in kwargs.items():
            setattr(self, key, value)


class ToolError(WorkflowAgentException):
    """
    Base class for errors tied to a single named tool.

    Attributes:
        tool_name: Name of the tool the error refers to.
    """

    def __init__(
        self,
        message: str,
        tool_name: str,
        error_code: str = ErrorCode.AGENT_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.tool_name = tool_name


# =============================================================================
# Registry Errors
# =============================================================================


class ToolNotFoundError(ToolError):
    """Raised when a requested tool is not found in the registry."""

    def __init__(self, tool_name: str, **kwargs: Any) -> None:
        super().__init__(
            f"Tool not found: {tool_name}",
            tool_name=tool_name,
            error_code=ErrorCode.TOOL_NOT_FOUND,
            **kwargs,
        )


class ToolNotExecutableError(ToolError):
    """Raised when a tool is registered without a handler and gets executed."""

    def __init__(self, tool_name: str, **kwargs: Any) -> None:
        super().__init__(
            f"Tool {tool_name} does not have a handler",
            tool_name=tool_name,
            error_code=ErrorCode.TOOL_NOT_EXECUTABLE,
            **kwargs,
        )


class ToolRegistrationError(WorkflowAgentException):
    """
    Raised when the tool catalogue could not be fully registered at startup.

    Attributes:
        missing: Names that were expected but are absent or not executable.
    """

    def __init__(
        self,
        message: str,
        missing: list[str] | None = None,
        error_code: str = ErrorCode.TOOL_REGISTRATION_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.missing = missing or []


# =============================================================================
# Dispatch Errors
# =============================================================================


class ToolParameterValidationError(ToolError):
    """
    Raised when raw tool parameters fail their parameter schema.

    Note: Named ToolParameterValidationError to avoid conflict with
    pydantic.ValidationError.

    Attributes:
        field: Dotted path of the first invalid field (if known).
        errors: Full list of validation error entries.
    """

    def __init__(
        self,
        message: str,
        tool_name: str,
        field: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        error_code: str = ErrorCode.VALIDATION_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, tool_name, error_code, **kwargs)
        self.field = field
        self.errors = errors or []


class ToolTimeoutError(ToolError):
    """Raised when a dispatched tool exceeds the configured timeout."""

    def __init__(
        self,
        tool_name: str,
        timeout_seconds: float,
        error_code: str = ErrorCode.TOOL_TIMEOUT,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"Tool {tool_name} timed out after {timeout_seconds}s",
            tool_name,
            error_code,
            **kwargs,
        )
        self.timeout_seconds = timeout_seconds


class ToolCancelledError(ToolError):
    """Raised when the caller's abort signal fires before a tool finishes."""

    def __init__(
        self,
        tool_name: str,
        error_code: str = ErrorCode.TOOL_CANCELLED,
        **kwargs: Any,
    ) -> None:
        super().__init__(f"Tool {tool_name} was cancelled", tool_name, error_code, **kwargs)
