"""
Tests for custom exceptions.
"""

import pytest

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


class TestWorkflowAgentException:
    def test_message_and_default_code(self) -> None:
        exc = WorkflowAgentException("boom")

        assert exc.message == "boom"
        assert exc.error_code == ErrorCode.AGENT_ERROR
        assert str(exc) == "boom"

    def test_extra_kwargs_become_attributes(self) -> None:
        exc = WorkflowAgentException("boom", workspace_id="w1")

        assert exc.workspace_id == "w1"


class TestToolErrors:
    @pytest.mark.parametrize(
        "exc, code",
        [
            (ToolNotFoundError("t"), ErrorCode.TOOL_NOT_FOUND),
            (ToolNotExecutableError("t"), ErrorCode.TOOL_NOT_EXECUTABLE),
            (ToolParameterValidationError("bad", tool_name="t"), ErrorCode.VALIDATION_ERROR),
            (ToolTimeoutError("t", 1.0), ErrorCode.TOOL_TIMEOUT),
            (ToolCancelledError("t"), ErrorCode.TOOL_CANCELLED),
        ],
    )
    def test_tool_errors_carry_name_and_code(self, exc: ToolError, code: ErrorCode) -> None:
        assert isinstance(exc, ToolError)
        assert isinstance(exc, WorkflowAgentException)
        assert exc.tool_name == "t"
        assert exc.error_code == code

    def test_not_found_message_names_tool(self) -> None:
        assert str(ToolNotFoundError("delete_workflow_version_step")) == (
            "Tool not found: delete_workflow_version_step"
        )

    def test_validation_error_defaults(self) -> None:
        exc = ToolParameterValidationError("bad", tool_name="t")

        assert exc.field is None
        assert exc.errors == []

    def test_registration_error_missing(self) -> None:
        exc = ToolRegistrationError("incomplete", missing=["a"])

        assert exc.missing == ["a"]
        assert exc.error_code == ErrorCode.TOOL_REGISTRATION_ERROR

    def test_error_code_values_are_strings(self) -> None:
        assert ErrorCode.HANDLER_FAILURE.value == "HANDLER_FAILURE"
        assert ErrorCode("TOOL_NOT_FOUND") is ErrorCode.TOOL_NOT_FOUND
