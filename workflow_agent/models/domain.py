"""
Domain Models - Tool Definitions, Calls and Results

This module contains the domain models shared by the tool registry, the
workflow tool composer and the dispatcher: tool definitions (with their
parameter schema capability and optional handler), execution options,
tool calls and tool results.

Pattern: Domain models as value objects
Pattern: Pydantic for validation at API boundaries

Note: The registry treats a ToolDefinition's parameter schema as opaque.
Validation of raw parameters happens at the dispatch boundary, before
ToolRegistry.execute() is reached.
"""

import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import Any, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, Field


ToolHandler = Callable[[dict[str, Any], Any], Awaitable[Any]]
"""Handler signature: (parameters, execution_options) -> awaitable result."""


# =============================================================================
# Parameter Schema Capability
# =============================================================================


@runtime_checkable
class ParameterSchema(Protocol):
    """
    Capability to validate and describe a tool's parameters.

    Any object with these two methods can serve as a tool's parameter
    schema; the registry never calls either of them.
    """

    def validate(self, parameters: Any) -> dict[str, Any]:
        """
        Validate raw parameters.

        Returns:
            The validated payload, keyed by wire (camelCase) names.

        Raises:
            ValueError: If the parameters do not match the schema
                (pydantic.ValidationError is a ValueError). The dispatcher
                reports it to the agent as ToolParameterValidationError.
        """
        ...

    def json_schema(self) -> dict[str, Any]:
        """Return the JSON Schema advertised to the LLM."""
        ...


class ModelParameterSchema:
    """
    ParameterSchema backed by a pydantic model class.

    Validation accepts both wire names and field names, and the validated
    payload is dumped by alias with fields the caller did not send left out,
    so handlers see exactly the wire shape the agent was told about.

    Example:
        >>> schema = ModelParameterSchema(DeleteWorkflowVersionStepParameters)
        >>> schema.validate({"workflowVersionId": "v1", "stepId": "s9", "workspaceId": "w1"})
        {'workflowVersionId': 'v1', 'stepId': 's9', 'workspaceId': 'w1'}
    """

    def __init__(self, model: type[BaseModel]) -> None:
        self.model = model

    def validate(self, parameters: Any) -> dict[str, Any]:
        validated = self.model.model_validate(parameters)
        return validated.model_dump(by_alias=True, exclude_unset=True)

    def json_schema(self) -> dict[str, Any]:
        return self.model.model_json_schema(by_alias=True)

    def __repr__(self) -> str:
        return f"ModelParameterSchema({self.model.__name__})"


# =============================================================================
# ToolDefinition Model
# =============================================================================


class ToolDefinition(BaseModel):
    """
    A named tool: description, parameter schema and optional handler.

    Every definition has the same shape regardless of the operation it
    wraps, so the registry can introspect and dispatch uniformly. A
    definition without a handler is introspection-only; executing it is
    an error (ToolNotExecutableError), never an incidental crash.

    Attributes:
        name: Unique tool identifier the agent addresses the tool by.
        description: Agent-oriented description. Informational only.
        parameters: ParameterSchema capability for the tool's input.
        handler: Async callable (parameters, options) -> result, or None.

    Example:
        >>> async def delete_step(parameters, options):
        ...     return await step_service.delete_workflow_version_step(...)
        ...
        >>> tool = ToolDefinition(
        ...     name="delete_workflow_version_step",
        ...     description="Delete a step from a workflow version.",
        ...     parameters=ModelParameterSchema(DeleteWorkflowVersionStepParameters),
        ...     handler=delete_step,
        ... )
    """

    name: str = Field(..., description="Unique tool identifier")
    description: str = Field(..., description="Human/agent-readable description")
    parameters: ParameterSchema = Field(
        ..., description="Parameter schema capability"
    )
    handler: Optional[Callable[..., Any]] = Field(
        default=None, description="Tool execution callable"
    )

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @property
    def is_executable(self) -> bool:
        """Whether the tool carries a handler."""
        return self.handler is not None

    def to_function_schema(self) -> dict[str, Any]:
        """
        Render the definition in the function-tool shape LLM APIs accept.

        Returns:
            {"name": ..., "description": ..., "parameters": <JSON Schema>}
        """
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters.json_schema(),
        }


# =============================================================================
# ToolExecutionOptions Model
# =============================================================================


class ToolExecutionOptions(BaseModel):
    """
    Per-call delivery context forwarded from the agent runtime to handlers.

    The registry passes this object through untouched; only handlers (and
    the runtime that created it) look inside.

    Attributes:
        tool_call_id: Id of the tool call being executed.
        messages: Conversation messages that led to the call.
        abort_signal: Event set by the runtime to request cancellation.
        metadata: Free-form call metadata.
    """

    tool_call_id: str = Field(..., description="Originating tool call id")
    messages: list[dict[str, Any]] = Field(
        default_factory=list, description="Conversation so far"
    )
    abort_signal: Optional[asyncio.Event] = Field(
        default=None, description="Cancellation signal"
    )
    metadata: dict[str, Any] = Field(default_factory=dict, description="Call metadata")

    model_config = {"arbitrary_types_allowed": True}

    @property
    def aborted(self) -> bool:
        """True if the runtime has requested cancellation."""
        return self.abort_signal is not None and self.abort_signal.is_set()


# =============================================================================
# ToolCall Model
# =============================================================================


class ToolCall(BaseModel):
    """
    A request from the agent to execute a named tool.

    Pattern: Command pattern (encapsulates a request as an object)

    Attributes:
        id: Unique identifier for this tool call.
        name: Name of the tool to execute.
        arguments: Raw, not yet validated, arguments.
    """

    id: str = Field(..., description="Unique tool call identifier")
    name: str = Field(..., description="Name of tool to execute")
    arguments: dict[str, Any] = Field(
        default_factory=dict, description="Arguments for tool"
    )

    @classmethod
    def from_openai_format(cls, tool_call: dict[str, Any]) -> "ToolCall":
        """
        Parse a ToolCall from OpenAI's tool_calls format.

        Args:
            tool_call: OpenAI format tool call:
                {
                    "id": "call_xyz",
                    "type": "function",
                    "function": {
                        "name": "tool_name",
                        "arguments": "{\"arg\": \"value\"}"  # JSON string
                    }
                }

        Returns:
            ToolCall instance with parsed arguments. Unparseable arguments
            become an empty dict and are rejected later by validation.
        """
        function = tool_call.get("function", {})
        arguments_str = function.get("arguments", "{}")

        try:
            arguments = json.loads(arguments_str) if arguments_str else {}
        except json.JSONDecodeError:
            arguments = {}

        if not isinstance(arguments, dict):
            arguments = {}

        return cls(
            id=tool_call.get("id", ""),
            name=function.get("name", ""),
            arguments=arguments,
        )


# =============================================================================
# ToolResult Model
# =============================================================================


class ToolResult(BaseModel):
    """
    Outcome of dispatching a tool call, as reported back to the agent.

    Error results carry the error kind, the tool name and the underlying
    message so the orchestrator can decide whether to retry, pick another
    tool or abort its plan.

    Attributes:
        tool_call_id: ID of the ToolCall this result responds to.
        tool_name: Name of the tool that was called.
        content: The handler's result, or the error message.
        is_error: Whether the result represents an error.
        error_code: ErrorCode value for error results.
    """

    tool_call_id: str = Field(..., description="ID of originating tool call")
    tool_name: str = Field(..., description="Name of the called tool")
    content: Any = Field(default=None, description="Tool output or error message")
    is_error: bool = Field(default=False, description="Whether result is an error")
    error_code: Optional[str] = Field(default=None, description="Error kind if failed")

    def to_message_dict(self) -> dict[str, Any]:
        """
        Convert to OpenAI message format.

        Returns:
            {"role": "tool", "tool_call_id": ..., "content": <string>}
        """
        if isinstance(self.content, str):
            content = self.content
        else:
            content = json.dumps(self.content, default=str)
        if self.is_error:
            content = f"[{self.error_code}] {content}"
        return {
            "role": "tool",
            "tool_call_id": self.tool_call_id,
            "content": content,
        }
