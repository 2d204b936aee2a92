"""Domain models for tool registration and dispatch."""

from workflow_agent.models.domain import (
    ModelParameterSchema,
    ParameterSchema,
    ToolCall,
    ToolDefinition,
    ToolExecutionOptions,
    ToolHandler,
    ToolResult,
)

__all__ = [
    "ModelParameterSchema",
    "ParameterSchema",
    "ToolCall",
    "ToolDefinition",
    "ToolExecutionOptions",
    "ToolHandler",
    "ToolResult",
]
