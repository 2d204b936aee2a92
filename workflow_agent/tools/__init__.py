"""
Tools Package - Tool Registry, Dispatch and the Workflow Catalogue

This package provides the registry binding tool names to definitions, the
dispatcher the agent runtime calls through, and the startup composition of
the workflow-editing tools.
"""

from workflow_agent.tools.bootstrap import build_workflow_tool_registry, workflow_tool_dispatcher
from workflow_agent.tools.dispatcher import ToolDispatcher
from workflow_agent.tools.registry import ToolRegistry

__all__ = [
    "ToolDispatcher",
    "ToolRegistry",
    "build_workflow_tool_registry",
    "workflow_tool_dispatcher",
]
