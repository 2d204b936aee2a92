"""
Workflow Tools Package

The catalogue of workflow-editing tools (steps, edges, positions, activation,
drafts, step output schemas) and the contracts of the services they call.
"""

from workflow_agent.tools.workflow.composer import WORKFLOW_TOOL_NAMES, WorkflowToolComposer
from workflow_agent.tools.workflow.services import (
    WorkflowSchemaService,
    WorkflowTriggerService,
    WorkflowVersionEdgeService,
    WorkflowVersionService,
    WorkflowVersionStepService,
)

__all__ = [
    "WORKFLOW_TOOL_NAMES",
    "WorkflowToolComposer",
    "WorkflowSchemaService",
    "WorkflowTriggerService",
    "WorkflowVersionEdgeService",
    "WorkflowVersionService",
    "WorkflowVersionStepService",
]
