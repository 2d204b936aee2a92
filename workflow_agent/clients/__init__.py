"""
Clients Package

The workflow builder service client implementing every collaborator
contract of the workflow tools.
"""

from workflow_agent.clients.workflow_service import (
    WorkflowEntityNotFoundError,
    WorkflowServiceClient,
    WorkflowServiceError,
)

__all__ = [
    "WorkflowEntityNotFoundError",
    "WorkflowServiceClient",
    "WorkflowServiceError",
]
