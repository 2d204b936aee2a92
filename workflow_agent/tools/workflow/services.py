"""
Workflow Collaborator Contracts

The workflow tools do no business logic of their own. Each one forwards to
exactly one operation on one of these services, which are owned by the
workflow subsystem (see workflow_agent.clients.workflow_service for the HTTP
implementation).

Pattern: Ports (typing.Protocol) for external collaborators
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class WorkflowVersionStepService(Protocol):
    """Creates, updates and deletes steps of a workflow version."""

    async def create_workflow_version_step(
        self, *, workspace_id: str, input: dict[str, Any]
    ) -> Any: ...

    async def update_workflow_version_step(
        self, *, workspace_id: str, workflow_version_id: str, step: dict[str, Any]
    ) -> Any: ...

    async def delete_workflow_version_step(
        self, *, workspace_id: str, workflow_version_id: str, step_id_to_delete: str
    ) -> Any: ...


@runtime_checkable
class WorkflowVersionEdgeService(Protocol):
    """Connects and disconnects steps of a workflow version."""

    async def create_workflow_version_edge(
        self, *, source: str, target: str, workflow_version_id: str, workspace_id: str
    ) -> Any: ...

    async def delete_workflow_version_edge(
        self, *, source: str, target: str, workflow_version_id: str, workspace_id: str
    ) -> Any: ...


@runtime_checkable
class WorkflowVersionService(Protocol):
    """Version-level edits: canvas positions and drafts."""

    async def update_workflow_version_positions(
        self,
        *,
        workflow_version_id: str,
        positions: list[dict[str, Any]],
        workspace_id: str,
    ) -> Any: ...

    async def create_draft_from_workflow_version(
        self, *, workspace_id: str, workflow_id: str, workflow_version_id_to_copy: str
    ) -> Any: ...


@runtime_checkable
class WorkflowTriggerService(Protocol):
    """Activation state of workflow versions, keyed by version id alone."""

    async def activate_workflow_version(self, workflow_version_id: str) -> Any: ...

    async def deactivate_workflow_version(self, workflow_version_id: str) -> Any: ...


@runtime_checkable
class WorkflowSchemaService(Protocol):
    """Computes the output schema a step exposes to downstream steps."""

    async def compute_step_output_schema(
        self, *, step: dict[str, Any], workspace_id: str
    ) -> Any: ...
