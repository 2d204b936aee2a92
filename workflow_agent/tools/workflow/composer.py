"""
Workflow Tool Composer

Registers the fixed catalogue of workflow-editing tools into a ToolRegistry.
Each handler is a thin adapter: it reads the already-validated parameters,
reshapes them into the call signature of exactly one collaborator operation,
and returns that operation's result (or lets its exception propagate).

Pattern: Adapter (wire-shaped parameters -> collaborator call)
Pattern: Dependency Injection (collaborators passed to the constructor)
"""

from typing import Any

from workflow_agent.models.domain import ToolDefinition
from workflow_agent.tools.registry import ToolRegistry
from workflow_agent.tools.workflow import schemas
from workflow_agent.tools.workflow.services import (
    WorkflowSchemaService,
    WorkflowTriggerService,
    WorkflowVersionEdgeService,
    WorkflowVersionService,
    WorkflowVersionStepService,
)


WORKFLOW_TOOL_NAMES: tuple[str, ...] = (
    "create_workflow_version_step",
    "update_workflow_version_step",
    "delete_workflow_version_step",
    "create_workflow_version_edge",
    "delete_workflow_version_edge",
    "update_workflow_version_positions",
    "activate_workflow_version",
    "deactivate_workflow_version",
    "create_draft_from_workflow_version",
    "compute_step_output_schema",
)


class WorkflowToolComposer:
    """
    Builds the workflow tool definitions and registers them.

    Running register_workflow_tools() again simply replaces the same names
    with equivalent definitions.

    Example:
        >>> composer = WorkflowToolComposer.from_client(workflow_client)
        >>> composer.register_workflow_tools(registry)
    """

    def __init__(
        self,
        *,
        step_service: WorkflowVersionStepService,
        edge_service: WorkflowVersionEdgeService,
        version_service: WorkflowVersionService,
        trigger_service: WorkflowTriggerService,
        schema_service: WorkflowSchemaService,
    ) -> None:
        self.step_service = step_service
        self.edge_service = edge_service
        self.version_service = version_service
        self.trigger_service = trigger_service
        self.schema_service = schema_service

    @classmethod
    def from_client(cls, client: Any) -> "WorkflowToolComposer":
        """Bind every collaborator contract to one object implementing them all."""
        return cls(
            step_service=client,
            edge_service=client,
            version_service=client,
            trigger_service=client,
            schema_service=client,
        )

    def build_definitions(self) -> list[ToolDefinition]:
        """Create one ToolDefinition per workflow tool, in catalogue order."""
        return [
            ToolDefinition(
                name="create_workflow_version_step",
                description=(
                    "Create a new step in a workflow version. This adds a step to the "
                    "specified workflow version with the given configuration."
                ),
                parameters=schemas.create_workflow_version_step_schema,
                handler=self._create_workflow_version_step,
            ),
            ToolDefinition(
                name="update_workflow_version_step",
                description=(
                    "Update an existing step in a workflow version. "
                    "This modifies the step configuration."
                ),
                parameters=schemas.update_workflow_version_step_schema,
                handler=self._update_workflow_version_step,
            ),
            ToolDefinition(
                name="delete_workflow_version_step",
                description=(
                    "Delete a step from a workflow version. This removes the step "
                    "and updates the workflow structure."
                ),
                parameters=schemas.delete_workflow_version_step_schema,
                handler=self._delete_workflow_version_step,
            ),
            ToolDefinition(
                name="create_workflow_version_edge",
                description=(
                    "Create a new edge in a workflow version. "
                    "This connects two steps in the workflow."
                ),
                parameters=schemas.create_workflow_version_edge_schema,
                handler=self._create_workflow_version_edge,
            ),
            ToolDefinition(
                name="delete_workflow_version_edge",
                description=(
                    "Delete an edge from a workflow version. "
                    "This removes the connection between two steps."
                ),
                parameters=schemas.delete_workflow_version_edge_schema,
                handler=self._delete_workflow_version_edge,
            ),
            ToolDefinition(
                name="update_workflow_version_positions",
                description="Update the positions of steps and edges in a workflow version.",
                parameters=schemas.update_workflow_version_positions_schema,
                handler=self._update_workflow_version_positions,
            ),
            ToolDefinition(
                name="activate_workflow_version",
                description=(
                    "Activate a workflow version. "
                    "This makes it the active version for the workflow."
                ),
                parameters=schemas.activate_workflow_version_schema,
                handler=self._activate_workflow_version,
            ),
            ToolDefinition(
                name="deactivate_workflow_version",
                description="Deactivate a workflow version. This makes it inactive.",
                parameters=schemas.deactivate_workflow_version_schema,
                handler=self._deactivate_workflow_version,
            ),
            ToolDefinition(
                name="create_draft_from_workflow_version",
                description="Create a draft workflow version from an existing version.",
                parameters=schemas.create_draft_from_workflow_version_schema,
                handler=self._create_draft_from_workflow_version,
            ),
            ToolDefinition(
                name="compute_step_output_schema",
                description="Compute the output schema for a workflow step.",
                parameters=schemas.compute_step_output_schema_schema,
                handler=self._compute_step_output_schema,
            ),
        ]

    def register_workflow_tools(self, registry: ToolRegistry) -> None:
        """
        Register every workflow tool with the given registry.

        Args:
            registry: The ToolRegistry to register tools with.
        """
        for definition in self.build_definitions():
            registry.register(definition.name, definition)

    # =========================================================================
    # Handlers
    # =========================================================================

    async def _create_workflow_version_step(
        self, parameters: dict[str, Any], options: Any = None
    ) -> Any:
        # The full payload, workspaceId included, travels as the step input.
        return await self.step_service.create_workflow_version_step(
            workspace_id=parameters["workspaceId"],
            input=parameters,
        )

    async def _update_workflow_version_step(
        self, parameters: dict[str, Any], options: Any = None
    ) -> Any:
        return await self.step_service.update_workflow_version_step(
            workspace_id=parameters["workspaceId"],
            workflow_version_id=parameters["workflowVersionId"],
            step=parameters["step"],
        )

    async def _delete_workflow_version_step(
        self, parameters: dict[str, Any], options: Any = None
    ) -> Any:
        return await self.step_service.delete_workflow_version_step(
            workspace_id=parameters["workspaceId"],
            workflow_version_id=parameters["workflowVersionId"],
            step_id_to_delete=parameters["stepId"],
        )

    async def _create_workflow_version_edge(
        self, parameters: dict[str, Any], options: Any = None
    ) -> Any:
        return await self.edge_service.create_workflow_version_edge(
            source=parameters["source"],
            target=parameters["target"],
            workflow_version_id=parameters["workflowVersionId"],
            workspace_id=parameters["workspaceId"],
        )

    async def _delete_workflow_version_edge(
        self, parameters: dict[str, Any], options: Any = None
    ) -> Any:
        return await self.edge_service.delete_workflow_version_edge(
            source=parameters["source"],
            target=parameters["target"],
            workflow_version_id=parameters["workflowVersionId"],
            workspace_id=parameters["workspaceId"],
        )

    async def _update_workflow_version_positions(
        self, parameters: dict[str, Any], options: Any = None
    ) -> Any:
        return await self.version_service.update_workflow_version_positions(
            workflow_version_id=parameters["workflowVersionId"],
            positions=parameters["positions"],
            workspace_id=parameters["workspaceId"],
        )

    async def _activate_workflow_version(
        self, parameters: dict[str, Any], options: Any = None
    ) -> Any:
        # Activation is keyed by version id only; workspaceId is not forwarded.
        return await self.trigger_service.activate_workflow_version(
            parameters["workflowVersionId"]
        )

    async def _deactivate_workflow_version(
        self, parameters: dict[str, Any], options: Any = None
    ) -> Any:
        return await self.trigger_service.deactivate_workflow_version(
            parameters["workflowVersionId"]
        )

    async def _create_draft_from_workflow_version(
        self, parameters: dict[str, Any], options: Any = None
    ) -> Any:
        return await self.version_service.create_draft_from_workflow_version(
            workspace_id=parameters["workspaceId"],
            workflow_id=parameters["workflowId"],
            workflow_version_id_to_copy=parameters["workflowVersionIdToCopy"],
        )

    async def _compute_step_output_schema(
        self, parameters: dict[str, Any], options: Any = None
    ) -> Any:
        return await self.schema_service.compute_step_output_schema(
            step=parameters["step"],
            workspace_id=parameters["workspaceId"],
        )
