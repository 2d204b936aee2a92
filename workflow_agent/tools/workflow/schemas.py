"""
Workflow Tool Parameter Schemas

Pydantic models describing the input of each workflow-editing tool, wrapped
as ModelParameterSchema instances for registration. Field names are snake_case
in Python and camelCase on the wire (the names the agent sees).

Every payload carries workspaceId; the caller supplies it already authorized.
Unknown keys are dropped during validation.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from workflow_agent.models.domain import ModelParameterSchema


class WorkflowToolParameters(BaseModel):
    """Base for all workflow tool parameter models."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    workspace_id: str = Field(..., min_length=1, description="Workspace the workflow belongs to")


class Position(BaseModel):
    """Canvas coordinates of a step."""

    x: float
    y: float


class StepPosition(BaseModel):
    """Position update for one step or edge."""

    id: str = Field(..., min_length=1)
    position: Position


def _require_step_keys(step: dict[str, Any]) -> dict[str, Any]:
    missing = [key for key in ("id", "type") if key not in step]
    if missing:
        raise ValueError(f"step is missing required keys: {', '.join(missing)}")
    return step


# =============================================================================
# Steps
# =============================================================================


class CreateWorkflowVersionStepParameters(WorkflowToolParameters):
    workflow_version_id: str = Field(..., min_length=1, description="Workflow version to add the step to")
    step_type: str = Field(..., min_length=1, description="Type of step to create, e.g. CODE or SEND_EMAIL")
    parent_step_id: Optional[str] = Field(default=None, description="Step the new step follows")
    next_step_id: Optional[str] = Field(default=None, description="Step the new step precedes")
    position: Optional[Position] = Field(default=None, description="Canvas position")
    id: Optional[str] = Field(default=None, description="Id to give the new step")


class UpdateWorkflowVersionStepParameters(WorkflowToolParameters):
    workflow_version_id: str = Field(..., min_length=1, description="Workflow version holding the step")
    step: dict[str, Any] = Field(..., description="Full step definition, including id and type")

    @field_validator("step")
    @classmethod
    def validate_step(cls, v: dict[str, Any]) -> dict[str, Any]:
        return _require_step_keys(v)


class DeleteWorkflowVersionStepParameters(WorkflowToolParameters):
    workflow_version_id: str = Field(..., min_length=1, description="Workflow version holding the step")
    step_id: str = Field(..., min_length=1, description="Id of the step to delete")


# =============================================================================
# Edges
# =============================================================================


class WorkflowVersionEdgeParameters(WorkflowToolParameters):
    workflow_version_id: str = Field(..., min_length=1, description="Workflow version holding the edge")
    source: str = Field(..., min_length=1, description="Source step id")
    target: str = Field(..., min_length=1, description="Target step id")


class CreateWorkflowVersionEdgeParameters(WorkflowVersionEdgeParameters):
    pass


class DeleteWorkflowVersionEdgeParameters(WorkflowVersionEdgeParameters):
    pass


# =============================================================================
# Versions
# =============================================================================


class UpdateWorkflowVersionPositionsParameters(WorkflowToolParameters):
    workflow_version_id: str = Field(..., min_length=1, description="Workflow version to update")
    positions: list[StepPosition] = Field(..., description="New positions keyed by step or edge id")


class ActivateWorkflowVersionParameters(WorkflowToolParameters):
    workflow_version_id: str = Field(..., min_length=1, description="Workflow version to activate")


class DeactivateWorkflowVersionParameters(WorkflowToolParameters):
    workflow_version_id: str = Field(..., min_length=1, description="Workflow version to deactivate")


class CreateDraftFromWorkflowVersionParameters(WorkflowToolParameters):
    workflow_id: str = Field(..., min_length=1, description="Workflow to create the draft in")
    workflow_version_id_to_copy: str = Field(..., min_length=1, description="Version to branch the draft from")


class ComputeStepOutputSchemaParameters(WorkflowToolParameters):
    step: dict[str, Any] = Field(..., description="Trigger or action step definition")

    @field_validator("step")
    @classmethod
    def validate_step(cls, v: dict[str, Any]) -> dict[str, Any]:
        return _require_step_keys(v)


create_workflow_version_step_schema = ModelParameterSchema(CreateWorkflowVersionStepParameters)
update_workflow_version_step_schema = ModelParameterSchema(UpdateWorkflowVersionStepParameters)
delete_workflow_version_step_schema = ModelParameterSchema(DeleteWorkflowVersionStepParameters)
create_workflow_version_edge_schema = ModelParameterSchema(CreateWorkflowVersionEdgeParameters)
delete_workflow_version_edge_schema = ModelParameterSchema(DeleteWorkflowVersionEdgeParameters)
update_workflow_version_positions_schema = ModelParameterSchema(UpdateWorkflowVersionPositionsParameters)
activate_workflow_version_schema = ModelParameterSchema(ActivateWorkflowVersionParameters)
deactivate_workflow_version_schema = ModelParameterSchema(DeactivateWorkflowVersionParameters)
create_draft_from_workflow_version_schema = ModelParameterSchema(CreateDraftFromWorkflowVersionParameters)
compute_step_output_schema_schema = ModelParameterSchema(ComputeStepOutputSchemaParameters)
