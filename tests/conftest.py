"""
Pytest configuration for the workflow agent test suite.

This configuration sets up:
- Test discovery paths
- Shared fixtures (fresh registry, fake workflow collaborators, settings)
- Test markers for categorization
"""

import sys
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest
from pydantic import BaseModel

# Add project root to Python path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def pytest_configure(config):
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "slow: Tests that take a long time to run")


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(autouse=True)
def reset_logging_state():
    """Let each test configure structlog from scratch."""
    from workflow_agent.observability.logging import reset_logging

    reset_logging()
    yield
    reset_logging()


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture
def test_settings():
    """Settings with safe defaults and no real services."""
    from workflow_agent.core.config import Settings

    return Settings(
        service_name="workflow-agent-test",
        environment="development",
        log_level="DEBUG",
        workflow_service_url="http://localhost:3000",
        workflow_service_timeout_seconds=5.0,
        workflow_service_retries=0,
    )


# =============================================================================
# Registry and Definitions
# =============================================================================


class EchoParameters(BaseModel):
    """Parameters for the echo tool used across registry tests."""

    message: str


@pytest.fixture
def registry():
    """Create a fresh ToolRegistry for each test."""
    from workflow_agent.tools.registry import ToolRegistry

    return ToolRegistry()


@pytest.fixture
def echo_schema():
    from workflow_agent.models.domain import ModelParameterSchema

    return ModelParameterSchema(EchoParameters)


@pytest.fixture
def make_definition(echo_schema):
    """Factory for ToolDefinitions sharing the echo schema."""
    from workflow_agent.models.domain import ToolDefinition

    def _make(name: str = "echo", handler: Any = None, description: str = "Echo a message") -> ToolDefinition:
        return ToolDefinition(
            name=name,
            description=description,
            parameters=echo_schema,
            handler=handler,
        )

    return _make


@pytest.fixture
def echo_definition(make_definition):
    """A definition whose handler returns the message and the options it got."""

    async def handler(parameters: dict[str, Any], options: Any) -> dict[str, Any]:
        return {"echoed": parameters["message"], "options": options}

    return make_definition("echo", handler)


# =============================================================================
# Workflow Collaborators
# =============================================================================


@pytest.fixture
def workflow_services() -> AsyncMock:
    """
    One fake implementing every workflow collaborator contract.

    Each method is an AsyncMock returning a result tagged with its own name,
    so tests can assert both the call shape and the untouched pass-through.
    """
    services = AsyncMock()
    for method in (
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
    ):
        getattr(services, method).return_value = {"operation": method}
    return services


@pytest.fixture
def composer(workflow_services):
    from workflow_agent.tools.workflow.composer import WorkflowToolComposer

    return WorkflowToolComposer.from_client(workflow_services)


@pytest.fixture
def workflow_registry(composer, registry):
    """Registry populated with the workflow catalogue."""
    composer.register_workflow_tools(registry)
    return registry
