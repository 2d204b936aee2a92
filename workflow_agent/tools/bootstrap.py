"""
Tool Catalogue Bootstrap

Builds the registry the agent runtime is handed at startup, and wires the
whole runtime (logging, workflow service client, catalogue, dispatcher) from
Settings. The catalogue is either complete or startup fails: a registry
missing any workflow tool is never returned.

Pattern: Lifespan context manager (startup before yield, shutdown after)
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from workflow_agent import __version__
from workflow_agent.clients.workflow_service import WorkflowServiceClient
from workflow_agent.core.config import Settings, get_settings
from workflow_agent.core.exceptions import ToolRegistrationError
from workflow_agent.observability.logging import configure_logging, get_logger
from workflow_agent.tools.dispatcher import ToolDispatcher
from workflow_agent.tools.registry import ToolRegistry
from workflow_agent.tools.workflow.composer import WORKFLOW_TOOL_NAMES, WorkflowToolComposer

logger = get_logger(__name__)


def build_workflow_tool_registry(
    composer: WorkflowToolComposer,
    registry: Optional[ToolRegistry] = None,
) -> ToolRegistry:
    """
    Register the workflow catalogue and verify it is complete.

    Args:
        composer: Composer bound to the workflow collaborators.
        registry: Registry to populate; a fresh one is created if omitted.

    Returns:
        The populated registry.

    Raises:
        ToolRegistrationError: If registration raised, or if any workflow
            tool is absent or lacks a handler afterwards.
    """
    registry = registry if registry is not None else ToolRegistry()

    try:
        composer.register_workflow_tools(registry)
    except Exception as e:
        logger.error("workflow tool registration failed", error=str(e))
        raise ToolRegistrationError(f"Workflow tool registration failed: {e}") from e

    missing = []
    for name in WORKFLOW_TOOL_NAMES:
        definition = registry.lookup(name)
        if definition is None or not definition.is_executable:
            missing.append(name)

    if missing:
        logger.error("workflow tool catalogue incomplete", missing=missing)
        raise ToolRegistrationError(
            f"Workflow tool catalogue incomplete, missing: {', '.join(missing)}",
            missing=missing,
        )

    logger.info("workflow tools registered", tool_count=len(WORKFLOW_TOOL_NAMES))
    return registry


@asynccontextmanager
async def workflow_tool_dispatcher(
    settings: Optional[Settings] = None,
    client: Optional[WorkflowServiceClient] = None,
) -> AsyncGenerator[ToolDispatcher, None]:
    """
    Start the workflow tool runtime and yield its dispatcher.

    Startup configures logging from settings, connects the workflow service
    client, and registers and verifies the catalogue. Shutdown closes the
    client if it was created here.

    Args:
        settings: Application settings; get_settings() if omitted.
        client: Pre-built workflow service client; left open on exit.

    Raises:
        ToolRegistrationError: If the catalogue cannot be completed.

    Example:
        >>> async with workflow_tool_dispatcher() as dispatcher:
        ...     tools = dispatcher.advertise()
        ...     result = await dispatcher.dispatch(tool_call)
    """
    settings = settings if settings is not None else get_settings()
    configure_logging(level=settings.log_level, service_name=settings.service_name)
    logger.info(
        "workflow agent tools starting",
        version=__version__,
        environment=settings.environment,
        workflow_service_url=settings.workflow_service_url,
    )

    owns_client = client is None
    if client is None:
        client = WorkflowServiceClient.from_settings(settings)

    try:
        registry = build_workflow_tool_registry(WorkflowToolComposer.from_client(client))
        yield ToolDispatcher.from_settings(registry, settings)
    finally:
        if owns_client:
            await client.close()
        logger.info("workflow agent tools shut down")
