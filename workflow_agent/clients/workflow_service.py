"""
Workflow Service Client

HTTP client for the workflow builder service. One client implements every
collaborator contract the workflow tools call (steps, edges, versions,
triggers, step output schemas), so it can be handed straight to
WorkflowToolComposer.from_client().

Identifiers arrive from the agent and are placed into request paths one
percent-encoded segment at a time; a value can never address a different
resource than the one it names.

Pattern: Client adapter for microservice communication
"""

from typing import Any, Optional
from urllib.parse import quote

import httpx

from workflow_agent import __version__
from workflow_agent.core.config import Settings
from workflow_agent.core.exceptions import ErrorCode, WorkflowAgentException


DEFAULT_BASE_URL: str = "http://localhost:3000"
DEFAULT_TIMEOUT_SECONDS: float = 30.0
DEFAULT_RETRIES: int = 3

_POOL_LIMITS = httpx.Limits(max_connections=20, max_keepalive_connections=5)


# =============================================================================
# Exceptions
# =============================================================================


class WorkflowServiceError(WorkflowAgentException):
    """
    Exception for workflow service errors.

    Attributes:
        status_code: HTTP status returned by the service, if any.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message, ErrorCode.WORKFLOW_SERVICE_ERROR)
        self.status_code = status_code


class WorkflowEntityNotFoundError(WorkflowServiceError):
    """Exception when the workflow, version or step does not exist."""

    pass


# =============================================================================
# Path Building
# =============================================================================


def _path(*segments: str) -> str:
    """
    Join identifiers into a request path, percent-encoding each segment.

    Raises:
        WorkflowServiceError: If a segment is empty or a dot segment, which
            no encoding can keep from being collapsed.
    """
    encoded = []
    for segment in segments:
        value = str(segment)
        if value in ("", ".", ".."):
            raise WorkflowServiceError(f"Invalid path segment: {value!r}")
        encoded.append(quote(value, safe=""))
    return "/" + "/".join(encoded)


# =============================================================================
# WorkflowServiceClient
# =============================================================================


class WorkflowServiceClient:
    """
    Client for the workflow builder service.

    Example:
        >>> async with WorkflowServiceClient(base_url="http://localhost:3000") as client:
        ...     await client.activate_workflow_version("v1")
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        retries: int = DEFAULT_RETRIES,
    ) -> None:
        """
        Initialize WorkflowServiceClient.

        Args:
            base_url: Base URL of the workflow builder service
            http_client: Optional pre-configured HTTP client (for testing)
            timeout_seconds: Request timeout in seconds
            retries: Connection-level retries; failed responses are never retried
        """
        if http_client is not None:
            self._client = http_client
            self._owns_client = False
        else:
            self._client = httpx.AsyncClient(
                base_url=base_url or DEFAULT_BASE_URL,
                timeout=httpx.Timeout(timeout_seconds),
                headers={
                    "User-Agent": f"workflow-agent/{__version__}",
                    "Accept": "application/json",
                },
                transport=httpx.AsyncHTTPTransport(retries=retries, limits=_POOL_LIMITS),
            )
            self._owns_client = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "WorkflowServiceClient":
        return cls(
            base_url=settings.workflow_service_url,
            timeout_seconds=settings.workflow_service_timeout_seconds,
            retries=settings.workflow_service_retries,
        )

    async def close(self) -> None:
        """Close the HTTP client if owned by this instance."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "WorkflowServiceClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    # =========================================================================
    # Steps
    # =========================================================================

    async def create_workflow_version_step(
        self, *, workspace_id: str, input: dict[str, Any]
    ) -> Any:
        return await self._request(
            "POST", _path("workspaces", workspace_id, "workflow-version-steps"), json=input
        )

    async def update_workflow_version_step(
        self, *, workspace_id: str, workflow_version_id: str, step: dict[str, Any]
    ) -> Any:
        return await self._request(
            "PATCH",
            _path(
                "workspaces", workspace_id,
                "workflow-versions", workflow_version_id,
                "steps", step["id"],
            ),
            json=step,
        )

    async def delete_workflow_version_step(
        self, *, workspace_id: str, workflow_version_id: str, step_id_to_delete: str
    ) -> Any:
        return await self._request(
            "DELETE",
            _path(
                "workspaces", workspace_id,
                "workflow-versions", workflow_version_id,
                "steps", step_id_to_delete,
            ),
        )

    # =========================================================================
    # Edges
    # =========================================================================

    async def create_workflow_version_edge(
        self, *, source: str, target: str, workflow_version_id: str, workspace_id: str
    ) -> Any:
        return await self._request(
            "POST",
            _path("workspaces", workspace_id, "workflow-versions", workflow_version_id, "edges"),
            json={"source": source, "target": target},
        )

    async def delete_workflow_version_edge(
        self, *, source: str, target: str, workflow_version_id: str, workspace_id: str
    ) -> Any:
        return await self._request(
            "POST",
            _path(
                "workspaces", workspace_id,
                "workflow-versions", workflow_version_id,
                "edges", "delete",
            ),
            json={"source": source, "target": target},
        )

    # =========================================================================
    # Versions
    # =========================================================================

    async def update_workflow_version_positions(
        self,
        *,
        workflow_version_id: str,
        positions: list[dict[str, Any]],
        workspace_id: str,
    ) -> Any:
        return await self._request(
            "PUT",
            _path("workspaces", workspace_id, "workflow-versions", workflow_version_id, "positions"),
            json={"positions": positions},
        )

    async def create_draft_from_workflow_version(
        self, *, workspace_id: str, workflow_id: str, workflow_version_id_to_copy: str
    ) -> Any:
        return await self._request(
            "POST",
            _path("workspaces", workspace_id, "workflows", workflow_id, "drafts"),
            json={"workflowVersionIdToCopy": workflow_version_id_to_copy},
        )

    # =========================================================================
    # Triggers
    # =========================================================================

    async def activate_workflow_version(self, workflow_version_id: str) -> Any:
        return await self._request(
            "POST", _path("workflow-versions", workflow_version_id, "activate")
        )

    async def deactivate_workflow_version(self, workflow_version_id: str) -> Any:
        return await self._request(
            "POST", _path("workflow-versions", workflow_version_id, "deactivate")
        )

    # =========================================================================
    # Schemas
    # =========================================================================

    async def compute_step_output_schema(
        self, *, step: dict[str, Any], workspace_id: str
    ) -> Any:
        return await self._request(
            "POST", _path("workspaces", workspace_id, "step-output-schema"), json={"step": step}
        )

    # =========================================================================
    # Transport
    # =========================================================================

    async def _request(
        self, method: str, path: str, json: Optional[dict[str, Any]] = None
    ) -> Any:
        """
        Send a request and decode the JSON body.

        Returns:
            Decoded JSON body, or None for an empty response.

        Raises:
            WorkflowEntityNotFoundError: On 404.
            WorkflowServiceError: On any other failure.
        """
        try:
            response = await self._client.request(method, path, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            detail = _error_detail(e.response)
            if status_code == 404:
                raise WorkflowEntityNotFoundError(
                    f"Workflow entity not found: {detail}", status_code=status_code
                ) from e
            raise WorkflowServiceError(
                f"Workflow service error ({status_code}): {detail}", status_code=status_code
            ) from e
        except httpx.ConnectError as e:
            raise WorkflowServiceError(f"Workflow service unavailable: {e}") from e
        except httpx.TimeoutException as e:
            raise WorkflowServiceError(f"Workflow service request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise WorkflowServiceError(f"Workflow service request failed: {e}") from e

        if not response.content:
            return None
        return response.json()


def _error_detail(response: httpx.Response) -> str:
    """Best-effort message from an error response body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            if body.get(key):
                return str(body[key])
    return str(body)
