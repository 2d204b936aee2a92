"""
Tool Registry

This module implements the catalogue binding tool names to ToolDefinitions,
and the single entry point for invoking them by name.

Pattern: Service Registry (tool inventory with callable handlers)
Pattern: Copy-on-write snapshot for lock-free reads

Concurrency: writers (register, unregister, clear) are serialized by a lock
and publish a brand-new dict; readers grab the current dict reference, which
is a single atomic operation, and never lock. A reader therefore always sees
the whole map as it was before or after a write, never a partial update.
"""

import inspect
import logging
import threading
from typing import Any, Optional

from workflow_agent.core.exceptions import ToolNotExecutableError, ToolNotFoundError
from workflow_agent.models.domain import ToolDefinition

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    In-memory catalogue of name -> ToolDefinition.

    The registry knows nothing about what a tool does. It stores definitions,
    answers lookups and forwards execute() calls to the resolved handler.
    Instances are created explicitly and passed to whoever needs dispatch;
    there is no module-level registry.

    Attributes:
        _tools: Current snapshot mapping tool names to definitions.
        _write_lock: Serializes writers.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.register("activate_workflow_version", definition)
        >>> result = await registry.execute(
        ...     "activate_workflow_version", {"workflowVersionId": "v1"}, options
        ... )
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._tools: dict[str, ToolDefinition] = {}
        self._write_lock = threading.Lock()

    # =========================================================================
    # Writers
    # =========================================================================

    def register(self, name: str, definition: ToolDefinition) -> None:
        """
        Register a definition under the given name.

        If a tool with the same name exists, it is replaced. No validation
        is performed on the definition.

        Args:
            name: The name to register the tool under.
            definition: The ToolDefinition to store.
        """
        with self._write_lock:
            tools = dict(self._tools)
            replaced = name in tools
            tools[name] = definition
            self._tools = tools
        logger.debug(f"{'Replaced' if replaced else 'Registered'} tool: {name}")

    def unregister(self, name: str) -> None:
        """
        Remove a tool from the registry.

        Note:
            Does not raise an error if the tool doesn't exist.
        """
        with self._write_lock:
            if name not in self._tools:
                return
            tools = dict(self._tools)
            del tools[name]
            self._tools = tools
        logger.debug(f"Unregistered tool: {name}")

    def clear(self) -> None:
        """Remove every tool in one atomic swap."""
        with self._write_lock:
            self._tools = {}
        logger.debug("Cleared tool registry")

    # =========================================================================
    # Readers
    # =========================================================================

    def lookup(self, name: str) -> Optional[ToolDefinition]:
        """
        Get the definition currently registered under name.

        Returns:
            The ToolDefinition, or None if the name is not registered.
        """
        return self._tools.get(name)

    def contains(self, name: str) -> bool:
        """Check if a tool is registered."""
        return name in self._tools

    def list_names(self) -> list[str]:
        """
        Snapshot of registered tool names.

        The order happens to be registration order; callers should not
        depend on it.
        """
        return list(self._tools)

    def list_definitions(self) -> list[ToolDefinition]:
        """Snapshot of registered definitions, consistent with list_names()."""
        return list(self._tools.values())

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    # =========================================================================
    # Execution
    # =========================================================================

    async def execute(self, name: str, parameters: Any, options: Any = None) -> Any:
        """
        Invoke the handler registered under name.

        The definition is resolved once; a concurrent register() or clear()
        after resolution does not affect this call. Parameters and options
        are passed to the handler as given. Handler exceptions propagate
        unchanged.

        Args:
            name: Tool name.
            parameters: Parameters, already validated by the caller.
            options: Opaque execution options forwarded to the handler.

        Returns:
            Whatever the handler returns.

        Raises:
            ToolNotFoundError: If no tool is registered under name.
            ToolNotExecutableError: If the tool has no handler.
        """
        definition = self._tools.get(name)
        if definition is None:
            raise ToolNotFoundError(name)
        if definition.handler is None:
            raise ToolNotExecutableError(name)
        return await self.invoke(definition, parameters, options)

    async def invoke(
        self, definition: ToolDefinition, parameters: Any, options: Any = None
    ) -> Any:
        """
        Run an already-resolved definition.

        Callers that looked a tool up once (for example to validate its
        parameters) use this to run that same definition, whatever has been
        registered under its name since.

        Raises:
            ToolNotExecutableError: If the definition has no handler.
        """
        if definition.handler is None:
            raise ToolNotExecutableError(definition.name)

        result = definition.handler(parameters, options)
        if inspect.isawaitable(result):
            result = await result
        return result
