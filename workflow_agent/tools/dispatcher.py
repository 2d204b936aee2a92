"""
Tool Dispatcher

The agent-runtime boundary in front of the ToolRegistry. The registry itself
neither validates parameters nor translates failures; the dispatcher does
both for the runtime:

1. resolve the tool and validate the raw arguments against its schema,
2. execute the resolved definition with the caller's execution options,
   bounded by the optional timeout and the caller's abort signal,
3. turn every outcome into a ToolResult the agent can read, with the error
   kind, tool name and underlying message on failure.

Pattern: Command Executor (executes tool calls as commands)
Pattern: Fail-fast validation with graceful error wrapping
"""

import asyncio
from collections.abc import Callable
from typing import Any, Optional

from workflow_agent.core.config import Settings
from workflow_agent.core.exceptions import (
    ErrorCode,
    ToolCancelledError,
    ToolError,
    ToolNotFoundError,
    ToolParameterValidationError,
    ToolTimeoutError,
)
from workflow_agent.models.domain import ToolCall, ToolDefinition, ToolExecutionOptions, ToolResult
from workflow_agent.observability.logging import correlation_id_context, get_logger
from workflow_agent.tools.registry import ToolRegistry

logger = get_logger(__name__)


class ToolDispatcher:
    """
    Validates and dispatches agent tool calls through a ToolRegistry.

    No ordering is imposed between concurrent dispatches, even for the same
    tool; callers that need sequencing must serialize themselves.

    Attributes:
        registry: The ToolRegistry to dispatch through.
        timeout_seconds: Per-call timeout, or None for no timeout.

    Example:
        >>> dispatcher = ToolDispatcher(registry)
        >>> result = await dispatcher.dispatch(tool_call)
        >>> messages.append(result.to_message_dict())
    """

    def __init__(
        self, registry: ToolRegistry, timeout_seconds: Optional[float] = None
    ) -> None:
        self.registry = registry
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_settings(cls, registry: ToolRegistry, settings: Settings) -> "ToolDispatcher":
        return cls(registry, timeout_seconds=settings.tool_timeout_seconds)

    # =========================================================================
    # Introspection
    # =========================================================================

    def advertise(self) -> list[dict[str, Any]]:
        """Function schemas of every registered tool, for the LLM request."""
        return [definition.to_function_schema() for definition in self.registry.list_definitions()]

    # =========================================================================
    # Validation
    # =========================================================================

    def validate(self, tool_call: ToolCall) -> tuple[ToolDefinition, dict[str, Any]]:
        """
        Resolve the tool and validate the call's arguments.

        Returns:
            The resolved definition and the validated parameters.

        Raises:
            ToolNotFoundError: If the tool is not registered.
            ToolParameterValidationError: If the arguments fail the schema.
        """
        definition = self.registry.lookup(tool_call.name)
        if definition is None:
            raise ToolNotFoundError(tool_call.name)

        try:
            parameters = definition.parameters.validate(tool_call.arguments)
        except ValueError as e:
            errors = _validation_errors(e)
            field = ".".join(str(part) for part in errors[0]["loc"]) if errors else None
            raise ToolParameterValidationError(
                f"Invalid parameters for {tool_call.name}: {e}",
                tool_name=tool_call.name,
                field=field,
                errors=errors,
            ) from e

        return definition, parameters

    # =========================================================================
    # Dispatch
    # =========================================================================

    async def dispatch(
        self,
        tool_call: ToolCall,
        options: Optional[ToolExecutionOptions] = None,
    ) -> ToolResult:
        """
        Validate and execute a single tool call.

        Args:
            tool_call: The call as parsed from the LLM response.
            options: Execution options forwarded to the handler; defaults to
                options carrying only the tool call id.

        Returns:
            ToolResult with the handler's result, or an error result.
        """
        if options is None:
            options = ToolExecutionOptions(tool_call_id=tool_call.id)

        with correlation_id_context(tool_call.id):
            log = logger.bind(tool_name=tool_call.name)
            try:
                definition, parameters = self.validate(tool_call)
                log.debug("dispatching tool")
                content = await self._execute(definition, parameters, options)
            except ToolError as e:
                log.warning("tool call rejected", error_code=ErrorCode(e.error_code).value, error=e.message)
                return self._error_result(tool_call, e.error_code, e.message)
            except Exception as e:
                log.error("tool handler failed", error=str(e), error_type=type(e).__name__)
                return self._error_result(
                    tool_call, ErrorCode.HANDLER_FAILURE, f"Tool execution failed: {e}"
                )

            log.info("tool executed")
            return ToolResult(
                tool_call_id=tool_call.id,
                tool_name=tool_call.name,
                content=content,
            )

    async def dispatch_batch(
        self,
        tool_calls: list[ToolCall],
        options_factory: Optional[Callable[[ToolCall], ToolExecutionOptions]] = None,
    ) -> list[ToolResult]:
        """
        Dispatch several tool calls concurrently.

        Results come back in the order of tool_calls; a failure in one call
        does not affect the others.

        Args:
            tool_calls: Calls to dispatch.
            options_factory: Builds per-call options; defaults as in dispatch().
        """
        if not tool_calls:
            return []

        results = await asyncio.gather(
            *[
                self.dispatch(tc, options_factory(tc) if options_factory else None)
                for tc in tool_calls
            ]
        )
        return list(results)

    async def _execute(
        self,
        definition: ToolDefinition,
        parameters: dict[str, Any],
        options: ToolExecutionOptions,
    ) -> Any:
        """
        Run the validated definition, bounded by the timeout and the abort signal.

        Raises:
            ToolTimeoutError: If the timeout elapses first.
            ToolCancelledError: If the abort signal is (or becomes) set first;
                a running handler is cancelled.
        """
        name = definition.name
        signal = options.abort_signal
        if signal is None:
            execution = self.registry.invoke(definition, parameters, options)
            if self.timeout_seconds is None:
                return await execution
            try:
                return await asyncio.wait_for(execution, timeout=self.timeout_seconds)
            except asyncio.TimeoutError as e:
                raise ToolTimeoutError(name, self.timeout_seconds) from e

        if signal.is_set():
            raise ToolCancelledError(name)

        execution = asyncio.ensure_future(self.registry.invoke(definition, parameters, options))
        abort = asyncio.ensure_future(signal.wait())
        try:
            done, _ = await asyncio.wait(
                {execution, abort},
                timeout=self.timeout_seconds,
                return_when=asyncio.FIRST_COMPLETED,
            )
            if execution in done:
                return execution.result()
        finally:
            abort.cancel()
            if not execution.done():
                execution.cancel()
                # Let the handler unwind before reporting.
                await asyncio.gather(execution, return_exceptions=True)

        if abort in done:
            raise ToolCancelledError(name)
        raise ToolTimeoutError(name, self.timeout_seconds)

    @staticmethod
    def _error_result(tool_call: ToolCall, error_code: str, message: str) -> ToolResult:
        return ToolResult(
            tool_call_id=tool_call.id,
            tool_name=tool_call.name,
            content=message,
            is_error=True,
            error_code=ErrorCode(error_code).value,
        )


def _validation_errors(error: ValueError) -> list[dict[str, Any]]:
    """Pull structured entries out of a pydantic ValidationError, if it is one."""
    errors = getattr(error, "errors", None)
    if not callable(errors):
        return []
    return [
        {"loc": list(entry.get("loc", ())), "msg": entry.get("msg", ""), "type": entry.get("type", "")}
        for entry in errors()
    ]

