"""
Tests for Tool Registry

Test Categories:
- ToolRegistry class
- register(name, definition): insert and replace
- lookup / contains / list_names / list_definitions
- execute(name, parameters, options): resolution, failures, pass-through
- clear(): atomic removal
- Concurrent readers and writers

Pattern: Service Registry
"""

import asyncio
import threading
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from workflow_agent.core.exceptions import ErrorCode, ToolNotExecutableError, ToolNotFoundError
from workflow_agent.tools.registry import ToolRegistry


# =============================================================================
# ToolRegistry Class Tests
# =============================================================================


class TestToolRegistryClass:
    """Tests for ToolRegistry class structure."""

    def test_tool_registry_starts_empty(self, registry: ToolRegistry) -> None:
        assert registry.list_names() == []
        assert registry.list_definitions() == []
        assert len(registry) == 0

    def test_instances_are_independent(self, echo_definition) -> None:
        """Registries are explicit instances, not a shared global."""
        first = ToolRegistry()
        second = ToolRegistry()

        first.register("echo", echo_definition)

        assert first.contains("echo")
        assert not second.contains("echo")


# =============================================================================
# register() Method Tests
# =============================================================================


class TestToolRegistryRegister:
    """Tests for register method."""

    def test_register_adds_tool(self, registry: ToolRegistry, echo_definition) -> None:
        registry.register("echo", echo_definition)

        assert registry.contains("echo")
        assert "echo" in registry

    def test_register_uses_provided_name(self, registry: ToolRegistry, make_definition) -> None:
        registry.register("custom_name", make_definition("original_name"))

        assert registry.contains("custom_name")
        assert not registry.contains("original_name")

    def test_register_overwrites_existing(self, registry: ToolRegistry, make_definition) -> None:
        """Registering the same name twice keeps only the second definition."""
        first = make_definition("tool", description="Version 1")
        second = make_definition("tool", description="Version 2")

        registry.register("tool", first)
        registry.register("tool", second)

        assert registry.lookup("tool") is second
        assert registry.list_names() == ["tool"]
        assert first not in registry.list_definitions()

    def test_register_accepts_definition_without_handler(
        self, registry: ToolRegistry, make_definition
    ) -> None:
        registry.register("schema_only", make_definition("schema_only"))

        assert registry.contains("schema_only")
        assert registry.lookup("schema_only").is_executable is False


# =============================================================================
# Read Method Tests
# =============================================================================


class TestToolRegistryReads:
    """Tests for lookup, contains and enumeration."""

    def test_lookup_returns_registered_definition(
        self, registry: ToolRegistry, echo_definition
    ) -> None:
        registry.register("echo", echo_definition)

        assert registry.lookup("echo") is echo_definition

    def test_lookup_unknown_returns_none(self, registry: ToolRegistry) -> None:
        assert registry.lookup("nonexistent") is None

    def test_contains_unknown_is_false(self, registry: ToolRegistry) -> None:
        assert registry.contains("nonexistent") is False

    def test_enumeration_is_consistent(self, registry: ToolRegistry, make_definition) -> None:
        for name in ("t1", "t2", "t3"):
            registry.register(name, make_definition(name))

        assert set(registry.list_names()) == {"t1", "t2", "t3"}
        assert len(registry.list_definitions()) == 3
        assert {d.name for d in registry.list_definitions()} == {"t1", "t2", "t3"}

    def test_list_names_is_a_snapshot(self, registry: ToolRegistry, make_definition) -> None:
        registry.register("t1", make_definition("t1"))
        names = registry.list_names()

        registry.register("t2", make_definition("t2"))

        assert names == ["t1"]

    def test_unregister_removes_tool(self, registry: ToolRegistry, echo_definition) -> None:
        registry.register("echo", echo_definition)

        registry.unregister("echo")
        registry.unregister("echo")

        assert not registry.contains("echo")


# =============================================================================
# execute() Method Tests
# =============================================================================


class TestToolRegistryExecute:
    """Tests for execute method."""

    @pytest.mark.asyncio
    async def test_execute_returns_handler_result(
        self, registry: ToolRegistry, echo_definition
    ) -> None:
        registry.register("echo", echo_definition)

        result = await registry.execute("echo", {"message": "hi"}, None)

        assert result["echoed"] == "hi"

    @pytest.mark.asyncio
    async def test_execute_forwards_options_verbatim(
        self, registry: ToolRegistry, make_definition
    ) -> None:
        handler = AsyncMock(return_value="ok")
        registry.register("echo", make_definition("echo", handler))
        parameters = {"message": "hi"}
        options = object()

        await registry.execute("echo", parameters, options)

        handler.assert_awaited_once()
        args = handler.await_args.args
        assert args[0] is parameters
        assert args[1] is options

    @pytest.mark.asyncio
    async def test_execute_unknown_raises_tool_not_found(self, registry: ToolRegistry) -> None:
        with pytest.raises(ToolNotFoundError) as exc_info:
            await registry.execute("nonexistent", {}, None)

        assert exc_info.value.tool_name == "nonexistent"
        assert exc_info.value.error_code == ErrorCode.TOOL_NOT_FOUND
        assert "nonexistent" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_execute_without_handler_raises_not_executable(
        self, registry: ToolRegistry, make_definition
    ) -> None:
        registry.register("schema_only", make_definition("schema_only"))

        with pytest.raises(ToolNotExecutableError) as exc_info:
            await registry.execute("schema_only", {"message": "hi"}, None)

        assert exc_info.value.tool_name == "schema_only"
        assert exc_info.value.error_code == ErrorCode.TOOL_NOT_EXECUTABLE

    @pytest.mark.asyncio
    async def test_execute_propagates_handler_exception_unwrapped(
        self, registry: ToolRegistry, make_definition
    ) -> None:
        class StepNotFound(Exception):
            pass

        error = StepNotFound("step s9 does not exist")
        registry.register("echo", make_definition("echo", AsyncMock(side_effect=error)))

        with pytest.raises(StepNotFound) as exc_info:
            await registry.execute("echo", {"message": "hi"}, None)

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_execute_accepts_sync_handler(
        self, registry: ToolRegistry, make_definition
    ) -> None:
        handler = MagicMock(return_value={"sync": True})
        registry.register("echo", make_definition("echo", handler))

        result = await registry.execute("echo", {"message": "hi"}, None)

        assert result == {"sync": True}

    @pytest.mark.asyncio
    async def test_in_flight_execute_keeps_resolved_definition(
        self, registry: ToolRegistry, make_definition
    ) -> None:
        """Replacing a tool does not affect a call that already resolved it."""
        started = asyncio.Event()
        release = asyncio.Event()

        async def old_handler(parameters: dict, options: Any) -> str:
            started.set()
            await release.wait()
            return "old"

        async def new_handler(parameters: dict, options: Any) -> str:
            return "new"

        registry.register("tool", make_definition("tool", old_handler))
        in_flight = asyncio.create_task(registry.execute("tool", {}, None))
        await started.wait()

        registry.register("tool", make_definition("tool", new_handler))
        registry.clear()
        release.set()

        assert await in_flight == "old"

    @pytest.mark.asyncio
    async def test_invoke_runs_given_definition_not_current_one(
        self, registry: ToolRegistry, make_definition
    ) -> None:
        old = make_definition("tool", AsyncMock(return_value="old"))
        registry.register("tool", old)
        registry.register("tool", make_definition("tool", AsyncMock(return_value="new")))

        assert await registry.invoke(old, {"message": "hi"}, None) == "old"

    @pytest.mark.asyncio
    async def test_invoke_without_handler_raises_not_executable(
        self, registry: ToolRegistry, make_definition
    ) -> None:
        with pytest.raises(ToolNotExecutableError) as exc_info:
            await registry.invoke(make_definition("schema_only"), {}, None)

        assert exc_info.value.tool_name == "schema_only"



# =============================================================================
# clear() Method Tests
# =============================================================================


class TestToolRegistryClear:
    """Tests for clear method."""

    def test_clear_empty_registry(self, registry: ToolRegistry) -> None:
        registry.clear()

        assert registry.list_names() == []

    def test_clear_populated_registry(self, registry: ToolRegistry, make_definition) -> None:
        for name in ("t1", "t2", "t3"):
            registry.register(name, make_definition(name))

        registry.clear()

        assert registry.list_names() == []
        assert registry.list_definitions() == []

    def test_register_after_clear_is_fresh_insert(
        self, registry: ToolRegistry, make_definition
    ) -> None:
        registry.register("t1", make_definition("t1"))
        registry.clear()

        registry.register("t2", make_definition("t2"))

        assert registry.list_names() == ["t2"]
        assert registry.lookup("t1") is None


# =============================================================================
# Concurrency Tests
# =============================================================================


@pytest.mark.slow
class TestToolRegistryConcurrency:
    """Readers on other threads only ever see whole snapshots."""

    def test_readers_see_before_or_after_clear(self, make_definition) -> None:
        registry = ToolRegistry()
        names = {f"tool_{i}" for i in range(50)}
        observed: list[set[str]] = []
        stop = threading.Event()

        def reader() -> None:
            while True:
                observed.append(set(registry.list_names()))
                if stop.is_set():
                    break

        for _ in range(20):
            for name in names:
                registry.register(name, make_definition(name))

            threads = [threading.Thread(target=reader) for _ in range(4)]
            for thread in threads:
                thread.start()
            registry.clear()
            stop.set()
            for thread in threads:
                thread.join()
            stop.clear()

        assert observed
        for snapshot in observed:
            assert snapshot == names or snapshot == set()

    def test_concurrent_registers_are_all_kept(self, make_definition) -> None:
        registry = ToolRegistry()

        def writer(offset: int) -> None:
            for i in range(100):
                name = f"tool_{offset}_{i}"
                registry.register(name, make_definition(name))

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry) == 800
        assert len(registry.list_definitions()) == len(registry.list_names())
