# tests/unit/engine/test_resolution_engine.py
"""Unit tests for ResolutionEngine.

Covers the strategy chain in order: handlers, queue, parent delegation,
fallback, and exhaustion, plus result packaging for each shape.
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from ormock.contracts.config import ScopeOptions
from ormock.contracts.enums import ErrorKind, ResultShape
from ormock.contracts.errors import (
    EmptyResolutionError,
    InvalidQueuedResultError,
    ORMError,
    RejectedValueError,
)
from ormock.contracts.outcomes import (
    Failure,
    NoValue,
    QueuedOutcome,
    ResolutionRequest,
    Value,
)
from ormock.engine.resolution import ResolutionEngine, invoke_handler, settle

# =============================================================================
# Helpers
# =============================================================================


def _request(**kwargs: Any) -> ResolutionRequest:
    return ResolutionRequest(**kwargs)


class _Recorder:
    """Handler that records each call and returns a fixed value."""

    def __init__(self, value: Any = None) -> None:
        self.value = value
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def __call__(self, name: str, args: Any) -> Any:
        self.calls.append((name, tuple(args)))
        return self.value


# =============================================================================
# settle / invoke_handler
# =============================================================================


class TestSettle:
    @pytest.mark.asyncio
    async def test_plain_value_returned(self) -> None:
        assert await settle(5) == 5

    @pytest.mark.asyncio
    async def test_coroutine_awaited(self) -> None:
        async def produce() -> str:
            return "async"

        assert await settle(produce()) == "async"

    @pytest.mark.asyncio
    async def test_future_awaited(self) -> None:
        future: asyncio.Future[int] = asyncio.get_running_loop().create_future()
        future.set_result(3)
        assert await settle(future) == 3


class TestInvokeHandler:
    @pytest.mark.asyncio
    async def test_value(self) -> None:
        decision = await invoke_handler(lambda name, args: "x", _request())
        assert decision == Value("x")

    @pytest.mark.asyncio
    async def test_none_is_no_value(self) -> None:
        decision = await invoke_handler(lambda name, args: None, _request())
        assert decision == NoValue()

    @pytest.mark.asyncio
    async def test_async_none_is_no_value(self) -> None:
        async def handler(name: str, args: Any) -> None:
            return None

        assert await invoke_handler(handler, _request()) == NoValue()

    @pytest.mark.asyncio
    async def test_exception_is_failure(self) -> None:
        error = RuntimeError("handler broke")

        def handler(name: str, args: Any) -> Any:
            raise error

        decision = await invoke_handler(handler, _request())
        assert isinstance(decision, Failure)
        assert decision.error is error

    @pytest.mark.asyncio
    async def test_falsy_values_are_values(self) -> None:
        for falsy in [0, "", False, []]:
            decision = await invoke_handler(lambda name, args, v=falsy: v, _request())
            assert decision == Value(falsy)


# =============================================================================
# Handlers
# =============================================================================


class TestHandlers:
    """Handlers run before the queue and in registration order."""

    @pytest.mark.asyncio
    async def test_handler_value_beats_queue(self, root_engine: ResolutionEngine) -> None:
        root_engine.queue_result("queued")
        root_engine.register_handler(lambda name, args: "from handler")

        assert await root_engine.resolve() == "from handler"
        # The queued outcome is untouched
        assert len(root_engine.queue) == 1

    @pytest.mark.asyncio
    async def test_handler_receives_operation(self, root_engine: ResolutionEngine) -> None:
        recorder = _Recorder("ok")
        root_engine.register_handler(recorder)

        await root_engine.query("find_one", ({"where": {"id": 1}},))

        assert recorder.calls == [("find_one", ({"where": {"id": 1}},))]

    @pytest.mark.asyncio
    async def test_passing_handlers_fall_through_in_order(self, root_engine: ResolutionEngine) -> None:
        order: list[str] = []

        def first(name: str, args: Any) -> None:
            order.append("first")

        def second(name: str, args: Any) -> str:
            order.append("second")
            return "second wins"

        def third(name: str, args: Any) -> str:
            order.append("third")
            return "never"

        root_engine.register_handler(first).register_handler(second).register_handler(third)

        assert await root_engine.resolve() == "second wins"
        assert order == ["first", "second"]

    @pytest.mark.asyncio
    async def test_all_handlers_pass_then_queue(self, root_engine: ResolutionEngine) -> None:
        root_engine.register_handler(lambda name, args: None)
        root_engine.queue_result("queued")

        assert await root_engine.resolve() == "queued"

    @pytest.mark.asyncio
    async def test_async_handler_value(self, root_engine: ResolutionEngine) -> None:
        async def handler(name: str, args: Any) -> dict[str, int]:
            await asyncio.sleep(0)
            return {"id": 7}

        root_engine.register_handler(handler)
        assert await root_engine.resolve() == {"id": 7}

    @pytest.mark.asyncio
    async def test_async_none_passes(self, root_engine: ResolutionEngine) -> None:
        async def handler(name: str, args: Any) -> None:
            return None

        root_engine.register_handler(handler)
        root_engine.queue_result("queued")

        assert await root_engine.resolve() == "queued"

    @pytest.mark.asyncio
    async def test_handler_value_ignores_result_shape(self, root_engine: ResolutionEngine) -> None:
        root_engine.register_handler(lambda name, args: "raw")

        result = await root_engine.resolve(_request(result_shape=ResultShape.WITH_CREATED_FLAG))

        assert result == "raw"

    @pytest.mark.asyncio
    async def test_handler_failure_aborts(self, root_engine: ResolutionEngine) -> None:
        later = _Recorder("later")

        def failing(name: str, args: Any) -> Any:
            raise LookupError("nope")

        root_engine.register_handler(failing).register_handler(later)
        root_engine.queue_result("queued")

        with pytest.raises(LookupError, match="nope"):
            await root_engine.resolve()

        assert later.calls == []
        assert len(root_engine.queue) == 1

    @pytest.mark.asyncio
    async def test_async_handler_failure_aborts(self, root_engine: ResolutionEngine) -> None:
        async def failing(name: str, args: Any) -> Any:
            raise ORMError(ErrorKind.VALIDATION, "bad")

        root_engine.register_handler(failing)

        with pytest.raises(ORMError, match="bad"):
            await root_engine.resolve()

    @pytest.mark.asyncio
    async def test_handler_registered_mid_resolution_not_consulted(self, root_engine: ResolutionEngine) -> None:
        late = _Recorder("late")

        def registering(name: str, args: Any) -> None:
            root_engine.register_handler(late)

        root_engine.register_handler(registering)
        root_engine.queue_result("queued")

        assert await root_engine.resolve() == "queued"
        assert late.calls == []


# =============================================================================
# Queue
# =============================================================================


class TestQueue:
    @pytest.mark.asyncio
    async def test_fifo_order(self, root_engine: ResolutionEngine) -> None:
        root_engine.queue_result("a").queue_result("b").queue_result("c")

        results = [await root_engine.resolve() for _ in range(3)]

        assert results == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_operations_share_one_queue(self, root_engine: ResolutionEngine) -> None:
        root_engine.queue_result("first").queue_result("second")

        assert await root_engine.query("find_one") == "first"
        assert await root_engine.query("find_all") == "second"

    @pytest.mark.asyncio
    async def test_queued_none_is_returned(self, root_engine: ResolutionEngine) -> None:
        root_engine.queue_result(None)
        assert await root_engine.resolve(_request(fallback_fn=lambda: "fallback")) is None

    @pytest.mark.asyncio
    async def test_queued_error_is_raised(self, root_engine: ResolutionEngine) -> None:
        error = ValueError("queued failure")
        root_engine.queue_failure(error)

        with pytest.raises(ValueError) as exc_info:
            await root_engine.resolve()
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_converted_failure_is_base_error(self, root_engine: ResolutionEngine) -> None:
        root_engine.queue_failure("went wrong")

        with pytest.raises(ORMError) as exc_info:
            await root_engine.resolve()

        assert exc_info.value.kind == ErrorKind.BASE
        assert exc_info.value.message == "went wrong"

    @pytest.mark.asyncio
    async def test_unconverted_failure_raises_rejected_value(self, root_engine: ResolutionEngine) -> None:
        payload = {"reason": "custom"}
        root_engine.queue_failure(payload, convert_non_errors=False)

        with pytest.raises(RejectedValueError) as exc_info:
            await root_engine.resolve()

        assert exc_info.value.value is payload
        assert exc_info.value.kind == ErrorKind.REJECTED_VALUE

    @pytest.mark.asyncio
    async def test_failure_consumed_once(self, root_engine: ResolutionEngine) -> None:
        root_engine.queue_failure("once").queue_result("after")

        with pytest.raises(ORMError):
            await root_engine.resolve()
        assert await root_engine.resolve() == "after"

    @pytest.mark.asyncio
    async def test_malformed_entry(self, root_engine: ResolutionEngine) -> None:
        root_engine.queue._outcomes.append(QueuedOutcome(content=1, kind="bogus"))  # type: ignore[arg-type]

        with pytest.raises(InvalidQueuedResultError) as exc_info:
            await root_engine.resolve()

        assert exc_info.value.kind == ErrorKind.INVALID_QUERY_RESULT
        assert len(root_engine.queue) == 0


# =============================================================================
# Result shapes
# =============================================================================


class TestResultShapes:
    @pytest.mark.asyncio
    async def test_plain(self, root_engine: ResolutionEngine) -> None:
        root_engine.queue_result("x", was_created=False, affected_rows=["r"])
        assert await root_engine.resolve() == "x"

    @pytest.mark.asyncio
    async def test_created_flag_defaults_to_scope(self) -> None:
        engine = ResolutionEngine(ScopeOptions(created_default=True))
        engine.queue_result("record")

        result = await engine.resolve(_request(result_shape=ResultShape.WITH_CREATED_FLAG))

        assert result == ("record", True)

    @pytest.mark.asyncio
    async def test_created_flag_scope_default_false(self) -> None:
        engine = ResolutionEngine(ScopeOptions(created_default=False))
        engine.queue_result("record")

        result = await engine.resolve(_request(result_shape=ResultShape.WITH_CREATED_FLAG))

        assert result == ("record", False)

    @pytest.mark.asyncio
    async def test_explicit_false_overrides_default(self) -> None:
        engine = ResolutionEngine(ScopeOptions(created_default=True))
        engine.queue_result("record", was_created=False)

        result = await engine.resolve(_request(result_shape=ResultShape.WITH_CREATED_FLAG))

        assert result == ("record", False)

    @pytest.mark.asyncio
    async def test_affected_rows_list(self, root_engine: ResolutionEngine) -> None:
        root_engine.queue_result(2, affected_rows=["a", "b"])

        result = await root_engine.resolve(_request(result_shape=ResultShape.WITH_AFFECTED_ROWS))

        assert result == (2, ["a", "b"])

    @pytest.mark.asyncio
    async def test_affected_rows_tuple_becomes_list(self, root_engine: ResolutionEngine) -> None:
        root_engine.queue_result(1, affected_rows=("a",))

        result = await root_engine.resolve(_request(result_shape=ResultShape.WITH_AFFECTED_ROWS))

        assert result == (1, ["a"])

    @pytest.mark.asyncio
    async def test_affected_rows_non_list_is_empty(self, root_engine: ResolutionEngine) -> None:
        root_engine.queue_result(1, affected_rows="not a list")

        result = await root_engine.resolve(_request(result_shape=ResultShape.WITH_AFFECTED_ROWS))

        assert result == (1, [])

    @pytest.mark.asyncio
    async def test_affected_rows_missing_is_empty(self, root_engine: ResolutionEngine) -> None:
        root_engine.queue_result(0)

        result = await root_engine.resolve(_request(result_shape=ResultShape.WITH_AFFECTED_ROWS))

        assert result == (0, [])


# =============================================================================
# Parent delegation
# =============================================================================


class TestDelegation:
    @pytest.mark.asyncio
    async def test_empty_child_uses_parent_queue(
        self, root_engine: ResolutionEngine, child_engine: ResolutionEngine
    ) -> None:
        root_engine.queue_result("from parent")
        assert await child_engine.resolve() == "from parent"
        assert len(root_engine.queue) == 0

    @pytest.mark.asyncio
    async def test_child_queue_first(self, root_engine: ResolutionEngine, child_engine: ResolutionEngine) -> None:
        root_engine.queue_result("parent")
        child_engine.queue_result("child")

        assert await child_engine.resolve() == "child"
        assert await child_engine.resolve() == "parent"

    @pytest.mark.asyncio
    async def test_parent_handlers_consulted(self, root_engine: ResolutionEngine, child_engine: ResolutionEngine) -> None:
        recorder = _Recorder("parent handler")
        root_engine.register_handler(recorder)

        assert await child_engine.query("find_all", (1,)) == "parent handler"
        assert recorder.calls == [("find_all", (1,))]

    @pytest.mark.asyncio
    async def test_parent_packages_with_child_shape(
        self, root_engine: ResolutionEngine, child_engine: ResolutionEngine
    ) -> None:
        root_engine.queue_result(3, affected_rows=["x"])

        result = await child_engine.resolve(_request(result_shape=ResultShape.WITH_AFFECTED_ROWS))

        assert result == (3, ["x"])

    @pytest.mark.asyncio
    async def test_parent_failure_propagates(self, root_engine: ResolutionEngine, child_engine: ResolutionEngine) -> None:
        root_engine.queue_failure(TimeoutError("slow"))

        with pytest.raises(TimeoutError):
            await child_engine.resolve()

    @pytest.mark.asyncio
    async def test_scope_stop_propagation(self, root_engine: ResolutionEngine) -> None:
        isolated = ResolutionEngine(ScopeOptions(stop_propagation=True), parent=root_engine)
        root_engine.queue_result("parent")

        with pytest.raises(EmptyResolutionError):
            await isolated.resolve()
        assert len(root_engine.queue) == 1

    @pytest.mark.asyncio
    async def test_request_stop_propagation(self, root_engine: ResolutionEngine, child_engine: ResolutionEngine) -> None:
        root_engine.queue_result("parent")

        result = await child_engine.resolve(_request(stop_propagation=True, fallback_fn=lambda: "local fallback"))

        assert result == "local fallback"
        assert len(root_engine.queue) == 1

    @pytest.mark.asyncio
    async def test_fallback_forwarded_to_parent(self, root_engine: ResolutionEngine, child_engine: ResolutionEngine) -> None:
        """The parent runs the request's fallback when it has nothing either."""
        assert await child_engine.resolve(_request(fallback_fn=lambda: "generated")) == "generated"

    @pytest.mark.asyncio
    async def test_three_levels(self, root_engine: ResolutionEngine, child_engine: ResolutionEngine) -> None:
        grandchild = ResolutionEngine(parent=child_engine)
        root_engine.queue_result("root")

        assert await grandchild.resolve() == "root"


# =============================================================================
# Fallback and exhaustion
# =============================================================================


class TestFallback:
    @pytest.mark.asyncio
    async def test_request_fallback(self, root_engine: ResolutionEngine) -> None:
        assert await root_engine.resolve(_request(fallback_fn=lambda: [1, 2])) == [1, 2]

    @pytest.mark.asyncio
    async def test_scope_fallback(self) -> None:
        engine = ResolutionEngine(ScopeOptions(fallback_fn=lambda: "scope"))
        assert await engine.resolve() == "scope"

    @pytest.mark.asyncio
    async def test_request_fallback_beats_scope_fallback(self) -> None:
        engine = ResolutionEngine(ScopeOptions(fallback_fn=lambda: "scope"))
        assert await engine.resolve(_request(fallback_fn=lambda: "request")) == "request"

    @pytest.mark.asyncio
    async def test_async_fallback_settled(self, root_engine: ResolutionEngine) -> None:
        async def generate() -> str:
            return "async fallback"

        assert await root_engine.resolve(_request(fallback_fn=generate)) == "async fallback"

    @pytest.mark.asyncio
    async def test_fallback_none_is_exhaustion(self, root_engine: ResolutionEngine) -> None:
        with pytest.raises(EmptyResolutionError):
            await root_engine.query("find_one", fallback_fn=lambda: None)

    @pytest.mark.asyncio
    async def test_async_fallback_none_is_exhaustion(self, root_engine: ResolutionEngine) -> None:
        async def generate() -> None:
            return None

        with pytest.raises(EmptyResolutionError):
            await root_engine.resolve(_request(fallback_fn=generate))

    @pytest.mark.asyncio
    async def test_falsy_fallback_is_a_value(self, root_engine: ResolutionEngine) -> None:
        assert await root_engine.resolve(_request(fallback_fn=lambda: 0)) == 0
        assert await root_engine.resolve(_request(fallback_fn=lambda: [])) == []

    @pytest.mark.asyncio
    async def test_fallback_error_propagates(self, root_engine: ResolutionEngine) -> None:
        def generate() -> Any:
            raise ArithmeticError("fallback broke")

        with pytest.raises(ArithmeticError):
            await root_engine.resolve(_request(fallback_fn=generate))

    @pytest.mark.asyncio
    async def test_fallback_not_run_when_queued(self, root_engine: ResolutionEngine) -> None:
        calls: list[int] = []
        root_engine.queue_result("queued")

        result = await root_engine.resolve(_request(fallback_fn=lambda: calls.append(1)))

        assert result == "queued"
        assert calls == []

    @pytest.mark.asyncio
    async def test_exhaustion_raises(self, root_engine: ResolutionEngine) -> None:
        with pytest.raises(EmptyResolutionError) as exc_info:
            await root_engine.resolve()

        assert exc_info.value.kind == ErrorKind.EMPTY_QUERY_QUEUE
        assert "No query results are queued" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_exhaustion_after_queue_drained(self, root_engine: ResolutionEngine) -> None:
        root_engine.queue_result("only")
        await root_engine.resolve()

        with pytest.raises(EmptyResolutionError):
            await root_engine.resolve()

    @pytest.mark.asyncio
    async def test_exhaustion_through_parent(self, child_engine: ResolutionEngine) -> None:
        with pytest.raises(EmptyResolutionError):
            await child_engine.resolve()


# =============================================================================
# Mutators
# =============================================================================


class TestMutators:
    def test_mutators_chain(self, root_engine: ResolutionEngine) -> None:
        result = (
            root_engine.queue_result(1)
            .queue_failure("x")
            .register_handler(lambda name, args: None)
            .clear_queue()
            .clear_handlers()
            .clear_all()
        )
        assert result is root_engine

    def test_child_queue_parent_is_parent_queue(
        self, root_engine: ResolutionEngine, child_engine: ResolutionEngine
    ) -> None:
        assert child_engine.parent is root_engine
        assert child_engine.queue.parent is root_engine.queue

    @pytest.mark.asyncio
    async def test_clear_then_resolve_uses_parent(
        self, root_engine: ResolutionEngine, child_engine: ResolutionEngine
    ) -> None:
        root_engine.queue_result("parent")
        child_engine.queue_result("child").clear_queue()

        assert await child_engine.resolve() == "parent"

    @pytest.mark.asyncio
    async def test_propagated_clear_empties_chain(
        self, root_engine: ResolutionEngine, child_engine: ResolutionEngine
    ) -> None:
        root_engine.queue_result("parent")
        child_engine.queue_result("child")

        child_engine.clear_queue(propagate_clear=True)

        with pytest.raises(EmptyResolutionError):
            await child_engine.resolve()
