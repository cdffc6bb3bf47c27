# src/ormock/engine/resolution.py
"""Resolution engine: decides what every mocked query returns.

A resolution walks a fixed chain of strategies and stops at the first one
that settles the query:

1. Handlers, in registration order. A handler returning (or settling to)
   None passes; any other value is the result, returned as-is; an
   exception aborts the resolution.
2. The result queue. The oldest outcome is taken; failures are raised,
   successes are packaged according to the request's result shape.
3. The parent scope, unless this scope or the request stops propagation.
   The request is forwarded unchanged, fallback included.
4. The fallback generator: the request's, else the scope's. A fallback
   settling to None produces nothing.
5. Otherwise EmptyResolutionError.

Every strategy is fully settled (awaited) before the next one is tried,
and the queue is read at the synchronous point the chain reaches it. Two
overlapping resolutions on the same scope therefore never take the same
outcome; whichever reaches the queue first takes the head.

Usage:
    root = ResolutionEngine()
    users = ResolutionEngine(ScopeOptions(created_default=False), parent=root)
    root.queue_result("shared")
    await users.resolve(ResolutionRequest("find_all"))  # "shared"
"""

from __future__ import annotations

import inspect
from collections.abc import Sequence
from typing import Any, Self

from ormock.contracts.config import ScopeOptions
from ormock.contracts.enums import OutcomeKind, ResultShape
from ormock.contracts.errors import (
    EmptyResolutionError,
    InvalidQueuedResultError,
    RejectedValueError,
)
from ormock.contracts.outcomes import (
    Failure,
    FallbackFn,
    Handler,
    HandlerOutcome,
    NoValue,
    QueuedOutcome,
    ResolutionRequest,
    Value,
)
from ormock.core.logging import get_logger
from ormock.engine.result_queue import ResultQueue, is_error_like

logger = get_logger(__name__)


async def settle(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it."""
    if inspect.isawaitable(value):
        return await value
    return value


async def invoke_handler(handler: Handler, request: ResolutionRequest) -> HandlerOutcome:
    """Run one handler and classify what it did.

    Synchronous and asynchronous None are treated the same: both pass.
    """
    try:
        result = await settle(handler(request.operation_name, request.operation_args))
    except Exception as exc:
        return Failure(exc)
    if result is None:
        return NoValue()
    return Value(result)


class ResolutionEngine:
    """Resolution chain for one scope.

    Owns a ResultQueue and exposes its mutators, each returning the engine
    for chaining. The parent is fixed at construction, so scopes always
    form a tree and delegation cannot loop.

    Attributes:
        options: Scope options (propagation, created default, fallback).
        parent: Engine consulted once the local queue is empty. Not owned.
        queue: This scope's outcomes and handlers.
    """

    def __init__(
        self,
        options: ScopeOptions | None = None,
        *,
        parent: ResolutionEngine | None = None,
    ) -> None:
        self._options = options if options is not None else ScopeOptions()
        self._parent = parent
        self._queue = ResultQueue(parent=parent.queue if parent is not None else None)

    @property
    def options(self) -> ScopeOptions:
        return self._options

    @property
    def parent(self) -> ResolutionEngine | None:
        return self._parent

    @property
    def queue(self) -> ResultQueue:
        return self._queue

    # =========================================================================
    # Queue mutators
    # =========================================================================

    def queue_result(
        self,
        content: Any,
        *,
        was_created: bool | None = None,
        affected_rows: Any = None,
    ) -> Self:
        self._queue.queue_result(content, was_created=was_created, affected_rows=affected_rows)
        return self

    def queue_failure(self, error: Any, *, convert_non_errors: bool = True) -> Self:
        self._queue.queue_failure(error, convert_non_errors=convert_non_errors)
        return self

    def register_handler(self, handler: Handler) -> Self:
        self._queue.register_handler(handler)
        return self

    def clear_queue(self, *, propagate_clear: bool = False) -> Self:
        self._queue.clear_queue(propagate_clear=propagate_clear)
        return self

    def clear_handlers(self, *, propagate_clear: bool = False) -> Self:
        self._queue.clear_handlers(propagate_clear=propagate_clear)
        return self

    def clear_all(self, *, propagate_clear: bool = False) -> Self:
        self._queue.clear_all(propagate_clear=propagate_clear)
        return self

    # =========================================================================
    # Resolution
    # =========================================================================

    async def query(
        self,
        operation_name: str,
        operation_args: Sequence[Any] = (),
        *,
        result_shape: ResultShape = ResultShape.PLAIN,
        stop_propagation: bool = False,
        fallback_fn: FallbackFn | None = None,
    ) -> Any:
        """Build a ResolutionRequest and resolve it."""
        request = ResolutionRequest(
            operation_name=operation_name,
            operation_args=tuple(operation_args),
            result_shape=result_shape,
            stop_propagation=stop_propagation,
            fallback_fn=fallback_fn,
        )
        return await self.resolve(request)

    async def resolve(self, request: ResolutionRequest | None = None) -> Any:
        """Resolve a request through handlers, queue, parent, and fallback.

        Args:
            request: What is being asked. Defaults to a plain "query".

        Returns:
            The resolved value.

        Raises:
            InvalidQueuedResultError: The dequeued entry is malformed.
            RejectedValueError: A queued failure holds a non-exception value.
            EmptyResolutionError: Nothing produced a result.
            Exception: Whatever a handler, queued failure, parent, or
                fallback raised, unchanged.
        """
        if request is None:
            request = ResolutionRequest()
        log = logger.bind(operation=request.operation_name)

        for handler in self._queue.handlers:
            decision = await invoke_handler(handler, request)
            match decision:
                case Value(value=value):
                    log.debug("query_resolved", strategy="handler")
                    return value
                case Failure(error=error):
                    log.debug("query_rejected", strategy="handler", error_type=type(error).__name__)
                    raise error
                case NoValue():
                    continue

        outcome = self._queue.dequeue()
        if outcome is not None:
            return self._unpack(outcome, request.result_shape, log)

        if self._parent is not None and not (self._options.stop_propagation or request.stop_propagation):
            log.debug("query_delegated", strategy="parent")
            return await self._parent.resolve(request)

        fallback = request.fallback_fn if request.fallback_fn is not None else self._options.fallback_fn
        if fallback is not None:
            generated = await settle(fallback())
            if generated is not None:
                log.debug("query_resolved", strategy="fallback")
                return generated

        log.warning("query_unresolved", reason="empty queue and no fallback value")
        raise EmptyResolutionError()

    def _unpack(self, outcome: QueuedOutcome, shape: ResultShape, log: Any) -> Any:
        match outcome:
            case QueuedOutcome(kind=OutcomeKind.FAILURE, content=content):
                log.debug("query_rejected", strategy="queue")
                if is_error_like(content):
                    raise content
                raise RejectedValueError(content)
            case QueuedOutcome(kind=OutcomeKind.SUCCESS):
                log.debug("query_resolved", strategy="queue")
                return self._package(outcome, shape)
            case _:
                log.warning("invalid_queued_result", entry=repr(outcome))
                raise InvalidQueuedResultError()

    def _package(self, outcome: QueuedOutcome, shape: ResultShape) -> Any:
        """Package a queued success for the requested shape."""
        match shape:
            case ResultShape.WITH_CREATED_FLAG:
                was_created = outcome.meta.was_created
                created = self._options.created_default if was_created is None else was_created
                return (outcome.content, bool(created))
            case ResultShape.WITH_AFFECTED_ROWS:
                rows = outcome.meta.affected_rows
                return (outcome.content, list(rows) if isinstance(rows, list | tuple) else [])
            case _:
                return outcome.content
