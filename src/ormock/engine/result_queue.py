# src/ormock/engine/result_queue.py
"""Per-scope queue of canned query outcomes and pluggable handlers.

Outcomes are consumed strictly first in, first out. There is one queue per
scope and every operation pulls from it, regardless of operation name, so
outcomes must be queued in the order the code under test will query.

The queue does no checking of what is queued, except for failures: unless
told otherwise, a failure that is not an exception is wrapped in a base
ORMError so callers can rely on rejected queries raising real errors.

Usage:
    queue = ResultQueue()
    queue.queue_result({"id": 1}).queue_failure("boom")
    queue.dequeue()  # QueuedOutcome(content={"id": 1}, kind=SUCCESS, ...)
"""

from __future__ import annotations

from collections import deque
from typing import Any, Self

from ormock.contracts.enums import OutcomeKind
from ormock.contracts.errors import from_value
from ormock.contracts.outcomes import Handler, OutcomeMeta, QueuedOutcome
from ormock.core.logging import get_logger

logger = get_logger(__name__)


def is_error_like(value: Any) -> bool:
    """The single check deciding whether a failure needs wrapping."""
    return isinstance(value, BaseException)


class ResultQueue:
    """Ordered outcomes plus registered handlers for one scope.

    Only this object's own methods mutate its outcome and handler lists.
    The parent queue is touched only by propagated clears.

    Thread Safety:
        NOT thread-safe. Scopes are meant to be used from a single event
        loop; dequeue is synchronous so overlapping resolutions on one loop
        cannot take the same outcome.
    """

    def __init__(self, *, parent: ResultQueue | None = None) -> None:
        """Initialize an empty queue.

        Args:
            parent: Queue of the enclosing scope, cleared by propagated clears.
        """
        self._parent = parent
        self._outcomes: deque[QueuedOutcome] = deque()
        self._handlers: list[Handler] = []

    @property
    def parent(self) -> ResultQueue | None:
        return self._parent

    @property
    def outcomes(self) -> tuple[QueuedOutcome, ...]:
        """Snapshot of the queued outcomes, oldest first."""
        return tuple(self._outcomes)

    @property
    def handlers(self) -> tuple[Handler, ...]:
        """Snapshot of registered handlers, in registration order."""
        return tuple(self._handlers)

    def __len__(self) -> int:
        return len(self._outcomes)

    def queue_result(
        self,
        content: Any,
        *,
        was_created: bool | None = None,
        affected_rows: Any = None,
    ) -> Self:
        """Queue a success outcome.

        Args:
            content: Value the query resolves with.
            was_created: Created flag for find-or-create style queries.
                Defaults to the scope's created_default.
            affected_rows: Rows returned alongside the content by update
                style queries. Ignored unless a list or tuple.

        Returns:
            The queue, for chaining.
        """
        meta = OutcomeMeta(was_created=was_created, affected_rows=affected_rows)
        self._outcomes.append(QueuedOutcome(content=content, kind=OutcomeKind.SUCCESS, meta=meta))
        return self

    def queue_failure(self, error: Any, *, convert_non_errors: bool = True) -> Self:
        """Queue a failure outcome.

        Args:
            error: Error (or value) the query is rejected with.
            convert_non_errors: Wrap non-exception values in a base ORMError.
                Pass False to store the value untouched.

        Returns:
            The queue, for chaining.
        """
        if convert_non_errors and not is_error_like(error):
            error = from_value(error)
        self._outcomes.append(QueuedOutcome(content=error, kind=OutcomeKind.FAILURE))
        return self

    def register_handler(self, handler: Handler) -> Self:
        """Register a handler, tried after all previously registered ones."""
        self._handlers.append(handler)
        return self

    def dequeue(self) -> QueuedOutcome | None:
        """Remove and return the oldest outcome, or None when empty."""
        if not self._outcomes:
            return None
        return self._outcomes.popleft()

    def clear_queue(self, *, propagate_clear: bool = False) -> Self:
        """Drop every queued outcome.

        Args:
            propagate_clear: Also clear the parent queue (recursively).
        """
        dropped = len(self._outcomes)
        self._outcomes.clear()
        logger.debug("result_queue_cleared", dropped=dropped, propagate=propagate_clear)

        if propagate_clear and self._parent is not None:
            self._parent.clear_queue(propagate_clear=propagate_clear)
        return self

    def clear_handlers(self, *, propagate_clear: bool = False) -> Self:
        """Drop every registered handler.

        Args:
            propagate_clear: Also clear the parent's handlers (recursively).
        """
        dropped = len(self._handlers)
        self._handlers.clear()
        logger.debug("handlers_cleared", dropped=dropped, propagate=propagate_clear)

        if propagate_clear and self._parent is not None:
            self._parent.clear_handlers(propagate_clear=propagate_clear)
        return self

    def clear_all(self, *, propagate_clear: bool = False) -> Self:
        """Drop handlers and queued outcomes."""
        self.clear_handlers(propagate_clear=propagate_clear)
        self.clear_queue(propagate_clear=propagate_clear)
        return self
