"""Queued outcomes, resolution requests, and handler results.

These types answer: "What was queued, what is being asked, and what did a
single strategy decide?"

HandlerOutcome is an explicit three-way result instead of relying on
exceptions turning into rejections:
- Value: the strategy produced a result, stop here
- NoValue: the strategy passed, try the next one
- Failure: the strategy failed, abort the resolution with this error
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from ormock.contracts.enums import OutcomeKind, ResultShape

# A handler receives the operation name and the original argument list.
# It may return a value, None (pass), or an awaitable settling to either.
type Handler = Callable[[str, Sequence[Any]], Any | Awaitable[Any]]

# A fallback generator takes no arguments.
type FallbackFn = Callable[[], Any | Awaitable[Any]]


@dataclass(frozen=True, slots=True)
class OutcomeMeta:
    """Operation-specific hints attached when an outcome is queued.

    Attributes:
        was_created: Created flag for WITH_CREATED_FLAG requests. None means
            "use the scope's created_default".
        affected_rows: Rows for WITH_AFFECTED_ROWS requests. Anything other
            than a list or tuple is treated as no rows.
    """

    was_created: bool | None = None
    affected_rows: Any = None


@dataclass(frozen=True, slots=True)
class QueuedOutcome:
    """A canned success or failure waiting in a result queue.

    Consumed exactly once, first in first out.
    """

    content: Any
    kind: OutcomeKind
    meta: OutcomeMeta = field(default_factory=OutcomeMeta)


@dataclass(frozen=True, slots=True)
class ResolutionRequest:
    """Everything a scope needs to resolve one mocked operation.

    Attributes:
        operation_name: Logical query name (e.g., "find_all"). Only passed to
            handlers and logs; the engine never branches on it.
        operation_args: The caller's original arguments, forwarded verbatim.
        result_shape: How a queued success is packaged.
        stop_propagation: Request-level override preventing parent delegation.
        fallback_fn: Request-level fallback generator, overriding the scope's.
    """

    operation_name: str = "query"
    operation_args: tuple[Any, ...] = ()
    result_shape: ResultShape = ResultShape.PLAIN
    stop_propagation: bool = False
    fallback_fn: FallbackFn | None = None


@dataclass(frozen=True, slots=True)
class Value:
    """A strategy produced a defined result."""

    value: Any


@dataclass(frozen=True, slots=True)
class NoValue:
    """A strategy passed without producing anything."""


@dataclass(frozen=True, slots=True)
class Failure:
    """A strategy failed; resolution stops with this error."""

    error: BaseException


type HandlerOutcome = Value | NoValue | Failure
