"""Error placeholders mirroring the ORM's error names.

Errors are tagged variants: a single ``ORMError`` exception carries an
``ErrorKind`` tag plus an optional detail payload holding only the fields
that kind needs. The ORM's class hierarchy is expressed as data in
``_PARENT_KINDS`` and queried with ``is_kind``.

The engine raises three errors of its own, as subclasses so callers can
catch them directly:
- InvalidQueuedResultError: a queued entry is malformed
- EmptyResolutionError: every resolution strategy was exhausted
- RejectedValueError: a queued failure whose content is not an exception
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ormock.contracts.enums import ErrorKind

MOCK_SQL = "/* ormock; no SQL generated */"

# Child kind -> the kinds it directly "is". Unique-constraint errors are
# both validation and database errors, as in the ORM.
_PARENT_KINDS: dict[ErrorKind, tuple[ErrorKind, ...]] = {
    ErrorKind.BASE: (),
    ErrorKind.VALIDATION: (ErrorKind.BASE,),
    ErrorKind.DATABASE: (ErrorKind.BASE,),
    ErrorKind.TIMEOUT: (ErrorKind.DATABASE,),
    ErrorKind.UNIQUE_CONSTRAINT: (ErrorKind.VALIDATION, ErrorKind.DATABASE),
    ErrorKind.FOREIGN_KEY_CONSTRAINT: (ErrorKind.DATABASE,),
    ErrorKind.EXCLUSION_CONSTRAINT: (ErrorKind.DATABASE,),
    ErrorKind.CONNECTION: (ErrorKind.BASE,),
    ErrorKind.CONNECTION_REFUSED: (ErrorKind.CONNECTION,),
    ErrorKind.ACCESS_DENIED: (ErrorKind.CONNECTION,),
    ErrorKind.HOST_NOT_FOUND: (ErrorKind.CONNECTION,),
    ErrorKind.HOST_NOT_REACHABLE: (ErrorKind.CONNECTION,),
    ErrorKind.INVALID_CONNECTION: (ErrorKind.CONNECTION,),
    ErrorKind.CONNECTION_TIMED_OUT: (ErrorKind.CONNECTION,),
    ErrorKind.INSTANCE: (ErrorKind.BASE,),
    ErrorKind.INVALID_QUERY_RESULT: (ErrorKind.BASE,),
    ErrorKind.EMPTY_QUERY_QUEUE: (ErrorKind.BASE,),
    ErrorKind.REJECTED_VALUE: (ErrorKind.BASE,),
}

_DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.VALIDATION: "Validation Error",
    ErrorKind.TIMEOUT: "Query Timed Out",
    ErrorKind.CONNECTION: "Connection Error",
    ErrorKind.INVALID_QUERY_RESULT: "Invalid query result was queued. Unable to complete mock query",
    ErrorKind.EMPTY_QUERY_QUEUE: "No query results are queued. Unexpected query attempted to be run",
}


# =============================================================================
# Detail payloads
# =============================================================================


@dataclass(frozen=True, slots=True)
class ValidationErrorItem:
    """A single validation failure.

    Attributes:
        message: Human-readable failure description.
        type: Failure category (e.g., "Validation error", "InvalidEmail").
        path: Field the failure belongs to.
        value: The offending value, if known.
    """

    message: str
    type: str
    path: str | None
    value: Any = None


@dataclass(frozen=True, slots=True)
class ValidationDetail:
    """Payload for validation and unique-constraint errors."""

    items: tuple[ValidationErrorItem, ...] = ()
    fields: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ConstraintDetail:
    """Payload for foreign-key and exclusion constraint errors."""

    fields: tuple[str, ...] = ()
    table: str | None = None
    value: Any = None
    index: str | None = None
    constraint: str | None = None


type ErrorDetail = ValidationDetail | ConstraintDetail


# =============================================================================
# Error type
# =============================================================================


class ORMError(Exception):
    """Tagged error placeholder.

    Attributes:
        kind: Which ORM error this stands in for.
        message: Error message.
        detail: Kind-specific payload (validation items or constraint info).
        parent: The underlying error for database and connection kinds.
            Timeout and constraint errors are their own parent.
    """

    def __init__(
        self,
        kind: ErrorKind = ErrorKind.BASE,
        message: str | None = None,
        *,
        detail: ErrorDetail | None = None,
        parent: BaseException | None = None,
    ) -> None:
        self.kind = kind
        self.message = message if message is not None else _DEFAULT_MESSAGES.get(kind, "")
        self.detail = detail
        self.parent = parent
        super().__init__(self.message)

    @property
    def name(self) -> str:
        """The ORM's name for this error."""
        return error_name(self.kind)

    @property
    def original(self) -> BaseException | None:
        """Alias of ``parent``, as exposed by the ORM."""
        return self.parent

    @property
    def sql(self) -> str | None:
        """Placeholder SQL for database-family errors, otherwise None."""
        if is_kind(self, ErrorKind.DATABASE):
            return MOCK_SQL
        return None

    @property
    def errors(self) -> tuple[ValidationErrorItem, ...]:
        """Validation items carried by this error (empty for other kinds)."""
        if isinstance(self.detail, ValidationDetail):
            return self.detail.items
        return ()

    @property
    def fields(self) -> tuple[str, ...]:
        """Fields involved in a constraint failure (empty for other kinds)."""
        if self.detail is None:
            return ()
        return self.detail.fields

    def __repr__(self) -> str:
        return f"ORMError(kind={self.kind.name}, message={self.message!r})"


class InvalidQueuedResultError(ORMError):
    """A queued outcome is neither a success nor a failure."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(ErrorKind.INVALID_QUERY_RESULT, message)


class EmptyResolutionError(ORMError):
    """No handler, queued outcome, parent scope, or fallback produced a result."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(ErrorKind.EMPTY_QUERY_QUEUE, message)


class RejectedValueError(ORMError):
    """A queued failure whose content is not an exception.

    Python can only raise exceptions, so the stored content travels
    unmodified on ``value``.
    """

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(ErrorKind.REJECTED_VALUE, f"Query rejected with non-error value: {value!r}")


# =============================================================================
# Free functions dispatching on the tag
# =============================================================================


def error_name(kind: ErrorKind) -> str:
    """Return the ORM's name for an error kind."""
    return kind.value


def kind_ancestors(kind: ErrorKind) -> frozenset[ErrorKind]:
    """Return ``kind`` and every kind it inherits from."""
    seen: set[ErrorKind] = set()
    pending = [kind]
    while pending:
        current = pending.pop()
        if current in seen:
            continue
        seen.add(current)
        pending.extend(_PARENT_KINDS[current])
    return frozenset(seen)


def is_kind(error: BaseException, kind: ErrorKind) -> bool:
    """Check whether ``error`` is (or inherits from) the given kind.

    Non-``ORMError`` exceptions are never any kind.
    """
    if not isinstance(error, ORMError):
        return False
    return kind in kind_ancestors(error.kind)


def format_error(error: ORMError) -> str:
    """Render an error as ``<name>: <message>`` plus any validation items."""
    text = f"{error.name}: {error.message}"
    if error.errors:
        lines = [f"  - {item.path}: {item.message} ({item.type})" for item in error.errors]
        text = "\n".join([text, *lines])
    return text


def errors_for_path(error: ORMError, path: str) -> list[ValidationErrorItem]:
    """Return the validation items that belong to a given field."""
    return [item for item in error.errors if item.path == path]


def from_value(value: Any) -> ORMError:
    """Wrap a non-error value in a base error."""
    return ORMError(ErrorKind.BASE, str(value))


# =============================================================================
# Constructors
# =============================================================================


def base_error(message: str | None = None) -> ORMError:
    return ORMError(ErrorKind.BASE, message)


def validation_error(
    message: str | None = None,
    items: Sequence[ValidationErrorItem] = (),
) -> ORMError:
    return ORMError(ErrorKind.VALIDATION, message, detail=ValidationDetail(items=tuple(items)))


def database_error(parent: BaseException | None = None) -> ORMError:
    message = str(parent) if parent is not None else None
    return ORMError(ErrorKind.DATABASE, message, parent=parent)


def _self_parented(error: ORMError) -> ORMError:
    error.parent = error
    return error


def timeout_error() -> ORMError:
    return _self_parented(ORMError(ErrorKind.TIMEOUT))


def unique_constraint_error(
    message: str | None = None,
    *,
    items: Sequence[ValidationErrorItem] = (),
    fields: Sequence[str] = (),
) -> ORMError:
    detail = ValidationDetail(items=tuple(items), fields=tuple(fields))
    return _self_parented(ORMError(ErrorKind.UNIQUE_CONSTRAINT, message or "Validation Error", detail=detail))


def foreign_key_constraint_error(
    message: str | None = None,
    *,
    fields: Sequence[str] = (),
    table: str | None = None,
    value: Any = None,
    index: str | None = None,
) -> ORMError:
    detail = ConstraintDetail(fields=tuple(fields), table=table, value=value, index=index)
    return _self_parented(ORMError(ErrorKind.FOREIGN_KEY_CONSTRAINT, message, detail=detail))


def exclusion_constraint_error(
    message: str | None = None,
    *,
    fields: Sequence[str] = (),
    table: str | None = None,
    constraint: str | None = None,
) -> ORMError:
    detail = ConstraintDetail(fields=tuple(fields), table=table, constraint=constraint)
    return _self_parented(ORMError(ErrorKind.EXCLUSION_CONSTRAINT, message, detail=detail))


def connection_error(
    parent: BaseException | None = None,
    *,
    kind: ErrorKind = ErrorKind.CONNECTION,
) -> ORMError:
    """Build a connection-family error.

    Raises:
        ValueError: If ``kind`` is not a connection kind.
    """
    if ErrorKind.CONNECTION not in kind_ancestors(kind):
        raise ValueError(f"{kind.name} is not a connection error kind")
    message = str(parent) if parent is not None else _DEFAULT_MESSAGES[ErrorKind.CONNECTION]
    return ORMError(kind, message, parent=parent)


def instance_error(message: str | None = None) -> ORMError:
    return ORMError(ErrorKind.INSTANCE, message)
