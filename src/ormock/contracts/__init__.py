"""Shared contracts for cross-boundary data types.

All dataclasses, enums, and option models that cross subsystem boundaries
(engine <-> mock layer <-> tests) live here.
"""

from ormock.contracts.config import DatabaseSettings, ModelOptions, ScopeOptions
from ormock.contracts.enums import (
    DataTypeKind,
    ErrorKind,
    OutcomeKind,
    QueryType,
    ResultShape,
)
from ormock.contracts.errors import (
    ConstraintDetail,
    EmptyResolutionError,
    InvalidQueuedResultError,
    ORMError,
    RejectedValueError,
    ValidationDetail,
    ValidationErrorItem,
)
from ormock.contracts.outcomes import (
    Failure,
    NoValue,
    OutcomeMeta,
    QueuedOutcome,
    ResolutionRequest,
    Value,
)

__all__ = [
    "ConstraintDetail",
    "DataTypeKind",
    "DatabaseSettings",
    "EmptyResolutionError",
    "ErrorKind",
    "Failure",
    "InvalidQueuedResultError",
    "ModelOptions",
    "NoValue",
    "ORMError",
    "OutcomeKind",
    "OutcomeMeta",
    "QueryType",
    "QueuedOutcome",
    "RejectedValueError",
    "ResolutionRequest",
    "ResultShape",
    "ScopeOptions",
    "ValidationDetail",
    "ValidationErrorItem",
    "Value",
]
