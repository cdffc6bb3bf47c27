"""
ormock: a test double for ORM models and queries.

Code under test talks to mock databases, models, and records shaped like
the real ORM's. Tests decide what every query returns by queuing results,
registering handlers, or relying on auto-generated fallbacks.
"""

__version__ = "0.1.0"

from ormock.contracts import (  # noqa: E402
    EmptyResolutionError,
    InvalidQueuedResultError,
    ORMError,
    RejectedValueError,
    ResolutionRequest,
    ResultShape,
    ScopeOptions,
)
from ormock.engine import ResolutionEngine, ResultQueue  # noqa: E402
from ormock.mock import Database, Model, Record  # noqa: E402

__all__ = [
    "Database",
    "EmptyResolutionError",
    "InvalidQueuedResultError",
    "Model",
    "ORMError",
    "Record",
    "RejectedValueError",
    "ResolutionEngine",
    "ResolutionRequest",
    "ResultQueue",
    "ResultShape",
    "ScopeOptions",
    "__version__",
]
