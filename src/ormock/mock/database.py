"""The root-level mock database.

``Database`` can be constructed the same way the real ORM entry point is;
credentials are ignored and only the options listed on DatabaseSettings
have any effect (unknown keys are kept on ``settings`` for code that reads
them back).

Results queued on the database are shared: every model defined on it falls
back to the database's queue once its own queue is empty, unless the model
stops propagation.

Usage:
    db = Database(options={"dialect": "postgres"})
    User = db.define("user", {"name": "Test User"})
    db.queue_result([User.build({"name": "from root"})])
    users = await User.find_all()
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Self

from ormock import __version__
from ormock.contracts import errors
from ormock.contracts.config import DatabaseSettings, ModelOptions, ScopeOptions
from ormock.contracts.enums import ErrorKind, QueryType
from ormock.contracts.errors import ORMError
from ormock.core.identifiers import IdCounter
from ormock.core.logging import get_logger
from ormock.engine.resolution import ResolutionEngine
from ormock.mock import datatypes
from ormock.mock.model import Model

logger = get_logger(__name__)


class Database:
    """Root mock scope.

    Data types, the error class, error kinds and error constructors are
    reachable from the class, as on the ORM itself.

    Attributes:
        settings: Validated options.
        models: Models defined on this database, by name.
        id_counter: Id source for records of every model defined here.
        query_interface: Root resolution scope (no parent).
    """

    version = __version__
    QueryType = QueryType

    # Errors, as exposed on the ORM's class object
    Error = ORMError
    ORMError = ORMError
    ErrorKind = ErrorKind
    errors = errors

    # Data types, as exposed on the ORM's class object
    data_types = datatypes
    STRING = datatypes.STRING
    CHAR = datatypes.CHAR
    TEXT = datatypes.TEXT
    INTEGER = datatypes.INTEGER
    BIGINT = datatypes.BIGINT
    FLOAT = datatypes.FLOAT
    REAL = datatypes.REAL
    DOUBLE = datatypes.DOUBLE
    DECIMAL = datatypes.DECIMAL
    BOOLEAN = datatypes.BOOLEAN
    TIME = datatypes.TIME
    DATE = datatypes.DATE
    DATEONLY = datatypes.DATEONLY
    HSTORE = datatypes.HSTORE
    JSON = datatypes.JSON
    JSONB = datatypes.JSONB
    NOW = datatypes.NOW
    BLOB = datatypes.BLOB
    RANGE = datatypes.RANGE
    UUID = datatypes.UUID
    UUIDV1 = datatypes.UUIDV1
    UUIDV4 = datatypes.UUIDV4
    VIRTUAL = datatypes.VIRTUAL
    ENUM = datatypes.ENUM
    ARRAY = datatypes.ARRAY
    GEOMETRY = datatypes.GEOMETRY
    GEOGRAPHY = datatypes.GEOGRAPHY

    def __init__(
        self,
        database: str | None = None,
        username: str | None = None,
        password: str | None = None,
        options: DatabaseSettings | Mapping[str, Any] | None = None,
    ) -> None:
        if options is None:
            options = DatabaseSettings()
        elif not isinstance(options, DatabaseSettings):
            options = DatabaseSettings(**options)

        self.settings = options
        self.models: dict[str, Model] = {}
        self.id_counter = IdCounter()
        self.query_interface = ResolutionEngine(ScopeOptions(stop_propagation=options.stop_propagation))

    def __repr__(self) -> str:
        return f"Database(dialect={self.settings.dialect!r}, models={sorted(self.models)!r})"

    # =========================================================================
    # Test helpers: result queue
    # =========================================================================

    def queue_result(
        self,
        content: Any,
        *,
        was_created: bool | None = None,
        affected_rows: Any = None,
    ) -> Self:
        """Queue a result for ``query()`` or for any model falling back here."""
        self.query_interface.queue_result(content, was_created=was_created, affected_rows=affected_rows)
        return self

    def queue_failure(self, error: Any, *, convert_non_errors: bool = True) -> Self:
        """Queue a rejection for ``query()`` or for any model falling back here."""
        self.query_interface.queue_failure(error, convert_non_errors=convert_non_errors)
        return self

    def clear_queue(self) -> Self:
        self.query_interface.clear_queue()
        return self

    # =========================================================================
    # Mocked API
    # =========================================================================

    def get_dialect(self) -> str:
        return self.settings.dialect

    def get_query_interface(self) -> ResolutionEngine:
        return self.query_interface

    def define(
        self,
        name: str,
        defaults: Mapping[str, Any] | None = None,
        options: ModelOptions | Mapping[str, Any] | None = None,
    ) -> Model:
        """Define a mock model.

        Defaults are used for every record the model builds and are
        overridden by values given to each query. A model defined twice
        under the same name replaces the first definition.

        Example:
            db.define(
                "user",
                {"name": "Test User", "email": "test@example.com"},
                {"instance_methods": {"greeting": lambda self: f"Hi {self.name}"}},
            )
        """
        model = Model(name, defaults, options, database=self)
        self.models[name] = model
        logger.debug("model_defined", model=name, auto_query_fallback=model.options.auto_query_fallback)
        return model

    def is_defined(self, name: str) -> bool:
        return name in self.models

    def model(self, name: str) -> Model:
        """Return a defined model.

        Raises:
            KeyError: If no model of that name was defined.
        """
        if name not in self.models:
            raise KeyError(f"Model '{name}' has not been defined")
        return self.models[name]

    async def query(self, *args: Any) -> Any:
        """Resolve the next queued result against the root scope.

        There is no fallback: with nothing queued this raises
        EmptyResolutionError.
        """
        return await self.query_interface.query("query", args)

    def literal(self, value: Any) -> Any:
        return value
