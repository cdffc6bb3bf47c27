"""Mock models: drop-in stand-ins for ORM model classes in unit tests.

Every query method resolves through the model's own ResolutionEngine, whose
parent is the owning database's engine. That gives each query, in order:
the model's handlers, the model's queue, the database's scope, and finally
an auto-generated plausible result (unless auto_query_fallback is off).

Usage:
    db = Database()
    User = db.define("user", {"email": "test@example.com"})

    await User.find_one({"where": {"name": "x"}})   # auto-generated record
    User.queue_result(User.build({"name": "queued"}))
    await User.find_one()                           # the queued record
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Self

from ormock.contracts.config import DatabaseSettings, ModelOptions, ScopeOptions
from ormock.contracts.enums import ResultShape
from ormock.contracts.outcomes import FallbackFn, Handler
from ormock.core.identifiers import IdCounter
from ormock.core.logging import get_logger
from ormock.core.naming import pluralize, uppercase_first
from ormock.engine.resolution import ResolutionEngine
from ormock.mock.associations import (
    Association,
    AssociationKind,
    many_accessors,
    single_accessors,
)
from ormock.mock.record import Record

if TYPE_CHECKING:
    from ormock.mock.database import Database

logger = get_logger(__name__)


def _where(options: Any) -> dict[str, Any]:
    if isinstance(options, Mapping) and isinstance(options.get("where"), Mapping):
        return dict(options["where"])
    return {}


class Model:
    """Mock model.

    Models are usually created through ``Database.define``.

    Attributes:
        name: Model name, also reported as the table name.
        options: Effective options, with unset values inherited from the database.
        database: Owning database, if any.
        id_counter: Id source shared with the database's other models.
        capabilities: Method table bound onto every record this model builds.
        query_interface: This model's resolution scope.
    """

    def __init__(
        self,
        name: str = "",
        defaults: Mapping[str, Any] | None = None,
        options: ModelOptions | Mapping[str, Any] | None = None,
        *,
        database: Database | None = None,
        id_counter: IdCounter | None = None,
    ) -> None:
        if options is None:
            options = ModelOptions()
        elif not isinstance(options, ModelOptions):
            options = ModelOptions(**options)

        inherited = database.settings if database is not None else DatabaseSettings()
        updates: dict[str, Any] = {}
        if options.auto_query_fallback is None:
            updates["auto_query_fallback"] = inherited.auto_query_fallback
        if options.stop_propagation is None:
            updates["stop_propagation"] = inherited.stop_propagation

        self.name = name
        self.options = options.model_copy(update=updates)
        self.database = database
        self._defaults: dict[str, Any] = dict(defaults or {})
        if id_counter is not None:
            self.id_counter = id_counter
        elif database is not None:
            self.id_counter = database.id_counter
        else:
            self.id_counter = IdCounter()
        self.capabilities: dict[str, Callable[..., Any]] = dict(self.options.instance_methods)
        self.query_interface = ResolutionEngine(
            ScopeOptions(
                stop_propagation=bool(self.options.stop_propagation),
                created_default=self.options.created_default,
            ),
            parent=database.query_interface if database is not None else None,
        )

    def __repr__(self) -> str:
        return f"Model(name={self.name!r})"

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
        self.query_interface.queue_result(content, was_created=was_created, affected_rows=affected_rows)
        return self

    def queue_failure(self, error: Any, *, convert_non_errors: bool = True) -> Self:
        self.query_interface.queue_failure(error, convert_non_errors=convert_non_errors)
        return self

    def register_handler(self, handler: Handler) -> Self:
        self.query_interface.register_handler(handler)
        return self

    def clear_queue(self, *, propagate_clear: bool = False) -> Self:
        self.query_interface.clear_queue(propagate_clear=propagate_clear)
        return self

    def clear_handlers(self, *, propagate_clear: bool = False) -> Self:
        self.query_interface.clear_handlers(propagate_clear=propagate_clear)
        return self

    def clear_all(self, *, propagate_clear: bool = False) -> Self:
        self.query_interface.clear_all(propagate_clear=propagate_clear)
        return self

    # =========================================================================
    # No-ops
    # =========================================================================

    async def sync(self, *args: Any, **kwargs: Any) -> Self:
        return self

    async def drop(self, *args: Any, **kwargs: Any) -> None:
        return None

    def get_table_name(self) -> str:
        return self.name

    def scope(self, *args: Any, **kwargs: Any) -> Self:
        return self

    def unscoped(self) -> Self:
        return self

    def add_hook(self, *args: Any, **kwargs: Any) -> None:
        return None

    def remove_hook(self, *args: Any, **kwargs: Any) -> None:
        return None

    # =========================================================================
    # Records
    # =========================================================================

    def build(self, values: Mapping[str, Any] | None = None) -> Record:
        """Build an unsaved record from the model defaults and ``values``."""
        merged = {**self._defaults, **(values or {})}
        return Record(merged, model=self)

    async def _query(
        self,
        operation: str,
        args: Sequence[Any],
        fallback: FallbackFn,
        shape: ResultShape = ResultShape.PLAIN,
    ) -> Any:
        return await self.query_interface.query(
            operation,
            args,
            result_shape=shape,
            fallback_fn=fallback if self.options.auto_query_fallback else None,
        )

    # =========================================================================
    # Queries
    # =========================================================================

    async def find_all(self, options: Mapping[str, Any] | None = None) -> Any:
        """Resolve a list of records; by default one record matching ``where``."""
        return await self._query("find_all", (options,), lambda: [self.build(_where(options))])

    async def find_and_count_all(self, options: Mapping[str, Any] | None = None) -> Any:
        return await self._query(
            "find_and_count_all",
            (options,),
            lambda: {"count": 1, "rows": [self.build(_where(options))]},
        )

    async def find_by_pk(self, pk: Any, options: Mapping[str, Any] | None = None) -> Any:
        return await self._query("find_by_pk", (pk, options), lambda: self.build({"id": pk}))

    find_by_id = find_by_pk

    async def find_one(self, options: Mapping[str, Any] | None = None) -> Any:
        """Resolve a single record; by default one matching ``where``."""
        return await self._query("find_one", (options,), lambda: self.build(_where(options)))

    async def max(self, field: str) -> Any:
        return await self._query("max", (field,), lambda: self._defaults.get(field))

    async def min(self, field: str) -> Any:
        return await self._query("min", (field,), lambda: self._defaults.get(field))

    async def sum(self, field: str) -> Any:
        return await self._query("sum", (field,), lambda: self._defaults.get(field))

    async def create(self, values: Mapping[str, Any] | None = None, options: Mapping[str, Any] | None = None) -> Any:
        """Resolve a saved record built from ``values``."""

        async def fallback() -> Record:
            return await self.build(values).save()

        return await self._query("create", (values, options), fallback)

    async def find_or_create(self, options: Mapping[str, Any] | None = None) -> Any:
        """Resolve ``(record, created)``.

        A queued success is paired with its ``was_created`` flag or, if unset,
        the model's created_default.
        """

        async def fallback() -> tuple[Record, bool]:
            record = self.build(_where(options))
            if self.options.created_default:
                await record.save()
                return (record, True)
            return (record, False)

        return await self._query("find_or_create", (options,), fallback, ResultShape.WITH_CREATED_FLAG)

    async def upsert(self, values: Mapping[str, Any] | None = None, options: Mapping[str, Any] | None = None) -> Any:
        """Resolve whether the row was inserted (created_default by default)."""

        async def fallback() -> bool:
            await self.build(values).save()
            return self.options.created_default

        return await self._query("upsert", (values, options), fallback)

    insert_or_update = upsert

    async def bulk_create(
        self,
        rows: Sequence[Mapping[str, Any]],
        options: Mapping[str, Any] | None = None,
    ) -> Any:
        async def fallback() -> list[Record]:
            return [await self.build(row).save() for row in rows]

        return await self._query("bulk_create", (rows, options), fallback)

    async def update(self, values: Mapping[str, Any], options: Mapping[str, Any] | None = None) -> Any:
        """Resolve ``(affected_count, affected_rows)``.

        A queued success is paired with its ``affected_rows`` (empty if none
        were queued).
        """
        return await self._query(
            "update",
            (values, options),
            lambda: (1, [self.build(values)]),
            ResultShape.WITH_AFFECTED_ROWS,
        )

    async def destroy(self, options: Mapping[str, Any] | None = None) -> Any:
        """Resolve the number of deleted rows: ``limit`` if given, else 1."""

        def fallback() -> int:
            if isinstance(options, Mapping):
                limit = options.get("limit")
                if isinstance(limit, int) and not isinstance(limit, bool):
                    return limit
            return 1

        return await self._query("destroy", (options,), fallback)

    # =========================================================================
    # Associations
    # =========================================================================

    def _associate_single(self, kind: AssociationKind, target: Model | str, alias: str | None) -> Association:
        methods = single_accessors(self, target, alias=alias)
        self.capabilities.update(methods)
        target_name = alias or (target if isinstance(target, str) else target.get_table_name())
        logger.debug("association_declared", model=self.name, kind=kind.value, target=target_name)
        return Association(kind, self, target_name, None, tuple(methods))

    def _associate_many(self, kind: AssociationKind, target: Model | str, alias: str | None) -> Association:
        methods = many_accessors(self, target, alias=alias)
        self.capabilities.update(methods)
        target_name = alias or (target if isinstance(target, str) else target.get_table_name())
        through = Model(
            uppercase_first(self.name) + uppercase_first(pluralize(target_name)),
            database=self.database,
            id_counter=self.id_counter,
        )
        logger.debug("association_declared", model=self.name, kind=kind.value, target=target_name)
        return Association(kind, self, target_name, through, tuple(methods))

    def belongs_to(self, target: Model | str, *, as_: str | None = None) -> Association:
        return self._associate_single(AssociationKind.BELONGS_TO, target, as_)

    def has_one(self, target: Model | str, *, as_: str | None = None) -> Association:
        return self._associate_single(AssociationKind.HAS_ONE, target, as_)

    def has_many(self, target: Model | str, *, as_: str | None = None) -> Association:
        return self._associate_many(AssociationKind.HAS_MANY, target, as_)

    def belongs_to_many(self, target: Model | str, *, as_: str | None = None) -> Association:
        return self._associate_many(AssociationKind.BELONGS_TO_MANY, target, as_)
