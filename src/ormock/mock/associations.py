"""Association stubs.

Declaring an association on a mock model adds accessor methods to the
model's capability table, so records built afterwards carry them. Getters
against a model target delegate to that model's queries (and therefore to
its result queue); everything else is a no-op resolving to a fixed value.

Method names are snake_case: ``user.belongs_to(Team)`` adds ``get_team``,
``set_team`` and ``create_team``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from ormock.core.naming import method_suffix, pluralize, singularize
from ormock.mock.record import Record

if TYPE_CHECKING:
    from ormock.mock.model import Model


class AssociationKind(StrEnum):
    BELONGS_TO = "belongs_to"
    HAS_ONE = "has_one"
    HAS_MANY = "has_many"
    BELONGS_TO_MANY = "belongs_to_many"


@dataclass(frozen=True, slots=True)
class Association:
    """What an association declaration returns.

    Attributes:
        kind: The association flavor.
        source: Model the accessors were added to.
        target_name: Name the accessors were derived from.
        through_model: Mock join model for many-valued associations.
        methods: Names of the generated accessor methods.
    """

    kind: AssociationKind
    source: Model
    target_name: str
    through_model: Model | None
    methods: tuple[str, ...]


def _where(options: Any) -> Mapping[str, Any] | None:
    if not isinstance(options, Mapping):
        return None
    return options.get("where", options)


def _resolving(value_fn: Callable[[Record], Any]) -> Callable[..., Any]:
    async def method(record: Record, *args: Any, **kwargs: Any) -> Any:
        return value_fn(record)

    return method


def _target_name(target: Model | str, alias: str | None) -> str:
    if alias is not None:
        return alias
    if isinstance(target, str):
        return target
    return target.get_table_name()


def single_accessors(source: Model, target: Model | str, *, alias: str | None = None) -> dict[str, Callable[..., Any]]:
    """Accessors for belongs-to and has-one associations."""
    singular = method_suffix(singularize(_target_name(target, alias)))
    methods: dict[str, Callable[..., Any]] = {}

    if isinstance(target, str):

        async def get_one(record: Record, options: Any = None) -> Record:
            return Record(_where(options))

        async def create_one(record: Record, values: Mapping[str, Any] | None = None) -> Record:
            return Record(values)

    else:

        async def get_one(record: Record, options: Any = None) -> Any:
            return await target.find_one(options)

        async def create_one(record: Record, values: Mapping[str, Any] | None = None) -> Any:
            return await target.create(values)

    methods[f"get_{singular}"] = get_one
    methods[f"set_{singular}"] = _resolving(lambda record: source)
    methods[f"create_{singular}"] = create_one
    return methods


def many_accessors(source: Model, target: Model | str, *, alias: str | None = None) -> dict[str, Callable[..., Any]]:
    """Accessors for has-many and belongs-to-many associations.

    With an alias, the alias is taken as the plural form.
    """
    name = _target_name(target, alias)
    singular = method_suffix(singularize(name))
    plural = method_suffix(name if alias is not None else pluralize(name))
    methods: dict[str, Callable[..., Any]] = {}

    if isinstance(target, str):

        async def get_many(record: Record, options: Any = None) -> list[Record]:
            return [Record(_where(options))]

        async def create_one(record: Record, values: Mapping[str, Any] | None = None) -> Record:
            return Record(values)

    else:

        async def get_many(record: Record, options: Any = None) -> Any:
            return await target.find_all(options)

        async def create_one(record: Record, values: Mapping[str, Any] | None = None) -> Any:
            return await target.create(values)

    noop = _resolving(lambda record: source)
    methods[f"get_{plural}"] = get_many
    methods[f"set_{plural}"] = noop
    methods[f"add_{singular}"] = noop
    methods[f"add_{plural}"] = noop
    methods[f"create_{singular}"] = create_one
    methods[f"remove_{singular}"] = noop
    methods[f"remove_{plural}"] = noop
    methods[f"has_{singular}"] = _resolving(lambda record: False)
    methods[f"has_{plural}"] = _resolving(lambda record: False)
    methods[f"count_{plural}"] = _resolving(lambda record: 0)
    return methods
