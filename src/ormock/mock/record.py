"""Records: the individual results of mocked model queries.

A record's values are the model defaults overridden by values given when it
is built. If the model uses primary keys, an ``id`` is drawn from the
database's IdCounter unless one was given; with timestamps on,
``created_at`` and ``updated_at`` default to the build time.

Test helpers are plain methods without a prefix:
- add_validation_error / remove_validation_error / clear_validation_errors
  queue validation failures that the next validate() or save() reports.
"""

from __future__ import annotations

import types
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from ormock.contracts.errors import ORMError, ValidationErrorItem, validation_error
from ormock.core.identifiers import IdCounter

if TYPE_CHECKING:
    from ormock.mock.model import Model

# Attributes stored on the record itself; everything else may be a field.
_OWN_ATTRIBUTES = frozenset(
    {
        "_values",
        "_pending_validation_errors",
        "model",
        "is_new_record",
    }
)


class Record:
    """Mocked model instance.

    Field values are reachable as attributes (``record.email``) as well as
    through ``get``/``set``. Methods from the owning model's capability
    table (instance methods and association stubs) are bound at
    construction.

    Attributes:
        model: Owning model, or None for a standalone record.
        is_new_record: True until the record is saved.
    """

    def __init__(
        self,
        values: Mapping[str, Any] | None = None,
        *,
        model: Model | None = None,
        id_counter: IdCounter | None = None,
    ) -> None:
        """Build a record.

        Args:
            values: Field values. Model defaults are applied by Model.build,
                not here.
            model: Owning model; supplies options and capabilities.
            id_counter: Id source. Defaults to the model's counter.
        """
        self.model = model
        self.is_new_record = True
        self._values: dict[str, Any] = dict(values or {})
        self._pending_validation_errors: list[tuple[str | None, str | None, str | None]] = []

        if model is not None:
            counter = id_counter if id_counter is not None else model.id_counter
            if model.options.has_primary_keys and self._values.get("id") is None:
                self._values["id"] = counter.next()
            if model.options.timestamps:
                now = datetime.now(UTC)
                self._values.setdefault("created_at", now)
                self._values.setdefault("updated_at", now)
            self._bind_capabilities(model.capabilities)
        elif id_counter is not None and self._values.get("id") is None:
            self._values["id"] = id_counter.next()

    def _bind_capabilities(self, capabilities: Mapping[str, Callable[..., Any]]) -> None:
        for name, fn in capabilities.items():
            object.__setattr__(self, name, types.MethodType(fn, self))

    # =========================================================================
    # Field accessors
    # =========================================================================

    def __getattr__(self, name: str) -> Any:
        # Only called when normal lookup fails
        values = self.__dict__.get("_values")
        if values is not None and name in values:
            return values[name]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute or field {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        if name not in _OWN_ATTRIBUTES and name in self.__dict__.get("_values", {}):
            self._values[name] = value
        else:
            object.__setattr__(self, name, value)

    @property
    def data_values(self) -> dict[str, Any]:
        """The live value mapping, as the ORM exposes it."""
        return self._values

    def get(self, key: str | None = None, *, plain: bool = False) -> Any:
        """Return one value, or a copy of all values if no key is given."""
        if key is None or plain:
            return dict(self._values)
        return self._values.get(key)

    def set(self, key: str | Mapping[str, Any], value: Any = None) -> Record:
        """Set one value, or every pair of a mapping."""
        if isinstance(key, Mapping):
            self._values.update(key)
        else:
            self._values[key] = value
        return self

    def to_json(self) -> dict[str, Any]:
        return self.get()

    # =========================================================================
    # Validation test helpers
    # =========================================================================

    def add_validation_error(
        self,
        column: str | None,
        message: str | None = None,
        type_: str | None = None,
    ) -> Record:
        """Queue a validation failure for the next validate() or save().

        Example:
            user.add_validation_error("email", "Not a valid email address", "InvalidEmail")
            with pytest.raises(ORMError) as exc_info:
                await user.save()
            assert exc_info.value.errors[0].type == "InvalidEmail"
        """
        self._pending_validation_errors.append((column, message, type_))
        return self

    def remove_validation_error(self, column: str | None) -> Record:
        """Drop queued validation failures for one column."""
        self._pending_validation_errors = [
            pending for pending in self._pending_validation_errors if pending[0] != column
        ]
        return self

    def clear_validation_errors(self) -> Record:
        self._pending_validation_errors = []
        return self

    # =========================================================================
    # Persistence stand-ins
    # =========================================================================

    async def validate(self) -> ORMError | None:
        """Report queued validation failures.

        As with the ORM, validation failures are returned, not raised. The
        pending failures are cleared once reported.

        Returns:
            A validation ORMError carrying one item per queued failure, or None.
        """
        if not self._pending_validation_errors:
            return None
        items = [
            ValidationErrorItem(
                message=message or f"Validation Error for value in column {column}",
                type=type_ or "Validation error",
                path=column,
                value=self._values.get(column) if column else None,
            )
            for column, message, type_ in self._pending_validation_errors
        ]
        self.clear_validation_errors()
        return validation_error(items=items)

    async def save(self) -> Record:
        """Validate, then mark the record as persisted.

        Raises:
            ORMError: Validation error if failures were queued.
        """
        error = await self.validate()
        if error is not None:
            raise error
        self.is_new_record = False
        return self

    async def destroy(self) -> None:
        self._values["deleted_at"] = datetime.now(UTC)

    async def reload(self) -> Record:
        return self

    async def update(self, values: Mapping[str, Any]) -> Record:
        """``set`` followed by ``save``; validation failures propagate."""
        self.set(values)
        return await self.save()

    def __repr__(self) -> str:
        model_name = self.model.name if self.model is not None else None
        return f"Record(model={model_name!r}, values={self._values!r})"
