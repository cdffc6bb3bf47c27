"""Configuration contracts.

Configuration types use Pydantic (not dataclasses) because they validate
user-supplied options, including options loaded from YAML. All models are
frozen. DatabaseSettings and ModelOptions keep unknown keys, because the ORM
they stand in for accepts a wide range of connection and model options
(table names, paranoid mode, indexes) that the mock ignores.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ScopeOptions(BaseModel):
    """Options for a single resolution scope (root or model)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    stop_propagation: bool = Field(
        default=False,
        description="Never delegate to the parent scope, whatever the parent's own setting",
    )
    created_default: bool = Field(
        default=True,
        description="Created flag used when a queued success does not set was_created",
    )
    fallback_fn: Callable[[], Any] | None = Field(
        default=None,
        description="Scope-level fallback generator used when a request supplies none",
    )


class DatabaseSettings(BaseModel):
    """Options for the root-level mock database."""

    model_config = ConfigDict(frozen=True, extra="allow")

    dialect: str = Field(
        default="mock",
        description="Dialect reported by get_dialect(); has no other effect",
    )
    auto_query_fallback: bool = Field(
        default=True,
        description="Inherited by models: generate plausible results when nothing is queued",
    )
    stop_propagation: bool = Field(
        default=False,
        description="Inherited by models: do not fall back to the database's result queue",
    )


class ModelOptions(BaseModel):
    """Options for a mock model.

    ``auto_query_fallback`` and ``stop_propagation`` are inherited from the
    owning database when left unset. Unknown options are kept on
    ``model_extra`` and otherwise ignored.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    instance_methods: dict[str, Callable[..., Any]] = Field(
        default_factory=dict,
        description="Methods bound onto every record built by the model",
    )
    auto_query_fallback: bool | None = Field(
        default=None,
        description="Generate plausible results when nothing is queued",
    )
    stop_propagation: bool | None = Field(
        default=None,
        description="Do not fall back to the database's result queue",
    )
    created_default: bool = Field(
        default=True,
        description="Created flag for find_or_create/upsert when not queued explicitly",
    )
    has_primary_keys: bool = Field(
        default=True,
        description="Assign an auto-incrementing id to built records",
    )
    timestamps: bool = Field(
        default=True,
        description="Add created_at/updated_at to built records",
    )
