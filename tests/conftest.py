# tests/conftest.py
"""Shared test fixtures and helpers.

Fixtures:
- root_engine / child_engine: a two-level resolution scope tree
- database: a fresh mock Database
- user_model: a "user" model defined on ``database``

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

import pytest
import structlog
from hypothesis import Phase, Verbosity, settings

from ormock.contracts.config import ScopeOptions
from ormock.engine.resolution import ResolutionEngine
from ormock.mock.database import Database
from ormock.mock.model import Model

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo any logging configuration a test applied."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers = handlers
    root.setLevel(level)


# =============================================================================
# Scopes
# =============================================================================


@pytest.fixture
def root_engine() -> ResolutionEngine:
    return ResolutionEngine()


@pytest.fixture
def child_engine(root_engine: ResolutionEngine) -> ResolutionEngine:
    return ResolutionEngine(ScopeOptions(), parent=root_engine)


@pytest.fixture
def database() -> Database:
    return Database()


@pytest.fixture
def user_model(database: Database) -> Model:
    return database.define("user", {"name": "Test User", "email": "test@example.com"})
