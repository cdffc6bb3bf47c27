# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Usage:
    from tests.property.conftest import queued_values

    @given(values=st.lists(queued_values))
    def test_fifo(values: list[Any]) -> None:
        ...
"""

# =============================================================================
# Hypothesis Settings
# =============================================================================
#
# For standardized @settings decorators, import from tests.property.settings:
#   from tests.property.settings import STANDARD_SETTINGS
#
# Tiers: STATE_MACHINE (200), STANDARD (100), QUICK (20)
# =============================================================================

from __future__ import annotations

from hypothesis import strategies as st

from ormock.contracts.enums import ErrorKind

# =============================================================================
# Queued content
# =============================================================================

# Anything a test might queue, including None and falsy values
scalar_values = (
    st.none()
    | st.booleans()
    | st.integers()
    | st.text(max_size=20)
    | st.floats(allow_nan=False)
)

queued_values = st.recursive(
    scalar_values,
    lambda children: st.lists(children, max_size=4) | st.dictionaries(st.text(max_size=8), children, max_size=4),
    max_leaves=10,
)

# Values a handler can answer with (None would mean "pass")
handler_values = queued_values.filter(lambda v: v is not None)

# Content stored by queue_failure when conversion is off
non_error_values = scalar_values

error_kinds = st.sampled_from(list(ErrorKind))

operation_names = st.sampled_from(
    ["query", "find_all", "find_one", "find_by_pk", "create", "find_or_create", "update", "destroy"]
)

# Model and alias names as application code writes them
model_names = st.from_regex(r"[a-z][a-z_]{0,11}[a-z]", fullmatch=True)
