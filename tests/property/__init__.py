# tests/property/__init__.py
"""Property-based tests for ormock.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of: FIFO consumption, handler
precedence, and delegation order must hold whatever is queued.

Test categories:
- engine/: Result queue and resolution chain invariants
- mock/: Id assignment and naming invariants
"""
