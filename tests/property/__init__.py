# tests/property/__init__.py
"""Property-based tests for cyclic_schema.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of. Randomly wired record graphs
exercise the cycle guard far harder than hand-built fixtures.
"""
