"""Cycle-safe traversal engine.

Dependency order (leaves first): cycle_guard -> shallow -> unions ->
aggregator -> in_place / rebuild.
"""

from cyclic_schema.engine.aggregator import IssueCollector, prefix_path
from cyclic_schema.engine.cycle_guard import CycleGuard
from cyclic_schema.engine.in_place import validate_in_place
from cyclic_schema.engine.rebuild import empty_stand_in, validate_rebuilding
from cyclic_schema.engine.shallow import ShallowSchemaCache, is_composite, split_composites, to_shallow_schema
from cyclic_schema.engine.unions import UnionResolution, resolve_union, select_union_issues

__all__ = [
    "CycleGuard",
    "IssueCollector",
    "ShallowSchemaCache",
    "UnionResolution",
    "empty_stand_in",
    "is_composite",
    "prefix_path",
    "resolve_union",
    "select_union_issues",
    "split_composites",
    "to_shallow_schema",
    "validate_in_place",
    "validate_rebuilding",
]
