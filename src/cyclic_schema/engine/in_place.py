"""In-place traversal: validate a possibly cyclic value, return it untouched.

Per composite value the walker:

1. Returns success immediately if the value was already entered in this
   call (cycle or shared reference).
2. Marks the value, then validates it against the shallow schema with its
   composite children replaced by PLACEHOLDER.
3. Resolves a union schema by running steps 2-4 for each alternative.
4. Recurses into each deferred composite child with the child schema of
   the resolved fixed or dynamic mapping.

Issues from a child call are relative to the child; the parent prefixes
them with the child's key before merging. Siblings are always visited
(no fail-fast).

Sequences are shallow-checked only: scalar elements are validated, while
composite elements are never descended into.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import partial
from typing import Any

from cyclic_schema.contracts.errors import UnexpectedSchemaMatchError, UnsupportedSchemaError
from cyclic_schema.contracts.results import Issue, PathSegment, ValidationResult
from cyclic_schema.core.config import ValidatorSettings
from cyclic_schema.core.logging import get_logger
from cyclic_schema.engine.aggregator import IssueCollector, prefix_path
from cyclic_schema.engine.cycle_guard import CycleGuard
from cyclic_schema.engine.shallow import ShallowSchemaCache, is_composite, split_composites
from cyclic_schema.engine.unions import resolve_union
from cyclic_schema.schema.nodes import (
    DynamicMappingNode,
    FixedMappingNode,
    ScalarNode,
    SchemaNode,
    UnionNode,
    resolve_effective,
)

logger = get_logger(__name__)


def validate_in_place(
    schema: SchemaNode,
    value: Any,
    path: tuple[PathSegment, ...] = (),
    *,
    settings: ValidatorSettings | None = None,
) -> ValidationResult:
    """Validate ``value`` against ``schema`` without copying it.

    Args:
        schema: Root schema node
        value: Data to validate; may contain reference cycles
        path: Prefix for every reported issue path (for callers validating
            a sub-value of a larger document)
        settings: Engine settings, defaults if omitted

    Returns:
        Success carrying ``value`` itself (same reference), or failure with
        every issue found.

    Raises:
        SchemaInvariantError: On schema-authoring errors or engine bugs
    """
    walker = _InPlaceWalker(settings if settings is not None else ValidatorSettings())
    collector = IssueCollector()
    collector.add_issues(walker.walk(schema, value, path, CycleGuard()), prefix=path)
    result = collector.to_result(value)
    logger.debug("validation_finished", variant="in_place", ok=result.ok, issue_count=len(result.issues))
    return result


class _InPlaceWalker:
    """Holds the call-scoped state shared by every recursive step.

    Returned issues are relative to the value being walked. ``path`` is the
    value's location in the caller's document and only labels invariant
    errors and log events.
    """

    def __init__(self, settings: ValidatorSettings) -> None:
        self._settings = settings
        self._shallow = ShallowSchemaCache(settings.max_shallow_depth)

    def walk(self, schema: SchemaNode, value: Any, path: tuple[PathSegment, ...], guard: CycleGuard) -> list[Issue]:
        if not is_composite(value):
            return schema.validate(value)

        if guard.has_visited(value):
            logger.debug("cycle_reference_skipped", variant="in_place", path=path)
            return []
        guard.mark_visited(value)

        return self._walk_composite(schema, value, path, guard)

    def _walk_composite(self, schema: SchemaNode, value: Any, path: tuple[PathSegment, ...], guard: CycleGuard) -> list[Issue]:
        effective = resolve_effective(schema)
        if isinstance(effective, ScalarNode):
            # Opaque leaf validators see the whole value
            return effective.validate(value)

        partial_value, deferred = split_composites(value)
        issues = self._shallow.get(effective).validate(partial_value)

        if isinstance(effective, UnionNode):
            if issues:
                return issues
            resolution = resolve_union(
                effective,
                partial(self._attempt, value, path),
                guard,
                policy=self._settings.union_failure_policy,
                path=path,
            )
            return list(resolution.issues)

        if not (isinstance(value, Mapping) and isinstance(effective, FixedMappingNode | DynamicMappingNode)):
            # Built-in sequence nodes always reject a mapping; getting here means a node's validate() is broken
            if isinstance(value, Mapping) and not issues:
                raise UnexpectedSchemaMatchError(
                    f"mapping value must fail validation against a {effective.kind} schema",
                    path=path,
                )
            return issues

        for key, child_value in deferred.items():
            child_schema = self._child_schema(effective, key, path)
            if child_schema is None:
                continue
            issues.extend(prefix_path(self.walk(child_schema, child_value, (*path, key), guard), (key,)))
        return issues

    def _attempt(self, value: Any, path: tuple[PathSegment, ...], option: SchemaNode, trial: CycleGuard) -> tuple[Any, list[Issue]]:
        return value, self._walk_composite(option, value, path, trial)

    @staticmethod
    def _child_schema(effective: SchemaNode, key: Any, path: tuple[PathSegment, ...]) -> SchemaNode | None:
        match effective:
            case FixedMappingNode():
                # Unknown keys are unconstrained here; extra-key policy belongs to the node
                return effective.shape.get(key)
            case DynamicMappingNode():
                return effective.values
            case _:
                raise UnsupportedSchemaError(f"cannot dispatch deferred key {key!r} to a {effective.kind} schema", path=path)
