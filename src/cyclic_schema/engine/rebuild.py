"""Rebuilding traversal: validate a possibly cyclic value into a fresh tree.

The returned tree is built from new dicts. The second time any composite
reference is reached in one call (cycle back-edge or shared reference)
the output holds an empty stand-in (``{}`` or ``[]``) instead, so the
rebuilt tree is always finite. Callers that need the original cyclic
graph back should use ``validate_in_place``.

Scalar fields of a mapping are validated against a relaxed copy of its
schema in which every composite-valued field is optional and absent.
Composite fields are then walked with their real child schema. All issues
go to one collector, prefixed with the path of the node that found them.

Sequences are shallow-checked only and passed through by reference.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from cyclic_schema.contracts.errors import UnexpectedSchemaMatchError, UnsupportedSchemaError
from cyclic_schema.contracts.results import Issue, PathSegment, ValidationResult
from cyclic_schema.contracts.sentinels import PLACEHOLDER
from cyclic_schema.core.config import ValidatorSettings
from cyclic_schema.core.logging import get_logger
from cyclic_schema.engine.aggregator import IssueCollector
from cyclic_schema.engine.cycle_guard import CycleGuard
from cyclic_schema.engine.shallow import ShallowSchemaCache, is_composite, split_composites
from cyclic_schema.engine.unions import resolve_union
from cyclic_schema.schema.nodes import (
    DynamicMappingNode,
    FixedMappingNode,
    ScalarNode,
    SchemaNode,
    SequenceNode,
    UnionNode,
    resolve_effective,
)

logger = get_logger(__name__)


def validate_rebuilding(
    schema: SchemaNode,
    value: Any,
    *,
    settings: ValidatorSettings | None = None,
) -> ValidationResult:
    """Validate ``value`` against ``schema`` and return a rebuilt, acyclic copy.

    Args:
        schema: Root schema node
        value: Data to validate; may contain reference cycles
        settings: Engine settings, defaults if omitted

    Returns:
        Success carrying the rebuilt tree, or failure with every issue found.

    Raises:
        SchemaInvariantError: On schema-authoring errors or engine bugs
    """
    walker = _RebuildWalker(settings if settings is not None else ValidatorSettings())
    collector = IssueCollector()
    rebuilt = walker.walk(schema, value, (), CycleGuard(), collector)
    result = collector.to_result(rebuilt)
    logger.debug("validation_finished", variant="rebuild", ok=result.ok, issue_count=len(result.issues))
    return result


def empty_stand_in(value: Any) -> dict[Any, Any] | list[Any]:
    """Empty container of the same family as ``value``."""
    return {} if isinstance(value, Mapping) else []


class _RebuildWalker:
    """Holds the call-scoped state shared by every recursive step."""

    def __init__(self, settings: ValidatorSettings) -> None:
        self._settings = settings
        self._shallow = ShallowSchemaCache(settings.max_shallow_depth)

    def walk(
        self,
        schema: SchemaNode,
        value: Any,
        path: tuple[PathSegment, ...],
        guard: CycleGuard,
        collector: IssueCollector,
    ) -> Any:
        if not is_composite(value):
            collector.add_issues(schema.validate(value), prefix=path)
            return value

        if guard.has_visited(value):
            logger.debug("cycle_reference_skipped", variant="rebuild", path=path)
            return empty_stand_in(value)
        guard.mark_visited(value)

        return self._rebuild_composite(schema, value, path, guard, collector)

    def _rebuild_composite(
        self,
        schema: SchemaNode,
        value: Any,
        path: tuple[PathSegment, ...],
        guard: CycleGuard,
        collector: IssueCollector,
    ) -> Any:
        effective = resolve_effective(schema)
        match effective:
            case ScalarNode():
                collector.add_issues(effective.validate(value), prefix=path)
                return value

            case UnionNode():

                def attempt(option: SchemaNode, trial: CycleGuard) -> tuple[Any, list[Issue]]:
                    scratch = IssueCollector()
                    rebuilt = self._rebuild_composite(option, value, path, trial, scratch)
                    return rebuilt, list(scratch.issues)

                resolution = resolve_union(effective, attempt, guard, policy=self._settings.union_failure_policy, path=path)
                # Attempt issues already carry the full path
                collector.add_issues(resolution.issues)
                return resolution.outcome if resolution.committed else value

            case FixedMappingNode() | DynamicMappingNode() if isinstance(value, Mapping):
                return self._rebuild_mapping(effective, value, path, guard, collector)

            case SequenceNode() if isinstance(value, list | tuple):
                partial_value, _ = split_composites(value)
                collector.add_issues(self._shallow.get(effective).validate(partial_value), prefix=path)
                return value

            case FixedMappingNode() | DynamicMappingNode() | SequenceNode():
                # Shape mismatch: built-in nodes always reject the other container family,
                # so an empty result here means a node's validate() is broken
                partial_value, _ = split_composites(value)
                issues = self._shallow.get(effective).validate(partial_value)
                if not issues:
                    raise UnexpectedSchemaMatchError(
                        f"{type(value).__name__} value must fail validation against a {effective.kind} schema",
                        path=path,
                    )
                collector.add_issues(issues, prefix=path)
                return value

            case _:
                raise UnsupportedSchemaError(f"cannot rebuild a composite against {effective!r}", path=path)

    def _rebuild_mapping(
        self,
        effective: FixedMappingNode | DynamicMappingNode,
        value: Mapping[Any, Any],
        path: tuple[PathSegment, ...],
        guard: CycleGuard,
        collector: IssueCollector,
    ) -> dict[Any, Any]:
        partial_value: dict[Any, Any] = {}
        deferred: dict[Any, SchemaNode] = {}
        for key, item in value.items():
            if not is_composite(item):
                partial_value[key] = item
            elif isinstance(effective, FixedMappingNode):
                if key in effective.shape:
                    deferred[key] = effective.shape[key]
                else:
                    # Unconstrained; stays visible to the node's extra-key policy
                    partial_value[key] = PLACEHOLDER
            else:
                deferred[key] = effective.values

        relaxed = effective.with_optional(deferred) if isinstance(effective, FixedMappingNode) else effective
        collector.add_issues(relaxed.validate(partial_value), prefix=path)

        rebuilt: dict[Any, Any] = {}
        for key, item in value.items():
            if key in deferred:
                rebuilt[key] = self.walk(deferred[key], item, (*path, key), guard, collector)
            else:
                rebuilt[key] = item
        return rebuilt
