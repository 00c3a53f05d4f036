"""Shallow schema transformer and partial values.

Shallow validation checks everything about a composite value that can be
checked without descending into it:

1. ``split_composites`` replaces every composite child of the value with
   ``PLACEHOLDER``, producing a flat partial value.
2. ``to_shallow_schema`` rewrites the schema so that every position that
   may hold a composite also accepts ``PLACEHOLDER_SCHEMA``.

Validating (1) against (2) checks the value's own shape and all of its
scalar children. Composite children are validated by a separate
recursive call.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from cyclic_schema.contracts.errors import UnsupportedSchemaError
from cyclic_schema.contracts.sentinels import PLACEHOLDER
from cyclic_schema.core.config import DEFAULT_MAX_SHALLOW_DEPTH
from cyclic_schema.core.logging import get_logger
from cyclic_schema.schema.nodes import (
    PLACEHOLDER_SCHEMA,
    DynamicMappingNode,
    FixedMappingNode,
    OptionalNode,
    ReferenceNode,
    ScalarNode,
    SchemaNode,
    SequenceNode,
    UnionNode,
)

logger = get_logger(__name__)


def is_composite(value: Any) -> bool:
    """Mappings, lists and tuples are composite; everything else is a scalar."""
    return isinstance(value, Mapping | list | tuple)


def split_composites(value: Mapping[Any, Any] | list[Any] | tuple[Any, ...]) -> tuple[Any, dict[Any, Any]]:
    """Replace composite children with PLACEHOLDER.

    Returns:
        (partial, deferred) where ``partial`` has the same keys/indices as
        ``value`` and ``deferred`` maps each substituted key/index to the
        original composite child, in iteration order.
    """
    deferred: dict[Any, Any] = {}
    if isinstance(value, Mapping):
        partial: dict[Any, Any] = {}
        for key, item in value.items():
            if is_composite(item):
                deferred[key] = item
                partial[key] = PLACEHOLDER
            else:
                partial[key] = item
        return partial, deferred

    elements: list[Any] = []
    for index, item in enumerate(value):
        if is_composite(item):
            deferred[index] = item
            elements.append(PLACEHOLDER)
        else:
            elements.append(item)
    return elements, deferred


def _or_placeholder(node: SchemaNode) -> UnionNode:
    return UnionNode((node, PLACEHOLDER_SCHEMA))


def to_shallow_schema(schema: SchemaNode, *, max_depth: int = DEFAULT_MAX_SHALLOW_DEPTH) -> SchemaNode:
    """Derive a schema that accepts PLACEHOLDER wherever a composite may appear.

    Depth is counted per branch. Once ``max_depth`` nested layers have been
    rewritten the original schema is returned for the rest of that branch,
    which bounds the work spent on self-referential schemas.
    """
    return _transform(schema, 0, max_depth)


def _transform(schema: SchemaNode, depth: int, max_depth: int) -> SchemaNode:
    if depth >= max_depth:
        logger.debug("shallow_transform_depth_cutoff", depth=depth)
        return schema
    depth += 1

    match schema:
        case FixedMappingNode():
            return FixedMappingNode(
                {key: _or_placeholder(_transform(child, depth, max_depth)) for key, child in schema.shape.items()},
                extra=schema.extra,
            )
        case DynamicMappingNode():
            return DynamicMappingNode(_or_placeholder(_transform(schema.values, depth, max_depth)))
        case SequenceNode():
            return SequenceNode(_or_placeholder(_transform(schema.items, depth, max_depth)))
        case UnionNode():
            return UnionNode((*(_transform(option, depth, max_depth) for option in schema.options), PLACEHOLDER_SCHEMA))
        case ReferenceNode():
            return _transform(schema.resolve(), depth, max_depth)
        case OptionalNode():
            return _or_placeholder(OptionalNode(_transform(schema.inner, depth, max_depth)))
        case ScalarNode():
            return _or_placeholder(schema)
        case _:
            raise UnsupportedSchemaError(f"unknown schema node {schema!r}")


class ShallowSchemaCache:
    """Call-scoped memo of shallow schemas, keyed by node identity.

    Schema nodes are immutable, so a node's shallow form never changes
    during a call. Not shared between calls.
    """

    __slots__ = ("_cache", "_max_depth")

    def __init__(self, max_depth: int = DEFAULT_MAX_SHALLOW_DEPTH) -> None:
        self._max_depth = max_depth
        self._cache: dict[SchemaNode, SchemaNode] = {}

    def get(self, schema: SchemaNode) -> SchemaNode:
        shallow = self._cache.get(schema)
        if shallow is None:
            shallow = to_shallow_schema(schema, max_depth=self._max_depth)
            self._cache[schema] = shallow
        return shallow
