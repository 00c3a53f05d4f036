"""Terse constructors for schema nodes.

Example:
    from cyclic_schema.schema.builders import fixed, lazy, optional, scalar, sequence

    user = fixed(
        name=scalar(str),
        friend=lazy(lambda: user, name="User"),
        best_friend=optional(lazy(lambda: user)),
        tags=sequence(scalar(str)),
    )
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from cyclic_schema.schema.nodes import (
    DynamicMappingNode,
    ExtraMode,
    FixedMappingNode,
    OptionalNode,
    ReferenceNode,
    ScalarNode,
    SchemaNode,
    SequenceNode,
    UnionNode,
)


def scalar(annotation: Any, *, strict: bool | None = True) -> ScalarNode:
    return ScalarNode(annotation, strict=strict)


def fixed(
    shape: Mapping[str, SchemaNode] | None = None,
    /,
    *,
    extra: ExtraMode = "ignore",
    **fields: SchemaNode,
) -> FixedMappingNode:
    """Build a fixed mapping from a shape dict and/or keyword fields.

    Pass a dict for keys that are not valid Python identifiers.
    """
    return FixedMappingNode({**(shape or {}), **fields}, extra=extra)


def dynamic(values: SchemaNode) -> DynamicMappingNode:
    return DynamicMappingNode(values)


def sequence(items: SchemaNode) -> SequenceNode:
    return SequenceNode(items)


def union(*options: SchemaNode) -> UnionNode:
    return UnionNode(options)


def optional(inner: SchemaNode) -> OptionalNode:
    return OptionalNode(inner)


def lazy(thunk: Callable[[], SchemaNode], *, name: str | None = None) -> ReferenceNode:
    return ReferenceNode(thunk, name=name)
