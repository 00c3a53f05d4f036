"""Schema node variants and builders."""

from cyclic_schema.schema.builders import dynamic, fixed, lazy, optional, scalar, sequence, union
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
    resolve_effective,
)

__all__ = [
    "PLACEHOLDER_SCHEMA",
    "DynamicMappingNode",
    "FixedMappingNode",
    "OptionalNode",
    "ReferenceNode",
    "ScalarNode",
    "SchemaNode",
    "SequenceNode",
    "UnionNode",
    "dynamic",
    "fixed",
    "lazy",
    "optional",
    "resolve_effective",
    "scalar",
    "sequence",
    "union",
]
