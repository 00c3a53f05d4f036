"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to schema/engine/core.

Import patterns:
    from cyclic_schema.contracts import Issue, ValidationResult, PLACEHOLDER
"""

from cyclic_schema.contracts.enums import SchemaKind, UnionFailurePolicy
from cyclic_schema.contracts.errors import (
    EmptyUnionError,
    NestedUnionError,
    ReferenceLoopError,
    SchemaInvariantError,
    SchemaValidationError,
    UnexpectedSchemaMatchError,
    UnsupportedSchemaError,
)
from cyclic_schema.contracts.results import Issue, PathSegment, ValidationResult
from cyclic_schema.contracts.sentinels import PLACEHOLDER, PlaceholderSentinel

__all__ = [
    "PLACEHOLDER",
    "EmptyUnionError",
    "Issue",
    "NestedUnionError",
    "PathSegment",
    "PlaceholderSentinel",
    "ReferenceLoopError",
    "SchemaInvariantError",
    "SchemaKind",
    "SchemaValidationError",
    "UnexpectedSchemaMatchError",
    "UnionFailurePolicy",
    "UnsupportedSchemaError",
    "ValidationResult",
]
