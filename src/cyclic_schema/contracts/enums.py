"""Kinds and policies used across subsystem boundaries."""

from enum import StrEnum


class SchemaKind(StrEnum):
    """Closed set of schema node kinds.

    Traversal code dispatches on these exhaustively. Adding a kind means
    touching every ``match`` over nodes in ``cyclic_schema.engine``.
    """

    SCALAR = "scalar"
    FIXED_MAPPING = "fixed_mapping"
    DYNAMIC_MAPPING = "dynamic_mapping"
    SEQUENCE = "sequence"
    UNION = "union"
    OPTIONAL = "optional"
    REFERENCE = "reference"


class UnionFailurePolicy(StrEnum):
    """Which issues to report when no union alternative matches.

    LAST reports the last attempted alternative only. FEWEST reports the
    alternative with the fewest issues (earliest wins ties). ALL reports
    every alternative's issues in declaration order.
    """

    LAST = "last"
    FEWEST = "fewest"
    ALL = "all"
