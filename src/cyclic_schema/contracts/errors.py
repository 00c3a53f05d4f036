"""Invariant failures and the optional validation exception.

Two classes of problem exist:

- Validation failures are problems with the DATA. They are reported as
  ``Issue`` entries on a failed ``ValidationResult`` and never raised by
  the traversal engine.
- Invariant failures are problems with the SCHEMA or with this library.
  They are raised as ``SchemaInvariantError`` subclasses, abort the call,
  and must never be converted into issues.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cyclic_schema.contracts.results import Issue, PathSegment


class SchemaInvariantError(Exception):
    """Raised when a schema is malformed or the traversal reaches a state it never should.

    Attributes:
        path: Location in the data where the failure was detected, if known
    """

    def __init__(self, message: str, *, path: tuple[PathSegment, ...] = ()) -> None:
        self.path = path
        if path:
            message = f"{message} (at {'.'.join(str(segment) for segment in path)})"
        super().__init__(f"invariant: {message}")


class EmptyUnionError(SchemaInvariantError):
    """A union was declared with zero alternatives."""


class NestedUnionError(SchemaInvariantError):
    """A union alternative resolved to another union, which is not supported."""


class UnexpectedSchemaMatchError(SchemaInvariantError):
    """A composite value passed validation against a schema of an incompatible shape."""


class UnsupportedSchemaError(SchemaInvariantError):
    """Deferred children were dispatched to a node kind that cannot own keyed children."""


class ReferenceLoopError(SchemaInvariantError):
    """A reference chain resolved back onto itself without reaching a concrete node."""


class SchemaValidationError(ValueError):
    """Raised by ``ValidationResult.raise_for_issues()`` for callers that prefer exceptions.

    Not raised by the traversal engine itself.
    """

    def __init__(self, issues: tuple[Issue, ...]) -> None:
        self.issues = issues
        lines = [f"{len(issues)} validation issue(s)"]
        lines.extend(f"  {issue}" for issue in issues)
        super().__init__("\n".join(lines))
