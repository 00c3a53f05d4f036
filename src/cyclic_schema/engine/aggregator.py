"""Issue aggregation with path prefixing.

Every issue produced by a nested call is relative to the value that call
was given. Before merging it into a caller's list the caller's key/index
path is prepended, so the final list reports paths relative to the
top-level value.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from cyclic_schema.contracts.results import Issue, PathSegment, ValidationResult


def prefix_path(issues: Iterable[Issue], prefix: Iterable[PathSegment]) -> list[Issue]:
    """Prepend ``prefix`` to the path of every issue."""
    prefix = tuple(prefix)
    return [issue.with_prefix(prefix) for issue in issues]


class IssueCollector:
    """Accumulates issues for one validation call, in discovery order.

    Example:
        collector = IssueCollector()
        collector.add_issues(child_issues, prefix=("friends", 0))
        return collector.to_result(data)
    """

    __slots__ = ("_issues",)

    def __init__(self) -> None:
        self._issues: list[Issue] = []

    def add_issues(self, issues: Iterable[Issue], prefix: Iterable[PathSegment] = ()) -> None:
        self._issues.extend(prefix_path(issues, prefix))

    @property
    def issues(self) -> tuple[Issue, ...]:
        return tuple(self._issues)

    def __len__(self) -> int:
        return len(self._issues)

    def to_result(self, data: Any) -> ValidationResult:
        """Success carrying ``data`` if nothing was collected, failure otherwise."""
        if self._issues:
            return ValidationResult.failure(self._issues)
        return ValidationResult.success(data)
