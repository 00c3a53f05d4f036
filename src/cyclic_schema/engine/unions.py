"""Union resolution shared by both traversal variants.

Alternatives are tried in declaration order. Each attempt runs the FULL
traversal for that alternative, deferred children included, against a
forked CycleGuard. The first alternative without issues is committed and
its fork absorbed; a failed attempt is rolled back and leaves no trace.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from cyclic_schema.contracts.enums import SchemaKind, UnionFailurePolicy
from cyclic_schema.contracts.errors import EmptyUnionError, NestedUnionError
from cyclic_schema.contracts.results import Issue, PathSegment
from cyclic_schema.core.logging import get_logger
from cyclic_schema.engine.cycle_guard import CycleGuard
from cyclic_schema.schema.nodes import SchemaNode, UnionNode, resolve_effective

logger = get_logger(__name__)

T = TypeVar("T")

# attempt(option, trial_guard) -> (outcome, issues); no issues means the option matched
Attempt = Callable[[SchemaNode, CycleGuard], tuple[T, list[Issue]]]


@dataclass(frozen=True, slots=True)
class UnionResolution(Generic[T]):
    """Outcome of resolving a union against one value.

    Fields:
        index: Position of the committed alternative, None if none matched
        option: The committed alternative, None if none matched
        outcome: Whatever the committed attempt produced (rebuilt data etc.)
        issues: Reported issues when no alternative matched, empty otherwise
    """

    index: int | None
    option: SchemaNode | None
    outcome: T | None
    issues: tuple[Issue, ...]

    @property
    def committed(self) -> bool:
        return self.option is not None


def select_union_issues(failures: Sequence[list[Issue]], policy: UnionFailurePolicy) -> list[Issue]:
    """Pick the issues to report from every failed alternative, in attempt order."""
    if policy is UnionFailurePolicy.LAST:
        return list(failures[-1])
    if policy is UnionFailurePolicy.FEWEST:
        return list(min(failures, key=len))
    return [issue for issues in failures for issue in issues]


def resolve_union(
    union: UnionNode,
    attempt: Attempt[T],
    guard: CycleGuard,
    *,
    policy: UnionFailurePolicy = UnionFailurePolicy.LAST,
    path: tuple[PathSegment, ...] = (),
) -> UnionResolution[T]:
    """Commit to the first alternative whose full validation succeeds.

    Args:
        union: The union being resolved
        attempt: Runs the full traversal for one alternative against a trial guard
        guard: The call's guard; receives the committed alternative's markings
        policy: Which issues to report if nothing matches
        path: Location of the value, for invariant error messages

    Raises:
        EmptyUnionError: If the union has no alternatives
        NestedUnionError: If an alternative is itself a union
    """
    options = union.options
    if not options:
        raise EmptyUnionError("union must have at least 1 option", path=path)

    failures: list[list[Issue]] = []
    for index, option in enumerate(options):
        if resolve_effective(option).kind is SchemaKind.UNION:
            raise NestedUnionError("union of unions is not supported", path=path)

        trial = guard.fork()
        outcome, issues = attempt(option, trial)
        if not issues:
            guard.absorb(trial)
            logger.debug("union_alternative_committed", index=index, options=len(options))
            return UnionResolution(index=index, option=option, outcome=outcome, issues=())
        trial.rollback()
        failures.append(issues)

    logger.debug("union_unresolved", options=len(options), policy=str(policy))
    return UnionResolution(index=None, option=None, outcome=None, issues=tuple(select_union_issues(failures, policy)))
