"""Identity-based visited set for one validation call.

Thread Safety:
    NOT thread-safe, and never needs to be: each top-level validation call
    creates its own guard and threads it through every recursive call.
"""

from __future__ import annotations

from typing import Any


class CycleGuard:
    """Tracks which composite values a validation call has already entered.

    Membership is by identity (``id()``), never equality: two equal dicts
    are still two values to validate. A value is marked BEFORE its
    children are explored, so a back-edge to an in-progress ancestor is
    seen instead of re-entered.

    The guard keeps a reference to every marked value so ids cannot be
    recycled while the guard is alive.

    Speculative traversals (union trials) run on a ``fork()``. A fork
    shares the parent's store and journals only the marks it adds, so
    forking is O(1) and both ``absorb()`` and ``rollback()`` cost only
    what the trial itself marked.
    """

    __slots__ = ("_journal", "_visited")

    def __init__(self) -> None:
        self._visited: dict[int, Any] = {}
        # Marks added through this guard: ids, or journals of absorbed forks
        self._journal: list[int | list[Any]] = []

    def has_visited(self, ref: Any) -> bool:
        return id(ref) in self._visited

    def mark_visited(self, ref: Any) -> None:
        key = id(ref)
        if key not in self._visited:
            self._visited[key] = ref
            self._journal.append(key)

    def fork(self) -> CycleGuard:
        """Open a speculative traversal on top of this guard.

        The fork sees every existing mark. Its own marks are visible to
        the parent immediately and must be settled with exactly one of
        ``absorb()`` (commit) or ``rollback()`` (discard) before the
        parent marks anything else.
        """
        forked = CycleGuard.__new__(CycleGuard)
        forked._visited = self._visited
        forked._journal = []
        return forked

    def absorb(self, other: CycleGuard) -> None:
        """Commit ``other``'s marks as if they had been made here."""
        if other._journal:
            self._journal.append(other._journal)
        other._journal = []

    def rollback(self) -> None:
        """Remove every mark made through this guard, absorbed forks included."""
        pending: list[int | list[Any]] = [self._journal]
        while pending:
            entry = pending.pop()
            if isinstance(entry, list):
                pending.extend(entry)
            else:
                del self._visited[entry]
        self._journal = []

    def __len__(self) -> int:
        return len(self._visited)
