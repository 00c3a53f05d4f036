"""Validation outcomes.

These types answer: "What did a validation call produce?"

IMPORTANT:
- ValidationResult.status uses Literal["success", "failure"], NOT an enum
- Issue paths are always relative to the value passed to the top-level call
- Use the factory methods; __post_init__ rejects inconsistent results
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Literal

from cyclic_schema.contracts.errors import SchemaValidationError

PathSegment = str | int


@dataclass(frozen=True, slots=True)
class Issue:
    """A single validation failure.

    Fields:
        path: Keys and indices from the validation root to the failing value
        message: Human-readable description
        code: Machine-readable kind (pydantic error type where one exists)
    """

    path: tuple[PathSegment, ...]
    message: str
    code: str = "custom"

    def with_prefix(self, prefix: Iterable[PathSegment]) -> Issue:
        """Return a copy of this issue with ``prefix`` prepended to its path."""
        prefix = tuple(prefix)
        if not prefix:
            return self
        return Issue(path=(*prefix, *self.path), message=self.message, code=self.code)

    def __str__(self) -> str:
        location = ".".join(str(segment) for segment in self.path) or "<root>"
        return f"{location}: {self.message} [{self.code}]"


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating a value against a schema.

    Use the factory methods to create instances.

    - success(data): ``data`` is the validated value (original reference for
      in-place validation, rebuilt tree for rebuilding validation)
    - failure(issues): ``issues`` holds every issue found, in discovery order
    """

    status: Literal["success", "failure"]
    data: Any = None
    issues: tuple[Issue, ...] = field(default=())

    def __post_init__(self) -> None:
        if self.status == "failure" and not self.issues:
            raise ValueError("ValidationResult with status='failure' MUST carry at least one issue")
        if self.status == "success" and self.issues:
            raise ValueError("ValidationResult with status='success' MUST NOT carry issues")

    @classmethod
    def success(cls, data: Any) -> ValidationResult:
        return cls(status="success", data=data)

    @classmethod
    def failure(cls, issues: Iterable[Issue]) -> ValidationResult:
        return cls(status="failure", issues=tuple(issues))

    @property
    def ok(self) -> bool:
        """Whether validation succeeded."""
        return self.status == "success"

    def raise_for_issues(self) -> Any:
        """Return ``data`` on success, raise SchemaValidationError on failure."""
        if not self.ok:
            raise SchemaValidationError(self.issues)
        return self.data
