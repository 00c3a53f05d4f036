"""Schema node variants.

The traversal engine needs exactly two capabilities from a schema node:

1. Introspection: ``node.kind`` plus the kind-specific children
   (``shape``, ``values``, ``items``, ``options``, ``inner``, ``resolve()``).
2. Conventional validation: ``node.validate(value)`` returns a list of
   ``Issue`` with paths relative to ``value`` (empty list = valid).

``validate()`` is NOT cycle-safe. It descends into whatever it is given,
so the engine only calls it on scalar leaves and on partial values whose
composite children were replaced by ``PLACEHOLDER``.

Leaf validation is delegated to pydantic ``TypeAdapter`` in strict mode
(no coercion): a wrong type in the data is a data problem to report,
not something to silently repair.

The set of node classes is closed. Code that dispatches on nodes uses
``match`` with one ``case`` per class and raises on anything else.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Annotated, Any, ClassVar, Literal

from pydantic import ConfigDict, PlainValidator, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from cyclic_schema.contracts.enums import SchemaKind
from cyclic_schema.contracts.errors import EmptyUnionError, ReferenceLoopError
from cyclic_schema.contracts.results import Issue
from cyclic_schema.contracts.sentinels import PLACEHOLDER

# Extra key handling for fixed mappings.
# "ignore" leaves unknown keys unconstrained, "forbid" reports them.
ExtraMode = Literal["ignore", "forbid"]


def issues_from_pydantic(error: PydanticValidationError) -> list[Issue]:
    """Convert a pydantic ValidationError into issues, one per error entry."""
    return [
        Issue(path=tuple(entry["loc"]), message=entry["msg"], code=entry["type"])
        for entry in error.errors(include_url=False)
    ]


class SchemaNode(ABC):
    """Base class for all schema nodes.

    Nodes are immutable after construction and compare by identity.
    """

    __slots__ = ()

    kind: ClassVar[SchemaKind]

    @abstractmethod
    def validate(self, value: Any) -> list[Issue]:
        """Validate ``value`` fully, returning issues relative to it."""

    def accepts_missing(self) -> bool:
        """Whether an absent mapping key satisfies this node."""
        return False


class ScalarNode(SchemaNode):
    """Leaf node validated by a pydantic TypeAdapter.

    Args:
        annotation: Any type pydantic can build an adapter for (``str``,
            ``int | None``, ``Literal["a", "b"]``, ``list[int]``...)
        strict: Pydantic strict mode. True (default) rejects coercion such
            as "42" -> 42. None builds the adapter without a config, which
            pydantic requires for types carrying their own config
            (BaseModel, dataclasses, TypedDict).
    """

    __slots__ = ("_adapter", "annotation")

    kind = SchemaKind.SCALAR

    def __init__(self, annotation: Any, *, strict: bool | None = True) -> None:
        self.annotation = annotation
        if strict is None:
            self._adapter: TypeAdapter[Any] = TypeAdapter(annotation)
        else:
            self._adapter = TypeAdapter(annotation, config=ConfigDict(strict=strict))

    def validate(self, value: Any) -> list[Issue]:
        try:
            self._adapter.validate_python(value)
        except PydanticValidationError as e:
            return issues_from_pydantic(e)
        return []

    def __repr__(self) -> str:
        return f"ScalarNode({self.annotation!r})"


class FixedMappingNode(SchemaNode):
    """Mapping with named keys, each with its own child schema."""

    __slots__ = ("extra", "shape")

    kind = SchemaKind.FIXED_MAPPING

    def __init__(self, shape: Mapping[str, SchemaNode], *, extra: ExtraMode = "ignore") -> None:
        self.shape: Mapping[str, SchemaNode] = MappingProxyType(dict(shape))
        self.extra = extra

    def validate(self, value: Any) -> list[Issue]:
        if not isinstance(value, Mapping):
            return [Issue(path=(), message="Input should be a valid dictionary", code="dict_type")]

        issues: list[Issue] = []
        for key, child in self.shape.items():
            if key not in value:
                if not child.accepts_missing():
                    issues.append(Issue(path=(key,), message="Field required", code="missing"))
                continue
            issues.extend(issue.with_prefix((key,)) for issue in child.validate(value[key]))

        if self.extra == "forbid":
            for key in value:
                if key not in self.shape:
                    issues.append(Issue(path=(key,), message="Extra inputs are not permitted", code="extra_forbidden"))
        return issues

    def with_optional(self, keys: Iterable[str]) -> FixedMappingNode:
        """Return a copy where the children under ``keys`` accept absence."""
        relaxed = frozenset(keys)
        return FixedMappingNode(
            {key: OptionalNode(child) if key in relaxed else child for key, child in self.shape.items()},
            extra=self.extra,
        )

    def __repr__(self) -> str:
        return f"FixedMappingNode(keys={list(self.shape)!r}, extra={self.extra!r})"


class DynamicMappingNode(SchemaNode):
    """Mapping with arbitrary string keys sharing one value schema."""

    __slots__ = ("values",)

    kind = SchemaKind.DYNAMIC_MAPPING

    def __init__(self, values: SchemaNode) -> None:
        self.values = values

    def validate(self, value: Any) -> list[Issue]:
        if not isinstance(value, Mapping):
            return [Issue(path=(), message="Input should be a valid dictionary", code="dict_type")]

        issues: list[Issue] = []
        for key, item in value.items():
            if not isinstance(key, str):
                issues.append(Issue(path=(key,), message="Keys should be valid strings", code="string_type"))
                continue
            issues.extend(issue.with_prefix((key,)) for issue in self.values.validate(item))
        return issues

    def __repr__(self) -> str:
        return f"DynamicMappingNode({self.values!r})"


class SequenceNode(SchemaNode):
    """Ordered elements (list or tuple) sharing one element schema."""

    __slots__ = ("items",)

    kind = SchemaKind.SEQUENCE

    def __init__(self, items: SchemaNode) -> None:
        self.items = items

    def validate(self, value: Any) -> list[Issue]:
        if not isinstance(value, list | tuple):
            return [Issue(path=(), message="Input should be a valid list", code="list_type")]

        issues: list[Issue] = []
        for index, item in enumerate(value):
            issues.extend(issue.with_prefix((index,)) for issue in self.items.validate(item))
        return issues

    def __repr__(self) -> str:
        return f"SequenceNode({self.items!r})"


class UnionNode(SchemaNode):
    """Ordered alternatives; the first alternative without issues wins.

    When every alternative fails, the issues of the last attempted
    alternative are reported. The placeholder alternative added by the
    shallow transformer is skipped for reporting purposes since
    "expected a placeholder" never helps anyone fix their data.

    Raises:
        EmptyUnionError: If constructed with zero options
    """

    __slots__ = ("options",)

    kind = SchemaKind.UNION

    def __init__(self, options: Iterable[SchemaNode]) -> None:
        self.options: tuple[SchemaNode, ...] = tuple(options)
        if not self.options:
            raise EmptyUnionError("union must have at least 1 option")

    def validate(self, value: Any) -> list[Issue]:
        reported: list[Issue] = []
        for option in self.options:
            issues = option.validate(value)
            if not issues:
                return []
            if option is not PLACEHOLDER_SCHEMA or not reported:
                reported = issues
        return reported

    def accepts_missing(self) -> bool:
        return any(option.accepts_missing() for option in self.options)

    def __repr__(self) -> str:
        return f"UnionNode({list(self.options)!r})"


class OptionalNode(SchemaNode):
    """Wraps an inner schema; None and absence are valid."""

    __slots__ = ("inner",)

    kind = SchemaKind.OPTIONAL

    def __init__(self, inner: SchemaNode) -> None:
        self.inner = inner

    def validate(self, value: Any) -> list[Issue]:
        if value is None:
            return []
        return self.inner.validate(value)

    def accepts_missing(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"OptionalNode({self.inner!r})"


class ReferenceNode(SchemaNode):
    """Deferred schema enabling self-referential definitions.

    The thunk is called on every ``resolve()`` and never cached, so a
    reference only ever materialises one layer of its target.

    Example:
        user = fixed(name=scalar(str), friend=lazy(lambda: user))
    """

    __slots__ = ("_thunk", "name")

    kind = SchemaKind.REFERENCE

    def __init__(self, thunk: Callable[[], SchemaNode], *, name: str | None = None) -> None:
        self._thunk = thunk
        self.name = name

    def resolve(self) -> SchemaNode:
        """Force one layer of the reference."""
        return self._thunk()

    def validate(self, value: Any) -> list[Issue]:
        return self.resolve().validate(value)

    def accepts_missing(self) -> bool:
        return self.resolve().accepts_missing()

    def __repr__(self) -> str:
        return f"ReferenceNode({self.name or '<lazy>'})"


def resolve_effective(node: SchemaNode) -> SchemaNode:
    """Strip Reference and Optional wrappers until a concrete node is reached.

    Forces references one layer at a time and stops at the first node that
    is neither. Idempotent: resolving an already-effective node returns it.

    Raises:
        ReferenceLoopError: If a reference chain passes the same reference twice
    """
    passed: set[SchemaNode] = set()
    current = node
    while True:
        match current:
            case ReferenceNode():
                if current in passed:
                    raise ReferenceLoopError(f"{current!r} resolves back onto itself")
                passed.add(current)
                current = current.resolve()
            case OptionalNode():
                current = current.inner
            case _:
                return current


def _require_placeholder(value: Any) -> Any:
    if value is not PLACEHOLDER:
        raise ValueError("Expected a deferred placeholder")
    return value


PLACEHOLDER_SCHEMA = ScalarNode(Annotated[Any, PlainValidator(_require_placeholder)], strict=None)
"""Accepts PLACEHOLDER and nothing else."""
