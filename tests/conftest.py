# tests/conftest.py
"""Shared test fixtures.

Schema Fixtures:
- user_schema: self-referential record {name, friend, ofriend?}
- mutual_friends: two records referencing each other through both fields

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import os
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

from cyclic_schema.schema import SchemaNode, fixed, lazy, optional, scalar


def make_user_schema() -> SchemaNode:
    """User = {name: str, friend: User, ofriend?: User}."""
    user: SchemaNode = lazy(
        lambda: fixed(
            name=scalar(str),
            friend=user,
            ofriend=optional(user),
        ),
        name="User",
    )
    return user


@pytest.fixture
def user_schema() -> SchemaNode:
    return make_user_schema()


@pytest.fixture
def mutual_friends() -> tuple[dict[str, Any], dict[str, Any]]:
    """A <-> B through both ``friend`` and ``ofriend``."""
    user_a: dict[str, Any] = {"name": "aaa"}
    user_b: dict[str, Any] = {"name": "bbb"}
    user_a["friend"] = user_b
    user_a["ofriend"] = user_b
    user_b["friend"] = user_a
    user_b["ofriend"] = user_a
    return user_a, user_b


# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
