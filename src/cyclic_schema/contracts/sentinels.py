"""Placeholder sentinel for deferred composite values.

During shallow validation every composite child of a value is replaced
by ``PLACEHOLDER``. The matching schema (``PLACEHOLDER_SCHEMA`` in
``cyclic_schema.schema.nodes``) accepts this exact object and nothing
else, so no real data can ever satisfy it.

Example usage:
    from cyclic_schema.contracts.sentinels import PLACEHOLDER

    partial = {key: PLACEHOLDER if is_composite(v) else v for key, v in value.items()}
"""

from typing import Final


class PlaceholderSentinel:
    """Marks a composite value whose validation has been deferred.

    This is a singleton - use the PLACEHOLDER instance, not the class directly.
    Comparison should always use `is` identity, never equality.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "<PLACEHOLDER>"

    def __reduce__(self) -> str:
        # Copies and pickles resolve back to the singleton
        return "PLACEHOLDER"


PLACEHOLDER: Final[PlaceholderSentinel] = PlaceholderSentinel()
"""Singleton standing in for a composite value validated later.

Use identity comparison: `if value is PLACEHOLDER:`
"""
