"""
cyclic-schema: schema validation for data graphs that may contain reference cycles.

Two entry points share one cycle-safe algorithm:

- validate_in_place: returns the original value on success
- validate_rebuilding: returns a rebuilt tree, cut at repeated references
"""

from cyclic_schema.contracts import PLACEHOLDER, Issue, SchemaInvariantError, ValidationResult
from cyclic_schema.core.config import ValidatorSettings, load_settings
from cyclic_schema.engine import validate_in_place, validate_rebuilding

__version__ = "0.1.0"

__all__ = [
    "PLACEHOLDER",
    "Issue",
    "SchemaInvariantError",
    "ValidationResult",
    "ValidatorSettings",
    "__version__",
    "load_settings",
    "validate_in_place",
    "validate_rebuilding",
]
