# src/cyclic_schema/core/config.py
"""
Validator settings and loading.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction, so one instance can
be shared by concurrent validation calls.
"""

from pathlib import Path

from pydantic import BaseModel, Field

from cyclic_schema.contracts.enums import UnionFailurePolicy

# Transformer cutoff: past this many nested schema layers the shallow
# transformer returns the original schema unchanged.
DEFAULT_MAX_SHALLOW_DEPTH = 5


class ValidatorSettings(BaseModel):
    """Tuning knobs for the traversal engine.

    Example YAML:
        max_shallow_depth: 5
        union_failure_policy: last   # or: fewest, all
    """

    model_config = {"frozen": True}

    max_shallow_depth: int = Field(
        default=DEFAULT_MAX_SHALLOW_DEPTH,
        gt=0,
        description="Schema layers transformed before the shallow transformer stops",
    )
    union_failure_policy: UnionFailurePolicy = Field(
        default=UnionFailurePolicy.LAST,
        description="Which alternative's issues to report when no union alternative matches",
    )


def load_settings(config_path: Path) -> ValidatorSettings:
    """Load settings from a YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (CYCLIC_SCHEMA_*) - highest priority
    2. Config file
    3. Defaults from the Pydantic schema - lowest priority

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated ValidatorSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="CYCLIC_SCHEMA",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; Pydantic fields are lowercase
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    return ValidatorSettings(**raw_config)
