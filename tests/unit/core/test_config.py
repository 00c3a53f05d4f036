# tests/unit/core/test_config.py
"""Tests for validator settings and loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError


class TestValidatorSettings:
    """Settings model validation."""

    def test_defaults(self) -> None:
        from cyclic_schema.contracts import UnionFailurePolicy
        from cyclic_schema.core.config import DEFAULT_MAX_SHALLOW_DEPTH, ValidatorSettings

        settings = ValidatorSettings()
        assert settings.max_shallow_depth == DEFAULT_MAX_SHALLOW_DEPTH == 5
        assert settings.union_failure_policy is UnionFailurePolicy.LAST

    def test_policy_from_string(self) -> None:
        from cyclic_schema.contracts import UnionFailurePolicy
        from cyclic_schema.core.config import ValidatorSettings

        settings = ValidatorSettings(union_failure_policy="fewest")
        assert settings.union_failure_policy is UnionFailurePolicy.FEWEST

    def test_unknown_policy_rejected(self) -> None:
        from cyclic_schema.core.config import ValidatorSettings

        with pytest.raises(ValidationError):
            ValidatorSettings(union_failure_policy="first")

    def test_depth_must_be_positive(self) -> None:
        from cyclic_schema.core.config import ValidatorSettings

        with pytest.raises(ValidationError):
            ValidatorSettings(max_shallow_depth=0)

    def test_settings_are_frozen(self) -> None:
        from cyclic_schema.core.config import ValidatorSettings

        settings = ValidatorSettings()
        with pytest.raises(ValidationError):
            settings.max_shallow_depth = 9  # type: ignore[misc]


class TestLoadSettings:
    """Test Dynaconf-based settings loading."""

    def test_load_from_yaml_file(self, tmp_path: Path) -> None:
        from cyclic_schema.contracts import UnionFailurePolicy
        from cyclic_schema.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("""
max_shallow_depth: 3
union_failure_policy: "all"
""")
        settings = load_settings(config_file)
        assert settings.max_shallow_depth == 3
        assert settings.union_failure_policy is UnionFailurePolicy.ALL

    def test_load_with_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        from cyclic_schema.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("""
max_shallow_depth: 3
""")
        # Environment variable should override YAML
        monkeypatch.setenv("CYCLIC_SCHEMA_MAX_SHALLOW_DEPTH", "8")

        settings = load_settings(config_file)
        assert settings.max_shallow_depth == 8

    def test_load_validates_schema(self, tmp_path: Path) -> None:
        from cyclic_schema.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("""
max_shallow_depth: -1
""")
        with pytest.raises(ValidationError):
            load_settings(config_file)

    def test_load_missing_file_raises_file_not_found(self, tmp_path: Path) -> None:
        from cyclic_schema.core.config import load_settings

        missing_file = tmp_path / "nonexistent.yaml"
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_settings(missing_file)

    def test_loaded_settings_drive_engine(self, tmp_path: Path) -> None:
        from cyclic_schema import validate_in_place
        from cyclic_schema.core.config import load_settings
        from cyclic_schema.schema import fixed, scalar, union

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("""
union_failure_policy: "all"
""")
        schema = union(fixed(a=fixed(n=scalar(int))), fixed(b=fixed(n=scalar(int))))

        result = validate_in_place(schema, {"a": {"n": "x"}, "b": {"n": "y"}}, settings=load_settings(config_file))

        assert sorted(issue.path for issue in result.issues) == [("a", "n"), ("b", "n")]
