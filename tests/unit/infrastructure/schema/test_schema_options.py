"""
Unit tests for builder options and YAML option loading.
"""

import pytest
import yaml

from orm_json_schema.infrastructure.schema import (
    LegacyOptionError,
    ModelOptions,
    SchemaConfigurationError,
    SchemaSetOptions,
    load_schema_set_options,
)


@pytest.fixture
def options_file(tmp_path):
    """Create a temporary YAML options file."""
    data = {
        "exclude": ["password_hash"],
        "per_model": {
            "User": {"include": ["id", "email"], "required_associations": []},
            "Post": {"resolve_associations": False, "exclude": ["draft"]},
        },
    }
    path = tmp_path / "schema_options.yml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f)
    return path


@pytest.mark.unit
class TestModelOptions:
    """Tests for ModelOptions coercion."""

    def test_defaults(self):
        options = ModelOptions.coerce(None)
        assert options.include is None
        assert options.exclude == []
        assert options.resolve_associations is True
        assert options.required_associations == []

    def test_instance_passes_through(self):
        options = ModelOptions(exclude=["a"])
        assert ModelOptions.coerce(options) is options

    def test_non_mapping_rejected(self):
        with pytest.raises(SchemaConfigurationError):
            ModelOptions.coerce(["exclude"])

    def test_legacy_key_names_replacement(self):
        with pytest.raises(LegacyOptionError, match="use 'exclude'"):
            ModelOptions.coerce({"private": ["password"]})

    def test_legacy_key_via_constructor(self):
        with pytest.raises(LegacyOptionError):
            ModelOptions(alwaysRequired=True)


@pytest.mark.unit
class TestSchemaSetOptionsMerge:
    """Tests for SchemaSetOptions.options_for."""

    def test_without_override_uses_globals(self):
        options = SchemaSetOptions(include=["id"], exclude=["secret"])
        merged = options.options_for("User")
        assert merged.include == ["id"]
        assert merged.exclude == ["secret"]
        assert merged.resolve_associations is True

    def test_exclude_is_union(self):
        options = SchemaSetOptions.coerce(
            {"exclude": ["a", "b"], "per_model": {"User": {"exclude": ["b", "c"]}}}
        )
        assert options.options_for("User").exclude == ["a", "b", "c"]

    def test_override_include_replaces_global(self):
        options = SchemaSetOptions.coerce(
            {"include": ["id"], "per_model": {"User": {"include": ["email"]}}}
        )
        assert options.options_for("User").include == ["email"]
        assert options.options_for("Post").include == ["id"]

    def test_override_without_include_keeps_global(self):
        options = SchemaSetOptions.coerce(
            {"include": ["id"], "per_model": {"User": {"resolve_associations": False}}}
        )
        merged = options.options_for("User")
        assert merged.include == ["id"]
        assert merged.resolve_associations is False

    def test_merge_does_not_mutate_globals(self):
        options = SchemaSetOptions.coerce(
            {"exclude": ["a"], "per_model": {"User": {"exclude": ["b"]}}}
        )
        options.options_for("User")
        assert options.exclude == ["a"]


@pytest.mark.unit
class TestLoadSchemaSetOptions:
    """Tests for load_schema_set_options."""

    def test_loads_valid_file(self, options_file):
        options = load_schema_set_options(options_file)
        assert options.exclude == ["password_hash"]
        assert options.per_model["User"].include == ["id", "email"]
        assert options.per_model["Post"].resolve_associations is False

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")
        assert load_schema_set_options(path) == SchemaSetOptions()

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaConfigurationError, match="not found"):
            load_schema_set_options(tmp_path / "missing.yml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yml"
        path.write_text("exclude: [unclosed\n", encoding="utf-8")
        with pytest.raises(SchemaConfigurationError, match="Invalid YAML"):
            load_schema_set_options(path)

    def test_legacy_key_in_file(self, tmp_path):
        path = tmp_path / "legacy.yml"
        path.write_text("per_model:\n  User:\n    allowNull: true\n", encoding="utf-8")
        with pytest.raises(LegacyOptionError):
            load_schema_set_options(path)

    def test_per_model_list_is_configuration_error(self, tmp_path):
        path = tmp_path / "per_model_list.yml"
        path.write_text("per_model:\n  - Author\n", encoding="utf-8")
        with pytest.raises(SchemaConfigurationError, match="per_model"):
            load_schema_set_options(path)

    def test_per_model_list_via_coerce(self):
        with pytest.raises(SchemaConfigurationError):
            SchemaSetOptions.coerce({"per_model": ["Author"]})
