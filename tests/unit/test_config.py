"""
Unit tests for configuration loading and merging.
"""

import json
import logging

import pytest

from strapi_ts.core.config import (
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    get_config_manager,
    load_config,
)


class TestDefaults:
    """Test the default configuration."""

    def test_defaults(self):
        config = load_config()

        assert config.input == []
        assert config.components is None
        assert config.output == "types"
        assert config.nested is False
        assert config.enum is False
        assert config.collection_can_be_undefined is False
        assert config.interface_name is None
        assert config.custom == {}

    def test_global_manager_is_shared(self):
        assert get_config_manager() is get_config_manager()


class TestCustomConfig:
    """Test explicit overrides."""

    def test_snake_case_options(self):
        config = load_config({"enum": True, "output": "out", "input": ["api"]})

        assert config.enum is True
        assert config.output == "out"
        assert config.input == ["api"]

    def test_single_input_becomes_list(self):
        assert load_config({"input": "api"}).input == ["api"]

    def test_camel_case_aliases(self):
        exclude = lambda interface, field: False  # noqa: E731
        config = load_config({"collectionCanBeUndefined": True, "excludeField": exclude})

        assert config.collection_can_be_undefined is True
        assert config.exclude_field is exclude

    def test_unknown_keys_go_to_custom(self):
        config = load_config({"banner": "// generated"})
        assert config.custom == {"banner": "// generated"}

    def test_non_callable_override(self):
        with pytest.raises(ConfigError, match="field_type"):
            load_config({"field_type": "string"})

    def test_validate_returns_config(self):
        config = GeneratorConfig()
        assert config.validate() is config


class TestDeprecatedKeys:
    """Test renamed options."""

    def test_input_group(self, caplog):
        with caplog.at_level(logging.WARNING, logger="strapi_ts"):
            config = load_config({"inputGroup": "components"})

        assert config.components == "components"
        assert "'inputGroup' is deprecated" in caplog.text

    def test_type_maps_to_field_type(self):
        override = lambda kind, field, interface: None  # noqa: E731
        assert load_config({"type": override}).field_type is override

    def test_new_name_wins(self):
        config = ConfigManager().get_config({"inputGroup": "old", "components": "new"})
        assert config.components == "new"


class TestConfigFiles:
    """Test JSON and Python configuration files."""

    def test_json_file(self, tmp_path):
        path = tmp_path / "strapi-ts.json"
        path.write_text(json.dumps({"input": ["api"], "nested": True, "output": "gen"}))

        config = load_config(config_file=path)

        assert config.input == ["api"]
        assert config.nested is True
        assert config.output == "gen"

    def test_custom_config_overrides_file(self, tmp_path):
        path = tmp_path / "strapi-ts.json"
        path.write_text(json.dumps({"output": "gen", "enum": True}))

        config = load_config({"output": "cli"}, config_file=path)

        assert config.output == "cli"
        assert config.enum is True

    def test_python_file(self, tmp_path):
        path = tmp_path / "strapi_ts_config.py"
        path.write_text(
            "input = ['api']\n"
            "enum = True\n"
            "_private = 1\n"
            "helper = 2\n"
            "\n"
            "def interfaceName(name, filename):\n"
            "    return 'I' + name\n"
        )

        config = load_config(config_file=path)

        assert config.input == ["api"]
        assert config.enum is True
        assert config.interface_name("Article", "x.json") == "IArticle"
        assert config.custom == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(config_file=tmp_path / "missing.json")

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("enum: true\n")

        with pytest.raises(ConfigError, match=".json or .py"):
            load_config(config_file=path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(config_file=path)

    def test_json_must_be_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigError, match="JSON object"):
            load_config(config_file=path)

    def test_failing_python_file(self, tmp_path):
        path = tmp_path / "broken_config.py"
        path.write_text("raise ValueError('nope')\n")

        with pytest.raises(ConfigError, match="nope"):
            load_config(config_file=path)
