"""
Configuration management for code generation.

Handles loading and merging configuration from JSON or Python files,
providing defaults and validation for generator settings.
"""

import importlib.util
import json
from collections.abc import Callable
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Options for one generation run."""

    # Input/output settings
    input: List[str] = field(default_factory=list)
    components: Optional[str] = None
    output: str = "types"

    # Output shape
    nested: bool = False
    enum: bool = False
    collection_can_be_undefined: bool = False

    # Overrides. Each may decline by returning a falsy value.
    interface_name: Optional[Callable[[str, str], Optional[str]]] = None
    enum_name: Optional[Callable[[str, str], Optional[str]]] = None
    field_name: Optional[Callable[[str, str], Optional[str]]] = None
    field_type: Optional[Callable[[str, str, str], Optional[str]]] = None
    output_file_name: Optional[Callable[[str, str], Optional[str]]] = None
    exclude_field: Optional[Callable[[str, str], bool]] = None
    add_field: Optional[Callable[[str], Optional[List[Dict[str, str]]]]] = None
    import_as_type: Optional[Callable[[str], bool]] = None

    # Custom settings
    custom: Dict[str, Any] = field(default_factory=dict)

    def validate(self) -> "GeneratorConfig":
        """
        Check that every override is callable.

        Returns:
            The config itself, for chaining

        Raises:
            ConfigError: If an override is set to a non-callable value
        """
        for name in OVERRIDE_FIELDS:
            value = getattr(self, name)
            if value is not None and not callable(value):
                raise ConfigError(
                    f"Option '{name}' must be a function, got {type(value).__name__}"
                )
        return self


OVERRIDE_FIELDS = (
    "interface_name",
    "enum_name",
    "field_name",
    "field_type",
    "output_file_name",
    "exclude_field",
    "add_field",
    "import_as_type",
)

# camelCase spellings accepted in config files
KEY_ALIASES = {
    "collectionCanBeUndefined": "collection_can_be_undefined",
    "interfaceName": "interface_name",
    "enumName": "enum_name",
    "fieldName": "field_name",
    "fieldType": "field_type",
    "outputFileName": "output_file_name",
    "excludeField": "exclude_field",
    "addField": "add_field",
    "importAsType": "import_as_type",
}

# Old option names and their replacements
DEPRECATED_KEYS = {
    "type": "field_type",
    "inputGroup": "components",
}


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = {
            "output": "types",
            "nested": False,
            "enum": False,
            "collection_can_be_undefined": False,
        }

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Explicit overrides, applied last
            config_file: Path to a JSON or Python configuration file

        Returns:
            Merged, validated configuration
        """
        base_config = dict(self._defaults)

        if config_file:
            base_config.update(self.normalize_keys(self._load_config_file(config_file)))

        if custom_config:
            base_config.update(self.normalize_keys(custom_config))

        return self._dict_to_config(base_config).validate()

    def normalize_keys(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """Translate camelCase and deprecated option names to field names."""
        normalized: Dict[str, Any] = {}
        deprecated: Dict[str, Any] = {}

        for key, value in config_dict.items():
            if key in DEPRECATED_KEYS:
                replacement = DEPRECATED_KEYS[key]
                logger.warning(
                    "Option '%s' is deprecated, use '%s'", key, replacement
                )
                deprecated[replacement] = value
            else:
                normalized[KEY_ALIASES.get(key, key)] = value

        for key, value in deprecated.items():
            normalized.setdefault(key, value)

        return normalized

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from a JSON or Python file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        suffix = path.suffix.lower()
        if suffix == ".json":
            return self._load_json_file(path)
        if suffix == ".py":
            return self._load_python_file(path)

        raise ConfigError(f"Configuration file must be .json or .py: {path}")

    def _load_json_file(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _load_python_file(self, path: Path) -> Dict[str, Any]:
        """Read the public module-level names of a Python config file."""
        spec = importlib.util.spec_from_file_location(f"_strapi_ts_config_{path.stem}", path)
        if spec is None or spec.loader is None:
            raise ConfigError(f"Cannot import configuration file: {path}")

        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            raise ConfigError(f"Failed to execute configuration file {path}: {e}") from e

        known = {f.name for f in fields(GeneratorConfig)}
        known.update(KEY_ALIASES)
        known.update(DEPRECATED_KEYS)

        return {
            name: value
            for name, value in vars(module).items()
            if not name.startswith("_") and name in known
        }

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args: Dict[str, Any] = {}
        custom_args: Dict[str, Any] = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if isinstance(config_args.get("input"), str):
            config_args["input"] = [config_args["input"]]
        elif config_args.get("input") is not None:
            config_args["input"] = list(config_args["input"])

        if custom_args:
            existing_custom = dict(config_args.get("custom") or {})
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Explicit overrides
        config_file: Path to JSON or Python configuration file

    Returns:
        Merged configuration
    """
    return get_config_manager().get_config(custom_config, config_file)
