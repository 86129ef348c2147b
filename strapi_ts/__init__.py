"""
strapi-ts: TypeScript interfaces from content-model definitions.

Loads model and component definitions, resolves the references between
them and emits one TypeScript unit per model plus an index unit.
"""

from typing import Any, Dict, Iterable, Union

from .core.config import ConfigError, GeneratorConfig, load_config
from .core.generator import GenerationResult, GeneratorError, OutputUnit, generate_code
from .core.schema import FieldSpec, RawModelRecord, record_from_dict
from .loader import LoaderError, load_models
from .typescript import TypeScriptGenerator
from .writer import WriteError, write_units

__version__ = "0.1.0"


def _as_config(config: Union[GeneratorConfig, Dict[str, Any], None]) -> GeneratorConfig:
    if isinstance(config, GeneratorConfig):
        return config.validate()
    return load_config(custom_config=config)


def convert(
    records: Iterable[RawModelRecord],
    config: Union[GeneratorConfig, Dict[str, Any], None] = None,
) -> GenerationResult:
    """
    Generate TypeScript units from already-loaded records.

    Args:
        records: Every model and component record of the build
        config: GeneratorConfig or a dict of options

    Returns:
        GenerationResult with one unit per model and the index unit last
    """
    return generate_code(TypeScriptGenerator(_as_config(config)), records)


def run(config: Union[GeneratorConfig, Dict[str, Any], None] = None) -> GenerationResult:
    """
    Load definitions, generate units and write them to the output folder.

    Raises:
        LoaderError: If an input is missing or malformed
        GeneratorError: If generation fails
        WriteError: If a unit cannot be written
    """
    config = _as_config(config)
    records = load_models(config)

    result = convert(records, config)
    if not result.success:
        raise GeneratorError(result.error_message) from result.exception

    write_units(result.units, config.output)
    return result


__all__ = [
    "convert",
    "run",
    "load_config",
    "load_models",
    "write_units",
    "GeneratorConfig",
    "GenerationResult",
    "OutputUnit",
    "RawModelRecord",
    "FieldSpec",
    "record_from_dict",
    "TypeScriptGenerator",
    "ConfigError",
    "GeneratorError",
    "LoaderError",
    "WriteError",
]
