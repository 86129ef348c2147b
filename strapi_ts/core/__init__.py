"""
Core code generation components.

Model records, configuration, naming, the model graph and reference
resolution shared by every target-language generator.
"""

from .config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .generator import (
    CodeGenerator,
    GenerationResult,
    GeneratorError,
    OutputUnit,
    generate_code,
)
from .graph import ModelGraph, ResolvedModel, build_graph, find_model
from .naming import NamingPolicy
from .resolver import ReferenceResolver
from .schema import FieldKind, FieldSpec, RawModelRecord, RecordError, record_from_dict
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Records
    "FieldKind",
    "FieldSpec",
    "RawModelRecord",
    "RecordError",
    "record_from_dict",
    # Configuration
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Naming and graph
    "NamingPolicy",
    "ModelGraph",
    "ResolvedModel",
    "build_graph",
    "find_model",
    "ReferenceResolver",
    # Generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "OutputUnit",
    "generate_code",
    # Templates
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
