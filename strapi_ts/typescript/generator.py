"""
TypeScript code generator implementation.

Generates one interface unit per model, with imports for referenced
models, optional enums and a type guard, plus an index unit that
re-exports every model unit.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.config import GeneratorConfig, load_config
from ..core.generator import CodeGenerator, GeneratorError, OutputUnit
from ..core.graph import ModelGraph, ResolvedModel
from ..core.naming import NamingPolicy
from ..core.resolver import ReferenceResolver
from ..core.schema import FieldSpec
from ..core.templates import TemplateError
from ..logging_config import get_logger
from .types import TypeScriptTypeMapper

logger = get_logger(__name__)

INDEX_UNIT = "index"
ID_FIELD = FieldSpec(type="string", required=True)


def _comment_text(value: Optional[str]) -> Optional[str]:
    """Text safe inside a `/** */` block."""
    return value.replace("*/", "*\\/") if value else value


class TypeScriptGenerator(CodeGenerator):
    """Code generator for TypeScript interfaces and type guards."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        super().__init__(config)
        self.naming = NamingPolicy(self.config)
        self._resolver: Optional[ReferenceResolver] = None
        self._types: Optional[TypeScriptTypeMapper] = None

    @property
    def language_name(self) -> str:
        return "typescript"

    @property
    def file_extension(self) -> str:
        return ".ts"

    def get_template_directory(self) -> Path:
        return Path(__file__).parent / "templates"

    @property
    def warnings(self) -> List[str]:
        return list(self._resolver.warnings) if self._resolver else []

    def bind(self, graph: ModelGraph) -> None:
        """Attach a graph; resets collected diagnostics."""
        self._resolver = ReferenceResolver(graph, self.config)
        self._types = TypeScriptTypeMapper(self._resolver, self.config, self.naming)

    @property
    def resolver(self) -> ReferenceResolver:
        if self._resolver is None:
            raise GeneratorError("No model graph bound to the generator")
        return self._resolver

    @property
    def types(self) -> TypeScriptTypeMapper:
        if self._types is None:
            raise GeneratorError("No model graph bound to the generator")
        return self._types

    def generate(self, graph: ModelGraph) -> List[OutputUnit]:
        """Generate every model unit and the index unit."""
        self.bind(graph)

        units = [
            OutputUnit(
                path=model.output_unit,
                content=self.generate_single_model(model),
                extension=self.file_extension,
            )
            for model in graph.models
        ]
        units.append(
            OutputUnit(
                path=INDEX_UNIT,
                content=self.generate_index(graph),
                extension=self.file_extension,
            )
        )

        logger.info("Generated %d interfaces", len(graph))
        return units

    def generate_single_model(self, model: ResolvedModel) -> str:
        """Render the unit for one model."""
        context = self._build_context(model)
        try:
            code = self.render_template("interface.ts.j2", context)
        except TemplateError as e:
            raise GeneratorError(
                f"Failed to generate {model.interface_name} from {model.filename}: {e}"
            ) from e
        return self.format_code(code)

    def _build_context(self, model: ResolvedModel) -> Dict[str, Any]:
        interface_name = model.interface_name

        properties = [self.types.property_text(interface_name, "id", ID_FIELD)]
        included: Dict[str, FieldSpec] = {}
        for field_name, spec in model.attributes.items():
            if self.resolver.is_excluded(interface_name, field_name):
                logger.debug("Excluding %s.%s", interface_name, field_name)
                continue
            included[field_name] = spec
            properties.append(self.types.property_text(interface_name, field_name, spec))

        properties.extend(self._extra_properties(interface_name))

        return {
            "imports": self.resolver.collect_imports(model),
            "display_name": _comment_text(model.name or interface_name),
            "description": _comment_text(model.record.description),
            "interface_name": interface_name,
            "discriminant": model.discriminant,
            "model_key": model.model_key,
            "properties": properties,
            "enums": self.types.enum_text(interface_name, included) if self.config.enum else [],
        }

    def _extra_properties(self, interface_name: str) -> List[str]:
        add_field = self.config.add_field
        if add_field is None:
            return []
        properties = []
        for item in add_field(interface_name) or []:
            if isinstance(item, dict):
                name, prop_type = item["name"], item["type"]
            else:
                name, prop_type = item
            properties.append(f"{name}: {prop_type};")
        return properties

    def generate_index(self, graph: ModelGraph) -> str:
        """Render the unit re-exporting every model unit, sorted by path."""
        units = sorted(f"./{model.output_unit}" for model in graph.models)
        return self.render_template("index.ts.j2", {"units": units})


def create_typescript_generator(
    config: Optional[GeneratorConfig] = None, **options: Any
) -> TypeScriptGenerator:
    """
    Create a TypeScript generator.

    Args:
        config: Base configuration
        **options: Option overrides, in snake_case or camelCase
    """
    if config is None:
        config = load_config(custom_config=options)
    elif options:
        raise GeneratorError("Pass either a config or keyword options, not both")

    return TypeScriptGenerator(config)
