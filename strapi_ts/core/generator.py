"""
Base generator interface for all code generation targets.

Defines the contract a target-language generator implements and the
result containers handed to the writer.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ..logging_config import get_logger
from .config import GeneratorConfig
from .graph import ModelGraph, ResolvedModel, build_graph
from .schema import RawModelRecord
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


@dataclass(frozen=True)
class OutputUnit:
    """One generated source file: relative path without extension, and text."""

    path: str
    content: str
    extension: str = ".ts"

    @property
    def filename(self) -> str:
        return f"{self.path}{self.extension}"


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self.template_engine: TemplateEngine = create_template_engine(
            self.get_template_directory()
        )

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language."""

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files."""

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @abstractmethod
    def generate(self, graph: ModelGraph) -> List[OutputUnit]:
        """
        Generate every unit for a graph.

        Args:
            graph: Fully built model graph

        Returns:
            Output units, model units first and the index unit last
        """

    @abstractmethod
    def generate_single_model(self, model: ResolvedModel) -> str:
        """Generate the unit text for one model."""

    @property
    def warnings(self) -> List[str]:
        """Diagnostics collected during the last generate() call."""
        return []

    def format_code(self, code: str) -> str:
        """
        Strip trailing whitespace and collapse runs of blank lines.

        Args:
            code: Raw generated code

        Returns:
            Formatted code ending with a single newline
        """
        formatted_lines = []
        blank_count = 0

        for line in code.split("\n"):
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).rstrip("\n") + "\n"

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        return self.template_engine.render_template(template_name, context)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        units: Optional[List[OutputUnit]] = None,
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        self.units = units or []
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @property
    def index(self) -> Optional[OutputUnit]:
        """The aggregating index unit, if generated."""
        return self.units[-1] if self.units else None

    @property
    def model_units(self) -> List[OutputUnit]:
        return self.units[:-1]

    @classmethod
    def error(
        cls, message: str, exception: Optional[Exception] = None
    ) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls()
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator,
    records: Iterable[RawModelRecord],
) -> GenerationResult:
    """
    Build the graph and generate every unit, capturing failures.

    Args:
        generator: Code generator instance
        records: All records of the build

    Returns:
        GenerationResult with units, warnings, and metadata
    """
    try:
        graph = build_graph(records, generator.config)
        units = generator.generate(graph)
        warnings = list(generator.warnings)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "model_count": len(graph),
            "unit_count": len(units),
            "unresolved_count": len(warnings),
        }
        return GenerationResult(units, warnings, metadata)

    except Exception as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)
