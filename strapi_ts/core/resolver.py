"""
Reference resolution between models.

Computes the relative import paths between output units, the import
list of a model, and the interface name a relation field refers to.
Unresolvable references degrade to ``any`` with a diagnostic.
"""

import posixpath
from typing import List, Optional

from ..logging_config import get_logger
from .config import GeneratorConfig
from .graph import ModelGraph, ResolvedModel

logger = get_logger(__name__)

FALLBACK_TYPE = "any"
WILDCARD_REFERENCE = "*"


class ReferenceResolver:
    """Resolves model references against a built graph."""

    def __init__(self, graph: ModelGraph, config: Optional[GeneratorConfig] = None):
        self.graph = graph
        self.config = config or GeneratorConfig()
        self.warnings: List[str] = []

    def find(self, name: str) -> Optional[ResolvedModel]:
        return self.graph.find(name)

    def type_name(self, reference: str, interface_name: str, field_name: str) -> str:
        """
        Interface name of a referenced model.

        Args:
            reference: Model key named by the field
            interface_name: Interface owning the field
            field_name: Field holding the reference

        Returns:
            The target's interface name, or ``any`` when it is not in the graph
        """
        found = self.find(reference)
        if found is not None:
            return found.interface_name

        if reference != WILDCARD_REFERENCE:
            message = (
                f"type '{reference}' unknown on {interface_name}[{field_name}] "
                f"=> fallback to '{FALLBACK_TYPE}'. Add the folder that contains "
                f"the definition whose name is '{reference}' to the inputs"
            )
            logger.warning(message)
            self.warnings.append(message)
        return FALLBACK_TYPE

    def import_path(self, source: ResolvedModel, target: ResolvedModel) -> str:
        """
        Relative module path from the source unit to the target unit.

        Paths use forward slashes and start with ``./`` unless they climb
        out of the source folder.
        """
        source_dir = posixpath.dirname(source.output_unit) or "."
        target_dir = posixpath.dirname(target.output_unit) or "."

        rel = posixpath.relpath(target_dir, source_dir)
        rel = posixpath.normpath(
            posixpath.join(rel, posixpath.basename(target.output_unit))
        )
        if not rel.startswith(".."):
            rel = f"./{rel}"
        return rel

    def import_statement(self, source: ResolvedModel, target: ResolvedModel) -> str:
        as_type = self.config.import_as_type and self.config.import_as_type(
            source.interface_name
        )
        keyword = "import type" if as_type else "import"
        return (
            f"{keyword} {{ {target.interface_name} }} "
            f"from '{self.import_path(source, target)}';"
        )

    def is_excluded(self, interface_name: str, field_name: str) -> bool:
        exclude = self.config.exclude_field
        return bool(exclude and exclude(interface_name, field_name))

    def referenced_models(self, model: ResolvedModel) -> List[ResolvedModel]:
        """Models other than itself that a model's fields point to."""
        targets: List[ResolvedModel] = []

        def add(name: Optional[str]) -> None:
            if not name or name.lower() == model.model_key:
                return
            found = self.find(name)
            if found is not None and found.model_key != model.model_key:
                targets.append(found)

        for field_name, spec in model.attributes.items():
            if self.is_excluded(model.interface_name, field_name):
                continue
            add(spec.reference)
            for component in spec.components:
                add(component)

        return targets

    def collect_imports(self, model: ResolvedModel) -> List[str]:
        """
        Import statements needed by a model's unit.

        Returns:
            De-duplicated, sorted import statements
        """
        statements = {
            self.import_statement(model, target)
            for target in self.referenced_models(model)
        }
        return sorted(statements)
