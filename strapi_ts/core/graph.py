"""
Model graph construction.

Turns the raw records of one build into ResolvedModels keyed by their
lower-cased model key. The graph is built once and only read afterwards.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import PurePath
from typing import Dict, Iterable, Iterator, List, Optional

from ..logging_config import get_logger
from .config import GeneratorConfig
from .naming import NamingPolicy, component_folder
from .schema import FieldSpec, RawModelRecord

logger = get_logger(__name__)

MODEL_SUFFIX = ".settings.json"
COMPONENT_SUFFIX = ".json"


def _strip_suffix(name: str, *suffixes: str) -> str:
    for suffix in suffixes:
        if name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)]
    return name


def model_name_for(record: RawModelRecord) -> str:
    """
    Model name derived from the record's source path, case preserved.

    Components are ``<folder>.<file name>``; top-level models use the file
    name without its ``.settings.json`` (or ``.json``) suffix.
    """
    basename = PurePath(record.filename.replace("\\", "/")).name
    if record.is_component:
        return f"{component_folder(record.filename)}.{_strip_suffix(basename, COMPONENT_SUFFIX)}"
    return _strip_suffix(basename, MODEL_SUFFIX, COMPONENT_SUFFIX)


@dataclass(frozen=True)
class ResolvedModel:
    """A raw record plus the names derived for it."""

    record: RawModelRecord
    model_key: str
    interface_name: str
    output_unit: str

    @property
    def name(self) -> Optional[str]:
        return self.record.name

    @property
    def filename(self) -> str:
        return self.record.filename

    @property
    def is_component(self) -> bool:
        return self.record.is_component

    @property
    def attributes(self) -> Dict[str, FieldSpec]:
        return self.record.attributes

    @property
    def discriminant(self) -> str:
        """Name of the literal field used by the type guard."""
        return "__component" if self.is_component else "__contentType"


class ModelGraph(Mapping):
    """Read-only mapping from model key to ResolvedModel."""

    def __init__(self, models: Dict[str, ResolvedModel]):
        self._models = dict(models)

    def __getitem__(self, key: str) -> ResolvedModel:
        return self._models[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._models)

    def __len__(self) -> int:
        return len(self._models)

    @property
    def models(self) -> List[ResolvedModel]:
        """Models in load order."""
        return list(self._models.values())

    def find(self, name: str) -> Optional[ResolvedModel]:
        """Case-insensitive exact lookup by model key."""
        if not name:
            return None
        return self._models.get(name.lower())


def resolve_model(record: RawModelRecord, naming: NamingPolicy) -> ResolvedModel:
    """Derive key, interface name and output unit for one record."""
    model_name = model_name_for(record)
    interface_name = naming.interface_name(
        record.name, record.filename, record.is_component
    )
    output_unit = naming.output_unit(
        model_name, record.is_component, interface_name, record.filename
    )
    return ResolvedModel(
        record=record,
        model_key=model_name.lower(),
        interface_name=interface_name,
        output_unit=output_unit,
    )


def build_graph(
    records: Iterable[RawModelRecord], config: Optional[GeneratorConfig] = None
) -> ModelGraph:
    """
    Build the model graph for one run.

    A later record whose key is already taken replaces the earlier one.

    Args:
        records: Every record of the build, in load order
        config: Naming overrides and output options

    Returns:
        ModelGraph keyed by lower-cased model key
    """
    naming = NamingPolicy(config)
    models: Dict[str, ResolvedModel] = {}

    for record in records:
        resolved = resolve_model(record, naming)
        previous = models.get(resolved.model_key)

        if previous is not None:
            if previous.is_component == resolved.is_component:
                logger.warning(
                    "Duplicate model key '%s': %s replaces %s",
                    resolved.model_key,
                    resolved.filename,
                    previous.filename,
                )
            else:
                logger.info(
                    "Model key '%s' from %s replaces %s",
                    resolved.model_key,
                    resolved.filename,
                    previous.filename,
                )

        models[resolved.model_key] = resolved

    logger.debug("Built model graph with %d models", len(models))
    return ModelGraph(models)


def find_model(graph: ModelGraph, name: str) -> Optional[ResolvedModel]:
    """Look up a model by key, ignoring case."""
    return graph.find(name)
