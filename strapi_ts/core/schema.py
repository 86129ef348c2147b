"""
Core model representation for code generation.

Converts parsed content-model documents into a normalized internal
format that the graph builder and generators can work with consistently.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class RecordError(Exception):
    """Exception raised when a model document cannot be interpreted."""

    pass


class FieldKind(Enum):
    """Attribute kinds understood by the type mapper."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    TEXT = "text"
    RICHTEXT = "richtext"
    EMAIL = "email"
    PASSWORD = "password"
    UID = "uid"
    TIME = "time"
    DATE = "date"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"
    MEDIA = "media"
    JSON = "json"
    DECIMAL = "decimal"
    FLOAT = "float"
    BIGINTEGER = "biginteger"
    INTEGER = "integer"
    ENUMERATION = "enumeration"
    COMPONENT = "component"
    DYNAMICZONE = "dynamiczone"
    RELATION = "relation"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["FieldKind"]:
        """Map a raw kind tag (any case) to a FieldKind, or None if unknown."""
        if not value:
            return None
        try:
            return cls(str(value).lower())
        except ValueError:
            return None


# Attribute keys with a dedicated FieldSpec slot
_KNOWN_ATTRIBUTE_KEYS = {
    "type",
    "columnType",
    "required",
    "unique",
    "default",
    "collection",
    "model",
    "component",
    "components",
    "via",
    "plugin",
    "target",
    "relation",
    "repeatable",
    "multiple",
    "min",
    "max",
    "enum",
}


@dataclass
class FieldSpec:
    """Represents one declared attribute of a model."""

    type: Optional[str] = None
    column_type: Optional[str] = None
    required: bool = False
    unique: bool = False
    default: Any = None

    # Relation targets
    collection: Optional[str] = None
    model: Optional[str] = None
    component: Optional[str] = None
    components: List[str] = field(default_factory=list)
    via: Optional[str] = None
    plugin: Optional[str] = None
    target: Optional[str] = None
    relation: Optional[str] = None

    # Cardinality
    repeatable: bool = False
    multiple: bool = False
    min: Optional[int] = None
    max: Optional[int] = None

    # Enumeration values
    enum: Optional[List[str]] = None

    # Anything else found in the document
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> Optional[FieldKind]:
        """Parsed kind tag, None when absent or unrecognized."""
        return FieldKind.parse(self.type)

    @property
    def reference(self) -> Optional[str]:
        """Name of the single related model, if any."""
        return self.collection or self.model or self.component

    @property
    def is_list(self) -> bool:
        """Whether the property is rendered as an array."""
        return bool(self.collection or self.repeatable)

    @property
    def is_dynamic_zone(self) -> bool:
        return self.kind == FieldKind.DYNAMICZONE


@dataclass
class RawModelRecord:
    """A parsed model or component definition, tagged with its source path."""

    filename: str
    is_component: bool = False
    name: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    collection_name: Optional[str] = None
    connection: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)
    attributes: Dict[str, FieldSpec] = field(default_factory=dict)

    def get_field(self, name: str) -> Optional[FieldSpec]:
        """Get attribute by name."""
        return self.attributes.get(name)


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


def _as_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def field_from_dict(name: str, data: Any) -> FieldSpec:
    """
    Convert one attribute document to a FieldSpec.

    Args:
        name: Attribute name, used in error messages
        data: Parsed attribute document

    Returns:
        FieldSpec for the attribute

    Raises:
        RecordError: If the attribute is not a JSON object
    """
    if not isinstance(data, dict):
        raise RecordError(
            f"Attribute '{name}' must be an object, got {type(data).__name__}"
        )

    components = data.get("components")
    enum_values = data.get("enum")

    return FieldSpec(
        type=_as_str(data.get("type")),
        column_type=_as_str(data.get("columnType")),
        required=bool(data.get("required", False)),
        unique=bool(data.get("unique", False)),
        default=data.get("default"),
        collection=_as_str(data.get("collection")),
        model=_as_str(data.get("model")),
        component=_as_str(data.get("component")),
        components=[str(c) for c in components] if isinstance(components, list) else [],
        via=_as_str(data.get("via")),
        plugin=_as_str(data.get("plugin")),
        target=_as_str(data.get("target")),
        relation=_as_str(data.get("relation")),
        repeatable=bool(data.get("repeatable", False)),
        multiple=bool(data.get("multiple", False)),
        min=_as_int(data.get("min")),
        max=_as_int(data.get("max")),
        enum=[str(v) for v in enum_values] if isinstance(enum_values, list) else None,
        extra={k: v for k, v in data.items() if k not in _KNOWN_ATTRIBUTE_KEYS},
    )


def record_from_dict(
    data: Any, filename: str, is_component: bool = False
) -> RawModelRecord:
    """
    Convert a parsed model document to a RawModelRecord.

    The display name comes from ``info.name``; documents that only carry
    ``info.displayName`` use that instead.

    Args:
        data: Parsed JSON document
        filename: Path the document was read from
        is_component: Whether the document defines a reusable component

    Returns:
        RawModelRecord with all attributes converted

    Raises:
        RecordError: If the document structure is not usable
    """
    if not isinstance(data, dict):
        raise RecordError(
            f"Model document {filename} must be an object, got {type(data).__name__}"
        )

    info = data.get("info") or {}
    if not isinstance(info, dict):
        raise RecordError(f"'info' in {filename} must be an object")

    attributes = data.get("attributes") or {}
    if not isinstance(attributes, dict):
        raise RecordError(f"'attributes' in {filename} must be an object")

    options = data.get("options") or {}
    if not isinstance(options, dict):
        options = {}

    try:
        fields = {
            attr_name: field_from_dict(attr_name, attr_data)
            for attr_name, attr_data in attributes.items()
        }
    except RecordError as e:
        raise RecordError(f"{filename}: {e}") from e

    return RawModelRecord(
        filename=str(filename),
        is_component=is_component,
        name=_as_str(info.get("name")) or _as_str(info.get("displayName")),
        description=_as_str(info.get("description")),
        icon=_as_str(info.get("icon")),
        collection_name=_as_str(data.get("collectionName")),
        connection=_as_str(data.get("connection")),
        options=options,
        attributes=fields,
    )
