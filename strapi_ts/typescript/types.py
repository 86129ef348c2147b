"""
TypeScript type system for code generation.

Maps model attributes to TypeScript property declarations and enum
declarations. Relation, component and dynamic-zone attributes are
resolved through the ReferenceResolver; everything else goes through
the scalar table, which the run's field_type override may preempt.
"""

import json
import math
import re
from typing import Dict, List, Optional

from ..core.config import GeneratorConfig
from ..core.naming import NamingPolicy
from ..core.resolver import FALLBACK_TYPE, ReferenceResolver
from ..core.schema import FieldKind, FieldSpec

UNKNOWN_TYPE = "unknown"
ARRAY_MARKER = "[]"

TS_TYPE_MAP: Dict[FieldKind, str] = {
    FieldKind.TEXT: "string",
    FieldKind.RICHTEXT: "string",
    FieldKind.EMAIL: "string",
    FieldKind.PASSWORD: "string",
    FieldKind.UID: "string",
    FieldKind.TIME: "string",
    FieldKind.DATE: "Date",
    FieldKind.DATETIME: "Date",
    FieldKind.TIMESTAMP: "Date",
    FieldKind.MEDIA: "Blob",
    FieldKind.JSON: "{ [key: string]: unknown }",
    FieldKind.DECIMAL: "number",
    FieldKind.FLOAT: "number",
    FieldKind.BIGINTEGER: "number",
    FieldKind.INTEGER: "number",
    FieldKind.STRING: "string",
    FieldKind.NUMBER: "number",
    FieldKind.BOOLEAN: "boolean",
}

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_NON_IDENTIFIER_CHAR = re.compile(r"[^A-Za-z0-9_$]")


def string_literal(value: str) -> str:
    """Single-quoted TypeScript string literal."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _is_numeric_name(value: str) -> bool:
    """Whether a name reads back unchanged from the number it denotes."""
    try:
        number = float(value)
    except ValueError:
        return False
    if math.isnan(number):
        canonical = "NaN"
    elif math.isinf(number):
        canonical = "Infinity" if number > 0 else "-Infinity"
    elif number.is_integer() and abs(number) < 1e21:
        canonical = str(int(number))
    else:
        canonical = repr(number)
    return canonical == value


def enum_member_name(value: str) -> str:
    """
    Member name for an enum literal.

    Identifiers are used as they are and other literals are quoted. Empty
    and numeric names are not allowed as members, so they become an
    identifier with a leading `_` and other characters replaced by `_`.
    """
    if not value or _is_numeric_name(value):
        return "_" + _NON_IDENTIFIER_CHAR.sub("_", value)
    if _IDENTIFIER.match(value):
        return value
    return json.dumps(value)


def enum_member(value: str) -> str:
    """Enum member mapping a literal to itself."""
    name = enum_member_name(value)
    return f"{name} = {json.dumps(value)},"


class TypeScriptTypeMapper:
    """Turns attributes into property and enum declarations."""

    def __init__(
        self,
        resolver: ReferenceResolver,
        config: Optional[GeneratorConfig] = None,
        naming: Optional[NamingPolicy] = None,
    ):
        self.resolver = resolver
        self.config = config or resolver.config
        self.naming = naming or NamingPolicy(self.config)

    def is_required(self, spec: FieldSpec) -> bool:
        """
        Whether a property is declared without ``?``.

        Explicitly required fields are required. Collections and repeatables
        are required unless collection_can_be_undefined is set. Dynamic zones
        with a positive minimum are required.
        """
        if spec.required:
            return True
        if spec.collection or spec.repeatable:
            return not self.config.collection_can_be_undefined
        if spec.is_dynamic_zone and spec.min is not None and spec.min > 0:
            return True
        return False

    def default_scalar_type(
        self, interface_name: str, field_name: str, spec: FieldSpec
    ) -> str:
        """Scalar table lookup, with enumerations handled per enum mode."""
        kind = spec.kind
        if kind == FieldKind.ENUMERATION:
            if not spec.enum:
                return "string"
            if self.config.enum:
                return self.naming.enum_name(field_name, interface_name)
            return " | ".join(string_literal(value) for value in spec.enum)
        return TS_TYPE_MAP.get(kind, UNKNOWN_TYPE)

    def scalar_type(self, interface_name: str, field_name: str, spec: FieldSpec) -> str:
        override = self.config.field_type
        if override is not None:
            result = override(spec.type or "", field_name, interface_name)
            if result:
                return result
        return self.default_scalar_type(interface_name, field_name, spec)

    def dynamic_zone_type(
        self, interface_name: str, field_name: str, spec: FieldSpec
    ) -> str:
        """
        Tuple or array type for a dynamic zone.

        Exactly one element (max 1, min 1 or unset) gives a one-slot tuple;
        min = max = 2 or 3 give tuples of that length; anything else is an
        open array. Every slot is the union of the allowed components.
        """
        names = [
            self.resolver.type_name(component, interface_name, field_name)
            for component in spec.components
        ]
        union = " | ".join(names) or FALLBACK_TYPE

        low, high = spec.min, spec.max
        if high == 1 and (low == 1 or not low):
            return f"[{union}]"
        if low == high == 2:
            return f"[({union}), ({union})]"
        if low == high == 3:
            return f"[({union}), ({union}), ({union})]"
        return f"({union})[]"

    def property_type(self, interface_name: str, field_name: str, spec: FieldSpec) -> str:
        """Type of a property, without the array marker."""
        reference = spec.collection or spec.component or spec.model
        if reference:
            return self.resolver.type_name(reference, interface_name, field_name)
        if spec.is_dynamic_zone:
            return self.dynamic_zone_type(interface_name, field_name, spec)
        if spec.type:
            return self.scalar_type(interface_name, field_name, spec)
        return UNKNOWN_TYPE

    def property_text(self, interface_name: str, field_name: str, spec: FieldSpec) -> str:
        """
        Full property declaration, e.g. ``tags?: Tag[];``.

        Args:
            interface_name: Interface owning the property
            field_name: Attribute name
            spec: Attribute declaration

        Returns:
            Property declaration without indentation
        """
        name = self.naming.property_name(field_name, interface_name)
        optional = "" if self.is_required(spec) else "?"
        prop_type = self.property_type(interface_name, field_name, spec)
        marker = ARRAY_MARKER if spec.is_list else ""
        return f"{name}{optional}: {prop_type}{marker};"

    def enum_text(self, interface_name: str, attributes: Dict[str, FieldSpec]) -> List[str]:
        """
        Enum declarations for every enumeration attribute with values.

        Returns:
            One multi-line ``export enum`` block per attribute
        """
        blocks = []
        for field_name, spec in attributes.items():
            if spec.kind != FieldKind.ENUMERATION or not spec.enum:
                continue
            lines = [f"export enum {self.naming.enum_name(field_name, interface_name)} {{"]
            lines.extend(f"  {enum_member(value)}" for value in spec.enum)
            lines.append("}")
            blocks.append("\n".join(lines))
        return blocks
