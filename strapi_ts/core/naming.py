"""
Naming utilities for generated TypeScript.

Derives interface, enum, property and output-unit names from model
documents. Every derivation can be overridden through the run's
GeneratorConfig; an override that returns a falsy value falls back
to the default.
"""

import posixpath
import re
from collections.abc import Callable
from pathlib import PurePath
from typing import Any, Optional

from .config import GeneratorConfig

UNKNOWN_INTERFACE = "unknown"
UNKNOWN_ENUM = "any"

_FIRST_CHAR = re.compile(r"^.")
_SPACED_CHAR = re.compile(r" +.")


def _upper_first(value: str) -> str:
    return _FIRST_CHAR.sub(lambda m: m.group(0).upper(), value)


def default_interface_name(name: Optional[str]) -> str:
    """
    Convert a display name to an interface name.

    Capitalizes the first character and every character following a run of
    spaces (the spaces are dropped), and removes slashes.

    >>> default_interface_name("blog post")
    'BlogPost'
    """
    if not name:
        return UNKNOWN_INTERFACE
    converted = _upper_first(name)
    converted = _SPACED_CHAR.sub(lambda m: m.group(0).lstrip().upper(), converted)
    return converted.replace("/", "")


def default_enum_name(field_name: str, interface_name: str) -> str:
    """Enum name is the interface name followed by the capitalized field name."""
    if not field_name:
        return UNKNOWN_ENUM
    return f"{interface_name}{_upper_first(field_name)}"


def default_property_name(field_name: str) -> str:
    return field_name


def default_output_unit(
    model_name: str, is_component: bool = False, nested: bool = False
) -> str:
    """
    Relative output path (no extension, forward slashes) for a model.

    Args:
        model_name: Model key before lower-casing
        is_component: Components map ``folder.name`` to ``folder/name``
        nested: Put top-level models in a folder of the same name
    """
    if is_component:
        return model_name.replace(".", "/", 1)
    lowered = model_name.lower()
    if nested:
        return posixpath.join(lowered, lowered)
    return lowered


def component_folder(filename: str) -> str:
    """Name of the folder holding a component definition."""
    return PurePath(filename.replace("\\", "/")).parent.name


def _with_fallback(override: Optional[Callable[..., Any]], default: Callable[[], str], *args) -> str:
    if override is not None:
        result = override(*args)
        if result:
            return result
    return default()


class NamingPolicy:
    """Applies the configured naming overrides on top of the defaults."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()

    def interface_name(
        self, name: Optional[str], filename: str, is_component: bool = False
    ) -> str:
        """
        Interface name for a model.

        Components are prefixed with their folder name so that same-named
        components in different folders stay distinct.
        """

        def default() -> str:
            if not name:
                return UNKNOWN_INTERFACE
            if is_component:
                folder = component_folder(filename)
                return f"{default_interface_name(folder)}{default_interface_name(name)}"
            return default_interface_name(name)

        return _with_fallback(self.config.interface_name, default, name or "", filename)

    def enum_name(self, field_name: str, interface_name: str) -> str:
        return _with_fallback(
            self.config.enum_name,
            lambda: default_enum_name(field_name, interface_name),
            field_name,
            interface_name,
        )

    def property_name(self, field_name: str, interface_name: str) -> str:
        return _with_fallback(
            self.config.field_name,
            lambda: default_property_name(field_name),
            field_name,
            interface_name,
        )

    def output_unit(
        self,
        model_name: str,
        is_component: bool,
        interface_name: str,
        filename: str,
    ) -> str:
        unit = _with_fallback(
            self.config.output_file_name,
            lambda: default_output_unit(model_name, is_component, self.config.nested),
            interface_name,
            filename,
        )
        return unit.replace("\\", "/")
