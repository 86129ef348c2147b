"""
TypeScript code generator module.

Generates interfaces, enums and type guards from content-model definitions.
"""

from .generator import TypeScriptGenerator, create_typescript_generator
from .types import TS_TYPE_MAP, TypeScriptTypeMapper

__all__ = [
    "TypeScriptGenerator",
    "TypeScriptTypeMapper",
    "TS_TYPE_MAP",
    "create_typescript_generator",
]
