"""
Schema model and loader (Phase 1).
"""

from __future__ import annotations

from .loader import SchemaLoader, load_schema, load_schema_file
from .nodes import AttributeDef, DeprecationMarker, EnumValueDef, SchemaDocument, TypeDef

__all__ = [
    "SchemaLoader",
    "load_schema",
    "load_schema_file",
    "AttributeDef",
    "DeprecationMarker",
    "EnumValueDef",
    "SchemaDocument",
    "TypeDef",
]
