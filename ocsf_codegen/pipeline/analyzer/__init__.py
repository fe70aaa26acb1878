"""
Schema analysis (Phase 2): names, types, enums and docs.
"""

from __future__ import annotations

from .analyzer import SchemaAnalyzer
from .ir_nodes import IR, AccessorDef, ClassDef, EnumDef, EnumMember, FieldDef, TypeKind, TypeRef
from .name_resolver import NameResolver, NameTable
from .type_mapper import TypeMapper

__all__ = [
    "SchemaAnalyzer",
    "IR",
    "AccessorDef",
    "ClassDef",
    "EnumDef",
    "EnumMember",
    "FieldDef",
    "TypeKind",
    "TypeRef",
    "NameResolver",
    "NameTable",
    "TypeMapper",
]
