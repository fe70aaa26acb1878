"""
Type mapper from OCSF attribute types to IR type references.
"""

from __future__ import annotations

import logging

from ..schema_ast.nodes import AttributeDef
from .ir_nodes import TypeKind, TypeRef
from .name_resolver import NameTable, type_name

logger = logging.getLogger(__name__)

# Python type for each primitive kind
KIND_TO_PYTHON = {
    "string": "str",
    "integer": "int",
    "float": "float",
    "boolean": "bool",
    "json": "JsonValue",
}

# Primitive OCSF type tags and their kind
PRIMITIVE_TYPES = {
    # String types
    "string_t": "string",
    "string": "string",
    "bytestring_t": "string",
    "datetime_t": "string",
    "email_t": "string",
    "file_hash_t": "string",
    "file_name_t": "string",
    "file_path_t": "string",
    "hostname_t": "string",
    "ip_t": "string",
    "mac_t": "string",
    "subnet_t": "string",
    "url_t": "string",
    "username_t": "string",
    "uuid_t": "string",
    "process_name_t": "string",
    "reg_key_path_t": "string",
    "resource_uid_t": "string",
    # Integer types
    "integer_t": "integer",
    "integer": "integer",
    "long_t": "integer",
    "port_t": "integer",
    "timestamp_t": "integer",
    # Float types
    "float_t": "float",
    # Boolean types
    "boolean_t": "boolean",
    # JSON/Object types
    "json_t": "json",
    "object_t": "json",
    "object": "json",
}


class TypeMapper:
    """Maps attribute type tags to IR types."""

    def __init__(
        self,
        names: NameTable,
        extra_primitives: dict[str, str] | None = None,
        ignored_types: set[str] | None = None,
    ):
        """
        Initialize the mapper.

        Args:
            names: Resolved type names, used for references
            extra_primitives: Additional tag -> kind entries
            ignored_types: Raw type names that are not generated

        Raises:
            ValueError: If an extra primitive names an unknown kind
        """
        self.names = names
        self.primitives = dict(PRIMITIVE_TYPES)
        for tag, kind in (extra_primitives or {}).items():
            if kind not in KIND_TO_PYTHON:
                raise ValueError(f"Unknown primitive kind {kind!r} for type {tag!r}; expected one of {sorted(KIND_TO_PYTHON)}")
            self.primitives[tag] = kind
        self.ignored_types = ignored_types or set()

    def is_primitive(self, tag: str) -> bool:
        return tag in self.primitives

    def map_attribute(self, attr: AttributeDef, nullable: bool = True) -> TypeRef:
        """
        Map an attribute to its representation.

        Arrays become list[element]; primitives stay bare scalars; anything
        else is a reference to a single generated class.

        Args:
            attr: The attribute definition
            nullable: Whether absence is representable

        Returns:
            The mapped TypeRef
        """
        element = self._map_tag(attr.type_tag)
        if attr.is_array:
            return TypeRef(kind=TypeKind.ARRAY, name="list", type_args=[element], is_nullable=nullable)
        element.is_nullable = nullable
        return element

    def _map_tag(self, tag: str) -> TypeRef:
        """Map a single type tag, without array or optional wrapping."""
        kind = self.primitives.get(tag)
        if kind == "json":
            return TypeRef(kind=TypeKind.JSON, name=KIND_TO_PYTHON[kind], is_nullable=False)
        if kind is not None:
            return TypeRef(kind=TypeKind.PRIMITIVE, name=KIND_TO_PYTHON[kind], is_nullable=False)

        if tag in self.ignored_types:
            logger.debug("Type %s is ignored; mapping references to JsonValue", tag)
            return TypeRef(kind=TypeKind.JSON, name=KIND_TO_PYTHON["json"], is_nullable=False)

        name = self.names.resolve_reference(tag)
        if name is None:
            # Forward reference to a type this document does not define
            name = type_name(tag)
            logger.warning("Unresolved type reference %r; emitting forward reference %s", tag, name)
        return TypeRef(kind=TypeKind.CLASS, name=name, is_nullable=False)
