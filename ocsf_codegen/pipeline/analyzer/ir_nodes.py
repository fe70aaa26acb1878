"""
IR (Intermediate Representation) node definitions.

These nodes represent the analyzed schema, ready for code generation.
All names are sanitized and all types are mapped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TypeKind(Enum):
    """Kind of type in the IR."""

    PRIMITIVE = "primitive"  # int, str, bool, float
    JSON = "json"  # Passthrough structured value (JsonValue)
    CLASS = "class"  # Owned reference to a single generated dataclass
    ARRAY = "array"  # list[T]


@dataclass
class TypeRef:
    """A mapped type reference."""

    kind: TypeKind = TypeKind.PRIMITIVE
    name: str = ""  # Python type name (e.g., "int", "Metadata")

    # Element type for ARRAY
    type_args: list[TypeRef] = field(default_factory=list)

    # Whether absence is representable (T | None)
    is_nullable: bool = True

    @property
    def element(self) -> TypeRef:
        """The element type for arrays, the type itself otherwise."""
        if self.kind == TypeKind.ARRAY:
            return self.type_args[0]
        return self

    @property
    def is_textual(self) -> bool:
        """Whether scalar values (or array elements) are strings."""
        element = self.element
        return element.kind == TypeKind.PRIMITIVE and element.name == "str"


@dataclass
class FieldDef:
    """A field definition in a class."""

    name: str = ""
    original_name: str = ""  # Original schema attribute name (wire name)
    type_ref: TypeRef | None = None
    is_required: bool = False


@dataclass
class AccessorDef:
    """A derived method returning a field's value as enum member(s)."""

    name: str = ""
    field_name: str = ""
    enum_name: str = ""
    table_name: str = ""  # Module-level key table
    is_array: bool = False


@dataclass
class EnumMember:
    """One variant of a synthesized enum."""

    name: str = ""
    value: int = 0  # Discriminant
    key: str = ""  # Raw schema key
    doc: str = ""


@dataclass
class EnumDef:
    """A synthesized enum definition."""

    name: str = ""
    members: list[EnumMember] = field(default_factory=list)
    doc: str = ""

    # Key table: raw key (textual attributes) or discriminant -> member name
    table_name: str = ""
    string_keys: bool = False


@dataclass
class ClassDef:
    """A class definition."""

    name: str = ""
    doc: str = ""

    # "<message> (Since <version>)" for deprecated types, "" otherwise
    deprecation: str = ""

    fields: list[FieldDef] = field(default_factory=list)
    accessors: list[AccessorDef] = field(default_factory=list)

    # Catch-all field name, "" when the class has none
    catch_all_field: str = ""

    # (field name, accepted type names, is_array) for __post_init__ checks
    validation_checks: list[tuple[str, tuple[str, ...], bool]] = field(default_factory=list)


@dataclass
class IR:
    """The complete Intermediate Representation."""

    # All class definitions, in generation order
    classes: list[ClassDef] = field(default_factory=list)

    # Enum definitions, in generation order
    enums: list[EnumDef] = field(default_factory=list)

    # Generation comment
    generation_comment: str = ""
