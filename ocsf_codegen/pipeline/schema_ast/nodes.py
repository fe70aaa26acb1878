"""
In-memory model of a resolved OCSF schema document.

These nodes hold the parsed structure of the schema before any name
resolution or language-specific processing.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class DeprecationMarker:
    """A ``@deprecated`` annotation. Advisory only."""

    message: str = ""
    since: str = ""


@dataclass
class EnumValueDef:
    """One value of an inline attribute enumeration."""

    caption: str = ""
    description: str | None = None
    source: str | None = None
    deprecated: DeprecationMarker | None = None


@dataclass
class AttributeDef:
    """An attribute of a class or object."""

    name: str = ""  # Key in the owning type's attributes mapping
    type_name: str = ""  # Primitive tag or referenced type name
    object_type: str | None = None  # Target of an object_t attribute in export documents
    caption: str = ""
    description: str = ""
    requirement: str = ""
    is_array: bool = False

    # Raw enum key -> value, in declared order
    enum: dict[str, EnumValueDef] | None = None

    deprecated: DeprecationMarker | None = None

    @property
    def type_tag(self) -> str:
        """The tag used for type mapping."""
        if self.object_type:
            return self.object_type
        return self.type_name


@dataclass
class TypeDef:
    """A class or object definition."""

    key: str = ""  # Key in the classes/objects mapping
    name: str = ""  # Declared "name" property (may be empty)
    caption: str = ""
    description: str = ""
    uid: int | None = None
    category: str = ""
    extends: str | None = None
    profiles: list[str] = field(default_factory=list)
    constraints: dict[str, list[str]] | None = None
    deprecated: DeprecationMarker | None = None
    attributes: dict[str, AttributeDef] = field(default_factory=dict)


@dataclass
class SchemaDocument:
    """Root of the parsed schema: the classes and objects namespaces."""

    version: str = ""
    classes: dict[str, TypeDef] = field(default_factory=dict)
    objects: dict[str, TypeDef] = field(default_factory=dict)
