"""
Name resolver for case conversion, keyword escaping and collisions.

Converts raw schema names to Python identifiers. The raw name is never
lost: fields keep it as their wire name, so escaping never changes the
encoded document.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ...exceptions import NameCollisionError
from ...utils import to_pascal_case, to_snake_case
from ..schema_ast.nodes import SchemaDocument

logger = logging.getLogger(__name__)

# Python reserved keywords
PYTHON_RESERVED_WORDS = {
    "False",
    "None",
    "True",
    "and",
    "as",
    "assert",
    "async",
    "await",
    "break",
    "class",
    "continue",
    "def",
    "del",
    "elif",
    "else",
    "except",
    "finally",
    "for",
    "from",
    "global",
    "if",
    "import",
    "in",
    "is",
    "lambda",
    "nonlocal",
    "not",
    "or",
    "pass",
    "raise",
    "return",
    "try",
    "while",
    "with",
    "yield",
}

# Names a field must not take inside a generated dataclass body
RESERVED_FIELD_NAMES = {
    # Method receiver
    "self",
    # Called in the class body of every dataclass
    "field",
    "config",
    # Builtins used by annotations and defaults; class attributes shadow them
    # when type hints are resolved
    "bool",
    "dict",
    "float",
    "int",
    "list",
    "str",
    # Defined or read by DataClassJsonMixin
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    "schema",
    "dataclass_json_config",
}

# Module-level names used by the generated preamble
RESERVED_TYPE_NAMES = {
    "Any",
    "ClassVar",
    "DataClassJsonMixin",
    "IntEnum",
    "JsonValue",
    "ValueError",
}


def escape_reserved(name: str, reserved: Iterable[str] = ()) -> str:
    """Append an underscore to keywords and other reserved names."""
    if name in PYTHON_RESERVED_WORDS or name in reserved:
        return f"{name}_"
    return name


def _make_identifier(name: str, placeholder: str) -> str:
    if not name:
        return placeholder
    if name[0].isdigit():
        return f"_{name}"
    return name


def field_name(raw: str) -> str:
    """Sanitize a raw name for a field or method (snake_case)."""
    return escape_reserved(_make_identifier(to_snake_case(raw), "field"), RESERVED_FIELD_NAMES)


def type_name(raw: str) -> str:
    """Sanitize a raw name for a class or enum (PascalCase)."""
    return escape_reserved(_make_identifier(to_pascal_case(raw), "Type"), RESERVED_TYPE_NAMES)


def member_name(raw: str) -> str:
    """Sanitize an enum caption for an enum member (PascalCase)."""
    return escape_reserved(_make_identifier(to_pascal_case(raw), "Value"))


def disambiguate(candidate: str, used: Iterable[str], separator: str = "_") -> str:
    """
    Return the first of candidate, candidate<sep>2, candidate<sep>3, ... not in used.

    Args:
        candidate: Preferred name
        used: Names already taken
        separator: "_" for snake_case names, "" for PascalCase names

    Returns:
        A name not in used
    """
    taken = set(used)
    if candidate not in taken:
        return candidate
    n = 2
    while f"{candidate}{separator}{n}" in taken:
        n += 1
    return f"{candidate}{separator}{n}"


@dataclass
class NameTable:
    """Result of name resolution for the whole document."""

    # (namespace, key) -> class name
    type_names: dict[tuple[str, str], str] = field(default_factory=dict)

    # (namespace, type key, attribute key) -> enum name
    enum_names: dict[tuple[str, str, str], str] = field(default_factory=dict)

    # Every module-level name taken so far
    used: set[str] = field(default_factory=set)

    def resolve_reference(self, tag: str) -> str | None:
        """Class name generated for a referenced type, objects first."""
        for namespace in ("objects", "classes"):
            name = self.type_names.get((namespace, tag))
            if name is not None:
                return name
        return None


class NameResolver:
    """Resolves type and enum names across both schema namespaces."""

    NAMESPACES = ("classes", "objects")

    def __init__(self, ignore_types: Iterable[str] = ()):
        """
        Initialize the resolver.

        Args:
            ignore_types: Raw type names that are not generated
        """
        self.ignore_types = set(ignore_types)

    def resolve_names(self, document: SchemaDocument) -> NameTable:
        """
        Resolve all type and enum names in the document.

        Within one namespace, names that collide after sanitization are
        disambiguated in sorted key order. A class and an object mapping to
        the same name is an error. Suffixed names skip every name a type
        gets without a suffix, in either namespace.

        Raises:
            NameCollisionError: If a class and an object share a generated name
        """
        table = NameTable()

        # Sanitized name -> first "<namespace>.<key>" producing it
        owners: dict[str, str] = {}
        candidates: dict[tuple[str, str], str] = {}
        for namespace in self.NAMESPACES:
            definitions = getattr(document, namespace)
            for key in sorted(definitions):
                if key in self.ignore_types:
                    continue
                candidate = type_name(key)
                owner = owners.setdefault(candidate, f"{namespace}.{key}")
                if not owner.startswith(f"{namespace}."):
                    raise NameCollisionError(f"{namespace}.{key} and {owner} both generate the type name {candidate!r}")
                candidates[(namespace, key)] = candidate

        taken = set(owners)
        for (namespace, key), candidate in candidates.items():
            name = candidate
            if owners[candidate] != f"{namespace}.{key}":
                name = disambiguate(candidate, taken, separator="")
                taken.add(name)
                logger.debug("Renamed %s.%s to %s to avoid a collision", namespace, key, name)
            table.type_names[(namespace, key)] = name

        table.used.update(table.type_names.values())

        for namespace in self.NAMESPACES:
            definitions = getattr(document, namespace)
            for key in sorted(definitions):
                if (namespace, key) not in table.type_names:
                    continue
                class_name = table.type_names[(namespace, key)]
                type_def = definitions[key]
                for attr_key in sorted(type_def.attributes):
                    if type_def.attributes[attr_key].enum is None:
                        continue
                    table.enum_names[(namespace, key, attr_key)] = self._register_enum(table, class_name, attr_key)

        return table

    def _register_enum(self, table: NameTable, class_name: str, attr_key: str) -> str:
        """Pick a free enum name for an attribute and mark it used."""
        candidate = type_name(f"{class_name}_{attr_key}")
        if candidate in table.used:
            candidate = f"{candidate}Enum"
        name = disambiguate(candidate, table.used, separator="")
        table.used.add(name)
        return name
