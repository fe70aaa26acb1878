"""
Enum synthesis for attributes carrying an inline enumeration.

Every step here is a pure function of its inputs: discriminants depend
only on the declared keys, and member names are chosen by threading the
set of already-assigned names through the synthesis.
"""

from __future__ import annotations

import re

from ...utils import to_screaming_snake_case
from ..schema_ast.nodes import AttributeDef, EnumValueDef, TypeDef
from . import docs
from .ir_nodes import AccessorDef, EnumDef, EnumMember, TypeRef
from .name_resolver import disambiguate, field_name, member_name

_NUMERIC_KEY = re.compile(r"[+-]?[0-9]+")


def parse_numeric_key(key: str) -> int | None:
    """Return the integer value of a numeric enum key, None otherwise."""
    if _NUMERIC_KEY.fullmatch(key):
        return int(key)
    return None


def assign_discriminants(keys: list[str]) -> list[int]:
    """
    Assign a unique discriminant to each key, in declared order.

    Numeric keys keep their value. Other keys, and numeric keys repeating
    an earlier value (e.g. "01" after "1"), take consecutive values starting
    just above the largest numeric key.

    Args:
        keys: Raw enum keys in declared order

    Returns:
        Discriminants, parallel to keys
    """
    numeric = [value for value in map(parse_numeric_key, keys) if value is not None]
    next_value = max(numeric) + 1 if numeric else 0

    discriminants = []
    seen: set[int] = set()
    for key in keys:
        value = parse_numeric_key(key)
        if value is None or value in seen:
            value = next_value
            next_value += 1
        seen.add(value)
        discriminants.append(value)
    return discriminants


def _discriminant_suffix(value: int) -> str:
    return str(value) if value >= 0 else f"Minus{-value}"


def assign_member_name(caption: str, value: int, used: frozenset[str]) -> tuple[str, frozenset[str]]:
    """
    Choose the member name for one enum value.

    A caption already taken in this enum gets its discriminant appended
    ("Mount" -> "Mount99").

    Args:
        caption: The value's caption
        value: The value's discriminant
        used: Member names already assigned in this enum

    Returns:
        The member name and the updated set of used names
    """
    name = member_name(caption)
    if name in used:
        name = disambiguate(f"{name}{_discriminant_suffix(value)}", used)
    return name, used | {name}


def assign_member_names(captions: list[str], discriminants: list[int]) -> list[str]:
    """Assign member names for all values of one enum, in declared order."""
    names = []
    used: frozenset[str] = frozenset()
    for caption, value in zip(captions, discriminants):
        name, used = assign_member_name(caption, value, used)
        names.append(name)
    return names


def table_name(enum_name: str) -> str:
    """Name of the module-level key table of an enum."""
    return f"_{to_screaming_snake_case(enum_name)}_BY_KEY"


def synthesize_enum(enum_name: str, owner: TypeDef, attr: AttributeDef, type_ref: TypeRef) -> EnumDef:
    """
    Build the enum definition for an enumerated attribute.

    Args:
        enum_name: Resolved enum type name
        owner: Type owning the attribute
        attr: The attribute; attr.enum must not be None
        type_ref: Mapped type of the attribute

    Returns:
        The EnumDef
    """
    values: dict[str, EnumValueDef] = attr.enum or {}
    keys = list(values)
    discriminants = assign_discriminants(keys)
    names = assign_member_names([values[k].caption for k in keys], discriminants)

    members = [
        EnumMember(name=name, value=value, key=key, doc=docs.enum_member_doc(values[key]))
        for name, value, key in zip(names, discriminants, keys)
    ]

    return EnumDef(
        name=enum_name,
        members=members,
        doc=docs.enum_doc(owner, attr, [(m.name, m.value, m.key, m.doc) for m in members]),
        table_name=table_name(enum_name),
        string_keys=type_ref.is_textual,
    )


def build_accessor(
    enum_def: EnumDef,
    attr: AttributeDef,
    field_: str,
    used: frozenset[str],
    suffix: str = "_enum",
) -> tuple[AccessorDef, frozenset[str]]:
    """
    Build the accessor returning an attribute's value as enum member(s).

    Args:
        enum_def: The attribute's enum
        attr: The attribute
        field_: Generated field name of the attribute
        used: Member names already taken in the class
        suffix: Accessor name suffix

    Returns:
        The accessor and the updated set of used names
    """
    name = disambiguate(field_name(f"{attr.name}{suffix}"), used)
    accessor = AccessorDef(
        name=name,
        field_name=field_,
        enum_name=enum_def.name,
        table_name=enum_def.table_name,
        is_array=attr.is_array,
    )
    return accessor, used | {name}
