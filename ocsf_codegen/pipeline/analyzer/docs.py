"""
Documentation assembly for generated types, fields and enum members.

Docstrings are built from schema captions, descriptions, deprecation
markers and constraints. They carry no runtime behavior.
"""

from __future__ import annotations

import textwrap

from ..schema_ast.nodes import AttributeDef, DeprecationMarker, EnumValueDef, TypeDef

INDENT = "    "


def deprecation_notice(marker: DeprecationMarker | None) -> str:
    """Return "<message> (Since <version>)", or "" without a marker."""
    if marker is None:
        return ""
    return f"{marker.message} (Since {marker.since})"


def _join_blocks(blocks: list[str]) -> str:
    """Join non-empty blocks with blank lines."""
    return "\n\n".join(block.strip() for block in blocks if block and block.strip())


def _entry(head: str, body: str) -> str:
    """A Google-style section entry: head line, body indented below it."""
    if not body:
        return head
    return f"{head}\n{textwrap.indent(body, INDENT)}"


def _section(title: str, entries: list[str]) -> str:
    if not entries:
        return ""
    return f"{title}:\n" + "\n".join(textwrap.indent(entry, INDENT) for entry in entries)


def attribute_doc(attr: AttributeDef) -> str:
    """Documentation text for one field."""
    blocks = [attr.caption, attr.description]
    notice = deprecation_notice(attr.deprecated)
    if notice:
        blocks.append(f"Deprecated: {notice}")
    return _join_blocks(blocks)


def type_doc(type_def: TypeDef, fields: list[tuple[str, str, AttributeDef]]) -> str:
    """
    Documentation text for a generated class.

    Args:
        type_def: The class or object definition
        fields: (field name, wire name, attribute) for every generated field

    Returns:
        Docstring text
    """
    blocks = [type_def.caption, type_def.description]

    notice = deprecation_notice(type_def.deprecated)
    if notice:
        blocks.append(f"Deprecated: {notice}")

    meta_doc = f"Category: {type_def.category} | Name: {type_def.name or type_def.key}"
    if type_def.uid is not None:
        meta_doc = f"[UID: {type_def.uid}] {meta_doc}"
    if type_def.extends:
        meta_doc = f"{meta_doc} | Extends: {type_def.extends}"
    if type_def.profiles:
        meta_doc = f"{meta_doc} | Profiles: {', '.join(type_def.profiles)}"
    blocks.append(meta_doc)

    if type_def.constraints:
        rules = [f"{rule}: {', '.join(fields_)}" for rule, fields_ in type_def.constraints.items()]
        blocks.append(_section("Constraints", rules))

    entries = []
    for name, wire_name, attr in fields:
        head = f"{name} ({attr.requirement or 'optional'}):"
        if wire_name != name:
            head = f"{name} ({attr.requirement or 'optional'}, wire name {wire_name!r}):"
        entries.append(_entry(head, attribute_doc(attr)))
    blocks.append(_section("Attributes", entries))

    return _join_blocks(blocks)


def enum_member_doc(value: EnumValueDef) -> str:
    """Documentation text for one enum member."""
    blocks = [value.caption, value.description or ""]
    if value.source:
        blocks.append(f"Source: {value.source}")
    notice = deprecation_notice(value.deprecated)
    if notice:
        blocks.append(f"Deprecated: {notice}")
    return _join_blocks(blocks)


def enum_doc(owner: TypeDef, attr: AttributeDef, members: list[tuple[str, int, str, str]]) -> str:
    """
    Documentation text for a synthesized enum.

    Args:
        owner: The type owning the enumerated attribute
        attr: The enumerated attribute
        members: (member name, discriminant, raw key, member doc) per member

    Returns:
        Docstring text
    """
    blocks = [
        attr.caption,
        attr.description,
        f"Values of {owner.key}.{attr.name}.",
    ]
    entries = [_entry(f"{name} = {value} ({key!r}):", doc) for name, value, key, doc in members]
    blocks.append(_section("Values", entries))
    return _join_blocks(blocks)
