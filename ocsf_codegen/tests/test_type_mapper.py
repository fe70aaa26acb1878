"""
Tests for mapping OCSF attribute types to IR types.
"""

from __future__ import annotations

import logging

import pytest

from ocsf_codegen.pipeline.analyzer import NameTable, TypeKind, TypeMapper
from ocsf_codegen.pipeline.analyzer.type_mapper import PRIMITIVE_TYPES
from ocsf_codegen.pipeline.schema_ast.nodes import AttributeDef


@pytest.fixture
def names() -> NameTable:
    return NameTable(
        type_names={
            ("classes", "http_activity"): "HttpActivity",
            ("objects", "file"): "File",
            ("objects", "process"): "Process",
        }
    )


def _attr(type_name: str, is_array: bool = False, object_type: str | None = None) -> AttributeDef:
    return AttributeDef(name="x", type_name=type_name, object_type=object_type, is_array=is_array)


@pytest.mark.parametrize(
    "tag, expected",
    [
        ("string_t", "str"),
        ("email_t", "str"),
        ("datetime_t", "str"),
        ("ip_t", "str"),
        ("integer_t", "int"),
        ("long_t", "int"),
        ("timestamp_t", "int"),
        ("port_t", "int"),
        ("float_t", "float"),
        ("boolean_t", "bool"),
    ],
)
def test_primitive_table(names, tag, expected):
    type_ref = TypeMapper(names).map_attribute(_attr(tag))
    assert type_ref.kind == TypeKind.PRIMITIVE
    assert type_ref.name == expected
    assert type_ref.is_nullable


@pytest.mark.parametrize("tag", ["json_t", "object_t"])
def test_json_passthrough(names, tag):
    type_ref = TypeMapper(names).map_attribute(_attr(tag))
    assert type_ref.kind == TypeKind.JSON
    assert type_ref.name == "JsonValue"


def test_every_primitive_kind_is_known():
    assert set(PRIMITIVE_TYPES.values()) == {"string", "integer", "float", "boolean", "json"}


class TestReferences:
    """Attributes referring to other classes and objects"""

    def test_reference_by_type(self, names):
        type_ref = TypeMapper(names).map_attribute(_attr("process"))
        assert type_ref.kind == TypeKind.CLASS
        assert type_ref.name == "Process"

    def test_reference_by_object_type(self, names):
        type_ref = TypeMapper(names).map_attribute(_attr("object_t", object_type="file"))
        assert type_ref.kind == TypeKind.CLASS
        assert type_ref.name == "File"

    def test_reference_to_class_namespace(self, names):
        type_ref = TypeMapper(names).map_attribute(_attr("http_activity"))
        assert type_ref.name == "HttpActivity"

    def test_array_of_references(self, names):
        type_ref = TypeMapper(names).map_attribute(_attr("object_t", is_array=True, object_type="process"))
        assert type_ref.kind == TypeKind.ARRAY
        assert type_ref.name == "list"
        assert type_ref.element.kind == TypeKind.CLASS
        assert type_ref.element.name == "Process"
        assert not type_ref.element.is_nullable

    def test_unresolved_reference_is_kept_with_a_warning(self, names, caplog):
        with caplog.at_level(logging.WARNING):
            type_ref = TypeMapper(names).map_attribute(_attr("network_proxy"))

        assert type_ref.kind == TypeKind.CLASS
        assert type_ref.name == "NetworkProxy"
        assert "network_proxy" in caplog.text

    def test_ignored_type_becomes_json(self, names):
        mapper = TypeMapper(names, ignored_types={"process"})
        type_ref = mapper.map_attribute(_attr("object_t", object_type="process"))
        assert type_ref.kind == TypeKind.JSON
        assert type_ref.name == "JsonValue"


class TestWrapping:
    """Array and optional wrapping"""

    def test_array_of_primitives(self, names):
        type_ref = TypeMapper(names).map_attribute(_attr("integer_t", is_array=True))
        assert type_ref.kind == TypeKind.ARRAY
        assert type_ref.element.name == "int"
        assert type_ref.is_nullable
        assert not type_ref.element.is_nullable

    def test_not_nullable(self, names):
        type_ref = TypeMapper(names).map_attribute(_attr("string_t"), nullable=False)
        assert not type_ref.is_nullable

    def test_is_textual(self, names):
        mapper = TypeMapper(names)
        assert mapper.map_attribute(_attr("string_t")).is_textual
        assert mapper.map_attribute(_attr("email_t", is_array=True)).is_textual
        assert not mapper.map_attribute(_attr("integer_t")).is_textual
        assert not mapper.map_attribute(_attr("process")).is_textual


class TestExtraPrimitives:
    """Configured primitive type tags"""

    def test_extra_primitive(self, names):
        mapper = TypeMapper(names, extra_primitives={"ja3_hash_t": "string"})
        assert mapper.is_primitive("ja3_hash_t")
        assert mapper.map_attribute(_attr("ja3_hash_t")).name == "str"

    def test_extra_primitive_overrides_a_reference(self, names):
        mapper = TypeMapper(names, extra_primitives={"process": "json"})
        assert mapper.map_attribute(_attr("process")).kind == TypeKind.JSON

    def test_unknown_kind_raises(self, names):
        with pytest.raises(ValueError, match="Unknown primitive kind"):
            TypeMapper(names, extra_primitives={"x_t": "decimal"})

    def test_builtin_table_is_not_modified(self, names):
        TypeMapper(names, extra_primitives={"ja3_hash_t": "string"})
        assert "ja3_hash_t" not in PRIMITIVE_TYPES


if __name__ == "__main__":
    pytest.main([__file__])
