"""
Tests for the schema loader (Phase 1).
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from ocsf_codegen.exceptions import SchemaLoadError
from ocsf_codegen.pipeline.schema_ast import SchemaDocument, SchemaLoader, load_schema, load_schema_file

SAMPLE_SCHEMA = Path(__file__).parent / "test_data" / "ocsf_sample.json"


def _load(raw) -> SchemaDocument:
    return SchemaLoader().load_dict(raw)


class TestLoadSample:
    """Loading the sample schema document"""

    def test_namespaces(self):
        document = load_schema_file(SAMPLE_SCHEMA)

        assert document.version == "1.3.0"
        assert sorted(document.classes) == ["file_activity", "http_activity", "network_activity"]
        assert "process" in document.objects
        assert "timespan" in document.objects

    def test_type_properties(self):
        document = load_schema_file(SAMPLE_SCHEMA)
        http_activity = document.classes["http_activity"]

        assert http_activity.key == "http_activity"
        assert http_activity.caption == "HTTP Activity"
        assert http_activity.uid == 4002
        assert http_activity.category == "network"
        assert http_activity.extends == "network"
        assert http_activity.constraints == {"at_least_one": ["http_request", "http_response"]}

    def test_attribute_properties(self):
        document = load_schema_file(SAMPLE_SCHEMA)
        observables = document.classes["http_activity"].attributes["observables"]

        assert observables.type_name == "object_t"
        assert observables.object_type == "observable"
        assert observables.type_tag == "observable"
        assert observables.is_array is True
        assert observables.requirement == "recommended"
        assert observables.enum is None

    def test_enum_keeps_declared_order(self):
        document = load_schema_file(SAMPLE_SCHEMA)
        enum = document.classes["file_activity"].attributes["activity_id"].enum

        assert list(enum) == ["0", "1", "2", "12", "99"]
        assert enum["12"].caption == "Mount"
        assert enum["12"].description == "Mount a file system."

    def test_attribute_deprecation(self):
        document = load_schema_file(SAMPLE_SCHEMA)
        version = document.objects["file"].attributes["version"]

        assert version.deprecated.since == "1.1.0"
        assert "product.version" in version.deprecated.message


class TestLoadMinimal:
    """Documents with optional parts left out"""

    def test_empty_document(self):
        document = load_schema("{}")
        assert document.version == ""
        assert document.classes == {}
        assert document.objects == {}

    def test_objects_only(self):
        document = _load({"objects": {"product": {"attributes": {"name": {"type": "string_t"}}}}})
        assert document.classes == {}
        product = document.objects["product"]
        assert product.name == ""
        assert product.uid is None
        assert product.attributes["name"].requirement == ""

    def test_type_without_attributes(self):
        document = _load({"objects": {"empty": {"caption": "Empty"}}})
        assert document.objects["empty"].attributes == {}

    def test_attribute_name_comes_from_key(self):
        document = _load({"objects": {"a": {"attributes": {"from": {"type": "email_t"}}}}})
        assert document.objects["a"].attributes["from"].name == "from"

    @pytest.mark.parametrize("marker_key", ["@deprecated", "deprecated"])
    def test_enum_value_deprecation_spellings(self, marker_key):
        document = _load(
            {
                "objects": {
                    "a": {
                        "attributes": {
                            "type_id": {
                                "type": "integer_t",
                                "enum": {"3": {"caption": "Old", marker_key: {"message": "Gone.", "since": "1.2.0"}}},
                            }
                        }
                    }
                }
            }
        )
        value = document.objects["a"].attributes["type_id"].enum["3"]
        assert value.deprecated.message == "Gone."
        assert value.deprecated.since == "1.2.0"

    def test_integer_enum_keys_are_kept_as_text(self):
        document = _load({"objects": {"a": {"attributes": {"x": {"type": "integer_t", "enum": {"1": {"caption": "One"}}}}}}})
        assert list(document.objects["a"].attributes["x"].enum) == ["1"]


class TestLoadErrors:
    """Malformed documents are rejected with the path of the offending value"""

    def test_invalid_json(self):
        with pytest.raises(SchemaLoadError, match="not valid JSON"):
            load_schema("{not json")

    def test_document_not_an_object(self):
        with pytest.raises(SchemaLoadError, match="must be a JSON object, got array"):
            load_schema("[]")

    def test_namespace_not_an_object(self):
        with pytest.raises(SchemaLoadError, match="classes must be a JSON object"):
            _load({"classes": []})

    def test_missing_attribute_type(self):
        with pytest.raises(SchemaLoadError, match=r"objects\.process\.attributes\.pid\.type"):
            _load({"objects": {"process": {"attributes": {"pid": {"caption": "PID"}}}}})

    def test_is_array_not_boolean(self):
        with pytest.raises(SchemaLoadError, match=r"is_array must be a JSON boolean, got string"):
            _load({"objects": {"a": {"attributes": {"x": {"type": "string_t", "is_array": "yes"}}}}})

    def test_enum_not_an_object(self):
        with pytest.raises(SchemaLoadError, match=r"objects\.a\.attributes\.x\.enum"):
            _load({"objects": {"a": {"attributes": {"x": {"type": "integer_t", "enum": [1, 2]}}}}})

    def test_enum_value_without_caption(self):
        with pytest.raises(SchemaLoadError, match=r"enum\.1\.caption must be a string"):
            _load({"objects": {"a": {"attributes": {"x": {"type": "integer_t", "enum": {"1": {}}}}}}})

    def test_uid_not_an_integer(self):
        with pytest.raises(SchemaLoadError, match=r"classes\.a\.uid must be an integer"):
            _load({"classes": {"a": {"uid": "1001"}}})

    def test_uid_boolean(self):
        with pytest.raises(SchemaLoadError, match="uid must be an integer, got boolean"):
            _load({"classes": {"a": {"uid": True}}})

    def test_caption_not_a_string(self):
        with pytest.raises(SchemaLoadError, match=r"objects\.a\.caption must be a string, got number"):
            _load({"objects": {"a": {"caption": 3}}})

    def test_malformed_deprecation(self):
        with pytest.raises(SchemaLoadError, match="'message' and 'since'"):
            _load({"objects": {"a": {"@deprecated": {"message": "Gone."}}}})

    def test_malformed_constraints(self):
        with pytest.raises(SchemaLoadError, match=r"constraints\.at_least_one must be an array of strings"):
            _load({"classes": {"a": {"constraints": {"at_least_one": "x"}}}})

    def test_load_file(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"objects": {"a": {}}}), encoding="utf-8")
        assert list(load_schema_file(path).objects) == ["a"]


if __name__ == "__main__":
    pytest.main([__file__])
