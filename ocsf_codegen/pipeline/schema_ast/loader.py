"""
Schema loader that builds the in-memory schema model.

Phase 1 of the pipeline: parse a resolved OCSF schema document into
SchemaDocument without resolving references or doing any naming.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ...exceptions import SchemaLoadError
from .nodes import AttributeDef, DeprecationMarker, EnumValueDef, SchemaDocument, TypeDef

logger = logging.getLogger(__name__)


def json_type_from_value(value: Any) -> str:
    """Return the JSON type name of a Python value, for error messages."""
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, str):
        return "string"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if value is None:
        return "null"
    return f"non-JSON type: {type(value).__name__}"


class SchemaLoader:
    """Parses a resolved OCSF schema document."""

    NAMESPACES = ("classes", "objects")

    def load(self, text: str) -> SchemaDocument:
        """
        Parse schema text into a SchemaDocument.

        Args:
            text: UTF-8 JSON text of a resolved schema

        Returns:
            The populated SchemaDocument

        Raises:
            SchemaLoadError: If the text is not JSON or has a malformed shape
        """
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise SchemaLoadError(f"Schema document is not valid JSON: {e}") from e
        return self.load_dict(raw)

    def load_file(self, path: Path) -> SchemaDocument:
        """Read and parse a schema file."""
        logger.info("Reading schema file: %s", path)
        with open(path, encoding="utf-8") as f:
            return self.load(f.read())

    def load_dict(self, raw: Any) -> SchemaDocument:
        """Build a SchemaDocument from already-decoded JSON."""
        if not isinstance(raw, dict):
            raise SchemaLoadError(f"Schema document must be a JSON object, got {json_type_from_value(raw)}")

        version = raw.get("version")
        document = SchemaDocument(version=version if isinstance(version, str) else "")

        for namespace in self.NAMESPACES:
            definitions = raw.get(namespace)
            if definitions is None:
                continue
            self._expect(definitions, dict, namespace)
            parsed = {key: self._parse_type(key, value, f"{namespace}.{key}") for key, value in definitions.items()}
            setattr(document, namespace, parsed)

        logger.info(
            "Loaded schema %s: %d classes, %d objects",
            document.version or "(no version)",
            len(document.classes),
            len(document.objects),
        )
        return document

    def _parse_type(self, key: str, raw: Any, path: str) -> TypeDef:
        """Parse one class or object definition."""
        self._expect(raw, dict, path)

        uid = raw.get("uid")
        if uid is not None and (isinstance(uid, bool) or not isinstance(uid, int)):
            raise SchemaLoadError(f"{path}.uid must be an integer, got {json_type_from_value(uid)}")

        profiles = raw.get("profiles") or []
        self._expect(profiles, list, f"{path}.profiles")

        type_def = TypeDef(
            key=key,
            name=self._optional_str(raw, "name", path) or "",
            caption=self._optional_str(raw, "caption", path) or "",
            description=self._optional_str(raw, "description", path) or "",
            uid=uid,
            category=self._optional_str(raw, "category", path) or "",
            extends=self._optional_str(raw, "extends", path),
            profiles=[p for p in profiles if isinstance(p, str)],
            constraints=self._parse_constraints(raw.get("constraints"), f"{path}.constraints"),
            deprecated=self._parse_deprecation(raw.get("@deprecated"), f"{path}.@deprecated"),
        )

        attributes = raw.get("attributes")
        if attributes is not None:
            self._expect(attributes, dict, f"{path}.attributes")
            for attr_name, attr_raw in attributes.items():
                type_def.attributes[attr_name] = self._parse_attribute(attr_name, attr_raw, f"{path}.attributes.{attr_name}")

        return type_def

    def _parse_attribute(self, name: str, raw: Any, path: str) -> AttributeDef:
        """Parse one attribute definition."""
        self._expect(raw, dict, path)

        type_name = raw.get("type")
        if not isinstance(type_name, str) or not type_name:
            raise SchemaLoadError(f"{path}.type must be a non-empty string, got {json_type_from_value(type_name)}")

        is_array = raw.get("is_array", False)
        self._expect(is_array, bool, f"{path}.is_array")

        attr = AttributeDef(
            name=name,
            type_name=type_name,
            object_type=self._optional_str(raw, "object_type", path),
            caption=self._optional_str(raw, "caption", path) or "",
            description=self._optional_str(raw, "description", path) or "",
            requirement=self._optional_str(raw, "requirement", path) or "",
            is_array=is_array,
            deprecated=self._parse_deprecation(raw.get("@deprecated"), f"{path}.@deprecated"),
        )

        enum_raw = raw.get("enum")
        if enum_raw is not None:
            self._expect(enum_raw, dict, f"{path}.enum")
            attr.enum = {str(key): self._parse_enum_value(value, f"{path}.enum.{key}") for key, value in enum_raw.items()}

        return attr

    def _parse_enum_value(self, raw: Any, path: str) -> EnumValueDef:
        """Parse one enumeration value."""
        self._expect(raw, dict, path)
        caption = raw.get("caption")
        if not isinstance(caption, str):
            raise SchemaLoadError(f"{path}.caption must be a string, got {json_type_from_value(caption)}")

        # Enum values carry the marker either as "@deprecated" or "deprecated"
        deprecated_raw = raw.get("@deprecated", raw.get("deprecated"))
        return EnumValueDef(
            caption=caption,
            description=self._optional_str(raw, "description", path),
            source=self._optional_str(raw, "source", path),
            deprecated=self._parse_deprecation(deprecated_raw, f"{path}.deprecated"),
        )

    def _parse_deprecation(self, raw: Any, path: str) -> DeprecationMarker | None:
        """Parse a deprecation marker; None when absent."""
        if raw is None:
            return None
        self._expect(raw, dict, path)
        message = raw.get("message")
        since = raw.get("since")
        if not isinstance(message, str) or not isinstance(since, str):
            raise SchemaLoadError(f"{path} must have string 'message' and 'since' properties")
        return DeprecationMarker(message=message, since=since)

    def _parse_constraints(self, raw: Any, path: str) -> dict[str, list[str]] | None:
        """Parse a constraints mapping of rule name -> attribute names."""
        if raw is None:
            return None
        self._expect(raw, dict, path)
        constraints = {}
        for rule, fields in raw.items():
            if not isinstance(fields, list) or not all(isinstance(f, str) for f in fields):
                raise SchemaLoadError(f"{path}.{rule} must be an array of strings")
            constraints[rule] = list(fields)
        return constraints

    def _optional_str(self, raw: dict[str, Any], key: str, path: str) -> str | None:
        value = raw.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise SchemaLoadError(f"{path}.{key} must be a string, got {json_type_from_value(value)}")
        return value

    @staticmethod
    def _expect(value: Any, expected: type, path: str) -> None:
        if not isinstance(value, expected):
            expected_name = json_type_from_value(expected())
            raise SchemaLoadError(f"{path} must be a JSON {expected_name}, got {json_type_from_value(value)}")


def load_schema(text: str) -> SchemaDocument:
    """Convenience function to parse schema text."""
    return SchemaLoader().load(text)


def load_schema_file(path: str | Path) -> SchemaDocument:
    """Convenience function to parse a schema file."""
    return SchemaLoader().load_file(Path(path))
