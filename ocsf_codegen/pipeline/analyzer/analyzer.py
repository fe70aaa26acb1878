"""
Schema analyzer that transforms the schema model to IR.

Phase 2 of the pipeline: resolve names for every type and enum, then map
each class and object to a ClassDef ready for code generation.
"""

from __future__ import annotations

import logging

from ..config import CodeGeneratorConfig, OptionalityPolicy
from ..schema_ast.nodes import AttributeDef, SchemaDocument, TypeDef
from . import docs
from .enum_synthesizer import build_accessor, synthesize_enum
from .ir_nodes import IR, ClassDef, EnumDef, FieldDef, TypeKind, TypeRef
from .name_resolver import NameResolver, NameTable, disambiguate, field_name
from .type_mapper import TypeMapper

logger = logging.getLogger(__name__)

# Types accepted by the __post_init__ check for each primitive
VALIDATION_TYPES = {
    "str": ("str",),
    "int": ("int",),
    "float": ("int", "float"),
    "bool": ("bool",),
}


class SchemaAnalyzer:
    """Analyzes the schema model and builds IR."""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the analyzer.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self.name_resolver = NameResolver(config.ignore_types)

    def analyze(self, document: SchemaDocument) -> IR:
        """
        Analyze the document and build IR.

        Classes come first, then objects, each in sorted key order. Enums
        follow the order in which their owning types are analyzed.

        Args:
            document: The loaded schema document

        Returns:
            IR ready for code generation

        Raises:
            NameCollisionError: If a class and an object share a generated name
        """
        names = self.name_resolver.resolve_names(document)
        type_mapper = TypeMapper(names, self.config.primitive_types, set(self.config.ignore_types))

        ir = IR()
        for namespace in NameResolver.NAMESPACES:
            definitions = getattr(document, namespace)
            for key in sorted(definitions):
                if (namespace, key) not in names.type_names:
                    logger.debug("Skipping ignored type %s.%s", namespace, key)
                    continue
                class_def, enums = self._analyze_type(namespace, definitions[key], names, type_mapper)
                ir.classes.append(class_def)
                ir.enums.extend(enums)

        logger.info("Analyzed %d types and %d enums", len(ir.classes), len(ir.enums))
        return ir

    def _analyze_type(
        self,
        namespace: str,
        type_def: TypeDef,
        names: NameTable,
        type_mapper: TypeMapper,
    ) -> tuple[ClassDef, list[EnumDef]]:
        """Build the class definition and enums of one type.

        Reads only the name table and this type's definition.
        """
        class_name = names.type_names[(namespace, type_def.key)]
        class_def = ClassDef(name=class_name, deprecation=docs.deprecation_notice(type_def.deprecated))
        if class_def.deprecation:
            logger.debug("%s.%s is deprecated: %s", namespace, type_def.key, class_def.deprecation)

        used: frozenset[str] = frozenset()
        if self.config.catch_all_field:
            class_def.catch_all_field = field_name(self.config.catch_all_field)
            used = used | {class_def.catch_all_field}

        attributes = [
            type_def.attributes[key] for key in sorted(type_def.attributes) if key not in self.config.global_ignore_fields
        ]

        field_names: dict[str, str] = {}
        for attr in attributes:
            name = disambiguate(field_name(attr.name), used)
            used = used | {name}
            field_names[attr.name] = name
            class_def.fields.append(self._analyze_attribute(name, attr, type_mapper))

        enums = []
        for attr, field_def in zip(attributes, class_def.fields):
            if attr.enum is None:
                continue
            enum_def = synthesize_enum(names.enum_names[(namespace, type_def.key, attr.name)], type_def, attr, field_def.type_ref)
            accessor, used = build_accessor(enum_def, attr, field_def.name, used, self.config.accessor_suffix)
            class_def.accessors.append(accessor)
            enums.append(enum_def)

        if self.config.add_validation:
            for field_def in class_def.fields:
                check = self._validation_check(field_def)
                if check is not None:
                    class_def.validation_checks.append(check)

        class_def.doc = docs.type_doc(type_def, [(field_names[a.name], a.name, a) for a in attributes])

        logger.debug(
            "Analyzed %s.%s as %s: %d fields, %d enums",
            namespace,
            type_def.key,
            class_name,
            len(class_def.fields),
            len(enums),
        )
        return class_def, enums

    def _analyze_attribute(self, name: str, attr: AttributeDef, type_mapper: TypeMapper) -> FieldDef:
        """Build the field definition of one attribute."""
        is_required = self.config.optionality == OptionalityPolicy.REQUIREMENT and attr.requirement == "required"
        return FieldDef(
            name=name,
            original_name=attr.name,
            type_ref=type_mapper.map_attribute(attr, nullable=not is_required),
            is_required=is_required,
        )

    @staticmethod
    def _validation_check(field_def: FieldDef) -> tuple[str, tuple[str, ...], bool] | None:
        """The __post_init__ check of a field, None when nothing is checked."""
        type_ref: TypeRef = field_def.type_ref
        is_array = type_ref.kind == TypeKind.ARRAY
        element = type_ref.element
        if element.kind == TypeKind.PRIMITIVE:
            return field_def.name, VALIDATION_TYPES[element.name], is_array
        if is_array:
            # Only the list itself is checked
            return field_def.name, (), True
        return None
