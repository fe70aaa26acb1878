"""
Python AST-based code generation backend.

Generates a module of dataclasses_json dataclasses and IntEnum types from
IR using the built-in ast module.
"""

from __future__ import annotations

import ast
from pathlib import Path

import jinja2

from ..analyzer.ir_nodes import IR, AccessorDef, ClassDef, EnumDef, FieldDef, TypeKind, TypeRef
from ..config import CodeGeneratorConfig
from .base import AstBackend

TEMPLATES_DIR = Path(__file__).parent.parent.parent.resolve().absolute() / "templates"

# Separator between top-level statements: two blank lines
STATEMENT_SEPARATOR = "\n\n\n"

INDENT = "    "

# Defined by the preamble; every generated dataclass derives from it
BASE_CLASS = "_OcsfModel"


def _name(id_: str) -> ast.Name:
    return ast.Name(id=id_, ctx=ast.Load())


def _attribute(value: str, attr: str) -> ast.Attribute:
    return ast.Attribute(value=_name(value), attr=attr, ctx=ast.Load())


def _call(func: str, *args: ast.expr, **keywords: ast.expr) -> ast.Call:
    return ast.Call(
        func=_name(func),
        args=list(args),
        keywords=[ast.keyword(arg=k, value=v) for k, v in keywords.items()],
    )


def _assign(target: str, value: ast.expr) -> ast.Assign:
    return ast.Assign(targets=[ast.Name(id=target, ctx=ast.Store())], value=value)


def _arguments(*names: str) -> ast.arguments:
    return ast.arguments(
        posonlyargs=[],
        args=[ast.arg(arg=n, annotation=None) for n in names],
        vararg=None,
        kwonlyargs=[],
        kw_defaults=[],
        kwarg=None,
        defaults=[],
    )


def _docstring(text: str, indent: str) -> ast.Expr:
    """A docstring statement whose continuation lines line up with the body."""
    lines = text.splitlines()
    if len(lines) > 1:
        text = "\n".join([lines[0]] + [f"{indent}{line}" if line else "" for line in lines[1:]]) + f"\n{indent}"
    return ast.Expr(value=ast.Constant(value=text))


class PythonAstBackend(AstBackend):
    """Python code generation backend using AST."""

    FILE_EXTENSION = "py"

    def __init__(self, config: CodeGeneratorConfig):
        super().__init__(config)
        self.jinja_env = jinja2.Environment(lstrip_blocks=True, trim_blocks=True)
        with open(TEMPLATES_DIR / f"python/prefix.{self.FILE_EXTENSION}.jinja2", encoding="utf-8") as f:
            self.prefix = self.jinja_env.from_string(f.read())

    def generate(self, ir: IR) -> str:
        """
        Generate Python code from IR.

        The module holds, in order: the preamble, one dataclass per class and
        per object in IR order, then every enum followed by its key table.
        Each top-level statement is unparsed on its own, so the output only
        depends on the IR.

        Args:
            ir: The intermediate representation

        Returns:
            Generated module source
        """
        prefix = self.prefix.render(
            generation_comment=ir.generation_comment if self.config.add_generation_comment else "",
            has_enums=bool(ir.enums),
            has_classes=bool(ir.classes),
            has_catch_all=any(c.catch_all_field for c in ir.classes),
            has_deprecations=any(c.deprecation for c in ir.classes),
            add_validation=any(c.validation_checks for c in ir.classes),
        )

        statements: list[ast.stmt] = [self._generate_class(class_def) for class_def in ir.classes]
        for enum_def in ir.enums:
            statements.append(self._generate_enum(enum_def))
            statements.append(self._generate_key_table(enum_def))

        parts = [prefix.strip()]
        for statement in statements:
            parts.append(ast.unparse(ast.fix_missing_locations(statement)).strip())

        return STATEMENT_SEPARATOR.join(parts) + "\n"

    def translate_type(self, type_ref: TypeRef) -> str:
        """Translate IR type to Python type string."""
        if type_ref.kind == TypeKind.ARRAY:
            result = f"list[{self.translate_type(type_ref.element)}]"
        else:
            result = type_ref.name

        if type_ref.is_nullable:
            result = f"{result} | None"
        return result

    def _generate_class(self, class_def: ClassDef) -> ast.ClassDef:
        """Generate a dataclass definition as AST node."""
        decorators: list[ast.expr] = [_call("dataclass", kw_only=ast.Constant(value=True))]
        if class_def.deprecation:
            decorators.insert(0, _call("deprecated", ast.Constant(value=class_def.deprecation)))

        body: list[ast.stmt] = []
        if class_def.doc:
            body.append(_docstring(class_def.doc, INDENT))

        # Routing tables read by the base class; plain class attributes, not fields
        wire_names = [ast.Constant(value=f.original_name) for f in class_def.fields]
        if wire_names:
            body.append(_assign("_WIRE_NAMES", _call("frozenset", ast.Set(elts=wire_names))))
        else:
            body.append(_assign("_WIRE_NAMES", _call("frozenset")))
        if class_def.catch_all_field:
            body.append(_assign("_CATCH_ALL", ast.Constant(value=class_def.catch_all_field)))

        for field_def in class_def.fields:
            body.append(self._generate_field(field_def))

        if class_def.catch_all_field:
            body.append(
                ast.AnnAssign(
                    target=ast.Name(id=class_def.catch_all_field, ctx=ast.Store()),
                    annotation=self._parse_expr("dict[str, JsonValue]"),
                    value=_call(
                        "field",
                        default_factory=_name("dict"),
                        metadata=_call("config", exclude=_name("_never_encoded")),
                    ),
                    simple=1,
                )
            )

        if class_def.validation_checks:
            body.append(self._generate_post_init(class_def.validation_checks))

        for accessor in class_def.accessors:
            body.append(self._generate_accessor(accessor))

        return ast.ClassDef(
            name=class_def.name,
            bases=[_name(BASE_CLASS)],
            keywords=[],
            body=body,
            decorator_list=decorators,
            type_params=[],
        )

    def _generate_field(self, field_def: FieldDef) -> ast.AnnAssign:
        """Generate a field definition as annotated assignment.

        The wire name is always the raw attribute name, and absent values
        are left out of the encoded document. Nested objects are decoded and
        encoded by their own class, so they route their own keys.
        """
        metadata_keywords: dict[str, ast.expr] = {
            "field_name": ast.Constant(value=field_def.original_name),
            "exclude": _name("_is_absent"),
        }
        element = field_def.type_ref.element
        if element.kind == TypeKind.CLASS:
            metadata_keywords["decoder"] = ast.Lambda(
                args=_arguments("value"),
                body=_call("_decode_nested", _name(element.name), _name("value")),
            )
            metadata_keywords["encoder"] = _name("_encode_nested")

        metadata = _call("config", **metadata_keywords)
        if field_def.is_required:
            value = _call("field", metadata=metadata)
        else:
            value = _call("field", default=ast.Constant(value=None), metadata=metadata)

        return ast.AnnAssign(
            target=ast.Name(id=field_def.name, ctx=ast.Store()),
            annotation=self._parse_expr(self.translate_type(field_def.type_ref)),
            value=value,
            simple=1,
        )

    def _generate_post_init(self, checks: list[tuple[str, tuple[str, ...], bool]]) -> ast.FunctionDef:
        """Generate __post_init__ method for validation."""
        body: list[ast.stmt] = [ast.Expr(value=ast.Constant(value="Validate the object after initialization."))]

        for name, expected, is_array in checks:
            call = _call(
                "_check_field",
                _name("self"),
                ast.Constant(value=name),
                ast.Tuple(elts=[_name(t) for t in expected], ctx=ast.Load()),
                ast.Constant(value=is_array),
            )
            body.append(ast.Expr(value=call))

        return ast.FunctionDef(
            name="__post_init__",
            args=_arguments("self"),
            body=body,
            decorator_list=[],
            returns=ast.Constant(value=None),
            type_params=[],
        )

    def _generate_accessor(self, accessor: AccessorDef) -> ast.FunctionDef:
        """Generate the method returning a field's value as enum member(s)."""
        if accessor.is_array:
            doc = f"Return {accessor.field_name} as {accessor.enum_name} members, skipping unknown values."
            returns = f"list[{accessor.enum_name}] | None"
            code = (
                f"if self.{accessor.field_name} is None:\n"
                f"    return None\n"
                f"return [{accessor.table_name}[value] for value in self.{accessor.field_name} if value in {accessor.table_name}]"
            )
            body: list[ast.stmt] = ast.parse(code).body
        else:
            doc = f"Return {accessor.field_name} as a {accessor.enum_name} member, or None if it has no match."
            returns = f"{accessor.enum_name} | None"
            value = ast.Attribute(value=_name("self"), attr=accessor.field_name, ctx=ast.Load())
            lookup = ast.Call(func=_attribute(accessor.table_name, "get"), args=[value], keywords=[])
            body = [ast.Return(value=lookup)]

        return ast.FunctionDef(
            name=accessor.name,
            args=_arguments("self"),
            body=[ast.Expr(value=ast.Constant(value=doc))] + body,
            decorator_list=[],
            returns=self._parse_expr(returns),
            type_params=[],
        )

    def _generate_enum(self, enum_def: EnumDef) -> ast.ClassDef:
        """Generate an IntEnum definition with explicit discriminants."""
        body: list[ast.stmt] = []
        if enum_def.doc:
            body.append(_docstring(enum_def.doc, INDENT))

        for member in enum_def.members:
            body.append(_assign(member.name, ast.Constant(value=member.value)))

        if not body:
            body.append(ast.Pass())

        return ast.ClassDef(
            name=enum_def.name,
            bases=[_name("IntEnum")],
            keywords=[],
            body=body,
            decorator_list=[],
            type_params=[],
        )

    def _generate_key_table(self, enum_def: EnumDef) -> ast.AnnAssign:
        """Generate the module-level table mapping wire values to members."""
        keys: list[ast.expr | None] = []
        values: list[ast.expr] = []
        for member in enum_def.members:
            keys.append(ast.Constant(value=member.key if enum_def.string_keys else member.value))
            values.append(_attribute(enum_def.name, member.name))

        key_type = "str" if enum_def.string_keys else "int"
        return ast.AnnAssign(
            target=ast.Name(id=enum_def.table_name, ctx=ast.Store()),
            annotation=self._parse_expr(f"dict[{key_type}, {enum_def.name}]"),
            value=ast.Dict(keys=keys, values=values),
            simple=1,
        )

    def _parse_expr(self, expr_str: str) -> ast.expr:
        """Parse an expression string into an AST expression."""
        return ast.parse(expr_str, mode="eval").body
