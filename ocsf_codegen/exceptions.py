"""
Exceptions raised by the OCSF code generator.
"""


class CodegenError(Exception):
    """Base class for all generation failures."""


class SchemaLoadError(CodegenError):
    """The schema document could not be parsed or has a malformed shape."""


class NameCollisionError(CodegenError):
    """Two schema types map to the same generated type name."""


class OutputValidationError(CodegenError):
    """The generated source code is not valid Python."""
