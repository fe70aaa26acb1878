"""OCSF Code Generator

A Python package for generating typed, serializable dataclasses from
resolved OCSF (Open Cybersecurity Schema Framework) schema documents,
with synthesized enums, lossless catch-all fields and deterministic output.
"""

__version__ = "1.0.0"

from .exceptions import CodegenError, NameCollisionError, OutputValidationError, SchemaLoadError
from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    FormatterConfig,
    OptionalityPolicy,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
)

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "FormatterConfig",
    "OptionalityPolicy",
    "OutputConfig",
    "OutputMode",
    "AtomicWriter",
    "CodegenError",
    "NameCollisionError",
    "OutputValidationError",
    "SchemaLoadError",
]
