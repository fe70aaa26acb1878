"""
Pipeline - AST-based OCSF schema to Python generator.

This module provides a multi-phase architecture for generating typed
dataclasses from a resolved OCSF schema document:

1. Phase 1 (Loader): Parse the schema document into the schema model
2. Phase 2 (Analyzer): Resolve names, map types, synthesize enums, build IR
3. Phase 3 (AST Backend): Generate Python AST from IR and unparse it
4. Phase 4 (Formatter): Optional post-processing with black
5. Phase 5 (Writer): Validate and write the module atomically
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, FormatterConfig, OptionalityPolicy, OutputConfig, OutputMode
from .generator import PipelineGenerator
from .writer import AtomicWriter

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "FormatterConfig",
    "OptionalityPolicy",
    "OutputConfig",
    "OutputMode",
    "AtomicWriter",
]
