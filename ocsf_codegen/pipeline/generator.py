"""
Pipeline generator chaining all phases.

Load -> Analyze -> Emit -> Format (optional) -> Write.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any

from .. import __version__
from ..cli_utils import reconstruct_command_line
from .analyzer import IR, SchemaAnalyzer
from .ast_backends import PythonAstBackend
from .config import CodeGeneratorConfig
from .formatters import BlackFormatter
from .schema_ast import SchemaDocument, SchemaLoader
from .writer import AtomicWriter

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Generates a Python module from an OCSF schema document."""

    def __init__(self, schema: SchemaDocument | dict[str, Any] | str, config: CodeGeneratorConfig | None = None):
        """
        Initialize the generator.

        Args:
            schema: A loaded SchemaDocument, decoded JSON, or JSON text
            config: Code generation configuration

        Raises:
            SchemaLoadError: If the schema cannot be loaded
        """
        self.config = config or CodeGeneratorConfig()

        if isinstance(schema, SchemaDocument):
            self.document = schema
        elif isinstance(schema, str):
            self.document = SchemaLoader().load(schema)
        else:
            self.document = SchemaLoader().load_dict(schema)

        self.analyzer = SchemaAnalyzer(self.config)
        self.backend = PythonAstBackend(self.config)
        self.formatter = BlackFormatter()

    def analyze(self) -> IR:
        """Run the analysis phase only."""
        ir = self.analyzer.analyze(self.document)
        if self.config.add_generation_comment:
            ir.generation_comment = self._generation_comment()
        return ir

    def generate(self) -> str:
        """
        Generate the module source.

        The result depends only on the schema and the configuration, so
        unchanged input regenerates byte-identical output.

        Returns:
            Generated Python code

        Raises:
            NameCollisionError: If a class and an object share a generated name
        """
        start = time.perf_counter()

        code = self.backend.generate(self.analyze())

        if self.config.formatter.enabled:
            code = self.formatter.format(code, self.config.formatter)

        logger.info("Generated %d bytes of code in %.3fs", len(code), time.perf_counter() - start)
        return code

    def write(self, path: str | Path) -> bool:
        """
        Generate the module and write it to path.

        Returns:
            True if the file was written, False if it was already up to date

        Raises:
            FileExistsError: If the file exists and the output mode forbids overwriting
            OutputValidationError: If the generated code does not parse
        """
        code = self.generate()
        writer = AtomicWriter(mode=self.config.output.mode, atomic=self.config.output.atomic_write)
        return writer.write(Path(path), code, validate=self.config.output.validate_before_write)

    @staticmethod
    def _generation_comment() -> str:
        return f"# Generated by ocsf_codegen v{__version__} : {reconstruct_command_line()}"
