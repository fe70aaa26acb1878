"""
Base class for AST-based code generation backends.

Defines the interface that all AST backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..analyzer.ir_nodes import IR, TypeRef
from ..config import CodeGeneratorConfig


class AstBackend(ABC):
    """Abstract base class for AST-based code generation backends."""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config

    @abstractmethod
    def generate(self, ir: IR) -> str:
        """
        Generate code from IR.

        Args:
            ir: The intermediate representation

        Returns:
            Generated code as a string
        """

    @abstractmethod
    def translate_type(self, type_ref: TypeRef) -> str:
        """
        Translate an IR type to a language-specific type string.

        Args:
            type_ref: The type reference

        Returns:
            Language-specific type string
        """
