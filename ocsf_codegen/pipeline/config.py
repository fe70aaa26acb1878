"""
Configuration for the code generator pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OptionalityPolicy(str, Enum):
    """How generated fields are made optional.

    ALWAYS: every field is ``T | None`` defaulting to None, so decoding never
    fails on a missing attribute.
    REQUIREMENT: attributes declared ``"requirement": "required"`` are
    generated as plain ``T`` without a default; all others behave as ALWAYS.
    """

    ALWAYS = "always"
    REQUIREMENT = "requirement"


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    FORCE = "force"  # Default: overwrite (unchanged content is not rewritten)
    ERROR_IF_EXISTS = "error"  # Raise error if file exists


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to check the code parses before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.FORCE
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class FormatterConfig:
    """Configuration for the black post-processing pass."""

    # Whether formatting is enabled
    enabled: bool = False

    # Line length for the formatter
    line_length: int = 100

    # Python version target (e.g., "py312", "py313")
    target_version: str = "py312"

    # Whether to use string normalization (convert single quotes to double)
    string_normalization: bool = True

    # Whether to respect magic trailing commas
    magic_trailing_comma: bool = True


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Field optionality policy
    optionality: OptionalityPolicy = OptionalityPolicy.ALWAYS

    # Name of the field capturing undeclared keys ("" = no catch-all, unknown keys are dropped)
    catch_all_field: str = "extra_attributes"

    # Add __post_init__ type checks
    add_validation: bool = True

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Suffix of the enum accessor generated for each enumerated attribute
    accessor_suffix: str = "_enum"

    # Class/object names to skip (references to them become JsonValue)
    ignore_types: list[str] = field(default_factory=list)

    # Attribute names to skip in every type
    global_ignore_fields: list[str] = field(default_factory=list)

    # Extra primitive type tags: tag -> "string" | "integer" | "float" | "boolean" | "json"
    primitive_types: dict[str, str] = field(default_factory=dict)

    # Formatter configuration
    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    # Output configuration
    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "optionality":
                config.optionality = OptionalityPolicy(v)
            elif k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(**v)
            elif k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.FORCE)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "optionality": self.optionality.value,
            "catch_all_field": self.catch_all_field,
            "add_validation": self.add_validation,
            "add_generation_comment": self.add_generation_comment,
            "accessor_suffix": self.accessor_suffix,
            "ignore_types": self.ignore_types,
            "global_ignore_fields": self.global_ignore_fields,
            "primitive_types": self.primitive_types,
            "formatter": {
                "enabled": self.formatter.enabled,
                "line_length": self.formatter.line_length,
                "target_version": self.formatter.target_version,
                "string_normalization": self.formatter.string_normalization,
                "magic_trailing_comma": self.formatter.magic_trailing_comma,
            },
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
