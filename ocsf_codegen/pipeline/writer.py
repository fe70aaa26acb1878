"""
Atomic file writer for safe code generation.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import ast
import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..exceptions import OutputValidationError
from .config import OutputMode

logger = logging.getLogger(__name__)


def validate_python(content: str) -> None:
    """Check that content parses as Python.

    Raises:
        OutputValidationError: If it does not
    """
    try:
        ast.parse(content)
    except SyntaxError as e:
        raise OutputValidationError(f"Generated Python code is not valid: {e}") from e


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Validate the content
    2. Write to a temporary file in the same directory
    3. Atomically replace the target file

    This ensures that an interrupted write operation never leaves
    the target file in an incomplete state.
    """

    def __init__(
        self,
        mode: OutputMode = OutputMode.FORCE,
        atomic: bool = True,
        validator: Callable[[str], None] | None = None,
    ):
        """Initialize the atomic writer.

        Args:
            mode: How to handle an existing output file
            atomic: Whether to go through a temporary file
            validator: Validation function for the content
        """
        self.mode = mode
        self.atomic = atomic
        self._validate = validator or validate_python

    def write(self, path: Path, content: str, validate: bool = True) -> bool:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before writing

        Returns:
            True if the file was written, False if it already held the content

        Raises:
            FileExistsError: If the file exists and mode is ERROR_IF_EXISTS
            OutputValidationError: If validation fails
            OSError: If file operations fail
        """
        path = Path(path)

        if path.exists():
            if self.mode == OutputMode.ERROR_IF_EXISTS:
                raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")
            if path.read_text(encoding="utf-8") == content:
                logger.info("Output %s is up to date; not rewriting it", path)
                return False

        if validate:
            self._validate(content)

        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        if not self.atomic:
            with open(path, "w", encoding="utf-8") as f:
                f.write(content)
            logger.info("Wrote %s", path)
            return True

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            temp_path.replace(path)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise

        logger.info("Wrote %s", path)
        return True
