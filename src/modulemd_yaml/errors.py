"""Exceptions raised by the modulemd YAML codec."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from modulemd_yaml.validation.errors import ValidationResult


class ErrorKind(Enum):
    """Error domain of a codec failure."""

    OPEN = "open"
    PARSE = "parse"
    EMIT = "emit"


class ModulemdYamlError(Exception):
    """Base class for codec errors."""

    kind: ErrorKind

    def __init__(self, message: str, path: Path | None = None) -> None:
        """Initialize the error.

        Args:
        ----
            message: Error message describing what went wrong.
            path: Optional path of the file being read or written.

        """
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class OpenError(ModulemdYamlError):
    """A file could not be opened for reading or writing."""

    kind = ErrorKind.OPEN


class ParseError(ModulemdYamlError):
    """Input is not valid YAML or does not match the modulemd schema."""

    kind = ErrorKind.PARSE

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize ParseError.

        Args:
        ----
            message: Error message describing what went wrong.
            path: Optional path of the file being parsed.
            line: 1-based line of the offending event, if known.
            column: 1-based column of the offending event, if known.

        """
        self.line = line
        self.column = column
        if line is not None:
            where = f"line {line}" if column is None else f"line {line}, col {column}"
            message = f"{message} ({where})"
        super().__init__(message, path)


class EmitError(ModulemdYamlError):
    """Output could not be written."""

    kind = ErrorKind.EMIT


class ValidationError(EmitError):
    """A document failed validation before emission."""

    def __init__(
        self,
        result: ValidationResult,
        document_index: int | None = None,
        path: Path | None = None,
    ) -> None:
        """Initialize with validation result.

        Args:
        ----
            result: The validation result containing issues.
            document_index: Position of the failing document in the batch.
            path: Optional output path.

        """
        self.result = result
        self.document_index = document_index

        problems = result.errors or result.warnings
        details = "; ".join(issue.message for issue in problems)
        prefix = "Validation failed"
        if document_index is not None:
            prefix = f"Validation failed for document {document_index}"
        super().__init__(f"{prefix}: {details}" if details else prefix, path)

    def format_issues(self) -> str:
        """Format all issues as a string.

        Returns
        -------
            Formatted string with all issues.

        """
        lines = [f"ERROR: {issue}" for issue in self.result.errors]
        lines.extend(f"WARNING: {issue}" for issue in self.result.warnings)
        return "\n".join(lines)
