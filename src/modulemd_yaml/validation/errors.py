"""Validation error types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ValidationSeverity(Enum):
    """Severity level for validation issues."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationLocation:
    """Location in the document where an issue was found."""

    path: str
    """Dotted path to the issue (e.g., 'data.license.module')."""

    document: int | None = None
    """Index of the document within the stream (if known)."""

    def __str__(self) -> str:
        """Format location as string."""
        if self.document is not None:
            return f"{self.path} (document {self.document})"
        return self.path


@dataclass(frozen=True)
class ValidationIssue:
    """A single validation issue."""

    code: str
    """Unique error code (e.g., 'E001', 'W001')."""

    message: str
    """Human-readable error message."""

    severity: ValidationSeverity
    """Severity level."""

    location: ValidationLocation | None = None
    """Location in the document."""

    suggestion: str | None = None
    """Suggested fix."""

    context: dict[str, Any] = field(default_factory=dict)
    """Additional context for debugging."""

    def __str__(self) -> str:
        """Format issue as string."""
        parts = [f"[{self.code}]", self.severity.value.upper(), self.message]
        if self.location:
            parts.append(f"at {self.location}")
        if self.suggestion:
            parts.append(f"(hint: {self.suggestion})")
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of validation containing all issues."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        """Get only error-level issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        """Get only warning-level issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    @property
    def is_valid(self) -> bool:
        """Check if there are no errors (warnings are OK)."""
        return len(self.errors) == 0

    def add(self, issue: ValidationIssue) -> None:
        """Add an issue to the result."""
        self.issues.append(issue)

    def add_error(
        self,
        code: str,
        message: str,
        path: str,
        suggestion: str | None = None,
        document: int | None = None,
        **context: Any,
    ) -> None:
        """Add an error issue."""
        self.add(
            ValidationIssue(
                code=code,
                message=message,
                severity=ValidationSeverity.ERROR,
                location=ValidationLocation(path=path, document=document),
                suggestion=suggestion,
                context=context,
            )
        )

    def add_warning(
        self,
        code: str,
        message: str,
        path: str,
        suggestion: str | None = None,
        document: int | None = None,
        **context: Any,
    ) -> None:
        """Add a warning issue."""
        self.add(
            ValidationIssue(
                code=code,
                message=message,
                severity=ValidationSeverity.WARNING,
                location=ValidationLocation(path=path, document=document),
                suggestion=suggestion,
                context=context,
            )
        )

    def merge(self, other: ValidationResult) -> None:
        """Merge another result into this one."""
        self.issues.extend(other.issues)


class ErrorCodes:
    """Standard validation error codes."""

    # E0xx - Missing mandatory fields
    E001_MISSING_SUMMARY = "E001"
    E002_MISSING_DESCRIPTION = "E002"
    E003_MISSING_MODULE_LICENSE = "E003"

    # E1xx - Schema version errors
    E100_UNSUPPORTED_MDVERSION = "E100"

    # E2xx - Dependency shape errors
    E200_TOO_MANY_DEPENDENCY_BLOCKS = "E200"
    E201_STREAM_COUNT = "E201"

    # W0xx - Warnings
    W001_EMPTY_MODULE_LICENSE = "W001"
    W002_EMPTY_CONTENT_LICENSE = "W002"
