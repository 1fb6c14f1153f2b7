"""Validation module for module documents."""

from modulemd_yaml.errors import ValidationError
from modulemd_yaml.validation.errors import (
    ErrorCodes,
    ValidationIssue,
    ValidationLocation,
    ValidationResult,
    ValidationSeverity,
)
from modulemd_yaml.validation.validator import ModuleValidator

__all__ = [
    "ErrorCodes",
    "ModuleValidator",
    "ValidationError",
    "ValidationIssue",
    "ValidationLocation",
    "ValidationResult",
    "ValidationSeverity",
]
