"""Main validator combining all validation rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modulemd_yaml.errors import ValidationError
from modulemd_yaml.validation.base import CompositeValidator
from modulemd_yaml.validation.document_validators import (
    DependenciesValidator,
    LicenseValidator,
    MandatoryFieldsValidator,
    MdversionValidator,
)
from modulemd_yaml.validation.errors import ValidationResult

if TYPE_CHECKING:
    from modulemd_yaml.models.module import ModuleDocument


class ModuleValidator:
    """Main validator for module documents.

    Runs the mandatory-field, schema-version, license and dependency checks
    that a document has to pass before it can be emitted.
    """

    def __init__(self, strict: bool = False) -> None:
        """Initialize validator.

        Args:
        ----
            strict: If True, treat warnings as errors.

        """
        self.strict = strict
        self._validator = CompositeValidator(
            [
                MdversionValidator(),
                MandatoryFieldsValidator(),
                LicenseValidator(),
                DependenciesValidator(),
            ]
        )

    def validate(self, doc: ModuleDocument, document: int | None = None) -> ValidationResult:
        """Validate a module document.

        Args:
        ----
            doc: The document to validate.
            document: Index of the document in its stream, for locations.

        Returns:
        -------
            ValidationResult with all issues found.

        """
        result = ValidationResult()
        self._validator.validate(doc, result, document)
        return result

    def validate_and_raise(self, doc: ModuleDocument, document: int | None = None) -> None:
        """Validate and raise exception if invalid.

        Args:
        ----
            doc: The document to validate.
            document: Index of the document in its stream.

        Raises:
        ------
            ValidationError: If validation fails.

        """
        result = self.validate(doc, document)

        if not result.is_valid:
            raise ValidationError(result, document)

        if self.strict and result.warnings:
            raise ValidationError(result, document)
