"""Base validator class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from modulemd_yaml.validation.errors import ValidationResult

if TYPE_CHECKING:
    from modulemd_yaml.models.module import ModuleDocument


class BaseValidator(ABC):
    """Base class for validators."""

    @abstractmethod
    def validate(
        self,
        doc: ModuleDocument,
        result: ValidationResult,
        document: int | None = None,
    ) -> None:
        """Validate the document and add issues to result.

        Args:
        ----
            doc: The module document to validate.
            result: The result object to add issues to.
            document: Index of the document in its stream, for locations.

        """
        ...


class CompositeValidator(BaseValidator):
    """Combines multiple validators."""

    def __init__(self, validators: list[BaseValidator] | None = None) -> None:
        """Initialize with optional list of validators.

        Args:
        ----
            validators: List of validators to combine.

        """
        self.validators = validators or []

    def add(self, validator: BaseValidator) -> None:
        """Add a validator.

        Args:
        ----
            validator: Validator to add.

        """
        self.validators.append(validator)

    def validate(
        self,
        doc: ModuleDocument,
        result: ValidationResult,
        document: int | None = None,
    ) -> None:
        """Run all validators."""
        for validator in self.validators:
            validator.validate(doc, result, document)
