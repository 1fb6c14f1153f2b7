"""Validators for the fields of a single module document."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modulemd_yaml.models.module import SUPPORTED_MDVERSIONS
from modulemd_yaml.validation.base import BaseValidator
from modulemd_yaml.validation.errors import ErrorCodes, ValidationResult

if TYPE_CHECKING:
    from modulemd_yaml.models.module import ModuleDocument


class MandatoryFieldsValidator(BaseValidator):
    """Validates that summary, description and module licenses are set."""

    def validate(
        self,
        doc: ModuleDocument,
        result: ValidationResult,
        document: int | None = None,
    ) -> None:
        """Check for missing mandatory fields."""
        if doc.summary is None:
            result.add_error(
                code=ErrorCodes.E001_MISSING_SUMMARY,
                message="Missing required option data.summary",
                path="data.summary",
                document=document,
            )

        if doc.description is None:
            result.add_error(
                code=ErrorCodes.E002_MISSING_DESCRIPTION,
                message="Missing required option data.description",
                path="data.description",
                document=document,
            )

        if doc.module_licenses is None:
            result.add_error(
                code=ErrorCodes.E003_MISSING_MODULE_LICENSE,
                message="Missing required option data.license.module",
                path="data.license.module",
                suggestion="Set module_licenses, e.g. to the license of the packaging",
                document=document,
            )


class MdversionValidator(BaseValidator):
    """Validates that the schema version is one this package can write."""

    def validate(
        self,
        doc: ModuleDocument,
        result: ValidationResult,
        document: int | None = None,
    ) -> None:
        """Check the mdversion."""
        if doc.mdversion not in SUPPORTED_MDVERSIONS:
            supported = ", ".join(str(v) for v in SUPPORTED_MDVERSIONS)
            result.add_error(
                code=ErrorCodes.E100_UNSUPPORTED_MDVERSION,
                message=f"Unsupported mdversion {doc.mdversion}",
                path="version",
                suggestion=f"Supported versions: {supported}",
                document=document,
            )


class LicenseValidator(BaseValidator):
    """Warns about license sets that are present but empty."""

    def validate(
        self,
        doc: ModuleDocument,
        result: ValidationResult,
        document: int | None = None,
    ) -> None:
        """Check license sets for emptiness."""
        if doc.module_licenses is not None and len(doc.module_licenses) == 0:
            result.add_warning(
                code=ErrorCodes.W001_EMPTY_MODULE_LICENSE,
                message="Module license set is empty",
                path="data.license.module",
                suggestion="List at least one license identifier",
                document=document,
            )

        if doc.content_licenses is not None and len(doc.content_licenses) == 0:
            result.add_warning(
                code=ErrorCodes.W002_EMPTY_CONTENT_LICENSE,
                message="Content license set is empty",
                path="data.license.content",
                suggestion="Remove the content licenses or list at least one",
                document=document,
            )


class DependenciesValidator(BaseValidator):
    """Validates dependency blocks against the mdversion 1 shape.

    Version 1 documents hold a single dependency block in which every module
    maps to exactly one stream. Version 2 has no such limits.
    """

    def validate(
        self,
        doc: ModuleDocument,
        result: ValidationResult,
        document: int | None = None,
    ) -> None:
        """Check dependency blocks."""
        if doc.mdversion != 1 or not doc.dependencies:
            return

        if len(doc.dependencies) > 1:
            result.add_error(
                code=ErrorCodes.E200_TOO_MANY_DEPENDENCY_BLOCKS,
                message=(
                    f"mdversion 1 allows a single dependencies block, "
                    f"got {len(doc.dependencies)}"
                ),
                path="data.dependencies",
                suggestion="Merge the blocks or use mdversion 2",
                document=document,
            )

        for deps in doc.dependencies:
            for kind, reqs in (("buildrequires", deps.buildrequires), ("requires", deps.requires)):
                for module, streams in reqs.items():
                    if len(streams) != 1:
                        result.add_error(
                            code=ErrorCodes.E201_STREAM_COUNT,
                            message=(
                                f"mdversion 1 requires exactly one stream for "
                                f"{kind} '{module}', got {len(streams)}"
                            ),
                            path=f"data.dependencies.{kind}.{module}",
                            suggestion="Use mdversion 2 for multiple streams",
                            document=document,
                        )
