"""Model for a single modulemd document."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modulemd_yaml.models.common import UInt64
from modulemd_yaml.models.dependencies import Dependencies
from modulemd_yaml.models.simpleset import StringSet

# Schema versions this package reads and writes
SUPPORTED_MDVERSIONS: tuple[int, ...] = (1, 2)
LATEST_MDVERSION = SUPPORTED_MDVERSIONS[-1]


class ModuleDocument(BaseModel):
    """Metadata describing one module stream.

    Only ``mdversion`` is required to build the object. ``summary``,
    ``description`` and ``module_licenses`` are mandatory on the wire and are
    checked when the document is emitted, so a document can be filled in
    step by step.

    Sets and dependency blocks are copied on assignment: a document never
    shares them with the caller.

    Example:
    -------
        ```yaml
        document: modulemd
        version: 2
        data:
          name: testmodule
          stream: master
          summary: Test
          description: >
            A test module.
          license:
            module:
              - MIT
        ```

    """

    model_config = ConfigDict(
        # Forbid extra fields not defined in the model
        extra="forbid",
        # Copy sets and dependency blocks on attribute assignment too
        validate_assignment=True,
    )

    mdversion: Annotated[
        UInt64,
        Field(description="Schema version of the document", examples=[1, 2]),
    ]
    name: Annotated[
        str | None,
        Field(default=None, description="Module name", examples=["nodejs"]),
    ]
    stream: Annotated[
        str | None,
        Field(default=None, description="Module stream name", examples=["master", "8"]),
    ]
    version: Annotated[
        UInt64,
        Field(default=0, description="Module version; 0 means unset", examples=[20180101]),
    ]
    summary: Annotated[
        str | None,
        Field(default=None, description="Short one-line summary (mandatory on emit)"),
    ]
    description: Annotated[
        str | None,
        Field(default=None, description="Longer description (mandatory on emit)"),
    ]
    module_licenses: Annotated[
        StringSet | None,
        Field(default=None, description="Licenses of the module itself (mandatory on emit)"),
    ]
    content_licenses: Annotated[
        StringSet | None,
        Field(default=None, description="Licenses of the packaged content"),
    ]
    dependencies: Annotated[
        list[Dependencies],
        Field(default_factory=list, description="Dependency blocks"),
    ]

    @field_validator("description")
    @classmethod
    def strip_trailing_line_breaks(cls, v: str | None) -> str | None:
        """Drop trailing line breaks; the folded scalar on the wire adds one back."""
        if v is None:
            return v
        return v.rstrip("\n")

    def add_module_license(self, license_id: str) -> None:
        """Add a module license, creating the set if needed."""
        if self.module_licenses is None:
            self.module_licenses = StringSet()
        self.module_licenses.add(license_id)

    def add_content_license(self, license_id: str) -> None:
        """Add a content license, creating the set if needed."""
        if self.content_licenses is None:
            self.content_licenses = StringSet()
        self.content_licenses.add(license_id)

    def add_dependencies(self, deps: Dependencies) -> None:
        """Append a copy of ``deps`` as a new dependency block."""
        self.dependencies = [*self.dependencies, deps]

    def set_module_licenses(self, licenses: Iterable[str] | None) -> None:
        """Replace the module license set with a copy of ``licenses``."""
        self.module_licenses = None if licenses is None else StringSet(licenses)

    def set_content_licenses(self, licenses: Iterable[str] | None) -> None:
        """Replace the content license set with a copy of ``licenses``."""
        self.content_licenses = None if licenses is None else StringSet(licenses)

    def copy_document(self) -> ModuleDocument:
        """Return a deep copy sharing no sets or dependency blocks."""
        return self.model_copy(deep=True)
