"""Object model for modulemd documents.

Primary Entry Points:
    ModuleDocument: One module's metadata (pydantic model)
    Dependencies: One build-time/run-time dependency block
    StringSet: Deduplicated, sorted set of strings

Example:
-------
    >>> from modulemd_yaml.models import Dependencies, ModuleDocument
    >>> doc = ModuleDocument(mdversion=2, name="foo", summary="Foo", description="Foo module")
    >>> doc.add_module_license("MIT")
    >>> deps = Dependencies()
    >>> deps.add_buildrequires("platform", ["f28"])
    >>> doc.add_dependencies(deps)

Model Hierarchy:
    ModuleDocument
    ├── module_licenses / content_licenses - StringSet
    └── dependencies - list of Dependencies
        └── buildrequires / requires - DependencyMap (module -> StringSet)

"""

from modulemd_yaml.models.common import UInt64, parse_uint, validate_uint64
from modulemd_yaml.models.dependencies import (
    BUILDREQUIRES,
    REQUIRES,
    Dependencies,
    DependencyMap,
)
from modulemd_yaml.models.module import (
    LATEST_MDVERSION,
    SUPPORTED_MDVERSIONS,
    ModuleDocument,
)
from modulemd_yaml.models.simpleset import StringSet

__all__ = [
    # Common types
    "UInt64",
    "parse_uint",
    "validate_uint64",
    # Sets and maps
    "StringSet",
    "DependencyMap",
    "Dependencies",
    "BUILDREQUIRES",
    "REQUIRES",
    # Document
    "ModuleDocument",
    "SUPPORTED_MDVERSIONS",
    "LATEST_MDVERSION",
]
