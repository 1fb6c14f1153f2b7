"""modulemd-yaml: Read and write modulemd module metadata as YAML.

This package provides tools for:
- Building module documents (name, stream, licenses, dependencies)
- Validating documents before they are written
- Emitting batches of documents as a multi-document YAML stream
- Parsing such streams back into documents

Quick Start:
    >>> from modulemd_yaml import ModuleDocument, emit_yaml_string, parse_yaml_string
    >>>
    >>> doc = ModuleDocument(mdversion=2, name="testmodule", stream="master",
    ...                      summary="Test", description="A test module.")
    >>> doc.add_module_license("MIT")
    >>> text = emit_yaml_string([doc])
    >>> parse_yaml_string(text) == [doc]
    True

Modules:
    models: Pydantic models for module documents, string sets and dependencies
    codec: YAML emitter and parser
    validation: Checks run on each document before emission
    cli: Command-line interface
"""

from modulemd_yaml.codec import (
    emit_yaml_file,
    emit_yaml_string,
    parse_yaml_file,
    parse_yaml_string,
)
from modulemd_yaml.errors import (
    EmitError,
    ErrorKind,
    ModulemdYamlError,
    OpenError,
    ParseError,
    ValidationError,
)
from modulemd_yaml.models import Dependencies, ModuleDocument, StringSet

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Codec
    "emit_yaml_file",
    "emit_yaml_string",
    "parse_yaml_file",
    "parse_yaml_string",
    # Models
    "Dependencies",
    "ModuleDocument",
    "StringSet",
    # Errors
    "EmitError",
    "ErrorKind",
    "ModulemdYamlError",
    "OpenError",
    "ParseError",
    "ValidationError",
]
