"""YAML codec for modulemd documents.

Primary Entry Points:
    emit_yaml_file / emit_yaml_string: Serialize a batch of documents
    parse_yaml_file / parse_yaml_string: Read a batch of documents

Example:
-------
    >>> from modulemd_yaml.codec import emit_yaml_string, parse_yaml_string
    >>> text = emit_yaml_string([doc])
    >>> parse_yaml_string(text) == [doc]
    True

"""

from modulemd_yaml.codec.emitter import (
    ModulemdYamlEmitter,
    YamlEmitter,
    emit_yaml_file,
    emit_yaml_string,
)
from modulemd_yaml.codec.parser import YamlParser, parse_yaml_file, parse_yaml_string

__all__ = [
    "ModulemdYamlEmitter",
    "YamlEmitter",
    "YamlParser",
    "emit_yaml_file",
    "emit_yaml_string",
    "parse_yaml_file",
    "parse_yaml_string",
]
