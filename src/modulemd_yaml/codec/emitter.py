"""Write module documents as a modulemd YAML stream.

Every document of a batch is validated and turned into its list of YAML
events before the output is opened, so a document that fails validation
never leaves partial output behind.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import IO

from yaml.emitter import Emitter, EmitterError
from yaml.events import (
    DocumentEndEvent,
    DocumentStartEvent,
    Event,
    MappingEndEvent,
    MappingStartEvent,
    ScalarEvent,
    SequenceEndEvent,
    SequenceStartEvent,
    StreamEndEvent,
    StreamStartEvent,
)
from yaml.nodes import ScalarNode
from yaml.resolver import BaseResolver, Resolver

from modulemd_yaml.codec import schema
from modulemd_yaml.errors import EmitError, OpenError, ValidationError
from modulemd_yaml.models.dependencies import DependencyMap
from modulemd_yaml.models.module import ModuleDocument
from modulemd_yaml.models.simpleset import StringSet
from modulemd_yaml.validation.base import CompositeValidator
from modulemd_yaml.validation.document_validators import (
    DependenciesValidator,
    MandatoryFieldsValidator,
    MdversionValidator,
)
from modulemd_yaml.validation.errors import ValidationResult
from modulemd_yaml.validation.validator import ModuleValidator

logger = logging.getLogger(__name__)

_STR_TAG = BaseResolver.DEFAULT_SCALAR_TAG

# NEL reads back as a line break unless escaped
_NEEDS_ESCAPE = "\x85"

# Checks the event layout depends on, run whatever validator is configured
_REQUIRED_CHECKS = CompositeValidator(
    [MdversionValidator(), MandatoryFieldsValidator(), DependenciesValidator()]
)


class ModulemdYamlEmitter(Emitter):
    """PyYAML emitter tuned to the modulemd layout.

    Block sequences are indented below their mapping key, and folded
    scalars are written with the default ``>`` indicator instead of ``>-``.
    """

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        super().increase_indent(flow, False)

    def determine_block_hints(self, text: str) -> str:
        return super().determine_block_hints(text).replace("-", "")


class YamlEmitter:
    """Serialize a batch of ModuleDocuments to modulemd YAML.

    Usage:
        emitter = YamlEmitter()
        emitter.emit_file(documents, Path("modules.yaml"))

    Or for in-memory output:
        text = emitter.emit_string(documents)
    """

    def __init__(self, validator: ModuleValidator | None = None, width: int = 80) -> None:
        """Initialize the emitter.

        Args:
        ----
            validator: Validator run on each document before output. Defaults
                to a non-strict ModuleValidator.
            width: Preferred line width; longer scalars are folded.

        """
        self._validator = validator or ModuleValidator()
        self._width = width
        self._resolver = Resolver()

    def emit_file(self, documents: Sequence[ModuleDocument], path: Path | str) -> None:
        """Write ``documents`` to ``path`` as one YAML stream.

        Args:
        ----
            documents: Documents to write, in order.
            path: Output file path; an existing file is overwritten.

        Raises:
        ------
            ValidationError: If a document is invalid. Nothing is written.
            OpenError: If the file cannot be opened.
            EmitError: If writing fails.

        """
        path = Path(path)
        logger.debug("Emitting %d document(s) to %s", len(documents), path)
        rendered = self._render(documents)

        try:
            f = path.open("wb")
        except OSError as e:
            raise OpenError(f"Failed to open file: {e.strerror or e}", path) from e

        with f:
            try:
                self._write_stream(rendered, f)
            except EmitError as e:
                raise EmitError(e.message, path) from e

    def emit_string(self, documents: Sequence[ModuleDocument]) -> str:
        """Return ``documents`` serialized as one YAML stream.

        Raises
        ------
            ValidationError: If a document is invalid.
            EmitError: If serialization fails.

        """
        logger.debug("Emitting %d document(s) to string", len(documents))
        rendered = self._render(documents)

        buffer = io.BytesIO()
        self._write_stream(rendered, buffer)
        return buffer.getvalue().decode(schema.ENCODING)

    def _render(self, documents: Sequence[ModuleDocument]) -> list[list[Event]]:
        """Validate every document and build its events."""
        rendered = []
        for index, module in enumerate(documents):
            self._validator.validate_and_raise(module, index)
            required = ValidationResult()
            _REQUIRED_CHECKS.validate(module, required, index)
            if not required.is_valid:
                raise ValidationError(required, index)
            rendered.append(self._document_events(module))
        return rendered

    def _write_stream(self, rendered: Iterable[list[Event]], stream: IO[bytes]) -> None:
        """Feed the stream events and the rendered documents to PyYAML."""
        emitter = ModulemdYamlEmitter(stream, width=self._width, allow_unicode=True)
        try:
            emitter.emit(StreamStartEvent(encoding=schema.ENCODING))
            for events in rendered:
                for event in events:
                    emitter.emit(event)
            emitter.emit(StreamEndEvent())
        except EmitterError as e:
            raise EmitError(f"Error writing YAML: {e}") from e
        except OSError as e:
            raise EmitError(f"Error writing YAML: {e.strerror or e}") from e
        finally:
            emitter.dispose()

    # Document structure

    def _document_events(self, module: ModuleDocument) -> list[Event]:
        events: list[Event] = [DocumentStartEvent(explicit=False)]
        events.append(self._mapping_start())

        events += self._string_pair(schema.KEY_DOCUMENT, schema.DOCUMENT_TYPE)
        events += self._int_pair(schema.KEY_MDVERSION, module.mdversion)
        events.append(self._string(schema.KEY_DATA))
        events += self._data_events(module)

        events.append(MappingEndEvent())
        events.append(DocumentEndEvent(explicit=False))
        return events

    def _data_events(self, module: ModuleDocument) -> list[Event]:
        summary = module.summary
        description = module.description
        module_licenses = module.module_licenses
        if summary is None or description is None or module_licenses is None:
            raise EmitError("Document is missing a mandatory field")

        events: list[Event] = [self._mapping_start()]

        if module.name is not None:
            events += self._string_pair(schema.KEY_NAME, module.name)
        if module.stream is not None:
            events += self._string_pair(schema.KEY_STREAM, module.stream)
        if module.version:
            events += self._int_pair(schema.KEY_VERSION, module.version)

        events += self._string_pair(schema.KEY_SUMMARY, summary)
        events += self._string_pair(schema.KEY_DESCRIPTION, description, style=">")

        events.append(self._string(schema.KEY_LICENSE))
        events.append(self._mapping_start())
        events.append(self._string(schema.KEY_LICENSE_MODULE))
        events += self._set_events(module_licenses)
        if module.content_licenses is not None:
            events.append(self._string(schema.KEY_LICENSE_CONTENT))
            events += self._set_events(module.content_licenses)
        events.append(MappingEndEvent())

        if module.dependencies:
            events.append(self._string(schema.KEY_DEPENDENCIES))
            if module.mdversion == 1:
                events += self._dependencies_v1(module)
            else:
                events += self._dependencies_v2(module)

        events.append(MappingEndEvent())
        return events

    def _dependencies_v1(self, module: ModuleDocument) -> list[Event]:
        """A single mapping of module name to one stream scalar."""
        deps = module.dependencies[0]
        events: list[Event] = [self._mapping_start()]
        for key, reqs in (
            (schema.KEY_BUILDREQUIRES, deps.buildrequires),
            (schema.KEY_REQUIRES, deps.requires),
        ):
            if not reqs:
                continue
            events.append(self._string(key))
            events.append(self._mapping_start())
            for name, streams in reqs.items():
                (stream,) = streams.to_list()
                events += self._string_pair(name, stream)
            events.append(MappingEndEvent())
        events.append(MappingEndEvent())
        return events

    def _dependencies_v2(self, module: ModuleDocument) -> list[Event]:
        """A sequence of blocks mapping module name to a stream sequence."""
        events: list[Event] = [SequenceStartEvent(None, None, True, flow_style=False)]
        for deps in module.dependencies:
            events.append(self._mapping_start())
            for key, reqs in (
                (schema.KEY_BUILDREQUIRES, deps.buildrequires),
                (schema.KEY_REQUIRES, deps.requires),
            ):
                if reqs:
                    events.append(self._string(key))
                    events += self._dependency_map_events(reqs)
            events.append(MappingEndEvent())
        events.append(SequenceEndEvent())
        return events

    def _dependency_map_events(self, reqs: DependencyMap) -> list[Event]:
        events: list[Event] = [self._mapping_start()]
        for name, streams in reqs.items():
            events.append(self._string(name))
            events += self._set_events(streams)
        events.append(MappingEndEvent())
        return events

    def _set_events(self, values: StringSet) -> list[Event]:
        events: list[Event] = [SequenceStartEvent(None, None, True, flow_style=False)]
        events.extend(self._string(value) for value in values.to_list())
        events.append(SequenceEndEvent())
        return events

    # Scalars

    def _mapping_start(self) -> MappingStartEvent:
        return MappingStartEvent(None, None, True, flow_style=False)

    def _string(self, value: str, style: str | None = None) -> ScalarEvent:
        """Scalar event for a string value.

        The plain form is only allowed when it reads back as a string, so
        values like ``2`` or ``true`` get quoted. Values holding a NEL are
        double-quoted so it is written as ``\\N``.
        """
        if _NEEDS_ESCAPE in value:
            style = '"'
        plain_tag = self._resolver.resolve(ScalarNode, value, (True, False))
        return ScalarEvent(None, None, (plain_tag == _STR_TAG, True), value, style=style)

    def _string_pair(self, key: str, value: str, style: str | None = None) -> list[Event]:
        return [self._string(key), self._string(value, style)]

    def _int_pair(self, key: str, value: int) -> list[Event]:
        return [self._string(key), ScalarEvent(None, None, (True, False), str(value))]


def emit_yaml_file(documents: Sequence[ModuleDocument], path: Path | str) -> None:
    """Write ``documents`` to ``path`` with a default YamlEmitter."""
    YamlEmitter().emit_file(documents, path)


def emit_yaml_string(documents: Sequence[ModuleDocument]) -> str:
    """Serialize ``documents`` with a default YamlEmitter."""
    return YamlEmitter().emit_string(documents)
