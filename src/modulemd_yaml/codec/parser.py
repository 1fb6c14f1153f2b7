"""Read module documents from a modulemd YAML stream.

The parser walks PyYAML's event stream directly. Mapping keys may come in
any order; mandatory fields are checked once a mapping has been read
completely.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import IO, Any, TypeVar

import yaml
from pydantic import ValidationError as PydanticValidationError
from yaml.events import (
    AliasEvent,
    CollectionEndEvent,
    CollectionStartEvent,
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

from modulemd_yaml.codec import schema
from modulemd_yaml.errors import OpenError, ParseError
from modulemd_yaml.models.common import parse_uint, validate_uint64
from modulemd_yaml.models.dependencies import Dependencies
from modulemd_yaml.models.module import ModuleDocument
from modulemd_yaml.models.simpleset import StringSet

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Event)

# Model field name and wire path of each mandatory data field
_MANDATORY_FIELDS = (
    ("summary", "data.summary"),
    ("description", "data.description"),
    ("module_licenses", "data.license.module"),
)


class YamlParser:
    """Parse modulemd YAML into ModuleDocuments.

    Usage:
        parser = YamlParser()
        documents = parser.parse_file(Path("modules.yaml"))

    Unknown keys are skipped unless ``strict`` is set, in which case they
    are reported as ParseError.
    """

    def __init__(self, strict: bool = False) -> None:
        """Initialize the parser.

        Args:
        ----
            strict: Reject keys that are not part of the schema.

        """
        self.strict = strict

    def parse_file(self, path: Path | str) -> list[ModuleDocument]:
        """Parse every document in the file at ``path``.

        Raises
        ------
            OpenError: If the file cannot be opened.
            ParseError: If the content is not a valid modulemd stream.

        """
        path = Path(path)
        try:
            f = path.open("rb")
        except OSError as e:
            raise OpenError(f"Failed to open file: {e.strerror or e}", path) from e

        with f:
            return self._parse(f, path)

    def parse_string(self, text: str) -> list[ModuleDocument]:
        """Parse every document in ``text``.

        Raises
        ------
            ParseError: If the text is not a valid modulemd stream.

        """
        return self._parse(text, None)

    def _parse(self, source: str | IO[bytes], path: Path | None) -> list[ModuleDocument]:
        events = yaml.parse(source, Loader=yaml.SafeLoader)
        documents = _StreamParser(events, path, self.strict).parse()
        logger.debug("Parsed %d document(s)%s", len(documents), f" from {path}" if path else "")
        return documents


class _StreamParser:
    """State machine over the events of one YAML stream."""

    def __init__(self, events: Iterator[Event], path: Path | None, strict: bool) -> None:
        self._events = events
        self._path = path
        self._strict = strict
        self._data_readers: dict[int, Callable[[], dict[str, Any]]] = {
            1: self._parse_data_v1,
            2: self._parse_data_v2,
        }

    def parse(self) -> list[ModuleDocument]:
        self._expect(StreamStartEvent, "stream start")

        documents: list[ModuleDocument] = []
        while True:
            event = self._next()
            if isinstance(event, StreamEndEvent):
                break
            if not isinstance(event, DocumentStartEvent):
                raise self._error(f"Expected document start, got {_describe(event)}", event)

            documents.append(self._parse_document())
            self._expect(DocumentEndEvent, "document end")

        return documents

    # Event access

    def _next(self) -> Event:
        try:
            return next(self._events)
        except StopIteration:
            raise ParseError("Unexpected end of stream", self._path) from None
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            problem = getattr(e, "problem", None) or str(e)
            raise ParseError(
                f"YAML parsing error: {problem}",
                self._path,
                mark.line + 1 if mark is not None else None,
                mark.column + 1 if mark is not None else None,
            ) from e

    def _expect(self, kind: type[E], what: str) -> E:
        event = self._next()
        if not isinstance(event, kind):
            raise self._error(f"Expected {what}, got {_describe(event)}", event)
        return event

    def _error(self, message: str, event: Event | None = None) -> ParseError:
        mark = event.start_mark if event is not None else None
        return ParseError(
            message,
            self._path,
            mark.line + 1 if mark is not None else None,
            mark.column + 1 if mark is not None else None,
        )

    def _collect_node(self) -> list[Event]:
        """Consume one complete node and return its events."""
        collected: list[Event] = []
        depth = 0
        while True:
            event = self._next()
            collected.append(event)
            if isinstance(event, CollectionStartEvent):
                depth += 1
            elif isinstance(event, CollectionEndEvent):
                depth -= 1
            if depth == 0:
                return collected

    def _key(self, event: Event, seen: set[str], where: str) -> str:
        if not isinstance(event, ScalarEvent):
            raise self._error(f"Expected a string key in {where}, got {_describe(event)}", event)
        if event.value in seen:
            raise self._error(f"Duplicate key {where}.{event.value}", event)
        seen.add(event.value)
        return event.value

    def _unknown_key(self, key: str, where: str, event: Event) -> None:
        if self._strict:
            raise self._error(f"Unknown key {where}.{key}", event)
        logger.debug("Ignoring unknown key %s.%s", where, key)
        self._collect_node()

    # Scalars and collections

    def _read_string(self, what: str) -> str:
        event = self._next()
        if not isinstance(event, ScalarEvent):
            raise self._error(f"Expected a scalar for {what}, got {_describe(event)}", event)
        return event.value

    def _read_uint(self, what: str) -> int:
        event = self._next()
        if not isinstance(event, ScalarEvent):
            raise self._error(f"Expected an integer for {what}, got {_describe(event)}", event)
        try:
            return validate_uint64(parse_uint(event.value))
        except ValueError as e:
            raise self._error(f"Invalid value for {what}: {e}", event) from e

    def _read_string_set(self, what: str) -> StringSet:
        start = self._next()
        if not isinstance(start, SequenceStartEvent):
            raise self._error(f"Expected a sequence for {what}, got {_describe(start)}", start)

        values = StringSet()
        while True:
            event = self._next()
            if isinstance(event, SequenceEndEvent):
                return values
            if not isinstance(event, ScalarEvent):
                raise self._error(f"Expected a scalar in {what}, got {_describe(event)}", event)
            values.add(event.value)

    # Document structure

    def _parse_document(self) -> ModuleDocument:
        start = self._expect(MappingStartEvent, "root mapping")

        document_type: str | None = None
        mdversion: int | None = None
        data_events: list[Event] | None = None
        seen: set[str] = set()

        while True:
            event = self._next()
            if isinstance(event, MappingEndEvent):
                break
            key = self._key(event, seen, "root")
            if key == schema.KEY_DOCUMENT:
                document_type = self._read_string(key)
            elif key == schema.KEY_MDVERSION:
                mdversion = self._read_uint(key)
            elif key == schema.KEY_DATA:
                # Dispatched once the mdversion is known
                data_events = self._collect_node()
            else:
                self._unknown_key(key, "root", event)

        if document_type is None:
            raise self._error("Missing required option document", start)
        if document_type != schema.DOCUMENT_TYPE:
            raise self._error(f"Unknown document type: {document_type}", start)
        if mdversion is None:
            raise self._error("Missing required option version", start)
        if mdversion not in self._data_readers:
            raise self._error(f"Unsupported mdversion {mdversion}", start)
        if data_events is None:
            raise self._error("Missing required option data", start)

        fields = self._replay(data_events, self._data_readers[mdversion])

        try:
            return ModuleDocument(mdversion=mdversion, **fields)
        except PydanticValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(x) for x in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise self._error(f"Invalid document: {problems}", start) from e

    def _replay(
        self,
        events: list[Event],
        reader: Callable[[], dict[str, Any]],
    ) -> dict[str, Any]:
        """Run ``reader`` over previously collected events."""
        saved = self._events
        self._events = iter(events)
        try:
            return reader()
        finally:
            self._events = saved

    def _parse_data_v1(self) -> dict[str, Any]:
        return self._parse_data(self._parse_dependencies_v1)

    def _parse_data_v2(self) -> dict[str, Any]:
        return self._parse_data(self._parse_dependencies_v2)

    def _parse_data(self, read_dependencies: Callable[[], list[Dependencies]]) -> dict[str, Any]:
        start = self._expect(MappingStartEvent, "data mapping")

        fields: dict[str, Any] = {}
        seen: set[str] = set()

        while True:
            event = self._next()
            if isinstance(event, MappingEndEvent):
                break
            key = self._key(event, seen, "data")
            if key == schema.KEY_NAME:
                fields["name"] = self._read_string("data.name")
            elif key == schema.KEY_STREAM:
                fields["stream"] = self._read_string("data.stream")
            elif key == schema.KEY_VERSION:
                fields["version"] = self._read_uint("data.version")
            elif key == schema.KEY_SUMMARY:
                fields["summary"] = self._read_string("data.summary")
            elif key == schema.KEY_DESCRIPTION:
                fields["description"] = self._read_string("data.description")
            elif key == schema.KEY_LICENSE:
                fields.update(self._parse_licenses())
            elif key == schema.KEY_DEPENDENCIES:
                fields["dependencies"] = read_dependencies()
            else:
                self._unknown_key(key, "data", event)

        for field, option in _MANDATORY_FIELDS:
            if field not in fields:
                raise self._error(f"Missing required option {option}", start)

        return fields

    def _parse_licenses(self) -> dict[str, StringSet]:
        self._expect(MappingStartEvent, "data.license mapping")

        licenses: dict[str, StringSet] = {}
        seen: set[str] = set()

        while True:
            event = self._next()
            if isinstance(event, MappingEndEvent):
                return licenses
            key = self._key(event, seen, "data.license")
            if key == schema.KEY_LICENSE_MODULE:
                licenses["module_licenses"] = self._read_string_set("data.license.module")
            elif key == schema.KEY_LICENSE_CONTENT:
                licenses["content_licenses"] = self._read_string_set("data.license.content")
            else:
                self._unknown_key(key, "data.license", event)

    def _parse_dependencies_v1(self) -> list[Dependencies]:
        """One mapping of buildrequires/requires to ``module: stream`` pairs."""
        self._expect(MappingStartEvent, "data.dependencies mapping")

        deps = Dependencies()
        seen: set[str] = set()

        while True:
            event = self._next()
            if isinstance(event, MappingEndEvent):
                return [deps]
            key = self._key(event, seen, "data.dependencies")
            if key == schema.KEY_BUILDREQUIRES:
                for module, stream in self._read_stream_scalars(f"data.dependencies.{key}"):
                    deps.add_buildrequires_single(module, stream)
            elif key == schema.KEY_REQUIRES:
                for module, stream in self._read_stream_scalars(f"data.dependencies.{key}"):
                    deps.add_requires_single(module, stream)
            else:
                self._unknown_key(key, "data.dependencies", event)

    def _read_stream_scalars(self, where: str) -> list[tuple[str, str]]:
        self._expect(MappingStartEvent, f"{where} mapping")

        pairs: list[tuple[str, str]] = []
        seen: set[str] = set()
        while True:
            event = self._next()
            if isinstance(event, MappingEndEvent):
                return pairs
            module = self._key(event, seen, where)
            pairs.append((module, self._read_string(f"{where}.{module}")))

    def _parse_dependencies_v2(self) -> list[Dependencies]:
        """A sequence of blocks mapping modules to stream sequences."""
        self._expect(SequenceStartEvent, "data.dependencies sequence")

        blocks: list[Dependencies] = []
        while True:
            event = self._next()
            if isinstance(event, SequenceEndEvent):
                return blocks
            if not isinstance(event, MappingStartEvent):
                raise self._error(
                    f"Expected a mapping in data.dependencies, got {_describe(event)}", event
                )
            blocks.append(self._parse_dependencies_block())

    def _parse_dependencies_block(self) -> Dependencies:
        deps = Dependencies()
        seen: set[str] = set()

        while True:
            event = self._next()
            if isinstance(event, MappingEndEvent):
                return deps
            key = self._key(event, seen, "data.dependencies")
            if key == schema.KEY_BUILDREQUIRES:
                for module, streams in self._read_stream_sets(f"data.dependencies.{key}"):
                    deps.add_buildrequires(module, streams)
            elif key == schema.KEY_REQUIRES:
                for module, streams in self._read_stream_sets(f"data.dependencies.{key}"):
                    deps.add_requires(module, streams)
            else:
                self._unknown_key(key, "data.dependencies", event)

    def _read_stream_sets(self, where: str) -> list[tuple[str, StringSet]]:
        self._expect(MappingStartEvent, f"{where} mapping")

        pairs: list[tuple[str, StringSet]] = []
        seen: set[str] = set()
        while True:
            event = self._next()
            if isinstance(event, MappingEndEvent):
                return pairs
            module = self._key(event, seen, where)
            pairs.append((module, self._read_string_set(f"{where}.{module}")))


def _describe(event: Event) -> str:
    """Short human-readable name of an event."""
    if isinstance(event, AliasEvent):
        return f"alias *{event.anchor}"
    if isinstance(event, ScalarEvent):
        return f"scalar {event.value!r}"
    if isinstance(event, MappingStartEvent):
        return "mapping"
    if isinstance(event, SequenceStartEvent):
        return "sequence"
    return type(event).__name__.replace("Event", " end").lower()


def parse_yaml_file(path: Path | str) -> list[ModuleDocument]:
    """Parse ``path`` with a default YamlParser."""
    return YamlParser().parse_file(path)


def parse_yaml_string(text: str) -> list[ModuleDocument]:
    """Parse ``text`` with a default YamlParser."""
    return YamlParser().parse_string(text)
