"""Module dependency maps.

A ``DependencyMap`` maps module names to the set of streams that satisfy the
dependency. ``Dependencies`` groups the build-time (``buildrequires``) and
run-time (``requires``) maps of one dependency block.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from pydantic_core import core_schema

from modulemd_yaml.models.simpleset import StringSet

BUILDREQUIRES = "buildrequires"
REQUIRES = "requires"

DependenciesCallback = Callable[["Dependencies", str], None]


class DependencyMap(Mapping[str, StringSet]):
    """Mapping of module name to a set of stream names.

    Adding streams for a module that is already present merges them into the
    existing set. Bulk replacement copies every set it is given.
    """

    __slots__ = ("_modules",)

    def __init__(self, source: Mapping[str, Iterable[str]] | None = None) -> None:
        """Initialize the map, deep-copying ``source`` if given."""
        self._modules: dict[str, StringSet] = {}
        if source is not None:
            self.replace_all(source)

    def add_streams(self, module: str, streams: Iterable[str]) -> None:
        """Union ``streams`` into the stream set of ``module``."""
        if not isinstance(module, str):
            raise TypeError(f"Module names must be str, got {type(module).__name__}")
        streamset = self._modules.get(module)
        if streamset is None:
            streamset = StringSet()
            self._modules[module] = streamset
        streamset.update(streams)

    def add_stream(self, module: str, stream: str) -> None:
        """Add a single stream for ``module``."""
        self.add_streams(module, [stream])

    def replace_all(self, source: Mapping[str, Iterable[str]] | None) -> None:
        """Replace all entries with deep copies of the entries in ``source``."""
        self._modules.clear()
        if source is None:
            return
        for module, streams in source.items():
            self.add_streams(module, streams)

    def duplicate(self) -> DependencyMap:
        """Return a new map whose stream sets are independent copies."""
        return DependencyMap(self)

    def to_dict(self) -> dict[str, list[str]]:
        """Return a plain dictionary with sorted module names and streams."""
        return {module: self._modules[module].to_list() for module in sorted(self._modules)}

    def __getitem__(self, module: str) -> StringSet:
        return self._modules[module]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._modules))

    def __len__(self) -> int:
        return len(self._modules)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DependencyMap):
            return self._modules == other._modules
        return super().__eq__(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DependencyMap({self.to_dict()!r})"


class Dependencies:
    """One dependency block: build-time and run-time module requirements.

    Both maps always exist and start empty. The ``buildrequires`` and
    ``requires`` properties return the live maps; assigning to them copies the
    given mapping. Observers registered with :meth:`connect` are called after
    each mutation with the name of the map that changed.

    Example:
    -------
        >>> deps = Dependencies()
        >>> deps.add_buildrequires("platform", ["f28", "f29"])
        >>> deps.add_requires_single("platform", "f28")
        >>> deps.buildrequires.to_dict()
        {'platform': ['f28', 'f29']}

    """

    def __init__(
        self,
        buildrequires: Mapping[str, Iterable[str]] | None = None,
        requires: Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        """Initialize the block.

        Args:
        ----
            buildrequires: Optional build-time requirements to copy in.
            requires: Optional run-time requirements to copy in.

        """
        self._buildrequires = DependencyMap(buildrequires)
        self._requires = DependencyMap(requires)
        self._observers: list[DependenciesCallback] = []

    # Observers

    def connect(self, callback: DependenciesCallback) -> None:
        """Register ``callback`` to be notified after each mutation."""
        self._observers.append(callback)

    def disconnect(self, callback: DependenciesCallback) -> None:
        """Unregister a callback registered with :meth:`connect`."""
        self._observers.remove(callback)

    def _notify(self, field: str) -> None:
        for callback in list(self._observers):
            callback(self, field)

    # buildrequires

    @property
    def buildrequires(self) -> DependencyMap:
        """The build-time requirements map."""
        return self._buildrequires

    @buildrequires.setter
    def buildrequires(self, value: Mapping[str, Iterable[str]] | None) -> None:
        self._buildrequires.replace_all(value)
        self._notify(BUILDREQUIRES)

    def dup_buildrequires(self) -> DependencyMap:
        """Return an independent copy of the build-time requirements."""
        return self._buildrequires.duplicate()

    def add_buildrequires(self, module: str, streams: Iterable[str]) -> None:
        """Add build-time streams for ``module``, merging with existing ones."""
        self._buildrequires.add_streams(module, streams)
        self._notify(BUILDREQUIRES)

    def add_buildrequires_single(self, module: str, stream: str) -> None:
        """Add one build-time stream for ``module``."""
        self._buildrequires.add_stream(module, stream)
        self._notify(BUILDREQUIRES)

    # requires

    @property
    def requires(self) -> DependencyMap:
        """The run-time requirements map."""
        return self._requires

    @requires.setter
    def requires(self, value: Mapping[str, Iterable[str]] | None) -> None:
        self._requires.replace_all(value)
        self._notify(REQUIRES)

    def dup_requires(self) -> DependencyMap:
        """Return an independent copy of the run-time requirements."""
        return self._requires.duplicate()

    def add_requires(self, module: str, streams: Iterable[str]) -> None:
        """Add run-time streams for ``module``, merging with existing ones."""
        self._requires.add_streams(module, streams)
        self._notify(REQUIRES)

    def add_requires_single(self, module: str, stream: str) -> None:
        """Add one run-time stream for ``module``."""
        self._requires.add_stream(module, stream)
        self._notify(REQUIRES)

    # Copying

    def copy(self, dest: Dependencies | None = None) -> Dependencies:
        """Copy both maps into ``dest``, creating it if needed.

        Args:
        ----
            dest: Existing block to overwrite, or None to allocate a new one.

        Returns:
        -------
            The destination block, sharing no mutable state with ``self``.

        """
        if dest is None:
            dest = Dependencies()
        elif not isinstance(dest, Dependencies):
            raise TypeError(f"dest must be Dependencies or None, got {type(dest).__name__}")
        elif dest is self:
            return dest

        dest.buildrequires = self._buildrequires
        dest.requires = self._requires
        return dest

    def __copy__(self) -> Dependencies:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Dependencies:
        return self.copy()

    def is_empty(self) -> bool:
        """Return True if neither map has entries."""
        return not self._buildrequires and not self._requires

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dependencies):
            return NotImplemented
        return self._buildrequires == other._buildrequires and self._requires == other._requires

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Dependencies(buildrequires={self._buildrequires.to_dict()!r}, "
            f"requires={self._requires.to_dict()!r})"
        )

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        """Get Pydantic schema for Dependencies."""
        return core_schema.no_info_plain_validator_function(
            _validate_dependencies,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: {
                    BUILDREQUIRES: value.buildrequires.to_dict(),
                    REQUIRES: value.requires.to_dict(),
                }
            ),
        )


def _validate_dependencies(value: Any) -> Dependencies:
    """Coerce a value into a new Dependencies block.

    Accepts an existing block (copied) or a mapping with optional
    ``buildrequires`` and ``requires`` keys.
    """
    if isinstance(value, Dependencies):
        return value.copy()

    if not isinstance(value, Mapping):
        msg = f"Expected Dependencies or a mapping, got {type(value).__name__}"
        raise ValueError(msg)

    unknown = set(value) - {BUILDREQUIRES, REQUIRES}
    if unknown:
        msg = f"Unknown dependency kinds: {', '.join(sorted(map(str, unknown)))}"
        raise ValueError(msg)

    try:
        return Dependencies(
            buildrequires=value.get(BUILDREQUIRES),
            requires=value.get(REQUIRES),
        )
    except TypeError as e:
        raise ValueError(str(e)) from e
