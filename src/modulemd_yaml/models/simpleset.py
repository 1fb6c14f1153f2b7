"""Deduplicated string set used for license and stream lists."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from pydantic_core import core_schema


class StringSet:
    """An unordered collection of unique strings.

    Insertion order carries no meaning. Iteration and serialization always
    follow lexicographic order so that emitting an unchanged set twice gives
    byte-identical output.

    Example:
    -------
        >>> licenses = StringSet(["MIT", "GPLv2+"])
        >>> licenses.add("MIT")
        >>> licenses.to_list()
        ['GPLv2+', 'MIT']

    """

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[str] | None = None) -> None:
        """Initialize the set.

        Args:
        ----
            values: Optional strings to add.

        """
        self._values: set[str] = set()
        if values is not None:
            self.update(values)

    def add(self, value: str) -> None:
        """Add a value; adding an existing value is a no-op."""
        if not isinstance(value, str):
            raise TypeError(f"StringSet values must be str, got {type(value).__name__}")
        self._values.add(value)

    def update(self, values: Iterable[str]) -> None:
        """Add every value from an iterable."""
        if isinstance(values, str):
            raise TypeError("StringSet.update() expects an iterable of str, not a str")
        for value in values:
            self.add(value)

    def discard(self, value: str) -> None:
        """Remove a value if present."""
        self._values.discard(value)

    def to_list(self) -> list[str]:
        """Return the values in canonical (sorted) order."""
        return sorted(self._values)

    def copy(self) -> StringSet:
        """Return an independent copy."""
        new = StringSet()
        new._values = set(self._values)
        return new

    def __copy__(self) -> StringSet:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> StringSet:
        return self.copy()

    def __contains__(self, value: object) -> bool:
        return value in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_list())

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, StringSet):
            return self._values == other._values
        if isinstance(other, (set, frozenset)):
            return self._values == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"StringSet({self.to_list()!r})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        """Get Pydantic schema for StringSet."""
        return core_schema.no_info_plain_validator_function(
            _validate_string_set,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.to_list()
            ),
        )


def _validate_string_set(value: Any) -> StringSet:
    """Coerce a value into a new StringSet.

    StringSet instances are copied so that the model owning the field never
    shares it with the caller.
    """
    if isinstance(value, StringSet):
        return value.copy()

    if isinstance(value, str) or not isinstance(value, Iterable):
        msg = f"Expected a collection of strings, got {type(value).__name__}"
        raise ValueError(msg)

    items = list(value)
    for item in items:
        if not isinstance(item, str):
            msg = f"Expected string entries, got {type(item).__name__}: {item!r}"
            raise ValueError(msg)
    return StringSet(items)
