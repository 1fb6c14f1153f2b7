"""Tests for StringSet."""

import copy

import pytest
from modulemd_yaml.models.simpleset import StringSet
from pydantic import BaseModel, ValidationError


class TestStringSet:
    """Tests for basic set behaviour."""

    def test_add_deduplicates(self) -> None:
        """Adding an existing value should be a no-op."""
        values = StringSet()
        values.add("MIT")
        values.add("MIT")

        assert len(values) == 1
        assert "MIT" in values

    def test_iteration_is_sorted(self) -> None:
        """Iteration should follow lexicographic order, not insertion order."""
        values = StringSet(["b", "c", "a"])

        assert list(values) == ["a", "b", "c"]
        assert values.to_list() == ["a", "b", "c"]

    def test_discard(self) -> None:
        """Should remove present values and ignore missing ones."""
        values = StringSet(["a", "b"])
        values.discard("a")
        values.discard("missing")

        assert values.to_list() == ["b"]

    def test_equality(self) -> None:
        """Should compare by contents."""
        assert StringSet(["a", "b"]) == StringSet(["b", "a"])
        assert StringSet(["a"]) == {"a"}
        assert StringSet(["a"]) != StringSet(["b"])

    def test_rejects_non_string(self) -> None:
        """Should reject values that are not strings."""
        with pytest.raises(TypeError):
            StringSet().add(1)  # type: ignore[arg-type]

    def test_update_rejects_bare_string(self) -> None:
        """A bare string is not a collection of values."""
        with pytest.raises(TypeError):
            StringSet().update("MIT")

    def test_unhashable(self) -> None:
        """Mutable sets should not be hashable."""
        with pytest.raises(TypeError):
            hash(StringSet())


class TestStringSetCopy:
    """Tests for copy independence."""

    def test_copy_is_independent(self) -> None:
        """Mutating a copy should not affect the original."""
        original = StringSet(["a"])
        duplicate = original.copy()
        duplicate.add("b")

        assert original.to_list() == ["a"]
        assert duplicate.to_list() == ["a", "b"]

    def test_deepcopy(self) -> None:
        """copy.deepcopy should produce an independent equal set."""
        original = StringSet(["a", "b"])
        duplicate = copy.deepcopy(original)

        assert duplicate == original
        assert duplicate is not original


class _Holder(BaseModel):
    values: StringSet


class TestStringSetPydantic:
    """Tests for StringSet as a pydantic field."""

    def test_accepts_list(self) -> None:
        """Should build a set from a list of strings."""
        holder = _Holder(values=["b", "a", "b"])  # type: ignore[arg-type]

        assert isinstance(holder.values, StringSet)
        assert holder.values.to_list() == ["a", "b"]

    def test_copies_instance(self) -> None:
        """A StringSet passed in should be copied."""
        values = StringSet(["a"])
        holder = _Holder(values=values)
        values.add("b")

        assert holder.values.to_list() == ["a"]

    @pytest.mark.parametrize("bad", ["MIT", 1, [1, 2], None])
    def test_rejects_invalid(self, bad: object) -> None:
        """Should reject bare strings and non-string entries."""
        with pytest.raises(ValidationError):
            _Holder(values=bad)  # type: ignore[arg-type]

    def test_serializes_sorted(self) -> None:
        """Should dump as a sorted list."""
        holder = _Holder(values=["z", "a"])  # type: ignore[arg-type]

        assert holder.model_dump() == {"values": ["a", "z"]}
