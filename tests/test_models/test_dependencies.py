"""Tests for DependencyMap and Dependencies."""

import copy

import pytest
from modulemd_yaml.models.dependencies import (
    BUILDREQUIRES,
    REQUIRES,
    Dependencies,
    DependencyMap,
)


class TestDependencyMap:
    """Tests for DependencyMap."""

    def test_add_streams_merges(self) -> None:
        """Adding streams for an existing module should union the sets."""
        deps = DependencyMap()
        deps.add_streams("platform", ["f28"])
        deps.add_streams("platform", ["f29", "f28"])

        assert deps.to_dict() == {"platform": ["f28", "f29"]}

    def test_iteration_is_sorted(self) -> None:
        """Module names should iterate in sorted order."""
        deps = DependencyMap({"python3": ["3.6"], "platform": ["f28"]})

        assert list(deps) == ["platform", "python3"]

    def test_replace_all_deep_copies(self) -> None:
        """Bulk replacement should not share sets with the source."""
        source = DependencyMap({"platform": ["f28"]})
        target = DependencyMap({"old": ["x"]})
        target.replace_all(source)
        source.add_stream("platform", "f29")

        assert target.to_dict() == {"platform": ["f28"]}

    def test_replace_all_none_clears(self) -> None:
        """Replacing with None should leave the map empty."""
        deps = DependencyMap({"platform": ["f28"]})
        deps.replace_all(None)

        assert len(deps) == 0

    def test_duplicate_is_independent(self) -> None:
        """Mutating a duplicate should not affect the original."""
        original = DependencyMap({"platform": ["f28"]})
        duplicate = original.duplicate()
        duplicate["platform"].add("f29")

        assert original.to_dict() == {"platform": ["f28"]}
        assert duplicate.to_dict() == {"platform": ["f28", "f29"]}

    def test_rejects_non_string_module(self) -> None:
        """Module names must be strings."""
        with pytest.raises(TypeError):
            DependencyMap().add_streams(1, ["f28"])  # type: ignore[arg-type]


class TestDependencies:
    """Tests for Dependencies."""

    def test_starts_empty(self) -> None:
        """A new block should have two empty maps."""
        deps = Dependencies()

        assert deps.is_empty()
        assert len(deps.buildrequires) == 0
        assert len(deps.requires) == 0

    def test_add_buildrequires_merges(self) -> None:
        """Adding the same module twice should merge streams."""
        deps = Dependencies()
        deps.add_buildrequires("platform", ["f28"])
        deps.add_buildrequires("platform", ["f29"])

        assert deps.buildrequires.to_dict() == {"platform": ["f28", "f29"]}

    def test_single_stream_helpers(self) -> None:
        """Single-stream helpers should add to the right map."""
        deps = Dependencies()
        deps.add_buildrequires_single("platform", "f28")
        deps.add_requires_single("python3", "3.6")

        assert deps.buildrequires.to_dict() == {"platform": ["f28"]}
        assert deps.requires.to_dict() == {"python3": ["3.6"]}

    def test_setter_copies(self) -> None:
        """Assigning a map should copy it."""
        source = DependencyMap({"platform": ["f28"]})
        deps = Dependencies()
        deps.requires = source
        source.add_stream("platform", "f29")

        assert deps.requires.to_dict() == {"platform": ["f28"]}

    def test_setter_accepts_plain_mapping(self) -> None:
        """Assigning a plain dict of lists should work."""
        deps = Dependencies()
        deps.buildrequires = {"platform": ["f28", "f28"]}

        assert deps.buildrequires.to_dict() == {"platform": ["f28"]}

    def test_dup_returns_copy(self) -> None:
        """dup_* should return independent maps."""
        deps = Dependencies(requires={"platform": ["f28"]})
        duplicate = deps.dup_requires()
        duplicate.add_stream("platform", "f29")

        assert deps.requires.to_dict() == {"platform": ["f28"]}
        assert deps.dup_buildrequires().to_dict() == {}


class TestDependenciesCopy:
    """Tests for copying dependency blocks."""

    def test_copy_creates_new_block(self) -> None:
        """copy() without a destination should allocate an equal block."""
        deps = Dependencies(buildrequires={"platform": ["f28"]})
        duplicate = deps.copy()

        assert duplicate == deps
        assert duplicate is not deps

    def test_copy_into_destination(self) -> None:
        """copy(dest) should overwrite dest and return it."""
        deps = Dependencies(requires={"platform": ["f28"]})
        dest = Dependencies(buildrequires={"old": ["x"]})

        result = deps.copy(dest)

        assert result is dest
        assert dest.buildrequires.to_dict() == {}
        assert dest.requires.to_dict() == {"platform": ["f28"]}

    def test_copy_into_self_keeps_contents(self) -> None:
        """Copying a block onto itself should leave it unchanged."""
        deps = Dependencies(requires={"platform": ["f28"]})

        assert deps.copy(deps) is deps
        assert deps.requires.to_dict() == {"platform": ["f28"]}

    def test_copy_is_deep(self) -> None:
        """Mutating the copy should not affect the original."""
        deps = Dependencies(buildrequires={"platform": ["f28"]})
        duplicate = copy.deepcopy(deps)
        duplicate.add_buildrequires("platform", ["f29"])

        assert deps.buildrequires.to_dict() == {"platform": ["f28"]}

    def test_copy_rejects_bad_destination(self) -> None:
        """A destination that is not a block should be rejected."""
        with pytest.raises(TypeError):
            Dependencies().copy({})  # type: ignore[arg-type]


class TestDependenciesObservers:
    """Tests for change notification."""

    def test_notified_on_mutation(self) -> None:
        """Observers should receive the name of the changed map."""
        changes: list[str] = []
        deps = Dependencies()
        deps.connect(lambda block, field: changes.append(field))

        deps.add_buildrequires("platform", ["f28"])
        deps.add_requires_single("platform", "f28")
        deps.requires = None

        assert changes == [BUILDREQUIRES, REQUIRES, REQUIRES]

    def test_disconnect(self) -> None:
        """Disconnected observers should not be called."""
        changes: list[str] = []

        def callback(block: Dependencies, field: str) -> None:
            changes.append(field)

        deps = Dependencies()
        deps.connect(callback)
        deps.disconnect(callback)
        deps.add_requires("platform", ["f28"])

        assert changes == []
