"""Tests for data models."""

from pathlib import Path

import pytest

from action_upgrader.models import (
    ActionReference,
    Location,
    MalformedVersion,
    NoUpdate,
    Precision,
    ScannedAction,
    UpdateTo,
    VersionSpec,
)


LOCATION = Location(Path("ci.yml"), 7)


class TestVersionSpec:
    """Tests for VersionSpec."""

    def test_raw_defaults_to_components(self) -> None:
        assert VersionSpec(4, 1, 2).raw == "4.1.2"
        assert VersionSpec(4).raw == "4"

    def test_patch_requires_minor(self) -> None:
        with pytest.raises(ValueError):
            VersionSpec(4, None, 2)

    def test_equality_by_raw(self) -> None:
        assert VersionSpec(4, 1) == VersionSpec(4, 1, raw="4.1")
        assert VersionSpec(4, 1) != VersionSpec(4, 1, 0)
        assert len({VersionSpec(4), VersionSpec(4, raw="4")}) == 1

    def test_is_immutable(self) -> None:
        spec = VersionSpec(4)
        with pytest.raises(AttributeError):
            spec.major = 5  # type: ignore[misc]

    @pytest.mark.parametrize(
        "spec, precision, expected",
        [
            (VersionSpec(4, 1, 2), Precision.MAJOR, "4"),
            (VersionSpec(4, 1, 2), Precision.MINOR, "4.1"),
            (VersionSpec(4, 1, 2), Precision.FULL, "4.1.2"),
            (VersionSpec(4), Precision.FULL, "4"),
            (VersionSpec(4, 1), Precision.MAJOR, "4"),
        ],
    )
    def test_truncate(self, spec, precision, expected) -> None:
        assert spec.truncate(precision).raw == expected


class TestUpdateTo:
    """Tests for UpdateTo rendering."""

    def test_render_shapes(self) -> None:
        target = VersionSpec(4, 1, 2)
        assert UpdateTo(target, Precision.MAJOR).render() == "v4"
        assert UpdateTo(target, Precision.MINOR).render() == "v4.1"
        assert UpdateTo(target, Precision.FULL).render() == "v4.1.2"
        assert UpdateTo(target, Precision.FULL).render("") == "4.1.2"

    def test_rendered_spec(self) -> None:
        result = UpdateTo(VersionSpec(4, 1, 2), Precision.MINOR)
        assert result.rendered_spec == VersionSpec(4, 1)
        assert result.rendered_spec.precision is Precision.MINOR

    def test_no_update_values_are_equal(self) -> None:
        assert NoUpdate() == NoUpdate()
        assert not NoUpdate()


class TestScannedAction:
    """Tests for ScannedAction."""

    def test_to_reference(self) -> None:
        scanned = ScannedAction("actions", "checkout", "v3", LOCATION)
        reference = scanned.to_reference()
        assert isinstance(reference, ActionReference)
        assert reference.current_version == VersionSpec(3)
        assert reference.slug == "actions/checkout"
        assert reference.has_prefix
        assert str(reference) == "actions/checkout@v3"

    def test_to_reference_keeps_path(self) -> None:
        scanned = ScannedAction("github", "codeql-action", "2", LOCATION, path="init")
        reference = scanned.to_reference()
        assert reference.name == "github/codeql-action/init"
        assert reference.slug == "github/codeql-action"
        assert not reference.has_prefix

    def test_to_reference_rejects_branches(self) -> None:
        scanned = ScannedAction("actions", "cache", "main", LOCATION)
        with pytest.raises(MalformedVersion):
            scanned.to_reference()

    def test_location_str(self) -> None:
        assert str(LOCATION) == "ci.yml:7"
