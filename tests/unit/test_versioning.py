"""Tests for semantic version parsing, ordering and increments."""

import pytest

from taglog.versioning import InvalidVersionError, Version, parse_version


class TestParse:
    """Tests for Version.parse and parse_version."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("1.2.3", Version(1, 2, 3)),
            ("v1.2.3", Version(1, 2, 3)),
            ("v2", Version(2, 0, 0)),
            ("1.4", Version(1, 4, 0)),
            ("1.0.0-rc.1", Version(1, 0, 0, prerelease="rc.1")),
        ],
    )
    def test_valid_versions(self, text: str, expected: Version) -> None:
        assert Version.parse(text) == expected

    def test_build_metadata_kept(self) -> None:
        version = Version.parse("1.0.0-beta+exp.sha.5114f85")

        assert version.prerelease == "beta"
        assert version.build == "exp.sha.5114f85"

    @pytest.mark.parametrize("text", ["", "latest", "release-1.0", "1.2.3.4", "v1.x", "1.0.0-"])
    def test_invalid_versions_raise(self, text: str) -> None:
        with pytest.raises(InvalidVersionError):
            Version.parse(text)

    def test_parse_version_returns_none_for_invalid(self) -> None:
        assert parse_version("nightly") is None
        assert parse_version("v3.1.0") == Version(3, 1, 0)


class TestString:
    """Tests for canonical rendering."""

    def test_drops_prefix_and_fills_components(self) -> None:
        assert str(Version.parse("v1.2")) == "1.2.0"

    def test_includes_prerelease_and_build(self) -> None:
        assert str(Version.parse("v2.0.0-rc.1+build.7")) == "2.0.0-rc.1+build.7"


class TestOrdering:
    """Tests for semver precedence."""

    def test_numeric_components_compare_numerically(self) -> None:
        assert Version.parse("1.10.0") > Version.parse("1.9.0")
        assert Version.parse("2.0.0") > Version.parse("1.99.99")

    def test_prerelease_is_lower_than_release(self) -> None:
        assert Version.parse("1.0.0-rc.1") < Version.parse("1.0.0")

    def test_prerelease_identifier_precedence(self) -> None:
        ordered = [
            "1.0.0-alpha",
            "1.0.0-alpha.1",
            "1.0.0-alpha.beta",
            "1.0.0-beta",
            "1.0.0-beta.2",
            "1.0.0-beta.11",
            "1.0.0-rc.1",
            "1.0.0",
        ]
        versions = [Version.parse(v) for v in ordered]

        assert sorted(reversed(versions)) == versions

    def test_build_metadata_ignored_for_equality(self) -> None:
        assert Version.parse("1.0.0+a") == Version.parse("1.0.0+b")
        assert Version.parse("1.0.0+a").compare(Version.parse("1.0.0")) == 0

    def test_compare_results(self) -> None:
        low, high = Version(1, 0, 0), Version(1, 0, 1)

        assert low.compare(high) == -1
        assert high.compare(low) == 1
        assert low.compare(Version(1)) == 0


class TestIncrement:
    """Tests for major/minor/patch increments."""

    def test_inc_major(self) -> None:
        assert Version.parse("1.4.2").inc_major() == Version(2, 0, 0)

    def test_inc_minor(self) -> None:
        assert str(Version.parse("2.3.1").inc_minor()) == "2.4.0"

    def test_inc_patch(self) -> None:
        assert str(Version.parse("2.3.1").inc_patch()) == "2.3.2"

    def test_inc_patch_promotes_prerelease(self) -> None:
        assert str(Version.parse("1.4.2-rc.1+meta").inc_patch()) == "1.4.2"

    def test_increments_drop_prerelease(self) -> None:
        version = Version.parse("1.4.2-rc.1")

        assert str(version.inc_minor()) == "1.5.0"
        assert str(version.inc_major()) == "2.0.0"
