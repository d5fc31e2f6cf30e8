from __future__ import annotations

import pytest

from relkit.core.result import Err, Ok
from relkit.services.release.model import ReleaseRequest
from relkit.services.release.semver import (
    SemVer,
    bump_version,
    parse_version,
    resolve_version,
    validate_version,
)


@pytest.mark.parametrize("text", ["0.0.0", "1.2.3", "12.34.56"])
def test_parse_round_trips(text: str) -> None:
    parsed = parse_version(text)
    assert parsed is not None
    assert str(parsed) == text


@pytest.mark.parametrize(
    "text",
    ["1.2", "1.2.3.4", "v1.2.3", "1.2.x", "", "1.2.3-rc.1", "01.2.3", " 1.2.3"],
)
def test_validate_rejects(text: str) -> None:
    result = validate_version(text)
    assert isinstance(result, Err)
    assert result.error.kind == "invalid_version"
    assert result.error.message == f"Invalid version format: {text} (expected X.Y.Z)"


def test_tag_is_v_prefixed() -> None:
    assert SemVer(1, 0, 1).to_tag() == "v1.0.1"


def test_ordering() -> None:
    assert SemVer(1, 2, 10) > SemVer(1, 2, 9)
    assert SemVer(2, 0, 0) > SemVer(1, 99, 99)


@pytest.mark.parametrize(
    ("current", "kind", "expected"),
    [
        (SemVer(1, 2, 9), "patch", SemVer(1, 2, 10)),
        (SemVer(1, 2, 9), "minor", SemVer(1, 3, 0)),
        (SemVer(0, 9, 9), "major", SemVer(1, 0, 0)),
    ],
)
def test_bump(current: SemVer, kind: str, expected: SemVer) -> None:
    assert bump_version(current, kind) == Ok(expected)


def test_bump_unknown_kind() -> None:
    result = bump_version(SemVer(1, 0, 0), "micro")
    assert isinstance(result, Err)
    assert result.error.kind == "invalid_bump"
    assert "micro" in result.error.message


class TestResolveVersion:
    current = SemVer(1, 0, 0)

    def test_explicit(self) -> None:
        request = ReleaseRequest(explicit_version="1.1.0")
        assert resolve_version(self.current, request) == Ok(SemVer(1, 1, 0))

    def test_explicit_invalid(self) -> None:
        result = resolve_version(self.current, ReleaseRequest(explicit_version="1.1"))
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_version"

    def test_bump(self) -> None:
        request = ReleaseRequest(bump_kind="patch")
        assert resolve_version(self.current, request) == Ok(SemVer(1, 0, 1))

    def test_neither(self) -> None:
        result = resolve_version(self.current, ReleaseRequest())
        assert isinstance(result, Err)
        assert result.error.kind == "no_version"
        assert result.error.category == "usage"

    def test_both(self) -> None:
        request = ReleaseRequest(explicit_version="2.0.0", bump_kind="patch")
        result = resolve_version(self.current, request)
        assert isinstance(result, Err)
        assert result.error.kind == "conflicting_version"

    def test_explicit_without_current(self) -> None:
        request = ReleaseRequest(explicit_version="1.0.0")
        assert resolve_version(None, request) == Ok(SemVer(1, 0, 0))

    def test_bump_requires_current(self) -> None:
        with pytest.raises(ValueError):
            resolve_version(None, ReleaseRequest(bump_kind="patch"))
