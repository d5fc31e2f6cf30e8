from __future__ import annotations

import re
from dataclasses import dataclass

from relkit.core.result import Err, Ok, Result
from relkit.services.release.errors import ReleaseError
from relkit.services.release.model import BUMP_KINDS, ReleaseBump, ReleaseRequest

# No sign, no leading zeros, no pre-release or build metadata.
_VERSION_RE = re.compile(r"(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)")


@dataclass(frozen=True, slots=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def to_tag(self) -> str:
        return f"v{self}"

    def bump(self, kind: ReleaseBump) -> SemVer:
        match kind:
            case "major":
                return SemVer(self.major + 1, 0, 0)
            case "minor":
                return SemVer(self.major, self.minor + 1, 0)
            case "patch":
                return SemVer(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")


def parse_version(text: str) -> SemVer | None:
    m = _VERSION_RE.fullmatch(text)
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def validate_version(text: str) -> Result[SemVer, ReleaseError]:
    parsed = parse_version(text)
    if parsed is None:
        return Err(
            ReleaseError(
                kind="invalid_version",
                message=f"Invalid version format: {text} (expected X.Y.Z)",
            )
        )
    return Ok(parsed)


def bump_version(current: SemVer, kind: str) -> Result[SemVer, ReleaseError]:
    if kind not in BUMP_KINDS:
        return Err(
            ReleaseError(
                kind="invalid_bump",
                message=f"Invalid bump type: {kind} (use {'|'.join(BUMP_KINDS)})",
            )
        )
    bump: ReleaseBump = kind  # type: ignore[assignment]
    return Ok(current.bump(bump))


def resolve_version(
    current: SemVer | None,
    request: ReleaseRequest,
) -> Result[SemVer, ReleaseError]:
    """Target version for a request; exactly one of version or bump must be given.

    ``current`` is only read for a bump and may be None otherwise.
    """
    explicit = request.explicit_version
    bump = request.bump_kind

    if explicit is not None and bump is not None:
        return Err(
            ReleaseError(
                kind="conflicting_version",
                message="Give either a version or --bump, not both",
                detail=f"version: {explicit}\n--bump: {bump}",
            )
        )
    if explicit is not None:
        return validate_version(explicit)
    if bump is not None:
        if current is None:
            raise ValueError("a bump needs the current version")
        return bump_version(current, bump)
    return Err(
        ReleaseError(
            kind="no_version",
            message="No version specified. Use: release <version> or release --bump <type>",
        )
    )
