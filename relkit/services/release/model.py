from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from relkit.core.config import ReleaseConfig
from relkit.git.repository import Repository
from relkit.output.console import ConsoleProtocol

if TYPE_CHECKING:
    from relkit.services.release.semver import SemVer


ReleaseBump = Literal["major", "minor", "patch"]
BUMP_KINDS: tuple[ReleaseBump, ...] = ("major", "minor", "patch")

ARCHIVE_SUFFIX = ".tar.gz"

# Asks the operator a yes/no question; False aborts the release.
Confirm = Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    """What the operator asked for, built once from the command line.

    ``bump_kind`` stays a plain string until the version is resolved so that
    an unknown kind is reported like any other release failure.
    """

    explicit_version: str | None = None
    bump_kind: str | None = None
    dry_run: bool = False
    no_push: bool = False
    force: bool = False


@dataclass(frozen=True, slots=True)
class ReleaseContext:
    """Everything a stage may touch besides the request itself."""

    project_root: Path
    config: ReleaseConfig
    console: ConsoleProtocol
    confirm: Confirm

    @property
    def repo(self) -> Repository:
        return Repository(self.project_root)

    @property
    def release_dir(self) -> Path:
        return self.project_root / self.config.output_dir


@dataclass(frozen=True, slots=True)
class ReleaseBundle:
    """Names and paths of one release archive.

    ``staging_dir`` is always ``archive_name`` without ``.tar.gz``, so the
    archive extracts into a directory named after itself.
    """

    version: SemVer
    tag: str
    archive_name: str
    archive_path: Path
    staging_dir: str


def archive_name(binary: str, version: SemVer, arch: str) -> str:
    return f"{binary}-{version}-linux-{arch}{ARCHIVE_SUFFIX}"


def staging_dir_name(name: str) -> str:
    """Directory an archive extracts to: its file name minus the suffix."""
    if not name.endswith(ARCHIVE_SUFFIX):
        raise ValueError(f"not a {ARCHIVE_SUFFIX} archive name: {name}")
    return name[: -len(ARCHIVE_SUFFIX)]


def make_bundle(
    *,
    version: SemVer,
    binary: str,
    arch: str,
    release_dir: Path,
) -> ReleaseBundle:
    name = archive_name(binary, version, arch)
    return ReleaseBundle(
        version=version,
        tag=version.to_tag(),
        archive_name=name,
        archive_path=release_dir / name,
        staging_dir=staging_dir_name(name),
    )
