"""Reading and rewriting the ``version = "X.Y.Z"`` line of the project manifest.

The file is edited textually so comments and formatting survive; only the
first top-level ``version`` line (the package version in a Cargo manifest) is
touched.
"""

from __future__ import annotations

import re
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.platform.files import atomic_write_text
from relkit.services.release.errors import ReleaseError
from relkit.services.release.semver import SemVer

_VERSION_LINE_RE = re.compile(r'^version\s*=\s*"([^"\n]*)"', re.MULTILINE)


def _read(path: Path) -> Result[str, ReleaseError]:
    try:
        return Ok(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(
            ReleaseError(
                kind="not_project_root",
                message=f"Must be run from project root ({path.name} not found)",
                detail=f"Current directory: {path.parent}",
            )
        )
    except (OSError, UnicodeDecodeError) as e:
        return Err(
            ReleaseError(
                kind="manifest_invalid",
                message=f"failed to read {path.name}: {e}",
                detail=str(path),
            )
        )


def read_manifest_version(path: Path) -> Result[str, ReleaseError]:
    text = _read(path)
    if isinstance(text, Err):
        return text

    m = _VERSION_LINE_RE.search(text.value)
    if m is None:
        return Err(
            ReleaseError(
                kind="manifest_invalid",
                message=f'missing version = "X.Y.Z" in {path.name}',
                detail=str(path),
            )
        )
    return Ok(m.group(1))


def write_manifest_version(path: Path, version: SemVer) -> Result[bool, ReleaseError]:
    """Rewrite the manifest version in place.

    Returns:
        Ok(True) if the file changed, Ok(False) if it already had ``version``.
    """
    text = _read(path)
    if isinstance(text, Err):
        return text

    m = _VERSION_LINE_RE.search(text.value)
    if m is None:
        return Err(
            ReleaseError(
                kind="manifest_invalid",
                message=f'missing version = "X.Y.Z" in {path.name}',
                detail=str(path),
            )
        )
    if m.group(1) == str(version):
        return Ok(False)

    start, end = m.span(1)
    updated = text.value[:start] + str(version) + text.value[end:]
    try:
        atomic_write_text(path, updated)
    except OSError as e:
        return Err(
            ReleaseError(
                kind="manifest_invalid",
                message=f"failed to write {path.name}: {e}",
                detail=str(path),
            )
        )
    return Ok(True)
