from __future__ import annotations

from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.platform.process import run as run_process
from relkit.services.release.errors import ReleaseError
from relkit.services.release.timeouts import GH_UPLOAD_TIMEOUT_SECONDS


def release_create_command(*, tag: str, title: str, notes: str, asset: Path) -> list[str]:
    return [
        "gh",
        "release",
        "create",
        tag,
        "--title",
        title,
        "--notes",
        notes,
        "--latest",
        str(asset),
    ]


def create_release(
    *,
    project_root: Path,
    tag: str,
    title: str,
    notes: str,
    asset: Path,
) -> Result[str, ReleaseError]:
    """Create a hosted release for an existing pushed tag and attach one file.

    Returns:
        Ok(release URL as printed by gh).
    """
    cmd = release_create_command(tag=tag, title=title, notes=notes, asset=asset)
    result = run_process(cmd, cwd=project_root, timeout=GH_UPLOAD_TIMEOUT_SECONDS)
    if isinstance(result, Err):
        e = result.error
        return Err(
            ReleaseError(
                kind="publish_failed",
                message=f"gh release create failed for {tag}",
                detail=e.stderr.strip() or "Check `gh auth status` and repository permissions.",
            )
        )
    return Ok(result.value.strip())
