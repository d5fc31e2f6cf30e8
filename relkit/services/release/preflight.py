"""Checks that must pass before a release touches anything.

Checks run in a fixed order and stop at the first failure. Nothing here
mutates the repository or the filesystem.
"""

from __future__ import annotations

from shutil import which

from relkit.core.result import Err, Ok, Result
from relkit.git.repository import Repository
from relkit.output.console import Style
from relkit.services.release.errors import ReleaseError
from relkit.services.release.model import ReleaseContext, ReleaseRequest
from relkit.services.release.semver import SemVer


def check_tools(tools: tuple[str, ...]) -> Result[None, ReleaseError]:
    for tool in tools:
        if which(tool) is None:
            return Err(
                ReleaseError(
                    kind="tool_missing",
                    message=f"{tool} is required but not installed",
                    detail=f"Install {tool} and ensure it's in your PATH",
                )
            )
    return Ok(None)


def check_project_root(ctx: ReleaseContext) -> Result[None, ReleaseError]:
    manifest = ctx.project_root / ctx.config.manifest
    if not manifest.is_file():
        return Err(
            ReleaseError(
                kind="not_project_root",
                message=f"Must be run from project root ({ctx.config.manifest} not found)",
                detail=f"Current directory: {ctx.project_root}",
            )
        )
    return Ok(None)


def check_clean_tree(repo: Repository) -> Result[None, ReleaseError]:
    state = repo.state()
    if isinstance(state, Err):
        return Err(
            ReleaseError(
                kind="git_failed",
                message="failed to check git status",
                detail=state.error.message,
            )
        )

    if not state.value.is_clean:
        return Err(
            ReleaseError(
                kind="dirty_tree",
                message="Working directory is not clean. Commit or stash changes first.",
                detail=state.value.porcelain(),
            )
        )
    return Ok(None)


def check_branch(ctx: ReleaseContext, request: ReleaseRequest) -> Result[None, ReleaseError]:
    branch = ctx.repo.current_branch()
    if branch is not None and branch in ctx.config.branches:
        return Ok(None)

    shown = branch or "(detached HEAD)"
    accepted = "/".join(ctx.config.branches)
    ctx.console.warning(f"Not on {accepted} branch (currently on: {shown})")
    if request.force:
        ctx.console.print("--force given, continuing without confirmation", Style.DIM)
        return Ok(None)

    if not ctx.confirm("Continue anyway?"):
        return Err(
            ReleaseError(
                kind="branch_declined",
                message=f"Release from branch {shown} declined",
            )
        )
    return Ok(None)


def run_preflight(ctx: ReleaseContext, request: ReleaseRequest) -> Result[None, ReleaseError]:
    """Tools, project root, clean tree, then release branch."""
    ctx.console.info("Checking prerequisites...")

    ok = check_tools(ctx.config.tools)
    if isinstance(ok, Err):
        return ok
    ok = check_project_root(ctx)
    if isinstance(ok, Err):
        return ok
    ok = check_clean_tree(ctx.repo)
    if isinstance(ok, Err):
        return ok
    ok = check_branch(ctx, request)
    if isinstance(ok, Err):
        return ok

    ctx.console.success("Prerequisites check passed")
    return Ok(None)


def check_tag_available(
    repo: Repository,
    version: SemVer,
    *,
    remote: str,
) -> Result[None, ReleaseError]:
    """Refuse to reuse a tag that already exists locally."""
    tag = version.to_tag()
    if not repo.ref_exists(tag):
        return Ok(None)

    commit = repo.ref_commit(tag) or "unknown"
    created = repo.ref_date(tag) or "unknown"
    return Err(
        ReleaseError(
            kind="tag_exists",
            message=f"Tag {tag} already exists",
            detail=(
                f"Commit: {commit}\n"
                f"Created: {created}\n"
                "Use a different version number or delete the existing tag with:\n"
                f"  git tag -d {tag} && git push {remote} :refs/tags/{tag}"
            ),
        )
    )
