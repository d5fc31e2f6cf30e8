from __future__ import annotations

from relkit.core.result import Err, Ok, Result
from relkit.git.repository import GitError
from relkit.output.console import Style
from relkit.services.release.errors import ReleaseError
from relkit.services.release.journal import ReleaseJournal
from relkit.services.release.model import ReleaseBundle, ReleaseContext, ReleaseRequest


def release_message(bundle: ReleaseBundle) -> str:
    return f"Release {bundle.tag}"


def _vcs_error(message: str, error: GitError) -> ReleaseError:
    return ReleaseError(kind="vcs_failed", message=message, detail=error.message or None)


def staged_paths(ctx: ReleaseContext, bundle: ReleaseBundle) -> list[str]:
    """Manifest, lock file (when the project has one) and archive, root-relative."""
    paths = [ctx.config.manifest]
    if (ctx.project_root / ctx.config.lock).is_file():
        paths.append(ctx.config.lock)
    try:
        paths.append(bundle.archive_path.relative_to(ctx.project_root).as_posix())
    except ValueError:
        paths.append(str(bundle.archive_path))
    return paths


def commit_and_tag(
    ctx: ReleaseContext,
    request: ReleaseRequest,
    bundle: ReleaseBundle,
    journal: ReleaseJournal,
) -> Result[None, ReleaseError]:
    message = release_message(bundle)
    paths = staged_paths(ctx, bundle)
    ctx.console.info(f"Creating git commit and tag {bundle.tag}...")

    if request.dry_run:
        ctx.console.print(f"[dry-run] would commit {', '.join(paths)}", Style.DIM)
        ctx.console.print(f"[dry-run] would create tag {bundle.tag}", Style.DIM)
        return Ok(None)

    repo = ctx.repo
    ctx.console.print(f"git add -- {' '.join(paths)}", Style.DIM)
    add = repo.add(paths)
    if isinstance(add, Err):
        return Err(_vcs_error("git add failed", add.error))

    ctx.console.print(f"git commit -m {message!r}", Style.DIM)
    commit = repo.commit(message)
    if isinstance(commit, Err):
        return Err(_vcs_error("git commit failed", commit.error))
    journal.record("local commit")

    ctx.console.print(f"git tag -a {bundle.tag} -m {message!r}", Style.DIM)
    tag = repo.create_annotated_tag(bundle.tag, message)
    if isinstance(tag, Err):
        return Err(_vcs_error(f"failed to create tag {bundle.tag}", tag.error))
    journal.record("local tag")

    ctx.console.success(f"Created tag {bundle.tag}")
    return Ok(None)


def push_release(
    ctx: ReleaseContext,
    request: ReleaseRequest,
    bundle: ReleaseBundle,
    journal: ReleaseJournal,
) -> Result[None, ReleaseError]:
    """Push the branch, then the tag, so the tag never points at an unpushed commit."""
    if request.no_push:
        ctx.console.warning("Skipping push (--no-push specified)")
        return Ok(None)

    remote = ctx.config.remote
    ctx.console.info("Pushing to remote...")
    if request.dry_run:
        ctx.console.print(f"[dry-run] would push HEAD and tag {bundle.tag} to {remote}", Style.DIM)
        return Ok(None)

    repo = ctx.repo
    ctx.console.print(f"git push {remote} HEAD", Style.DIM)
    branch = repo.push(remote, "HEAD")
    if isinstance(branch, Err):
        return Err(_vcs_error(f"failed to push branch to {remote}", branch.error))
    journal.record("pushed branch")

    ctx.console.print(f"git push {remote} {bundle.tag}", Style.DIM)
    tag = repo.push(remote, f"refs/tags/{bundle.tag}")
    if isinstance(tag, Err):
        return Err(_vcs_error(f"failed to push tag {bundle.tag} to {remote}", tag.error))
    journal.record("pushed tag")

    ctx.console.success("Pushed to remote")
    return Ok(None)
