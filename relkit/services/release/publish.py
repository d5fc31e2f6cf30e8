from __future__ import annotations

from relkit.core.result import Err, Ok, Result
from relkit.output.console import Style
from relkit.services.release.errors import ReleaseError
from relkit.services.release.gh import create_release
from relkit.services.release.journal import ReleaseJournal
from relkit.services.release.model import ReleaseBundle, ReleaseContext, ReleaseRequest
from relkit.services.release.notes import derive_release_notes


def release_title(bundle: ReleaseBundle) -> str:
    return f"Release {bundle.tag}"


def publish_release(
    ctx: ReleaseContext,
    request: ReleaseRequest,
    bundle: ReleaseBundle,
    journal: ReleaseJournal,
) -> Result[str | None, ReleaseError]:
    """Publish the hosted release for ``bundle.tag`` with the archive attached.

    Returns:
        Ok(release URL), or Ok(None) when skipped or rehearsed.
    """
    if request.no_push:
        ctx.console.warning("Skipping GitHub release (--no-push specified)")
        return Ok(None)

    ctx.console.info(f"Creating GitHub release {bundle.tag}...")

    # A dry run made no release commit, so the previous tag is searched from HEAD.
    notes = derive_release_notes(ctx.repo, search_from="HEAD" if request.dry_run else "HEAD^")
    if isinstance(notes, Err):
        return notes

    if request.dry_run:
        ctx.console.print("[dry-run] would create GitHub release with:", Style.DIM)
        ctx.console.print(f"  Tag: {bundle.tag}", Style.DIM)
        ctx.console.print(f"  Archive: {bundle.archive_path}", Style.DIM)
        ctx.console.print("  Release notes:", Style.DIM)
        ctx.console.print(notes.value or "(no commits)")
        return Ok(None)

    if not bundle.archive_path.is_file():
        return Err(
            ReleaseError(
                kind="archive_missing",
                message=f"Archive not found: {bundle.archive_path}",
                detail=(
                    f"Expected at: {bundle.archive_path.absolute()}\n"
                    "The archive step may have failed. Check for errors above."
                ),
            )
        )

    ctx.console.print(f"gh release create {bundle.tag} --latest {bundle.archive_path}", Style.DIM)
    created = create_release(
        project_root=ctx.project_root,
        tag=bundle.tag,
        title=release_title(bundle),
        notes=notes.value,
        asset=bundle.archive_path,
    )
    if isinstance(created, Err):
        return created
    journal.record("published release")

    ctx.console.success(f"GitHub release created: {bundle.tag}")
    return Ok(created.value or None)
