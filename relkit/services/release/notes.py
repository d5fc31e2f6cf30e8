from __future__ import annotations

from relkit.core.result import Err, Ok, Result
from relkit.git.repository import Repository
from relkit.services.release.errors import ReleaseError

INITIAL_RELEASE_NOTES = "Initial release"


def render_notes(summaries: list[str]) -> str:
    return "\n".join(f"- {s}" for s in summaries)


def derive_release_notes(
    repo: Repository,
    *,
    search_from: str = "HEAD^",
) -> Result[str, ReleaseError]:
    """Bullet list of non-merge commits since the previous tag.

    ``search_from`` is where the previous tag is looked up: the parent of the
    release commit once it exists, ``HEAD`` when no release commit was made.
    With no previous tag the notes are ``Initial release``.
    """
    previous = repo.previous_tag(search_from)
    if previous is None:
        return Ok(INITIAL_RELEASE_NOTES)

    summaries = repo.log_summaries(previous, "HEAD")
    if isinstance(summaries, Err):
        return Err(
            ReleaseError(
                kind="git_failed",
                message=f"failed to read commits since {previous}",
                detail=summaries.error.message,
            )
        )
    return Ok(render_notes(summaries.value))
