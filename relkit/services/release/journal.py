"""Record of the side effects a release run has applied so far.

Nothing is rolled back on failure, so the operator needs to know exactly what
already happened (for example: tag created locally but never pushed).
"""

from __future__ import annotations

from typing import Literal

from relkit.services.release.model import ReleaseRequest

Effect = Literal[
    "manifest updated",
    "archive created",
    "local commit",
    "local tag",
    "pushed branch",
    "pushed tag",
    "published release",
]

LOCAL_EFFECTS: tuple[Effect, ...] = (
    "manifest updated",
    "archive created",
    "local commit",
    "local tag",
)
REMOTE_EFFECTS: tuple[Effect, ...] = ("pushed branch", "pushed tag", "published release")


def planned_effects(request: ReleaseRequest) -> tuple[Effect, ...]:
    if request.dry_run:
        return ()
    if request.no_push:
        return LOCAL_EFFECTS
    return LOCAL_EFFECTS + REMOTE_EFFECTS


class ReleaseJournal:
    """Append-only list of completed effects for one release run."""

    def __init__(self, request: ReleaseRequest) -> None:
        self._planned = planned_effects(request)
        self._done: list[Effect] = []

    def record(self, effect: Effect) -> None:
        if effect not in self._done:
            self._done.append(effect)

    @property
    def completed(self) -> tuple[Effect, ...]:
        return tuple(self._done)

    @property
    def pending(self) -> tuple[Effect, ...]:
        return tuple(e for e in self._planned if e not in self._done)
