from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "no_version",
    "conflicting_version",
    "invalid_version",
    "invalid_bump",
    "config_invalid",
    "tool_missing",
    "not_project_root",
    "manifest_invalid",
    "dirty_tree",
    "branch_declined",
    "release_declined",
    "tag_exists",
    "git_failed",
    "build_failed",
    "asset_missing",
    "asset_collision",
    "archive_missing",
    "bundle_failed",
    "vcs_failed",
    "publish_failed",
]

ErrorCategory = Literal[
    "usage",
    "environment",
    "repository_state",
    "build",
    "asset",
    "vcs",
    "publish",
]

_CATEGORIES: dict[str, ErrorCategory] = {
    "no_version": "usage",
    "conflicting_version": "usage",
    "invalid_version": "usage",
    "invalid_bump": "usage",
    "config_invalid": "usage",
    "release_declined": "usage",
    "tool_missing": "environment",
    "not_project_root": "environment",
    "manifest_invalid": "environment",
    "dirty_tree": "repository_state",
    "branch_declined": "repository_state",
    "tag_exists": "repository_state",
    "git_failed": "repository_state",
    "build_failed": "build",
    "asset_missing": "asset",
    "asset_collision": "asset",
    "archive_missing": "asset",
    "bundle_failed": "asset",
    "vcs_failed": "vcs",
    "publish_failed": "publish",
}


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """A fatal release failure.

    ``detail`` is an optional multi-line block (dirty file list, remediation
    command, tool output) shown verbatim under the message.
    """

    kind: ReleaseErrorKind
    message: str
    detail: str | None = None

    @property
    def category(self) -> ErrorCategory:
        return error_category(self.kind)


def error_category(kind: str) -> ErrorCategory:
    return _CATEGORIES.get(kind, "usage")
