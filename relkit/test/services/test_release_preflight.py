from __future__ import annotations

from pathlib import Path

import pytest

from relkit.core.result import Err, Ok
from relkit.services.release import preflight
from relkit.services.release.model import ReleaseRequest
from relkit.services.release.preflight import (
    check_branch,
    check_clean_tree,
    check_tag_available,
    check_tools,
    run_preflight,
)
from relkit.services.release.semver import SemVer
from relkit.test._gitutil import git, init_project, requires_git
from relkit.test._release import make_context


def test_check_tools_reports_first_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    installed = {"git"}
    monkeypatch.setattr(
        preflight, "which", lambda name: f"/usr/bin/{name}" if name in installed else None
    )

    result = check_tools(("git", "cargo", "gh"))

    assert isinstance(result, Err)
    assert result.error.kind == "tool_missing"
    assert result.error.message == "cargo is required but not installed"
    assert result.error.category == "environment"


def test_check_tools_all_present(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(preflight, "which", lambda name: f"/usr/bin/{name}")
    assert check_tools(("git", "cargo", "gh")) == Ok(None)


@requires_git
class TestRepositoryChecks:
    def test_dirty_tree_lists_changes(self, tmp_path: Path) -> None:
        root = init_project(tmp_path / "proj")
        (root / "README.md").write_text("changed\n")
        (root / "scratch.txt").write_text("x\n")
        ctx, _ = make_context(root)

        result = check_clean_tree(ctx.repo)

        assert isinstance(result, Err)
        assert result.error.kind == "dirty_tree"
        assert result.error.detail == " M README.md\n?? scratch.txt"

    def test_clean_tree(self, tmp_path: Path) -> None:
        root = init_project(tmp_path / "proj")
        ctx, _ = make_context(root)
        assert check_clean_tree(ctx.repo) == Ok(None)

    def test_release_branch_needs_no_confirmation(self, tmp_path: Path) -> None:
        root = init_project(tmp_path / "proj", branch="master")
        ctx, console = make_context(root)

        assert check_branch(ctx, ReleaseRequest()) == Ok(None)
        assert not console.has_warning()

    def test_other_branch_declined(self, tmp_path: Path) -> None:
        root = init_project(tmp_path / "proj", branch="feature/x")
        prompts: list[str] = []

        def decline(prompt: str) -> bool:
            prompts.append(prompt)
            return False

        ctx, console = make_context(root, confirm=decline)

        result = check_branch(ctx, ReleaseRequest())

        assert isinstance(result, Err)
        assert result.error.kind == "branch_declined"
        assert prompts == ["Continue anyway?"]
        assert console.find("currently on: feature/x")

    def test_other_branch_accepted(self, tmp_path: Path) -> None:
        root = init_project(tmp_path / "proj", branch="feature/x")
        ctx, _ = make_context(root, confirm=lambda prompt: True)

        assert check_branch(ctx, ReleaseRequest()) == Ok(None)

    def test_other_branch_forced_skips_prompt(self, tmp_path: Path) -> None:
        root = init_project(tmp_path / "proj", branch="feature/x")
        ctx, console = make_context(root)

        assert check_branch(ctx, ReleaseRequest(force=True)) == Ok(None)
        assert console.has_warning()

    def test_run_preflight_stops_at_dirty_tree(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        root = init_project(tmp_path / "proj", branch="feature/x")
        (root / "scratch.txt").write_text("x\n")
        monkeypatch.setattr(preflight, "which", lambda name: f"/usr/bin/{name}")
        ctx, _ = make_context(root)

        result = run_preflight(ctx, ReleaseRequest())

        assert isinstance(result, Err)
        assert result.error.kind == "dirty_tree"

    def test_run_preflight_missing_manifest(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        root = init_project(tmp_path / "proj")
        git(root, "rm", "-q", "Cargo.toml")
        git(root, "commit", "-q", "-m", "drop manifest")
        monkeypatch.setattr(preflight, "which", lambda name: f"/usr/bin/{name}")
        ctx, _ = make_context(root)

        result = run_preflight(ctx, ReleaseRequest())

        assert isinstance(result, Err)
        assert result.error.kind == "not_project_root"

    def test_tag_exists(self, tmp_path: Path) -> None:
        root = init_project(tmp_path / "proj")
        git(root, "tag", "-a", "v1.0.0", "-m", "Release v1.0.0")
        head = git(root, "rev-parse", "HEAD").strip()
        ctx, _ = make_context(root)

        taken = check_tag_available(ctx.repo, SemVer(1, 0, 0), remote="origin")
        free = check_tag_available(ctx.repo, SemVer(1, 0, 1), remote="origin")

        assert isinstance(taken, Err)
        assert taken.error.kind == "tag_exists"
        assert taken.error.message == "Tag v1.0.0 already exists"
        assert taken.error.detail is not None
        assert f"Commit: {head}" in taken.error.detail
        assert "git tag -d v1.0.0 && git push origin :refs/tags/v1.0.0" in taken.error.detail
        assert free == Ok(None)
