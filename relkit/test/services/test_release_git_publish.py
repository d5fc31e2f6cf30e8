from __future__ import annotations

from pathlib import Path

from relkit.core.result import Err, Ok
from relkit.services.release.bundle import plan_bundle
from relkit.services.release.git_publish import commit_and_tag, push_release, staged_paths
from relkit.services.release.journal import ReleaseJournal
from relkit.services.release.model import ReleaseRequest
from relkit.services.release.semver import SemVer
from relkit.test._gitutil import git, init_project, requires_git
from relkit.test._release import make_context


def _prepare_release(root: Path, version: str = "1.0.1") -> None:
    """Leave the working tree the way the manifest and bundle stages do."""
    manifest = root / "Cargo.toml"
    text = manifest.read_text(encoding="utf-8")
    manifest.write_text(text.replace('version = "1.0.0"', f'version = "{version}"', 1))
    archive = root / "release-bundles" / f"demo-{version}-linux-aarch64.tar.gz"
    archive.parent.mkdir(parents=True, exist_ok=True)
    archive.write_bytes(b"archive")


@requires_git
class TestCommitAndTag:
    def test_staged_paths_include_lock_when_present(self, tmp_path: Path) -> None:
        root = init_project(tmp_path / "proj")
        ctx, _ = make_context(root)
        bundle = plan_bundle(ctx, SemVer(1, 0, 1))

        assert staged_paths(ctx, bundle) == [
            "Cargo.toml",
            "Cargo.lock",
            "release-bundles/demo-1.0.1-linux-aarch64.tar.gz",
        ]

        (root / "Cargo.lock").unlink()
        assert "Cargo.lock" not in staged_paths(ctx, bundle)

    def test_creates_commit_and_annotated_tag(self, tmp_path: Path) -> None:
        root = init_project(tmp_path / "proj")
        _prepare_release(root)
        ctx, _ = make_context(root)
        bundle = plan_bundle(ctx, SemVer(1, 0, 1))
        journal = ReleaseJournal(ReleaseRequest(no_push=True))

        result = commit_and_tag(ctx, ReleaseRequest(no_push=True), bundle, journal)

        assert result == Ok(None)
        assert git(root, "log", "-1", "--format=%s").strip() == "Release v1.0.1"
        assert git(root, "cat-file", "-t", "v1.0.1").strip() == "tag"
        assert git(root, "rev-parse", "v1.0.1^{commit}") == git(root, "rev-parse", "HEAD")
        assert git(root, "status", "--porcelain") == ""
        changed = git(root, "show", "--name-only", "--format=", "HEAD").split()
        assert sorted(changed) == [
            "Cargo.toml",
            "release-bundles/demo-1.0.1-linux-aarch64.tar.gz",
        ]
        assert journal.completed == ("local commit", "local tag")

    def test_dry_run_leaves_repo_alone(self, tmp_path: Path) -> None:
        root = init_project(tmp_path / "proj")
        head = git(root, "rev-parse", "HEAD")
        ctx, console = make_context(root)
        bundle = plan_bundle(ctx, SemVer(1, 0, 1))
        request = ReleaseRequest(dry_run=True)

        result = commit_and_tag(ctx, request, bundle, ReleaseJournal(request))

        assert result == Ok(None)
        assert git(root, "rev-parse", "HEAD") == head
        assert git(root, "tag", "--list") == ""
        assert console.find("[dry-run] would create tag v1.0.1")

    def test_tag_failure_after_commit(self, tmp_path: Path) -> None:
        root = init_project(tmp_path / "proj")
        git(root, "tag", "v1.0.1")
        _prepare_release(root)
        ctx, _ = make_context(root)
        bundle = plan_bundle(ctx, SemVer(1, 0, 1))
        journal = ReleaseJournal(ReleaseRequest())

        result = commit_and_tag(ctx, ReleaseRequest(), bundle, journal)

        assert isinstance(result, Err)
        assert result.error.kind == "vcs_failed"
        assert journal.completed == ("local commit",)


@requires_git
class TestPushRelease:
    def test_no_push_skips(self, tmp_path: Path) -> None:
        root = init_project(tmp_path / "proj")
        ctx, console = make_context(root)
        bundle = plan_bundle(ctx, SemVer(1, 0, 1))
        request = ReleaseRequest(no_push=True)

        result = push_release(ctx, request, bundle, ReleaseJournal(request))

        assert result == Ok(None)
        assert console.find("Skipping push (--no-push specified)")

    def test_pushes_branch_then_tag(self, tmp_path: Path) -> None:
        remote = tmp_path / "remote.git"
        remote.mkdir()
        git(remote, "init", "-q", "--bare")
        root = init_project(tmp_path / "proj")
        git(root, "remote", "add", "origin", str(remote))
        git(root, "tag", "-a", "v1.0.1", "-m", "Release v1.0.1")
        ctx, _ = make_context(root)
        bundle = plan_bundle(ctx, SemVer(1, 0, 1))
        journal = ReleaseJournal(ReleaseRequest())

        result = push_release(ctx, ReleaseRequest(), bundle, journal)

        assert result == Ok(None)
        head = git(root, "rev-parse", "HEAD")
        assert git(remote, "rev-parse", "refs/heads/main") == head
        assert git(remote, "rev-parse", "v1.0.1^{commit}") == head
        assert journal.completed == ("pushed branch", "pushed tag")

    def test_push_failure_is_vcs_error(self, tmp_path: Path) -> None:
        root = init_project(tmp_path / "proj")
        ctx, _ = make_context(root)
        bundle = plan_bundle(ctx, SemVer(1, 0, 1))
        journal = ReleaseJournal(ReleaseRequest())

        result = push_release(ctx, ReleaseRequest(), bundle, journal)

        assert isinstance(result, Err)
        assert result.error.kind == "vcs_failed"
        assert result.error.message == "failed to push branch to origin"
        assert journal.completed == ()
