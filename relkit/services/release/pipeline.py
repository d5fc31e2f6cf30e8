"""Release orchestration.

Stages run strictly in order and the first ``Err`` ends the run:

    resolve version -> summary/confirm -> preflight -> tag check ->
    manifest -> build -> verify assets -> bundle -> commit + tag ->
    push -> publish

Nothing is retried or rolled back. On failure the journal tells the operator
which side effects already happened.
"""

from __future__ import annotations

from dataclasses import dataclass

from relkit.core.result import Err, Ok, Result
from relkit.output.console import Style
from relkit.services.release.assets import verify_assets
from relkit.services.release.build import build_artifact
from relkit.services.release.bundle import bundle_assets, check_asset_names, plan_bundle
from relkit.services.release.errors import ReleaseError
from relkit.services.release.git_publish import commit_and_tag, push_release
from relkit.services.release.journal import Effect, ReleaseJournal
from relkit.services.release.manifest import read_manifest_version, write_manifest_version
from relkit.services.release.model import ReleaseBundle, ReleaseContext, ReleaseRequest
from relkit.services.release.preflight import check_tag_available, run_preflight
from relkit.services.release.publish import publish_release
from relkit.services.release.semver import SemVer, resolve_version, validate_version


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    bundle: ReleaseBundle
    dry_run: bool
    pushed: bool
    release_url: str | None

    @property
    def version(self) -> SemVer:
        return self.bundle.version


@dataclass(frozen=True, slots=True)
class ReleaseFailure:
    error: ReleaseError
    completed: tuple[Effect, ...] = ()
    pending: tuple[Effect, ...] = ()


def determine_version(
    ctx: ReleaseContext,
    request: ReleaseRequest,
) -> Result[SemVer, ReleaseError]:
    manifest = ctx.project_root / ctx.config.manifest
    current_text = read_manifest_version(manifest)
    if isinstance(current_text, Err):
        return current_text
    ctx.console.info(f"Current version: {current_text.value}")

    # Only a bump reads the current version, so only a bump needs it to be X.Y.Z.
    if request.bump_kind is None or request.explicit_version is not None:
        return resolve_version(None, request)

    current = validate_version(current_text.value)
    if isinstance(current, Err):
        return Err(
            ReleaseError(
                kind="manifest_invalid",
                message=f"Current version in {ctx.config.manifest} is not X.Y.Z: "
                f"{current_text.value}",
            )
        )
    target = resolve_version(current.value, request)
    if isinstance(target, Err):
        return target
    ctx.console.info(f"Bumping {request.bump_kind} version: {current.value} -> {target.value}")
    return target


def print_summary(ctx: ReleaseContext, bundle: ReleaseBundle) -> None:
    console = ctx.console
    console.header("Release Summary")
    console.print(f"  Version:  {bundle.version}")
    console.print(f"  Tag:      {bundle.tag}")
    console.print(f"  Archive:  {bundle.archive_path}")
    console.print("  Assets:")
    for asset in ctx.config.assets:
        console.print(f"    - {asset}", Style.DIM)
    console.newline()


def update_manifest(
    ctx: ReleaseContext,
    request: ReleaseRequest,
    version: SemVer,
    journal: ReleaseJournal,
) -> Result[None, ReleaseError]:
    name = ctx.config.manifest
    ctx.console.info(f"Updating {name} version to {version}...")
    if request.dry_run:
        ctx.console.print(f"[dry-run] would update {name} version to {version}", Style.DIM)
        return Ok(None)

    changed = write_manifest_version(ctx.project_root / name, version)
    if isinstance(changed, Err):
        return changed
    if changed.value:
        journal.record("manifest updated")
        ctx.console.success(f"Updated {name}")
    else:
        ctx.console.print(f"{name} already at {version}", Style.DIM)
    return Ok(None)


def plan_release(
    ctx: ReleaseContext,
    request: ReleaseRequest,
) -> Result[ReleaseBundle, ReleaseError]:
    """Resolve the version and derive archive names; reads only."""
    version = determine_version(ctx, request)
    if isinstance(version, Err):
        return version

    names = check_asset_names(ctx.config.assets)
    if isinstance(names, Err):
        return names

    return Ok(plan_bundle(ctx, version.value))


def run_release(
    ctx: ReleaseContext,
    request: ReleaseRequest,
) -> Result[ReleaseOutcome, ReleaseFailure]:
    journal = ReleaseJournal(request)

    def fail(error: ReleaseError) -> Err[ReleaseFailure]:
        return Err(
            ReleaseFailure(error=error, completed=journal.completed, pending=journal.pending)
        )

    if request.dry_run:
        ctx.console.warning("Dry run: no files, commits, tags or releases will be created")

    planned = plan_release(ctx, request)
    if isinstance(planned, Err):
        return fail(planned.error)
    bundle = planned.value

    print_summary(ctx, bundle)
    if not request.force and not request.dry_run:
        if not ctx.confirm("Proceed with release?"):
            return fail(ReleaseError(kind="release_declined", message="Release aborted"))

    ok = run_preflight(ctx, request)
    if isinstance(ok, Err):
        return fail(ok.error)

    ok = check_tag_available(ctx.repo, bundle.version, remote=ctx.config.remote)
    if isinstance(ok, Err):
        return fail(ok.error)

    ok = update_manifest(ctx, request, bundle.version, journal)
    if isinstance(ok, Err):
        return fail(ok.error)

    ok = build_artifact(ctx, request)
    if isinstance(ok, Err):
        return fail(ok.error)

    verified = verify_assets(
        project_root=ctx.project_root,
        assets=ctx.config.assets,
        console=ctx.console,
    )
    if isinstance(verified, Err):
        return fail(verified.error)

    bundled = bundle_assets(ctx, request, bundle, journal)
    if isinstance(bundled, Err):
        return fail(bundled.error)

    ok = commit_and_tag(ctx, request, bundle, journal)
    if isinstance(ok, Err):
        return fail(ok.error)

    ok = push_release(ctx, request, bundle, journal)
    if isinstance(ok, Err):
        return fail(ok.error)

    published = publish_release(ctx, request, bundle, journal)
    if isinstance(published, Err):
        return fail(published.error)

    return Ok(
        ReleaseOutcome(
            bundle=bundle,
            dry_run=request.dry_run,
            pushed=not request.no_push and not request.dry_run,
            release_url=published.value,
        )
    )
