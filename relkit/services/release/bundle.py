"""Packing release assets into ``<binary>-<version>-linux-<arch>.tar.gz``.

The archive extracts into a single directory with the archive's own name
(minus ``.tar.gz``). Assets are flattened into that directory by file name,
so two assets sharing a file name are rejected up front.
"""

from __future__ import annotations

import shutil
import tarfile
from pathlib import Path, PurePosixPath

from relkit.core.result import Err, Ok, Result
from relkit.output.console import Style
from relkit.platform.files import recreate_dir, remove_tree
from relkit.services.release.errors import ReleaseError
from relkit.services.release.journal import ReleaseJournal
from relkit.services.release.model import (
    ReleaseBundle,
    ReleaseContext,
    ReleaseRequest,
    make_bundle,
)
from relkit.services.release.semver import SemVer


def plan_bundle(ctx: ReleaseContext, version: SemVer) -> ReleaseBundle:
    return make_bundle(
        version=version,
        binary=ctx.config.binary,
        arch=ctx.config.arch,
        release_dir=ctx.release_dir,
    )


def check_asset_names(assets: tuple[str, ...]) -> Result[None, ReleaseError]:
    """Reject assets that would land on the same file name in the archive."""
    seen: dict[str, str] = {}
    for asset in assets:
        name = PurePosixPath(asset).name
        if name in seen:
            return Err(
                ReleaseError(
                    kind="asset_collision",
                    message=f"Assets collide on file name in the archive: {name}",
                    detail=f"{seen[name]}\n{asset}",
                )
            )
        seen[name] = asset
    return Ok(None)


def _pack(*, staging: Path, names: list[str], archive_path: Path, arcname: str) -> None:
    """Pack ``staging`` with its files in ``names`` order, not directory order."""
    with tarfile.open(archive_path, "w:gz") as tar:
        tar.add(staging, arcname=arcname, recursive=False)
        for name in names:
            tar.add(staging / name, arcname=f"{arcname}/{name}")


def bundle_assets(
    ctx: ReleaseContext,
    request: ReleaseRequest,
    bundle: ReleaseBundle,
    journal: ReleaseJournal,
) -> Result[ReleaseBundle, ReleaseError]:
    assets = ctx.config.assets
    names = check_asset_names(assets)
    if isinstance(names, Err):
        return names

    ctx.console.info(f"Creating release archive: {bundle.archive_path}")
    ctx.console.print(f"  Extracts to: {bundle.staging_dir}/", Style.DIM)

    if request.dry_run:
        ctx.console.print(f"[dry-run] would create archive: {bundle.archive_path}", Style.DIM)
        ctx.console.print("[dry-run] contents:", Style.DIM)
        for asset in assets:
            ctx.console.print(f"  - {PurePosixPath(asset).name}", Style.DIM)
        return Ok(bundle)

    staging = ctx.project_root / bundle.staging_dir
    try:
        bundle.archive_path.parent.mkdir(parents=True, exist_ok=True)
        recreate_dir(staging)
        names: list[str] = []
        for asset in assets:
            src = ctx.project_root / asset
            shutil.copy2(src, staging / src.name)
            names.append(src.name)
        _pack(
            staging=staging,
            names=names,
            archive_path=bundle.archive_path,
            arcname=bundle.staging_dir,
        )
    except (OSError, tarfile.TarError) as e:
        return Err(
            ReleaseError(
                kind="bundle_failed",
                message=f"failed to create archive: {bundle.archive_path}",
                detail=str(e),
            )
        )
    finally:
        if staging.exists():
            remove_tree(staging)

    journal.record("archive created")
    ctx.console.success(f"Created archive: {bundle.archive_path}")
    return Ok(bundle)
