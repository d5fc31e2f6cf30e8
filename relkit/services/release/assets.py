from __future__ import annotations

from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.output.console import ConsoleProtocol, Style
from relkit.services.release.errors import ReleaseError


def verify_assets(
    *,
    project_root: Path,
    assets: tuple[str, ...],
    console: ConsoleProtocol,
) -> Result[tuple[Path, ...], ReleaseError]:
    """Check each asset exists, in declaration order, stopping at the first gap.

    Returns:
        Ok(absolute paths) in the same order as ``assets``.
    """
    console.info("Verifying release assets...")
    found: list[Path] = []
    for asset in assets:
        path = project_root / asset
        if not path.is_file():
            return Err(
                ReleaseError(
                    kind="asset_missing",
                    message=f"Required asset not found: {asset}",
                    detail=(
                        f"Expected at: {path.absolute()}\n"
                        "Build the release binary first, or check that all required files exist."
                    ),
                )
            )
        console.print(f"  found {asset}", Style.DIM)
        found.append(path)

    console.success("All assets verified")
    return Ok(tuple(found))
