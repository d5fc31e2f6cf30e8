from __future__ import annotations

from relkit.core.result import Err, Ok, Result
from relkit.output.console import Style
from relkit.platform.process import run as run_process
from relkit.services.release.errors import ReleaseError
from relkit.services.release.model import ReleaseContext, ReleaseRequest
from relkit.services.release.timeouts import BUILD_TIMEOUT_SECONDS


def build_artifact(ctx: ReleaseContext, request: ReleaseRequest) -> Result[None, ReleaseError]:
    """Compile the release binary with the configured toolchain command.

    Only pass/fail matters; output is kept for the error detail.
    """
    cmd = list(ctx.config.build_command)
    ctx.console.info(f"Building release binary for {ctx.config.target}...")
    if request.dry_run:
        ctx.console.print(f"[dry-run] would run: {' '.join(cmd)}", Style.DIM)
        return Ok(None)

    ctx.console.print(" ".join(cmd), Style.DIM)
    result = run_process(cmd, cwd=ctx.project_root, timeout=BUILD_TIMEOUT_SECONDS)
    if isinstance(result, Err):
        e = result.error
        return Err(
            ReleaseError(
                kind="build_failed",
                message=f"build failed (exit {e.returncode}): {' '.join(cmd)}",
                detail=e.output_tail() or None,
            )
        )

    ctx.console.success("Build completed")
    return Ok(None)
