"""Subprocess execution for the release tools.

git, the build toolchain and gh are all started through :func:`run`. Output is
captured and a failed or unstartable command comes back as :class:`ProcessError`
so callers can turn it into a release failure with the tool's own message.

    result = run(["cargo", "build", "--release"], cwd=root)
    if isinstance(result, Err):
        print(result.error.output_tail())
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run"]

# Return code reported when no exit status exists (spawn failure, timeout).
NOT_RUN = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that exited non-zero, timed out or could not start.

    Attributes:
        command: argv as executed.
        returncode: Exit status, or ``NOT_RUN``.
        stdout: Captured standard output.
        stderr: Captured standard error, or the reason the command never ran.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        shown = " ".join(self.command[:3])
        if len(self.command) > 3:
            shown += " ..."
        return f"{shown} failed (exit {self.returncode})"

    def output_tail(self, lines: int = 20) -> str:
        """Last lines of stderr, falling back to stdout."""
        text = self.stderr.strip() or self.stdout.strip()
        return "\n".join(text.splitlines()[-lines:])


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run ``cmd`` in ``cwd`` and return its stdout.

    ``timeout`` is in seconds; None waits for as long as the command runs.
    """
    argv = tuple(cmd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        partial = e.stdout if isinstance(e.stdout, str) else ""
        return Err(ProcessError(argv, NOT_RUN, partial, f"Command timed out after {timeout}s"))
    except OSError as e:
        return Err(ProcessError(argv, NOT_RUN, "", str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(argv, proc.returncode, proc.stdout, proc.stderr))
    return Ok(proc.stdout)
