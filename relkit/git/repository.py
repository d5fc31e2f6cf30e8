"""Git repository abstraction.

The release pipeline only ever talks to git through :class:`Repository`.
Queries are never cached: each check re-reads the live repository so a
decision always reflects the state right before the action that follows it.

Usage:
    repo = Repository(Path("/path/to/project"))

    match repo.state():
        case Ok(state):
            if not state.is_clean:
                print(state.porcelain())
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.platform.process import ProcessError
from relkit.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

__all__ = [
    "GitError",
    "Repository",
    "RepositoryState",
    "StatusEntry",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed (e.g. "commit").
        message: Error message, usually git's stderr.
        returncode: Process return code.
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single ``git status --porcelain`` line.

    Attributes:
        xy: Two-character status code (e.g., "M ", " M", "??")
        path: File path
    """

    xy: str
    path: str

    def __str__(self) -> str:
        return f"{self.xy} {self.path}"


@dataclass(frozen=True, slots=True)
class RepositoryState:
    """Read-only snapshot of the working tree.

    Attributes:
        branch: Current branch, None when HEAD is detached.
        entries: Pending changes (staged, unstaged and untracked).
    """

    branch: str | None
    entries: tuple[StatusEntry, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        return len(self.entries) == 0

    def porcelain(self) -> str:
        """Pending changes rendered the way ``git status --porcelain`` prints them."""
        return "\n".join(str(e) for e in self.entries)


class Repository:
    """Operations on a single git working tree.

    Attributes:
        path: Path to the repository root.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    # -- queries -------------------------------------------------------------

    def state(self) -> Result[RepositoryState, GitError]:
        """Snapshot branch and pending changes."""
        result = self._run(["status", "--porcelain"])
        if isinstance(result, Err):
            return Err(self._error("status", result.error, "git status failed"))

        entries = tuple(
            entry for line in result.value.splitlines() if (entry := _parse_entry(line))
        )
        return Ok(RepositoryState(branch=self.current_branch(), entries=entries))

    def current_branch(self) -> str | None:
        """Current branch name, or None if detached or unknown."""
        result = self._run(["branch", "--show-current"])
        match result:
            case Ok(stdout):
                return stdout.strip() or None
            case Err(_):
                return None

    def ref_exists(self, ref: str) -> bool:
        """True if ``ref`` resolves to an object in the local repository."""
        return isinstance(self._run(["rev-parse", "--verify", "--quiet", ref]), Ok)

    def ref_commit(self, ref: str) -> str | None:
        """Commit id that ``ref`` points at (peeling annotated tags)."""
        result = self._run(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"])
        if isinstance(result, Err):
            return None
        return result.value.strip() or None

    def ref_date(self, ref: str) -> str | None:
        """Committer date of ``ref`` in ``git log --format=%ci`` form."""
        result = self._run(["log", "-1", "--format=%ci", ref])
        if isinstance(result, Err):
            return None
        return result.value.strip() or None

    def previous_tag(self, rev: str) -> str | None:
        """Nearest tag reachable from ``rev``, or None if there is none."""
        result = self._run(["describe", "--tags", "--abbrev=0", rev])
        if isinstance(result, Err):
            return None
        return result.value.strip() or None

    def log_summaries(self, since: str, until: str = "HEAD") -> Result[list[str], GitError]:
        """One-line subjects of non-merge commits in ``since..until``, git log order."""
        result = self._run(["log", f"{since}..{until}", "--pretty=format:%s", "--no-merges"])
        if isinstance(result, Err):
            return Err(self._error("log", result.error, "git log failed"))
        return Ok([line for line in result.value.splitlines() if line.strip()])

    # -- mutations -----------------------------------------------------------

    def add(self, paths: list[str]) -> Result[None, GitError]:
        return self._mutate(["add", "--", *paths], "add")

    def commit(self, message: str) -> Result[None, GitError]:
        return self._mutate(["commit", "-m", message], "commit")

    def create_annotated_tag(self, tag: str, message: str) -> Result[None, GitError]:
        return self._mutate(["tag", "-a", tag, "-m", message], "tag")

    def push(self, remote: str, ref: str) -> Result[None, GitError]:
        return self._mutate(["push", remote, ref], "push")

    # -- internals -----------------------------------------------------------

    def _mutate(self, args: list[str], command: str) -> Result[None, GitError]:
        result = self._run(args)
        if isinstance(result, Err):
            return Err(self._error(command, result.error, f"git {command} failed"))
        return Ok(None)

    def _error(self, command: str, e: ProcessError, fallback: str) -> GitError:
        return GitError(
            command=command,
            message=e.stderr.strip() or e.stdout.strip() or fallback,
            returncode=e.returncode,
        )

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS
            if command in {"fetch", "pull", "push"}
            else _GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)


def _parse_entry(line: str) -> StatusEntry | None:
    """Parse a single porcelain v1 line: ``XY path``."""
    if len(line) < 4:
        return None
    return StatusEntry(xy=line[:2], path=line[3:])
