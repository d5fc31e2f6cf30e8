"""Release contexts wired to a capturing console."""

from __future__ import annotations

from pathlib import Path

import pytest

from relkit.core.config import ReleaseConfig, load_config
from relkit.core.result import Ok
from relkit.output.console import MockConsole
from relkit.services.release.model import Confirm, ReleaseContext


def refuse_prompts(prompt: str) -> bool:
    pytest.fail(f"unexpected confirmation prompt: {prompt}")


def make_context(
    root: Path,
    *,
    config: ReleaseConfig | None = None,
    confirm: Confirm = refuse_prompts,
) -> tuple[ReleaseContext, MockConsole]:
    """Context for ``root``; config comes from its release.toml unless given."""
    if config is None:
        loaded = load_config(project_root=root)
        assert isinstance(loaded, Ok), loaded
        config = loaded.value
    console = MockConsole()
    ctx = ReleaseContext(project_root=root, config=config, console=console, confirm=confirm)
    return ctx, console
