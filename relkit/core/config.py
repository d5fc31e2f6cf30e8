"""Typed release configuration.

The optional ``release.toml`` at the project root describes what is built and
shipped. Every key has a default so a bare Rust project needs no file at all.

Example::

    [project]
    binary = "rpizerow-epaper-display"

    [build]
    target = "aarch64-unknown-linux-gnu"

    [release]
    assets = [
        "target/{target}/release/{binary}",
        "config/config.example.json",
        "README.md",
        "LICENSE",
    ]
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "ReleaseConfig",
    "load_config",
]

CONFIG_FILE_NAME = "release.toml"

DEFAULT_MANIFEST = "Cargo.toml"
DEFAULT_LOCK = "Cargo.lock"
DEFAULT_TARGET = "aarch64-unknown-linux-gnu"
DEFAULT_BUILD_COMMAND = ("cargo", "build", "--release", "--target", "{target}")
DEFAULT_OUTPUT_DIR = "release-bundles"
DEFAULT_REMOTE = "origin"
DEFAULT_BRANCHES = ("main", "master")
DEFAULT_TOOLS = ("git", "cargo", "gh")
DEFAULT_ASSETS = ("target/{target}/release/{binary}", "README.md", "LICENSE")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Resolved release settings.

    Placeholders (``{target}``, ``{binary}``, ``{arch}``) in ``build_command``
    and ``assets`` are already expanded.

    Attributes:
        binary: Name of the produced executable, also the archive prefix.
        manifest: Manifest file holding ``version = "X.Y.Z"``.
        lock: Companion lock file, committed alongside the manifest.
        target: Compiler target triple.
        arch: Architecture label used in the archive name.
        build_command: Command that compiles the release binary.
        output_dir: Directory (relative to the project root) receiving archives.
        remote: Git remote that branch and tag are pushed to.
        branches: Branches a release may be cut from without confirmation.
        tools: Executables that must be on PATH.
        assets: Files bundled into the archive, in staging order.
    """

    binary: str
    manifest: str = DEFAULT_MANIFEST
    lock: str = DEFAULT_LOCK
    target: str = DEFAULT_TARGET
    arch: str = "aarch64"
    build_command: tuple[str, ...] = ()
    output_dir: str = DEFAULT_OUTPUT_DIR
    remote: str = DEFAULT_REMOTE
    branches: tuple[str, ...] = DEFAULT_BRANCHES
    tools: tuple[str, ...] = DEFAULT_TOOLS
    assets: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, object], *, default_binary: str) -> ReleaseConfig:
        """Create a config from parsed TOML, filling defaults."""
        project: StrDict = get_table(data, "project") or {}
        build: StrDict = get_table(data, "build") or {}
        release: StrDict = get_table(data, "release") or {}

        binary = get_str(project, "binary") or default_binary
        target = get_str(build, "target") or DEFAULT_TARGET
        arch = get_str(build, "arch") or arch_from_target(target)
        values = {"target": target, "binary": binary, "arch": arch}

        command = get_str_list(build, "command") or list(DEFAULT_BUILD_COMMAND)
        assets = get_str_list(release, "assets") or list(DEFAULT_ASSETS)

        return cls(
            binary=binary,
            manifest=get_str(project, "manifest") or DEFAULT_MANIFEST,
            lock=get_str(project, "lock") or DEFAULT_LOCK,
            target=target,
            arch=arch,
            build_command=tuple(part.format(**values) for part in command),
            output_dir=get_str(release, "output_dir") or DEFAULT_OUTPUT_DIR,
            remote=get_str(release, "remote") or DEFAULT_REMOTE,
            branches=tuple(get_str_list(release, "branches") or DEFAULT_BRANCHES),
            tools=tuple(get_str_list(release, "tools") or DEFAULT_TOOLS),
            assets=tuple(asset.format(**values) for asset in assets),
        )


def arch_from_target(target: str) -> str:
    """Return the architecture component of a target triple."""
    return target.split("-", 1)[0]


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def _manifest_package_name(path: Path) -> str | None:
    """Best-effort ``[package] name`` lookup used as the default binary name."""
    if not path.is_file():
        return None
    parsed = _parse_toml(path)
    if isinstance(parsed, Err):
        return None
    package = get_table(parsed.value, "package") or {}
    return get_str(package, "name")


def load_config(
    *,
    project_root: Path,
    path: Path | None = None,
) -> Result[ReleaseConfig, ConfigError]:
    """Load release configuration for a project.

    Args:
        project_root: Directory the release runs in.
        path: Explicit config file. When None, ``release.toml`` in the project
            root is used if present; otherwise all defaults apply.

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) on failure.
    """
    data: StrDict = {}
    config_path = path if path is not None else project_root / CONFIG_FILE_NAME
    if path is not None or config_path.is_file():
        parsed = _parse_toml(config_path)
        if isinstance(parsed, Err):
            return parsed
        data = parsed.value

    project: StrDict = get_table(data, "project") or {}
    manifest = get_str(project, "manifest") or DEFAULT_MANIFEST
    default_binary = _manifest_package_name(project_root / manifest) or project_root.name

    try:
        return Ok(ReleaseConfig.from_dict(data, default_binary=default_binary))
    except (KeyError, IndexError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=config_path))
