"""Thin wrappers over the operating system: processes and files."""

from relkit.platform.files import atomic_write_text
from relkit.platform.process import ProcessError, run

__all__ = ["ProcessError", "atomic_write_text", "run"]
