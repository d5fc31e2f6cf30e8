from __future__ import annotations

# Release creation uploads the archive
GH_UPLOAD_TIMEOUT_SECONDS = 15 * 60.0

# The build toolchain runs until it finishes or the operator interrupts it
BUILD_TIMEOUT_SECONDS: float | None = None
