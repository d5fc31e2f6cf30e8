"""Exit codes for the release CLI.

Every fatal release failure maps to the same non-zero status; callers that need
to know *why* a release failed read the diagnostic printed on standard error.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    FAILURE = 1
