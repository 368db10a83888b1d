"""Process exit codes.

Every failure exits with ``USER_ERROR``, whether the release itself failed
or the tool could not start it (bad --repo, unreadable config).
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    USER_ERROR = 1
