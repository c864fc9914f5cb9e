"""Exit codes for the rlz command line.

Values are used as process exit codes and must remain stable:
- 0: Success
- 1: User error (bad arguments)
- 2: Configuration error (unreadable, unknown field, invalid value)
- 3: Git error (no repository, no origin, unparsable remote URL)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
    GIT_ERROR = 3
