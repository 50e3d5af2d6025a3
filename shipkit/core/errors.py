"""Error codes for CLI exit status.

Each release failure category maps to one stable process exit code so that a
release orchestrator can tell a bad manifest from a missing build.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 2: Usage error (reported by Click for bad arguments)
    - 3: Config error (missing/invalid manifest or version)
    - 4: Precondition error (build output missing)
    - 5: I/O error (cannot create directories or write artifacts)
    """

    OK = 0
    USAGE_ERROR = 2
    CONFIG_ERROR = 3
    PRECONDITION_ERROR = 4
    IO_ERROR = 5
