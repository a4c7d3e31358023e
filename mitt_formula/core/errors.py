"""Error codes for CLI exit status.

Each install failure kind maps to one of these codes so that a calling
package-management host can tell a bad request from a tampered download.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (unknown version, bad config, bad arguments)
    - 2: Environment error (unsupported host platform)
    - 3: Test error (installed binary failed its self-test)
    - 4: Network error (download failed)
    - 5: I/O error (archive unreadable, binary missing, permission denied)
    - 6: Integrity error (checksum mismatch)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    TEST_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5
    INTEGRITY_ERROR = 6

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
