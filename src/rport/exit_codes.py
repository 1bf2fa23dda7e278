"""Process exit codes for the rport CLI."""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit status of an rport run."""

    SUCCESS = 0
    STORE_OPEN_FAILURE = 1
    STORE_READ_FAILURE = 2
    STORE_WRITE_FAILURE = 3
    UNABLE_TO_CREATE_CHANNEL = 5
    NO_IDENTITY = 6
    DECODE_FAILURE = 7
