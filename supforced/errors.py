from __future__ import annotations

import os

# sysexits.h values; os.EX_* is missing on Windows.
EX_DATAERR = getattr(os, "EX_DATAERR", 65)
EX_NOINPUT = getattr(os, "EX_NOINPUT", 66)
EX_IOERR = getattr(os, "EX_IOERR", 74)


class SupError(Exception):
    """Base class for every fatal condition raised while reading a SUP stream."""

    exit_code = 1


class InputUnavailable(SupError):
    """The named input could not be opened."""

    exit_code = EX_NOINPUT


class IoFailure(SupError):
    """A read or seek failed at the device level."""

    exit_code = EX_IOERR


class MalformedData(SupError):
    """The stream contains bytes that do not match the expected framing."""

    exit_code = EX_DATAERR

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


class TruncatedStream(SupError):
    """The stream ended before a field or a declared body was complete."""

    exit_code = EX_DATAERR

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset
