"""
Sequential big-endian reader over a SUP byte source.

The reader works on file objects rather than a preloaded blob so that stdin
pipes can be walked without buffering the whole stream. Positions are always
absolute offsets from the start of the source; when the source is not
seekable (a pipe) forward seeks are emulated by reading and discarding, and
short backward seeks replay the bytes most recently read.
"""

from __future__ import annotations

import struct
import sys
from contextlib import contextmanager
from typing import BinaryIO, Iterator

from .errors import InputUnavailable, IoFailure, MalformedData, TruncatedStream

STDIN_NAME = "-"

_SKIP_CHUNK = 64 * 1024
# Bytes a non-seekable reader keeps for backward seeks; a PCS overrun is at most
# 11 + 255 * 16 bytes.
_REPLAY_LIMIT = 64 * 1024


class ByteReader:
    """Typed reads, absolute positioning and a non-consuming EOF check."""

    def __init__(self, stream: BinaryIO, name: str = "<stream>") -> None:
        self.stream = stream
        self.name = name
        # Bytes pulled from the stream that have not been handed out yet.
        self._pending = b""
        # Contiguous bytes handed out just before _pos, for seeking back on pipes.
        self._replay = bytearray()
        try:
            self._seekable = bool(stream.seekable())
        except (AttributeError, OSError, ValueError):
            self._seekable = False
        if self._seekable:
            try:
                self._pos = stream.tell()
            except OSError as exc:
                raise IoFailure(f"{name}: tell: {exc}") from exc
        else:
            self._pos = 0

    def _fill(self, size: int) -> bytes:
        """Read up to ``size`` bytes from the stream, looping over short reads."""

        chunks: list[bytes] = []
        missing = size
        while missing > 0:
            try:
                chunk = self.stream.read(missing)
            except OSError as exc:
                raise IoFailure(f"{self.name}: {exc}") from exc
            if not chunk:
                break
            chunks.append(chunk)
            missing -= len(chunk)
        return b"".join(chunks)

    def _read(self, size: int) -> bytes:
        start = self._pos
        data = self._pending[:size]
        self._pending = self._pending[size:]
        if len(data) < size:
            data += self._fill(size - len(data))
        self._pos += len(data)
        if not self._seekable:
            self._replay += data
            del self._replay[:-_REPLAY_LIMIT]
        if len(data) < size:
            raise TruncatedStream(
                f"{self.name}: unexpected end of file @offset {start} "
                f"(wanted {size} bytes, got {len(data)})",
                offset=start,
            )
        return data

    def read_u1(self) -> int:
        return self._read(1)[0]

    def read_u2(self) -> int:
        return struct.unpack(">H", self._read(2))[0]

    def read_u4(self) -> int:
        return struct.unpack(">I", self._read(4))[0]

    def expect(self, data: bytes) -> None:
        """Consume ``len(data)`` bytes and fail on the first one that differs."""

        for want in data:
            offset = self._pos
            got = self.read_u1()
            if got != want:
                raise MalformedData(
                    f"{self.name}: expected {want:#04x}, got {got:#04x} @offset {offset}",
                    offset=offset,
                )

    def position(self) -> int:
        return self._pos

    def seek(self, offset: int) -> None:
        """
        Move to an absolute offset. Landing past the end of the stream is not an
        error; the next read reports the truncation instead.
        """

        if offset < 0:
            raise ValueError(f"negative offset {offset}")
        if self._seekable:
            try:
                self.stream.seek(offset)
            except OSError as exc:
                raise IoFailure(f"{self.name}: seek to {offset}: {exc}") from exc
            self._pending = b""
            self._pos = offset
            return

        if offset < self._pos:
            back = self._pos - offset
            if back > len(self._replay):
                raise IoFailure(
                    f"{self.name}: cannot seek back from {self._pos} to {offset} on a non-seekable stream"
                )
            self._pending = bytes(self._replay[-back:]) + self._pending
            del self._replay[-back:]
            self._pos = offset
            return
        skip = offset - self._pos
        if skip:
            self._replay.clear()
        dropped = min(skip, len(self._pending))
        self._pending = self._pending[dropped:]
        skip -= dropped
        while skip > 0:
            chunk = self._fill(min(skip, _SKIP_CHUNK))
            if not chunk:
                break
            skip -= len(chunk)
        self._pos = offset

    def skip_to(self, offset: int) -> None:
        """
        Advance to ``offset`` and require that every byte before it exists, so a
        declared size running past EOF is reported rather than silently skipped.
        """

        if offset > self._pos:
            self.seek(offset - 1)
            self.read_u1()
        else:
            self.seek(offset)

    def has_more(self) -> bool:
        """Return True when at least one more byte can be read, without consuming it."""

        if self._pending:
            return True
        self._pending = self._fill(1)
        return bool(self._pending)


@contextmanager
def open_input(name: str) -> Iterator[ByteReader]:
    """
    Yield a reader for ``name`` (``-`` means standard input). Files are closed
    when the block exits, including when decoding raised; stdin is left open.
    """

    if name == STDIN_NAME:
        yield ByteReader(sys.stdin.buffer, "stdin")
        return
    try:
        handle = open(name, "rb")
    except OSError as exc:
        reason = exc.strerror or str(exc)
        raise InputUnavailable(f"{name}: {reason}") from exc
    with handle:
        yield ByteReader(handle, name)
