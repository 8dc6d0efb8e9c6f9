"""
PGS segment framing.

Every segment starts with a fixed 13-byte big-endian header:

    char[2] magic          "PG"
    uint32  pts            presentation timestamp, 90 kHz ticks
    uint32  dts            decoding timestamp, unused
    uint8   segment_type
    uint16  size           byte count of the body that follows

The body is only interpreted for presentation composition segments; every
other body is skipped using ``size``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .reader import ByteReader

MAGIC = b"PG"
HEADER_SIZE = 13
PTS_CLOCK_HZ = 90_000


class SegmentType(IntEnum):
    PDS = 0x14
    ODS = 0x15
    PCS = 0x16
    WDS = 0x17
    END = 0x80


def segment_type_name(value: int) -> str:
    try:
        return SegmentType(value).name
    except ValueError:
        return f"0x{value:02X}"


@dataclass(frozen=True)
class Segment:
    offset: int
    pts: int
    dts: int
    type: int
    size: int

    @property
    def body_offset(self) -> int:
        return self.offset + HEADER_SIZE

    @property
    def end_offset(self) -> int:
        return self.body_offset + self.size

    @property
    def type_name(self) -> str:
        return segment_type_name(self.type)

    @property
    def pts_seconds(self) -> float:
        return self.pts / PTS_CLOCK_HZ


def read_segment(reader: ByteReader) -> Segment:
    """Decode one header; the reader is left on the first byte of the body."""

    offset = reader.position()
    reader.expect(MAGIC)
    pts = reader.read_u4()
    dts = reader.read_u4()
    seg_type = reader.read_u1()
    size = reader.read_u2()
    return Segment(offset=offset, pts=pts, dts=dts, type=seg_type, size=size)
