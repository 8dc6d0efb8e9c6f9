from __future__ import annotations

import pytest

from supforced import HEADER_SIZE, MalformedData, SegmentType, TruncatedStream, read_segment
from sup_builders import END, PCS, segment


def test_read_segment_fields(make_reader):
    reader = make_reader(segment(PCS, b"\x00" * 11, pts=900_000, dts=12345))
    seg = read_segment(reader)
    assert seg.offset == 0
    assert seg.pts == 900_000
    assert seg.pts_seconds == pytest.approx(10.0)
    assert seg.dts == 12345
    assert seg.type == SegmentType.PCS
    assert seg.type_name == "PCS"
    assert seg.size == 11
    assert reader.position() == HEADER_SIZE == seg.body_offset
    assert seg.end_offset == HEADER_SIZE + 11


def test_unknown_type_is_kept(make_reader):
    seg = read_segment(make_reader(segment(0x42)))
    assert seg.type == 0x42
    assert seg.type_name == "0x42"


def test_offset_is_header_start(make_reader):
    data = segment(END) + segment(END, b"\x00\x00")
    reader = make_reader(data)
    read_segment(reader)
    seg = read_segment(reader)
    assert seg.offset == HEADER_SIZE
    assert seg.end_offset == len(data)


def test_bad_magic(make_reader):
    with pytest.raises(MalformedData) as excinfo:
        read_segment(make_reader(segment(END, magic=b"PX")))
    assert excinfo.value.offset == 1


def test_short_header(make_reader):
    with pytest.raises(TruncatedStream):
        read_segment(make_reader(segment(END)[:-1]))
