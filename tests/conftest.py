from __future__ import annotations

import io

import pytest

from supforced import ByteReader
from sup_builders import END, pcs, segment


@pytest.fixture
def make_reader():
    def _make(data: bytes, name: str = "test.sup") -> ByteReader:
        return ByteReader(io.BytesIO(data), name)

    return _make


@pytest.fixture
def sample_stream() -> bytes:
    """One PCS (body size 45) with a forced and a normal sprite followed by END."""
    return pcs([0x40, 0x00], padding=b"\x00\x00") + segment(END)


@pytest.fixture
def write_sup(tmp_path):
    def _write(data: bytes, name: str = "track.sup"):
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _write
