from __future__ import annotations

import io
import sys
import types

import sup_count_forced
import sup_segment_dump
from sup_builders import END, PCS, FailingStream, composition, display_set, pcs, segment


def test_prints_counts_per_file(write_sup, sample_stream, capsys):
    first = write_sup(sample_stream, "a.sup")
    second = write_sup(display_set([0x40, 0x40, 0x00]), "b.sup")
    assert sup_count_forced.main([str(first), str(second)]) == 0
    assert capsys.readouterr().out == "1 2\n2 3\n"


def test_total_line(write_sup, sample_stream, capsys):
    path = write_sup(sample_stream)
    assert sup_count_forced.main(["--total", str(path), str(path)]) == 0
    assert capsys.readouterr().out.splitlines() == ["1 2", "1 2", "2 4"]


def test_reads_stdin_without_arguments(monkeypatch, sample_stream, capsys):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(sample_stream)))
    assert sup_count_forced.main([]) == 0
    assert capsys.readouterr().out == "1 2\n"


def test_missing_input(tmp_path, capsys):
    missing = tmp_path / "missing.sup"
    assert sup_count_forced.main([str(missing)]) == 66
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "missing.sup" in captured.err


def test_failure_stops_remaining_inputs(write_sup, sample_stream, capsys):
    good = write_sup(sample_stream, "good.sup")
    bad = write_sup(b"X" + sample_stream[1:], "bad.sup")
    missing = good.parent / "never-opened.sup"
    assert sup_count_forced.main([str(good), str(bad), str(missing)]) == 65
    captured = capsys.readouterr()
    assert captured.out == "1 2\n"
    assert "bad.sup" in captured.err
    assert "@offset 0" in captured.err


def test_device_error_exit_status(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", types.SimpleNamespace(buffer=FailingStream()))
    assert sup_count_forced.main([]) == 74
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "stdin" in captured.err


def test_truncated_input_prints_nothing(write_sup, sample_stream, capsys):
    path = write_sup(sample_stream[:-5])
    assert sup_count_forced.main([str(path)]) == 65
    assert capsys.readouterr().out == ""


def test_strict_flag(write_sup, capsys):
    path = write_sup(segment(PCS, composition(1)) + segment(END) + segment(END))
    assert sup_count_forced.main([str(path)]) == 0
    assert capsys.readouterr().out == "0 1\n"
    assert sup_count_forced.main(["--strict", str(path)]) == 65


def test_segment_dump(write_sup, capsys):
    path = write_sup(display_set([0x40, 0x00], pts=90_000))
    assert sup_segment_dump.main([str(path)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 7
    assert "PCS" in lines[0] and "sprites=2" in lines[0] and "(1.000s)" in lines[0]
    assert "forced" in lines[1]
    assert "flag=0x00" in lines[2]
    assert "END" in lines[-1]


def test_segment_dump_pcs_only_with_limit(write_sup, capsys):
    path = write_sup(display_set([0x40]) + display_set([0x00]) + pcs([]))
    assert sup_segment_dump.main(["--pcs-only", "--limit", "2", str(path)]) == 0
    headers = [line for line in capsys.readouterr().out.splitlines() if not line.startswith("  ")]
    assert len(headers) == 2
    assert all("PCS" in line for line in headers)


def test_segment_dump_reports_truncation(write_sup, capsys):
    path = write_sup(display_set([0x40])[:-3])
    assert sup_segment_dump.main([str(path)]) == 65
