#!/usr/bin/env python3
"""
Print the segment layout of a PGS (.sup) stream, one line per segment.

PCS segments are expanded with their composition fields and one indented line
per sprite so forced objects can be located by timestamp. Read-only.
"""

from __future__ import annotations

import argparse
import itertools
import logging
from pathlib import Path
from typing import Sequence

from supforced import (
    STDIN_NAME,
    CompositionRecord,
    CompositionState,
    DecodedSegment,
    PaletteUpdate,
    SegmentType,
    Sprite,
    SupError,
    iter_segments,
    open_input,
)
from supforced.logging import setup_logging

log = logging.getLogger("sup_segment_dump")


def _enum_name(enum_cls, value: int) -> str:
    try:
        return enum_cls(value).name.lower()
    except ValueError:
        return f"0x{value:02X}"


def describe_composition(record: CompositionRecord) -> str:
    parts = [
        f"{record.width}x{record.height}",
        f"comp_id={record.composition_id}",
        f"state={_enum_name(CompositionState, record.state)}",
        f"palette_update={_enum_name(PaletteUpdate, record.palette_update)}",
        f"palette_id={record.palette_id}",
        f"sprites={record.sprite_count}",
    ]
    return " | ".join(parts)


def describe_sprite(index: int, sprite: Sprite) -> str:
    marker = "forced" if sprite.forced else f"flag=0x{sprite.flag:02X}"
    return (
        f"  sprite[{index:02}] obj={sprite.object_id} win={sprite.window_id} {marker} "
        f"target=({sprite.target_h},{sprite.target_v}) "
        f"source=({sprite.source_h},{sprite.source_v}) size={sprite.width}x{sprite.height}"
    )


def describe_segment(decoded: DecodedSegment) -> list[str]:
    segment = decoded.segment
    header = " | ".join(
        [
            f"off=0x{segment.offset:08X}",
            f"{segment.type_name:<4}",
            f"pts={segment.pts} ({segment.pts_seconds:.3f}s)",
            f"size={segment.size}",
        ]
    )
    lines = [header]
    if decoded.composition is not None:
        lines[0] += " | " + describe_composition(decoded.composition)
        for idx, sprite in enumerate(decoded.sprites):
            lines.append(describe_sprite(idx, sprite))
    return lines


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dump the segment layout of a .sup stream.")
    parser.add_argument("input", nargs="?", default=STDIN_NAME, help="PGS stream ('-' for stdin, the default)")
    parser.add_argument("--limit", type=int, default=None, help="Maximum number of segments to print")
    parser.add_argument("--pcs-only", action="store_true", help="Only print presentation composition segments")
    parser.add_argument("--strict", action="store_true", help="Reject PCS records that overrun their segment")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging on stderr")
    parser.add_argument("--log-file", type=Path, help="Also write the log to this file")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_file)
    try:
        with open_input(args.input) as reader:
            segments = iter_segments(reader, strict=args.strict)
            if args.pcs_only:
                segments = (d for d in segments if d.segment.type == SegmentType.PCS)
            if args.limit is not None:
                segments = itertools.islice(segments, args.limit)
            for decoded in segments:
                for line in describe_segment(decoded):
                    print(line)
    except SupError as exc:
        log.error("%s", exc)
        return exc.exit_code
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
