from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Tuple

from .composition import CompositionRecord, Sprite, read_composition, read_sprites
from .errors import MalformedData
from .reader import ByteReader
from .segments import Segment, SegmentType, read_segment

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedSegment:
    segment: Segment
    composition: CompositionRecord | None = None
    sprites: Tuple[Sprite, ...] = ()

    @property
    def forced_count(self) -> int:
        return sum(1 for sprite in self.sprites if sprite.forced)


@dataclass(frozen=True)
class ForcedCount:
    forced: int = 0
    total: int = 0

    def __add__(self, other: "ForcedCount") -> "ForcedCount":
        if not isinstance(other, ForcedCount):
            return NotImplemented
        return ForcedCount(self.forced + other.forced, self.total + other.total)

    def __str__(self) -> str:
        return f"{self.forced} {self.total}"


def iter_segments(reader: ByteReader, *, strict: bool = False) -> Iterator[DecodedSegment]:
    """
    Walk the stream segment by segment until EOF lands on a segment boundary.

    PCS bodies are decoded (composition record plus ``sprite_count`` sprites);
    all other bodies are skipped. After each segment the reader is moved to the
    end offset declared by the header, whatever the body decode consumed, so a
    PCS whose records disagree with its size does not desynchronise the rest of
    the stream. With ``strict`` a PCS whose records run past the declared body
    is rejected instead.
    """

    while reader.has_more():
        segment = read_segment(reader)
        next_offset = reader.position() + segment.size
        composition = None
        sprites: Tuple[Sprite, ...] = ()
        if segment.type == SegmentType.PCS:
            composition = read_composition(reader)
            sprites = read_sprites(reader, composition.sprite_count)
            consumed = reader.position()
            if consumed > next_offset and strict:
                raise MalformedData(
                    f"{reader.name}: PCS @offset {segment.offset} declares {segment.size} body bytes "
                    f"but its {composition.sprite_count} sprites need {composition.body_size}",
                    offset=segment.offset,
                )
            if consumed != next_offset:
                log.debug(
                    "%s: PCS @offset %d size=%d decoded=%d, resyncing to %d",
                    reader.name,
                    segment.offset,
                    segment.size,
                    composition.body_size,
                    next_offset,
                )
        reader.skip_to(next_offset)
        log.debug("%s: %s @offset %d size=%d", reader.name, segment.type_name, segment.offset, segment.size)
        yield DecodedSegment(segment=segment, composition=composition, sprites=sprites)


def count_forced(reader: ByteReader, *, strict: bool = False) -> ForcedCount:
    """Return the forced and total composition object counts for the whole stream."""

    forced = 0
    total = 0
    for decoded in iter_segments(reader, strict=strict):
        if decoded.composition is None:
            continue
        total += decoded.composition.sprite_count
        forced += decoded.forced_count
    return ForcedCount(forced=forced, total=total)
