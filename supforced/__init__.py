"""
Read-only helpers for PGS (.sup) subtitle streams: segment framing, presentation
composition records and forced-object statistics.
"""

from .composition import (
    COMPOSITION_SIZE,
    SPRITE_SIZE,
    CompositionRecord,
    CompositionState,
    PaletteUpdate,
    Sprite,
    SpriteFlag,
    read_composition,
    read_sprite,
    read_sprites,
)
from .errors import InputUnavailable, IoFailure, MalformedData, SupError, TruncatedStream
from .reader import STDIN_NAME, ByteReader, open_input
from .segments import HEADER_SIZE, MAGIC, Segment, SegmentType, read_segment, segment_type_name
from .walker import DecodedSegment, ForcedCount, count_forced, iter_segments

__all__ = [
    "COMPOSITION_SIZE",
    "SPRITE_SIZE",
    "CompositionRecord",
    "CompositionState",
    "PaletteUpdate",
    "Sprite",
    "SpriteFlag",
    "read_composition",
    "read_sprite",
    "read_sprites",
    "SupError",
    "InputUnavailable",
    "IoFailure",
    "MalformedData",
    "TruncatedStream",
    "STDIN_NAME",
    "ByteReader",
    "open_input",
    "HEADER_SIZE",
    "MAGIC",
    "Segment",
    "SegmentType",
    "read_segment",
    "segment_type_name",
    "DecodedSegment",
    "ForcedCount",
    "count_forced",
    "iter_segments",
]
