from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .reader import ByteReader

# width(2) height(2) reserved(1) comp_id(2) state(1) palette_update(1) palette_id(1) sprite_count(1)
COMPOSITION_SIZE = 11
# object_id(2) window_id(1) flag(1) then six uint16 position/size fields
SPRITE_SIZE = 16


class CompositionState(IntEnum):
    NORMAL = 0x00
    ACQUISITION_POINT = 0x40
    EPOCH_START = 0x80


class PaletteUpdate(IntEnum):
    NO = 0x00
    YES = 0x80


class SpriteFlag(IntEnum):
    NORMAL = 0x00
    FORCED = 0x40


@dataclass(frozen=True)
class CompositionRecord:
    width: int
    height: int
    composition_id: int
    state: int
    palette_update: int
    palette_id: int
    sprite_count: int

    @property
    def body_size(self) -> int:
        """Bytes this record and its sprites occupy inside the segment body."""
        return COMPOSITION_SIZE + SPRITE_SIZE * self.sprite_count


@dataclass(frozen=True)
class Sprite:
    object_id: int
    window_id: int
    flag: int
    target_h: int
    target_v: int
    source_h: int
    source_v: int
    width: int
    height: int

    @property
    def forced(self) -> bool:
        return self.flag == SpriteFlag.FORCED


def read_composition(reader: ByteReader) -> CompositionRecord:
    """
    Decode the fixed prefix of a PCS body. Enumerated fields are returned as
    raw ints so reserved values survive untouched.
    """

    width = reader.read_u2()
    height = reader.read_u2()
    reader.read_u1()  # reserved
    composition_id = reader.read_u2()
    state = reader.read_u1()
    palette_update = reader.read_u1()
    palette_id = reader.read_u1()
    sprite_count = reader.read_u1()
    return CompositionRecord(
        width=width,
        height=height,
        composition_id=composition_id,
        state=state,
        palette_update=palette_update,
        palette_id=palette_id,
        sprite_count=sprite_count,
    )


def read_sprite(reader: ByteReader) -> Sprite:
    object_id = reader.read_u2()
    window_id = reader.read_u1()
    flag = reader.read_u1()
    target_h = reader.read_u2()
    target_v = reader.read_u2()
    source_h = reader.read_u2()
    source_v = reader.read_u2()
    width = reader.read_u2()
    height = reader.read_u2()
    return Sprite(
        object_id=object_id,
        window_id=window_id,
        flag=flag,
        target_h=target_h,
        target_v=target_v,
        source_h=source_h,
        source_v=source_v,
        width=width,
        height=height,
    )


def read_sprites(reader: ByteReader, count: int) -> tuple[Sprite, ...]:
    return tuple(read_sprite(reader) for _ in range(count))
