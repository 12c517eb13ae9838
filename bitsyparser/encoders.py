"""
Encoders for Bitsy game data.

Each ``encode_*`` function is the exact inverse of its decoder: it renders one
record as a list of lines, writing an optional field only when its value
differs from the default the decoder would reconstruct. ``encode_world``
assembles the whole document:

    <title>
    <blank>
    # BITSY VERSION <version>
    <blank>
    <directive block, if the dialect declares any>
    <blank>
    <record>
    <blank>
    <record>
    ...

Blocks are joined by single blank lines; an empty collection contributes no
lines at all.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from . import keywords
from .colors import pack_rgb, rgb_to_string
from .dialect import DialectFlags, default_palette_index
from .keywords import ObjectKind, RecordKind
from .schemas import (
    FRAME_SIZE,
    Dialogue,
    Ending,
    Exit,
    GameObject,
    Item,
    Palette,
    Placement,
    Room,
    Sprite,
    Tile,
    Tune,
    Variable,
    World,
)


# ============================================================================
# Shared pieces
# ============================================================================


def _line(keyword: str, value: object) -> str:
    return f"{keyword} {value}"


def _optional(keyword: str, value: str) -> List[str]:
    return [_line(keyword, value)] if value else []


def encode_frame(frame: List[bool]) -> List[str]:
    """Render 64 cells as 8 rows of ``1``/``0``."""
    return [
        "".join("1" if cell else "0" for cell in frame[row * FRAME_SIZE:(row + 1) * FRAME_SIZE])
        for row in range(FRAME_SIZE)
    ]


def encode_graphic(graphic: List[List[bool]]) -> List[str]:
    lines: List[str] = []
    for index, frame in enumerate(graphic):
        if index > 0:
            lines.append(keywords.FRAME_SEPARATOR)
        lines.extend(encode_frame(frame))
    return lines


def _object_head(obj: GameObject) -> List[str]:
    lines = [_line(ObjectKind(obj.kind).value, obj.id)]
    lines.extend(encode_graphic(obj.graphic))
    lines.extend(_optional(keywords.NAME, obj.name))
    return lines


def _object_palette(obj: GameObject) -> List[str]:
    lines = []
    if obj.palette != default_palette_index(obj.kind):
        lines.append(_line(keywords.PALETTE_INDEX, obj.palette))
    if obj.background != 0:
        lines.append(_line(keywords.BACKGROUND, obj.background))
    return lines


def _coords(x: int, y: int) -> str:
    return f"{x},{y}"


# ============================================================================
# Per-kind encoders
# ============================================================================


def encode_palette(palette: Palette, flags: DialectFlags) -> List[str]:
    lines = [_line(RecordKind.PALETTE.value, palette.id)]
    name = _optional(keywords.NAME, palette.name)
    if not flags.palette_name_after_colors:
        lines.extend(name)
    for index, rgb in enumerate(palette.colors):
        lines.append(str(pack_rgb(rgb)) if palette.is_packed(index) else rgb_to_string(rgb))
    if flags.palette_name_after_colors:
        lines.extend(name)
    return lines


def encode_tile(tile: Tile, flags: DialectFlags) -> List[str]:
    lines = _object_head(tile)
    if tile.wall:
        lines.append(_line(keywords.WALL, "true"))
    lines.extend(_object_palette(tile))
    return lines


def encode_sprite(sprite: Sprite, flags: DialectFlags) -> List[str]:
    lines = _object_head(sprite)
    lines.extend(_optional(keywords.DIALOGUE, sprite.dialogue_id))
    if sprite.position is not None:
        position = sprite.position
        lines.append(_line(keywords.POSITION, f"{position.room} {_coords(position.x, position.y)}"))
    lines.extend(_object_palette(sprite))
    lines.extend(_optional(keywords.BLIP, sprite.blip))
    return lines


def encode_item(item: Item, flags: DialectFlags) -> List[str]:
    lines = _object_head(item)
    lines.extend(_optional(keywords.DIALOGUE, item.dialogue_id))
    lines.extend(_object_palette(item))
    lines.extend(_optional(keywords.BLIP, item.blip))
    return lines


def encode_exit(exit_: Exit) -> str:
    """FX is written before DLG unless the exit was read DLG first."""
    destination = exit_.destination
    parts = [
        _coords(exit_.x, exit_.y),
        destination.room,
        _coords(destination.x, destination.y),
    ]
    options = []
    if exit_.transition:
        options.append([keywords.TRANSITION, exit_.transition])
    if exit_.dialogue_id:
        options.append([keywords.DIALOGUE, exit_.dialogue_id])
    if exit_.dialogue_first:
        options.reverse()
    for option in options:
        parts.extend(option)
    return _line(keywords.EXIT, " ".join(parts))


def _placement(keyword: str, placement: Placement) -> str:
    return _line(keyword, f"{placement.id} {_coords(placement.x, placement.y)}")


def encode_room(room: Room, flags: DialectFlags) -> List[str]:
    separator = "," if flags.comma_separated_rows else ""
    lines = [_line(RecordKind.ROOM.value, room.id)]
    lines.extend(separator.join(row) for row in room.tiles)
    lines.extend(_optional(keywords.NAME, room.name))
    lines.extend(_line(keywords.WALL, ",".join(walls)) for walls in room.walls)
    lines.extend(_placement(keywords.ITEM, item) for item in room.items)
    lines.extend(encode_exit(exit_) for exit_ in room.exits)
    lines.extend(_placement(keywords.ENDING, ending) for ending in room.endings)
    lines.extend(_optional(keywords.PALETTE, room.palette))
    lines.extend(_optional(keywords.AVATAR, room.avatar))
    lines.extend(_optional(keywords.TUNE, room.tune))
    return lines


def encode_dialogue(dialogue: Dialogue, flags: DialectFlags) -> List[str]:
    lines = [_line(RecordKind.DIALOGUE.value, dialogue.id)]
    lines.extend(dialogue.script.split("\n"))
    lines.extend(_optional(keywords.NAME, dialogue.name))
    return lines


def encode_ending(ending: Ending, flags: DialectFlags) -> List[str]:
    return [_line(RecordKind.ENDING.value, ending.id), *ending.script.split("\n")]


def encode_variable(variable: Variable, flags: DialectFlags) -> List[str]:
    return [_line(RecordKind.VARIABLE.value, variable.id), variable.value]


def encode_tune(tune: Tune, flags: DialectFlags) -> List[str]:
    return [_line(RecordKind.TUNE.value, tune.id), *tune.lines]


# ============================================================================
# World
# ============================================================================


def encode_header(world: World, flags: DialectFlags) -> List[List[str]]:
    """Title, version marker and directive blocks."""
    blocks = [[world.title], [f"{keywords.VERSION_MARKER}{world.version}"]]

    directives: List[str] = []
    if flags.declares_version_numbers:
        directives.append(f"{keywords.DIRECTIVE_PREFIX} {keywords.VER_MAJ} {flags.major}")
        directives.append(f"{keywords.DIRECTIVE_PREFIX} {keywords.VER_MIN} {flags.minor}")
    if flags.declares_room_format:
        directives.append(f"{keywords.DIRECTIVE_PREFIX} {keywords.ROOM_FORMAT} {flags.room_format}")
    if flags.declares_text_flags:
        directives.append(f"{keywords.DIRECTIVE_PREFIX} {keywords.DLG_COMPAT} {flags.dlg_compat}")
        directives.append(f"{keywords.DIRECTIVE_PREFIX} {keywords.TXT_MODE} {flags.txt_mode}")
    if directives:
        blocks.append(directives)
    return blocks


def encode_records(world: World, flags: DialectFlags) -> Iterable[List[str]]:
    """Yield every record's lines in collection declaration order."""
    for palette in world.palettes.values():
        yield encode_palette(palette, flags)
    for room in world.rooms.values():
        yield encode_room(room, flags)
    for tile in world.tiles.values():
        yield encode_tile(tile, flags)
    for sprite in world.sprites.values():
        yield encode_sprite(sprite, flags)
    for item in world.items.values():
        yield encode_item(item, flags)
    for dialogue in world.dialogues.values():
        yield encode_dialogue(dialogue, flags)
    for ending in world.endings.values():
        yield encode_ending(ending, flags)
    for variable in world.variables.values():
        yield encode_variable(variable, flags)
    for tune in world.tunes.values():
        yield encode_tune(tune, flags)


def encode_world(world: World, flags: Optional[DialectFlags] = None) -> List[str]:
    """Render a World as save-file lines (no trailing newline entry).

    Args:
        world: World to render.
        flags: Dialect to render in. Defaults to the world's own header.
    """
    flags = flags or world.flags
    blocks = encode_header(world, flags)
    blocks.extend(encode_records(world, flags))

    lines: List[str] = []
    for index, block in enumerate(blocks):
        if index > 0:
            lines.append("")
        lines.extend(block)
    return lines
