"""
Record decoders for Bitsy game data.

Each ``decode_*`` function consumes exactly the lines of one record from the
shared cursor and returns the built model. All decoders share the signature
``(cursor, flags) -> model`` so the dispatcher can keep them in one table.

Optional fields are detected by their leading keyword and must appear in the
order each decoder reads them. Absent fields take their defaults:

    TIL a                 <- take_id
    11111111              <- take_graphic (8 rows per frame,
    10000001                 frames separated by a ">" line)
    ...
    NAME block            <- try_take_name
    WAL true              <- try_take_wall
    COL 2                 <- try_take_palette_index (default per kind)
    BGC *                 <- try_take_background ("*" means transparent)
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Tuple

from . import keywords
from .colors import RGB, unpack_rgb
from .cursor import LineCursor
from .dialect import DialectFlags, default_palette_index, parse_int
from .errors import MalformedNumericFieldError
from .keywords import ObjectKind, RecordKind
from .schemas import (
    FRAME_SIZE,
    ROOM_SIZE,
    BackgroundOverride,
    Dialogue,
    Ending,
    Exit,
    Item,
    Palette,
    Placement,
    Position,
    Resource,
    Room,
    Sprite,
    Tile,
    Tune,
    Variable,
)


# ============================================================================
# Shared sub-operations
# ============================================================================


def _take_field(cursor: LineCursor, token: str) -> Optional[str]:
    """Consume the current line if its keyword is ``token``; return the remainder."""
    current = cursor.peek_keyword()
    if current is None or current[0] != token:
        return None
    cursor.consume()
    return current[1]


def _take_repeated(cursor: LineCursor, token: str) -> List[Tuple[str, str, int]]:
    """Consume consecutive lines keyed by ``token``.

    Returns (remainder, raw line, line number) for each, so callers can report
    parse errors against the right line.
    """
    taken = []
    while True:
        line = cursor.peek()
        remainder = _take_field(cursor, token)
        if remainder is None:
            return taken
        taken.append((remainder, line, cursor.last_line_number))


def _int(cursor: LineCursor, text: str, field: str) -> int:
    return parse_int(text, field, line_number=cursor.last_line_number, line=cursor.last_line)


def parse_coords(
    text: str,
    field: str,
    *,
    line_number: Optional[int] = None,
    line: Optional[str] = None,
) -> Tuple[int, int]:
    """Parse an ``x,y`` pair."""
    parts = text.split(",")
    if len(parts) != 2:
        raise MalformedNumericFieldError(field, text, line_number=line_number, line=line)
    x = parse_int(parts[0], f"{field} x", line_number=line_number, line=line)
    y = parse_int(parts[1], f"{field} y", line_number=line_number, line=line)
    return x, y


def take_id(cursor: LineCursor) -> str:
    """Consume ``<KEYWORD> <id>`` and return the id."""
    _, resource_id = keywords.split_keyword(cursor.consume("record id"))
    return resource_id


def try_take_name(cursor: LineCursor, current: str = "") -> str:
    name = _take_field(cursor, keywords.NAME)
    return current if name is None else name


def take_frame(cursor: LineCursor) -> List[bool]:
    """Decode 8 rows of ``0``/``1`` into 64 cells, row-major."""
    cells: List[bool] = []
    for _ in range(FRAME_SIZE):
        row = cursor.consume("graphic frame row")
        cells.extend(row[column:column + 1] == "1" for column in range(FRAME_SIZE))
    return cells


def take_graphic(cursor: LineCursor) -> List[List[bool]]:
    graphic = [take_frame(cursor)]
    while cursor.peek() == keywords.FRAME_SEPARATOR:
        cursor.consume()
        graphic.append(take_frame(cursor))
    return graphic


def try_take_palette_index(cursor: LineCursor, kind: ObjectKind) -> int:
    value = _take_field(cursor, keywords.PALETTE_INDEX)
    if value is None:
        return default_palette_index(kind)
    return _int(cursor, value, "palette index")


def try_take_background(cursor: LineCursor) -> BackgroundOverride:
    value = _take_field(cursor, keywords.BACKGROUND)
    if value is None:
        return 0
    if value == keywords.TRANSPARENT:
        return keywords.TRANSPARENT
    return _int(cursor, value, "background override")


def try_take_dialogue_id(cursor: LineCursor) -> str:
    return _take_field(cursor, keywords.DIALOGUE) or ""


def try_take_blip(cursor: LineCursor) -> str:
    return _take_field(cursor, keywords.BLIP) or ""


def try_take_wall(cursor: LineCursor) -> bool:
    return _take_field(cursor, keywords.WALL) == "true"


def try_take_position(cursor: LineCursor) -> Optional[Position]:
    value = _take_field(cursor, keywords.POSITION)
    if value is None:
        return None
    room, _, coords = value.partition(" ")
    x, y = parse_coords(
        coords, "position", line_number=cursor.last_line_number, line=cursor.last_line
    )
    return Position(room=room, x=x, y=y)


def take_script(cursor: LineCursor) -> str:
    """Read a single-line script or a triple-quoted block.

    A block keeps both delimiter lines verbatim, joined with newlines.
    """
    first = cursor.consume("script")
    if first != keywords.SCRIPT_BLOCK_DELIMITER:
        return first

    lines = [first]
    while True:
        line = cursor.consume(f"closing {keywords.SCRIPT_BLOCK_DELIMITER} of script block")
        lines.append(line)
        if line == keywords.SCRIPT_BLOCK_DELIMITER:
            return "\n".join(lines)


def parse_color(text: str, *, line_number: Optional[int] = None) -> Tuple[RGB, bool]:
    """Parse ``r,g,b`` or a single packed integer.

    Returns the triple and whether it was packed.
    """
    if "," not in text:
        packed = parse_int(text, "packed color", line_number=line_number, line=text)
        return unpack_rgb(packed), True

    parts = text.split(",")
    if len(parts) != 3:
        raise MalformedNumericFieldError("color", text, line_number=line_number, line=text)
    r, g, b = (
        parse_int(part, f"{channel} channel", line_number=line_number, line=text)
        for channel, part in zip("rgb", parts)
    )
    return (r, g, b), False


# ============================================================================
# Per-kind decoders
# ============================================================================


def decode_palette(cursor: LineCursor, flags: DialectFlags) -> Palette:
    """Colors run until a blank line or a NAME line.

    NAME is accepted both before and after the colors whatever the dialect;
    which position is written back is decided by ``flags`` at encode time.
    """
    palette_id = take_id(cursor)
    name = try_take_name(cursor)

    colors: List[RGB] = []
    packed: List[bool] = []
    while not cursor.is_blank() and not cursor.starts_with(keywords.NAME):
        text = cursor.consume()
        rgb, was_packed = parse_color(text, line_number=cursor.last_line_number)
        colors.append(rgb)
        packed.append(was_packed)

    name = try_take_name(cursor, name)
    return Palette(
        id=palette_id, name=name, colors=colors, packed=packed if any(packed) else []
    )


def decode_tile(cursor: LineCursor, flags: DialectFlags) -> Tile:
    tile_id = take_id(cursor)
    graphic = take_graphic(cursor)
    return Tile(
        id=tile_id,
        graphic=graphic,
        name=try_take_name(cursor),
        wall=try_take_wall(cursor),
        palette=try_take_palette_index(cursor, ObjectKind.TILE),
        background=try_take_background(cursor),
    )


def decode_sprite(cursor: LineCursor, flags: DialectFlags) -> Sprite:
    sprite_id = take_id(cursor)
    graphic = take_graphic(cursor)
    return Sprite(
        id=sprite_id,
        graphic=graphic,
        name=try_take_name(cursor),
        dialogue_id=try_take_dialogue_id(cursor),
        position=try_take_position(cursor),
        palette=try_take_palette_index(cursor, ObjectKind.SPRITE),
        background=try_take_background(cursor),
        blip=try_take_blip(cursor),
    )


def decode_item(cursor: LineCursor, flags: DialectFlags) -> Item:
    item_id = take_id(cursor)
    graphic = take_graphic(cursor)
    return Item(
        id=item_id,
        graphic=graphic,
        name=try_take_name(cursor),
        dialogue_id=try_take_dialogue_id(cursor),
        palette=try_take_palette_index(cursor, ObjectKind.ITEM),
        background=try_take_background(cursor),
        blip=try_take_blip(cursor),
    )


def split_row(row: str, flags: DialectFlags) -> List[str]:
    if flags.comma_separated_rows:
        return row.split(",")
    return list(row)


def _placement(remainder: str, line: str, line_number: int, field: str) -> Placement:
    placed_id, _, coords = remainder.partition(" ")
    x, y = parse_coords(coords, field, line_number=line_number, line=line)
    return Placement(id=placed_id, x=x, y=y)


def parse_exit(remainder: str, *, line_number: Optional[int] = None, line: Optional[str] = None) -> Exit:
    """Parse ``x,y room x,y`` followed by optional ``FX id`` / ``DLG id`` pairs.

    The trailing pairs are found by keyword, so either order is accepted; a
    DLG pair read before an FX pair is flagged so it is written back first.
    """
    tokens = remainder.split(" ")
    origin = tokens[0]
    room = tokens[1] if len(tokens) > 1 else ""
    target = tokens[2] if len(tokens) > 2 else ""

    x, y = parse_coords(origin, "exit origin", line_number=line_number, line=line)
    dest_x, dest_y = parse_coords(target, "exit destination", line_number=line_number, line=line)

    transition = ""
    dialogue_id = ""
    dialogue_first = False
    rest = tokens[3:]
    index = 0
    while index < len(rest):
        token = rest[index]
        has_value = index + 1 < len(rest)
        if token == keywords.TRANSITION and has_value:
            transition = rest[index + 1]
            index += 2
        elif token == keywords.DIALOGUE and has_value:
            dialogue_id = rest[index + 1]
            dialogue_first = not transition
            index += 2
        else:
            index += 1

    return Exit(
        x=x,
        y=y,
        destination=Position(room=room, x=dest_x, y=dest_y),
        transition=transition,
        dialogue_id=dialogue_id,
        dialogue_first=dialogue_first and bool(transition),
    )


def decode_room(cursor: LineCursor, flags: DialectFlags) -> Room:
    room_id = take_id(cursor)
    tiles = [split_row(cursor.consume("room row"), flags) for _ in range(ROOM_SIZE)]
    name = try_take_name(cursor)

    walls = [remainder.split(",") for remainder, _, _ in _take_repeated(cursor, keywords.WALL)]

    items = [
        _placement(remainder, line, number, "item position")
        for remainder, line, number in _take_repeated(cursor, keywords.ITEM)
    ]
    exits = [
        parse_exit(remainder, line_number=number, line=line)
        for remainder, line, number in _take_repeated(cursor, keywords.EXIT)
    ]
    endings = [
        _placement(remainder, line, number, "ending position")
        for remainder, line, number in _take_repeated(cursor, keywords.ENDING)
    ]

    return Room(
        id=room_id,
        name=name,
        tiles=tiles,
        walls=walls,
        items=items,
        exits=exits,
        endings=endings,
        palette=_take_field(cursor, keywords.PALETTE) or "",
        avatar=_take_field(cursor, keywords.AVATAR) or "",
        tune=_take_field(cursor, keywords.TUNE) or "",
    )


def decode_dialogue(cursor: LineCursor, flags: DialectFlags) -> Dialogue:
    dialogue_id = take_id(cursor)
    script = take_script(cursor)
    return Dialogue(id=dialogue_id, script=script, name=try_take_name(cursor))


def decode_ending(cursor: LineCursor, flags: DialectFlags) -> Ending:
    ending_id = take_id(cursor)
    return Ending(id=ending_id, script=take_script(cursor))


def decode_variable(cursor: LineCursor, flags: DialectFlags) -> Variable:
    variable_id = take_id(cursor)
    return Variable(id=variable_id, value=cursor.consume("variable value"))


def decode_tune(cursor: LineCursor, flags: DialectFlags) -> Tune:
    tune_id = take_id(cursor)
    lines: List[str] = []
    while not cursor.is_blank():
        lines.append(cursor.consume())
    return Tune(id=tune_id, lines=lines)


Decoder = Callable[[LineCursor, DialectFlags], Resource]

DECODERS: Dict[RecordKind, Decoder] = {
    RecordKind.PALETTE: decode_palette,
    RecordKind.ROOM: decode_room,
    RecordKind.TILE: decode_tile,
    RecordKind.SPRITE: decode_sprite,
    RecordKind.ITEM: decode_item,
    RecordKind.DIALOGUE: decode_dialogue,
    RecordKind.ENDING: decode_ending,
    RecordKind.VARIABLE: decode_variable,
    RecordKind.TUNE: decode_tune,
}
