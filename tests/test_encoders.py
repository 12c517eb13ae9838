"""Tests for the per-record encoders and world assembly."""

import pytest

from bitsyparser.dialect import DialectFlags
from bitsyparser.encoders import (
    encode_dialogue,
    encode_exit,
    encode_frame,
    encode_graphic,
    encode_item,
    encode_palette,
    encode_room,
    encode_sprite,
    encode_tile,
    encode_tune,
    encode_variable,
    encode_world,
)
from bitsyparser.schemas import (
    Dialogue,
    Exit,
    Item,
    Palette,
    Placement,
    Position,
    Room,
    Sprite,
    Tile,
    Tune,
    Variable,
    World,
    blank_frame,
)

FLAGS = DialectFlags(major=7, minor=0)
FLAGS_V8 = DialectFlags(major=8, minor=0)


def diagonal_frame():
    frame = blank_frame()
    for index in range(8):
        frame[index * 8 + index] = True
    return frame


# ---------------------------------------------------------------------------
# Frames
# ---------------------------------------------------------------------------


def test_frame_renders_eight_rows():
    rows = encode_frame(diagonal_frame())

    assert rows[0] == "10000000"
    assert rows[3] == "00010000"
    assert rows[7] == "00000001"
    assert len(rows) == 8


def test_graphic_separates_frames():
    lines = encode_graphic([blank_frame(), diagonal_frame()])

    assert len(lines) == 17
    assert lines[8] == ">"
    assert lines[9] == "10000000"


# ---------------------------------------------------------------------------
# Objects
# ---------------------------------------------------------------------------


def test_tile_omits_default_fields():
    lines = encode_tile(Tile(id="a", graphic=[blank_frame()]), FLAGS)

    assert lines[0] == "TIL a"
    assert len(lines) == 9


def test_tile_writes_non_default_fields():
    tile = Tile(id="a", name="block", graphic=[blank_frame()], wall=True, palette=3, background="*")

    assert encode_tile(tile, FLAGS)[9:] == ["NAME block", "WAL true", "COL 3", "BGC *"]


@pytest.mark.parametrize(
    "palette, expected",
    [
        (2, []),
        (1, ["COL 1"]),
        (3, ["COL 3"]),
    ],
)
def test_sprite_palette_index_written_only_when_not_default(palette, expected):
    sprite = Sprite(id="A", graphic=[blank_frame()], palette=palette)

    assert encode_sprite(sprite, FLAGS)[9:] == expected


def test_sprite_field_order():
    sprite = Sprite(
        id="a",
        name="cat",
        graphic=[blank_frame()],
        dialogue_id="SPR_0",
        position=Position(room="0", x=8, y=12),
        palette=1,
        background=2,
        blip="3",
    )

    assert encode_sprite(sprite, FLAGS)[9:] == [
        "NAME cat",
        "DLG SPR_0",
        "POS 0 8,12",
        "COL 1",
        "BGC 2",
        "BLIP 3",
    ]


def test_item_fields():
    item = Item(id="0", name="tea", graphic=[blank_frame()], dialogue_id="ITM_0", palette=1)

    assert encode_item(item, FLAGS)[9:] == ["NAME tea", "DLG ITM_0", "COL 1"]


# ---------------------------------------------------------------------------
# Palettes
# ---------------------------------------------------------------------------


def test_palette_name_precedes_colors_before_v8():
    palette = Palette(id="0", name="blue", colors=[(0, 82, 204), (255, 255, 255)])

    assert encode_palette(palette, FLAGS) == ["PAL 0", "NAME blue", "0,82,204", "255,255,255"]


def test_palette_name_follows_colors_from_v8():
    palette = Palette(id="0", name="blue", colors=[(0, 82, 204), (255, 255, 255)])

    assert encode_palette(palette, FLAGS_V8) == ["PAL 0", "0,82,204", "255,255,255", "NAME blue"]


def test_palette_without_name():
    palette = Palette(id="1", colors=[(1, 2, 3)])

    assert encode_palette(palette, FLAGS_V8) == ["PAL 1", "1,2,3"]


def test_packed_palette_is_written_packed():
    palette = Palette(id="0", colors=[(0, 82, 204), (255, 255, 255)], packed=[True, True])

    assert encode_palette(palette, DialectFlags(major=2, minor=2)) == ["PAL 0", "21196", "16777215"]


# ---------------------------------------------------------------------------
# Rooms
# ---------------------------------------------------------------------------


def test_exit_writes_transition_before_dialogue():
    exit_ = Exit(
        x=1, y=2, destination=Position(room="next", x=3, y=4), transition="fade_w", dialogue_id="creak"
    )

    assert encode_exit(exit_) == "EXT 1,2 next 3,4 FX fade_w DLG creak"


def test_exit_without_optional_fields():
    exit_ = Exit(x=0, y=15, destination=Position(room="1", x=0, y=0))

    assert encode_exit(exit_) == "EXT 0,15 1 0,0"


def test_room_default_fields():
    lines = encode_room(Room(id="0"), FLAGS)

    assert lines[0] == "ROOM 0"
    assert lines[1] == "0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0"
    assert len(lines) == 17


def test_room_rows_without_separators():
    lines = encode_room(Room(id="0"), DialectFlags(major=3, room_format=0))

    assert lines[1] == "0" * 16


def test_room_optional_fields_in_order():
    room = Room(
        id="0",
        name="hall",
        walls=[["a", "b"], ["c"]],
        items=[Placement(id="0", x=3, y=4)],
        exits=[Exit(x=15, y=7, destination=Position(room="1", x=0, y=7))],
        endings=[Placement(id="0", x=8, y=8)],
        palette="2",
        avatar="ghost",
        tune="1",
    )

    assert encode_room(room, FLAGS)[17:] == [
        "NAME hall",
        "WAL a,b",
        "WAL c",
        "ITM 0 3,4",
        "EXT 15,7 1 0,7",
        "END 0 8,8",
        "PAL 2",
        "AVA ghost",
        "TUNE 1",
    ]


# ---------------------------------------------------------------------------
# Scripts, variables, tunes
# ---------------------------------------------------------------------------


def test_block_dialogue_is_written_verbatim():
    dialogue = Dialogue(id="2", script='"""\nline one\n\nline three\n"""', name="acorn")

    assert encode_dialogue(dialogue, FLAGS) == [
        "DLG 2",
        '"""',
        "line one",
        "",
        "line three",
        '"""',
        "NAME acorn",
    ]


def test_variable_and_tune():
    assert encode_variable(Variable(id="a", value="42"), FLAGS) == ["VAR a", "42"]
    assert encode_tune(Tune(id="1", lines=["0d5,0,0", ">", "TMPO M"]), FLAGS) == [
        "TUNE 1",
        "0d5,0,0",
        ">",
        "TMPO M",
    ]


# ---------------------------------------------------------------------------
# World
# ---------------------------------------------------------------------------


def test_legacy_world_has_no_directives():
    assert World.new("t", "2.2").to_lines() == ["t", "", "# BITSY VERSION 2.2"]


def test_4_6_world_declares_room_format():
    assert World.new("t", "4.6").to_lines() == [
        "t",
        "",
        "# BITSY VERSION 4.6",
        "",
        "! ROOM_FORMAT 1",
    ]


def test_8_0_world_declares_every_directive():
    assert World.new("t", "8.0").to_lines() == [
        "t",
        "",
        "# BITSY VERSION 8.0",
        "",
        "! VER_MAJ 8",
        "! VER_MIN 0",
        "! ROOM_FORMAT 1",
        "! DLG_COMPAT 0",
        "! TXT_MODE 0",
    ]


def test_records_are_separated_by_single_blank_lines():
    world = World.new("t", "3.0")
    world.variables["a"] = Variable(id="a", value="1")
    world.variables["b"] = Variable(id="b", value="2")
    world.palettes["0"] = Palette(id="0", colors=[(0, 0, 0)])

    assert world.to_lines()[3:] == ["", "PAL 0", "0,0,0", "", "VAR a", "1", "", "VAR b", "2"]


def test_to_string_ends_with_single_newline():
    text = World.new("t", "2.2").to_string()

    assert text == "t\n\n# BITSY VERSION 2.2\n"


def test_encode_world_with_explicit_flags():
    world = World.new("t", "4.0")
    world.rooms["0"] = Room(id="0")

    lines = encode_world(world, DialectFlags(major=4, room_format=0))

    assert "! ROOM_FORMAT 0" in lines
    assert "0" * 16 in lines


def test_mixed_palette_keeps_each_color_form():
    palette = Palette(
        id="0", colors=[(0, 82, 204), (0, 0, 0), (255, 255, 255)], packed=[True, False, True]
    )

    assert encode_palette(palette, FLAGS) == ["PAL 0", "21196", "0,0,0", "16777215"]


def test_exit_read_dialogue_first_is_written_dialogue_first():
    exit_ = Exit(
        x=1,
        y=2,
        destination=Position(room="next", x=3, y=4),
        transition="fade_w",
        dialogue_id="creak",
        dialogue_first=True,
    )

    assert encode_exit(exit_) == "EXT 1,2 next 3,4 DLG creak FX fade_w"
