"""Tests for header parsing and per-dialect flags."""

import pytest

from bitsyparser.cursor import LineCursor
from bitsyparser.dialect import (
    DialectFlags,
    default_palette_index,
    resolve_dialect,
    split_version,
)
from bitsyparser.errors import MalformedNumericFieldError, MissingVersionMarkerError
from bitsyparser.keywords import ObjectKind


def test_resolves_4_6_header():
    cursor = LineCursor([
        "Write your game's title here",
        "",
        "# BITSY VERSION 4.6",
        "",
        "! ROOM_FORMAT 1",
        "",
        "PAL 0",
    ])

    header = resolve_dialect(cursor)

    assert header.title == "Write your game's title here"
    assert header.version == "4.6"
    assert header.flags.major == 4
    assert header.flags.minor == 6
    assert header.flags.room_format == 1
    assert header.flags.dlg_compat == 0
    assert header.flags.txt_mode == 0
    # The cursor is left on the first record
    assert cursor.peek() == "PAL 0"

    assert header.flags.declares_room_format
    assert not header.flags.declares_text_flags
    assert not header.flags.palette_name_after_colors


def test_resolves_8_0_header_with_text_directives():
    cursor = LineCursor([
        "forest",
        "",
        "# BITSY VERSION 8.0",
        "",
        "! VER_MAJ 8",
        "! VER_MIN 0",
        "! ROOM_FORMAT 1",
        "! DLG_COMPAT 1",
        "! TXT_MODE 1",
        "",
    ])

    flags = resolve_dialect(cursor).flags

    assert (flags.major, flags.minor) == (8, 0)
    assert flags.dlg_compat == 1
    assert flags.txt_mode == 1
    assert flags.declares_version_numbers
    assert flags.declares_text_flags
    assert flags.palette_name_after_colors
    assert cursor.at_end


def test_version_directives_override_version_string():
    cursor = LineCursor([
        "title",
        "# BITSY VERSION 7.12-dev",
        "! VER_MAJ 8",
        "! VER_MIN 1",
    ])

    header = resolve_dialect(cursor)

    assert header.version == "7.12-dev"
    assert (header.flags.major, header.flags.minor) == (8, 1)


def test_version_marker_found_after_intervening_lines():
    cursor = LineCursor([
        "title",
        "a note left by the author",
        "another note",
        "# BITSY VERSION 5.0",
        "",
        "VAR a",
        "1",
    ])

    header = resolve_dialect(cursor)

    assert header.version == "5.0"
    assert header.flags.room_format == 1
    assert cursor.peek() == "VAR a"


@pytest.mark.parametrize(
    "version, expected",
    [
        ("4.6", (4, 6)),
        ("8.0", (8, 0)),
        ("7.12", (7, 12)),
        ("7", (7, 0)),
        ("5.x", (5, 0)),
        ("", (0, 0)),
    ],
)
def test_split_version_defaults_missing_parts_to_zero(version, expected):
    assert split_version(version) == expected


def test_missing_version_marker():
    with pytest.raises(MissingVersionMarkerError):
        resolve_dialect(LineCursor(["title", "", "PAL 0", "0,0,0"]))


def test_empty_input_has_no_version_marker():
    with pytest.raises(MissingVersionMarkerError):
        resolve_dialect(LineCursor([]))


def test_malformed_directive_reports_field_and_line():
    cursor = LineCursor(["title", "# BITSY VERSION 4.0", "! ROOM_FORMAT one"])

    with pytest.raises(MalformedNumericFieldError) as excinfo:
        resolve_dialect(cursor)

    assert excinfo.value.field == "ROOM_FORMAT"
    assert excinfo.value.line_number == 3
    assert "ROOM_FORMAT one" in str(excinfo.value)


def test_unknown_directive_is_ignored():
    cursor = LineCursor(["title", "# BITSY VERSION 6.0", "! SHINY_NEW_FLAG 3", "! ROOM_FORMAT 0"])

    flags = resolve_dialect(cursor).flags

    assert flags.room_format == 0
    assert not flags.comma_separated_rows


def test_palette_index_defaults_per_kind():
    assert default_palette_index(ObjectKind.TILE) == 1
    assert default_palette_index(ObjectKind.SPRITE) == 2
    assert default_palette_index(ObjectKind.ITEM) == 2


def test_legacy_dialect_declares_no_directives():
    flags = DialectFlags(major=3, minor=4)

    assert not flags.declares_room_format
    assert not flags.declares_version_numbers
    assert not flags.declares_text_flags


def test_version_string_keeps_trailing_whitespace():
    cursor = LineCursor(["title", "", "# BITSY VERSION 7.0 ", "", "VAR a"])

    header = resolve_dialect(cursor)

    assert header.version == "7.0 "
    assert (header.flags.major, header.flags.minor) == (7, 0)
