"""Keyword tables for the Bitsy game data format.

Every line of a record starts with an uppercase token identifying its record
or field kind. Lines are tokenized once into ``(keyword, remainder)`` so the
dispatcher's decision table stays explicit.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class RecordKind(str, Enum):
    """Top-level record keywords, in World declaration order."""

    PALETTE = "PAL"
    ROOM = "ROOM"
    TILE = "TIL"
    SPRITE = "SPR"
    ITEM = "ITM"
    DIALOGUE = "DLG"
    ENDING = "END"
    VARIABLE = "VAR"
    TUNE = "TUNE"


class ObjectKind(str, Enum):
    """Variants of the drawable object family."""

    TILE = "TIL"
    SPRITE = "SPR"
    ITEM = "ITM"


RECORD_KEYWORDS = {kind.value: kind for kind in RecordKind}

# Field tokens inside a record
NAME = "NAME"
PALETTE_INDEX = "COL"
BACKGROUND = "BGC"
DIALOGUE = "DLG"
WALL = "WAL"
POSITION = "POS"
BLIP = "BLIP"
ITEM = "ITM"
EXIT = "EXT"
ENDING = "END"
PALETTE = "PAL"
AVATAR = "AVA"
TUNE = "TUNE"
TRANSITION = "FX"

FRAME_SEPARATOR = ">"
SCRIPT_BLOCK_DELIMITER = '"""'
TRANSPARENT = "*"

# Header tokens
VERSION_MARKER = "# BITSY VERSION "
DIRECTIVE_PREFIX = "!"
ROOM_FORMAT = "ROOM_FORMAT"
DLG_COMPAT = "DLG_COMPAT"
TXT_MODE = "TXT_MODE"
VER_MAJ = "VER_MAJ"
VER_MIN = "VER_MIN"


def split_keyword(line: str) -> Tuple[str, str]:
    """Split a line once on the first space into ``(keyword, remainder)``.

    A line without a space is all keyword with an empty remainder.
    """

    keyword, _, remainder = line.partition(" ")
    return keyword, remainder
