"""
bitsyparser - lossless reader/writer for Bitsy game data.

Parse a save file into pydantic models and write it back byte for byte,
across the engine's save-format dialects from 2.2 through 8.0.

No file I/O and no global state: callers supply lines (or text) and get a
World back; ``World.to_string()`` renders it again.
"""

__version__ = "0.1.0"

# Entry points
from .parser import BitsyParser, parse_lines, parse_text
from .encoders import (
    encode_world,
    encode_palette,
    encode_room,
    encode_tile,
    encode_sprite,
    encode_item,
    encode_dialogue,
    encode_ending,
    encode_variable,
    encode_tune,
)

# Dialects
from .dialect import DialectFlags, DialectHeader, resolve_dialect, default_palette_index
from .cursor import LineCursor
from .keywords import ObjectKind, RecordKind

# Errors
from .errors import (
    BitsyParseError,
    MissingVersionMarkerError,
    UnexpectedEndOfInputError,
    MalformedNumericFieldError,
    DuplicateIdError,
)

# World schemas
from .schemas import (
    World,
    Resource,
    GameObject,
    AnyObject,
    Tile,
    Sprite,
    Item,
    Palette,
    Room,
    Exit,
    Placement,
    Position,
    Dialogue,
    Ending,
    Variable,
    Tune,
)

__all__ = [
    # Entry points
    "BitsyParser",
    "parse_lines",
    "parse_text",
    "encode_world",
    "encode_palette",
    "encode_room",
    "encode_tile",
    "encode_sprite",
    "encode_item",
    "encode_dialogue",
    "encode_ending",
    "encode_variable",
    "encode_tune",
    # Dialects
    "DialectFlags",
    "DialectHeader",
    "resolve_dialect",
    "default_palette_index",
    "LineCursor",
    "ObjectKind",
    "RecordKind",
    # Errors
    "BitsyParseError",
    "MissingVersionMarkerError",
    "UnexpectedEndOfInputError",
    "MalformedNumericFieldError",
    "DuplicateIdError",
    # World schemas
    "World",
    "Resource",
    "GameObject",
    "AnyObject",
    "Tile",
    "Sprite",
    "Item",
    "Palette",
    "Room",
    "Exit",
    "Placement",
    "Position",
    "Dialogue",
    "Ending",
    "Variable",
    "Tune",
]
