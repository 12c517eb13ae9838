"""
Round Trip - Parse a save file and write it back
=================================================

WHAT THIS SHOWS:
- Parsing a save file into a World
- Reading records out of the World's collections
- Editing the World and rendering it again
- Checking that an untouched World reproduces its input exactly

RUN:
    python -m examples.roundtrip.run [path/to/game.bitsy]

Set BITSY_DEBUG_PARSE=1 to see skipped blocks and duplicate ids as they are
found.
"""

import sys
from pathlib import Path

from bitsyparser import BitsyParseError, Variable, parse_text
from bitsyparser.config import Config
from bitsyparser.logging_utils import log_error, log_info, log_success, log_warning

DEFAULT_GAME = Path(__file__).resolve().parents[2] / "tests" / "data" / "default_4_6.bitsy"


def main() -> int:
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_GAME
    text = path.read_text(encoding="utf-8")

    print(Config.display())
    print()

    # ========================================================================
    # STEP 1: Parse
    # ========================================================================
    try:
        world = parse_text(text)
    except BitsyParseError as exc:
        log_error(f"{path.name}: {exc}")
        return 1

    log_info(f"{world.title!r} (version {world.version}, room format {world.room_format})")
    log_info(
        f"{len(world.rooms)} room(s), {len(world.tiles)} tile(s), "
        f"{len(world.sprites)} sprite(s), {len(world.items)} item(s), "
        f"{len(world.dialogues)} dialogue(s)"
    )

    for room in world.rooms.values():
        label = room.name or room.id
        log_info(f"  room {label}: {len(room.exits)} exit(s), {len(room.items)} item(s)")

    # ========================================================================
    # STEP 2: Write back untouched
    # ========================================================================
    if world.to_string() == text:
        log_success("Re-encoded text matches the input byte for byte")
    else:
        # Inputs with unknown blocks or non-canonical spacing differ here
        log_warning("Re-encoded text differs from the input")

    # ========================================================================
    # STEP 3: Edit and render
    # ========================================================================
    edited = world.model_copy(deep=True)
    edited.variables["visits"] = Variable(id="visits", value="0")

    print()
    print("\n".join(edited.to_lines()[-2:]))
    return 0


if __name__ == "__main__":
    sys.exit(main())
