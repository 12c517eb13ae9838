"""
Record dispatcher: turns save-file lines into a World.

Parsing happens in one forward pass over a ``LineCursor``:
1. ``resolve_dialect`` consumes the header (title, version, directives)
2. The dispatch loop tokenizes the current line into (keyword, remainder)
3. A record keyword hands the cursor to the matching decoder, and the built
   record is stored in its collection under its id
4. Anything else is skipped up to and including the next blank line, so
   record kinds from newer engines (or stray notes) do not break parsing

Skipped content is not kept; encoding a parsed World never reproduces it.

Usage:
    world = parse_text(Path("game.bitsy").read_text(encoding="utf-8"))
    assert world.to_string() == original_text
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence

from .config import Config
from .cursor import LineCursor
from .decoders import DECODERS
from .dialect import resolve_dialect
from .errors import BitsyParseError, DuplicateIdError
from .keywords import RECORD_KEYWORDS, RecordKind
from .logging_utils import log_deterministic, log_error, log_info, log_success, log_warning
from .schemas import Resource, World

# World attribute holding each record kind
COLLECTIONS: Dict[RecordKind, str] = {
    RecordKind.PALETTE: "palettes",
    RecordKind.ROOM: "rooms",
    RecordKind.TILE: "tiles",
    RecordKind.SPRITE: "sprites",
    RecordKind.ITEM: "items",
    RecordKind.DIALOGUE: "dialogues",
    RecordKind.ENDING: "endings",
    RecordKind.VARIABLE: "variables",
    RecordKind.TUNE: "tunes",
}


class BitsyParser:
    """Parse Bitsy game data into a World.

    A parser instance holds no state between calls; every ``parse`` owns its
    own cursor and collections, and only hands back a World once every
    record has been decoded.

    Duplicate ids:
    - Default: the later record replaces the earlier one (keeping the earlier
      one's position in the collection), matching how the engine loads games
    - ``strict=True``: raise DuplicateIdError instead

    Args:
        strict: Reject duplicate ids. Defaults to Config.STRICT_IDS.
        debug: Log skipped content and duplicates. Defaults to Config.DEBUG_PARSE.
    """

    def __init__(self, *, strict: Optional[bool] = None, debug: Optional[bool] = None):
        self.strict = Config.STRICT_IDS if strict is None else strict
        self.debug = Config.DEBUG_PARSE if debug is None else debug

    def parse(self, lines: Sequence[str]) -> World:
        """Parse an ordered sequence of lines (terminators already stripped).

        Raises:
            MissingVersionMarkerError: No version line in the input.
            UnexpectedEndOfInputError: A frame, room grid or script block is cut off.
            MalformedNumericFieldError: An integer or coordinate field is invalid.
            DuplicateIdError: Strict mode only.
        """
        try:
            return self._parse(LineCursor(lines))
        except BitsyParseError as exc:
            if self.debug:
                log_error(f"Parse failed: {exc}")
            raise

    def _parse(self, cursor: LineCursor) -> World:
        header = resolve_dialect(cursor)
        flags = header.flags
        if self.debug:
            log_deterministic(
                f"Dialect {header.version!r}: major={flags.major} minor={flags.minor} "
                f"room_format={flags.room_format}"
            )

        collections: Dict[RecordKind, Dict[str, Resource]] = {kind: {} for kind in RecordKind}

        while not cursor.at_end:
            keyword, _ = cursor.peek_keyword()
            kind = RECORD_KEYWORDS.get(keyword)

            if kind is None:
                start = cursor.line_number
                skipped = cursor.skip_to_blank()
                if self.debug and skipped:
                    log_info(f"Skipped {skipped} unrecognized line(s) starting at line {start}")
                continue

            start = cursor.line_number
            start_line = cursor.peek()
            record = DECODERS[kind](cursor, flags)
            self._store(collections[kind], kind, record, start, start_line)

            if not cursor.is_blank():
                field_line = cursor.line_number
                skipped = cursor.skip_to_blank()
                if self.debug:
                    log_info(
                        f"Skipped {skipped} unrecognized field line(s) of {kind.value} "
                        f"{record.id!r} at line {field_line}"
                    )

        world = World(
            title=header.title,
            version=header.version,
            major=flags.major,
            minor=flags.minor,
            room_format=flags.room_format,
            dlg_compat=flags.dlg_compat,
            txt_mode=flags.txt_mode,
            **{COLLECTIONS[kind]: records for kind, records in collections.items()},
        )
        if self.debug:
            log_success(f"Parsed {world.record_count()} record(s)")
        return world

    def _store(
        self,
        collection: Dict[str, Resource],
        kind: RecordKind,
        record: Resource,
        line_number: int,
        line: Optional[str],
    ) -> None:
        if record.id in collection:
            if self.strict:
                raise DuplicateIdError(
                    COLLECTIONS[kind], record.id, line_number=line_number, line=line
                )
            if self.debug:
                log_warning(
                    f"Duplicate {kind.value} id {record.id!r} at line {line_number} "
                    "replaces the earlier record"
                )
        collection[record.id] = record


def parse_lines(lines: Sequence[str], *, strict: Optional[bool] = None) -> World:
    """Convenience function to parse pre-split lines."""
    return BitsyParser(strict=strict).parse(lines)


def parse_text(text: str, *, strict: Optional[bool] = None) -> World:
    """Parse a whole save file.

    Normalizes ``\\r\\n`` to ``\\n`` before splitting; a trailing newline
    produces a final empty line, which the dispatcher ignores.
    """
    return parse_lines(text.replace("\r\n", "\n").split("\n"), strict=strict)
