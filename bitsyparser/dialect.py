"""
Dialect resolution for Bitsy game data.

The save format changed across engine versions 2.2 through 8.0. Rather than
comparing version numbers wherever behavior diverges, the header is resolved
once per parse into a ``DialectFlags`` value that decoders and encoders
consult.

Header layout (8.0 shown; earlier dialects omit some directives):

    My Game Title

    # BITSY VERSION 8.0

    ! VER_MAJ 8
    ! VER_MIN 0
    ! ROOM_FORMAT 1
    ! DLG_COMPAT 0
    ! TXT_MODE 0

Version-dependent behavior:
- ``! ROOM_FORMAT`` is declared from major 4 onward.
- ``! VER_MAJ``/``! VER_MIN`` and ``! DLG_COMPAT``/``! TXT_MODE`` are declared
  from major 8 onward.
- A palette's NAME line precedes its colors before major 8 and follows them
  from major 8 onward.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from . import keywords
from .cursor import LineCursor
from .errors import MalformedNumericFieldError, MissingVersionMarkerError
from .keywords import ObjectKind

_INTEGER = re.compile(r"[+-]?[0-9]+")
_DIGITS = re.compile(r"[0-9]+")

# Palette index an object uses when its record has no COL line
PALETTE_INDEX_DEFAULTS: Dict[ObjectKind, int] = {
    ObjectKind.TILE: 1,
    ObjectKind.SPRITE: 2,
    ObjectKind.ITEM: 2,
}

DEFAULT_ROOM_FORMAT = 1


def default_palette_index(kind: ObjectKind) -> int:
    return PALETTE_INDEX_DEFAULTS[kind]


@dataclass(frozen=True)
class DialectFlags:
    """Resolved per-dialect behavior, computed once per parse or encode."""

    major: int
    minor: int = 0
    room_format: int = DEFAULT_ROOM_FORMAT
    dlg_compat: int = 0
    txt_mode: int = 0

    @property
    def declares_room_format(self) -> bool:
        return self.major >= 4

    @property
    def declares_version_numbers(self) -> bool:
        return self.major >= 8

    @property
    def declares_text_flags(self) -> bool:
        return self.major >= 8

    @property
    def palette_name_after_colors(self) -> bool:
        return self.major >= 8

    @property
    def comma_separated_rows(self) -> bool:
        return self.room_format >= 1


@dataclass(frozen=True)
class DialectHeader:
    """Everything the resolver extracts before the first record."""

    title: str
    version: str
    flags: DialectFlags


def parse_int(
    text: str,
    field: str,
    *,
    line_number: Optional[int] = None,
    line: Optional[str] = None,
) -> int:
    """Parse a base-10 integer (optional sign, ASCII digits only).

    Raises:
        MalformedNumericFieldError: If ``text`` is anything else.
    """

    if not _INTEGER.fullmatch(text):
        raise MalformedNumericFieldError(field, text, line_number=line_number, line=line)
    return int(text)


def split_version(version: str) -> Tuple[int, int]:
    """Split ``"major.minor"`` into integers.

    A missing or non-numeric part yields 0, so ``"7"`` is (7, 0) and
    ``"5.x"`` is (5, 0).
    """

    parts = version.split(".")

    def _part(index: int) -> int:
        if index >= len(parts):
            return 0
        text = parts[index].strip()
        return int(text) if _DIGITS.fullmatch(text) else 0

    return _part(0), _part(1)


def resolve_dialect(cursor: LineCursor) -> DialectHeader:
    """Consume the header lines and resolve the dialect.

    Reads the title (the literal first line), scans forward for the version
    marker, then consumes the blank and ``!`` directive lines that follow it.
    The cursor is left on the first line of the first record.

    Raises:
        MissingVersionMarkerError: If no version line exists.
        MalformedNumericFieldError: If a known directive has a non-integer value.
    """

    if cursor.at_end:
        raise MissingVersionMarkerError("empty input has no version marker", line_number=1)

    title = cursor.consume()

    while not cursor.starts_with(keywords.VERSION_MARKER):
        if cursor.at_end:
            raise MissingVersionMarkerError(
                f"no {keywords.VERSION_MARKER.strip()!r} line found",
                line_number=cursor.line_number,
            )
        cursor.consume()

    version = cursor.consume()[len(keywords.VERSION_MARKER):]

    directives: Dict[str, int] = {}
    while not cursor.at_end and (cursor.is_blank() or cursor.starts_with(keywords.DIRECTIVE_PREFIX)):
        line = cursor.consume()
        if not line.strip():
            continue
        name, _, value = line[len(keywords.DIRECTIVE_PREFIX):].strip().partition(" ")
        if name in (
            keywords.VER_MAJ,
            keywords.VER_MIN,
            keywords.ROOM_FORMAT,
            keywords.DLG_COMPAT,
            keywords.TXT_MODE,
        ):
            directives[name] = parse_int(
                value.strip(), name, line_number=cursor.last_line_number, line=line
            )

    major, minor = split_version(version.strip())
    flags = DialectFlags(
        major=directives.get(keywords.VER_MAJ, major),
        minor=directives.get(keywords.VER_MIN, minor),
        room_format=directives.get(keywords.ROOM_FORMAT, DEFAULT_ROOM_FORMAT),
        dlg_compat=directives.get(keywords.DLG_COMPAT, 0),
        txt_mode=directives.get(keywords.TXT_MODE, 0),
    )
    return DialectHeader(title=title, version=version, flags=flags)

