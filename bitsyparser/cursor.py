"""Forward-only reader over the input lines.

The cursor knows nothing about record grammar. Decoders share one cursor per
parse and advance it as they consume their record's lines; there is no
backtracking beyond one line of lookahead.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from .errors import UnexpectedEndOfInputError
from .keywords import split_keyword


class LineCursor:
    """Single pass over an ordered list of lines."""

    def __init__(self, lines: Sequence[str]):
        self._lines = list(lines)
        self._index = 0

    @property
    def at_end(self) -> bool:
        return self._index >= len(self._lines)

    @property
    def line_number(self) -> int:
        """1-based number of the current (not yet consumed) line."""
        return self._index + 1

    @property
    def last_line_number(self) -> int:
        """1-based number of the most recently consumed line."""
        return self._index

    @property
    def last_line(self) -> Optional[str]:
        """The most recently consumed line, for error context."""
        if self._index == 0:
            return None
        return self._lines[self._index - 1]

    def peek(self) -> Optional[str]:
        """Return the current line, or None at end of input."""
        if self.at_end:
            return None
        return self._lines[self._index]

    def peek_keyword(self) -> Optional[Tuple[str, str]]:
        """Tokenize the current line into ``(keyword, remainder)``."""
        line = self.peek()
        if line is None:
            return None
        return split_keyword(line)

    def consume(self, expecting: str = "line") -> str:
        """Return the current line and advance past it.

        Raises:
            UnexpectedEndOfInputError: If already at end of input. ``expecting``
                names the construct being read for the error message.
        """
        if self.at_end:
            raise UnexpectedEndOfInputError(
                f"unexpected end of input while reading {expecting}",
                line_number=self.line_number,
            )
        line = self._lines[self._index]
        self._index += 1
        return line

    def is_blank(self) -> bool:
        """True at end of input or on an empty/whitespace-only line."""
        line = self.peek()
        return line is None or not line.strip()

    def starts_with(self, token: str) -> bool:
        line = self.peek()
        return line is not None and line.startswith(token)

    def skip_to_blank(self) -> int:
        """Consume lines up to and including the next blank line.

        Returns the number of non-blank lines skipped.
        """
        skipped = 0
        while not self.is_blank():
            self.consume()
            skipped += 1
        if not self.at_end:
            self.consume()
        return skipped
