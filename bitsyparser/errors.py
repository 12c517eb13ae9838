"""
Error taxonomy for parsing Bitsy game data.

Every fatal condition aborts the whole parse: the caller receives a single
exception and no partially populated World. Errors carry enough context
(line number and raw line content) to diagnose a malformed save file.

Not errors:
- Unknown leading keywords are skipped up to the next blank line.
- Duplicate ids overwrite earlier records unless strict mode is enabled.
"""

from typing import Optional


class BitsyParseError(ValueError):
    """Base class for all parse failures.

    Subclasses ValueError so callers that already treat malformed input as a
    ValueError (the convention used by the loaders) keep working.
    """

    def __init__(
        self,
        message: str,
        *,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
    ):
        self.message = message
        self.line_number = line_number
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line_number is None:
            return self.message
        if self.line is None:
            return f"line {self.line_number}: {self.message}"
        return f"line {self.line_number}: {self.message} ({self.line!r})"


class MissingVersionMarkerError(BitsyParseError):
    """No `# BITSY VERSION` line was found before the end of input."""


class UnexpectedEndOfInputError(BitsyParseError):
    """A fixed-count construct ran past the last line."""


class MalformedNumericFieldError(BitsyParseError):
    """An integer or coordinate field failed to parse."""

    def __init__(
        self,
        field: str,
        value: str,
        *,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
    ):
        self.field = field
        self.value = value
        super().__init__(
            f"malformed {field}: {value!r} is not a base-10 integer",
            line_number=line_number,
            line=line,
        )


class DuplicateIdError(BitsyParseError):
    """Raised in strict mode when an id repeats within one collection."""

    def __init__(
        self,
        collection: str,
        resource_id: str,
        *,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
    ):
        self.collection = collection
        self.resource_id = resource_id
        super().__init__(
            f"duplicate id {resource_id!r} in {collection}",
            line_number=line_number,
            line=line,
        )
