"""Tests for the forward-only line cursor."""

import pytest

from bitsyparser.cursor import LineCursor
from bitsyparser.errors import UnexpectedEndOfInputError


def test_consume_advances_and_tracks_line_numbers():
    cursor = LineCursor(["PAL 0", "0,0,0"])

    assert cursor.peek() == "PAL 0"
    assert cursor.line_number == 1
    assert cursor.last_line is None

    assert cursor.consume() == "PAL 0"
    assert cursor.last_line_number == 1
    assert cursor.last_line == "PAL 0"
    assert cursor.peek() == "0,0,0"

    cursor.consume()
    assert cursor.at_end
    assert cursor.peek() is None
    assert cursor.peek_keyword() is None


def test_consume_at_end_names_the_construct():
    cursor = LineCursor([])

    with pytest.raises(UnexpectedEndOfInputError) as excinfo:
        cursor.consume("room row")

    assert "room row" in str(excinfo.value)
    assert excinfo.value.line_number == 1


def test_is_blank_covers_whitespace_and_end_of_input():
    cursor = LineCursor(["", "   ", "TIL a"])

    assert cursor.is_blank()
    cursor.consume()
    assert cursor.is_blank()
    cursor.consume()
    assert not cursor.is_blank()
    cursor.consume()
    assert cursor.is_blank()


def test_peek_keyword_splits_once():
    cursor = LineCursor(["NAME example room", "WAL"])

    assert cursor.peek_keyword() == ("NAME", "example room")
    assert cursor.starts_with("NAM")
    cursor.consume()
    assert cursor.peek_keyword() == ("WAL", "")


def test_skip_to_blank_consumes_the_blank_line():
    cursor = LineCursor(["FONT big", "0110", "", "PAL 0"])

    assert cursor.skip_to_blank() == 2
    assert cursor.peek() == "PAL 0"


def test_skip_to_blank_stops_at_end_of_input():
    cursor = LineCursor(["FONT big", "0110"])

    assert cursor.skip_to_blank() == 2
    assert cursor.at_end
