"""Logging utilities for bitsyparser.

Provides color-coded output to distinguish skipped content, warnings and
results while parsing or encoding game data.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI color codes for terminal output."""

    # Colors for message types
    BLUE = "\033[94m"      # Parse progress (records, dialect)
    YELLOW = "\033[93m"    # Warnings (duplicate ids)
    RED = "\033[91m"       # Errors
    GREEN = "\033[92m"     # Success/completion
    CYAN = "\033[96m"      # Info (skipped content)

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if BITSY_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("BITSY_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def log_deterministic(message: str) -> None:
    """Log parse progress (blue)."""
    print(colored(f"{EMOJI_DETERMINISTIC} {message}", Color.BLUE))


def log_warning(message: str) -> None:
    """Log a recoverable oddity in the input (yellow)."""
    print(colored(f"{EMOJI_WARNING} {message}", Color.YELLOW))


def log_error(message: str) -> None:
    """Log an error (red)."""
    print(colored(f"{EMOJI_ERROR} {message}", Color.RED))


def log_success(message: str) -> None:
    """Log a success (green)."""
    print(colored(f"{EMOJI_SUCCESS} {message}", Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(f"{EMOJI_INFO} {message}", Color.CYAN))


# Markers for message types (color-blind accessible)
EMOJI_DETERMINISTIC = "[•]"  # Parse progress
EMOJI_WARNING = "[?]"        # Warning
EMOJI_ERROR = "[!]"          # Error
EMOJI_SUCCESS = "[✓]"        # Success
EMOJI_INFO = "[i]"           # Information
