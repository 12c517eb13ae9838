"""
bitsyparser Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _env_flag(name: str, default: str = "") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Config:
    """Parser configuration loaded from environment variables."""

    # Raise DuplicateIdError instead of letting the last record win
    STRICT_IDS: bool = _env_flag("BITSY_STRICT_IDS")

    # Log skipped blocks, skipped fields and duplicate ids while parsing
    DEBUG_PARSE: bool = _env_flag("BITSY_DEBUG_PARSE")

    # Version stamped on worlds created with World.new()
    DEFAULT_VERSION: str = os.getenv("BITSY_DEFAULT_VERSION", "8.0")

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "bitsyparser Configuration:",
            f"  Strict IDs: {cls.STRICT_IDS}",
            f"  Debug Parse: {cls.DEBUG_PARSE}",
            f"  Default Version: {cls.DEFAULT_VERSION}",
        ]
        return "\n".join(lines)
