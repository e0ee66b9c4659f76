"""ANSI terminal color utilities.

Provides constants and helpers for terminal coloring with proper
NO_COLOR environment variable support and TTY detection, plus translation
of ``&``-style color codes found in command display strings.
"""

import os
import re
import sys
from typing import TextIO

__all__ = [
    "BOLD",
    "DIM",
    "RED",
    "RESET",
    "YELLOW",
    "COLOR_CODES",
    "LogStyles",
    "colorize",
    "make_style",
    "should_colorize",
    "normalize_color_codes",
    "strip_color_codes",
    "translate_color_codes",
]

# ANSI escape sequence prefix
_ESC = "\x1b["

# Reset all attributes
RESET = f"{_ESC}0m"

# Style codes
BOLD = "1"
DIM = "2"

# Foreground color codes
RED = "31"
YELLOW = "33"

# Legacy chat color codes (the character following the color char) to ANSI codes
COLOR_CODES: dict[str, str] = {
    "0": "30",
    "1": "34",
    "2": "32",
    "3": "36",
    "4": "31",
    "5": "35",
    "6": "33",
    "7": "37",
    "8": "90",
    "9": "94",
    "a": "92",
    "b": "96",
    "c": "91",
    "d": "95",
    "e": "93",
    "f": "97",
    "l": "1",
    "m": "9",
    "n": "4",
    "o": "3",
    "r": "0",
}


def should_colorize(stream: TextIO | None = None) -> bool:
    """Tell whether ANSI colors may be written to `stream` (stderr by default).

    NO_COLOR wins over FORCE_COLOR, which wins over TTY detection.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if stream is None:
        stream = sys.stderr
    return hasattr(stream, "isatty") and stream.isatty()


def colorize(text: str, *codes: str) -> str:
    """Wrap `text` in the given ANSI `codes` (e.g. RED, BOLD), followed by a reset."""
    if not codes:
        return text
    return f"{_ESC}{';'.join(codes)}m{text}{RESET}"


def make_style(*codes: str) -> tuple[str, str]:
    """Create a style prefix and suffix pair.

    Args:
        *codes: ANSI codes to apply.

    Returns:
        Tuple of (prefix, suffix) strings for use in formatters.
    """
    if not codes:
        return ("", RESET)
    return (f"{_ESC}{';'.join(codes)}m", RESET)


def _code_pattern(char: str) -> re.Pattern[str]:
    return re.compile(re.escape(char) + "([" + "".join(COLOR_CODES) + "])", re.IGNORECASE)


def translate_color_codes(text: str, char: str = "&") -> str:
    """Translate ``&a``-style color codes into ANSI escape sequences.

    A reset is appended when at least one code was translated, so the
    color never leaks into the following output.

    Args:
        text: The text containing color codes.
        char: The character introducing a code.

    Returns:
        The text with every known code replaced by its ANSI sequence.
    """
    translated, count = _code_pattern(char).subn(lambda m: f"{_ESC}{COLOR_CODES[m.group(1).lower()]}m", text)
    return f"{translated}{RESET}" if count else translated


def normalize_color_codes(text: str, char: str, target: str = "&") -> str:
    """Rewrite the color codes introduced by `char` with the `target` character.

    Unknown codes and lone `char` characters are kept as they are.
    """
    if char == target:
        return text
    return _code_pattern(char).sub(lambda m: target + m.group(1), text)


def strip_color_codes(text: str, char: str = "&") -> str:
    """Remove ``&a``-style color codes from a text.

    Args:
        text: The text containing color codes.
        char: The character introducing a code.

    Returns:
        The plain text.
    """
    return _code_pattern(char).sub("", text)


class LogStyles:
    """Pre-built styles for log levels."""

    WARNING = (YELLOW, DIM)
    ERROR = (RED, DIM)
    CRITICAL = (RED, BOLD)
