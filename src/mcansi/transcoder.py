from __future__ import annotations

import logging
import re

from textual.color import Color

from mcansi.codes import RESET, SECTION, Attribute, StyleCode, generate
from mcansi.markup import Rewritten, resolve_markup
from mcansi.patterns import find_escapes

log = logging.getLogger(__name__)

RE_HEX_DIGITS = re.compile(r"[0-9a-fA-F]{6}")


class MalformedColorEscape(ValueError):
    """An extended escape didn't contain exactly six hex digits."""

    def __init__(self, escape: str) -> None:
        self.escape = escape
        super().__init__(f"Malformed color escape {escape!r}")


def decode_hex_escape(escape: str) -> Color:
    """Decode an extended escape in to a color.

    Args:
        escape: Escape of the form `§x` followed by hex digits, which may be
            interleaved with section signs.

    Raises:
        MalformedColorEscape: If there aren't exactly six hex digits.

    Returns:
        The encoded color.
    """
    digits = escape[2:].replace(SECTION, "")
    if RE_HEX_DIGITS.fullmatch(digits) is None:
        raise MalformedColorEscape(escape)
    return Color(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def rgb_directive(color: Color) -> str:
    """Get the escape sequence to set a 24-bit foreground color."""
    return generate(Attribute.rgb(color))


def colorize(text: str, color: Color) -> str:
    """Wrap text in a 24-bit foreground color.

    Args:
        text: Text to color.
        color: Foreground color.

    Returns:
        Text with escape sequences, ending with a reset.
    """
    return f"{rgb_directive(color)}{text}{RESET}"


def substitute_escapes(text: str) -> str:
    """Replace extended then legacy escapes with ANSI escape sequences.

    Args:
        text: Text with legacy escapes.

    Raises:
        MalformedColorEscape: If an extended escape can't be decoded.

    Returns:
        Text with ANSI escape sequences.
    """
    hex_escapes = dict.fromkeys(match.text for match in find_escapes(text, "hex"))
    for escape in hex_escapes:
        text = text.replace(escape, rgb_directive(decode_hex_escape(escape)))

    legacy_escapes = dict.fromkeys(
        match.text for match in find_escapes(text, "legacy")
    )
    for escape in legacy_escapes:
        text = text.replace(escape, StyleCode.resolve(escape[1]).directive)
    return text


def transcode(text: str, legacy: bool = False, max_retries: int = 1) -> str:
    """Convert markup and legacy escapes in to ANSI escape sequences.

    If the markup can't be parsed, the text is substituted as-is and then
    processed again, up to `max_retries` times.

    Args:
        text: Text to convert.
        legacy: Collapse RGB colors in markup to the 16 palette colors.
        max_retries: Maximum number of additional passes after a markup failure.

    Raises:
        MalformedColorEscape: If an extended escape can't be decoded.

    Returns:
        Text with ANSI escape sequences, ending with a reset.
    """
    for attempt in range(max(max_retries, 0) + 1):
        resolution = resolve_markup(text, legacy=legacy)
        text = substitute_escapes(resolution.text)
        if isinstance(resolution, Rewritten):
            break
        log.debug("Markup unresolved on pass %d", attempt + 1)
    return text + RESET
