"""Resolve bracketed tag markup down to the legacy section sign dialect.

Tags are parsed with Rich's markup parser, so the syntax is the familiar
`[bold gold]Hello[/] World`. Tag words may be legacy color names, decorations
or any color Textual can parse (`#ff8800`, `rgb(10,20,30)`, CSS names).

"""

from __future__ import annotations

import io
import logging
import re
from functools import lru_cache
from typing import Mapping, NamedTuple, TypeAlias

from rich.color_triplet import ColorTriplet
from rich.errors import MarkupError
from rich.markup import render
from rich.palette import Palette
from rich.text import Text
from textual.color import Color, ColorParseError

from mcansi.codes import SECTION

log = logging.getLogger(__name__)

COLOR_NAMES: Mapping[str, str] = {
    "black": "0",
    "dark_blue": "1",
    "dark_green": "2",
    "dark_aqua": "3",
    "dark_red": "4",
    "dark_purple": "5",
    "gold": "6",
    "gray": "7",
    "grey": "7",
    "dark_gray": "8",
    "dark_grey": "8",
    "blue": "9",
    "green": "a",
    "aqua": "b",
    "red": "c",
    "light_purple": "d",
    "yellow": "e",
    "white": "f",
}

DECORATION_NAMES: Mapping[str, str] = {
    "obfuscated": "k",
    "obf": "k",
    "reverse": "k",
    "r": "k",
    "bold": "l",
    "b": "l",
    "strikethrough": "m",
    "strike": "m",
    "st": "m",
    "s": "m",
    "underline": "n",
    "underlined": "n",
    "u": "n",
    "italic": "o",
    "em": "o",
    "i": "o",
}

# Palette colors in discriminator order (0-9, a-f)
LEGACY_PALETTE = Palette(
    [
        (0x00, 0x00, 0x00),
        (0x00, 0x00, 0xAA),
        (0x00, 0xAA, 0x00),
        (0x00, 0xAA, 0xAA),
        (0xAA, 0x00, 0x00),
        (0xAA, 0x00, 0xAA),
        (0xFF, 0xAA, 0x00),
        (0xAA, 0xAA, 0xAA),
        (0x55, 0x55, 0x55),
        (0x55, 0x55, 0xFF),
        (0x55, 0xFF, 0x55),
        (0x55, 0xFF, 0xFF),
        (0xFF, 0x55, 0x55),
        (0xFF, 0x55, 0xFF),
        (0xFF, 0xFF, 0x55),
        (0xFF, 0xFF, 0xFF),
    ]
)
PALETTE_DISCRIMINATORS = "0123456789abcdef"

# Same tag syntax as rich.markup
RE_TAG = re.compile(r"(\\*)\[([a-z#/@][^[]*?)]")

RE_ARGUMENT_SPACE = re.compile(r"(?<=[(,])\s+|\s+(?=[),])")


class LegacyStyle(NamedTuple):
    """Style expressed as legacy escapes."""

    color: str | None = None
    """Color escape (legacy or extended), or `None` for no color."""
    decorations: frozenset[str] = frozenset()
    """Decoration discriminators."""
    reset: bool = False
    """Discard the style beneath this one?"""

    def __add__(self, other: LegacyStyle) -> LegacyStyle:  # type: ignore[override]
        base = NULL_STYLE if other.reset else self
        return LegacyStyle(
            other.color or base.color, base.decorations | other.decorations
        )

    @property
    def is_null(self) -> bool:
        return self.color is None and not self.decorations

    @property
    def decoration_codes(self) -> str:
        return "".join(
            f"{SECTION}{discriminator}" for discriminator in sorted(self.decorations)
        )


NULL_STYLE = LegacyStyle()


class Rewritten(NamedTuple):
    """Markup was parsed and serialized to the legacy dialect."""

    text: str

    @property
    def needs_retry(self) -> bool:
        return False


class Unresolved(NamedTuple):
    """Markup could not be parsed; text is unchanged."""

    text: str
    error: str = ""

    @property
    def needs_retry(self) -> bool:
        return True


Resolution: TypeAlias = Rewritten | Unresolved


def hex_escape(color: Color) -> str:
    """Encode a color as an extended escape (`§x§r§r§g§g§b§b`).

    Args:
        color: Color to encode.

    Returns:
        Escape string.
    """
    red, green, blue = color.rgb
    digits = f"{red:02x}{green:02x}{blue:02x}"
    return f"{SECTION}x" + "".join(f"{SECTION}{digit}" for digit in digits)


def nearest_legacy_color(color: Color) -> str:
    """Get the discriminator of the closest palette color.

    Args:
        color: A color.

    Returns:
        A single discriminator character.
    """
    index = LEGACY_PALETTE.match(ColorTriplet(*color.rgb))
    return PALETTE_DISCRIMINATORS[index]


@lru_cache(maxsize=1024)
def parse_tag(tag: str, legacy: bool = False) -> LegacyStyle | None:
    """Parse the contents of a tag.

    Args:
        tag: Tag contents, e.g. "bold gold".
        legacy: Collapse RGB colors to the nearest palette color.

    Returns:
        A legacy style, or `None` if the tag contains an unknown word.
    """
    if not tag.strip():
        return None
    color: str | None = None
    decorations: set[str] = set()
    reset = False
    # Join color functions such as "rgb(1, 2, 3)" in to a single word
    words = iter(RE_ARGUMENT_SPACE.sub("", tag).split())
    for word in words:
        lower_word = word.lower()
        if lower_word in ("on", "not"):
            # Backgrounds and negation have no legacy equivalent
            if next(words, None) is None:
                return None
        elif lower_word == "reset":
            reset = True
            color = None
            decorations.clear()
        elif (discriminator := DECORATION_NAMES.get(lower_word)) is not None:
            decorations.add(discriminator)
        elif (discriminator := COLOR_NAMES.get(lower_word)) is not None:
            color = f"{SECTION}{discriminator}"
        else:
            try:
                parsed_color = Color.parse(word)
            except ColorParseError:
                return None
            if legacy:
                color = f"{SECTION}{nearest_legacy_color(parsed_color)}"
            else:
                color = hex_escape(parsed_color)
    return LegacyStyle(color, frozenset(decorations), reset)


def escape_unknown_tags(markup: str) -> str:
    """Escape tags that don't describe a style, so they remain as literal text.

    Args:
        markup: Markup text.

    Returns:
        Markup with unknown tags escaped.
    """

    def escape_tag(match: re.Match[str]) -> str:
        backslashes, tag = match.groups()
        name = tag.removeprefix("/").strip()
        if not name or parse_tag(name) is not None:
            return match.group(0)
        log.debug("Leaving unknown tag %r as text", tag)
        # Double the backslashes so they survive as literals, then escape the tag
        return f"{backslashes * 2}\\[{tag}]"

    return RE_TAG.sub(escape_tag, markup)


def _transition(previous: LegacyStyle, style: LegacyStyle) -> str:
    """Escapes required to move from one style to another."""
    if style == previous:
        return ""
    if style.is_null:
        return f"{SECTION}r"
    if style.color != previous.color or not previous.decorations <= style.decorations:
        # Legacy colors clear decorations
        return (style.color or f"{SECTION}r") + style.decoration_codes
    return LegacyStyle(decorations=style.decorations - previous.decorations).decoration_codes


def serialize(document: Text, legacy: bool = False) -> str:
    """Serialize parsed markup to the legacy dialect.

    Args:
        document: Text produced by the markup parser.
        legacy: Collapse RGB colors to the nearest palette color.

    Returns:
        Text with legacy escapes.
    """
    plain = document.plain
    spans: list[tuple[int, int, LegacyStyle]] = []
    for span in document.spans:
        if not isinstance(span.style, str) or span.start >= span.end:
            continue
        if (span_style := parse_tag(span.style, legacy)) is not None:
            spans.append((span.start, span.end, span_style))
    if not spans:
        return plain

    offsets = sorted(
        {0, len(plain), *(start for start, _, _ in spans), *(end for _, end, _ in spans)}
    )
    output = io.StringIO()
    previous = NULL_STYLE
    for start, end in zip(offsets, offsets[1:]):
        style = NULL_STYLE
        for span_start, span_end, span_style in spans:
            if span_start <= start < span_end:
                style += span_style
        output.write(_transition(previous, style))
        output.write(plain[start:end])
        previous = style
    return output.getvalue()


def resolve_markup(text: str, legacy: bool = False) -> Resolution:
    """Rewrite tag markup in to legacy escapes.

    Malformed markup is not an error; the text is returned unchanged in an
    `Unresolved` result.

    Args:
        text: Text which may contain markup and legacy escapes.
        legacy: Collapse RGB colors to the nearest palette color.

    Returns:
        `Rewritten` if the markup parsed, otherwise `Unresolved`.
    """
    try:
        document = render(escape_unknown_tags(text), emoji=False)
    except MarkupError as error:
        log.debug("Unable to parse markup; %s", error)
        return Unresolved(text, str(error))
    return Rewritten(serialize(document, legacy=legacy))
