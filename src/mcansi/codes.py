from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from rich.color import Color as RichColor
from textual.color import Color

SECTION = "§"
"""The sentinel that introduces every legacy escape."""


class Attribute(NamedTuple):
    """A terminal styling directive."""

    name: str
    """Human readable name."""
    codes: tuple[str, ...]
    """SGR parameters."""

    @classmethod
    def color(cls, name: str, number: int) -> Attribute:
        """Foreground attribute for one of the 16 standard terminal colors.

        Args:
            name: Name of the attribute.
            number: Standard color number (0-15).

        Returns:
            A new attribute.
        """
        return cls(name, RichColor.from_ansi(number).get_ansi_codes(foreground=True))

    @classmethod
    def rgb(cls, color: Color) -> Attribute:
        """24-bit foreground attribute.

        Args:
            color: A color.

        Returns:
            A new attribute.
        """
        return cls(color.hex.lower(), color.rich_color.get_ansi_codes(foreground=True))


def generate(attribute: Attribute) -> str:
    """Generate the escape sequence for an attribute.

    Args:
        attribute: Attribute to render.

    Returns:
        An SGR escape sequence.
    """
    return f"\x1b[{';'.join(attribute.codes)}m"


CLEAR = Attribute("reset", ("0",))
RESET = generate(CLEAR)


class StyleCode(Enum):
    """A legacy code, and the attribute it maps on to."""

    BLACK = ("0", Attribute.color("black", 0))
    DARK_BLUE = ("1", Attribute.color("blue", 4))
    DARK_GREEN = ("2", Attribute.color("green", 2))
    DARK_AQUA = ("3", Attribute.color("cyan", 6))
    DARK_RED = ("4", Attribute.color("red", 1))
    DARK_PURPLE = ("5", Attribute.color("magenta", 5))
    GOLD = ("6", Attribute.color("yellow", 3))
    GREY = ("7", Attribute.color("bright_black", 8))
    DARK_GREY = ("8", Attribute.color("bright_black", 8))
    BLUE = ("9", Attribute.color("bright_blue", 12))
    GREEN = ("a", Attribute.color("bright_green", 10))
    AQUA = ("b", Attribute.color("bright_cyan", 14))
    RED = ("c", Attribute.color("bright_red", 9))
    LIGHT_PURPLE = ("d", Attribute.color("magenta", 5))
    YELLOW = ("e", Attribute.color("bright_yellow", 11))
    WHITE = ("f", Attribute.color("white", 7))
    # No terminal equivalent of obfuscated text
    OBFUSCATE = ("k", Attribute("reverse", ("7",)))
    BOLD = ("l", Attribute("bold", ("1",)))
    STRIKETHROUGH = ("m", Attribute("strikethrough", ("9",)))
    UNDERLINE = ("n", Attribute("underline", ("4",)))
    ITALIC = ("o", Attribute("italic", ("3",)))
    RESET = ("r", CLEAR)

    def __init__(self, discriminator: str, attribute: Attribute) -> None:
        self.discriminator = discriminator
        self.attribute = attribute

    @property
    def token(self) -> str:
        """The two character legacy escape."""
        return f"{SECTION}{self.discriminator}"

    @property
    def directive(self) -> str:
        """The ANSI escape sequence for this code."""
        return generate(self.attribute)

    @property
    def is_color(self) -> bool:
        return self.discriminator in "0123456789abcdef"

    @classmethod
    def resolve(cls, discriminator: str) -> StyleCode:
        """Get the code for a discriminator character.

        Unrecognized discriminators resolve to `RESET`.

        Args:
            discriminator: The character following the section sign (case insensitive).

        Returns:
            A style code.
        """
        return _DISCRIMINATORS.get(discriminator.lower(), cls.RESET)

    @classmethod
    def colors(cls) -> list[StyleCode]:
        return [code for code in cls if code.is_color]

    @classmethod
    def decorations(cls) -> list[StyleCode]:
        return [code for code in cls if not code.is_color and code is not cls.RESET]


_DISCRIMINATORS: dict[str, StyleCode] = {code.discriminator: code for code in StyleCode}
