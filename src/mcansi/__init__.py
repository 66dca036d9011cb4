__version__ = "0.1.0"

from mcansi.codes import RESET, SECTION, Attribute, StyleCode, generate
from mcansi.markup import Resolution, Rewritten, Unresolved, resolve_markup
from mcansi.patterns import (
    EscapeMatch,
    contains_legacy_codes,
    find_escapes,
    strip_legacy_codes,
)
from mcansi.samples import ColorSampleTable, PixelBuffer, average_color
from mcansi.transcoder import (
    MalformedColorEscape,
    colorize,
    decode_hex_escape,
    transcode,
)

__all__ = [
    "RESET",
    "SECTION",
    "Attribute",
    "ColorSampleTable",
    "EscapeMatch",
    "MalformedColorEscape",
    "PixelBuffer",
    "Resolution",
    "Rewritten",
    "StyleCode",
    "Unresolved",
    "average_color",
    "colorize",
    "contains_legacy_codes",
    "decode_hex_escape",
    "find_escapes",
    "generate",
    "resolve_markup",
    "strip_legacy_codes",
    "transcode",
]
