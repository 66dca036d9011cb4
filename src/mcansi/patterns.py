from __future__ import annotations

import re
from typing import Iterator, Literal, Mapping, NamedTuple, TypeAlias

from mcansi.codes import SECTION

HEX_ESCAPE = re.compile(f"(?i){SECTION}x[A-F0-9{SECTION}]{{12}}")
"""Extended escape: section sign, `x`, and twelve hex digits or section signs."""

LEGACY_ESCAPE = re.compile(f"(?i){SECTION}[0-9A-FK-ORX]")
"""Two character legacy escape."""

EscapeKind: TypeAlias = Literal["hex", "legacy"]

PATTERNS: Mapping[EscapeKind, re.Pattern[str]] = {
    "hex": HEX_ESCAPE,
    "legacy": LEGACY_ESCAPE,
}


class EscapeMatch(NamedTuple):
    """A single escape found in text."""

    text: str
    """The matched substring."""
    start: int
    """Offset of the first character."""

    @property
    def end(self) -> int:
        return self.start + len(self.text)


def find_escapes(text: str, kind: EscapeKind) -> Iterator[EscapeMatch]:
    """Find escapes in text, from left to right.

    Every occurrence is reported, even if the same escape appears more than once.
    Call again to scan from the beginning.

    Args:
        text: Text to scan.
        kind: Type of escape to look for.

    Yields:
        Non-overlapping matches.
    """
    for match in PATTERNS[kind].finditer(text):
        yield EscapeMatch(match.group(), match.start())


def contains_legacy_codes(text: str) -> bool:
    """Check if text contains any legacy codes."""
    return LEGACY_ESCAPE.search(text) is not None


def strip_legacy_codes(text: str) -> str:
    """Remove extended and legacy escapes from text."""
    return LEGACY_ESCAPE.sub("", HEX_ESCAPE.sub("", text))
