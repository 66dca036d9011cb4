from __future__ import annotations

from time import time

from textual.color import Color

CYCLE = 2000.0
"""Milliseconds per rainbow cycle."""


def chroma_color(
    x: float, y: float, offset_scale: float, timestamp: float | None = None
) -> Color:
    """Get a rainbow color that cycles over time and with position.

    Args:
        x: X coordinate.
        y: Y coordinate.
        offset_scale: Scale of the positional offset.
        timestamp: Time in milliseconds, or `None` for now.

    Returns:
        A saturated color.
    """
    if timestamp is None:
        timestamp = time() * 1000
    offset = x * 10.0 * offset_scale + y * 10.0 * offset_scale
    hue = ((timestamp - offset) % CYCLE) / CYCLE
    return Color.from_hsv(hue, 0.8, 1.0)
