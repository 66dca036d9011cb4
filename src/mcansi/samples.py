from __future__ import annotations

from typing import NamedTuple, Sequence

from textual.color import Color

# Initial distance, the largest signed 32-bit integer
MAX_DISTANCE = 2**31 - 1


class PixelBuffer(NamedTuple):
    """A decoded image."""

    width: int
    height: int
    pixels: Sequence[tuple[int, int, int]]
    """Row-major RGB pixels."""


def pack_rgb(color: Color) -> int:
    """Pack a color in to a 24-bit integer."""
    red, green, blue = color.rgb
    return (red << 16) | (green << 8) | blue


def average_color(image: PixelBuffer) -> Color:
    """Get the average color of an image.

    Args:
        image: Decoded image.

    Raises:
        ValueError: If the image has no pixels.

    Returns:
        Mean of each channel, rounded down.
    """
    pixels = image.pixels[: image.width * image.height]
    if not pixels:
        raise ValueError("image has no pixels")
    red = green = blue = 0
    for pixel_red, pixel_green, pixel_blue in pixels:
        red += pixel_red
        green += pixel_green
        blue += pixel_blue
    count = len(pixels)
    return Color(red // count, green // count, blue // count)


class ColorSampleTable:
    """Maps sample colors on to resource names, e.g. "minecraft:stone"."""

    def __init__(self) -> None:
        self._samples: dict[Color, str] = {}

    def __len__(self) -> int:
        return len(self._samples)

    def __contains__(self, color: object) -> bool:
        return isinstance(color, Color) and Color(*color.rgb) in self._samples

    def record(self, color: Color, name: str) -> None:
        """Record a name for a color, if the color isn't already recorded.

        Args:
            color: Sample color.
            name: Resource name.
        """
        self._samples.setdefault(Color(*color.rgb), name)

    def record_image(self, image: PixelBuffer, name: str) -> Color:
        """Record the average color of an image.

        Args:
            image: Decoded image.
            name: Resource name.

        Returns:
            The average color.
        """
        color = average_color(image)
        self.record(color, name)
        return color

    def nearest(self, color: Color) -> str:
        """Get the name recorded for the closest color.

        Closeness is the signed difference of the packed RGB values, so the
        entry with the largest packed value tends to win. This is not a
        perceptual distance.

        Args:
            color: Color to look up.

        Returns:
            A resource name, or empty string if the table is empty.
        """
        query = pack_rgb(color)
        closest_distance = MAX_DISTANCE
        closest_name = ""
        for sample_color, name in self._samples.items():
            distance = query - pack_rgb(sample_color)
            if distance < closest_distance:
                closest_distance = distance
                closest_name = name
        return closest_name

    def clear(self) -> None:
        """Remove all samples."""
        self._samples.clear()
