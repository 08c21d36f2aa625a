"""Overlay geometry for the timestamp box.

All functions here are pure: the same image size, text and configuration
always yield the same layout.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .models import StampConfig
from .protocols import TextMeasurerProtocol


class EstimatedTextMeasurer:
    """
    Approximate text width as ``len(text) * font_size * char_width_factor``.

    This is a heuristic, not glyph metrics, so the box can be slightly wider or
    narrower than the rendered text depending on the font that gets resolved.
    """

    def __init__(self, char_width_factor: float = 0.52):
        self.char_width_factor = char_width_factor

    def measure(self, text: str, font_size: float) -> float:
        return len(text) * font_size * self.char_width_factor


@dataclass(frozen=True)
class OverlayLayout:
    """Derived geometry of the overlay for one image."""

    image_width: int
    image_height: int
    font_size: float
    text_width: float
    text_height: float
    box_x: float
    box_y: float
    box_width: float
    box_height: float
    text_x: float
    text_y: float

    @property
    def box(self) -> Tuple[float, float, float, float]:
        """Box as ``(left, top, right, bottom)``."""
        return (
            self.box_x,
            self.box_y,
            self.box_x + self.box_width,
            self.box_y + self.box_height,
        )

    @property
    def text_anchor(self) -> Tuple[float, float]:
        """Right end of the text baseline."""
        return (self.text_x, self.text_y)

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return (self.image_width, self.image_height)


def compute_font_size(image_width: float, config: Optional[StampConfig] = None) -> float:
    """Return ``clamp(image_width / divisor, min_font_size, max_font_size)``."""
    config = config or StampConfig()
    scaled = image_width / config.font_scale_divisor
    return max(config.min_font_size, min(scaled, config.max_font_size))


def compute_layout(
    image_width: int,
    image_height: int,
    text: str,
    config: Optional[StampConfig] = None,
    measurer: Optional[TextMeasurerProtocol] = None,
) -> OverlayLayout:
    """
    Compute the bottom-right anchored box and text position for an image.

    Args:
        image_width: Source image width in pixels
        image_height: Source image height in pixels
        text: The formatted timestamp
        config: Layout constants (defaults to StampConfig())
        measurer: Text width strategy (defaults to EstimatedTextMeasurer)

    Returns:
        OverlayLayout with the box rectangle and text anchor
    """
    config = config or StampConfig()
    if measurer is None:
        measurer = EstimatedTextMeasurer(config.char_width_factor)

    font_size = compute_font_size(image_width, config)
    text_width = measurer.measure(text, font_size)
    text_height = font_size

    padding = config.padding
    box_padding = config.box_padding

    # The box extends box_padding past the text on the left and right, and
    # from box_padding above the text to box_padding below the padding line.
    return OverlayLayout(
        image_width=image_width,
        image_height=image_height,
        font_size=font_size,
        text_width=text_width,
        text_height=text_height,
        box_x=image_width - padding - text_width - box_padding * 2,
        box_y=image_height - padding - text_height - box_padding,
        box_width=text_width + box_padding * 2,
        box_height=text_height + box_padding * 2,
        text_x=image_width - padding - box_padding,
        text_y=image_height - padding - box_padding / 2,
    )
