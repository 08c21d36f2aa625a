"""Image processing utilities for the image timestamper."""

import contextlib
import functools
import os
import tempfile
from typing import Iterable, Optional, Tuple, Union

from PIL import Image, ImageColor, ImageDraw, ImageFilter, ImageFont

from .exceptions import EncodeError, StampError, StampIOError, decode_error_handler
from .layout import OverlayLayout
from .models import StampConfig

FontType = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

# Output formats that cannot store an alpha channel
_OPAQUE_FORMATS = {"JPEG", "JPG", "BMP"}


def load_image(path: str) -> Image.Image:
    """
    Open and fully decode the image at ``path``.

    Raises:
        StampIOError: If the file is missing or unreadable
        DecodeError: If the file is not an image Pillow can decode
    """
    with decode_error_handler(path):
        image = Image.open(path)
        image.load()
    return image


@functools.lru_cache(maxsize=32)
def resolve_font(size: float, candidates: Tuple[str, ...]) -> FontType:
    """
    Return the first bold TrueType font from ``candidates`` that loads.

    Falls back to Pillow's bundled default font at the requested size.
    """
    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def _rgba(color: str, opacity: float) -> Tuple[int, int, int, int]:
    red, green, blue = ImageColor.getrgb(color)[:3]
    return (red, green, blue, round(opacity * 255))


def _rounded_box(layout: OverlayLayout, offset: float = 0) -> Tuple[int, int, int, int]:
    left, top, right, bottom = layout.box
    return (
        round(left + offset),
        round(top + offset),
        round(right + offset),
        round(bottom + offset),
    )


def render_overlay(layout: OverlayLayout, text: str, config: Optional[StampConfig] = None) -> Image.Image:
    """
    Render the timestamp overlay as a transparent RGBA layer.

    The layer has exactly the source image's size: a blurred drop shadow,
    a rounded semi-transparent box on top of it, and the text right-aligned
    on its baseline inside the box.
    """
    config = config or StampConfig()
    size = layout.canvas_size

    shadow = Image.new("RGBA", size, (0, 0, 0, 0))
    if config.shadow_opacity > 0:
        ImageDraw.Draw(shadow).rounded_rectangle(
            _rounded_box(layout, config.shadow_offset),
            radius=round(config.corner_radius),
            fill=_rgba(config.shadow_color, config.shadow_opacity),
        )
        if config.shadow_blur > 0:
            shadow = shadow.filter(ImageFilter.GaussianBlur(radius=config.shadow_blur))

    foreground = Image.new("RGBA", size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(foreground)
    draw.rounded_rectangle(
        _rounded_box(layout),
        radius=round(config.corner_radius),
        fill=_rgba(config.box_color, config.box_opacity),
    )

    font = resolve_font(layout.font_size, tuple(config.font_candidates))
    fill = _rgba(config.text_color, 1.0)
    if isinstance(font, ImageFont.FreeTypeFont):
        draw.text(layout.text_anchor, text, font=font, fill=fill, anchor="rs")
    else:
        # Bitmap fonts only support top-left anchoring
        left, top, right, bottom = font.getbbox(text)
        draw.text(
            (layout.text_x - (right - left), layout.text_y - (bottom - top)),
            text,
            font=font,
            fill=fill,
        )

    return Image.alpha_composite(shadow, foreground)


def composite_overlay(image: Image.Image, overlay: Image.Image) -> Image.Image:
    """
    Composite ``overlay`` onto ``image`` at the image's native resolution.

    Raises:
        StampError: If the overlay size differs from the image size
    """
    if overlay.size != image.size:
        raise StampError(
            f"Overlay size {overlay.size[0]}x{overlay.size[1]} does not match "
            f"image size {image.size[0]}x{image.size[1]}"
        )
    return Image.alpha_composite(image.convert("RGBA"), overlay)


def prepare_for_format(image: Image.Image, output_format: str) -> Image.Image:
    """Drop the alpha channel when the target format cannot store it."""
    if output_format.upper() in _OPAQUE_FORMATS and image.mode != "RGB":
        return image.convert("RGB")
    return image


def save_image_atomic(
    image: Image.Image, output_path: str, output_format: str = "JPEG", quality: int = 90
) -> None:
    """
    Encode ``image`` and move it into place at ``output_path``.

    The image is written to a temporary file in the destination directory and
    renamed over ``output_path``, so an existing file is replaced silently and
    a failed encode never leaves a partial file behind.

    Raises:
        StampIOError: If the destination directory is missing or unwritable
        EncodeError: If Pillow cannot encode the image
    """
    directory = os.path.dirname(os.path.abspath(output_path))
    if not os.path.isdir(directory):
        raise StampIOError(f"Output directory does not exist: {directory}")

    try:
        fd, tmp_path = tempfile.mkstemp(prefix=".stamp-", suffix=".tmp", dir=directory)
    except OSError as exc:
        raise StampIOError(f"Cannot write to {directory}: {exc}") from exc

    try:
        try:
            with os.fdopen(fd, "wb") as handle:
                prepare_for_format(image, output_format).save(
                    handle, format=output_format, quality=quality
                )
        except (KeyError, ValueError, OSError) as exc:
            raise EncodeError(
                f"Cannot encode {output_path} as {output_format}: {exc}"
            ) from exc

        try:
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, output_path)
        except OSError as exc:
            raise StampIOError(f"Cannot write {output_path}: {exc}") from exc
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_path)
        raise


def is_supported_image(file_name: str, extensions: Iterable[str]) -> bool:
    """Case-insensitive extension match."""
    return file_name.lower().endswith(tuple(ext.lower() for ext in extensions))


def default_output_path(input_path: str, prefix: str = "timestamped_") -> str:
    """
    Default output for single-file mode: ``<prefix><basename>`` beside the input.

    >>> default_output_path("x/photo.jpg")
    'x/timestamped_photo.jpg'
    """
    directory, file_name = os.path.split(input_path)
    return os.path.join(directory, f"{prefix}{file_name}")


def calculate_output_path(file_name: str, output_dir: str) -> str:
    """Batch output path: the input file name, unchanged, inside ``output_dir``."""
    return os.path.join(output_dir, file_name)
