"""Single-image stamper: mtime → layout → overlay → encode → write."""

import time
from typing import Optional

from .error_handling import with_error_handling
from .image_utils import composite_overlay, load_image, render_overlay, save_image_atomic
from .layout import compute_layout
from .logging_config import get_logger
from .models import StampConfig, StampResult
from .protocols import TextMeasurerProtocol
from .timestamps import read_timestamp_text


@with_error_handling
def stamp_image(
    input_path: str,
    output_path: str,
    config: Optional[StampConfig] = None,
    measurer: Optional[TextMeasurerProtocol] = None,
) -> StampResult:
    """
    Stamp ``input_path``'s modification time onto the image and write ``output_path``.

    The parent directory of ``output_path`` must already exist. Any failure
    aborts the whole operation and propagates to the caller.

    Args:
        input_path: Readable, decodable image file
        output_path: Destination file, overwritten if present
        config: Overlay and encoding settings (defaults to StampConfig())
        measurer: Text width strategy used by the layout

    Returns:
        A successful StampResult describing the written image

    Raises:
        StampIOError: Input missing/unreadable or output not writable
        DecodeError: Input is not a supported image
        EncodeError: The result could not be encoded
        StampError: Any other unexpected failure
    """
    config = config or StampConfig()
    logger = get_logger("image-timestamper")
    start_time = time.time()

    # Read the mtime before decoding so a missing file reports as an IO error
    timestamp_text = read_timestamp_text(input_path, config)
    logger.debug(f"[{input_path}] Modified time: {timestamp_text}")

    with load_image(input_path) as image:
        width, height = image.size
        logger.debug(f"[{input_path}] Image loaded. Size: {width}x{height}.")

        layout = compute_layout(width, height, timestamp_text, config, measurer)
        logger.debug(
            f"[{input_path}] Font size {layout.font_size:.2f}, "
            f"box at ({layout.box_x:.1f}, {layout.box_y:.1f}) "
            f"{layout.box_width:.1f}x{layout.box_height:.1f}"
        )

        overlay = render_overlay(layout, timestamp_text, config)
        stamped = composite_overlay(image, overlay)

    save_image_atomic(stamped, output_path, config.output_format, config.quality)

    logger.info(f"Successfully added timestamp to image: {output_path}")
    logger.info(f"Modified time: {timestamp_text}")

    return StampResult(
        input_path=input_path,
        output_path=output_path,
        success=True,
        timestamp_text=timestamp_text,
        width=width,
        height=height,
        processing_time=time.time() - start_time,
    )
