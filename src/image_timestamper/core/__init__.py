"""Core utilities and shared components for the image timestamper."""

from .logging_config import get_logger, setup_logger
from .exceptions import (
    ImageTimestamperError,
    StampIOError,
    DecodeError,
    EncodeError,
    UsageError,
    StampError,
)
from .layout import EstimatedTextMeasurer, OverlayLayout, compute_font_size, compute_layout
from .models import BatchReport, StampConfig, StampItem, StampResult
from .stamper import stamp_image
from .timestamps import format_timestamp, read_modified_time

__all__ = [
    "StampConfig",
    "StampItem",
    "StampResult",
    "BatchReport",
    "OverlayLayout",
    "EstimatedTextMeasurer",
    "compute_font_size",
    "compute_layout",
    "format_timestamp",
    "read_modified_time",
    "stamp_image",
    "setup_logger",
    "get_logger",
    "ImageTimestamperError",
    "StampIOError",
    "DecodeError",
    "EncodeError",
    "UsageError",
    "StampError",
]
