"""Custom exceptions for the image timestamper."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator


class ImageTimestamperError(Exception):
    """Base exception for all image timestamper errors."""


class StampIOError(ImageTimestamperError):
    """Error raised when a file or directory cannot be read or written."""


class DecodeError(ImageTimestamperError):
    """Error raised when an input is not a valid or supported image."""


class EncodeError(ImageTimestamperError):
    """Error raised when the stamped image cannot be encoded or written."""


class UsageError(ImageTimestamperError):
    """Error raised for missing or conflicting command-line arguments."""


class StampError(ImageTimestamperError):
    """Error raised when stamping a single image fails unexpectedly."""


@contextmanager
def decode_error_handler(path: Any) -> Iterator[None]:
    """Translate image engine failures while decoding ``path`` into DecodeError."""
    try:
        yield
    except ImageTimestamperError:
        raise
    except FileNotFoundError as exc:
        raise StampIOError(f"Input file not found: {path}") from exc
    except PermissionError as exc:
        raise StampIOError(f"Input file is not readable: {path}") from exc
    except (IsADirectoryError, NotADirectoryError) as exc:
        raise StampIOError(f"Input path is not a file: {path}") from exc
    except Exception as exc:  # noqa: BLE001
        raise DecodeError(f"Cannot decode image {path}: {exc}") from exc
