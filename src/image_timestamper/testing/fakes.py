"""Fake implementations and fixtures for testing purposes."""

import io
import os
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Union

from PIL import Image

from ..core.logging_config import get_logger


class FakeLogger:
    """Fake logger for testing with support for LogContext."""

    def __init__(self, name: str = "test_logger"):
        self.name = name
        self.logs: List[Dict[str, Any]] = []
        self.should_fail = False

    def _log(
        self, level: str, message: str, context: Any = None, **kwargs: Any
    ) -> None:
        """Internal logging method with context support."""
        if self.should_fail:
            raise Exception("Simulated logging failure")

        log_entry = {
            "level": level,
            "message": message,
            "timestamp": time.time(),
            **kwargs,
        }

        if context is not None:
            if hasattr(context, "correlation_id"):
                log_entry["correlation_id"] = context.correlation_id
            if hasattr(context, "operation"):
                log_entry["operation"] = context.operation
            if hasattr(context, "component"):
                log_entry["component"] = context.component
            if hasattr(context, "metadata"):
                log_entry.update(context.metadata)

        self.logs.append(log_entry)

    def debug(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log debug message."""
        self._log("DEBUG", message, context, **kwargs)

    def info(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log info message."""
        self._log("INFO", message, context, **kwargs)

    def warning(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log warning message."""
        self._log("WARNING", message, context, **kwargs)

    def error(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log error message."""
        self._log("ERROR", message, context, **kwargs)

    def get_logs(self, level: Optional[str] = None) -> List[Dict[str, Any]]:
        """Get logged messages, optionally filtered by level."""
        if level:
            return [log for log in self.logs if log["level"] == level]
        return self.logs.copy()

    def messages(self, level: Optional[str] = None) -> List[str]:
        """Get just the message strings, optionally filtered by level."""
        return [log["message"] for log in self.get_logs(level)]

    def clear_logs(self) -> None:
        """Clear all logged messages."""
        self.logs.clear()


class FixedWidthMeasurer:
    """Text measurer returning a constant width, for layout tests."""

    def __init__(self, width: float):
        self.width = width
        self.calls: List[Dict[str, Any]] = []

    def measure(self, text: str, font_size: float) -> float:
        self.calls.append({"text": text, "font_size": font_size})
        return self.width


def create_test_image(
    width: int = 100, height: int = 100, image_format: str = "JPEG", mode: str = "RGB"
) -> bytes:
    """Create a test image in memory."""
    image = Image.new(mode, (width, height), color="red")

    # Add some pattern to make it more realistic
    for x in range(0, width, 20):
        for y in range(0, height, 20):
            if (x + y) % 40 == 0:
                for i in range(min(10, width - x)):
                    for j in range(min(10, height - y)):
                        image.putpixel((x + i, y + j), (0, 0, 255) if mode == "RGB" else 128)

    img_bytes = io.BytesIO()
    image.save(img_bytes, format=image_format, quality=95)
    return img_bytes.getvalue()


def local_timestamp(year: int, month: int, day: int, hour: int, minute: int, second: int) -> float:
    """POSIX timestamp for a wall-clock time in the host's local timezone."""
    return datetime(year, month, day, hour, minute, second).timestamp()


def utc_timestamp(year: int, month: int, day: int, hour: int, minute: int, second: int) -> float:
    """POSIX timestamp for a wall-clock time in UTC."""
    return datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc).timestamp()


def write_test_image(
    path: Union[str, "os.PathLike[str]"],
    width: int = 100,
    height: int = 100,
    image_format: str = "JPEG",
    mtime: Optional[float] = None,
) -> str:
    """Write a test image to ``path`` and optionally set its modification time."""
    with open(path, "wb") as handle:
        handle.write(create_test_image(width, height, image_format))
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return os.fspath(path)


def setup_test_directory(directory: Union[str, "os.PathLike[str]"]) -> Dict[str, str]:
    """
    Populate ``directory`` with images and non-image files.

    Returns a mapping of file name to full path for every file written.
    """
    directory = os.fspath(directory)
    os.makedirs(directory, exist_ok=True)

    files = {
        "a.jpg": ("JPEG", 200, 150),
        "c.PNG": ("PNG", 300, 200),
        "e.jpeg": ("JPEG", 150, 100),
        "f.webp": ("WEBP", 120, 90),
        "g.tiff": ("TIFF", 250, 175),
    }
    written = {}
    for name, (image_format, width, height) in files.items():
        written[name] = write_test_image(
            os.path.join(directory, name), width, height, image_format,
            mtime=local_timestamp(2024, 3, 15, 14, 30, 5),
        )

    # Non-image files and unsupported formats to test filtering
    for name, body in (("b.txt", b"This is not an image"), ("notes.json", b"{}")):
        path = os.path.join(directory, name)
        with open(path, "wb") as handle:
            handle.write(body)
        written[name] = path
    written["d.gif"] = write_test_image(os.path.join(directory, "d.gif"), 50, 50, "GIF")

    return written


@contextmanager
def capture_log_output(
    name: str = "image-timestamper", level: str = "DEBUG"
) -> Iterator[io.StringIO]:
    """
    Redirect the stdout handler of the ``name`` logger into a buffer.

    Lines keep the handler's formatter, so the buffer holds exactly what the
    command line would print.
    """
    logger = get_logger(name)
    handler = logger.handlers[0]
    previous_level = logger.level
    buffer = io.StringIO()

    previous_stream = handler.setStream(buffer)
    logger.setLevel(level)
    try:
        yield buffer
    finally:
        logger.setLevel(previous_level)
        handler.setStream(previous_stream)
