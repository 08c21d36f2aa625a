"""Testing utilities and fakes for the image timestamper."""

from .fakes import (
    FakeLogger,
    FixedWidthMeasurer,
    capture_log_output,
    create_test_image,
    local_timestamp,
    setup_test_directory,
    utc_timestamp,
    write_test_image,
)

__all__ = [
    "FakeLogger",
    "FixedWidthMeasurer",
    "capture_log_output",
    "create_test_image",
    "local_timestamp",
    "setup_test_directory",
    "utc_timestamp",
    "write_test_image",
]
