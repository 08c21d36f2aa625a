"""Reading and formatting file modification times."""

import os
from datetime import datetime, timezone
from typing import Optional, Union

from .exceptions import StampIOError
from .models import StampConfig

PathLike = Union[str, "os.PathLike[str]"]


def read_modified_time(path: PathLike) -> float:
    """
    Read the last-modified time of ``path`` from filesystem metadata.

    The value is read fresh on every call; nothing is cached.

    Raises:
        StampIOError: If the file does not exist or cannot be stat'ed.
    """
    try:
        return os.stat(path).st_mtime
    except FileNotFoundError as exc:
        raise StampIOError(f"Input file not found: {path}") from exc
    except OSError as exc:
        raise StampIOError(f"Cannot read metadata for {path}: {exc}") from exc


def format_timestamp(mtime: float, config: Optional[StampConfig] = None) -> str:
    """
    Format a POSIX timestamp as ``MM/DD/YYYY, HH:MM:SS`` on a 24-hour clock.

    Only numeric strftime directives are used, so the result does not depend
    on the host locale. Local time is used unless ``config.use_utc`` is set.
    """
    config = config or StampConfig()
    tz = timezone.utc if config.use_utc else None
    moment = datetime.fromtimestamp(mtime, tz=tz)
    return moment.strftime(config.timestamp_format)


def read_timestamp_text(path: PathLike, config: Optional[StampConfig] = None) -> str:
    """Read ``path``'s modification time and return it formatted for display."""
    return format_timestamp(read_modified_time(path), config)
