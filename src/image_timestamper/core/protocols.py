"""Protocol definitions for dependency injection and testability."""

from abc import ABC, abstractmethod
from typing import Any, List, Protocol

from .models import StampItem, StampResult


class TextMeasurerProtocol(Protocol):
    """Protocol for measuring the rendered width of the timestamp text."""

    def measure(self, text: str, font_size: float) -> float:
        """Return the width in pixels of ``text`` at ``font_size``."""
        ...


class LoggerProtocol(Protocol):
    """Protocol for logging operations."""

    def debug(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log debug message."""
        ...

    def info(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log info message."""
        ...

    def warning(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log warning message."""
        ...

    def error(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log error message."""
        ...


class FileDiscoveryService(ABC):
    """Abstract service for discovering files to stamp."""

    @abstractmethod
    def discover_files(self, directory: str) -> List[str]:
        """Discover image file names in ``directory``."""
        ...


class StampingService(ABC):
    """Abstract service for stamping images."""

    @abstractmethod
    def process_item(self, item: StampItem, raise_on_error: bool = False) -> StampResult:
        """Stamp a single image."""
        ...


class BatchProcessor(ABC):
    """Abstract batch processor."""

    @abstractmethod
    def process_batch(self, items: List[StampItem]) -> List[StampResult]:
        """Stamp a batch of images."""
        ...
