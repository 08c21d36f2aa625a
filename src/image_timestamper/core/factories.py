"""Factory classes for creating configured service instances."""

from typing import Optional

from .models import StampConfig
from .observability import MetricsCollector, StructuredLogger
from .protocols import LoggerProtocol, TextMeasurerProtocol
from .services import (
    DirectoryFileDiscoveryService,
    ImageStampingService,
    SerialBatchProcessor,
    StampingOrchestrator,
)


class LoggerFactory:
    """Factory for creating logger instances."""

    @staticmethod
    def create_logger(name: str, level: Optional[str] = None) -> LoggerProtocol:
        """Create a configured structured logger."""
        return StructuredLogger(name, level)


class TimestamperFactory:
    """Factory for creating the complete stamping pipeline."""

    @staticmethod
    def create_pipeline(
        config: Optional[StampConfig] = None,
        logger: Optional[LoggerProtocol] = None,
        measurer: Optional[TextMeasurerProtocol] = None,
        metrics_collector: Optional[MetricsCollector] = None,
        fail_fast: bool = False,
    ) -> StampingOrchestrator:
        """Create a fully configured stamping pipeline."""
        if config is None:
            config = StampConfig()

        if metrics_collector is None:
            metrics_collector = MetricsCollector()

        if logger is None:
            logger = LoggerFactory.create_logger("image-timestamper")

        file_discovery = DirectoryFileDiscoveryService(config, logger)
        stamping_service = ImageStampingService(
            config, logger, measurer=measurer, metrics_collector=metrics_collector
        )
        batch_processor = SerialBatchProcessor(
            stamping_service, logger, fail_fast=fail_fast
        )

        return StampingOrchestrator(
            config=config,
            file_discovery=file_discovery,
            batch_processor=batch_processor,
            logger=logger,
            measurer=measurer,
            metrics_collector=metrics_collector,
        )
