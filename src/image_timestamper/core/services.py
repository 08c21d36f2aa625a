"""Service implementations for the image timestamper pipeline."""

import os
import time
from typing import List, Optional

from .error_handling import BatchOperationContextManager
from .exceptions import ImageTimestamperError, StampIOError
from .image_utils import calculate_output_path, default_output_path, is_supported_image
from .models import BatchReport, StampConfig, StampItem, StampResult
from .observability import LogContext, MetricsCollector, PerformanceMetrics
from .protocols import (
    BatchProcessor,
    FileDiscoveryService,
    LoggerProtocol,
    StampingService,
    TextMeasurerProtocol,
)
from .stamper import stamp_image


class DirectoryFileDiscoveryService(FileDiscoveryService):
    """Service for discovering image files in a local directory."""

    def __init__(self, config: StampConfig, logger: LoggerProtocol):
        self._config = config
        self._logger = logger

    def discover_files(self, directory: str) -> List[str]:
        """
        List image file names in ``directory``, in the filesystem's listing order.

        Entries are matched on extension, case-insensitively; anything that is
        not a regular file is skipped.
        """
        self._logger.debug(f"Discovering image files in {directory}")

        try:
            entries = os.listdir(directory)
        except FileNotFoundError as e:
            raise StampIOError(f"Input directory does not exist: {directory}") from e
        except NotADirectoryError as e:
            raise StampIOError(f"Input path is not a directory: {directory}") from e
        except OSError as e:
            raise StampIOError(f"Cannot list input directory {directory}: {e}") from e

        files = [
            name
            for name in entries
            if is_supported_image(name, self._config.image_extensions)
            and os.path.isfile(os.path.join(directory, name))
        ]

        self._logger.info(f"Found {len(files)} image files to process")
        return files


class ImageStampingService(StampingService):
    """Service for stamping individual images."""

    def __init__(
        self,
        config: StampConfig,
        logger: LoggerProtocol,
        measurer: Optional[TextMeasurerProtocol] = None,
        metrics_collector: Optional[MetricsCollector] = None,
    ):
        self._config = config
        self._logger = logger
        self._measurer = measurer
        self._metrics_collector = metrics_collector

    def process_item(self, item: StampItem, raise_on_error: bool = False) -> StampResult:
        """
        Stamp a single image.

        Failures are recorded on the returned result unless ``raise_on_error``
        is set, in which case the error is logged and re-raised.
        """
        log_context = LogContext(
            correlation_id=f"stamp_{os.path.basename(item.input_path)}_{int(time.time() * 1000)}",
            operation="stamp_image",
            component="image_stamping_service",
        ).with_metadata(input_path=item.input_path, output_path=item.output_path)

        start_time = time.time()
        self._logger.debug("Stamping image", log_context)

        try:
            result = stamp_image(
                item.input_path, item.output_path, self._config, self._measurer
            )
        except ImageTimestamperError as e:
            result = StampResult(
                input_path=item.input_path,
                output_path=item.output_path,
                success=False,
                error=str(e),
                error_type=type(e).__name__,
                processing_time=time.time() - start_time,
            )
            self._logger.error(
                "Image stamping failed",
                log_context.with_metadata(error=str(e), error_type=type(e).__name__),
            )
            self._record(item, start_time, result)
            if raise_on_error:
                raise
            return result

        self._logger.debug(
            "Successfully stamped image",
            log_context,
            processing_time_ms=result.processing_time * 1000,
        )
        self._record(item, start_time, result)
        return result

    def _record(self, item: StampItem, start_time: float, result: StampResult) -> None:
        if self._metrics_collector is None:
            return
        self._metrics_collector.record_metric(
            PerformanceMetrics(
                operation="stamp_image",
                start_time=start_time,
                end_time=start_time + result.processing_time,
                success=result.success,
                error_message=result.error or None,
                metadata={"input_path": item.input_path},
            )
        )


class SerialBatchProcessor(BatchProcessor):
    """
    Serial batch processor implementation.

    Items are stamped one at a time in the order given. With ``fail_fast``
    the first failure stops the batch and propagates; otherwise every item is
    attempted and failures are returned as unsuccessful results.
    """

    def __init__(
        self,
        processing_service: StampingService,
        logger: LoggerProtocol,
        fail_fast: bool = False,
    ):
        self._processing_service = processing_service
        self._logger = logger
        self._fail_fast = fail_fast

    def process_batch(self, items: List[StampItem]) -> List[StampResult]:
        """Process batch of images serially."""
        results = []

        for item in items:
            self._logger.info(f"Processing: {os.path.basename(item.input_path)}")
            result = self._processing_service.process_item(
                item, raise_on_error=self._fail_fast
            )
            results.append(result)

        return results


class WorkItemFactory:
    """Factory for creating work items."""

    @staticmethod
    def create_work_items(
        file_names: List[str], input_dir: str, output_dir: str
    ) -> List[StampItem]:
        """Pair each input file with a same-named file in ``output_dir``."""
        return [
            StampItem(
                input_path=os.path.join(input_dir, name),
                output_path=calculate_output_path(name, output_dir),
            )
            for name in file_names
        ]


class StampingOrchestrator:
    """Main orchestrator for single-file and batch stamping."""

    def __init__(
        self,
        config: StampConfig,
        file_discovery: FileDiscoveryService,
        batch_processor: BatchProcessor,
        logger: LoggerProtocol,
        measurer: Optional[TextMeasurerProtocol] = None,
        metrics_collector: Optional[MetricsCollector] = None,
    ):
        self._config = config
        self._file_discovery = file_discovery
        self._batch_processor = batch_processor
        self._logger = logger
        self._measurer = measurer
        self._metrics_collector = metrics_collector

    def stamp_file(self, input_path: str, output_path: Optional[str] = None) -> StampResult:
        """
        Stamp one image. Errors propagate to the caller.

        When ``output_path`` is omitted the output is written beside the input
        as ``<output_prefix><basename>``.
        """
        if not output_path:
            output_path = default_output_path(input_path, self._config.output_prefix)
        try:
            return stamp_image(input_path, output_path, self._config, self._measurer)
        except ImageTimestamperError as e:
            self._logger.error(f"Error processing image: {e}")
            raise

    def process_directory(self, input_dir: str, output_dir: str) -> BatchReport:
        """Stamp every supported image in ``input_dir`` into ``output_dir``."""
        start_time = time.time()

        try:
            os.makedirs(output_dir, exist_ok=True)
        except OSError as e:
            raise StampIOError(f"Cannot create output directory {output_dir}: {e}") from e

        file_names = self._file_discovery.discover_files(input_dir)
        report = BatchReport(
            input_dir=input_dir, output_dir=output_dir, found_count=len(file_names)
        )

        if not file_names:
            self._logger.info("No image files found to process")
            return report

        work_items = WorkItemFactory.create_work_items(file_names, input_dir, output_dir)

        with BatchOperationContextManager(
            operation_name=f"Batch stamping of {input_dir}"
        ) as batch_manager:
            report.results = self._batch_processor.process_batch(work_items)

            for result in report.failed:
                batch_manager.add_error(
                    item_identifier=result.input_path,
                    error_message=result.error or "Unknown error",
                )

        report.error_count = len(report.failed)
        report.processed_count = len(report.results) - report.error_count
        report.processing_time = time.time() - start_time

        if report.error_count:
            self._logger.warning(
                f"Batch processing complete with errors! Processed "
                f"{report.processed_count} of {report.found_count} images, "
                f"{report.error_count} failed"
            )
        else:
            self._logger.info(
                f"Batch processing complete! Processed {report.processed_count} images"
            )

        if self._metrics_collector is not None:
            summary = self._metrics_collector.get_summary("stamp_image")
            if summary:
                self._logger.debug(
                    "Stamping timings",
                    operations=summary["total_operations"],
                    avg_ms=round(summary["avg_duration"] * 1000, 1),
                    max_ms=round(summary["max_duration"] * 1000, 1),
                )
        return report
