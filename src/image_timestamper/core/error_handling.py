# src/image_timestamper/core/error_handling.py

import functools

from .exceptions import ImageTimestamperError, StampError
from .logging_config import get_child_logger


def with_error_handling(func):
    """
    A decorator to wrap functions with standardized error handling.

    Domain errors pass through untouched after being logged; anything else is
    wrapped in StampError with the original exception chained as the cause.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_child_logger(func.__name__)
        try:
            return func(*args, **kwargs)
        except ImageTimestamperError as e:
            logger.debug(f"{type(e).__name__} in '{func.__name__}': {e}")
            raise
        except Exception as e:
            logger.error(
                f"Unexpected error in '{func.__name__}': {e}",
                exc_info=True
            )
            raise StampError(f"Unexpected error in {func.__name__}: {e}") from e
    return wrapper


class BatchOperationContextManager:
    """
    Context manager for batch operations to collect and summarize errors.
    """
    def __init__(self, operation_name="Batch Operation"):
        self.operation_name = operation_name
        self.errors = []
        self.logger = get_child_logger(self.__class__.__name__)

    def __enter__(self):
        self.logger.info(f"Starting {self.operation_name}.")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.logger.error(
                f"{self.operation_name} aborted due to an unhandled exception: {exc_val}",
                exc_info=(exc_type, exc_val, exc_tb)
            )
        if self.errors:
            self.logger.warning(
                f"{self.operation_name} completed with {len(self.errors)} error(s)."
            )
            for i, error_detail in enumerate(self.errors):
                item_identifier = error_detail.get('item', 'Unknown item')
                error_message = error_detail.get('error', 'Unknown error')
                self.logger.error(
                    f"  Error {i+1}/{len(self.errors)} for item '{item_identifier}': {error_message}"
                )
        elif not exc_type:
            self.logger.info(f"{self.operation_name} completed successfully.")

        # Never suppress: exceptions raised inside the block reach the caller.
        return False

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def add_error(self, error_message: str, item_identifier: str = "Unknown item"):
        """
        Call this method within the 'with' block to report an error for a specific item.

        Args:
            error_message (str): The error message or exception string.
            item_identifier (str): A string identifying the item that failed (e.g., filename).
        """
        self.errors.append({"item": item_identifier, "error": str(error_message)})
        self.logger.debug(f"Error added for item '{item_identifier}' in {self.operation_name}: {error_message}")
