# ABOUTME: Logging configuration, progress tracking, and output formatting
# ABOUTME: Provides rich console output and structured logging for extraction runs

# Import from local files in utils/logging
from .config import LoggingMode, configure_logging, get_logging_status
from .progress import ScanProgressTracker, create_scan_progress
from .utils import ScanContext, get_logger, with_run_context

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "get_logging_status",
    # Progress
    "ScanProgressTracker",
    "create_scan_progress",
    # Utilities
    "ScanContext",
    "get_logger",
    "with_run_context",
]
