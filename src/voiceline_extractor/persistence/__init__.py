# ABOUTME: Persistence of extracted voice lines and their manifest logs
# ABOUTME: Exposes the extraction sink and manifest helpers

from .sink import ExtractionSink, compute_content_hash, log_file_name, utcnow

__all__ = [
    "ExtractionSink",
    "compute_content_hash",
    "log_file_name",
    "utcnow",
]
