# ABOUTME: Sparse-namespace probing core: path templates, probing, termination and walkers
# ABOUTME: Discovers which voice line ids exist in a store that only answers point queries

"""
Core Layer: Probing a directory-less asset store

This layer handles:
- Rendering coordinates to exact store paths
- Per-language existence probing
- Run-length termination of sparse dimensions
- Walking flat and nested id spaces and handing hits to the sink

Data Flow: ExtractionConfiguration → walkers → probe results → persistence/ sink
"""

from .models import (
    Category,
    CategorySummary,
    ExpansionRange,
    ExtractionConfiguration,
    FlatCoordinate,
    ManifestEntry,
    NestedCoordinate,
    ProbeResult,
    normalize_languages,
)
from .termination import RunLengthTermination, ScanDecision

# Import service on-demand to avoid circular imports
# Use: from voiceline_extractor.core.service import ExtractionService

__all__ = [
    "Category",
    "CategorySummary",
    "ExpansionRange",
    "ExtractionConfiguration",
    "FlatCoordinate",
    "ManifestEntry",
    "NestedCoordinate",
    "ProbeResult",
    "RunLengthTermination",
    "ScanDecision",
    "normalize_languages",
]
