"""
Analysis composition: one immutable record per document.
"""

from .composer import (
    DocumentAnalyzer,
    DocumentInput,
    AnalysisRecord,
    ContentStatus,
    CategorySource,
    UNKNOWN_COMPANY,
    build_default_analyzer,
)

__all__ = [
    "DocumentAnalyzer",
    "DocumentInput",
    "AnalysisRecord",
    "ContentStatus",
    "CategorySource",
    "UNKNOWN_COMPANY",
    "build_default_analyzer",
]
