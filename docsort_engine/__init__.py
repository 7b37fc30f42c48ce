"""
DocSort Engine - Document Classification and Extraction.

Classifies Italian household and administrative documents (tax notices,
utility bills, contracts, bank statements, insurance) from their text and
filename, and extracts amounts, dates, fiscal identifiers and issuer.

Main Components:
    - patterns: Category keyword tables and issuer templates
    - config: Analysis configuration and registry builders
    - categorisation: Keyword classification engine
    - templates: Issuer template matching
    - extraction: Metadata extraction, year resolution, structured hints
    - analysis: Record composition
"""

from typing import Dict, Optional

from .analysis.composer import (
    DocumentAnalyzer,
    DocumentInput,
    AnalysisRecord,
    ContentStatus,
    CategorySource,
    build_default_analyzer,
)
from .categorisation.engine import DocumentClassifier, ClassificationResult
from .templates.matcher import TemplateMatcher, TemplateMatch, template_confidence
from .extraction.metadata_extractor import Metadata, extract_metadata
from .extraction.year_resolver import resolve_year
from .extraction.hints import StructuredHints, build_structured_hints
from .config.analysis_config import ANALYSIS_CONFIG
from .config.registry_loader import (
    Category,
    IssuerTemplate,
    CategoryRegistry,
    TemplateRegistry,
    build_category_registry,
    build_template_registry,
    load_category_csv,
)
from .errors import InvalidDocumentInputError, RegistryConfigurationError
from .patterns import FALLBACK_CATEGORY


__version__ = "1.0.0"
__all__ = [
    # Analysis
    "DocumentAnalyzer",
    "DocumentInput",
    "AnalysisRecord",
    "ContentStatus",
    "CategorySource",
    "build_default_analyzer",
    # Classification
    "DocumentClassifier",
    "ClassificationResult",
    # Templates
    "TemplateMatcher",
    "TemplateMatch",
    "template_confidence",
    # Extraction
    "Metadata",
    "extract_metadata",
    "resolve_year",
    "StructuredHints",
    "build_structured_hints",
    # Configuration
    "ANALYSIS_CONFIG",
    "Category",
    "IssuerTemplate",
    "CategoryRegistry",
    "TemplateRegistry",
    "build_category_registry",
    "build_template_registry",
    "load_category_csv",
    "FALLBACK_CATEGORY",
    # Errors
    "InvalidDocumentInputError",
    "RegistryConfigurationError",
    # Main function
    "run_document_analysis",
]


def run_document_analysis(
    text: Optional[str],
    filename: str,
    source_confidence: Optional[int] = None,
    hints: Optional[Dict] = None,
    current_year: Optional[int] = None,
) -> Dict:
    """
    Main entry point for document analysis.

    This function orchestrates the complete pipeline:
    1. Classify the document on keywords
    2. Match issuer templates and apply the override rule
    3. Extract metadata and resolve the year
    4. Return the analysis record as a dictionary

    Args:
        text: Document text, or None when acquisition produced no content
        filename: Document filename
        source_confidence: Optional acquisition confidence (0-100)
        hints: Optional {amounts, dates, codes, companies} dict
        current_year: Year treated as "now" (defaults to the system clock)

    Returns:
        Dictionary view of the AnalysisRecord

    Example:
        >>> result = run_document_analysis("IMU 2023 comune di Roma", "f24.pdf")
        >>> result["category"]
        'IMU'
    """
    if hints is not None and not isinstance(hints, dict):
        raise InvalidDocumentInputError(f"hints must be a dict, got {type(hints).__name__}")

    analyzer = build_default_analyzer(current_year=current_year)
    structured = StructuredHints.from_dict(hints) if hints else None

    if text is None:
        document = DocumentInput.unavailable(
            filename,
            source_confidence=source_confidence,
            hints=structured,
        )
    else:
        document = DocumentInput(
            text=text,
            filename=filename,
            source_confidence=source_confidence,
            hints=structured,
        )
    return analyzer.analyze(document).to_dict()
