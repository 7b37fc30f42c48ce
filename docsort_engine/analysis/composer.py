"""
Document Analyzer - composes classification, template matching, metadata
extraction and year resolution into one immutable analysis record.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from ..config.analysis_config import ANALYSIS_CONFIG
from ..config.registry_loader import (
    CategoryRegistry,
    TemplateRegistry,
    build_category_registry,
    build_template_registry,
)
from ..categorisation.engine import ClassificationResult, DocumentClassifier
from ..categorisation.preprocess import expand_filename_text, make_excerpt
from ..errors import InvalidDocumentInputError
from ..extraction.hints import StructuredHints, validate_hints
from ..extraction.metadata_extractor import Metadata, extract_metadata
from ..extraction.year_resolver import resolve_year
from ..templates.matcher import TemplateMatch, TemplateMatcher

logger = logging.getLogger(__name__)

UNKNOWN_COMPANY = "unknown"


class ContentStatus(Enum):
    """Whether text acquisition produced any content."""
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class CategorySource(Enum):
    """Which stage decided the final category."""
    KEYWORD = "keyword"
    TEMPLATE = "template"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class DocumentInput:
    """Text acquisition output for one document."""
    text: Optional[str]
    filename: str
    source_confidence: Optional[int] = None
    hints: Optional[StructuredHints] = None
    content_available: bool = True
    failure_reason: Optional[str] = None

    @classmethod
    def unavailable(
        cls,
        filename: str,
        reason: str = "no text could be extracted",
        source_confidence: Optional[int] = None,
        hints: Optional[StructuredHints] = None
    ) -> "DocumentInput":
        """Input for a document text acquisition could not read."""
        return cls(
            text=None,
            filename=filename,
            source_confidence=source_confidence,
            hints=hints,
            content_available=False,
            failure_reason=reason,
        )


@dataclass(frozen=True)
class AnalysisRecord:
    """Final, immutable analysis of one document."""
    filename: str
    excerpt: str
    category: str
    confidence: int
    matched_keywords: Tuple[str, ...]
    company: str
    template_id: Optional[str]
    extracted_values: Mapping[str, str]
    year: str
    metadata: Metadata

    # Provenance
    category_source: CategorySource
    enhanced_by: Optional[str] = None
    classification_confidence: int = 0
    template_confidence: Optional[int] = None
    source_confidence: Optional[int] = None
    content_status: ContentStatus = ContentStatus.AVAILABLE
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_degraded(self) -> bool:
        return self.content_status is ContentStatus.UNAVAILABLE

    def to_dict(self) -> Dict:
        """JSON-ready view of the record."""
        return {
            "filename": self.filename,
            "excerpt": self.excerpt,
            "category": self.category,
            "confidence": self.confidence,
            "matched_keywords": list(self.matched_keywords),
            "company": self.company,
            "template_id": self.template_id,
            "extracted_values": dict(self.extracted_values),
            "year": self.year,
            "metadata": self.metadata.to_dict(),
            "category_source": self.category_source.value,
            "enhanced_by": self.enhanced_by,
            "classification_confidence": self.classification_confidence,
            "template_confidence": self.template_confidence,
            "source_confidence": self.source_confidence,
            "content_status": self.content_status.value,
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class _MergedClassification:
    """Classification after the template override rule."""
    category: str
    company: str
    confidence: int
    category_source: CategorySource
    template_id: Optional[str] = None
    template_confidence: Optional[int] = None
    extracted_values: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    enhanced_by: Optional[str] = None


def _merge(
    base: ClassificationResult,
    template: Optional[TemplateMatch],
    fallback_id: str
) -> _MergedClassification:
    """
    Apply the merge rule between keyword classification and template match.

    The template is authoritative for category and company; confidence is
    the higher of the two. Matched keywords always come from the base result.
    """
    if template is None:
        source = CategorySource.FALLBACK if base.category == fallback_id else CategorySource.KEYWORD
        return _MergedClassification(
            category=base.category,
            company=UNKNOWN_COMPANY,
            confidence=base.confidence,
            category_source=source,
        )

    return _MergedClassification(
        category=template.category,
        company=template.company,
        confidence=max(base.confidence, template.confidence),
        category_source=CategorySource.TEMPLATE,
        template_id=template.template_id,
        template_confidence=template.confidence,
        extracted_values=template.extracted_values,
        enhanced_by="template_matching",
    )


class DocumentAnalyzer:
    """Analyzes documents into AnalysisRecords."""

    def __init__(
        self,
        categories: CategoryRegistry,
        templates: TemplateRegistry,
        config: Optional[Dict] = None,
        current_year: Optional[int] = None,
        debug_mode: bool = False
    ):
        """
        Initialize the analyzer with explicit registries.

        Args:
            categories: Category registry used by the classifier
            templates: Issuer template registry used by the matcher
            config: Analysis configuration (defaults to ANALYSIS_CONFIG)
            current_year: Year treated as "now" by the year resolver
                (defaults to the system clock at each call)
            debug_mode: If True, classifier results carry a scoring rationale
        """
        self.config = config or ANALYSIS_CONFIG
        self.categories = categories
        self.templates = templates
        self.classifier = DocumentClassifier(categories, config=self.config, debug_mode=debug_mode)
        self.template_matcher = TemplateMatcher(templates, config=self.config)
        self.current_year = current_year

        logger.info(
            "Initialized document analyzer: %d categories, %d issuer templates",
            len(categories), len(templates)
        )

    @classmethod
    def with_default_registries(cls, **kwargs) -> "DocumentAnalyzer":
        """Analyzer over the built-in category and issuer template tables."""
        categories = build_category_registry()
        templates = build_template_registry(categories)
        return cls(categories, templates, **kwargs)

    def analyze_text(
        self,
        text: str,
        filename: str,
        source_confidence: Optional[int] = None,
        hints: Optional[StructuredHints] = None
    ) -> AnalysisRecord:
        """Analyze already-acquired text; see analyze()."""
        return self.analyze(DocumentInput(
            text=text,
            filename=filename,
            source_confidence=source_confidence,
            hints=hints,
        ))

    def analyze(self, document: DocumentInput) -> AnalysisRecord:
        """
        Analyze one document.

        When acquisition reported no content, the record is built from
        filename-derived text and flagged ContentStatus.UNAVAILABLE.

        Args:
            document: Text acquisition output

        Returns:
            AnalysisRecord

        Raises:
            InvalidDocumentInputError: if the input is malformed
        """
        self._validate(document)

        warnings = []
        if document.content_available:
            text = document.text
            content_status = ContentStatus.AVAILABLE
        else:
            text = expand_filename_text(document.filename)
            content_status = ContentStatus.UNAVAILABLE
            reason = document.failure_reason or "no content available"
            warnings.append(f"content unavailable: {reason}; analyzed filename only")
            logger.warning("No content for %s (%s), using filename only", document.filename, reason)

        base = self.classifier.classify(text, document.filename)
        template = self.template_matcher.match_template(text, document.filename, document.hints)
        merged = _merge(base, template, self.categories.fallback_id)

        metadata = extract_metadata(text)
        year = resolve_year(text, document.filename, current_year=self.current_year, config=self.config)

        # Filename-derived text is not document content
        excerpt = ""
        if content_status is ContentStatus.AVAILABLE:
            excerpt_settings = self.config["excerpt"]
            excerpt = make_excerpt(text, excerpt_settings["max_length"], excerpt_settings["ellipsis"])

        record = AnalysisRecord(
            filename=document.filename,
            excerpt=excerpt,
            category=merged.category,
            confidence=merged.confidence,
            matched_keywords=base.matched_keywords,
            company=merged.company,
            template_id=merged.template_id,
            extracted_values=merged.extracted_values,
            year=year,
            metadata=metadata,
            category_source=merged.category_source,
            enhanced_by=merged.enhanced_by,
            classification_confidence=base.confidence,
            template_confidence=merged.template_confidence,
            source_confidence=document.source_confidence,
            content_status=content_status,
            warnings=tuple(warnings),
        )

        logger.debug(
            "Analyzed %s -> %s/%s (%d%% confidence, source=%s)",
            record.filename, record.category, record.year,
            record.confidence, record.category_source.value
        )
        return record

    def _validate(self, document: DocumentInput) -> None:
        """Fail fast on malformed input before any stage runs."""
        if not isinstance(document, DocumentInput):
            raise InvalidDocumentInputError(
                f"expected DocumentInput, got {type(document).__name__}"
            )
        if not isinstance(document.filename, str):
            raise InvalidDocumentInputError(
                f"filename must be a string, got {type(document.filename).__name__}"
            )
        if document.content_available and not isinstance(document.text, str):
            raise InvalidDocumentInputError(
                f"text must be a string, got {type(document.text).__name__}; "
                "use DocumentInput.unavailable() when acquisition produced no content"
            )
        if document.source_confidence is not None:
            if isinstance(document.source_confidence, bool) or not isinstance(document.source_confidence, int):
                raise InvalidDocumentInputError("source_confidence must be an int or None")
            if not 0 <= document.source_confidence <= 100:
                raise InvalidDocumentInputError(
                    f"source_confidence must be within 0-100, got {document.source_confidence}"
                )
        if document.hints is not None:
            if not isinstance(document.hints, StructuredHints):
                raise InvalidDocumentInputError(
                    f"hints must be StructuredHints, got {type(document.hints).__name__}"
                )
            validate_hints(document.hints)


def build_default_analyzer(**kwargs) -> DocumentAnalyzer:
    """Build an analyzer over the built-in registries."""
    return DocumentAnalyzer.with_default_registries(**kwargs)
