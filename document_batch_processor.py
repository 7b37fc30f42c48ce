"""
Document Batch Processor for analyzing many documents at once.
Turns per-document failures into structured errors instead of aborting the batch.
"""

import logging
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional

import pandas as pd

from docsort_engine.analysis.composer import AnalysisRecord, DocumentAnalyzer, DocumentInput
from docsort_engine.errors import InvalidDocumentInputError
from docsort_engine.extraction.hints import build_structured_hints

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@dataclass
class ProcessingError:
    """Details of a processing error."""
    file_name: str
    error_type: str
    error_message: str
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


@dataclass
class BatchStats:
    """Statistics for batch processing."""
    total_files: int = 0
    processed: int = 0
    successful: int = 0
    failed: int = 0

    # Outcome counts
    degraded: int = 0
    template_enhanced: int = 0
    category_counts: Dict[str, int] = field(default_factory=dict)

    # Confidence statistics
    total_confidence: int = 0

    # Timing
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def average_confidence(self) -> float:
        """Calculate average confidence."""
        if self.successful == 0:
            return 0.0
        return self.total_confidence / self.successful

    @property
    def processing_time(self) -> float:
        """Calculate total processing time in seconds."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return 0.0

    @property
    def success_rate(self) -> float:
        """Calculate success rate as percentage."""
        if self.total_files == 0:
            return 0.0
        return (self.successful / self.total_files) * 100


@dataclass
class BatchResult:
    """Complete result of batch processing."""
    stats: BatchStats
    records: List[AnalysisRecord]
    errors: List[ProcessingError]
    error_summary: Dict[str, int] = field(default_factory=dict)


class DocumentBatchProcessor:
    """Batch processor for document analysis."""

    def __init__(self, analyzer: Optional[DocumentAnalyzer] = None, derive_hints: bool = False):
        """
        Initialize the batch processor.

        Args:
            analyzer: Analyzer to use (defaults to one over the built-in registries)
            derive_hints: If True, inputs without hints get hints derived from their text
        """
        self.analyzer = analyzer or DocumentAnalyzer.with_default_registries()
        self.derive_hints = derive_hints

        logger.info(f"Initialized batch processor: derive_hints={derive_hints}")

    def process_batch(
        self,
        documents: List[DocumentInput],
        progress_callback: Optional[Callable[[int, int, str], None]] = None
    ) -> BatchResult:
        """
        Analyze a batch of documents in order.

        Args:
            documents: Text acquisition outputs
            progress_callback: Optional callback(current, total, message)

        Returns:
            BatchResult with records in input order and one error per failed document
        """
        stats = BatchStats(
            total_files=len(documents),
            start_time=datetime.now()
        )

        records = []
        errors = []
        error_types = {}

        logger.info(f"Starting batch analysis of {len(documents)} documents")

        for idx, document in enumerate(documents):
            file_name = getattr(document, "filename", f"document_{idx + 1}")
            try:
                if progress_callback:
                    progress_callback(idx + 1, len(documents), f"Analyzing: {file_name}")

                logger.debug(f"Analyzing document {idx + 1}/{len(documents)}: {file_name}")

                record = self.analyzer.analyze(self._with_hints(document))

                records.append(record)
                stats.processed += 1
                stats.successful += 1
                stats.total_confidence += record.confidence
                stats.category_counts[record.category] = stats.category_counts.get(record.category, 0) + 1
                if record.is_degraded:
                    stats.degraded += 1
                if record.template_id:
                    stats.template_enhanced += 1

            except InvalidDocumentInputError as e:
                self._record_error(errors, error_types, stats, file_name, "INVALID_INPUT", str(e))
                logger.error(f"Invalid input for {file_name}: {e}")

            except Exception as e:
                self._record_error(
                    errors, error_types, stats, file_name,
                    "PROCESSING_ERROR", f"{type(e).__name__}: {str(e)}"
                )
                logger.error(f"Processing error in {file_name}: {traceback.format_exc()}")

        stats.end_time = datetime.now()

        logger.info(
            f"Batch analysis complete: {stats.successful}/{stats.total_files} successful, "
            f"avg confidence: {stats.average_confidence:.1f}, time: {stats.processing_time:.1f}s"
        )

        return BatchResult(
            stats=stats,
            records=records,
            errors=errors,
            error_summary=error_types
        )

    def _with_hints(self, document: DocumentInput) -> DocumentInput:
        """Attach derived hints when enabled and the input has none."""
        if not self.derive_hints or not isinstance(document, DocumentInput):
            return document
        if document.hints is not None or not isinstance(document.text, str):
            return document
        return DocumentInput(
            text=document.text,
            filename=document.filename,
            source_confidence=document.source_confidence,
            hints=build_structured_hints(document.text, config=self.analyzer.config),
            content_available=document.content_available,
            failure_reason=document.failure_reason,
        )

    @staticmethod
    def _record_error(
        errors: List[ProcessingError],
        error_types: Dict[str, int],
        stats: BatchStats,
        file_name: str,
        error_type: str,
        message: str
    ) -> None:
        errors.append(ProcessingError(
            file_name=file_name,
            error_type=error_type,
            error_message=message
        ))
        stats.failed += 1
        stats.processed += 1
        error_types[error_type] = error_types.get(error_type, 0) + 1

    def records_to_dataframe(self, records: List[AnalysisRecord]) -> pd.DataFrame:
        """
        Convert analysis records to a pandas DataFrame.

        Args:
            records: List of AnalysisRecord objects

        Returns:
            pandas DataFrame with one row per document
        """
        rows = []
        for record in records:
            metadata = record.metadata
            rows.append({
                "Filename": record.filename,
                "Category": record.category,
                "Folder": self.analyzer.categories.folder_for(record.category),
                "Year": record.year,
                "Confidence": record.confidence,
                "Company": record.company,
                "Template": record.template_id or "",
                "Category Source": record.category_source.value,
                "Content Status": record.content_status.value,
                "Keywords": ", ".join(record.matched_keywords),
                "Total Amount": metadata.total_amount,
                "Dates": ", ".join(metadata.dates or ()),
                "Fiscal Codes": ", ".join(metadata.fiscal_codes or ()),
                "IBANs": ", ".join(metadata.bank_account_numbers or ()),
                "Protocol Numbers": ", ".join(metadata.protocol_numbers or ()),
            })

        return pd.DataFrame(rows)

    def errors_to_dataframe(self, errors: List[ProcessingError]) -> pd.DataFrame:
        """
        Convert processing errors to a pandas DataFrame.

        Args:
            errors: List of ProcessingError objects

        Returns:
            pandas DataFrame
        """
        rows = []
        for error in errors:
            rows.append({
                "File Name": error.file_name,
                "Error Type": error.error_type,
                "Error Message": error.error_message,
                "Timestamp": error.timestamp,
            })

        return pd.DataFrame(rows)

    def category_summary(self, records: List[AnalysisRecord]) -> pd.DataFrame:
        """
        Summarize records per category.

        Returns:
            DataFrame indexed by category with document count, average
            confidence and summed amounts, ordered by count
        """
        df = self.records_to_dataframe(records)
        if df.empty:
            return pd.DataFrame(columns=["Documents", "Average Confidence", "Total Amount"])

        df["Total Amount"] = pd.to_numeric(df["Total Amount"], errors="coerce")
        summary = df.groupby("Category").agg(
            Documents=("Filename", "count"),
            **{
                "Average Confidence": ("Confidence", "mean"),
                "Total Amount": ("Total Amount", "sum"),
            }
        )
        return summary.sort_values("Documents", ascending=False, kind="stable")
