"""
Structured hints supplied alongside document text.

Text acquisition (PDF parsing, OCR) may pre-extract candidate facts; the
template matcher uses the recognized company names as corroboration.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from ..config.analysis_config import ANALYSIS_CONFIG
from ..categorisation.pattern_matching import fuzzy_match_keywords
from ..errors import InvalidDocumentInputError
from ..patterns.issuer_templates import KNOWN_COMPANIES
from .metadata_extractor import (
    extract_amounts,
    extract_bank_account_numbers,
    extract_dates,
    extract_fiscal_codes,
)

logger = logging.getLogger(__name__)

HINT_FIELDS = ("amounts", "dates", "codes", "companies")


def _is_sequence(value) -> bool:
    return isinstance(value, (list, tuple))


@dataclass(frozen=True)
class StructuredHints:
    """Pre-extracted candidate facts from the acquisition stage."""
    amounts: Tuple[float, ...] = ()
    dates: Tuple[str, ...] = ()
    codes: Tuple[str, ...] = ()
    companies: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict) -> "StructuredHints":
        """
        Build hints from the acquisition stage's {amounts, dates, codes, companies} dict.

        Missing or None fields are empty; any other non-list value raises
        InvalidDocumentInputError rather than being split into characters.
        """
        values = {}
        for name in HINT_FIELDS:
            value = data.get(name)
            if value is None:
                value = ()
            elif not _is_sequence(value):
                raise InvalidDocumentInputError(
                    f"hints.{name} must be a list, got {type(value).__name__}"
                )
            values[name] = tuple(value)
        hints = cls(**values)
        validate_hints(hints)
        return hints


def validate_hints(hints: StructuredHints) -> None:
    """
    Check hint fields are sequences and company names are strings.

    Raises:
        InvalidDocumentInputError: on the first malformed field
    """
    for name in HINT_FIELDS:
        value = getattr(hints, name)
        if not _is_sequence(value):
            raise InvalidDocumentInputError(
                f"hints.{name} must be a sequence, got {type(value).__name__}"
            )
    if not all(isinstance(c, str) for c in hints.companies):
        raise InvalidDocumentInputError("hints.companies must contain only strings")


def find_companies(
    text: str,
    companies: Optional[Iterable[str]] = None,
    config: Optional[Dict] = None
) -> Tuple[str, ...]:
    """
    Find known company names in text, tolerating OCR noise on longer names.

    Args:
        text: Decoded document text
        companies: Lowercase company names (defaults to KNOWN_COMPANIES)
        config: Analysis configuration (defaults to ANALYSIS_CONFIG)

    Returns:
        Company names found, in list order
    """
    settings = (config or ANALYSIS_CONFIG)["hints"]
    if companies is None:
        companies = KNOWN_COMPANIES

    matches = fuzzy_match_keywords(
        text,
        companies,
        fuzzy_threshold=settings["company_fuzzy_threshold"],
        min_length=settings["company_fuzzy_min_length"],
    )
    for company, confidence, method in matches:
        if method == "fuzzy":
            logger.debug("Fuzzy company hint %s (%.2f)", company, confidence)
    return tuple(company for company, _, _ in matches)


def build_structured_hints(text: str, config: Optional[Dict] = None) -> StructuredHints:
    """
    Derive structured hints from text the way the acquisition stage does.

    Codes combine fiscal codes and IBANs.
    """
    if not text:
        return StructuredHints()

    codes = (extract_fiscal_codes(text) or ()) + (extract_bank_account_numbers(text) or ())
    return StructuredHints(
        amounts=extract_amounts(text) or (),
        dates=extract_dates(text) or (),
        codes=codes,
        companies=find_companies(text, config=config),
    )
