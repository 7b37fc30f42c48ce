"""
Extraction Module for the Document Classification Engine.

Regex passes for amounts, dates, fiscal codes, IBANs and protocol numbers,
year resolution, and structured hints derivation.
"""

from .metadata_extractor import (
    Metadata,
    FIELD_EXTRACTORS,
    extract_metadata,
    extract_amounts,
    find_amounts,
    extract_dates,
    extract_fiscal_codes,
    extract_bank_account_numbers,
    extract_protocol_numbers,
    parse_amount,
)
from .year_resolver import resolve_year, find_candidate_years
from .hints import StructuredHints, build_structured_hints, find_companies

__all__ = [
    "Metadata",
    "FIELD_EXTRACTORS",
    "extract_metadata",
    "extract_amounts",
    "find_amounts",
    "extract_dates",
    "extract_fiscal_codes",
    "extract_bank_account_numbers",
    "extract_protocol_numbers",
    "parse_amount",
    "resolve_year",
    "find_candidate_years",
    "StructuredHints",
    "build_structured_hints",
    "find_companies",
]
