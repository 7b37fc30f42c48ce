"""
Preprocessing utilities for document classification.
Handles text normalization, excerpt sanitizing and filename-derived text.
"""

import re
from pathlib import PurePath
from typing import Dict, Optional

from ..patterns.category_patterns import FILENAME_EXPANSIONS

# Characters kept in record excerpts; everything else becomes a space
_UNSAFE_CHARS_RE = re.compile(r"[^\w\sÀ-ſ.,;:!?()€$%&+\-=]")
_WHITESPACE_RE = re.compile(r"\s+")
_FILENAME_SEPARATORS_RE = re.compile(r"[_\-.]+")
_COMPACT_DATE_RE = re.compile(r"(?<!\d)(\d{8})(?!\d)")


def normalize_text(text: Optional[str]) -> str:
    """
    Normalize text for matching.

    Args:
        text: Raw text to normalize

    Returns:
        Normalized lowercase text
    """
    if not text:
        return ""
    return text.lower().strip()


def normalize_filename(filename: Optional[str]) -> str:
    """
    Normalize a filename for whole-word matching.

    Underscores, dashes and dots split words, so "IMU_2023.pdf"
    reads as "imu 2023 pdf".
    """
    if not filename:
        return ""
    return _FILENAME_SEPARATORS_RE.sub(" ", filename.lower()).strip()


def sanitize_text(text: Optional[str]) -> str:
    """Replace unprintable or exotic characters with spaces and collapse whitespace."""
    if not text:
        return ""
    cleaned = _UNSAFE_CHARS_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def make_excerpt(text: Optional[str], max_length: int = 500, ellipsis: str = "...") -> str:
    """
    Build the short, sanitized excerpt stored on analysis records.

    Args:
        text: Full document text
        max_length: Maximum number of sanitized characters kept
        ellipsis: Marker appended when the excerpt was truncated

    Returns:
        Sanitized excerpt
    """
    sanitized = sanitize_text(text)
    if len(sanitized) > max_length:
        return sanitized[:max_length] + ellipsis
    return sanitized


def _split_compact_date(match: re.Match) -> str:
    run = match.group(1)
    day, month, year = run[:2], run[2:4], run[4:]
    if 1 <= int(day) <= 31 and 1 <= int(month) <= 12:
        return f"{day}/{month}/{year}"
    year, month, day = run[:4], run[4:6], run[6:]
    if 1 <= int(month) <= 12 and 1 <= int(day) <= 31:
        return f"{day}/{month}/{year}"
    return run


def split_compact_dates(text: Optional[str]) -> str:
    """
    Rewrite 8-digit DDMMYYYY or YYYYMMDD runs as DD/MM/YYYY.

    DDMMYYYY is tried first; runs that are neither stay untouched.

    Example:
        >>> split_compact_dates("fattura_20230315")
        'fattura_15/03/2023'
    """
    if not text:
        return ""
    return _COMPACT_DATE_RE.sub(_split_compact_date, text)


def expand_filename_text(
    filename: str,
    expansions: Optional[Dict[str, str]] = None
) -> str:
    """
    Derive analysis text from a filename when no document text is available.

    The stem is lowercased, separators become spaces, year and compact date runs
    are isolated, letter/digit boundaries are split, and expansion phrases are
    appended for every expansion key present as a whole word.

    Args:
        filename: Document filename (a path is accepted, only the name is used)
        expansions: Keyword to phrase mapping. Defaults to FILENAME_EXPANSIONS.

    Returns:
        Derived text, empty for an empty filename

    Example:
        >>> expand_filename_text("Bolletta_ENEL_05032024.pdf")
        'bolletta enel 05/03/2024 bolletta fattura documento pagamento enel energia elettrica bolletta luce'
    """
    if expansions is None:
        expansions = FILENAME_EXPANSIONS
    if not filename:
        return ""

    stem = PurePath(filename).stem.lower()
    spaced = re.sub(r"[-_]", " ", stem)
    derived = split_compact_dates(spaced)
    derived = re.sub(r"(?<![\d/])(\d{4})(?![\d/])", r" \1 ", derived)
    derived = re.sub(r"([^\W\d_])(\d)", r"\1 \2", derived)
    derived = re.sub(r"(\d)([^\W\d_])", r"\1 \2", derived)
    derived = _WHITESPACE_RE.sub(" ", derived).strip()

    additions = [
        phrase for keyword, phrase in expansions.items()
        if re.search(rf"(?<!\w){re.escape(keyword)}(?!\w)", f"{spaced} {derived}")
    ]
    if additions:
        derived = " ".join([derived] + additions)
    return derived
