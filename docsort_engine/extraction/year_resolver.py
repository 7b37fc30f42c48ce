"""
Document year resolution.

Documents usually mention the current or a recent year more than a historical
one (issue date vs due date), so the most recent plausible year wins.
"""

import re
from datetime import datetime
from typing import Dict, List, Optional

from ..config.analysis_config import ANALYSIS_CONFIG
from ..categorisation.preprocess import split_compact_dates

_YEAR_RE = re.compile(r"(?<!\d)20\d{2}(?!\d)")


def find_candidate_years(
    text: str,
    filename: str = "",
    current_year: Optional[int] = None,
    config: Optional[Dict] = None
) -> List[int]:
    """
    List every plausible year mentioned in text or filename, most recent first.

    Filename runs such as 20230315 or 05032023 are read as dates first.
    A year is plausible when it falls in [min_year, current_year + future_tolerance].
    """
    settings = (config or ANALYSIS_CONFIG)["years"]
    if current_year is None:
        current_year = datetime.now().year

    sources = " ".join([text or "", split_compact_dates(filename)])
    latest_allowed = current_year + settings["future_tolerance"]
    years = {
        int(token) for token in _YEAR_RE.findall(sources)
        if settings["min_year"] <= int(token) <= latest_allowed
    }
    return sorted(years, reverse=True)


def resolve_year(
    text: str,
    filename: str = "",
    current_year: Optional[int] = None,
    config: Optional[Dict] = None
) -> str:
    """
    Resolve the document year.

    Args:
        text: Decoded document text
        filename: Document filename
        current_year: Year treated as "now" (defaults to the system clock)
        config: Analysis configuration (defaults to ANALYSIS_CONFIG)

    Returns:
        Four-digit year string; the current year when nothing plausible is found

    Example:
        >>> resolve_year("scadenza 2019, rif. 2031", current_year=2025)
        '2019'
    """
    if current_year is None:
        current_year = datetime.now().year

    years = find_candidate_years(text, filename, current_year=current_year, config=config)
    if years:
        return str(years[0])
    return str(current_year)
