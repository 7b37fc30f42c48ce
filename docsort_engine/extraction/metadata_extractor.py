"""
Regex-based metadata extraction for Italian administrative documents.

Each field has its own extractor returning None when nothing is found.
extract_metadata() runs them all; a failing extractor is logged and its
field left absent, the rest of the pass still runs.
"""

import logging
import re
from dataclasses import asdict, dataclass
from typing import Callable, Dict, List, Optional, Tuple

from ..errors import InvalidDocumentInputError

logger = logging.getLogger(__name__)

# ── Amount regex ────────────────────────────────────────────────
# Matches: € 1.234,56 | 1.234,56 € | EUR 45.50 | 45,50 euro | €12
_NUMBER = (
    r"\d{1,3}(?:\.\d{3})+(?:,\d{1,2})?"   # 1.234,56 (Italian grouping)
    r"|\d{1,3}(?:,\d{3})+(?:\.\d{1,2})?"  # 1,234.56 (English grouping)
    r"|\d+(?:[.,]\d{1,2})?"               # 1234,56 | 45.5 | 12
)
_AMOUNT_RE = re.compile(
    rf"(?:€|\beuro?\b)\s*({_NUMBER})(?!\d)"
    rf"|(?<![\d.,])({_NUMBER})\s*(?:€|\beuro?\b)",
    re.IGNORECASE,
)
_THOUSANDS_DOT_RE = re.compile(r"^\d{1,3}(?:\.\d{3})+$")
_THOUSANDS_COMMA_RE = re.compile(r"^\d{1,3}(?:,\d{3})+$")

# ── Identifier regexes ──────────────────────────────────────────
_DATE_RE = re.compile(r"(?<!\d)(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{4}|\d{2})(?!\d)")
_FISCAL_CODE_RE = re.compile(r"\b[A-Z]{6}\d{2}[A-Z]\d{2}[A-Z]\d{3}[A-Z]\b")
_IBAN_RE = re.compile(r"\bIT\s?\d{2}\s?[A-Z]\s?\d{3}(?:\s?\d{4}){4}\s?\d{3}\b")
_PROTOCOL_RE = re.compile(r"(?:\bn\.?\s*|\bnumero\s+|\bprot\.?\s*)(\d{4,})", re.IGNORECASE)


@dataclass(frozen=True)
class Metadata:
    """Facts extracted from document text. None means no matches."""
    amounts: Optional[Tuple[float, ...]] = None
    total_amount: Optional[float] = None
    dates: Optional[Tuple[str, ...]] = None
    fiscal_codes: Optional[Tuple[str, ...]] = None
    bank_account_numbers: Optional[Tuple[str, ...]] = None
    protocol_numbers: Optional[Tuple[str, ...]] = None

    def to_dict(self) -> Dict:
        """Present fields only, sequences as lists."""
        return {
            key: list(value) if isinstance(value, tuple) else value
            for key, value in asdict(self).items()
            if value is not None
        }


def _dedupe(values: List) -> Tuple:
    """Drop repeats, keeping first-seen order."""
    return tuple(dict.fromkeys(values))


def parse_amount(token: str) -> float:
    """
    Convert a currency token to a float.

    Examples:
        >>> parse_amount("1.234,56")
        1234.56
        >>> parse_amount("45,50")
        45.5
        >>> parse_amount("1,234.56")
        1234.56
    """
    if "," in token and "." in token:
        # The last separator is the decimal one
        if token.rfind(",") > token.rfind("."):
            token = token.replace(".", "").replace(",", ".")
        else:
            token = token.replace(",", "")
    elif "," in token:
        token = token.replace(",", "") if _THOUSANDS_COMMA_RE.match(token) else token.replace(",", ".")
    elif "." in token and _THOUSANDS_DOT_RE.match(token):
        token = token.replace(".", "")
    return float(token)


def find_amounts(text: str) -> List[float]:
    """Every currency-marked amount in order of appearance, repeats included."""
    return [
        parse_amount(match.group(1) or match.group(2))
        for match in _AMOUNT_RE.finditer(text)
    ]


def extract_amounts(text: str) -> Optional[Tuple[float, ...]]:
    """Currency-marked amounts in order of appearance, deduplicated."""
    amounts = find_amounts(text)
    return _dedupe(amounts) if amounts else None


def extract_dates(text: str) -> Optional[Tuple[str, ...]]:
    """
    Calendar dates as D/M/YYYY, deduplicated.

    Day and month digits are kept as written; separators become "/" and
    2-digit years become 20YY.
    """
    dates = []
    for day, month, year in _DATE_RE.findall(text):
        if not (1 <= int(day) <= 31 and 1 <= int(month) <= 12):
            continue
        if len(year) == 2:
            year = "20" + year
        dates.append(f"{day}/{month}/{year}")
    return _dedupe(dates) if dates else None


def extract_fiscal_codes(text: str) -> Optional[Tuple[str, ...]]:
    """Italian personal tax codes (codice fiscale), deduplicated."""
    codes = _FISCAL_CODE_RE.findall(text)
    return _dedupe(codes) if codes else None


def extract_bank_account_numbers(text: str) -> Optional[Tuple[str, ...]]:
    """Italian IBANs with internal whitespace removed, deduplicated."""
    ibans = [re.sub(r"\s", "", match) for match in _IBAN_RE.findall(text)]
    return _dedupe(ibans) if ibans else None


def extract_protocol_numbers(text: str) -> Optional[Tuple[str, ...]]:
    """Protocol/reference numbers following 'n.', 'numero' or 'prot.', deduplicated."""
    protocols = _PROTOCOL_RE.findall(text)
    return _dedupe(protocols) if protocols else None


# Field name -> extractor, in the order fields are filled
FIELD_EXTRACTORS: Dict[str, Callable[[str], Optional[Tuple]]] = {
    "amounts": extract_amounts,
    "dates": extract_dates,
    "fiscal_codes": extract_fiscal_codes,
    "bank_account_numbers": extract_bank_account_numbers,
    "protocol_numbers": extract_protocol_numbers,
}


def extract_metadata(text: str) -> Metadata:
    """
    Run every field extractor over the text.

    Args:
        text: Decoded document text

    Returns:
        Metadata with absent (None) fields where nothing was found

    Raises:
        InvalidDocumentInputError: if text is not a string
    """
    if not isinstance(text, str):
        raise InvalidDocumentInputError(
            f"text must be a string, got {type(text).__name__}"
        )

    fields = {}
    if text:
        for name, extractor in FIELD_EXTRACTORS.items():
            try:
                value = extractor(text)
            except Exception:
                logger.warning("Metadata extractor '%s' failed", name, exc_info=True)
                continue
            if value is not None:
                fields[name] = value

    # Sums every match, repeated instalments included
    if "amounts" in fields:
        fields["total_amount"] = round(sum(find_amounts(text)), 2)

    return Metadata(**fields)
