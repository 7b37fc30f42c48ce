"""
Pattern Definitions for the Document Classification Engine.

Contains all keyword tables and issuer profiles used to classify documents into:
- Tax notices (IMU, TARI)
- Utility bills (energy, gas, water, phone)
- Contracts, bank documents and insurance policies
"""

from .category_patterns import (
    CATEGORY_PATTERNS,
    FALLBACK_CATEGORY,
    FILENAME_EXPANSIONS,
)
from .issuer_templates import (
    ISSUER_TEMPLATE_PATTERNS,
    KNOWN_COMPANIES,
)

__all__ = [
    "CATEGORY_PATTERNS",
    "FALLBACK_CATEGORY",
    "FILENAME_EXPANSIONS",
    "ISSUER_TEMPLATE_PATTERNS",
    "KNOWN_COMPANIES",
]
