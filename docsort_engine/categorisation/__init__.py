"""
Categorisation Module for the Document Classification Engine.

Orchestrates keyword classification through:
- Preprocessing (normalization, excerpt sanitizing, filename-derived text)
- Pattern matching (whole-word, substring and fuzzy)
- Category scoring and confidence computation
"""

from .engine import DocumentClassifier, ClassificationResult, round_half_up
from .preprocess import (
    normalize_text,
    normalize_filename,
    sanitize_text,
    make_excerpt,
    expand_filename_text,
    split_compact_dates,
)
from .pattern_matching import (
    compile_whole_word,
    count_whole_word,
    match_substrings,
    fuzzy_match_keywords,
)

__all__ = [
    # Main classifier
    "DocumentClassifier",
    "ClassificationResult",
    "round_half_up",
    # Preprocessing utilities
    "normalize_text",
    "normalize_filename",
    "sanitize_text",
    "make_excerpt",
    "expand_filename_text",
    "split_compact_dates",
    # Pattern matching utilities
    "compile_whole_word",
    "count_whole_word",
    "match_substrings",
    "fuzzy_match_keywords",
]
