"""
Generic Pattern Matching for Document Classification.

Provides reusable whole-word, substring and fuzzy matching helpers.
"""

import re
from typing import Iterable, List, Tuple

from rapidfuzz import fuzz


def compile_whole_word(phrase: str) -> re.Pattern:
    """
    Compile a case-insensitive whole-word pattern for a phrase.

    Boundaries are Unicode-aware: accented letters count as word characters,
    so "gas" does not match inside "gasdotto" and "città" stays one word.
    """
    return re.compile(rf"(?<!\w){re.escape(phrase)}(?!\w)", re.IGNORECASE)


def count_whole_word(pattern: re.Pattern, text: str) -> int:
    """Count non-overlapping whole-word occurrences of a compiled phrase."""
    if not text:
        return 0
    return sum(1 for _ in pattern.finditer(text))


def match_substrings(text: str, phrases: Iterable[str]) -> List[str]:
    """
    Return the phrases found as plain substrings of text.

    Args:
        text: Lowercased text to search
        phrases: Lowercased phrases

    Returns:
        Found phrases in the order given

    Example:
        >>> match_substrings("bolletta enel energia elettrica", ["enel", "kwh"])
        ['enel']
    """
    if not text:
        return []
    return [phrase for phrase in phrases if phrase in text]


def fuzzy_match_keywords(
    text: str,
    keywords: Iterable[str],
    fuzzy_threshold: int = 85,
    min_length: int = 5
) -> List[Tuple[str, float, str]]:
    """
    Match text against keywords, exactly first and then fuzzily.

    Whole-word hits are reported with confidence 1.0. Keywords of at least
    ``min_length`` characters are also tried with rapidfuzz partial ratio,
    which tolerates OCR noise such as "VODAF0NE".

    Args:
        text: Text to search
        keywords: Lowercase keywords
        fuzzy_threshold: Minimum partial ratio (0-100) for fuzzy hits
        min_length: Shortest keyword eligible for fuzzy matching

    Returns:
        List of (keyword, confidence, match_method) tuples in keyword order
    """
    lower_text = text.lower() if text else ""
    if not lower_text:
        return []

    matches = []
    for keyword in keywords:
        if compile_whole_word(keyword).search(lower_text):
            matches.append((keyword, 1.0, "keyword"))
            continue

        if len(keyword) >= min_length:
            score = fuzz.partial_ratio(keyword, lower_text)
            if score >= fuzzy_threshold:
                matches.append((keyword, score / 100.0, "fuzzy"))

    return matches
