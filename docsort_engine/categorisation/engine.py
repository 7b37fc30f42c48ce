"""
Document Classifier for household and administrative documents.
Scores every registered category on keyword and alias hits in text and filename.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..config.analysis_config import ANALYSIS_CONFIG
from ..config.registry_loader import CategoryRegistry
from .pattern_matching import compile_whole_word, count_whole_word
from .preprocess import normalize_filename, normalize_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationResult:
    """Result of keyword classification."""
    category: str
    confidence: int
    matched_keywords: Tuple[str, ...] = ()
    score: float = 0.0
    debug_rationale: Optional[str] = None  # Optional debug information


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values, unlike Python's round()."""
    return int(math.floor(value + 0.5))


class DocumentClassifier:
    """Classifies document text into a category registry."""

    def __init__(
        self,
        categories: CategoryRegistry,
        config: Optional[Dict] = None,
        debug_mode: bool = False
    ):
        """Initialize the classifier and compile every keyword matcher.

        Args:
            categories: Category registry to score against
            config: Analysis configuration (defaults to ANALYSIS_CONFIG)
            debug_mode: If True, attach a scoring rationale to results
        """
        self.categories = categories
        self.settings = (config or ANALYSIS_CONFIG)["classification"]
        self.debug_mode = debug_mode

        # (category, [(keyword, pattern)], [(alias, pattern)]) in registry order
        self._matchers = [
            (
                category,
                [(kw, compile_whole_word(kw)) for kw in category.keywords],
                [(alias, compile_whole_word(alias)) for alias in category.aliases],
            )
            for category in categories
        ]

    def classify(self, text: str, filename: str) -> ClassificationResult:
        """
        Classify a document from its text and filename.

        Args:
            text: Decoded document text
            filename: Document filename

        Returns:
            ClassificationResult with the winning category and its confidence
        """
        lower_text = normalize_text(text)
        lower_filename = normalize_text(filename)
        filename_words = normalize_filename(filename)

        best_category = self.categories.fallback_id
        best_score = 0.0
        best_keywords: List[str] = []
        scores = {}

        for category, keyword_matchers, alias_matchers in self._matchers:
            score, found = self._score_category(
                category.weight, keyword_matchers, alias_matchers, lower_text, filename_words
            )
            scores[category.id] = score

            # Strictly greater: ties keep the earlier category
            if score > best_score:
                best_category = category.id
                best_score = score
                best_keywords = found

        confidence = self._compute_confidence(best_score, best_keywords, lower_filename)

        logger.debug(
            "Classified %r as %s (score=%.2f, confidence=%d)",
            filename, best_category, best_score, confidence
        )

        return ClassificationResult(
            category=best_category,
            confidence=confidence,
            matched_keywords=tuple(best_keywords),
            score=best_score,
            debug_rationale=self._build_debug_rationale(scores),
        )

    def _score_category(
        self,
        weight: float,
        keyword_matchers: List,
        alias_matchers: List,
        lower_text: str,
        filename_words: str
    ) -> Tuple[float, List[str]]:
        """Score one category, returning (score, deduplicated matched phrases)."""
        settings = self.settings
        score = 0.0
        found: List[str] = []

        passes = (
            (keyword_matchers, settings["text_keyword_multiplier"], settings["filename_keyword_multiplier"]),
            (alias_matchers, settings["text_alias_multiplier"], settings["filename_alias_multiplier"]),
        )
        for matchers, text_multiplier, filename_multiplier in passes:
            for phrase, pattern in matchers:
                text_hits = count_whole_word(pattern, lower_text)
                filename_hits = count_whole_word(pattern, filename_words)
                if text_hits > 0 or filename_hits > 0:
                    if phrase not in found:
                        found.append(phrase)
                    score += (text_hits * text_multiplier * weight) + (filename_hits * filename_multiplier * weight)

        return score, found

    def _compute_confidence(self, score: float, keywords: List[str], lower_filename: str) -> int:
        """Map a raw score to a 0-100 confidence with the filename corroboration boost."""
        settings = self.settings
        floor = settings["confidence_floor"]
        ceiling = settings["confidence_ceiling"]

        confidence = round_half_up(min(ceiling, max(floor, score * settings["confidence_scale"])))

        # Substring check on the raw filename, not whole-word
        filename_boost = any(kw.lower() in lower_filename for kw in keywords)
        if filename_boost and confidence < settings["filename_boost_below"]:
            confidence = min(ceiling, confidence + settings["filename_boost"])

        return confidence

    def _build_debug_rationale(self, scores: Dict[str, float]) -> Optional[str]:
        """Build debug rationale string if debug mode is enabled."""
        if not self.debug_mode:
            return None
        ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
        return "keyword scores: " + ", ".join(f"{cid}={score:.2f}" for cid, score in ranked)
