"""
Issuer Template Matcher.

Scores documents against known issuer profiles (utilities, municipal tax
offices) and extracts issuer-specific fields from the best match.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from ..config.analysis_config import ANALYSIS_CONFIG
from ..config.registry_loader import IssuerTemplate, TemplateRegistry
from ..categorisation.pattern_matching import match_substrings
from ..categorisation.preprocess import normalize_text
from ..extraction.hints import StructuredHints

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemplateMatch:
    """Best issuer template found for a document."""
    template_id: str
    company: str
    category: str
    confidence: int
    score: int
    matched_indicators: Tuple[str, ...] = ()
    matched_fields: Tuple[str, ...] = ()
    extracted_values: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


def template_confidence(score: int, confidence_boost: int, ceiling: int = 95) -> int:
    """
    Confidence reported for a template match.

    The boost is added on top of the raw score even when the company hint
    already folded the same boost into that score, so a hinted match counts
    it twice. Kept as-is so existing confidence values do not shift.
    """
    return min(ceiling, score + confidence_boost)


class TemplateMatcher:
    """Matches documents against an issuer template registry."""

    def __init__(self, templates: TemplateRegistry, config: Optional[Dict] = None):
        self.templates = templates
        self.settings = (config or ANALYSIS_CONFIG)["templates"]

    def match_template(
        self,
        text: str,
        filename: str = "",
        hints: Optional[StructuredHints] = None
    ) -> Optional[TemplateMatch]:
        """
        Find the best issuer template for a document.

        Args:
            text: Decoded document text
            filename: Document filename
            hints: Optional structured hints from text acquisition

        Returns:
            TemplateMatch for the best template scoring at least the minimum,
            None otherwise
        """
        lower_text = normalize_text(text)
        lower_filename = normalize_text(filename)
        hinted_companies = {c.lower() for c in hints.companies} if hints and hints.companies else set()

        best_match = None
        best_score = 0
        min_score = self.settings["min_score"]

        for template in self.templates:
            score, indicators, fields, values = self._score_template(
                template, text or "", lower_text, lower_filename, hinted_companies
            )

            # Strictly greater: ties keep the earlier template
            if score > best_score and score >= min_score:
                best_score = score
                best_match = TemplateMatch(
                    template_id=template.id,
                    company=template.company,
                    category=template.category,
                    confidence=template_confidence(
                        score, template.confidence_boost, self.settings["confidence_ceiling"]
                    ),
                    score=score,
                    matched_indicators=indicators,
                    matched_fields=fields,
                    extracted_values=MappingProxyType(values),
                )

        if best_match:
            logger.debug(
                "Template %s matched %r (score=%d, confidence=%d)",
                best_match.template_id, filename, best_match.score, best_match.confidence
            )
        return best_match

    def _score_template(
        self,
        template: IssuerTemplate,
        text: str,
        lower_text: str,
        lower_filename: str,
        hinted_companies: set
    ) -> Tuple[int, Tuple[str, ...], Tuple[str, ...], Dict[str, str]]:
        """Score one template, returning (score, indicators, fields, extracted values)."""
        settings = self.settings

        indicators = tuple(
            indicator for indicator in template.indicators
            if indicator in lower_text or indicator in lower_filename
        )
        fields = tuple(match_substrings(lower_text, template.required_fields))

        values = {}
        for name, pattern in template.patterns.items():
            match = pattern.search(text)
            if match:
                captured = match.group(1) if pattern.groups else None
                values[name] = captured if captured is not None else match.group(0)

        score = (
            len(indicators) * settings["indicator_points"]
            + len(fields) * settings["required_field_points"]
            + len(values) * settings["pattern_points"]
        )

        # Bonus for a company recognized upstream
        if template.company.lower() in hinted_companies:
            score += template.confidence_boost

        return score, indicators, fields, values

    def get_template_stats(self) -> Dict:
        """Summarize the registry: template count, categories and companies covered."""
        categories = []
        companies = []
        for template in self.templates:
            if template.category not in categories:
                categories.append(template.category)
            if template.company not in companies:
                companies.append(template.company)
        return {
            "total_templates": len(self.templates),
            "categories": categories,
            "companies": companies,
        }
