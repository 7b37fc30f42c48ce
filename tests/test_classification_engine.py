"""
Test suite for keyword classification.

Tests cover:
- Whole-word, case-insensitive, Unicode-aware keyword matching
- Text, filename and alias multipliers
- Confidence floor, ceiling and filename corroboration boost
- Registry-order tie breaking and the fallback bucket
"""

import unittest

from docsort_engine.categorisation.engine import DocumentClassifier, round_half_up
from docsort_engine.config.registry_loader import build_category_registry
from docsort_engine.patterns.category_patterns import FALLBACK_CATEGORY


class TestWholeWordMatching(unittest.TestCase):
    """Test keyword hits are whole-word and case-insensitive."""

    def setUp(self):
        self.classifier = DocumentClassifier(build_category_registry())

    def test_imu_keyword_classifies_as_imu(self):
        """Test that 'IMU 2023' is classified as IMU."""
        result = self.classifier.classify("IMU 2023", "")
        self.assertEqual(result.category, "IMU")
        self.assertEqual(result.matched_keywords, ("imu",))
        self.assertEqual(result.score, 1.0)
        self.assertEqual(result.confidence, 25)

    def test_substring_does_not_match(self):
        """Test that 'animu' does not match the imu keyword."""
        result = self.classifier.classify("animu", "")
        self.assertEqual(result.category, FALLBACK_CATEGORY)
        self.assertEqual(result.matched_keywords, ())

    def test_gas_not_matched_inside_longer_word(self):
        """Test that 'gas' does not match inside 'gasdotto'."""
        result = self.classifier.classify("lavori al gasdotto", "")
        self.assertEqual(result.category, FALLBACK_CATEGORY)

    def test_accented_letter_is_part_of_the_word(self):
        """Test that an accented trailing letter prevents a 'tari' match."""
        result = self.classifier.classify("tarì", "")
        self.assertEqual(result.category, FALLBACK_CATEGORY)

    def test_uppercase_text_matches(self):
        """Test matching ignores case and counts aliases at 0.8."""
        result = self.classifier.classify("BOLLETTA GAS metano", "")
        self.assertEqual(result.category, "Bollette_Gas")
        # gas + metano + bolletta gas, plus the metano alias at 0.8
        self.assertAlmostEqual(result.score, 3.8)
        self.assertEqual(result.confidence, 46)
        self.assertEqual(result.matched_keywords, ("gas", "metano", "bolletta gas"))


class TestFilenameScoring(unittest.TestCase):
    """Test filename hits and the filename corroboration boost."""

    def setUp(self):
        self.classifier = DocumentClassifier(build_category_registry())

    def test_filename_hits_weigh_four_times(self):
        """Test that filename words split on underscores and count 4x."""
        result = self.classifier.classify("", "contratto_affitto.pdf")
        self.assertEqual(result.category, "Contratti")
        self.assertEqual(result.score, 8.0)
        self.assertEqual(result.confidence, 95)

    def test_filename_boost_on_substring(self):
        """Test the +10 boost when a matched keyword is a filename substring."""
        result = self.classifier.classify("polizza assicurazione", "Polizza2023.pdf")
        self.assertEqual(result.category, "Assicurazioni")
        # polizza + assicurazione + polizza alias = 2.8 -> 34, boosted to 44
        self.assertAlmostEqual(result.score, 2.8)
        self.assertEqual(result.confidence, 44)

    def test_no_boost_at_or_above_85(self):
        """Test that high confidences are not boosted past the ceiling."""
        result = self.classifier.classify(
            "polizza assicurazione kasko premio copertura assicurativa", "polizza.pdf"
        )
        self.assertEqual(result.confidence, 95)


class TestFallbackAndTies(unittest.TestCase):
    """Test fallback bucket, tie breaking and custom registries."""

    def test_empty_input_is_uncategorized_at_floor(self):
        """Test that empty text and filename give the fallback at 25."""
        classifier = DocumentClassifier(build_category_registry())
        result = classifier.classify("", "")
        self.assertEqual(result.category, FALLBACK_CATEGORY)
        self.assertEqual(result.confidence, 25)
        self.assertEqual(result.score, 0.0)

    def test_ties_keep_registry_order(self):
        """Test that the first category wins on equal scores."""
        registry = build_category_registry({
            "Alpha": {"keywords": ["fattura"]},
            "Beta": {"keywords": ["fattura"]},
        })
        result = DocumentClassifier(registry).classify("fattura", "")
        self.assertEqual(result.category, "Alpha")

    def test_category_weight_scales_score(self):
        """Test that the category weight multiplies every hit."""
        registry = build_category_registry({
            "Fatture": {"keywords": ["fattura"], "weight": 2.0},
        })
        result = DocumentClassifier(registry).classify("fattura fattura fattura", "")
        self.assertEqual(result.score, 6.0)
        self.assertEqual(result.confidence, 72)

    def test_confidence_always_within_bounds(self):
        """Test the classification confidence range on varied inputs."""
        classifier = DocumentClassifier(build_category_registry())
        samples = [
            ("", ""),
            ("banca", ""),
            ("estratto conto banca iban bonifico unicredit intesa", "estratto_conto_banca.pdf"),
            ("rifiuti " * 50, "tari.pdf"),
        ]
        for text, filename in samples:
            confidence = classifier.classify(text, filename).confidence
            self.assertGreaterEqual(confidence, 25)
            self.assertLessEqual(confidence, 95)


class TestDebugMode(unittest.TestCase):
    """Test debug rationale output."""

    def test_rationale_only_in_debug_mode(self):
        registry = build_category_registry()
        self.assertIsNone(DocumentClassifier(registry).classify("imu", "").debug_rationale)

        rationale = DocumentClassifier(registry, debug_mode=True).classify("imu", "").debug_rationale
        self.assertTrue(rationale.startswith("keyword scores: IMU=1.00"))

    def test_round_half_up(self):
        self.assertEqual(round_half_up(24.5), 25)
        self.assertEqual(round_half_up(33.6), 34)
        self.assertEqual(round_half_up(45.4), 45)


if __name__ == "__main__":
    unittest.main()
