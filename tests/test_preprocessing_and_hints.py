"""
Test suite for text preprocessing and structured hints.

Tests cover:
- Excerpt sanitizing and truncation
- Filename normalization and filename-derived analysis text
- Company recognition (exact and fuzzy) and hint derivation
"""

import unittest

from docsort_engine.categorisation.pattern_matching import fuzzy_match_keywords, match_substrings
from docsort_engine.categorisation.preprocess import (
    expand_filename_text,
    make_excerpt,
    normalize_filename,
    sanitize_text,
    split_compact_dates,
)
from docsort_engine.errors import InvalidDocumentInputError
from docsort_engine.extraction.hints import StructuredHints, build_structured_hints, find_companies


class TestSanitizing(unittest.TestCase):
    """Test excerpt sanitizing."""

    def test_unsafe_characters_become_spaces(self):
        self.assertEqual(
            sanitize_text("Totale: € 45,50 ✓ <ok>\n\n fine"),
            "Totale: € 45,50 ok fine"
        )

    def test_accented_letters_are_kept(self):
        self.assertEqual(sanitize_text("città   di Forlì"), "città di Forlì")

    def test_excerpt_truncated_with_ellipsis(self):
        excerpt = make_excerpt("a" * 600)
        self.assertEqual(len(excerpt), 503)
        self.assertTrue(excerpt.endswith("..."))

    def test_short_excerpt_untouched(self):
        self.assertEqual(make_excerpt("bolletta enel"), "bolletta enel")


class TestFilenameText(unittest.TestCase):
    """Test filename-derived analysis text."""

    def test_normalize_filename_splits_separators(self):
        self.assertEqual(normalize_filename("IMU_2023.pdf"), "imu 2023 pdf")

    def test_expansions_and_date_split(self):
        self.assertEqual(
            expand_filename_text("Bolletta_ENEL_05032024.pdf"),
            "bolletta enel 05/03/2024 "
            "bolletta fattura documento pagamento "
            "enel energia elettrica bolletta luce"
        )

    def test_compact_dates_split(self):
        self.assertEqual(split_compact_dates("fattura_20230315"), "fattura_15/03/2023")
        self.assertEqual(split_compact_dates("enel_05032023"), "enel_05/03/2023")
        self.assertEqual(split_compact_dates("pratica 99999999"), "pratica 99999999")
        self.assertEqual(split_compact_dates("codice 123456789"), "codice 123456789")

    def test_yyyymmdd_filename_expanded_as_date(self):
        self.assertEqual(expand_filename_text("scan_20230315.pdf"), "scan 15/03/2023")

    def test_year_split_from_letters(self):
        self.assertEqual(expand_filename_text("scansione2023.jpg"), "scansione 2023")

    def test_f24_expansion_survives_letter_digit_split(self):
        derived = expand_filename_text("f24.pdf")
        self.assertTrue(derived.endswith("f24 tasse pagamento modello"))

    def test_empty_filename(self):
        self.assertEqual(expand_filename_text(""), "")


class TestPatternMatching(unittest.TestCase):
    """Test matching helpers."""

    def test_match_substrings_keeps_order(self):
        self.assertEqual(
            match_substrings("bolletta enel energia elettrica", ["kwh", "enel", "energia"]),
            ["enel", "energia"]
        )

    def test_fuzzy_match_tolerates_ocr_noise(self):
        matches = fuzzy_match_keywords("fattura vodaf0ne italia", ["vodafone"])
        self.assertEqual(len(matches), 1)
        keyword, confidence, method = matches[0]
        self.assertEqual(keyword, "vodafone")
        self.assertEqual(method, "fuzzy")
        self.assertGreaterEqual(confidence, 0.85)

    def test_exact_match_reported_as_keyword(self):
        self.assertEqual(fuzzy_match_keywords("Bolletta ENEL", ["enel"]), [("enel", 1.0, "keyword")])


class TestStructuredHints(unittest.TestCase):
    """Test company recognition and hint derivation."""

    def test_short_names_are_exact_only(self):
        self.assertEqual(find_companies("bolletta en3l"), ())
        self.assertEqual(find_companies("ultimo tim"), ("tim",))

    def test_build_structured_hints(self):
        hints = build_structured_hints("ENEL fattura € 45,50 cliente RSSMRA85T10A562S")
        self.assertEqual(hints.amounts, (45.5,))
        self.assertEqual(hints.codes, ("RSSMRA85T10A562S",))
        self.assertEqual(hints.companies, ("enel",))

    def test_empty_text_gives_empty_hints(self):
        self.assertEqual(build_structured_hints(""), StructuredHints())

    def test_from_dict_rejects_string_field(self):
        with self.assertRaises(InvalidDocumentInputError):
            StructuredHints.from_dict({"companies": "ENEL"})

    def test_from_dict_rejects_scalar_field(self):
        with self.assertRaises(InvalidDocumentInputError):
            StructuredHints.from_dict({"amounts": 12.5})

    def test_from_dict_rejects_non_string_company(self):
        with self.assertRaises(InvalidDocumentInputError):
            StructuredHints.from_dict({"companies": [1]})

    def test_from_dict(self):
        hints = StructuredHints.from_dict({"companies": ["enel"], "amounts": [12.5]})
        self.assertEqual(hints.companies, ("enel",))
        self.assertEqual(hints.amounts, (12.5,))
        self.assertEqual(hints.dates, ())


if __name__ == "__main__":
    unittest.main()
