"""
Test suite for document year resolution.
"""

import unittest
from datetime import datetime

from docsort_engine.extraction.year_resolver import find_candidate_years, resolve_year


class TestResolveYear(unittest.TestCase):
    """Test most-recent plausible year selection."""

    def test_future_years_beyond_tolerance_are_discarded(self):
        """Test that 2031 is out of range in 2025 and 2019 is returned."""
        self.assertEqual(resolve_year("scadenza 2019, rif. 2031", "", current_year=2025), "2019")

    def test_most_recent_year_wins(self):
        self.assertEqual(resolve_year("anni 2021 2023 2022", "", current_year=2025), "2023")

    def test_next_year_is_accepted(self):
        self.assertEqual(resolve_year("rata in scadenza nel 2026", "", current_year=2025), "2026")

    def test_year_from_filename(self):
        self.assertEqual(resolve_year("", "IMU_2023.pdf", current_year=2025), "2023")

    def test_year_from_compact_yyyymmdd_filename(self):
        self.assertEqual(resolve_year("bolletta luce", "fattura_20230315.pdf", current_year=2025), "2023")

    def test_year_from_compact_ddmmyyyy_filename(self):
        self.assertEqual(resolve_year("", "Bolletta_ENEL_05032023.pdf", current_year=2025), "2023")

    def test_years_inside_longer_numbers_are_ignored(self):
        self.assertEqual(resolve_year("codice 120231 pratica 20241234", "", current_year=2025), "2025")

    def test_no_year_falls_back_to_current(self):
        self.assertEqual(resolve_year("", "", current_year=2025), "2025")

    def test_defaults_to_system_clock(self):
        self.assertEqual(resolve_year("", ""), str(datetime.now().year))


class TestCandidateYears(unittest.TestCase):
    """Test candidate listing."""

    def test_candidates_sorted_and_unique(self):
        years = find_candidate_years("2020 2024 2020 2099", "bolletta_2022.pdf", current_year=2025)
        self.assertEqual(years, [2024, 2022, 2020])


if __name__ == "__main__":
    unittest.main()
