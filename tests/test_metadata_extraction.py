"""
Test suite for metadata extraction.

Tests cover:
- Currency amounts with Italian and English number formats, totals over repeats
- Date separator normalization and two-digit year pivot
- Fiscal codes, IBANs and protocol numbers
- Absent fields and failure isolation between extractors
"""

import unittest
from unittest import mock

from docsort_engine.errors import InvalidDocumentInputError
from docsort_engine.extraction import metadata_extractor
from docsort_engine.extraction.metadata_extractor import (
    Metadata,
    extract_amounts,
    extract_bank_account_numbers,
    extract_dates,
    extract_fiscal_codes,
    extract_metadata,
    extract_protocol_numbers,
    find_amounts,
    parse_amount,
)


class TestAmounts(unittest.TestCase):
    """Test currency amount extraction."""

    def test_decimal_comma_amount(self):
        """Test that 'Totale € 45,50' yields 45.5."""
        metadata = extract_metadata("Totale € 45,50")
        self.assertEqual(metadata.amounts, (45.5,))
        self.assertEqual(metadata.total_amount, 45.5)

    def test_symbol_after_and_currency_word(self):
        metadata = extract_metadata("Importo 1.234,56 € e canone EUR 100")
        self.assertEqual(metadata.amounts, (1234.56, 100.0))
        self.assertEqual(metadata.total_amount, 1334.56)

    def test_repeated_amounts_listed_once_but_all_summed(self):
        """Test that two equal instalments count twice in the total."""
        metadata = extract_metadata("Acconto € 50,00 Saldo € 50,00")
        self.assertEqual(metadata.amounts, (50.0,))
        self.assertEqual(metadata.total_amount, 100.0)

    def test_find_amounts_keeps_repeats(self):
        self.assertEqual(find_amounts("€ 45,50 e € 45,50"), [45.5, 45.5])
        self.assertEqual(find_amounts("nessun importo"), [])

    def test_numbers_without_currency_are_ignored(self):
        self.assertIsNone(extract_amounts("consumo 45,50 kWh"))

    def test_parse_amount_formats(self):
        self.assertEqual(parse_amount("1.234,56"), 1234.56)
        self.assertEqual(parse_amount("1,234.56"), 1234.56)
        self.assertEqual(parse_amount("45,50"), 45.5)
        self.assertEqual(parse_amount("45.5"), 45.5)
        self.assertEqual(parse_amount("1.234"), 1234.0)
        self.assertEqual(parse_amount("12"), 12.0)


class TestDates(unittest.TestCase):
    """Test date extraction."""

    def test_dates_normalized_and_deduplicated(self):
        dates = extract_dates("emessa il 5/3/2024, scadenza 5-3-24, 31.12.2023 e 5.3.2024")
        self.assertEqual(dates, ("5/3/2024", "31/12/2023"))

    def test_day_and_month_digits_kept_as_written(self):
        """Test that leading zeros survive, so 05/03/2024 and 5/3/2024 stay distinct."""
        self.assertEqual(extract_dates("emessa il 05/03/2024"), ("05/03/2024",))
        self.assertEqual(
            extract_dates("emessa il 05-03-24, pagata il 5/3/2024"),
            ("05/03/2024", "5/3/2024")
        )

    def test_impossible_dates_are_skipped(self):
        self.assertIsNone(extract_dates("riferimento 45/13/2024"))


class TestIdentifiers(unittest.TestCase):
    """Test fiscal code, IBAN and protocol extraction."""

    def test_fiscal_codes_deduplicated(self):
        codes = extract_fiscal_codes("CF: RSSMRA85T10A562S intestatario RSSMRA85T10A562S")
        self.assertEqual(codes, ("RSSMRA85T10A562S",))

    def test_lowercase_fiscal_code_not_matched(self):
        self.assertIsNone(extract_fiscal_codes("rssmra85t10a562s"))

    def test_iban_with_and_without_spaces(self):
        text = (
            "IBAN: IT60X0542811101000000123456\n"
            "Accredito su IT60 X054 2811 1010 0000 0123 456"
        )
        self.assertEqual(extract_bank_account_numbers(text), ("IT60X0542811101000000123456",))

    def test_protocol_numbers(self):
        text = "Prot. n. 123456 del 2024; numero 98765; n.12"
        self.assertEqual(extract_protocol_numbers(text), ("123456", "98765"))


class TestExtractMetadata(unittest.TestCase):
    """Test the full metadata pass."""

    def test_empty_text_has_no_fields(self):
        metadata = extract_metadata("")
        self.assertEqual(metadata, Metadata())
        self.assertEqual(metadata.to_dict(), {})

    def test_absent_fields_are_none(self):
        metadata = extract_metadata("Totale € 10,00")
        self.assertIsNone(metadata.dates)
        self.assertIsNone(metadata.fiscal_codes)
        self.assertIsNone(metadata.bank_account_numbers)
        self.assertIsNone(metadata.protocol_numbers)
        self.assertEqual(metadata.to_dict(), {"amounts": [10.0], "total_amount": 10.0})

    def test_non_string_text_raises(self):
        with self.assertRaises(InvalidDocumentInputError):
            extract_metadata(None)

    def test_failing_extractor_does_not_abort_pass(self):
        """Test that one failing field is logged and the others still fill."""
        def broken(text):
            raise RuntimeError("boom")

        with mock.patch.dict(metadata_extractor.FIELD_EXTRACTORS, {"dates": broken}):
            with self.assertLogs(metadata_extractor.logger, level="WARNING") as logs:
                metadata = extract_metadata("Totale € 45,50 del 05/03/2024")

        self.assertEqual(metadata.amounts, (45.5,))
        self.assertIsNone(metadata.dates)
        self.assertIn("dates", logs.output[0])


if __name__ == "__main__":
    unittest.main()
