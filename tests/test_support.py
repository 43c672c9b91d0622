"""
Unit tests for the support functions

Tests cover:
- Amount parsing with comma and period decimal separators
- Pass-through of numeric values
- Malformed amounts
- Date/time coercion
- Word capitalization
"""
from datetime import date, datetime
from decimal import Decimal

import pandas as pd
import pytest

from bankjob.common.exceptions import MalformedAmountError
from bankjob.common.support import capitalize_words, create_date_time, string_to_decimal


# =============================================================================
# TEST: string_to_decimal
# =============================================================================

class TestStringToDecimal:
    """Tests for locale-aware amount conversion."""

    def test_comma_decimal_with_period_thousands(self):
        """Test parsing European format: 1.000.030,99"""
        assert string_to_decimal("1.000.030,99", ",") == Decimal("1000030.99")

    def test_period_decimal_with_comma_thousands(self):
        """Test parsing English format: 1,234.56"""
        assert string_to_decimal("1,234.56", ".") == Decimal("1234.56")

    def test_default_separator_is_period(self):
        assert string_to_decimal("2,500.10") == Decimal("2500.10")

    def test_negative_amount(self):
        assert string_to_decimal("-1.234,56", ",") == Decimal("-1234.56")

    def test_result_is_exact(self):
        """Decimal keeps the scraped digits, no float rounding."""
        result = string_to_decimal("0,10", ",")
        assert isinstance(result, Decimal)
        assert str(result) == "0.10"

    def test_whitespace_is_stripped(self):
        """Spaces, tabs and non-breaking spaces are all removed."""
        assert string_to_decimal(" 1 234,50 ", ",") == Decimal("1234.50")
        assert string_to_decimal("\t-12.00\n", ".") == Decimal("-12.00")

    @pytest.mark.parametrize("value", [Decimal("5.50"), 12, 1.5])
    def test_numeric_passes_through(self, value):
        assert string_to_decimal(value, ",") is value

    def test_none_returns_none(self):
        assert string_to_decimal(None) is None

    @pytest.mark.parametrize("value", ["abc", "", "   ", "12.3.4", "NaN", "Infinity"])
    def test_malformed_raises(self, value):
        with pytest.raises(MalformedAmountError) as exc_info:
            string_to_decimal(value, ".")
        assert exc_info.value.value == value

    def test_malformed_is_a_value_error(self):
        with pytest.raises(ValueError):
            string_to_decimal("twelve", ",")

    def test_unsupported_separator(self):
        with pytest.raises(ValueError, match="separator"):
            string_to_decimal("12'50", "'")


# =============================================================================
# TEST: create_date_time
# =============================================================================

class TestCreateDateTime:
    """Tests for date coercion used by the transaction date setters."""

    def test_datetime_passes_through(self):
        value = datetime(2008, 1, 15, 10, 30)
        assert create_date_time(value) is value

    def test_date_becomes_midnight(self):
        assert create_date_time(date(2008, 1, 15)) == datetime(2008, 1, 15)

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_is_none(self, value):
        assert create_date_time(value) is None

    def test_parses_iso_date(self):
        assert create_date_time("2008-01-15") == datetime(2008, 1, 15)

    def test_parses_date_and_time(self):
        assert create_date_time("2008-01-15 10:30:00") == datetime(2008, 1, 15, 10, 30)

    def test_timestamp_becomes_plain_datetime(self):
        result = create_date_time(pd.Timestamp("2008-01-15 08:00"))
        assert type(result) is datetime
        assert result == datetime(2008, 1, 15, 8, 0)

    def test_slash_dates_are_day_first(self):
        ambiguous = create_date_time("05/03/2024")
        unambiguous = create_date_time("25/03/2024")
        assert ambiguous == datetime(2024, 3, 5)
        assert unambiguous == datetime(2024, 3, 25)
        assert ambiguous.month == unambiguous.month

    def test_day_first_keeps_iso_order(self):
        assert create_date_time("2024-03-05") == datetime(2024, 3, 5)


# =============================================================================
# TEST: capitalize_words
# =============================================================================

class TestCapitalizeWords:

    def test_capitalizes_each_word(self):
        assert capitalize_words("CARD PAYMENT TO tesco") == "Card Payment To Tesco"

    def test_word_boundaries_inside_tokens(self):
        assert capitalize_words("ATM-WITHDRAWAL madrid") == "Atm-Withdrawal Madrid"

    def test_empty_string(self):
        assert capitalize_words("") == ""
