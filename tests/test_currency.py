"""
Unit tests for currency detection.
"""

from src.services.currency import (
    CURRENCY_MARKERS,
    DEFAULT_CURRENCY,
    currency_for_marker,
    sniff_currency,
)


def test_symbol_is_detected():
    assert sniff_currency("Summe 12,00 €") == "EUR"
    assert sniff_currency("TOTAL £4.50") == "GBP"
    assert sniff_currency("Amount ₹ 250.00") == "INR"


def test_matching_is_case_insensitive():
    assert sniff_currency("Betrag 10.00 Chf") == "CHF"
    assert sniff_currency("PLN 3,20") == "PLN"


def test_no_match_is_distinct_from_default():
    assert sniff_currency("Widget 12.00") is None
    assert sniff_currency("Widget 12.00", fallback=DEFAULT_CURRENCY) == "EUR"
    assert sniff_currency("", fallback=DEFAULT_CURRENCY) == "EUR"
    assert sniff_currency(None) is None


def test_first_table_entry_wins_over_text_position():
    # "$" appears first in the text but "€" is declared first in the table
    assert sniff_currency("Paid $ 5.00 (approx. 4.60 €)") == "EUR"


def test_table_is_read_only():
    try:
        CURRENCY_MARKERS["xyz"] = "XYZ"
    except TypeError:
        pass
    assert "xyz" not in CURRENCY_MARKERS


def test_currency_for_marker():
    assert currency_for_marker("€") == "EUR"
    assert currency_for_marker("eur") == "EUR"
    assert currency_for_marker("$") == "USD"
    assert currency_for_marker("HUF") == "HUF"
    assert currency_for_marker("huf") == "HUF"
    assert currency_for_marker(None) is None
    assert currency_for_marker("  ") is None
