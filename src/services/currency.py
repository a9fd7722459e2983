"""
Currency code detection from symbols, ISO abbreviations and colloquial tokens.

The marker table is scanned in declaration order and the first marker found
anywhere in the text wins. Text carrying several currencies therefore resolves
to whichever marker is declared first, not the one nearest the total.
"""

from types import MappingProxyType
from typing import Optional

DEFAULT_CURRENCY = "EUR"

CURRENCY_MARKERS = MappingProxyType({
    "€": "EUR",
    "eur": "EUR",
    "usd": "USD",
    "$": "USD",
    "cad": "CAD",
    "aud": "AUD",
    "gbp": "GBP",
    "£": "GBP",
    "chf": "CHF",
    "¥": "JPY",
    "jpy": "JPY",
    "cny": "CNY",
    "₽": "RUB",
    "rub": "RUB",
    "₹": "INR",
    "inr": "INR",
    "kr": "SEK",
    "sek": "SEK",
    "nok": "NOK",
    "dkk": "DKK",
    "zł": "PLN",
    "pln": "PLN",
    "₺": "TRY",
    "try": "TRY",
})


def sniff_currency(text: Optional[str], fallback: Optional[str] = None) -> Optional[str]:
    """
    Return the ISO code of the first table marker present in text.

    Matching is case-insensitive substring search. When nothing matches the
    caller's fallback is returned (None unless requested, e.g. DEFAULT_CURRENCY),
    so "no match" stays distinguishable from a real EUR hit.
    """
    if not text or not text.strip():
        return fallback

    lowered = text.casefold()
    for marker, code in CURRENCY_MARKERS.items():
        if marker in lowered:
            return code
    return fallback


def currency_for_marker(marker: Optional[str]) -> Optional[str]:
    """
    Map a single marker next to an amount ("€", "usd", "GBP") to an ISO code.

    Unknown markers are returned upper-cased so typed currency values with
    codes outside the table (e.g. "HUF") survive unchanged.
    """
    if not marker or not marker.strip():
        return None
    key = marker.strip().casefold()
    return CURRENCY_MARKERS.get(key, marker.strip().upper())
