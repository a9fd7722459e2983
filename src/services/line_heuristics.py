"""
Line classifiers shared by the geometry and raw-text item reconstructors.

All keyword tables are module-level immutable tuples/frozensets built once at
import and only ever read.
"""

import re

MEASUREMENT_TOKENS = frozenset({
    "g", "kg", "mg", "l", "ml", "lt", "cl", "oz", "lb",
    "pcs", "pc", "stk", "stück", "ud", "uds", "pz", "pz.", "шт", "szt", "pzla",
})

CURRENCY_ONLY_TOKENS = frozenset({"eur", "usd", "gbp", "cad", "chf", "jpy", "¥", "€", "$"})

# Receipt footer vocabulary: totals, dates, payment, tax, terminal and shop
# metadata in several languages. Substring match on the lower-cased line.
SUMMARY_KEYWORDS = (
    "summe", "gesamt", "total", "totale", "totales", "totaux", "subtotal", "importe",
    "sumatoria", "suma", "somme", "合計", "合計金額", "totaal", "toplam",
    "datum", "fecha", "date", "data", "datahora", "hora", "uhrzeit", "tijd", "heure",
    "receipt", "ticket", "beleg", "factura", "nota", "bon", "kvitto", "recibo",
    "betaling", "zahlung", "pago", "pagamento", "paiement", "оплата",
    "tax", "steuer", "iva", "tva", "impuesto", "alv", "pps",
    "terminal", "pos", "trace", "transak", "transacción", "transaktion",
    "card", "debit", "credit", "mastercard", "visa", "amex",
    "signature", "firma", "signatur", "sign", "uid", "nif", "cif", "rfc", "gst",
    "cashier", "kasse", "caja", "caisse", "market", "store", "shop", "branch",
)

_WHITESPACE = re.compile(r"\s+")
_CLOCK_TIME = re.compile(r"\d{1,2}[:.]\d{2}(:\d{2})?")
_CALENDAR_DATE = re.compile(r"\d{1,2}[./-]\d{1,2}[./-]\d{2,4}")
_MULTIPLIER = re.compile(r"\d+\s*(x|×)\s*\d+")
_MEASURED_AMOUNT = re.compile(r"\d+\s?(kg|g|l|ml|pcs|pc|шт|st|pkt)")


def has_letters(text: str) -> bool:
    return any(ch.isalpha() for ch in text)


def is_likely_label(text: str) -> bool:
    """Short all-letter tokens ("EUR", "Qty") or key/value fragments ("Tisch: 4")."""
    cleaned = _WHITESPACE.sub("", text)
    if len(cleaned) <= 4 and cleaned.isalpha():
        return True
    return ":" in cleaned or "=" in cleaned


def looks_like_quantity(text: str) -> bool:
    """Quantity or measurement annotations such as "2 x 1,49", "0,5 kg", "3 Stk"."""
    lower = text.lower()
    if "stk" in lower or "stück" in lower or "x " in lower or lower.endswith("x"):
        return True
    if _MULTIPLIER.search(lower):
        return True
    return _MEASURED_AMOUNT.search(lower) is not None


def is_summary_line(lower: str) -> bool:
    """A footer/summary line: clock time, calendar date or a summary keyword."""
    if not lower or not lower.strip():
        return True
    if _CLOCK_TIME.search(lower) or _CALENDAR_DATE.search(lower):
        return True
    return any(keyword in lower for keyword in SUMMARY_KEYWORDS)


def is_skippable_line(lower: str) -> bool:
    """Noise between a description and its price: currency tokens, units, stray characters."""
    if not lower or not lower.strip():
        return True

    trimmed = lower.strip("*:")
    if len(trimmed) <= 2 and not has_letters(trimmed):
        return True
    if trimmed in CURRENCY_ONLY_TOKENS:
        return True
    return trimmed in MEASUREMENT_TOKENS


def normalize_description(description: str) -> str:
    """Collapse whitespace and lower-case, for duplicate detection."""
    return _WHITESPACE.sub(" ", description).strip().lower()
