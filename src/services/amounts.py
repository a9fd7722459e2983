"""
Numeric and locale-aware parsing of money and quantity values.

Free text from OCR may come from documents printed under different number
conventions, so ambiguous strings are tried against several conventions in a
fixed order and the first one that parses wins:

    invariant       1,234.56   1234.56
    comma decimal   1.234,56   1234,56
    space grouped   1 234,56   (non-breaking or narrow no-break spaces)

Money-shaped tokens must carry exactly two fractional digits. Integers such as
"42" never come through this path; they arrive as typed integer fields.

Nothing in this module raises on bad input. Every parser returns None when it
cannot produce a value, and callers move on to their next fallback.
"""

import re
from dataclasses import dataclass
from datetime import datetime, UTC
from decimal import Decimal, InvalidOperation
from typing import Optional

from dateutil import parser as date_parser

from .currency import currency_for_marker
from .document_types import FieldKind, RawField

# Optional currency marker, then a money token with exactly two decimals.
# Grouped thousands are only recognised with '.', ',' or no-break spaces so
# that "2 500.00" (quantity, price) stays two tokens. A token glued to further
# digits or separators is rejected, so the "12.03" in "12.03.2025" is never
# read as money even though it has the shape of one.
MONEY_PATTERN = re.compile(
    r"(?:(€|eur|\$|usd|gbp|£)\s*)?"
    r"(?<![\d.,])(\d{1,3}(?:[.,\u00a0\u202f]\d{3})+[.,]\d{2}|\d+[.,]\d{2})(?![.,]?\d)",
    re.IGNORECASE,
)

STANDALONE_PRICE_PATTERN = re.compile(r"^-?\d+[.,]\d{2}$")

DATE_TOKEN_PATTERN = re.compile(r"\b(\d{1,2}[./-]\d{1,2}[./-]\d{2,4})\b")

# Amounts at or above this are OCR noise (reference numbers, barcodes) and
# would not survive quantizing to cents.
MAX_AMOUNT = Decimal("1e15")

# (name, full-match pattern, group separators, decimal separator)
_NUMBER_CONVENTIONS = (
    ("invariant", re.compile(r"^[-+]?(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?$"), ",", "."),
    ("comma-decimal", re.compile(r"^[-+]?(?:\d{1,3}(?:\.\d{3})+|\d+)(?:,\d+)?$"), ".", ","),
    ("space-grouped", re.compile(r"^[-+]?(?:\d{1,3}(?:[ \u00a0\u202f]\d{3})+|\d+)(?:,\d+)?$"), " \u00a0\u202f", ","),
)


@dataclass(frozen=True)
class MoneyMatch:
    amount: Decimal
    currency: Optional[str] = None  # ISO code when the marker is known


def parse_decimal(text: Optional[str]) -> Optional[Decimal]:
    """
    Parse a plain number string trying each convention in order.

    >>> parse_decimal("1,234.56")
    Decimal('1234.56')
    >>> parse_decimal("1.234,56")
    Decimal('1234.56')
    >>> parse_decimal("12,50")
    Decimal('12.50')
    """
    if not text:
        return None

    candidate = text.strip()
    for _name, pattern, group_seps, decimal_sep in _NUMBER_CONVENTIONS:
        if not pattern.match(candidate):
            continue
        normalized = candidate
        for sep in group_seps:
            normalized = normalized.replace(sep, "")
        normalized = normalized.replace(decimal_sep, ".")
        try:
            return _in_range(Decimal(normalized))
        except InvalidOperation:
            continue
    return None


def parse_money(text: Optional[str]) -> Optional[MoneyMatch]:
    """
    Find the first money-shaped token in text.

    Returns the amount and, when a marker precedes it, the currency code.
    """
    if not text or not text.strip():
        return None

    for match in MONEY_PATTERN.finditer(text):
        amount = parse_decimal(match.group(2))
        if amount is not None:
            return MoneyMatch(amount, currency_for_marker(match.group(1)))
    return None


def find_largest_amount(text: Optional[str]) -> Optional[MoneyMatch]:
    """
    Scan every money-shaped token in text and keep the numeric maximum.

    The currency reported is the marker adjacent to the winning token only;
    markers seen on earlier, smaller tokens are not carried over. Ties keep the
    earliest token.
    """
    if not text:
        return None

    best: Optional[MoneyMatch] = None
    for match in MONEY_PATTERN.finditer(text):
        amount = parse_decimal(match.group(2))
        if amount is None:
            continue
        if best is None or amount > best.amount:
            best = MoneyMatch(amount, currency_for_marker(match.group(1)))
    return best


def parse_standalone_price(line: Optional[str]) -> Optional[Decimal]:
    """
    Parse a line whose whole content is a price.

    Decoration tolerated around the number: a leading or trailing "EUR",
    spaces, surrounding asterisks and one trailing letter (tax class markers
    such as "4,99 A").
    """
    if not line:
        return None

    sanitized = re.sub("eur", "", line, flags=re.IGNORECASE)
    sanitized = sanitized.replace(" ", "").strip("*")
    sanitized = re.sub(r"[A-Z]$", "", sanitized, flags=re.IGNORECASE).strip()

    if not STANDALONE_PRICE_PATTERN.match(sanitized):
        return None
    return parse_decimal(sanitized.replace(",", "."))


def field_amount(field: Optional[RawField]) -> tuple[Optional[Decimal], Optional[str]]:
    """
    Read a numeric value from a typed field.

    Currency, double and integer payloads convert directly; strings go through
    parse_money. Returns (amount, currency) where currency is set from a typed
    currency value or a marker found in the string.
    """
    if field is None or field.value is None:
        return None, None

    if field.kind is FieldKind.CURRENCY:
        value = field.value
        amount = getattr(value, "amount", None)
        marker = getattr(value, "currency_code", None) or getattr(value, "currency_symbol", None)
        currency = currency_for_marker(marker)
        if amount is None:
            return None, currency
        return _to_decimal(amount), currency

    if field.kind is FieldKind.DOUBLE:
        return _to_decimal(field.value), None

    if field.kind is FieldKind.INTEGER:
        return _to_decimal(field.value), None

    if field.kind is FieldKind.STRING:
        parsed = parse_money(str(field.value))
        if parsed is None:
            return None, None
        return parsed.amount, parsed.currency

    return None, None


def _to_decimal(value) -> Optional[Decimal]:
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return _in_range(value)
    try:
        # str() first so 0.1 becomes Decimal("0.1"), not its binary expansion
        return _in_range(Decimal(str(value)))
    except (InvalidOperation, ValueError, TypeError):
        return None


def _in_range(value: Decimal) -> Optional[Decimal]:
    if not value.is_finite() or abs(value) >= MAX_AMOUNT:
        return None
    return value


def parse_date(text: Optional[str], dayfirst: bool = True) -> Optional[datetime]:
    """
    Parse a date string with dateutil and label it UTC.

    ISO 8601 strings are read as such before dayfirst applies (dateutil would
    otherwise swap month and day in "2025-03-04"). Naive results are marked
    UTC; aware results are converted to UTC.
    """
    if not text or not text.strip():
        return None
    text = text.strip()
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = date_parser.parse(text, dayfirst=dayfirst)
        except (ValueError, OverflowError):
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def find_first_date(text: Optional[str], dayfirst: bool = True) -> Optional[datetime]:
    """Parse the first d/m/y shaped token in text. No ranking among candidates."""
    if not text:
        return None
    match = DATE_TOKEN_PATTERN.search(text)
    if not match:
        return None
    return parse_date(match.group(1), dayfirst=dayfirst)
