"""
Maps the typed field bag of an analysed document onto output slots.

Each slot is read through its alias list (see field_profiles): the first
alias that is present with an accepted kind decides the slot. Aliases of
another kind are passed over; null payloads and unparseable values on the
deciding alias leave the slot unset for the later fallbacks.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Iterator, Mapping, Optional

from loguru import logger

from .amounts import field_amount, parse_date
from .analysis_types import LineItem
from .document_types import FieldKind, RawField
from .field_profiles import FieldProfile, INVOICE_PROFILE

_STRING_KINDS = frozenset({FieldKind.STRING})
_DATE_KINDS = frozenset({FieldKind.DATE, FieldKind.STRING})
_AMOUNT_KINDS = frozenset({FieldKind.CURRENCY, FieldKind.DOUBLE, FieldKind.INTEGER, FieldKind.STRING})


@dataclass
class StructuredFields:
    """What the typed fields alone could tell about the document."""

    vendor_name: Optional[str] = None
    customer_name: Optional[str] = None
    invoice_number: Optional[str] = None
    invoice_date: Optional[datetime] = None
    total_amount: Optional[Decimal] = None
    currency_code: Optional[str] = None
    items: list[LineItem] = field(default_factory=list)
    raw_fields: dict[str, str] = field(default_factory=dict)

    def adopt_currency(self, code: Optional[str]) -> None:
        # First writer wins
        if code and not self.currency_code:
            self.currency_code = code


def map_structured_fields(
    fields: Optional[Mapping[str, RawField]],
    profile: FieldProfile = INVOICE_PROFILE,
    dayfirst: bool = True,
) -> StructuredFields:
    """
    Extract every slot the profile knows about from a field bag.

    Args:
        fields: Field name -> RawField for one analysed document
        profile: Alias lists per slot
        dayfirst: Convention for string-typed dates

    Returns:
        StructuredFields with unset slots left as None
    """
    mapped = StructuredFields()
    if not fields:
        return mapped

    mapped.vendor_name = first_string(fields, profile.vendor)
    mapped.customer_name = first_string(fields, profile.customer)
    mapped.invoice_number = first_string(fields, profile.document_id)
    mapped.invoice_date = first_date(fields, profile.date, dayfirst=dayfirst)

    total, currency = first_amount(fields, profile.total)
    mapped.total_amount = total
    mapped.adopt_currency(currency)

    for item, currencies in _map_items(fields, profile):
        mapped.items.append(item)
        for code in currencies:
            mapped.adopt_currency(code)

    mapped.raw_fields = collect_raw_content(fields)

    logger.debug(
        "Mapped structured fields",
        profile=profile.name,
        vendor=mapped.vendor_name,
        total=str(mapped.total_amount) if mapped.total_amount is not None else None,
        items=len(mapped.items),
    )
    return mapped


def first_string(fields: Mapping[str, RawField], aliases: tuple[str, ...]) -> Optional[str]:
    raw = _first_of_kind(fields, aliases, _STRING_KINDS)
    if raw is not None and isinstance(raw.value, str) and raw.value.strip():
        return raw.value
    return None


def first_date(
    fields: Mapping[str, RawField], aliases: tuple[str, ...], dayfirst: bool = True
) -> Optional[datetime]:
    raw = _first_of_kind(fields, aliases, _DATE_KINDS)
    if raw is None:
        return None
    if raw.kind is FieldKind.DATE:
        return _date_to_utc(raw.value)
    if isinstance(raw.value, str):
        return parse_date(raw.value, dayfirst=dayfirst)
    return None


def first_amount(
    fields: Mapping[str, RawField], aliases: tuple[str, ...]
) -> tuple[Optional[Decimal], Optional[str]]:
    """(amount, currency) of the first numeric alias; currency may be None."""
    return field_amount(_first_of_kind(fields, aliases, _AMOUNT_KINDS))


def _first_of_kind(
    fields: Mapping[str, RawField], aliases: tuple[str, ...], kinds: frozenset
) -> Optional[RawField]:
    """
    First alias present with an accepted kind.

    Later aliases are only consulted when earlier ones are absent or of another
    kind. An accepted field whose value does not parse still ends the search.
    """
    for name in aliases:
        raw = fields.get(name)
        if raw is not None and raw.kind in kinds:
            return raw
    return None


def collect_raw_content(fields: Mapping[str, RawField]) -> dict[str, str]:
    """Field name -> literal recognised text, skipping blank content."""
    collected: dict[str, str] = {}
    for name, raw in fields.items():
        content = getattr(raw, "content", None)
        if isinstance(content, str) and content.strip():
            collected.setdefault(name, content)
    return collected


def _map_items(
    fields: Mapping[str, RawField], profile: FieldProfile
) -> Iterator[tuple[LineItem, list[str]]]:
    item_list = None
    for name in profile.items:
        raw = fields.get(name)
        if raw is not None and raw.kind is FieldKind.LIST and isinstance(raw.value, list):
            item_list = raw.value
            break

    if item_list is None:
        return

    aliases = profile.item
    for entry in item_list:
        if not isinstance(entry, RawField) or entry.kind is not FieldKind.DICTIONARY:
            continue
        if not isinstance(entry.value, dict):
            continue

        sub_fields = entry.value
        quantity, _ = first_amount(sub_fields, aliases.quantity)
        unit_price, unit_currency = first_amount(sub_fields, aliases.unit_price)
        total_price, total_currency = first_amount(sub_fields, aliases.total_price)
        item = LineItem(
            description=first_string(sub_fields, aliases.description),
            quantity=quantity,
            unit_price=unit_price,
            total_price=total_price,
        )
        if item.has_content():
            yield item, [c for c in (unit_currency, total_currency) if c]


def _date_to_utc(value) -> Optional[datetime]:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    return None
