"""
Turns one document analysis into a normalised AnalysisResult.

Pipeline, each step only filling what the previous ones left unset:

    1. Structured fields (typed key/value bag)
    2. Line items from page geometry, else from raw text, when step 1 found none
    3. Merge of fallback items, dropping duplicate descriptions
    4. Currency sniffed from the full text
    5. Total from the largest money-shaped token in the full text
    6. Date from the first date-shaped token in the full text

Nothing here raises for missing or malformed values; a step that finds
nothing just leaves its slot unset. The function is pure: the same input
always produces an equal result.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN
from typing import Iterable, Optional

from loguru import logger

from .amounts import find_first_date, find_largest_amount
from .analysis_types import AnalysisResult, LineItem
from .currency import sniff_currency
from .document_types import DocumentAnalysis
from .field_mapper import map_structured_fields
from .field_profiles import FieldProfile, INVOICE_PROFILE
from .line_geometry import reconstruct_from_pages
from .line_heuristics import normalize_description
from .raw_text import reconstruct_from_text

MONEY_QUANTUM = Decimal("0.01")


def extract_analysis(
    document: DocumentAnalysis,
    profile: FieldProfile = INVOICE_PROFILE,
    dayfirst: bool = True,
) -> AnalysisResult:
    """
    Run the full extraction pipeline over one analysed document.

    Args:
        document: Fields, page lines and full text from the analysis service
        profile: Field-name aliases to read the typed fields with
        dayfirst: Convention for ambiguous numeric dates

    Returns:
        AnalysisResult, never None; unresolved slots stay None
    """
    structured = map_structured_fields(document.fields, profile=profile, dayfirst=dayfirst)
    full_text = document.full_text

    result = AnalysisResult(
        vendor_name=structured.vendor_name,
        customer_name=structured.customer_name,
        invoice_number=structured.invoice_number,
        invoice_date=structured.invoice_date,
        total_amount=structured.total_amount,
        currency_code=structured.currency_code,
        notes=full_text,
        items=list(structured.items),
        raw_fields=dict(structured.raw_fields),
    )

    item_source = "fields" if result.items else None
    has_pages = bool(document.pages)
    has_text = bool(full_text.strip())

    if has_pages or has_text:
        if not result.items:
            fallback_items, item_source = reconstruct_items(document.pages, full_text)
            result.items = merge_items(result.items, fallback_items)

        if not result.currency_code:
            result.currency_code = sniff_currency(full_text)
            if result.currency_code:
                logger.debug("Currency inferred from text", currency=result.currency_code)

    total_from_text = False
    if result.total_amount is None and has_text:
        largest = find_largest_amount(full_text)
        if largest is not None:
            result.total_amount = largest.amount
            total_from_text = True
            if not result.currency_code and largest.currency:
                result.currency_code = largest.currency

    date_from_text = False
    if result.invoice_date is None and has_text:
        result.invoice_date = find_first_date(full_text, dayfirst=dayfirst)
        date_from_text = result.invoice_date is not None

    result.total_amount = round_money(result.total_amount)

    logger.info(
        "Document extraction complete",
        vendor=result.vendor_name,
        items=len(result.items),
        item_source=item_source,
        total_from_text=total_from_text,
        date_from_text=date_from_text,
        currency=result.currency_code,
    )
    return result


def reconstruct_items(pages, full_text: str) -> tuple[list[LineItem], Optional[str]]:
    """Geometry first, raw text only when geometry yields nothing."""
    items = reconstruct_from_pages(pages)
    if items:
        logger.debug("Line items rebuilt from page geometry", count=len(items))
        return items, "geometry"

    items = reconstruct_from_text(full_text)
    if items:
        logger.debug("Line items rebuilt from raw text", count=len(items))
        return items, "raw_text"
    return [], None


def merge_items(existing: Iterable[LineItem], fallback: Iterable[LineItem]) -> list[LineItem]:
    """
    Append fallback items whose normalised description is not already known.

    Items without a description are ignored. Duplicates are dropped, never
    merged, so merging the same fallback list again changes nothing.
    """
    merged = list(existing)
    seen = {
        normalize_description(item.description)
        for item in merged
        if item.description and item.description.strip()
    }

    for item in fallback:
        if not item.description or not item.description.strip():
            continue
        key = normalize_description(item.description)
        if key in seen:
            continue
        merged.append(item)
        seen.add(key)
    return merged


def round_money(amount: Optional[Decimal]) -> Optional[Decimal]:
    """Quantize to cents; a value too large to quantize is dropped."""
    if amount is None:
        return None
    try:
        return amount.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_EVEN)
    except InvalidOperation:
        logger.debug("Total too large to round, dropped", amount=str(amount))
        return None
