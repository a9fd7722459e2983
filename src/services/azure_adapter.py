"""
Conversion of Azure Document Intelligence results into DocumentAnalysis.

Works on the azure-ai-documentintelligence AnalyzeResult model (and anything
shaped like it), reading attributes with getattr: missing attributes and null
payloads turn into empty values, SDK field types extraction does not use
become FieldKind.OTHER.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from .document_types import (
    CurrencyAmount,
    DocumentAnalysis,
    DocumentLine,
    DocumentPage,
    FieldKind,
    RawField,
)

# SDK DocumentFieldType value -> (our kind, attribute holding the payload)
_SDK_FIELD_TYPES = {
    "string": (FieldKind.STRING, "value_string"),
    "date": (FieldKind.DATE, "value_date"),
    "currency": (FieldKind.CURRENCY, "value_currency"),
    "number": (FieldKind.DOUBLE, "value_number"),
    "integer": (FieldKind.INTEGER, "value_integer"),
    "array": (FieldKind.LIST, "value_array"),
    "object": (FieldKind.DICTIONARY, "value_object"),
}


def document_from_azure(result: Any) -> DocumentAnalysis:
    """Build a DocumentAnalysis from an SDK AnalyzeResult."""
    documents = tuple(
        convert_fields(getattr(doc, "fields", None))
        for doc in (getattr(result, "documents", None) or [])
    )
    pages = tuple(
        DocumentPage(lines=tuple(
            DocumentLine(
                content=getattr(line, "content", None),
                polygon=tuple(getattr(line, "polygon", None) or ()),
            )
            for line in (getattr(page, "lines", None) or [])
        ))
        for page in (getattr(result, "pages", None) or [])
    )
    paragraphs = tuple(
        p.content
        for p in (getattr(result, "paragraphs", None) or [])
        if getattr(p, "content", None)
    )
    return DocumentAnalysis(
        documents=documents,
        pages=pages,
        content=getattr(result, "content", None) or "",
        paragraphs=paragraphs,
    )


def convert_fields(fields: Optional[dict]) -> dict[str, RawField]:
    if not fields:
        return {}
    return {name: convert_field(field) for name, field in fields.items()}


def convert_field(field: Any) -> RawField:
    if field is None:
        return RawField(FieldKind.OTHER)

    content = getattr(field, "content", None)
    type_name = _type_name(getattr(field, "type", None))
    kind, attribute = _SDK_FIELD_TYPES.get(type_name, (FieldKind.OTHER, None))
    if attribute is None:
        return RawField(FieldKind.OTHER, None, content)

    value = getattr(field, attribute, None)
    if value is None:
        return RawField(kind, None, content)

    if kind is FieldKind.CURRENCY:
        value = CurrencyAmount(
            amount=_decimal_or_none(getattr(value, "amount", None)),
            currency_code=getattr(value, "currency_code", None),
            currency_symbol=getattr(value, "currency_symbol", None),
        )
    elif kind is FieldKind.LIST:
        value = [convert_field(entry) for entry in value]
    elif kind is FieldKind.DICTIONARY:
        value = convert_fields(value)

    return RawField(kind, value, content)


def _type_name(field_type: Any) -> str:
    if field_type is None:
        return ""
    return str(getattr(field_type, "value", field_type)).lower()


def _decimal_or_none(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
