"""
Tests for converting Azure Document Intelligence results.

Uses SimpleNamespace stand-ins shaped like the SDK models so the tests do not
depend on a live service.
"""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace as NS

from src.services.azure_adapter import convert_field, document_from_azure
from src.services.document_types import CurrencyAmount, FieldKind


def sdk_field(type_, content=None, **values):
    return NS(type=type_, content=content, **values)


def test_scalar_field_types():
    assert convert_field(sdk_field("string", "Acme", value_string="Acme")).value == "Acme"
    assert convert_field(sdk_field("date", "1/2/25", value_date=date(2025, 1, 2))).value == date(2025, 1, 2)
    assert convert_field(sdk_field("number", "1.5", value_number=1.5)).kind is FieldKind.DOUBLE
    assert convert_field(sdk_field("integer", "3", value_integer=3)).value == 3


def test_currency_field():
    raw = convert_field(sdk_field(
        "currency", "$12.30",
        value_currency=NS(amount=12.3, currency_code="USD", currency_symbol="$"),
    ))
    assert raw.kind is FieldKind.CURRENCY
    assert raw.value == CurrencyAmount(Decimal("12.3"), "USD", "$")
    assert raw.content == "$12.30"


def test_nested_items():
    items = sdk_field("array", value_array=[
        sdk_field("object", value_object={
            "Description": sdk_field("string", "Tea", value_string="Tea"),
            "TotalPrice": sdk_field("currency", "2.00", value_currency=NS(amount=2.0, currency_code=None, currency_symbol=None)),
        }),
    ])
    raw = convert_field(items)
    assert raw.kind is FieldKind.LIST
    entry = raw.value[0]
    assert entry.kind is FieldKind.DICTIONARY
    assert entry.value["Description"].value == "Tea"
    assert entry.value["TotalPrice"].value.amount == Decimal("2.0")


def test_unknown_types_and_nulls():
    assert convert_field(sdk_field("phoneNumber", "+1 555", value_phone_number="+1555")).kind is FieldKind.OTHER
    assert convert_field(sdk_field("string", "??", value_string=None)).value is None
    assert convert_field(NS(type=None, content=None)).kind is FieldKind.OTHER
    assert convert_field(None).kind is FieldKind.OTHER


def test_enum_like_type_is_accepted():
    field = NS(type=NS(value="String"), content="x", value_string="x")
    assert convert_field(field).kind is FieldKind.STRING


def test_document_from_result():
    result = NS(
        content="Widget\n99.00",
        documents=[NS(fields={"VendorName": sdk_field("string", "Acme", value_string="Acme")})],
        pages=[NS(lines=[
            NS(content="Widget", polygon=[1.0, 1.0, 3.0, 1.0, 3.0, 1.2, 1.0, 1.2]),
            NS(content="99.00", polygon=None),
        ])],
        paragraphs=[NS(content="Widget"), NS(content=None)],
    )
    document = document_from_azure(result)
    assert document.fields["VendorName"].value == "Acme"
    assert document.content == "Widget\n99.00"
    assert [line.content for line in document.pages[0].lines] == ["Widget", "99.00"]
    assert document.pages[0].lines[0].polygon[:2] == (1.0, 1.0)
    assert document.pages[0].lines[1].polygon == ()
    assert document.paragraphs == ("Widget",)


def test_sparse_result():
    document = document_from_azure(NS())
    assert document.documents == ()
    assert document.pages == ()
    assert document.content == ""
    assert document.fields == {}
