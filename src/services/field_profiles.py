"""
Field-name aliases per logical slot.

Azure's prebuilt invoice and receipt models name the same facts differently
(VendorName vs MerchantName, InvoiceTotal vs Total). Each profile lists the
candidate keys per slot in lookup order; the mapper takes the first one that
yields a value.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ItemFieldAliases:
    description: tuple[str, ...] = ("Description",)
    quantity: tuple[str, ...] = ("Quantity", "Weight")
    unit_price: tuple[str, ...] = ("UnitPrice", "Price")
    total_price: tuple[str, ...] = ("TotalPrice", "Amount", "Subtotal")


@dataclass(frozen=True)
class FieldProfile:
    name: str
    vendor: tuple[str, ...]
    customer: tuple[str, ...]
    document_id: tuple[str, ...]
    date: tuple[str, ...]
    total: tuple[str, ...]
    items: tuple[str, ...] = ("Items",)
    item: ItemFieldAliases = ItemFieldAliases()


INVOICE_PROFILE = FieldProfile(
    name="invoice",
    vendor=("VendorName", "MerchantName"),
    customer=("CustomerName", "BillingAddressRecipient"),
    document_id=("InvoiceId",),
    date=("InvoiceDate", "TransactionDate"),
    total=("InvoiceTotal", "Total"),
)

RECEIPT_PROFILE = FieldProfile(
    name="receipt",
    vendor=("MerchantName", "VendorName"),
    customer=("CustomerName",),
    document_id=("InvoiceId", "ReceiptNumber"),
    date=("TransactionDate", "InvoiceDate"),
    total=("Total", "InvoiceTotal"),
)


def profile_for_model(model_id: str | None) -> FieldProfile:
    """Pick the alias profile matching an Azure prebuilt model id."""
    if model_id and "receipt" in model_id.lower():
        return RECEIPT_PROFILE
    return INVOICE_PROFILE
