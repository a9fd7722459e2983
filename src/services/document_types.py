"""
Input shapes produced by the external document-understanding service.

These mirror the parts of an Azure Document Intelligence AnalyzeResult that
extraction reads, decoupled from the SDK so the engine can be exercised
without it (see azure_adapter.document_from_azure).
"""

from dataclasses import dataclass, field
import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class FieldKind(str, Enum):
    """Closed set of field tags. OTHER covers every tag extraction ignores."""

    STRING = "string"
    DATE = "date"
    CURRENCY = "currency"
    DOUBLE = "double"
    INTEGER = "integer"
    LIST = "list"
    DICTIONARY = "dictionary"
    OTHER = "other"


@dataclass(frozen=True)
class CurrencyAmount:
    amount: Optional[Decimal] = None
    currency_code: Optional[str] = None
    currency_symbol: Optional[str] = None


@dataclass(frozen=True)
class RawField:
    """
    A typed value from the analysis result plus its literal source text.

    The payload type depends on kind:
        STRING      -> str
        DATE        -> datetime.date
        CURRENCY    -> CurrencyAmount
        DOUBLE      -> float
        INTEGER     -> int
        LIST        -> list[RawField]
        DICTIONARY  -> dict[str, RawField]
        OTHER       -> anything (never read)

    A None payload is legal for every kind and is treated as a miss.
    """

    kind: FieldKind
    value: object = None
    content: Optional[str] = None

    @classmethod
    def string(cls, value: Optional[str], content: Optional[str] = None) -> "RawField":
        return cls(FieldKind.STRING, value, value if content is None else content)

    @classmethod
    def date(cls, value: Optional[datetime.date], content: Optional[str] = None) -> "RawField":
        return cls(FieldKind.DATE, value, content)

    @classmethod
    def currency(
        cls,
        amount,
        currency_code: Optional[str] = None,
        currency_symbol: Optional[str] = None,
        content: Optional[str] = None,
    ) -> "RawField":
        if amount is not None and not isinstance(amount, Decimal):
            amount = Decimal(str(amount))
        return cls(FieldKind.CURRENCY, CurrencyAmount(amount, currency_code, currency_symbol), content)

    @classmethod
    def double(cls, value: Optional[float], content: Optional[str] = None) -> "RawField":
        return cls(FieldKind.DOUBLE, value, content)

    @classmethod
    def integer(cls, value: Optional[int], content: Optional[str] = None) -> "RawField":
        return cls(FieldKind.INTEGER, value, content)

    @classmethod
    def list_of(cls, items: list["RawField"], content: Optional[str] = None) -> "RawField":
        return cls(FieldKind.LIST, list(items), content)

    @classmethod
    def dictionary(cls, entries: dict[str, "RawField"], content: Optional[str] = None) -> "RawField":
        return cls(FieldKind.DICTIONARY, dict(entries), content)


@dataclass(frozen=True)
class DocumentLine:
    content: Optional[str]
    polygon: tuple[float, ...] = ()  # x1, y1, x2, y2, ...


@dataclass(frozen=True)
class DocumentPage:
    lines: tuple[DocumentLine, ...] = ()


@dataclass(frozen=True)
class DocumentAnalysis:
    """Everything the extraction engine consumes for one document."""

    documents: tuple[dict[str, RawField], ...] = ()
    pages: tuple[DocumentPage, ...] = ()
    content: str = ""
    paragraphs: tuple[str, ...] = field(default_factory=tuple)

    @property
    def fields(self) -> dict[str, RawField]:
        """Fields of the first analysed document, empty when there is none."""
        if not self.documents:
            return {}
        return self.documents[0] or {}

    @property
    def full_text(self) -> str:
        if self.content and self.content.strip():
            return self.content
        if self.paragraphs:
            return "\n".join(p for p in self.paragraphs if p)
        return self.content or ""
