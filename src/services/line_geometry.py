"""
Line-item reconstruction from detected text lines.

Layout engines put a row's price at the right edge as its own line. Walking
the lines in reading order, every standalone price is paired with the nearest
earlier line that has letters and is neither a short label nor a quantity
token. Quantity lines printed between the two ("2 x 1,49") are appended to
the description.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from .amounts import parse_standalone_price
from .analysis_types import LineItem
from .document_types import DocumentPage
from .line_heuristics import has_letters, is_likely_label, looks_like_quantity


@dataclass(frozen=True)
class LineInfo:
    """One non-blank line; center_x is recorded for diagnostics and not read by the matcher."""

    index: int
    text: str
    center_x: float
    has_letters: bool
    looks_like_label: bool
    looks_like_quantity: bool
    price: Optional[Decimal]


def compute_center_x(polygon: Optional[Sequence[float]]) -> float:
    """Average of the x coordinates of a flat [x1, y1, x2, y2, ...] polygon."""
    if not polygon or len(polygon) < 2:
        return 0.0
    xs = polygon[0::2]
    return sum(xs) / len(xs)


def build_line_infos(pages: Optional[Iterable[DocumentPage]]) -> list[LineInfo]:
    """Flatten all pages into one reading-order list, skipping blank lines."""
    infos: list[LineInfo] = []
    for page in pages or ():
        for line in page.lines or ():
            text = (line.content or "").strip()
            if not text:
                continue
            infos.append(LineInfo(
                index=len(infos),
                text=text,
                center_x=compute_center_x(line.polygon),
                has_letters=has_letters(text),
                looks_like_label=is_likely_label(text),
                looks_like_quantity=looks_like_quantity(text),
                price=parse_standalone_price(text),
            ))
    return infos


def find_description_line(
    lines: Sequence[LineInfo], price_line: LineInfo, used: set[int]
) -> Optional[LineInfo]:
    for pointer in range(price_line.index - 1, -1, -1):
        candidate = lines[pointer]
        if candidate.price is not None:
            continue
        if (
            not candidate.has_letters
            or candidate.looks_like_label
            or candidate.looks_like_quantity
            or candidate.index in used
        ):
            continue
        return candidate
    return None


def reconstruct_from_pages(pages: Optional[Iterable[DocumentPage]]) -> list[LineItem]:
    """
    Rebuild line items from page geometry.

    Only description and total price are recovered; quantity and unit price
    stay unset. A description line is attached to at most one price.
    """
    lines = build_line_infos(pages)
    if not lines:
        return []

    used: set[int] = set()
    items: list[LineItem] = []
    for price_line in lines:
        if price_line.price is None:
            continue

        description_line = find_description_line(lines, price_line, used)
        if description_line is None:
            continue
        used.add(description_line.index)

        between = [
            line.text
            for line in lines[description_line.index + 1:price_line.index]
            if line.looks_like_quantity
        ]
        description = "\n".join([description_line.text, *between]).strip()
        items.append(LineItem(description=description, total_price=price_line.price))

    return items
