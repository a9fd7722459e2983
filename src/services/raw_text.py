"""
Line-item reconstruction from plain text, for results without page geometry.
"""

from typing import Iterator, Optional

from .amounts import parse_standalone_price
from .analysis_types import LineItem
from .line_heuristics import is_skippable_line, is_summary_line, looks_like_quantity


def reconstruct_from_text(content: Optional[str]) -> list[LineItem]:
    return list(iter_items_from_text(content))


def iter_items_from_text(content: Optional[str]) -> Iterator[LineItem]:
    """
    Walk backward from every standalone price to find its description.

    Going up from a price line:
        other price lines       skipped
        summary/footer lines    abort, the price gets no item
        already claimed lines   skipped
        noise (units, "EUR")    skipped
        quantity annotations    collected, oldest first
        anything else           taken as the description, scan stops

    Prices without a recoverable description are dropped.
    """
    if not content or not content.strip():
        return

    lines = [line.strip() for line in content.split("\n") if line.strip()]
    claimed: set[int] = set()

    for i, line in enumerate(lines):
        price = parse_standalone_price(line)
        if price is None:
            continue

        description: Optional[str] = None
        quantities: list[str] = []

        for pointer in range(i - 1, -1, -1):
            candidate = lines[pointer]
            if parse_standalone_price(candidate) is not None:
                continue

            lower = candidate.lower()
            if is_summary_line(lower):
                description = None
                quantities.clear()
                break
            if pointer in claimed:
                continue
            if is_skippable_line(lower):
                continue
            if looks_like_quantity(candidate):
                quantities.insert(0, candidate)
                continue

            description = candidate
            claimed.add(pointer)
            break

        if description is None:
            continue

        full_description = "\n".join([description, *quantities]).strip()
        if not full_description:
            continue
        yield LineItem(description=full_description, total_price=price)
