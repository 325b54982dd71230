from __future__ import annotations

from typing import List, Optional, Sequence

from kiapps.extract.geometry import Rectangle, overlap_percentage
from kiapps.extract.schema import Element
from kiapps.extract.textnorm import collapse_whitespace

# Percentage of an element's own area that must fall inside a region.
OVERLAP_THRESHOLD = 10.0


def select_elements(
    elements: Sequence[Element],
    region: Rectangle,
    threshold: float = OVERLAP_THRESHOLD,
) -> List[Element]:
    """Elements (kept in the given order) whose overlap with region exceeds threshold."""
    return [e for e in elements if overlap_percentage(e, region) > threshold]


def first_value(
    elements: Sequence[Element],
    region: Optional[Rectangle],
    threshold: float = OVERLAP_THRESHOLD,
) -> str:
    if region is None:
        return ""
    for e in elements:
        if overlap_percentage(e, region) > threshold:
            return e.text.strip()
    return ""


def joined_value(
    elements: Sequence[Element],
    region: Optional[Rectangle],
    threshold: float = OVERLAP_THRESHOLD,
) -> str:
    if region is None:
        return ""
    hits = select_elements(elements, region, threshold)
    return collapse_whitespace(" ".join(e.text for e in hits))
