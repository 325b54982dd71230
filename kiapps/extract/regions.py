from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

from kiapps.extract.anchors import (
    APPLICATION_NUMBER,
    APPLICATION_RECEIVED,
    DEVELOPMENT_DESCRIPTION,
    FULL_DEVELOPMENT_APPROVAL,
    HOUSE_NUMBER,
    HUNDRED_OF,
    LOT_NUMBER,
    PLAN_ID,
    PROPERTY_STREET,
    PROPERTY_SUBURB,
    RELEVANT_AUTHORITY,
    SECTION_NUMBER,
    TITLE,
)
from kiapps.extract.geometry import Rectangle
from kiapps.extract.schema import Element


@dataclass(frozen=True)
class FieldRule:
    """
    How to build the search region for one field.

    The region starts at the anchor's right edge on the anchor's row. It ends at
    the first `right_bounds` anchor found to the right (or, with `nearest_right`,
    at the closest anchor on the same row if that is nearer), else after twice the
    anchor width. Multi-line fields extend down to the first `bottom_bounds`
    anchor below, else to twice the anchor height.
    """

    anchor: str
    right_bounds: Tuple[str, ...] = (FULL_DEVELOPMENT_APPROVAL,)
    bottom_bounds: Tuple[str, ...] = ()
    multiline: bool = False
    nearest_right: bool = False


# field name -> rule
FIELD_RULES: Dict[str, FieldRule] = {
    "application_number": FieldRule(APPLICATION_NUMBER),
    "received_date": FieldRule(APPLICATION_RECEIVED),
    "description": FieldRule(
        DEVELOPMENT_DESCRIPTION,
        bottom_bounds=(RELEVANT_AUTHORITY,),
        multiline=True,
    ),
    # property block
    "house_number": FieldRule(HOUSE_NUMBER, nearest_right=True),
    "street": FieldRule(PROPERTY_STREET, nearest_right=True),
    "suburb": FieldRule(PROPERTY_SUBURB, nearest_right=True),
    # legal description block
    "lot_number": FieldRule(LOT_NUMBER, nearest_right=True),
    "section_number": FieldRule(SECTION_NUMBER, nearest_right=True),
    "plan_id": FieldRule(PLAN_ID, nearest_right=True),
    "title": FieldRule(TITLE, nearest_right=True),
    "hundred": FieldRule(HUNDRED_OF, nearest_right=True),
}


def _same_row(a: Rectangle, b: Rectangle) -> bool:
    return b.y < a.bottom and b.bottom > a.y


def _right_edge(rule: FieldRule, anchor: Element, anchors: Mapping[str, Element]) -> Optional[float]:
    edge: Optional[float] = None
    for key in rule.right_bounds:
        bound = anchors.get(key)
        if bound is not None and bound.x > anchor.right:
            edge = bound.x
            break

    if rule.nearest_right:
        for other in anchors.values():
            if other is anchor or other.x <= anchor.right:
                continue
            if not _same_row(anchor, other):
                continue
            if edge is None or other.x < edge:
                edge = other.x
    return edge


def _bottom_edge(rule: FieldRule, anchor: Element, anchors: Mapping[str, Element]) -> Optional[float]:
    for key in rule.bottom_bounds:
        bound = anchors.get(key)
        if bound is not None and bound.y > anchor.y:
            return bound.y
    return None


def compute_region(rule: FieldRule, anchors: Mapping[str, Element]) -> Optional[Rectangle]:
    """Search rectangle for a field, or None when its anchor is not on the page."""
    anchor = anchors.get(rule.anchor)
    if anchor is None:
        return None

    x = anchor.right
    right = _right_edge(rule, anchor, anchors)
    width = (right - x) if right is not None else anchor.width * 2

    height = anchor.height
    if rule.multiline:
        bottom = _bottom_edge(rule, anchor, anchors)
        height = (bottom - anchor.y) if bottom is not None else anchor.height * 2

    return Rectangle(x, anchor.y, width, height)


def compute_regions(
    anchors: Mapping[str, Element], rules: Mapping[str, FieldRule] = FIELD_RULES
) -> Dict[str, Rectangle]:
    regions: Dict[str, Rectangle] = {}
    for name, rule in rules.items():
        region = compute_region(rule, anchors)
        if region is not None:
            regions[name] = region
    return regions
