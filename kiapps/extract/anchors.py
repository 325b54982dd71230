from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence, Tuple

from kiapps.extract.schema import Element
from kiapps.extract.textnorm import heading_key

# -----------------------------
# Canonical heading keys
# -----------------------------
APPLICATION_NUMBER = "application_number"
FULL_DEVELOPMENT_APPROVAL = "full_development_approval"
APPLICATION_RECEIVED = "application_received"
DEVELOPMENT_DESCRIPTION = "development_description"
RELEVANT_AUTHORITY = "relevant_authority"
HOUSE_NUMBER = "house_number"
LOT_NUMBER = "lot_number"
SECTION_NUMBER = "section_number"
PLAN_ID = "plan_id"
PROPERTY_STREET = "property_street"
PROPERTY_SUBURB = "property_suburb"
TITLE = "title"
HUNDRED_OF = "hundred_of"


@dataclass(frozen=True)
class HeadingDef:
    key: str
    labels: Tuple[str, ...]  # synonyms, highest priority first
    prefix: bool = False  # match "Application No." / "Application No:" etc.

    @property
    def normalized_labels(self) -> Tuple[str, ...]:
        return tuple(heading_key(label) for label in self.labels)

    def matches(self, text: str, normalized_label: str) -> bool:
        key = heading_key(text)
        if self.prefix:
            return key.startswith(normalized_label)
        return key == normalized_label


HEADINGS: Tuple[HeadingDef, ...] = (
    HeadingDef(APPLICATION_NUMBER, ("Application No",), prefix=True),
    HeadingDef(FULL_DEVELOPMENT_APPROVAL, ("Full Development Approval",)),
    HeadingDef(APPLICATION_RECEIVED, ("Application Received", "Application r Date")),
    HeadingDef(DEVELOPMENT_DESCRIPTION, ("Development Description",)),
    HeadingDef(RELEVANT_AUTHORITY, ("Relevant Authority",)),
    HeadingDef(HOUSE_NUMBER, ("House No",)),
    HeadingDef(LOT_NUMBER, ("Lot No",)),
    HeadingDef(SECTION_NUMBER, ("Section No",)),
    HeadingDef(PLAN_ID, ("Plan ID",)),
    HeadingDef(PROPERTY_STREET, ("Property Street",)),
    HeadingDef(PROPERTY_SUBURB, ("Property Suburb",)),
    HeadingDef(TITLE, ("Title",)),
    HeadingDef(HUNDRED_OF, ("Hundred Of",)),
)


def find_heading(elements: Sequence[Element], heading: HeadingDef) -> Optional[Element]:
    """
    First element matching the heading. Synonyms are tried in priority order,
    each against the whole page, so a later synonym only wins when no earlier
    one appears anywhere.
    """
    for label in heading.normalized_labels:
        for element in elements:
            if heading.matches(element.text, label):
                return element
    return None


def locate_anchors(
    elements: Sequence[Element], headings: Iterable[HeadingDef] = HEADINGS
) -> Dict[str, Element]:
    """Map heading key -> anchor element for every heading present on the page."""
    anchors: Dict[str, Element] = {}
    for heading in headings:
        found = find_heading(elements, heading)
        if found is not None:
            anchors[heading.key] = found
    return anchors
