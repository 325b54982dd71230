from __future__ import annotations

import logging
import re
from datetime import date
from typing import Callable, Dict, Optional, Sequence

from kiapps.extract.anchors import APPLICATION_NUMBER, locate_anchors
from kiapps.extract.errors import StructuralMiss
from kiapps.extract.regions import FIELD_RULES, compute_regions
from kiapps.extract.schema import (
    COMMENT_URL,
    NO_DESCRIPTION,
    ApplicationRecord,
    Element,
    summarize_elements,
)
from kiapps.extract.selector import OVERLAP_THRESHOLD, first_value, joined_value
from kiapps.extract.textnorm import collapse_whitespace, strip_all_whitespace
from kiapps.reference import ReferenceTables

logger = logging.getLogger(__name__)

# D/MM/YYYY; the leading zero of the day may be omitted.
RECEIVED_DATE_RE = re.compile(r"^(?P<day>[0-9]{1,2})/(?P<month>[0-9]{2})/(?P<year>[0-9]{4})$")

LOT_ONLY_PREFIX = "LOT:"
NO_ADDRESS_PREFIX = "No Residential Address"

# The source renders some house numbers as "1,234" / "12,345".
_HOUSE_NUMBER_COMMA_RE = re.compile(r"^([0-9]{1,2}),([0-9]{3})")


# ---------- field formatting ----------


def format_address(address: str) -> str:
    """Trim and correct an address; placeholder addresses become ""."""
    address = (address or "").strip()
    if address.startswith(LOT_ONLY_PREFIX):
        return ""
    if address.startswith(NO_ADDRESS_PREFIX):
        return ""
    return _HOUSE_NUMBER_COMMA_RE.sub(r"\1\2", address, count=1)


def parse_received_date(text: Optional[str]) -> str:
    """ISO date for a strict D/MM/YYYY value, "" for anything else."""
    m = RECEIVED_DATE_RE.match((text or "").strip())
    if not m:
        return ""
    try:
        parsed = date(int(m.group("year")), int(m.group("month")), int(m.group("day")))
    except ValueError:
        return ""
    return parsed.strftime("%Y-%m-%d")


def compose_address(house_number: str, street: str, suburb: str) -> str:
    street_line = format_address(collapse_whitespace(f"{house_number} {street}"))
    if not street_line:
        return ""
    suburb = collapse_whitespace(suburb)
    return f"{street_line}, {suburb}" if suburb else street_line


def compose_legal_description(
    lot_number: str = "",
    section_number: str = "",
    plan_id: str = "",
    title: str = "",
    hundred: str = "",
) -> str:
    parts = []
    if lot_number:
        parts.append(f"Lot {lot_number}")
    if section_number:
        parts.append(f"Section {section_number}")
    if plan_id:
        parts.append(f"Plan {plan_id}")
    if title:
        parts.append(f"Title {title}")
    if hundred:
        parts.append(f"Hundred of {hundred}")
    return ", ".join(parts)


# ---------- assembly ----------


class RecordAssembler:
    """
    Turns the reading-ordered elements of one page into an ApplicationRecord.

    `reference_tables` is held for address matching against known street, suburb
    and hundred names; the extraction rules do not consult it.
    """

    def __init__(
        self,
        information_url: str = "",
        *,
        reference_tables: Optional[ReferenceTables] = None,
        threshold: float = OVERLAP_THRESHOLD,
        comment_url: str = COMMENT_URL,
        today: Callable[[], date] = date.today,
    ):
        self.information_url = information_url
        self.reference_tables = reference_tables
        self.threshold = threshold
        self.comment_url = comment_url
        self.today = today

    def extract_fields(self, elements: Sequence[Element]) -> Dict[str, str]:
        anchors = locate_anchors(elements)
        if APPLICATION_NUMBER not in anchors:
            raise StructuralMiss(
                'the "Application No" text is missing', summarize_elements(elements)
            )

        regions = compute_regions(anchors, FIELD_RULES)
        fields: Dict[str, str] = {}
        for name, rule in FIELD_RULES.items():
            region = regions.get(name)
            if rule.multiline:
                fields[name] = joined_value(elements, region, self.threshold)
            else:
                fields[name] = first_value(elements, region, self.threshold)
        return fields

    def assemble(self, elements: Sequence[Element]) -> ApplicationRecord:
        """Raises StructuralMiss when the application number or address is missing."""
        fields = self.extract_fields(elements)

        application_number = strip_all_whitespace(fields["application_number"])
        if not application_number:
            raise StructuralMiss(
                "could not find the application number", summarize_elements(elements)
            )
        logger.info('Found "%s".', application_number)

        address = compose_address(
            fields["house_number"], fields["street"], fields["suburb"]
        )
        if not address:
            raise StructuralMiss(
                f'could not find an address for application "{application_number}"',
                summarize_elements(elements),
            )

        return ApplicationRecord(
            application_number=application_number,
            address=address,
            description=fields["description"] or NO_DESCRIPTION,
            information_url=self.information_url,
            comment_url=self.comment_url,
            scrape_date=self.today().strftime("%Y-%m-%d"),
            received_date=parse_received_date(fields["received_date"]),
            legal_description=compose_legal_description(
                lot_number=fields["lot_number"],
                section_number=fields["section_number"],
                plan_id=fields["plan_id"],
                title=fields["title"],
                hundred=fields["hundred"],
            ),
        )

    def parse(self, elements: Sequence[Element]) -> Optional[ApplicationRecord]:
        """Like assemble(), but a page that cannot be parsed is logged and gives None."""
        try:
            return self.assemble(elements)
        except StructuralMiss as e:
            logger.info(
                "Ignoring the page because %s.  Elements: %s", e.reason, e.elements_summary
            )
            return None


def parse_application_elements(
    elements: Sequence[Element],
    information_url: str = "",
    *,
    reference_tables: Optional[ReferenceTables] = None,
) -> Optional[ApplicationRecord]:
    return RecordAssembler(
        information_url, reference_tables=reference_tables
    ).parse(elements)
