from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from kiapps.extract.assembler import RecordAssembler
from kiapps.extract.schema import ApplicationRecord, Element
from kiapps.ingest.pdf_pages import (
    DocumentDecodeError,
    PageDecoder,
    PageReadError,
    PdfPageDecoder,
)
from kiapps.reference import ReferenceTables

logger = logging.getLogger(__name__)

# Upper bound on pages read from one document, whatever page count it reports.
MAX_PAGES = 5000


def sort_reading_order(elements: Iterable[Element]) -> List[Element]:
    """Top to bottom, then left to right."""
    return sorted(elements, key=lambda e: (e.y, e.x))


def extract_records(
    decoder: PageDecoder,
    assembler: RecordAssembler,
    *,
    max_pages: int = MAX_PAGES,
) -> List[ApplicationRecord]:
    """
    Run the assembler over every page (one application per page), keeping the
    first record for each application number.
    """
    records: List[ApplicationRecord] = []
    seen = set()
    page_count = 0

    for page_index in range(max_pages):
        try:
            with decoder.open_page(page_index) as view:
                if view is None:
                    break
                page_count = view.page_count
                logger.info(
                    "Reading and parsing applications from page %d of %d.",
                    page_index + 1,
                    view.page_count,
                )
                elements = view.elements
        except DocumentDecodeError as e:
            logger.warning("Stopping at page %d: %s", page_index + 1, e)
            break
        except PageReadError as e:
            logger.warning("Skipping page %d: %s", page_index + 1, e)
            continue

        record = assembler.parse(sort_reading_order(elements))
        if record is None:
            continue
        if record.application_number in seen:
            logger.info(
                'Ignoring duplicate application "%s" on page %d.',
                record.application_number,
                page_index + 1,
            )
            continue
        seen.add(record.application_number)
        records.append(record)
    else:
        if page_count > max_pages:
            logger.warning(
                "Stopped after the page limit of %d pages (document reports %d).",
                max_pages,
                page_count,
            )

    return records


def parse_pdf(
    data: bytes,
    information_url: str = "",
    *,
    reference_tables: Optional[ReferenceTables] = None,
    max_pages: int = MAX_PAGES,
    gc_hint: bool = True,
) -> List[ApplicationRecord]:
    """Parse the development applications in one PDF (raw bytes)."""
    decoder = PdfPageDecoder(data, gc_hint=gc_hint)
    assembler = RecordAssembler(information_url, reference_tables=reference_tables)
    return extract_records(decoder, assembler, max_pages=max_pages)
