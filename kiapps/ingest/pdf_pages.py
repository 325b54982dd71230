"""
pdf_pages.py

Short-lived, page-at-a-time access to a PDF held in memory.

Every call to `PdfPageDecoder.open_page` re-opens the document from the original
bytes, reads one page's text layer and closes the document again when the
`with` block exits. Only one decoded page is alive at any time, which keeps peak
memory flat for long documents at the cost of re-parsing the file per page.
"""

from __future__ import annotations

import gc
import logging
import math
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

import fitz  # PyMuPDF

from kiapps.extract.schema import Element

logger = logging.getLogger(__name__)


class DocumentDecodeError(Exception):
    pass


class PageReadError(Exception):
    """One page could not be read; the rest of the document may still be fine."""


# -----------------------------
# Element construction
# -----------------------------


def text_transform(span: Dict[str, Any], direction: Tuple[float, float]) -> fitz.Matrix:
    """Text-space -> page-space matrix of a span (font size, writing direction, origin)."""
    cos, sin = direction
    size = float(span.get("size", 0.0))
    ox, oy = span.get("origin", (0.0, 0.0))
    return fitz.Matrix(size * cos, size * sin, -size * sin, size * cos, ox, oy)


def transform_height(m: fitz.Matrix) -> float:
    # The reported span height (bbox) is inflated for some fonts; the vertical
    # scale of the text matrix is reliable.
    return math.sqrt(m.c * m.c + m.d * m.d)


def element_from_span(span: Dict[str, Any], direction: Tuple[float, float] = (1.0, 0.0)) -> Element:
    m = text_transform(span, direction)
    height = transform_height(m)
    x0, _, x1, _ = span.get("bbox", (m.e, m.f, m.e, m.f))
    return Element(
        x=m.e,
        y=m.f - height,  # origin is on the baseline
        width=max(0.0, x1 - x0),
        height=height,
        text=span.get("text", ""),
    )


def trace_text(span: Dict[str, Any]) -> str:
    return "".join(chr(c[0]) for c in span.get("chars", ()) if c[0] >= 0)


def element_from_trace(span: Dict[str, Any]) -> Element:
    """Element for one `get_texttrace()` span (one text-show operation)."""
    chars = span.get("chars") or ()
    bbox = tuple(span.get("bbox", (0.0, 0.0, 0.0, 0.0)))
    origin = chars[0][2] if chars else (bbox[0], bbox[3])
    return element_from_span(
        {
            "text": trace_text(span),
            "size": span.get("size", 0.0),
            "origin": origin,
            "bbox": bbox,
        },
        tuple(span.get("dir", (1.0, 0.0))),
    )


def page_elements(page: fitz.Page) -> List[Element]:
    """
    Positioned text fragments of one page, in content-stream order.

    Built from the text trace rather than `get_text("dict")`: the dict output
    joins neighbouring same-font text on a line into one span, which glues a
    heading to a value printed just after it.
    """
    elements: List[Element] = []
    for sp in page.get_texttrace():
        if not trace_text(sp).strip():
            continue
        elements.append(element_from_trace(sp))
    return elements


# -----------------------------
# Decoders
# -----------------------------


@dataclass
class PageView:
    page_index: int  # 0-based
    page_count: int
    elements: List[Element] = field(default_factory=list)


class PageDecoder:
    """
    Interface: open_page(index) is a context manager yielding a PageView, or None
    once index is past the last page.
    """

    def open_page(self, page_index: int):
        raise NotImplementedError


class PdfPageDecoder(PageDecoder):
    """Re-decodes `data` with PyMuPDF for every page that is requested."""

    def __init__(self, data: bytes, *, gc_hint: bool = True):
        self.data = data
        self.gc_hint = gc_hint

    def _open(self) -> fitz.Document:
        try:
            return fitz.open(stream=self.data, filetype="pdf")
        except RuntimeError as e:  # FileDataError / EmptyFileError
            raise DocumentDecodeError(f"cannot decode PDF: {e}") from e

    @contextmanager
    def open_page(self, page_index: int) -> Iterator[Optional[PageView]]:
        doc = self._open()
        try:
            count = doc.page_count
            if page_index >= count:
                yield None
                return
            try:
                elements = page_elements(doc.load_page(page_index))
            except RuntimeError as e:
                raise PageReadError(f"cannot read page {page_index + 1}: {e}") from e
            yield PageView(page_index, count, elements)
        finally:
            doc.close()
            # advisory only; release is guaranteed by close()
            if self.gc_hint:
                gc.collect()
