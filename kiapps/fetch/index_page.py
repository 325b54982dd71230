from __future__ import annotations

import random
from typing import List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

# Links to the monthly registers sit in the council CMS content list.
LINK_SELECTOR = "td.uContentListDesc p a"


def find_pdf_urls(html: str, base_url: str, selector: str = LINK_SELECTOR) -> List[str]:
    """Absolute PDF links in page order, without duplicates."""
    soup = BeautifulSoup(html, "html.parser")
    urls: List[str] = []
    for a in soup.select(selector):
        href = a.get("href")
        if not href:
            continue
        url = urljoin(base_url, href.strip())
        if ".pdf" not in url.lower():
            continue
        if url not in urls:
            urls.append(url)
    return urls


def select_pdf_urls(
    urls: List[str], count: int = 2, rng: Optional[random.Random] = None
) -> List[str]:
    """
    The most recent PDF (listed first) plus randomly chosen others, up to count.
    Processing everything at once uses too much memory on the hosting platform,
    so older registers are covered over successive runs.
    """
    if not urls or count < 1:
        return []
    rng = rng or random.Random()
    selected = [urls[0]]
    others = urls[1:]
    if count > 1 and others:
        selected += rng.sample(others, min(count - 1, len(others)))
    rng.shuffle(selected)
    return selected
