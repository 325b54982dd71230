from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kiapps.extract.geometry import Rectangle

NO_DESCRIPTION = "No description provided"
COMMENT_URL = "mailto:kicouncil@kicouncil.sa.gov.au"

ISO_DATE = r"^\d{4}-\d{2}-\d{2}$"


# -----------------------------
# Page elements
# -----------------------------
@dataclass(frozen=True)
class Element(Rectangle):
    """A run of text on one page together with its bounding rectangle."""

    text: str = ""


def summarize_elements(elements: Iterable[Element]) -> str:
    """Compact "[a][b][c]" rendering of a page, used when a page is skipped."""
    return "".join(f"[{e.text}]" for e in elements)


# -----------------------------
# Records
# -----------------------------
class ApplicationRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    application_number: str = Field(..., min_length=1, pattern=r"^\S+$")
    address: str = Field(..., min_length=1)
    description: str = NO_DESCRIPTION
    information_url: str = ""
    comment_url: str = COMMENT_URL
    scrape_date: str = Field(..., pattern=ISO_DATE)
    received_date: str = Field("", pattern=r"^(\d{4}-\d{2}-\d{2})?$")
    legal_description: str = ""

    @field_validator("address")
    @classmethod
    def _strip_address(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("empty address")
        return v

    @field_validator("description")
    @classmethod
    def _default_description(cls, v: str) -> str:
        v = re.sub(r"\s+", " ", v or "").strip()
        return v or NO_DESCRIPTION
