from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

STREET_NAMES_FILE = "streetnames.txt"
STREET_SUFFIXES_FILE = "streetsuffixes.txt"
SUBURB_NAMES_FILE = "suburbnames.txt"
HUNDRED_NAMES_FILE = "hundrednames.txt"


@dataclass
class ReferenceTables:
    """Known street, suburb and hundred names (all upper case)."""

    street_names: Dict[str, List[str]] = field(default_factory=dict)  # street -> suburbs
    street_suffixes: Dict[str, str] = field(default_factory=dict)  # "RD" -> "ROAD"
    suburb_names: Dict[str, str] = field(default_factory=dict)
    hundred_names: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (
            self.street_names
            or self.street_suffixes
            or self.suburb_names
            or self.hundred_names
        )


def _read_lines(path: Path) -> List[str]:
    if not path.is_file():
        logger.warning("Reference table not found: %s", path)
        return []
    text = path.read_text(encoding="utf-8").replace("\r", "").strip()
    return [ln for ln in text.split("\n") if ln.strip()]


def _pair(line: str) -> Optional[tuple[str, str]]:
    tokens = line.upper().split(",")
    if len(tokens) < 2:
        return None
    return tokens[0].strip(), tokens[1].strip()


def load_reference_tables(data_dir: Path) -> ReferenceTables:
    tables = ReferenceTables()

    for line in _read_lines(data_dir / STREET_NAMES_FILE):
        pair = _pair(line)
        if pair is None:
            continue
        street, suburb = pair
        # several suburbs may share a street name
        tables.street_names.setdefault(street, []).append(suburb)

    for line in _read_lines(data_dir / STREET_SUFFIXES_FILE):
        pair = _pair(line)
        if pair is not None:
            tables.street_suffixes[pair[0]] = pair[1]

    for line in _read_lines(data_dir / SUBURB_NAMES_FILE):
        pair = _pair(line)
        if pair is not None:
            tables.suburb_names[pair[0]] = pair[1]

    tables.hundred_names = [ln.strip().upper() for ln in _read_lines(data_dir / HUNDRED_NAMES_FILE)]
    return tables
