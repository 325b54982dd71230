from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional

from kiapps.config import get_settings
from kiapps.extract.schema import ApplicationRecord

logger = logging.getLogger(__name__)

# ---------- connection / schema ----------


def db_path_default() -> Path:
    return get_settings().db_file


def connect(db_path: Optional[Path] = None) -> sqlite3.Connection:
    db = db_path or db_path_default()
    db.parent.mkdir(parents=True, exist_ok=True)
    con = sqlite3.connect(str(db))
    con.row_factory = sqlite3.Row
    return con


def init_db(con: sqlite3.Connection) -> None:
    # one row per development application, keyed by the council reference
    con.execute("""
    CREATE TABLE IF NOT EXISTS data (
      council_reference  TEXT PRIMARY KEY,
      address            TEXT,
      description        TEXT,
      info_url           TEXT,
      comment_url        TEXT,
      date_scraped       TEXT,
      date_received      TEXT,
      legal_description  TEXT
    );
    """)
    con.commit()


# ---------- writes ----------


def _describe(record: ApplicationRecord) -> str:
    return (
        f'application "{record.application_number}" with address "{record.address}", '
        f'description "{record.description}", legal description "{record.legal_description}" '
        f'and received date "{record.received_date}"'
    )


def insert_row(con: sqlite3.Connection, record: ApplicationRecord) -> bool:
    """
    Insert the record unless its council reference is already stored.
    Returns True when a row was inserted, False when it was skipped.
    """
    cur = con.execute(
        """
        INSERT OR IGNORE INTO data
          (council_reference, address, description, info_url, comment_url, date_scraped, date_received, legal_description)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?);
        """,
        (
            record.application_number,
            record.address,
            record.description,
            record.information_url,
            record.comment_url,
            record.scrape_date,
            record.received_date,
            record.legal_description,
        ),
    )
    con.commit()
    if cur.rowcount > 0:
        logger.info("    Inserted: %s into the database.", _describe(record))
        return True
    logger.info(
        "    Skipped: %s because it was already present in the database.",
        _describe(record),
    )
    return False


# ---------- queries ----------


def list_records(con: sqlite3.Connection) -> List[Dict[str, Any]]:
    rows = con.execute(
        "SELECT * FROM data ORDER BY date_received DESC, council_reference"
    ).fetchall()
    return [dict(r) for r in rows]
