import sqlite3

from kiapps.db import init_db, insert_row, list_records
from kiapps.extract.schema import ApplicationRecord


def _record(number="10/2019/1", address="1 Smith Rd, KINGSCOTE", received="2019-03-05"):
    return ApplicationRecord(
        application_number=number,
        address=address,
        description="Verandah",
        information_url="https://x/r.pdf",
        scrape_date="2019-03-10",
        received_date=received,
    )


def _con():
    con = sqlite3.connect(":memory:")
    con.row_factory = sqlite3.Row
    init_db(con)
    return con


def test_insert_is_idempotent_and_never_overwrites():
    con = _con()
    assert insert_row(con, _record()) is True
    assert insert_row(con, _record(address="2 Other St")) is False

    rows = list_records(con)
    assert len(rows) == 1
    assert rows[0]["council_reference"] == "10/2019/1"
    assert rows[0]["address"] == "1 Smith Rd, KINGSCOTE"
    assert rows[0]["comment_url"].startswith("mailto:")
    assert rows[0]["legal_description"] == ""


def test_init_db_twice_is_harmless():
    con = _con()
    init_db(con)
    insert_row(con, _record("1/2019"))
    insert_row(con, _record("2/2019", received=""))
    assert {r["council_reference"] for r in list_records(con)} == {"1/2019", "2/2019"}
