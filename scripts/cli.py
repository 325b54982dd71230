from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import typer
from rich import print
from rich.logging import RichHandler

# If not installed in editable mode, add repo root to PYTHONPATH
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from kiapps.config import get_settings
from kiapps.db import connect, init_db, list_records
from kiapps.ingest.page_loop import parse_pdf
from kiapps.pipeline import client_from_settings, run
from kiapps.reference import load_reference_tables

app = typer.Typer(
    add_completion=False,
    help="Kangaroo Island Council development applications scraper",
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log page detail"),
):
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


@app.command()
def scrape(
    db: Path = typer.Option(None, "--db", help="SQLite file; defaults to <output_dir>/data.sqlite"),
    documents: int = typer.Option(None, help="Number of registers to parse this run"),
):
    """
    Fetch the index page, parse the most recent register plus a random older one,
    and insert new applications into the database.
    """
    cfg = get_settings()
    if documents is not None:
        cfg.documents_per_run = documents

    con = connect(db)
    try:
        summary = run(cfg, client_from_settings(cfg), con)
    finally:
        con.close()

    print(
        f"[green]✓[/green] {summary.documents} document(s), {summary.parsed} parsed, "
        f"{summary.inserted} inserted, {summary.skipped} skipped"
    )
    if summary.failed_documents:
        typer.secho(f"{summary.failed_documents} document(s) could not be fetched", fg="yellow")


@app.command()
def parse(
    pdf: Path = typer.Argument(..., help="Local PDF register"),
    out: Path = typer.Option(None, help="Write records as JSONL instead of printing"),
    url: str = typer.Option("", help="Information URL stored with each record"),
):
    """Parse a local PDF without touching the database."""
    if not pdf.is_file():
        typer.secho(f"No such file: {pdf}", fg="red")
        raise typer.Exit(1)

    cfg = get_settings()
    records = parse_pdf(
        pdf.read_bytes(),
        url or pdf.resolve().as_uri(),
        reference_tables=load_reference_tables(cfg.data_dir),
        max_pages=cfg.max_pages,
        gc_hint=cfg.gc_hint,
    )

    if out is None:
        for r in records:
            print(r.model_dump())
    else:
        out.parent.mkdir(parents=True, exist_ok=True)
        with out.open("w", encoding="utf-8") as f:
            for r in records:
                f.write(json.dumps(r.model_dump(), ensure_ascii=False) + "\n")
        print(f"[green]✓[/green] wrote {len(records)} record(s) to {out}")


@app.command("list")
def list_cmd(
    db: Path = typer.Option(None, "--db", help="SQLite file; defaults to <output_dir>/data.sqlite"),
):
    """Show the applications stored in the database."""
    con = connect(db)
    try:
        init_db(con)
        rows = list_records(con)
    finally:
        con.close()
    if not rows:
        typer.secho("No applications stored yet", fg="yellow")
        raise typer.Exit(1)
    for row in rows:
        print(
            f"{row['council_reference']}  {row['date_received'] or '-':10}  {row['address']}"
        )


if __name__ == "__main__":
    app()
