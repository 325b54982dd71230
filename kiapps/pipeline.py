from __future__ import annotations

import logging
import random
import sqlite3
from dataclasses import dataclass
from typing import List, Optional

import requests
from rich import print
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TextColumn,
    TimeElapsedColumn,
)

from kiapps.config import Settings
from kiapps.db import init_db, insert_row
from kiapps.fetch.http_client import HttpClient
from kiapps.fetch.index_page import find_pdf_urls, select_pdf_urls
from kiapps.ingest.page_loop import parse_pdf
from kiapps.reference import ReferenceTables, load_reference_tables

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    documents: int = 0
    failed_documents: int = 0
    parsed: int = 0
    inserted: int = 0
    skipped: int = 0


def client_from_settings(cfg: Settings) -> HttpClient:
    return HttpClient(
        proxy=cfg.proxy,
        timeout_s=cfg.request_timeout_s,
        max_retries=cfg.max_retries,
        pace_min_s=cfg.pace_min_s,
        pace_jitter_s=cfg.pace_jitter_s,
    )


def run(
    cfg: Settings,
    client: HttpClient,
    con: sqlite3.Connection,
    *,
    reference_tables: Optional[ReferenceTables] = None,
    rng: Optional[random.Random] = None,
    show_progress: bool = True,
) -> RunSummary:
    """Discover the registers on the index page, parse a selection and store them."""
    init_db(con)
    if reference_tables is None:
        reference_tables = load_reference_tables(cfg.data_dir)

    # the council site has served an incomplete certificate chain in the past
    html = client.get_text(cfg.index_url, verify=False)
    pdf_urls = find_pdf_urls(html, cfg.index_url)
    summary = RunSummary()
    if not pdf_urls:
        print("[yellow]skip[/yellow] no PDF files were found on the pages examined")
        return summary

    selected: List[str] = select_pdf_urls(pdf_urls, cfg.documents_per_run, rng)
    print(f"Found {len(pdf_urls)} PDF file(s).  Selected {len(selected)} to parse.")

    def process(url: str) -> None:
        logger.info("Parsing document: %s", url)
        try:
            data = client.get_bytes(url)
        except requests.RequestException as e:
            summary.failed_documents += 1
            print(f"[red]✗[/red] {url}: {e}")
            return

        try:
            records = parse_pdf(
                data,
                url,
                reference_tables=reference_tables,
                max_pages=cfg.max_pages,
                gc_hint=cfg.gc_hint,
            )
        except Exception as e:
            logger.exception("Failed to parse %s", url)
            summary.failed_documents += 1
            print(f"[red]✗[/red] {url}: {e}")
            return
        finally:
            del data
        summary.documents += 1
        summary.parsed += len(records)
        print(f"[green]✓[/green] parsed {len(records)} application(s) from {url}")

        for record in records:
            if insert_row(con, record):
                summary.inserted += 1
            else:
                summary.skipped += 1

    if show_progress:
        with Progress(
            TextColumn("[bold]Scrape[/bold]"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            transient=False,
        ) as progress:
            task = progress.add_task("docs", total=len(selected))
            for url in selected:
                process(url)
                progress.update(task, advance=1)
    else:
        for url in selected:
            process(url)

    return summary
