from __future__ import annotations

import logging
from typing import List, Optional

import requests
from bs4 import BeautifulSoup
from bs4.element import Tag

from .config import TABLE_SECTION, TABLE_SOURCE_NAME, TABLE_SOURCE_URL
from .errors import SectionNotFoundError, SourceError
from .fetch import create_session, fetch_html
from .pipeline import extract_records, record_from_table_row
from .types import RawListing, StructuredRecord


logger = logging.getLogger(__name__)

HEADER_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


def _text(el) -> str:
    return " ".join(el.get_text().split()) if el else ""


def _find_section_header(soup: BeautifulSoup, section: str) -> Optional[Tag]:
    wanted = {section, section.upper()}
    for header in soup.find_all(HEADER_TAGS):
        if header.get_text().strip() in wanted:
            return header
    # Some pages mark the section with a named anchor instead of a heading
    return soup.find("a", attrs={"name": section})


def find_section_table(soup: BeautifulSoup, section: str = TABLE_SECTION) -> Tag:
    header = _find_section_header(soup, section)
    if header is None:
        raise SectionNotFoundError(f"Could not find the {section} section header.")

    table = header.find_next_sibling("table")
    if table is None:
        # Header nested in a wrapper: take the first table after it in document order
        table = header.find_next("table")
    if table is None:
        raise SectionNotFoundError(f"Found {section} header, but no table followed.")
    return table


def parse_table_rows(table: Tag) -> List[RawListing]:
    """
    Product rows have the columns: pack, size, alcohol, description, price.
    Header rows (first cell "Pack") and rows without a description are skipped.
    """
    listings: List[RawListing] = []
    for row in table.find_all("tr"):
        cells = [_text(td) for td in row.find_all("td")]
        if len(cells) < 4 or cells[0].lower() == "pack" or not cells[3]:
            continue
        listings.append(
            RawListing(
                title=cells[3],
                price=cells[4] if len(cells) > 4 else "",
                pack=cells[0] or None,
                size=cells[1],
                alcohol=cells[2],
            )
        )
    return listings


def parse_table_page(html: str, section: str = TABLE_SECTION) -> List[RawListing]:
    soup = BeautifulSoup(html, "lxml")
    table = find_section_table(soup, section)
    return parse_table_rows(table)


def scrape_table_source(
    url: str = TABLE_SOURCE_URL,
    session: Optional[requests.Session] = None,
    source: str = TABLE_SOURCE_NAME,
) -> List[StructuredRecord]:
    """Fetch the spirits page and return its mezcal section as structured records.

    Transport failures are raised as SourceError; a page without the mezcal
    table raises SectionNotFoundError.
    """
    sess = session or create_session()
    try:
        html = fetch_html(url, session=sess)
    except requests.RequestException as exc:
        raise SourceError(source, f"failed to fetch {url}: {exc}") from exc

    listings = parse_table_page(html)
    logger.info("%s: %d rows in the %s table", source, len(listings), TABLE_SECTION)
    return extract_records(listings, record_from_table_row, source)
