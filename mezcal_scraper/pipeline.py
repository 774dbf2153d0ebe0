"""
Turns raw retailer listings into structured mezcal records.

Each source has its own record builder because the inputs differ:
the grid only offers a free-text title, the table offers a
"Brand Mezcal Varietal" description plus separate size/ABV/pack cells.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List

from .extract import (
    extract_brand,
    extract_maguey_from_title,
    extract_size,
    is_relevant,
    normalize_size,
    split_description,
)
from .types import RawListing, StructuredRecord


logger = logging.getLogger(__name__)

RecordBuilder = Callable[[RawListing, str], StructuredRecord]


def record_from_title(listing: RawListing, source: str) -> StructuredRecord:
    return StructuredRecord(
        brand=extract_brand(listing.title),
        maguey=extract_maguey_from_title(listing.title),
        description=listing.title,
        size=extract_size(listing.title),
        price=listing.price,
        source=source,
        alcohol="",
        pack=listing.pack or "Bottle",
        link=listing.link or "",
        image=listing.image or "",
    )


def record_from_table_row(listing: RawListing, source: str) -> StructuredRecord:
    brand, maguey = split_description(listing.title)
    return StructuredRecord(
        brand=brand or extract_brand(listing.title),
        maguey=maguey,
        description=listing.title,
        size=normalize_size(listing.size),
        price=listing.price,
        source=source,
        alcohol=listing.alcohol or "",
        pack=listing.pack or "Bottle",
        link=listing.link or "",
        image=listing.image or "",
    )


def extract_records(
    listings: Iterable[RawListing],
    build: RecordBuilder,
    source: str,
) -> List[StructuredRecord]:
    records: List[StructuredRecord] = []
    skipped = 0
    for listing in listings:
        if not is_relevant(listing.title):
            skipped += 1
            logger.debug("%s: skipping non-mezcal listing %r", source, listing.title)
            continue
        records.append(build(listing, source))
    logger.info("%s: %d mezcal records, %d other listings skipped", source, len(records), skipped)
    return records
