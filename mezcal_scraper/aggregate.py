from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from functools import partial as bind
from itertools import chain
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from .config import GRID_SOURCE_NAME, TABLE_SOURCE_NAME, ScrollSettings
from .errors import AggregationError
from .fetch import create_session
from .grid_source import scrape_grid_source
from .table_source import scrape_table_source
from .types import StructuredRecord


logger = logging.getLogger(__name__)

SourceFn = Callable[[], List[StructuredRecord]]


def merge_records(*batches: Iterable[StructuredRecord]) -> List[StructuredRecord]:
    """Concatenate batches in the given order, then sort by price (stable)."""
    return sorted(chain.from_iterable(batches), key=lambda r: r.price_value)


def collect_inventory(
    sources: Mapping[str, SourceFn],
    partial: bool = False,
    max_workers: Optional[int] = None,
) -> List[StructuredRecord]:
    """
    Run every source concurrently and merge their records.

    Results are merged in the mapping's order, not completion order. When a
    source fails the whole collection fails with AggregationError as soon as
    the failure is seen, without waiting for the other sources; with
    partial=True every source is awaited and the surviving ones are returned.
    """
    if not sources:
        return []

    results: Dict[str, List[StructuredRecord]] = {}
    failures: Dict[str, BaseException] = {}
    pool = ThreadPoolExecutor(max_workers=max_workers or len(sources))
    futures = {pool.submit(fn): name for name, fn in sources.items()}
    try:
        for future in as_completed(futures):
            name = futures[future]
            try:
                results[name] = future.result()
            except Exception as exc:
                logger.error("Source %s failed: %s", name, exc)
                failures[name] = exc
                if not partial:
                    break
    finally:
        # Running sources can't be interrupted; on a fatal failure they are left to finish unobserved
        pool.shutdown(wait=not (failures and not partial), cancel_futures=True)

    if failures and not partial:
        raise AggregationError(failures)
    if failures:
        logger.warning(
            "Returning partial inventory without: %s", ", ".join(failures)
        )

    return merge_records(*(results[name] for name in sources if name in results))


def default_sources(
    settings: ScrollSettings = ScrollSettings(),
    headless: bool = True,
    user_agent: Optional[str] = None,
    retries: int = 3,
    dump_dir: Optional[str] = None,
) -> Dict[str, SourceFn]:
    return {
        TABLE_SOURCE_NAME: bind(
            scrape_table_source,
            session=create_session(user_agent=user_agent, total_retries=retries),
        ),
        GRID_SOURCE_NAME: bind(
            scrape_grid_source,
            settings=settings,
            headless=headless,
            user_agent=user_agent,
            dump_dir=dump_dir,
        ),
    }
