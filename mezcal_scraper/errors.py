from __future__ import annotations

from typing import Dict


class ScraperError(Exception):
    """Base class for errors raised by the retailer adapters and the aggregator."""


class SectionNotFoundError(ScraperError):
    """The static page was fetched but the expected section or table is missing."""


class SourceError(ScraperError):
    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source


class AggregationError(ScraperError):
    def __init__(self, failures: Dict[str, BaseException]):
        names = ", ".join(failures)
        details = "; ".join(str(exc) for exc in failures.values())
        super().__init__(f"failed to collect inventory from {names}: {details}")
        self.failures = failures
