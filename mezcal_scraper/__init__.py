"""
Mezcal inventory scraper package.

Exports:
- StructuredRecord: one mezcal listing after extraction
- collect_inventory: run retailer sources concurrently and merge by price
- is_relevant, extract_brand, split_description, normalize_size: extraction rules
"""

from .types import RawListing, StructuredRecord
from .extract import extract_brand, is_relevant, normalize_size, split_description
from .aggregate import collect_inventory, merge_records

__all__ = [
    "RawListing",
    "StructuredRecord",
    "collect_inventory",
    "extract_brand",
    "is_relevant",
    "merge_records",
    "normalize_size",
    "split_description",
]
