from __future__ import annotations

import os
from typing import Iterable, Optional

from openpyxl import Workbook, load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from .types import StructuredRecord


DEFAULT_HEADERS = [
    "Brand",
    "Maguey",
    "Size",
    "ABV",
    "Pack",
    "Price",
    "Source",
    "Description",
    "Link",
]


def _record_row(record: StructuredRecord) -> list:
    return [
        record.brand,
        record.maguey,
        record.size,
        record.alcohol,
        record.pack,
        record.price,
        record.source,
        record.description,
        record.link,
    ]


def _open_sheet(template_path: Optional[str]) -> tuple[Workbook, Worksheet]:
    if template_path and os.path.exists(template_path):
        wb = load_workbook(template_path)
        return wb, wb.active
    wb = Workbook()
    ws = wb.active
    ws.title = "Mezcal"
    return wb, ws


def write_records_to_excel(
    records: Iterable[StructuredRecord],
    out_path: str,
    template_path: Optional[str] = None,
    headers: Optional[list[str]] = None,
) -> None:
    headers = headers or DEFAULT_HEADERS
    wb, ws = _open_sheet(template_path)

    # Fresh sheet: write the header row first
    if ws.max_row == 1 and ws.max_column == 1 and ws.cell(row=1, column=1).value is None:
        for col_idx, title in enumerate(headers, start=1):
            ws.cell(row=1, column=col_idx).value = title

    start_row = ws.max_row + 1
    for row_idx, record in enumerate(records, start=start_row):
        for col_idx, value in enumerate(_record_row(record), start=1):
            ws.cell(row=row_idx, column=col_idx).value = value

    # The template, if any, is left untouched
    wb.save(out_path)
