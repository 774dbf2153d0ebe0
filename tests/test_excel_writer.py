from openpyxl import Workbook, load_workbook

from mezcal_scraper.excel_writer import DEFAULT_HEADERS, write_records_to_excel
from mezcal_scraper.types import StructuredRecord


RECORDS = [
    StructuredRecord(
        brand="Del Maguey",
        maguey="Del Maguey Vida",
        description="Del Maguey Vida",
        size="750ml",
        price="$40.00",
        source="AB Liquor",
        link="https://abliquor2.com/item-1",
    ),
    StructuredRecord(
        brand="Rey Campero",
        maguey="Tobala, Tepeztate",
        description="Rey Campero Mezcal Tobala Tepeztate",
        size="1000ml",
        price="$89.99",
        source="Austin Wine Merchant",
        alcohol="48%",
    ),
]


def test_write_records_to_new_workbook(tmp_path):
    out = tmp_path / "inventory.xlsx"

    write_records_to_excel(RECORDS, out_path=str(out))

    ws = load_workbook(out).active
    rows = list(ws.iter_rows(values_only=True))
    assert list(rows[0]) == DEFAULT_HEADERS
    assert rows[1][:3] == ("Del Maguey", "Del Maguey Vida", "750ml")
    assert rows[1][5] == "$40.00"
    assert rows[2][1] == "Tobala, Tepeztate"
    assert rows[2][3] == "48%"
    assert len(rows) == 3


def test_write_records_appends_to_template(tmp_path):
    template = tmp_path / "template.xlsx"
    wb = Workbook()
    wb.active.append(["Marca", "Maguey"])
    wb.save(template)
    out = tmp_path / "inventory.xlsx"

    write_records_to_excel(RECORDS[:1], out_path=str(out), template_path=str(template))

    rows = list(load_workbook(out).active.iter_rows(values_only=True))
    assert rows[0][:2] == ("Marca", "Maguey")
    assert rows[1][0] == "Del Maguey"
    assert list(load_workbook(template).active.iter_rows(values_only=True)) == [("Marca", "Maguey")]
