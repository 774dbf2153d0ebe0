import pytest
import requests
from bs4 import BeautifulSoup

from mezcal_scraper.errors import SectionNotFoundError, SourceError
from mezcal_scraper.table_source import (
    find_section_table,
    parse_table_page,
    scrape_table_source,
)


SPIRITS_HTML = """
<html>
  <body>
    <h2>Mezcal Cocktails</h2>
    <table><tr><td>Bottle</td><td>750ml</td><td>40%</td><td>Wrong Table Mezcal Espadin</td><td>$1.00</td></tr></table>
    <h1>Mezcal</h1>
    <table>
      <tr><td>Pack</td><td>Size</td><td>ABV</td><td>Description</td><td>Price</td></tr>
      <tr>
        <td>Bottle</td>
        <td>750ml</td>
        <td>40%</td>
        <td>Mezcal   Vago
            Espadin</td>
        <td>$50.00</td>
      </tr>
      <tr><td>Bottle</td><td>1 L</td><td>48%</td><td>Rey Campero Mezcal Tobala Tepeztate</td><td>$89.99</td></tr>
      <tr><td>Bottle</td><td>750</td><td>40%</td><td>Siembra Valles Blanco Tequila</td><td>$45.00</td></tr>
      <tr><td>Bottle</td><td>750ml</td><td>40%</td><td></td><td>$10.00</td></tr>
      <tr><td colspan="3">Notes</td></tr>
    </table>
  </body>
</html>
"""


class FakeResponse:
    def __init__(self, text, url, status_code=200):
        self.text = text
        self.url = url
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requested = []

    def get(self, url, timeout=None, allow_redirects=True):
        self.requested.append(url)
        if self.error:
            raise self.error
        return self.response


def test_parse_table_page_reads_product_rows():
    listings = parse_table_page(SPIRITS_HTML)

    assert [l.title for l in listings] == [
        "Mezcal Vago Espadin",
        "Rey Campero Mezcal Tobala Tepeztate",
        "Siembra Valles Blanco Tequila",
    ]
    first = listings[0]
    assert first.pack == "Bottle"
    assert first.size == "750ml"
    assert first.alcohol == "40%"
    assert first.price == "$50.00"


def test_find_section_table_follows_nested_header():
    soup = BeautifulSoup(
        "<div><h3>MEZCAL</h3></div><p>intro</p><table><tr><td>x</td></tr></table>", "lxml"
    )
    table = find_section_table(soup)
    assert table.name == "table"


def test_find_section_table_uses_named_anchor():
    soup = BeautifulSoup(
        '<a name="Mezcal"></a><table><tr><td>x</td></tr></table>', "lxml"
    )
    assert find_section_table(soup).name == "table"


def test_find_section_table_without_header():
    soup = BeautifulSoup("<h1>Tequila</h1><table></table>", "lxml")
    with pytest.raises(SectionNotFoundError, match="Could not find the Mezcal section header"):
        find_section_table(soup)


def test_find_section_table_without_table():
    soup = BeautifulSoup("<h1>Mezcal</h1><p>Coming soon</p>", "lxml")
    with pytest.raises(SectionNotFoundError, match="no table followed"):
        find_section_table(soup)


def test_scrape_table_source_builds_mezcal_records():
    session = FakeSession(FakeResponse(SPIRITS_HTML, "https://shop.example/spirits.html"))

    records = scrape_table_source(url="https://shop.example/spirits.html", session=session)

    assert session.requested == ["https://shop.example/spirits.html"]
    assert len(records) == 2

    vago, campero = records
    assert vago.brand == "Mezcal Vago"
    assert vago.maguey == "Espadin"
    assert vago.size == "750ml"
    assert vago.alcohol == "40%"
    assert vago.pack == "Bottle"
    assert vago.price == "$50.00"
    assert vago.source == "Austin Wine Merchant"
    assert vago.description == "Mezcal Vago Espadin"

    assert campero.brand == "Rey Campero"
    assert campero.maguey == "Tobala, Tepeztate"
    assert campero.size == "1000ml"


def test_scrape_table_source_wraps_transport_errors():
    session = FakeSession(error=requests.ConnectionError("connection refused"))
    with pytest.raises(SourceError, match="Austin Wine Merchant"):
        scrape_table_source(url="https://shop.example/spirits.html", session=session)


def test_scrape_table_source_http_error():
    session = FakeSession(FakeResponse("", "https://shop.example/spirits.html", status_code=503))
    with pytest.raises(SourceError):
        scrape_table_source(url="https://shop.example/spirits.html", session=session)


def test_scrape_table_source_missing_section():
    session = FakeSession(FakeResponse("<h1>Wine</h1>", "https://shop.example/spirits.html"))
    with pytest.raises(SectionNotFoundError):
        scrape_table_source(url="https://shop.example/spirits.html", session=session)
