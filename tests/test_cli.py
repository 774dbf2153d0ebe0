import json

from mezcal_scraper import cli
from mezcal_scraper.config import GRID_SOURCE_NAME, TABLE_SOURCE_NAME
from mezcal_scraper.types import StructuredRecord


def _fake_sources(**kwargs):
    def table():
        return [
            StructuredRecord(
                brand="Mezcal Vago",
                maguey="Espadin",
                description="Mezcal Vago Espadin",
                size="750ml",
                price="$50.00",
                source=TABLE_SOURCE_NAME,
                alcohol="40%",
            )
        ]

    def grid():
        raise RuntimeError("browser crashed")

    return {TABLE_SOURCE_NAME: table, GRID_SOURCE_NAME: grid}


def test_main_writes_json_for_selected_source(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "default_sources", _fake_sources)
    out = tmp_path / "inventory.json"

    code = cli.main(["-o", str(out), "--source", "table"])

    assert code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert [item["brand"] for item in data] == ["Mezcal Vago"]
    assert data[0]["price"] == "$50.00"
    assert data[0]["priceValue"] == 50.0


def test_main_reports_failed_source(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(cli, "default_sources", _fake_sources)
    out = tmp_path / "inventory.json"

    code = cli.main(["-o", str(out), "--lang", "es"])

    assert code == 1
    assert not out.exists()
    assert "Error de inventario" in capsys.readouterr().err


def test_main_partial_keeps_working_source(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "default_sources", _fake_sources)
    out = tmp_path / "inventory.json"

    code = cli.main(["-o", str(out), "--partial"])

    assert code == 0
    assert len(json.loads(out.read_text(encoding="utf-8"))) == 1


def test_main_passes_scroll_settings(tmp_path, monkeypatch):
    seen = {}

    def capture(**kwargs):
        seen.update(kwargs)
        return _fake_sources()

    monkeypatch.setattr(cli, "default_sources", capture)

    cli.main(["-o", str(tmp_path / "x.json"), "--source", "table", "--max-scrolls", "7", "--no-growth", "2", "--headful"])

    assert seen["settings"].max_iterations == 7
    assert seen["settings"].no_growth_limit == 2
    assert seen["headless"] is False


def test_main_passes_browser_timings(tmp_path, monkeypatch):
    seen = {}

    def capture(**kwargs):
        seen.update(kwargs)
        return _fake_sources()

    monkeypatch.setattr(cli, "default_sources", capture)

    cli.main(["-o", str(tmp_path / "x.json"), "--source", "table", "--initial-wait", "500", "--nav-timeout", "90000"])

    assert seen["settings"].initial_wait_ms == 500
    assert seen["settings"].navigation_timeout_ms == 90000
