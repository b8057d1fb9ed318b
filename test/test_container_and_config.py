import json
import logging
from pathlib import Path

from bsm.application.container import build_container
from bsm.config import get_app_paths, get_settings
from bsm.logging_config import JsonFormatter


def test_container_loads_existing_snapshot(tmp_path: Path):
    db = tmp_path / "books.db"
    first = build_container(db)
    book = first.inventory.add_book("Dune", 3, 2.0)
    first.sales.create_sale("Ali", book.id, 1, 4.0)

    second = build_container(db)

    assert second.store is not first.store
    assert second.store.get_books() == first.store.get_books()
    assert len(second.sales.list_pending()) == 1
    assert second.reporting.generate_report().total_books_sold == 1


def test_containers_are_isolated(tmp_path: Path):
    a = build_container(tmp_path / "a.db")
    b = build_container(tmp_path / "b.db")
    a.inventory.add_book("Dune", 3, 2.0)
    assert b.inventory.list_books() == []


def test_app_paths_honour_home_override(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("BSM_HOME", str(tmp_path / "home"))
    paths = get_app_paths()

    assert paths.base_dir == tmp_path / "home"
    assert paths.db_path.name == "books.db"
    assert paths.logs_dir.is_dir()


def test_settings_read_webhook_from_env(monkeypatch):
    monkeypatch.delenv("BSM_SHEETS_WEBHOOK_URL", raising=False)
    assert get_settings().sheets_webhook_url is None

    monkeypatch.setenv("BSM_SHEETS_WEBHOOK_URL", " https://sheets.example/hook ")
    settings = get_settings()
    assert settings.sheets_webhook_url == "https://sheets.example/hook"
    assert settings.storage_key == "bookSalesData"


def test_json_formatter_emits_one_object_per_record():
    record = logging.LogRecord("bsm.sales", logging.INFO, __file__, 1, "sale_added sale_id=%s", ("s1",), None)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["logger"] == "bsm.sales"
    assert payload["message"] == "sale_added sale_id=s1"
    assert payload["level"] == "INFO"
