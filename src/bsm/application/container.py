from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from bsm.application.data_store import STORAGE_KEY, DataStore
from bsm.repositories.sqlite_repo import SqliteBlobStore
from bsm.services.excel_service import ExcelService
from bsm.services.inventory_service import InventoryService
from bsm.services.reporting_service import ReportingService
from bsm.services.sales_service import SalesService
from bsm.services.sheets_sync_service import SheetsSyncService


@dataclass(frozen=True)
class AppContainer:
    storage: SqliteBlobStore
    sync: SheetsSyncService
    store: DataStore
    inventory: InventoryService
    sales: SalesService
    reporting: ReportingService
    excel: ExcelService


def build_container(
    db_path: Path | str,
    sheets_webhook_url: Optional[str] = None,
    storage_key: str = STORAGE_KEY,
) -> AppContainer:
    storage = SqliteBlobStore(db_path)
    storage.init_db()

    sync = SheetsSyncService(sheets_webhook_url)
    store = DataStore(storage, sync, key=storage_key)
    store.load()

    return AppContainer(
        storage=storage,
        sync=sync,
        store=store,
        inventory=InventoryService(store),
        sales=SalesService(store),
        reporting=ReportingService(store),
        excel=ExcelService(store),
    )
