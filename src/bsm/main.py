from __future__ import annotations

import logging

from bsm.application.container import build_container
from bsm.config import get_app_paths, get_settings
from bsm.logging_config import setup_logging
from bsm.ui.app import App


def main() -> None:
    paths = get_app_paths()
    settings = get_settings()
    setup_logging(paths.logs_dir, level=logging.INFO)

    container = build_container(
        paths.db_path,
        sheets_webhook_url=settings.sheets_webhook_url,
        storage_key=settings.storage_key,
    )

    app = App(
        store=container.store,
        inventory_service=container.inventory,
        sales_service=container.sales,
        reporting_service=container.reporting,
        excel_service=container.excel,
        db_path=str(paths.db_path),
        logs_dir=str(paths.logs_dir),
    )
    app.mainloop()


if __name__ == "__main__":
    main()
