from .inventory_service import InventoryService
from .sales_service import SalesService
from .reporting_service import ReportingService
from .excel_service import ExcelService
from .sheets_sync_service import SheetsSyncService

__all__ = [
    "InventoryService",
    "SalesService",
    "ReportingService",
    "ExcelService",
    "SheetsSyncService",
]
