from .models import Book, Sale, Report, new_id
from .errors import ValidationError, NotFoundError, InsufficientStockError, PersistenceError
from .reports import build_report

__all__ = [
    "Book",
    "Sale",
    "Report",
    "new_id",
    "build_report",
    "ValidationError",
    "NotFoundError",
    "InsufficientStockError",
    "PersistenceError",
]
