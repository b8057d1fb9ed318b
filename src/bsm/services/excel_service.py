from __future__ import annotations

import logging
import math
from dataclasses import replace

from openpyxl import load_workbook

from bsm.domain.errors import PersistenceError, ValidationError
from bsm.domain.models import Book

log = logging.getLogger(__name__)


class ExcelService:
    def __init__(self, store):
        self.store = store

    def import_books_excel(self, path: str) -> tuple[int, int]:
        """
        Excel represents RESTOCK (delta to add), not absolute stock.
        Headers:
          name | price_per_unit | quantity
        """
        wb = load_workbook(path)
        ws = wb.active

        headers = {}
        for col in range(1, ws.max_column + 1):
            v = ws.cell(row=1, column=col).value
            if isinstance(v, str):
                headers[v.strip().lower()] = col

        required = ["name", "price_per_unit", "quantity"]
        for r in required:
            if r not in headers:
                raise ValidationError(f"Missing column header: {r}")

        ok = 0
        skipped = 0

        for row in range(2, ws.max_row + 1):
            try:
                name = ws.cell(row=row, column=headers["name"]).value
                price = ws.cell(row=row, column=headers["price_per_unit"]).value
                qty = ws.cell(row=row, column=headers["quantity"]).value

                if not name or price is None or qty is None:
                    skipped += 1
                    continue

                name = str(name).strip()
                price = float(price)
                qty = int(float(qty))
                if not name or qty < 0 or not (price > 0 and math.isfinite(price)):
                    skipped += 1
                    continue

                existing = next((b for b in self.store.get_books() if b.name == name), None)
                if not existing and qty == 0:
                    # nothing to restock and no book to reprice
                    skipped += 1
                    continue
                if existing:
                    new_qty = int(existing.quantity) + qty
                    book = replace(existing, quantity=new_qty, price_per_unit=price, total_cost=new_qty * price)
                else:
                    book = Book.create(name, qty, price)

                if not self.store.upsert_book_by_name(book):
                    raise PersistenceError(f"Failed to save {name}")
                ok += 1
            except (ValueError, TypeError, OverflowError, PersistenceError) as e:
                log.warning("Excel import skipped row %s: %s", row, e)
                skipped += 1

        return ok, skipped
