from __future__ import annotations

import logging
from dataclasses import replace

from bsm.domain.errors import (
    InsufficientStockError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from bsm.domain.models import Sale
from bsm.services.validation import parse_float, parse_int, require_positive, require_text

log = logging.getLogger("bsm.sales")


class SalesService:
    def __init__(self, store):
        self.store = store

    def list_sales(self) -> list[Sale]:
        return self.store.get_sales()

    def list_pending(self) -> list[Sale]:
        return self.store.get_pending_sales()

    def list_completed(self) -> list[Sale]:
        return self.store.get_completed_sales()

    def get_sale(self, sale_id: str) -> Sale:
        s = self.store.find_sale(sale_id)
        if not s:
            raise NotFoundError("Sale not found.")
        return s

    def check_stock_availability(self, sale: Sale) -> bool:
        # live stock, not what was on hand when the sale was recorded
        book = self.store.find_book(sale.book_id)
        if not book:
            return False
        return book.quantity >= sale.quantity

    @staticmethod
    def preview_totals(quantity, wholesale_price, selling_price) -> tuple[float, float, float]:
        """
        (total_cost, total_revenue, profit) for the values currently typed in the form.
        """
        qty = parse_float(quantity)
        total_cost = qty * parse_float(wholesale_price)
        total_revenue = qty * parse_float(selling_price)
        return total_cost, total_revenue, total_revenue - total_cost

    def _validated(self, customer_name, quantity, selling_price) -> tuple[str, int, float]:
        customer = require_text(customer_name, "Customer name")
        qty = parse_int(quantity)
        price = parse_float(selling_price)
        require_positive(qty, "Quantity")
        require_positive(price, "Selling price")
        return customer, qty, price

    def create_sale(self, customer_name, book_id: str, quantity, selling_price) -> Sale:
        customer, qty, price = self._validated(customer_name, quantity, selling_price)
        book = self.store.find_book(book_id)
        if not book:
            raise NotFoundError("Book not found.")
        if qty > book.quantity:
            raise InsufficientStockError(f"Not enough stock for {book.name}. Available: {book.quantity}")

        sale = Sale.create(book, customer, qty, price)
        if not self.store.add_sale(sale):
            raise PersistenceError("Failed to save sale.")
        return sale

    def edit_sale(self, sale_id: str, customer_name, quantity, selling_price) -> Sale:
        sale = self.get_sale(sale_id)
        if sale.completed:
            raise ValidationError("Only pending sales can be edited.")
        customer, qty, price = self._validated(customer_name, quantity, selling_price)

        updated = replace(
            sale,
            customer_name=customer,
            quantity=qty,
            selling_price=price,
            total_cost=qty * sale.wholesale_price,
            profit=qty * (price - sale.wholesale_price),
        )
        if not self.check_stock_availability(updated):
            raise InsufficientStockError("Requested quantity is not currently in stock.")

        sales = [updated if s.id == sale_id else s for s in self.store.get_sales()]
        if not self.store.replace_sales(sales):
            raise PersistenceError("Failed to update sale.")
        return updated

    def complete_sale(self, sale_id: str) -> None:
        sale = self.get_sale(sale_id)
        if sale.completed:
            raise ValidationError("Sale is already completed.")
        if not self.check_stock_availability(sale):
            raise InsufficientStockError("Requested quantity is not currently in stock.")
        if not self.store.complete_sale(sale_id):
            raise PersistenceError("Failed to complete sale.")

    def delete_sale(self, sale_id: str) -> None:
        self.get_sale(sale_id)
        remaining = [s for s in self.store.get_sales() if s.id != sale_id]
        if not self.store.replace_sales(remaining):
            raise PersistenceError("Failed to delete sale.")
        log.info("sale_deleted sale_id=%s", sale_id)
