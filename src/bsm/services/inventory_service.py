from __future__ import annotations

from dataclasses import replace

from bsm.domain.errors import NotFoundError, PersistenceError
from bsm.domain.models import Book
from bsm.services.validation import parse_float, parse_int, require_positive, require_text


class InventoryService:
    def __init__(self, store):
        self.store = store

    def list_books(self) -> list[Book]:
        return self.store.get_books()

    def available_books(self) -> list[Book]:
        return [b for b in self.store.get_books() if b.quantity > 0]

    def search_books(self, query: str) -> list[Book]:
        q = (query or "").strip().lower()
        books = self.store.get_books()
        if not q:
            return list(books)
        return [b for b in books if q in b.name.lower()]

    def get_book(self, book_id: str) -> Book:
        b = self.store.find_book(book_id)
        if not b:
            raise NotFoundError("Book not found.")
        return b

    def add_book(self, name, quantity, price_per_unit) -> Book:
        """
        A name that already exists turns this into an edit of that book.
        """
        name = require_text(name, "Name")
        qty = parse_int(quantity)
        price = parse_float(price_per_unit)
        require_positive(qty, "Quantity")
        require_positive(price, "Price per unit")

        book = Book.create(name, qty, price)
        if not self.store.upsert_book_by_name(book):
            raise PersistenceError("Failed to save book.")
        return book

    def update_book(self, book_id: str, quantity, price_per_unit) -> Book:
        existing = self.get_book(book_id)
        qty = parse_int(quantity)
        price = parse_float(price_per_unit)
        require_positive(qty, "Quantity")
        require_positive(price, "Price per unit")

        updated = replace(existing, quantity=qty, price_per_unit=price, total_cost=qty * price)
        if not self.store.upsert_book_by_name(updated):
            raise PersistenceError("Failed to update book.")
        return updated

    def delete_book(self, book_id: str) -> None:
        self.get_book(book_id)
        if not self.store.delete_book(book_id):
            raise PersistenceError("Failed to delete book.")
