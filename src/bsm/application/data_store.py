from __future__ import annotations

import itertools
import logging
from dataclasses import replace
from typing import Callable, Iterable, Optional, Protocol, Union

from bsm.domain.models import Book, Report, Sale
from bsm.domain.reports import build_report
from bsm.repositories.snapshot import decode_snapshot, encode_snapshot

log = logging.getLogger("bsm.sales")

STORAGE_KEY = "bookSalesData"

Listener = Callable[[], None]


class BlobStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...
    def set_item(self, key: str, value: str) -> None: ...


class NotificationSink(Protocol):
    def send(self, kind: str, record: Union[Book, Sale]) -> bool: ...


class DataStore:
    """
    Authoritative in-memory holder of books and sales.

    Every mutation rewrites the full snapshot to storage before listeners
    fire. A failed write is logged and reported as False; memory is not
    rolled back, so memory and storage diverge until the next good write.
    """

    def __init__(self, storage: BlobStorage, sink: Optional[NotificationSink] = None, key: str = STORAGE_KEY):
        self.storage = storage
        self.sink = sink
        self.key = key
        self._books: list[Book] = []
        self._sales: list[Sale] = []
        self._listeners: dict[int, Listener] = {}
        self._handles = itertools.count(1)

    # ---------- subscriptions ----------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        handle = next(self._handles)
        self._listeners[handle] = listener

        def unsubscribe() -> None:
            self._listeners.pop(handle, None)

        return unsubscribe

    def _notify_listeners(self) -> None:
        for listener in list(self._listeners.values()):
            try:
                listener()
            except Exception:
                log.exception("listener_failed listener=%r", listener)

    # ---------- storage ----------
    def load(self) -> bool:
        try:
            books, sales = decode_snapshot(self.storage.get_item(self.key))
        except Exception:
            log.exception("snapshot_load_failed key=%s", self.key)
            return False
        self._books = books
        self._sales = sales
        log.info("snapshot_loaded books=%s sales=%s", len(books), len(sales))
        self._notify_listeners()
        return True

    def _save(self) -> None:
        self.storage.set_item(self.key, encode_snapshot(self._books, self._sales))

    def save_data(self) -> bool:
        try:
            self._save()
            return True
        except Exception:
            log.exception("snapshot_save_failed key=%s", self.key)
            return False

    def _send(self, kind: str, record: Union[Book, Sale]) -> None:
        if self.sink is None:
            return
        try:
            self.sink.send(kind, record)
        except Exception:
            log.exception("sync_failed kind=%s id=%s", kind, record.id)

    # ---------- sales ----------
    def add_sale(self, sale: Sale) -> bool:
        try:
            self._sales.append(sale)
            self._save()
        except Exception:
            log.exception("sale_add_failed sale_id=%s", sale.id)
            return False
        self._send("sales", sale)
        log.info("sale_added sale_id=%s book_id=%s qty=%s", sale.id, sale.book_id, sale.quantity)
        self._notify_listeners()
        return True

    def get_sales(self) -> list[Sale]:
        return self._sales

    def get_pending_sales(self) -> list[Sale]:
        return [s for s in self._sales if not s.completed]

    def get_completed_sales(self) -> list[Sale]:
        return [s for s in self._sales if s.completed]

    def find_sale(self, sale_id: str) -> Optional[Sale]:
        return next((s for s in self._sales if s.id == sale_id), None)

    def replace_sales(self, sales: Iterable[Sale]) -> bool:
        try:
            self._sales = list(sales)
            self._save()
        except Exception:
            log.exception("sales_replace_failed")
            return False
        log.info("sales_replaced count=%s", len(self._sales))
        self._notify_listeners()
        return True

    def complete_sale(self, sale_id: str) -> bool:
        """
        Decrement stock and mark the sale completed with a single snapshot write.
        """
        sale_idx = next((i for i, s in enumerate(self._sales) if s.id == sale_id), -1)
        if sale_idx == -1 or self._sales[sale_idx].completed:
            return False
        sale = self._sales[sale_idx]
        book_idx = self._book_index(sale.book_id)
        if book_idx == -1:
            return False

        try:
            book = self._books[book_idx]
            self._books[book_idx] = replace(book, quantity=max(0, book.quantity - sale.quantity))
            self._sales[sale_idx] = replace(sale, completed=True)
            self._save()
        except Exception:
            log.exception("sale_complete_failed sale_id=%s", sale_id)
            return False
        log.info("sale_completed sale_id=%s book_id=%s qty=%s", sale.id, sale.book_id, sale.quantity)
        self._notify_listeners()
        return True

    # ---------- books ----------
    def _book_index(self, book_id: str) -> int:
        return next((i for i, b in enumerate(self._books) if b.id == book_id), -1)

    def upsert_book_by_name(self, book: Book) -> bool:
        """
        A book whose name matches an existing one replaces it in place, id included.
        """
        try:
            idx = next((i for i, b in enumerate(self._books) if b.name == book.name), -1)
            if idx != -1:
                self._books[idx] = book
            else:
                self._books.append(book)
            self._save()
        except Exception:
            log.exception("book_upsert_failed name=%s", book.name)
            return False
        self._send("books", book)
        log.info("book_upserted book_id=%s name=%s qty=%s replaced=%s", book.id, book.name, book.quantity, idx != -1)
        self._notify_listeners()
        return True

    def delete_book(self, book_id: str) -> bool:
        try:
            self._books = [b for b in self._books if b.id != book_id]
            self._save()
        except Exception:
            log.exception("book_delete_failed book_id=%s", book_id)
            return False
        log.info("book_deleted book_id=%s", book_id)
        self._notify_listeners()
        return True

    def get_books(self) -> list[Book]:
        return self._books

    def find_book(self, book_id: str) -> Optional[Book]:
        idx = self._book_index(book_id)
        return None if idx == -1 else self._books[idx]

    def decrement_book_stock(self, book_id: str, amount: int) -> bool:
        idx = self._book_index(book_id)
        if idx == -1:
            return False
        try:
            book = self._books[idx]
            # clamped, never negative
            self._books[idx] = replace(book, quantity=max(0, book.quantity - amount))
            self._save()
        except Exception:
            log.exception("stock_decrement_failed book_id=%s amount=%s", book_id, amount)
            return False
        log.info("stock_decremented book_id=%s amount=%s stock_after=%s", book_id, amount, self._books[idx].quantity)
        self._notify_listeners()
        return True

    # ---------- reports ----------
    def generate_report(self) -> Report:
        return build_report(self._books, self._sales)
