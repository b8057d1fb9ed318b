from dataclasses import replace
from pathlib import Path

from conftest import RecordingSink

from bsm.application.data_store import DataStore
from bsm.domain.models import Book, Sale
from bsm.repositories.sqlite_repo import SqliteBlobStore


class FailingBlobStore(SqliteBlobStore):
    def __init__(self, db_path):
        super().__init__(db_path)
        self.fail_writes = False
        self.writes = 0

    def set_item(self, key, value):
        self.writes += 1
        if self.fail_writes:
            raise OSError("disk full")
        super().set_item(key, value)


def test_decrement_clamps_stock_at_zero(store: DataStore):
    assert store.upsert_book_by_name(Book.create("A", 10, 5.0))
    books = store.get_books()
    assert len(books) == 1
    assert books[0].quantity == 10

    book_id = books[0].id
    assert store.decrement_book_stock(book_id, 3)
    assert store.find_book(book_id).quantity == 7

    assert store.decrement_book_stock(book_id, 100)
    assert store.find_book(book_id).quantity == 0


def test_decrement_unknown_book_returns_false(store: DataStore):
    events = []
    store.subscribe(lambda: events.append("x"))

    assert store.decrement_book_stock("missing", 1) is False
    assert events == []


def test_decrement_does_not_notify_sink(store: DataStore, sink: RecordingSink):
    book = Book.create("A", 4, 2.0)
    store.upsert_book_by_name(book)
    sink.sent.clear()

    store.decrement_book_stock(book.id, 1)

    assert sink.sent == []


def test_upsert_same_name_is_idempotent(store: DataStore):
    book = Book.create("Dune", 3, 9.5)
    store.upsert_book_by_name(book)
    store.upsert_book_by_name(book)

    books = [b for b in store.get_books() if b.name == "Dune"]
    assert books == [book]


def test_upsert_same_name_replaces_record_including_id(store: DataStore):
    first = Book.create("Dune", 3, 9.5)
    other = Book.create("Emma", 1, 4.0)
    store.upsert_book_by_name(first)
    store.upsert_book_by_name(other)

    second = Book.create("Dune", 8, 7.0)
    assert second.id != first.id
    store.upsert_book_by_name(second)

    books = store.get_books()
    assert [b.name for b in books] == ["Dune", "Emma"]
    assert books[0] == second
    assert store.find_book(first.id) is None


def test_upsert_sends_book_record_to_sink(store: DataStore, sink: RecordingSink):
    book = Book.create("Dune", 3, 9.5)
    store.upsert_book_by_name(book)
    assert sink.sent == [("books", book)]


def test_add_sale_computes_totals_and_notifies(store: DataStore, sink: RecordingSink):
    book = Book.create("A", 10, 5.0)
    store.upsert_book_by_name(book)
    events = []
    store.subscribe(lambda: events.append("changed"))

    sale = Sale.create(book, "Ali", 2, 8.0)
    assert store.add_sale(sale)

    assert sale.total_cost == 10
    assert sale.profit == 6
    assert sale.completed is False
    assert store.get_sales() == [sale]
    assert sink.sent[-1] == ("sales", sale)
    assert events == ["changed"]


def test_store_accepts_sales_exceeding_stock(store: DataStore):
    book = Book.create("A", 5, 1.0)
    store.upsert_book_by_name(book)

    assert store.add_sale(Sale.create(book, "one", 4, 2.0))
    assert store.add_sale(Sale.create(book, "two", 4, 2.0))

    assert sum(s.quantity for s in store.get_sales()) == 8
    assert store.find_book(book.id).quantity == 5


def test_delete_book_leaves_referencing_sales_orphaned(store: DataStore):
    book = Book.create("A", 5, 1.0)
    store.upsert_book_by_name(book)
    sale = Sale.create(book, "Ali", 1, 2.0)
    store.add_sale(sale)

    assert store.delete_book(book.id)

    assert store.get_books() == []
    assert store.get_sales() == [sale]
    assert store.find_book(sale.book_id) is None


def test_delete_missing_book_is_noop(store: DataStore):
    book = Book.create("A", 5, 1.0)
    store.upsert_book_by_name(book)
    assert store.delete_book("nope")
    assert store.get_books() == [book]


def test_two_step_completion_with_primitives(store: DataStore):
    book = Book.create("A", 5, 1.0)
    store.upsert_book_by_name(book)
    sale = Sale.create(book, "Ali", 2, 2.0)
    store.add_sale(sale)

    assert store.decrement_book_stock(sale.book_id, sale.quantity)
    assert store.find_sale(sale.id).completed is False

    updated = [replace(s, completed=True) if s.id == sale.id else s for s in store.get_sales()]
    assert store.replace_sales(updated)

    assert store.find_book(book.id).quantity == 3
    assert store.get_completed_sales()[0].id == sale.id
    assert store.get_pending_sales() == []


def test_complete_sale_writes_stock_and_status_together(tmp_path: Path):
    storage = FailingBlobStore(tmp_path / "atomic.db")
    storage.init_db()
    store = DataStore(storage)
    store.load()
    book = Book.create("A", 5, 1.0)
    store.upsert_book_by_name(book)
    sale = Sale.create(book, "Ali", 2, 2.0)
    store.add_sale(sale)

    writes_before = storage.writes
    assert store.complete_sale(sale.id)
    assert storage.writes == writes_before + 1
    assert store.complete_sale(sale.id) is False

    reloaded = DataStore(SqliteBlobStore(tmp_path / "atomic.db"))
    reloaded.load()
    assert reloaded.find_book(book.id).quantity == 3
    assert reloaded.find_sale(sale.id).completed is True


def test_complete_sale_for_orphaned_sale_fails(store: DataStore):
    book = Book.create("A", 5, 1.0)
    store.upsert_book_by_name(book)
    sale = Sale.create(book, "Ali", 2, 2.0)
    store.add_sale(sale)
    store.delete_book(book.id)

    assert store.complete_sale(sale.id) is False
    assert store.find_sale(sale.id).completed is False


def test_persistence_failure_reports_false_without_rollback(tmp_path: Path):
    storage = FailingBlobStore(tmp_path / "fail.db")
    storage.init_db()
    store = DataStore(storage)
    store.load()
    events = []
    store.subscribe(lambda: events.append("changed"))

    storage.fail_writes = True
    book = Book.create("A", 5, 1.0)

    assert store.upsert_book_by_name(book) is False
    assert store.get_books() == [book]
    assert events == []

    reloaded = DataStore(SqliteBlobStore(tmp_path / "fail.db"))
    reloaded.load()
    assert reloaded.get_books() == []

    storage.fail_writes = False
    assert store.save_data()
    reloaded.load()
    assert reloaded.get_books() == [book]


def test_sink_failure_does_not_fail_operation(storage):
    failing = RecordingSink(fail=True)
    store = DataStore(storage, failing)
    store.load()

    book = Book.create("A", 5, 1.0)
    assert store.upsert_book_by_name(book)
    assert store.add_sale(Sale.create(book, "Ali", 1, 2.0))
    assert [k for k, _ in failing.sent] == ["books", "sales"]


def test_listeners_fire_in_order_and_unsubscribe(store: DataStore):
    calls = []
    store.subscribe(lambda: calls.append("first"))
    unsubscribe = store.subscribe(lambda: calls.append("second"))

    store.upsert_book_by_name(Book.create("A", 1, 1.0))
    assert calls == ["first", "second"]

    unsubscribe()
    unsubscribe()
    store.upsert_book_by_name(Book.create("B", 1, 1.0))
    assert calls == ["first", "second", "first"]


def test_raising_listener_does_not_block_others(store: DataStore):
    calls = []

    def boom():
        raise RuntimeError("listener bug")

    store.subscribe(boom)
    store.subscribe(lambda: calls.append("ok"))

    assert store.upsert_book_by_name(Book.create("A", 1, 1.0))
    assert calls == ["ok"]


def test_load_notifies_subscribers(storage):
    store = DataStore(storage)
    calls = []
    store.subscribe(lambda: calls.append("loaded"))
    assert store.load()
    assert calls == ["loaded"]


def test_get_books_returns_live_collection(store: DataStore):
    books = store.get_books()
    book = Book.create("A", 5, 1.0)
    store.upsert_book_by_name(book)
    store.decrement_book_stock(book.id, 2)
    assert books[0].quantity == 3
