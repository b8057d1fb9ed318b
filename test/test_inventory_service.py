import pytest

from bsm.domain.errors import NotFoundError, ValidationError
from bsm.services.inventory_service import InventoryService


def test_add_book_computes_total_cost(store):
    inv = InventoryService(store)
    book = inv.add_book("  Dune ", "4", "2.5")

    assert book.name == "Dune"
    assert book.quantity == 4
    assert book.total_cost == 10.0
    assert inv.list_books() == [book]


@pytest.mark.parametrize(
    "name, qty, price, message",
    [
        ("", "1", "1", "Name is required"),
        ("Dune", "abc", "1", "Quantity must be > 0"),
        ("Dune", "0", "1", "Quantity must be > 0"),
        ("Dune", "2", "-3", "Price per unit must be > 0"),
        ("Dune", "2", "inf", "Price per unit must be > 0"),
        ("Dune", "2", "1e999", "Price per unit must be > 0"),
        ("Dune", "1e999", "1", "Quantity must be > 0"),
    ],
)
def test_add_book_rejects_invalid_form_input(store, name, qty, price, message):
    inv = InventoryService(store)
    with pytest.raises(ValidationError, match=message):
        inv.add_book(name, qty, price)
    assert store.get_books() == []


def test_add_existing_name_edits_instead_of_inserting(store):
    inv = InventoryService(store)
    inv.add_book("Dune", 4, 2.0)
    second = inv.add_book("Dune", 9, 3.0)

    assert inv.list_books() == [second]


def test_update_book_keeps_id_and_name(store):
    inv = InventoryService(store)
    book = inv.add_book("Dune", 4, 2.0)

    updated = inv.update_book(book.id, "6", "1.5")

    assert updated.id == book.id
    assert updated.name == "Dune"
    assert updated.total_cost == 9.0
    assert inv.get_book(book.id) == updated
    assert len(inv.list_books()) == 1


def test_delete_unknown_book_raises(store):
    inv = InventoryService(store)
    with pytest.raises(NotFoundError):
        inv.delete_book("missing")


def test_search_and_available_books(store):
    inv = InventoryService(store)
    inv.add_book("The Hobbit", 2, 4.0)
    hobbit_fan = inv.add_book("Hobbit Companion", 1, 4.0)
    inv.add_book("Emma", 3, 1.0)
    store.decrement_book_stock(hobbit_fan.id, 1)

    assert [b.name for b in inv.search_books("hobbit")] == ["The Hobbit", "Hobbit Companion"]
    assert len(inv.search_books("  ")) == 3
    assert [b.name for b in inv.available_books()] == ["The Hobbit", "Emma"]
