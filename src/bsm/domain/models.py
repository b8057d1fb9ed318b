from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


def new_id() -> str:
    return uuid.uuid4().hex


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class Book:
    id: str
    name: str
    price_per_unit: float
    quantity: int
    total_cost: float

    @classmethod
    def create(cls, name: str, quantity: int, price_per_unit: float, book_id: Optional[str] = None) -> "Book":
        return cls(
            id=book_id or new_id(),
            name=name,
            price_per_unit=price_per_unit,
            quantity=quantity,
            total_cost=quantity * price_per_unit,
        )

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "pricePerUnit": self.price_per_unit,
            "quantity": self.quantity,
            "totalCost": self.total_cost,
        }

    @classmethod
    def from_record(cls, data: dict) -> "Book":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            price_per_unit=data.get("pricePerUnit", 0),
            quantity=data.get("quantity", 0),
            total_cost=data.get("totalCost", 0),
        )


@dataclass(frozen=True)
class Sale:
    id: str
    book_id: str
    customer_name: str
    book_name: str
    quantity: int
    wholesale_price: float
    selling_price: float
    total_cost: float
    profit: float
    completed: bool
    date: str

    @classmethod
    def create(
        cls,
        book: Book,
        customer_name: str,
        quantity: int,
        selling_price: float,
        wholesale_price: Optional[float] = None,
        date: Optional[str] = None,
    ) -> "Sale":
        """
        Snapshot the book's name and (unless given) its unit cost into a new pending sale.
        """
        wholesale = book.price_per_unit if wholesale_price is None else wholesale_price
        return cls(
            id=new_id(),
            book_id=book.id,
            customer_name=customer_name,
            book_name=book.name,
            quantity=quantity,
            wholesale_price=wholesale,
            selling_price=selling_price,
            total_cost=quantity * wholesale,
            profit=quantity * (selling_price - wholesale),
            completed=False,
            date=date or utc_now_iso(),
        )

    @property
    def revenue(self) -> float:
        return (self.quantity or 0) * (self.selling_price or 0)

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "bookId": self.book_id,
            "customerName": self.customer_name,
            "bookName": self.book_name,
            "quantity": self.quantity,
            "wholesalePrice": self.wholesale_price,
            "sellingPrice": self.selling_price,
            "totalCost": self.total_cost,
            "profit": self.profit,
            "completed": self.completed,
            "date": self.date,
        }

    @classmethod
    def from_record(cls, data: dict) -> "Sale":
        return cls(
            id=str(data["id"]),
            book_id=str(data.get("bookId", "")),
            customer_name=str(data.get("customerName", "")),
            book_name=str(data.get("bookName", "")),
            quantity=data.get("quantity", 0),
            wholesale_price=data.get("wholesalePrice", 0),
            selling_price=data.get("sellingPrice", 0),
            total_cost=data.get("totalCost", 0),
            profit=data.get("profit", 0),
            completed=bool(data.get("completed", False)),
            date=str(data.get("date", "")),
        )


@dataclass(frozen=True)
class Report:
    total_profit: float
    total_books_sold: int
    total_books_remaining: int
    total_revenue: float
    total_cost: float
