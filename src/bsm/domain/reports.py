from __future__ import annotations

from typing import Iterable

from bsm.domain.models import Book, Report, Sale


def build_report(books: Iterable[Book], sales: Iterable[Sale]) -> Report:
    """
    Aggregate the current snapshot. Every sale counts, pending or completed.
    """
    sales = list(sales)
    return Report(
        total_profit=sum((s.profit or 0) for s in sales),
        total_books_sold=sum((s.quantity or 0) for s in sales),
        total_books_remaining=sum((b.quantity or 0) for b in books),
        total_revenue=sum(s.revenue for s in sales),
        total_cost=sum((s.wholesale_price or 0) * (s.quantity or 0) for s in sales),
    )
