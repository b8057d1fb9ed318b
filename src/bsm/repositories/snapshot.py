from __future__ import annotations

import json
import logging
from typing import Iterable, Optional

from bsm.domain.models import Book, Sale

log = logging.getLogger("bsm.sales")


def encode_snapshot(books: Iterable[Book], sales: Iterable[Sale]) -> str:
    # Infinity and NaN are not valid JSON
    return json.dumps(
        {
            "sales": [s.to_record() for s in sales],
            "books": [b.to_record() for b in books],
        },
        ensure_ascii=False,
        allow_nan=False,
    )


def _decode_records(kind: str, records, factory) -> list:
    out = []
    for i, rec in enumerate(records):
        if not isinstance(rec, dict) or rec.get("id") in (None, ""):
            log.warning("snapshot_record_skipped kind=%s index=%s reason=missing_id", kind, i)
            continue
        out.append(factory(rec))
    return out


def decode_snapshot(data: Optional[str]) -> tuple[list[Book], list[Sale]]:
    """
    Missing blob or missing members decode to empty collections.
    Records without an id are skipped so the rest of the snapshot still loads.
    """
    if not data:
        return [], []
    parsed = json.loads(data)
    books = _decode_records("books", parsed.get("books") or [], Book.from_record)
    sales = _decode_records("sales", parsed.get("sales") or [], Sale.from_record)
    return books, sales
