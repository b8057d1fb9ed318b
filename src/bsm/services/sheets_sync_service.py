from __future__ import annotations

import logging
from typing import Optional

import requests

log = logging.getLogger("bsm.sync")

KINDS = ("sales", "books")


class SheetsSyncService:
    """
    Best-effort mirror of single record writes to a spreadsheet webhook.

    Without a webhook URL nothing leaves the process; the record is only logged.
    Delivery failures are logged and reported as False, never raised or retried.
    """

    def __init__(self, webhook_url: Optional[str] = None, session: Optional[requests.Session] = None, timeout: float = 10):
        self.webhook_url = webhook_url
        self.session = session or requests.Session()
        self.timeout = timeout

    def send(self, kind: str, record) -> bool:
        if kind not in KINDS:
            log.warning("sync_unknown_kind kind=%s", kind)
            return False

        payload = {"type": kind, "data": record.to_record()}
        log.info("sync_record kind=%s id=%s", kind, record.id)
        if not self.webhook_url:
            return True

        try:
            r = self.session.post(self.webhook_url, json=payload, timeout=self.timeout)
            r.raise_for_status()
            return True
        except requests.RequestException as e:
            log.warning("sync_delivery_failed kind=%s id=%s error=%s", kind, record.id, e)
            return False
