import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


class RecordingSink:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []

    def send(self, kind, record):
        self.sent.append((kind, record))
        if self.fail:
            raise RuntimeError("sheets unavailable")
        return True


@pytest.fixture
def storage(tmp_path: Path):
    from bsm.repositories.sqlite_repo import SqliteBlobStore

    repo = SqliteBlobStore(tmp_path / "books.db")
    repo.init_db()
    return repo


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def store(storage, sink):
    from bsm.application.data_store import DataStore

    s = DataStore(storage, sink)
    s.load()
    return s
