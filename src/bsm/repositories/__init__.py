from .sqlite_repo import SqliteBlobStore
from .snapshot import encode_snapshot, decode_snapshot

__all__ = ["SqliteBlobStore", "encode_snapshot", "decode_snapshot"]
