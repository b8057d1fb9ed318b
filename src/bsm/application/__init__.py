from .data_store import DataStore, STORAGE_KEY

__all__ = ["DataStore", "STORAGE_KEY"]
