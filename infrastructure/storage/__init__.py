"""
Record store adapters.

- JsonFileRecordStore: one JSON array file per collection key
- collection_lock: per-(store, key) write serialization
"""

from infrastructure.storage.json_file_store import JsonFileRecordStore
from infrastructure.storage.locks import collection_lock

__all__ = [
    "JsonFileRecordStore",
    "collection_lock",
]
