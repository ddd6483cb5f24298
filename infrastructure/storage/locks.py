"""
Per-collection write serialization.

Every mutation is a read-modify-write of a whole collection. Holding the
lock for (store, key) across that cycle means two writers of the same
collection run one after the other instead of silently dropping an update.
Locks are not reentrant: never call a locking method while holding one.
"""
import asyncio
import weakref
from typing import Dict

_locks: "weakref.WeakKeyDictionary[object, Dict[str, asyncio.Lock]]" = weakref.WeakKeyDictionary()


def collection_lock(store: object, key: str) -> asyncio.Lock:
    """
    Get the lock guarding `key` in `store`.

    Repositories built over the same store instance share locks, so
    serialization holds even when several repository objects exist.

    Args:
        store: RecordStore instance
        key: Collection key

    Returns:
        The shared asyncio.Lock for that collection
    """
    per_store = _locks.setdefault(store, {})
    lock = per_store.get(key)
    if lock is None:
        lock = per_store[key] = asyncio.Lock()
    return lock
