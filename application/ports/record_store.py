"""
Record Store Interface (Port).

This module defines the abstract interface for the local key-value store
that backs every collection. Each logical collection ("exercises",
"workouts", "personal_records", "pr_notifications", ...) is addressed by a
fixed string key and holds a JSON-serializable array.

No multi-key transactional guarantee is required from implementations.
"""
from typing import Any, List, Optional, Protocol


class RecordStore(Protocol):
    """
    Abstract interface for keyed array persistence.

    Implementations raise application.exceptions.StorageError when the
    underlying storage cannot be read or written.
    """

    async def get(self, key: str) -> Optional[List[Any]]:
        """
        Read the array stored under `key`.

        Args:
            key: Collection key (e.g., "workouts")

        Returns:
            The stored array, or None if nothing is stored under the key
        """
        ...

    async def set(self, key: str, value: List[Any]) -> None:
        """
        Replace the array stored under `key`.

        Args:
            key: Collection key
            value: JSON-serializable array
        """
        ...

    async def remove(self, key: str) -> None:
        """
        Delete whatever is stored under `key`. Missing keys are ignored.

        Args:
            key: Collection key
        """
        ...
