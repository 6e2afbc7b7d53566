"""Abstract flat KV store interface."""

from abc import ABC, abstractmethod
from typing import Iterable


class KVStore(ABC):
    """Flat key-value store operating on bytes only.

    Keys and values are both bytes. Higher layers (prefixed views,
    buckets, indexes) only ever call ``get`` and ``set``; the other
    methods exist for inspection and tests.
    """

    @abstractmethod
    def get(self, key: bytes) -> bytes | None:
        """Get bytes value for key, or None if not found."""

    @abstractmethod
    def set(self, key: bytes, value: bytes) -> None:
        """Set bytes value for key."""

    @abstractmethod
    def items(self) -> Iterable[tuple[bytes, bytes]]:
        """Iterate over all key-value pairs."""

    @abstractmethod
    def keys(self) -> Iterable[bytes]:
        """Iterate over all keys."""

    @abstractmethod
    def __contains__(self, key: bytes) -> bool:
        """Check if key exists in store."""

    def __len__(self) -> int:
        return sum(1 for _ in self.keys())
