"""Disk-backed KV store using diskcache."""

from typing import Iterable, cast

from .base import KVStore
from .memory import _check_bytes

ONE_GB = 1024 * 1024 * 1024


class Disk(KVStore):
    """KV store backed by diskcache (SQLite + mmap).

    diskcache stores ``bytes`` keys natively, so flat keys round-trip
    unchanged.
    """

    def __init__(self, directory: str, size_limit: int = ONE_GB) -> None:
        from diskcache import Cache as DiskCache

        self.store = DiskCache(directory, size_limit=size_limit)

    def get(self, key: bytes) -> bytes | None:
        return cast(bytes | None, self.store.get(key))

    def set(self, key: bytes, value: bytes) -> None:
        _check_bytes("key", key)
        _check_bytes("value", value)
        self.store[key] = value

    def items(self) -> Iterable[tuple[bytes, bytes]]:
        for key in self.store.iterkeys():
            yield cast(bytes, key), cast(bytes, self.store[key])

    def keys(self) -> Iterable[bytes]:
        for key in self.store.iterkeys():
            yield cast(bytes, key)

    def __contains__(self, key: bytes) -> bool:
        return key in self.store

    def __len__(self) -> int:
        return len(self.store)

    def close(self) -> None:
        self.store.close()
