"""Store protocols and factory function."""

from typing import Protocol, runtime_checkable

from .kv.base import KVStore


@runtime_checkable
class ReadonlyStore(Protocol):
    """Read side of a flat byte-keyed store.

    Implementations: every ``KVStore`` backend, ``ReadonlyPrefixed``,
    ``Prefixed``.
    """

    def get(self, key: bytes) -> bytes | None: ...


@runtime_checkable
class Store(ReadonlyStore, Protocol):
    """Flat byte-keyed store with writes.

    Only ``get`` and ``set`` are required. There is no delete, no range
    scan and no transaction boundary.
    """

    def set(self, key: bytes, value: bytes) -> None: ...


def store(
    storage: str = "memory",
    *,
    path: str | None = None,
    size_limit: int | None = None,
    counting: bool = False,
) -> KVStore:
    """Create a flat store with sensible defaults.

    Args:
        storage: ``"memory"`` (default) or ``"disk"``.
        path: Required when ``storage="disk"``. Directory path for
            the disk backend.
        size_limit: Disk backend size limit in bytes (default 1 GB).
        counting: Wrap the backend in ``Counting`` to track reads
            and writes.

    Returns:
        A ``KVStore`` instance.
    """
    if storage == "memory":
        if size_limit is not None:
            raise ValueError("size_limit is only valid for storage='disk'")
        from .kv.memory import Memory

        backend: KVStore = Memory()
    elif storage == "disk":
        if path is None:
            raise ValueError("path is required when storage='disk'")
        from .kv.disk import ONE_GB, Disk

        backend = Disk(path, size_limit=size_limit if size_limit is not None else ONE_GB)
    else:
        raise ValueError(f"Unknown storage: {storage!r}")

    if counting:
        from .kv.counting import Counting

        return Counting(backend)
    return backend
