"""Operation-counting wrapper."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from .base import KVStore

if TYPE_CHECKING:
    from ..store import Store


class Counting(KVStore):
    """Forwards every call to a wrapped store and counts them.

    ``reads`` counts ``get`` calls and ``writes`` counts ``set``
    calls. Useful for checking how many store round trips a
    higher-level operation costs.

    Any ``Store`` can be wrapped. Inspection methods (``keys``,
    ``items``, ``in``) are not counted and need the wrapped store to
    be a ``KVStore``.
    """

    def __init__(self, store: Store) -> None:
        self.store = store
        self.reads = 0
        self.writes = 0

    def get(self, key: bytes) -> bytes | None:
        self.reads += 1
        return self.store.get(key)

    def set(self, key: bytes, value: bytes) -> None:
        self.writes += 1
        self.store.set(key, value)

    def items(self) -> Iterable[tuple[bytes, bytes]]:
        return self._inspectable().items()

    def keys(self) -> Iterable[bytes]:
        return self._inspectable().keys()

    def __contains__(self, key: bytes) -> bool:
        return key in self._inspectable()

    def _inspectable(self) -> KVStore:
        if not isinstance(self.store, KVStore):
            raise TypeError(
                f"Inspection requires a KVStore, not {type(self.store).__name__}"
            )
        return self.store

    def reset(self) -> None:
        """Zero both counters."""
        self.reads = 0
        self.writes = 0
