"""Prefixed: namespace-scoped views over a flat store."""

from __future__ import annotations

from typing import Iterable

from .keys import KeyPart, length_prefix, multi_length_prefix, to_bytes
from .store import ReadonlyStore, Store


class ReadonlyPrefixed:
    """A read-only view of one namespace inside a flat store.

    Every key is encoded as ``len(namespace) | namespace | key`` before
    it reaches the wrapped store. Nested views are supported by
    wrapping another view; the result is byte-identical to a single
    ``multilevel`` view over the whole chain.

    Construction never touches the store.

    Implements the ``ReadonlyStore`` protocol.

    Args:
        store: Any ``ReadonlyStore`` (a backend or another view).
        namespace: The namespace segment (at most 255 bytes).
    """

    def __init__(self, store: ReadonlyStore, namespace: KeyPart) -> None:
        self._bind(store, length_prefix(namespace))

    def _bind(self, store: ReadonlyStore, prefix: bytes) -> None:
        if not isinstance(store, ReadonlyStore):
            raise TypeError(
                f"{type(self).__name__} requires a store with get(), "
                f"not {type(store).__name__}"
            )
        if isinstance(store, ReadonlyPrefixed):
            self.prefix = store.prefix + prefix
            self._store = store._store
        else:
            self.prefix = prefix
            self._store = store

    @classmethod
    def multilevel(cls, store: ReadonlyStore, namespaces: Iterable[KeyPart]):
        """Build one view over a namespace chain (outermost first)."""
        view = cls.__new__(cls)
        view._bind(store, multi_length_prefix(namespaces))
        return view

    def _prefixed(self, key: KeyPart) -> bytes:
        return self.prefix + to_bytes(key)

    @property
    def base_store(self) -> ReadonlyStore:
        """The underlying flat store (unwraps nesting)."""
        return self._store

    def get(self, key: KeyPart) -> bytes | None:
        """Get a value from the namespaced view."""
        return self._store.get(self._prefixed(key))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(prefix={self.prefix!r})"


class Prefixed(ReadonlyPrefixed):
    """A read-write view of one namespace inside a flat store.

    Implements the ``Store`` protocol. The wrapped store must support
    ``set``; wrapping a ``ReadonlyPrefixed`` raises ``TypeError``.
    """

    _store: Store

    def _bind(self, store: ReadonlyStore, prefix: bytes) -> None:
        if not isinstance(store, Store):
            raise TypeError(
                f"Prefixed requires a writable store, "
                f"not {type(store).__name__}"
            )
        super()._bind(store, prefix)

    def set(self, key: KeyPart, value: bytes) -> None:
        """Set a value in the namespaced view."""
        self._store.set(self._prefixed(key), value)


def prefixed_ro(namespace: KeyPart, store: ReadonlyStore) -> ReadonlyPrefixed:
    """Shorthand for ``ReadonlyPrefixed(store, namespace)``."""
    return ReadonlyPrefixed(store, namespace)


def prefixed(namespace: KeyPart, store: Store) -> Prefixed:
    """Shorthand for ``Prefixed(store, namespace)``."""
    return Prefixed(store, namespace)
