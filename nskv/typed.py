"""Typed: codec-backed load/save over raw store keys."""

from __future__ import annotations

from typing import Any, Callable

from .codec import Codec, json_codec
from .errors import NotFound
from .keys import KeyPart, to_bytes
from .store import ReadonlyStore, Store


def must_deserialize(raw: bytes | None, codec: Codec, key: bytes | None = None) -> Any:
    """Decode ``raw``; ``NotFound`` if it is None."""
    if raw is None:
        raise NotFound(codec.name, key)
    return codec.deserialize(raw)


def may_deserialize(raw: bytes | None, codec: Codec) -> Any | None:
    """Decode ``raw``, or return None if it is None."""
    if raw is None:
        return None
    return codec.deserialize(raw)


class ReadonlyTyped:
    """Typed reads at keys used exactly as given.

    Args:
        store: Any ``ReadonlyStore`` (a backend or a prefixed view).
        codec: Codec for stored values (default JSON).
    """

    def __init__(self, store: ReadonlyStore, codec: Codec | None = None) -> None:
        self._store = store
        self.codec = codec if codec is not None else json_codec()

    def load(self, key: KeyPart) -> Any:
        """Load the value at key. Raises ``NotFound`` if absent."""
        k = to_bytes(key)
        return must_deserialize(self._store.get(k), self.codec, k)

    def may_load(self, key: KeyPart) -> Any | None:
        """Load the value at key, or None if absent."""
        return may_deserialize(self._store.get(to_bytes(key)), self.codec)


class Typed(ReadonlyTyped):
    """Typed reads and writes at keys used exactly as given."""

    _store: Store

    def __init__(self, store: Store, codec: Codec | None = None) -> None:
        super().__init__(store, codec)

    def save(self, key: KeyPart, value: Any) -> None:
        """Serialize and write value, replacing whatever was there."""
        self._store.set(to_bytes(key), self.codec.serialize(value))

    def update(self, key: KeyPart, action: Callable[[Any], Any]) -> Any:
        """Load, apply ``action``, save. Returns the new value.

        Only updates existing values: raises ``NotFound`` (and writes
        nothing) if the key is absent. If ``action`` raises, nothing
        is written.
        """
        output = action(self.load(key))
        self.save(key, output)
        return output

    def may_update(
        self, key: KeyPart, action: Callable[[Any | None], Any | None]
    ) -> Any | None:
        """Like ``update``, but handles missing values.

        ``action`` receives None if there is no data at key. Nothing
        is saved if ``action`` returns None.
        """
        output = action(self.may_load(key))
        if output is not None:
            self.save(key, output)
        return output


def typed_read(store: ReadonlyStore, codec: Codec | None = None) -> ReadonlyTyped:
    return ReadonlyTyped(store, codec)


def typed(store: Store, codec: Codec | None = None) -> Typed:
    return Typed(store, codec)
