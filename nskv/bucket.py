"""Buckets: typed records under a namespace, with optional indexes."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping

from .codec import Codec, json_codec
from .index import Index, write_index
from .keys import KeyPart, key_prefix, key_prefix_nested, to_bytes
from .store import ReadonlyStore, Store
from .typed import may_deserialize, must_deserialize

logger = logging.getLogger(__name__)


class ReadonlyBucket:
    """Typed reads from one namespace of a flat store.

    Records live at ``key_prefix(namespace) + key``.

    Args:
        store: Any ``ReadonlyStore``.
        namespace: The bucket's namespace segment.
        codec: Codec for records (default JSON).
    """

    def __init__(
        self, store: ReadonlyStore, namespace: KeyPart, codec: Codec | None = None
    ) -> None:
        self._init(store, key_prefix(namespace), codec)

    def _init(self, store: ReadonlyStore, prefix: bytes, codec: Codec | None) -> None:
        self._store = store
        self.prefix = prefix
        self.codec = codec if codec is not None else json_codec()

    @classmethod
    def multilevel(
        cls,
        store: ReadonlyStore,
        namespaces: Iterable[KeyPart],
        codec: Codec | None = None,
        **kwargs: Any,
    ):
        """Build a bucket over a namespace chain (outermost first)."""
        bucket = cls.__new__(cls)
        bucket._init(store, key_prefix_nested(namespaces), codec, **kwargs)
        return bucket

    def _key(self, key: KeyPart) -> bytes:
        return self.prefix + to_bytes(key)

    def load(self, key: KeyPart) -> Any:
        """Load the record at key.

        Raises ``NotFound`` if no data is set there, or
        ``DeserializeError`` if it doesn't parse.
        """
        k = to_bytes(key)
        return must_deserialize(self._store.get(self.prefix + k), self.codec, k)

    def may_load(self, key: KeyPart) -> Any | None:
        """Load the record at key, or None if no data is set there."""
        return may_deserialize(self._store.get(self._key(key)), self.codec)


class Bucket(ReadonlyBucket):
    """Typed reads and writes in one namespace of a flat store."""

    _store: Store

    def __init__(
        self, store: Store, namespace: KeyPart, codec: Codec | None = None
    ) -> None:
        super().__init__(store, namespace, codec)

    def save(self, key: KeyPart, data: Any) -> None:
        """Serialize and store the record, replacing any existing one."""
        self._store.set(self._key(key), self.codec.serialize(data))

    def update(self, key: KeyPart, action: Callable[[Any], Any]) -> Any:
        """Load the record, apply ``action`` and store the result.

        Only updates pre-existing records: raises ``NotFound`` if the
        key is absent. If ``action`` raises, the stored record is left
        as it was. Use ``may_update`` for possibly missing records.
        """
        output = action(self.load(key))
        self.save(key, output)
        return output

    def may_update(
        self, key: KeyPart, action: Callable[[Any | None], Any | None]
    ) -> Any | None:
        """Like ``update``, but handles missing records.

        * If there is no data at this key, ``action`` gets None.
        * Nothing is saved if ``action`` returns None.
        """
        output = action(self.may_load(key))
        if output is not None:
            self.save(key, output)
        return output


class IndexedBucket(Bucket):
    """A Bucket that keeps secondary indexes in step with its records.

    Each ``save`` reads the previous record, writes the new one, then
    runs ``write_index`` once per index in registration order. Index
    entries are written to the same flat store as the records, under
    each index's own namespace. Index namespaces must be distinct and
    must not be an ancestor of the bucket namespace.

    ``update`` and ``may_update`` go through ``save``, which re-reads
    the old record from the store; an action that mutates its input
    in place cannot hide an index change.

    Args:
        store: Any ``Store``.
        namespace: The bucket's namespace segment.
        indexes: Index name -> ``Index``.
        codec: Codec for records (default JSON).
    """

    def __init__(
        self,
        store: Store,
        namespace: KeyPart,
        indexes: Mapping[str, Index],
        codec: Codec | None = None,
    ) -> None:
        self._init(store, key_prefix(namespace), codec, indexes=indexes)

    def _init(
        self,
        store: ReadonlyStore,
        prefix: bytes,
        codec: Codec | None,
        indexes: Mapping[str, Index] | None = None,
    ) -> None:
        super()._init(store, prefix, codec)
        if indexes is None:
            raise TypeError("IndexedBucket requires indexes")
        self.indexes: dict[str, Index] = dict(indexes)
        prefixes = {idx.prefix for idx in self.indexes.values()}
        if len(prefixes) != len(self.indexes):
            raise ValueError("Each index must have its own namespace")
        for name, idx in self.indexes.items():
            # either prefix containing the other lets index values land on record keys
            if self.prefix.startswith(idx.prefix) or idx.prefix.startswith(self.prefix):
                raise ValueError(
                    f"Index {name!r} namespace must differ from the bucket namespace"
                )

    def save(self, key: KeyPart, data: Any) -> None:
        k = to_bytes(key)
        old = self.may_load(k)
        super().save(k, data)
        for name, idx in self.indexes.items():
            logger.debug("Updating index %r for pk %s", name, k.hex())
            write_index(self._store, idx, k, old, data)

    def _index(self, name: str) -> Index:
        try:
            return self.indexes[name]
        except KeyError:
            raise KeyError(f"Unknown index: {name!r}") from None

    def index_keys(self, name: str, index_value: KeyPart) -> list[bytes]:
        """Primary keys whose record maps to ``index_value``."""
        return self._index(name).keys(self._store, index_value)

    def load_by_index(self, name: str, index_value: KeyPart) -> list[tuple[bytes, Any]]:
        """``(pk, record)`` pairs whose record maps to ``index_value``."""
        return [(pk, self.load(pk)) for pk in self.index_keys(name, index_value)]


def bucket(namespace: KeyPart, store: Store, codec: Codec | None = None) -> Bucket:
    """Shorthand for ``Bucket(store, namespace, codec)``."""
    return Bucket(store, namespace, codec)


def bucket_read(
    namespace: KeyPart, store: ReadonlyStore, codec: Codec | None = None
) -> ReadonlyBucket:
    """Shorthand for ``ReadonlyBucket(store, namespace, codec)``."""
    return ReadonlyBucket(store, namespace, codec)
