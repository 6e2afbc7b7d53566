"""Secondary indexes maintained with plain get/set.

An ``Index`` maps each record to an index value with a caller-supplied
function. For every distinct index value the store holds one
``IndexEntry`` listing the primary keys currently mapped to it, at
``key_prefix(namespace) + index_value``.

Store cost of ``write_index`` per index:

- insert (no old record): 1 entry read + 1 entry write
- update that changes the index value: 2 entry reads + 2 entry writes
- update that keeps the index value: no entry reads or writes

There is no multi-key transaction. Removal from the old entry happens
before the add to the new one, so a failure in between leaves the
primary key under neither value; rebuild the index from the primary
records to repair it. Emptied entries stay in the store.
"""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from .codec import Codec, json_codec
from .keys import KeyPart, key_prefix, to_bytes
from .store import ReadonlyStore, Store
from .typed import ReadonlyTyped, Typed

logger = logging.getLogger(__name__)

_JSON = json_codec()

IndexFn = Callable[[Any], bytes]
"""Index function: record -> index value. Must be pure and stable."""


@dataclass
class IndexEntry:
    """Primary keys that share one index value."""

    refs: list[bytes] = field(default_factory=list)


def _encode_entry(entry: IndexEntry) -> bytes:
    return _JSON.encode(
        {"refs": [base64.b64encode(r).decode("ascii") for r in entry.refs]}
    )


def _decode_entry(raw: bytes) -> IndexEntry:
    data = _JSON.decode(raw)
    if not isinstance(data, dict) or not isinstance(data.get("refs"), list):
        raise ValueError("expected an object with a 'refs' list")
    try:
        refs = [base64.b64decode(r, validate=True) for r in data["refs"]]
    except (TypeError, binascii.Error) as e:
        raise ValueError(f"bad ref encoding: {e}") from e
    return IndexEntry(refs=refs)


INDEX_ENTRY_CODEC = Codec(encode=_encode_entry, decode=_decode_entry, name="IndexEntry")
"""Stored form: ``{"refs": [<base64 primary key>, ...]}``."""


class IndexEntryStore:
    """Load and save ``IndexEntry`` records at already-namespaced keys.

    Holds no state of its own; everything lives in the wrapped store.
    """

    def __init__(self, store: Store) -> None:
        self._typed = Typed(store, INDEX_ENTRY_CODEC)

    def load(self, key: bytes) -> IndexEntry:
        """Raises ``NotFound`` if absent, ``DeserializeError`` if corrupt."""
        return self._typed.load(key)

    def may_load(self, key: bytes) -> IndexEntry | None:
        return self._typed.may_load(key)

    def save(self, key: bytes, entry: IndexEntry) -> None:
        self._typed.save(key, entry)


class Index:
    """A secondary index over records of one type.

    Args:
        namespace: Namespace segment for this index's entries.
        fn: Index function, record -> bytes. Changing it without
            rebuilding the index silently breaks lookups.
    """

    def __init__(self, namespace: KeyPart, fn: IndexFn) -> None:
        self.namespace = to_bytes(namespace)
        self.prefix = key_prefix(self.namespace)
        self.fn = fn

    def calc_key(self, item: Any) -> bytes:
        """Flat key of the index entry that ``item`` belongs to."""
        return self.prefix + to_bytes(self.fn(item))

    def entry_key(self, index_value: KeyPart) -> bytes:
        """Flat key of the index entry for a known index value."""
        return self.prefix + to_bytes(index_value)

    def keys(self, store: ReadonlyStore, index_value: KeyPart) -> list[bytes]:
        """Primary keys currently mapped to ``index_value``."""
        entry = load_keys(store, self.entry_key(index_value))
        return list(entry.refs) if entry is not None else []

    def __repr__(self) -> str:
        return f"Index(namespace={self.namespace!r})"


def index(namespace: KeyPart, fn: IndexFn) -> Index:
    """Shorthand for ``Index(namespace, fn)``."""
    return Index(namespace, fn)


def write_index(
    storage: Store, idx: Index, pk: KeyPart, old_val: Any | None, new_val: Any
) -> None:
    """Bring ``idx`` up to date after the record at ``pk`` changed.

    ``old_val`` is the record before the write (None on insert) and
    ``new_val`` the record after it. The caller reads the old record;
    see the module docstring for the cost of each case.
    """
    pk = to_bytes(pk)
    old_key = idx.calc_key(old_val) if old_val is not None else None
    new_key = idx.calc_key(new_val)

    if old_key is not None:
        if old_key == new_key:
            return
        remove_key(storage, old_key, pk)

    add_key(storage, new_key, pk)


def remove_key(storage: Store, idx_key: bytes, pk: bytes) -> None:
    """Drop every occurrence of ``pk`` from the entry at ``idx_key``.

    An absent entry is a no-op: nothing is written.
    """
    entries = IndexEntryStore(storage)
    entry = entries.may_load(idx_key)
    if entry is None:
        logger.warning(
            "Index entry %s missing while removing pk %s", idx_key.hex(), pk.hex()
        )
        return
    entry.refs = [r for r in entry.refs if r != pk]
    entries.save(idx_key, entry)
    logger.debug("Removed pk %s from index entry %s", pk.hex(), idx_key.hex())


def add_key(storage: Store, idx_key: bytes, pk: bytes) -> None:
    """Append ``pk`` to the entry at ``idx_key``, creating it if needed."""
    entries = IndexEntryStore(storage)
    entry = entries.may_load(idx_key) or IndexEntry()
    entry.refs.append(pk)
    entries.save(idx_key, entry)
    logger.debug("Added pk %s to index entry %s", pk.hex(), idx_key.hex())


def load_keys(storage: ReadonlyStore, idx_key: bytes) -> IndexEntry | None:
    """The entry at ``idx_key``, or None if it was never written."""
    return ReadonlyTyped(storage, INDEX_ENTRY_CODEC).may_load(idx_key)
