"""nskv: namespaced records and secondary indexes over a flat KV store."""

from .bucket import Bucket, IndexedBucket, ReadonlyBucket, bucket, bucket_read
from .codec import Codec, dataclass_codec, json_codec, pickle_codec
from .errors import (
    DeserializeError,
    NotFound,
    PreconditionViolation,
    SerializeError,
    StorageError,
)
from .index import (
    Index,
    IndexEntry,
    IndexEntryStore,
    add_key,
    index,
    load_keys,
    remove_key,
    write_index,
)
from .keys import (
    be_u32,
    be_u64,
    encode_chain,
    encode_single,
    key_prefix,
    key_prefix_nested,
    length_prefix,
    multi_length_prefix,
)
from .kv.base import KVStore
from .prefixed import Prefixed, ReadonlyPrefixed, prefixed, prefixed_ro
from .store import ReadonlyStore, Store, store
from .typed import ReadonlyTyped, Typed, typed, typed_read

__all__ = [
    "Bucket",
    "Codec",
    "DeserializeError",
    "Index",
    "IndexEntry",
    "IndexEntryStore",
    "IndexedBucket",
    "KVStore",
    "NotFound",
    "PreconditionViolation",
    "Prefixed",
    "ReadonlyBucket",
    "ReadonlyPrefixed",
    "ReadonlyStore",
    "ReadonlyTyped",
    "SerializeError",
    "StorageError",
    "Store",
    "Typed",
    "add_key",
    "be_u32",
    "be_u64",
    "bucket",
    "bucket_read",
    "dataclass_codec",
    "encode_chain",
    "encode_single",
    "index",
    "json_codec",
    "key_prefix",
    "key_prefix_nested",
    "length_prefix",
    "load_keys",
    "multi_length_prefix",
    "pickle_codec",
    "prefixed",
    "prefixed_ro",
    "remove_key",
    "store",
    "typed",
    "typed_read",
    "write_index",
]
