"""Key encoding: collision-free flat keys from namespace chains.

Every namespace segment is written as a length header followed by the
raw segment bytes. The trailing user key is appended as-is. Since the
header says where each segment ends, ``(b"foo", b"bar")`` and
``(b"fo", b"obar")`` can never produce the same flat key::

    >>> encode_single(b"foo", b"bar")
    b'\\x03foobar'
    >>> encode_single(b"fo", b"obar")
    b'\\x02foobar'

Two layouts exist on the store:

- compact (1-byte length), used by prefixed views:
  ``length_prefix`` / ``multi_length_prefix`` / ``encode_single`` /
  ``encode_chain``
- wide (2-byte big-endian length), used by buckets and indexes:
  ``key_prefix`` / ``key_prefix_nested``

Both reject segments longer than ``MAX_SEGMENT_LENGTH``.
"""

from __future__ import annotations

from typing import Iterable

from .errors import PreconditionViolation

MAX_SEGMENT_LENGTH = 255

KeyPart = bytes | bytearray | memoryview | str


def to_bytes(part: KeyPart) -> bytes:
    """Coerce a key part to bytes; ``str`` is UTF-8 encoded."""
    if isinstance(part, bytes):
        return part
    if isinstance(part, (bytearray, memoryview)):
        return bytes(part)
    if isinstance(part, str):
        return part.encode("utf-8")
    raise TypeError(f"Expected bytes or str key part, got {type(part).__name__}")


def _encode_segment(segment: KeyPart, width: int) -> bytes:
    seg = to_bytes(segment)
    if len(seg) > MAX_SEGMENT_LENGTH:
        raise PreconditionViolation(
            f"Namespace segment is {len(seg)} bytes, "
            f"only supports up to {MAX_SEGMENT_LENGTH}"
        )
    return len(seg).to_bytes(width, "big") + seg


def _encode_chain(namespaces: Iterable[KeyPart], width: int) -> bytes:
    if isinstance(namespaces, (bytes, bytearray, memoryview, str)):
        raise TypeError("Expected a sequence of namespace segments, not a single segment")
    out = bytearray()
    count = 0
    for ns in namespaces:
        out.extend(_encode_segment(ns, width))
        count += 1
    if count == 0:
        raise PreconditionViolation("Namespace chain must have at least one segment")
    return bytes(out)


# -- Compact layout (prefixed views) --


def length_prefix(namespace: KeyPart) -> bytes:
    """One length byte followed by the namespace bytes."""
    return _encode_segment(namespace, 1)


def multi_length_prefix(namespaces: Iterable[KeyPart]) -> bytes:
    """``length_prefix`` of every segment, concatenated in chain order."""
    return _encode_chain(namespaces, 1)


def encode_single(namespace: KeyPart, suffix: KeyPart) -> bytes:
    """Flat key for ``suffix`` inside a single namespace."""
    return length_prefix(namespace) + to_bytes(suffix)


def encode_chain(namespaces: Iterable[KeyPart], suffix: KeyPart) -> bytes:
    """Flat key for ``suffix`` inside nested namespaces (outermost first)."""
    return multi_length_prefix(namespaces) + to_bytes(suffix)


# -- Wide layout (buckets, indexes) --


def key_prefix(namespace: KeyPart) -> bytes:
    """Two length bytes (big-endian) followed by the namespace bytes."""
    return _encode_segment(namespace, 2)


def key_prefix_nested(namespaces: Iterable[KeyPart]) -> bytes:
    """``key_prefix`` of every segment, concatenated in chain order."""
    return _encode_chain(namespaces, 2)


# -- Integer helpers for index functions --


def be_u32(n: int) -> bytes:
    """4-byte big-endian encoding; byte order matches numeric order."""
    if not (0 <= n < (1 << 32)):
        raise ValueError("be_u32 out of range")
    return n.to_bytes(4, "big")


def be_u64(n: int) -> bytes:
    """8-byte big-endian encoding; byte order matches numeric order."""
    if not (0 <= n < (1 << 64)):
        raise ValueError("be_u64 out of range")
    return n.to_bytes(8, "big")
