"""In-memory KV store."""

from typing import Iterable

from .base import KVStore


def _check_bytes(what: str, obj: object) -> None:
    if not isinstance(obj, bytes):
        raise TypeError(f"Expected bytes {what}, got {type(obj).__name__}")


class Memory(KVStore):
    """A memory-backed KV store."""

    def __init__(self) -> None:
        self.memory: dict[bytes, bytes] = {}

    def get(self, key: bytes) -> bytes | None:
        return self.memory.get(key)

    def set(self, key: bytes, value: bytes) -> None:
        _check_bytes("key", key)
        _check_bytes("value", value)
        self.memory[key] = value

    def items(self) -> Iterable[tuple[bytes, bytes]]:
        return self.memory.items()

    def keys(self) -> Iterable[bytes]:
        return self.memory.keys()

    def __contains__(self, key: bytes) -> bool:
        return key in self.memory

    def __len__(self) -> int:
        return len(self.memory)
