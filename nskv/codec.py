"""Codecs: encode/decode between typed values and stored bytes."""

from __future__ import annotations

import dataclasses
import json
import pickle
from dataclasses import dataclass
from typing import Any, Callable

from .errors import DeserializeError, SerializeError


@dataclass
class Codec:
    """A typed value handler with encode and decode logic.

    ``encode``/``decode`` are the raw functions. Use ``serialize`` and
    ``deserialize`` to get failures reported as ``SerializeError`` and
    ``DeserializeError``.

    Attributes:
        encode: value -> bytes
        decode: bytes -> value
        name: Type name used in error messages.
    """

    encode: Callable[[Any], bytes]
    decode: Callable[[bytes], Any]
    name: str = "value"

    def serialize(self, value: Any) -> bytes:
        try:
            return self.encode(value)
        # encoders signal unencodable values with many exception types
        except Exception as e:
            raise SerializeError(self.name, str(e)) from e

    def deserialize(self, raw: bytes) -> Any:
        try:
            return self.decode(raw)
        # decoders signal bad input with many exception types
        except Exception as e:
            raise DeserializeError(self.name, str(e)) from e


def _json_dumps(val: Any) -> bytes:
    return json.dumps(val, sort_keys=True, separators=(",", ":")).encode("utf-8")


def _json_loads(raw: bytes) -> Any:
    return json.loads(raw.decode("utf-8"))


def json_codec(name: str = "json") -> Codec:
    """JSON-encoded values (sorted keys, compact, UTF-8)."""
    return Codec(encode=_json_dumps, decode=_json_loads, name=name)


def pickle_codec(name: str = "pickle") -> Codec:
    """Pickled values. Only use with stores you trust."""
    return Codec(encode=pickle.dumps, decode=pickle.loads, name=name)


def dataclass_codec(cls: type) -> Codec:
    """JSON-encoded dataclass instances.

    Encodes ``dataclasses.asdict(value)`` and decodes with
    ``cls(**fields)``. A payload that is not a JSON object, or whose
    fields don't match ``cls``, fails to decode.
    """
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"{cls.__name__} is not a dataclass")

    def encode(val: Any) -> bytes:
        if not isinstance(val, cls):
            raise TypeError(f"Expected {cls.__name__}, got {type(val).__name__}")
        return _json_dumps(dataclasses.asdict(val))

    def decode(raw: bytes) -> Any:
        fields = _json_loads(raw)
        if not isinstance(fields, dict):
            raise TypeError(f"Expected a JSON object, got {type(fields).__name__}")
        return cls(**fields)

    return Codec(encode=encode, decode=decode, name=cls.__name__)
