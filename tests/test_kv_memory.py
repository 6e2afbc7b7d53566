"""Tests for the Memory KV store."""

import pytest

from nskv.kv.memory import Memory


class TestMemoryBasic:
    def test_set_get(self):
        m = Memory()
        m.set(b"k", b"v")
        assert m.get(b"k") == b"v"

    def test_get_missing(self):
        m = Memory()
        assert m.get(b"nope") is None

    def test_contains(self):
        m = Memory()
        m.set(b"k", b"v")
        assert b"k" in m
        assert b"nope" not in m

    def test_keys(self):
        m = Memory()
        m.set(b"a", b"1")
        m.set(b"b", b"2")
        assert set(m.keys()) == {b"a", b"b"}

    def test_items(self):
        m = Memory()
        m.set(b"a", b"1")
        m.set(b"b", b"2")
        assert dict(m.items()) == {b"a": b"1", b"b": b"2"}

    def test_len(self):
        m = Memory()
        m.set(b"a", b"1")
        m.set(b"a", b"2")
        assert len(m) == 1

    def test_overwrite(self):
        m = Memory()
        m.set(b"k", b"old")
        m.set(b"k", b"new")
        assert m.get(b"k") == b"new"

    def test_binary_keys(self):
        m = Memory()
        m.set(b"\x00\xff", b"v")
        assert m.get(b"\x00\xff") == b"v"


class TestMemoryValidation:
    def test_type_error_on_non_bytes_value(self):
        m = Memory()
        with pytest.raises(TypeError, match="Expected bytes value"):
            m.set(b"k", "not bytes")  # type: ignore

    def test_type_error_on_non_bytes_key(self):
        m = Memory()
        with pytest.raises(TypeError, match="Expected bytes key"):
            m.set("k", b"v")  # type: ignore
