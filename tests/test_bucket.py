"""Tests for buckets."""

from dataclasses import dataclass

import pytest

from nskv import DeserializeError, NotFound
from nskv.bucket import Bucket, ReadonlyBucket, bucket, bucket_read
from nskv.codec import dataclass_codec
from nskv.kv.memory import Memory


@dataclass
class Data:
    name: str
    age: int


CODEC = dataclass_codec(Data)


class TestBucketBasic:
    def test_store_and_load(self):
        m = Memory()
        b = bucket(b"data", m, CODEC)
        data = Data(name="Maria", age=42)
        b.save(b"maria", data)
        assert b.load(b"maria") == data

    def test_flat_key_layout(self):
        m = Memory()
        bucket(b"data", m, CODEC).save(b"maria", Data("Maria", 42))
        assert list(m.keys()) == [b"\x00\x04datamaria"]

    def test_readonly_works(self):
        m = Memory()
        bucket(b"data", m, CODEC).save(b"maria", Data("Maria", 42))

        reader = bucket_read(b"data", m, CODEC)
        with pytest.raises(NotFound, match="Data not found"):
            reader.load(b"john")
        assert reader.may_load(b"john") is None
        assert reader.load(b"maria") == Data("Maria", 42)

    def test_readonly_has_no_save(self):
        assert not hasattr(ReadonlyBucket(Memory(), b"data"), "save")

    def test_corrupt_record(self):
        m = Memory()
        m.set(b"\x00\x04datamaria", b"{broken")
        b = bucket(b"data", m, CODEC)
        with pytest.raises(DeserializeError):
            b.load(b"maria")
        with pytest.raises(DeserializeError):
            b.may_load(b"maria")

    def test_default_codec_is_json(self):
        m = Memory()
        b = Bucket(m, b"cfg")
        b.save(b"k", {"a": 1})
        assert b.load(b"k") == {"a": 1}


class TestBucketIsolation:
    def test_buckets_isolated(self):
        m = Memory()
        data = Data(name="Maria", age=42)
        bucket(b"data", m, CODEC).save(b"maria", data)

        # (dat, amaria) vs (data, maria)
        data2 = Data(name="Amen", age=67)
        bucket(b"dat", m, CODEC).save(b"amaria", data2)

        reader = bucket_read(b"data", m, CODEC)
        assert reader.load(b"maria") == data
        assert reader.may_load(b"amaria") is None

        reader2 = bucket_read(b"dat", m, CODEC)
        assert reader2.load(b"amaria") == data2
        assert reader2.may_load(b"maria") is None

    def test_same_key_other_namespace_not_found(self):
        m = Memory()
        bucket(b"data", m, CODEC).save(b"maria", Data("Maria", 42))
        with pytest.raises(NotFound):
            bucket_read(b"dat", m, CODEC).load(b"maria")


class TestBucketMultilevel:
    def test_multilevel_layout(self):
        m = Memory()
        b = Bucket.multilevel(m, [b"foo", b"bar"], CODEC)
        b.save(b"k", Data("x", 1))
        assert list(m.keys()) == [b"\x00\x03foo\x00\x03bark"]
        assert ReadonlyBucket.multilevel(m, [b"foo", b"bar"], CODEC).load(b"k") == Data("x", 1)

    def test_multilevel_isolated_from_single(self):
        m = Memory()
        Bucket.multilevel(m, [b"foo", b"bar"], CODEC).save(b"k", Data("x", 1))
        assert bucket_read(b"foo", m, CODEC).may_load(b"\x00\x03bark") is not None
        assert bucket_read(b"foobar", m, CODEC).may_load(b"k") is None


class TestBucketUpdate:
    def test_update_success(self):
        b = bucket(b"data", Memory(), CODEC)
        b.save(b"maria", Data("Maria", 42))

        def birthday(d):
            d.age += 1
            return d

        output = b.update(b"maria", birthday)
        expected = Data("Maria", 43)
        assert output == expected
        assert b.load(b"maria") == expected

    def test_update_fails_on_error(self):
        m = Memory()
        b = bucket(b"data", m, CODEC)
        init = Data("Maria", 42)
        b.save(b"maria", init)
        before = dict(m.items())

        def fail(_d):
            raise RuntimeError("cuz i feel like it")

        with pytest.raises(RuntimeError):
            b.update(b"maria", fail)
        assert b.load(b"maria") == init
        assert dict(m.items()) == before

    def test_update_fails_on_no_data(self):
        m = Memory()
        b = bucket(b"data", m, CODEC)

        def birthday(d):
            d.age += 1
            return d

        with pytest.raises(NotFound):
            b.update(b"maria", birthday)
        assert b.may_load(b"maria") is None
        assert len(m) == 0

    def test_may_update_handles_none(self):
        b = bucket(b"data", Memory(), CODEC)

        def only_first(name, age):
            return lambda t: None if t is not None else Data(name, age)

        val = b.may_update(b"first", only_first("Maria", 42))
        assert val is not None
        assert b.load(b"first") == Data("Maria", 42)

        val = b.may_update(b"first", only_first("Joe", 27))
        assert val is None
        assert b.load(b"first") == Data("Maria", 42)

    def test_may_update_none_leaves_absence(self):
        m = Memory()
        b = bucket(b"data", m, CODEC)
        assert b.may_update(b"k", lambda t: None) is None
        assert len(m) == 0
