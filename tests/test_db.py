import threading
import uuid

import pytest

from kvresp.db import DB, WrongTypeError, get_db


def test_set_string_get_string():
    kv = get_db()
    key = "mykey"
    value = "myvalue"
    kv.set_string(key, value)
    assert kv.get_string(key) == value


def test_get_db_is_singleton():
    key = f"single-{uuid.uuid4().hex}"
    get_db().set_string(key, "shared")
    assert get_db().get_string(key) == "shared"
    assert get_db() is get_db()


def test_get_string_missing():
    assert DB().get_string("absent") is None


def test_set_string_overwrites_other_type():
    kv = DB()
    kv.sadd("k", "m")
    kv.set_string("k", "v")
    assert kv.get_string("k") == "v"
    assert kv.smembers("k") is None


def test_get_string_on_hash_is_none():
    kv = DB()
    kv.hset_field("h", "f", "v")
    assert kv.get_string("h") is None


def test_hash_fields():
    kv = DB()
    kv.hset_field("user", "name", "alice")
    kv.hset_field("user", "age", "30")
    assert kv.hget_field("user", "name") == "alice"
    assert kv.hget_field("user", "age") == "30"
    assert kv.hget_field("user", "missing") is None
    assert kv.hget_field("nokey", "name") is None


def test_hset_on_string_raises():
    kv = DB()
    kv.set_string("s", "v")
    with pytest.raises(WrongTypeError):
        kv.hset_field("s", "f", "v")
    assert kv.get_string("s") == "v"


def test_hget_on_string_is_none():
    kv = DB()
    kv.set_string("s", "v")
    assert kv.hget_field("s", "f") is None


def test_set_members():
    kv = DB()
    kv.sadd("s", "a")
    kv.sadd("s", "b")
    kv.sadd("s", "a")
    assert sorted(kv.smembers("s")) == ["a", "b"]


def test_smembers_missing_is_none():
    assert DB().smembers("nope") is None


def test_sadd_on_list_raises():
    kv = DB()
    kv.lpush("l", "x")
    with pytest.raises(WrongTypeError):
        kv.sadd("l", "m")


def test_lpush_returns_all_values_in_order():
    kv = DB()
    assert kv.lpush("l", "a") == ["a"]
    assert kv.lpush("l", "b") == ["a", "b"]
    assert kv.lget("l") == ["a", "b"]


def test_lget_missing_or_wrong_type_is_none():
    kv = DB()
    kv.set_string("s", "v")
    assert kv.lget("missing") is None
    assert kv.lget("s") is None


def test_lpush_on_string_raises():
    kv = DB()
    kv.set_string("s", "v")
    with pytest.raises(WrongTypeError):
        kv.lpush("s", "x")


def test_concurrent_lpush_keeps_every_value():
    kv = DB()

    def worker(n):
        for i in range(100):
            kv.lpush("l", f"{n}-{i}")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    values = kv.lget("l")
    assert len(values) == 400
    assert len(set(values)) == 400