import json
from unittest import mock

import pytest
import redis

from stationkit.redis_reliablequeue import ReliableQueue


class FakeRedis:
    def __init__(self, ping_error=None):
        self.ping_error = ping_error
        self.lists = {}

    def ping(self):
        if self.ping_error is not None:
            raise self.ping_error
        return True

    def lpush(self, key, *values):
        items = self.lists.setdefault(key, [])
        for value in values:
            items.insert(0, value)
        return len(items)

    def lrange(self, key, start, stop):
        items = self.lists.get(key, [])
        end = None if stop == -1 else stop + 1
        return items[start:end]

    def lpop(self, key, count=None):
        items = self.lists.get(key)
        if not items:
            return None
        if count is None:
            return items.pop(0)
        popped = items[:count]
        del items[:count]
        return popped


@pytest.fixture
def rq():
    client = FakeRedis()
    with mock.patch.object(redis.Redis, "from_url", return_value=client):
        queue = ReliableQueue()
        queue.connect("redis://localhost:6379")
        yield queue


@pytest.mark.parametrize(
    "call",
    [
        lambda q: q.lpush("jobs", {"a": 1}),
        lambda q: q.lrange("jobs"),
        lambda q: q.lpop("jobs"),
    ],
)
def test_operations_require_connection(call):
    with pytest.raises(ConnectionError, match="Not Connected"):
        call(ReliableQueue())


def test_connect_failure_names_address():
    broken = FakeRedis(ping_error=redis.ConnectionError("refused"))
    with mock.patch.object(redis.Redis, "from_url", return_value=broken):
        with pytest.raises(ConnectionError, match="redis://localhost:6379"):
            ReliableQueue().connect("redis://localhost:6379")


def test_lpush_null_is_rejected(rq):
    with pytest.raises(ValueError, match="null"):
        rq.lpush("jobs", None)


def test_lpush_object_is_stored_as_compact_json(rq):
    assert rq.lpush("jobs", {"a": 1}) == 1
    assert rq.lrange("jobs") == ['{"a":1}']


def test_lpush_list_pushes_each_item(rq):
    items = [{"id": 1}, {"id": 2}, "text", 3, True]
    assert rq.lpush("jobs", items) == len(items)
    stored = [json.loads(value) for value in rq.lrange("jobs")]
    assert sorted(map(json.dumps, stored)) == sorted(map(json.dumps, items))


def test_lpush_returns_growing_length(rq):
    first = rq.lpush("jobs", "one")
    second = rq.lpush("jobs", "two")
    assert second == first + 1


def test_lrange_round_trips_values(rq):
    rq.lpush("jobs", {"name": "ёлка", "n": 2.5})
    [stored] = rq.lrange("jobs", 0, -1)
    assert json.loads(stored) == {"name": "ёлка", "n": 2.5}


def test_lpop_single_returns_string(rq):
    rq.lpush("jobs", ["x", "y"])
    popped = rq.lpop("jobs")
    assert json.loads(popped) in ("x", "y")
    assert len(rq.lrange("jobs")) == 1


def test_lpop_zero_count_is_single_pop(rq):
    rq.lpush("jobs", "only")
    assert json.loads(rq.lpop("jobs", 0)) == "only"


def test_lpop_with_count_returns_list(rq):
    rq.lpush("jobs", [1, 2, 3])
    popped = rq.lpop("jobs", 2)
    assert len(popped) == 2
    assert len(rq.lrange("jobs")) == 1


def test_lpop_missing_key_single_raises(rq):
    with pytest.raises(LookupError):
        rq.lpop("missing")


def test_lpop_missing_key_with_count_is_empty(rq):
    assert rq.lpop("missing", 3) == []


def test_disconnect_drops_client(rq):
    rq.disconnect()
    with pytest.raises(ConnectionError):
        rq.lrange("jobs")