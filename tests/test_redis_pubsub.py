import queue
import time
from unittest import mock

import pytest
import redis

from stationkit.redis_pubsub import ERROR_CHANNEL, PubSub


class FakePubSub:
    def __init__(self, client):
        self.client = client
        self.channels = []
        self.closed = False

    def subscribe(self, *channels):
        self.channels.extend(channels)

    def get_message(self, timeout=0.0):
        time.sleep(0.01)
        if self.client.fail is not None:
            raise redis.ConnectionError(self.client.fail)
        try:
            return self.client.incoming.get_nowait()
        except queue.Empty:
            return None

    def close(self):
        self.closed = True


class FakeRedis:
    def __init__(self, ping_error=None):
        self.ping_error = ping_error
        self.fail = None
        self.incoming = queue.Queue()
        self.published = []
        self.ps = None

    def ping(self):
        if self.ping_error is not None:
            raise self.ping_error
        return True

    def pubsub(self, **kwargs):
        self.ps = FakePubSub(self)
        return self.ps

    def publish(self, channel, message):
        self.published.append((channel, message))
        return 1


def _wait_for(predicate, timeout=3.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def _collect(bus, timeout=3.0):
    collected = {}
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline and not collected:
        collected = bus.get_messages()
        time.sleep(0.01)
    return collected


def _message(channel, data):
    return {"type": "message", "pattern": None, "channel": channel, "data": data}


@pytest.fixture
def fake():
    client = FakeRedis()
    with mock.patch.object(redis.Redis, "from_url", return_value=client):
        yield client


def test_get_messages_empty_when_not_connected():
    assert PubSub().get_messages() == {}


def test_subscribe_without_connection_raises():
    with pytest.raises(ConnectionError, match="Not connected"):
        PubSub().subscribe("alerts")


def test_publish_without_connection_raises():
    with pytest.raises(ConnectionError, match="Not connected"):
        PubSub().publish("alerts", "hello")


def test_connect_failure_raises_and_stays_disconnected():
    broken = FakeRedis(ping_error=redis.ConnectionError("refused"))
    bus = PubSub()
    with mock.patch.object(redis.Redis, "from_url", return_value=broken):
        with pytest.raises(ConnectionError, match="refused"):
            bus.connect("redis://localhost:6379")
    with pytest.raises(ConnectionError):
        bus.subscribe("alerts")


def test_subscribed_messages_are_delivered(fake):
    bus = PubSub()
    bus.connect("redis://localhost:6379")
    bus.subscribe("alerts")
    assert _wait_for(lambda: fake.ps is not None and fake.ps.channels == ["alerts"])
    fake.incoming.put(_message(b"alerts", b"hello"))
    assert _collect(bus) == {"alerts": ["hello"]}
    bus.disconnect()


def test_messages_are_grouped_in_order(fake):
    bus = PubSub()
    bus.connect("redis://localhost:6379")
    bus.subscribe("alerts")
    assert _wait_for(lambda: fake.ps is not None and fake.ps.channels == ["alerts"])
    fake.incoming.put(_message(b"alerts", b"one"))
    fake.incoming.put(_message(b"alerts", b"two"))
    fake.incoming.put(_message(b"news", b"three"))
    assert _wait_for(lambda: fake.incoming.empty())
    time.sleep(0.05)
    messages = bus.get_messages()
    assert messages == {"alerts": ["one", "two"], "news": ["three"]}
    bus.disconnect()


def test_invalid_utf8_payload_becomes_empty(fake):
    bus = PubSub()
    bus.connect("redis://localhost:6379")
    bus.subscribe("alerts")
    assert _wait_for(lambda: fake.ps is not None and fake.ps.channels == ["alerts"])
    fake.incoming.put(_message(b"alerts", b"\xff\xfe"))
    assert _collect(bus) == {"alerts": [""]}
    bus.disconnect()


def test_publish_is_forwarded(fake):
    bus = PubSub()
    bus.connect("redis://localhost:6379")
    bus.publish("news", "flash")
    assert _wait_for(lambda: fake.published == [("news", "flash")])
    assert bus.get_messages() == {}
    bus.disconnect()


def test_worker_error_is_reported_on_error_channel(fake):
    bus = PubSub()
    bus.connect("redis://localhost:6379")
    bus.subscribe("alerts")
    assert _wait_for(lambda: fake.ps is not None and fake.ps.channels == ["alerts"])
    fake.fail = "boom"
    assert _collect(bus) == {ERROR_CHANNEL: ["boom"]}
    assert _wait_for(lambda: fake.ps.closed)


def test_disconnect_stops_worker(fake):
    bus = PubSub()
    bus.connect("redis://localhost:6379")
    bus.subscribe("alerts")
    assert _wait_for(lambda: fake.ps is not None and fake.ps.channels == ["alerts"])
    bus.disconnect()
    assert _wait_for(lambda: fake.ps.closed)
    with pytest.raises(ConnectionError):
        bus.publish("alerts", "late")
    assert bus.get_messages() == {}