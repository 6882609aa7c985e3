"""Redis publish/subscribe bridge running on a background thread."""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass

import redis

ERROR_CHANNEL = "REDIS_ERROR_CHANNEL"

_QUEUE_SIZE = 1000
_READ_TIMEOUT = 1.0
_IDLE_WAIT = 0.05
_CONNECT_TIMEOUT = 1


@dataclass(frozen=True)
class _Subscribe:
    channel: str


@dataclass(frozen=True)
class _Publish:
    channel: str
    message: str


def _decode_payload(data) -> str:
    if isinstance(data, str):
        return data
    if isinstance(data, (bytes, bytearray)):
        try:
            return bytes(data).decode("utf-8")
        except UnicodeDecodeError:
            return ""
    return ""


def _decode_channel(channel) -> str:
    if isinstance(channel, (bytes, bytearray)):
        return bytes(channel).decode("utf-8", errors="replace")
    return str(channel)


class _Session:
    """One connection: a worker thread fed by a request queue."""

    def __init__(self, client):
        self.requests: queue.Queue = queue.Queue(maxsize=_QUEUE_SIZE)
        self.responses: queue.Queue = queue.Queue(maxsize=_QUEUE_SIZE)
        self.stop = threading.Event()
        self.thread = threading.Thread(target=self._run, args=(client,), daemon=True)
        self.thread.start()

    def _run(self, client) -> None:
        try:
            self._serve(client)
        except redis.RedisError as exc:
            while not self.stop.is_set():
                try:
                    self.responses.put((ERROR_CHANNEL, str(exc)), timeout=_IDLE_WAIT * 10)
                    break
                except queue.Full:
                    continue

    def _serve(self, client) -> None:
        pubsub = client.pubsub(ignore_subscribe_messages=True)
        subscribed = False
        try:
            while True:
                while True:
                    if self.stop.is_set():
                        return
                    try:
                        request = self.requests.get_nowait()
                    except queue.Empty:
                        break
                    if isinstance(request, _Subscribe):
                        pubsub.subscribe(request.channel)
                        subscribed = True
                    else:
                        client.publish(request.channel, request.message)

                if not subscribed:
                    self.stop.wait(_IDLE_WAIT)
                    continue

                try:
                    message = pubsub.get_message(timeout=_READ_TIMEOUT)
                except redis.TimeoutError:
                    continue
                if not message or message.get("type") not in ("message", "pmessage"):
                    continue
                item = (_decode_channel(message.get("channel")), _decode_payload(message.get("data")))
                try:
                    self.responses.put_nowait(item)
                except queue.Full:
                    pass
        finally:
            pubsub.close()

    def send(self, request) -> None:
        if not self.thread.is_alive():
            raise ConnectionError("Connection closed")
        self.requests.put_nowait(request)


class PubSub:
    """Subscribes and publishes to Redis channels, buffering received messages."""

    def __init__(self):
        self._session: _Session | None = None

    def connect(self, addr: str) -> None:
        """Connect to the Redis server at addr, replacing any previous connection."""
        try:
            client = redis.Redis.from_url(addr, socket_connect_timeout=_CONNECT_TIMEOUT)
            client.ping()
        except (redis.RedisError, ValueError) as exc:
            raise ConnectionError(str(exc)) from exc
        self.disconnect()
        self._session = _Session(client)

    def disconnect(self) -> None:
        """Stop the worker and drop any undelivered messages."""
        if self._session is not None:
            self._session.stop.set()
            self._session = None

    def _require(self) -> _Session:
        if self._session is None:
            raise ConnectionError("Not connected")
        return self._session

    def subscribe(self, channel: str) -> None:
        """Queue a subscription; raises queue.Full when the request queue is full."""
        self._require().send(_Subscribe(channel))

    def publish(self, channel: str, message: str) -> None:
        """Queue a message for publishing; raises queue.Full when the request queue is full."""
        self._require().send(_Publish(channel, message))

    def get_messages(self) -> dict[str, list[str]]:
        """Drain received messages, grouped by channel; errors appear under ERROR_CHANNEL."""
        result: dict[str, list[str]] = {}
        if self._session is None:
            return result
        responses = self._session.responses
        while True:
            try:
                channel, text = responses.get_nowait()
            except queue.Empty:
                break
            result.setdefault(channel, []).append(text)
        return result