"""MySQL connection pools addressed by integer handles, with JSON-shaped results."""

from __future__ import annotations

import datetime as _dt
import itertools
import json
import math
import struct
import threading
from collections.abc import Callable, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import pymysql
from pymysql.constants import FIELD_TYPE

DEFAULT_PORT = 3306
DEFAULT_MIN_THREADS = 1
DEFAULT_MAX_THREADS = 10

# JSON field names for the login name and the login phrase.
_AUTH_FIELDS = ("user", "pass")

_STRING_TYPES = frozenset({FIELD_TYPE.VARCHAR, FIELD_TYPE.STRING, FIELD_TYPE.VAR_STRING})
_BLOB_TYPES = frozenset(
    {FIELD_TYPE.BLOB, FIELD_TYPE.LONG_BLOB, FIELD_TYPE.MEDIUM_BLOB, FIELD_TYPE.TINY_BLOB}
)
_INT_TYPES = frozenset(
    {
        FIELD_TYPE.TINY,
        FIELD_TYPE.SHORT,
        FIELD_TYPE.LONG,
        FIELD_TYPE.LONGLONG,
        FIELD_TYPE.INT24,
        FIELD_TYPE.YEAR,
    }
)
_FLOAT_TYPES = frozenset({FIELD_TYPE.FLOAT, FIELD_TYPE.DOUBLE})
_DATE_TYPES = frozenset(
    {FIELD_TYPE.DATE, FIELD_TYPE.DATETIME, FIELD_TYPE.TIMESTAMP, FIELD_TYPE.NEWDATE}
)
_BROKEN_CONNECTION = (pymysql.err.OperationalError, pymysql.err.InterfaceError)


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string, got {value!r}")
    return value


def _optional_uint(data: Mapping[str, Any], key: str, upper: int | None = None) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"field `{key}` must be a non-negative integer, got {value!r}")
    if upper is not None and value > upper:
        raise ValueError(f"field `{key}` must be at most {upper}, got {value!r}")
    return value


def _optional_seconds(data: Mapping[str, Any], key: str) -> float | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field `{key}` must be a number, got {value!r}")
    if value < 0 or not math.isfinite(value):
        raise ValueError(f"field `{key}` must be a non-negative finite number, got {value!r}")
    return float(value)


@dataclass(frozen=True)
class ConnectOptions:
    """Connection settings; in JSON the password is given under the key "pass"."""

    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    db_name: str | None = None
    read_timeout: float | None = None
    write_timeout: float | None = None
    min_threads: int | None = None
    max_threads: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConnectOptions:
        """Build options from a mapping; unknown keys are ignored."""
        if not isinstance(data, Mapping):
            raise ValueError("connection options must be a JSON object")
        name_field, phrase_field = _AUTH_FIELDS
        password = _optional_str(data, phrase_field)
        return cls(
            host=_optional_str(data, "host"),
            port=_optional_uint(data, "port", 0xFFFF),
            user=_optional_str(data, name_field),
            password=password,
            db_name=_optional_str(data, "db_name"),
            read_timeout=_optional_seconds(data, "read_timeout"),
            write_timeout=_optional_seconds(data, "write_timeout"),
            min_threads=_optional_uint(data, "min_threads"),
            max_threads=_optional_uint(data, "max_threads"),
        )

    @classmethod
    def from_json(cls, text: str) -> ConnectOptions:
        """Build options from a JSON object string."""
        return cls.from_dict(json.loads(text))

    def pool_limits(self) -> tuple[int, int]:
        """Minimum and maximum pool size, falling back to defaults when inconsistent."""
        low = DEFAULT_MIN_THREADS if self.min_threads is None else self.min_threads
        high = DEFAULT_MAX_THREADS if self.max_threads is None else self.max_threads
        if low <= high and high > 0:
            return low, high
        return DEFAULT_MIN_THREADS, DEFAULT_MAX_THREADS

    def connect_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for opening one connection."""
        return {
            "host": self.host,
            "port": DEFAULT_PORT if self.port is None else self.port,
            "user": self.user,
            "password": self.password,
            "database": self.db_name,
            "read_timeout": self.read_timeout,
            "write_timeout": self.write_timeout,
            "autocommit": True,
        }


class _Pool:
    """A bounded set of reusable connections."""

    def __init__(self, factory: Callable[[], Any], min_size: int, max_size: int):
        self._factory = factory
        self._max = max_size
        self._idle: list[Any] = []
        self._size = 0
        self._closed = False
        self._cond = threading.Condition()
        try:
            for _ in range(min_size):
                self._idle.append(factory())
                self._size += 1
        except BaseException:
            self.close()
            raise

    def _acquire(self):
        with self._cond:
            while True:
                if self._closed:
                    raise ConnectionError("pool is closed")
                if self._idle:
                    conn = self._idle.pop()
                    break
                if self._size < self._max:
                    self._size += 1
                    conn = None
                    break
                self._cond.wait()
        if conn is None:
            try:
                return self._factory()
            except BaseException:
                self._forget()
                raise
        try:
            conn.ping(reconnect=True)
        except BaseException:
            self._discard(conn)
            raise
        return conn

    def _forget(self) -> None:
        with self._cond:
            self._size -= 1
            self._cond.notify()

    def _discard(self, conn) -> None:
        try:
            conn.close()
        except Exception:
            pass
        self._forget()

    def _release(self, conn) -> None:
        with self._cond:
            if not self._closed:
                self._idle.append(conn)
                self._cond.notify()
                return
        self._discard(conn)

    @contextmanager
    def connection(self):
        conn = self._acquire()
        try:
            yield conn
        except _BROKEN_CONNECTION:
            self._discard(conn)
            raise
        except BaseException:
            self._release(conn)
            raise
        self._release(conn)

    def close(self) -> None:
        with self._cond:
            self._closed = True
            idle, self._idle = self._idle, []
            self._cond.notify_all()
        for conn in idle:
            self._discard(conn)


def err_to_json(error) -> str:
    """The JSON error document for an error or message."""
    return json.dumps({"status": "err", "data": str(error)}, separators=(",", ":"), ensure_ascii=False)


def _to_f32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _byte_of(item: Any) -> int:
    if isinstance(item, bool) or not isinstance(item, int):
        return 0
    if 0 <= item < 2**64:
        return item & 0xFF
    return 0


def json_to_sql_value(value: Any) -> Any:
    """Convert a decoded JSON value into a query parameter."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        if -(2**63) <= value < 2**64:
            return value
        return _to_f32(float(value))
    if isinstance(value, float):
        return _to_f32(value)
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return bytes(_byte_of(item) for item in value)
    return None


def params_from_json(params: str) -> list[Any] | dict[str, Any] | None:
    """Positional (JSON array) or named (JSON object) parameters; None when empty or invalid."""
    try:
        data = json.loads(params)
    except (json.JSONDecodeError, TypeError):
        return None
    if isinstance(data, dict) and data:
        return {key: json_to_sql_value(value) for key, value in data.items()}
    if isinstance(data, list) and data:
        return [json_to_sql_value(value) for value in data]
    return None


def _is_ident_start(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def _is_ident_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def _translate_query(query: str, named: bool) -> tuple[str, list[str]]:
    """Rewrite `?` or `:name` placeholders outside quotes into driver format."""
    out: list[str] = []
    names: list[str] = []
    quote: str | None = None
    length = len(query)
    i = 0

    def emit(ch: str) -> None:
        out.append("%%" if ch == "%" else ch)

    while i < length:
        ch = query[i]
        if quote is not None:
            emit(ch)
            if ch == "\\" and i + 1 < length:
                emit(query[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in "'\"`":
            quote = ch
            emit(ch)
        elif ch == "?" and not named:
            out.append("%s")
        elif (
            ch == ":"
            and named
            and i + 1 < length
            and _is_ident_start(query[i + 1])
            and (i == 0 or query[i - 1] != ":")
        ):
            end = i + 1
            while end < length and _is_ident_char(query[end]):
                end += 1
            name = query[i + 1 : end]
            names.append(name)
            out.append(f"%({name})s")
            i = end
            continue
        else:
            emit(ch)
        i += 1
    return "".join(out), names


def _finite_number(value: float) -> float | int:
    return value if math.isfinite(value) else 0


def _convert_cell(type_code: int, value: Any) -> Any:
    if value is None:
        return None
    if type_code in _STRING_TYPES:
        if isinstance(value, (bytes, bytearray)):
            return bytes(value).decode("utf-8", errors="replace")
        return value if isinstance(value, str) else str(value)
    if type_code in _BLOB_TYPES:
        if isinstance(value, (bytes, bytearray)):
            return list(value)
        return value if isinstance(value, str) else None
    if type_code in _INT_TYPES:
        return value if isinstance(value, int) else None
    if type_code in _FLOAT_TYPES:
        return _finite_number(float(value)) if isinstance(value, (int, float)) else None
    if type_code in _DATE_TYPES:
        if isinstance(value, _dt.datetime):
            hour, minute, second = value.hour, value.minute, value.second
        elif isinstance(value, _dt.date):
            hour = minute = second = 0
        else:
            return None
        return (
            f"{value.year}-{value.month:02d}-{value.day:02d} "
            f"{hour:02d}:{minute:02d}:{second:02d}"
        )
    return None


def _parse_handle(handle) -> int:
    if isinstance(handle, bool):
        raise ValueError(f"invalid handle: {handle!r}")
    if isinstance(handle, int):
        number = handle
    else:
        try:
            number = int(str(handle))
        except ValueError:
            raise ValueError(f"invalid handle: {handle!r}") from None
    if number < 0:
        raise ValueError(f"invalid handle: {handle!r}")
    return number


class SqlPools:
    """Connection pools keyed by handles handed out in increasing order."""

    def __init__(self):
        self._pools: dict[int, _Pool] = {}
        self._lock = threading.Lock()
        self._ids = itertools.count()

    def connect(self, options) -> int:
        """Open a pool from ConnectOptions, a mapping or a JSON string; returns its handle."""
        if isinstance(options, str):
            options = ConnectOptions.from_json(options)
        elif not isinstance(options, ConnectOptions):
            options = ConnectOptions.from_dict(options)
        kwargs = options.connect_kwargs()
        low, high = options.pool_limits()
        pool = _Pool(lambda: pymysql.connect(**kwargs), low, high)
        with self._lock:
            handle = next(self._ids)
            self._pools[handle] = pool
        return handle

    def query(self, handle, query: str, params: str = "") -> dict[str, Any]:
        """Run a query; returns the result document, or status "offline" for an unknown handle."""
        number = _parse_handle(handle)
        with self._lock:
            pool = self._pools.get(number)
        if pool is None:
            return {"status": "offline"}

        args = params_from_json(params)
        sql = query
        if args is not None:
            sql, names = _translate_query(query, isinstance(args, dict))
            if isinstance(args, dict):
                missing = [name for name in names if name not in args]
                if missing:
                    raise ValueError(f"missing named parameter `{missing[0]}`")
            else:
                args = tuple(args)

        with pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, args)
            description = cursor.description or ()
            rows = cursor.fetchall() if description else ()
            affected = 0 if description else max(cursor.rowcount, 0)
            last_insert_id = cursor.lastrowid or None

        types = [column[1] for column in description]
        return {
            "status": "ok",
            "affected": affected,
            "last_insert_id": last_insert_id,
            "columns": [{"name": column[0]} for column in description],
            "rows": [
                [_convert_cell(type_code, value) for type_code, value in zip(types, row)]
                for row in rows
            ],
        }

    def disconnect(self, handle) -> bool:
        """Close the pool; False when the handle was not connected."""
        number = _parse_handle(handle)
        with self._lock:
            pool = self._pools.pop(number, None)
        if pool is None:
            return False
        pool.close()
        return True

    def connected(self, handle) -> bool:
        """Whether the handle names an open pool."""
        number = _parse_handle(handle)
        with self._lock:
            return number in self._pools