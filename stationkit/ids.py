"""UUID and CUID2 identifier generation."""

from __future__ import annotations

import hashlib
import itertools
import os
import secrets
import socket
import string
import time
import uuid

_ALPHABET = string.digits + string.ascii_lowercase
_counter = itertools.count(secrets.randbelow(476782367))


def _base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def _fingerprint() -> str:
    seed = f"{os.getpid()}{socket.gethostname()}{secrets.token_hex(16)}"
    return _base36(int.from_bytes(hashlib.sha3_512(seed.encode()).digest(), "big"))


_FINGERPRINT = _fingerprint()


def uuid_v4() -> str:
    """A random UUID."""
    return str(uuid.uuid4())


def uuid_v7() -> str:
    """A time-ordered UUID with a millisecond Unix timestamp prefix."""
    millis = time.time_ns() // 1_000_000
    value = (millis & ((1 << 48) - 1)) << 80
    value |= secrets.randbits(80)
    value &= ~(0xF << 76)
    value |= 0x7 << 76
    value &= ~(0x3 << 62)
    value |= 0x2 << 62
    return str(uuid.UUID(int=value))


def cuid2(length: int = 24) -> str:
    """A collision-resistant id of the given length (2 to 32)."""
    if not 2 <= length <= 32:
        raise ValueError(f"length must be between 2 and 32, got {length}")
    first = secrets.choice(string.ascii_lowercase)
    salt = "".join(secrets.choice(_ALPHABET) for _ in range(length))
    material = f"{_base36(time.time_ns())}{salt}{_base36(next(_counter))}{_FINGERPRINT}"
    digest = _base36(int.from_bytes(hashlib.sha3_512(material.encode()).digest(), "big"))
    return first + digest[1:length]