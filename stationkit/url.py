"""Form URL encoding and decoding."""

from urllib.parse import unquote_to_bytes

_UNRESERVED = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789*-._"
)


def encode(text: str) -> str:
    """Encode text as application/x-www-form-urlencoded."""
    parts = []
    for byte in text.encode("utf-8"):
        if byte in _UNRESERVED:
            parts.append(chr(byte))
        elif byte == 0x20:
            parts.append("+")
        else:
            parts.append(f"%{byte:02X}")
    return "".join(parts)


def decode(text: str) -> str:
    """Decode form-encoded text; invalid UTF-8 becomes U+FFFD."""
    raw = unquote_to_bytes(text.replace("+", " "))
    return raw.decode("utf-8", errors="replace")