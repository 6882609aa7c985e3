"""Whitelist-based HTML sanitising."""

from __future__ import annotations

import re
from collections.abc import Iterable

import html5lib

_CONTENT_TAGS = frozenset({"script", "style"})
_LINK_REL = "noopener"
_URL_SCHEMES = frozenset(
    {
        "bitcoin", "ftp", "ftps", "geo", "http", "https", "im", "irc", "ircs",
        "magnet", "mailto", "mms", "mx", "news", "nntp", "openpgp4fpr", "sip",
        "sms", "smsto", "ssh", "tel", "url", "webcal", "wtai", "xmpp", "byond",
    }
)
_VOID = frozenset(
    {
        "area", "base", "basefont", "bgsound", "br", "col", "embed", "frame",
        "hr", "img", "input", "keygen", "link", "meta", "param", "source",
        "track", "wbr",
    }
)
_RAW_TEXT = frozenset({"style", "script", "xmp", "iframe", "noembed", "noframes", "plaintext"})
_SCHEME = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")
_URL_TRIM = "".join(chr(code) for code in range(0x21))


def _local(name: str) -> str:
    return name.rsplit("}", 1)[-1]


def _is_url_attr(element: str, attr: str) -> bool:
    return (
        attr in ("href", "src")
        or (element == "form" and attr == "action")
        or (element == "object" and attr == "data")
        or (element in ("button", "input") and attr == "formaction")
        or (element == "a" and attr == "ping")
        or (element == "video" and attr == "poster")
    )


def _url_allowed(value: str) -> bool:
    match = _SCHEME.match(value.strip(_URL_TRIM))
    if match is None:
        return True
    return match.group(1).lower() in _URL_SCHEMES


def _escape_text(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("\xa0", "&nbsp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def _escape_attr(text: str) -> str:
    return text.replace("&", "&amp;").replace("\xa0", "&nbsp;").replace('"', "&quot;")


def _as_set(values: Iterable[str], name: str) -> frozenset[str]:
    if isinstance(values, str):
        raise TypeError(f"{name} must be an iterable of strings, not a string")
    result = frozenset(values)
    if not all(isinstance(value, str) for value in result):
        raise TypeError(f"{name} must contain only strings")
    return result


class _Cleaner:
    def __init__(self, attributes: frozenset[str], tags: frozenset[str]):
        self.attributes = attributes
        self.tags = tags

    def children(self, node, raw: bool, out: list[str]) -> None:
        if node.text:
            out.append(node.text if raw else _escape_text(node.text))
        for child in node:
            self.element(child, raw, out)
            if child.tail:
                out.append(child.tail if raw else _escape_text(child.tail))

    def element(self, node, raw: bool, out: list[str]) -> None:
        if not isinstance(node.tag, str):
            return
        name = _local(node.tag)
        if name in _CONTENT_TAGS:
            return
        if name not in self.tags:
            self.children(node, raw, out)
            return
        attrs = []
        for key, value in node.attrib.items():
            attr = _local(key)
            if attr not in self.attributes:
                continue
            if _is_url_attr(name, attr) and not _url_allowed(value):
                continue
            attrs.append((attr, value))
        if name == "a":
            attrs.append(("rel", _LINK_REL))
        rendered = "".join(f' {attr}="{_escape_attr(value)}"' for attr, value in attrs)
        out.append(f"<{name}{rendered}>")
        if name in _VOID:
            return
        self.children(node, name in _RAW_TEXT, out)
        out.append(f"</{name}>")


def sanitize_html(text: str, attribute_whitelist: Iterable[str], tag_whitelist: Iterable[str]) -> str:
    """Keep only whitelisted tags and attributes; drop script and style with their content."""
    attributes = _as_set(attribute_whitelist, "attribute_whitelist")
    tags = _as_set(tag_whitelist, "tag_whitelist")
    if "rel" in attributes:
        raise ValueError("'rel' cannot be whitelisted while link rel is enforced")
    clashing = tags & _CONTENT_TAGS
    if clashing:
        raise ValueError(f"tags {sorted(clashing)} are removed with their content and cannot be whitelisted")
    fragment = html5lib.parseFragment(text, treebuilder="etree", namespaceHTMLElements=False)
    out: list[str] = []
    _Cleaner(attributes, tags).children(fragment, False, out)
    return "".join(out)