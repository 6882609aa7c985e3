"""Conversion between TOML and JSON."""

from __future__ import annotations

import datetime as _dt
import json
import tomllib
from typing import Any

import tomli_w


class TomlError(Exception):
    """Raised when TOML or JSON cannot be converted."""


def _to_json_value(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _to_json_value(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [_to_json_value(item) for item in value]
    if isinstance(value, (_dt.datetime, _dt.date, _dt.time)):
        return value.isoformat()
    return value


def toml_file_to_json(path) -> str:
    """Read a TOML file and return it as a JSON string."""
    try:
        with open(path, "rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise TomlError(str(exc)) from exc
    return json.dumps(_to_json_value(data), separators=(",", ":"), ensure_ascii=False)


def _check(value: Any) -> Any:
    if value is None:
        raise TomlError("unsupported None value")
    if isinstance(value, dict):
        return {key: _check(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [_check(item) for item in value]
    return value


def toml_encode(value: str) -> str:
    """Turn a JSON object string into TOML text."""
    try:
        data = json.loads(value)
    except json.JSONDecodeError as exc:
        raise TomlError(str(exc)) from exc
    if not isinstance(data, dict):
        raise TomlError("top-level value must be a table")
    try:
        return tomli_w.dumps(_check(data))
    except (TypeError, ValueError) as exc:
        raise TomlError(str(exc)) from exc