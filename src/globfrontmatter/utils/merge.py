"""Recursive merging of metadata records."""

from __future__ import annotations

from typing import Any, Dict

BLOCKED_KEYS = frozenset({"__proto__", "constructor"})


def _is_record(value: Any) -> bool:
    return isinstance(value, dict)


def strip_blocked_keys(record: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``record`` without ``BLOCKED_KEYS`` at any depth."""
    return {
        key: strip_blocked_keys(value) if _is_record(value) else value
        for key, value in record.items()
        if key not in BLOCKED_KEYS
    }


def deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Return a new record with ``overlay`` merged on top of ``base``.

    Nested records are merged recursively. Every other overlay value, lists
    and ``None`` included, replaces the base value wholesale. Keys listed in
    ``BLOCKED_KEYS`` are dropped from both sides at every depth. Neither
    input is modified.
    """
    result = strip_blocked_keys(base)
    for key, value in overlay.items():
        if key in BLOCKED_KEYS:
            continue
        if _is_record(value):
            current = result.get(key)
            result[key] = deep_merge(current if _is_record(current) else {}, value)
        else:
            result[key] = value
    return result
