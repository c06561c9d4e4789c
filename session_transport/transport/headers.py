"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Session Transport, a product of Garudex Labs

Header helpers shared by the adapter and the response decoder.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional, TypeVar

V = TypeVar("V")


def lookup_header(headers: Optional[Mapping[str, object]], name: str) -> Optional[str]:
    """Return the value of header ``name``, matching the key case-insensitively.

    Repeated headers given as a list or tuple yield their first element.
    Returns ``None`` when no key matches.
    """
    if not headers:
        return None
    lower_name = name.lower()
    for key, value in headers.items():
        if key.lower() == lower_name:
            if isinstance(value, (list, tuple)):
                return value[0] if value else None
            return value  # type: ignore[return-value]
    return None


def lowercase_keys(headers: Optional[Mapping[str, V]]) -> Dict[str, V]:
    """Return a new mapping with every key lowercased and values untouched.

    Keys that differ only by case collapse into one entry; the one seen last
    in iteration order wins.
    """
    normalized: Dict[str, V] = {}
    for key, value in (headers or {}).items():
        normalized[key.lower()] = value
    return normalized


def remove_header(headers: Dict[str, str], name: str) -> None:
    """Drop every key matching ``name`` case-insensitively, in place."""
    lower_name = name.lower()
    for key in [k for k in headers if k.lower() == lower_name]:
        del headers[key]
