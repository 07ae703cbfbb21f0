"""Helpers for reading microformats2 property bags.

An entry is the plain dict a micropub endpoint hands over::

    {"type": ["h-entry"],
     "properties": {"name": ["..."], "content": ["..." or {"html": "..."}], ...},
     "files": {"photo": [{"filename": "...", "buffer": b"..."}]}}
"""
from __future__ import annotations
import datetime
from typing import Any
from urllib.parse import urlsplit

from .errors import MalformedEntryError
from .slug import strip_html

MEDIA_KINDS = ("photo", "video", "audio")


def properties(entry: dict) -> dict:
    props = entry.get("properties") if isinstance(entry, dict) else None
    if not isinstance(props, dict):
        raise MalformedEntryError("entry has no 'properties' mapping")
    return props


def values(entry: dict, name: str) -> list:
    found = properties(entry).get(name)
    if found is None:
        return []
    if isinstance(found, (list, tuple)):
        return list(found)
    return [found]


def first(entry: dict, name: str, default: Any = None) -> Any:
    found = values(entry, name)
    return found[0] if found else default


def has_value(entry: dict, name: str) -> bool:
    """True when the property holds at least one non-blank value."""
    for value in values(entry, name):
        if isinstance(value, str):
            if value.strip():
                return True
        elif value is not None:
            return True
    return False


def is_url(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    parts = urlsplit(value.strip())
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def parse_datetime(value: Any) -> datetime.datetime:
    if isinstance(value, datetime.datetime):
        dt = value
    elif isinstance(value, datetime.date):
        dt = datetime.datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.datetime.fromisoformat(text)
        except ValueError as e:
            raise MalformedEntryError(f"unparseable timestamp: {value!r}") from e
    else:
        raise MalformedEntryError(f"unparseable timestamp: {value!r}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc)


def published_at(entry: dict) -> datetime.datetime:
    value = first(entry, "published")
    if value is None:
        raise MalformedEntryError("entry has no 'published' value")
    return parse_datetime(value)


def iso_timestamp(dt: datetime.datetime) -> str:
    """``2015-06-30T14:34:01.000Z``, always UTC with milliseconds."""
    dt = parse_datetime(dt)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def content_text(value: Any) -> str:
    """Plain text of a single content value."""
    if isinstance(value, dict):
        if value.get("html") is not None:
            return strip_html(str(value["html"]))
        return str(value.get("value") or "")
    if value is None:
        return ""
    return str(value)


def entry_text(entry: dict) -> str:
    return "\n".join(t for t in (content_text(v) for v in values(entry, "content")) if t)
