"""JSON Feed 1.0 parser."""

from __future__ import annotations

import json
from typing import IO, Any

from yarr.parser.dates import date_parse
from yarr.parser.models import Feed, Item
from yarr.parser.parserutil import first_non_empty


def _object(value: Any, what: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"json feed: {what} must be an object")
    return value


def _string(obj: dict, key: str) -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"json feed: {key!r} must be a string")
    return value


def parse_json(data: str | bytes | IO) -> Feed:
    """Parse a JSON Feed document; raise ValueError on malformed input."""
    if hasattr(data, "read"):
        data = data.read()
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    try:
        raw, _ = json.JSONDecoder().raw_decode(data.lstrip())
    except json.JSONDecodeError as exc:
        raise ValueError(f"json feed: {exc}") from exc

    source = _object(raw, "feed")
    items = source.get("items") or []
    if not isinstance(items, list):
        raise ValueError("json feed: 'items' must be a list")

    feed = Feed(title=_string(source, "title"), site_url=_string(source, "home_page_url"))
    for entry in items:
        entry = _object(entry, "item")
        feed.items.append(
            Item(
                guid=first_non_empty(_string(entry, "id"), _string(entry, "url")),
                date=date_parse(
                    first_non_empty(_string(entry, "date_published"), _string(entry, "date_modified"))
                ),
                url=_string(entry, "url"),
                title=_string(entry, "title"),
                content=first_non_empty(
                    _string(entry, "content_html"),
                    _string(entry, "content_text"),
                    _string(entry, "summary"),
                ),
            )
        )
    return feed