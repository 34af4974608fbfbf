"""Feed and item models shared by all feed parsers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from urllib.parse import urljoin, urlsplit

from yarr.content.htmlutil import extract_text

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


@dataclass
class Item:
    """A single entry of a feed."""

    guid: str = ""
    date: datetime = ZERO_TIME
    url: str = ""
    title: str = ""
    content: str = ""
    image_url: str = ""
    audio_url: str = ""


@dataclass
class Feed:
    """A parsed feed with its items."""

    title: str = ""
    site_url: str = ""
    items: list[Item] = field(default_factory=list)

    def cleanup(self) -> None:
        """Trim fields, strip markup from titles and drop media already in the content."""
        self.title = self.title.strip()
        self.site_url = self.site_url.strip()
        for item in self.items:
            original_content = item.content
            item.guid = item.guid.strip()
            item.url = item.url.strip()
            item.title = extract_text(item.title).strip()
            item.content = original_content.strip()
            if item.image_url and item.image_url in original_content:
                item.image_url = ""
            if item.audio_url and item.audio_url in original_content:
                item.audio_url = ""

    def set_missing_dates_to(self, newdate: datetime) -> None:
        """Give every undated item the given date."""
        for item in self.items:
            if item.date == ZERO_TIME:
                item.date = newdate

    def translate_urls(self, base: str) -> None:
        """Resolve the site URL against ``base``; raise ValueError on malformed URLs."""
        try:
            urlsplit(base)
        except ValueError as exc:
            raise ValueError(f"failed to parse base url: {base!r}") from exc
        try:
            urlsplit(self.site_url)
        except ValueError as exc:
            raise ValueError(f"failed to parse feed url: {self.site_url!r}") from exc
        site_url = self.site_url
        self.site_url = urljoin(base, site_url)
        for item in self.items:
            try:
                urlsplit(item.url)
            except ValueError as exc:
                raise ValueError(f"failed to parse item url: {item.url!r}") from exc