"""Media RSS extensions shared by RSS and Atom entries."""

from __future__ import annotations

from dataclasses import dataclass, field

from lxml import etree

from yarr.parser.parserutil import plain2html

MRSS = "{http://search.yahoo.com/mrss/}"


@dataclass
class MediaGroup:
    """Thumbnails and descriptions inside a ``media:group``."""

    thumbnails: list[str] = field(default_factory=list)
    descriptions: list[str] = field(default_factory=list)


@dataclass
class Media:
    """Media RSS data attached to an item."""

    groups: list[MediaGroup] = field(default_factory=list)
    content_thumbnails: list[list[str]] = field(default_factory=list)
    thumbnails: list[str] = field(default_factory=list)
    descriptions: list[str] = field(default_factory=list)

    def first_media_thumbnail(self) -> str:
        """Return the first thumbnail URL found, or ''."""
        for thumbs in (*self.content_thumbnails, self.thumbnails, *(g.thumbnails for g in self.groups)):
            if thumbs:
                return thumbs[0]
        return ""

    def first_media_description(self) -> str:
        """Return the first description found, as HTML, or ''."""
        for descriptions in (self.descriptions, *(g.descriptions for g in self.groups)):
            if descriptions:
                return plain2html(descriptions[0])
        return ""


def _chardata(element: etree._Element) -> str:
    return (element.text or "") + "".join(child.tail or "" for child in element)


def _thumbnails(element: etree._Element) -> list[str]:
    return [t.get("url", "") for t in element.findall(MRSS + "thumbnail")]


def _descriptions(element: etree._Element) -> list[str]:
    return [_chardata(d) for d in element.findall(MRSS + "description")]


def media_from_element(element: etree._Element) -> Media:
    """Collect the Media RSS children of an item element."""
    return Media(
        groups=[
            MediaGroup(_thumbnails(g), _descriptions(g)) for g in element.findall(MRSS + "group")
        ],
        content_thumbnails=[_thumbnails(c) for c in element.findall(MRSS + "content")],
        thumbnails=_thumbnails(element),
        descriptions=_descriptions(element),
    )