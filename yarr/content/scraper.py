"""Discovery of feed links and icons in HTML pages."""

from yarr.content import htmlutil
from yarr.content.htmlutil import Node, NodeType

_FEED_LINK_TYPES = ("application/atom+xml", "application/rss+xml", "application/json")
_FEED_HREFS = ("feed", "feed.xml", "rss.xml", "atom.xml")
_FEED_TEXTS = ("rss", "feed")


def _is_element(node: Node, name: str) -> bool:
    return node.type is NodeType.ELEMENT and node.data == name


def _is_feed_link(node: Node) -> bool:
    return _is_element(node, "link") and htmlutil.attr(node, "type") in _FEED_LINK_TYPES


def _is_feed_hyperlink(node: Node) -> bool:
    if not _is_element(node, "a"):
        return False
    href = htmlutil.attr(node, "href").strip("/")
    if href.endswith(_FEED_HREFS):
        return True
    content = htmlutil.text(node).casefold()
    return any(content == feed_text for feed_text in _FEED_TEXTS)


def find_feeds(body: str, base: str) -> dict[str, str]:
    """Map feed URLs found in a page to their titles (or '')."""
    candidates: dict[str, str] = {}
    doc = htmlutil.parse_html(body)

    for node in htmlutil.find_nodes(doc, _is_feed_link):
        link = htmlutil.absolute_url(htmlutil.attr(node, "href"), base)
        if link:
            candidates[link] = htmlutil.attr(node, "title")

    if not candidates:
        for node in htmlutil.find_nodes(doc, _is_feed_hyperlink):
            link = htmlutil.absolute_url(htmlutil.attr(node, "href"), base)
            if link:
                candidates[link] = ""

    return candidates


def find_icons(body: str, base: str) -> list[str]:
    """Return the URLs of icons declared with ``<link rel="icon">``."""
    doc = htmlutil.parse_html(body)
    icons = []
    for node in htmlutil.find_nodes(doc, lambda n: _is_element(n, "link")):
        for rel in htmlutil.attr(node, "rel").split(" "):
            if rel.casefold() == "icon":
                icons.append(htmlutil.absolute_url(htmlutil.attr(node, "href"), base))
    return icons