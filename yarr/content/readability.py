"""Extraction of the main readable content from an HTML page."""

from __future__ import annotations

import re
from typing import IO

from yarr.content import htmlutil
from yarr.content.htmlutil import Node

_TAGS_TO_SCORE = "section,h2,h3,h4,h5,h6,p,td,pre,div"

_DIV_TO_P_ELEMENTS_RE = re.compile(r"<(a|blockquote|dl|div|img|ol|p|pre|table|ul)", re.I)
_SENTENCE_RE = re.compile(r"\.( |\Z)")

_BLACKLIST_CANDIDATES_RE = re.compile(r"popupbody|-ad|g-plus", re.I)
_OK_MAYBE_CANDIDATE_RE = re.compile(r"and|article|body|column|main|shadow", re.I)
_UNLIKELY_CANDIDATES_RE = re.compile(
    r"banner|breadcrumbs|combx|comment|community|cover-wrap|disqus|extra|foot|header|"
    r"legends|menu|modal|related|remark|replies|rss|shoutbox|sidebar|skyscraper|social|"
    r"sponsor|supplemental|ad-break|agegate|pagination|pager|popup|yom-remote",
    re.I,
)
_NEGATIVE_RE = re.compile(
    r"hidden|^hid$|hid$|hid|^hid |banner|combx|comment|com-|contact|foot|footer|footnote|"
    r"masthead|media|meta|modal|outbrain|promo|related|scroll|share|shoutbox|sidebar|"
    r"skyscraper|sponsor|shopping|tags|tool|widget|byline|author|dateline|writtenby|p-author",
    re.I,
)
_POSITIVE_RE = re.compile(
    r"article|body|content|entry|hentry|h-entry|main|page|pagination|post|text|blog|story",
    re.I,
)

_TAG_SCORES = {
    "div": 5.0,
    **dict.fromkeys(("pre", "td", "blockquote", "img"), 3.0),
    **dict.fromkeys(("address", "ol", "ul", "dl", "dd", "dt", "li", "form"), -3.0),
    **dict.fromkeys(("h1", "h2", "h3", "h4", "h5", "h6", "th"), -5.0),
}


class ExtractionError(Exception):
    """Raised when no content could be extracted from a page."""


def _byte_len(value: str) -> int:
    return len(value.encode("utf-8", errors="surrogatepass"))


def extract_content(page: str | bytes | IO) -> str:
    """Return the main content of an HTML page as an HTML fragment."""
    if hasattr(page, "read"):
        page = page.read()
    root = htmlutil.parse_html(page)

    for trash in htmlutil.query(root, "script,style"):
        if trash.parent is not None:
            trash.parent.remove_child(trash)

    _transform_misused_divs_into_paragraphs(root)
    _remove_unlikely_candidates(root)

    scores = _get_candidates(root)
    best = _get_top_candidate(scores)
    if best is None:
        best = next(iter(htmlutil.query(root, "body")), None)
        if best is None:
            raise ExtractionError("failed to extract content")
    return _get_article(best, scores)


def _get_article(best: Node, scores: dict[Node, float]) -> str:
    """Collect the top candidate together with related siblings."""
    threshold = max(10.0, scores.get(best, 0.0) * 0.2)

    siblings = best.parent.children if best.parent is not None else [best]
    index = siblings.index(best)
    nodelist = [best, *siblings[index + 1 :], *reversed(siblings[:index])]

    parts = ["<div>"]
    for node in nodelist:
        is_p = node.data == "p"
        if node is best or scores.get(node, 0.0) >= threshold:
            keep = True
        elif is_p:
            link_density = _get_link_density(node)
            content = htmlutil.text(node)
            length = _byte_len(content)
            keep = (length >= 80 and link_density < 0.25) or (
                length < 80 and link_density == 0 and _SENTENCE_RE.search(content) is not None
            )
        else:
            keep = False
        if keep:
            tag = "p" if is_p else "div"
            parts.append(f"<{tag}>{htmlutil.inner_html(node)}</{tag}>")
    parts.append("</div>")
    return "".join(parts)


def _remove_unlikely_candidates(root: Node) -> None:
    bodies = htmlutil.query(root, "body")
    if not bodies:
        return
    for node in htmlutil.query(bodies[0], "*"):
        marker = htmlutil.attr(node, "class") + htmlutil.attr(node, "id")
        if htmlutil.closest(node, "table,code") is not None:
            continue
        blacklisted = _BLACKLIST_CANDIDATES_RE.search(marker) is not None or (
            _UNLIKELY_CANDIDATES_RE.search(marker) is not None
            and _OK_MAYBE_CANDIDATE_RE.search(marker) is None
        )
        if blacklisted and node.parent is not None:
            node.parent.remove_child(node)


def _get_top_candidate(scores: dict[Node, float]) -> Node | None:
    top = None
    best_score = 0.0
    for node, score in scores.items():
        if score > best_score:
            top, best_score = node, score
    return top


def _get_candidates(root: Node) -> dict[Node, float]:
    """Score the parents and grandparents of content-like elements."""
    scores: dict[Node, float] = {}
    for node in htmlutil.query(root, _TAGS_TO_SCORE):
        content = htmlutil.text(node)
        length = _byte_len(content)
        if length < 25:
            continue

        parent = node.parent
        grandparent = parent.parent if parent is not None else None
        if parent is None:
            continue

        if parent not in scores:
            scores[parent] = _score_node(parent)
        if grandparent is not None and grandparent not in scores:
            scores[grandparent] = _score_node(grandparent)

        content_score = 1.0
        content_score += content.count(",") + 1
        content_score += min(length // 100, 3)

        scores[parent] += content_score
        if grandparent is not None:
            scores[grandparent] += content_score / 2.0

    for node in scores:
        scores[node] *= 1 - _get_link_density(node)
    return scores


def _score_node(node: Node) -> float:
    return _TAG_SCORES.get(node.data, 0.0) + _get_class_weight(node)


def _get_link_density(node: Node) -> float:
    """Share of the node's text that sits inside links."""
    text_length = _byte_len(htmlutil.text(node))
    if text_length == 0:
        return 0.0
    link_length = sum(_byte_len(htmlutil.text(a)) for a in htmlutil.query(node, "a"))
    return link_length / text_length


def _get_class_weight(node: Node) -> float:
    weight = 0
    for value in (htmlutil.attr(node, "class"), htmlutil.attr(node, "id")):
        if not value:
            continue
        if _NEGATIVE_RE.search(value):
            weight -= 25
        if _POSITIVE_RE.search(value):
            weight += 25
    return float(weight)


def _transform_misused_divs_into_paragraphs(root: Node) -> None:
    for node in htmlutil.query(root, "div"):
        if not _DIV_TO_P_ELEMENTS_RE.search(htmlutil.inner_html(node)):
            node.data = "p"