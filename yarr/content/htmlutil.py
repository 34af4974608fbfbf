"""HTML document tree, simple element selectors and text helpers."""

from __future__ import annotations

import enum
import re
from collections import deque
from dataclasses import dataclass, field
from html import unescape
from html.parser import HTMLParser
from typing import Callable, Iterable, Protocol
from urllib.parse import urljoin, urlsplit
from xml.dom import Node as _DomNode

import html5lib


class NodeType(enum.Enum):
    """Kind of a node in a parsed HTML tree."""

    DOCUMENT = "document"
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"
    DOCTYPE = "doctype"


@dataclass(eq=False)
class Node:
    """A node of a parsed HTML document; compared by identity."""

    type: NodeType
    data: str = ""
    attrs: list[tuple[str, str]] = field(default_factory=list)
    parent: Node | None = field(default=None, repr=False)
    children: list[Node] = field(default_factory=list, repr=False)

    def append_child(self, child: Node) -> None:
        """Attach a parentless node as the last child."""
        if child.parent is not None:
            raise ValueError("node already has a parent")
        child.parent = self
        self.children.append(child)

    def remove_child(self, child: Node) -> None:
        """Detach one of this node's children."""
        if child.parent is not self:
            raise ValueError("node is not a child of this node")
        self.children.remove(child)
        child.parent = None


class _Matcher(Protocol):
    def match(self, node: Node) -> bool: ...


@dataclass(frozen=True)
class ElementMatch:
    """Matches elements by tag name, or any element for ``*``."""

    name: str

    def match(self, node: Node) -> bool:
        return node.type is NodeType.ELEMENT and (node.data == self.name or self.name == "*")


@dataclass
class MultiMatch:
    """Matches a node when any of its matchers does."""

    matchers: list[_Matcher] = field(default_factory=list)

    def add(self, matcher: _Matcher) -> None:
        self.matchers.append(matcher)

    def match(self, node: Node) -> bool:
        return any(matcher.match(node) for matcher in self.matchers)


_NODE_NAME_RE = re.compile(r"\w+|\*")
_WHITESPACE_RE = re.compile(r"[ \t\n\f\r]+")

_VOID_ELEMENTS = frozenset(
    {
        "area", "base", "br", "col", "embed", "hr", "img", "input",
        "keygen", "link", "meta", "param", "source", "track", "wbr",
    }
)
_RAW_TEXT_ELEMENTS = frozenset(
    {"iframe", "noembed", "noframes", "noscript", "plaintext", "script", "style", "xmp"}
)
_ESCAPES = str.maketrans(
    {"&": "&amp;", "'": "&#39;", "<": "&lt;", ">": "&gt;", '"': "&#34;", "\r": "&#13;"}
)


def _escape(value: str) -> str:
    return value.translate(_ESCAPES)


def parse_html(content: str | bytes) -> Node:
    """Parse an HTML document into a tree rooted at a document node."""
    dom = html5lib.parse(content, treebuilder="dom")
    root = Node(NodeType.DOCUMENT)
    pending = [(dom, root)]
    while pending:
        source, target = pending.pop()
        for child in source.childNodes:
            kind = child.nodeType
            if kind in (_DomNode.TEXT_NODE, _DomNode.CDATA_SECTION_NODE):
                last = target.children[-1] if target.children else None
                if last is not None and last.type is NodeType.TEXT:
                    last.data += child.data
                else:
                    target.append_child(Node(NodeType.TEXT, child.data))
            elif kind == _DomNode.ELEMENT_NODE:
                node = Node(NodeType.ELEMENT, child.tagName, list(child.attributes.items()))
                target.append_child(node)
                pending.append((child, node))
            elif kind == _DomNode.COMMENT_NODE:
                target.append_child(Node(NodeType.COMMENT, child.data))
            elif kind == _DomNode.DOCUMENT_TYPE_NODE:
                ids = (("public", child.publicId or ""), ("system", child.systemId or ""))
                attrs = [(key, value) for key, value in ids if value]
                target.append_child(Node(NodeType.DOCTYPE, child.name or "", attrs))
    return root


def find_nodes(node: Node, match: Callable[[Node], bool]) -> list[Node]:
    """Return all nodes of the subtree, breadth first, that satisfy ``match``."""
    found = []
    queue = deque([node])
    while queue:
        current = queue.popleft()
        if match(current):
            found.append(current)
        queue.extend(current.children)
    return found


def new_matcher(sel: str) -> MultiMatch:
    """Build a matcher from a comma separated list of tag names."""
    multi = MultiMatch()
    for part in sel.split(","):
        part = part.strip()
        if not _NODE_NAME_RE.search(part):
            raise ValueError(f"unsupported selector: {part}")
        multi.add(ElementMatch(part))
    return multi


def query(node: Node, sel: str) -> list[Node]:
    """Return the elements under ``node`` matching the selector."""
    return find_nodes(node, new_matcher(sel).match)


def closest(node: Node, sel: str) -> Node | None:
    """Return the nearest ancestor-or-self matching the selector."""
    matcher = new_matcher(sel)
    current: Node | None = node
    while current is not None:
        if matcher.match(current):
            return current
        current = current.parent
    return None


def _quoted(value: str) -> str:
    quote = "'" if '"' in value else '"'
    return f"{quote}{value}{quote}"


def _render(node: Node, out: list[str]) -> None:
    if node.type is NodeType.TEXT:
        out.append(_escape(node.data))
        return
    if node.type is NodeType.DOCUMENT:
        for child in node.children:
            _render(child, out)
        return
    if node.type is NodeType.COMMENT:
        out.append(f"<!--{node.data}-->")
        return
    if node.type is NodeType.DOCTYPE:
        ids = dict(node.attrs)
        public, system = ids.get("public", ""), ids.get("system", "")
        out.append(f"<!DOCTYPE {node.data}")
        if public:
            out.append(f" PUBLIC {_quoted(public)}")
            if system:
                out.append(f" {_quoted(system)}")
        elif system:
            out.append(f" SYSTEM {_quoted(system)}")
        out.append(">")
        return

    out.append(f"<{node.data}")
    for key, value in node.attrs:
        out.append(f' {key}="{_escape(value)}"')
    if node.data in _VOID_ELEMENTS:
        out.append("/>")
        return
    out.append(">")

    first = node.children[0] if node.children else None
    if (
        node.data in ("pre", "listing", "textarea")
        and first is not None
        and first.type is NodeType.TEXT
        and first.data.startswith("\n")
    ):
        out.append("\n")

    raw = node.data in _RAW_TEXT_ELEMENTS
    for child in node.children:
        if raw and child.type is NodeType.TEXT:
            out.append(child.data)
        else:
            _render(child, out)
    out.append(f"</{node.data}>")


def render_html(node: Node) -> str:
    """Serialise a node and its subtree as HTML."""
    out: list[str] = []
    _render(node, out)
    return "".join(out)


def inner_html(node: Node) -> str:
    """Serialise the children of a node as HTML."""
    out: list[str] = []
    for child in node.children:
        _render(child, out)
    return "".join(out)


def attr(node: Node, key: str) -> str:
    """Return the value of an attribute, matched case-insensitively, or ''."""
    wanted = key.casefold()
    return next((value for name, value in node.attrs if name.casefold() == wanted), "")


def text(node: Node) -> str:
    """Join the trimmed text nodes of the subtree with single spaces."""
    text_nodes = find_nodes(node, lambda n: n.type is NodeType.TEXT)
    return " ".join(n.data.strip() for n in text_nodes)


class _TextCollector(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.parts: list[str] = []

    def handle_data(self, data: str) -> None:
        self.parts.append(data)


def extract_text(content: str) -> str:
    """Strip tags from an HTML fragment and collapse whitespace."""
    collector = _TextCollector()
    collector.feed(content)
    collector.close()
    joined = "".join(unescape(part) for part in collector.parts).strip()
    return _WHITESPACE_RE.sub(" ", joined)


def any_match(els: Iterable[str], el: str, match: Callable[[str, str], bool]) -> bool:
    """Tell whether ``match(x, el)`` holds for any ``x`` in ``els``."""
    return any(match(x, el) for x in els)


def absolute_url(href: str, base: str) -> str:
    """Resolve ``href`` against ``base``; return '' if either is malformed."""
    try:
        return urljoin(base, href)
    except ValueError:
        return ""


def url_domain(val: str) -> str:
    """Return the host (with port) of a URL, or the input if it is malformed."""
    try:
        return urlsplit(val).netloc.rpartition("@")[2]
    except ValueError:
        return val


def is_a_possible_link(val: str) -> bool:
    """Tell whether a string looks like an http(s) link."""
    return val.startswith(("http://", "https://"))