"""Helpers shared by the feed parsers: text cleanup and XML loading."""

from __future__ import annotations

import codecs
import re
from typing import IO

from lxml import etree

_LINK_RE = re.compile(r"(https?://\S+)")
_ILLEGAL_XML_RE = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")
_XML_DECL_RE = re.compile(r"^\s*<\?xml\s([^>]*?)\?>")
_CHUNK = 4096


def first_non_empty(*args: str) -> str:
    """Return the first argument that is not blank, trimmed, or ''."""
    for value in args:
        trimmed = value.strip()
        if trimmed:
            return trimmed
    return ""


def plain2html(text: str) -> str:
    """Turn plain text into HTML with clickable links and line breaks."""
    text = _LINK_RE.sub(r'<a href="\1">\1</a>', text)
    return text.replace("\n", "<br>")


def is_in_character_range(codepoint: int) -> bool:
    """Tell whether a code point is allowed in XML documents."""
    return (
        codepoint in (0x09, 0x0A, 0x0D)
        or 0x20 <= codepoint <= 0xD7FF
        or 0xE000 <= codepoint <= 0xFFFD
        or 0x10000 <= codepoint <= 0x10FFFF
    )


def clean_xml_text(text: str) -> str:
    """Remove characters that XML does not allow."""
    return _ILLEGAL_XML_RE.sub("", text)


def proc_inst(param: str, s: str) -> str:
    """Extract the quoted value of ``param=`` from a processing instruction."""
    key = param + "="
    idx = s.find(key)
    if idx == -1:
        return ""
    value = s[idx + len(key) :]
    if not value or value[0] not in "'\"":
        return ""
    end = value.find(value[0], 1)
    if end == -1:
        return ""
    return value[1:end]


class SafeXMLReader:
    """Binary reader yielding UTF-8 input with XML-illegal characters removed."""

    def __init__(self, stream: IO) -> None:
        self._stream = stream
        self._decoder = codecs.getincrementaldecoder("utf-8")("replace")
        self._buffer = bytearray()
        self._eof = False

    def _fill(self) -> None:
        chunk = self._stream.read(_CHUNK)
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        if not chunk:
            text = self._decoder.decode(b"", final=True)
            self._eof = True
        else:
            text = self._decoder.decode(chunk)
        self._buffer += clean_xml_text(text).encode("utf-8")

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes (all if negative); b'' at the end."""
        while not self._eof and (size < 0 or len(self._buffer) < size):
            self._fill()
        if size < 0:
            size = len(self._buffer)
        out = bytes(self._buffer[:size])
        del self._buffer[:size]
        return out


def _decode(data: bytes) -> str:
    data = data.lstrip(b"\x00")
    if data.startswith(codecs.BOM_UTF8):
        data = data[len(codecs.BOM_UTF8) :]
    head = data[:1024].decode("latin-1")
    found = _XML_DECL_RE.match(head)
    label = proc_inst("encoding", found.group(1)) if found else ""
    encoding = label.lower() or "utf-8"
    try:
        codecs.lookup(encoding)
    except LookupError as exc:
        raise ValueError(f"unsupported charset: {label}") from exc
    return data.decode(encoding, errors="replace")


def parse_xml(data: str | bytes) -> etree._Element:
    """Leniently parse an XML document and return its root element.

    Bytes are decoded using the encoding of the XML declaration; strings are
    taken as already decoded. Characters illegal in XML are dropped.
    """
    text = _decode(data) if isinstance(data, bytes) else data
    text = clean_xml_text(text.lstrip("\ufeff"))
    text = _XML_DECL_RE.sub("", text, count=1)
    parser = etree.XMLParser(
        recover=True,
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
        huge_tree=True,
        encoding="utf-8",
    )
    try:
        root = etree.fromstring(text.strip().encode("utf-8"), parser)
    except etree.XMLSyntaxError as exc:
        raise ValueError(f"invalid xml: {exc}") from exc
    if root is None:
        raise ValueError("invalid xml: no root element")
    return root