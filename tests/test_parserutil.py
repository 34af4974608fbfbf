import io

import pytest

from yarr.parser.parserutil import (
    SafeXMLReader,
    clean_xml_text,
    first_non_empty,
    is_in_character_range,
    parse_xml,
    plain2html,
    proc_inst,
)


def test_safe_xml_reader_passthrough():
    want = "привет мир".encode()
    assert SafeXMLReader(io.BytesIO(want)).read() == want


def test_safe_xml_reader_removes_unwanted_runes():
    data = "\aпривет \x0cмир\ufffe\uffff".encode()
    assert SafeXMLReader(io.BytesIO(data)).read() == "привет мир".encode()


def test_safe_xml_reader_partial_single_bytes():
    data = "\aпривет \x0cмир\ufffe\uffff".encode()
    want = "привет мир".encode()
    reader = SafeXMLReader(io.BytesIO(data))
    got = bytearray()
    for _ in want:
        chunk = reader.read(1)
        assert len(chunk) == 1
        got += chunk
    assert bytes(got) == want
    assert reader.read(1) == b""


def test_safe_xml_reader_partial_then_eof():
    reader = SafeXMLReader(io.BytesIO("привет\a\a\a\a\a".encode()))
    assert len(reader.read(12)) == 12
    assert reader.read(12) == b""


def test_first_non_empty():
    assert first_non_empty("", "  ", " b ", "c") == "b"
    assert first_non_empty("", " ") == ""


def test_plain2html():
    assert plain2html("see http://example.com\nbye") == (
        'see <a href="http://example.com">http://example.com</a><br>bye'
    )


def test_character_range():
    assert is_in_character_range(0x09)
    assert not is_in_character_range(0x07)
    assert not is_in_character_range(0xFFFE)
    assert clean_xml_text("a\ab") == "ab"


def test_proc_inst():
    inst = 'version="1.0" encoding="ISO-8859-1"'
    assert proc_inst("encoding", inst) == "ISO-8859-1"
    assert proc_inst("encoding", 'version="1.0"') == ""
    assert proc_inst("encoding", "encoding=utf-8") == ""


def test_parse_xml_non_utf8_with_illegal_chars():
    doc = (
        '<?xml version="1.0" encoding="windows-1251"?><rss><title>\a '.encode()
        + "привет".encode("cp1251")
        + b" \a</title></rss>"
    )
    root = parse_xml(doc)
    assert root.tag == "rss"
    assert root.find("title").text.strip() == "привет"


def test_parse_xml_empty_raises():
    with pytest.raises(ValueError):
        parse_xml(b"   ")