import io

from yarr.content.readability import extract_content

ARTICLE_PAGE = """<html><head><title>Page</title><style>body { color: red; }</style></head><body>
<div id="sidebar"><p>Sidebar text that is long enough, with commas, to count.</p></div>
<div class="article"><p>First paragraph, with plenty of text so it scores well, really.</p><p>Second paragraph, again with a lot of words in it, commas too.</p></div>
<script>alert("x")</script>
</body></html>"""


def test_extracts_article_paragraphs():
    out = extract_content(ARTICLE_PAGE)
    assert out.startswith("<div>")
    assert out.endswith("</div>")
    assert "First paragraph, with plenty of text" in out
    assert "Second paragraph, again with a lot of words" in out


def test_drops_unlikely_candidates_scripts_and_styles():
    out = extract_content(ARTICLE_PAGE)
    assert "Sidebar text" not in out
    assert "alert" not in out
    assert "color: red" not in out


def test_accepts_file_like_and_bytes():
    expected = extract_content(ARTICLE_PAGE)
    assert extract_content(io.StringIO(ARTICLE_PAGE)) == expected
    assert extract_content(ARTICLE_PAGE.encode("utf-8")) == expected


def test_falls_back_to_body_without_candidates():
    out = extract_content("<html><body><p>short</p></body></html>")
    assert out == "<div><div><p>short</p></div></div>"


def test_misused_div_becomes_paragraph():
    page = (
        '<html><body><div class="content">This is a long text, without any block '
        "children inside it at all.</div></body></html>"
    )
    out = extract_content(page)
    assert '<p class="content">This is a long text' in out
    assert "<div class=" not in out