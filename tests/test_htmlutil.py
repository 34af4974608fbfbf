import pytest

from yarr.content.htmlutil import (
    ElementMatch,
    MultiMatch,
    Node,
    NodeType,
    absolute_url,
    any_match,
    attr,
    closest,
    extract_text,
    find_nodes,
    inner_html,
    is_a_possible_link,
    new_matcher,
    parse_html,
    query,
    render_html,
    text,
    url_domain,
)


def test_query():
    node = parse_html(
        """
        <!DOCTYPE html>
        <html lang="en">
        <head>
            <meta charset="UTF-8">
            <title></title>
        </head>
        <body>
            <div>
                <p>test</p>
            </div>
        </body>
        </html>
        """
    )
    nodes = query(node, "p")
    assert len(nodes) == 1
    assert nodes[0].type is NodeType.ELEMENT
    assert nodes[0].data == "p"


def test_query_multi():
    node = parse_html(
        """
        <!DOCTYPE html>
        <html lang="en">
        <head>
            <meta charset="UTF-8">
            <title></title>
        </head>
        <body>
            <p>foo</p>
            <div>
                <p>bar</p>
                <span>baz</span>
            </div>
        </body>
        </html>
        """
    )
    nodes = query(node, "p , span")
    assert [n.data for n in nodes] == ["p", "p", "span"]
    assert all(n.type is NodeType.ELEMENT for n in nodes)
    assert [text(n) for n in nodes] == ["foo", "bar", "baz"]


def test_closest():
    root = parse_html(
        """
        <!DOCTYPE html>
        <html lang="en">
        <head>
            <meta charset="UTF-8">
            <title></title>
        </head>
        <body>
            <div class="foo">
                <p><a class="bar" href=""></a></p>
            </div>
        </body>
        </html>
        """
    )
    links = query(root, "a")
    assert links and attr(links[0], "class") == "bar"
    wrap = closest(links[0], "div")
    assert wrap is not None and attr(wrap, "class") == "foo"
    assert closest(links[0], "table") is None


@pytest.mark.parametrize(
    "want, base",
    [
        ("hello", "<div>hello</div>"),
        ("hello world", "<div>hello</div> world"),
        ("helloworld", "<div>hello</div>world"),
        ("hello world", "hello <div>world</div>"),
        ("helloworld", "hello<div>world</div>"),
        ("hello world!", "hello <div>world</div>!"),
        ("hello world !", "hello <div>   world\r\n </div>!"),
    ],
)
def test_extract_text(want, base):
    assert extract_text(base) == want


def test_extract_text_unescapes_entities():
    assert extract_text("say &lt;code&gt;what&lt;/code&gt;?") == "say <code>what</code>?"


def test_new_matcher_rejects_unsupported_selector():
    with pytest.raises(ValueError):
        new_matcher(">")


def test_new_matcher_builds_element_matchers():
    matcher = new_matcher("p, *")
    assert matcher.matchers == [ElementMatch("p"), ElementMatch("*")]


def test_multi_match_add():
    multi = MultiMatch()
    span = Node(NodeType.ELEMENT, "span")
    assert multi.match(span) is False
    multi.add(ElementMatch("span"))
    assert multi.match(span) is True
    assert multi.match(Node(NodeType.TEXT, "span")) is False


def test_render_void_and_escaping():
    root = parse_html("<p>a &lt; b<br><img src=\"x.png\" alt='say \"hi\"'></p>")
    p = query(root, "p")[0]
    assert render_html(p) == '<p>a &lt; b<br/><img src="x.png" alt="say &#34;hi&#34;"/></p>'


def test_render_document_with_doctype():
    root = parse_html("<!DOCTYPE html><p>x</p>")
    assert render_html(root) == "<!DOCTYPE html><html><head></head><body><p>x</p></body></html>"


def test_render_raw_text_not_escaped():
    root = parse_html("<script>if (a < b) {}</script>")
    script = query(root, "script")[0]
    assert render_html(script) == "<script>if (a < b) {}</script>"


def test_inner_html():
    root = parse_html("<div><em>x</em> &amp; y</div>")
    div = query(root, "div")[0]
    assert inner_html(div) == "<em>x</em> &amp; y"


def test_attr_is_case_insensitive():
    node = Node(NodeType.ELEMENT, "a", [("HREF", "/x")])
    assert attr(node, "href") == "/x"
    assert attr(node, "title") == ""


def test_text_joins_trimmed_text_nodes():
    root = parse_html("<div><span> a </span><span>b</span></div>")
    div = query(root, "div")[0]
    assert text(div) == "a b"


def test_find_nodes_is_breadth_first():
    root = parse_html("<div><p><b>deep</b></p><i>shallow</i></div>")
    div = query(root, "div")[0]
    found = find_nodes(div, lambda n: n.type is NodeType.ELEMENT)
    assert [n.data for n in found] == ["div", "p", "i", "b"]


def test_append_and_remove_child():
    parent = Node(NodeType.ELEMENT, "div")
    child = Node(NodeType.TEXT, "hi")
    parent.append_child(child)
    assert child.parent is parent
    assert parent.children == [child]
    parent.remove_child(child)
    assert child.parent is None
    assert parent.children == []
    with pytest.raises(ValueError):
        parent.remove_child(child)


def test_append_child_with_parent_raises():
    first = Node(NodeType.ELEMENT, "div")
    second = Node(NodeType.ELEMENT, "div")
    child = Node(NodeType.ELEMENT, "p")
    first.append_child(child)
    with pytest.raises(ValueError):
        second.append_child(child)


@pytest.mark.parametrize(
    "href, base, want",
    [
        ("/feed.xml", "http://example.com", "http://example.com/feed.xml"),
        ("path/to/favicon.png", "http://example.com", "http://example.com/path/to/favicon.png"),
        ("//static.example.org/index.html", "http://example.org/", "http://static.example.org/index.html"),
        ("../folder/image.png", "http://example.org/", "http://example.org/folder/image.png"),
        ("data:image/gif;base64,test", "http://example.org/", "data:image/gif;base64,test"),
    ],
)
def test_absolute_url(href, base, want):
    assert absolute_url(href, base) == want


def test_absolute_url_malformed():
    assert absolute_url("http://[::1", "http://example.com") == ""


def test_url_domain():
    assert url_domain("https://www.youtube.com/embed/x") == "www.youtube.com"
    assert url_domain("http://example.org:8080/a") == "example.org:8080"
    assert url_domain("http://[::1") == "http://[::1"


@pytest.mark.parametrize(
    "val, want",
    [
        ("http://example.com", True),
        ("https://example.com", True),
        ("urn:uuid:1225c695", False),
        ("ftp://example.com", False),
    ],
)
def test_is_a_possible_link(val, want):
    assert is_a_possible_link(val) is want


def test_any_match():
    assert any_match(["a", "b"], "b", lambda x, y: x == y) is True
    assert any_match(["a", "b"], "c", lambda x, y: x == y) is False