from yarr.content.scraper import find_feeds, find_icons

BASE = "http://example.com"


def _tag(name, **attrs):
    rendered = "".join(f' {key}="{value}"' for key, value in attrs.items())
    return f"<{name}{rendered}>"


def _anchor(href, label):
    return f'{_tag("a", href=href)}{label}</a>'


def _page(head="", body=""):
    return "\n".join(
        [
            "<!DOCTYPE html>",
            '<html lang="en">',
            f'<head><meta charset="UTF-8"><title></title>{head}</head>',
            f"<body>{body}</body>",
            "</html>",
        ]
    )


def test_find_feeds_invalid_html():
    assert find_feeds("some nonsense", BASE) == {}


def test_find_feeds_links():
    head = "".join(
        [
            _tag("link", rel="alternate", href="/feed.xml", type="application/rss+xml",
                 title="rss with title"),
            _tag("link", rel="alternate", href="/atom.xml", type="application/atom+xml"),
            _tag("link", rel="alternate", href="/feed.json", type="application/json"),
        ]
    )
    body = _page(head=head, body=_anchor("/feed.xml", "rss"))
    assert find_feeds(body, BASE) == {
        BASE + "/feed.xml": "rss with title",
        BASE + "/atom.xml": "",
        BASE + "/feed.json": "",
    }


def test_find_feeds_guess():
    anchors = [
        "<!-- not feeds -->",
        _anchor("/about", "what is rss?"),
        _anchor("/feed/cows", "moo"),
        "<!-- feeds -->",
        _anchor("/feed.xml", "subscribe"),
        _anchor("/news", "rss"),
    ]
    body = _page(body="\n".join(anchors))
    assert find_feeds(body, BASE) == {
        BASE + "/feed.xml": "",
        BASE + "/news": "",
    }


def test_find_icons():
    head = _tag("link", rel="icon favicon", href="/favicon.ico") + _tag(
        "link", rel="icon macicon", href="path/to/favicon.png"
    )
    body = _page(head=head)
    assert find_icons(body, BASE) == [BASE + "/favicon.ico", BASE + "/path/to/favicon.png"]


def test_find_icons_none():
    body = _page(head=_tag("link", rel="stylesheet", href="/style.css"))
    assert find_icons(body, BASE) == []