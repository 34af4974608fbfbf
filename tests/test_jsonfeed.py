import io
import json

import pytest

from yarr.parser.jsonfeed import parse_json
from yarr.parser.models import Feed, Item

SITE = "https://example.org"

DOC = json.dumps(
    {
        "version": "https://jsonfeed.org/version/1",
        "title": "My Example Feed",
        "home_page_url": SITE + "/",
        "feed_url": SITE + "/feed.json",
        "items": [
            {"id": "2", "content_text": "This is a second item.", "url": SITE + "/second-item"},
            {"id": "1", "content_html": "<p>Hello, world!</p>", "url": SITE + "/initial-post"},
        ],
    },
    indent=2,
)


def test_json_feed():
    want = Feed(
        title="My Example Feed",
        site_url=SITE + "/",
        items=[
            Item(guid="2", content="This is a second item.", url=SITE + "/second-item"),
            Item(guid="1", content="<p>Hello, world!</p>", url=SITE + "/initial-post"),
        ],
    )
    assert parse_json(DOC) == want


def test_json_feed_from_binary_stream():
    feed = parse_json(io.BytesIO(DOC.encode()))
    assert [item.guid for item in feed.items] == ["2", "1"]


def test_guid_falls_back_to_url():
    feed = parse_json('{"items": [{"url": "https://example.org/x"}]}')
    assert feed.items[0].guid == "https://example.org/x"


def test_invalid_json_raises():
    with pytest.raises(ValueError):
        parse_json("{not json")


def test_wrong_type_raises():
    with pytest.raises(ValueError):
        parse_json('{"title": 5}')