# yarr

Building blocks for a feed reader: a JSON Feed parser, feed and item models,
a lenient date parser, helpers for loading feed XML, an HTML sanitizer, a
readable-content extractor, and feed and icon discovery for web pages.

## Install

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## Feeds

### Models

`yarr.parser.models` holds the `Feed` (`title`, `site_url`, `items`) and
`Item` (`guid`, `date`, `url`, `title`, `content`, `image_url`, `audio_url`)
dataclasses. An item without a date carries `ZERO_TIME`
(0001-01-01 00:00 UTC).

- `Feed.cleanup()` trims the fields, strips markup from item titles, and
  clears `image_url` / `audio_url` when that URL already appears in the
  item's content.
- `Feed.set_missing_dates_to(newdate)` gives every undated item `newdate`.
- `Feed.translate_urls(base)` resolves the feed's `site_url` against `base`
  and raises `ValueError` if a URL is malformed.

### JSON Feed

```python
from yarr.parser.jsonfeed import parse_json

with open("feed.json", "rb") as fh:
    feed = parse_json(fh)

for item in feed.items:
    print(item.guid, item.date, item.url, item.content)
```

`parse_json` takes a string, bytes or a readable file and raises
`ValueError` on malformed input. An item's GUID is its `id` or else its
`url`; its content is `content_html`, else `content_text`, else `summary`.

### Dates

```python
from yarr.parser.dates import date_parse

date_parse("Mon, 02 Jan 2006 15:04:05 -0700")
```

`date_parse` tries a long list of layouts seen in real feeds and returns a
timezone-aware `datetime`, or `ZERO_TIME` if none fits.

### XML helpers

`yarr.parser.parserutil` offers:

- `parse_xml(data)` – lenient XML parsing into an lxml root element. Bytes
  are decoded with the encoding named in the XML declaration; characters that
  XML forbids are dropped. Raises `ValueError` on unusable input.
- `SafeXMLReader(stream)` – a binary reader whose `read(size)` returns UTF-8
  with XML-illegal characters removed.
- `clean_xml_text`, `is_in_character_range`, `proc_inst`,
  `first_non_empty` and `plain2html` (links made clickable, newlines turned
  into `<br>`).

`yarr.parser.media.media_from_element(element)` collects Media RSS
thumbnails and descriptions from an lxml element into a `Media` object with
`first_media_thumbnail()` and `first_media_description()`.

## HTML content

Sanitizing untrusted HTML:

```python
from yarr.content.sanitizer import sanitize

sanitize("http://example.org/", "<p>hi<script>alert(1)</script></p>")
# '<p>hi</p>'
```

Only allowed tags and attributes are kept, relative URLs are resolved
against the base URL, links get `rel="noopener noreferrer"`, images get
`loading="lazy"`, and iframes are kept only from the base URL's host or a
short list of video and audio hosts.

Extracting the readable part of a page:

```python
from yarr.content.readability import extract_content, ExtractionError

with open("page.html", "rb") as fh:
    article_html = extract_content(fh)
```

`extract_content` returns an HTML fragment wrapped in a `<div>` and raises
`ExtractionError` if nothing can be extracted.

Finding feeds and icons on a page:

```python
from yarr.content.scraper import find_feeds, find_icons

find_feeds(page_html, "http://example.com")   # {url: title}
find_icons(page_html, "http://example.com")   # [url, ...]
```

`find_feeds` looks for `<link>` elements of the Atom, RSS and JSON types and,
if there are none, guesses from hyperlinks whose target ends in `feed`,
`feed.xml`, `rss.xml` or `atom.xml` or whose text is "rss" or "feed".

Video embeds and redirect links:

```python
from yarr.content.silo import video_iframe, redirect_url

video_iframe("https://youtu.be/dQw4w9WgXcQ")   # YouTube <iframe> markup
redirect_url("https://www.google.com/url?url=https://example.com/")
# 'https://example.com/'
```

`yarr.content.htmlutil` provides the HTML tree (`parse_html`, `Node`),
simple tag-name selectors (`query`, `closest`, `find_nodes`), serialisation
(`render_html`, `inner_html`) and text and URL helpers (`text`,
`extract_text`, `attr`, `absolute_url`, `url_domain`,
`is_a_possible_link`).

## What this package does not do

- It has no parsers for RSS, RDF or Atom feeds and no detection of a feed's
  format; only JSON Feed documents can be turned into `Feed` objects.
- It installs no command-line programs and does not fetch anything over
  the network; callers supply the documents.
- It has no server, web interface or storage for subscriptions.