from lxml import etree

from yarr.parser.media import Media, MediaGroup, media_from_element

NS = 'xmlns:media="http://search.yahoo.com/mrss/"'


def _item(body):
    return etree.fromstring(f"<item {NS}>{body}</item>")


def test_content_thumbnail_first():
    media = media_from_element(
        _item(
            '<media:thumbnail url="http://example.com/plain.jpg"/>'
            '<media:content><media:thumbnail url="http://example.com/content.jpg"/></media:content>'
        )
    )
    assert media.first_media_thumbnail() == "http://example.com/content.jpg"


def test_group_thumbnail_and_description():
    media = media_from_element(
        _item(
            "<media:group>"
            '<media:thumbnail url="http://example.com/g.jpg"/>'
            "<media:description>see http://example.com\nok</media:description>"
            "</media:group>"
        )
    )
    assert media.first_media_thumbnail() == "http://example.com/g.jpg"
    assert media.first_media_description() == (
        'see <a href="http://example.com">http://example.com</a><br>ok'
    )


def test_direct_description_precedes_group():
    media = Media(groups=[MediaGroup(descriptions=["group"])], descriptions=["own"])
    assert media.first_media_description() == "own"


def test_empty():
    media = media_from_element(_item("<title>x</title>"))
    assert media.first_media_thumbnail() == ""
    assert media.first_media_description() == ""