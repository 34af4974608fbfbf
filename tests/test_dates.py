from datetime import datetime, timedelta, timezone

import pytest

from yarr.parser.dates import date_parse
from yarr.parser.models import ZERO_TIME

REFERENCE = datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone(timedelta(hours=-7)))


def test_rfc3339_utc():
    assert date_parse("2003-12-13T18:30:02Z") == datetime.fromtimestamp(1071340202, timezone.utc)


def test_without_zone_is_utc():
    assert date_parse("2003-12-13T09:17:51") == datetime(2003, 12, 13, 9, 17, 51, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "line",
    [
        "2006-01-02T15:04:05-07:00",
        "Mon, 02 Jan 2006 15:04:05 -0700",
        "fri, 02 jan 2006 15:04:05 -0700",
        "Mon Jan 02 15:04:05 -0700 2006",
    ],
)
def test_reference_time_variants(line):
    parsed = date_parse(line)
    assert parsed == REFERENCE
    assert parsed.utcoffset() == REFERENCE.utcoffset()


def test_named_zone_has_zero_offset():
    parsed = date_parse("Mon, 02 Jan 2006 15:04:05 MST")
    assert parsed.utcoffset() == timedelta(0)
    assert (parsed.year, parsed.month, parsed.day, parsed.hour) == (2006, 1, 2, 15)


def test_pm_hour():
    parsed = date_parse("January 2, 2006 3:04 PM")
    assert (parsed.hour, parsed.minute) == (15, 4)


@pytest.mark.parametrize("line", ["", "garbage", "2006-02-30"])
def test_unparseable_gives_zero(line):
    assert date_parse(line) == ZERO_TIME