"""Lenient parsing of the many date formats seen in feeds."""

from __future__ import annotations

import calendar
from datetime import datetime, timedelta, timezone
from functools import lru_cache

from yarr.parser.models import ZERO_TIME

# Layouts use the reference time "Mon Jan 2 15:04:05 MST 2006"; tried in order.
DATE_FORMATS = (
    "02 Jan 06 15:04 MST", "02 Jan 06 15:04 -0700", "2006-01-02T15:04:05Z07:00",
    "Mon Jan _2 15:04:05 MST 2006", "Mon Jan 02 15:04:05 -0700 2006",
    "Monday, 02-Jan-06 15:04:05 MST", "Mon, 02 Jan 2006 15:04:05 -0700",
    "Mon, 02 Jan 2006 15:04:05 MST", "Mon Jan _2 15:04:05 2006",
    "Mon, 02 Jan 2006 15:04:05 MST -07:00", "Mon, January 2, 2006, 3:04 PM MST",
    "Mon, January 2 2006 15:04:05 -0700", "Mon, January 02, 2006, 15:04:05 MST",
    "Mon, January 02, 2006 15:04:05 MST", "Mon, Jan 2, 2006 15:04 MST",
    "Mon, Jan 2 2006 15:04 MST", "Mon, Jan 2 2006 15:04:05 MST",
    "Mon, Jan 2, 2006 15:04:05 MST", "Mon, Jan 2 2006 15:04:05 -700",
    "Mon, Jan 2 2006 15:04:05 -0700", "Mon Jan 2 15:04 2006",
    "Mon Jan 2 15:04:05 2006 MST", "Mon Jan 02, 2006 3:04 pm",
    "Mon, Jan 02,2006 15:04:05 MST", "Mon Jan 02 2006 15:04:05 -0700",
    "Mon, 02/01/2006", "Monday, 2. January 2006 - 15:04", "Monday 02 January 2006",
    "Monday, January 2, 2006 15:04:05 MST", "Monday, January 2, 2006 03:04 PM",
    "Monday, January 2, 2006", "Monday, January 02, 2006",
    "Monday, 2 January 2006 15:04:05 MST", "Monday, 2 January 2006 15:04:05 -0700",
    "Monday, 2 Jan 2006 15:04:05 MST", "Monday, 2 Jan 2006 15:04:05 -0700",
    "Monday, 02 January 2006 15:04:05 MST", "Monday, 02 January 2006 15:04:05 -0700",
    "Monday, 02 January 2006 15:04:05", "Monday, January 02, 2006 - 3:04pm",
    "Monday, January 2, 2006 - 3:04pm", "Mon, 01/02/2006 - 15:04",
    "Mon, 2 January 2006 15:04 MST", "Mon, 2 January 2006, 15:04 -0700",
    "Mon, 2 January 2006, 15:04:05 MST", "Mon, 2 January 2006 15:04:05 MST",
    "Mon, 2 January 2006 15:04:05 -0700", "Mon, 2 January 2006",
    "nilMon, 2 Jan 2006 3:04:05 PM -0700", "Mon, 2 Jan 2006 15:4:5 MST",
    "Mon, 2 Jan 2006 15:4:5 -0700 GMT", "Mon, 2, Jan 2006 15:4",
    "Mon, 2 Jan 2006 15:04 MST", "Mon, 2 Jan 2006, 15:04 -0700",
    "Mon, 2 Jan 2006 15:04 -0700", "Mon, 2 Jan 2006 15:04:05 UT",
    "Mon, 2 Jan 2006 15:04:05MST", "Mon, 2 Jan 2006 15:04:05 MST",
    "Mon 2 Jan 2006 15:04:05 MST", "mon,2 Jan 2006 15:04:05 MST",
    "Mon, 2 Jan 2006 15:04:05 -0700 MST", "Mon, 2 Jan 2006 15:04:05-0700",
    "Mon, 2 Jan 2006 15:04:05 -0700", "Mon, 2 Jan 2006 15:04:05",
    "Mon, 2 Jan 2006 15:04", "Mon, 02 Jan 2006, 15:04", "Mon, 2 Jan 2006, 15:04",
    "Mon,2 Jan 2006", "Mon, 2 Jan 2006", "Mon, 2 Jan 15:04:05 MST",
    "Mon, 2 Jan 06 15:04:05 MST", "Mon, 2 Jan 06 15:04:05 -0700", "Mon, 2006-01-02 15:04",
    "Mon,02 January 2006 14:04:05 MST", "Mon, 02 January 2006",
    "Mon, 02 Jan 2006 3:04:05 PM MST", "Mon, 02 Jan 2006 15 -0700",
    "Mon,02 Jan 2006 15:04 MST", "Mon, 02 Jan 2006 15:04 MST",
    "Mon, 02 Jan 2006 15:04 -0700", "Mon, 02 Jan 2006 15:04:05 Z",
    "Mon, 02 Jan 2006 15:04:05 UT", "Mon, 02 Jan 2006 15:04:05 MST-07:00",
    "Mon, 02 Jan 2006 15:04:05 MST -0700", "Mon, 02 Jan 2006, 15:04:05 MST",
    "Mon, 02 Jan 2006 15:04:05MST", "Mon, 02 Jan 2006 15:04:05 MST",
    "Mon , 02 Jan 2006 15:04:05 MST", "Mon, 02 Jan 2006 15:04:05 GMT-0700",
    "Mon,02 Jan 2006 15:04:05 -0700", "Mon, 02 Jan 2006 15:04:05 -0700",
    "Mon, 02 Jan 2006 15:04:05 -07:00", "Mon, 02 Jan 2006 15:04:05 --0700",
    "Mon 02 Jan 2006 15:04:05 -0700", "Mon 02 Jan 2006, 15:04:05 MST",
    "Mon, 02 Jan 2006 15:04:05 MST", "Mon, 02 Jan 2006 15:04:05 -07",
    "Mon, 02 Jan 2006 15:04:05 00", "Mon, 02 Jan 2006 15:04:05", "Mon, 02 Jan 2006",
    "Mon, 02 Jan 06 15:04:05 MST", "Mon, 02 Jan 2006 3:04 PM MST",
    "Mon Jan 02 2006 15:04:05 MST", "Mon, 01 02 2006 15:04:05 -0700",
    "Mon, 2th Jan 2006 15:05:05 MST", "Jan. 2, 2006, 3:04 a.m.",
    "fri, 02 jan 2006 15:04:05 -0700", "January 02 2006 03:04:05 PM",
    "January 2, 2006 3:04 PM", "January 2, 2006, 3:04 p.m.",
    "January 2, 2006 15:04:05 MST", "January 2, 2006 15:04:05", "January 2, 2006 03:04 PM",
    "January 2, 2006", "January 02, 2006 15:04:05 MST", "January 02, 2006 15:04",
    "January 02, 2006 03:04 PM", "January 02, 2006",
    "Jan 2, 2006 3:04:05 PM MST", "Jan 2, 2006 3:04:05 PM", "Jan 2, 2006 15:04:05 MST",
    "Jan 2, 2006", "Jan 02 2006 03:04:05PM", "Jan 02, 2006",
    "6/1/2 15:04", "6-1-2 15:04",
    "2 January 2006 15:04:05 MST", "2 January 2006 15:04:05 -0700", "2 January 2006",
    "2 Jan 2006 15:04:05 Z", "2 Jan 2006 15:04:05 MST", "2 Jan 2006 15:04:05 -0700",
    "2 Jan 2006", "2 Jan 2006 15:04 MST", "2.1.2006 15:04:05", "2/1/2006", "2-1-2006",
    "2006 January 02", "2006-1-2T15:04:05Z", "2006-1-2 15:04:05", "2006-1-2",
    "2006-01-02T15:04:05-07:00Z", "2006-1-02T15:04:05Z", "2006-01-02T15:04Z",
    "2006-01-02T15:04-07:00", "2006-01-02T15:04:05Z", "2006-01-02T15:04:05-07:00:00",
    "2006-01-02T15:04:05:-0700", "2006-01-02T15:04:05-0700", "2006-01-02T15:04:05-07:00",
    "2006-01-02T15:04:05 -0700", "2006-01-02T15:04:05:00", "2006-01-02T15:04:05",
    "2006-01-02T15:04", "2006-01-02 at 15:04:05", "2006-01-02 15:04:05Z",
    "2006-01-02 15:04:05 MST", "2006-01-02 15:04:05-0700", "2006-01-02 15:04:05-07:00",
    "2006-01-02 15:04:05 -0700", "2006-01-02 15:04",
    "2006-01-02 00:00:00.0 15:04:05.0 -0700", "2006/01/02", "2006-01-02",
    "15:04 02.01.2006 -0700", "1/2/2006 3:04 PM MST",
    "1/2/2006 3:04:05 PM MST", "1/2/2006 3:04:05 PM",
    "1/2/2006 15:04:05 MST", "1/2/2006", "06/1/2 15:04", "06-1-2 15:04",
    "02 Monday, Jan 2006 15:04", "02 Jan 2006 15:04 MST", "02 Jan 2006 15:04:05 UT",
    "02 Jan 2006 15:04:05 MST", "02 Jan 2006 15:04:05 -0700", "02 Jan 2006 15:04:05",
    "02 Jan 2006", "02/01/2006 15:04 MST", "02-01-2006 15:04:05 MST",
    "02.01.2006 15:04:05", "02/01/2006 15:04:05", "02.01.2006 15:04",
    "02/01/2006 - 15:04", "02.01.2006 -0700", "02/01/2006", "02-01-2006",
    "01/02/2006 3:04 PM", "01/02/2006 15:04:05 MST", "01/02/2006 - 15:04",
    "01/02/2006", "01-02-2006", "Jan. 2006", "Jan. 2, 2006, 03:04 p.m.",
    "2006-01-02 15:04:05 -07:00", "2 January, 2006",
)

_MONTHS = tuple(calendar.month_name)[1:]
_SHORT_MONTHS = tuple(calendar.month_abbr)[1:]
_DAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
_SHORT_DAYS = tuple(day[:3] for day in _DAYS)
_DIGITS = "0123456789"
_NUM_TZ = ("070000", "07:00:00", "0700", "07:00", "07")

_LIT, _STD, _FRAC = "lit", "std", "frac"


def _std_at(layout: str, i: int) -> str | None:
    rest = layout[i:]
    c = rest[0]
    if c == "J" and rest.startswith("Jan"):
        return "January" if rest.startswith("January") else "Jan"
    if c == "M":
        if rest.startswith("Mon"):
            return "Monday" if rest.startswith("Monday") else "Mon"
        if rest.startswith("MST"):
            return "MST"
    if c == "0" and len(rest) > 1 and rest[1] in "123456":
        return rest[:2]
    if c == "1":
        return "15" if rest.startswith("15") else "1"
    if c == "2":
        return "2006" if rest.startswith("2006") else "2"
    if c == "_" and rest.startswith("_2") and not rest.startswith("_2006"):
        return "_2"
    if c in "345":
        return c
    if rest.startswith(("PM", "pm")):
        return rest[:2]
    if c in "-Z":
        for suffix in _NUM_TZ:
            if rest[1:].startswith(suffix):
                return c + suffix
    return None


def _frac_at(layout: str, i: int) -> str | None:
    if layout[i] not in ".," or i + 1 >= len(layout) or layout[i + 1] not in "09":
        return None
    ch = layout[i + 1]
    j = i + 1
    while j < len(layout) and layout[j] == ch:
        j += 1
    if j < len(layout) and layout[j] in _DIGITS:
        return None
    return layout[i:j]


@lru_cache(maxsize=None)
def _tokenize(layout: str) -> tuple[tuple[str, str], ...]:
    tokens: list[tuple[str, str]] = []
    literal: list[str] = []
    i = 0
    while i < len(layout):
        frac = _frac_at(layout, i)
        std = None if frac else _std_at(layout, i)
        token = (_FRAC, frac) if frac else (_STD, std) if std else None
        if token is None:
            literal.append(layout[i])
            i += 1
            continue
        if literal:
            tokens.append((_LIT, "".join(literal)))
            literal = []
        tokens.append(token)
        i += len(token[1])
    if literal:
        tokens.append((_LIT, "".join(literal)))
    return tuple(tokens)


def _skip(value: str, prefix: str) -> str | None:
    while prefix:
        if prefix[0] == " ":
            if value and value[0] != " ":
                return None
            prefix = prefix.lstrip(" ")
            value = value.lstrip(" ")
            continue
        if not value or value[0] != prefix[0]:
            return None
        prefix, value = prefix[1:], value[1:]
    return value


def _getnum(value: str, fixed: bool) -> tuple[int, str] | None:
    if not value or value[0] not in _DIGITS:
        return None
    if len(value) < 2 or value[1] not in _DIGITS:
        return None if fixed else (int(value[0]), value[1:])
    return int(value[:2]), value[2:]


def _lookup(names: tuple[str, ...], value: str) -> tuple[int, str] | None:
    for index, name in enumerate(names):
        if value[: len(name)].lower() == name.lower() and len(value) >= len(name):
            return index, value[len(name) :]
    return None


def _signed_offset_len(value: str) -> int:
    if not value or value[0] not in "+-":
        return 0
    n = 1
    while n < len(value) and value[n] in _DIGITS:
        n += 1
    if n == 1 or int(value[1:n]) > 23:
        return 0
    return n


def _zone_len(value: str) -> int:
    if len(value) < 3:
        return 0
    if value[:4] in ("ChST", "MeST"):
        return 4
    if value[:3] == "GMT":
        return 3 + _signed_offset_len(value[3:])
    if value[0] in "+-":
        return _signed_offset_len(value)
    upper = 0
    while upper < 6 and upper < len(value) and "A" <= value[upper] <= "Z":
        upper += 1
    if upper == 3:
        return 3
    if upper == 4 and (value[3] == "T" or value[:4] == "WITA"):
        return 4
    if upper == 5 and value[4] == "T":
        return 5
    return 0


def _numeric_zone(std: str, value: str) -> tuple[int, str] | None:
    shape = std[1:]
    sizes = {"07:00": 6, "07": 3, "07:00:00": 9, "070000": 7, "0700": 5}
    size = sizes[shape]
    if len(value) < size:
        return None
    chunk = value[:size]
    if ":" in shape and any(chunk[k] != ":" for k, ch in enumerate(shape, 1) if ch == ":"):
        return None
    digits = chunk[1:].replace(":", "").ljust(6, "0")
    if any(d not in _DIGITS for d in digits):
        return None
    hours, minutes, seconds = int(digits[:2]), int(digits[2:4]), int(digits[4:6])
    if hours > 24 or minutes > 60 or seconds > 60:
        return None
    offset = (hours * 60 + minutes) * 60 + seconds
    if chunk[0] == "-":
        offset = -offset
    elif chunk[0] != "+":
        return None
    return offset, value[size:]


def _nanos(digits: str) -> int:
    return int(digits[:9].ljust(9, "0"))


def _parse(layout: str, value: str) -> datetime | None:
    tokens = _tokenize(layout)
    year, month, day = 0, -1, -1
    hour = minute = second = nanos = 0
    pm: bool | None = None
    utc = False
    offset: int | None = None
    zone = ""

    for index, (kind, token) in enumerate(tokens):
        if kind == _LIT:
            value = _skip(value, token)
            if value is None:
                return None
            continue
        if kind == _FRAC:
            if token[1] == "9":
                if len(value) < 2 or value[0] not in ".," or value[1] not in _DIGITS:
                    continue
                n = 1
                while n < len(value) and n <= 9 and value[n] in _DIGITS:
                    n += 1
            else:
                n = len(token)
                if len(value) < n or value[0] not in ".," or not value[1:n].isdigit():
                    return None
            nanos, value = _nanos(value[1:n]), value[n:]
            continue

        result: tuple[int, str] | None
        if token in ("January", "Jan"):
            result = _lookup(_MONTHS if token == "January" else _SHORT_MONTHS, value)
            if result is None:
                return None
            month, value = result[0] + 1, result[1]
        elif token in ("Monday", "Mon"):
            result = _lookup(_DAYS if token == "Monday" else _SHORT_DAYS, value)
            if result is None:
                return None
            value = result[1]
        elif token in ("01", "1"):
            result = _getnum(value, token == "01")
            if result is None or not 1 <= result[0] <= 12:
                return None
            month, value = result
        elif token in ("02", "2", "_2"):
            if token == "_2" and value[:1] == " ":
                value = value[1:]
            result = _getnum(value, token == "02")
            if result is None:
                return None
            day, value = result
        elif token == "2006":
            if len(value) < 4 or not value[:4].isdigit():
                return None
            year, value = int(value[:4]), value[4:]
        elif token == "06":
            if len(value) < 2 or not value[:2].isdigit():
                return None
            year, value = int(value[:2]), value[2:]
            year += 1900 if year >= 69 else 2000
        elif token == "15":
            result = _getnum(value, False)
            if result is None or result[0] >= 24:
                return None
            hour, value = result
        elif token in ("03", "3"):
            result = _getnum(value, token == "03")
            if result is None or result[0] > 12:
                return None
            hour, value = result
        elif token in ("04", "4"):
            result = _getnum(value, token == "04")
            if result is None or result[0] > 59:
                return None
            minute, value = result
        elif token in ("05", "5"):
            result = _getnum(value, token == "05")
            if result is None or result[0] > 59:
                return None
            second, value = result
            if len(value) >= 2 and value[0] in ".," and value[1] in _DIGITS:
                following = next((k for k, _ in tokens[index + 1 :] if k != _LIT), None)
                if following != _FRAC:
                    n = 2
                    while n < len(value) and value[n] in _DIGITS:
                        n += 1
                    nanos, value = _nanos(value[1:n]), value[n:]
        elif token in ("PM", "pm"):
            chunk = value[:2]
            upper, lower = ("PM", "AM") if token == "PM" else ("pm", "am")
            if chunk == upper:
                pm = True
            elif chunk == lower:
                pm = False
            else:
                return None
            value = value[2:]
        elif token == "MST":
            if value[:3] == "UTC":
                utc, value = True, value[3:]
            else:
                n = _zone_len(value)
                if n == 0:
                    return None
                zone, value = value[:n], value[n:]
        else:
            if token[0] == "Z" and value[:1] == "Z":
                utc, value = True, value[1:]
                continue
            parsed = _numeric_zone(token, value)
            if parsed is None:
                return None
            offset, value = parsed

    if value:
        return None
    month = 1 if month < 0 else month
    day = 1 if day < 0 else day
    if not 1 <= year <= 9999 or not 1 <= day <= calendar.monthrange(year, month)[1]:
        return None
    if pm is True and hour < 12:
        hour += 12
    elif pm is False and hour == 12:
        hour = 0

    if utc:
        tz = timezone.utc
    elif offset is not None:
        tz = timezone(timedelta(seconds=offset))
    elif len(zone) > 3 and zone[:3] == "GMT":
        tz = timezone(timedelta(hours=int(zone[3:])))
    else:
        tz = timezone.utc
    try:
        return datetime(year, month, day, hour, minute, second, nanos // 1000, tzinfo=tz)
    except (ValueError, OverflowError):
        return None


def date_parse(line: str) -> datetime:
    """Parse a date in any known feed format; return the zero time on failure."""
    if not line:
        return ZERO_TIME
    for layout in DATE_FORMATS:
        parsed = _parse(layout, line)
        if parsed is not None:
            return parsed
    return ZERO_TIME