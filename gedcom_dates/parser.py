"""
Parser for GEDCOM DATE_VALUE strings.

Handles formats:
  - "15 MAR 1895", "MAR 1895", "1895" (exact and partial)
  - "ABT 1905", "CAL 1890", "EST 1900", "BEF 1920", "AFT 1890"
  - "BET 1890 AND 1900" (range)
  - "FROM 1920 TO 1945", "FROM 1920", "TO 1945" (periods)
  - "INT 1895 (about five years old in 1900 census)" (interpreted)
  - "(Stillborn)" (phrase, not parsed further)
  - "21 FEB 1750/51" (dual dating), "44 BC", "500 B.C.E."
  - "@#DJULIAN@ 4 OCT 1582", "@#DHEBREW@ 1 TSH 5785", "@#DFRENCH R@ 1 VEND 1"

A calendar escape may appear before the modifier or before any sub-date.
Sub-dates without an escape inherit the enclosing one; the second date of
a BET/AND or FROM/TO pair inherits the first date's calendar.

Keywords, month codes and escape names are case-insensitive. Every
failure raises a DateParseError subclass; nothing is partially parsed.
"""

import logging
import re
from types import MappingProxyType
from typing import Optional

from gedcom_dates.calendars import Calendar
from gedcom_dates.date import CalendarDate, Date, DatePhrase, DateRange, InterpretedDate, Modifier
from gedcom_dates.errors import (
    DateParseError,
    EmptyDateError,
    InvalidDayError,
    InvalidDualYearFormatError,
    InvalidMonthForCalendarError,
    InvalidRangeEndpointError,
    InvalidYearError,
    MissingRangeDelimiterError,
    TooManyComponentsError,
    UnsupportedCalendarError,
)

logger = logging.getLogger(__name__)


# --- Month code tables ---

GREGORIAN_MONTHS = MappingProxyType({
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MAY": 5, "JUN": 6,
    "JUL": 7, "AUG": 8, "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
})

HEBREW_MONTHS = MappingProxyType({
    "TSH": 1,   # Tishrei
    "CSH": 2,   # Cheshvan
    "KSL": 3,   # Kislev
    "TVT": 4,   # Tevet
    "SHV": 5,   # Shevat
    "ADR": 6,   # Adar (Adar I in leap years)
    "ADS": 7,   # Adar II
    "NSN": 8,   # Nisan
    "IYR": 9,   # Iyar
    "SVN": 10,  # Sivan
    "TMZ": 11,  # Tammuz
    "AAV": 12,  # Av
    "ELL": 13,  # Elul
})

FRENCH_MONTHS = MappingProxyType({
    "VEND": 1, "BRUM": 2, "FRIM": 3, "NIVO": 4, "PLUV": 5, "VENT": 6,
    "GERM": 7, "FLOR": 8, "PRAI": 9, "MESS": 10, "THER": 11, "FRUC": 12,
    "COMP": 13,  # complementary days
})

MONTH_CODES = MappingProxyType({
    Calendar.GREGORIAN: GREGORIAN_MONTHS,
    Calendar.JULIAN: GREGORIAN_MONTHS,
    Calendar.HEBREW: HEBREW_MONTHS,
    Calendar.FRENCH_REPUBLICAN: FRENCH_MONTHS,
})

CALENDAR_ESCAPES = MappingProxyType({c.escape_name: c for c in Calendar})

MODIFIER_KEYWORDS = MappingProxyType({
    "ABT": Modifier.ABOUT,
    "CAL": Modifier.CALCULATED,
    "EST": Modifier.ESTIMATED,
    "BEF": Modifier.BEFORE,
    "AFT": Modifier.AFTER,
    "BET": Modifier.BETWEEN,
    "FROM": Modifier.FROM,
    "TO": Modifier.TO,
    "INT": Modifier.INTERPRETED,
})

BC_SUFFIXES = frozenset({"BC", "B.C.", "BCE", "B.C.E."})

_AND_RE = re.compile(r" AND ", re.IGNORECASE)
_TO_RE = re.compile(r" TO ", re.IGNORECASE)
_DIGITS_RE = re.compile(r"[0-9]+")

# Keeps int() well clear of the interpreter's digit limit
_MAX_YEAR_DIGITS = 9


def parse_date(text: Optional[str]) -> Date:
    """Parse a GEDCOM date string.

    Args:
        text: DATE_VALUE payload. Kept verbatim as `original` on the result.

    Returns:
        DatePhrase, CalendarDate, InterpretedDate or DateRange

    Raises:
        DateParseError: (a subclass naming the problem) if the text is not a
            valid date
        TypeError: if text is neither a str nor None
    """
    if text is None:
        raise EmptyDateError("empty date string")
    if not isinstance(text, str):
        raise TypeError(f"date text must be str, got {type(text).__name__}")

    original = text
    s = " ".join(text.split())
    if not s:
        raise EmptyDateError("empty date string", original)

    if len(s) >= 2 and s.startswith("(") and s.endswith(")"):
        return DatePhrase(original=original, phrase=text.strip()[1:-1])

    calendar, s = _split_calendar_escape(s)
    keyword, _, rest = s.partition(" ")
    modifier = MODIFIER_KEYWORDS.get(keyword.upper())
    if modifier is None:
        return CalendarDate(original=original, **_parse_components(s, original, calendar))

    if modifier is Modifier.BETWEEN:
        return _parse_range(rest, original, calendar, _AND_RE, Modifier.BETWEEN)
    if modifier is Modifier.FROM and _TO_RE.search(rest):
        return _parse_range(rest, original, calendar, _TO_RE, Modifier.FROM_TO)
    if modifier is Modifier.INTERPRETED:
        return _parse_interpreted(rest, original, calendar)
    return CalendarDate(
        original=original, modifier=modifier, **_parse_components(rest, original, calendar)
    )


def _split_calendar_escape(s: str) -> tuple[Optional[Calendar], str]:
    """Strip a leading @#D<NAME>@ escape. Unknown names leave the text untouched."""
    if not s.startswith("@#D"):
        return None, s
    end = s.find("@", 3)
    if end == -1:
        return None, s

    calendar = CALENDAR_ESCAPES.get(s[3:end].upper())
    if calendar is None:
        logger.debug("Ignoring unrecognized calendar escape %r", s[:end + 1])
        return None, s
    return calendar, s[end + 1:].strip()


def _parse_range(s: str, original: str, calendar: Optional[Calendar],
                 delimiter: re.Pattern, modifier: Modifier) -> DateRange:
    """BET <date> AND <date>, or FROM <date> TO <date>."""
    match = delimiter.search(s)
    if match is None:
        raise MissingRangeDelimiterError(
            f"invalid date range: missing AND keyword in '{original}'", original
        )
    _, start = _parse_endpoint(s[:match.start()], original, calendar, "start")
    end_text, end = _parse_endpoint(s[match.end():], original, start["calendar"], "end")
    return DateRange(
        original=original, modifier=modifier,
        end=CalendarDate(original=end_text, **end), **start,
    )


def _parse_endpoint(s: str, original: str, calendar: Optional[Calendar],
                    which: str) -> tuple[str, dict]:
    """Returns (endpoint text, CalendarDate fields)."""
    text = s.strip()
    try:
        return text, _parse_components(text, original, calendar)
    except DateParseError as exc:
        raise InvalidRangeEndpointError(
            f"invalid {which} date in '{original}': {exc}", original
        ) from exc


def _parse_interpreted(s: str, original: str, calendar: Optional[Calendar]) -> InterpretedDate:
    """INT <date> (<phrase>); the phrase runs to the last closing parenthesis."""
    paren = s.find("(")
    if paren == -1:
        return InterpretedDate(original=original, **_parse_components(s, original, calendar))

    date_text = s[:paren].strip()
    if not date_text:
        raise EmptyDateError(f"empty date in interpreted date '{original}'", original)
    close = s.rfind(")")
    phrase = s[paren + 1:close] if close > paren else s[paren + 1:]
    return InterpretedDate(
        original=original, interpreted_from=phrase,
        **_parse_components(date_text, original, calendar),
    )


def _parse_components(s: str, original: str, calendar: Optional[Calendar]) -> dict:
    """Parse [escape] [[day] month] year[/dual] [BC] into CalendarDate fields."""
    escaped, s = _split_calendar_escape(s)
    calendar = escaped or calendar or Calendar.GREGORIAN

    fields = s.split()
    if not fields:
        raise EmptyDateError(f"empty date in '{original}'", original)

    is_bc = fields[-1].upper() in BC_SUFFIXES
    if is_bc:
        fields = fields[:-1]
        if not fields:
            raise EmptyDateError(f"empty date after B.C. suffix in '{original}'", original)
    if len(fields) > 3:
        raise TooManyComponentsError(
            f"invalid date format: too many components in '{' '.join(fields)}'", original
        )

    *head, year_text = fields
    day = month = 0
    if len(head) == 2:
        day = _parse_day(head[0], calendar, original)
    if head:
        month = _parse_month(head[-1], calendar, original)
    year, dual_year = _parse_year(year_text, original)

    return {
        "day": day, "month": month, "year": year, "calendar": calendar,
        "is_bc": is_bc, "dual_year": dual_year,
    }


def _parse_day(s: str, calendar: Calendar, original: str) -> int:
    max_day = 31 if calendar.month_count == 12 else 30
    if not _DIGITS_RE.fullmatch(s) or len(s) > 2 or not 1 <= int(s) <= max_day:
        raise InvalidDayError(f"invalid day: {s}", original)
    return int(s)


def _parse_month(code: str, calendar: Calendar, original: str) -> int:
    table = MONTH_CODES.get(calendar)
    if table is None:
        raise UnsupportedCalendarError(f"unsupported calendar: {calendar}", original)
    month = table.get(code.upper())
    if month is None:
        raise InvalidMonthForCalendarError(code, calendar, original)
    return month


def _parse_number(s: str) -> Optional[int]:
    if not _DIGITS_RE.fullmatch(s) or len(s) > _MAX_YEAR_DIGITS:
        return None
    return int(s)


def _parse_year(s: str, original: str) -> tuple[int, int]:
    """
    Parse "1750" or a dual year "1750/51" / "1750/1751".

    A two-digit second year takes the first year's century as written:
    1750/51 -> 1751, 1799/00 -> 1700.

    Returns:
        (year, dual_year), dual_year 0 when absent
    """
    if "/" not in s:
        year = _parse_number(s)
        if not year:
            raise InvalidYearError(f"invalid year: {s}", original)
        return year, 0

    parts = s.split("/")
    if len(parts) != 2:
        raise InvalidDualYearFormatError(f"invalid dual year format: {s}", original)
    primary, secondary_text = parts
    year = _parse_number(primary)
    secondary = _parse_number(secondary_text)
    if not year or secondary is None or len(secondary_text) not in (2, 4):
        raise InvalidDualYearFormatError(f"invalid dual year format: {s}", original)

    if len(secondary_text) == 2:
        secondary += (year // 100) * 100
    if not secondary:
        raise InvalidDualYearFormatError(f"invalid dual year format: {s}", original)
    return year, secondary
