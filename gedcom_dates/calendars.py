"""
Gregorian and Julian calendar arithmetic over Julian Day Numbers.

Implements the integer formulas from Dershowitz & Reingold,
"Calendrical Calculations". A Julian Day Number (JDN) is a continuous day
count (JDN 0 = 24 Nov 4714 BC proleptic Gregorian) used as the pivot for
every calendar conversion, so calendars never convert pairwise.

Years here use astronomical numbering: year 0 exists, 0 = 1 BC,
-1 = 2 BC. GEDCOM text uses historical numbering (no year 0) plus a BC
flag; astronomical_year() and from_astronomical_year() map between them.
"""

from enum import Enum

from gedcom_dates.errors import InvalidMonthError


class Calendar(Enum):
    """Calendar systems a GEDCOM date can be expressed in."""
    GREGORIAN = "Gregorian"
    JULIAN = "Julian"
    HEBREW = "Hebrew"
    FRENCH_REPUBLICAN = "French Republican"

    def __str__(self):
        return self.value

    @property
    def escape_name(self) -> str:
        """Name used in the GEDCOM escape, e.g. JULIAN in @#DJULIAN@."""
        return _ESCAPE_NAMES[self]

    @property
    def month_count(self) -> int:
        if self in (Calendar.GREGORIAN, Calendar.JULIAN):
            return 12
        return 13


_ESCAPE_NAMES = {
    Calendar.GREGORIAN: "GREGORIAN",
    Calendar.JULIAN: "JULIAN",
    Calendar.HEBREW: "HEBREW",
    Calendar.FRENCH_REPUBLICAN: "FRENCH R",
}

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def check_month(month: int, calendar: Calendar) -> None:
    """Raise InvalidMonthError unless 1 <= month <= calendar.month_count."""
    if not 1 <= month <= calendar.month_count:
        raise InvalidMonthError(month, calendar)


# --- Astronomical year numbering ---

def astronomical_year(year: int, is_bc: bool) -> int:
    """Convert a GEDCOM year plus BC flag to astronomical numbering.

    44 BC -> -43, 1 BC -> 0, 2000 AD -> 2000.
    """
    if not is_bc:
        return year
    return 1 - year


def from_astronomical_year(astro_year: int) -> tuple[int, bool]:
    """Inverse of astronomical_year: returns (year, is_bc)."""
    if astro_year > 0:
        return astro_year, False
    return 1 - astro_year, True


# --- Gregorian ---

def is_gregorian_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def gregorian_days_in_month(year: int, month: int) -> int:
    check_month(month, Calendar.GREGORIAN)
    if month == 2 and is_gregorian_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def gregorian_to_jdn(year: int, month: int, day: int) -> int:
    """
    Convert a proleptic Gregorian date to a Julian Day Number.

    Args:
        year: Astronomical year (0 = 1 BC)
        month: 1-12
        day: Day of month; not range-checked

    Returns:
        JDN, e.g. gregorian_to_jdn(2000, 1, 1) == 2451545
    """
    check_month(month, Calendar.GREGORIAN)
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    return day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045


def jdn_to_gregorian(jdn: int) -> tuple[int, int, int]:
    """Convert a JDN to (astronomical year, month, day) in the Gregorian calendar."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153

    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + m // 10
    return year, month, day


# --- Julian ---

def is_julian_leap_year(year: int) -> bool:
    return year % 4 == 0


def julian_days_in_month(year: int, month: int) -> int:
    check_month(month, Calendar.JULIAN)
    if month == 2 and is_julian_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def julian_to_jdn(year: int, month: int, day: int) -> int:
    """
    Convert a proleptic Julian date to a Julian Day Number.

    Same as gregorian_to_jdn without the century correction:
    julian_to_jdn(1582, 10, 4) == 2299160, the day before the Gregorian
    reform's 15 Oct 1582 (JDN 2299161).
    """
    check_month(month, Calendar.JULIAN)
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    return day + (153 * m + 2) // 5 + 365 * y + y // 4 - 32083


def jdn_to_julian(jdn: int) -> tuple[int, int, int]:
    """Convert a JDN to (astronomical year, month, day) in the Julian calendar."""
    c = jdn + 32082
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153

    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = d - 4800 + m // 10
    return year, month, day
