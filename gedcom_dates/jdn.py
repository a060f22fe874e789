"""Calendar-independent entry points to the JDN conversion kernel."""

from gedcom_dates.calendars import (
    Calendar,
    gregorian_days_in_month,
    gregorian_to_jdn,
    jdn_to_gregorian,
    jdn_to_julian,
    julian_days_in_month,
    julian_to_jdn,
)
from gedcom_dates.french import french_days_in_month, french_to_jdn, jdn_to_french
from gedcom_dates.hebrew import hebrew_days_in_month, hebrew_to_jdn, jdn_to_hebrew

_TO_JDN = {
    Calendar.GREGORIAN: gregorian_to_jdn,
    Calendar.JULIAN: julian_to_jdn,
    Calendar.HEBREW: hebrew_to_jdn,
    Calendar.FRENCH_REPUBLICAN: french_to_jdn,
}

_FROM_JDN = {
    Calendar.GREGORIAN: jdn_to_gregorian,
    Calendar.JULIAN: jdn_to_julian,
    Calendar.HEBREW: jdn_to_hebrew,
    Calendar.FRENCH_REPUBLICAN: jdn_to_french,
}

_DAYS_IN_MONTH = {
    Calendar.GREGORIAN: gregorian_days_in_month,
    Calendar.JULIAN: julian_days_in_month,
    Calendar.HEBREW: hebrew_days_in_month,
    Calendar.FRENCH_REPUBLICAN: french_days_in_month,
}


def to_jdn(calendar: Calendar, year: int, month: int, day: int) -> int:
    """Convert (year, month, day) in `calendar` to a Julian Day Number.

    Gregorian and Julian years are astronomical (0 = 1 BC).
    """
    return _TO_JDN[calendar](year, month, day)


def from_jdn(calendar: Calendar, jdn: int) -> tuple[int, int, int]:
    """Convert a Julian Day Number to (year, month, day) in `calendar`."""
    return _FROM_JDN[calendar](jdn)


def days_in_month(calendar: Calendar, year: int, month: int) -> int:
    return _DAYS_IN_MONTH[calendar](year, month)
