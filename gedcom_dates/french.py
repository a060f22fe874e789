"""
French Republican calendar arithmetic.

Twelve months of 30 days followed by 5 complementary days (6 in leap
years), which GEDCOM writes as month 13 (COMP). Year N starts on 22 Sep
of Gregorian year 1791+N for N=1, and is a leap year when Gregorian year
1792+N is one. This is the arithmetic (Romme-style) rule rather than the
historical equinox rule, so dates in years III-VII can differ by a day
from contemporary documents.
"""

from gedcom_dates.calendars import Calendar, check_month, is_gregorian_leap_year

# 1 Vendemiaire I = 22 Sep 1792 (Gregorian)
FRENCH_EPOCH = 2375840

# Mean Gregorian year as a ratio (146097 days per 400 years)
_CYCLE_DAYS = 146097
_CYCLE_YEARS = 400


def is_french_leap_year(year: int) -> bool:
    return is_gregorian_leap_year(1792 + year)


def french_days_in_month(year: int, month: int) -> int:
    check_month(month, Calendar.FRENCH_REPUBLICAN)
    if month <= 12:
        return 30
    return 6 if is_french_leap_year(year) else 5


def _gregorian_leaps_through(year: int) -> int:
    """Number of Gregorian leap years in 1..year (closed form)."""
    return year // 4 - year // 100 + year // 400


def _days_before_year(year: int) -> int:
    # Republican years 1..year-1 end in Gregorian years 1793..1791+year
    leap_days = _gregorian_leaps_through(1791 + year) - _gregorian_leaps_through(1792)
    return (year - 1) * 365 + leap_days


def french_to_jdn(year: int, month: int, day: int) -> int:
    """
    Convert a French Republican date to a Julian Day Number.

    Args:
        year: Republican year (1 = 1792-1793)
        month: 1-12, or 13 for the complementary days
        day: Day of month; not range-checked

    Returns:
        JDN, e.g. french_to_jdn(1, 1, 1) == 2375840
    """
    check_month(month, Calendar.FRENCH_REPUBLICAN)
    return FRENCH_EPOCH + _days_before_year(year) + (month - 1) * 30 + day - 1


def jdn_to_french(jdn: int) -> tuple[int, int, int]:
    """Convert a JDN to a French Republican (year, month, day).

    The year is estimated from the mean year length and corrected by a
    search of at most a step or two; month 13 holds the complementary days.
    """
    days = jdn - FRENCH_EPOCH
    year = (days * _CYCLE_YEARS) // _CYCLE_DAYS + 1
    while _days_before_year(year) > days:
        year -= 1
    while _days_before_year(year + 1) <= days:
        year += 1

    day_of_year = days - _days_before_year(year)
    month = min(day_of_year // 30 + 1, 13)
    return year, month, day_of_year - (month - 1) * 30 + 1
