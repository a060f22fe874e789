"""
Hebrew (lunisolar) calendar arithmetic.

Month numbering follows GEDCOM: Tishrei=1 ... Elul=13. Adar is month 6
(Adar I in leap years) and Adar II is month 7, which only exists in leap
years; in common years month 7 has zero days and is skipped.

The year start follows Reingold's reference implementation
("Calendrical Calculations"): the molad of Tishrei is computed from the
mean lunation of 29d 12h 793 parts (1080 parts per hour), then the four
dehiyot postpone Rosh Hashanah. The order of the checks matters; do not
rearrange them.
"""

from gedcom_dates.calendars import Calendar, check_month

# 1 Tishrei AM 1 (Monday, 7 Oct 3761 BC Julian)
HEBREW_EPOCH = 347998

PARTS_PER_HOUR = 1080
MOLAD_ZAKEN_PARTS = 18 * PARTS_PER_HOUR       # noon
GATARAD_PARTS = 9 * PARTS_PER_HOUR + 204      # Tuesday 9h 204p
BETUTAKPAT_PARTS = 15 * PARTS_PER_HOUR + 589  # Monday 15h 589p

# Ratio of days to years over a full cycle (35975351 / 98496 ~ 365.2468)
_CYCLE_DAYS = 35975351
_CYCLE_YEARS = 98496


def is_hebrew_leap_year(year: int) -> bool:
    """Years 3, 6, 8, 11, 14, 17, 19 of each 19-year cycle have 13 months."""
    return (7 * year + 1) % 19 < 7


def hebrew_months_in_year(year: int) -> int:
    return 13 if is_hebrew_leap_year(year) else 12


def _elapsed_days(year: int) -> int:
    """Days from the Sunday before the epoch to 1 Tishrei of `year`.

    Day-of-week of the result is `value % 7` with 0 = Sunday.
    """
    cycles, year_in_cycle = divmod(year - 1, 19)
    months_elapsed = 235 * cycles + 12 * year_in_cycle + (7 * year_in_cycle + 1) // 19
    parts_elapsed = 204 + 793 * (months_elapsed % 1080)
    hours_elapsed = (
        5 + 12 * months_elapsed + 793 * (months_elapsed // 1080)
        + parts_elapsed // PARTS_PER_HOUR
    )
    conjunction_day = 1 + 29 * months_elapsed + hours_elapsed // 24
    conjunction_parts = PARTS_PER_HOUR * (hours_elapsed % 24) + parts_elapsed % PARTS_PER_HOUR

    weekday = conjunction_day % 7
    if (
        conjunction_parts >= MOLAD_ZAKEN_PARTS
        or (weekday == 2 and conjunction_parts >= GATARAD_PARTS
            and not is_hebrew_leap_year(year))
        or (weekday == 1 and conjunction_parts >= BETUTAKPAT_PARTS
            and is_hebrew_leap_year(year - 1))
    ):
        day = conjunction_day + 1
    else:
        day = conjunction_day

    # Lo ADU Rosh: never Sunday, Wednesday or Friday
    if day % 7 in (0, 3, 5):
        day += 1
    return day


def hebrew_delay(year: int) -> int:
    """Days from the epoch (1 Tishrei AM 1) to 1 Tishrei of `year`."""
    return _elapsed_days(year) - _elapsed_days(1)


def hebrew_days_in_year(year: int) -> int:
    """
    Length of a Hebrew year.

    Common years are 353 (deficient), 354 (regular) or 355 (complete);
    leap years are 383, 384 or 385.
    """
    return _elapsed_days(year + 1) - _elapsed_days(year)


def hebrew_days_in_month(year: int, month: int) -> int:
    """Days in a Hebrew month (29 or 30; 0 for Adar II in a common year)."""
    check_month(month, Calendar.HEBREW)
    leap = is_hebrew_leap_year(year)
    year_type = hebrew_days_in_year(year) - (383 if leap else 353)

    if month in (1, 5, 8, 10, 12):      # Tishrei, Shevat, Nisan, Sivan, Av
        return 30
    if month in (4, 9, 11, 13):         # Tevet, Iyar, Tammuz, Elul
        return 29
    if month == 2:                      # Cheshvan: long only in complete years
        return 30 if year_type == 2 else 29
    if month == 3:                      # Kislev: short only in deficient years
        return 29 if year_type == 0 else 30
    if month == 6:                      # Adar / Adar I
        return 30 if leap else 29
    return 29 if leap else 0            # Adar II


def hebrew_to_jdn(year: int, month: int, day: int) -> int:
    """
    Convert a Hebrew date to a Julian Day Number.

    Args:
        year: Hebrew year (AM)
        month: 1-13, Tishrei=1
        day: Day of month; not range-checked

    Returns:
        JDN, e.g. hebrew_to_jdn(5785, 1, 1) == 2460587 (3 Oct 2024)
    """
    check_month(month, Calendar.HEBREW)
    days_before_month = sum(hebrew_days_in_month(year, m) for m in range(1, month))
    return HEBREW_EPOCH + hebrew_delay(year) + days_before_month + day - 1


def jdn_to_hebrew(jdn: int) -> tuple[int, int, int]:
    """Convert a JDN to a Hebrew (year, month, day).

    There is no closed-form inverse. The year is estimated from the mean
    year length and corrected by a search that takes at most a couple of
    steps in either direction; the month is then found by walking at most
    13 months.
    """
    days = jdn - HEBREW_EPOCH
    year = (days * _CYCLE_YEARS) // _CYCLE_DAYS + 1
    while hebrew_delay(year) > days:
        year -= 1
    while hebrew_delay(year + 1) <= days:
        year += 1

    remaining = days - hebrew_delay(year)
    month = 1
    for month in range(1, 14):
        length = hebrew_days_in_month(year, month)
        if remaining < length:
            break
        remaining -= length
    return year, month, remaining + 1
