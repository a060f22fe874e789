"""
GEDCOM date values and date algebra.

A parsed date is one of four immutable variants:

- DatePhrase: free text in parentheses, "(stillborn)". No numeric fields.
- CalendarDate: exact or partial date, optionally with ABT/CAL/EST/BEF/AFT
  or a one-sided FROM/TO period.
- InterpretedDate: "INT 1850 (about eighteen fifty)".
- DateRange: "BET ... AND ..." or "FROM ... TO ..."; the CalendarDate
  fields describe the start, `end` holds the other endpoint.

Unknown components are 0 and precision only degrades top-down: a date can
lack a day, or a day and month, but never a month while keeping the day.

Ordering and conversions go through Julian Day Numbers (see jdn.py) only
when the two sides are in different calendars.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Optional

from gedcom_dates.calendars import (
    Calendar,
    astronomical_year,
    from_astronomical_year,
    gregorian_days_in_month,
    gregorian_to_jdn,
    jdn_to_gregorian,
)
from gedcom_dates.errors import DateConversionError, DateValidationError
from gedcom_dates.jdn import from_jdn, to_jdn

logger = logging.getLogger(__name__)


class Modifier(Enum):
    """Date modifiers; the value is the GEDCOM keyword."""
    NONE = ""
    ABOUT = "ABT"
    CALCULATED = "CAL"
    ESTIMATED = "EST"
    BEFORE = "BEF"
    AFTER = "AFT"
    BETWEEN = "BET"
    FROM = "FROM"
    TO = "TO"
    FROM_TO = "FROM TO"
    INTERPRETED = "INT"

    def __str__(self):
        return self.value


GREGORIAN_MONTH_NAMES = (
    "", "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_ASTRONOMICAL = (Calendar.GREGORIAN, Calendar.JULIAN)


@dataclass(frozen=True)
class Date:
    """Base of all parsed date variants.

    `original` is the text exactly as given to the parser; str() returns it
    so a date can be re-emitted without regenerating syntax.
    """
    original: str = ""

    is_phrase: ClassVar[bool] = False
    is_interpreted: ClassVar[bool] = False

    def __str__(self):
        return self.original

    def to_jdn(self) -> Optional[int]:
        """Julian Day Number of the date (start for ranges), or None without a year."""
        return None

    def compare(self, other: Optional["Date"]) -> int:
        return compare(self, other)

    def is_before(self, other: Optional["Date"]) -> bool:
        return is_before(self, other)

    def is_after(self, other: Optional["Date"]) -> bool:
        return is_after(self, other)

    def is_equal(self, other: Optional["Date"]) -> bool:
        return is_equal(self, other)

    def validate(self) -> None:
        """Raise DateValidationError if the date cannot exist. Phrases always pass."""

    def to_calendar(self, calendar: Calendar) -> "Date":
        raise DateConversionError(f"cannot convert date phrase '{self.original}' to {calendar}")

    def to_gregorian(self) -> "Date":
        return self.to_calendar(Calendar.GREGORIAN)

    def to_datetime(self) -> datetime:
        raise DateConversionError(f"cannot convert date phrase '{self.original}' to datetime")


@dataclass(frozen=True)
class DatePhrase(Date):
    """A free-text date, e.g. "(unknown)". `phrase` excludes the parentheses."""
    phrase: str = ""

    is_phrase: ClassVar[bool] = True


@dataclass(frozen=True)
class CalendarDate(Date):
    """An exact or partial date in one calendar.

    Attributes:
        day, month, year: 0 when unknown
        calendar: Calendar the components are expressed in
        is_bc: B.C. flag, meaningful only when year != 0
        dual_year: second year of a dual date ("1750/51" -> 1751), 0 if none
        modifier: NONE, ABOUT, CALCULATED, ESTIMATED, BEFORE, AFTER, FROM or TO
    """
    day: int = 0
    month: int = 0
    year: int = 0
    calendar: Calendar = Calendar.GREGORIAN
    is_bc: bool = False
    dual_year: int = 0
    modifier: Modifier = Modifier.NONE

    allowed_modifiers: ClassVar[frozenset] = frozenset({
        Modifier.NONE, Modifier.ABOUT, Modifier.CALCULATED, Modifier.ESTIMATED,
        Modifier.BEFORE, Modifier.AFTER, Modifier.FROM, Modifier.TO,
    })

    def __post_init__(self):
        if not isinstance(self.calendar, Calendar):
            raise ValueError(f"calendar must be a Calendar, got {self.calendar!r}")
        if self.modifier not in self.allowed_modifiers:
            raise ValueError(f"modifier {self.modifier!r} not allowed on {type(self).__name__}")
        if min(self.day, self.month, self.year, self.dual_year) < 0:
            raise ValueError("date components must be non-negative")
        if self.year == 0 and (self.month or self.day):
            raise ValueError("a date without a year cannot have a month or day")
        if self.month == 0 and self.day:
            raise ValueError("a date without a month cannot have a day")

    @property
    def is_complete(self) -> bool:
        return bool(self.day and self.month and self.year)

    def to_jdn(self) -> Optional[int]:
        if self.year == 0:
            return None
        year = self.year
        if self.calendar in _ASTRONOMICAL:
            year = astronomical_year(self.year, self.is_bc)
        return to_jdn(self.calendar, year, self.month or 1, self.day or 1)

    def validate(self) -> None:
        """
        Check a complete Gregorian date for day overflow (e.g. 30 FEB 2023).

        The date is normalized through JDN arithmetic; if the month or day
        changes, the input overflowed. Partial dates and other calendars are
        not checked.
        """
        if not self.is_complete or self.calendar is not Calendar.GREGORIAN:
            return
        if self.month > 12:
            raise DateValidationError(f"invalid date: month {self.month} in '{self.original}'")

        astro = astronomical_year(self.year, self.is_bc)
        _, month, day = jdn_to_gregorian(gregorian_to_jdn(astro, self.month, self.day))
        if (month, day) == (self.month, self.day):
            return

        name = GREGORIAN_MONTH_NAMES[self.month]
        limit = gregorian_days_in_month(astro, self.month)
        era = " BC" if self.is_bc else ""
        if self.day > limit:
            raise DateValidationError(
                f"invalid date: {name} has {limit} days in {self.year}{era}, got day {self.day}"
            )
        raise DateValidationError(f"invalid date: {self.day} {name} {self.year}{era}")

    def _converted_fields(self, calendar: Calendar) -> dict:
        if self.year == 0:
            raise DateConversionError(
                f"cannot convert '{self.original}' to {calendar}: year is missing"
            )
        year, month, day = from_jdn(calendar, self.to_jdn())
        is_bc = False
        if calendar in _ASTRONOMICAL:
            year, is_bc = from_astronomical_year(year)
        elif year < 1:
            raise DateConversionError(
                f"'{self.original}' falls before the epoch of the {calendar} calendar"
            )

        # Keep the source precision even though the JDN was computed in full
        if self.month == 0:
            month = day = 0
        elif self.day == 0:
            day = 0
        return {
            "year": year, "month": month, "day": day,
            "calendar": calendar, "is_bc": is_bc, "dual_year": 0,
        }

    def to_calendar(self, calendar: Calendar) -> "CalendarDate":
        """
        Return the same date expressed in another calendar.

        `original` is kept unchanged. Dual years are dropped because they
        only make sense in the source calendar.

        Raises:
            DateConversionError: if the year is unknown, or the date falls
                before the target calendar's epoch
        """
        if calendar is self.calendar:
            return replace(self)
        return replace(self, **self._converted_fields(calendar))

    def to_datetime(self) -> datetime:
        """
        Convert a complete Gregorian A.D. date to a UTC midnight datetime.

        Stricter than to_gregorian(): the calendar must already be
        Gregorian and day, month and year must all be known.
        """
        if self.calendar is not Calendar.GREGORIAN:
            raise DateConversionError(
                f"to_datetime only supports the Gregorian calendar, got {self.calendar}"
            )
        for name in ("year", "month", "day"):
            if getattr(self, name) == 0:
                raise DateConversionError(f"incomplete date: {name} is missing")
        if self.is_bc:
            raise DateConversionError(f"B.C. date '{self.original}' cannot be a datetime")
        try:
            return datetime(self.year, self.month, self.day, tzinfo=timezone.utc)
        except (ValueError, OverflowError) as exc:
            raise DateConversionError(f"cannot convert '{self.original}' to datetime: {exc}") from exc


@dataclass(frozen=True)
class InterpretedDate(CalendarDate):
    """INT date; `interpreted_from` is the phrase it was interpreted from."""
    modifier: Modifier = Modifier.INTERPRETED
    interpreted_from: str = ""

    is_interpreted: ClassVar[bool] = True
    allowed_modifiers: ClassVar[frozenset] = frozenset({Modifier.INTERPRETED})


@dataclass(frozen=True)
class DateRange(CalendarDate):
    """BET/AND range or FROM/TO period. The inherited fields are the start."""
    modifier: Modifier = Modifier.BETWEEN
    end: Optional[CalendarDate] = None

    allowed_modifiers: ClassVar[frozenset] = frozenset({Modifier.BETWEEN, Modifier.FROM_TO})

    def __post_init__(self):
        super().__post_init__()
        if not isinstance(self.end, CalendarDate) or isinstance(self.end, DateRange):
            raise ValueError("a date range needs a plain CalendarDate end")

    @property
    def start(self) -> CalendarDate:
        return CalendarDate(
            original=self.original, day=self.day, month=self.month, year=self.year,
            calendar=self.calendar, is_bc=self.is_bc, dual_year=self.dual_year,
        )

    def validate(self) -> None:
        super().validate()
        self.end.validate()

    def to_calendar(self, calendar: Calendar) -> "DateRange":
        if calendar is self.calendar and calendar is self.end.calendar:
            return replace(self)
        fields = self._converted_fields(calendar) if calendar is not self.calendar else {}
        return replace(self, end=self.end.to_calendar(calendar), **fields)


# --- Algebra ---

def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _parts(d: Date) -> tuple:
    """(calendar, year, month, day, is_bc) with phrases treated as yearless."""
    if isinstance(d, CalendarDate):
        return d.calendar, d.year, d.month, d.day, d.is_bc and d.year != 0
    return None, 0, 0, 0, False


def compare(a: Optional[Date], b: Optional[Date]) -> int:
    """
    Order two dates: -1 if a < b, 0 if equal, 1 if a > b.

    Dates in different calendars are compared by JDN, with a missing month
    or day taken as 1. When either side has no year the comparison falls
    back to components: B.C. before A.D., B.C. years reversed (100 BC is
    after 200 BC), missing month/day treated as 1. None sorts first.
    """
    if a is None or b is None:
        return _sign((a is not None) - (b is not None))

    cal_a, year_a, month_a, day_a, bc_a = _parts(a)
    cal_b, year_b, month_b, day_b, bc_b = _parts(b)

    if cal_a is not cal_b:
        jdn_a, jdn_b = a.to_jdn(), b.to_jdn()
        if jdn_a is not None and jdn_b is not None:
            return _sign(jdn_a - jdn_b)
        logger.debug("No JDN for '%s' vs '%s'; comparing components", a, b)

    if bc_a != bc_b:
        return -1 if bc_a else 1

    cmp = _sign(year_a - year_b)
    if cmp:
        return -cmp if bc_a else cmp
    cmp = _sign(max(month_a, 1) - max(month_b, 1))
    if cmp:
        return cmp
    return _sign(max(day_a, 1) - max(day_b, 1))


def is_before(a: Optional[Date], b: Optional[Date]) -> bool:
    if a is None or b is None:
        return False
    return compare(a, b) < 0


def is_after(a: Optional[Date], b: Optional[Date]) -> bool:
    if a is None or b is None:
        return False
    return compare(a, b) > 0


def is_equal(a: Optional[Date], b: Optional[Date]) -> bool:
    if a is None or b is None:
        return False
    return compare(a, b) == 0


def years_between(d1: Optional[Date], d2: Optional[Date]) -> tuple[int, bool]:
    """
    Whole years between two dates, always non-negative.

    Returns:
        (years, exact). exact is True when both dates are complete Gregorian
        dates, in which case the count only includes anniversaries that have
        been reached. Otherwise the year numbers are subtracted as written,
        whatever the calendars; convert with to_gregorian() first to get a
        count across calendars.

    Raises:
        DateConversionError: if either date has no year
    """
    for d in (d1, d2):
        if not isinstance(d, CalendarDate) or d.year == 0:
            raise DateConversionError("insufficient date information: both dates need a year")

    try:
        earlier, later = sorted((d1.to_datetime(), d2.to_datetime()))
    except DateConversionError:
        return abs(d1.year - d2.year), False

    years = later.year - earlier.year
    if (later.month, later.day) < (earlier.month, earlier.day):
        years -= 1
    return years, True
