"""GEDCOM date parsing and cross-calendar date arithmetic.

Parses GEDCOM DATE_VALUE strings (modifiers, ranges, periods, dual dates,
B.C. years, calendar escapes, phrases) into immutable Date values, and
converts between the Gregorian, Julian, Hebrew and French Republican
calendars through Julian Day Numbers.

    >>> from gedcom_dates import parse_date
    >>> parse_date("@#DJULIAN@ 4 OCT 1582").compare(parse_date("14 OCT 1582"))
    0
"""

from gedcom_dates.calendars import (
    Calendar,
    astronomical_year,
    from_astronomical_year,
    gregorian_days_in_month,
    gregorian_to_jdn,
    is_gregorian_leap_year,
    is_julian_leap_year,
    jdn_to_gregorian,
    jdn_to_julian,
    julian_days_in_month,
    julian_to_jdn,
)
from gedcom_dates.date import (
    CalendarDate,
    Date,
    DatePhrase,
    DateRange,
    InterpretedDate,
    Modifier,
    compare,
    is_after,
    is_before,
    is_equal,
    years_between,
)
from gedcom_dates.errors import (
    DateConversionError,
    DateError,
    DateParseError,
    DateValidationError,
    EmptyDateError,
    InvalidDayError,
    InvalidDualYearFormatError,
    InvalidMonthError,
    InvalidMonthForCalendarError,
    InvalidRangeEndpointError,
    InvalidYearError,
    MissingRangeDelimiterError,
    TooManyComponentsError,
    UnsupportedCalendarError,
)
from gedcom_dates.french import french_days_in_month, french_to_jdn, is_french_leap_year, jdn_to_french
from gedcom_dates.hebrew import (
    hebrew_days_in_month,
    hebrew_days_in_year,
    hebrew_delay,
    hebrew_months_in_year,
    hebrew_to_jdn,
    is_hebrew_leap_year,
    jdn_to_hebrew,
)
from gedcom_dates.jdn import days_in_month, from_jdn, to_jdn
from gedcom_dates.parser import parse_date

__version__ = "0.1.0"
