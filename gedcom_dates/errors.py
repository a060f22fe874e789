"""Exception hierarchy for date parsing, validation and conversion.

Everything derives from DateError, which is a ValueError, so callers that
only care about "bad date" can catch one type.
"""


class DateError(ValueError):
    """Base class for all gedcom_dates errors."""


class InvalidMonthError(DateError):
    """A month number outside the range of a calendar (kernel level)."""

    def __init__(self, month, calendar):
        self.month = month
        self.calendar = calendar
        super().__init__(f"invalid month {month} for {calendar} calendar")


class DateValidationError(DateError):
    """A structurally valid date that cannot exist (e.g. 30 FEB)."""


class DateConversionError(DateError):
    """A date too incomplete, or in the wrong calendar, for a conversion."""


# --- Parse errors ---

class DateParseError(DateError):
    """Raised by parse_date. Carries the text that failed to parse."""

    def __init__(self, message: str, original: str = ""):
        self.original = original
        super().__init__(message)


class EmptyDateError(DateParseError):
    pass


class InvalidYearError(DateParseError):
    pass


class InvalidDayError(DateParseError):
    pass


class InvalidMonthForCalendarError(DateParseError):

    def __init__(self, code: str, calendar, original: str = ""):
        self.code = code
        self.calendar = calendar
        super().__init__(f"invalid month code '{code}' for {calendar} calendar", original)


class TooManyComponentsError(DateParseError):
    pass


class MissingRangeDelimiterError(DateParseError):
    pass


class InvalidRangeEndpointError(DateParseError):
    pass


class InvalidDualYearFormatError(DateParseError):
    pass


class UnsupportedCalendarError(DateParseError):
    pass
