"""Tests for the GEDCOM date grammar."""

import pytest

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
)
from gedcom_dates.parser import FRENCH_MONTHS, GREGORIAN_MONTHS, HEBREW_MONTHS, parse_date


# ============================================================
# Exact and partial dates
# ============================================================

class TestSimpleDates:

    def test_exact_full_date(self):
        result = parse_date("15 MAR 1895")
        assert type(result) is CalendarDate
        assert (result.day, result.month, result.year) == (15, 3, 1895)
        assert result.calendar is Calendar.GREGORIAN
        assert result.modifier is Modifier.NONE
        assert result.is_complete

    def test_month_year(self):
        result = parse_date("MAR 1895")
        assert (result.day, result.month, result.year) == (0, 3, 1895)
        assert not result.is_complete

    def test_year_only(self):
        result = parse_date("1895")
        assert (result.day, result.month, result.year) == (0, 0, 1895)

    def test_all_months(self):
        for code, number in GREGORIAN_MONTHS.items():
            assert parse_date(f"{code} 1900").month == number, code

    def test_case_insensitive_month(self):
        assert parse_date("15 mar 1895").month == 3

    def test_original_kept_verbatim(self):
        text = "  15   MAR  1895 "
        result = parse_date(text)
        assert result.original == text
        assert str(result) == text
        assert result.year == 1895

    def test_leading_zero_day(self):
        assert parse_date("05 JAN 1900").day == 5


# ============================================================
# Modifiers
# ============================================================

class TestModifiers:

    @pytest.mark.parametrize("text,modifier", [
        ("ABT 1905", Modifier.ABOUT),
        ("CAL 1890", Modifier.CALCULATED),
        ("EST 1900", Modifier.ESTIMATED),
        ("BEF 1920", Modifier.BEFORE),
        ("AFT 1890", Modifier.AFTER),
        ("FROM 1920", Modifier.FROM),
        ("TO 1945", Modifier.TO),
        ("abt 1905", Modifier.ABOUT),
    ])
    def test_single_date_modifiers(self, text, modifier):
        result = parse_date(text)
        assert type(result) is CalendarDate
        assert result.modifier is modifier

    def test_about_with_full_date(self):
        result = parse_date("ABT 15 MAR 1895")
        assert (result.day, result.month, result.year) == (15, 3, 1895)
        assert result.modifier is Modifier.ABOUT


# ============================================================
# Ranges and periods
# ============================================================

class TestRanges:

    def test_between(self):
        result = parse_date("BET 1890 AND 1900")
        assert isinstance(result, DateRange)
        assert result.modifier is Modifier.BETWEEN
        assert result.year == 1890
        assert result.end.year == 1900
        assert result.end.original == "1900"
        assert result.original == "BET 1890 AND 1900"

    def test_from_to(self):
        result = parse_date("FROM 12 JAN 1920 TO MAR 1945")
        assert isinstance(result, DateRange)
        assert result.modifier is Modifier.FROM_TO
        assert (result.day, result.month, result.year) == (12, 1, 1920)
        assert (result.end.day, result.end.month, result.end.year) == (0, 3, 1945)

    def test_lowercase_delimiters(self):
        assert parse_date("bet 1890 and 1900").end.year == 1900
        assert parse_date("from 1920 to 1945").modifier is Modifier.FROM_TO

    def test_start_property(self):
        start = parse_date("BET 1890 AND 1900").start
        assert type(start) is CalendarDate
        assert start.year == 1890
        assert start.modifier is Modifier.NONE

    def test_endpoint_with_bc(self):
        result = parse_date("BET 100 BC AND 50 BC")
        assert result.is_bc and result.end.is_bc


# ============================================================
# Interpreted dates and phrases
# ============================================================

class TestInterpretedAndPhrases:

    def test_interpreted(self):
        result = parse_date("INT 1895 (about five years old in 1900 census)")
        assert isinstance(result, InterpretedDate)
        assert result.is_interpreted
        assert result.modifier is Modifier.INTERPRETED
        assert result.year == 1895
        assert result.interpreted_from == "about five years old in 1900 census"

    def test_interpreted_nested_parentheses(self):
        result = parse_date("INT 1 JAN 1900 (census (partial) record)")
        assert result.interpreted_from == "census (partial) record"
        assert result.day == 1

    def test_interpreted_without_phrase(self):
        result = parse_date("INT 1900")
        assert result.year == 1900
        assert result.interpreted_from == ""

    def test_interpreted_unclosed_phrase(self):
        assert parse_date("INT 1900 (census").interpreted_from == "census"

    def test_phrase(self):
        result = parse_date("(Stillborn)")
        assert isinstance(result, DatePhrase)
        assert result.is_phrase
        assert not result.is_interpreted
        assert result.phrase == "Stillborn"
        assert result.original == "(Stillborn)"

    def test_phrase_text_kept_verbatim(self):
        result = parse_date("  (born   at sea)\t")
        assert result.phrase == "born   at sea"
        assert result.original == "  (born   at sea)\t"

    def test_phrase_has_no_components(self):
        result = parse_date("(sometime in 1900)")
        assert not isinstance(result, CalendarDate)
        assert result.to_jdn() is None


# ============================================================
# Dual dating and B.C.
# ============================================================

class TestDualYearsAndBC:

    @pytest.mark.parametrize("text,year,dual", [
        ("21 FEB 1750/51", 1750, 1751),
        ("1750/1751", 1750, 1751),
        ("1799/00", 1799, 1700),
        ("1899/01", 1899, 1801),
        ("1699/1700", 1699, 1700),
    ])
    def test_dual_years(self, text, year, dual):
        result = parse_date(text)
        assert (result.year, result.dual_year) == (year, dual)

    def test_two_digit_dual_year_keeps_century(self):
        assert parse_date("31 DEC 1799/00").dual_year == 1700
        assert parse_date("1700/99").dual_year == 1799

    def test_dual_year_bc(self):
        result = parse_date("45/44 BC")
        assert (result.year, result.dual_year, result.is_bc) == (45, 44, True)

    @pytest.mark.parametrize("suffix", ["BC", "B.C.", "BCE", "B.C.E.", "bc"])
    def test_bc_suffixes(self, suffix):
        result = parse_date(f"15 MAR 44 {suffix}")
        assert result.is_bc
        assert (result.day, result.month, result.year) == (15, 3, 44)

    def test_ad_by_default(self):
        assert not parse_date("44").is_bc


# ============================================================
# Calendar escapes
# ============================================================

class TestCalendarEscapes:

    def test_julian(self):
        result = parse_date("@#DJULIAN@ 4 OCT 1582")
        assert result.calendar is Calendar.JULIAN
        assert (result.day, result.month, result.year) == (4, 10, 1582)

    def test_gregorian_explicit(self):
        assert parse_date("@#DGREGORIAN@ 1900").calendar is Calendar.GREGORIAN

    def test_hebrew(self):
        result = parse_date("@#DHEBREW@ 1 TSH 5785")
        assert result.calendar is Calendar.HEBREW
        assert (result.day, result.month, result.year) == (1, 1, 5785)

    def test_all_hebrew_months(self):
        for code, number in HEBREW_MONTHS.items():
            assert parse_date(f"@#DHEBREW@ {code} 5784").month == number, code

    def test_french_republican(self):
        result = parse_date("@#DFRENCH R@ 1 VEND 1")
        assert result.calendar is Calendar.FRENCH_REPUBLICAN
        assert (result.day, result.month, result.year) == (1, 1, 1)

    def test_all_french_months(self):
        for code, number in FRENCH_MONTHS.items():
            assert parse_date(f"@#DFRENCH R@ {code} 3").month == number, code

    def test_escape_name_case_insensitive(self):
        assert parse_date("@#Djulian@ 1700").calendar is Calendar.JULIAN

    def test_escape_before_modifier(self):
        result = parse_date("@#DJULIAN@ ABT 1700")
        assert result.calendar is Calendar.JULIAN
        assert result.modifier is Modifier.ABOUT

    def test_escape_after_modifier(self):
        result = parse_date("ABT @#DJULIAN@ 1700")
        assert result.calendar is Calendar.JULIAN
        assert result.modifier is Modifier.ABOUT

    def test_unknown_escape_is_not_a_calendar(self):
        with pytest.raises(DateParseError):
            parse_date("@#DROMAN@ 1900")


class TestCalendarPropagation:
    """Sub-dates inherit the enclosing calendar unless they carry their own."""

    def test_range_inherits_outer_escape(self):
        result = parse_date("@#DJULIAN@ BET 1700 AND 1710")
        assert result.calendar is Calendar.JULIAN
        assert result.end.calendar is Calendar.JULIAN

    def test_end_inherits_start_escape(self):
        result = parse_date("BET @#DJULIAN@ 1700 AND 1710")
        assert result.calendar is Calendar.JULIAN
        assert result.end.calendar is Calendar.JULIAN

    def test_end_escape_overrides(self):
        result = parse_date("FROM @#DJULIAN@ 1 JAN 1700 TO @#DGREGORIAN@ 1 JAN 1710")
        assert result.calendar is Calendar.JULIAN
        assert result.end.calendar is Calendar.GREGORIAN

    def test_hebrew_months_in_range(self):
        result = parse_date("@#DHEBREW@ BET TSH 5785 AND ELL 5785")
        assert (result.month, result.end.month) == (1, 13)

    def test_interpreted_inherits_escape(self):
        result = parse_date("@#DHEBREW@ INT 1 TSH 5785 (Rosh Hashanah)")
        assert result.calendar is Calendar.HEBREW
        assert result.interpreted_from == "Rosh Hashanah"


# ============================================================
# Errors
# ============================================================

class TestParseErrors:

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_empty(self, text):
        with pytest.raises(EmptyDateError):
            parse_date(text)

    def test_none(self):
        with pytest.raises(EmptyDateError):
            parse_date(None)

    def test_not_a_string(self):
        with pytest.raises(TypeError):
            parse_date(1900)

    @pytest.mark.parametrize("text,error", [
        ("1 2 JAN 1900", TooManyComponentsError),
        ("32 JAN 1900", InvalidDayError),
        ("0 JAN 1900", InvalidDayError),
        ("x JAN 1900", InvalidDayError),
        ("@#DFRENCH R@ 31 VEND 1", InvalidDayError),
        ("15 XYZ 1900", InvalidMonthForCalendarError),
        ("1 TSH 5785", InvalidMonthForCalendarError),
        ("@#DHEBREW@ 1 JAN 5785", InvalidMonthForCalendarError),
        ("JAN 19x0", InvalidYearError),
        ("0", InvalidYearError),
        ("-5", InvalidYearError),
        ("1234567890", InvalidYearError),
        ("1750/5", InvalidDualYearFormatError),
        ("1750/51/52", InvalidDualYearFormatError),
        ("1750/ab", InvalidDualYearFormatError),
        ("50/00 BC", InvalidDualYearFormatError),
        ("BET 1890", MissingRangeDelimiterError),
        ("BET 1890 AND XYZ 1900", InvalidRangeEndpointError),
        ("FROM 1 1920 TO 1945", InvalidRangeEndpointError),
        ("INT (just a phrase)", EmptyDateError),
        ("ABT", EmptyDateError),
        ("BC", EmptyDateError),
        ("@#DJULIAN@", EmptyDateError),
    ])
    def test_error_types(self, text, error):
        with pytest.raises(error) as exc_info:
            parse_date(text)
        assert isinstance(exc_info.value, DateParseError)
        assert isinstance(exc_info.value, ValueError)

    def test_invalid_month_names_code_and_calendar(self):
        with pytest.raises(InvalidMonthForCalendarError) as exc_info:
            parse_date("@#DHEBREW@ 1 JAN 5785")
        assert exc_info.value.code == "JAN"
        assert exc_info.value.calendar is Calendar.HEBREW
        assert "JAN" in str(exc_info.value)
        assert "Hebrew" in str(exc_info.value)

    def test_error_carries_original(self):
        with pytest.raises(DateParseError) as exc_info:
            parse_date("BET 1890 AND XYZ 1900")
        assert exc_info.value.original == "BET 1890 AND XYZ 1900"

    def test_range_endpoint_error_chains_cause(self):
        with pytest.raises(InvalidRangeEndpointError) as exc_info:
            parse_date("BET 1890 AND XYZ 1900")
        assert isinstance(exc_info.value.__cause__, InvalidMonthForCalendarError)


class TestFuzz:
    """Malformed input must always fail with a DateParseError."""

    ALPHABET = (
        "0123456789 /().@#DABCEFGJLNORSTUVWXYZabc\t"
        # control, non-breaking and zero-width spaces, combining marks, non-ASCII digits
        "\x00\x1f\x7f\x85\u00a0\u2003\u3000\u200b\ufeff\u0301\u0308"
        "\u00e9\u00df\u0130\u0661\u0969\uff11\u216b\ud800"
    )
    TOKENS = [
        "BET", "AND", "FROM", "TO", "INT", "ABT", "BEF", "BC", "B.C.",
        "@#DJULIAN@", "@#DHEBREW@", "@#DFRENCH R@", "@#D", "@",
        "JAN", "TSH", "ADS", "VEND", "COMP", "(", ")", "/", "1750/51",
        "1", "31", "0", "99999999999", "1900",
        "\u0661\u0668\u0660\u0660", "\uff11\uff19\uff10\uff10", "\uff2a\uff21\uff2e",
        "JAN\u0301", "\u00b2", "(\u00e9t\u00e9)", "@#DJUL\u0130AN@",
    ]

    def _check(self, text):
        try:
            result = parse_date(text)
        except DateParseError:
            return
        assert isinstance(result, Date)
        assert result.original == text

    def test_random_characters(self, rng):
        for _ in range(3000):
            length = rng.randint(0, 30)
            self._check("".join(rng.choice(self.ALPHABET) for _ in range(length)))

    def test_random_token_sequences(self, rng):
        for _ in range(3000):
            tokens = [rng.choice(self.TOKENS) for _ in range(rng.randint(1, 7))]
            self._check(" ".join(tokens))

    def test_random_code_points(self, rng):
        for _ in range(3000):
            length = rng.randint(0, 20)
            self._check("".join(chr(rng.randint(0, 0x10FFFF)) for _ in range(length)))

    @pytest.mark.parametrize("text", [
        "١٨٠٠",  # Arabic-Indic 1800
        "１９００",  # fullwidth 1900
        "1 JAN ²000",
        "٣ JAN 1900",
    ])
    def test_non_ascii_digits_rejected(self, text):
        with pytest.raises(DateParseError):
            parse_date(text)
