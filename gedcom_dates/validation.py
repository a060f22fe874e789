"""Plausibility checks over pairs of life-event dates.

Each check is a no-op when the dates needed are missing, phrases, or too
incomplete to compare, and raises DateValidationError when they are
implausible. Built only on compare(), to_gregorian() and years_between().
"""

from typing import Optional

from gedcom_dates import config
from gedcom_dates.date import CalendarDate, Date, is_before, years_between
from gedcom_dates.errors import DateConversionError, DateValidationError


def _dated(*dates: Optional[Date]) -> bool:
    return all(isinstance(d, CalendarDate) and d.year for d in dates)


def _years(earlier: Date, later: Date) -> Optional[int]:
    # Year numbers only subtract within one calendar
    try:
        years, _ = years_between(earlier.to_gregorian(), later.to_gregorian())
    except DateConversionError:
        return None
    return years


def validate_birth_before_death(birth: Optional[Date], death: Optional[Date]) -> None:
    if _dated(birth, death) and is_before(death, birth):
        raise DateValidationError(
            f"death date ({death}) is before birth date ({birth})"
        )


def validate_lifespan(birth: Optional[Date], death: Optional[Date],
                      max_lifespan: int = config.MAX_LIFESPAN) -> None:
    if not _dated(birth, death):
        return
    years = _years(birth, death)
    if years is not None and years > max_lifespan:
        raise DateValidationError(
            f"lifespan of {years} years exceeds maximum of {max_lifespan}"
        )


def validate_parent_child_dates(
    parent_birth: Optional[Date],
    child_birth: Optional[Date],
    min_parent_age: int = config.MIN_PARENT_AGE,
    max_parent_age: Optional[int] = None,
) -> None:
    """
    Check the parent's age at the child's birth.

    Args:
        parent_birth: Parent's birth date
        child_birth: Child's birth date
        min_parent_age: Minimum biological age for parenthood
        max_parent_age: Optional upper bound (see config.MAX_PARENT_AGE)
    """
    if not _dated(parent_birth, child_birth):
        return
    if is_before(child_birth, parent_birth):
        raise DateValidationError(
            f"child born ({child_birth}) before parent ({parent_birth})"
        )

    years = _years(parent_birth, child_birth)
    if years is None:
        return
    if years < min_parent_age:
        raise DateValidationError(
            f"parent would have been {years} years old at child's birth (minimum: {min_parent_age})"
        )
    if max_parent_age is not None and years > max_parent_age:
        raise DateValidationError(
            f"parent would have been {years} years old at child's birth (maximum: {max_parent_age})"
        )


def validate_marriage_dates(
    marriage: Optional[Date],
    spouse_birth1: Optional[Date],
    spouse_birth2: Optional[Date],
    min_marriage_age: int = config.MIN_MARRIAGE_AGE,
) -> None:
    """Check both spouses were at least min_marriage_age at the marriage."""
    for label, birth in (("first", spouse_birth1), ("second", spouse_birth2)):
        if not _dated(marriage, birth):
            continue
        if is_before(marriage, birth):
            raise DateValidationError(
                f"{label} spouse was born ({birth}) after the marriage ({marriage})"
            )
        years = _years(birth, marriage)
        if years is not None and years < min_marriage_age:
            raise DateValidationError(
                f"{label} spouse would have been {years} years old at marriage "
                f"(minimum: {min_marriage_age})"
            )
