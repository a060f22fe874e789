"""Audit the dates in a GEDCOM file for errors and implausible combinations.

Checks:
- DATE payloads that do not parse
- Impossible calendar dates (e.g. 30 FEB 1900)
- Death before birth, lifespans over the configured maximum
- Parents too young (or too old) at a child's birth, children born before a parent
- Spouses under the minimum marriage age

Usage:
    python -m gedcom_dates.scripts.audit_dates family.ged
    python -m gedcom_dates.scripts.audit_dates family.ged --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from gedcom_dates import config
from gedcom_dates.errors import DateValidationError
from gedcom_dates.importers.gedcom_parser import ParsedGedcom, parse_gedcom
from gedcom_dates.validation import (
    validate_birth_before_death,
    validate_lifespan,
    validate_marriage_dates,
    validate_parent_child_dates,
)

logger = logging.getLogger(__name__)

# ANSI color codes
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
BOLD = "\033[1m"
RESET = "\033[0m"


def _green(text: str) -> str:
    return f"{GREEN}{text}{RESET}"


def _yellow(text: str) -> str:
    return f"{YELLOW}{text}{RESET}"


def _red(text: str) -> str:
    return f"{RED}{text}{RESET}"


def _bold(text: str) -> str:
    return f"{BOLD}{text}{RESET}"


def _flag(kind: str, xref: str, detail: str) -> dict:
    return {"type": kind, "xref": xref, "detail": detail}


def _check(flags: list, kind: str, xref: str, check, *args) -> None:
    try:
        check(*args)
    except DateValidationError as exc:
        flags.append(_flag(kind, xref, str(exc)))


def audit_dates(
    parsed: ParsedGedcom,
    min_parent_age: int = config.MIN_PARENT_AGE,
    max_parent_age: int = config.MAX_PARENT_AGE,
    min_marriage_age: int = config.MIN_MARRIAGE_AGE,
    max_lifespan: int = config.MAX_LIFESPAN,
) -> dict:
    """Run every date check over a parsed GEDCOM file.

    Returns:
        Summary dict with `checked` (number of parsed dates), `invalid`
        (unparseable or impossible dates) and `implausible` (date pairs
        that fail a plausibility check).
    """
    invalid: list[dict] = []
    implausible: list[dict] = []
    checked = 0

    for xref, event in parsed.date_errors():
        invalid.append(_flag("UNPARSEABLE", xref, f"{event.event_type}: '{event.raw_date}' ({event.error})"))

    records = list(parsed.individuals.values()) + list(parsed.families.values())
    for record in records:
        for event in record.events.values():
            if event.date is None:
                continue
            checked += 1
            try:
                event.date.validate()
            except DateValidationError as exc:
                invalid.append(_flag("IMPOSSIBLE_DATE", record.xref_id, f"{event.event_type}: {exc}"))

    for indi in parsed.individuals.values():
        _check(implausible, "DEATH_BEFORE_BIRTH", indi.xref_id,
               validate_birth_before_death, indi.birth, indi.death)
        _check(implausible, "LIFESPAN", indi.xref_id,
               validate_lifespan, indi.birth, indi.death, max_lifespan)
        for parent in parsed.get_parents(indi):
            _check(implausible, "PARENT_AGE", indi.xref_id,
                   validate_parent_child_dates, parent.birth, indi.birth,
                   min_parent_age, max_parent_age)

    for fam in parsed.families.values():
        husband = parsed.individuals.get(fam.husband_xref)
        wife = parsed.individuals.get(fam.wife_xref)
        _check(implausible, "MARRIAGE_AGE", fam.xref_id,
               validate_marriage_dates, fam.marriage,
               husband.birth if husband else None,
               wife.birth if wife else None,
               min_marriage_age)

    return {
        "source_file": parsed.source_file,
        "checked": checked,
        "invalid": invalid,
        "implausible": implausible,
    }


def print_report(result: dict) -> None:
    """Print the date audit report."""
    invalid = result["invalid"]
    implausible = result["implausible"]

    print(f"\n{'=' * 60}")
    print(f"  {_bold('GEDCOM Date Audit')}  {result['source_file']}")
    print(f"{'=' * 60}")
    print(f"  Dates checked: {result['checked']}")

    if invalid:
        print(f"\n  {_red(f'INVALID: {len(invalid)} flags')}")
        for flag in invalid:
            print(f"    {_red('X')} {flag['xref']:<8} {flag['detail']}")
    else:
        print(f"\n  {_green('INVALID: 0 flags')}")

    if implausible:
        print(f"\n  {_yellow(f'IMPLAUSIBLE: {len(implausible)} flags')}")
        for flag in implausible:
            print(f"    {_yellow('?')} {flag['xref']:<8} [{flag['type']}] {flag['detail']}")
    else:
        print(f"\n  {_green('IMPLAUSIBLE: 0 flags')}")

    print(f"{'=' * 60}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Audit the dates in a GEDCOM file for errors and implausible combinations",
    )
    parser.add_argument("gedcom_file", type=str, help="Path to a .ged file")
    parser.add_argument(
        "--min-parent-age",
        type=int,
        default=config.MIN_PARENT_AGE,
        help=f"Minimum parent age at a child's birth (default: {config.MIN_PARENT_AGE})",
    )
    parser.add_argument(
        "--max-parent-age",
        type=int,
        default=config.MAX_PARENT_AGE,
        help=f"Maximum parent age at a child's birth (default: {config.MAX_PARENT_AGE})",
    )
    parser.add_argument(
        "--min-marriage-age",
        type=int,
        default=config.MIN_MARRIAGE_AGE,
        help=f"Minimum age at marriage (default: {config.MIN_MARRIAGE_AGE})",
    )
    parser.add_argument(
        "--max-lifespan",
        type=int,
        default=config.MAX_LIFESPAN,
        help=f"Maximum lifespan in years (default: {config.MAX_LIFESPAN})",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    path = Path(args.gedcom_file)
    if not path.exists():
        print(_red(f"ERROR: {path} not found"))
        return 1

    parsed = parse_gedcom(path)
    if not parsed.individuals:
        print(_red("No individuals found. Exiting."))
        return 1

    result = audit_dates(
        parsed,
        min_parent_age=args.min_parent_age,
        max_parent_age=args.max_parent_age,
        min_marriage_age=args.min_marriage_age,
        max_lifespan=args.max_lifespan,
    )
    if args.json:
        print(json.dumps(result, indent=2))
    else:
        print_report(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
