"""GEDCOM file reader for date auditing.

Reads GEDCOM 5.5.1 files with the python-gedcom library and extracts the
life-event dates of individuals and families, parsed with
gedcom_dates.parse_date. Record decoding stays in python-gedcom; this
module only knows which tags carry dates.

Unparseable DATE payloads never abort the import: the raw text and the
parse error are kept on the event so callers can report them.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from gedcom_dates.date import Date
from gedcom_dates.errors import DateParseError
from gedcom_dates.parser import parse_date

logger = logging.getLogger(__name__)

INDIVIDUAL_EVENTS = {"BIRT": "birth", "CHR": "christening", "DEAT": "death", "BURI": "burial"}
FAMILY_EVENTS = {"MARR": "marriage", "DIV": "divorce"}


@dataclass
class GedcomEvent:
    """An event (birth, death, marriage, etc.) from a GEDCOM file."""
    event_type: str
    date: Optional[Date] = None
    place: Optional[str] = None
    raw_date: str = ""
    error: Optional[str] = None  # parse error for raw_date, if any


@dataclass
class GedcomIndividual:
    """A parsed individual from a GEDCOM file."""
    xref_id: str  # e.g., "@I1@"
    full_name: str = ""
    gender: str = "U"  # M, F, U
    events: dict = field(default_factory=dict)  # event_type -> GedcomEvent
    family_as_spouse: list = field(default_factory=list)
    family_as_child: list = field(default_factory=list)

    def event_date(self, event_type: str) -> Optional[Date]:
        event = self.events.get(event_type)
        return event.date if event else None

    @property
    def birth(self) -> Optional[Date]:
        return self.event_date("birth")

    @property
    def death(self) -> Optional[Date]:
        return self.event_date("death")


@dataclass
class GedcomFamily:
    """A parsed family unit from a GEDCOM file."""
    xref_id: str  # e.g., "@F1@"
    husband_xref: Optional[str] = None
    wife_xref: Optional[str] = None
    children_xrefs: list = field(default_factory=list)
    events: dict = field(default_factory=dict)

    @property
    def marriage(self) -> Optional[Date]:
        event = self.events.get("marriage")
        return event.date if event else None


@dataclass
class ParsedGedcom:
    """Dates and relationships read from one GEDCOM file."""
    individuals: dict = field(default_factory=dict)  # xref_id -> GedcomIndividual
    families: dict = field(default_factory=dict)  # xref_id -> GedcomFamily
    source_file: str = ""

    def _members(self, xrefs) -> list:
        return [self.individuals[x] for x in xrefs if x and x in self.individuals]

    def get_parents(self, individual: GedcomIndividual) -> list:
        parents = []
        for fam_xref in individual.family_as_child:
            fam = self.families.get(fam_xref)
            if fam:
                parents.extend(self._members([fam.husband_xref, fam.wife_xref]))
        return parents

    def get_children(self, individual: GedcomIndividual) -> list:
        children = []
        for fam_xref in individual.family_as_spouse:
            fam = self.families.get(fam_xref)
            if fam:
                children.extend(self._members(fam.children_xrefs))
        return children

    def get_spouses(self, individual: GedcomIndividual) -> list:
        spouses = []
        for fam_xref in individual.family_as_spouse:
            fam = self.families.get(fam_xref)
            if not fam:
                continue
            other = fam.wife_xref if fam.husband_xref == individual.xref_id else fam.husband_xref
            spouses.extend(self._members([other]))
        return spouses

    def date_errors(self) -> list[tuple[str, GedcomEvent]]:
        """(record xref, event) for every DATE payload that failed to parse."""
        errors = []
        records = list(self.individuals.values()) + list(self.families.values())
        for record in records:
            for event in record.events.values():
                if event.error:
                    errors.append((record.xref_id, event))
        return errors


def parse_gedcom(filepath) -> ParsedGedcom:
    """Parse a GEDCOM file and return its dated events and relationships."""
    from gedcom.element.family import FamilyElement
    from gedcom.element.individual import IndividualElement
    from gedcom.parser import Parser

    filepath = str(filepath)
    parser = Parser()
    parser.parse_file(filepath, strict=False)

    result = ParsedGedcom(source_file=Path(filepath).name)
    for element in parser.get_element_list():
        if isinstance(element, IndividualElement):
            indi = _parse_individual(element)
            result.individuals[indi.xref_id] = indi
        elif isinstance(element, FamilyElement):
            fam = _parse_family(element)
            result.families[fam.xref_id] = fam

    # Second pass: populate family references on individuals
    for fam_xref, fam in result.families.items():
        for spouse_xref in (fam.husband_xref, fam.wife_xref):
            indi = result.individuals.get(spouse_xref)
            if indi and fam_xref not in indi.family_as_spouse:
                indi.family_as_spouse.append(fam_xref)
        for child_xref in fam.children_xrefs:
            indi = result.individuals.get(child_xref)
            if indi and fam_xref not in indi.family_as_child:
                indi.family_as_child.append(fam_xref)

    logger.info(
        "Read %d individuals and %d families from %s",
        len(result.individuals), len(result.families), result.source_file,
    )
    return result


def _parse_event(element, event_type: str) -> GedcomEvent:
    event = GedcomEvent(event_type=event_type)
    for sub in element.get_child_elements():
        tag = sub.get_tag()
        if tag == "DATE":
            event.raw_date = sub.get_value()
        elif tag == "PLAC":
            event.place = sub.get_value() or None

    if event.raw_date.strip():
        try:
            event.date = parse_date(event.raw_date)
        except DateParseError as exc:
            event.error = str(exc)
            logger.warning(
                "Unparseable %s date %r in %s: %s",
                event_type, event.raw_date, element.get_pointer() or "?", exc,
            )
    return event


def _parse_individual(element) -> GedcomIndividual:
    """Extract dated events from a python-gedcom IndividualElement."""
    given_name, surname = element.get_name()
    indi = GedcomIndividual(
        xref_id=element.get_pointer(),
        full_name=f"{given_name or ''} {surname or ''}".strip(),
        gender=element.get_gender() or "U",
    )
    for child in element.get_child_elements():
        event_type = INDIVIDUAL_EVENTS.get(child.get_tag())
        if event_type and event_type not in indi.events:
            indi.events[event_type] = _parse_event(child, event_type)
    return indi


def _parse_family(element) -> GedcomFamily:
    """Extract partners, children and dated events from a FamilyElement."""
    fam = GedcomFamily(xref_id=element.get_pointer())
    for child in element.get_child_elements():
        tag = child.get_tag()
        if tag == "HUSB":
            fam.husband_xref = child.get_value()
        elif tag == "WIFE":
            fam.wife_xref = child.get_value()
        elif tag == "CHIL":
            fam.children_xrefs.append(child.get_value())
        elif tag in FAMILY_EVENTS and FAMILY_EVENTS[tag] not in fam.events:
            fam.events[FAMILY_EVENTS[tag]] = _parse_event(child, FAMILY_EVENTS[tag])
    return fam
