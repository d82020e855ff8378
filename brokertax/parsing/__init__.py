"""Statement parsing for brokertax."""

from brokertax.parsing.sections import (
    FlexibleSectionParser,
    SectionInterpreter,
    group_records,
    normalize_section_name,
    parse_sections,
)
from brokertax.parsing.values import parse_date, parse_decimal

__all__ = [
    "FlexibleSectionParser",
    "SectionInterpreter",
    "group_records",
    "normalize_section_name",
    "parse_date",
    "parse_decimal",
    "parse_sections",
]
