"""Section parsing: rebuild named sub-tables from a flat statement export.

A broker statement interleaves independent tables (trades, dividends, fees,
...) in one CSV. Column 0 names the section, column 1 the record type:

    Trades,Header,DataDiscriminator,Symbol,Menge,...
    Trades,Data,Order,AAPL,10,...
    Trades,Total,,,...

A section may repeat its header line with more columns when its schema is
amended mid-file. Rows are aligned to whichever header line was active when
they arrived.
"""

import logging
import re
from collections.abc import Iterable
from typing import Protocol

from brokertax.models.enums import DATA_RECORD_TYPES, RECORD_TYPE_KEY, SECTION_KEY, RecordType
from brokertax.models.report import Report, SectionData

logger = logging.getLogger(__name__)

_PUNCTUATION = re.compile(r"[^a-zA-Z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_section_name(name: str | None) -> str:
    """Turn a section label into a report key: ``"Open Positions"`` -> ``"open_positions"``."""
    if name is None:
        return ""
    cleaned = _PUNCTUATION.sub("", name.strip())
    return _WHITESPACE.sub("_", cleaned).lower()


def is_header_record(record: list[str]) -> bool:
    return len(record) > 1 and record[1] == RecordType.HEADER


def is_data_record(record: list[str]) -> bool:
    """Data, Total and SubTotal records all carry values."""
    return len(record) > 1 and record[1] in DATA_RECORD_TYPES


def extract_headers(record: list[str]) -> list[str]:
    """Header names from cells[2:], trimmed, with empty cells dropped."""
    return [cell.strip() for cell in record[2:] if cell and cell.strip()]


def build_row(record: list[str], headers: list[str], section_name: str) -> dict[str, str]:
    """Pair cells[2:] positionally with ``headers``, stopping at the shorter."""
    row = {header: (value or "").strip() for header, value in zip(headers, record[2:])}
    row[RECORD_TYPE_KEY] = record[1]
    row[SECTION_KEY] = section_name
    return row


class SectionInterpreter(Protocol):
    """Turns one raw record group into sections keyed by normalized name."""

    def interpret(self, records: list[list[str]]) -> dict[str, SectionData]: ...


class _SectionBuilder:
    """Mutable accumulator for one section while its group is being read."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.headers: list[str] = []
        self.rows: list[dict[str, str]] = []

    def build(self) -> SectionData:
        return SectionData(name=self.name, headers=self.headers, rows=self.rows)


class FlexibleSectionParser:
    """Detects sections, header lines and data lines without a fixed schema.

    Works for any statement language: nothing is keyed on section names, only
    on the ``Header``/``Data``/``Total``/``SubTotal`` record types.
    """

    def interpret(self, records: list[list[str]]) -> dict[str, SectionData]:
        builders: dict[str, _SectionBuilder] = {}
        current_name: str | None = None
        current: _SectionBuilder | None = None
        active_headers: list[str] = []

        for record in records:
            if not record:
                continue

            section_name = record[0]
            if section_name and section_name != current_name:
                current_name = section_name
                key = normalize_section_name(section_name)
                if key not in builders:
                    builders[key] = _SectionBuilder(section_name)
                current = builders[key]
                active_headers = []

            if current is None:
                logger.debug("Dropping record before any section label: %s", record[:2])
                continue

            if is_header_record(record):
                new_headers = extract_headers(record)
                if not new_headers:
                    continue
                active_headers = new_headers
                # Stored headers only ever widen
                if not current.headers or len(new_headers) >= len(current.headers):
                    current.headers = new_headers
            elif is_data_record(record):
                if not active_headers:
                    logger.debug("Dropping %s record without header in %s", record[1], current_name)
                    continue
                current.rows.append(build_row(record, active_headers, current_name))

        return {key: builder.build() for key, builder in builders.items()}


def group_records(rows: Iterable[list[str]]) -> dict[str, list[list[str]]]:
    """Group raw records by their un-normalized first cell, in first-seen order."""
    groups: dict[str, list[list[str]]] = {}
    skipped = 0
    for row in rows:
        if not row:
            skipped += 1
            continue
        groups.setdefault(row[0], []).append(row)
    if skipped:
        logger.debug("Skipped %d empty record(s)", skipped)
    return groups


def parse_sections(
    rows: Iterable[list[str]],
    interpreters: list[SectionInterpreter] | None = None,
) -> Report:
    """Build a Report from raw statement records.

    Every interpreter sees every group. A group whose label normalizes to a
    key already registered replaces the earlier section.
    """
    if interpreters is None:
        interpreters = [FlexibleSectionParser()]

    groups = group_records(rows)
    sections: dict[str, SectionData] = {}
    for records in groups.values():
        for interpreter in interpreters:
            sections.update(interpreter.interpret(records))

    logger.info("Parsed %d section(s) from %d record group(s)", len(sections), len(groups))
    return Report(sections=sections)
