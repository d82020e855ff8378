"""Statement import: CSV decoding, section parsing and the current-report holder."""

import csv
import io
import logging
import threading
from dataclasses import dataclass
from pathlib import Path

from brokertax.exceptions import FileValidationError, ParseError
from brokertax.models.report import Report, ReportSummary
from brokertax.parsing.sections import FlexibleSectionParser, SectionInterpreter, parse_sections

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "de.csv"
CSV_FILE_EXTENSION = ".csv"


def decode_csv(content: bytes, source: str = "<upload>") -> list[list[str]]:
    """Decode statement bytes into raw records. A leading BOM is dropped."""
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ParseError(source, f"not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc
    try:
        return list(csv.reader(io.StringIO(text, newline="")))
    except csv.Error as exc:
        raise ParseError(source, str(exc)) from exc


@dataclass(frozen=True)
class ImportResult:
    """A parsed statement together with the name it was uploaded under."""

    file_name: str
    report: Report


class FileImporter:
    """Turns uploaded statement files into Reports.

    Every registered interpreter is applied to every record group.
    """

    def __init__(self, interpreters: list[SectionInterpreter] | None = None) -> None:
        self.interpreters: list[SectionInterpreter] = (
            list(interpreters) if interpreters else [FlexibleSectionParser()]
        )

    def validate_upload(self, file_name: str | None, content: bytes) -> None:
        """Reject empty files and anything not named ``*.csv``."""
        name = file_name or ""
        if not content:
            raise FileValidationError(name or DEFAULT_FILE_NAME, "file is empty")
        if not name.lower().endswith(CSV_FILE_EXTENSION):
            raise FileValidationError(name, "only CSV files are accepted")

    def parse(self, content: bytes, source: str = "<upload>") -> Report:
        records = decode_csv(content, source)
        return parse_sections(records, self.interpreters)

    def import_bytes(self, file_name: str, content: bytes) -> ImportResult:
        self.validate_upload(file_name, content)
        report = self.parse(content, file_name)
        logger.info("Imported %s with %d section(s)", file_name, len(report.sections))
        return ImportResult(file_name=file_name, report=report)

    def import_file(self, file_path: Path) -> ImportResult:
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        return self.import_bytes(file_path.name, file_path.read_bytes())


class ReportSession:
    """Single owner of the most recently imported report.

    Pass one session explicitly to whatever serves requests; writes are
    serialized by a lock and readers always see a complete ImportResult.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current: ImportResult | None = None

    def replace(self, result: ImportResult) -> None:
        with self._lock:
            self._current = result

    def clear(self) -> None:
        with self._lock:
            self._current = None

    def has_report(self) -> bool:
        with self._lock:
            return self._current is not None

    @property
    def current(self) -> ImportResult | None:
        with self._lock:
            return self._current

    @property
    def file_name(self) -> str:
        current = self.current
        return current.file_name if current is not None else DEFAULT_FILE_NAME

    def report(self) -> Report:
        """The current report, or an empty one when nothing was imported."""
        current = self.current
        return current.report if current is not None else Report()

    def summary(self) -> ReportSummary:
        current = self.current
        if current is None:
            return ReportSummary(section_count=0, section_names=[], total_data_rows=0)
        return current.report.summary(current.file_name)
