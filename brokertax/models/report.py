"""Section model of an imported statement."""

from pydantic import BaseModel, ConfigDict, Field

from brokertax.models.enums import RECORD_TYPE_KEY, RecordType


class SectionData(BaseModel):
    """One named sub-table of a statement.

    ``headers`` fixes the column order every row was aligned to. Rows map
    header name to the raw string value plus the synthetic ``_record_type``
    and ``_section`` keys.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    headers: list[str] = Field(default_factory=list)
    rows: list[dict[str, str]] = Field(default_factory=list)
    metadata: dict[str, str] = Field(default_factory=dict)

    def data_rows(self) -> list[dict[str, str]]:
        """Rows recorded as ``Data``, without totals and subtotals."""
        return [row for row in self.rows if row.get(RECORD_TYPE_KEY) == RecordType.DATA]


class ReportSummary(BaseModel):
    section_count: int
    section_names: list[str]
    total_data_rows: int
    current_file_name: str | None = None


class Report(BaseModel):
    """All sections of one imported file, keyed by normalized section name."""

    model_config = ConfigDict(frozen=True)

    sections: dict[str, SectionData] = Field(default_factory=dict)

    def section(self, key: str) -> SectionData | None:
        return self.sections.get(key)

    def has_section(self, key: str) -> bool:
        return key in self.sections

    def first_section(self, keys: tuple[str, ...]) -> SectionData | None:
        """Return the first section present under any of ``keys``."""
        for key in keys:
            if key in self.sections:
                return self.sections[key]
        return None

    def summary(self, file_name: str | None = None) -> ReportSummary:
        return ReportSummary(
            section_count=len(self.sections),
            section_names=list(self.sections),
            total_data_rows=sum(len(s.rows) for s in self.sections.values()),
            current_file_name=file_name,
        )
