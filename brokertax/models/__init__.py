"""Data models for brokertax."""

from brokertax.models.enums import RecordType
from brokertax.models.report import Report, ReportSummary, SectionData
from brokertax.models.tax_data import (
    CapitalGain,
    Dividend,
    ForeignTax,
    TaxRelevantData,
    TaxSummary,
)

__all__ = [
    "CapitalGain",
    "Dividend",
    "ForeignTax",
    "RecordType",
    "Report",
    "ReportSummary",
    "SectionData",
    "TaxRelevantData",
    "TaxSummary",
]
