"""Report generation for brokertax."""

from brokertax.reports.tax_summary import TaxReportGenerator

__all__ = ["TaxReportGenerator"]
