"""Statement import for brokertax."""

from brokertax.ingestion.importer import FileImporter, ImportResult, ReportSession, decode_csv

__all__ = ["FileImporter", "ImportResult", "ReportSession", "decode_csv"]
