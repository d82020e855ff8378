"""Tax extraction engines."""

from brokertax.engines.extraction import TaxDataExtractor, extract_tax_data
from brokertax.engines.lot_matcher import LotMatcher, MatchResult, OpenLot, Transaction
from brokertax.engines.summary import summarize

__all__ = [
    "LotMatcher",
    "MatchResult",
    "OpenLot",
    "TaxDataExtractor",
    "Transaction",
    "extract_tax_data",
    "summarize",
]
