"""brokertax: tax-relevant data from multi-section broker statements."""

from brokertax.engines.extraction import extract_tax_data
from brokertax.parsing.sections import parse_sections

__all__ = ["extract_tax_data", "parse_sections"]
