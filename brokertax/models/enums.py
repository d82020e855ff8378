"""Enumerations for brokertax."""

from enum import StrEnum


class RecordType(StrEnum):
    HEADER = "Header"
    DATA = "Data"
    TOTAL = "Total"
    SUBTOTAL = "SubTotal"


# Record types that carry values and are kept as section rows
DATA_RECORD_TYPES = frozenset({RecordType.DATA.value, RecordType.TOTAL.value, RecordType.SUBTOTAL.value})

# Synthetic row keys added by the section parser
RECORD_TYPE_KEY = "_record_type"
SECTION_KEY = "_section"
