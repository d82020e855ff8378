"""Lookup tables for tax extraction.

Display names, date formats and the column names of a broker activity
statement. Keyed by code or logical field. Never hardcode these in the
extraction functions; pass an ExtractionSettings instead.

Display names follow the German Anlage KAP vocabulary of the statements this
tool reads (IBKR "Kontoauszug" exports). Column aliases list the German header
first, then the English one.
"""

from pydantic import BaseModel, ConfigDict

ASSET_CATEGORIES: dict[str, str] = {
    "STK": "Aktie (Stock)",
    "OPT": "Option",
    "FUT": "Future",
    "CASH": "Bargeld (Cash)",
    "BOND": "Anleihe (Bond)",
    "FUND": "Fonds",
    "ETF": "ETF",
    "CFD": "CFD",
    "CRYPTO": "Kryptowährung",
    "FOREX": "Devisen",
}

TRANSACTION_CODES: dict[str, str] = {
    "A": "Auftrag (Assignment)",
    "O": "Eröffnung (Opening)",
    "C": "Schließung (Closing)",
    "IA": "Interne Abrechnung (Internal Assignment)",
    "IM": "Interne Bewegung (Internal Movement)",
    "P": "Teilweise (Partial)",
    "E": "Ausübung (Exercise)",
    "Ex": "Verfallen (Expired)",
    "L": "Liquidation",
    "T": "Transfer",
    "D": "Dividende",
    "F": "Gebühr (Fee)",
    "W": "Auszahlung (Withdrawal)",
    "DEP": "Einzahlung (Deposit)",
    "INT": "Zinsen (Interest)",
    "DIV": "Dividende",
    "TAX": "Steuer (Tax)",
    "FEE": "Gebühr (Fee)",
    "ADJ": "Anpassung (Adjustment)",
    "CORP": "Corporate Action",
}

UNKNOWN_CODE = "Unbekannt"

# Tried in order; first match wins.
DATE_FORMATS: tuple[str, ...] = ("%Y-%m-%d", "%d.%m.%Y", "%m/%d/%Y", "%Y/%m/%d")

# Trade codes whose commission is reported as foreign tax
SALE_TRANSACTION_CODES: frozenset[str] = frozenset({"C", "L", "T"})

CURRENCY_COUNTRIES: dict[str, str] = {
    "EUR": "Deutschland",
    "USD": "USA",
    "GBP": "Vereinigtes Königreich",
    "CHF": "Schweiz",
    "JPY": "Japan",
    "CAD": "Kanada",
}

UNKNOWN_COUNTRY = "Unknown"

# Normalized section keys, most specific first
TRADES_SECTION_KEYS: tuple[str, ...] = ("trades", "transaktionen", "transactions")
DIVIDENDS_SECTION_KEYS: tuple[str, ...] = ("dividenden", "dividends")
WITHHOLDING_SECTION_KEYS: tuple[str, ...] = ("quellensteuer", "withholding_tax")

ORDER_DISCRIMINATOR = "Order"


class TradeColumns(BaseModel):
    model_config = ConfigDict(frozen=True)

    discriminator: tuple[str, ...] = ("DataDiscriminator",)
    symbol: tuple[str, ...] = ("Symbol",)
    description: tuple[str, ...] = ("Beschreibung", "Description")
    asset_category: tuple[str, ...] = ("Vermögenswertkategorie", "Asset Category")
    currency: tuple[str, ...] = ("Währung", "Currency")
    timestamp: tuple[str, ...] = ("Datum/Zeit", "Date/Time")
    quantity: tuple[str, ...] = ("Menge", "Quantity")
    price: tuple[str, ...] = ("T.-Kurs", "T. Price")
    commission: tuple[str, ...] = ("Prov./Gebühr", "Comm/Fee")
    code: tuple[str, ...] = ("Code",)


class CashColumns(BaseModel):
    """Columns shared by the dividend and withholding-tax sections."""

    model_config = ConfigDict(frozen=True)

    date: tuple[str, ...] = ("Datum", "Date")
    description: tuple[str, ...] = ("Beschreibung", "Description")
    amount: tuple[str, ...] = ("Betrag", "Amount")
    currency: tuple[str, ...] = ("Währung", "Currency")
    tax: tuple[str, ...] = ("Tax", "Steuer")
    code: tuple[str, ...] = ("Code",)


class ExtractionSettings(BaseModel):
    """Immutable bundle of every table the extraction engine reads."""

    model_config = ConfigDict(frozen=True)

    asset_categories: dict[str, str] = ASSET_CATEGORIES
    transaction_codes: dict[str, str] = TRANSACTION_CODES
    date_formats: tuple[str, ...] = DATE_FORMATS
    sale_codes: frozenset[str] = SALE_TRANSACTION_CODES
    currency_countries: dict[str, str] = CURRENCY_COUNTRIES
    trades_sections: tuple[str, ...] = TRADES_SECTION_KEYS
    dividends_sections: tuple[str, ...] = DIVIDENDS_SECTION_KEYS
    withholding_sections: tuple[str, ...] = WITHHOLDING_SECTION_KEYS
    trade_columns: TradeColumns = TradeColumns()
    cash_columns: CashColumns = CashColumns()


DEFAULT_SETTINGS = ExtractionSettings()
