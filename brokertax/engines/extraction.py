"""Tax data extraction: capital gains, dividends and foreign taxes for one year."""

import logging

from brokertax.config import DEFAULT_SETTINGS, ORDER_DISCRIMINATOR, ExtractionSettings
from brokertax.engines.codes import country_for_currency, translate_transaction_code
from brokertax.engines.lot_matcher import LotMatcher, Transaction
from brokertax.engines.summary import summarize
from brokertax.models.enums import RECORD_TYPE_KEY, RecordType
from brokertax.models.report import Report, SectionData
from brokertax.models.tax_data import CapitalGain, Dividend, ForeignTax, TaxRelevantData
from brokertax.parsing.values import first_value, parse_date, parse_decimal

logger = logging.getLogger(__name__)

_UNKNOWN_SYMBOL = "Unknown"


class TaxDataExtractor:
    """Derives TaxRelevantData from a Report.

    Stateless: every call recomputes from the report, and the report is never
    modified, so repeated calls with the same year give equal results.
    """

    def __init__(self, settings: ExtractionSettings = DEFAULT_SETTINGS) -> None:
        self.settings = settings
        self.matcher = LotMatcher(settings)

    def extract(self, report: Report, tax_year: int) -> TaxRelevantData:
        logger.info("Extracting tax relevant data for year %d", tax_year)

        capital_gains = self.extract_capital_gains(report)
        dividends = self.extract_dividends(report, tax_year)
        foreign_taxes = self.extract_foreign_taxes(report, tax_year)

        logger.info(
            "Extracted %d capital gain(s), %d dividend(s), %d foreign tax(es)",
            len(capital_gains),
            len(dividends),
            len(foreign_taxes),
        )
        return TaxRelevantData(
            tax_year=tax_year,
            capital_gains=capital_gains,
            dividends=dividends,
            foreign_taxes=foreign_taxes,
            summary=summarize(capital_gains, dividends, foreign_taxes),
        )

    # --- Capital gains ---

    def extract_capital_gains(self, report: Report) -> list[CapitalGain]:
        """FIFO-match every symbol of the trades section.

        Not restricted to a tax year: a sale has to see every earlier buy.
        """
        section = report.first_section(self.settings.trades_sections)
        if section is None:
            return []

        gains: list[CapitalGain] = []
        for symbol, transactions in self.group_orders_by_symbol(section).items():
            result = self.matcher.match(transactions)
            logger.debug(
                "%s: %d match(es), %d open lot(s)", symbol, len(result.gains), len(result.open_lots)
            )
            gains.extend(result.gains)
        return gains

    def group_orders_by_symbol(self, section: SectionData) -> dict[str, list[Transaction]]:
        """Order-level data rows grouped by symbol, in statement order.

        Execution detail rows and totals are left out so each order counts once.
        """
        cols = self.settings.trade_columns
        grouped: dict[str, list[Transaction]] = {}
        for row in section.rows:
            if row.get(RECORD_TYPE_KEY) != RecordType.DATA:
                continue
            if first_value(row, cols.discriminator) != ORDER_DISCRIMINATOR:
                continue
            symbol = first_value(row, cols.symbol) or _UNKNOWN_SYMBOL
            grouped.setdefault(symbol, []).append(Transaction.from_row(row, self.settings))
        return grouped

    # --- Dividends ---

    def extract_dividends(self, report: Report, tax_year: int) -> list[Dividend]:
        section = report.first_section(self.settings.dividends_sections)
        if section is None:
            return []

        cols = self.settings.cash_columns
        dividends: list[Dividend] = []
        for row in section.rows:
            payment_date = parse_date(first_value(row, cols.date), self.settings.date_formats)
            if payment_date is None or payment_date.year != tax_year:
                continue

            # First token is the ticker, e.g. "AAPL(US0378331005) Cash Dividend ..."
            tokens = (first_value(row, cols.description) or "").split()
            symbol = tokens[0] if tokens else None
            description = " ".join(tokens[1:]) if len(tokens) > 1 else None

            gross = parse_decimal(first_value(row, cols.amount))
            tax = parse_decimal(first_value(row, cols.tax))
            withholding = abs(tax) if tax is not None else None
            net = gross - withholding if gross is not None and withholding is not None else None

            currency = first_value(row, cols.currency)
            dividends.append(
                Dividend(
                    symbol=symbol,
                    description=description,
                    payment_date=payment_date,
                    gross_amount=gross,
                    net_amount=net,
                    withholding_tax=withholding,
                    currency=currency,
                    country=country_for_currency(currency, self.settings.currency_countries),
                    transaction_description=translate_transaction_code(
                        first_value(row, cols.code), self.settings.transaction_codes
                    ),
                )
            )
        return dividends

    # --- Foreign taxes ---

    def extract_foreign_taxes(self, report: Report, tax_year: int) -> list[ForeignTax]:
        """Withholding-tax section entries plus commissions of sale trades.

        Both sources contribute independently; nothing is deduplicated.
        """
        return self._withholding_section_taxes(report, tax_year) + self._sale_commission_taxes(
            report, tax_year
        )

    def _withholding_section_taxes(self, report: Report, tax_year: int) -> list[ForeignTax]:
        section = report.first_section(self.settings.withholding_sections)
        if section is None:
            return []

        cols = self.settings.cash_columns
        taxes: list[ForeignTax] = []
        for row in section.rows:
            tax_date = parse_date(first_value(row, cols.date), self.settings.date_formats)
            if tax_date is None or tax_date.year != tax_year:
                continue
            currency = first_value(row, cols.currency)
            taxes.append(
                ForeignTax(
                    country=country_for_currency(currency, self.settings.currency_countries),
                    currency=currency,
                    amount=parse_decimal(first_value(row, cols.amount)),
                    date=tax_date,
                    reference=first_value(row, cols.description),
                )
            )
        return taxes

    def _sale_commission_taxes(self, report: Report, tax_year: int) -> list[ForeignTax]:
        section = report.first_section(self.settings.trades_sections)
        if section is None:
            return []

        cols = self.settings.trade_columns
        taxes: list[ForeignTax] = []
        for row in section.rows:
            trade_date = parse_date(first_value(row, cols.timestamp), self.settings.date_formats)
            if trade_date is None or trade_date.year != tax_year:
                continue
            if first_value(row, cols.code) not in self.settings.sale_codes:
                continue
            currency = first_value(row, cols.currency)
            taxes.append(
                ForeignTax(
                    country=country_for_currency(currency, self.settings.currency_countries),
                    currency=currency,
                    amount=parse_decimal(first_value(row, cols.commission)),
                    date=trade_date,
                    reference=first_value(row, cols.description),
                )
            )
        return taxes


def extract_tax_data(
    report: Report, tax_year: int, settings: ExtractionSettings = DEFAULT_SETTINGS
) -> TaxRelevantData:
    """Module-level shortcut for ``TaxDataExtractor(settings).extract(...)``."""
    return TaxDataExtractor(settings).extract(report, tax_year)
