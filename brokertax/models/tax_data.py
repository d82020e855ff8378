"""Tax-relevant values derived from a report for one tax year."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class CapitalGain(BaseModel):
    """One matched (buy lot, sell, quantity) triple."""

    model_config = ConfigDict(frozen=True)

    symbol: str | None = None
    description: str | None = None
    asset_category: str | None = None
    currency: str | None = None
    purchase_date: date | None = None
    sale_date: date | None = None
    purchase_price: Decimal | None = None
    sale_price: Decimal | None = None
    quantity: Decimal
    commission: Decimal | None = None
    realized_gain: Decimal | None = None
    is_short_term: bool | None = None
    transaction_description: str | None = None


class Dividend(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str | None = None
    description: str | None = None
    payment_date: date
    gross_amount: Decimal | None = None
    net_amount: Decimal | None = None
    withholding_tax: Decimal | None = None
    currency: str | None = None
    country: str | None = None
    transaction_description: str | None = None


class ForeignTax(BaseModel):
    model_config = ConfigDict(frozen=True)

    country: str | None = None
    currency: str | None = None
    amount: Decimal | None = None
    date: date
    reference: str | None = None


class TaxSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_capital_gains: Decimal = Decimal("0")
    total_capital_losses: Decimal = Decimal("0")
    net_capital_gains: Decimal = Decimal("0")
    total_dividends: Decimal = Decimal("0")
    total_withholding_tax: Decimal = Decimal("0")
    total_foreign_tax: Decimal = Decimal("0")
    total_commissions: Decimal = Decimal("0")
    number_of_transactions: int = 0


class TaxRelevantData(BaseModel):
    model_config = ConfigDict(frozen=True)

    tax_year: int
    capital_gains: list[CapitalGain] = Field(default_factory=list)
    dividends: list[Dividend] = Field(default_factory=list)
    foreign_taxes: list[ForeignTax] = Field(default_factory=list)
    summary: TaxSummary = TaxSummary()
