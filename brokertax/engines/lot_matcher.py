"""Lot matching engine: FIFO matching of sells against open buy lots."""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from brokertax.config import DEFAULT_SETTINGS, ExtractionSettings
from brokertax.engines.codes import translate_asset_category, translate_transaction_code
from brokertax.models.tax_data import CapitalGain
from brokertax.parsing.values import first_value, parse_date, parse_decimal

logger = logging.getLogger(__name__)


class Transaction(BaseModel):
    """One order-level trade row. Buys have quantity > 0, sells < 0."""

    model_config = ConfigDict(frozen=True)

    symbol: str | None = None
    description: str | None = None
    asset_category: str | None = None
    currency: str | None = None
    trade_date: date | None = None
    quantity: Decimal | None = None
    price: Decimal | None = None
    commission: Decimal | None = None
    code: str | None = None

    @classmethod
    def from_row(
        cls, row: dict[str, str], settings: ExtractionSettings = DEFAULT_SETTINGS
    ) -> "Transaction":
        cols = settings.trade_columns
        return cls(
            symbol=first_value(row, cols.symbol),
            description=first_value(row, cols.description),
            asset_category=first_value(row, cols.asset_category),
            currency=first_value(row, cols.currency),
            trade_date=parse_date(first_value(row, cols.timestamp), settings.date_formats),
            quantity=parse_decimal(first_value(row, cols.quantity)),
            price=parse_decimal(first_value(row, cols.price)),
            commission=parse_decimal(first_value(row, cols.commission)),
            code=first_value(row, cols.code),
        )


class OpenLot(BaseModel):
    """A buy transaction with the quantity still available for matching."""

    model_config = ConfigDict(frozen=True)

    transaction: Transaction
    remaining: Decimal = Field(ge=0)


@dataclass
class MatchResult:
    gains: list[CapitalGain] = field(default_factory=list)
    open_lots: list[OpenLot] = field(default_factory=list)
    unmatched_quantity: Decimal = Decimal("0")


def one_year_after(day: date) -> date:
    """Same calendar day one year later; Feb 29 maps to Feb 28."""
    try:
        return day.replace(year=day.year + 1)
    except ValueError:
        return day.replace(year=day.year + 1, day=28)


def build_capital_gain(
    buy: Transaction,
    sell: Transaction,
    quantity: Decimal,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
) -> CapitalGain:
    """Materialize one matched (buy, sell, quantity) triple."""
    commission = None
    if buy.commission is not None and sell.commission is not None:
        commission = abs(buy.commission) + abs(sell.commission)

    realized_gain = None
    if buy.price is not None and sell.price is not None:
        realized_gain = (sell.price - buy.price) * quantity
        if commission is not None:
            realized_gain -= commission

    is_short_term = None
    if buy.trade_date is not None and sell.trade_date is not None:
        is_short_term = sell.trade_date < one_year_after(buy.trade_date)

    codes = settings.transaction_codes
    return CapitalGain(
        symbol=buy.symbol,
        description=buy.description,
        asset_category=translate_asset_category(buy.asset_category, settings.asset_categories),
        currency=buy.currency,
        purchase_date=buy.trade_date,
        sale_date=sell.trade_date,
        purchase_price=buy.price,
        sale_price=sell.price,
        quantity=quantity,
        commission=commission,
        realized_gain=realized_gain,
        is_short_term=is_short_term,
        transaction_description=(
            f"Kauf: {translate_transaction_code(buy.code, codes)}, "
            f"Verkauf: {translate_transaction_code(sell.code, codes)}"
        ),
    )


class LotMatcher:
    """Matches sells to buy lots of the same symbol, oldest lot first.

    Open lots live in an arena addressed by position. A partial match
    replaces the lot at its position with a copy carrying the reduced
    quantity, so the input transactions are never modified and matching the
    same list twice gives the same result.
    """

    def __init__(self, settings: ExtractionSettings = DEFAULT_SETTINGS) -> None:
        self.settings = settings

    def match(self, transactions: list[Transaction]) -> MatchResult:
        """Run FIFO matching over the transactions of one symbol.

        Transactions are ordered by trade date; the sort is stable, so
        same-day trades keep their statement order. Sells beyond the open
        lots are dropped without inventing an opening position.
        """
        undated = [t for t in transactions if t.trade_date is None]
        if undated:
            logger.warning(
                "Excluding %d trade(s) without a parseable date from matching (%s)",
                len(undated),
                undated[0].symbol,
            )
        ordered = sorted(
            (t for t in transactions if t.trade_date is not None),
            key=lambda txn: txn.trade_date,
        )

        arena: list[OpenLot] = []
        queue: deque[int] = deque()
        result = MatchResult()

        for txn in ordered:
            if txn.quantity is None:
                continue
            if txn.quantity > 0:
                arena.append(OpenLot(transaction=txn, remaining=txn.quantity))
                queue.append(len(arena) - 1)
                continue

            remaining = abs(txn.quantity)
            while remaining > 0 and queue:
                position = queue[0]
                lot = arena[position]
                if lot.remaining <= remaining:
                    result.gains.append(
                        build_capital_gain(lot.transaction, txn, lot.remaining, self.settings)
                    )
                    remaining -= lot.remaining
                    arena[position] = OpenLot(transaction=lot.transaction, remaining=Decimal("0"))
                    queue.popleft()
                else:
                    result.gains.append(
                        build_capital_gain(lot.transaction, txn, remaining, self.settings)
                    )
                    arena[position] = OpenLot(
                        transaction=lot.transaction, remaining=lot.remaining - remaining
                    )
                    remaining = Decimal("0")

            if remaining > 0:
                logger.debug(
                    "Sell of %s on %s has %s unit(s) without an open lot",
                    txn.symbol,
                    txn.trade_date,
                    remaining,
                )
                result.unmatched_quantity += remaining

        result.open_lots = [arena[position] for position in queue]
        return result
