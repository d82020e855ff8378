"""Tests for the FIFO lot matching engine."""

from datetime import date
from decimal import Decimal

from brokertax.engines.lot_matcher import (
    LotMatcher,
    Transaction,
    build_capital_gain,
    one_year_after,
)


def _txn(day: date, quantity: str, price: str, commission: str | None = None, **kwargs) -> Transaction:
    return Transaction(
        symbol=kwargs.pop("symbol", "X"),
        trade_date=day,
        quantity=Decimal(quantity),
        price=Decimal(price),
        commission=Decimal(commission) if commission is not None else None,
        **kwargs,
    )


class TestFIFOMatching:
    def setup_method(self):
        self.matcher = LotMatcher()

    def test_full_and_partial_consumption(self):
        result = self.matcher.match([
            _txn(date(2024, 1, 2), "10", "10"),
            _txn(date(2024, 1, 3), "5", "12"),
            _txn(date(2024, 2, 1), "-12", "20"),
        ])
        assert len(result.gains) == 2
        first, second = result.gains
        assert first.quantity == Decimal("10")
        assert first.realized_gain == Decimal("100")
        assert first.purchase_price == Decimal("10")
        assert second.quantity == Decimal("2")
        assert second.realized_gain == Decimal("16")
        assert second.purchase_price == Decimal("12")
        assert len(result.open_lots) == 1
        assert result.open_lots[0].remaining == Decimal("3")

    def test_partial_lot_carries_over_to_later_sell(self):
        result = self.matcher.match([
            _txn(date(2024, 1, 2), "10", "10"),
            _txn(date(2024, 2, 1), "-4", "15"),
            _txn(date(2024, 3, 1), "-6", "18"),
        ])
        assert [g.quantity for g in result.gains] == [Decimal("4"), Decimal("6")]
        later = result.gains[1]
        assert later.purchase_date == date(2024, 1, 2)
        assert later.purchase_price == Decimal("10")
        assert later.realized_gain == Decimal("48")
        assert result.open_lots == []

    def test_sorted_by_trade_date(self):
        # Buy listed after the sell but dated before it
        result = self.matcher.match([
            _txn(date(2024, 2, 1), "-5", "20"),
            _txn(date(2024, 1, 2), "5", "10"),
        ])
        assert len(result.gains) == 1
        assert result.gains[0].realized_gain == Decimal("50")

    def test_oldest_lot_consumed_first(self):
        result = self.matcher.match([
            _txn(date(2024, 1, 5), "5", "30"),
            _txn(date(2024, 1, 2), "5", "10"),
            _txn(date(2024, 2, 1), "-5", "20"),
        ])
        assert result.gains[0].purchase_price == Decimal("10")
        assert result.open_lots[0].transaction.price == Decimal("30")

    def test_unmatched_sell_produces_nothing(self):
        result = self.matcher.match([_txn(date(2024, 2, 1), "-5", "20")])
        assert result.gains == []
        assert result.unmatched_quantity == Decimal("5")

    def test_sell_exceeding_lots_is_truncated(self):
        result = self.matcher.match([
            _txn(date(2024, 1, 2), "3", "10"),
            _txn(date(2024, 2, 1), "-5", "20"),
        ])
        assert [g.quantity for g in result.gains] == [Decimal("3")]
        assert result.unmatched_quantity == Decimal("2")

    def test_matched_quantity_is_conserved(self):
        buys = [
            _txn(date(2024, 1, d), q, "10") for d, q in [(1, "3"), (2, "7"), (3, "4.5")]
        ]
        sells = [_txn(date(2024, 2, d), q, "11") for d, q in [(1, "-2"), (2, "-6"), (3, "-5")]]
        result = self.matcher.match(buys + sells)
        matched = sum(g.quantity for g in result.gains)
        remaining = sum(lot.remaining for lot in result.open_lots)
        assert matched == Decimal("13")
        assert matched + remaining == Decimal("14.5")

    def test_inputs_not_modified_and_repeatable(self):
        txns = [
            _txn(date(2024, 1, 2), "10", "10"),
            _txn(date(2024, 2, 1), "-4", "15"),
        ]
        first = self.matcher.match(txns)
        second = self.matcher.match(txns)
        assert first.gains == second.gains
        assert txns[0].quantity == Decimal("10")

    def test_undated_and_quantityless_trades_skipped(self):
        result = self.matcher.match([
            Transaction(symbol="X", trade_date=None, quantity=Decimal("10"), price=Decimal("1")),
            Transaction(symbol="X", trade_date=date(2024, 1, 1), quantity=None),
            _txn(date(2024, 2, 1), "-5", "20"),
        ])
        assert result.gains == []


class TestBuildCapitalGain:
    def test_commission_sum_of_both_legs(self):
        gain = build_capital_gain(
            _txn(date(2024, 1, 2), "10", "10", "-1", code="O"),
            _txn(date(2024, 2, 1), "-10", "20", "-2", code="C"),
            Decimal("10"),
        )
        assert gain.commission == Decimal("3")
        assert gain.realized_gain == Decimal("97")
        assert gain.transaction_description == "Kauf: Eröffnung (Opening), Verkauf: Schließung (Closing)"

    def test_commission_absent_when_one_leg_missing(self):
        gain = build_capital_gain(
            _txn(date(2024, 1, 2), "10", "10", "-1"),
            _txn(date(2024, 2, 1), "-10", "20"),
            Decimal("10"),
        )
        assert gain.commission is None
        assert gain.realized_gain == Decimal("100")

    def test_missing_price_leaves_gain_absent(self):
        buy = Transaction(symbol="X", trade_date=date(2024, 1, 2), quantity=Decimal("1"))
        gain = build_capital_gain(buy, _txn(date(2024, 2, 1), "-1", "20"), Decimal("1"))
        assert gain.realized_gain is None

    def test_loss(self):
        gain = build_capital_gain(
            _txn(date(2024, 1, 2), "2", "20"), _txn(date(2024, 2, 1), "-2", "15"), Decimal("2")
        )
        assert gain.realized_gain == Decimal("-10")

    def test_short_term_boundary(self):
        buy = _txn(date(2023, 6, 1), "1", "10")
        short = build_capital_gain(buy, _txn(date(2024, 5, 31), "-1", "10"), Decimal("1"))
        long = build_capital_gain(buy, _txn(date(2024, 6, 1), "-1", "10"), Decimal("1"))
        assert short.is_short_term is True
        assert long.is_short_term is False

    def test_buy_leg_describes_the_gain(self):
        buy = _txn(
            date(2024, 1, 2), "1", "10",
            symbol="SAP", description="SAP SE", asset_category="STK", currency="EUR",
        )
        gain = build_capital_gain(buy, _txn(date(2024, 2, 1), "-1", "11"), Decimal("1"))
        assert gain.symbol == "SAP"
        assert gain.description == "SAP SE"
        assert gain.asset_category == "Aktie (Stock)"
        assert gain.currency == "EUR"

    def test_unknown_asset_category_passes_through(self):
        buy = _txn(date(2024, 1, 2), "1", "10", asset_category="WAR")
        gain = build_capital_gain(buy, _txn(date(2024, 2, 1), "-1", "11"), Decimal("1"))
        assert gain.asset_category == "WAR"


class TestOneYearAfter:
    def test_regular_day(self):
        assert one_year_after(date(2023, 6, 1)) == date(2024, 6, 1)

    def test_leap_day(self):
        assert one_year_after(date(2024, 2, 29)) == date(2025, 2, 28)


class TestTransactionFromRow:
    def test_german_columns(self):
        txn = Transaction.from_row({
            "Symbol": "AAPL",
            "Vermögenswertkategorie": "STK",
            "Währung": "USD",
            "Datum/Zeit": "2024-03-01, 15:30:00",
            "Menge": "-12",
            "T.-Kurs": "20",
            "Prov./Gebühr": "-2",
            "Code": "C",
        })
        assert txn.trade_date == date(2024, 3, 1)
        assert txn.quantity == Decimal("-12")
        assert txn.price == Decimal("20")
        assert txn.commission == Decimal("-2")
        assert txn.code == "C"

    def test_english_columns(self):
        txn = Transaction.from_row({
            "Symbol": "AAPL",
            "Date/Time": "2024-03-01, 15:30:00",
            "Quantity": "1,000",
            "T. Price": "20.5",
            "Comm/Fee": "-1",
        })
        assert txn.quantity == Decimal("1000")
        assert txn.price == Decimal("20.5")
