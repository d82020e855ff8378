"""Aggregation of extracted tax data into a TaxSummary."""

from decimal import Decimal

from brokertax.models.tax_data import CapitalGain, Dividend, ForeignTax, TaxSummary


def summarize(
    capital_gains: list[CapitalGain],
    dividends: list[Dividend],
    foreign_taxes: list[ForeignTax],
) -> TaxSummary:
    """Fold the three collections into totals. Absent values are left out of sums."""
    total_gains = Decimal("0")
    total_losses = Decimal("0")
    total_commissions = Decimal("0")

    for gain in capital_gains:
        if gain.realized_gain is not None:
            if gain.realized_gain > 0:
                total_gains += gain.realized_gain
            else:
                total_losses += abs(gain.realized_gain)
        if gain.commission is not None:
            total_commissions += gain.commission

    total_dividends = sum(
        (d.gross_amount for d in dividends if d.gross_amount is not None), Decimal("0")
    )
    total_withholding = sum(
        (d.withholding_tax for d in dividends if d.withholding_tax is not None), Decimal("0")
    )
    total_foreign = sum(
        (t.amount for t in foreign_taxes if t.amount is not None), Decimal("0")
    )

    return TaxSummary(
        total_capital_gains=total_gains,
        total_capital_losses=total_losses,
        net_capital_gains=total_gains - total_losses,
        total_dividends=total_dividends,
        total_withholding_tax=total_withholding,
        total_foreign_tax=total_foreign,
        total_commissions=total_commissions,
        number_of_transactions=len(capital_gains) + len(dividends),
    )
