"""Tax-year report generator."""

from decimal import Decimal
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from brokertax.models.tax_data import TaxRelevantData

TEMPLATE_DIR = Path(__file__).parent / "templates"


def _amount(value: Decimal | None) -> str:
    if value is None:
        return "-"
    return f"{value:,.2f}"


class TaxReportGenerator:
    """Generates a plain-text report of the tax data for one year."""

    def __init__(self) -> None:
        self.env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)), trim_blocks=True)
        self.env.filters["amount"] = _amount

    def render(self, data: TaxRelevantData) -> str:
        """Render the tax report using the Jinja2 template."""
        template = self.env.get_template("tax_report.txt")
        return template.render(data=data, summary=data.summary)
