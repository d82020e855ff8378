"""Translation of broker codes into display names."""

from brokertax.config import UNKNOWN_CODE, UNKNOWN_COUNTRY


def translate_transaction_code(code: str | None, table: dict[str, str]) -> str:
    """Translate a trade/cash code; compound codes like ``"C;P"`` translate per part."""
    if code is None or not code.strip():
        return UNKNOWN_CODE
    parts = [part.strip() for part in code.split(";")]
    return " + ".join(table.get(part, part) for part in parts)


def translate_asset_category(category: str | None, table: dict[str, str]) -> str | None:
    """Unknown categories pass through untranslated."""
    if category is None:
        return None
    return table.get(category, category)


def country_for_currency(currency: str | None, table: dict[str, str]) -> str:
    if currency is None:
        return UNKNOWN_COUNTRY
    return table.get(currency, UNKNOWN_COUNTRY)
