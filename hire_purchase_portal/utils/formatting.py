"""Display formatting for money and dates (en-GH currency, en-GB dates)"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from hire_purchase_portal.config import settings
from hire_purchase_portal.utils.date_utils import DateLike, parse_datetime

PLACEHOLDER = "-"


def format_currency(amount: Union[Decimal, int, float, str, None]) -> str:
    """
    Format an amount in Ghana cedis.

    Example:
        1234.5 → "GH₵1,234.50"
        -20    → "-GH₵20.00"
    """
    value = Decimal(str(amount or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}{settings.currency_symbol}{abs(value):,.2f}"


def _coerce(value: Optional[DateLike]) -> Optional[datetime]:
    if value is None or value == "":
        return None
    return parse_datetime(value)


def format_date(value: Optional[DateLike]) -> str:
    """DD/MM/YYYY, or "-" when there is no date"""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value.strftime("%d/%m/%Y")
    moment = _coerce(value)
    if moment is None:
        return PLACEHOLDER
    return moment.strftime("%d/%m/%Y")


def format_date_time(value: Optional[DateLike]) -> str:
    """e.g. "1 Mar 2025, 14:05", or "-" when there is no timestamp"""
    moment = _coerce(value)
    if moment is None:
        return PLACEHOLDER
    return f"{moment.day} {moment:%b %Y, %H:%M}"
