"""
Support Functions

Stateless helpers shared by the statement model and by scrapers:
- Date/time coercion for transaction date setters
- Locale-aware conversion of scraped amounts to Decimal
- Word capitalization for tidying scraped descriptions
"""
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

import pandas as pd

from bankjob.common.exceptions import MalformedAmountError

_WHITESPACE = re.compile(r"\s+")
_WORD_START = re.compile(r"\b\w")


def create_date_time(date_time_raw) -> Optional[datetime]:
    """
    Coerce a raw value into a datetime.

    Args:
        date_time_raw: datetime, date, string or None

    Returns:
        datetime, or None for None/blank values
    """
    if isinstance(date_time_raw, pd.Timestamp):
        return date_time_raw.to_pydatetime()
    if isinstance(date_time_raw, datetime):
        return date_time_raw
    if isinstance(date_time_raw, date):
        return datetime.combine(date_time_raw, datetime.min.time())
    if date_time_raw is None or not str(date_time_raw).strip():
        return None
    # ambiguous slash dates are read day first (dd/mm/yyyy)
    return pd.to_datetime(str(date_time_raw).strip(), dayfirst=True).to_pydatetime()


def capitalize_words(message: str) -> str:
    """Capitalize the first letter of every word and lowercase the rest."""
    return _WORD_START.sub(lambda m: m.group(0).upper(), message.lower())


def string_to_decimal(value, decimal: str = ".") -> Optional[Union[Decimal, int, float]]:
    """
    Convert a scraped amount string to a Decimal.

    Examples:
        "1.000.030,99" with decimal="," -> Decimal("1000030.99")
        "1,234.56" with decimal="." -> Decimal("1234.56")

    Values that are already numeric are returned unchanged.

    Raises:
        MalformedAmountError: if the cleaned string is not a finite number
    """
    if value is None:
        return None
    if isinstance(value, (Decimal, int, float)) and not isinstance(value, bool):
        return value

    amount = _WHITESPACE.sub("", str(value))
    if decimal == ",":
        amount = amount.replace(".", "").replace(",", ".")
    elif decimal == ".":
        amount = amount.replace(",", "")
    else:
        raise ValueError(f"Unsupported decimal separator: {decimal!r}")

    try:
        result = Decimal(amount)
    except InvalidOperation:
        raise MalformedAmountError(value, decimal) from None
    if not result.is_finite():
        raise MalformedAmountError(value, decimal)
    return result
