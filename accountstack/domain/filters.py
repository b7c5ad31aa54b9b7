"""Transaction filter construction from raw query parameters"""

from decimal import Decimal, InvalidOperation
from typing import Optional

from accountstack.domain.exceptions import InvalidInputError
from accountstack.domain.models import TransactionFilters
from accountstack.utils.date_utils import parse_optional_timestamp


def _parse_date(name: str, value: Optional[str]):
    try:
        return parse_optional_timestamp(value)
    except ValueError as e:
        raise InvalidInputError(
            f"Invalid {name} format. Use YYYY-MM-DD or RFC3339"
        ) from e


def _parse_amount(name: str, value: Optional[str]) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        amount = Decimal(value)
    except InvalidOperation as e:
        raise InvalidInputError(f"Invalid {name} format. Must be a number") from e
    if not amount.is_finite():
        raise InvalidInputError(f"Invalid {name} format. Must be a number")
    return amount


def build_filters(
    account_id: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    category: Optional[str] = None,
    min_amount: Optional[str] = None,
    max_amount: Optional[str] = None,
) -> TransactionFilters:
    """
    Validate raw query parameters into a TransactionFilters.

    Raises:
        InvalidInputError: On a malformed date or non-numeric amount bound
    """
    return TransactionFilters(
        account_id=account_id or None,
        start_date=_parse_date("startDate", start_date),
        end_date=_parse_date("endDate", end_date),
        category=category or None,
        min_amount=_parse_amount("minAmount", min_amount),
        max_amount=_parse_amount("maxAmount", max_amount),
    )
