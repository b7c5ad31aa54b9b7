"""Read-time response shaping driven by feature flags and caller context.

Every function here is pure: it returns new objects and never touches the
stored entity, so the same input and flag snapshot always give the same
output and concurrent callers need no coordination.
"""

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Mapping, Optional, Union

from accountstack.domain.models import Account, Insight
from accountstack.features.flags import INSIGHTS_V2, LOCAL_CURRENCY, MASK_AMOUNTS

MASK_PLACEHOLDER = "***.**"
INSIGHTS_V2_SUFFIX = " (V2)"

COUNTRY_CURRENCIES = {
    "US": "USD",
    "UK": "GBP",
    "GB": "GBP",
    "FR": "EUR",
    "DE": "EUR",
    "ES": "EUR",
    "IT": "EUR",
    "NL": "EUR",
    "JP": "JPY",
    "CA": "CAD",
    "AU": "AUD",
}


@dataclass(frozen=True)
class Numeric:
    """Monetary value shown as-is"""

    value: Decimal

    def render(self) -> float:
        return float(self.value)


@dataclass(frozen=True)
class Masked:
    """Monetary value hidden behind a placeholder"""

    placeholder: str = MASK_PLACEHOLDER

    def render(self) -> str:
        return self.placeholder


MonetaryValue = Union[Numeric, Masked]


def mask(value: MonetaryValue) -> Masked:
    """Hide a monetary value; masking a masked value is a no-op"""
    if isinstance(value, Masked):
        return value
    return Masked()


@dataclass(frozen=True)
class AccountView:
    """Caller-facing account representation"""

    id: str
    user_id: str
    account_number: str
    account_type: str
    account_name: str
    balance: MonetaryValue
    currency: str
    status: str
    opened_date: datetime
    last_activity: datetime
    credit_limit: Optional[MonetaryValue] = None


def currency_for_country(country: Optional[str], flags: Mapping[str, bool], fallback: str) -> str:
    """Display currency for a caller's country, or the fallback when localisation is off"""
    if not flags.get(LOCAL_CURRENCY, False) or not country:
        return fallback
    return COUNTRY_CURRENCIES.get(country.upper(), fallback)


def shape_account(account: Account, flags: Mapping[str, bool], country: Optional[str]) -> AccountView:
    balance: MonetaryValue = Numeric(account.balance)
    credit_limit: Optional[MonetaryValue] = None
    if account.credit_limit is not None:
        credit_limit = Numeric(account.credit_limit)

    if flags.get(MASK_AMOUNTS, False):
        balance = mask(balance)
        if credit_limit is not None:
            credit_limit = mask(credit_limit)

    return AccountView(
        id=account.id,
        user_id=account.user_id,
        account_number=account.account_number,
        account_type=account.account_type,
        account_name=account.account_name,
        balance=balance,
        currency=currency_for_country(country, flags, account.currency),
        status=account.status,
        opened_date=account.opened_date,
        last_activity=account.last_activity,
        credit_limit=credit_limit,
    )


def shape_insight(insight: Insight, flags: Mapping[str, bool]) -> Insight:
    """Apply the V2 insights algorithm to a copy of the insight"""
    if not flags.get(INSIGHTS_V2, False):
        return insight
    return dataclasses.replace(insight, title=insight.title + INSIGHTS_V2_SUFFIX)
